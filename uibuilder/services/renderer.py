"""
Dynamic Renderer

Turns a saved configuration plus live answers into the runtime form:
- ``render``: pure composition of visibility, default values and errors
- ``FormSession``: value entry and the submit handshake

Stale answers for widgets that became hidden stay in the response map and
resurface unchanged if the widget becomes visible again.
"""

import copy
import logging
import time
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any, Protocol

from uibuilder.core.exceptions import FormReadOnlyError, UnknownWidgetTypeError, WidgetNotFoundError
from uibuilder.models.contracts.configuration import Configuration
from uibuilder.models.contracts.runtime import RenderedWidget, SubmissionMetadata, SubmitResult
from uibuilder.models.enums import PipelineMode
from uibuilder.services.validation import validate_responses
from uibuilder.services.visibility import visible_widgets
from uibuilder.services.widget_factory import default_value

logger = logging.getLogger(__name__)


class SubmitHandler(Protocol):
    """Collaborator that receives an accepted submission."""

    def __call__(self, responses: dict[str, Any], metadata: SubmissionMetadata) -> None: ...


def render(
    configuration: Configuration,
    responses: Mapping[str, Any],
    pipeline_mode: PipelineMode | str,
    errors: Mapping[str, str] | None = None,
    read_only: bool = False,
) -> list[RenderedWidget]:
    """
    Render the visible widgets in ascending ``order``.

    Each row carries the stored answer (or the type's default), the
    widget's current error, and whether its input is disabled. Widgets
    with an unrecognized type render nothing and log a diagnostic. An
    unknown ``pipeline_mode`` raises ValueError even for an empty form.
    """
    pipeline_mode = PipelineMode(pipeline_mode)
    errors = errors or {}
    rows: list[RenderedWidget] = []

    for widget in visible_widgets(configuration, responses, pipeline_mode):
        try:
            fallback = default_value(widget)
        except UnknownWidgetTypeError as exc:
            logger.warning(f"Skipping widget during render: {exc.message}")
            continue

        value = responses[widget.id] if widget.id in responses else fallback
        rows.append(
            RenderedWidget(
                widget=widget,
                value=value,
                error=errors.get(widget.id),
                disabled=widget.disabled or read_only,
                parent_id=configuration.parent_of(widget.id),
            )
        )

    return rows


class FormSession:
    """
    One respondent filling in one form.

    Holds the response map and the per-field errors from the last submit
    attempt. Validation only runs on submit; a field's error clears as soon
    as that field's value changes.
    """

    def __init__(
        self,
        configuration: Configuration,
        pipeline_mode: PipelineMode | str,
        initial_responses: Mapping[str, Any] | None = None,
        read_only: bool = False,
        submit_handler: SubmitHandler | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.configuration = configuration
        self.pipeline_mode = PipelineMode(pipeline_mode)
        self.read_only = read_only
        self._submit_handler = submit_handler
        self._clock = clock
        self._started_at = clock()
        self._responses: dict[str, Any] = copy.deepcopy(dict(initial_responses or {}))
        self._errors: dict[str, str] = {}

    @property
    def responses(self) -> dict[str, Any]:
        return copy.deepcopy(self._responses)

    @property
    def errors(self) -> dict[str, str]:
        return dict(self._errors)

    @property
    def can_submit(self) -> bool:
        """Read-only forms have no submit affordance."""
        return not self.read_only

    def render(self) -> list[RenderedWidget]:
        return render(
            self.configuration,
            self._responses,
            self.pipeline_mode,
            errors=self._errors,
            read_only=self.read_only,
        )

    def set_value(self, widget_id: str, value: Any) -> None:
        """
        Store an answer and clear that widget's error.

        Other widgets' answers are never touched, even if this change hides
        them.

        Raises:
            FormReadOnlyError: If the session is read-only
            WidgetNotFoundError: If the widget is not in the configuration
        """
        if self.read_only:
            raise FormReadOnlyError()
        if self.configuration.get_widget(widget_id) is None:
            raise WidgetNotFoundError(widget_id)

        self._responses[widget_id] = value
        self._errors.pop(widget_id, None)

    def validate(self) -> dict[str, str]:
        """Validate the currently rendered widgets without submitting."""
        rendered = [row.widget for row in self.render()]
        return validate_responses(rendered, self._responses)

    def submit(self) -> SubmitResult:
        """
        Run the submit handshake.

        On success the full response map (including stale answers for
        hidden widgets) goes to the submit handler. On failure the error
        map is stored and returned; answers are left as they were.

        Raises:
            FormReadOnlyError: If the session is read-only
        """
        if self.read_only:
            raise FormReadOnlyError("Read-only forms cannot be submitted")

        errors = self.validate()
        self._errors = dict(errors)
        if errors:
            logger.info(
                f"Submission for configuration {self.configuration.id} rejected: "
                f"{len(errors)} invalid field(s)"
            )
            return SubmitResult(accepted=False, errors=errors)

        metadata = SubmissionMetadata(
            configuration_id=self.configuration.id,
            configuration_version=self.configuration.version,
            pipeline_mode=self.pipeline_mode,
            elapsed_seconds=max(0.0, self._clock() - self._started_at),
            submitted_at=datetime.now(timezone.utc),
        )
        responses = self.responses
        if self._submit_handler is not None:
            self._submit_handler(responses, metadata)

        logger.info(
            f"Submission for configuration {self.configuration.id} accepted "
            f"after {metadata.elapsed_seconds:.1f}s"
        )
        return SubmitResult(accepted=True, responses=responses, metadata=metadata)
