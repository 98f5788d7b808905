"""
Runtime contract models.

Shapes produced by the renderer and the builder controller: rendered
widget rows, submit results, and builder state snapshots.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from uibuilder.models.contracts.configuration import Configuration
from uibuilder.models.contracts.widgets import Widget
from uibuilder.models.enums import PipelineMode

RUNTIME_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class RenderedWidget(BaseModel):
    """One visible widget with its current value and error."""

    model_config = RUNTIME_CONFIG

    widget: Widget
    value: Any = None
    error: str | None = None
    disabled: bool = False
    parent_id: str | None = Field(default=None, description="Containing widget id, if nested")


class SubmissionMetadata(BaseModel):
    """Context handed to the submit collaborator alongside the answers."""

    model_config = RUNTIME_CONFIG

    configuration_id: str
    configuration_version: int
    pipeline_mode: PipelineMode
    elapsed_seconds: float = Field(ge=0, description="Seconds since the form session opened")
    submitted_at: datetime


class SubmitResult(BaseModel):
    """Outcome of a submit attempt."""

    model_config = RUNTIME_CONFIG

    accepted: bool
    errors: dict[str, str] = Field(default_factory=dict)
    responses: dict[str, Any] = Field(default_factory=dict)
    metadata: SubmissionMetadata | None = None


class BuilderState(BaseModel):
    """Read-only view of the builder controller."""

    model_config = RUNTIME_CONFIG

    configuration: Configuration
    selected_widget_id: str | None = None
    history: list[Configuration]
    history_index: int
    is_dirty: bool
    preview_mode: PipelineMode
