"""
Builder Controller

Authoring surface of the UI builder. Owns the working configuration, its
undo history, the selection, the clipboard and the canvas gesture state,
and exposes every edit as a synchronous command.

Structural edits commit one history entry each. Pointer drags update a
live configuration frame by frame and commit once on release. Only
``save`` and ``load`` are async; both go through an injected
ConfigurationStore.
"""

import asyncio
import json
import logging
from typing import Any

from pydantic import ValidationError

from uibuilder.config import Settings, get_settings
from uibuilder.core.exceptions import (
    ConfigurationNotFoundError,
    ConfigurationShapeError,
    PersistenceError,
    WidgetNotFoundError,
)
from uibuilder.models.contracts.configuration import Configuration, UITemplate
from uibuilder.models.contracts.runtime import BuilderState
from uibuilder.models.contracts.widgets import ContainerWidget, Position, Size, Widget
from uibuilder.models.enums import PipelineMode, WidgetType
from uibuilder.services import widget_factory
from uibuilder.services.canvas import CanvasEngine
from uibuilder.services.history import HistoryManager
from uibuilder.services.persistence import ConfigurationStore, InMemoryConfigurationStore, dump_configuration
from uibuilder.services.templates import blank_configuration, configuration_from_template

logger = logging.getLogger(__name__)

REQUIRED_IMPORT_KEYS = (
    "id",
    "name",
    "version",
    "projectId",
    "pipelineMode",
    "fileType",
    "layout",
)


class UIBuilderController:
    """
    Command surface for editing one configuration.

    Every command is an atomic state transition: it either applies fully
    or raises and leaves the builder untouched.
    """

    def __init__(
        self,
        store: ConfigurationStore | None = None,
        configuration: Configuration | None = None,
        project_id: str = "default",
        settings: Settings | None = None,
    ):
        """
        Initialize controller.

        Args:
            store: Persistence collaborator (defaults to an in-memory store)
            configuration: Configuration to open; a blank one is created if omitted
            project_id: Owning project, used for blank configurations
            settings: Builder settings (defaults to the cached environment settings)
        """
        self.settings = settings or get_settings()
        self.store = store if store is not None else InMemoryConfigurationStore()

        initial = configuration or blank_configuration(project_id)
        self.project_id = initial.project_id
        self.history = HistoryManager(initial, limit=self.settings.history_limit)
        self.canvas = CanvasEngine.from_settings(self.settings)

        self._live: Configuration | None = None
        self._selected_widget_id: str | None = None
        self._clipboard: Widget | None = None
        self._preview_mode = PipelineMode.ANNOTATION
        self._save_lock = asyncio.Lock()

    # =========================================================================
    # State
    # =========================================================================

    @property
    def configuration(self) -> Configuration:
        """Working configuration, including any uncommitted drag frame."""
        return self._live if self._live is not None else self.history.current

    @property
    def selected_widget_id(self) -> str | None:
        return self._selected_widget_id

    @property
    def preview_mode(self) -> PipelineMode:
        return self._preview_mode

    @property
    def is_dirty(self) -> bool:
        return self.history.is_dirty

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    @property
    def is_saving(self) -> bool:
        return self._save_lock.locked()

    @property
    def state(self) -> BuilderState:
        return BuilderState(
            configuration=self.configuration,
            selected_widget_id=self._selected_widget_id,
            history=self.history.entries,
            history_index=self.history.index,
            is_dirty=self.history.is_dirty,
            preview_mode=self._preview_mode,
        )

    def _require_widget(self, widget_id: str, configuration: Configuration | None = None) -> Widget:
        if configuration is None:
            configuration = self.configuration
        widget = configuration.get_widget(widget_id)
        if widget is None:
            raise WidgetNotFoundError(widget_id)
        return widget

    def _base(self) -> Configuration:
        """
        Configuration a structural command edits.

        While a pointer gesture is active its frames are left out; the
        command's commit then ends the gesture.
        """
        return self.history.current if self.canvas.is_active else self.configuration

    def _commit(self, configuration: Configuration) -> None:
        if self.canvas.is_active:
            self.canvas.end()
        self._live = None
        self.history.commit(configuration)

    def _replace_widget(self, widget: Widget, configuration: Configuration | None = None) -> Configuration:
        if configuration is None:
            configuration = self.configuration
        return configuration.with_widgets(
            widget if existing.id == widget.id else existing
            for existing in configuration.widgets
        )

    def _apply(self, widget: Widget, commit: bool) -> None:
        """Swap ``widget`` into the configuration, committing or as a live frame."""
        updated = self._replace_widget(widget)
        if commit:
            self._commit(updated)
        else:
            self._live = updated
            self.history.mark_dirty()

    def _drop_stale_selection(self) -> None:
        if self._selected_widget_id and self.configuration.get_widget(self._selected_widget_id) is None:
            self._selected_widget_id = None

    # =========================================================================
    # Widget Commands
    # =========================================================================

    def add_widget(self, widget_type: WidgetType | str, **overrides: Any) -> Widget:
        """
        Add a widget of ``widget_type`` on top of every existing widget.

        The new widget becomes the selection and the change is committed.

        Raises:
            UnknownWidgetTypeError: If the type is not known
            WidgetPatchError: If an override is invalid or the id is taken
        """
        configuration = self._base()
        defaults = dict(overrides)
        defaults.setdefault("order", configuration.next_order())

        widget = widget_factory.instantiate(
            widget_type,
            defaults=defaults,
            existing_ids=configuration.widget_ids,
        )
        self._commit(configuration.with_widgets([*configuration.widgets, widget]))
        self._selected_widget_id = widget.id

        logger.info(f"Added {widget.type} widget {widget.id}")
        return widget

    def update_widget(self, widget_id: str, patch: dict[str, Any]) -> Widget:
        """
        Shallow-merge ``patch`` into a widget and commit.

        A patch that changes nothing commits nothing.

        Raises:
            WidgetNotFoundError: If the widget does not exist
            WidgetPatchError: If ``id``/``type`` would change or the result is invalid
            ContainerCycleError: If new container children break nesting
        """
        configuration = self._base()
        widget = self._require_widget(widget_id, configuration)
        updated = widget_factory.update(widget, patch)
        if updated == widget:
            return widget

        if isinstance(updated, ContainerWidget) and updated.children != widget.children:
            widget_factory.check_nesting(configuration, widget_id, updated.children)

        self._commit(self._replace_widget(updated, configuration))
        logger.debug(f"Updated widget {widget_id}: {sorted(patch)}")
        return updated

    def delete_widget(self, widget_id: str) -> None:
        """
        Remove a widget and every container reference to it.

        Children of a deleted container stay on the canvas as top-level
        widgets.

        Raises:
            WidgetNotFoundError: If the widget does not exist
        """
        configuration = self._base()
        self._require_widget(widget_id, configuration)

        remaining: list[Widget] = []
        for widget in configuration.widgets:
            if widget.id == widget_id:
                continue
            if isinstance(widget, ContainerWidget) and widget_id in widget.children:
                widget = widget.model_copy(
                    update={"children": [c for c in widget.children if c != widget_id]}
                )
            remaining.append(widget)

        self._commit(configuration.with_widgets(remaining))
        if self._selected_widget_id == widget_id:
            self._selected_widget_id = None

        logger.info(f"Deleted widget {widget_id}")

    def select_widget(self, widget_id: str | None) -> None:
        """
        Make ``widget_id`` the sole selection, or clear it with None.

        Raises:
            WidgetNotFoundError: If the widget does not exist
        """
        if widget_id is not None:
            self._require_widget(widget_id)
        self._selected_widget_id = widget_id

    def move_widget(self, widget_id: str, position: Position, commit: bool = True) -> Widget:
        """
        Move a widget, clamped to the canvas.

        With ``commit=False`` the move is a live frame: the configuration
        changes and the builder turns dirty, but no history entry is added.
        """
        widget = self._require_widget(widget_id)
        target = self.canvas.clamp_position(position, widget.size)
        moved = widget.model_copy(update={"position": target})
        self._apply(moved, commit)
        return moved

    def resize_widget(self, widget_id: str, size: Size, commit: bool = True) -> Widget:
        """Resize a widget, clamped between the minimum and the canvas edge."""
        widget = self._require_widget(widget_id)
        target = self.canvas.clamp_size(widget.position, size)
        resized = widget.model_copy(update={"size": target})
        self._apply(resized, commit)
        return resized

    def reorder_widget(self, widget_id: str, order: int) -> Widget:
        """Set a widget's paint/render order and commit."""
        configuration = self._base()
        widget = self._require_widget(widget_id, configuration)
        if widget.order == order:
            return widget
        reordered = widget.model_copy(update={"order": order})
        self._commit(self._replace_widget(reordered, configuration))
        return reordered

    def bring_to_front(self, widget_id: str) -> Widget:
        configuration = self._base()
        widget = self._require_widget(widget_id, configuration)
        others = [w.order for w in configuration.widgets if w.id != widget_id]
        if not others or widget.order > max(others):
            return widget
        return self.reorder_widget(widget_id, max(others) + 1)

    def send_to_back(self, widget_id: str) -> Widget:
        configuration = self._base()
        widget = self._require_widget(widget_id, configuration)
        others = [w.order for w in configuration.widgets if w.id != widget_id]
        if not others or widget.order < min(others):
            return widget
        return self.reorder_widget(widget_id, min(others) - 1)

    # =========================================================================
    # Clipboard
    # =========================================================================

    def copy_widget(self, widget_id: str) -> None:
        self._clipboard = self._require_widget(widget_id)

    def paste_widget(self) -> Widget | None:
        """
        Paste the copied widget as a new widget.

        The clone gets a fresh id, is shifted by ``paste_offset`` pixels and
        paints on top. A pasted container starts with no children. Returns
        None when nothing has been copied.
        """
        if self._clipboard is None:
            return None

        configuration = self._base()
        source = self._clipboard
        offset = self.settings.paste_offset
        position = self.canvas.clamp_position(
            Position(x=source.position.x + offset, y=source.position.y + offset),
            source.size,
        )

        data = source.model_dump()
        data.update(
            id=widget_factory.generate_widget_id(configuration.widget_ids),
            position=position,
            order=configuration.next_order(),
        )
        if isinstance(source, ContainerWidget):
            data["children"] = []

        clone = type(source).model_validate(data)
        self._commit(configuration.with_widgets([*configuration.widgets, clone]))
        self._selected_widget_id = clone.id

        logger.debug(f"Pasted {source.id} as {clone.id}")
        return clone

    # =========================================================================
    # History
    # =========================================================================

    def _abandon_live(self) -> None:
        if self.canvas.is_active:
            self.canvas.end()
        self._live = None

    def undo(self) -> bool:
        """
        Step back one history entry. Returns False at the oldest entry.

        An active gesture is ended and its uncommitted frames discarded
        first.
        """
        self._abandon_live()
        if self.history.undo() is None:
            return False
        self._drop_stale_selection()
        return True

    def redo(self) -> bool:
        """Step forward one history entry. Returns False at the newest entry."""
        self._abandon_live()
        if self.history.redo() is None:
            return False
        self._drop_stale_selection()
        return True

    def set_preview_mode(self, mode: PipelineMode | str) -> None:
        self._preview_mode = PipelineMode(mode)

    def load_configuration(self, configuration: Configuration) -> None:
        """Open ``configuration`` as a clean baseline with empty history."""
        self._abandon_live()
        self.history.load(configuration)
        self.project_id = configuration.project_id
        self._selected_widget_id = None
        logger.info(f"Loaded configuration {configuration.id} (version {configuration.version})")

    def load_template(self, template: UITemplate) -> Configuration:
        """
        Replace the canvas content with a template's, as one undoable commit.

        The current configuration keeps its id and project.
        """
        current = self.configuration
        configuration = configuration_from_template(template, self.project_id)
        configuration = configuration.model_copy(
            update={"id": current.id, "metadata": current.metadata}
        )
        self._abandon_live()
        self._commit(configuration)
        self._selected_widget_id = None

        logger.info(f"Applied template {template.id} to configuration {current.id}")
        return configuration

    # =========================================================================
    # Canvas Pointer Protocol
    # =========================================================================

    def pointer_down(self, point: Position, widget_id: str | None) -> None:
        """
        Handle a press on the canvas.

        Pressing empty canvas clears the selection. Pressing a widget
        selects it and starts dragging it.

        Raises:
            WidgetNotFoundError: If the widget does not exist
            DragInProgressError: If another gesture is active
        """
        if widget_id is None:
            self._selected_widget_id = None
            return

        widget = self._require_widget(widget_id)
        self.canvas.begin_move(widget, point)
        self._selected_widget_id = widget_id

    def begin_resize(self, widget_id: str, point: Position) -> None:
        """Press on a widget's resize handle."""
        widget = self._require_widget(widget_id)
        self.canvas.begin_resize(widget, point)
        self._selected_widget_id = widget_id

    def pointer_move(self, point: Position) -> None:
        """Apply one gesture frame. Ignored when no gesture is active."""
        gesture = self.canvas.gesture
        if gesture is None:
            return

        widget = self.configuration.get_widget(gesture.widget_id)
        if widget is None:
            self.canvas.end()
            return

        if gesture.kind == "move":
            update = {"position": self.canvas.move_target(widget, point)}
        else:
            update = {"size": self.canvas.resize_target(widget, point)}
        self._apply(widget.model_copy(update=update), commit=False)

    def pointer_up(self) -> bool:
        """
        Finish the active gesture, committing its last frame.

        Releasing outside the canvas is a normal release: the last clamped
        position is committed. Returns True if a history entry was added.
        """
        gesture = self.canvas.end()
        if gesture is None or self._live is None:
            return False

        self._commit(self._live)
        logger.debug(f"Committed {gesture.kind} of widget {gesture.widget_id}")
        return True

    # =========================================================================
    # Import / Export
    # =========================================================================

    def export_json(self) -> str:
        """Canonical JSON: camelCase keys, 2-space indent, ``None`` omitted."""
        return json.dumps(dump_configuration(self.configuration), indent=2)

    @staticmethod
    def parse_configuration(text: str) -> Configuration:
        """
        Parse and validate configuration JSON.

        Raises:
            ConfigurationShapeError: If the text is not a valid configuration
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigurationShapeError(f"Invalid JSON: {exc.msg}") from exc

        if not isinstance(data, dict):
            raise ConfigurationShapeError("Configuration must be a JSON object")
        if not isinstance(data.get("widgets"), list):
            raise ConfigurationShapeError(
                "Configuration must contain a widgets array",
                errors=[{"loc": ["widgets"], "msg": "missing or not an array"}],
            )

        missing = [key for key in REQUIRED_IMPORT_KEYS if key not in data]
        if missing:
            raise ConfigurationShapeError(
                f"Configuration is missing required keys: {', '.join(missing)}",
                errors=[{"loc": [key], "msg": "missing"} for key in missing],
            )

        try:
            return Configuration.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationShapeError(
                f"Configuration failed validation with {exc.error_count()} error(s)",
                errors=[
                    {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
                    for error in exc.errors()
                ],
            ) from exc

    def import_json(self, text: str) -> Configuration:
        """
        Replace the working configuration with imported JSON.

        Raises:
            ConfigurationShapeError: If the payload is malformed; the builder
                state is left untouched
        """
        configuration = self.parse_configuration(text)
        self.load_configuration(configuration)
        return configuration

    # =========================================================================
    # Persistence
    # =========================================================================

    async def save(self) -> bool:
        """
        Save the committed configuration through the store.

        Uncommitted drag frames are not saved; the builder stays dirty until
        the gesture ends and is saved again. At most one save runs at a time;
        a call made while another save is pending is ignored and returns
        False. On success history is reset to the saved configuration,
        unless a commit happened while the save was in flight, in which case
        the builder stays dirty.

        Raises:
            PersistenceError: On timeout
            Exception: Whatever the store raised, unchanged
        """
        if self._save_lock.locked():
            logger.debug("Save already in flight; ignoring")
            return False

        async with self._save_lock:
            snapshot = self.history.current
            try:
                await asyncio.wait_for(
                    self.store.save(snapshot),
                    timeout=self.settings.persistence_timeout_seconds,
                )
            except asyncio.TimeoutError as exc:
                raise PersistenceError(
                    f"Saving configuration {snapshot.id} timed out after "
                    f"{self.settings.persistence_timeout_seconds}s"
                ) from exc

            if self.history.current is snapshot:
                self.history.mark_saved(snapshot)
                if self._live is not None:
                    self.history.mark_dirty()
            else:
                logger.info(f"Configuration {snapshot.id} changed during save; keeping history")

        logger.info(f"Saved configuration {snapshot.id}")
        return True

    async def load(self, configuration_id: str) -> Configuration:
        """
        Load a configuration from the store and open it.

        A configuration that does not exist yet starts a fresh one for the
        current project.

        Raises:
            PersistenceError: On timeout or any other store failure
        """
        try:
            configuration = await asyncio.wait_for(
                self.store.load(configuration_id),
                timeout=self.settings.persistence_timeout_seconds,
            )
        except ConfigurationNotFoundError:
            logger.info(f"Configuration {configuration_id} not found; starting a new one")
            configuration = blank_configuration(self.project_id)
        except asyncio.TimeoutError as exc:
            raise PersistenceError(
                f"Loading configuration {configuration_id} timed out after "
                f"{self.settings.persistence_timeout_seconds}s"
            ) from exc
        except PersistenceError:
            raise
        except Exception as exc:
            raise PersistenceError(f"Loading configuration {configuration_id} failed: {exc}") from exc

        self.load_configuration(configuration)
        return configuration
