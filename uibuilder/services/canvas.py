"""
Canvas Geometry

Absolute positioning for the builder canvas:
- Drag and resize gestures (exclusive, one widget at a time)
- Clamping to canvas bounds
- Paint order and hit-testing

The engine only does geometry. Applying positions to the configuration and
committing history is the builder controller's job.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from uibuilder.config import Settings
from uibuilder.core.exceptions import DragInProgressError
from uibuilder.models.contracts.widgets import Position, Size, Widget

logger = logging.getLogger(__name__)

GestureKind = Literal["move", "resize"]


@dataclass(frozen=True)
class Gesture:
    """An active pointer gesture on one widget."""

    widget_id: str
    kind: GestureKind
    offset: Position
    start_position: Position
    start_size: Size


def paint_order(widgets: Iterable[Widget]) -> list[Widget]:
    """Widgets in ascending ``order``; ties keep their table order."""
    return sorted(widgets, key=lambda widget: widget.order)


def widget_contains(widget: Widget, point: Position) -> bool:
    """True if ``point`` (canvas coordinates) lies inside the widget box."""
    return (
        widget.position.x <= point.x <= widget.position.x + widget.size.width
        and widget.position.y <= point.y <= widget.position.y + widget.size.height
    )


def hit_test(widgets: Iterable[Widget], point: Position) -> str | None:
    """Id of the topmost widget under ``point`` (canvas coordinates), if any."""
    for widget in reversed(paint_order(widgets)):
        if widget_contains(widget, point):
            return widget.id
    return None


class CanvasEngine:
    """Geometry and gesture state for one canvas."""

    def __init__(
        self,
        width: float,
        height: float,
        origin: Position | None = None,
        min_width: float = 20,
        min_height: float = 2,
    ):
        self.width = width
        self.height = height
        self.origin = origin or Position(x=0, y=0)
        self.min_width = min_width
        self.min_height = min_height
        self._gesture: Gesture | None = None

    @classmethod
    def from_settings(cls, settings: Settings, origin: Position | None = None) -> "CanvasEngine":
        return cls(
            width=settings.canvas_width,
            height=settings.canvas_height,
            origin=origin,
            min_width=settings.min_widget_width,
            min_height=settings.min_widget_height,
        )

    # ------------------------------------------------------------------
    # Coordinates
    # ------------------------------------------------------------------

    def to_canvas(self, pointer: Position) -> Position:
        """Convert a pointer position to canvas coordinates."""
        return Position(x=pointer.x - self.origin.x, y=pointer.y - self.origin.y)

    def contains(self, pointer: Position) -> bool:
        """True if the pointer is over the canvas."""
        local = self.to_canvas(pointer)
        return 0 <= local.x <= self.width and 0 <= local.y <= self.height

    def clamp_position(self, position: Position, size: Size) -> Position:
        """Clamp a top-left corner so the widget stays inside the canvas."""
        max_x = max(0.0, self.width - size.width)
        max_y = max(0.0, self.height - size.height)
        return Position(
            x=min(max(position.x, 0.0), max_x),
            y=min(max(position.y, 0.0), max_y),
        )

    def clamp_size(self, position: Position, size: Size) -> Size:
        """Clamp a size between the minimum and the space left on the canvas."""
        max_width = max(self.min_width, self.width - position.x)
        max_height = max(self.min_height, self.height - position.y)
        return Size(
            width=min(max(size.width, self.min_width), max_width),
            height=min(max(size.height, self.min_height), max_height),
        )

    # ------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------

    @property
    def gesture(self) -> Gesture | None:
        return self._gesture

    @property
    def is_active(self) -> bool:
        return self._gesture is not None

    @property
    def active_widget_id(self) -> str | None:
        return self._gesture.widget_id if self._gesture else None

    def _begin(self, widget: Widget, pointer: Position, kind: GestureKind) -> Gesture:
        if self._gesture is not None:
            raise DragInProgressError(self._gesture.widget_id)

        local = self.to_canvas(pointer)
        offset = Position(x=local.x - widget.position.x, y=local.y - widget.position.y)
        self._gesture = Gesture(
            widget_id=widget.id,
            kind=kind,
            offset=offset,
            start_position=widget.position,
            start_size=widget.size,
        )
        logger.debug(f"Begin {kind} on {widget.id} at offset ({offset.x}, {offset.y})")
        return self._gesture

    def begin_move(self, widget: Widget, pointer: Position) -> Gesture:
        """
        Start dragging ``widget``, capturing the pointer offset from its corner.

        Raises:
            DragInProgressError: If another gesture is active
        """
        return self._begin(widget, pointer, "move")

    def begin_resize(self, widget: Widget, pointer: Position) -> Gesture:
        """
        Start resizing ``widget`` from its bottom-right handle.

        Raises:
            DragInProgressError: If another gesture is active
        """
        return self._begin(widget, pointer, "resize")

    def move_target(self, widget: Widget, pointer: Position) -> Position:
        """Clamped position for the dragged widget under ``pointer``."""
        gesture = self._require(widget)
        local = self.to_canvas(pointer)
        raw = Position(x=local.x - gesture.offset.x, y=local.y - gesture.offset.y)
        return self.clamp_position(raw, widget.size)

    def resize_target(self, widget: Widget, pointer: Position) -> Size:
        """Clamped size for the resized widget under ``pointer``."""
        self._require(widget)
        local = self.to_canvas(pointer)
        raw = Size(
            width=local.x - widget.position.x,
            height=local.y - widget.position.y,
        )
        return self.clamp_size(widget.position, raw)

    def end(self) -> Gesture | None:
        """Finish the active gesture (pointer-up). Returns it, or None if idle."""
        gesture, self._gesture = self._gesture, None
        if gesture is not None:
            logger.debug(f"End {gesture.kind} on {gesture.widget_id}")
        return gesture

    def _require(self, widget: Widget) -> Gesture:
        if self._gesture is None or self._gesture.widget_id != widget.id:
            raise ValueError(f"Widget {widget.id!r} is not being dragged")
        return self._gesture
