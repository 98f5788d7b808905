"""
Unit tests for canvas geometry and gestures.
"""

import pytest

from uibuilder.core.exceptions import DragInProgressError
from uibuilder.models.contracts.widgets import CheckboxWidget, Position, Size, TextInputWidget
from uibuilder.services.canvas import CanvasEngine, hit_test, paint_order


def _widget(widget_id="w", x=100, y=100, width=200, height=40, order=0):
    return TextInputWidget(
        id=widget_id,
        position=Position(x=x, y=y),
        size=Size(width=width, height=height),
        order=order,
    )


@pytest.fixture
def engine():
    return CanvasEngine(width=1200, height=800, origin=Position(x=50, y=30))


class TestPaintOrder:
    """Tests for paint order and hit-testing"""

    def test_sorted_by_order_not_table_position(self):
        widgets = [_widget("c", order=2), _widget("a", order=0), _widget("b", order=1)]
        assert [w.id for w in paint_order(widgets)] == ["a", "b", "c"]

    def test_ties_keep_table_order(self):
        widgets = [_widget("x", order=1), _widget("y", order=1)]
        assert [w.id for w in paint_order(widgets)] == ["x", "y"]

    def test_hit_test_returns_topmost(self):
        below = _widget("below", order=0)
        above = CheckboxWidget(
            id="above", position=Position(x=150, y=110), size=Size(width=50, height=20), order=1
        )

        assert hit_test([above, below], Position(x=160, y=115)) == "above"
        assert hit_test([above, below], Position(x=110, y=105)) == "below"
        assert hit_test([above, below], Position(x=900, y=700)) is None


class TestClamping:
    """Tests for keeping widgets on the canvas"""

    def test_position_clamped_to_bounds(self, engine):
        size = Size(width=200, height=40)

        assert engine.clamp_position(Position(x=-10, y=-5), size) == Position(x=0, y=0)
        assert engine.clamp_position(Position(x=5000, y=5000), size) == Position(x=1000, y=760)

    def test_widget_larger_than_canvas_pins_to_origin(self, engine):
        clamped = engine.clamp_position(Position(x=30, y=30), Size(width=2000, height=40))
        assert clamped.x == 0

    def test_size_clamped_between_minimum_and_edge(self, engine):
        position = Position(x=1100, y=700)

        assert engine.clamp_size(position, Size(width=1, height=0)) == Size(width=20, height=2)
        assert engine.clamp_size(position, Size(width=500, height=500)) == Size(width=100, height=100)

    def test_pointer_conversion(self, engine):
        assert engine.to_canvas(Position(x=60, y=40)) == Position(x=10, y=10)
        assert engine.contains(Position(x=60, y=40)) is True
        assert engine.contains(Position(x=10, y=10)) is False


class TestGestures:
    """Tests for drag and resize gestures"""

    def test_drag_preserves_pointer_offset(self, engine):
        """newPosition = pointer - origin - captured offset"""
        widget = _widget()
        gesture = engine.begin_move(widget, Position(x=160, y=140))

        assert gesture.offset == Position(x=10, y=10)
        assert engine.move_target(widget, Position(x=260, y=240)) == Position(x=200, y=200)

    def test_drag_clamped_when_pointer_leaves_canvas(self, engine):
        widget = _widget()
        engine.begin_move(widget, Position(x=160, y=140))

        target = engine.move_target(widget, Position(x=5000, y=-500))
        assert target == Position(x=1000, y=0)

    def test_second_gesture_rejected(self, engine):
        engine.begin_move(_widget("a"), Position(x=160, y=140))

        with pytest.raises(DragInProgressError) as exc_info:
            engine.begin_resize(_widget("b"), Position(x=160, y=140))
        assert exc_info.value.active_widget_id == "a"

    def test_end_returns_to_idle(self, engine):
        engine.begin_move(_widget(), Position(x=160, y=140))

        gesture = engine.end()
        assert gesture.widget_id == "w"
        assert engine.is_active is False
        assert engine.end() is None

    def test_resize_follows_pointer(self, engine):
        widget = _widget()
        engine.begin_resize(widget, Position(x=350, y=170))

        assert engine.resize_target(widget, Position(x=450, y=230)) == Size(width=300, height=100)

    def test_target_for_other_widget_rejected(self, engine):
        engine.begin_move(_widget("a"), Position(x=160, y=140))

        with pytest.raises(ValueError):
            engine.move_target(_widget("b"), Position(x=200, y=200))
