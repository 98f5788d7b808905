"""
Unit tests for widget and configuration contract models.

Tests the tagged widget union, wire aliases, and widget table integrity.
"""

import pytest
from pydantic import ValidationError

from uibuilder.models.contracts.configuration import Configuration, check_widget_table
from uibuilder.models.contracts.widgets import (
    ContainerWidget,
    SelectWidget,
    TextInputWidget,
    UnknownWidget,
)
from uibuilder.core.exceptions import ContainerCycleError


def _config(widgets):
    return {"id": "cfg", "name": "Cfg", "projectId": "p", "widgets": widgets}


class TestWidgetUnion:
    """Tests for routing raw widget data to union members"""

    def test_type_tag_selects_variant(self):
        """Each known type tag parses into its own model"""
        config = Configuration.model_validate(_config([
            {"id": "a", "type": "TEXT_INPUT", "inputType": "email"},
            {"id": "b", "type": "SELECT", "options": [{"id": "o", "label": "O", "value": "o"}]},
            {"id": "c", "type": "CONTAINER", "children": ["a"]},
        ]))

        a, b, c = config.widgets
        assert isinstance(a, TextInputWidget)
        assert a.input_type == "email"
        assert isinstance(b, SelectWidget)
        assert b.options[0].value == "o"
        assert isinstance(c, ContainerWidget)

    def test_unknown_type_is_preserved(self):
        """Unrecognized widget types keep all their fields"""
        config = Configuration.model_validate(_config([
            {"id": "x", "type": "HEATMAP", "label": "Heat", "palette": "viridis"},
        ]))

        widget = config.widgets[0]
        assert isinstance(widget, UnknownWidget)
        dumped = config.model_dump(by_alias=True, exclude_none=True)["widgets"][0]
        assert dumped["type"] == "HEATMAP"
        assert dumped["palette"] == "viridis"

    def test_known_type_rejects_unexpected_fields(self):
        with pytest.raises(ValidationError):
            Configuration.model_validate(_config([
                {"id": "a", "type": "CHECKBOX", "bogusField": 1},
            ]))

    def test_display_name_falls_back_to_type(self):
        widget = TextInputWidget(id="a")
        assert widget.display_name == "TEXT_INPUT"
        assert widget.model_copy(update={"label": "Name"}).display_name == "Name"

    def test_widgets_are_frozen(self):
        widget = TextInputWidget(id="a")
        with pytest.raises(ValidationError):
            widget.label = "changed"


class TestWidgetTable:
    """Tests for configuration widget table integrity"""

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValidationError, match="Duplicate widget id"):
            Configuration.model_validate(_config([
                {"id": "a", "type": "TEXT_INPUT"},
                {"id": "a", "type": "CHECKBOX"},
            ]))

    def test_container_cannot_contain_itself(self):
        with pytest.raises(ValidationError, match="cannot contain itself"):
            Configuration.model_validate(_config([
                {"id": "box", "type": "CONTAINER", "children": ["box"]},
            ]))

    def test_indirect_cycle_rejected(self):
        widgets = [
            ContainerWidget(id="a", children=["b"]),
            ContainerWidget(id="b", children=["a"]),
        ]
        with pytest.raises(ContainerCycleError):
            check_widget_table(widgets)

    def test_child_with_two_parents_rejected(self):
        widgets = [
            ContainerWidget(id="a", children=["x"]),
            ContainerWidget(id="b", children=["x"]),
            TextInputWidget(id="x"),
        ]
        with pytest.raises(ContainerCycleError, match="already belongs"):
            check_widget_table(widgets)

    def test_unknown_child_rejected(self):
        with pytest.raises(ContainerCycleError, match="unknown widget"):
            check_widget_table([ContainerWidget(id="a", children=["ghost"])])


class TestConfigurationLookups:
    """Tests for arena lookups on Configuration"""

    def test_parent_of(self, nested_configuration):
        assert nested_configuration.parent_of("name") == "box"
        assert nested_configuration.parent_of("agree") is None

    def test_next_order(self, nested_configuration, empty_configuration):
        assert nested_configuration.next_order() == 3
        assert empty_configuration.next_order() == 0

    def test_with_widgets_shares_untouched_widgets(self, nested_configuration):
        """Unchanged widgets are the same objects in the new snapshot"""
        first, second, third = nested_configuration.widgets
        updated = nested_configuration.with_widgets(
            [first, second, third.model_copy(update={"label": "Consent"})]
        )

        assert updated.widgets[0] is first
        assert updated.widgets[1] is second
        assert updated.get_widget("agree").label == "Consent"
        assert nested_configuration.get_widget("agree").label == "Agree"

    def test_camel_case_round_trip(self, question_configuration):
        data = question_configuration.model_dump(mode="json", by_alias=True, exclude_none=True)

        assert data["projectId"] == "proj-1"
        assert "conditionalDisplay" in data["widgets"][0]
        assert Configuration.model_validate(data) == question_configuration
