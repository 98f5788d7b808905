"""
Unit tests for the conditional visibility evaluator.
"""

import pytest

from uibuilder.models.contracts.widgets import ConditionalDisplay, TextInputWidget
from uibuilder.models.enums import PipelineMode
from uibuilder.services.visibility import evaluate_condition, is_visible, visible_widgets


def _cond(operator, value, field="q"):
    return ConditionalDisplay(field=field, operator=operator, value=value)


class TestEvaluateCondition:
    """Tests for individual operators"""

    def test_equals_is_strict(self):
        assert evaluate_condition(_cond("equals", "yes"), {"q": "yes"}) is True
        assert evaluate_condition(_cond("equals", 1), {"q": "1"}) is False

    def test_not_equals(self):
        assert evaluate_condition(_cond("notEquals", "yes"), {"q": "no"}) is True
        assert evaluate_condition(_cond("notEquals", "yes"), {}) is True

    def test_contains_uses_string_forms(self):
        assert evaluate_condition(_cond("contains", "cat"), {"q": "concatenate"}) is True
        assert evaluate_condition(_cond("contains", "b"), {"q": ["a", "b"]}) is True
        assert evaluate_condition(_cond("contains", "x"), {}) is False

    def test_numeric_comparisons_coerce(self):
        assert evaluate_condition(_cond("greaterThan", 5), {"q": "7"}) is True
        assert evaluate_condition(_cond("lessThan", "10"), {"q": 3}) is True
        assert evaluate_condition(_cond("greaterThan", 5), {"q": 5}) is False

    def test_non_numeric_comparison_is_false(self):
        assert evaluate_condition(_cond("greaterThan", 5), {"q": "many"}) is False
        assert evaluate_condition(_cond("lessThan", 5), {}) is False

    def test_in_membership(self):
        """in ['a','b'] hides for 'c' and shows for 'a'"""
        condition = _cond("in", ["a", "b"])

        assert evaluate_condition(condition, {"q": "c"}) is False
        assert evaluate_condition(condition, {"q": "a"}) is True

    def test_in_requires_list_value(self):
        assert evaluate_condition(_cond("in", "abc"), {"q": "a"}) is False

    def test_unknown_operator_is_satisfied(self):
        assert evaluate_condition(_cond("matchesRegex", ".*"), {"q": "x"}) is True


class TestIsVisible:
    """Tests for widget-level visibility"""

    def test_hidden_always_wins(self):
        widget = TextInputWidget(id="w", hidden=True)
        assert is_visible(widget, {}, PipelineMode.ANNOTATION) is False

    @pytest.mark.parametrize(
        "mode,expected",
        [("REVIEW", True), ("QUALITY_CHECK", True), ("ANNOTATION", False)],
    )
    def test_pipeline_mode_filter(self, mode, expected):
        widget = TextInputWidget(id="w", pipeline_modes=["REVIEW", "QUALITY_CHECK"])
        assert is_visible(widget, {}, mode) is expected

    def test_empty_pipeline_modes_means_all(self):
        widget = TextInputWidget(id="w")
        assert is_visible(widget, {}, "QUALITY_CHECK") is True

    def test_unknown_mode_rejected_for_hidden_widget(self):
        widget = TextInputWidget(id="w", hidden=True)
        with pytest.raises(ValueError):
            is_visible(widget, {}, "NIGHTLY")

    def test_all_conditions_must_hold(self):
        widget = TextInputWidget(
            id="w",
            conditional_display=[_cond("equals", "yes", "a"), _cond("greaterThan", 2, "b")],
        )

        assert is_visible(widget, {"a": "yes", "b": 3}, "ANNOTATION") is True
        assert is_visible(widget, {"a": "yes", "b": 1}, "ANNOTATION") is False


class TestVisibleWidgets:
    """Tests for the visible widget list"""

    def test_follow_up_question(self, question_configuration):
        """q2 is shown only when q1 == 'yes'"""
        hidden = visible_widgets(question_configuration, {"q1": "no"}, "ANNOTATION")
        shown = visible_widgets(question_configuration, {"q1": "yes"}, "ANNOTATION")

        assert [w.id for w in hidden] == ["q1"]
        assert [w.id for w in shown] == ["q1", "q2"]

    def test_unknown_mode_rejected_without_mode_filters(self, question_configuration):
        """No widget lists pipeline modes, yet an unknown mode still fails"""
        with pytest.raises(ValueError):
            visible_widgets(question_configuration, {}, "NIGHTLY")
