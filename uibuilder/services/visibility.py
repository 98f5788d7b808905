"""
Conditional Visibility Evaluator

Pure functions deciding which widgets are shown for a set of answers in a
given pipeline mode. Visibility is recomputed from scratch on every call.
"""

import logging
import math
from collections.abc import Mapping
from typing import Any

from uibuilder.core.values import stringify, strict_equals, to_number
from uibuilder.models.contracts.configuration import Configuration
from uibuilder.models.contracts.widgets import ConditionalDisplay, Widget, WidgetBase
from uibuilder.models.enums import ConditionOperator, PipelineMode
from uibuilder.services.canvas import paint_order

logger = logging.getLogger(__name__)


def evaluate_condition(condition: ConditionalDisplay, responses: Mapping[str, Any]) -> bool:
    """
    Evaluate one conditional display rule against the response map.

    Unrecognized operators evaluate to True so a malformed rule never
    hides content.
    """
    answer = responses.get(condition.field)
    expected = condition.value

    try:
        operator = ConditionOperator(condition.operator)
    except ValueError:
        logger.debug(
            f"Unknown conditional operator {condition.operator!r} on field "
            f"{condition.field!r}; treating as satisfied"
        )
        return True

    if operator == ConditionOperator.EQUALS:
        return strict_equals(answer, expected)
    if operator == ConditionOperator.NOT_EQUALS:
        return not strict_equals(answer, expected)
    if operator == ConditionOperator.CONTAINS:
        return stringify(expected) in stringify(answer)
    if operator in (ConditionOperator.GREATER_THAN, ConditionOperator.LESS_THAN):
        left, right = to_number(answer), to_number(expected)
        if math.isnan(left) or math.isnan(right):
            return False
        return left > right if operator == ConditionOperator.GREATER_THAN else left < right
    if operator == ConditionOperator.IN:
        if not isinstance(expected, (list, tuple)):
            return False
        return any(strict_equals(answer, candidate) for candidate in expected)
    return True


def is_visible(
    widget: WidgetBase,
    responses: Mapping[str, Any],
    pipeline_mode: PipelineMode | str,
) -> bool:
    """
    Decide whether ``widget`` is shown.

    1. ``hidden`` always wins.
    2. A non-empty ``pipeline_modes`` list must contain ``pipeline_mode``.
    3. Every conditional display rule must hold (empty list holds).

    Raises:
        ValueError: If ``pipeline_mode`` is not a known mode, whatever the widget
    """
    mode = PipelineMode(pipeline_mode)
    if widget.hidden:
        return False

    if widget.pipeline_modes and mode not in widget.pipeline_modes:
        return False

    return all(evaluate_condition(condition, responses) for condition in widget.conditional_display)


def visible_widgets(
    configuration: Configuration,
    responses: Mapping[str, Any],
    pipeline_mode: PipelineMode | str,
) -> list[Widget]:
    """Visible widgets in ascending ``order``."""
    mode = PipelineMode(pipeline_mode)
    return paint_order(
        widget for widget in configuration.widgets
        if is_visible(widget, responses, mode)
    )
