"""
Validation Rule Engine

Submit-time validation of answers. Errors are returned as data, one
message per widget; nothing here raises for invalid answers.
"""

import logging
import math
import re
from collections.abc import Iterable, Mapping
from typing import Any

from uibuilder.core.values import is_empty, stringify, to_number
from uibuilder.models.contracts.widgets import ValidationRule, WidgetBase
from uibuilder.models.enums import ValidationRuleType

logger = logging.getLogger(__name__)


def required_message(widget: WidgetBase) -> str:
    return f"{widget.display_name} is required"


def _threshold(rule: ValidationRule, widget: WidgetBase) -> float | None:
    limit = to_number(rule.value)
    if math.isnan(limit):
        logger.warning(
            f"Rule {rule.type!r} on widget {widget.id!r} has non-numeric value "
            f"{rule.value!r}; skipping"
        )
        return None
    return limit


def check_rule(rule: ValidationRule, widget: WidgetBase, value: Any) -> bool:
    """
    Evaluate one rule against ``value``. Returns True when it passes.

    Rules that cannot be evaluated (unknown type, non-numeric threshold,
    invalid regex) pass and log a warning.
    """
    try:
        rule_type = ValidationRuleType(rule.type)
    except ValueError:
        logger.warning(f"Unknown validation rule {rule.type!r} on widget {widget.id!r}; skipping")
        return True

    if rule_type == ValidationRuleType.REQUIRED:
        # Rule form demands a truthy answer: an unchecked box or 0 fails
        return bool(value) and not is_empty(value)

    if rule_type == ValidationRuleType.PATTERN:
        try:
            compiled = re.compile(stringify(rule.value))
        except re.error as exc:
            logger.warning(f"Invalid pattern {rule.value!r} on widget {widget.id!r}: {exc}")
            return True
        return compiled.search(stringify(value)) is not None

    limit = _threshold(rule, widget)
    if limit is None:
        return True

    if rule_type == ValidationRuleType.MIN_LENGTH:
        return len(stringify(value)) >= limit
    if rule_type == ValidationRuleType.MAX_LENGTH:
        return len(stringify(value)) <= limit

    number = to_number(value)
    if rule_type == ValidationRuleType.MIN:
        return number >= limit
    if rule_type == ValidationRuleType.MAX:
        return number <= limit
    return True


def validate_widget(widget: WidgetBase, value: Any) -> str | None:
    """
    Validate one widget's value.

    A required widget with an empty value fails with "<label> is required"
    before any rule runs. Otherwise rules run in declaration order and the
    first failure's message is returned. Empty optional values only run
    ``required`` rules. A ``required`` rule is stricter than the
    ``required`` flag: it also rejects ``False`` and ``0``.
    """
    empty = is_empty(value)
    if widget.required and empty:
        return required_message(widget)

    for rule in widget.validation:
        if empty and rule.type != ValidationRuleType.REQUIRED.value:
            continue
        if not check_rule(rule, widget, value):
            return rule.message
    return None


def validate_responses(
    widgets: Iterable[WidgetBase],
    responses: Mapping[str, Any],
) -> dict[str, str]:
    """
    Validate every widget in ``widgets`` against ``responses``.

    All failures are reported together as ``{widget_id: message}``; an
    empty map means the submission is acceptable.
    """
    errors: dict[str, str] = {}
    for widget in widgets:
        message = validate_widget(widget, responses.get(widget.id))
        if message is not None:
            errors[widget.id] = message
    return errors
