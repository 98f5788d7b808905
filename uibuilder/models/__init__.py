"""
UI Builder Models

Pydantic contracts (configuration, widgets, runtime results):
    from uibuilder.models import Configuration, TextInputWidget
    from uibuilder.models.contracts.widgets import TextInputWidget  # Granular access

Enums:
    from uibuilder.models import WidgetType
    from uibuilder.models.enums import WidgetType
"""

from uibuilder.models.contracts import *  # noqa: F401,F403
from uibuilder.models.contracts import __all__ as _contracts_all
from uibuilder.models.enums import (
    ConditionOperator,
    FileType,
    LayoutType,
    PipelineMode,
    ValidationRuleType,
    WidgetCategory,
    WidgetType,
)

__all__ = [
    *_contracts_all,
    "ConditionOperator",
    "FileType",
    "LayoutType",
    "PipelineMode",
    "ValidationRuleType",
    "WidgetCategory",
    "WidgetType",
]
