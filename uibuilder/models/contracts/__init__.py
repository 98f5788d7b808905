"""
Pydantic contracts for configurations, widgets and runtime results.
"""

from uibuilder.models.contracts.configuration import (
    Configuration,
    ConfigurationMetadata,
    LayoutConfig,
    TemplateConfiguration,
    ThemeConfig,
    UITemplate,
    check_widget_table,
)
from uibuilder.models.contracts.runtime import (
    BuilderState,
    RenderedWidget,
    SubmissionMetadata,
    SubmitResult,
)
from uibuilder.models.contracts.widgets import (
    CheckboxWidget,
    ConditionalDisplay,
    ContainerWidget,
    DatePickerWidget,
    DividerWidget,
    FileViewerWidget,
    InstructionTextWidget,
    MultiSelectWidget,
    Position,
    RadioGroupWidget,
    RatingWidget,
    SelectWidget,
    Size,
    SliderMark,
    SliderWidget,
    SpacerWidget,
    TextAreaWidget,
    TextInputWidget,
    UnknownWidget,
    ValidationRule,
    Widget,
    WidgetBase,
    WidgetOption,
)

__all__ = [
    "BuilderState",
    "CheckboxWidget",
    "ConditionalDisplay",
    "Configuration",
    "ConfigurationMetadata",
    "ContainerWidget",
    "DatePickerWidget",
    "DividerWidget",
    "FileViewerWidget",
    "InstructionTextWidget",
    "LayoutConfig",
    "MultiSelectWidget",
    "Position",
    "RadioGroupWidget",
    "RatingWidget",
    "RenderedWidget",
    "SelectWidget",
    "Size",
    "SliderMark",
    "SliderWidget",
    "SpacerWidget",
    "SubmissionMetadata",
    "SubmitResult",
    "TemplateConfiguration",
    "TextAreaWidget",
    "TextInputWidget",
    "ThemeConfig",
    "UITemplate",
    "UnknownWidget",
    "ValidationRule",
    "Widget",
    "WidgetBase",
    "WidgetOption",
    "check_widget_table",
]
