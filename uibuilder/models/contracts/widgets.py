"""
Widget Definitions

Core types for the widgets an operator places on the builder canvas.

This module is the single source of truth for:
- Shared supporting types (Position, Size, WidgetOption, ValidationRule, ...)
- The widget variants (TextInputWidget, SelectWidget, ContainerWidget, ...)
- The ``Widget`` tagged union, discriminated on ``type``

Attributes are snake_case in Python and camelCase on the wire. Models are
frozen: an edit always produces a new widget, so configuration snapshots
can share untouched widgets.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag
from pydantic.alias_generators import to_camel

from uibuilder.models.enums import FileType, PipelineMode, WidgetType


# -----------------------------------------------------------------------------
# Literal Types
# -----------------------------------------------------------------------------

TextInputType = Literal["text", "email", "url", "tel"]

OptionLayout = Literal["vertical", "horizontal", "grid"]

RatingIcon = Literal["star", "heart", "thumb", "emoji"]

ContentFormat = Literal["text", "markdown", "html"]

InstructionVariant = Literal["info", "warning", "success", "error"]

Orientation = Literal["horizontal", "vertical"]


WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
    extra="forbid",
)


# -----------------------------------------------------------------------------
# Shared Supporting Types
# -----------------------------------------------------------------------------


class Position(BaseModel):
    """Top-left corner of a widget, relative to the canvas origin."""

    model_config = WIRE_CONFIG

    x: float = Field(default=0, description="Horizontal offset in pixels")
    y: float = Field(default=0, description="Vertical offset in pixels")


class Size(BaseModel):
    """Widget box size."""

    model_config = WIRE_CONFIG

    width: float = Field(description="Width in pixels")
    height: float = Field(description="Height in pixels")


class WidgetOption(BaseModel):
    """Selectable option for select, multi-select and radio widgets."""

    model_config = WIRE_CONFIG

    id: str = Field(description="Option identifier")
    label: str = Field(description="Display label")
    value: str = Field(description="Value stored in the response map")
    icon: str | None = Field(default=None, description="Icon name")
    color: str | None = Field(default=None, description="Accent color")
    description: str | None = Field(default=None, description="Option help text")


class SliderMark(BaseModel):
    """Labelled tick on a slider track."""

    model_config = WIRE_CONFIG

    value: float = Field(description="Track value")
    label: str = Field(description="Tick label")


class ValidationRule(BaseModel):
    """
    Submit-time rule over a widget's own value.

    ``type`` is one of required, minLength, maxLength, min, max, pattern.
    Other tags (e.g. ``custom``) are kept so they survive export, and pass.
    """

    model_config = WIRE_CONFIG

    type: str = Field(description="Rule type")
    value: Any = Field(default=None, description="Rule threshold or regex")
    message: str = Field(description="Error shown when the rule fails")


class ConditionalDisplay(BaseModel):
    """
    Visibility predicate over another widget's answer.

    ``operator`` is one of equals, notEquals, contains, greaterThan,
    lessThan, in. Unrecognized operators evaluate to true.
    """

    model_config = WIRE_CONFIG

    field: str = Field(description="Widget id whose answer is tested")
    operator: str = Field(description="Comparison operator")
    value: Any = Field(default=None, description="Value compared against the answer")


# -----------------------------------------------------------------------------
# Widget Base (shared fields for all widgets)
# -----------------------------------------------------------------------------


def _default_size() -> Size:
    return Size(width=300, height=40)


class WidgetBase(BaseModel):
    """Base fields shared by all widgets."""

    model_config = WIRE_CONFIG

    id: str = Field(description="Unique widget identifier")
    label: str | None = Field(default=None, description="Display label")
    placeholder: str | None = Field(default=None, description="Placeholder text")
    help_text: str | None = Field(default=None, description="Help text under the input")
    required: bool = Field(default=False, description="Answer required on submit")
    disabled: bool = Field(default=False, description="Input disabled")
    hidden: bool = Field(default=False, description="Never shown at runtime")
    position: Position = Field(default_factory=Position, description="Canvas position")
    size: Size = Field(default_factory=_default_size, description="Canvas size")
    style: dict[str, Any] | None = Field(default=None, description="Inline style overrides")
    validation: list[ValidationRule] = Field(
        default_factory=list, description="Submit-time validation rules"
    )
    conditional_display: list[ConditionalDisplay] = Field(
        default_factory=list, description="Visibility conditions (all must hold)"
    )
    pipeline_modes: list[PipelineMode] = Field(
        default_factory=list, description="Pipeline modes this widget appears in (empty = all)"
    )
    order: int = Field(default=0, description="Render sequence, independent of array order")

    @property
    def display_name(self) -> str:
        """Label used in generated messages, falling back to the type tag."""
        return self.label or str(self.type)  # type: ignore[attr-defined]


# -----------------------------------------------------------------------------
# Widget Variants
# -----------------------------------------------------------------------------


class FileViewerWidget(WidgetBase):
    """Displays the task's source file."""

    type: Literal["FILE_VIEWER"] = Field(default="FILE_VIEWER", description="Widget type")
    file_type: FileType = Field(default=FileType.TEXT, description="File type to display")
    allow_fullscreen: bool | None = Field(default=None, description="Allow fullscreen view")
    show_controls: bool | None = Field(default=None, description="Show media controls")
    autoplay: bool | None = Field(default=None, description="Autoplay media")


class TextInputWidget(WidgetBase):
    """Single-line text input."""

    type: Literal["TEXT_INPUT"] = Field(default="TEXT_INPUT", description="Widget type")
    input_type: TextInputType | None = Field(default=None, description="HTML input type")
    min_length: int | None = Field(default=None, description="Minimum length hint")
    max_length: int | None = Field(default=None, description="Maximum length hint")
    pattern: str | None = Field(default=None, description="Regex hint")


class TextAreaWidget(WidgetBase):
    """Multi-line text input."""

    type: Literal["TEXTAREA"] = Field(default="TEXTAREA", description="Widget type")
    rows: int | None = Field(default=None, description="Visible rows")
    min_length: int | None = Field(default=None, description="Minimum length hint")
    max_length: int | None = Field(default=None, description="Maximum length hint")
    show_char_count: bool | None = Field(default=None, description="Show character counter")


class SelectWidget(WidgetBase):
    """Single selection dropdown."""

    type: Literal["SELECT"] = Field(default="SELECT", description="Widget type")
    options: list[WidgetOption] = Field(default_factory=list, description="Options")
    allow_custom_option: bool | None = Field(default=None, description="Allow free entry")
    searchable: bool | None = Field(default=None, description="Enable option search")


class MultiSelectWidget(WidgetBase):
    """Multiple selection list; answers are string lists."""

    type: Literal["MULTI_SELECT"] = Field(default="MULTI_SELECT", description="Widget type")
    options: list[WidgetOption] = Field(default_factory=list, description="Options")
    min_selections: int | None = Field(default=None, description="Minimum selections hint")
    max_selections: int | None = Field(default=None, description="Maximum selections hint")
    allow_custom_option: bool | None = Field(default=None, description="Allow free entry")


class RadioGroupWidget(WidgetBase):
    """Radio button selection."""

    type: Literal["RADIO_GROUP"] = Field(default="RADIO_GROUP", description="Widget type")
    options: list[WidgetOption] = Field(default_factory=list, description="Options")
    layout: OptionLayout | None = Field(default=None, description="Option layout")


class CheckboxWidget(WidgetBase):
    """Single checkbox; answers are booleans."""

    type: Literal["CHECKBOX"] = Field(default="CHECKBOX", description="Widget type")
    checkbox_label: str | None = Field(default=None, description="Text beside the box")


class RatingWidget(WidgetBase):
    """Icon rating input."""

    type: Literal["RATING"] = Field(default="RATING", description="Widget type")
    max_rating: int = Field(default=5, ge=1, description="Number of icons")
    allow_half: bool | None = Field(default=None, description="Allow half steps")
    icon: RatingIcon | None = Field(default=None, description="Icon style")


class SliderWidget(WidgetBase):
    """Numeric slider input."""

    type: Literal["SLIDER"] = Field(default="SLIDER", description="Widget type")
    min: float = Field(default=0, description="Lowest value")
    max: float = Field(default=100, description="Highest value")
    step: float | None = Field(default=None, description="Step increment")
    show_value: bool | None = Field(default=None, description="Show current value")
    show_marks: bool | None = Field(default=None, description="Show marks")
    marks: list[SliderMark] | None = Field(default=None, description="Labelled ticks")


class DatePickerWidget(WidgetBase):
    """Date / time selection."""

    type: Literal["DATE_PICKER"] = Field(default="DATE_PICKER", description="Widget type")
    min_date: str | None = Field(default=None, description="Earliest selectable date")
    max_date: str | None = Field(default=None, description="Latest selectable date")
    format: str | None = Field(default=None, description="Display format")
    include_time: bool | None = Field(default=None, description="Also pick a time")


class InstructionTextWidget(WidgetBase):
    """Static instruction or info text."""

    type: Literal["INSTRUCTION_TEXT"] = Field(default="INSTRUCTION_TEXT", description="Widget type")
    content: str = Field(default="", description="Instruction content")
    format: ContentFormat | None = Field(default=None, description="Content format")
    icon_name: str | None = Field(default=None, description="Leading icon")
    variant: InstructionVariant | None = Field(default=None, description="Callout variant")


class DividerWidget(WidgetBase):
    """Visual separator line."""

    type: Literal["DIVIDER"] = Field(default="DIVIDER", description="Widget type")
    orientation: Orientation | None = Field(default=None, description="Line orientation")
    thickness: float | None = Field(default=None, description="Line thickness")


class SpacerWidget(WidgetBase):
    """Empty space."""

    type: Literal["SPACER"] = Field(default="SPACER", description="Widget type")
    height: float | None = Field(default=None, description="Spacer height")


class ContainerWidget(WidgetBase):
    """
    Groups other widgets.

    ``children`` holds ordered widget ids, never inline copies: the
    configuration owns every widget and containers only reference them.
    """

    type: Literal["CONTAINER"] = Field(default="CONTAINER", description="Widget type")
    children: list[str] = Field(default_factory=list, description="Ordered child widget ids")
    layout: OptionLayout | None = Field(default=None, description="Child layout")
    columns: int | None = Field(default=None, description="Grid columns")
    gap: float | None = Field(default=None, description="Gap between children")
    collapsible: bool | None = Field(default=None, description="Can be collapsed")
    default_collapsed: bool | None = Field(default=None, description="Starts collapsed")


class UnknownWidget(WidgetBase):
    """
    Widget whose type tag is not recognized.

    Every field is kept verbatim so a configuration written by a newer
    builder survives import and export. The renderer skips these.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
    )

    type: str = Field(description="Unrecognized widget type tag")


# -----------------------------------------------------------------------------
# Tagged Union of All Widgets
# -----------------------------------------------------------------------------

WIDGET_MODELS: dict[WidgetType, type[WidgetBase]] = {
    WidgetType.FILE_VIEWER: FileViewerWidget,
    WidgetType.TEXT_INPUT: TextInputWidget,
    WidgetType.TEXTAREA: TextAreaWidget,
    WidgetType.SELECT: SelectWidget,
    WidgetType.MULTI_SELECT: MultiSelectWidget,
    WidgetType.RADIO_GROUP: RadioGroupWidget,
    WidgetType.CHECKBOX: CheckboxWidget,
    WidgetType.RATING: RatingWidget,
    WidgetType.SLIDER: SliderWidget,
    WidgetType.DATE_PICKER: DatePickerWidget,
    WidgetType.INSTRUCTION_TEXT: InstructionTextWidget,
    WidgetType.DIVIDER: DividerWidget,
    WidgetType.SPACER: SpacerWidget,
    WidgetType.CONTAINER: ContainerWidget,
}

UNKNOWN_TAG = "__unknown__"

_KNOWN_TAGS = frozenset(widget_type.value for widget_type in WidgetType)


def widget_tag(value: Any) -> str:
    """Route raw or parsed widget data to its union member."""
    if isinstance(value, dict):
        tag = value.get("type")
    else:
        tag = getattr(value, "type", None)
    if isinstance(tag, WidgetType):
        tag = tag.value
    return tag if tag in _KNOWN_TAGS else UNKNOWN_TAG


Widget = Annotated[
    Union[
        # Media
        Annotated[FileViewerWidget, Tag("FILE_VIEWER")],
        # Inputs
        Annotated[TextInputWidget, Tag("TEXT_INPUT")],
        Annotated[TextAreaWidget, Tag("TEXTAREA")],
        Annotated[SelectWidget, Tag("SELECT")],
        Annotated[MultiSelectWidget, Tag("MULTI_SELECT")],
        Annotated[RadioGroupWidget, Tag("RADIO_GROUP")],
        Annotated[CheckboxWidget, Tag("CHECKBOX")],
        Annotated[RatingWidget, Tag("RATING")],
        Annotated[SliderWidget, Tag("SLIDER")],
        Annotated[DatePickerWidget, Tag("DATE_PICKER")],
        # Display
        Annotated[InstructionTextWidget, Tag("INSTRUCTION_TEXT")],
        # Layout
        Annotated[DividerWidget, Tag("DIVIDER")],
        Annotated[SpacerWidget, Tag("SPACER")],
        Annotated[ContainerWidget, Tag("CONTAINER")],
        # Anything else is preserved untouched
        Annotated[UnknownWidget, Tag(UNKNOWN_TAG)],
    ],
    Discriminator(widget_tag),
]


TEXT_LIKE_TYPES = frozenset({
    WidgetType.TEXT_INPUT,
    WidgetType.TEXTAREA,
    WidgetType.SELECT,
    WidgetType.RADIO_GROUP,
    WidgetType.DATE_PICKER,
})
