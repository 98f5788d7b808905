"""
Widget Factory

Provides widget construction for the builder:
- Toolbox catalog of widget definitions with per-type defaults
- Instantiate a widget with a collision-resistant id
- Shallow-merge patches into existing widgets
- Container nesting checks
"""

import copy
import logging
from collections.abc import Collection, Mapping
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from uibuilder.core.exceptions import (
    ContainerCycleError,
    UnknownWidgetTypeError,
    WidgetNotFoundError,
    WidgetPatchError,
)
from uibuilder.models.contracts.configuration import Configuration
from uibuilder.models.contracts.widgets import (
    TEXT_LIKE_TYPES,
    WIDGET_MODELS,
    ContainerWidget,
    Widget,
    WidgetBase,
)
from uibuilder.models.enums import WidgetCategory, WidgetType

logger = logging.getLogger(__name__)

IMMUTABLE_FIELDS = frozenset({"id", "type"})


# =============================================================================
# Catalog
# =============================================================================


class WidgetDefinition(BaseModel):
    """Toolbox entry for one widget type."""

    model_config = ConfigDict(frozen=True)

    type: WidgetType
    name: str = Field(description="Display name, also the default label")
    description: str
    category: WidgetCategory
    default_config: dict[str, Any] = Field(default_factory=dict)


WIDGET_DEFINITIONS: dict[WidgetType, WidgetDefinition] = {
    definition.type: definition
    for definition in (
        WidgetDefinition(
            type=WidgetType.FILE_VIEWER,
            name="File Viewer",
            description="Display uploaded file content",
            category=WidgetCategory.MEDIA,
            default_config={"size": {"width": 600, "height": 400}},
        ),
        WidgetDefinition(
            type=WidgetType.TEXT_INPUT,
            name="Text Input",
            description="Single-line text input",
            category=WidgetCategory.INPUT,
            default_config={"size": {"width": 400, "height": 40}},
        ),
        WidgetDefinition(
            type=WidgetType.TEXTAREA,
            name="Text Area",
            description="Multi-line text input",
            category=WidgetCategory.INPUT,
            default_config={"size": {"width": 400, "height": 120}, "rows": 4},
        ),
        WidgetDefinition(
            type=WidgetType.SELECT,
            name="Dropdown",
            description="Single selection dropdown",
            category=WidgetCategory.INPUT,
            default_config={"size": {"width": 300, "height": 40}, "options": []},
        ),
        WidgetDefinition(
            type=WidgetType.MULTI_SELECT,
            name="Multi Select",
            description="Multiple selection dropdown",
            category=WidgetCategory.INPUT,
            default_config={"size": {"width": 300, "height": 40}, "options": []},
        ),
        WidgetDefinition(
            type=WidgetType.RADIO_GROUP,
            name="Radio Group",
            description="Radio button selection",
            category=WidgetCategory.INPUT,
            default_config={
                "size": {"width": 300, "height": 120},
                "options": [],
                "layout": "vertical",
            },
        ),
        WidgetDefinition(
            type=WidgetType.CHECKBOX,
            name="Checkbox",
            description="Single checkbox",
            category=WidgetCategory.INPUT,
            default_config={"size": {"width": 300, "height": 40}},
        ),
        WidgetDefinition(
            type=WidgetType.RATING,
            name="Rating",
            description="Star rating input",
            category=WidgetCategory.INPUT,
            default_config={"size": {"width": 200, "height": 40}, "max_rating": 5},
        ),
        WidgetDefinition(
            type=WidgetType.SLIDER,
            name="Slider",
            description="Numeric slider input",
            category=WidgetCategory.INPUT,
            default_config={
                "size": {"width": 300, "height": 60},
                "min": 0,
                "max": 100,
                "step": 1,
            },
        ),
        WidgetDefinition(
            type=WidgetType.DATE_PICKER,
            name="Date Picker",
            description="Date/time selection",
            category=WidgetCategory.INPUT,
            default_config={"size": {"width": 300, "height": 40}},
        ),
        WidgetDefinition(
            type=WidgetType.INSTRUCTION_TEXT,
            name="Instructions",
            description="Instruction or info text",
            category=WidgetCategory.DISPLAY,
            default_config={
                "size": {"width": 600, "height": 60},
                "content": "Enter instructions here...",
            },
        ),
        WidgetDefinition(
            type=WidgetType.DIVIDER,
            name="Divider",
            description="Visual separator line",
            category=WidgetCategory.LAYOUT,
            default_config={"size": {"width": 600, "height": 2}},
        ),
        WidgetDefinition(
            type=WidgetType.SPACER,
            name="Spacer",
            description="Empty space",
            category=WidgetCategory.LAYOUT,
            default_config={"size": {"width": 600, "height": 20}},
        ),
        WidgetDefinition(
            type=WidgetType.CONTAINER,
            name="Container",
            description="Group widgets together",
            category=WidgetCategory.LAYOUT,
            default_config={
                "size": {"width": 600, "height": 300},
                "children": [],
                "layout": "vertical",
            },
        ),
    )
}


def list_definitions(category: WidgetCategory | str | None = None) -> list[WidgetDefinition]:
    """List toolbox definitions, optionally filtered by category."""
    if category is None or category == "all":
        return list(WIDGET_DEFINITIONS.values())
    wanted = WidgetCategory(category)
    return [d for d in WIDGET_DEFINITIONS.values() if d.category == wanted]


def resolve_widget_type(widget: WidgetBase | str | WidgetType) -> WidgetType:
    """
    Map a widget (or raw tag) to its WidgetType.

    Raises:
        UnknownWidgetTypeError: If the tag is not a known widget type
    """
    if isinstance(widget, WidgetBase):
        tag = widget.type  # type: ignore[attr-defined]
        widget_id = widget.id
    else:
        tag = widget
        widget_id = None
    try:
        return WidgetType(tag)
    except ValueError:
        raise UnknownWidgetTypeError(str(tag), widget_id) from None


# =============================================================================
# Construction
# =============================================================================


def generate_widget_id(existing_ids: Collection[str] = ()) -> str:
    """Generate a widget id that is not in ``existing_ids``."""
    while True:
        candidate = f"widget-{uuid4().hex[:12]}"
        if candidate not in existing_ids:
            return candidate


def instantiate(
    widget_type: WidgetType | str,
    defaults: Mapping[str, Any] | None = None,
    existing_ids: Collection[str] = (),
) -> Widget:
    """
    Create a new widget of ``widget_type``.

    Catalog defaults (size, options, rows, ...) are merged first, then
    ``defaults`` from the caller. An ``id`` in ``defaults`` is honoured if
    it is free; otherwise a fresh id is generated.

    Raises:
        UnknownWidgetTypeError: If the type is not known
        WidgetPatchError: If the requested id is taken or defaults are invalid
    """
    resolved = resolve_widget_type(widget_type)
    definition = WIDGET_DEFINITIONS[resolved]

    data: dict[str, Any] = {"label": definition.name}
    data.update(copy.deepcopy(definition.default_config))
    data.update(defaults or {})
    data["type"] = resolved.value

    requested_id = data.get("id")
    if requested_id:
        if requested_id in existing_ids:
            raise WidgetPatchError(f"Widget id {requested_id!r} is already in use")
    else:
        data["id"] = generate_widget_id(existing_ids)

    model = WIDGET_MODELS[resolved]
    try:
        widget = model.model_validate(data)
    except ValidationError as exc:
        raise WidgetPatchError(f"Invalid defaults for {resolved.value}: {exc}") from exc

    logger.debug(f"Instantiated {resolved.value} widget {widget.id}")
    return widget  # type: ignore[return-value]


def _field_names_by_key(model: type[BaseModel]) -> dict[str, str]:
    """Map both wire aliases and attribute names to attribute names."""
    keys: dict[str, str] = {}
    for name, field in model.model_fields.items():
        keys[name] = name
        if field.alias:
            keys[field.alias] = name
    return keys


def update(widget: Widget, patch: Mapping[str, Any]) -> Widget:
    """
    Shallow-merge ``patch`` into ``widget``.

    Top-level fields are replaced wholesale: patching ``options`` swaps the
    whole list, and patching ``position`` swaps the whole point. Keys may
    be camelCase or snake_case.

    Raises:
        WidgetPatchError: If ``id``/``type`` would change or the result is invalid
    """
    if not patch:
        return widget

    keys = _field_names_by_key(type(widget))
    data = widget.model_dump()
    for key, value in patch.items():
        name = keys.get(key, key)
        if name in IMMUTABLE_FIELDS:
            if value != getattr(widget, name):
                raise WidgetPatchError(f"Widget field {name!r} cannot be changed")
            continue
        data[name] = value

    try:
        return type(widget).model_validate(data)  # type: ignore[return-value]
    except ValidationError as exc:
        raise WidgetPatchError(f"Invalid patch for widget {widget.id!r}: {exc}") from exc


# =============================================================================
# Container Nesting
# =============================================================================


def ancestors_of(configuration: Configuration, widget_id: str) -> list[str]:
    """Container ids enclosing ``widget_id``, nearest first."""
    chain: list[str] = []
    current = configuration.parent_of(widget_id)
    while current is not None and current not in chain:
        chain.append(current)
        current = configuration.parent_of(current)
    return chain


def check_nesting(
    configuration: Configuration,
    container_id: str,
    child_ids: list[str],
) -> None:
    """
    Verify ``child_ids`` may become the children of ``container_id``.

    Raises:
        WidgetNotFoundError: If the container or a child does not exist
        ContainerCycleError: If a child is the container itself, one of its
            ancestors, or already owned by another container
    """
    container = configuration.get_widget(container_id)
    if container is None:
        raise WidgetNotFoundError(container_id)
    if not isinstance(container, ContainerWidget):
        raise ContainerCycleError(f"Widget {container_id!r} is not a container")

    if len(set(child_ids)) != len(child_ids):
        raise ContainerCycleError(f"Container {container_id!r} lists a child twice")

    forbidden = {container_id, *ancestors_of(configuration, container_id)}
    for child_id in child_ids:
        if configuration.get_widget(child_id) is None:
            raise WidgetNotFoundError(child_id)
        if child_id in forbidden:
            raise ContainerCycleError(
                f"Widget {child_id!r} encloses container {container_id!r} and cannot be its child"
            )
        owner = configuration.parent_of(child_id)
        if owner is not None and owner != container_id:
            raise ContainerCycleError(
                f"Widget {child_id!r} already belongs to container {owner!r}"
            )


# =============================================================================
# Runtime Values
# =============================================================================


def default_value(widget: WidgetBase) -> Any:
    """
    Value shown for a widget with no stored answer.

    Raises:
        UnknownWidgetTypeError: If the widget type is not known
    """
    widget_type = resolve_widget_type(widget)
    if widget_type in TEXT_LIKE_TYPES:
        return ""
    if widget_type == WidgetType.CHECKBOX:
        return False
    if widget_type == WidgetType.MULTI_SELECT:
        return []
    return None
