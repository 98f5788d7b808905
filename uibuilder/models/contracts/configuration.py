"""
Configuration contract models.

A Configuration is the persisted, versioned unit the builder edits and the
renderer consumes. It owns a flat table of widgets; container widgets only
reference their children by id.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from uibuilder.core.exceptions import ContainerCycleError
from uibuilder.models.contracts.widgets import WIRE_CONFIG, ContainerWidget, Widget
from uibuilder.models.enums import FileType, LayoutType, PipelineMode

TemplateCategory = Literal["text", "image", "audio", "video", "multi-modal"]


# ==================== INTEGRITY ====================


def check_widget_table(widgets: Sequence[Widget]) -> None:
    """
    Verify the widget table forms a valid arena.

    - widget ids are unique
    - every container child id references a widget in the table
    - a widget belongs to at most one container
    - no container contains itself, directly or transitively

    Raises:
        ValueError: On duplicate ids
        ContainerCycleError: On any container nesting violation
    """
    seen: set[str] = set()
    for widget in widgets:
        if widget.id in seen:
            raise ValueError(f"Duplicate widget id {widget.id!r}")
        seen.add(widget.id)

    parent_of: dict[str, str] = {}
    children_of: dict[str, list[str]] = {}
    for widget in widgets:
        if not isinstance(widget, ContainerWidget):
            continue
        children_of[widget.id] = list(widget.children)
        for child_id in widget.children:
            if child_id == widget.id:
                raise ContainerCycleError(f"Container {widget.id!r} cannot contain itself")
            if child_id not in seen:
                raise ContainerCycleError(
                    f"Container {widget.id!r} references unknown widget {child_id!r}"
                )
            if child_id in parent_of:
                raise ContainerCycleError(
                    f"Widget {child_id!r} already belongs to container {parent_of[child_id]!r}"
                )
            parent_of[child_id] = widget.id

    # With single parents, a cycle exists iff walking up from some container revisits it
    for container_id in children_of:
        visited = {container_id}
        current = parent_of.get(container_id)
        while current is not None:
            if current in visited:
                raise ContainerCycleError(
                    f"Container {container_id!r} is nested inside itself"
                )
            visited.add(current)
            current = parent_of.get(current)


# ==================== CONFIGURATION MODELS ====================


class LayoutConfig(BaseModel):
    """Page layout metadata"""

    model_config = WIRE_CONFIG

    type: LayoutType = Field(default=LayoutType.TWO_COLUMN, description="Layout preset")
    columns: int | None = Field(default=2, description="Column count")
    gap: float | None = Field(default=16, description="Gap between columns")


class ThemeConfig(BaseModel):
    """Theme overrides (carried, not interpreted)"""

    model_config = WIRE_CONFIG

    primary_color: str | None = None
    background_color: str | None = None
    font_family: str | None = None


class ConfigurationMetadata(BaseModel):
    """Authoring metadata"""

    model_config = WIRE_CONFIG

    created_by: str
    created_at: str
    updated_by: str | None = None
    updated_at: str | None = None
    tags: list[str] | None = None


class Configuration(BaseModel):
    """UI configuration entity"""

    model_config = WIRE_CONFIG

    id: str = Field(..., min_length=1)
    name: str = Field(..., description="Display name")
    description: str | None = None
    version: int = Field(default=1, ge=1)
    project_id: str = Field(..., description="Owning project")
    pipeline_mode: PipelineMode = Field(default=PipelineMode.ANNOTATION)
    file_type: FileType = Field(default=FileType.TEXT)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    widgets: list[Widget] = Field(default_factory=list)
    theme: ThemeConfig | None = None
    metadata: ConfigurationMetadata | None = None

    @model_validator(mode="after")
    def validate_widget_table(self):
        """Ensure ids are unique and container references form a tree"""
        try:
            check_widget_table(self.widgets)
        except ContainerCycleError as exc:
            raise ValueError(exc.message) from exc
        return self

    # ------------------------------------------------------------------
    # Arena lookups
    # ------------------------------------------------------------------

    def get_widget(self, widget_id: str) -> Widget | None:
        """Get a widget by id."""
        for widget in self.widgets:
            if widget.id == widget_id:
                return widget
        return None

    @property
    def widget_ids(self) -> list[str]:
        return [widget.id for widget in self.widgets]

    def parent_of(self, widget_id: str) -> str | None:
        """Id of the container holding ``widget_id``, if any."""
        for widget in self.widgets:
            if isinstance(widget, ContainerWidget) and widget_id in widget.children:
                return widget.id
        return None

    def next_order(self) -> int:
        """Order value that paints above every existing widget."""
        return max((widget.order for widget in self.widgets), default=-1) + 1

    def with_widgets(self, widgets: Iterable[Widget]) -> "Configuration":
        """
        Return a copy holding ``widgets``.

        Unchanged widget objects are shared with this configuration rather
        than copied. The new table is integrity-checked.

        Raises:
            ContainerCycleError: If container references become invalid
            ValueError: On duplicate widget ids
        """
        new_widgets = list(widgets)
        check_widget_table(new_widgets)
        return self.model_copy(update={"widgets": new_widgets})


class TemplateConfiguration(BaseModel):
    """Template body: a configuration without id, project and metadata"""

    model_config = WIRE_CONFIG

    name: str
    description: str | None = None
    version: int = Field(default=1, ge=1)
    pipeline_mode: PipelineMode = Field(default=PipelineMode.ANNOTATION)
    file_type: FileType = Field(default=FileType.TEXT)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    widgets: list[Widget] = Field(default_factory=list)
    theme: ThemeConfig | None = None

    @model_validator(mode="after")
    def validate_widget_table(self):
        try:
            check_widget_table(self.widgets)
        except ContainerCycleError as exc:
            raise ValueError(exc.message) from exc
        return self


class UITemplate(BaseModel):
    """Reusable starter configuration offered in the toolbox"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    name: str
    description: str
    thumbnail: str | None = None
    category: TemplateCategory = Field(description="Template category")
    configuration: TemplateConfiguration
