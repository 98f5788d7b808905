"""
Core Exceptions

Custom exceptions for the UI builder.

Per-field validation failures are not exceptions: they are returned as a
``{widget_id: message}`` map by the validation engine.
"""

from typing import Any


class UIBuilderError(Exception):
    """Base class for every error raised by the builder."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ConfigurationShapeError(UIBuilderError):
    """
    Raised when an imported configuration payload is malformed.

    Covers invalid JSON, a missing ``widgets`` array, missing required
    top-level keys, and model validation failures. The builder state is
    left untouched when this is raised.

    Attributes:
        errors: Structured details (one entry per problem found)
    """

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        self.errors = errors or []
        super().__init__(message)


class PersistenceError(UIBuilderError):
    """
    Raised when a save or load call fails in transport or on the server.

    Also raised when a persistence call exceeds its timeout. The builder
    never commits a "saved" baseline when this is raised.
    """

    def __init__(self, message: str = "Persistence call failed", status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class ConfigurationNotFoundError(UIBuilderError):
    """Raised by a store when no configuration exists for the requested id."""

    def __init__(self, configuration_id: str):
        self.configuration_id = configuration_id
        super().__init__(f"Configuration {configuration_id!r} not found")


class UnknownWidgetTypeError(UIBuilderError):
    """Raised when a widget type tag is not one of the known widget types."""

    def __init__(self, widget_type: str, widget_id: str | None = None):
        self.widget_type = widget_type
        self.widget_id = widget_id
        detail = f" (widget {widget_id!r})" if widget_id else ""
        super().__init__(f"Unknown widget type {widget_type!r}{detail}")


class WidgetNotFoundError(UIBuilderError):
    """Raised when a command references a widget id that is not in the configuration."""

    def __init__(self, widget_id: str):
        self.widget_id = widget_id
        super().__init__(f"Widget {widget_id!r} not found")


class WidgetPatchError(UIBuilderError):
    """Raised when a widget patch touches an immutable field or fails validation."""


class ContainerCycleError(UIBuilderError):
    """
    Raised when container nesting would become invalid.

    Containers form a tree: a container may not contain itself or one of its
    ancestors, and a widget may belong to at most one container.
    """


class DragInProgressError(UIBuilderError):
    """Raised when a drag or resize starts while another gesture is active."""

    def __init__(self, active_widget_id: str):
        self.active_widget_id = active_widget_id
        super().__init__(f"Widget {active_widget_id!r} is already being dragged")


class FormReadOnlyError(UIBuilderError):
    """Raised when a read-only form session receives input or a submit."""

    def __init__(self, message: str = "Form is read-only"):
        super().__init__(message)
