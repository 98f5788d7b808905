"""
Enumeration types used across the builder.

Values match the tags written to exported configuration JSON.
"""

from enum import Enum


class WidgetType(str, Enum):
    """Widget type tags"""
    FILE_VIEWER = "FILE_VIEWER"
    TEXT_INPUT = "TEXT_INPUT"
    TEXTAREA = "TEXTAREA"
    SELECT = "SELECT"
    MULTI_SELECT = "MULTI_SELECT"
    RADIO_GROUP = "RADIO_GROUP"
    CHECKBOX = "CHECKBOX"
    RATING = "RATING"
    SLIDER = "SLIDER"
    DATE_PICKER = "DATE_PICKER"
    INSTRUCTION_TEXT = "INSTRUCTION_TEXT"
    DIVIDER = "DIVIDER"
    SPACER = "SPACER"
    CONTAINER = "CONTAINER"


class WidgetCategory(str, Enum):
    """Toolbox categories"""
    MEDIA = "media"
    INPUT = "input"
    DISPLAY = "display"
    LAYOUT = "layout"


class PipelineMode(str, Enum):
    """Operational context a form is rendered in"""
    ANNOTATION = "ANNOTATION"
    REVIEW = "REVIEW"
    QUALITY_CHECK = "QUALITY_CHECK"


class FileType(str, Enum):
    """File types the file viewer can display"""
    TEXT = "TEXT"
    MARKDOWN = "MARKDOWN"
    HTML = "HTML"
    AUDIO = "AUDIO"
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    CSV = "CSV"
    PDF = "PDF"


class ValidationRuleType(str, Enum):
    """Validation rule types understood by the validation engine"""
    REQUIRED = "required"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    MIN = "min"
    MAX = "max"
    PATTERN = "pattern"


class ConditionOperator(str, Enum):
    """Conditional display operators"""
    EQUALS = "equals"
    NOT_EQUALS = "notEquals"
    CONTAINS = "contains"
    GREATER_THAN = "greaterThan"
    LESS_THAN = "lessThan"
    IN = "in"


class LayoutType(str, Enum):
    """Page layout presets"""
    SINGLE_COLUMN = "single-column"
    TWO_COLUMN = "two-column"
    THREE_COLUMN = "three-column"
    CUSTOM = "custom"
