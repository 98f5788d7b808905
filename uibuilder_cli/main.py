"""
UI Builder CLI

Command-line interface for UI configuration files.

Commands:
  uibuilder validate <file>   - Check a configuration file
  uibuilder render <file>     - Print the widgets a respondent would see
  uibuilder catalog           - List the widget toolbox
  uibuilder templates         - List the built-in templates
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any

from uibuilder.config import get_settings
from uibuilder.core.exceptions import ConfigurationShapeError, UIBuilderError
from uibuilder.models.contracts.configuration import Configuration
from uibuilder.models.contracts.widgets import UnknownWidget
from uibuilder.models.enums import PipelineMode
from uibuilder.services.builder import UIBuilderController
from uibuilder.services.renderer import render
from uibuilder.services.templates import BUILTIN_TEMPLATES
from uibuilder.services.validation import validate_responses
from uibuilder.services.widget_factory import list_definitions


def configure_logging() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def read_configuration(path: str) -> Configuration:
    """
    Read and validate a configuration file.

    Raises:
        ConfigurationShapeError: If the file is unreadable or malformed
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationShapeError(f"Cannot read {path}: {exc.strerror}") from exc
    return UIBuilderController.parse_configuration(text)


def main(args: list[str] | None = None) -> int:
    """
    Main CLI entry point.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if args is None:
        args = sys.argv[1:]

    # No args - show help
    if not args:
        print_help()
        return 0

    command = args[0].lower()

    if command in ("help", "-h", "--help"):
        print_help()
        return 0

    configure_logging()

    if command == "validate":
        return handle_validate(args[1:])

    if command == "render":
        return handle_render(args[1:])

    if command == "catalog":
        return handle_catalog(args[1:])

    if command == "templates":
        return handle_templates(args[1:])

    # Unknown command
    print(f"Unknown command: {command}", file=sys.stderr)
    print_help()
    return 1


def print_help() -> None:
    """Print CLI help message."""
    print("""
UI Builder CLI - Check and preview annotation UI configurations

Usage:
  uibuilder <command> [options]

Commands:
  validate    Check a configuration file
  render      Print the visible widgets for a set of answers
  catalog     List the widget toolbox
  templates   List the built-in templates
  help        Show this help message

Examples:
  uibuilder validate review-form.json
  uibuilder render review-form.json --responses answers.json --mode REVIEW
  uibuilder catalog --category input
""".strip())


def handle_validate(args: list[str]) -> int:
    """
    Handle 'uibuilder validate' command.

    Args:
        args: Additional arguments (the file path)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if not args or args[0] in ("--help", "-h"):
        print("""
Usage: uibuilder validate <file>

Check that a file holds a well-formed UI configuration: required keys,
widget fields, unique ids and container nesting.

Examples:
  uibuilder validate review-form.json
""".strip())
        return 0 if args else 1

    path = args[0]
    try:
        configuration = read_configuration(path)
    except ConfigurationShapeError as exc:
        print(f"Invalid configuration: {exc.message}", file=sys.stderr)
        for error in exc.errors:
            location = ".".join(str(part) for part in error.get("loc", []))
            print(f"  {location}: {error.get('msg')}", file=sys.stderr)
        return 1

    print(
        f"{path}: configuration {configuration.id!r} "
        f"(version {configuration.version}) with {len(configuration.widgets)} widget(s) is valid"
    )
    for widget in configuration.widgets:
        if isinstance(widget, UnknownWidget):
            print(f"  warning: widget {widget.id!r} has unknown type {widget.type!r}")
    return 0


def _rendered_rows(configuration: Configuration, responses: dict[str, Any], mode: PipelineMode) -> list[dict]:
    rows = render(configuration, responses, mode)
    errors = validate_responses([row.widget for row in rows], responses)
    return [
        {
            "id": row.widget.id,
            "type": row.widget.type,
            "label": row.widget.label,
            "order": row.widget.order,
            "value": row.value,
            "parentId": row.parent_id,
            "error": errors.get(row.widget.id),
        }
        for row in rows
    ]


def handle_render(args: list[str]) -> int:
    """
    Handle 'uibuilder render' command.

    Args:
        args: Additional arguments (file path, --responses, --mode)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    path = None
    responses_path = None
    mode = None

    # Parse arguments
    i = 0
    while i < len(args):
        arg = args[i]

        if arg in ("--responses", "-r"):
            if i + 1 >= len(args):
                print("Error: --responses requires a value", file=sys.stderr)
                return 1
            responses_path = args[i + 1]
            i += 2
        elif arg in ("--mode", "-m"):
            if i + 1 >= len(args):
                print("Error: --mode requires a value", file=sys.stderr)
                return 1
            mode = args[i + 1]
            i += 2
        elif arg in ("--help", "-h"):
            print("""
Usage: uibuilder render <file> [options]

Print, as JSON, the widgets a respondent sees for the given answers, in
render order, with their current values and validation errors.

Options:
  --responses, -r FILE  JSON object of answers keyed by widget id
  --mode, -m MODE       Pipeline mode (default: the configuration's own mode)
  --help, -h            Show this help message

Examples:
  uibuilder render review-form.json
  uibuilder render review-form.json --responses answers.json --mode REVIEW
""".strip())
            return 0
        elif path is None and not arg.startswith("-"):
            path = arg
            i += 1
        else:
            print(f"Unknown option: {arg}", file=sys.stderr)
            return 1

    if path is None:
        print("Error: render requires a configuration file", file=sys.stderr)
        return 1

    try:
        configuration = read_configuration(path)
        responses: dict[str, Any] = {}
        if responses_path:
            responses = json.loads(Path(responses_path).read_text(encoding="utf-8"))
            if not isinstance(responses, dict):
                print("Error: responses must be a JSON object", file=sys.stderr)
                return 1
        pipeline_mode = PipelineMode(mode) if mode else configuration.pipeline_mode
    except UIBuilderError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(_rendered_rows(configuration, responses, pipeline_mode), indent=2))
    return 0


def handle_catalog(args: list[str]) -> int:
    """
    Handle 'uibuilder catalog' command.

    Args:
        args: Additional arguments (e.g., --category)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    category = None

    i = 0
    while i < len(args):
        arg = args[i]

        if arg in ("--category", "-c"):
            if i + 1 >= len(args):
                print("Error: --category requires a value", file=sys.stderr)
                return 1
            category = args[i + 1]
            i += 2
        elif arg in ("--help", "-h"):
            print("""
Usage: uibuilder catalog [options]

List the widgets available in the builder toolbox.

Options:
  --category, -c NAME   Only show one category (media, input, display, layout)
  --help, -h            Show this help message
""".strip())
            return 0
        else:
            print(f"Unknown option: {arg}", file=sys.stderr)
            return 1

    try:
        definitions = list_definitions(category)
    except ValueError:
        print(f"Unknown category: {category}", file=sys.stderr)
        return 1

    for definition in definitions:
        print(
            f"{definition.type.value:<18} {definition.category.value:<8} "
            f"{definition.name:<14} {definition.description}"
        )
    return 0


def handle_templates(args: list[str]) -> int:
    """
    Handle 'uibuilder templates' command.

    Args:
        args: Additional arguments (e.g., --help)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if args and args[0] in ("--help", "-h"):
        print("""
Usage: uibuilder templates

List the built-in starter templates.
""".strip())
        return 0

    for template in BUILTIN_TEMPLATES:
        print(
            f"{template.id:<22} {template.category:<12} "
            f"{len(template.configuration.widgets)} widget(s)  {template.description}"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
