"""Command-line front door for lazyselect.

Parses CLI options, collects the items to choose from, and either prints the
accessibility attributes of the initial state or runs the interactive
dropdown and prints the chosen item.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from .logging_setup import LOG_LEVELS, setup_logging
from .runtime import config, run_playground
from .runtime.config import MAX_TYPEAHEAD_TIMEOUT_MS, MIN_TYPEAHEAD_TIMEOUT_MS
from .runtime.playground import PlaygroundSettings, build_engine, resolve_settings
from .ui_theme import available_theme_names, normalize_theme_name


def _timeout_ms(value: str) -> int:
    """argparse type for the typeahead idle timeout."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if not MIN_TYPEAHEAD_TIMEOUT_MS <= parsed <= MAX_TYPEAHEAD_TIMEOUT_MS:
        raise argparse.ArgumentTypeError(
            f"value must be between {MIN_TYPEAHEAD_TIMEOUT_MS} and {MAX_TYPEAHEAD_TIMEOUT_MS}"
        )
    return parsed


def _read_lines(text: str) -> list[str]:
    return [line for line in text.splitlines() if line.strip()]


def collect_items(args: argparse.Namespace) -> list[str]:
    """Return items from positional args, ``--file``, or piped stdin, in that order."""
    if args.items:
        if args.file is not None:
            raise SystemExit("Cannot combine positional items with --file.")
        return list(args.items)
    if args.file is not None:
        path = Path(args.file)
        if not path.is_file():
            raise SystemExit(f"File not found: {path}")
        return _read_lines(path.read_text(encoding="utf-8", errors="replace"))
    if not os.isatty(sys.stdin.fileno()):
        return _read_lines(sys.stdin.read())
    raise SystemExit("No items given. Pass items as arguments, with --file, or on stdin.")


def save_settings(settings: PlaygroundSettings) -> None:
    """Persist the resolved theme, typeahead timeout, and wrap-around preference."""
    if settings.theme_name:
        config.save_theme_name(normalize_theme_name(settings.theme_name))
    config.save_typeahead_timeout_ms(settings.typeahead_timeout_ms)
    config.save_circular_navigation(settings.circular_navigation)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyselect",
        description="Pick one item from a list with an accessible keyboard and mouse dropdown.",
    )
    parser.add_argument("items", nargs="*", help="Items to choose from.")
    parser.add_argument("--file", metavar="PATH", default=None, help="Read items from PATH, one per line.")
    parser.add_argument("--label", default=None, help="Label shown above the dropdown.")
    parser.add_argument("--select", metavar="ITEM", default=None, help="Item selected initially.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--windows-style",
        action="store_true",
        help="Arrow keys on the closed button change the selection without opening the list.",
    )
    parser.add_argument(
        "--no-circular",
        action="store_true",
        help="Stop at the first and last items instead of wrapping around.",
    )
    parser.add_argument(
        "--timeout-ms",
        type=_timeout_ms,
        default=None,
        help="Idle time in milliseconds before typed characters are forgotten.",
    )
    parser.add_argument("--log-file", metavar="PATH", default=None, help="Write log records to PATH.")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING", help="Log threshold.")
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Remember the theme, timeout, and wrap-around setting for later runs.",
    )
    parser.add_argument(
        "--print-attributes",
        action="store_true",
        help="Print the initial state and ARIA attributes as JSON and exit.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the dropdown.

    ``argv`` is primarily for tests; when omitted ``sys.argv`` is used.
    """
    args = build_parser().parse_args(argv)
    setup_logging(
        args.log_level,
        Path(args.log_file) if args.log_file else None,
        console=args.print_attributes,
    )

    items = collect_items(args)
    if args.select is not None and args.select not in items:
        raise SystemExit(f"--select value is not one of the items: {args.select!r}")
    settings = resolve_settings(
        label=args.label,
        theme_name=args.theme,
        no_color=args.no_color,
        windows_style=args.windows_style,
        circular_navigation=False if args.no_circular else None,
        typeahead_timeout_ms=args.timeout_ms,
        initial_selected_item=args.select,
    )
    if args.save_config:
        save_settings(settings)

    if args.print_attributes:
        engine = build_engine(items, settings)
        attributes = engine.attributes()
        state = engine.state
        payload = {
            "state": {
                "is_open": state.is_open,
                "highlighted_index": state.highlighted_index,
                "selected_item": state.selected_item,
                "keys_so_far": state.keys_so_far,
            },
            "label": attributes.label,
            "toggle": attributes.toggle,
            "menu": attributes.menu,
            "items": list(attributes.items),
        }
        sys.stdout.write(json.dumps(payload, indent=2) + "\n")
        return

    selected = run_playground(items, settings)
    if selected is None:
        raise SystemExit(1)
    sys.stdout.write(f"{selected}\n")


if __name__ == "__main__":
    main()
