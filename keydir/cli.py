"""Command-line front door for keydir.

Parses CLI options, merges them over the persisted configuration, and
either prints every page of the starting directory or runs the
interactive menu.
"""

from __future__ import annotations

import argparse
import shutil
import sys
from pathlib import Path

from .api import browse_directory, open_session
from .errors import DirectoryMenuError
from .logging_setup import configure_logging
from .render.menu import render_page_lines
from .render.theme import PLAIN_THEME, available_theme_names
from .runtime.config import MenuConfig, load_menu_config, save_menu_config
from .runtime.controller import NavigationController
from .sorting import SortMethod, parse_sort_method


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _sort_method(value: str) -> SortMethod:
    try:
        return parse_sort_method(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _default_render_width() -> int:
    """Resolve default render width from current terminal size."""
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def render_pages_text(controller: NavigationController, max_cols: int) -> str:
    """Render every page of the session as plain text blocks."""
    blocks: list[str] = []
    for page in controller.pages:
        blocks.append("\n".join(render_page_lines(page, max_cols, controller.session.column_major_order, PLAIN_THEME)))
    if controller.session.message:
        blocks.append(controller.session.message)
    return "\n\n".join(blocks) + "\n"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse a directory tree through keyed, paginated menus."
    )
    parser.add_argument("path", nargs="?", default=None, help="Starting directory. Defaults to current directory.")
    parser.add_argument("--root", default=None, help="Directory above which navigation is refused.")
    parser.add_argument("--max-items", type=_positive_int, default=None, help="Maximum entries per page.")
    parser.add_argument(
        "--sort",
        type=_sort_method,
        default=None,
        help=f"Initial sort method ({', '.join(method.value for method in SortMethod)}).",
    )
    parser.add_argument("--exclude", default=None, help="Regexp of base names to hide.")
    parser.add_argument("--column-major", action="store_true", default=None, help="Lay out pages column by column.")
    parser.add_argument("--stay-open", action="store_true", default=None, help="Keep browsing after opening a file.")
    parser.add_argument("--theme", default=None, help=f"UI theme name ({', '.join(available_theme_names())}).")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--print", dest="print_pages", action="store_true", help="Print all pages and exit.")
    parser.add_argument(
        "--max-cols",
        type=_positive_int,
        default=None,
        help="Column width for --print output (default: terminal width).",
    )
    parser.add_argument("--save-defaults", action="store_true", help="Persist the given options as defaults.")
    parser.add_argument("--verbose", action="store_true", help="Log debug details to the keydir log file.")
    return parser


def resolve_config(args: argparse.Namespace) -> MenuConfig:
    """Overlay CLI options on the persisted configuration and validate."""
    return load_menu_config().with_overrides(
        root=Path(args.root).expanduser() if args.root is not None else None,
        max_items_per_page=args.max_items,
        default_sort_method=args.sort,
        exclude_pattern=args.exclude,
        column_major_order=args.column_major,
        stay_open_after_file_action=args.stay_open,
    ).validate()


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and browse the requested directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args()
    configure_logging(args.verbose)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)

    try:
        config = resolve_config(args)
        if args.save_defaults:
            save_menu_config(config)
        if args.print_pages:
            controller = open_session(path, config=config)
            max_cols = args.max_cols if args.max_cols is not None else _default_render_width()
            sys.stdout.write(render_pages_text(controller, max_cols))
            return
        browse_directory(path, config=config, theme_name=args.theme, no_color=args.no_color)
    except DirectoryMenuError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
