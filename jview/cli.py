import argparse
import logging
import sys

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from jview import __version__
from jview.config import (
    ThemeConfigError,
    candidate_paths,
    dump_theme_document,
    load_highlighter,
    load_theme_file,
)
from jview.ui.console import console
from jview.ui.highlighter import Highlighter, ThemePolicy
from jview.ui.theme import STATE_SUFFIXES, builtin_source

logger = logging.getLogger(__name__)

STATE_HEADERS = {
    "": "Unfocused",
    ".matched": "Matched",
    ".focused": "Focused",
    ".focused_matched": "Focused + Matched",
}


class ThemeCLI:
    def __init__(self, highlighter: Highlighter, verbose: bool = False):
        self.highlighter = highlighter
        self.verbose = verbose

    def show(self, args: argparse.Namespace) -> int:
        """Preview every element of the active theme in its four states."""
        if self.highlighter.is_themed:
            names = self.highlighter.element_names()
        else:
            console.info("No theme active, showing neutral styles")
            names = sorted(builtin_source())

        table = Table(title="jview theme", title_justify="left")
        table.add_column("Element", style="bold")
        for suffix in STATE_SUFFIXES.values():
            table.add_column(STATE_HEADERS[suffix])

        for name in names:
            cells = [
                Text(args.sample or name, style=self.highlighter.rich_style(name, state))
                for state in STATE_SUFFIXES
            ]
            table.add_row(name, *cells)

        console.print(table)
        console.print(Text("… dimmed chrome", style=self.highlighter.dimmed().to_rich()))
        return 0

    def check(self, args: argparse.Namespace) -> int:
        """Validate a theme file without applying it."""
        try:
            themes = load_theme_file(args.path)
        except ThemeConfigError as e:
            console.error(f"Invalid theme: {args.path}", details=str(e))
            return 1
        console.success(f"{len(themes)} elements in {args.path}")
        if self.verbose:
            console.print(", ".join(sorted(themes)), soft_wrap=True, markup=False)
        return 0

    def dump(self, args: argparse.Namespace) -> int:
        """Print the active theme as a YAML document."""
        if not self.highlighter.is_themed:
            console.warning("No theme active, nothing to dump")
            return 1
        sys.stdout.write(dump_theme_document(self.highlighter.themes))
        return 0

    def paths(self, args: argparse.Namespace) -> int:
        """List theme file locations in search order."""
        for path in candidate_paths(args.theme):
            marker = "[success]found[/]" if path.is_file() else "[secondary]missing[/]"
            console.print(f"{marker}  {escape(str(path))}", soft_wrap=True)
        return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jview-theme",
        description="Inspect and validate jview color themes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  jview-theme show                      # Preview the active theme
  jview-theme --no-theme show           # Preview with theming disabled
  jview-theme check ~/my-theme.toml     # Validate a theme file
  jview-theme dump > theme.yaml         # Export the active theme

Environment Variables:
  JVIEW_THEME         Path to a theme file
  XDG_CONFIG_HOME     Base directory searched for jview/theme.toml
        """,
    )
    parser.add_argument("--version", "-V", action="version", version=f"jview {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show detailed output")
    parser.add_argument("--theme", "-t", metavar="PATH", help="Theme file to load")
    parser.add_argument(
        "--no-theme",
        action="store_true",
        help="Disable theming instead of falling back to the built-in theme",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    show_parser = subparsers.add_parser("show", help="Preview the active theme")
    show_parser.add_argument("--sample", metavar="TEXT", help="Text rendered in every cell")

    check_parser = subparsers.add_parser("check", help="Validate a theme file")
    check_parser.add_argument("path", help="Theme file (.toml, .yaml or .yml)")

    subparsers.add_parser("dump", help="Print the active theme as YAML")
    subparsers.add_parser("paths", help="List theme file locations in search order")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    if args.no_theme:
        highlighter = Highlighter(None, ThemePolicy.UNTHEMED)
    else:
        highlighter = load_highlighter(args.theme, policy=ThemePolicy.BUILTIN)
    logger.debug(f"Theme elements active: {len(highlighter.element_names())}")
    cli = ThemeCLI(highlighter, verbose=args.verbose)

    try:
        if args.command == "show":
            return cli.show(args)
        elif args.command == "check":
            return cli.check(args)
        elif args.command == "dump":
            return cli.dump(args)
        elif args.command == "paths":
            return cli.paths(args)
        else:
            parser.print_help()
            return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
