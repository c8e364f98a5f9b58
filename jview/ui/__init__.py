"""jview UI - Colors, styles and theme lookups for the terminal viewer."""

from .color import (
    Color,
    ColorKind,
    ColorParseError,
    InvalidHexColor,
    InvalidIndexedColor,
    UnknownColorFormat,
    parse_color,
)
from .theme import (
    DIMMED_STYLE,
    NEUTRAL_STATES,
    NEUTRAL_STYLE,
    DisplayState,
    ResolvedTheme,
    StateSet,
    Style,
    StyleSpec,
    ThemeSource,
    builtin_themes,
    resolve_themes,
    to_rich_theme,
)
from .highlighter import Highlighter, ThemePolicy
from .console import console, JviewConsole

__all__ = [
    "Color", "ColorKind", "ColorParseError", "InvalidHexColor", "InvalidIndexedColor",
    "UnknownColorFormat", "parse_color",
    "DIMMED_STYLE", "NEUTRAL_STATES", "NEUTRAL_STYLE", "DisplayState", "ResolvedTheme",
    "StateSet", "Style", "StyleSpec", "ThemeSource", "builtin_themes", "resolve_themes",
    "to_rich_theme",
    "Highlighter", "ThemePolicy",
    "console", "JviewConsole",
]
