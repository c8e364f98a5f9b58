"""
jview Theme - Styles, display states and theme resolution.

A theme maps an element name ("string", "null", "object_label", ...) to a
StateSet: one Style for each of the four display states. User themes are
sparse; resolve_themes() fills every gap with the neutral style.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Sequence, TypeVar

from rich.style import Style as RichStyle
from rich.theme import Theme as RichTheme

from .color import Color, parse_color

T = TypeVar("T")


class DisplayState(Enum):
    """Cursor focus / search match combination that selects a style."""

    UNFOCUSED = 0
    UNFOCUSED_MATCHED = 1
    FOCUSED = 2
    FOCUSED_MATCHED = 3

    @classmethod
    def of(cls, focused: bool = False, matched: bool = False) -> "DisplayState":
        if focused:
            return cls.FOCUSED_MATCHED if matched else cls.FOCUSED
        return cls.UNFOCUSED_MATCHED if matched else cls.UNFOCUSED


# Suffix used when exporting a state as a named Rich style.
STATE_SUFFIXES = {
    DisplayState.UNFOCUSED: "",
    DisplayState.UNFOCUSED_MATCHED: ".matched",
    DisplayState.FOCUSED: ".focused",
    DisplayState.FOCUSED_MATCHED: ".focused_matched",
}


@dataclass(frozen=True)
class Style:
    """Concrete render style. Style() is the neutral style."""

    fg: Color = Color.DEFAULT
    bg: Color = Color.DEFAULT
    inverted: bool = False
    bold: bool = False
    dimmed: bool = False

    def to_rich(self) -> RichStyle:
        return RichStyle(
            color=self.fg.to_rich(),
            bgcolor=self.bg.to_rich(),
            reverse=self.inverted,
            bold=self.bold,
            dim=self.dimmed,
        )


NEUTRAL_STYLE = Style()
DIMMED_STYLE = Style(dimmed=True)


@dataclass(frozen=True)
class StateSet:
    """The four styles of one element, always fully populated."""

    unfocused: Style = NEUTRAL_STYLE
    unfocused_matched: Style = NEUTRAL_STYLE
    focused: Style = NEUTRAL_STYLE
    focused_matched: Style = NEUTRAL_STYLE

    @classmethod
    def from_styles(cls, styles: Iterable[Style]) -> "StateSet":
        """Assign styles in DisplayState order; extras are dropped, missing ones stay neutral."""
        by_state = dict(zip(DisplayState, styles))
        return cls(**{state.name.lower(): style for state, style in by_state.items()})

    def __getitem__(self, state: DisplayState) -> Style:
        return getattr(self, state.name.lower())

    def styles(self) -> tuple:
        return tuple(self[state] for state in DisplayState)


NEUTRAL_STATES = StateSet()


def _or_default(value: Optional[T], default: T) -> T:
    return default if value is None else value


@dataclass(frozen=True)
class StyleSpec:
    """Partial style specification; every field may be left unset."""

    fg: Optional[Color] = None
    bg: Optional[Color] = None
    inverted: Optional[bool] = None
    bold: Optional[bool] = None
    dimmed: Optional[bool] = None

    @classmethod
    def parse(
        cls,
        fg: Optional[str] = None,
        bg: Optional[str] = None,
        inverted: Optional[bool] = None,
        bold: Optional[bool] = None,
        dimmed: Optional[bool] = None,
    ) -> "StyleSpec":
        """Build a spec from color tokens. Raises ColorParseError on a bad token."""
        return cls(
            fg=None if fg is None else parse_color(fg),
            bg=None if bg is None else parse_color(bg),
            inverted=inverted,
            bold=bold,
            dimmed=dimmed,
        )

    def to_style(self) -> Style:
        return Style(
            fg=_or_default(self.fg, Color.DEFAULT),
            bg=_or_default(self.bg, Color.DEFAULT),
            inverted=_or_default(self.inverted, False),
            bold=_or_default(self.bold, False),
            dimmed=_or_default(self.dimmed, False),
        )


ThemeSource = Mapping[str, Sequence[Optional[StyleSpec]]]
ResolvedTheme = Mapping[str, StateSet]


def spec_to_style(spec: Optional[StyleSpec]) -> Style:
    return NEUTRAL_STYLE if spec is None else spec.to_style()


def resolve_themes(source: ThemeSource) -> ResolvedTheme:
    """
    Turn a sparse theme source into a complete, read-only theme.

    Never fails. Anything left unset resolves to the neutral value and
    specs past the fourth are ignored.
    """
    themes: Dict[str, StateSet] = {}
    for name, specs in source.items():
        themes[name] = StateSet.from_styles(spec_to_style(spec) for spec in specs)
    return MappingProxyType(themes)


def _spec(fg=None, bg=None, **flags) -> StyleSpec:
    return StyleSpec.parse(fg=fg, bg=bg, **flags)


def _element(color: Optional[str], bold: bool = False) -> list:
    """Plain, search hit, cursor, cursor on a search hit."""
    return [
        _spec(fg=color, bold=bold or None),
        _spec(fg="C16(0)", bg="C16(3)", bold=bold or None),
        _spec(fg=color, inverted=True, bold=bold or None),
        _spec(fg="C16(0)", bg="C16(11)", bold=True),
    ]


def builtin_source() -> Dict[str, list]:
    """Built-in theme as a ThemeSource, before resolution."""
    return {
        "object_label": _element("C16(4)", bold=True),
        "array_label": _element("C16(4)", bold=True),
        "key": _element("C16(12)"),
        "string": _element("C16(2)"),
        "number": _element("C16(5)"),
        "boolean": _element("C16(3)"),
        "null": [_spec(dimmed=True), *_element(None)[1:]],
        "object_brace": [_spec(), _spec(bold=True), _spec(inverted=True)],
        "array_bracket": [_spec(), _spec(bold=True), _spec(inverted=True)],
        "preview": [_spec(dimmed=True), _spec(fg="C16(3)"), _spec(inverted=True, dimmed=True)],
        "ellipsis": [_spec(dimmed=True)],
    }


def builtin_themes() -> ResolvedTheme:
    """Curated default theme, used when no user theme is supplied."""
    return resolve_themes(builtin_source())


def to_rich_theme(themes: ResolvedTheme) -> RichTheme:
    """
    Export every element/state as a named Rich style, e.g. "string.focused".

    Rich style names are case-insensitive, so names are lowercased. When two
    elements differ only in case, the first one in the theme is exported.
    """
    styles = {}
    for name, states in themes.items():
        for state, suffix in STATE_SUFFIXES.items():
            styles.setdefault(f"{name}{suffix}".lower(), states[state].to_rich())
    return RichTheme(styles, inherit=False)
