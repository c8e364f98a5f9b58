"""jview Highlighter - Read-only style lookups over a resolved theme."""

from enum import Enum
from typing import List, Optional

from rich.style import Style as RichStyle

from .theme import (
    DIMMED_STYLE,
    NEUTRAL_STATES,
    NEUTRAL_STYLE,
    DisplayState,
    ResolvedTheme,
    StateSet,
    Style,
    builtin_themes,
)


class ThemePolicy(Enum):
    """What a Highlighter holds when it is given no theme."""

    UNTHEMED = "none"  # every lookup returns the neutral style
    BUILTIN = "builtin"  # fall back to builtin_themes()


class Highlighter:
    """
    Answers style queries by element name.

    Unknown names, and every name when no theme is held, resolve to the
    neutral style instead of failing.
    """

    def __init__(
        self,
        themes: Optional[ResolvedTheme] = None,
        policy: ThemePolicy = ThemePolicy.UNTHEMED,
    ):
        if themes is None and policy is ThemePolicy.BUILTIN:
            themes = builtin_themes()
        self._themes = themes
        self.policy = policy

    @property
    def themes(self) -> Optional[ResolvedTheme]:
        return self._themes

    @property
    def is_themed(self) -> bool:
        return self._themes is not None

    def element_names(self) -> List[str]:
        if self._themes is None:
            return []
        return sorted(self._themes)

    def style(self, key: str) -> StateSet:
        if self._themes is None:
            return NEUTRAL_STATES
        return self._themes.get(key, NEUTRAL_STATES)

    def style_for(self, key: str, state: DisplayState = DisplayState.UNFOCUSED) -> Style:
        return self.style(key)[state]

    def rich_style(self, key: str, state: DisplayState = DisplayState.UNFOCUSED) -> RichStyle:
        return self.style_for(key, state).to_rich()

    def default_style(self) -> Style:
        return NEUTRAL_STYLE

    def dimmed(self) -> Style:
        return DIMMED_STYLE
