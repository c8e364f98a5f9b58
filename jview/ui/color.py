"""
jview Color - Terminal color values and the color token parser.

Supported tokens:
- "default"      inherit the terminal's own color
- "C16(n)"       palette slot n (0-255)
- "#RRGGBB"      24-bit truecolor
- "RRGGBB"       24-bit truecolor without the leading '#'
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional

INDEXED_PREFIX = "C16("

# Optional leading "+" as in an unsigned integer parse; "-" is rejected.
_DIGITS_RE = re.compile(r"\+?[0-9]+")
_HEX_RE = re.compile(r"[0-9a-fA-F]{6}")


class ColorKind(Enum):
    """Variant of a terminal color"""

    DEFAULT = "default"
    INDEXED = "indexed"
    RGB = "rgb"


class ColorParseError(ValueError):
    """Base class for color token errors."""

    message_template = "Unknown color format: {token}"

    def __init__(self, token: str):
        self.token = token
        super().__init__(self.message_template.format(token=token))


class InvalidIndexedColor(ColorParseError):
    """C16(...) payload is not an integer in 0-255."""

    message_template = "Invalid ANSI color: {token}"


class InvalidHexColor(ColorParseError):
    """Hex-shaped token whose digits are not six hex characters."""

    message_template = "Invalid hex color: {token}"


class UnknownColorFormat(ColorParseError):
    """Token matches none of the recognized shapes."""


@dataclass(frozen=True)
class Color:
    """Immutable terminal color. Compare by value."""

    kind: ColorKind = ColorKind.DEFAULT
    value: int = 0

    DEFAULT: ClassVar["Color"]

    @classmethod
    def indexed(cls, index: int) -> "Color":
        if not 0 <= index <= 255:
            raise ValueError(f"palette index out of range: {index}")
        return cls(ColorKind.INDEXED, index)

    @classmethod
    def rgb(cls, value: int) -> "Color":
        if not 0 <= value <= 0xFFFFFF:
            raise ValueError(f"rgb value out of range: {value:#x}")
        return cls(ColorKind.RGB, value)

    @property
    def is_default(self) -> bool:
        return self.kind is ColorKind.DEFAULT

    def to_rich(self) -> Optional[str]:
        """Color spec understood by rich.style.Style, None for the terminal default."""
        if self.kind is ColorKind.INDEXED:
            return f"color({self.value})"
        if self.kind is ColorKind.RGB:
            return f"#{self.value:06x}"
        return None

    def __str__(self) -> str:
        if self.kind is ColorKind.INDEXED:
            return f"{INDEXED_PREFIX}{self.value})"
        if self.kind is ColorKind.RGB:
            return f"#{self.value:06x}"
        return "default"


Color.DEFAULT = Color()


def parse_color(token: str) -> Color:
    """
    Parse a color token.

    Rules are tried in order and the first match wins. Any 6-character
    token that is not "default" or C16(...) is treated as bare hex, so
    "zzzzzz" fails with InvalidHexColor rather than UnknownColorFormat.

    Raises:
        InvalidIndexedColor, InvalidHexColor, UnknownColorFormat
    """
    if token == "default":
        return Color.DEFAULT

    if token.startswith(INDEXED_PREFIX):
        digits = token[len(INDEXED_PREFIX):].rstrip(")")
        if not _DIGITS_RE.fullmatch(digits) or int(digits) > 255:
            raise InvalidIndexedColor(token)
        return Color.indexed(int(digits))

    if token.startswith("#") or len(token) == 6:
        digits = token[1:] if token.startswith("#") else token
        if not _HEX_RE.fullmatch(digits):
            raise InvalidHexColor(token)
        return Color.rgb(int(digits, 16))

    raise UnknownColorFormat(token)
