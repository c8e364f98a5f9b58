#!/usr/bin/env python3
"""
Theme file loading for jview.

Locates a theme document, deserializes it (TOML or YAML) into a theme
source and builds the Highlighter used for the rest of the process.

Document layout:

    [themes]
    string = [{ fg = "C16(2)" }, {}, { fg = "#00ff00", inverted = true }]
    null = [{ dimmed = true }]

Search order:
- explicit path passed by the caller
- $JVIEW_THEME
- $XDG_CONFIG_HOME/jview/theme.{toml,yaml,yml} (default ~/.config/jview)
"""

import logging
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from jview.ui.color import ColorParseError
from jview.ui.highlighter import Highlighter, ThemePolicy
from jview.ui.theme import ResolvedTheme, Style, StyleSpec, ThemeSource, resolve_themes

logger = logging.getLogger(__name__)

THEME_ENV_VAR = "JVIEW_THEME"
CONFIG_DIR_NAME = "jview"
THEME_FILE_NAMES = ("theme.toml", "theme.yaml", "theme.yml")
YAML_SUFFIXES = {".yaml", ".yml"}

COLOR_FIELDS = ("fg", "bg")
FLAG_FIELDS = ("inverted", "bold", "dimmed")


class ThemeConfigError(Exception):
    """A theme document could not be read or is malformed."""


class ThemeLoader(yaml.SafeLoader):
    """SafeLoader that keeps numbers as strings, so bare hex like 123456 stays a color token."""


ThemeLoader.yaml_implicit_resolvers = {
    first: [
        (tag, regexp)
        for tag, regexp in resolvers
        if tag not in ("tag:yaml.org,2002:int", "tag:yaml.org,2002:float")
    ]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def config_dir() -> Path:
    """Directory searched for theme files"""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / CONFIG_DIR_NAME


def _expand(raw: Path | str) -> Path:
    """Expand ~ in a path; an unknown ~user is left unexpanded."""
    path = Path(raw)
    try:
        return path.expanduser()
    except (RuntimeError, ValueError) as e:
        logger.warning(f"Cannot expand theme path {raw}: {e}")
        return path


def candidate_paths(explicit: Path | str | None = None) -> list[Path]:
    """Theme file locations in search order"""
    paths = []
    if explicit:
        paths.append(_expand(explicit))
    env_path = os.environ.get(THEME_ENV_VAR)
    if env_path:
        paths.append(_expand(env_path))
    directory = config_dir()
    paths.extend(directory / name for name in THEME_FILE_NAMES)
    return paths


def find_theme_file(explicit: Path | str | None = None) -> Path | None:
    """
    Locate the theme document.

    An explicit path is returned as given, even if it does not exist, so
    that loading it reports the problem instead of silently searching on.
    """
    if explicit:
        return _expand(explicit)
    for path in candidate_paths():
        if path.is_file():
            return path
    return None


def detect_format(path: Path) -> str:
    return "yaml" if path.suffix.lower() in YAML_SUFFIXES else "toml"


def _deserialize(text: str, fmt: str) -> Any:
    if fmt == "toml":
        try:
            return tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise ThemeConfigError(f"invalid TOML: {e}") from e
    if fmt == "yaml":
        try:
            return yaml.load(text, Loader=ThemeLoader) or {}
        except yaml.YAMLError as e:
            raise ThemeConfigError(f"invalid YAML: {e}") from e
    raise ThemeConfigError(f"unsupported theme format: {fmt}")


def _parse_spec(name: str, index: int, entry: Any) -> StyleSpec | None:
    if entry is None:
        return None
    where = f"themes.{name}[{index}]"
    if not isinstance(entry, Mapping):
        raise ThemeConfigError(f"{where}: expected a table, got {type(entry).__name__}")

    fields: dict[str, Any] = {}
    for key, value in entry.items():
        if key in COLOR_FIELDS:
            if not isinstance(value, str):
                raise ThemeConfigError(f"{where}.{key}: expected a color string")
        elif key in FLAG_FIELDS:
            if not isinstance(value, bool):
                raise ThemeConfigError(f"{where}.{key}: expected true or false")
        else:
            logger.debug(f"Ignoring unknown field {where}.{key}")
            continue
        fields[key] = value

    try:
        return StyleSpec.parse(**fields)
    except ColorParseError as e:
        raise ThemeConfigError(f"{where}: {e}") from e


def parse_theme_document(text: str, fmt: str = "toml") -> ThemeSource:
    """
    Deserialize a theme document into a theme source.

    Raises:
        ThemeConfigError: on any malformed content, including a single bad
            color token. Nothing is partially applied.
    """
    data = _deserialize(text, fmt)
    if not isinstance(data, Mapping):
        raise ThemeConfigError("theme document must be a table")
    themes = data.get("themes")
    if themes is None:
        raise ThemeConfigError("missing top-level 'themes' table")
    if not isinstance(themes, Mapping):
        raise ThemeConfigError("'themes' must be a table")

    source: dict[str, list[StyleSpec | None]] = {}
    for name, entries in themes.items():
        if entries is None:
            entries = []
        if not isinstance(entries, list):
            raise ThemeConfigError(f"themes.{name}: expected a list of styles")
        source[str(name)] = [_parse_spec(name, i, entry) for i, entry in enumerate(entries)]
    return source


def load_theme_file(path: Path | str) -> ResolvedTheme:
    """Read, deserialize and resolve a theme file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError, ValueError) as e:
        raise ThemeConfigError(f"cannot read {path}: {e}") from e

    source = parse_theme_document(text, detect_format(path))
    themes = resolve_themes(source)
    logger.info(f"Loaded {len(themes)} theme elements from {path}")
    return themes


def load_highlighter(
    path: Path | str | None = None,
    policy: ThemePolicy = ThemePolicy.BUILTIN,
    search: bool = True,
) -> Highlighter:
    """
    Build the process Highlighter.

    Args:
        path: Explicit theme file. Takes precedence over the search.
        policy: What to hold when no usable theme is found.
        search: Look in $JVIEW_THEME and the config dir when no path is given.

    A missing or broken theme never raises; the viewer stays usable with
    the policy's fallback.
    """
    theme_path = find_theme_file(path) if (path or search) else None
    if theme_path is None:
        logger.debug(f"No theme file found, using policy '{policy.value}'")
        return Highlighter(None, policy)

    try:
        themes = load_theme_file(theme_path)
    except ThemeConfigError as e:
        logger.warning(f"Ignoring theme file {theme_path}: {e}")
        return Highlighter(None, policy)
    return Highlighter(themes, policy)


def style_to_fields(style: Style) -> dict[str, Any]:
    """Non-default fields of a style, in document form"""
    fields: dict[str, Any] = {}
    for key in COLOR_FIELDS:
        color = getattr(style, key)
        if not color.is_default:
            fields[key] = str(color)
    for key in FLAG_FIELDS:
        if getattr(style, key):
            fields[key] = True
    return fields


def dump_theme_document(themes: ResolvedTheme) -> str:
    """Serialize a resolved theme as a YAML theme document."""
    document = {
        "themes": {
            name: [style_to_fields(style) for style in states.styles()]
            for name, states in sorted(themes.items())
        }
    }
    return yaml.safe_dump(document, sort_keys=False, default_flow_style=None)
