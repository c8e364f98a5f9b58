"""Tests for theme file location and loading."""

import logging

import pytest

from jview.config import (
    THEME_ENV_VAR,
    ThemeConfigError,
    candidate_paths,
    config_dir,
    detect_format,
    dump_theme_document,
    find_theme_file,
    load_highlighter,
    load_theme_file,
    parse_theme_document,
)
from jview.ui.color import Color, InvalidHexColor
from jview.ui.highlighter import ThemePolicy
from jview.ui.theme import NEUTRAL_STATES, NEUTRAL_STYLE, Style, builtin_themes

TOML_THEME = """
[themes]
string = [{ fg = "C16(2)" }, {}, { fg = "#00ff00", inverted = true }]
null = [{ dimmed = true }]
object_label = []
"""

YAML_THEME = """
themes:
  string:
    - fg: C16(2)
    - null
    - {fg: "#00ff00", inverted: true}
  "null":
    - dimmed: true
  object_label: []
"""


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Point the search at an empty config dir."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv(THEME_ENV_VAR, raising=False)
    return tmp_path


class TestParseThemeDocument:
    def test_toml(self):
        source = parse_theme_document(TOML_THEME, "toml")
        assert set(source) == {"string", "null", "object_label"}
        assert len(source["string"]) == 3
        assert source["string"][0].fg == Color.indexed(2)
        assert source["string"][1].fg is None
        assert source["object_label"] == []

    def test_yaml_null_entries(self):
        source = parse_theme_document(YAML_THEME, "yaml")
        assert source["string"][1] is None
        assert source["string"][2].inverted is True

    def test_toml_and_yaml_resolve_alike(self):
        from jview.ui.theme import resolve_themes

        toml_themes = resolve_themes(parse_theme_document(TOML_THEME, "toml"))
        yaml_themes = resolve_themes(parse_theme_document(YAML_THEME, "yaml"))
        assert dict(toml_themes) == dict(yaml_themes)

    def test_bad_color_fails_whole_document(self):
        text = '[themes]\nstring = [{ fg = "C16(2)" }]\nnull = [{ fg = "zzzzzz" }]\n'
        with pytest.raises(ThemeConfigError) as exc:
            parse_theme_document(text)
        assert "themes.null[0]" in str(exc.value)
        assert "Invalid hex color: zzzzzz" in str(exc.value)
        assert isinstance(exc.value.__cause__, InvalidHexColor)

    def test_missing_themes_table(self):
        with pytest.raises(ThemeConfigError, match="themes"):
            parse_theme_document('title = "x"\n')

    def test_empty_yaml(self):
        with pytest.raises(ThemeConfigError):
            parse_theme_document("", "yaml")

    def test_malformed_toml(self):
        with pytest.raises(ThemeConfigError, match="invalid TOML"):
            parse_theme_document("[themes\nstring = ")

    def test_malformed_yaml(self):
        with pytest.raises(ThemeConfigError, match="invalid YAML"):
            parse_theme_document("themes: [unclosed", "yaml")

    @pytest.mark.parametrize(
        "text",
        [
            "themes = 3\n",
            '[themes]\nstring = "C16(2)"\n',
            "[themes]\nstring = [1]\n",
            "[themes]\nstring = [{ fg = 1 }]\n",
            '[themes]\nstring = [{ bold = "yes" }]\n',
        ],
    )
    def test_wrong_types(self, text):
        with pytest.raises(ThemeConfigError):
            parse_theme_document(text)

    def test_unknown_fields_ignored(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="jview.config"):
            source = parse_theme_document('[themes]\nstring = [{ italic = true, bold = true }]\n')
        assert source["string"][0].bold is True
        assert "themes.string[0].italic" in caplog.text

    @pytest.mark.parametrize("token,value", [("123456", 0x123456), ("001100", 0x001100), ("100e10", 0x100E10)])
    def test_yaml_all_digit_hex(self, token, value):
        source = parse_theme_document(f"themes:\n  string:\n    - fg: {token}\n      bg: \"#000000\"\n", "yaml")
        assert source["string"][0].fg == Color.rgb(value)

    def test_yaml_flags_still_booleans(self):
        source = parse_theme_document("themes:\n  string:\n    - {fg: 123456, bold: true}\n", "yaml")
        assert source["string"][0].bold is True

    def test_yaml_numeric_flag_rejected(self):
        with pytest.raises(ThemeConfigError, match="expected true or false"):
            parse_theme_document("themes:\n  string:\n    - {bold: 1}\n", "yaml")

    def test_unsupported_format(self):
        with pytest.raises(ThemeConfigError):
            parse_theme_document(TOML_THEME, "json")


class TestLoadThemeFile:
    def test_load_toml(self, tmp_path):
        path = tmp_path / "theme.toml"
        path.write_text(TOML_THEME, encoding="utf-8")
        themes = load_theme_file(path)
        assert themes["string"].unfocused == Style(fg=Color.indexed(2))
        assert themes["string"].unfocused_matched == NEUTRAL_STYLE
        assert themes["null"].unfocused == Style(dimmed=True)
        assert themes["object_label"] == NEUTRAL_STATES

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "theme.yml"
        path.write_text(YAML_THEME, encoding="utf-8")
        themes = load_theme_file(path)
        assert themes["string"].focused == Style(fg=Color.rgb(0x00FF00), inverted=True)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ThemeConfigError, match="cannot read"):
            load_theme_file(tmp_path / "nope.toml")

    def test_detect_format(self, tmp_path):
        assert detect_format(tmp_path / "a.yaml") == "yaml"
        assert detect_format(tmp_path / "a.YML") == "yaml"
        assert detect_format(tmp_path / "a.toml") == "toml"
        assert detect_format(tmp_path / "theme") == "toml"


class TestFindThemeFile:
    def test_nothing_found(self, isolated_env):
        assert find_theme_file() is None

    def test_config_dir_default(self, monkeypatch, tmp_path):
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert config_dir() == tmp_path / ".config" / "jview"

    def test_xdg_dir(self, isolated_env):
        directory = config_dir()
        directory.mkdir(parents=True)
        (directory / "theme.yaml").write_text(YAML_THEME, encoding="utf-8")
        assert find_theme_file() == directory / "theme.yaml"

    def test_toml_preferred_over_yaml(self, isolated_env):
        directory = config_dir()
        directory.mkdir(parents=True)
        (directory / "theme.yaml").write_text(YAML_THEME, encoding="utf-8")
        (directory / "theme.toml").write_text(TOML_THEME, encoding="utf-8")
        assert find_theme_file() == directory / "theme.toml"

    def test_env_var_before_config_dir(self, isolated_env, monkeypatch):
        directory = config_dir()
        directory.mkdir(parents=True)
        (directory / "theme.toml").write_text(TOML_THEME, encoding="utf-8")
        custom = isolated_env / "custom.toml"
        custom.write_text(TOML_THEME, encoding="utf-8")
        monkeypatch.setenv(THEME_ENV_VAR, str(custom))
        assert find_theme_file() == custom

    def test_explicit_returned_even_if_missing(self, isolated_env):
        missing = isolated_env / "missing.toml"
        assert find_theme_file(missing) == missing

    def test_candidate_order(self, isolated_env, monkeypatch):
        monkeypatch.setenv(THEME_ENV_VAR, str(isolated_env / "env.toml"))
        paths = candidate_paths(isolated_env / "explicit.toml")
        assert paths[0] == isolated_env / "explicit.toml"
        assert paths[1] == isolated_env / "env.toml"
        assert [p.name for p in paths[2:]] == ["theme.toml", "theme.yaml", "theme.yml"]


class TestLoadHighlighter:
    def test_no_file_builtin_policy(self, isolated_env):
        highlighter = load_highlighter()
        assert highlighter.is_themed
        assert dict(highlighter.themes) == dict(builtin_themes())

    def test_no_file_unthemed_policy(self, isolated_env):
        highlighter = load_highlighter(policy=ThemePolicy.UNTHEMED)
        assert not highlighter.is_themed
        assert highlighter.style("string") == NEUTRAL_STATES

    def test_user_theme_replaces_builtin(self, isolated_env):
        path = isolated_env / "theme.toml"
        path.write_text(TOML_THEME, encoding="utf-8")
        highlighter = load_highlighter(path)
        assert highlighter.element_names() == ["null", "object_label", "string"]
        assert highlighter.style("number") == NEUTRAL_STATES

    def test_broken_theme_falls_back(self, isolated_env, caplog):
        path = isolated_env / "theme.toml"
        path.write_text('[themes]\nstring = [{ fg = "magenta" }]\n', encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="jview.config"):
            highlighter = load_highlighter(path, policy=ThemePolicy.BUILTIN)
        assert dict(highlighter.themes) == dict(builtin_themes())
        assert "Unknown color format: magenta" in caplog.text

    def test_broken_theme_unthemed(self, isolated_env):
        path = isolated_env / "theme.toml"
        path.write_text("not toml at all [", encoding="utf-8")
        highlighter = load_highlighter(path, policy=ThemePolicy.UNTHEMED)
        assert not highlighter.is_themed

    def test_missing_explicit_path_falls_back(self, isolated_env):
        highlighter = load_highlighter(isolated_env / "missing.toml", policy=ThemePolicy.UNTHEMED)
        assert not highlighter.is_themed

    def test_search_disabled(self, isolated_env, monkeypatch):
        custom = isolated_env / "custom.toml"
        custom.write_text(TOML_THEME, encoding="utf-8")
        monkeypatch.setenv(THEME_ENV_VAR, str(custom))
        highlighter = load_highlighter(policy=ThemePolicy.UNTHEMED, search=False)
        assert not highlighter.is_themed

    def test_env_theme_is_loaded(self, isolated_env, monkeypatch):
        custom = isolated_env / "custom.yaml"
        custom.write_text(YAML_THEME, encoding="utf-8")
        monkeypatch.setenv(THEME_ENV_VAR, str(custom))
        highlighter = load_highlighter()
        assert highlighter.style("null").unfocused == Style(dimmed=True)

    def test_unknown_home_in_env_path_falls_back(self, isolated_env, monkeypatch):
        monkeypatch.setenv(THEME_ENV_VAR, "~jview_no_such_user/theme.toml")
        highlighter = load_highlighter()
        assert dict(highlighter.themes) == dict(builtin_themes())

    def test_unknown_home_in_explicit_path_falls_back(self, isolated_env):
        highlighter = load_highlighter("~jview_no_such_user/theme.toml", policy=ThemePolicy.UNTHEMED)
        assert not highlighter.is_themed

    def test_nul_in_path_falls_back(self, isolated_env):
        highlighter = load_highlighter("bad\0name.toml", policy=ThemePolicy.UNTHEMED)
        assert not highlighter.is_themed

    def test_nul_in_path_is_config_error(self):
        with pytest.raises(ThemeConfigError, match="cannot read"):
            load_theme_file("bad\0name.toml")


class TestDumpThemeDocument:
    def test_builtin_survives_dump_and_reload(self, tmp_path):
        path = tmp_path / "theme.yaml"
        path.write_text(dump_theme_document(builtin_themes()), encoding="utf-8")
        assert dict(load_theme_file(path)) == dict(builtin_themes())

    def test_neutral_styles_dump_empty(self):
        text = dump_theme_document({"string": NEUTRAL_STATES})
        assert "string" in text
        assert "fg" not in text
