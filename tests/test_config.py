import textwrap
from pathlib import Path

import pytest

from mdpanel.config import CONFIG_ENV, Settings, load_settings, settings_path
from mdpanel.errors import ConfigError, MdPanelUserError
from tests.infrastructure import write


def test_defaults_without_file(tmp_path: Path):
    s = load_settings()
    assert s == Settings()
    assert s.rendering_engine == "memory"
    assert s.include_max_depth == 16
    assert s.extension_list == ["md", "mkd", "mdwn", "mdown", "mdtxt", "markdown", "txt"]


def test_load_from_working_directory(tmp_path: Path):
    write(tmp_path / "mdpanel.yaml", textwrap.dedent("""
        supported_extensions: [md, .MARKDOWN]
        dark_mode: true
        zoom_level: 125
        rendering_engine: file
        include_max_depth: 4
        html_file: out.html
    """))
    s = load_settings()
    assert s.extension_list == ["md", "markdown"]
    assert s.dark_mode is True
    assert s.zoom_level == 125
    assert s.rendering_engine == "file"
    assert s.include_max_depth == 4
    assert s.html_file == "out.html"


def test_env_variable_points_to_file(tmp_path: Path, monkeypatch):
    cfg = write(tmp_path / "conf" / "panel.yaml", "zoom_level: 90\n")
    monkeypatch.setenv(CONFIG_ENV, str(cfg))
    assert settings_path() == cfg
    assert load_settings().zoom_level == 90


def test_explicit_path_wins_over_env(tmp_path: Path, monkeypatch):
    monkeypatch.setenv(CONFIG_ENV, str(tmp_path / "env.yaml"))
    cfg = write(tmp_path / "explicit.yaml", "dark_mode: true\n")
    assert load_settings(cfg).dark_mode is True


def test_missing_explicit_file_is_an_error(tmp_path: Path):
    with pytest.raises(ConfigError, match="Config file not found"):
        load_settings(tmp_path / "nope.yaml")


def test_empty_file_gives_defaults(tmp_path: Path):
    cfg = write(tmp_path / "mdpanel.yaml", "")
    assert load_settings(cfg) == Settings()


@pytest.mark.parametrize("yaml_text, message", [
    ("colour: red\n", "unknown key(s): colour"),
    ("rendering_engine: webkit\n", "rendering_engine must be one of memory|file"),
    ("zoom_level: 0\n", "zoom_level must be positive"),
    ("zoom_level: big\n", "zoom_level must be an integer"),
    ("dark_mode: yes please\n", "dark_mode must be a boolean"),
    ("include_max_depth: -1\n", "include_max_depth must be >= 0"),
    ("css_file: 12\n", "css_file must be a string"),
    ("supported_extensions: 5\n", "supported_extensions must be a string or a list"),
    ("- a\n- b\n", "YAML must be a mapping"),
    ("key: [unclosed\n", "invalid YAML"),
])
def test_invalid_settings(tmp_path: Path, yaml_text, message):
    cfg = write(tmp_path / "mdpanel.yaml", yaml_text)
    with pytest.raises(ConfigError) as ei:
        load_settings(cfg)
    assert message in str(ei.value)
    assert str(cfg) in str(ei.value)
    assert isinstance(ei.value, MdPanelUserError)


@pytest.mark.parametrize("name, ok", [
    ("a.md", True),
    ("a.MD", True),
    ("a.markdown", True),
    ("notes.txt", True),
    ("a.rst", False),
    ("README", False),
    (None, False),
])
def test_is_valid_extension(name, ok):
    assert Settings().is_valid_extension(name) is ok


def test_allow_all_extensions():
    assert Settings(allow_all_extensions=True).is_valid_extension("a.rst")
