"""Tests for config.py."""

from pathlib import Path

import pytest
from pytest import MonkeyPatch

from tagpin import ConfigError, InstallerConfig, load_config
from tagpin.config import DEFAULT_APP_NAME, detect_app_name


def test_default_paths(tmp_path: Path) -> None:
    """Test locations derived from the home directory."""
    config = InstallerConfig(home=tmp_path)
    assert config.app_name == DEFAULT_APP_NAME
    assert config.program_dir == tmp_path / "local/bin/ntsports/HoloMotion"
    assert config.startup_bin == tmp_path / "local/bin/HoloMotion"
    assert config.installer_bin == tmp_path / "local/bin/HoloMotion_Update"
    assert config.channel_file == config.program_dir / "branch.txt"
    assert config.git_url_file == config.program_dir / "git.txt"
    assert config.local_tag_limit == 100  # noqa: PLR2004


def test_explicit_dirs(tmp_path: Path) -> None:
    """Test overriding the install and bin directories."""
    config = InstallerConfig(
        app_name="Demo", install_root=tmp_path / "apps", bin_dir=tmp_path / "bin"
    )
    assert config.program_dir == tmp_path / "apps" / "Demo"
    assert config.installer_bin == tmp_path / "bin" / "Demo_Update"


@pytest.mark.parametrize("name", ["", "   ", "a/b", "a\\b"])
def test_invalid_app_name(name: str) -> None:
    """Test that app names must be plain directory names."""
    with pytest.raises(ValueError):
        InstallerConfig(app_name=name)


def test_config_is_frozen(tmp_path: Path) -> None:
    """Test that configs cannot be mutated."""
    config = InstallerConfig(home=tmp_path)
    with pytest.raises(ValueError):
        config.app_name = "Other"  # type: ignore[misc]


@pytest.mark.parametrize(
    ("dirname", "expected"),
    [("HoloMotion", "HoloMotion"), ("HoloMotion_Test", "HoloMotion_Test"), ("x", None)],
)
def test_detect_app_name(tmp_path: Path, dirname: str, expected: str | None) -> None:
    """Test deriving the app name from a directory name."""
    assert detect_app_name(tmp_path / dirname) == expected


def test_load_config_from_tagpin_toml(tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    """Test reading tagpin.toml from the current directory."""
    (tmp_path / "tagpin.toml").write_text(
        f"""
[tagpin]
app_name = "Demo"
home = "{tmp_path}"
git_url = "https://example.com/demo.git"
local_tag_limit = 10
"""
    )
    monkeypatch.chdir(tmp_path)

    config = load_config()
    assert config.app_name == "Demo"
    assert config.home == tmp_path
    assert config.git_url == "https://example.com/demo.git"
    assert config.local_tag_limit == 10  # noqa: PLR2004


def test_load_config_from_pyproject(tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    """Test reading the [tool.tagpin] table."""
    (tmp_path / "pyproject.toml").write_text(
        """
[tool.tagpin]
app_name = "FromPyproject"
"""
    )
    monkeypatch.chdir(tmp_path)
    assert load_config().app_name == "FromPyproject"


def test_load_config_overrides(tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    """Test that overrides win and None overrides are ignored."""
    path = tmp_path / "custom.toml"
    path.write_text('[tagpin]\napp_name = "Demo"\ngit_url = "https://a/b"\n')
    monkeypatch.chdir(tmp_path)

    config = load_config(path, app_name="Other", git_url=None)
    assert config.app_name == "Other"
    assert config.git_url == "https://a/b"


def test_load_config_detects_app_name(
    tmp_path: Path, monkeypatch: MonkeyPatch
) -> None:
    """Test that the working directory name is used when nothing is set."""
    workdir = tmp_path / "HoloMotion_Test"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    assert load_config().app_name == "HoloMotion_Test"


def test_load_config_missing_file(tmp_path: Path) -> None:
    """Test an explicit config file that does not exist."""
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "missing.toml")


def test_load_config_invalid_toml(tmp_path: Path) -> None:
    """Test a config file with a syntax error."""
    path = tmp_path / "tagpin.toml"
    path.write_text("[tagpin\n")
    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(path)


def test_load_config_invalid_values(tmp_path: Path) -> None:
    """Test that validation errors become ConfigError."""
    path = tmp_path / "tagpin.toml"
    path.write_text("[tagpin]\nlocal_tag_limit = 0\nunknown = 1\n")
    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_config(path)
