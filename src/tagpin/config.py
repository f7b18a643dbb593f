"""Installer configuration."""

import tomllib
from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigError

DEFAULT_APP_NAME = "HoloMotion"
CONFIG_FILENAME = "tagpin.toml"
PYPROJECT_FILENAME = "pyproject.toml"


class InstallerConfig(BaseModel):
    """Locations and defaults for one installed application.

    Attributes:
        app_name: Name of the application and of its program directory.
        home: Base for the default install and bin directories.
        install_root: Directory that holds program directories.
        bin_dir: Directory holding the launcher links.
        git_url: Repository URL supplied by configuration or command line.
        local_tag_limit: Number of local tags considered when resolving.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    app_name: str = DEFAULT_APP_NAME
    home: Path = Field(default_factory=Path.home)
    install_root: Path | None = None
    bin_dir: Path | None = None
    git_url: str | None = None
    local_tag_limit: int = Field(default=100, gt=0)

    @field_validator("app_name")
    @classmethod
    def check_app_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("app_name must not be empty")
        if "/" in value or "\\" in value:
            raise ValueError("app_name must not contain path separators")
        return value

    @property
    def root(self: Self) -> Path:
        """Directory that holds program directories."""
        return self.install_root or self.home / "local" / "bin" / "ntsports"

    @property
    def bin(self: Self) -> Path:
        """Directory holding the launcher links."""
        return self.bin_dir or self.home / "local" / "bin"

    @property
    def program_dir(self: Self) -> Path:
        """Git working tree of the application."""
        return self.root / self.app_name

    @property
    def startup_bin(self: Self) -> Path:
        """Launcher link for the application."""
        return self.bin / self.app_name

    @property
    def installer_bin(self: Self) -> Path:
        """Launcher link for the application's updater."""
        return self.bin / f"{self.app_name}_Update"

    @property
    def channel_file(self: Self) -> Path:
        """Marker file recording the installed channel."""
        return self.program_dir / "branch.txt"

    @property
    def git_url_file(self: Self) -> Path:
        """File recording the repository URL."""
        return self.program_dir / "git.txt"


def detect_app_name(cwd: Path | None = None) -> str | None:
    """Use the working directory's name as app name if it looks like one.

    Args:
        cwd: Directory to inspect. Defaults to the current directory.

    Returns:
        The directory name if it starts with the default app name.
    """
    name = (cwd or Path.cwd()).name
    if name.startswith(DEFAULT_APP_NAME):
        return name
    return None


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e


def _find_section(path: Path | None) -> dict[str, Any]:
    if path is not None:
        data = _read_toml(path)
        if path.name == PYPROJECT_FILENAME:
            return dict(data.get("tool", {}).get("tagpin", {}))
        return dict(data.get("tagpin", {}))

    local = Path.cwd() / CONFIG_FILENAME
    if local.is_file():
        return dict(_read_toml(local).get("tagpin", {}))

    pyproject = Path.cwd() / PYPROJECT_FILENAME
    if pyproject.is_file():
        return dict(_read_toml(pyproject).get("tool", {}).get("tagpin", {}))

    return {}


def load_config(path: Path | None = None, **overrides: Any) -> InstallerConfig:
    """Load configuration from TOML and apply overrides.

    Without ``path``, ``tagpin.toml`` in the current directory is read if
    present, then the ``[tool.tagpin]`` table of ``pyproject.toml``.
    Overrides whose value is None are ignored. Without an explicit app name,
    the current directory's name is used when ``detect_app_name`` accepts it.

    Args:
        path: Explicit config file.
        **overrides: Field values taking precedence over the file.

    Returns:
        Validated configuration.

    Raises:
        ConfigError: If the file cannot be read or the values are invalid.

    Example:
        >>> config = load_config(app_name="HoloMotion_Test")
        >>> config.program_dir.name
        'HoloMotion_Test'
    """
    values = _find_section(path)
    values.update({k: v for k, v in overrides.items() if v is not None})
    if "app_name" not in values:
        detected = detect_app_name()
        if detected is not None:
            values["app_name"] = detected

    try:
        return InstallerConfig.model_validate(values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
