"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from storydag._render import RANKDIRS


class ConfigError(Exception):
    """Error in storydag configuration."""


@dataclass(slots=True, frozen=True)
class StorydagConfig:
    """Configuration loaded from the [tool.storydag] table of pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    Unset fields fall back to the CLI defaults.
    """

    input: Path | None = None
    output: Path | None = None
    rankdir: str | None = None
    labels: bool | None = None
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    current = (start_dir or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def _parse_path(section: dict[str, object], key: str, project_root: Path) -> Path | None:
    if key not in section:
        return None
    value = section[key]
    if not isinstance(value, str):
        msg = f"Invalid [tool.storydag].{key}: expected string path"
        raise ConfigError(msg)
    path = Path(value)
    if not path.is_absolute():
        path = project_root / path
    return path


def load_config(pyproject_path: Path) -> StorydagConfig:
    """Load and validate [tool.storydag] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed StorydagConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("storydag", {})
    if not section:
        return StorydagConfig(project_root=project_root)

    rankdir = section.get("rankdir")
    if rankdir is not None and rankdir not in RANKDIRS:
        msg = f"Invalid [tool.storydag].rankdir: expected one of {', '.join(RANKDIRS)}"
        raise ConfigError(msg)

    labels = section.get("labels")
    if labels is not None and not isinstance(labels, bool):
        msg = "Invalid [tool.storydag].labels: expected boolean"
        raise ConfigError(msg)

    return StorydagConfig(
        input=_parse_path(section, "input", project_root),
        output=_parse_path(section, "output", project_root),
        rankdir=rankdir,
        labels=labels,
        project_root=project_root,
    )


def get_config() -> StorydagConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        StorydagConfig (may be empty if no pyproject.toml or no [tool.storydag] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return StorydagConfig()
    return load_config(pyproject_path)
