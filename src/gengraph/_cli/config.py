"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path


class ConfigError(Exception):
    """Error in gengraph configuration."""


@dataclass(slots=True, frozen=True)
class GengraphConfig:
    """Configuration loaded from the ``[tool.gengraph]`` table of pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    input: Path | None = None
    max_sort_steps: int | None = None
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def load_config(pyproject_path: Path) -> GengraphConfig:
    """Load and validate [tool.gengraph] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed GengraphConfig

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

    section = data.get("tool", {}).get("gengraph", {})
    if not isinstance(section, dict):
        msg = "Invalid [tool.gengraph]: expected a table"
        raise ConfigError(msg)

    input_path: Path | None = None
    if "input" in section:
        input_value = section["input"]
        if not isinstance(input_value, str):
            msg = "Invalid [tool.gengraph].input: expected string path"
            raise ConfigError(msg)
        input_path = Path(input_value)
        if not input_path.is_absolute():
            input_path = project_root / input_path

    max_sort_steps: int | None = None
    if "max_sort_steps" in section:
        steps_value = section["max_sort_steps"]
        # bool is an int subclass
        if isinstance(steps_value, bool) or not isinstance(steps_value, int) or steps_value < 1:
            msg = "Invalid [tool.gengraph].max_sort_steps: expected a positive integer"
            raise ConfigError(msg)
        max_sort_steps = steps_value

    return GengraphConfig(
        input=input_path,
        max_sort_steps=max_sort_steps,
        project_root=project_root,
    )


def get_config() -> GengraphConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        GengraphConfig (may be empty if no pyproject.toml or no [tool.gengraph] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return GengraphConfig()
    return load_config(pyproject_path)
