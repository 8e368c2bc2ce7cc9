"""Configuration loading from pyproject.toml."""

import importlib
import sys
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from dataexpr._packs import PACKS
from dataexpr._types import Pack


class ConfigError(Exception):
    """Error in dataexpr configuration."""


class ToolSection(BaseModel):
    """Schema of the ``[tool.dataexpr]`` table."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    packs: tuple[str, ...] = ()
    include_base: bool = True
    exclude: tuple[str, ...] = ()

    @field_validator("packs")
    @classmethod
    def _check_pack_references(cls, packs: tuple[str, ...]) -> tuple[str, ...]:
        for reference in packs:
            if reference.lower() not in PACKS and ":" not in reference:
                msg = (
                    f"Unknown pack '{reference}'. "
                    f"Expected one of {', '.join(sorted(PACKS))} or 'module.path:attribute'"
                )
                raise ValueError(msg)
        return packs


@dataclass(slots=True, frozen=True)
class DataExprConfig:
    """Configuration loaded from pyproject.toml.

    ``project_root`` is the directory containing pyproject.toml, or None when
    no file was found.
    """

    packs: tuple[str, ...] = ()
    include_base: bool = True
    exclude: tuple[str, ...] = ()
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


def load_config(pyproject_path: Path) -> DataExprConfig:
    """Load and validate [tool.dataexpr] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed DataExprConfig

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

    section = data.get("tool", {}).get("dataexpr", {})
    if not isinstance(section, Mapping):
        msg = "Invalid [tool.dataexpr] configuration. Expected a table."
        raise ConfigError(msg)

    try:
        tool = ToolSection.model_validate(section)
    except ValidationError as e:
        msg = f"Invalid [tool.dataexpr] configuration in {pyproject_path}:\n{e}"
        raise ConfigError(msg) from e

    return DataExprConfig(
        packs=tool.packs,
        include_base=tool.include_base,
        exclude=tool.exclude,
        project_root=project_root,
    )


def get_config() -> DataExprConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        DataExprConfig (may be empty if no pyproject.toml or no [tool.dataexpr] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return DataExprConfig()
    return load_config(pyproject_path)


def resolve_pack(reference: str, search_path: Path | None = None) -> Pack:
    """Resolve a pack reference to a pack.

    Args:
        reference: A registry name such as ``"math"`` (case-insensitive), or a
            module path in format ``"module.path:attribute"``.
        search_path: Directory added to ``sys.path`` before importing a
            module path, typically the project root.

    Returns:
        The referenced pack.

    Raises:
        ConfigError: If the reference cannot be resolved to a mapping.

    """
    if reference.lower() in PACKS:
        return PACKS[reference.lower()]

    if ":" not in reference:
        msg = f"Unknown pack '{reference}'. Expected one of {', '.join(sorted(PACKS))} or 'module.path:attribute'"
        raise ConfigError(msg)

    module_name, attribute = reference.split(":", 1)
    if search_path is not None and str(search_path) not in sys.path:
        sys.path.insert(0, str(search_path))
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        msg = f"Could not import module '{module_name}' for pack '{reference}'"
        raise ConfigError(msg) from e

    pack = getattr(module, attribute, None)
    if not isinstance(pack, Mapping):
        msg = f"'{attribute}' in module '{module_name}' is not a pack"
        raise ConfigError(msg)
    return pack
