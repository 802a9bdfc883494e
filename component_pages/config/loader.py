"""Load compiler configuration YAML into a :class:`CompilerConfig`."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .._constants import (
    COMPONENTS_DIRNAME,
    DEFAULT_CONFIG_FILENAME,
    DEFAULT_OUTPUT_DIRNAME,
    INDEX_FILENAME,
)
from ..errors import ConfigError
from .models import (
    DEFAULT_ASSET_DIR_KEYWORDS,
    DEFAULT_ASSET_SUFFIXES,
    CompilerConfig,
)


def load_compiler_config(
    path: Path | None = None,
    *,
    source_dir: Path | None = None,
    output_dir: Path | None = None,
) -> CompilerConfig:
    """Build the configuration for a compilation run.

    Parameters
    ----------
    path : Path, optional
        Explicit configuration file. When ``None``, ``components.yaml`` inside
        the source directory is used if it exists; otherwise defaults apply.
    source_dir : Path, optional
        Overrides ``source_dir`` from the file (CLI flags win).
    output_dir : Path, optional
        Overrides ``output_dir`` from the file (CLI flags win).

    Returns
    -------
    CompilerConfig
        Configuration with defaults, file values, and overrides merged.

    Raises
    ------
    FileNotFoundError
        If an explicit ``path`` does not exist.
    ConfigError
        If the file is not a mapping or a field has the wrong type.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from component_pages.config import load_compiler_config
    >>> config = load_compiler_config(source_dir=Path("site"))  # doctest: +SKIP
    >>> config.components_path  # doctest: +SKIP
    PosixPath('site/components')
    """
    if path is None:
        candidate = (source_dir or Path(".")) / DEFAULT_CONFIG_FILENAME
        path = candidate if candidate.is_file() else None
    elif not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    raw = _read_yaml(path) if path is not None else {}
    base_dir = path.parent if path is not None else Path(".")

    resolved_source = source_dir or _resolve_path(raw.get("source_dir"), base_dir) or Path(".")
    resolved_output = (
        output_dir
        or _resolve_path(raw.get("output_dir"), base_dir)
        or resolved_source / DEFAULT_OUTPUT_DIRNAME
    )

    return CompilerConfig(
        source_dir=resolved_source,
        output_dir=resolved_output,
        components_dir=_string_field(raw, "components_dir", COMPONENTS_DIRNAME),
        index_file=_string_field(raw, "index_file", INDEX_FILENAME),
        asset_suffixes=_string_list(raw, "asset_suffixes", DEFAULT_ASSET_SUFFIXES),
        asset_dir_keywords=_string_list(
            raw, "asset_dir_keywords", DEFAULT_ASSET_DIR_KEYWORDS
        ),
    )


def _read_yaml(path: Path) -> dict[str, typ.Any]:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = f"Top-level YAML structure in '{path}' must be a mapping."
        raise ConfigError(msg)
    return dict(loaded)


def _resolve_path(value: object, base_dir: Path) -> Path | None:
    match value:
        case None:
            return None
        case str() if value.strip():
            candidate = Path(value)
            return candidate if candidate.is_absolute() else base_dir / candidate
        case _:
            msg = f"Expected a non-empty path string, got {value!r}."
            raise ConfigError(msg)


def _string_field(raw: typ.Mapping[str, typ.Any], key: str, default: str) -> str:
    value = raw.get(key, default)
    if not isinstance(value, str) or not value.strip():
        msg = f"'{key}' must be a non-empty string."
        raise ConfigError(msg)
    return value


def _string_list(
    raw: typ.Mapping[str, typ.Any], key: str, default: tuple[str, ...]
) -> tuple[str, ...]:
    value = raw.get(key)
    if value is None:
        return default
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        msg = f"'{key}' must be a list of strings."
        raise ConfigError(msg)
    return tuple(value)


__all__ = ["load_compiler_config"]
