"""Copy static assets from the source tree into the output directory.

Top-level files whose names end with a configured suffix (``.js``, ``.css``,
``.html`` by default, excluding the root document) are copied as-is, and
top-level directories whose names contain a configured keyword (``js``,
``css``, ``html``) are copied recursively. Failures are logged and skipped so
one unreadable asset never aborts a build whose HTML has already been
written.
"""

from __future__ import annotations

import logging
import shutil
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import CompilerConfig

logger = logging.getLogger(__name__)


def copy_file(src: Path, dst: Path) -> Path | None:
    """Copy ``src`` to ``dst``, returning ``None`` and warning on failure."""
    try:
        shutil.copyfile(src, dst)
    except OSError as exc:
        logger.warning("could not copy '%s' to '%s': %s", src, dst, exc)
        return None
    return dst


def copy_directory(src: Path, dst: Path) -> list[Path]:
    """Recursively copy ``src`` into ``dst``, skipping entries that fail."""
    try:
        entries = sorted(src.iterdir())
        dst.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning("could not copy '%s' to '%s': %s", src, dst, exc)
        return []

    copied: list[Path] = []
    for entry in entries:
        target = dst / entry.name
        if entry.is_dir():
            copied.extend(copy_directory(entry, target))
        elif (result := copy_file(entry, target)) is not None:
            copied.append(result)
    return copied


def copy_static_assets(config: CompilerConfig) -> list[Path]:
    """Copy the configured assets and return every destination written.

    Parameters
    ----------
    config : CompilerConfig
        Supplies the source and output directories plus the suffix and
        keyword filters.

    Returns
    -------
    list[Path]
        Destination paths of files copied successfully, in sorted source order.
    """
    output_dir = config.output_path
    excluded = {
        config.index_path.resolve(),
        config.components_path.resolve(),
        output_dir.resolve(),
    }
    try:
        entries = sorted(config.source_dir.iterdir())
    except OSError as exc:
        logger.warning("could not list assets in '%s': %s", config.source_dir, exc)
        return []

    copied: list[Path] = []
    for entry in entries:
        if entry.resolve() in excluded:
            continue
        target = output_dir / entry.name
        if entry.is_dir():
            if any(keyword in entry.name for keyword in config.asset_dir_keywords):
                copied.extend(copy_directory(entry, target))
        elif entry.name.endswith(config.asset_suffixes):
            if (result := copy_file(entry, target)) is not None:
                copied.append(result)
    return copied


__all__ = ["copy_directory", "copy_file", "copy_static_assets"]
