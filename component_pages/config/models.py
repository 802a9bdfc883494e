"""Typed dataclasses describing compiler configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from .._constants import (
    COMPONENTS_DIRNAME,
    DEFAULT_OUTPUT_DIRNAME,
    INDEX_FILENAME,
)

DEFAULT_ASSET_SUFFIXES = (".js", ".css", ".html")
DEFAULT_ASSET_DIR_KEYWORDS = ("js", "css", "html")


@dc.dataclass(slots=True)
class CompilerConfig:
    """Inputs and outputs for a single compilation.

    Attributes
    ----------
    source_dir : Path
        Directory containing the root document and the component directory.
    output_dir : Path
        Directory receiving the prettified root document and copied assets.
    components_dir : str
        Name of the fragment directory inside ``source_dir``.
    index_file : str
        File name of the root document inside ``source_dir``.
    asset_suffixes : tuple[str, ...]
        Top-level files ending with one of these suffixes are copied.
    asset_dir_keywords : tuple[str, ...]
        Top-level directories whose name contains one of these keywords are
        copied recursively.
    """

    source_dir: Path = dc.field(default_factory=lambda: Path("."))
    output_dir: Path | None = None
    components_dir: str = COMPONENTS_DIRNAME
    index_file: str = INDEX_FILENAME
    asset_suffixes: tuple[str, ...] = DEFAULT_ASSET_SUFFIXES
    asset_dir_keywords: tuple[str, ...] = DEFAULT_ASSET_DIR_KEYWORDS

    def __post_init__(self) -> None:
        if self.output_dir is None:
            self.output_dir = self.source_dir / DEFAULT_OUTPUT_DIRNAME

    @property
    def components_path(self) -> Path:
        return self.source_dir / self.components_dir

    @property
    def index_path(self) -> Path:
        return self.source_dir / self.index_file

    @property
    def output_path(self) -> Path:
        """Resolved output directory; never ``None`` after initialization."""
        assert self.output_dir is not None  # noqa: S101 - set in __post_init__
        return self.output_dir


__all__ = ["DEFAULT_ASSET_DIR_KEYWORDS", "DEFAULT_ASSET_SUFFIXES", "CompilerConfig"]
