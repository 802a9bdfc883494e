"""High-level orchestration for compiling a component site.

:class:`SiteCompiler` turns a source directory holding ``index.html`` and a
``components/`` directory of fragments into a prettified ``index.html`` in the
output directory. Dependency validation runs first and fails closed, so a
site with circular references never produces output. Expansion uses a fresh
:class:`~component_pages.expander.ComponentExpander` per run, so nothing is
cached between compilations.

:func:`prettify_file` implements the prettify-only mode, re-indenting an
arbitrary HTML file without expanding components.

Example
-------
>>> from pathlib import Path
>>> from component_pages.compiler import SiteCompiler
>>> from component_pages.config import load_compiler_config
>>> config = load_compiler_config(source_dir=Path("site"))  # doctest: +SKIP
>>> SiteCompiler(config).run()  # doctest: +SKIP
PosixPath('site/output/index.html')
"""

from __future__ import annotations

import logging
import typing as typ

from .assets import copy_static_assets
from .errors import SourceDocumentError
from .expander import ComponentExpander, strip_comments
from .graph import validate_components
from .prettify import read_chunks, write_prettified

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import CompilerConfig

logger = logging.getLogger(__name__)


class SiteCompiler:
    """Validate, expand, prettify, and publish one component site."""

    def __init__(self, config: CompilerConfig) -> None:
        self.config = config

    def run(self) -> Path:
        """Compile the site and return the path of the written index.

        Returns
        -------
        Path
            Location of the prettified root document in the output directory.

        Raises
        ------
        SourceDocumentError
            If the root document cannot be read.
        ComponentDirectoryError
            If the component directory or a fragment cannot be read.
        CircularDependencyError
            If any component transitively references itself.
        PrettifyError
            If the expanded markup cannot be tokenized or written.

        Notes
        -----
        Static assets are copied after the index is written; copy failures
        are logged and do not fail the run.
        """
        logger.info("Compiling '%s'...", self.config.source_dir)
        source = self._read_index()
        validate_components(self.config.components_path)

        expander = ComponentExpander(self.config.components_path)
        expanded = expander.expand_document(
            strip_comments(source), source=self.config.index_file
        )
        output_path = write_prettified(
            [expanded], self.config.output_path / self.config.index_file
        )
        logger.info("wrote %s", output_path)

        copied = copy_static_assets(self.config)
        logger.info("copied %d static asset(s)", len(copied))
        logger.info("Done!")
        return output_path

    def _read_index(self) -> str:
        path = self.config.index_path
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SourceDocumentError(path, str(exc)) from exc


def prettify_file(path: Path, output_dir: Path) -> Path:
    """Re-indent ``path`` into ``output_dir`` under the same file name.

    Raises
    ------
    SourceDocumentError
        If ``path`` cannot be opened.
    PrettifyError
        If tokenizing or writing the output fails.
    """
    logger.info("Prettifying '%s' to output directory '%s'", path, output_dir)
    try:
        handle = path.open("r", encoding="utf-8")
    except OSError as exc:
        raise SourceDocumentError(path, str(exc)) from exc
    with handle:
        written = write_prettified(read_chunks(handle), output_dir / path.name)
    logger.info("wrote %s", written)
    return written


__all__ = ["SiteCompiler", "prettify_file"]
