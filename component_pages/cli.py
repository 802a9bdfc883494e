"""Cyclopts CLI entrypoint for compiling and prettifying component sites.

The ``components`` console script defined here expands ``<app-NAME/>``
references in a site's ``index.html`` using the fragments in its
``components/`` directory, re-indents the result into the output directory,
and copies static assets alongside it. ``components prettify`` re-indents a
single HTML file without expanding anything, and ``components graph`` prints
the component dependency mapping.

Examples
--------
Compile the site in the current directory:

>>> from component_pages.cli import main
>>> main(["build"])  # doctest: +SKIP

Prettify a single file into a custom directory:

>>> from component_pages.cli import app
>>> app(["prettify", "page.html", "--output-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from ruamel.yaml import YAMLError

from ._constants import DEFAULT_OUTPUT_DIRNAME
from .compiler import SiteCompiler, prettify_file
from .config import load_compiler_config
from .errors import ComponentPagesError
from .graph import build_dependency_graph, validate_dependencies

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s: %(message)s"

app = App(name="components", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _configure_logging(verbose: bool) -> None:
    """Send package diagnostics to stderr at INFO, or DEBUG when verbose."""
    logging.basicConfig(format=LOG_FORMAT)
    level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger("component_pages").setLevel(level)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Expand component references and write a prettified site.")
def build(
    *,
    source_dir: typ.Annotated[
        Path | None,
        Parameter(help="Directory holding index.html", env_var="INPUT_SOURCE_DIR"),
    ] = None,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Directory to write output to", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to components.yaml", env_var="INPUT_CONFIG"),
    ] = None,
    verbose: bool = False,
) -> None:
    """Compile a component site into its output directory.

    Parameters
    ----------
    source_dir : Path or None, optional
        Directory containing ``index.html`` and ``components/``; defaults to
        the configured value or the current directory.
    output_dir : Path or None, optional
        Destination directory; defaults to ``<source_dir>/output``.
    config : Path or None, optional
        Configuration file; ``<source_dir>/components.yaml`` is used when
        present and no path is given.
    verbose : bool, optional
        Emit debug diagnostics such as cache hits.

    Raises
    ------
    ComponentPagesError
        On any fatal compilation failure (see :class:`SiteCompiler`).
    """
    _configure_logging(verbose)
    compiler_config = load_compiler_config(
        config, source_dir=source_dir, output_dir=output_dir
    )
    written = SiteCompiler(compiler_config).run()
    print(f"wrote {_format_path(written)}")


@app.command(help="Re-indent a single HTML file without expanding components.")
def prettify(
    file: typ.Annotated[Path, Parameter(help="HTML file to prettify")],
    *,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Directory to write output to", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    verbose: bool = False,
) -> None:
    """Prettify ``file`` into ``output_dir`` (default ``<file dir>/output``)."""
    _configure_logging(verbose)
    target_dir = output_dir or file.parent / DEFAULT_OUTPUT_DIRNAME
    written = prettify_file(file, target_dir)
    print(f"wrote {_format_path(written)}")


@app.command(help="Print each component with the components it references.")
def graph(
    *,
    source_dir: typ.Annotated[
        Path | None,
        Parameter(help="Directory holding index.html", env_var="INPUT_SOURCE_DIR"),
    ] = None,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to components.yaml", env_var="INPUT_CONFIG"),
    ] = None,
) -> None:
    """Print the dependency mapping, failing when it contains a cycle."""
    _configure_logging(verbose=False)
    compiler_config = load_compiler_config(config, source_dir=source_dir)
    dependencies = build_dependency_graph(compiler_config.components_path)
    for name in sorted(dependencies):
        refs = ", ".join(sorted(dependencies[name])) or "-"
        print(f"{name}: {refs}")
    validate_dependencies(dependencies)


def main(tokens: list[str] | None = None) -> None:
    """Invoke the Cyclopts application that powers the ``components`` command.

    Fatal compilation errors are logged and turned into exit status 1.
    """
    try:
        app(tokens)
    except (ComponentPagesError, OSError, ValueError, YAMLError) as exc:
        logger.error("%s", exc)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
