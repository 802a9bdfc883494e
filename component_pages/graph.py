"""Build the component dependency graph and prove it is acyclic.

Every ``*.html`` file directly inside the component directory is a component
named after the file (extension removed). Each fragment is scanned line by
line for ``<app-NAME/>`` references, producing a mapping from component name
to the set of components it references directly. :func:`validate_dependencies`
then computes each component's transitive closure and fails closed when any
component can reach itself, before expansion writes a single byte.

Names referenced but never discovered contribute no edges: expansion treats
them as missing fragments and substitutes empty text.

Examples
--------
>>> from component_pages.graph import transitive_closure
>>> graph = {"page": {"nav"}, "nav": {"logo"}, "logo": set()}
>>> sorted(transitive_closure(graph, "page"))
['logo', 'nav']
"""

from __future__ import annotations

import logging
import typing as typ

from ._constants import COMPONENT_SUFFIX
from .errors import CircularDependencyError, ComponentDirectoryError
from .scanner import find_component_refs

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

logger = logging.getLogger(__name__)

DependencyMap = dict[str, set[str]]


def build_dependency_graph(components_dir: Path) -> DependencyMap:
    """Map every component in ``components_dir`` to its direct references.

    Parameters
    ----------
    components_dir : Path
        Directory holding ``<name>.html`` fragments. Subdirectories and files
        with other extensions are ignored; the listing is sorted so graph
        construction and diagnostics are deterministic.

    Returns
    -------
    dict[str, set[str]]
        Direct dependency sets keyed by component name.

    Raises
    ------
    ComponentDirectoryError
        If the directory cannot be listed or a fragment cannot be read. No
        partial graph is returned.
    """
    try:
        entries = sorted(components_dir.iterdir())
    except OSError as exc:
        raise ComponentDirectoryError(components_dir, str(exc)) from exc

    dependencies: DependencyMap = {}
    for entry in entries:
        if not entry.name.endswith(COMPONENT_SUFFIX) or entry.is_dir():
            continue
        name = entry.name[: -len(COMPONENT_SUFFIX)]
        if name in dependencies:
            continue
        refs: set[str] = set()
        try:
            with entry.open("r", encoding="utf-8") as handle:
                for line in handle:
                    refs.update(find_component_refs(line))
        except OSError as exc:
            raise ComponentDirectoryError(entry, str(exc)) from exc
        dependencies[name] = refs
        logger.debug("component '%s' references %s", name, sorted(refs) or "nothing")
    return dependencies


def transitive_closure(dependencies: cabc.Mapping[str, cabc.Set[str]], name: str) -> set[str]:
    """Return every component reachable from ``name`` through its references.

    The closure is recomputed per call rather than shared between components;
    graphs are small and the mapping is not mutated during validation. Each
    node is expanded once, so cycles terminate.
    """
    reached: set[str] = set()
    pending = list(dependencies.get(name, ()))
    while pending:
        current = pending.pop()
        if current in reached:
            continue
        reached.add(current)
        pending.extend(dependencies.get(current, ()))
    return reached


def find_cycles(dependencies: cabc.Mapping[str, cabc.Set[str]]) -> list[str]:
    """Return the sorted names of every component that depends on itself."""
    return sorted(
        name for name in dependencies if name in transitive_closure(dependencies, name)
    )


def validate_dependencies(dependencies: cabc.Mapping[str, cabc.Set[str]]) -> None:
    """Fail if any component transitively references itself.

    Every offending component is logged before a single aggregate
    :class:`CircularDependencyError` is raised.
    """
    cyclic = find_cycles(dependencies)
    for name in cyclic:
        logger.error("component '%s' is dependent on itself", name)
    if cyclic:
        raise CircularDependencyError(cyclic)


def validate_components(components_dir: Path) -> DependencyMap:
    """Build the graph for ``components_dir`` and validate it in one step."""
    dependencies = build_dependency_graph(components_dir)
    validate_dependencies(dependencies)
    return dependencies


__all__ = [
    "DependencyMap",
    "build_dependency_graph",
    "find_cycles",
    "transitive_closure",
    "validate_components",
    "validate_dependencies",
]
