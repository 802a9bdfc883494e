"""Recursively substitute ``<app-NAME/>`` references with fragment markup.

:class:`ComponentExpander` resolves a component by reading
``<components_dir>/<name>.html`` once, expanding any nested references line by
line, and storing the result in a :class:`ComponentCache` owned by the
expander. Later references to the same component reuse the cached markup
without touching the filesystem. A fresh expander (and cache) is created per
compilation so edits to fragments between runs are always picked up.

Only the root document is comment-stripped (see :func:`strip_comments`);
fragments are expanded as written.

Examples
--------
>>> from pathlib import Path
>>> from component_pages.expander import ComponentExpander
>>> expander = ComponentExpander(Path("site/components"))  # doctest: +SKIP
>>> expander.expand_document("<body><app-nav/></body>\\n")  # doctest: +SKIP
'<body><nav>...</nav></body>\\n'
"""

from __future__ import annotations

import logging
import re
import typing as typ

from ._constants import COMPONENT_SUFFIX, component_tag
from .errors import CircularDependencyError
from .scanner import find_component_refs

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

logger = logging.getLogger(__name__)

COMMENT_PATTERN = re.compile(r"<!--.*?-->", re.DOTALL)


def strip_comments(html: str) -> str:
    """Remove every ``<!-- ... -->`` comment, including multi-line ones."""
    return COMMENT_PATTERN.sub("", html)


class ComponentCache:
    """Expanded markup keyed by component name for a single compilation."""

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, name: str) -> str | None:
        return self._entries.get(name)

    def store(self, name: str, html: str) -> None:
        self._entries[name] = html


class ComponentExpander:
    """Expand component references against one component directory."""

    def __init__(
        self, components_dir: Path, *, cache: ComponentCache | None = None
    ) -> None:
        """Initialize the expander.

        Parameters
        ----------
        components_dir : Path
            Directory holding the ``<name>.html`` fragments.
        cache : ComponentCache, optional
            Cache to populate; a new, empty cache is created when ``None``.
        """
        self.components_dir = components_dir
        self.cache = cache if cache is not None else ComponentCache()
        self._resolving: list[str] = []

    def expand(self, name: str, *, source: str = "<document>", line_number: int = 0) -> str:
        """Return the fully expanded markup for component ``name``.

        Parameters
        ----------
        name : str
            Component name without the ``app-`` prefix.
        source : str, optional
            Label of the document containing the reference, used in warnings.
        line_number : int, optional
            1-based line of the reference within ``source``.

        Returns
        -------
        str
            Expanded markup, or ``""`` when the fragment does not exist.

        Raises
        ------
        CircularDependencyError
            If ``name`` is reached again while it is still being expanded.
        """
        cached = self.cache.get(name)
        if cached is not None:
            logger.debug("component '%s' served from cache", name)
            return cached

        if name in self._resolving:
            raise CircularDependencyError(self._resolving[self._resolving.index(name) :])

        path = self.components_dir / f"{name}{COMPONENT_SUFFIX}"
        try:
            handle = path.open("r", encoding="utf-8")
        except OSError:
            logger.warning(
                "component '%s' found on line %d of %s but no '%s%s' was found in '%s'",
                name,
                line_number,
                source,
                name,
                COMPONENT_SUFFIX,
                self.components_dir,
            )
            return ""

        self._resolving.append(name)
        try:
            with handle:
                html = self._expand_lines(handle, source=path.name)
        finally:
            self._resolving.pop()

        self.cache.store(name, html)
        return html

    def expand_document(self, text: str, *, source: str = "<document>") -> str:
        """Expand every reference in ``text``, preserving line endings."""
        return self._expand_lines(text.splitlines(keepends=True), source=source)

    def expand_line(self, line: str, *, source: str = "<document>", line_number: int = 0) -> str:
        """Substitute the references on a single line from left to right.

        Text before each matched ``<app-NAME/>`` literal is kept verbatim and
        followed by that component's markup; scanning resumes after the tag
        and whatever trails the last reference is appended unchanged.
        """
        names = find_component_refs(line)
        if not names:
            return line

        parts: list[str] = []
        remainder = line
        for name in names:
            tag = component_tag(name)
            index = remainder.find(tag)
            if index < 0:
                logger.debug(
                    "reference to '%s' on line %d of %s is not a self-closing tag",
                    name,
                    line_number,
                    source,
                )
                continue
            parts.append(remainder[:index])
            parts.append(self.expand(name, source=source, line_number=line_number))
            remainder = remainder[index + len(tag) :]
        parts.append(remainder)
        return "".join(parts)

    def _expand_lines(self, lines: cabc.Iterable[str], *, source: str) -> str:
        return "".join(
            self.expand_line(line, source=source, line_number=number)
            for number, line in enumerate(lines, start=1)
        )


__all__ = ["COMMENT_PATTERN", "ComponentCache", "ComponentExpander", "strip_comments"]
