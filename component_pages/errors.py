"""Exception hierarchy for fatal compilation failures.

Recoverable problems (missing fragments, failed asset copies, unclosed tags)
are logged where they occur and never raise. Everything defined here aborts
the current run and is reported by the CLI with a non-zero exit status.
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


class ComponentPagesError(RuntimeError):
    """Base class for errors that abort a compilation."""


class CircularDependencyError(ComponentPagesError):
    """Raised when one or more components transitively depend on themselves."""

    def __init__(self, components: cabc.Iterable[str]) -> None:
        self.components = tuple(sorted(set(components)))
        msg = "could not compile: one or more components have circular dependencies"
        super().__init__(msg)


class ComponentDirectoryError(ComponentPagesError):
    """Raised when the component directory or one of its fragments is unreadable."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Could not read components from '{path}': {reason}")


class SourceDocumentError(ComponentPagesError):
    """Raised when the root document cannot be opened."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Could not open file '{path}': {reason}")


class PrettifyError(ComponentPagesError):
    """Raised when tokenizing or writing the prettified output fails."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to prettify '{path}': {reason}")


class ConfigError(ValueError):
    """Raised when the compiler configuration is invalid or incomplete."""


class TokenizeError(ComponentPagesError):
    """Raised when the HTML tokenizer fails before reaching end of input."""


__all__ = [
    "CircularDependencyError",
    "ComponentDirectoryError",
    "ComponentPagesError",
    "ConfigError",
    "PrettifyError",
    "SourceDocumentError",
    "TokenizeError",
]
