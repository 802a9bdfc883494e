"""Shared fixtures for component_pages tests.

``site_factory`` lays out a throwaway site (``index.html`` plus a
``components/`` directory of fragments) under ``tmp_path`` so each test can
describe only the markup it cares about.
"""

from __future__ import annotations

import typing as typ

import pytest

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

SiteFactory = typ.Callable[..., "Path"]


@pytest.fixture
def site_factory(tmp_path: Path) -> SiteFactory:
    """Return a callable that writes a site and returns its root directory."""

    def _build(
        index: str | None = "",
        components: cabc.Mapping[str, str] | None = None,
        *,
        extra_files: cabc.Mapping[str, str] | None = None,
        name: str = "site",
    ) -> Path:
        root = tmp_path / name
        components_dir = root / "components"
        components_dir.mkdir(parents=True, exist_ok=True)
        if index is not None:
            (root / "index.html").write_text(index, encoding="utf-8")
        for component, markup in (components or {}).items():
            (components_dir / f"{component}.html").write_text(markup, encoding="utf-8")
        for relative, content in (extra_files or {}).items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _build
