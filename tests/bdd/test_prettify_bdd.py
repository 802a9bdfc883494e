"""Behaviour tests for prettify-only mode using pytest-bdd.

The ``prettify.feature`` scenario feeds markup with an unclosed tag through
:func:`~component_pages.compiler.prettify_file` and checks that every token is
kept while the open tag is reported.
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from component_pages.compiler import prettify_file

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "prettify.feature"
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given(parsers.parse('an HTML file containing "{markup}"'))
def given_html_file(tmp_path: Path, scenario_state: ScenarioState, markup: str) -> None:
    """Write ``markup`` to a file under ``tmp_path``."""
    source = tmp_path / "fragment.html"
    source.write_text(markup, encoding="utf-8")
    scenario_state["source"] = source


@when("I prettify the file")
def when_prettify(
    tmp_path: Path, scenario_state: ScenarioState, caplog: pytest.LogCaptureFixture
) -> None:
    """Prettify the file into ``tmp_path/out``."""
    source = typ.cast("Path", scenario_state["source"])
    with caplog.at_level(logging.WARNING):
        scenario_state["written"] = prettify_file(source, tmp_path / "out")


@then(parsers.parse("the prettified file has {count:d} lines"))
def then_line_count(scenario_state: ScenarioState, count: int) -> None:
    """Verify no token was dropped."""
    written = typ.cast("Path", scenario_state["written"])
    lines = written.read_text(encoding="utf-8").splitlines()
    assert len(lines) == count, f"unexpected output: {lines!r}"


@then(parsers.parse('an unclosed tag warning is logged for "{tag}"'))
def then_unclosed_warning(caplog: pytest.LogCaptureFixture, tag: str) -> None:
    """Verify exactly one unclosed tag warning names ``tag``."""
    warnings = [
        record.getMessage()
        for record in caplog.records
        if record.getMessage().startswith("Unclosed tag")
    ]
    assert warnings == [f"Unclosed tag: '{tag}'. Output may be inconsistent."]
