"""Behaviour tests for escaping and build-once rendering of node trees.

These scenarios check the two guarantees every page relies on: text and
attribute values are escaped on output, and a :class:`ContentModule`
assembles its children only on the first render.

Usage
-----
Run ``pytest tests/bdd/test_node_rendering.py -v``.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from pagesmith.core.nodes import tag
from pagesmith.modules.content import ContentModule

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "node_rendering.feature"
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Share mutable scenario data across pytest-bdd steps.

    Returns
    -------
    ScenarioState
        Mutable dictionary used to exchange state between ``given``, ``when``,
        and ``then`` steps.
    """
    return {}


@given(parsers.parse('a paragraph whose text is "{text}"'))
def given_paragraph(scenario_state: ScenarioState, text: str) -> None:
    """Create a paragraph tag holding ``text`` as escaped content."""
    scenario_state["node"] = tag("p", text=text)


@given(parsers.parse('the paragraph has a title attribute of "{value}"'))
def given_title_attribute(scenario_state: ScenarioState, value: str) -> None:
    """Attach a ``title`` attribute containing characters that need escaping."""
    scenario_state["node"].set_attribute("title", value)
    scenario_state["title"] = value


@when("the paragraph is rendered")
def when_paragraph_rendered(scenario_state: ScenarioState) -> None:
    """Render the paragraph once and keep the HTML."""
    scenario_state["html"] = scenario_state["node"].render()


@then("the output contains no script element")
def then_no_script(scenario_state: ScenarioState) -> None:
    """Parse the output and confirm nothing became a live ``<script>``."""
    soup = BeautifulSoup(scenario_state["html"], "html.parser")
    assert soup.find("script") is None, f"script leaked: {scenario_state['html']!r}"


@then(parsers.parse('the output contains "{fragment}"'))
def then_output_contains(scenario_state: ScenarioState, fragment: str) -> None:
    """Check for a literal fragment in the rendered HTML."""
    assert fragment in scenario_state["html"]


@then("the title attribute reads back unchanged")
def then_title_round_trips(scenario_state: ScenarioState) -> None:
    """Confirm an HTML parser recovers the original attribute value."""
    soup = BeautifulSoup(scenario_state["html"], "html.parser")
    assert soup.p["title"] == scenario_state["title"]


@given(parsers.parse('a content module titled "{title}"'))
def given_content_module(scenario_state: ScenarioState, title: str) -> None:
    """Create a plain-text content module."""
    scenario_state["module"] = ContentModule(title=title, content="body", markdown=False)


@when(parsers.re(r"the module is rendered (?P<count>\d+) times?"), converters={"count": int})
def when_module_rendered(scenario_state: ScenarioState, count: int) -> None:
    """Render the module ``count`` times, collecting every output."""
    module = scenario_state["module"]
    scenario_state["outputs"] = [module.render() for _ in range(count)]


@then("every render produces identical HTML")
def then_identical_outputs(scenario_state: ScenarioState) -> None:
    """All collected renders must match the first one."""
    outputs = scenario_state["outputs"]
    assert len(set(outputs)) == 1, f"renders diverged: {outputs!r}"


@then(
    parsers.re(r"the module content was built (?P<count>\d+) times?"),
    converters={"count": int},
)
def then_build_count(scenario_state: ScenarioState, count: int) -> None:
    """Compare the module's build counter against ``count``."""
    assert scenario_state["module"].build_count == count
