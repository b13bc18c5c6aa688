"""Behaviour tests for compile-on-first-hit slot rendering.

A spy on the bound node's ``render`` method counts how often the context
renders a slot value. The value must render once per binding, however many
times the template itself is rendered.

Usage
-----
Run ``pytest tests/bdd/test_template_compilation.py -v``.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from pagesmith.core.nodes import tag
from pagesmith.core.slots import RenderContext, RenderPolicy, Slot, SlotKey
from pagesmith.core.template import Template

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "template_compilation.feature"
)
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Share mutable scenario data across pytest-bdd steps."""
    return {}


@given(parsers.parse('a template with a "{name}" slot'))
def given_template(scenario_state: ScenarioState, name: str) -> None:
    """Compile ``<span>`` around a single slot."""
    key = SlotKey(name)
    scenario_state["key"] = key
    scenario_state["template"] = Template.of(tag("span", Slot(key)))


@given(parsers.parse('a compile-on-first-hit context binding "{name}" to "{text}"'))
def given_context(
    scenario_state: ScenarioState, mocker: MockerFixture, name: str, text: str
) -> None:
    """Bind a spied ``<b>`` node to the slot under the caching policy."""
    context = RenderContext.empty().with_policy(RenderPolicy.COMPILE_ON_FIRST_HIT)
    value = tag("b", text=text)
    scenario_state["spy"] = mocker.spy(value, "render")
    context.put(SlotKey(name), value)
    scenario_state["context"] = context


@when(
    parsers.re(r"the template is rendered (?P<count>\d+) times?"),
    converters={"count": int},
)
def when_rendered(scenario_state: ScenarioState, count: int) -> None:
    """Render the template ``count`` times against the shared context."""
    template = scenario_state["template"]
    for _ in range(count):
        scenario_state["output"] = template.render(scenario_state["context"])


@when(parsers.parse('"{name}" is rebound to "{text}"'))
def when_rebound(scenario_state: ScenarioState, name: str, text: str) -> None:
    """Replace the slot value; the cached rendering must be discarded."""
    scenario_state["context"].put(SlotKey(name), tag("b", text=text))


@then(parsers.parse('the output is "{expected}"'))
def then_output(scenario_state: ScenarioState, expected: str) -> None:
    """Compare the last rendering with ``expected``."""
    assert scenario_state["output"] == expected


@then(
    parsers.re(r"the bound value was rendered (?P<count>\d+) times?"),
    converters={"count": int},
)
def then_render_count(scenario_state: ScenarioState, count: int) -> None:
    """Check how often the spied node rendered."""
    assert scenario_state["spy"].call_count == count
