"""Behaviour tests for editable rows and pages.

The scenarios render :class:`EditableRow` and :class:`EditablePage` trees and
inspect the resulting markup with BeautifulSoup: column classes for rows and
``data-position`` values on the insert controls for pages.

Usage
-----
Run ``pytest tests/bdd/test_editing_overlay.py -v``.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from pagesmith.editing import EditablePage, EditableRow
from pagesmith.modules.content import ContentModule

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "editing_overlay.feature"
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Share mutable scenario data across pytest-bdd steps."""
    return {}


@given(parsers.parse('an editable row "{row_id}" on page "{page_id}"'))
def given_editable_row(scenario_state: ScenarioState, row_id: str, page_id: str) -> None:
    """Create an empty row with the default capacity."""
    scenario_state["subject"] = EditableRow(row_id, page_id)


@given(parsers.parse('the row holds modules "{first}" and "{second}"'))
def given_row_modules(scenario_state: ScenarioState, first: str, second: str) -> None:
    """Add two content modules under the given ids."""
    row = scenario_state["subject"]
    for module_id in (first, second):
        row.add_module(ContentModule(title=module_id, content="body"), module_id)


@given(parsers.parse('an editable page "{page_id}"'))
def given_editable_page(scenario_state: ScenarioState, page_id: str) -> None:
    """Create a page with no rows."""
    scenario_state["subject"] = EditablePage(page_id)
    scenario_state["page_id"] = page_id


@given(parsers.parse('the page holds rows "{first}" and "{second}"'))
def given_page_rows(scenario_state: ScenarioState, first: str, second: str) -> None:
    """Append two empty rows to the page."""
    page = scenario_state["subject"]
    for row_id in (first, second):
        page.add_row(EditableRow(row_id, scenario_state["page_id"]))


@when(parsers.re(r"the (?:row|page) is rendered"))
def when_rendered(scenario_state: ScenarioState) -> None:
    """Render the current subject and parse the markup."""
    html = scenario_state["subject"].render()
    scenario_state["soup"] = BeautifulSoup(html, "html.parser")


@then(parsers.parse('the row has {count:d} columns of class "{css_class}"'))
def then_row_columns(scenario_state: ScenarioState, count: int, css_class: str) -> None:
    """Every direct column of the grid row carries ``css_class``."""
    columns = scenario_state["soup"].select(".row > .col")
    assert len(columns) == count, f"expected {count} columns, got {len(columns)}"
    for column in columns:
        assert css_class in column["class"], f"missing {css_class}: {column['class']}"


@then("each module has an edit control targeting the modal container")
def then_edit_controls(scenario_state: ScenarioState) -> None:
    """Each edit button swaps its form into ``#edit-modal-container``."""
    buttons = scenario_state["soup"].select(".module-edit-btn")
    assert len(buttons) == 2
    assert {button["hx-target"] for button in buttons} == {"#edit-modal-container"}


@then(parsers.parse('the insert controls have positions "{positions}"'))
def then_insert_positions(scenario_state: ScenarioState, positions: str) -> None:
    """Compare ``data-position`` values of the insert buttons in order."""
    expected = [int(value) for value in positions.split(",")]
    buttons = scenario_state["soup"].select(".insert-row-section button")
    assert [int(button["data-position"]) for button in buttons] == expected
