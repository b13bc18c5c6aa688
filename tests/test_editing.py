"""Unit tests for the editable module, row and page overlay."""

from __future__ import annotations

import typing as typ

import pytest
from bs4 import BeautifulSoup

from pagesmith.core.nodes import tag
from pagesmith.editing import (
    ActionDescriptor,
    EditableModule,
    EditablePage,
    EditableRow,
    EditMode,
    Verb,
    append_query_param,
)
from pagesmith.errors import CapacityError, ConfigurationError
from pagesmith.modules.content import ContentModule

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _module(title: str = "Title") -> ContentModule:
    return ContentModule(title=title, content="body", markdown=False)


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("/edit", "/edit?editMode=OWNER_EDIT"),
        ("/edit?x=1", "/edit?x=1&editMode=OWNER_EDIT"),
    ],
)
def test_append_query_param_preserves_existing_query(url: str, expected: str) -> None:
    assert append_query_param(url, "editMode", "OWNER_EDIT") == expected


def test_action_descriptor_attribute_order() -> None:
    descriptor = ActionDescriptor(
        Verb.DELETE, "/x", target="#t", swap="outerHTML", confirm="Sure?"
    )
    assert descriptor.attributes() == {
        "hx-delete": "/x",
        "hx-target": "#t",
        "hx-swap": "outerHTML",
        "hx-confirm": "Sure?",
    }


def test_editable_module_controls_order_and_attributes() -> None:
    inner = _module()
    inner.module_id = "news"
    wrapper = EditableModule(
        inner,
        edit_url="/m/news/edit",
        delete_url="/m/news/delete",
        delete_confirm="Delete it?",
        edit_mode=EditMode.USER_EDIT,
    )
    root = _soup(wrapper.render()).select_one("div.editable-module-wrapper")
    assert root["id"] == "editable-news"
    children = [child for child in root.children if child.name]
    assert [c.get("class") for c in children[:2]] == [
        ["btn", "btn-link", "module-edit-btn"],
        ["btn", "btn-link", "module-delete-btn"],
    ]
    assert children[2]["id"] == "news", "wrapped module must come last"

    edit_btn, delete_btn = children[0], children[1]
    assert edit_btn["hx-get"] == "/m/news/edit?editMode=USER_EDIT"
    assert edit_btn["hx-target"] == "#edit-modal-container"
    assert edit_btn["hx-swap"] == "innerHTML"
    assert delete_btn["hx-delete"] == "/m/news/delete?editMode=USER_EDIT"
    assert delete_btn["hx-target"] == "#editable-news"
    assert delete_btn["hx-swap"] == "outerHTML"
    assert delete_btn["hx-confirm"] == "Delete it?"


def test_editable_module_without_urls_renders_only_inner() -> None:
    wrapper = EditableModule(tag("p", text="plain"))
    root = _soup(wrapper.render()).div
    assert root.select("button") == []
    assert root.p.get_text() == "plain"


def test_editable_module_respects_permission_flags() -> None:
    wrapper = EditableModule(
        _module(), edit_url="/e", delete_url="/d", can_edit=False, can_delete=False
    )
    assert _soup(wrapper.render()).select("button") == []


def test_editable_module_builds_wrapper_once() -> None:
    wrapper = EditableModule(_module(), edit_url="/e")
    first = wrapper.render()
    second = wrapper.render()
    assert first == second
    assert len(wrapper.controls) == 1


def test_editable_module_forwards_title_and_id() -> None:
    inner = _module("Before")
    wrapper = EditableModule(inner)
    wrapper.title = "After"
    wrapper.module_id = "shared"
    assert inner.title == "After"
    assert inner.module_id == "shared"
    assert wrapper.module_id == "shared"
    assert wrapper.wrapper_id == "editable-shared"


def test_editable_module_rejects_invalid_id() -> None:
    with pytest.raises(ConfigurationError):
        EditableModule(_module()).module_id = "not valid"


def test_apply_permissions_uses_checker(mocker: MockerFixture) -> None:
    checker = mocker.Mock()
    checker.can_edit.return_value = True
    checker.can_delete.return_value = False
    checker.edit_mode.return_value = EditMode.USER_EDIT
    wrapper = EditableModule(_module(), edit_url="/e", delete_url="/d")

    wrapper.apply_permissions(checker, "news", "alice")

    checker.can_edit.assert_called_once_with("news", "alice")
    soup = _soup(wrapper.render())
    assert soup.select_one(".module-edit-btn")["hx-get"] == "/e?editMode=USER_EDIT"
    assert soup.select_one(".module-delete-btn") is None


def test_row_with_two_modules_renders_two_half_columns() -> None:
    row = EditableRow("intro", "home")
    row.add_module(_module("One"), "one")
    row.add_module(_module("Two"), "two")
    soup = _soup(row.render())
    columns = soup.select(".row > .col")
    assert len(columns) == 2
    assert all("col-6" in column["class"] for column in columns)
    edit_urls = [btn["hx-get"] for btn in soup.select(".module-edit-btn")]
    assert edit_urls == [
        "/api/pages/home/modules/one/edit?editMode=OWNER_EDIT",
        "/api/pages/home/modules/two/edit?editMode=OWNER_EDIT",
    ]


@pytest.mark.parametrize("count", [1, 2, 3, 4, 6, 12])
def test_row_widths_partition_twelve(count: int) -> None:
    row = EditableRow("r", "p", max_modules=12)
    for index in range(count):
        row.add_module(_module(), f"m{index}")
    assert sum(row.column_widths()) == 12


def test_row_widths_for_five_modules_leave_remainder() -> None:
    row = EditableRow("r", "p", max_modules=5)
    for index in range(5):
        row.add_module(_module(), f"m{index}")
    assert row.column_widths() == [2, 2, 2, 2, 2]


def test_add_module_beyond_capacity_raises() -> None:
    row = EditableRow("r", "p", max_modules=1)
    row.add_module(_module(), "a")
    with pytest.raises(CapacityError):
        row.add_module(_module(), "b")
    assert row.module_count == 1


def test_add_module_sets_module_id() -> None:
    module = _module()
    EditableRow("r", "p").add_module(module, "fresh")
    assert module.module_id == "fresh"


@pytest.mark.parametrize("limit", [0, -1])
def test_max_modules_below_one_is_rejected(limit: int) -> None:
    with pytest.raises(ConfigurationError):
        EditableRow("r", "p").set_max_modules(limit)
    with pytest.raises(ConfigurationError):
        EditableRow("r", "p", max_modules=limit)


@pytest.mark.parametrize("limit", [13, 24])
def test_max_modules_above_grid_width_is_rejected(limit: int) -> None:
    with pytest.raises(ConfigurationError, match="between 1 and 12"):
        EditableRow("r", "p").set_max_modules(limit)
    with pytest.raises(ConfigurationError):
        EditableRow("r", "p", max_modules=limit)


def test_row_rejects_invalid_page_id() -> None:
    with pytest.raises(ConfigurationError):
        EditableRow("r", "bad page")


def test_add_module_control_only_when_space_and_permitted() -> None:
    row = EditableRow("r", "p", max_modules=2)
    row.add_module(_module(), "a")
    button = _soup(row.render()).select_one(".add-module-section button")
    assert button["hx-get"] == "/api/pages/p/rows/r/add-module-form"

    row.add_module(_module(), "b")
    assert _soup(row.render()).select_one(".add-module-section") is None

    locked = EditableRow("r", "p", can_add_module=False)
    assert _soup(locked.render()).select_one(".add-module-section") is None


def test_row_rebuilds_each_render() -> None:
    row = EditableRow("r", "p")
    row.add_module(_module(), "a")
    assert len(_soup(row.render()).select(".row > .col")) == 1
    row.add_module(_module(), "b")
    soup = _soup(row.render())
    assert len(soup.select(".row > .col")) == 2
    assert len(soup.select(".row")) == 1


def _positions(html: str) -> list[int]:
    return [
        int(button["data-position"])
        for button in _soup(html).select(".insert-row-section button")
    ]


def test_empty_page_has_one_insert_control_at_zero() -> None:
    page = EditablePage("home")
    html = page.render()
    assert _positions(html) == [0]
    button = _soup(html).select_one(".insert-row-section button")
    assert button["hx-post"] == "/api/pages/home/rows/insert?position=0"
    assert button["hx-swap"] == "beforebegin"


def test_page_with_two_rows_has_insert_controls_after_each() -> None:
    page = EditablePage("home")
    page.add_row(EditableRow("a", "home"))
    page.add_row(EditableRow("b", "home"))
    html = page.render()
    assert page.row_count == 2
    assert _positions(html) == [1, 2]
    order = [
        element.get("id") or "insert"
        for element in _soup(html).select_one(".editable-page").find_all(
            "div", recursive=False
        )
    ]
    assert order == ["row-a", "insert", "row-b", "insert"]
