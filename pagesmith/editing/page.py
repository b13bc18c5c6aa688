"""Editable page made of rows separated by insert-row controls."""

from __future__ import annotations

import typing as typ

from pagesmith.components.elements import ButtonStyle, button, div
from pagesmith.core.nodes import Tag, validate_dom_id
from pagesmith.editing.actions import ActionDescriptor, Verb, append_query_param

if typ.TYPE_CHECKING:
    from pagesmith.core.slots import RenderContext
    from pagesmith.editing.row import EditableRow

INSERT_ROW_URL_PATTERN = "/api/pages/{page_id}/rows/insert"


class EditablePage(Tag):
    """Ordered rows with a control after each one for splicing in a new row.

    Each control posts ``position=<n>`` where ``n`` is the index after which
    the new row belongs: ``i + 1`` after row ``i``. A page without rows shows
    a single control at position ``0``.
    """

    def __init__(
        self,
        page_id: str,
        *,
        insert_row_url_pattern: str = INSERT_ROW_URL_PATTERN,
        first_row_label: str = "+ Add First Row",
        insert_row_label: str = "+ Insert Row Below",
    ) -> None:
        super().__init__("div")
        self.page_id = validate_dom_id(page_id)
        self.insert_row_url_pattern = insert_row_url_pattern
        self.first_row_label = first_row_label
        self.insert_row_label = insert_row_label
        self._rows: list[EditableRow] = []
        self.set_attribute("id", f"page-{page_id}")
        self.add_class("editable-page-wrapper")

    @property
    def rows(self) -> tuple[EditableRow, ...]:
        return tuple(self._rows)

    @property
    def row_count(self) -> int:
        """Number of rows on the page."""
        return len(self._rows)

    def add_row(self, row: EditableRow) -> None:
        """Append ``row`` to the page."""
        self._rows.append(row)

    def insert_action(self, position: int) -> ActionDescriptor:
        """Return the request inserting a row at ``position``."""
        base = self.insert_row_url_pattern.format(page_id=self.page_id)
        return ActionDescriptor(
            Verb.POST,
            append_query_param(base, "position", str(position)),
            target="closest .insert-row-section",
            swap="beforebegin",
        )

    def _insert_control(self, position: int) -> Tag:
        if self._rows:
            control = button(self.insert_row_label, style=ButtonStyle.LINK)
            section = div(control, classes="insert-row-section")
        else:
            control = button(self.first_row_label, style=ButtonStyle.SECONDARY)
            section = div(control, classes="insert-row-section empty-page-insert")
        self.insert_action(position).apply(control)
        control.set_attribute("data-position", str(position))
        return section

    def assemble(self) -> None:
        content = div(classes="editable-page")
        if not self._rows:
            content.append(self._insert_control(0))
        for index, row in enumerate(self._rows):
            content.append(row)
            content.append(self._insert_control(index + 1))
        self.append(content)

    def render(self, context: RenderContext | None = None) -> str:
        """Reassemble from the current rows, then render."""
        self.clear_children()
        self.reset_build()
        return super().render(context)


__all__ = ["EditablePage"]
