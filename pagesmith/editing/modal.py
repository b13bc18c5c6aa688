"""Edit dialog assembly for editable modules."""

from __future__ import annotations

import typing as typ

from pagesmith._constants import MODAL_CONTAINER_ID, PAGE_CONTAINER_ID
from pagesmith.components.elements import ButtonStyle, Modal, button, div, heading
from pagesmith.core.nodes import validate_dom_id
from pagesmith.editing.actions import ActionDescriptor, Verb
from pagesmith.errors import ConfigurationError

if typ.TYPE_CHECKING:
    from pagesmith.core.nodes import Node, Tag
    from pagesmith.editing.validation import Editable, EditableChild

CHILD_ID_TOKEN = "{id}"
SAVE_INCLUDE = ".modal-body input, .modal-body textarea, .modal-body select"
DELETE_CONFIRM = "Are you sure you want to delete this module? This cannot be undone."


class EditModalBuilder:
    """Collect the parts of an edit dialog and produce a :class:`Modal`.

    ``edit_view`` and ``save_url`` are required by :meth:`build`. When an
    ``editable`` reports nested children, each gets edit and delete buttons
    whose URLs come from ``child_edit_url`` and ``child_delete_url`` with
    ``{id}`` replaced by the child id.
    """

    def __init__(
        self,
        *,
        title: str = "Edit Module",
        module_id: str | None = None,
        edit_view: Node | None = None,
        editable: Editable | None = None,
        save_url: str | None = None,
        delete_url: str | None = None,
        child_edit_url: str | None = None,
        child_delete_url: str | None = None,
        show_delete: bool = True,
        page_container_id: str = PAGE_CONTAINER_ID,
        modal_container_id: str = MODAL_CONTAINER_ID,
    ) -> None:
        self.title = title
        self.module_id = module_id
        self.edit_view = edit_view
        self.editable = editable
        self.save_url = save_url
        self.delete_url = delete_url
        self.child_edit_url = child_edit_url
        self.child_delete_url = child_delete_url
        self.show_delete = show_delete
        self.page_container_id = page_container_id
        self.modal_container_id = modal_container_id

    @property
    def page_container_id(self) -> str:
        """Element refreshed after a delete."""
        return self._page_container_id

    @page_container_id.setter
    def page_container_id(self, value: str) -> None:
        self._page_container_id = validate_dom_id(value)

    @property
    def modal_container_id(self) -> str:
        """Element holding the dialog markup."""
        return self._modal_container_id

    @modal_container_id.setter
    def modal_container_id(self, value: str) -> None:
        self._modal_container_id = validate_dom_id(value)

    def build(self) -> Modal:
        """Return the dialog.

        Raises
        ------
        ConfigurationError
            If ``edit_view`` or ``save_url`` is missing.
        """
        if self.edit_view is None:
            msg = "EditModalBuilder requires an edit_view before build()."
            raise ConfigurationError(msg)
        if not self.save_url:
            msg = "EditModalBuilder requires a save_url before build()."
            raise ConfigurationError(msg)

        body = div(div(self.edit_view, classes="edit-properties-section"))
        if self.editable is not None:
            children = self.editable.editable_children()
            if children:
                body.append(self._children_section(children))
        return Modal(
            title=self.title,
            body=body,
            footer=self._footer(),
            close_on_backdrop=False,
        )

    def _children_section(self, children: list[EditableChild]) -> Tag:
        items = div(classes="list-group")
        modal_target = f"#{self.modal_container_id}"
        for child in children:
            info = div(div(text=child.label, classes="fw-bold"))
            if child.summary is not None:
                summary = div(text=child.summary, classes="text-muted small text-truncate")
                summary.set_max_width("200px")
                info.append(summary)
            actions = div(classes="btn-group btn-group-sm")
            if self.child_edit_url:
                control = button("Edit", style=ButtonStyle.SECONDARY)
                ActionDescriptor(
                    Verb.GET,
                    self.child_edit_url.replace(CHILD_ID_TOKEN, child.id),
                    target=modal_target,
                    swap="innerHTML",
                ).apply(control)
                actions.append(control)
            if self.child_delete_url:
                control = button("Delete", style=ButtonStyle.DANGER)
                ActionDescriptor(
                    Verb.DELETE,
                    self.child_delete_url.replace(CHILD_ID_TOKEN, child.id),
                    target=modal_target,
                    swap="innerHTML",
                    confirm="Delete this item?",
                ).apply(control)
                actions.append(control)
            items.append(
                div(
                    info,
                    actions,
                    classes="list-group-item d-flex justify-content-between align-items-center p-2",
                )
            )
        return div(
            heading(4, "Content Items", classes="mb-3"),
            items,
            classes="edit-children-section mt-4",
        )

    def _footer(self) -> Tag:
        left = div()
        if self.show_delete and self.delete_url:
            control = button("Delete", style=ButtonStyle.DANGER)
            ActionDescriptor(
                Verb.DELETE,
                self.delete_url,
                target=f"#{self.page_container_id}",
                swap="none",
                confirm=DELETE_CONFIRM,
            ).apply(control)
            left.append(control)

        cancel = button(
            "Cancel",
            style=ButtonStyle.SECONDARY,
            attrs={
                "data-modal-id": self.modal_container_id,
                "onclick": "document.getElementById(this.dataset.modalId).innerHTML = ''",
            },
        )
        save = button("Save Changes", style=ButtonStyle.PRIMARY)
        ActionDescriptor(
            Verb.POST,
            typ.cast("str", self.save_url),
            swap="none",
            include=SAVE_INCLUDE,
        ).apply(save)
        right = div(cancel, save, classes="d-flex gap-2")
        return div(left, right, classes="d-flex justify-content-between w-100")


__all__ = ["EditModalBuilder"]
