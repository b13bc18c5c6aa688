"""Wrapper adding edit and delete controls around a single node."""

from __future__ import annotations

import itertools
import logging
import typing as typ

from pagesmith._constants import MODAL_CONTAINER_ID
from pagesmith.components.elements import ButtonStyle, button
from pagesmith.core.module import Module
from pagesmith.core.nodes import Tag, validate_dom_id
from pagesmith.editing.actions import ActionDescriptor, EditMode, Verb, with_edit_mode

if typ.TYPE_CHECKING:
    from pagesmith.core.nodes import Node
    from pagesmith.editing.validation import AuthorizationChecker

logger = logging.getLogger(__name__)

_wrapper_ids = itertools.count(1)

WRAPPER_ID_PREFIX = "editable-"


class EditableModule(Tag):
    """Overlay holding ``{inner, controls}`` for one page node.

    The wrapper is a ``div.editable-module-wrapper``. On its first render it
    adds an edit button (when editing is allowed and ``edit_url`` is set), a
    delete button (when deletion is allowed and ``delete_url`` is set) and
    finally the wrapped node. Configure the wrapper before rendering it;
    controls are assembled once.

    Forwarding rules
    ----------------
    * ``title`` reads and writes go to the inner node when it is a
      :class:`~pagesmith.core.module.Module`.
    * Setting ``module_id`` sets the inner module's id to the value and the
      wrapper's element id to ``editable-<value>`` so the page never holds
      two elements with the same id.
    * The delete control targets the wrapper element unless
      ``delete_target`` says otherwise.
    """

    def __init__(
        self,
        inner: Node,
        *,
        edit_url: str | None = None,
        delete_url: str | None = None,
        edit_mode: EditMode | None = None,
        can_edit: bool = True,
        can_delete: bool = True,
        edit_label: str = "✏",
        edit_target: str = f"#{MODAL_CONTAINER_ID}",
        edit_swap: str = "innerHTML",
        edit_title: str = "Edit",
        delete_label: str = "🗑",
        delete_target: str | None = None,
        delete_swap: str = "outerHTML",
        delete_confirm: str | None = None,
        delete_title: str = "Delete",
    ) -> None:
        super().__init__("div")
        self._inner = inner
        self.edit_url = edit_url
        self.delete_url = delete_url
        self.edit_mode = edit_mode
        self.can_edit = can_edit
        self.can_delete = can_delete
        self.edit_label = edit_label
        self.edit_target = edit_target
        self.edit_swap = edit_swap
        self.edit_title = edit_title
        self.delete_label = delete_label
        self.delete_target = delete_target
        self.delete_swap = delete_swap
        self.delete_confirm = delete_confirm
        self.delete_title = delete_title
        self.add_class("editable-module-wrapper")
        inner_id = inner.module_id if isinstance(inner, Module) else None
        if inner_id:
            self.set_attribute("id", f"{WRAPPER_ID_PREFIX}{inner_id}")
        else:
            self.set_attribute("id", f"{WRAPPER_ID_PREFIX}module-{next(_wrapper_ids)}")

    @property
    def inner(self) -> Node:
        """The wrapped node."""
        return self._inner

    @property
    def wrapper_id(self) -> str:
        """Element id of the wrapper itself."""
        return typ.cast("str", self.get_attribute("id"))

    @property
    def module_id(self) -> str | None:
        """Id of the wrapped module, or ``None`` for plain nodes."""
        if isinstance(self._inner, Module):
            return self._inner.module_id
        return None

    @module_id.setter
    def module_id(self, value: str) -> None:
        validate_dom_id(value)
        if isinstance(self._inner, Module):
            self._inner.module_id = value
        self.set_attribute("id", f"{WRAPPER_ID_PREFIX}{value}")

    @property
    def title(self) -> str | None:
        """Title of the wrapped module, or ``None`` for plain nodes."""
        if isinstance(self._inner, Module):
            return self._inner.title
        return None

    @title.setter
    def title(self, value: str | None) -> None:
        if isinstance(self._inner, Module):
            self._inner.title = value

    @property
    def controls(self) -> tuple[Node, ...]:
        """Control buttons assembled so far, in render order."""
        return tuple(child for child in self.children if child is not self._inner)

    def apply_permissions(
        self, checker: AuthorizationChecker, module_id: str, user_id: str
    ) -> None:
        """Set ``can_edit``, ``can_delete`` and ``edit_mode`` from ``checker``."""
        self.can_edit = checker.can_edit(module_id, user_id)
        self.can_delete = checker.can_delete(module_id, user_id)
        self.edit_mode = checker.edit_mode(module_id, user_id)
        logger.debug(
            "permissions for %r/%r: edit=%s delete=%s mode=%s",
            module_id,
            user_id,
            self.can_edit,
            self.can_delete,
            self.edit_mode,
        )

    def edit_action(self) -> ActionDescriptor | None:
        """Return the edit request, or ``None`` when no edit control is shown."""
        if not (self.can_edit and self.edit_url):
            return None
        return ActionDescriptor(
            Verb.GET,
            with_edit_mode(self.edit_url, self.edit_mode),
            target=self.edit_target,
            swap=self.edit_swap,
        )

    def delete_action(self) -> ActionDescriptor | None:
        """Return the delete request, or ``None`` when no delete control is shown."""
        if not (self.can_delete and self.delete_url):
            return None
        return ActionDescriptor(
            Verb.DELETE,
            with_edit_mode(self.delete_url, self.edit_mode),
            target=self.delete_target or f"#{self.wrapper_id}",
            swap=self.delete_swap,
            confirm=self.delete_confirm,
        )

    def assemble(self) -> None:
        edit = self.edit_action()
        if edit is not None:
            control = button(
                self.edit_label,
                style=ButtonStyle.LINK,
                classes="module-edit-btn",
            )
            edit.apply(control)
            control.set_attribute("title", self.edit_title)
            self.append(control)
        delete = self.delete_action()
        if delete is not None:
            control = button(
                self.delete_label,
                style=ButtonStyle.LINK,
                classes="module-delete-btn",
            )
            delete.apply(control)
            control.set_attribute("title", self.delete_title)
            self.append(control)
        self.append(self._inner)


__all__ = ["EditableModule"]
