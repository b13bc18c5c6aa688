"""Editable grid row holding a bounded number of modules."""

from __future__ import annotations

import logging
import typing as typ

from pagesmith._constants import DEFAULT_MAX_MODULES_PER_ROW, GRID_COLUMNS, MODAL_CONTAINER_ID
from pagesmith.components.elements import ButtonStyle, button, column, div, row
from pagesmith.core.nodes import Tag, validate_dom_id
from pagesmith.editing.actions import ActionDescriptor, EditMode, Verb
from pagesmith.editing.module import EditableModule
from pagesmith.errors import CapacityError, ConfigurationError

if typ.TYPE_CHECKING:
    from pagesmith.core.module import Module
    from pagesmith.core.slots import RenderContext

logger = logging.getLogger(__name__)

EDIT_URL_PATTERN = "/api/pages/{page_id}/modules/{module_id}/edit"
DELETE_URL_PATTERN = "/api/pages/{page_id}/modules/{module_id}/delete"
ADD_MODULE_URL_PATTERN = "/api/pages/{page_id}/rows/{row_id}/add-module-form"


def column_width(module_count: int) -> int:
    """Return the equal column width for ``module_count`` modules.

    Widths are ``floor(12 / n)``. Counts that do not divide twelve leave the
    remainder unused: five modules get five width-2 columns.
    """
    return GRID_COLUMNS // module_count if module_count else GRID_COLUMNS


class EditableRow(Tag):
    """Row of editable modules with an optional "add module" control.

    Unlike modules, a row reassembles on every render because membership
    can change between renders. Each module is wrapped in an
    :class:`~pagesmith.editing.module.EditableModule` whose edit and delete
    URLs are derived from the page id and the module id.
    """

    def __init__(
        self,
        row_id: str,
        page_id: str,
        *,
        max_modules: int = DEFAULT_MAX_MODULES_PER_ROW,
        edit_mode: EditMode | None = EditMode.OWNER_EDIT,
        can_add_module: bool = True,
        edit_url_pattern: str = EDIT_URL_PATTERN,
        delete_url_pattern: str = DELETE_URL_PATTERN,
        add_module_url_pattern: str = ADD_MODULE_URL_PATTERN,
        add_module_label: str = "+ Add Module",
        edit_label: str = "✏",
        delete_label: str = "🗑",
        edit_target: str = f"#{MODAL_CONTAINER_ID}",
        delete_confirm: str | None = None,
    ) -> None:
        super().__init__("div")
        self.row_id = validate_dom_id(row_id)
        self.page_id = validate_dom_id(page_id)
        self._modules: list[tuple[Module, str]] = []
        self._max_modules = DEFAULT_MAX_MODULES_PER_ROW
        self.set_max_modules(max_modules)
        self.edit_mode = edit_mode
        self.can_add_module = can_add_module
        self.edit_url_pattern = edit_url_pattern
        self.delete_url_pattern = delete_url_pattern
        self.add_module_url_pattern = add_module_url_pattern
        self.add_module_label = add_module_label
        self.edit_label = edit_label
        self.delete_label = delete_label
        self.edit_target = edit_target
        self.delete_confirm = delete_confirm
        self.set_attribute("id", f"row-{row_id}")
        self.add_class("editable-row-wrapper")

    @property
    def max_modules(self) -> int:
        """Maximum number of modules the row accepts."""
        return self._max_modules

    def set_max_modules(self, limit: int) -> None:
        """Change the row capacity.

        Raises
        ------
        ConfigurationError
            If ``limit`` is outside ``1..GRID_COLUMNS``.
        """
        if not 1 <= limit <= GRID_COLUMNS:
            msg = f"Max modules must be between 1 and {GRID_COLUMNS}. Got: {limit}"
            raise ConfigurationError(msg)
        self._max_modules = limit

    @property
    def modules(self) -> tuple[tuple[Module, str], ...]:
        """Tracked ``(module, module_id)`` pairs in display order."""
        return tuple(self._modules)

    @property
    def module_count(self) -> int:
        return len(self._modules)

    @property
    def is_full(self) -> bool:
        """Return whether no further module can be added."""
        return len(self._modules) >= self._max_modules

    def add_module(self, module: Module, module_id: str) -> None:
        """Track ``module`` under ``module_id`` and set the module's id.

        Raises
        ------
        CapacityError
            If the row already holds :attr:`max_modules` modules.
        ConfigurationError
            If ``module_id`` is not a valid DOM id.
        """
        if self.is_full:
            logger.debug(
                "row %r rejected module %r: %d/%d slots used",
                self.row_id,
                module_id,
                len(self._modules),
                self._max_modules,
            )
            msg = f"Maximum modules per row ({self._max_modules}) reached"
            raise CapacityError(msg)
        module.module_id = module_id
        self._modules.append((module, module_id))

    def column_widths(self) -> list[int]:
        """Return the grid width given to each tracked module."""
        width = column_width(len(self._modules))
        return [width] * len(self._modules)

    def _wrap(self, module: Module, module_id: str) -> EditableModule:
        ids = {"page_id": self.page_id, "module_id": module_id, "row_id": self.row_id}
        return EditableModule(
            module,
            edit_url=self.edit_url_pattern.format(**ids),
            delete_url=self.delete_url_pattern.format(**ids),
            edit_mode=self.edit_mode,
            edit_label=self.edit_label,
            edit_target=self.edit_target,
            delete_label=self.delete_label,
            delete_confirm=self.delete_confirm,
        )

    def assemble(self) -> None:
        grid = row()
        for (module, module_id), width in zip(
            self._modules, self.column_widths(), strict=True
        ):
            grid.append(column(self._wrap(module, module_id), width=width))
        self.append(grid)
        if self.can_add_module and not self.is_full:
            url = self.add_module_url_pattern.format(
                page_id=self.page_id, row_id=self.row_id
            )
            control = button(self.add_module_label, style=ButtonStyle.SECONDARY)
            ActionDescriptor(
                Verb.GET, url, target=f"#{MODAL_CONTAINER_ID}", swap="innerHTML"
            ).apply(control)
            self.append(div(control, classes="add-module-section"))

    def render(self, context: RenderContext | None = None) -> str:
        """Reassemble from the current modules, then render."""
        self.clear_children()
        self.reset_build()
        return super().render(context)


__all__ = ["EditableRow", "column_width"]
