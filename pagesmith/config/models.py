"""Typed dataclasses describing overlay settings and page layouts."""

from __future__ import annotations

import dataclasses as dc

from pagesmith._constants import DEFAULT_MAX_MODULES_PER_ROW, MODAL_CONTAINER_ID
from pagesmith.editing.actions import EditMode
from pagesmith.editing.page import INSERT_ROW_URL_PATTERN
from pagesmith.editing.row import (
    ADD_MODULE_URL_PATTERN,
    DELETE_URL_PATTERN,
    EDIT_URL_PATTERN,
)


@dc.dataclass(slots=True)
class OverlayConfig:
    """Labels, targets and URL patterns applied to editable rows and pages."""

    edit_label: str = "✏"
    delete_label: str = "🗑"
    add_module_label: str = "+ Add Module"
    edit_target: str = f"#{MODAL_CONTAINER_ID}"
    delete_confirm: str | None = None
    edit_url_pattern: str = EDIT_URL_PATTERN
    delete_url_pattern: str = DELETE_URL_PATTERN
    add_module_url_pattern: str = ADD_MODULE_URL_PATTERN
    insert_row_url_pattern: str = INSERT_ROW_URL_PATTERN
    max_modules_per_row: int = DEFAULT_MAX_MODULES_PER_ROW
    edit_mode: EditMode | None = EditMode.OWNER_EDIT


@dc.dataclass(slots=True)
class ModuleLayout:
    """One content module placed in a row."""

    id: str
    title: str | None = None
    content: str = ""
    markdown: bool = True


@dc.dataclass(slots=True)
class RowLayout:
    """A row of modules; ``max_modules`` falls back to the overlay default."""

    id: str
    modules: list[ModuleLayout] = dc.field(default_factory=list)
    max_modules: int | None = None


@dc.dataclass(slots=True)
class PageLayout:
    """Declarative page description rendered by the ``pages`` CLI."""

    id: str
    title: str
    rows: list[RowLayout] = dc.field(default_factory=list)
    description: str | None = None


__all__ = ["ModuleLayout", "OverlayConfig", "PageLayout", "RowLayout"]
