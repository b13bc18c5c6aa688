"""Full-document rendering for declarative page layouts.

This module turns a :class:`~pagesmith.config.PageLayout` into a node tree,
either a read-only grid of :class:`~pagesmith.modules.ContentModule` blocks
or an :class:`~pagesmith.editing.EditablePage` decorated with editing
controls, and wraps the rendered fragment in the ``page_shell.jinja``
document template.

Typical usage mirrors the ``pages render`` command:

>>> from pathlib import Path
>>> from pagesmith.config import load_page_layout
>>> builder = DocumentBuilder(load_page_layout(Path("page.yaml")))  # doctest: +SKIP
>>> builder.run(Path("public/index.html"))  # doctest: +SKIP
PosixPath('public/index.html')

Templates are read from ``pagesmith/templates`` unless another directory is
supplied. Jinja2 autoescaping stays on; the shell template marks only the pre-rendered
fragment and the Pygments stylesheet as safe.
"""

from __future__ import annotations

import datetime as dt
import logging
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from pagesmith._constants import MODAL_CONTAINER_ID, PAGE_CONTAINER_ID
from pagesmith.components.elements import column, div, row
from pagesmith.components.markdown import MarkdownRenderer
from pagesmith.config.models import OverlayConfig
from pagesmith.editing.page import EditablePage
from pagesmith.editing.row import EditableRow, column_width
from pagesmith.modules.content import ContentModule

if typ.TYPE_CHECKING:
    from pagesmith.config.models import ModuleLayout, PageLayout
    from pagesmith.core.nodes import Tag

logger = logging.getLogger(__name__)


def _content_module(layout: ModuleLayout) -> ContentModule:
    return ContentModule(
        title=layout.title,
        content=layout.content,
        markdown=layout.markdown,
        module_id=layout.id,
    )


def build_page_tree(
    layout: PageLayout,
    overlay: OverlayConfig | None = None,
    *,
    editable: bool = False,
) -> Tag:
    """Return the node tree for ``layout``.

    Parameters
    ----------
    layout : PageLayout
        Rows and modules to place.
    overlay : OverlayConfig, optional
        Editing labels, URL patterns and row capacity. Defaults apply when
        omitted.
    editable : bool, optional
        Produce an :class:`EditablePage` with edit, delete and insert
        controls instead of a plain grid.

    Raises
    ------
    CapacityError
        If a row lists more modules than its capacity allows.
    """
    overlay = overlay or OverlayConfig()
    if not editable:
        page = div(classes="page")
        for row_layout in layout.rows:
            width = column_width(len(row_layout.modules))
            page.append(
                row(
                    *(
                        column(_content_module(module), width=width)
                        for module in row_layout.modules
                    ),
                    dom_id=f"row-{row_layout.id}",
                )
            )
        return page

    page = EditablePage(
        layout.id, insert_row_url_pattern=overlay.insert_row_url_pattern
    )
    for row_layout in layout.rows:
        editable_row = EditableRow(
            row_layout.id,
            layout.id,
            max_modules=row_layout.max_modules or overlay.max_modules_per_row,
            edit_mode=overlay.edit_mode,
            edit_url_pattern=overlay.edit_url_pattern,
            delete_url_pattern=overlay.delete_url_pattern,
            add_module_url_pattern=overlay.add_module_url_pattern,
            add_module_label=overlay.add_module_label,
            edit_label=overlay.edit_label,
            delete_label=overlay.delete_label,
            edit_target=overlay.edit_target,
            delete_confirm=overlay.delete_confirm,
        )
        for module in row_layout.modules:
            editable_row.add_module(_content_module(module), module.id)
        page.add_row(editable_row)
    return page


class DocumentBuilder:
    """Render a page layout into a complete HTML document."""

    def __init__(
        self,
        layout: PageLayout,
        overlay: OverlayConfig | None = None,
        *,
        editable: bool = False,
        templates_dir: Path | None = None,
        renderer: MarkdownRenderer | None = None,
        htmx_src: str | None = None,
    ) -> None:
        """Initialize the builder and Jinja environment.

        Parameters
        ----------
        layout : PageLayout
            Page to render.
        overlay : OverlayConfig, optional
            Settings for the editing controls.
        editable : bool, optional
            Render editing controls and the modal container.
        templates_dir : Path, optional
            Directory containing ``page_shell.jinja``. Defaults to
            ``pagesmith/templates``.
        renderer : MarkdownRenderer, optional
            Source of the Pygments stylesheet embedded in the document.
        htmx_src : str, optional
            Script URL for the client runtime, emitted only when given.
        """
        self.layout = layout
        self.overlay = overlay or OverlayConfig()
        self.editable = editable
        self.renderer = renderer or MarkdownRenderer()
        self.htmx_src = htmx_src
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("page_shell.jinja")

    def render(self) -> str:
        """Return the full document, ending with a newline."""
        tree = build_page_tree(self.layout, self.overlay, editable=self.editable)
        context = {
            "lang": "en",
            "title": self.layout.title,
            "description": self.layout.description,
            "body": tree.render(),
            "stylesheet": self.renderer.stylesheet,
            "htmx_src": self.htmx_src,
            "editable": self.editable,
            "page_container_id": PAGE_CONTAINER_ID,
            "modal_container_id": MODAL_CONTAINER_ID,
            "generated_at": dt.datetime.now(dt.UTC),
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        return html

    def run(self, output_path: Path) -> Path:
        """Render the document and write it to ``output_path``."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        html = self.render()
        output_path.write_text(html, encoding="utf-8")
        logger.debug(
            "wrote %s (%d rows, editable=%s)",
            output_path,
            len(self.layout.rows),
            self.editable,
        )
        return output_path


__all__ = ["DocumentBuilder", "build_page_tree"]
