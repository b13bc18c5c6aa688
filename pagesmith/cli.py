"""Cyclopts CLI entrypoint for rendering page layouts to HTML documents.

The ``pages`` console script reads a YAML page layout, builds the node tree
(optionally with the editing overlay) and writes a complete HTML document
through the Jinja2 page shell.

Examples
--------
Render a layout into the default output file:

>>> from pagesmith.cli import app
>>> app(["render", "--layout", "page.yaml"])  # doctest: +SKIP

Render the editable variant with overlay settings from another file:

>>> app(
...     ["render", "--layout", "page.yaml", "--editable", "--config", "overlay.yaml"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import os
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_overlay_config, load_page_layout
from .document import DocumentBuilder

DEFAULT_OUTPUT = Path("public/index.html")
LOG_LEVEL_ENV = "PAGESMITH_LOG_LEVEL"

app = App(name="pages", config=cyclopts.config.Env("PAGESMITH_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Render a YAML page layout into an HTML document.")
def render(
    *,
    layout: typ.Annotated[Path, Parameter(help="Path to the page layout YAML")],
    output: typ.Annotated[
        Path, Parameter(help="Where to write the HTML document")
    ] = DEFAULT_OUTPUT,
    editable: typ.Annotated[
        bool, Parameter(help="Add edit, delete and insert controls")
    ] = False,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Overlay settings YAML; defaults to the layout file"),
    ] = None,
    htmx_src: typ.Annotated[
        str | None, Parameter(help="Script URL for the client runtime")
    ] = None,
) -> None:
    """Render ``layout`` to ``output`` and print the written path.

    Parameters
    ----------
    layout : Path
        YAML file with a ``page`` block.
    output : Path, optional
        Destination file; parent directories are created.
    editable : bool, optional
        Render the editing overlay.
    config : Path or None, optional
        YAML file with an ``overlay`` block. When ``None`` the layout file's
        own ``overlay`` block (or the defaults) applies.
    htmx_src : str or None, optional
        Script tag source added to the document head.

    Raises
    ------
    ConfigurationError
        If either YAML file is malformed or describes an invalid page.
    CapacityError
        If a row lists more modules than it can hold.
    """
    page_layout = load_page_layout(layout)
    overlay = load_overlay_config(config or layout)
    builder = DocumentBuilder(
        page_layout, overlay, editable=editable, htmx_src=htmx_src
    )
    written = builder.run(output)
    print(f"wrote {_format_path(written)}")


def configure_logging() -> None:
    """Configure the root logger from ``PAGESMITH_LOG_LEVEL`` (default WARNING)."""
    level_name = os.getenv(LOG_LEVEL_ENV, "WARNING").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def main() -> None:
    """Invoke the Cyclopts application that powers the ``pages`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    configure_logging()
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
