"""Server-side HTML generation with compiled templates and an editing overlay.

pagesmith builds pages from a tree of nodes that render to HTML strings,
escaping text by default. Trees can be compiled once into a
:class:`~pagesmith.core.Template` and rendered many times against a
:class:`~pagesmith.core.RenderContext`. :class:`~pagesmith.core.Module`
subclasses assemble their content once, and the :mod:`pagesmith.editing`
overlay wraps modules, rows and pages with edit, delete and insert controls
for an htmx-style client runtime.

Exports
-------
- ``app``: Cyclopts application for the ``pages`` command.
- ``main``: Convenience function that configures logging and runs ``app``.

Examples
--------
>>> from pagesmith.core import RenderContext, Slot, SlotKey, Template, tag
>>> name = SlotKey("name")
>>> template = Template.of(tag("p", Slot(name)))
>>> template.render(RenderContext.of({name: "<Ada>"}))
'<p>&lt;Ada&gt;</p>'
"""

from __future__ import annotations

from .cli import app, main
from .errors import CapacityError, ConfigurationError, PagesmithError

__all__ = ["CapacityError", "ConfigurationError", "PagesmithError", "app", "main"]
