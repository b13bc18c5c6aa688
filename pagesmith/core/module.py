"""Composite nodes with a build-once content lifecycle.

A :class:`Module` assembles its children the first time it is built, either
by :meth:`~pagesmith.core.nodes.Tag.render` or by
:meth:`~pagesmith.core.template.Template.of`. Later renders reuse the same
children. Call :meth:`Module.rebuild_content` after mutating the state that
:meth:`Module.build_content` reads.
"""

from __future__ import annotations

import logging

from pagesmith.core.nodes import Tag, validate_dom_id
from pagesmith.errors import ConfigurationError

logger = logging.getLogger(__name__)

_WIDTH_MESSAGE = (
    "Modules should not set width directly. Use a container or layout to "
    "control module width."
)


class Module(Tag):
    """Base class for self-assembling page sections.

    Subclasses implement :meth:`build_content` and add children there. The
    ``module`` class is merged into the element before the first build.
    """

    def __init__(
        self,
        name: str = "div",
        *,
        title: str | None = None,
        module_id: str | None = None,
    ) -> None:
        super().__init__(name)
        self.title = title
        self._module_id: str | None = None
        self._build_count = 0
        if module_id is not None:
            self.module_id = module_id

    @property
    def module_id(self) -> str | None:
        """Element id of the module, or ``None`` when unset."""
        return self._module_id

    @module_id.setter
    def module_id(self, value: str) -> None:
        self._module_id = validate_dom_id(value)
        self.set_attribute("id", value)

    @property
    def build_count(self) -> int:
        """Number of times :meth:`build_content` has run."""
        return self._build_count

    def assemble(self) -> None:
        self.add_class("module")
        self.build_content()
        self._build_count += 1

    def build_content(self) -> None:
        """Add the module's children. Called once per build."""
        raise NotImplementedError

    def rebuild_content(self) -> None:
        """Discard the current children and build them again."""
        logger.debug(
            "rebuilding %s %r", type(self).__name__, self._module_id or self.title
        )
        self.clear_children()
        self.reset_build()
        self.build()

    def set_width(self, width: str) -> None:
        raise ConfigurationError(_WIDTH_MESSAGE)

    def set_max_width(self, max_width: str) -> None:
        raise ConfigurationError(_WIDTH_MESSAGE)

    def set_min_width(self, min_width: str) -> None:
        raise ConfigurationError(_WIDTH_MESSAGE)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(module_id={self._module_id!r}, "
            f"title={self.title!r}, state={self.state.name})"
        )


__all__ = ["Module"]
