"""Compile node trees once and render them many times.

:meth:`Template.of` walks a tree a single time. Tag markup and text leaves are
captured as plain strings and every :class:`~pagesmith.core.slots.Slot`
becomes a typed substitution point. Any other node (markdown, a nested
:class:`TemplateComponent`, a custom :class:`~pagesmith.core.nodes.Node`) is
kept as a component segment and rendered with the supplied
:class:`~pagesmith.core.slots.RenderContext` on every render, so compiled
and direct renders of the same tree agree.

Substitution never searches the captured markup, so user text that happens
to contain ``{{SLOT:name}}`` is left alone. The same tokens still appear in
:attr:`Template.source` for inspection and debugging.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from pagesmith._constants import COMPONENT_PLACEHOLDER_TEMPLATE
from pagesmith.core.nodes import Node, RawHtml, Tag, Text
from pagesmith.core.slots import RenderContext, Slot, SlotKey

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class StaticSegment:
    """Markup captured at compile time."""

    html: str


@dc.dataclass(frozen=True, slots=True)
class SlotSegment:
    """Point where a context value is substituted."""

    key: SlotKey[typ.Any]


@dc.dataclass(frozen=True, slots=True)
class ComponentSegment:
    """Node rendered with the render-time context on every render."""

    node: Node

    @property
    def placeholder(self) -> str:
        """Marker standing in for the node in :attr:`Template.source`."""
        return COMPONENT_PLACEHOLDER_TEMPLATE.format(name=type(self.node).__name__)


Segment = StaticSegment | SlotSegment | ComponentSegment


class _Compiler:
    """Accumulate segments during a single depth-first traversal."""

    def __init__(self) -> None:
        self.segments: list[Segment] = []
        self._pending: list[str] = []

    def static(self, html: str) -> None:
        if html:
            self._pending.append(html)

    def dynamic(self, segment: SlotSegment | ComponentSegment) -> None:
        self._flush()
        self.segments.append(segment)

    def visit(self, node: Node) -> None:
        match node:
            case Slot():
                self.dynamic(SlotSegment(node.key))
            case Tag():
                node.build()
                self.static(node.open_tag())
                if node.self_closing:
                    return
                self.static(node.render_inner_text())
                for child in node.children:
                    self.visit(child)
                self.static(node.close_tag())
            case Text() | RawHtml():
                self.static(node.render())
            case _:
                self.dynamic(ComponentSegment(node))

    def finish(self) -> tuple[Segment, ...]:
        self._flush()
        return tuple(self.segments)

    def _flush(self) -> None:
        if self._pending:
            self.segments.append(StaticSegment("".join(self._pending)))
            self._pending.clear()


@dc.dataclass(frozen=True, slots=True)
class Template:
    """Immutable compiled form of a node tree.

    Attributes
    ----------
    source : str
        Captured markup with a ``{{SLOT:<name>}}`` token at each slot and a
        ``{{COMPONENT:<type>}}`` token at each live component.
    segments : tuple of StaticSegment, SlotSegment or ComponentSegment
        Typed parts used for substitution; adjacent static parts are merged.
    """

    source: str
    segments: tuple[Segment, ...]

    @classmethod
    def of(cls, root: Node) -> Template:
        """Compile ``root`` with exactly one traversal.

        Tags (including modules) met on the way are built once here. Nodes
        that are neither tags, text leaves nor slots are kept as component
        segments and rendered on every :meth:`render`.
        """
        compiler = _Compiler()
        compiler.visit(root)
        segments = compiler.finish()
        source = "".join(_source_text(segment) for segment in segments)
        template = cls(source=source, segments=segments)
        logger.debug(
            "compiled template with %d segments and slots %s",
            len(segments),
            [key.name for key in template.slot_keys],
        )
        return template

    @property
    def slot_keys(self) -> tuple[SlotKey[typ.Any], ...]:
        """Keys referenced by the template in document order."""
        return tuple(
            segment.key for segment in self.segments if isinstance(segment, SlotSegment)
        )

    def render(self, context: RenderContext | None = None) -> str:
        """Substitute each slot with its resolved value from ``context``.

        Slots with no value and no default render as ``""``.
        """
        if context is None:
            context = RenderContext.empty()
        parts: list[str] = []
        for segment in self.segments:
            match segment:
                case StaticSegment(html=html):
                    parts.append(html)
                case SlotSegment(key=key):
                    parts.append(context.resolve(key))
                case ComponentSegment(node=node):
                    parts.append(node.render(context))
        return "".join(parts)


def _source_text(segment: Segment) -> str:
    match segment:
        case StaticSegment(html=html):
            return html
        case SlotSegment(key=key):
            return key.placeholder
        case ComponentSegment():
            return segment.placeholder


class TemplateComponent(Node):
    """Node that renders a compiled template with its own bound context."""

    __slots__ = ("context", "template")

    def __init__(self, template: Template, context: RenderContext | None = None) -> None:
        self.template = template
        self.context = context if context is not None else RenderContext.empty()

    def render(self, context: RenderContext | None = None) -> str:
        return self.template.render(self.context)


__all__ = [
    "ComponentSegment",
    "Segment",
    "SlotSegment",
    "StaticSegment",
    "Template",
    "TemplateComponent",
]
