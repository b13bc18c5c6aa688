"""Node tree, slots, templates and the module lifecycle."""

from __future__ import annotations

from .module import Module
from .nodes import (
    Attribute,
    BuildState,
    Node,
    RawHtml,
    Tag,
    Text,
    escape_html,
    tag,
    validate_css_unit,
    validate_dom_id,
)
from .slots import RenderContext, RenderContextBuilder, RenderPolicy, Slot, SlotKey
from .template import ComponentSegment, Template, TemplateComponent

__all__ = [
    "Attribute",
    "BuildState",
    "ComponentSegment",
    "Module",
    "Node",
    "RawHtml",
    "RenderContext",
    "RenderContextBuilder",
    "RenderPolicy",
    "Slot",
    "SlotKey",
    "Tag",
    "Template",
    "TemplateComponent",
    "Text",
    "escape_html",
    "tag",
    "validate_css_unit",
    "validate_dom_id",
]
