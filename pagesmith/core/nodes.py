"""Renderable node primitives and the generic tag tree.

Every piece of markup pagesmith produces is a :class:`Node`: something that
turns into an HTML string given an optional
:class:`~pagesmith.core.slots.RenderContext`. Leaves are :class:`Text`
(escaped) and :class:`RawHtml` (trusted). Composite markup is a single
generic :class:`Tag` parameterized by its tag name; concept-specific shapes
are produced by builder functions such as :func:`tag` rather than by
subclassing.

Escaping is the default on every text path. The only ways to emit raw markup
are :class:`RawHtml` and :meth:`Tag.set_unsafe_html`; callers must never feed
either with unvalidated external input.

Examples
--------
>>> from pagesmith.core.nodes import tag
>>> tag("p", text="<b>x</b>", classes="lead").render()
'<p class="lead">&lt;b&gt;x&lt;/b&gt;</p>'
>>> tag("img", attrs={"src": "/a.png", "alt": ""}, self_closing=True).render()
'<img src="/a.png" alt />'
"""

from __future__ import annotations

import abc
import collections.abc as cabc
import dataclasses as dc
import enum
import typing as typ
from html import escape

from pagesmith._constants import CSS_UNIT_PATTERN, DOM_ID_PATTERN
from pagesmith.errors import ConfigurationError

if typ.TYPE_CHECKING:
    from pagesmith.core.slots import RenderContext


def escape_html(text: str) -> str:
    """Return ``text`` with ``< > & " '`` replaced by HTML entities."""
    return escape(text, quote=True)


def validate_dom_id(value: str | None) -> str:
    """Return ``value`` unchanged when it is usable as an element id.

    Raises
    ------
    ConfigurationError
        If ``value`` is empty or does not match ``^[a-zA-Z][a-zA-Z0-9_-]*$``.
    """
    if not value or not DOM_ID_PATTERN.match(value):
        msg = (
            "DOM ids must start with a letter and contain only letters, "
            f"numbers, hyphens, and underscores. Got: {value!r}"
        )
        raise ConfigurationError(msg)
    return value


def validate_css_unit(value: str | None, *, prop: str = "width") -> str:
    """Return ``value`` when it matches the supported CSS length grammar."""
    if value is None or not CSS_UNIT_PATTERN.match(value.strip()):
        msg = (
            f"Invalid CSS {prop} value: {value!r}. Must be a valid CSS unit "
            "(e.g., '300px', '50%', '20rem', 'auto')"
        )
        raise ConfigurationError(msg)
    return value.strip()


class BuildState(enum.Enum):
    """Lifecycle of a node's one-time structural assembly."""

    UNBUILT = "unbuilt"
    BUILT = "built"


class Node(abc.ABC):
    """Anything that renders to an HTML string."""

    @abc.abstractmethod
    def render(self, context: RenderContext | None = None) -> str:
        """Render this node using ``context`` to resolve dynamic values."""

    def __str__(self) -> str:
        return self.render()


class Text(Node):
    """Leaf text that is always escaped."""

    __slots__ = ("value",)

    def __init__(self, value: object) -> None:
        self.value = "" if value is None else str(value)

    def render(self, context: RenderContext | None = None) -> str:
        return escape_html(self.value)


class RawHtml(Node):
    """Leaf markup emitted verbatim. Only for content the caller trusts."""

    __slots__ = ("html",)

    def __init__(self, html: str) -> None:
        self.html = html

    def render(self, context: RenderContext | None = None) -> str:
        return self.html


@dc.dataclass(frozen=True, slots=True)
class Attribute:
    """A single markup attribute.

    Attributes
    ----------
    name : str
        Attribute name; the identity used for de-duplication on a tag.
    value : str or None
        Attribute value. ``None`` or ``""`` renders as a boolean attribute.
    """

    name: str
    value: str | None = None

    def render(self) -> str:
        """Return the attribute with a leading space and an escaped value."""
        if not self.value:
            return f" {self.name}"
        return f' {self.name}="{escape_html(self.value)}"'


class Tag(Node):
    """Generic element node with attributes, inner text and children.

    Parameters
    ----------
    name : str
        Element name, e.g. ``"div"``.
    self_closing : bool, optional
        Render as ``<name ... />`` with no inner content.

    Notes
    -----
    A tag assembles its structure at most once: the first :meth:`render`
    (or an explicit :meth:`build`) runs :meth:`assemble` and flips
    :attr:`state` to :attr:`BuildState.BUILT`. Subclasses add structural
    children from :meth:`assemble`, never from :meth:`render`, so repeated
    renders cannot duplicate markup.
    """

    def __init__(self, name: str, *, self_closing: bool = False) -> None:
        self._name = name
        self._self_closing = self_closing
        self._attributes: list[Attribute] = []
        self._children: list[Node] = []
        self._inner_text = ""
        self._trusted_html = False
        self._state = BuildState.UNBUILT

    @property
    def name(self) -> str:
        """Element name."""
        return self._name

    @property
    def self_closing(self) -> bool:
        """Whether the element renders without a closing tag."""
        return self._self_closing

    @property
    def attributes(self) -> tuple[Attribute, ...]:
        """Attributes in insertion order."""
        return tuple(self._attributes)

    @property
    def children(self) -> tuple[Node, ...]:
        """Child nodes in insertion order."""
        return tuple(self._children)

    @property
    def inner_text(self) -> str:
        """Text rendered before the children."""
        return self._inner_text

    @property
    def trusted_html(self) -> bool:
        """Whether :attr:`inner_text` bypasses escaping."""
        return self._trusted_html

    @property
    def state(self) -> BuildState:
        """Current build lifecycle state."""
        return self._state

    @property
    def built(self) -> bool:
        """Return ``True`` once :meth:`assemble` has run."""
        return self._state is BuildState.BUILT

    def set_attribute(self, name: str, value: str | None = None) -> None:
        """Set ``name`` to ``value``, replacing any existing attribute of that name."""
        attribute = Attribute(name, value)
        for index, existing in enumerate(self._attributes):
            if existing.name == name:
                self._attributes[index] = attribute
                return
        self._attributes.append(attribute)

    def get_attribute(self, name: str) -> str | None:
        """Return the value of ``name`` or ``None`` when absent."""
        for attribute in self._attributes:
            if attribute.name == name:
                return attribute.value
        return None

    def has_attribute(self, name: str) -> bool:
        """Return whether an attribute called ``name`` is set."""
        return any(attribute.name == name for attribute in self._attributes)

    def remove_attribute(self, name: str) -> None:
        """Drop the attribute called ``name`` if present."""
        self._attributes = [a for a in self._attributes if a.name != name]

    def add_class(self, class_names: str) -> None:
        """Merge space-separated ``class_names`` into the ``class`` attribute."""
        tokens = (self.get_attribute("class") or "").split()
        for token in class_names.split():
            if token not in tokens:
                tokens.append(token)
        if tokens:
            self.set_attribute("class", " ".join(tokens))

    def has_class(self, class_name: str) -> bool:
        """Return whether ``class_name`` is one of the tag's classes."""
        return class_name in (self.get_attribute("class") or "").split()

    def append(self, child: Node) -> None:
        """Add ``child`` after the existing children."""
        self._children.append(child)

    def extend(self, children: cabc.Iterable[Node]) -> None:
        """Add every node in ``children`` in order."""
        self._children.extend(children)

    def clear_children(self) -> None:
        """Remove every child node."""
        self._children.clear()

    def set_text(self, text: str | None) -> None:
        """Set inner text that will be escaped at render time."""
        self._inner_text = text or ""
        self._trusted_html = False

    def set_unsafe_html(self, html: str | None) -> None:
        """Set inner markup that is emitted without escaping.

        Only pass markup produced by a trusted source (for example the
        :class:`~pagesmith.components.markdown.Markdown` renderer). Never pass
        user input here.
        """
        self._inner_text = html or ""
        self._trusted_html = True

    def set_width(self, width: str) -> None:
        """Set the CSS ``width`` declaration after validating the unit."""
        self._add_style("width", validate_css_unit(width, prop="width"))

    def set_max_width(self, max_width: str) -> None:
        """Set the CSS ``max-width`` declaration after validating the unit."""
        self._add_style("max-width", validate_css_unit(max_width, prop="max-width"))

    def set_min_width(self, min_width: str) -> None:
        """Set the CSS ``min-width`` declaration after validating the unit."""
        self._add_style("min-width", validate_css_unit(min_width, prop="min-width"))

    def _add_style(self, prop: str, value: str) -> None:
        """Insert or replace one declaration in the ``style`` attribute."""
        declarations: dict[str, str] = {}
        for chunk in (self.get_attribute("style") or "").split(";"):
            key, sep, existing = chunk.partition(":")
            if sep and key.strip():
                declarations[key.strip()] = existing.strip()
        declarations[prop] = value
        style = "; ".join(f"{key}: {val}" for key, val in declarations.items())
        self.set_attribute("style", f"{style};")

    def build(self) -> None:
        """Run :meth:`assemble` exactly once."""
        if self._state is BuildState.UNBUILT:
            self.assemble()
            self._state = BuildState.BUILT

    def reset_build(self) -> None:
        """Return to :attr:`BuildState.UNBUILT` so the next build reassembles."""
        self._state = BuildState.UNBUILT

    def assemble(self) -> None:
        """Add structural children; called once by :meth:`build`."""

    def open_tag(self) -> str:
        """Return the opening tag, including ``/>`` for self-closing tags."""
        attrs = "".join(attribute.render() for attribute in self._attributes)
        if self._self_closing:
            return f"<{self._name}{attrs} />"
        return f"<{self._name}{attrs}>"

    def close_tag(self) -> str:
        """Return the closing tag, or ``""`` for self-closing tags."""
        return "" if self._self_closing else f"</{self._name}>"

    def render_inner_text(self) -> str:
        """Return the inner text, escaped unless marked trusted."""
        if not self._inner_text:
            return ""
        return self._inner_text if self._trusted_html else escape_html(self._inner_text)

    def render(self, context: RenderContext | None = None) -> str:
        """Render the element, its inner text and children depth first."""
        self.build()
        opening = self.open_tag()
        if self._self_closing:
            return opening
        parts = [opening, self.render_inner_text()]
        parts.extend(child.render(context) for child in self._children)
        parts.append(self.close_tag())
        return "".join(parts)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r}, children={len(self._children)})"


ClassSpec = str | cabc.Iterable[str] | None


def apply_common(
    node: Tag,
    *,
    classes: ClassSpec = None,
    dom_id: str | None = None,
    attrs: cabc.Mapping[str, str | None] | None = None,
) -> Tag:
    """Apply class, id and attribute keyword arguments shared by builders."""
    if dom_id is not None:
        node.set_attribute("id", validate_dom_id(dom_id))
    if classes:
        node.add_class(classes if isinstance(classes, str) else " ".join(classes))
    for key, value in (attrs or {}).items():
        if key == "class" and value:
            node.add_class(value)
        else:
            node.set_attribute(key, value)
    return node


def tag(
    name: str,
    *children: Node | str,
    text: str | None = None,
    html: str | None = None,
    classes: ClassSpec = None,
    dom_id: str | None = None,
    attrs: cabc.Mapping[str, str | None] | None = None,
    self_closing: bool = False,
) -> Tag:
    """Build a :class:`Tag` in a single call.

    Parameters
    ----------
    name : str
        Element name.
    *children : Node or str
        Child nodes; plain strings become escaped :class:`Text` leaves.
    text : str, optional
        Escaped inner text.
    html : str, optional
        Trusted inner markup. Mutually exclusive with ``text``.
    classes : str or iterable of str, optional
        Class names merged into the ``class`` attribute.
    dom_id : str, optional
        Element id, validated with :func:`validate_dom_id`.
    attrs : Mapping[str, str | None], optional
        Additional attributes in insertion order.
    self_closing : bool, optional
        Render without a closing tag.

    Returns
    -------
    Tag
        The assembled element.

    Raises
    ------
    ConfigurationError
        If both ``text`` and ``html`` are given or ``dom_id`` is invalid.
    """
    if text is not None and html is not None:
        msg = "Pass either text or html to tag(), not both."
        raise ConfigurationError(msg)
    node = Tag(name, self_closing=self_closing)
    apply_common(node, classes=classes, dom_id=dom_id, attrs=attrs)
    if text is not None:
        node.set_text(text)
    elif html is not None:
        node.set_unsafe_html(html)
    node.extend(Text(child) if isinstance(child, str) else child for child in children)
    return node


__all__ = [
    "Attribute",
    "BuildState",
    "ClassSpec",
    "Node",
    "RawHtml",
    "Tag",
    "Text",
    "apply_common",
    "escape_html",
    "tag",
    "validate_css_unit",
    "validate_dom_id",
]
