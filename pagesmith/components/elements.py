"""Builder functions for common elements.

Each builder returns a plain :class:`~pagesmith.core.nodes.Tag` configured
for one concept (a button, a grid column, a form input) instead of a
dedicated subclass. The exception is :class:`Modal`, whose structure is
assembled from several optional parts at build time.

Examples
--------
>>> from pagesmith.components.elements import ButtonStyle, button
>>> button("Save", style=ButtonStyle.PRIMARY).render()
'<button type="button" class="btn btn-primary">Save</button>'
"""

from __future__ import annotations

import collections.abc as cabc
import enum
import itertools

from pagesmith._constants import GRID_COLUMNS
from pagesmith.core.nodes import ClassSpec, Node, Tag, apply_common, tag, validate_dom_id
from pagesmith.errors import ConfigurationError

Attrs = cabc.Mapping[str, str | None] | None

_modal_ids = itertools.count(1)


class ButtonStyle(enum.Enum):
    """Visual variants mapped to ``btn-*`` classes."""

    PRIMARY = "btn-primary"
    SECONDARY = "btn-secondary"
    SUCCESS = "btn-success"
    DANGER = "btn-danger"
    WARNING = "btn-warning"
    INFO = "btn-info"
    LINK = "btn-link"


class AlertStyle(enum.Enum):
    """Alert colour variants."""

    INFO = "alert-info"
    SUCCESS = "alert-success"
    WARNING = "alert-warning"
    DANGER = "alert-danger"


def div(
    *children: Node | str,
    text: str | None = None,
    classes: ClassSpec = None,
    dom_id: str | None = None,
    attrs: Attrs = None,
) -> Tag:
    """Return a ``<div>``."""
    return tag("div", *children, text=text, classes=classes, dom_id=dom_id, attrs=attrs)


def span(
    text: str | None = None,
    *,
    classes: ClassSpec = None,
    attrs: Attrs = None,
) -> Tag:
    """Return a ``<span>`` holding escaped ``text``."""
    return tag("span", text=text, classes=classes, attrs=attrs)


def paragraph(
    text: str | None = None,
    *,
    classes: ClassSpec = None,
    attrs: Attrs = None,
) -> Tag:
    """Return a ``<p>`` holding escaped ``text``."""
    return tag("p", text=text, classes=classes, attrs=attrs)


def heading(
    level: int,
    text: str,
    *,
    classes: ClassSpec = None,
    dom_id: str | None = None,
) -> Tag:
    """Return an ``<h1>`` to ``<h6>`` element.

    Raises
    ------
    ConfigurationError
        If ``level`` is outside 1..6.
    """
    if not 1 <= level <= 6:  # noqa: PLR2004
        msg = f"Heading level must be between 1 and 6. Got: {level}"
        raise ConfigurationError(msg)
    return tag(f"h{level}", text=text, classes=classes, dom_id=dom_id)


def button(
    label: str,
    *,
    style: ButtonStyle = ButtonStyle.PRIMARY,
    button_type: str = "button",
    small: bool = False,
    classes: ClassSpec = None,
    dom_id: str | None = None,
    attrs: Attrs = None,
) -> Tag:
    """Return a ``<button>`` styled with ``btn`` and the variant class."""
    node = tag("button", text=label, attrs={"type": button_type})
    node.add_class(f"btn {style.value}")
    if small:
        node.add_class("btn-sm")
    return apply_common(node, classes=classes, dom_id=dom_id, attrs=attrs)


def text_input(
    name: str,
    *,
    value: str | None = None,
    placeholder: str | None = None,
    input_type: str = "text",
    max_width: str | None = None,
) -> Tag:
    """Return a self-closing ``<input>`` for single-line text."""
    node = tag(
        "input",
        classes="form-input",
        attrs={"type": input_type, "name": name},
        self_closing=True,
    )
    if value:
        node.set_attribute("value", value)
    if placeholder:
        node.set_attribute("placeholder", placeholder)
    if max_width:
        node.set_max_width(max_width)
    return node


def text_area(
    name: str,
    *,
    value: str | None = None,
    rows: int | None = None,
    max_width: str | None = None,
) -> Tag:
    """Return a ``<textarea>`` whose escaped text is ``value``."""
    node = tag("textarea", text=value or "", classes="form-textarea", attrs={"name": name})
    if rows is not None:
        node.set_attribute("rows", str(rows))
    if max_width:
        node.set_max_width(max_width)
    return node


def checkbox(
    name: str,
    *,
    value: str = "true",
    label: str | None = None,
    checked: bool = False,
) -> Tag:
    """Return a ``<label>`` wrapping a checkbox input and its caption."""
    box = tag(
        "input",
        attrs={"type": "checkbox", "name": name, "value": value},
        self_closing=True,
    )
    if checked:
        box.set_attribute("checked")
    wrapper = tag("label", box, classes="form-checkbox")
    if label:
        wrapper.append(tag("span", text=label))
    return wrapper


def alert(message: str, style: AlertStyle = AlertStyle.INFO) -> Tag:
    """Return an ``alert`` box with escaped ``message``."""
    return tag("div", text=message, classes=f"alert {style.value}", attrs={"role": "alert"})


def row(*children: Node, classes: ClassSpec = None, dom_id: str | None = None) -> Tag:
    """Return a grid ``row``; non-column children are wrapped in a ``col`` div."""
    node = tag("div", classes="row", dom_id=dom_id)
    if classes:
        apply_common(node, classes=classes)
    for child in children:
        if isinstance(child, Tag) and child.has_class("col"):
            node.append(child)
        else:
            node.append(tag("div", child, classes="col"))
    return node


def column(
    *children: Node,
    width: int | None = None,
    classes: ClassSpec = None,
) -> Tag:
    """Return a grid column, optionally ``col-<width>`` of twelve.

    Raises
    ------
    ConfigurationError
        If ``width`` is outside 1..12.
    """
    node = tag("div", *children, classes="col")
    if width is not None:
        if not 1 <= width <= GRID_COLUMNS:
            msg = f"Column width must be between 1 and {GRID_COLUMNS}. Got: {width}"
            raise ConfigurationError(msg)
        node.add_class(f"col-{width}")
    if classes:
        apply_common(node, classes=classes)
    return node


class Modal(Tag):
    """Dialog rendered as a backdrop wrapping a header, body and footer.

    Parameters
    ----------
    title : str, optional
        Escaped heading text.
    body, footer : Node, optional
        Content placed in ``modal-body`` and ``modal-footer``.
    modal_id : str, optional
        Element id; generated as ``modal-<n>`` when omitted.
    close_on_backdrop, close_on_escape, show_close_button : bool
        Dismissal affordances emitted as inline handlers.
    """

    def __init__(
        self,
        *,
        title: str | None = None,
        body: Node | None = None,
        footer: Node | None = None,
        modal_id: str | None = None,
        close_on_backdrop: bool = True,
        close_on_escape: bool = True,
        show_close_button: bool = True,
    ) -> None:
        super().__init__("div")
        self.title = title
        self.body = body
        self.footer = footer
        self.modal_id = (
            validate_dom_id(modal_id) if modal_id is not None else f"modal-{next(_modal_ids)}"
        )
        self.close_on_backdrop = close_on_backdrop
        self.close_on_escape = close_on_escape
        self.show_close_button = show_close_button

    def assemble(self) -> None:
        dismiss = f"document.getElementById('{self.modal_id}').remove()"
        self.add_class("modal-backdrop")
        self.set_attribute("id", self.modal_id)
        if self.close_on_backdrop:
            self.set_attribute("onclick", dismiss)
        if self.close_on_escape:
            self.set_attribute("onkeydown", "if(event.key === 'Escape') this.remove()")
        self.set_attribute("tabindex", "0")

        container = tag(
            "div",
            classes="modal-container",
            attrs={"onclick": "event.stopPropagation()"},
        )
        if self.title is not None or self.show_close_button:
            header = tag("div", classes="modal-header")
            if self.title is not None:
                header.append(tag("h3", text=self.title, classes="modal-title"))
            else:
                header.append(tag("div"))
            if self.show_close_button:
                header.append(
                    tag(
                        "button",
                        html="&times;",
                        classes="modal-close",
                        attrs={
                            "type": "button",
                            "onclick": dismiss,
                            "aria-label": "Close",
                        },
                    )
                )
            container.append(header)
        if self.body is not None:
            container.append(tag("div", self.body, classes="modal-body"))
        if self.footer is not None:
            container.append(tag("div", self.footer, classes="modal-footer"))
        self.append(container)


def modal(
    title: str | None = None,
    body: Node | None = None,
    *,
    footer: Node | None = None,
    modal_id: str | None = None,
) -> Modal:
    """Return a dismissable :class:`Modal` with the default close affordances."""
    return Modal(title=title, body=body, footer=footer, modal_id=modal_id)


__all__ = [
    "AlertStyle",
    "ButtonStyle",
    "Modal",
    "alert",
    "button",
    "checkbox",
    "column",
    "div",
    "heading",
    "modal",
    "paragraph",
    "row",
    "span",
    "text_area",
    "text_input",
]
