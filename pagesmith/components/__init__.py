"""Element builders, dialogs and markdown nodes."""

from .elements import (
    AlertStyle,
    ButtonStyle,
    Modal,
    alert,
    button,
    checkbox,
    column,
    div,
    heading,
    modal,
    paragraph,
    row,
    span,
    text_area,
    text_input,
)
from .markdown import CodeBlock, Markdown, MarkdownRenderer, code_block

__all__ = [
    "AlertStyle",
    "ButtonStyle",
    "CodeBlock",
    "Markdown",
    "MarkdownRenderer",
    "Modal",
    "alert",
    "button",
    "checkbox",
    "code_block",
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
