"""Titled content block that can be edited through a form."""

from __future__ import annotations

import typing as typ

from pagesmith.components.markdown import Markdown
from pagesmith.core.module import Module
from pagesmith.core.nodes import tag
from pagesmith.editing.forms import checkbox_field, text_area_field, text_field
from pagesmith.editing.validation import EditableChild, ValidationResult

if typ.TYPE_CHECKING:
    from pagesmith.core.nodes import Node, Tag
    from pagesmith.editing.validation import FormData

MAX_TITLE_LENGTH = 200


class ContentModule(Module):
    """Module showing an optional ``h2`` title above a content body.

    The body is, in order of preference, a custom node, markdown rendered
    from ``content``, or ``content`` as escaped plain text.

    Examples
    --------
    >>> module = ContentModule(title="News", content="Hello", markdown=False)
    >>> module.render()
    '<div class="content-module module"><h2 class="module-title">News</h2><div class="module-content">Hello</div></div>'
    """

    def __init__(
        self,
        *,
        title: str | None = None,
        content: str | None = None,
        markdown: bool = True,
        custom_content: Node | None = None,
        module_id: str | None = None,
    ) -> None:
        super().__init__("div", title=title, module_id=module_id)
        self.add_class("content-module")
        self.content = content
        self.markdown = markdown
        self.custom_content = custom_content

    def build_content(self) -> None:
        if self.title:
            self.append(tag("h2", text=self.title, classes="module-title"))
        wrapper = tag("div", classes="module-content")
        if self.custom_content is not None:
            wrapper.append(self.custom_content)
        elif self.content is not None:
            if self.markdown:
                wrapper.append(Markdown(self.content))
            else:
                wrapper.set_text(self.content)
        self.append(wrapper)

    def build_edit_view(self) -> Tag:
        """Return the title, content and markdown toggle fields."""
        return tag(
            "div",
            text_field("Title", "title", self.title),
            text_area_field("Content", "content", self.content, rows=15),
            checkbox_field("Render as Markdown", "markdown", checked=self.markdown),
            classes="edit-form",
        )

    def validate(self, form: FormData) -> ValidationResult:
        """Reject titles over 200 characters and blank content."""
        errors: list[str] = []
        title = form.get("title")
        if title is not None and len(title) > MAX_TITLE_LENGTH:
            errors.append(f"Title must be less than {MAX_TITLE_LENGTH} characters")
        content = form.get("content")
        if content is None or not content.strip():
            errors.append("Content cannot be empty")
        return ValidationResult.from_errors(errors)

    def apply_edits(self, form: FormData) -> ContentModule:
        """Copy submitted values onto the module and rebuild it.

        An absent ``markdown`` key means the checkbox was cleared.
        """
        if "title" in form:
            self.title = form["title"]
        if "content" in form:
            self.content = form["content"]
        self.markdown = "markdown" in form
        self.rebuild_content()
        return self

    def editable_children(self) -> list[EditableChild]:
        return []


__all__ = ["ContentModule"]
