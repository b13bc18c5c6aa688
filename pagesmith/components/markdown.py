"""Markdown content nodes with escaped raw HTML and highlighted code."""

from __future__ import annotations

import re
import typing as typ
from html import escape

from markdown import Markdown as MarkdownParser
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from pagesmith.core.nodes import Node

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from pagesmith.core.slots import RenderContext

CODE_BLOCK_PATTERN = re.compile(r"```([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)```", re.DOTALL)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
UNSAFE_SCHEMES = ("javascript:", "vbscript:", "data:")
_URL_NOISE = re.compile(r"[\x00-\x20]+")


class EscapeRawHtmlExtension(Extension):
    """Treat raw HTML in markdown source as literal text.

    Removes the block-level HTML preprocessor and the inline HTML pattern so
    ``<script>`` and friends reach the serializer as text and get escaped.
    """

    def extendMarkdown(self, md: MarkdownParser) -> None:  # type: ignore[override]  # noqa: N802
        """Deregister the raw HTML passthroughs on ``md``."""
        md.preprocessors.deregister("html_block", strict=False)
        md.inlinePatterns.deregister("html", strict=False)


class UnsafeLinkExtension(Extension):
    """Drop link and image targets that use executable URL schemes."""

    def extendMarkdown(self, md: MarkdownParser) -> None:  # type: ignore[override]  # noqa: N802
        """Register the unsafe-link treeprocessor on the Markdown instance."""
        md.treeprocessors.register(UnsafeLinkTreeprocessor(md), "pagesmith_unsafe_links", 5)


class UnsafeLinkTreeprocessor(Treeprocessor):
    """Remove ``javascript:``, ``vbscript:`` and ``data:`` hrefs and srcs."""

    def run(self, root: Element) -> Element:
        """Strip unsafe targets from anchors and images in the parsed tree."""
        for element in root.iter():
            attribute = {"a": "href", "img": "src"}.get(element.tag)
            if attribute and is_unsafe_url(element.get(attribute)):
                element.set(attribute, "")
        return root


def is_unsafe_url(target: str | None) -> bool:
    """Return ``True`` when ``target`` uses a scheme that can run script."""
    if not target:
        return False
    normalized = _URL_NOISE.sub("", target).lower()
    return normalized.startswith(UNSAFE_SCHEMES)


class MarkdownRenderer:
    """Render markdown and code snippets with consistent highlighting."""

    def __init__(self, pygments_style: str = "default") -> None:
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def render(self, text: str, *, trusted: bool = False) -> str:
        """Convert ``text`` to HTML.

        Parameters
        ----------
        text : str
            Markdown source.
        trusted : bool, optional
            Pass raw HTML in the source through unchanged. Unsafe link
            schemes are removed either way.
        """
        normalized = FENCED_INDENT_PATTERN.sub(r"\1", text)
        if not normalized.strip():
            return ""
        extensions: list[Extension | str] = [
            "fenced_code",
            "codehilite",
            "tables",
            "sane_lists",
            UnsafeLinkExtension(),
        ]
        if not trusted:
            extensions.append(EscapeRawHtmlExtension())
        md = MarkdownParser(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        html = md.convert(normalized)
        return self._annotate_codehilite(html, normalized)

    def code_block(self, code: str, language: str | None = None) -> str:
        """Render ``code`` as highlighted HTML tagged with ``data-language``.

        Unknown or missing languages fall back to the plain ``text`` lexer.
        """
        lang = language or "text"
        try:
            lexer = get_lexer_by_name(lang)
        except ClassNotFound:
            lexer = get_lexer_by_name("text")
        html = highlight(code, lexer, self._formatter)
        safe_lang = escape(lang, quote=True)
        return CODEHILITE_OPEN_TAG.sub(
            f'<div class="codehilite" data-language="{safe_lang}">', html, 1
        )

    @staticmethod
    def _annotate_codehilite(html: str, source_markdown: str) -> str:
        languages = [
            match.group(1) or "text"
            for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "text")
            return f'<div class="codehilite" data-language="{escape(lang, quote=True)}">'

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))


_default_renderer = MarkdownRenderer()


class Markdown(Node):
    """Node rendering markdown source to HTML.

    Raw HTML in the source is escaped unless ``trusted`` is set. Only mark
    text as trusted when it comes from the application itself.
    """

    __slots__ = ("renderer", "text", "trusted")

    def __init__(
        self,
        text: str,
        *,
        trusted: bool = False,
        renderer: MarkdownRenderer | None = None,
    ) -> None:
        self.text = text or ""
        self.trusted = trusted
        self.renderer = renderer or _default_renderer

    def render(self, context: RenderContext | None = None) -> str:
        return self.renderer.render(self.text, trusted=self.trusted)


class CodeBlock(Node):
    """Node rendering a highlighted source snippet."""

    __slots__ = ("code", "language", "renderer")

    def __init__(
        self,
        code: str,
        language: str | None = None,
        *,
        renderer: MarkdownRenderer | None = None,
    ) -> None:
        self.code = code
        self.language = language
        self.renderer = renderer or _default_renderer

    def render(self, context: RenderContext | None = None) -> str:
        return self.renderer.code_block(self.code, self.language)


def code_block(code: str, language: str | None = None) -> CodeBlock:
    """Return a :class:`CodeBlock` for ``code`` in ``language``."""
    return CodeBlock(code, language)


__all__ = [
    "CodeBlock",
    "EscapeRawHtmlExtension",
    "Markdown",
    "MarkdownRenderer",
    "UnsafeLinkExtension",
    "code_block",
    "is_unsafe_url",
]
