"""Render outline bodies as HTML with syntax-highlighted code snippets.

This is the body sub-transcoder used for entry bodies and for the header and
footer blocks: Markdown paragraphs go through python-markdown, fenced code is
highlighted by Pygments, and nested outline nodes fall back to plain
``<section>`` blocks with a heading.
"""

from __future__ import annotations

import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown.extensions import Extension

    from timeline_pages.outline import OutlineNode
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

FENCE_OPEN_PATTERN = re.compile(
    r"^(`{3,}|~{3,})[ \t]*([A-Za-z0-9_+#.-]+)?[^\n]*\n.*?^\1[ \t]*$",
    re.MULTILINE | re.DOTALL,
)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
MAX_HEADING_LEVEL = 6
MARKDOWN_EXTENSIONS = ("fenced_code", "codehilite", "tables", "sane_lists")


class HtmlContentRenderer:
    """Render markdown bodies and nested outline sections with consistent styling."""

    def __init__(self, pygments_style: str = "monokai") -> None:
        """Create a renderer whose code blocks use ``pygments_style``.

        One python-markdown converter is built here and reset between bodies.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")
        extensions: list[Extension | str] = [*MARKDOWN_EXTENSIONS]
        self._md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "css_class": "codehilite",
                    "guess_lang": False,
                    "linenums": False,
                    "pygments_style": pygments_style,
                }
            },
        )

    @property
    def stylesheet(self) -> str:
        """CSS rules for ``.codehilite`` blocks in the configured style."""
        return self._formatter.get_style_defs(".codehilite")

    def markdown(self, text: str) -> str:
        """Convert one markdown body; blank bodies produce an empty string."""
        source = self._normalize_fenced_blocks(text)
        if not source.strip():
            return ""
        html = self._md.reset().convert(source)
        return self._annotate_codehilite(html, source)

    def node_content(
        self,
        node: OutlineNode,
        *,
        heading_level: int,
        include: cabc.Callable[[OutlineNode], bool] | None = None,
    ) -> str:
        """Render a node's body followed by its children as generic sections.

        Parameters
        ----------
        node : OutlineNode
            Node whose contents (not its own heading) are rendered.
        heading_level : int
            HTML heading level used for the node's direct children.
        include : Callable[[OutlineNode], bool], optional
            Predicate deciding which children are rendered; excluded children
            are skipped along with their descendants.

        Returns
        -------
        str
            Concatenated HTML of the body and nested sections.
        """
        parts = [self.markdown(node.body)]
        for child in node.children:
            if include is not None and not include(child):
                continue
            parts.append(self.section(child, heading_level=heading_level, include=include))
        return "\n".join(part for part in parts if part)

    def section(
        self,
        node: OutlineNode,
        *,
        heading_level: int,
        include: cabc.Callable[[OutlineNode], bool] | None = None,
    ) -> str:
        """Render ``node`` as a ``<section>`` with a heading and its contents."""
        level = min(max(heading_level, 1), MAX_HEADING_LEVEL)
        inner = self.node_content(node, heading_level=level + 1, include=include)
        parts = [f"<h{level}>{escape(node.title)}</h{level}>"]
        if inner:
            parts.append(inner)
        return "<section>\n" + "\n".join(parts) + "\n</section>"

    def _annotate_codehilite(self, html: str, source_markdown: str) -> str:
        """Tag highlighted blocks with the language named on their opening fence."""
        languages = iter(
            fence.group(2) or "text"
            for fence in FENCE_OPEN_PATTERN.finditer(source_markdown)
        )

        def _tag(_match: re.Match[str]) -> str:
            language = escape(next(languages, "text"), quote=True)
            return f'<div class="codehilite" data-language="{language}">'

        return CODEHILITE_OPEN_TAG.sub(_tag, html)

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        """Dedent fences so outline bodies indented under list items still parse."""
        return FENCED_INDENT_PATTERN.sub(r"\1", text)


__all__ = ["FENCE_OPEN_PATTERN", "HtmlContentRenderer"]
