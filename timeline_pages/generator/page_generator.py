"""High-level orchestration for timeline page generation.

This module turns an :class:`~timeline_pages.outline.OutlineDocument` into one
HTML document string. It exposes :class:`TimelinePageGenerator`, which runs
a two-phase pipeline:

1. split off the header and footer blocks and collect the category
   :class:`~timeline_pages.vocabulary.Vocabulary` from the remaining nodes;
2. transcode every categorized node, in document order, into an entry
   fragment with :class:`~timeline_pages.generator.entries.EntryTranscoder`.

The results are assembled with the shared Jinja templates. Entries are never
re-sorted by date; the page follows the outline's order.

Example
-------
>>> from timeline_pages.config import ExportOptions
>>> from timeline_pages.outline import build_outline
>>> generator = TimelinePageGenerator(ExportOptions(pretty=False))
>>> html = generator.render(build_outline({"title": "Empty"}))
>>> '<input type="checkbox" id="all" checked>' in html
True
"""

from __future__ import annotations

import itertools
import re
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from timeline_pages.vocabulary import Vocabulary, collect_vocabulary

from .entries import EntryTranscoder
from .models import PageModel, TimelineEntry
from .renderer import HtmlContentRenderer

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from timeline_pages.config import ExportOptions
    from timeline_pages.outline import OutlineDocument, OutlineNode

BLOCK_HEADING_LEVEL = 2


class TimelinePageGenerator:
    """Assemble a timeline page from an outline document."""

    def __init__(
        self, options: ExportOptions, *, templates_dir: Path | None = None
    ) -> None:
        """Initialize the generator with export options and template context.

        Parameters
        ----------
        options : ExportOptions
            Marker patterns, asset URLs, metadata fallbacks and formatting
            settings for the export.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package templates.
        """
        self.options = options
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.page_template = self.env.get_template("timeline_page.jinja")
        self.filter_template = self.env.get_template("filter_bar.jinja")
        self.renderer = HtmlContentRenderer(options.pygments_style)
        self.transcoder = EntryTranscoder(
            self.env, self.renderer, date_format=options.date_format
        )
        self._header_pattern = re.compile(options.header_marker, re.IGNORECASE)
        self._footer_pattern = re.compile(options.footer_marker, re.IGNORECASE)

    def render(self, document: OutlineDocument) -> str:
        """Render ``document`` into the final page markup.

        Returns
        -------
        str
            Complete HTML document (before any pretty-printing).

        Raises
        ------
        EntryDateError
            If a categorized node has a missing or malformed date.
        """
        header, footer, body_nodes = self.split_blocks(document.nodes)
        vocabulary = collect_vocabulary(_walk(body_nodes))
        entries = self.build_entries(body_nodes)
        page = self.build_page_model(
            document,
            vocabulary=vocabulary,
            entries=entries,
            header_html=self._block_html(header),
            footer_html=self._block_html(footer),
        )
        return self.assemble(page)

    def split_blocks(
        self, nodes: list[OutlineNode]
    ) -> tuple[OutlineNode | None, OutlineNode | None, list[OutlineNode]]:
        """Separate the header and footer nodes from the timeline body.

        Only top-level nodes are considered and the first match of each marker
        wins; later matches stay in the body.
        """
        header: OutlineNode | None = None
        footer: OutlineNode | None = None
        body: list[OutlineNode] = []
        for node in nodes:
            if header is None and self._header_pattern.search(node.title):
                header = node
            elif footer is None and self._footer_pattern.search(node.title):
                footer = node
            else:
                body.append(node)
        return header, footer, body

    def build_entries(self, nodes: list[OutlineNode]) -> list[TimelineEntry]:
        """Return timeline entries for every categorized node in document order."""
        entries: list[TimelineEntry] = []
        for node in _walk(nodes):
            entry = self.transcoder.build(node)
            if entry is not None:
                entries.append(entry)
        return entries

    def build_page_model(
        self,
        document: OutlineDocument,
        *,
        vocabulary: Vocabulary,
        entries: list[TimelineEntry],
        header_html: str,
        footer_html: str,
    ) -> PageModel:
        """Combine document metadata, option fallbacks and rendered parts."""
        options = self.options
        bodies = [header_html, footer_html, *(entry.body_html for entry in entries)]
        pygments_css = ""
        if any("codehilite" in html for html in bodies):
            pygments_css = self.renderer.stylesheet
        return PageModel(
            title=document.title or options.title or "",
            description=document.description or options.description or "",
            author=document.author or options.author or "",
            language=document.language or options.language or "",
            stylesheets=list(options.stylesheets),
            scripts=list(options.scripts),
            header_html=header_html,
            footer_html=footer_html,
            filters=vocabulary.filters(),
            entries=entries,
            pygments_css=pygments_css,
        )

    def assemble(self, page: PageModel) -> str:
        """Substitute the page model into the outer template."""
        filter_bar = self.filter_template.render(filters=page.filters)
        fragments = [Markup(self.transcoder.render(entry)) for entry in page.entries]
        html = self.page_template.render(
            page=page,
            header=Markup(page.header_html),
            footer=Markup(page.footer_html),
            filter_bar=Markup(filter_bar),
            entries=fragments,
            pygments_css=Markup(page.pygments_css),
        )
        if not html.endswith("\n"):
            html += "\n"
        return html

    def _block_html(self, node: OutlineNode | None) -> str:
        """Render a header/footer node's contents, or an empty string."""
        if node is None:
            return ""
        return self.renderer.node_content(node, heading_level=BLOCK_HEADING_LEVEL)


def _walk(nodes: list[OutlineNode]) -> cabc.Iterator[OutlineNode]:
    """Yield every node under ``nodes`` in document order."""
    return itertools.chain.from_iterable(node.walk() for node in nodes)


__all__ = ["TimelinePageGenerator"]
