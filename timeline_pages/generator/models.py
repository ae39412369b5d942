"""Shared dataclasses used by the timeline generation pipeline."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt  # noqa: TC003 - used for runtime type metadata
import json


@dc.dataclass(frozen=True, slots=True)
class ImageBlock:
    """Captioned image shown inside an entry."""

    src: str
    caption: str


@dc.dataclass(frozen=True, slots=True)
class TimelineEntry:
    """Structured data passed to the timeline entry template.

    Attributes
    ----------
    title : str
        Raw heading text of the source node.
    id : str
        Slug of ``title`` used as anchor id and link target. Not unique when
        two nodes share a title.
    categories : tuple[str, ...]
        Category slugs in the order they appear on the node; never empty.
    date : datetime.date
        Parsed entry date.
    display_date : str
        Human-readable date shown in the ``<time>`` element.
    body_html : str
        Transcoded node contents.
    icon_color : str or None
        Extra class for the icon container.
    icon_glyph : str or None
        Glyph class for the icon element.
    image : ImageBlock or None
        Present only when both image source and caption were supplied.
    """

    title: str
    id: str
    categories: tuple[str, ...]
    date: dt.date
    display_date: str
    body_html: str
    icon_color: str | None = None
    icon_glyph: str | None = None
    image: ImageBlock | None = None

    @property
    def data_category(self) -> str:
        """Return the JSON array consumed by the client filter engine."""
        return json.dumps(list(self.categories))

    @property
    def datetime_attr(self) -> str:
        """Return the ISO calendar date used for the ``datetime`` attribute."""
        return self.date.isoformat()


@dc.dataclass(slots=True)
class PageModel:
    """Context rendered by the outer page template."""

    title: str
    description: str
    author: str
    language: str
    stylesheets: list[str]
    scripts: list[str]
    header_html: str
    footer_html: str
    filters: list[tuple[str, str]]
    entries: list[TimelineEntry]
    pygments_css: str = ""


__all__ = ["ImageBlock", "PageModel", "TimelineEntry"]
