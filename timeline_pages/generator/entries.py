"""Transcode categorized outline nodes into timeline entry fragments.

Only nodes whose ``DATA-CATEGORY`` property yields at least one label become
entries. Each entry is rendered through the autoescaping
``timeline_entry.jinja`` template; the transcoded body is the only value
marked safe.

Example
-------
>>> parse_entry_date("<2016-03-04 Fri 10:00>")
datetime.date(2016, 3, 4)
"""

from __future__ import annotations

import datetime as dt
import re
import typing as typ

from markupsafe import Markup

from timeline_pages.vocabulary import slugify, split_categories

from .models import ImageBlock, TimelineEntry

if typ.TYPE_CHECKING:
    from jinja2 import Environment

    from timeline_pages.outline import OutlineNode

    from .renderer import HtmlContentRenderer

ORG_TIMESTAMP_PATTERN = re.compile(r"^[<\[](\d{4}-\d{2}-\d{2})(?:[ \t][^>\]]*)?[>\]]")
DEFAULT_DATE_FORMAT = "%Y-%m-%d"
ENTRY_HEADING_LEVEL = 2


class EntryDateError(ValueError):
    """Raised when a categorized node has a missing or unparseable date."""

    def __init__(self, title: str, value: object) -> None:
        self.title = title
        self.value = value
        if value is None:
            detail = "has no DATE property"
        else:
            detail = f"has an unparseable DATE {value!r}"
        super().__init__(f"Timeline entry '{title}' {detail}.")


def parse_entry_date(value: object) -> dt.date:
    """Parse an entry date from an Org timestamp, ISO string, or date object.

    Parameters
    ----------
    value : object
        ``datetime.date``/``datetime.datetime`` instance, Org timestamp such as
        ``<2016-03-04 Fri>`` or ``[2016-03-04 Fri 10:00]`` (ranges use the
        first stamp), ISO date, or ISO datetime string.

    Returns
    -------
    datetime.date
        Calendar date; any time of day is discarded.

    Raises
    ------
    ValueError
        If the value is empty or cannot be parsed.
    """
    match value:
        case dt.datetime():
            return value.date()
        case dt.date():
            return value
        case str() as text:
            sanitized = text.strip()
        case _:
            msg = f"Unsupported date value {value!r}"
            raise ValueError(msg)
    if not sanitized:
        msg = "Empty date value"
        raise ValueError(msg)
    org_match = ORG_TIMESTAMP_PATTERN.match(sanitized)
    if org_match:
        return dt.date.fromisoformat(org_match.group(1))
    if sanitized.endswith("Z"):
        sanitized = sanitized[:-1] + "+00:00"
    try:
        return dt.date.fromisoformat(sanitized)
    except ValueError:
        return dt.datetime.fromisoformat(sanitized).date()


def is_entry_node(node: OutlineNode) -> bool:
    """Return True when ``node`` carries at least one category label."""
    return bool(split_categories(node.properties.category))


class EntryTranscoder:
    """Build and render timeline entries for qualifying outline nodes."""

    def __init__(
        self,
        env: Environment,
        renderer: HtmlContentRenderer,
        *,
        date_format: str = DEFAULT_DATE_FORMAT,
    ) -> None:
        """Initialize the transcoder.

        Parameters
        ----------
        env : Environment
            Jinja environment providing ``timeline_entry.jinja``.
        renderer : HtmlContentRenderer
            Body sub-transcoder used for node contents.
        date_format : str, optional
            ``strftime`` format of the human-readable date.
        """
        self.renderer = renderer
        self.date_format = date_format
        self.template = env.get_template("timeline_entry.jinja")

    def build(self, node: OutlineNode) -> TimelineEntry | None:
        """Return the TimelineEntry for ``node``, or None when it has no category.

        Raises
        ------
        EntryDateError
            If the node is categorized but its date is missing or malformed.
        """
        labels = split_categories(node.properties.category)
        if not labels:
            return None
        raw_date = node.properties.date
        if raw_date is None:
            raise EntryDateError(node.title, None)
        try:
            date = parse_entry_date(raw_date)
        except ValueError as exc:
            raise EntryDateError(node.title, raw_date) from exc

        props = node.properties
        image = None
        if props.image_src and props.image_caption:
            image = ImageBlock(src=props.image_src, caption=props.image_caption)
        body_html = self.renderer.node_content(
            node,
            heading_level=ENTRY_HEADING_LEVEL + 1,
            include=lambda child: not is_entry_node(child),
        )
        return TimelineEntry(
            title=node.title,
            id=slugify(node.title),
            categories=tuple(slugify(label) for label in labels),
            date=date,
            display_date=date.strftime(self.date_format),
            body_html=body_html,
            icon_color=props.icon_color,
            icon_glyph=props.icon_glyph,
            image=image,
        )

    def render(self, entry: TimelineEntry) -> str:
        """Render one entry into its HTML fragment."""
        return self.template.render(entry=entry, body=Markup(entry.body_html))

    def transcode(self, node: OutlineNode) -> str | None:
        """Return the HTML fragment for ``node`` or None when it is not an entry."""
        entry = self.build(node)
        if entry is None:
            return None
        return self.render(entry)


__all__ = [
    "DEFAULT_DATE_FORMAT",
    "EntryDateError",
    "EntryTranscoder",
    "is_entry_node",
    "parse_entry_date",
]
