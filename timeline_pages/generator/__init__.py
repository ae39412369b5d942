"""Utilities for transcoding outline documents into timeline pages."""

from .entries import EntryDateError, EntryTranscoder, is_entry_node, parse_entry_date
from .models import ImageBlock, PageModel, TimelineEntry
from .page_generator import TimelinePageGenerator
from .renderer import HtmlContentRenderer

__all__ = [
    "EntryDateError",
    "EntryTranscoder",
    "HtmlContentRenderer",
    "ImageBlock",
    "PageModel",
    "TimelineEntry",
    "TimelinePageGenerator",
    "is_entry_node",
    "parse_entry_date",
]
