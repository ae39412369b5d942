"""Typed dataclasses describing timeline export configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

DEFAULT_HEADER_MARKER = r"^header$"
DEFAULT_FOOTER_MARKER = r"^footer$"
DEFAULT_STYLESHEETS = ("css/timeline.css",)
DEFAULT_SCRIPTS = ("js/timeline.js",)


class SiteConfigError(ValueError):
    """Raised when the timeline configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class ExportOptions:
    """Settings applied to a single timeline export.

    Attributes
    ----------
    title, description, author, language : str or None
        Fallbacks used when the outline document does not set the value.
    header_marker, footer_marker : str
        Regular expressions matched (case-insensitively) against top-level
        node titles to locate the header and footer blocks.
    stylesheets, scripts : list[str]
        URLs linked from the page head and included before ``</body>``.
    pygments_style : str
        Pygments style for code blocks in entry bodies.
    date_format : str
        ``strftime`` format of the displayed entry date.
    pretty : bool
        Pass the assembled page through the HTML pretty-printer.
    copy_assets : bool
        Copy ``timeline.js`` next to pages written to disk.
    """

    title: str | None = None
    description: str | None = None
    author: str | None = None
    language: str | None = "en"
    header_marker: str = DEFAULT_HEADER_MARKER
    footer_marker: str = DEFAULT_FOOTER_MARKER
    stylesheets: list[str] = dc.field(default_factory=lambda: list(DEFAULT_STYLESHEETS))
    scripts: list[str] = dc.field(default_factory=lambda: list(DEFAULT_SCRIPTS))
    pygments_style: str = "monokai"
    date_format: str = "%Y-%m-%d"
    pretty: bool = True
    copy_assets: bool = True


@dc.dataclass(slots=True)
class TimelineConfig:
    """A fully resolved timeline definition sourced from YAML config."""

    key: str
    source: Path
    output: Path
    options: ExportOptions
    subtree: str | None = None
    visible_only: bool = False


@dc.dataclass(slots=True)
class SiteConfig:
    """Collection of timeline configs alongside shared defaults."""

    timelines: dict[str, TimelineConfig]
    default_timeline: str | None = None
    output_dir: Path = Path("public")
    options: ExportOptions = dc.field(default_factory=ExportOptions)

    def get_timeline(self, key: str | None) -> TimelineConfig:
        """Return the requested timeline or fall back to the configured default."""
        if key is None:
            return self._get_default_timeline()
        try:
            return self.timelines[key]
        except KeyError as exc:
            available = ", ".join(sorted(self.timelines))
            msg = f"Unknown timeline '{key}'. Known timelines: {available}"
            raise KeyError(msg) from exc

    def _get_default_timeline(self) -> TimelineConfig:
        """Return the configured default timeline or the first defined one."""
        if self.default_timeline and self.default_timeline in self.timelines:
            return self.timelines[self.default_timeline]
        if not self.timelines:  # pragma: no cover - configuration error
            msg = "No timelines configured."
            raise SiteConfigError(msg)
        first_key = next(iter(self.timelines))
        return self.timelines[first_key]


__all__ = [
    "DEFAULT_FOOTER_MARKER",
    "DEFAULT_HEADER_MARKER",
    "DEFAULT_SCRIPTS",
    "DEFAULT_STYLESHEETS",
    "ExportOptions",
    "SiteConfig",
    "SiteConfigError",
    "TimelineConfig",
]
