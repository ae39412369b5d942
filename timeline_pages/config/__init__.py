"""Load and validate timeline configuration YAML.

This subpackage parses the project's ``timeline.yaml`` file, merges global
defaults with per-timeline overrides, resolves source and output paths, and
produces typed dataclasses (:class:`SiteConfig`, :class:`TimelineConfig`,
:class:`ExportOptions`) consumed by the exporter. The primary entry point is
:func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from timeline_pages.config import load_site_config
>>> site = load_site_config(Path("timeline.yaml"))  # doctest: +SKIP
>>> site.get_timeline(None).output  # doctest: +SKIP
PosixPath('public/index.html')
"""

from .loader import load_site_config
from .models import ExportOptions, SiteConfig, SiteConfigError, TimelineConfig

__all__ = [
    "ExportOptions",
    "SiteConfig",
    "SiteConfigError",
    "TimelineConfig",
    "load_site_config",
]
