"""Load timeline configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import _merge_options, _optional_str
from .models import ExportOptions, SiteConfig, SiteConfigError, TimelineConfig


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the timelines to publish.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``timeline.yaml``). Relative ``source`` paths are resolved against the
        file's directory.

    Returns
    -------
    SiteConfig
        Parsed configuration with one TimelineConfig per ``timelines`` entry.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If no timelines are defined, a timeline lacks ``source``, or a marker
        is not a valid regular expression.

    Examples
    --------
    >>> from pathlib import Path
    >>> from timeline_pages.config import load_site_config
    >>> config = load_site_config(Path("timeline.yaml"))  # doctest: +SKIP
    >>> sorted(config.timelines)[:1]  # doctest: +SKIP
    ['main']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    defaults = raw.get("defaults", {}) or {}
    base_dir = path.parent

    default_options = _merge_options(ExportOptions(), defaults)
    output_dir = _resolve(base_dir, Path(defaults.get("output_dir", "public")))
    default_timeline = _optional_str(defaults.get("default_timeline"))

    timelines_raw = raw.get("timelines") or {}
    if not timelines_raw:
        msg = "No timelines defined in configuration."
        raise SiteConfigError(msg)

    timelines: dict[str, TimelineConfig] = {}
    for key, payload in timelines_raw.items():
        match payload:
            case dict():
                timelines[str(key)] = _build_timeline_config(
                    key=str(key),
                    payload=payload,
                    base_dir=base_dir,
                    output_dir=output_dir,
                    defaults=default_options,
                )
            case _:
                continue

    return SiteConfig(
        timelines=timelines,
        default_timeline=default_timeline,
        output_dir=output_dir,
        options=default_options,
    )


def _resolve(base_dir: Path, candidate: Path) -> Path:
    """Return ``candidate`` anchored at ``base_dir`` unless it is absolute."""
    return candidate if candidate.is_absolute() else base_dir / candidate


def _build_timeline_config(
    *,
    key: str,
    payload: typ.Mapping[str, typ.Any],
    base_dir: Path,
    output_dir: Path,
    defaults: ExportOptions,
) -> TimelineConfig:
    """Build a TimelineConfig for a single entry using defaults and overrides."""
    source = _optional_str(payload.get("source"))
    if not source:
        msg = f"Timeline '{key}' is missing 'source'."
        raise SiteConfigError(msg)
    output = _optional_str(payload.get("output")) or f"{key}.html"
    return TimelineConfig(
        key=key,
        source=_resolve(base_dir, Path(source)),
        output=_resolve(output_dir, Path(output)),
        options=_merge_options(defaults, payload),
        subtree=_optional_str(payload.get("subtree")),
        visible_only=bool(payload.get("visible_only", False)),
    )


__all__ = ["load_site_config"]
