"""Utility helpers shared by the timeline configuration loader."""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from .models import ExportOptions, SiteConfigError

_OPTION_STRINGS = (
    "title",
    "description",
    "author",
    "language",
    "pygments_style",
    "date_format",
)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _string_list(value: object | None, *, field: str) -> list[str]:
    """Normalize a string or list of strings into a list of non-empty strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if isinstance(value, list):
        return [text for item in value if (text := str(item).strip())]
    msg = f"'{field}' must be a string or a list of strings."
    raise SiteConfigError(msg)


def _check_marker(value: object, *, field: str) -> str:
    """Return ``value`` as a marker pattern after checking it compiles."""
    pattern = str(value)
    try:
        re.compile(pattern)
    except re.error as exc:
        msg = f"'{field}' is not a valid regular expression: {exc}"
        raise SiteConfigError(msg) from exc
    return pattern


def _merge_options(
    base: ExportOptions, override: typ.Mapping[str, typ.Any] | None
) -> ExportOptions:
    """Merge an override mapping into a copy of the base ExportOptions."""
    if not override:
        return dc.replace(
            base, stylesheets=list(base.stylesheets), scripts=list(base.scripts)
        )
    values: dict[str, typ.Any] = {
        field.name: getattr(base, field.name) for field in dc.fields(base)
    }
    for name in _OPTION_STRINGS:
        if name in override:
            values[name] = _optional_str(override[name])
    for name in ("pygments_style", "date_format"):
        if values[name] is None:
            values[name] = getattr(base, name)
    for name in ("header_marker", "footer_marker"):
        if name in override:
            values[name] = _check_marker(override[name], field=name)
    for name in ("stylesheets", "scripts"):
        if name in override:
            values[name] = _string_list(override[name], field=name)
        else:
            values[name] = list(values[name])
    for name in ("pretty", "copy_assets"):
        if name in override:
            values[name] = bool(override[name])
    return ExportOptions(**values)


__all__ = ["_check_marker", "_merge_options", "_optional_str", "_string_list"]
