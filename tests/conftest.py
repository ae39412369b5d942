"""Shared fixtures for the timeline export test-suite.

``outline_payload`` returns the raw mapping a host would hand over for a small
timeline: a header block, two year sections holding categorized entries (one
of them deliberately out of chronological order), an uncategorized note, and
a footer block. ``outline_document`` builds the typed tree from it and
``outline_file`` writes it to a temporary YAML file for loader, exporter, and
CLI tests.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from ruamel.yaml import YAML

from timeline_pages.outline import OutlineDocument, build_outline


@pytest.fixture
def outline_payload() -> dict[str, typ.Any]:
    """Return a representative outline mapping."""
    return {
        "title": "Project history",
        "description": "Milestones by team",
        "author": "Maintainers",
        "language": "en",
        "nodes": [
            {"title": "Header", "body": "Intro *text* for the timeline."},
            {
                "title": "2024",
                "children": [
                    {
                        "title": "Category filters",
                        "properties": {
                            "DATE": "2024-03-09",
                            "DATA-CATEGORY": "Engineering, Design",
                            "ICON-COLOR": "blue",
                            "FA-ICON": "fa-filter",
                        },
                        "body": "Readers can filter entries.",
                    },
                ],
            },
            {
                "title": "2023",
                "children": [
                    {
                        "title": "First release",
                        "properties": {
                            "DATE": "<2023-02-14 Tue>",
                            "DATA-CATEGORY": "Engineering , Releases",
                            "IMAGE-SRC": "img/release.png",
                            "IMAGE-CAPTION": "Release party",
                        },
                        "body": "The first public release.",
                        "children": [
                            {"title": "Release notes", "body": "Notes body."},
                        ],
                    },
                    {"title": "Loose note", "body": "No category here."},
                    {
                        "title": "Draft roadmap",
                        "visible": False,
                        "properties": {
                            "DATE": "2023-09-01",
                            "DATA-CATEGORY": "Planning",
                        },
                    },
                ],
            },
            {"title": "Footer", "body": "Built with timeline-pages."},
        ],
    }


@pytest.fixture
def outline_document(outline_payload: dict[str, typ.Any]) -> OutlineDocument:
    """Return the typed document built from ``outline_payload``."""
    return build_outline(outline_payload)


@pytest.fixture
def outline_file(tmp_path: Path, outline_payload: dict[str, typ.Any]) -> Path:
    """Write ``outline_payload`` to a YAML file and return its path."""
    path = tmp_path / "outline.yaml"
    yaml = YAML(typ="safe")
    yaml.default_flow_style = False
    with path.open("w", encoding="utf-8") as handle:
        yaml.dump(outline_payload, handle)
    return path
