"""Tests for the ``timeline`` command functions."""

from __future__ import annotations

from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from timeline_pages import cli


def test_export_prints_to_stdout(outline_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Without --output the page goes to stdout."""
    cli.export(outline_file, visible_only=True)
    out = capsys.readouterr().out
    soup = BeautifulSoup(out, "html.parser")
    anchors = [a["id"] for a in soup.select(".timeline-entry h2 a")]
    assert anchors == ["category-filters", "first-release"]


def test_export_writes_file(
    outline_file: Path,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """With --output the page is written and the path is reported."""
    monkeypatch.chdir(tmp_path)
    output = tmp_path / "dist" / "index.html"
    cli.export(outline_file, output=output, subtree="2023")
    assert capsys.readouterr().out.strip() == "wrote dist/index.html"
    soup = BeautifulSoup(output.read_text(encoding="utf-8"), "html.parser")
    anchors = [a["id"] for a in soup.select(".timeline-entry h2 a")]
    assert anchors == ["first-release", "draft-roadmap"]


def test_export_uses_config_defaults(
    outline_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Export options come from the config defaults when --config is given."""
    config_path = tmp_path / "timeline.yaml"
    config_path.write_text(
        "defaults:\n"
        "  scripts: [static/filter.js]\n"
        "timelines:\n"
        "  main:\n"
        f"    source: {outline_file.name}\n",
        encoding="utf-8",
    )
    cli.export(outline_file, config=config_path)
    soup = BeautifulSoup(capsys.readouterr().out, "html.parser")
    assert [s["src"] for s in soup.select("script[src]")] == ["static/filter.js"]


def test_publish_reports_written_pages(
    outline_file: Path,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Publish prints one line per written page."""
    monkeypatch.chdir(tmp_path)
    config_path = tmp_path / "timeline.yaml"
    config_path.write_text(
        "defaults:\n"
        "  output_dir: public\n"
        "timelines:\n"
        "  a:\n"
        f"    source: {outline_file.name}\n"
        "  b:\n"
        f"    source: {outline_file.name}\n",
        encoding="utf-8",
    )
    cli.publish(config=config_path.resolve(), timeline="b")
    assert capsys.readouterr().out.splitlines() == ["wrote public/b.html"]


def test_filter_command_writes_snapshot(
    outline_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """The filter command keeps only entries overlapping the given categories."""
    page = tmp_path / "index.html"
    cli.export(outline_file, output=page)
    capsys.readouterr()

    snapshot = tmp_path / "releases.html"
    cli.filter(page, category=["releases"], output=snapshot)
    soup = BeautifulSoup(snapshot.read_text(encoding="utf-8"), "html.parser")
    shown = [
        entry.select_one("h2 a")["id"]
        for entry in soup.select(".timeline-entry")
        if "display: none" not in (entry.get("style") or "")
    ]
    assert shown == ["first-release"]

    cli.filter(snapshot)
    restored = BeautifulSoup(capsys.readouterr().out, "html.parser")
    assert all(
        "display: none" not in (entry.get("style") or "")
        for entry in restored.select(".timeline-entry")
    )
    assert restored.select_one("input#all").has_attr("checked")


def test_filter_command_rejects_unknown_category(tmp_path: Path, outline_file: Path) -> None:
    """Unknown category slugs are reported instead of silently hiding everything."""
    page = tmp_path / "index.html"
    cli.export(outline_file, output=page)
    with pytest.raises(KeyError, match="nope"):
        cli.filter(page, category=["nope"])
