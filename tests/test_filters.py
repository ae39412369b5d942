"""Unit tests for the category filter engine and its page adapter."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc

import pytest
from bs4 import BeautifulSoup

from timeline_pages.config import ExportOptions
from timeline_pages.filters import (
    CategoryFilterEngine,
    FilterPage,
    SoupEntryHandle,
    has_overlap,
    position_classes,
)
from timeline_pages.generator import TimelinePageGenerator
from timeline_pages.outline import OutlineDocument


@dc.dataclass
class FakeEntry:
    """In-memory EntryHandle used to observe engine behaviour."""

    name: str
    categories: frozenset[str]
    visible: bool = True
    classes: frozenset[str] = frozenset()

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False

    def set_position_classes(self, classes: cabc.Set[str]) -> None:
        self.classes = frozenset(classes)


@pytest.fixture
def entries() -> list[FakeEntry]:
    """Return entries with category sets [{a}, {b}, {a, b}, {}]."""
    return [
        FakeEntry("entry1", frozenset({"a"})),
        FakeEntry("entry2", frozenset({"b"})),
        FakeEntry("entry3", frozenset({"a", "b"})),
        FakeEntry("entry4", frozenset()),
    ]


@pytest.fixture
def engine(entries: list[FakeEntry]) -> CategoryFilterEngine:
    """Return an engine with both category boxes initially checked."""
    return CategoryFilterEngine(entries, ["a", "b"])


def _visible(entries: list[FakeEntry]) -> list[str]:
    return [entry.name for entry in entries if entry.visible]


def test_has_overlap() -> None:
    """Overlap is any shared id; an empty id list never overlaps."""
    assert has_overlap(["a", "b"], ["b", "c"])
    assert not has_overlap(["a"], ["c"])
    assert not has_overlap(["a"], [])
    assert not has_overlap([], ["a"])


def test_position_classes() -> None:
    """Index 0 is first and even; then odd/even alternate."""
    assert position_classes(0) == {"first", "even"}
    assert position_classes(1) == {"odd"}
    assert position_classes(2) == {"even"}


def test_checking_one_category_shows_overlapping_entries(
    engine: CategoryFilterEngine, entries: list[FakeEntry]
) -> None:
    """Checked set {a} shows entry1 and entry3 only."""
    engine.toggle("b")
    assert engine.checked_ids == ["a"]
    assert _visible(entries) == ["entry1", "entry3"]
    assert not engine.all_checked, "a checked category unchecks the All box"


def test_checking_nothing_hides_everything(
    engine: CategoryFilterEngine, entries: list[FakeEntry]
) -> None:
    """With no category checked every entry is hidden."""
    engine.toggle("a", checked=False)
    engine.toggle("b", checked=False)
    assert engine.checked_ids == []
    assert _visible(entries) == []
    assert all(entry.classes == frozenset() for entry in entries)


def test_reflow_skips_hidden_entries(
    engine: CategoryFilterEngine, entries: list[FakeEntry]
) -> None:
    """Striping counts visible entries only."""
    engine.select(["b"])
    assert _visible(entries) == ["entry2", "entry3"]
    assert entries[1].classes == {"first", "even"}
    assert entries[2].classes == {"odd"}
    assert entries[0].classes == frozenset()
    assert entries[3].classes == frozenset()


def test_reflow_alternates_over_all_visible() -> None:
    """Reflow with everything visible stripes every entry in order."""
    many = [FakeEntry(f"e{idx}", frozenset({"a"})) for idx in range(5)]
    engine = CategoryFilterEngine(many, ["a"])
    engine.reflow()
    assert [entry.classes for entry in many] == [
        {"first", "even"},
        {"odd"},
        {"even"},
        {"odd"},
        {"even"},
    ]


def test_check_all_restores_everything(
    engine: CategoryFilterEngine, entries: list[FakeEntry]
) -> None:
    """The All shortcut checks every box and shows every entry."""
    engine.select([])
    engine.check_all()
    assert engine.checked_ids == ["a", "b"]
    assert engine.all_checked
    assert _visible(entries) == ["entry1", "entry2", "entry3", "entry4"]
    assert entries[0].classes == {"first", "even"}
    assert entries[3].classes == {"odd"}


def test_unknown_filter_ids_are_rejected(engine: CategoryFilterEngine) -> None:
    """Only checkboxes present on the page can be toggled."""
    with pytest.raises(KeyError):
        engine.toggle("zzz")
    with pytest.raises(KeyError):
        engine.select(["a", "zzz"])


def test_soup_entry_handle_toggles_inline_display() -> None:
    """Hiding sets display: none and showing removes it again."""
    soup = BeautifulSoup(
        '<div class="timeline-entry" style="color: red" '
        "data-category='[\"a\"]'></div>",
        "html.parser",
    )
    handle = SoupEntryHandle(soup.div)
    assert handle.categories == {"a"}
    assert handle.visible
    handle.hide()
    handle.hide()
    assert not handle.visible
    assert soup.div["style"] == "color: red; display: none;"
    handle.show()
    assert handle.visible
    assert soup.div["style"] == "color: red;"
    handle.set_position_classes({"odd"})
    handle.set_position_classes({"first", "even"})
    assert soup.div["class"] == ["timeline-entry", "even", "first"]


def test_filter_page_on_rendered_timeline(outline_document: OutlineDocument) -> None:
    """The page adapter filters a generated page and syncs checkbox state."""
    html = TimelinePageGenerator(ExportOptions()).render(outline_document)
    page = FilterPage.from_html(html)
    assert page.visible_ids() == ["category-filters", "first-release", "draft-roadmap"]

    page.toggle("engineering")
    page.toggle("design")
    page.toggle("planning")
    assert page.visible_ids() == ["first-release"]

    soup = BeautifulSoup(page.render(), "html.parser")
    assert not soup.select_one("input#all").has_attr("checked")
    checked = [box["id"] for box in soup.select('input[name="filter"][checked]')]
    assert checked == ["releases"]
    entries = soup.select(".timeline-entry")
    assert "first" in entries[1]["class"]
    assert "display: none" in entries[0]["style"]

    page.check_all()
    soup = BeautifulSoup(page.render(), "html.parser")
    assert soup.select_one("input#all").has_attr("checked")
    assert len(soup.select('input[name="filter"][checked]')) == 4
    assert page.visible_ids() == ["category-filters", "first-release", "draft-roadmap"]
