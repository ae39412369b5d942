"""Category filtering and reflow over rendered timeline entries.

This is the Python counterpart of ``static/timeline.js``. Both follow the
same rules:

* toggling a category recomputes the checked ids, unchecks the ``#all`` box
  when at least one id is checked, and shows exactly the entries whose
  categories overlap the checked ids (so checking nothing hides everything);
* checking ``#all`` checks every category box and shows every entry;
* after each change the visible entries are re-striped: the first visible
  entry gets ``first`` and visible entries alternate ``even``/``odd`` by their
  0-based position among visible entries only.

:class:`CategoryFilterEngine` works on any sequence of :class:`EntryHandle`
objects. :class:`FilterPage` binds it to a page parsed with BeautifulSoup so
the CLI can write filtered snapshots of an exported timeline.

Example
-------
>>> has_overlap({"a", "b"}, ["b"])
True
>>> has_overlap({"a"}, [])
False
"""

from __future__ import annotations

import json
import re
import typing as typ

from bs4 import BeautifulSoup

from ._constants import (
    ALL_FILTER_ID,
    CATEGORY_ATTRIBUTE,
    ENTRY_SELECTOR,
    EVEN_CLASS,
    FILTER_NAME,
    FIRST_CLASS,
    ODD_CLASS,
    POSITION_CLASSES,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from bs4 import Tag

HIDDEN_STYLE = "display: none;"
DISPLAY_NONE_PATTERN = re.compile(r"display\s*:\s*none\s*;?", re.IGNORECASE)


class EntryHandle(typ.Protocol):
    """Operations the filter engine needs from one rendered entry."""

    @property
    def categories(self) -> frozenset[str]: ...

    @property
    def visible(self) -> bool: ...

    def show(self) -> None: ...

    def hide(self) -> None: ...

    def set_position_classes(self, classes: cabc.Set[str]) -> None: ...


def has_overlap(categories: cabc.Container[str], ids: cabc.Iterable[str]) -> bool:
    """Return True when any of ``ids`` is one of ``categories``."""
    return any(category_id in categories for category_id in ids)


def position_classes(index: int) -> frozenset[str]:
    """Return the striping classes for the visible entry at 0-based ``index``."""
    classes = {EVEN_CLASS if index % 2 == 0 else ODD_CLASS}
    if index == 0:
        classes.add(FIRST_CLASS)
    return frozenset(classes)


def reflow(entries: cabc.Iterable[EntryHandle]) -> None:
    """Recompute positional classes over the currently visible entries."""
    position = 0
    for entry in entries:
        if not entry.visible:
            entry.set_position_classes(frozenset())
            continue
        entry.set_position_classes(position_classes(position))
        position += 1


class CategoryFilterEngine:
    """Track checked category filters and apply them to owned entry handles."""

    def __init__(
        self,
        entries: cabc.Iterable[EntryHandle],
        filter_ids: cabc.Iterable[str],
        *,
        checked: cabc.Iterable[str] | None = None,
        all_checked: bool = True,
    ) -> None:
        """Initialize the engine.

        Parameters
        ----------
        entries : Iterable[EntryHandle]
            Entries in page order; the engine keeps its own list.
        filter_ids : Iterable[str]
            Ids of the category checkboxes in filter-bar order.
        checked : Iterable[str], optional
            Initially checked category ids; defaults to all of them.
        all_checked : bool, optional
            Initial state of the ``#all`` shortcut box.
        """
        self.entries: list[EntryHandle] = list(entries)
        self.filter_ids: list[str] = list(dict.fromkeys(filter_ids))
        initial = self.filter_ids if checked is None else checked
        self._checked: set[str] = set(initial) & set(self.filter_ids)
        self.all_checked = all_checked

    @property
    def checked_ids(self) -> list[str]:
        """Return the checked category ids in filter-bar order."""
        return [fid for fid in self.filter_ids if fid in self._checked]

    def is_checked(self, filter_id: str) -> bool:
        """Return True when the category box ``filter_id`` is checked."""
        return filter_id in self._checked

    def visible_entries(self) -> list[EntryHandle]:
        """Return the currently visible entries in page order."""
        return [entry for entry in self.entries if entry.visible]

    def toggle(self, filter_id: str, checked: bool | None = None) -> None:
        """Flip (or set) one category checkbox and re-apply the filter.

        Raises
        ------
        KeyError
            If ``filter_id`` is not one of the page's category checkboxes.
        """
        if filter_id not in self.filter_ids:
            msg = f"Unknown category filter '{filter_id}'."
            raise KeyError(msg)
        if checked is None:
            checked = filter_id not in self._checked
        if checked:
            self._checked.add(filter_id)
        else:
            self._checked.discard(filter_id)
        self.apply()

    def select(self, filter_ids: cabc.Iterable[str]) -> None:
        """Check exactly ``filter_ids``, as if each box were clicked in turn."""
        wanted = set(filter_ids)
        unknown = wanted.difference(self.filter_ids)
        if unknown:
            msg = f"Unknown category filter(s): {', '.join(sorted(unknown))}"
            raise KeyError(msg)
        self._checked = wanted
        self.apply()

    def apply(self) -> None:
        """Show entries overlapping the checked ids, hide the rest, reflow."""
        checked_ids = self.checked_ids
        if checked_ids:
            self.all_checked = False
        for entry in self.entries:
            if has_overlap(entry.categories, checked_ids):
                entry.show()
            else:
                entry.hide()
        self.reflow()

    def check_all(self) -> None:
        """Check every category box and the shortcut box, show every entry."""
        self._checked = set(self.filter_ids)
        self.all_checked = True
        for entry in self.entries:
            entry.show()
        self.reflow()

    def reflow(self) -> None:
        """Recompute positional classes over the owned entries."""
        reflow(self.entries)


class SoupEntryHandle:
    """EntryHandle backed by a BeautifulSoup ``.timeline-entry`` element."""

    def __init__(self, tag: Tag) -> None:
        self.tag = tag
        self._categories = frozenset(_parse_categories(tag.get(CATEGORY_ATTRIBUTE)))

    @property
    def categories(self) -> frozenset[str]:
        return self._categories

    @property
    def visible(self) -> bool:
        style = str(self.tag.get("style") or "")
        return not DISPLAY_NONE_PATTERN.search(style)

    def show(self) -> None:
        style = DISPLAY_NONE_PATTERN.sub("", str(self.tag.get("style") or "")).strip()
        if style:
            self.tag["style"] = style
        elif self.tag.has_attr("style"):
            del self.tag["style"]

    def hide(self) -> None:
        if not self.visible:
            return
        style = str(self.tag.get("style") or "").strip().rstrip(";")
        self.tag["style"] = f"{style}; {HIDDEN_STYLE}" if style else HIDDEN_STYLE

    def set_position_classes(self, classes: cabc.Set[str]) -> None:
        existing = self.tag.get("class") or []
        current = [name for name in existing if name not in POSITION_CLASSES]
        current.extend(sorted(classes))
        self.tag["class"] = current


def _parse_categories(raw: object) -> list[str]:
    """Decode a ``data-category`` JSON array, tolerating blank attributes."""
    if not raw:
        return []
    decoded = json.loads(str(raw))
    if not isinstance(decoded, list):
        msg = f"{CATEGORY_ATTRIBUTE} must hold a JSON array, got {raw!r}"
        raise ValueError(msg)
    return [str(item) for item in decoded]


class FilterPage:
    """A rendered timeline page whose filter state can be changed offline."""

    def __init__(self, soup: BeautifulSoup) -> None:
        self.soup = soup
        self._all_box = soup.find("input", id=ALL_FILTER_ID)
        self._boxes = {
            str(box["id"]): box
            for box in soup.find_all("input", attrs={"name": FILTER_NAME})
            if box.get("id")
        }
        checked = [fid for fid, box in self._boxes.items() if box.has_attr("checked")]
        all_checked = self._all_box is not None and self._all_box.has_attr("checked")
        self.engine = CategoryFilterEngine(
            [SoupEntryHandle(tag) for tag in soup.select(ENTRY_SELECTOR)],
            self._boxes,
            checked=checked,
            all_checked=all_checked,
        )

    @classmethod
    def from_html(cls, html: str) -> FilterPage:
        """Parse ``html`` and bind a filter engine to it."""
        return cls(BeautifulSoup(html, "html.parser"))

    def toggle(self, filter_id: str, checked: bool | None = None) -> None:
        """Click one category checkbox."""
        self.engine.toggle(filter_id, checked)
        self._sync_boxes()

    def select(self, filter_ids: cabc.Iterable[str]) -> None:
        """Leave exactly ``filter_ids`` checked."""
        self.engine.select(filter_ids)
        self._sync_boxes()

    def check_all(self) -> None:
        """Click the ``#all`` shortcut checkbox."""
        self.engine.check_all()
        self._sync_boxes()

    def visible_ids(self) -> list[str]:
        """Return the anchor ids of visible entries in page order."""
        ids: list[str] = []
        for entry in self.engine.visible_entries():
            anchor = typ.cast("SoupEntryHandle", entry).tag.select_one("a[id]")
            if anchor is not None:
                ids.append(str(anchor["id"]))
        return ids

    def render(self) -> str:
        """Serialise the page with its current filter state."""
        return str(self.soup)

    def _sync_boxes(self) -> None:
        for filter_id, box in self._boxes.items():
            _set_checked(box, self.engine.is_checked(filter_id))
        if self._all_box is not None:
            _set_checked(self._all_box, self.engine.all_checked)


def _set_checked(box: Tag, checked: bool) -> None:
    if checked:
        box["checked"] = ""
    elif box.has_attr("checked"):
        del box["checked"]


__all__ = [
    "CategoryFilterEngine",
    "EntryHandle",
    "FilterPage",
    "SoupEntryHandle",
    "has_overlap",
    "position_classes",
    "reflow",
]
