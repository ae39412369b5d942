"""Collect the document-wide category vocabulary and normalise slugs.

The vocabulary is computed once per export, before any entry is transcoded,
and passed to the page assembler as an immutable value. Filter checkbox ids,
entry ``data-category`` tokens and entry anchors all go through
:func:`slugify`, so one label always produces one slug.

Examples
--------
>>> slugify("  Board of  Trustees ")
'board-of-trustees'
>>> split_categories("Board, Staff,, board ")
['Board', 'Staff', 'board']
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .outline import OutlineNode

WHITESPACE_PATTERN = re.compile(r"\s+")


def slugify(value: str) -> str:
    """Lowercase ``value`` and collapse whitespace runs into single hyphens."""
    return WHITESPACE_PATTERN.sub("-", value.strip().lower())


def split_categories(raw: str | None) -> list[str]:
    """Split a raw comma-separated category property into trimmed labels."""
    if not raw:
        return []
    return [token.strip() for token in raw.split(",") if token.strip()]


@dc.dataclass(frozen=True, slots=True)
class Vocabulary:
    """Ordered, de-duplicated category labels found across a document.

    Attributes
    ----------
    labels : tuple[str, ...]
        Trimmed labels in order of first appearance.
    """

    labels: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.labels)

    def __iter__(self) -> cabc.Iterator[str]:
        return iter(self.labels)

    def __contains__(self, label: object) -> bool:
        return label in self.labels

    @property
    def slugs(self) -> frozenset[str]:
        """Return the set of slugs every entry category must belong to."""
        return frozenset(slugify(label) for label in self.labels)

    def filters(self) -> list[tuple[str, str]]:
        """Return ``(slug, label)`` pairs for the filter bar.

        Labels that differ only by case or spacing share a slug; only the
        first of them gets a checkbox so checkbox ids stay unique.
        """
        seen: set[str] = set()
        pairs: list[tuple[str, str]] = []
        for label in self.labels:
            slug = slugify(label)
            if slug in seen:
                continue
            seen.add(slug)
            pairs.append((slug, label))
        return pairs


def collect_vocabulary(nodes: cabc.Iterable[OutlineNode]) -> Vocabulary:
    """Gather every category label referenced by ``nodes`` in document order.

    Parameters
    ----------
    nodes : Iterable[OutlineNode]
        Nodes to scan, typically ``OutlineDocument.walk()``.

    Returns
    -------
    Vocabulary
        De-duplicated labels in order of first appearance; empty when no node
        carries a category.
    """
    labels: dict[str, None] = {}
    for node in nodes:
        for label in split_categories(node.properties.category):
            labels.setdefault(label, None)
    return Vocabulary(labels=tuple(labels))


__all__ = [
    "Vocabulary",
    "collect_vocabulary",
    "slugify",
    "split_categories",
]
