r"""Load structured outline documents into typed trees.

The authoring host hands the exporter an already-parsed outline: a YAML
mapping with document metadata and nested ``nodes``. This module turns that
payload into :class:`OutlineDocument` and :class:`OutlineNode` dataclasses so
the timeline pipeline reads node properties through explicit optional fields
instead of probing arbitrary keys.

Example
-------
>>> doc = build_outline({"title": "T", "nodes": [{"title": "A", "properties":
...     {"DATA-CATEGORY": "x"}}]})
>>> doc.nodes[0].properties.category
'x'
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from ._constants import (
    PROP_CATEGORY,
    PROP_DATE,
    PROP_ICON_COLOR,
    PROP_ICON_GLYPH,
    PROP_IMAGE_CAPTION,
    PROP_IMAGE_SRC,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class OutlineError(ValueError):
    """Raised when an outline document is structurally invalid."""


_FIELD_BY_PROPERTY = {
    PROP_DATE: "date",
    PROP_CATEGORY: "category",
    PROP_ICON_COLOR: "icon_color",
    PROP_ICON_GLYPH: "icon_glyph",
    PROP_IMAGE_SRC: "image_src",
    PROP_IMAGE_CAPTION: "image_caption",
}


@dc.dataclass(frozen=True, slots=True)
class NodeProperties:
    """Typed view of the key/value properties attached to an outline node.

    Attributes
    ----------
    date : str or None
        Raw ``DATE`` value; left unparsed until an entry is transcoded.
    category : str or None
        Raw comma-separated ``DATA-CATEGORY`` value.
    icon_color : str or None
        ``ICON-COLOR`` class added to the entry icon container.
    icon_glyph : str or None
        ``FA-ICON`` glyph class.
    image_src : str or None
        ``IMAGE-SRC`` URL of the optional entry image.
    image_caption : str or None
        ``IMAGE-CAPTION`` text of the optional entry image.
    extra : dict[str, str]
        Any other properties, keyed by their upper-cased name.
    """

    date: str | None = None
    category: str | None = None
    icon_color: str | None = None
    icon_glyph: str | None = None
    image_src: str | None = None
    image_caption: str | None = None
    extra: dict[str, str] = dc.field(default_factory=dict)

    @classmethod
    def from_mapping(cls, payload: cabc.Mapping[str, typ.Any] | None) -> NodeProperties:
        """Build properties from a raw mapping, matching keys case-insensitively."""
        if not payload:
            return cls()
        known: dict[str, str] = {}
        extra: dict[str, str] = {}
        for key, value in payload.items():
            text = _property_text(value)
            if text is None:
                continue
            name = str(key).strip().upper()
            field_name = _FIELD_BY_PROPERTY.get(name)
            if field_name:
                known[field_name] = text
            else:
                extra[name] = text
        return cls(extra=extra, **known)


@dc.dataclass(slots=True)
class OutlineNode:
    """One headline of the outline together with its body and children."""

    title: str
    properties: NodeProperties = dc.field(default_factory=NodeProperties)
    body: str = ""
    children: list[OutlineNode] = dc.field(default_factory=list)
    visible: bool = True
    level: int = 1

    def walk(self) -> cabc.Iterator[OutlineNode]:
        """Yield this node and then every descendant in document order."""
        yield self
        for child in self.children:
            yield from child.walk()


@dc.dataclass(slots=True)
class OutlineDocument:
    """Document-level metadata plus the top-level outline nodes."""

    title: str = ""
    description: str = ""
    author: str = ""
    language: str = ""
    nodes: list[OutlineNode] = dc.field(default_factory=list)

    def walk(self) -> cabc.Iterator[OutlineNode]:
        """Yield every node of the document in document order."""
        for node in self.nodes:
            yield from node.walk()


def _property_text(value: object) -> str | None:
    """Return a stripped string for a property value, or None when blank."""
    if value is None:
        return None
    if isinstance(value, dt.date):
        return value.isoformat()
    text = str(value).strip()
    return text or None


def _build_node(payload: object, level: int, path: str) -> OutlineNode:
    """Build an OutlineNode from one raw ``nodes`` item."""
    if not isinstance(payload, dict):
        msg = f"Outline node at {path} must be a mapping."
        raise OutlineError(msg)
    title = _property_text(payload.get("title"))
    if title is None:
        msg = f"Outline node at {path} is missing a title."
        raise OutlineError(msg)
    properties = payload.get("properties") or {}
    if not isinstance(properties, dict):
        msg = f"Properties of '{title}' must be a mapping."
        raise OutlineError(msg)
    return OutlineNode(
        title=title,
        properties=NodeProperties.from_mapping(properties),
        body=str(payload.get("body") or ""),
        children=_build_nodes(payload.get("children"), level + 1, f"{path} > {title}"),
        visible=bool(payload.get("visible", True)),
        level=level,
    )


def _build_nodes(payload: object, level: int, path: str) -> list[OutlineNode]:
    if payload is None:
        return []
    if not isinstance(payload, list):
        msg = f"Children of {path} must be a list."
        raise OutlineError(msg)
    return [
        _build_node(item, level, f"{path}[{idx}]") for idx, item in enumerate(payload)
    ]


def build_outline(payload: cabc.Mapping[str, typ.Any]) -> OutlineDocument:
    """Convert an already-loaded outline mapping into an OutlineDocument.

    Parameters
    ----------
    payload : Mapping[str, Any]
        Mapping with optional ``title``, ``description``, ``author`` and
        ``language`` keys and a ``nodes`` list of node mappings.

    Returns
    -------
    OutlineDocument
        Typed document tree; nodes keep their source order.

    Raises
    ------
    OutlineError
        If a node is not a mapping, has no title, or ``children`` is not a list.
    """
    return OutlineDocument(
        title=_property_text(payload.get("title")) or "",
        description=_property_text(payload.get("description")) or "",
        author=_property_text(payload.get("author")) or "",
        language=_property_text(payload.get("language")) or "",
        nodes=_build_nodes(payload.get("nodes"), 1, "document"),
    )


def load_outline(path: Path) -> OutlineDocument:
    """Load an outline YAML file into an OutlineDocument.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    OutlineError
        If the top-level YAML value is not a mapping or any node is invalid.
    """
    if not path.exists():
        msg = f"Outline file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level outline YAML structure must be a mapping."
        raise OutlineError(msg)
    return build_outline(loaded)


def select_subtree(document: OutlineDocument, title: str) -> OutlineDocument:
    """Return a copy of ``document`` holding only the first node titled ``title``.

    Raises
    ------
    OutlineError
        If no node carries the requested title.
    """
    wanted = title.strip()
    for node in document.walk():
        if node.title == wanted:
            return dc.replace(document, nodes=[node])
    msg = f"No outline node titled '{wanted}'."
    raise OutlineError(msg)


def prune_invisible(document: OutlineDocument) -> OutlineDocument:
    """Return a copy of ``document`` without hidden nodes and their descendants."""

    def _prune(nodes: list[OutlineNode]) -> list[OutlineNode]:
        return [
            dc.replace(node, children=_prune(node.children))
            for node in nodes
            if node.visible
        ]

    return dc.replace(document, nodes=_prune(document.nodes))


__all__ = [
    "NodeProperties",
    "OutlineDocument",
    "OutlineError",
    "OutlineNode",
    "build_outline",
    "load_outline",
    "prune_invisible",
    "select_subtree",
]
