"""Entry points that hand outline documents to the timeline generator.

These functions are the invocation surface used by the CLI and by other
tooling: export to a string ("buffer"), export to a file, and publish every
timeline of a :class:`~timeline_pages.config.SiteConfig`. The subtree-only
and visible-only options only decide which part of the outline reaches
:class:`~timeline_pages.generator.TimelinePageGenerator`; ``asynchronous``
runs the export on a worker thread and returns a
:class:`concurrent.futures.Future` instead of the result.

Example
-------
>>> from pathlib import Path
>>> from timeline_pages.config import ExportOptions
>>> from timeline_pages.exporter import export_to_file
>>> export_to_file(Path("outline.yaml"), Path("public/index.html"),
...                ExportOptions())  # doctest: +SKIP
PosixPath('public/index.html')
"""

from __future__ import annotations

import shutil
import typing as typ
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from urllib.parse import urlsplit

from bs4 import BeautifulSoup

from ._constants import SCRIPT_ASSET
from .config import ExportOptions
from .generator import TimelinePageGenerator
from .outline import load_outline, prune_invisible, select_subtree

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import SiteConfig
    from .outline import OutlineDocument

T = typ.TypeVar("T")

STATIC_DIR = Path(__file__).resolve().parent / "static"


def _run(func: cabc.Callable[[], T], *, asynchronous: bool) -> T | Future[T]:
    """Call ``func`` now, or on a single worker thread when ``asynchronous``."""
    if not asynchronous:
        return func()
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="timeline-export")
    try:
        return executor.submit(func)
    finally:
        executor.shutdown(wait=False)


def prettify(html: str) -> str:
    """Re-indent an assembled page with BeautifulSoup's formatter."""
    return BeautifulSoup(html, "html.parser").prettify()


def prepare_document(
    document: OutlineDocument,
    *,
    subtree: str | None = None,
    visible_only: bool = False,
) -> OutlineDocument:
    """Narrow ``document`` to the part the generator should see.

    Hidden nodes are pruned before the subtree lookup, so a hidden subtree
    cannot be selected when ``visible_only`` is set.
    """
    if visible_only:
        document = prune_invisible(document)
    if subtree:
        document = select_subtree(document, subtree)
    return document


def _render(
    document: OutlineDocument,
    options: ExportOptions,
    *,
    subtree: str | None,
    visible_only: bool,
) -> str:
    prepared = prepare_document(document, subtree=subtree, visible_only=visible_only)
    html = TimelinePageGenerator(options).render(prepared)
    if options.pretty:
        html = prettify(html)
    return html


def export_to_string(
    document: OutlineDocument,
    options: ExportOptions | None = None,
    *,
    subtree: str | None = None,
    visible_only: bool = False,
    asynchronous: bool = False,
) -> str | Future[str]:
    """Render ``document`` and return the page markup.

    Parameters
    ----------
    document : OutlineDocument
        Parsed outline supplied by the host.
    options : ExportOptions, optional
        Export settings; defaults to ``ExportOptions()``.
    subtree : str, optional
        Export only the first node with this title and its descendants.
    visible_only : bool, optional
        Drop nodes marked ``visible: false``.
    asynchronous : bool, optional
        Return a Future resolved on a worker thread.

    Returns
    -------
    str or Future[str]
        The HTML document.

    Raises
    ------
    EntryDateError
        If a categorized node has a missing or malformed date.
    OutlineError
        If ``subtree`` names no node.
    """
    resolved = options or ExportOptions()
    return _run(
        lambda: _render(
            document, resolved, subtree=subtree, visible_only=visible_only
        ),
        asynchronous=asynchronous,
    )


def _script_asset_target(options: ExportOptions, output: Path) -> Path | None:
    """Return where ``timeline.js`` belongs for a page written to ``output``."""
    for src in options.scripts:
        parts = urlsplit(src)
        if parts.scheme or parts.netloc or src.startswith("/"):
            continue
        if Path(parts.path).name == SCRIPT_ASSET:
            return output.parent / parts.path
    return None


def _write_page(
    source: Path,
    output: Path,
    options: ExportOptions,
    *,
    subtree: str | None,
    visible_only: bool,
) -> Path:
    document = load_outline(source)
    html = _render(document, options, subtree=subtree, visible_only=visible_only)
    if not html.endswith("\n"):
        html += "\n"
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")
    if options.copy_assets:
        target = _script_asset_target(options, output)
        if target is not None:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(STATIC_DIR / SCRIPT_ASSET, target)
    return output


def export_to_file(
    source: Path,
    output: Path,
    options: ExportOptions | None = None,
    *,
    subtree: str | None = None,
    visible_only: bool = False,
    asynchronous: bool = False,
) -> Path | Future[Path]:
    """Load the outline at ``source`` and write the page to ``output``.

    Parent directories are created as needed and the page is written as UTF-8
    ending in a newline. When ``options.copy_assets`` is set, ``timeline.js``
    is copied to the first relative script URL that names it.

    Returns
    -------
    Path or Future[Path]
        ``output``.
    """
    resolved = options or ExportOptions()
    return _run(
        lambda: _write_page(
            source, output, resolved, subtree=subtree, visible_only=visible_only
        ),
        asynchronous=asynchronous,
    )


def _publish(site_config: SiteConfig, keys: list[str] | None) -> list[Path]:
    if keys:
        targets = [site_config.get_timeline(key) for key in keys]
    else:
        targets = list(site_config.timelines.values())
    return [
        _write_page(
            timeline.source,
            timeline.output,
            timeline.options,
            subtree=timeline.subtree,
            visible_only=timeline.visible_only,
        )
        for timeline in targets
    ]


def publish(
    site_config: SiteConfig,
    keys: cabc.Iterable[str] | None = None,
    *,
    asynchronous: bool = False,
) -> list[Path] | Future[list[Path]]:
    """Write every configured timeline (or only ``keys``) to its output path."""
    selected = list(keys) if keys is not None else None
    return _run(lambda: _publish(site_config, selected), asynchronous=asynchronous)


__all__ = [
    "export_to_file",
    "export_to_string",
    "prepare_document",
    "prettify",
    "publish",
]
