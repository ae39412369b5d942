"""Cyclopts CLI entrypoint for exporting and filtering timeline pages.

The ``timeline`` console script defined here renders an outline document into
a timeline page, publishes every timeline listed in ``timeline.yaml``, and
writes filtered snapshots of an already exported page. Typical usage involves
running ``timeline publish`` locally or in CI and ``timeline export`` while
editing a single outline.

Examples
--------
Publish all timelines for the default configuration:

>>> from timeline_pages.cli import main
>>> main()  # doctest: +SKIP

Export one outline to a custom file:

>>> from timeline_pages.cli import app
>>> app(["export", "outline.yaml", "--output", "dist/index.html"])  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import ExportOptions, load_site_config
from .exporter import export_to_file, export_to_string, publish as publish_site
from .filters import FilterPage
from .outline import load_outline

DEFAULT_CONFIG = Path("config/timeline.yaml")

app = App(name="timeline", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _load_options(config: Path | None) -> ExportOptions:
    """Return the configured default export options, or the built-in ones."""
    if config is None:
        return ExportOptions()
    return load_site_config(config).options


@app.command(help="Export one outline document to a timeline page.")
def export(
    source: typ.Annotated[Path, Parameter(help="Outline YAML file")],
    *,
    output: typ.Annotated[
        Path | None,
        Parameter(help="Write the page here instead of stdout", env_var="INPUT_OUTPUT"),
    ] = None,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Read export defaults from this config", env_var="INPUT_CONFIG"),
    ] = None,
    subtree: typ.Annotated[
        str | None, Parameter(help="Export only the node with this title")
    ] = None,
    visible_only: typ.Annotated[
        bool, Parameter(help="Skip nodes marked visible: false")
    ] = False,
) -> None:
    """Render ``source`` into a timeline page.

    Parameters
    ----------
    source : Path
        Outline document to export.
    output : Path or None, optional
        Destination file; when ``None`` the HTML is printed to stdout.
    config : Path or None, optional
        Configuration file whose ``defaults`` provide the export options.
    subtree : str or None, optional
        Title of the node whose subtree is exported.
    visible_only : bool, optional
        Drop nodes marked ``visible: false`` before exporting.

    Raises
    ------
    EntryDateError
        If a categorized node has a missing or malformed date.
    """
    options = _load_options(config)
    if output is None:
        html = export_to_string(
            load_outline(source), options, subtree=subtree, visible_only=visible_only
        )
        print(html, end="")
        return
    written = export_to_file(
        source, output, options, subtree=subtree, visible_only=visible_only
    )
    print(f"wrote {_format_path(typ.cast('Path', written))}")


@app.command(help="Export every timeline listed in the configuration.")
def publish(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to timeline config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    timeline: typ.Annotated[
        str | None,
        Parameter(help="Timeline identifier", env_var="INPUT_TIMELINE"),
    ] = None,
) -> None:
    """Publish the configured timelines and log the generated paths.

    Parameters
    ----------
    config : Path, optional
        Path to the ``timeline.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    timeline : str or None, optional
        Specific timeline key to publish; when ``None`` (default) all
        timelines are published.
    """
    site_config = load_site_config(config)
    keys = [timeline] if timeline else None
    written = typ.cast("list[Path]", publish_site(site_config, keys))
    for path in written:
        print(f"wrote {_format_path(path)}")


@app.command(help="Write a snapshot of an exported page with categories filtered.")
def filter(  # noqa: A001 - command name
    page: typ.Annotated[Path, Parameter(help="Exported timeline page")],
    *,
    category: typ.Annotated[
        list[str] | None,
        Parameter(help="Category slug to keep checked (repeatable)"),
    ] = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Write the snapshot here instead of stdout")
    ] = None,
) -> None:
    """Apply category filters to an exported page.

    With no ``--category`` every category is checked (the "All" shortcut);
    otherwise exactly the given categories stay checked and only overlapping
    entries remain visible.
    """
    filter_page = FilterPage.from_html(page.read_text(encoding="utf-8"))
    if category:
        filter_page.select(category)
    else:
        filter_page.check_all()
    html = filter_page.render()
    if output is None:
        print(html, end="" if html.endswith("\n") else "\n")
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")
    print(f"wrote {_format_path(output)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the `timeline` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
