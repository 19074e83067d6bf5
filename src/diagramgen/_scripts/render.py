# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import asyncio
import datetime
import json
import logging
import pathlib
import typing as t

import click
from lxml import etree
from lxml.builder import E

from diagramgen import cli_helpers, diagram, export, records
from diagramgen import render as _render

logger = logging.getLogger(__name__)

VALID_FORMATS = frozenset({"json", "png", "svg"})


class IndexEntry(t.TypedDict):
    position: int
    type: records.DiagramType
    file: str
    success: bool


@click.command()
@click.argument("dashboard", type=cli_helpers.DashboardCLI())
@click.option(
    "-o",
    "--output",
    type=click.Path(file_okay=False, dir_okay=True, path_type=pathlib.Path),
    default="./diagrams",
    help="Directory to store the rendered diagrams in",
    show_default=True,
    envvar="DIAGRAMGEN_OUTPUT_DIR",
    show_envvar=True,
)
@click.option(
    "-f",
    "--format",
    type=click.Choice(sorted(VALID_FORMATS)),
    default="svg",
    help="Output format",
    show_default=True,
    envvar="DIAGRAMGEN_OUTPUT_FORMAT",
    show_envvar=True,
)
@click.option(
    "--dark/--light",
    default=False,
    help="Render with the dark or the light theme.",
    show_default=True,
    envvar="DIAGRAMGEN_DARK",
    show_envvar=True,
)
@click.option(
    "-w",
    "--width",
    type=click.FloatRange(min=1),
    help="Preferred canvas width; some diagrams grow beyond it",
)
@click.option(
    "--index/--no-index",
    default=True,
    help="Generate index.json and index.html files",
    show_default=True,
    envvar="DIAGRAMGEN_GENERATE_INDEX",
    show_envvar=True,
)
def main(
    dashboard: records.Dashboard,
    output: pathlib.Path,
    format: str,
    dark: bool,
    width: float | None,
    index: bool,
) -> None:
    """Render the diagrams of a dashboard into files.

    DASHBOARD is a JSON file with a dashboard or a single diagram, '-'
    to read it from standard input, or the JSON text itself.

    \b
    Exit codes
    ----------

    \b
    - 0 in case of success
    - 1 if no diagram could be rendered
    - 2 for CLI usage errors
    - 3 if some diagrams failed to render, but others were successful
    """  # noqa: D301
    if not dashboard.diagrams:
        logger.info("No diagrams found in the dashboard, nothing to render")
        raise SystemExit(0)

    output.mkdir(parents=True, exist_ok=True)
    entries: list[IndexEntry] = []
    for i, record in enumerate(dashboard.diagrams, start=1):
        filename = f"{i:02d}_{record.type.value.lower()}.{format}"
        success = _render_one(record, output / filename, format, dark, width)
        entries.append(
            {
                "position": i,
                "type": record.type,
                "file": filename,
                "success": success,
            }
        )

    if index:
        _write_index(dashboard, output, entries)

    ok = sum(1 for i in entries if i["success"])
    if ok == 0:
        logger.error("Could not render any diagrams")
        raise SystemExit(1)

    failed = len(entries) - ok
    if failed > 0:
        msg = "\n".join(
            f" - #{i['position']} ({i['type'].label})"
            for i in entries
            if not i["success"]
        )
        logger.error(
            "%d diagrams failed to render (%d ok)\n%s", failed, ok, msg
        )
        raise SystemExit(3)


def _render_one(
    record: records.DiagramRecord,
    dest: pathlib.Path,
    format: str,
    dark: bool,
    width: float | None,
) -> bool:
    result = _render.render(record, is_dark=dark, base_width=width)
    if not result.surface:
        logger.warning("%s has no content, not rendering", record.type.label)
        return False

    if format == "svg":
        result.surface.mount(dest)
    elif format == "json":
        dest.write_text(
            json.dumps(result.surface.scene, cls=diagram.SceneJSONEncoder)
        )
    else:
        job = export.ExportJob(
            result.surface, scale=export.download_scale(), is_dark=dark
        )
        try:
            bitmap = asyncio.run(job.run())
        except export.ExportError:
            logger.exception("Cannot rasterize %s", record.type.label)
            return False
        dest.write_bytes(export.encode_png(bitmap))

    logger.info("Wrote %s (%gx%g)", dest, result.width, result.height)
    return True


def _write_index(
    dashboard: records.Dashboard,
    dest: pathlib.Path,
    index: list[IndexEntry],
) -> None:
    nowtime = datetime.datetime.now(tz=None)
    now = nowtime.strftime("%A, %Y-%m-%d %H:%M:%S")
    title = dashboard.title or "Diagrams"
    html = E.html(
        E.head(
            E.meta(charset="utf-8"),
            E.title(title),
            E.style(
                "a:active, a:hover, a:link, a:visited {text-decoration: none}"
                " .missing {color: red}"
                " .small {font-size: 60%}"
                " .type {color: #AAA; font-size: 60%}"
            ),
        ),
        body := E.body(E.h1(title), E.p({"class": "small"}, "Created: ", now)),
    )
    if dashboard.summary:
        body.append(E.p(dashboard.summary))

    body.append(ol := E.ol())
    for entry in index:
        tlabel = E.span({"class": "type"}, f"[{entry['type'].name}]")
        if entry["success"]:
            label = E.a({"href": entry["file"]}, entry["type"].label)
        else:
            label = E.span({"class": "missing"}, entry["type"].label)
        ol.append(E.li(label, " ", tlabel))

    dest.joinpath("index.json").write_text(
        json.dumps(
            {
                "title": dashboard.title,
                "summary": dashboard.summary,
                "diagrams": index,
            },
            cls=IndexEncoder,
        )
    )
    dest.joinpath("index.html").write_bytes(etree.tostring(html))


class IndexEncoder(json.JSONEncoder):
    """A JSON encoder for the index file."""

    def default(self, o):
        if isinstance(o, records.DiagramType):
            return o.name
        return super().default(o)
