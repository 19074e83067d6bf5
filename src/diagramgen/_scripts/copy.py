# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0

import asyncio
import logging

import click

from diagramgen import cli_helpers, export, records
from diagramgen import render as _render

logger = logging.getLogger(__name__)


@click.command()
@click.argument("dashboard", type=cli_helpers.DashboardCLI())
@click.option(
    "-p",
    "--position",
    type=click.IntRange(min=1),
    default=1,
    help="Which diagram of the dashboard to copy, counting from 1",
    show_default=True,
)
@click.option(
    "--dark/--light",
    default=False,
    help="Render with the dark or the light theme.",
    show_default=True,
    envvar="DIAGRAMGEN_DARK",
    show_envvar=True,
)
def main(dashboard: records.Dashboard, position: int, dark: bool) -> None:
    """Copy a diagram to the clipboard as PNG image.

    The image is scaled by the factor in $DIAGRAMGEN_CLIPBOARD_SCALE
    (default 2).
    """
    if position > len(dashboard.diagrams):
        raise click.BadParameter(
            f"Dashboard has only {len(dashboard.diagrams)} diagrams",
            param_hint="'--position'",
        )

    record = dashboard.diagrams[position - 1]
    result = _render.render(record, is_dark=dark)
    if not result.surface:
        logger.error("%s has no content, nothing to copy", record.type.label)
        raise SystemExit(1)

    if not asyncio.run(export.export_to_clipboard(result.surface, dark)):
        raise SystemExit(1)
    logger.info("Copied %s to the clipboard", record.type.label)
