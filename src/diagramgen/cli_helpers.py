# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Helpers for working with dashboards in CLI scripts."""

from __future__ import annotations

__all__ = ["DashboardCLI", "loaddashboard"]

import logging
import os
import pathlib
import sys
import typing as t

import click

from diagramgen import records

LOGGER = logging.getLogger(__name__)


class DashboardCLI(click.ParamType):
    """Declare an argument that loads a dashboard.

    Use instances of this class for the *type* argument to
    :func:`click.option` or :func:`click.argument`.

    See Also
    --------
    diagramgen.cli_helpers.loaddashboard :
        A standalone function performing the same task.

    Examples
    --------
    .. code-block:: python

       @click.command()
       @click.argument("dashboard", type=DashboardCLI())
       def main(dashboard: records.Dashboard) -> None:
           ...
    """

    name = "DASHBOARD"

    def convert(self, value: t.Any, param, ctx) -> records.Dashboard:
        """Convert the value to the target type."""
        if isinstance(value, records.Dashboard):
            return value

        try:
            return loaddashboard(value)
        except (OSError, ValueError) as err:
            self.fail(str(err), param, ctx)


def loaddashboard(value: str | os.PathLike[str]) -> records.Dashboard:
    """Load a dashboard from a file, standard input or a JSON string.

    Parameters
    ----------
    value
        One of the following:

        - A str or PathLike pointing to a JSON file, which contains a
          dashboard or a single diagram record. Markdown code fences
          around the JSON are tolerated.
        - The string ``-``, to read the same from standard input.
        - The JSON text itself.

    Raises
    ------
    ValueError
        If the text cannot be decoded or is not a JSON object.
    OSError
        If the file cannot be read.
    """
    if value == "-":
        LOGGER.debug("Reading dashboard from standard input")
        return records.parse_dashboard(sys.stdin.read())

    if isinstance(value, str) and value.lstrip().startswith(("{", "`")):
        return records.parse_dashboard(value)

    path = pathlib.Path(value)
    LOGGER.debug("Reading dashboard from %s", path)
    return records.parse_dashboard(path.read_bytes())
