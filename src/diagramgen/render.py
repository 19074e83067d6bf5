# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Entry point for turning a diagram record into a displayable surface.

The :func:`render` function picks the theme, runs the matching layout
algorithm and serializes the resulting scene to an SVG tree. The tree
is wrapped in a :class:`DiagramSurface`, which is the handle that the
export functions in :mod:`diagramgen.export` operate on.
"""

from __future__ import annotations

__all__ = ["DiagramSurface", "RenderResult", "render"]

import logging
import os
import pathlib
import typing as t

from lxml import etree

from diagramgen import diagram, layout, records, svg

LOGGER = logging.getLogger(__name__)


class DiagramSurface:
    """A rendered diagram, ready to be mounted or exported.

    The SVG tree held by the surface is considered live. Consumers that
    need to modify it, like the export pipeline, must work on a copy.
    """

    def __init__(self, scene: diagram.Scene) -> None:
        self.scene = scene
        self.tree: etree._Element = etree.fromstring(
            svg.to_svg(scene).encode("utf-8")
        )

    @property
    def diagram_type(self) -> str:
        return self.scene.diagram_type

    def __bool__(self) -> bool:
        return bool(self.scene)

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} {self.diagram_type or 'empty'}"
            f" {self.scene.width:g}x{self.scene.height:g}>"
        )

    def to_string(self) -> str:
        """Serialize the live tree to an SVG document."""
        return etree.tostring(self.tree, encoding="unicode")

    def mount(self, path: str | os.PathLike[str]) -> pathlib.Path:
        """Write the surface to ``path`` as a standalone SVG file.

        If ``path`` is a directory, the file name is derived from the
        diagram type.
        """
        path = pathlib.Path(path)
        if path.is_dir():
            path = path / f"{(self.diagram_type or 'diagram').lower()}.svg"
        path.write_bytes(
            etree.tostring(self.tree, xml_declaration=True, encoding="utf-8")
        )
        LOGGER.debug("Mounted %r at %s", self, path)
        return path


class RenderResult(t.NamedTuple):
    surface: DiagramSurface
    width: float
    height: float


def render(
    record: records.DiagramRecord,
    theme: diagram.Theme | None = None,
    is_dark: bool = False,
    base_width: float | None = None,
) -> RenderResult:
    """Render a diagram record.

    Parameters
    ----------
    record
        The diagram to render.
    theme
        The color theme to use. If not given, it is resolved from
        ``is_dark``.
    is_dark
        Whether to render in dark mode.
    base_width
        Preferred canvas width. Layouts with data-dependent size may
        still grow beyond it.

    Returns
    -------
    RenderResult
        The surface handle and the computed canvas size. Empty or
        degenerate records yield an empty surface of size zero.
    """
    if theme is None:
        theme = diagram.resolve_theme(is_dark)
    scene = layout.layout(record, theme, base_width)
    if not scene:
        LOGGER.debug("Nothing to render for %s", record.type.value)
    surface = DiagramSurface(scene)
    return RenderResult(surface, scene.width, scene.height)
