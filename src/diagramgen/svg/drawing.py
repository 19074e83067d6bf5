# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Custom extensions to the svgwrite ``Drawing`` object."""

from __future__ import annotations

__all__ = ["Drawing", "svg_attributes"]

import collections.abc as cabc
import logging
import typing as t

from svgwrite import drawing, shapes
from svgwrite import path as svgpath
from svgwrite import text as svgtext

from diagramgen import diagram, helpers

LOGGER = logging.getLogger(__name__)

_OPACITY_OF = {"fill": "fill-opacity", "stroke": "stroke-opacity"}


def svg_attributes(style: diagram.Style) -> dict[str, t.Any]:
    """Convert a scene style mapping into SVG presentation attributes.

    Colors with transparency are split into an opaque color and the
    matching ``*-opacity`` attribute, which every SVG consumer
    understands. Fully transparent colors become ``none``.
    """
    attrs: dict[str, t.Any] = {}
    for key, value in style.items():
        if isinstance(value, diagram.RGB):
            if value.a <= 0:
                attrs[key] = "none"
                continue
            attrs[key] = "#" + diagram.RGB(*value.rgb).tohex()
            if value.a < 1 and key in _OPACITY_OF:
                attrs.setdefault(_OPACITY_OF[key], round(value.a, 3))
        else:
            attrs[key] = value
    return attrs


def _num(value: float) -> float:
    return round(value, 2)


class Drawing:
    """The main container that stores all svg elements."""

    def __init__(
        self,
        scene: diagram.Scene,
        *,
        font_family: str = helpers.FONT_FAMILY,
        font_size: int = helpers.DEFAULT_FONT_SIZE,
        transparent_background: bool = False,
    ):
        name = (scene.diagram_type or "diagram").lower()
        superparams = {
            "font-family": font_family,
            "font-size": f"{font_size}px",
            "shape-rendering": "geometricPrecision",
            "size": (_num(scene.width), _num(scene.height)),
            "viewBox": f"0 0 {_num(scene.width)} {_num(scene.height)}",
        }
        if scene.diagram_type:
            superparams["class_"] = f"diagram {name.replace('_', '-')}"

        self.__drawing = drawing.Drawing(**superparams)
        if not transparent_background and scene.background is not None:
            self._add_backdrop(scene.size, scene.background)

        for element in scene:
            self.draw_element(element)

    def to_string(self) -> str:
        """Return a string representation of the SVG."""
        return self.__drawing.tostring()

    def _add_backdrop(
        self, size: diagram.Vector2D, color: diagram.RGB
    ) -> None:
        """Add a background rectangle in the theme's color."""
        backdrop = self.__drawing.rect(
            insert=(0, 0),
            size=(_num(size.x), _num(size.y)),
            class_="backdrop",
            stroke="none",
            **svg_attributes({"fill": color}),
        )
        self.__drawing.add(backdrop)

    def draw_element(self, element: diagram.SceneElement) -> None:
        """Draw a single scene element into this drawing."""
        if isinstance(element, diagram.Rect):
            obj = self._draw_rect(element)
        elif isinstance(element, diagram.Line):
            obj = self._draw_line(element)
        elif isinstance(element, diagram.Circle):
            obj = self._draw_circle(element)
        elif isinstance(element, diagram.Ellipse):
            obj = self._draw_ellipse(element)
        elif isinstance(element, diagram.Path):
            obj = self._draw_path(element)
        elif isinstance(element, diagram.Text):
            obj = self._draw_text(element)
        else:
            raise ValueError(f"Invalid scene element: {element!r}")
        self.__drawing.add(obj)

    def _draw_rect(self, element: diagram.Rect) -> shapes.Rect:
        params: dict[str, t.Any] = {
            "insert": (_num(element.pos.x), _num(element.pos.y)),
            "size": (_num(element.size.x), _num(element.size.y)),
            **svg_attributes(element.style),
        }
        if element.rx:
            params["rx"] = element.rx
            params["ry"] = element.rx
        if element.class_:
            params["class_"] = element.class_
        return self.__drawing.rect(**params)

    def _draw_line(self, element: diagram.Line) -> shapes.Line:
        return self.__drawing.line(
            start=(_num(element.start.x), _num(element.start.y)),
            end=(_num(element.end.x), _num(element.end.y)),
            **self._common(element),
        )

    def _draw_circle(self, element: diagram.Circle) -> shapes.Circle:
        return self.__drawing.circle(
            center=(_num(element.center.x), _num(element.center.y)),
            r=_num(element.radius),
            **self._common(element),
        )

    def _draw_ellipse(self, element: diagram.Ellipse) -> shapes.Ellipse:
        return self.__drawing.ellipse(
            center=(_num(element.center.x), _num(element.center.y)),
            r=(_num(element.radii.x), _num(element.radii.y)),
            **self._common(element),
        )

    def _draw_path(self, element: diagram.Path) -> svgpath.Path:
        return self.__drawing.path(d=element.d, **self._common(element))

    def _draw_text(self, element: diagram.Text) -> svgtext.Text:
        x, y = _num(element.pos.x), _num(element.pos.y)
        textattrs: dict[str, t.Any] = {
            "text": "",
            "font_size": f"{element.font_size}px",
            "text_anchor": element.anchor,
            **self._common(element),
        }
        if element.font_weight != "normal":
            textattrs["font_weight"] = str(element.font_weight)
        if element.rotate:
            textattrs["transform"] = f"rotate({element.rotate} {x} {y})"
        textattrs.update(svg_attributes({"fill": element.fill}))

        text = self.__drawing.text(**textattrs)
        for line, offset in zip(element.lines, element.offsets):
            params: dict[str, t.Any] = {
                "x": [x],
                "y": [_num(y + offset)],
                "xml:space": "preserve",
            }
            if element.baseline_shift != "0":
                params["dy"] = [element.baseline_shift]
            text.add(svgtext.TSpan(line, **params))

        return text

    @staticmethod
    def _common(
        element: diagram.SceneElement,
    ) -> cabc.MutableMapping[str, t.Any]:
        attrs = svg_attributes(element.style)
        if element.class_:
            attrs["class_"] = element.class_
        return attrs
