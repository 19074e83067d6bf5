# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Scales, curves and a scene builder shared by the layout algorithms."""

from __future__ import annotations

__all__ = [
    "BandScale",
    "LinearScale",
    "PointScale",
    "SceneBuilder",
    "ellipsize",
    "monotone_path",
    "polygon_path",
    "quadratic_path",
    "tick_increment",
]

import collections.abc as cabc
import math
import typing as t

from diagramgen import diagram, helpers
from diagramgen.diagram import RGB, Vector2D

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def tick_increment(start: float, stop: float, count: int) -> float:
    """Find a human friendly step to divide ``[start, stop]`` by.

    The returned step is a power of ten multiplied by 1, 2 or 5. Steps
    below 1 are returned as the negative inverse of the step (``-10``
    stands for ``0.1``), which avoids floating point errors when
    generating the ticks.
    """
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / 10**power
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1
    if power >= 0:
        return factor * 10**power
    return -(10**-power) / factor


class LinearScale:
    """Maps a continuous domain linearly onto an output range."""

    def __init__(
        self,
        domain: tuple[float, float],
        range_: tuple[float, float],
    ) -> None:
        self.domain = domain
        self.range = range_

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            return (r0 + r1) / 2
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)

    def nice(self, count: int = 10) -> LinearScale:
        """Extend the domain so that it starts and ends on round values."""
        start, stop = self.domain
        if stop <= start:
            return self

        prestep = None
        for _ in range(10):
            step = tick_increment(start, stop, count)
            if step == prestep:
                break
            if step > 0:
                start = math.floor(start / step) * step
                stop = math.ceil(stop / step) * step
            elif step < 0:
                start = math.ceil(start * step) / step
                stop = math.floor(stop * step) / step
            else:
                break
            prestep = step
        return LinearScale((start, stop), self.range)

    def ticks(self, count: int = 10) -> list[float]:
        """Return about ``count`` round values within the domain."""
        start, stop = self.domain
        if stop <= start:
            return [start]
        step = tick_increment(start, stop, count)
        if step > 0:
            lo, hi = math.ceil(start / step), math.floor(stop / step)
            return [i * step for i in range(lo, hi + 1)]
        lo, hi = math.ceil(start * -step), math.floor(stop * -step)
        return [i / -step for i in range(lo, hi + 1)]


class BandScale:
    """Divides a range into uniform bands, one per domain element.

    ``padding`` is the fraction of each step reserved as space between
    bands, and is also applied before the first and after the last band.
    """

    def __init__(
        self,
        count: int,
        range_: tuple[float, float],
        padding: float = 0.0,
    ) -> None:
        r0, r1 = range_
        self.count = count
        self.step = (r1 - r0) / max(1, count - padding + 2 * padding)
        self.start = r0 + (r1 - r0 - self.step * (count - padding)) / 2
        self.bandwidth = self.step * (1 - padding)

    def __call__(self, index: int) -> float:
        return self.start + self.step * index

    def center(self, index: int) -> float:
        return self(index) + self.bandwidth / 2


class PointScale(BandScale):
    """Evenly spaced points with outer padding, in units of one step."""

    def __init__(
        self,
        count: int,
        range_: tuple[float, float],
        padding: float = 0.0,
    ) -> None:
        r0, r1 = range_
        self.count = count
        self.step = (r1 - r0) / max(1, count - 1 + 2 * padding)
        self.start = r0 + (r1 - r0 - self.step * (count - 1)) / 2
        self.bandwidth = 0


def _fmt(value: float) -> str:
    return f"{round(value, 2):g}"


def _slope3(p0: Vector2D, p1: Vector2D, p2: Vector2D) -> float:
    h0 = p1.x - p0.x
    h1 = p2.x - p1.x
    s0 = (p1.y - p0.y) / h0 if h0 else 0.0
    s1 = (p2.y - p1.y) / h1 if h1 else 0.0
    if h0 + h1 == 0:
        return 0.0
    p = (s0 * h1 + s1 * h0) / (h0 + h1)
    sign = (-1 if s0 < 0 else 1) + (-1 if s1 < 0 else 1)
    return sign * min(abs(s0), abs(s1), 0.5 * abs(p))


def _slope2(p0: Vector2D, p1: Vector2D, tangent: float) -> float:
    h = p1.x - p0.x
    if not h:
        return tangent
    return (3 * (p1.y - p0.y) / h - tangent) / 2


def monotone_path(points: cabc.Sequence[Vector2D]) -> str:
    """Build SVG path data for a curve that is monotone in Y.

    The curve passes through all ``points``, which must be ordered by
    their X coordinate. Between points it never overshoots, so a
    monotonically growing series is drawn as a monotonically growing
    curve (Fritsch-Carlson / Steffen style tangents).
    """
    if not points:
        return ""
    start = f"M{_fmt(points[0].x)},{_fmt(points[0].y)}"
    if len(points) == 1:
        return start
    if len(points) == 2:
        return f"{start}L{_fmt(points[1].x)},{_fmt(points[1].y)}"

    tangents = [0.0] * len(points)
    for i in range(1, len(points) - 1):
        tangents[i] = _slope3(points[i - 1], points[i], points[i + 1])
    tangents[0] = _slope2(points[0], points[1], tangents[1])
    tangents[-1] = _slope2(points[-2], points[-1], tangents[-2])

    segments = [start]
    for i in range(len(points) - 1):
        p0, p1 = points[i], points[i + 1]
        dx = (p1.x - p0.x) / 3
        c0 = (p0.x + dx, p0.y + dx * tangents[i])
        c1 = (p1.x - dx, p1.y - dx * tangents[i + 1])
        segments.append(
            f"C{_fmt(c0[0])},{_fmt(c0[1])},"
            f"{_fmt(c1[0])},{_fmt(c1[1])},"
            f"{_fmt(p1.x)},{_fmt(p1.y)}"
        )
    return "".join(segments)


def polygon_path(points: cabc.Sequence[Vector2D]) -> str:
    """Build SVG path data for a closed polygon through ``points``."""
    if not points:
        return ""
    coords = [f"{_fmt(p.x)},{_fmt(p.y)}" for p in points]
    return "M" + "L".join(coords) + "Z"


def quadratic_path(start: Vector2D, control: Vector2D, end: Vector2D) -> str:
    return (
        f"M{_fmt(start.x)},{_fmt(start.y)}"
        f"Q{_fmt(control.x)},{_fmt(control.y)},{_fmt(end.x)},{_fmt(end.y)}"
    )


class SceneBuilder:
    """Collects positioned elements and turns them into a :class:`Scene`.

    Every layout algorithm creates one builder per call, so no state is
    shared between renders.
    """

    def __init__(self, theme: diagram.Theme, diagram_type: str) -> None:
        self.theme = theme
        self.diagram_type = diagram_type
        self.elements: list[diagram.SceneElement] = []

    def rect(
        self,
        pos: diagram.Vec2ish,
        size: diagram.Vec2ish,
        *,
        rx: float = 0,
        class_: str = "",
        **style: t.Any,
    ) -> diagram.Rect:
        element = diagram.Rect(
            Vector2D(*pos),
            Vector2D(*size),
            rx,
            diagram.make_style(**style),
            class_,
        )
        self.elements.append(element)
        return element

    def line(
        self,
        start: diagram.Vec2ish,
        end: diagram.Vec2ish,
        *,
        class_: str = "",
        **style: t.Any,
    ) -> diagram.Line:
        element = diagram.Line(
            Vector2D(*start),
            Vector2D(*end),
            diagram.make_style(**style),
            class_,
        )
        self.elements.append(element)
        return element

    def circle(
        self,
        center: diagram.Vec2ish,
        radius: float,
        *,
        class_: str = "",
        **style: t.Any,
    ) -> diagram.Circle:
        element = diagram.Circle(
            Vector2D(*center), radius, diagram.make_style(**style), class_
        )
        self.elements.append(element)
        return element

    def ellipse(
        self,
        center: diagram.Vec2ish,
        radii: diagram.Vec2ish,
        *,
        class_: str = "",
        **style: t.Any,
    ) -> diagram.Ellipse:
        element = diagram.Ellipse(
            Vector2D(*center),
            Vector2D(*radii),
            diagram.make_style(**style),
            class_,
        )
        self.elements.append(element)
        return element

    def path(
        self, d: str, *, class_: str = "", **style: t.Any
    ) -> diagram.Path:
        element = diagram.Path(d, diagram.make_style(**style), class_)
        self.elements.append(element)
        return element

    def text(
        self,
        pos: diagram.Vec2ish,
        content: str | None,
        *,
        font_size: float,
        fill: RGB,
        width: float | None = None,
        line_height: float = 1.15,
        anchor: t.Literal["start", "middle", "end"] = "middle",
        font_weight: str | int = "normal",
        centered: bool = True,
        baseline_shift: str = "0.35em",
        rotate: float = 0,
        class_: str = "",
        **style: t.Any,
    ) -> diagram.Text | None:
        """Add a block of text, optionally wrapped to ``width``.

        Parameters
        ----------
        pos
            The anchor point of the text block.
        content
            The text. If it is empty or None, nothing is added and None
            is returned.
        width
            Wrap the text to this many pixels. If not given, the text
            is drawn on a single line.
        line_height
            Distance between consecutive lines, relative to the font
            size.
        centered
            If True, the lines are vertically centered around the
            anchor. Otherwise the first line sits on the anchor and the
            following lines flow downwards.
        """
        if width is not None:
            measure = helpers.make_measure(max(1, round(font_size)))
            lines = helpers.word_wrap(content, width, measure)
        elif content:
            lines = [content]
        else:
            lines = []
        if not lines:
            return None

        lh = font_size * line_height
        if centered:
            offsets = helpers.center_offsets(len(lines), lh)
        else:
            offsets = [i * lh for i in range(len(lines))]

        element = diagram.Text(
            Vector2D(*pos),
            tuple(lines),
            tuple(offsets),
            font_size,
            fill,
            anchor,
            font_weight,
            rotate,
            baseline_shift,
            diagram.make_style(**style),
            class_,
        )
        self.elements.append(element)
        return element

    def build(self, width: float, height: float) -> diagram.Scene:
        return diagram.Scene(
            width,
            height,
            self.theme.background,
            tuple(self.elements),
            self.diagram_type,
        )


def ellipsize(text: str | None, width: float, font_size: float) -> str:
    """Shorten ``text`` to ``width`` pixels at the given font size."""
    return helpers.ellipsize(
        text, width, helpers.make_measure(max(1, round(font_size)))
    )
