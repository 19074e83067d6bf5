# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Layout of Pareto charts.

A Pareto chart has two vertical axes: bars on the left axis show the
item values, and a line on the right axis (always 0 to 100 %) shows
the cumulative percentage of the total.
"""

from __future__ import annotations

__all__ = ["cumulative_percentages", "layout_pareto"]

import collections.abc as cabc
import logging

from diagramgen import diagram, records
from diagramgen.diagram import Vector2D

from . import _common

LOGGER = logging.getLogger(__name__)

DEFAULT_SIZE = Vector2D(800, 500)
MARGIN_TOP = 70
MARGIN_RIGHT = 60
MARGIN_BOTTOM = 80
MARGIN_LEFT = 60
BAND_PADDING = 0.3
LEFT_TICKS = 5
GRID_TICKS = 10


def cumulative_percentages(values: cabc.Iterable[float]) -> list[float]:
    """Calculate the running share of the total for each value.

    The values are processed in the given order. If the total is zero,
    all percentages are zero.

    Examples
    --------
    >>> cumulative_percentages([50, 30, 20])
    [50.0, 80.0, 100.0]
    >>> cumulative_percentages([0, 0])
    [0.0, 0.0]
    """
    values = list(values)
    total = sum(values)
    result: list[float] = []
    running = 0.0
    for value in values:
        running += value
        result.append(running / total * 100 if total > 0 else 0.0)
    return result


def _format_value(value: float) -> str:
    return f"{value:g}"


def layout_pareto(
    record: records.ParetoRecord,
    theme: diagram.Theme,
    base_width: float | None = None,
) -> diagram.Scene:
    if not record.items:
        LOGGER.debug("Pareto chart has no items, not rendering")
        return diagram.Scene.empty(records.DiagramType.PARETO.value)

    width = max(DEFAULT_SIZE.x, base_width or 0)
    height = DEFAULT_SIZE.y
    inner_w = width - MARGIN_LEFT - MARGIN_RIGHT
    inner_h = height - MARGIN_TOP - MARGIN_BOTTOM
    values = [item.value for item in record.items]
    cumulative = cumulative_percentages(values)

    x = _common.BandScale(
        len(values), (MARGIN_LEFT, MARGIN_LEFT + inner_w), BAND_PADDING
    )
    ymax = max(values) or 1
    y1 = _common.LinearScale(
        (0, ymax), (MARGIN_TOP + inner_h, MARGIN_TOP)
    ).nice()
    y2 = _common.LinearScale((0, 100), (MARGIN_TOP + inner_h, MARGIN_TOP))
    bar_color = theme.accent("bar")
    line_color = theme.accent("cumulative")

    scene = _common.SceneBuilder(theme, records.DiagramType.PARETO.value)
    scene.text(
        (width / 2, 40),
        record.title or "Pareto Chart",
        font_size=20,
        font_weight=700,
        fill=theme.text_title,
        baseline_shift="0",
        class_="title",
    )

    for tick in y1.ticks(GRID_TICKS):
        scene.line(
            (MARGIN_LEFT, y1(tick)),
            (MARGIN_LEFT + inner_w, y1(tick)),
            class_="grid",
            stroke=theme.grid,
        )
    scene.line(
        (MARGIN_LEFT, MARGIN_TOP + inner_h),
        (MARGIN_LEFT + inner_w, MARGIN_TOP + inner_h),
        class_="axis",
        stroke=theme.axis,
    )

    for tick in y1.ticks(LEFT_TICKS):
        scene.text(
            (MARGIN_LEFT - 10, y1(tick)),
            _format_value(tick),
            font_size=12,
            fill=theme.text_muted,
            anchor="end",
            baseline_shift="0.32em",
            class_="tick-left",
        )
    for tick in range(0, 101, 10):
        scene.text(
            (MARGIN_LEFT + inner_w + 10, y2(tick)),
            f"{tick}%",
            font_size=12,
            fill=line_color,
            anchor="start",
            baseline_shift="0.32em",
            class_="tick-right",
        )
    scene.text(
        (MARGIN_LEFT - 45, MARGIN_TOP + inner_h / 2),
        "Frequency",
        font_size=13,
        font_weight=600,
        fill=theme.text_title,
        rotate=-90,
        baseline_shift="0",
    )
    scene.text(
        (MARGIN_LEFT + inner_w + 50, MARGIN_TOP + inner_h / 2),
        "Cumulative %",
        font_size=13,
        font_weight=600,
        fill=line_color,
        rotate=-90,
        baseline_shift="0",
    )

    for i, item in enumerate(record.items):
        top = y1(item.value)
        scene.rect(
            (x(i), top),
            (x.bandwidth, MARGIN_TOP + inner_h - top),
            rx=4,
            class_="pareto-bar",
            fill=bar_color,
            opacity=0.9,
        )
        scene.text(
            (x.center(i), top - 8),
            _format_value(item.value),
            font_size=11,
            font_weight=600,
            fill=bar_color,
            baseline_shift="0",
            class_="pareto-value",
        )
        scene.text(
            (x.center(i) - 10, MARGIN_TOP + inner_h + 15),
            item.name,
            font_size=12,
            font_weight=500,
            fill=theme.text_muted,
            anchor="end",
            rotate=-30,
            baseline_shift="0.71em",
            class_="pareto-label",
        )

    points = [Vector2D(x.center(i), y2(c)) for i, c in enumerate(cumulative)]
    scene.path(
        _common.monotone_path(points),
        class_="pareto-line",
        fill="none",
        stroke=line_color,
        stroke_width=3,
    )
    for point in points:
        scene.circle(
            point,
            5,
            class_="pareto-point",
            fill=theme.surface,
            stroke=line_color,
            stroke_width=2,
        )

    return scene.build(width, height)
