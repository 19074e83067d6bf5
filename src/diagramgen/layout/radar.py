# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Layout of radar (spider) charts."""

from __future__ import annotations

__all__ = ["axis_angle", "layout_radar"]

import logging
import math

from diagramgen import diagram, records
from diagramgen.diagram import Vector2D

from . import _common

LOGGER = logging.getLogger(__name__)

DEFAULT_SIZE = Vector2D(600, 500)
MARGIN = 60
LEVELS = 5
LABEL_DISTANCE = 1.15
MIN_AXES = 3


def axis_angle(index: int, count: int) -> float:
    """Return the angle of an axis in radians.

    The first axis points straight up, the others follow clockwise.
    """
    return index * (2 * math.pi / count) - math.pi / 2


def layout_radar(
    record: records.RadarRecord,
    theme: diagram.Theme,
    base_width: float | None = None,
) -> diagram.Scene:
    if len(record.axes) < MIN_AXES:
        LOGGER.debug(
            "Radar chart needs at least %d axes, got %d, not rendering",
            MIN_AXES,
            len(record.axes),
        )
        return diagram.Scene.empty(records.DiagramType.RADAR.value)

    width = max(DEFAULT_SIZE.x, base_width or 0)
    height = DEFAULT_SIZE.y
    radius = min(width - 2 * MARGIN, height - 2 * MARGIN) / 2
    center = Vector2D(width / 2, height / 2)
    scale = _common.LinearScale((0, 100), (0, radius))
    count = len(record.axes)

    scene = _common.SceneBuilder(theme, records.DiagramType.RADAR.value)
    scene.text(
        (width / 2, 35),
        record.title or "Radar Chart",
        font_size=20,
        font_weight=700,
        fill=theme.text_title,
        baseline_shift="0",
        class_="title",
    )

    for level in range(1, LEVELS + 1):
        scene.circle(
            center,
            radius * level / LEVELS,
            class_="radar-ring",
            fill=theme.accent("ring_fill"),
            stroke=theme.grid,
            stroke_dasharray="4,4",
        )

    points: list[Vector2D] = []
    for i, axis in enumerate(record.axes):
        angle = axis_angle(i, count)
        scene.line(
            center,
            center + Vector2D.frompolar(scale(100), angle),
            class_="radar-axis",
            stroke=theme.axis,
            stroke_width=1,
        )
        scene.text(
            center + Vector2D.frompolar(scale(100) * LABEL_DISTANCE, angle),
            axis.label,
            font_size=12,
            font_weight=600,
            fill=theme.text_muted,
            class_="radar-label",
        )
        value = min(100.0, max(0.0, axis.value))
        points.append(center + Vector2D.frompolar(scale(value), angle))

    scene.path(
        _common.polygon_path(points),
        class_="radar-area",
        fill=theme.accent("radar_fill"),
        fill_opacity=0.2,
        stroke=theme.accent("radar_stroke"),
        stroke_width=2,
    )
    for point in points:
        scene.circle(
            point,
            4,
            class_="radar-point",
            fill=theme.accent("radar_stroke"),
            stroke=theme.surface,
            stroke_width=2,
        )

    return scene.build(width, height)
