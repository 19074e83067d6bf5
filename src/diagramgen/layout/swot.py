# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Layout of SWOT analyses as a fixed 2x2 grid of quadrants."""

from __future__ import annotations

__all__ = ["layout_swot", "quadrant_size"]

import logging

from diagramgen import diagram, records
from diagramgen.diagram import Vector2D

from . import _common

LOGGER = logging.getLogger(__name__)

DEFAULT_SIZE = Vector2D(800, 600)
MARGIN_TOP = 60
MARGIN_RIGHT = 20
MARGIN_BOTTOM = 20
MARGIN_LEFT = 20
GAP = 12
FIRST_ITEM_Y = 70
ITEM_SPACING = 26
BOTTOM_RESERVE = 20

_TITLES = {
    "strengths": "STRENGTHS",
    "weaknesses": "WEAKNESSES",
    "opportunities": "OPPORTUNITIES",
    "threats": "THREATS",
}


def quadrant_size(width: float, height: float) -> Vector2D:
    inner_w = width - MARGIN_LEFT - MARGIN_RIGHT
    inner_h = height - MARGIN_TOP - MARGIN_BOTTOM
    return Vector2D((inner_w - GAP) / 2, (inner_h - GAP) / 2)


def layout_swot(
    record: records.SwotRecord,
    theme: diagram.Theme,
    base_width: float | None = None,
) -> diagram.Scene:
    """Lay out a SWOT analysis.

    Each quadrant lists its items from top to bottom. Items that do not
    fit into the quadrant anymore are dropped silently.
    """
    dtype = records.DiagramType.SWOT.value
    if not any(getattr(record, q) for q in record.QUADRANTS):
        LOGGER.debug("SWOT analysis has no items, not rendering")
        return diagram.Scene.empty(dtype)

    width = max(DEFAULT_SIZE.x, base_width or 0)
    height = DEFAULT_SIZE.y
    box = quadrant_size(width, height)

    scene = _common.SceneBuilder(theme, dtype)
    scene.text(
        (width / 2, 35),
        f"SWOT: {record.topic}",
        font_size=22,
        font_weight=800,
        fill=theme.text_title,
        baseline_shift="0",
        class_="title",
    )

    for i, name in enumerate(record.QUADRANTS):
        colors = theme.quadrants[name]
        origin = Vector2D(
            MARGIN_LEFT + (box.x + GAP) * (i % 2),
            MARGIN_TOP + (box.y + GAP) * (i // 2),
        )
        scene.rect(
            origin,
            box,
            rx=12,
            class_=f"swot-quadrant swot-{name}",
            fill=colors.fill,
            fill_opacity=colors.fill_opacity,
            stroke=colors.accent,
            stroke_width=1 if theme.dark else 0.5,
            stroke_opacity=0.5 if theme.dark else 0.3,
        )
        _draw_marker(scene, name, origin, colors.accent)
        scene.text(
            origin + (42, 36),
            _TITLES[name],
            font_size=14,
            font_weight=900,
            fill=colors.accent,
            anchor="start",
            baseline_shift="0",
            letter_spacing="0.05em",
        )

        items: tuple[str, ...] = getattr(record, name)
        for j, item in enumerate(items):
            item_y = FIRST_ITEM_Y + j * ITEM_SPACING
            if item_y > box.y - BOTTOM_RESERVE:
                LOGGER.debug(
                    "Dropping %d of %d %s that do not fit",
                    len(items) - j,
                    len(items),
                    name,
                )
                break
            scene.circle(
                origin + (24, item_y - 4),
                2.5,
                fill=theme.text_muted if theme.dark else colors.accent,
            )
            scene.text(
                origin + (38, item_y),
                _common.ellipsize(item, box.x - 50, 13),
                font_size=13,
                fill=theme.text_body,
                anchor="start",
                baseline_shift="0",
                class_="swot-item",
            )

    return scene.build(width, height)


def _draw_marker(
    scene: _common.SceneBuilder, name: str, origin: Vector2D, fill: diagram.RGB
) -> None:
    if name == "strengths":
        scene.circle(origin + (24, 32), 6, class_="swot-marker", fill=fill)
    elif name == "weaknesses":
        scene.rect(
            origin + (18, 26), (12, 12), rx=2, class_="swot-marker", fill=fill
        )
    else:
        if name == "opportunities":
            corners = [(24, 26), (30, 38), (18, 38)]
        else:
            corners = [(24, 26), (30, 32), (24, 38), (18, 32)]
        scene.path(
            _common.polygon_path([origin + c for c in corners]),
            class_="swot-marker",
            fill=fill,
        )
