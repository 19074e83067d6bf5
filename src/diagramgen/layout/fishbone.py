# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Layout of cause and effect (Ishikawa) diagrams.

The spine runs horizontally from the tail on the left to the effect box
(the head) on the right. Category ribs alternate above and below the
spine and are attached at evenly spaced points, working backwards from
the head. Items hang off their rib on short horizontal branches.

The canvas size is derived from the rib geometry: the longest category
determines the rib length, and the number of rib pairs determines the
spine length.
"""

from __future__ import annotations

__all__ = ["item_position", "layout_fishbone", "rib_length"]

import logging
import math

from diagramgen import diagram, records
from diagramgen.diagram import Vector2D

from . import _common

LOGGER = logging.getLogger(__name__)

ITEM_SPACING = 35
MIN_RIB_LENGTH = 240
RIB_PADDING = 120
RIB_ANGLE = math.radians(60)
PAIR_SPACING = 400
TEXT_BUFFER_LEFT = 220
MARGIN = 50
HEAD_OFFSET = 120
HEAD_SIZE = Vector2D(240, 120)
HEAD_RESERVED_WIDTH = 260
MIN_SIZE = Vector2D(1000, 600)
VERTICAL_PADDING = 140
BRANCH_LENGTH = 45
ITEM_WRAP_WIDTH = 220
LABEL_SIZE = Vector2D(180, 44)
ITEM_RANGE = (0.15, 0.85)


def rib_length(record: records.FishboneRecord) -> float:
    """Calculate the length of all ribs.

    Ribs must be long enough to space out the items of the largest
    category evenly.
    """
    max_items = max((len(c.items) for c in record.categories), default=0)
    return max(MIN_RIB_LENGTH, max_items * ITEM_SPACING + RIB_PADDING)


def item_position(index: int, count: int) -> float:
    """Return the relative position of an item along its rib.

    The first item sits at 15% of the rib, the last one at 85%, and
    the others are interpolated evenly in between. A single item sits
    in the middle.
    """
    if count <= 1:
        return 0.5
    start, end = ITEM_RANGE
    return start + index / (count - 1) * (end - start)


def layout_fishbone(
    record: records.FishboneRecord,
    theme: diagram.Theme,
    base_width: float | None = None,
) -> diagram.Scene:
    """Lay out a fishbone diagram.

    ``base_width`` raises the minimum canvas width; the canvas still
    grows beyond it to fit all ribs.
    """
    if not record.categories:
        LOGGER.debug("Fishbone diagram has no categories, not rendering")
        return diagram.Scene.empty(records.DiagramType.FISHBONE.value)

    ribs = rib_length(record)
    rib_proj = ribs * math.cos(RIB_ANGLE)
    rib_rise = ribs * math.sin(RIB_ANGLE)
    pairs = math.ceil(len(record.categories) / 2)
    spine_span = max(0, pairs - 1) * PAIR_SPACING + HEAD_OFFSET
    head_x = MARGIN + TEXT_BUFFER_LEFT + rib_proj + spine_span
    width = max(
        MIN_SIZE.x, base_width or 0, head_x + HEAD_RESERVED_WIDTH + MARGIN
    )
    height = max(MIN_SIZE.y, rib_rise * 2 + VERTICAL_PADDING)
    spine_y = height / 2

    scene = _common.SceneBuilder(theme, records.DiagramType.FISHBONE.value)

    scene.line(
        (MARGIN, spine_y),
        (head_x, spine_y),
        class_="fishbone-spine",
        stroke=theme.stroke,
        stroke_width=5,
        stroke_linecap="round",
    )
    scene.path(
        _common.polygon_path(
            [
                Vector2D(head_x + 3, spine_y),
                Vector2D(head_x - 27, spine_y - 15),
                Vector2D(head_x - 27, spine_y + 15),
            ]
        ),
        class_="fishbone-arrow",
        fill=theme.stroke,
    )
    _draw_head(scene, record.problem, Vector2D(head_x, spine_y))

    for i, category in enumerate(record.categories):
        top = i % 2 == 0
        attach_x = head_x - HEAD_OFFSET - i // 2 * PAIR_SPACING
        attach = Vector2D(attach_x, spine_y)
        delta = Vector2D(-rib_proj, -rib_rise if top else rib_rise)
        tip = attach + delta
        scene.line(
            attach,
            tip,
            class_="fishbone-rib",
            stroke=theme.stroke_muted,
            stroke_width=3,
            stroke_linecap="round",
        )
        _draw_category_label(scene, category.name, tip, top)

        for j, item in enumerate(category.items):
            root = attach + delta * item_position(j, len(category.items))
            end = root + (BRANCH_LENGTH, 0)
            scene.line(
                root,
                end,
                class_="fishbone-branch",
                stroke=theme.connector,
                stroke_width=1.5,
            )
            scene.text(
                end + (5, -4),
                item,
                width=ITEM_WRAP_WIDTH,
                font_size=12,
                font_weight=500,
                fill=theme.text_body,
                anchor="start",
                centered=False,
                baseline_shift="0",
                class_="fishbone-item",
            )

    return scene.build(width, height)


def _draw_head(
    scene: _common.SceneBuilder, problem: str, pos: Vector2D
) -> None:
    hw, hh = HEAD_SIZE
    x, y = pos
    d = (
        f"M{x + 5},{y - hh / 2}"
        f"L{x + hw - 30},{y - hh / 2}"
        f"Q{x + hw},{y - hh / 2},{x + hw},{y}"
        f"Q{x + hw},{y + hh / 2},{x + hw - 30},{y + hh / 2}"
        f"L{x + 5},{y + hh / 2}"
        f"Q{x - 15},{y + hh / 2},{x - 15},{y}"
        f"Q{x - 15},{y - hh / 2},{x + 5},{y - hh / 2}Z"
    )
    scene.path(
        d,
        class_="fishbone-head",
        fill=scene.theme.accent("head_fill"),
        stroke=scene.theme.accent("head_stroke"),
        stroke_width=2,
    )
    scene.text(
        (x + hw / 2 - 10, y),
        problem or "Effect",
        width=hw - 40,
        font_size=16,
        font_weight=800,
        fill=scene.theme.accent("head_text"),
        baseline_shift="0.3em",
    )


def _draw_category_label(
    scene: _common.SceneBuilder, name: str, tip: Vector2D, top: bool
) -> None:
    lw, lh = LABEL_SIZE
    box_y = tip.y - lh - 8 if top else tip.y + 8
    scene.rect(
        (tip.x - lw / 2, box_y),
        LABEL_SIZE,
        rx=6,
        class_="fishbone-category",
        fill=scene.theme.surface,
        stroke=scene.theme.text_muted,
        stroke_width=2,
    )
    name = name or "Category"
    scene.text(
        (tip.x, box_y + lh / 2),
        name,
        width=lw - 16,
        font_size=11 if len(name) > 25 else 13,
        font_weight=700,
        fill=scene.theme.text_heading,
    )
