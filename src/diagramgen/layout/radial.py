# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Polar layout of action plans and mind maps.

Both diagram types place their nodes on a circle around a central
topic, starting due north and proceeding clockwise. They differ in the
size of the node boxes, the shape of the connectors and the coloring.
"""

from __future__ import annotations

__all__ = [
    "ACTION_PLAN",
    "MIND_MAP",
    "RadialStyle",
    "layout_action_plan",
    "layout_mind_map",
    "node_angle",
    "node_height",
]

import dataclasses
import logging
import math

from diagramgen import diagram, records
from diagramgen.diagram import Vector2D

from . import _common

LOGGER = logging.getLogger(__name__)

CANVAS_MARGIN = 40


@dataclasses.dataclass(frozen=True)
class RadialStyle:
    """Geometry of one variant of the polar layout."""

    base_size: Vector2D
    radius: float
    node_width: float
    header_height: float
    line_height: float
    padding: float
    min_content_height: float
    center_size: Vector2D
    """Full width and height of the central topic shape."""


ACTION_PLAN = RadialStyle(
    base_size=Vector2D(1000, 800),
    radius=260,
    node_width=200,
    header_height=36,
    line_height=20,
    padding=20,
    min_content_height=60,
    center_size=Vector2D(220, 80),
)
MIND_MAP = RadialStyle(
    base_size=Vector2D(1200, 900),
    radius=290,
    node_width=180,
    header_height=30,
    line_height=18,
    padding=15,
    min_content_height=40,
    center_size=Vector2D(200, 120),
)
CONTROL_POINT = 0.4
"""Position of the mind map connectors' control point along the radius."""


def node_angle(index: int, count: int) -> float:
    """Return the angle of a node; node 0 sits due north."""
    return index * (2 * math.pi / count) - math.pi / 2


def node_height(node: records.ActionPlanNode, style: RadialStyle) -> float:
    """Calculate the height of a node's box from its item count."""
    content = max(
        style.min_content_height,
        len(node.items) * style.line_height + style.padding,
    )
    return style.header_height + content


def _canvas_size(
    offsets: list[Vector2D],
    heights: list[float],
    style: RadialStyle,
    base_width: float | None,
) -> Vector2D:
    half_w = style.center_size.x / 2
    half_h = style.center_size.y / 2
    for offset, h in zip(offsets, heights):
        half_w = max(half_w, abs(offset.x) + style.node_width / 2)
        half_h = max(half_h, abs(offset.y) + h / 2)
    return Vector2D(
        max(
            style.base_size.x,
            base_width or 0,
            2 * (half_w + CANVAS_MARGIN),
        ),
        max(style.base_size.y, 2 * (half_h + CANVAS_MARGIN)),
    )


def _prepare(
    record: records.ActionPlanRecord | records.MindMapRecord,
    style: RadialStyle,
    base_width: float | None,
) -> tuple[Vector2D, list[Vector2D], list[float]]:
    count = len(record.nodes)
    offsets = [
        Vector2D.frompolar(style.radius, node_angle(i, count))
        for i in range(count)
    ]
    heights = [node_height(n, style) for n in record.nodes]
    size = _canvas_size(offsets, heights, style, base_width)
    return size, offsets, heights


def layout_action_plan(
    record: records.ActionPlanRecord,
    theme: diagram.Theme,
    base_width: float | None = None,
) -> diagram.Scene:
    """Lay out an action plan.

    Nodes are joined to the central box with dashed straight lines.
    The canvas grows symmetrically if node boxes would be clipped.
    """
    dtype = records.DiagramType.ACTION_PLAN.value
    if not record.nodes:
        LOGGER.debug("Action plan has no nodes, not rendering")
        return diagram.Scene.empty(dtype)

    style = ACTION_PLAN
    size, offsets, heights = _prepare(record, style, base_width)
    center = size / 2
    scene = _common.SceneBuilder(theme, dtype)

    for offset in offsets:
        scene.line(
            center,
            center + offset,
            class_="radial-connector",
            stroke=theme.connector,
            stroke_width=2,
            stroke_dasharray="4,4",
        )

    cw, ch = style.center_size
    scene.rect(
        center - (cw / 2, ch / 2),
        style.center_size,
        rx=12,
        class_="radial-center",
        fill=theme.accent("center_fill"),
        stroke=theme.accent("center_stroke"),
        stroke_width=2,
    )
    scene.text(
        center,
        record.central_topic,
        width=cw - 20,
        font_size=16,
        font_weight="bold",
        fill=theme.accent("center_text"),
        baseline_shift="0.3em",
    )

    nw = style.node_width
    for node, offset, h in zip(record.nodes, offsets, heights):
        topleft = center + offset - (nw / 2, h / 2)
        scene.rect(
            topleft,
            (nw, h),
            rx=8,
            class_="radial-node",
            fill=theme.surface,
            stroke=theme.border,
            stroke_width=1,
        )
        scene.rect(
            topleft,
            (nw, style.header_height),
            rx=8,
            fill=theme.surface_alt,
            stroke="none",
        )
        scene.rect(
            topleft,
            (nw, h),
            rx=8,
            fill="none",
            stroke=theme.border,
            stroke_width=1,
        )
        header_bottom = topleft.y + style.header_height
        scene.line(
            (topleft.x, header_bottom),
            (topleft.x + nw, header_bottom),
            stroke=theme.border,
        )
        scene.text(
            (topleft.x + nw / 2, topleft.y + style.header_height / 2),
            _common.ellipsize(node.title or "Category", nw - 16, 13),
            font_size=13,
            font_weight=700,
            fill=theme.text_heading,
            class_="radial-title",
        )
        for j, item in enumerate(node.items):
            item_y = header_bottom + 15 + j * style.line_height
            scene.circle((topleft.x + 15, item_y), 2, fill=theme.text_body)
            scene.text(
                (topleft.x + 25, item_y),
                _common.ellipsize(item, nw - 35, 11),
                font_size=11,
                fill=theme.text_body,
                anchor="start",
                class_="radial-item",
            )

    return scene.build(*size)


def layout_mind_map(
    record: records.MindMapRecord,
    theme: diagram.Theme,
    base_width: float | None = None,
) -> diagram.Scene:
    """Lay out a mind map.

    Each branch gets its own accent color, cycling through the theme's
    branch palette by index. Connectors are quadratic curves whose
    control point lies on the branch's angle, at 40% of the radius.
    """
    dtype = records.DiagramType.MIND_MAP.value
    if not record.nodes:
        LOGGER.debug("Mind map has no nodes, not rendering")
        return diagram.Scene.empty(dtype)

    style = MIND_MAP
    size, offsets, heights = _prepare(record, style, base_width)
    center = size / 2
    scene = _common.SceneBuilder(theme, dtype)

    for i, offset in enumerate(offsets):
        scene.path(
            _common.quadratic_path(
                center, center + offset * CONTROL_POINT, center + offset
            ),
            class_="radial-connector",
            fill="none",
            stroke=theme.branch_color(i),
            stroke_width=3,
            stroke_opacity=0.6,
            stroke_linecap="round",
        )

    scene.ellipse(
        center,
        style.center_size / 2,
        class_="radial-center",
        fill=theme.accent("mindmap_fill"),
        stroke=theme.accent("mindmap_stroke"),
        stroke_width=3,
    )
    scene.text(
        center,
        record.central_topic or "Central Topic",
        width=style.center_size.x - 40,
        font_size=16,
        font_weight="bold",
        fill=theme.accent("center_text"),
        baseline_shift="0.3em",
    )

    nw = style.node_width
    nodes = zip(record.nodes, offsets, heights)
    for i, (node, offset, h) in enumerate(nodes):
        color = theme.branch_color(i)
        topleft = center + offset - (nw / 2, h / 2)
        scene.rect(
            topleft,
            (nw, h),
            rx=12,
            class_="radial-node",
            fill=theme.surface,
            stroke=color,
            stroke_width=2,
        )
        scene.text(
            (topleft.x + nw / 2, topleft.y + 20),
            _common.ellipsize(node.title, nw - 16, 13),
            font_size=13,
            font_weight=700,
            fill=color,
            baseline_shift="0",
            class_="radial-title",
        )
        scene.line(
            (topleft.x + 10, topleft.y + style.header_height),
            (topleft.x + nw - 10, topleft.y + style.header_height),
            stroke=theme.border,
        )
        for j, item in enumerate(node.items):
            scene.text(
                (topleft.x + nw / 2, topleft.y + 45 + j * style.line_height),
                _common.ellipsize(item, nw - 20, 11),
                font_size=11,
                fill=theme.text_muted,
                baseline_shift="0",
                class_="radial-item",
            )

    return scene.build(*size)
