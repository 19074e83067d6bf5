# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Layout of timelines.

Events are spread evenly along a horizontal spine. Even-indexed events
are drawn above the spine, odd-indexed ones below it, so neighbouring
labels do not collide.
"""

from __future__ import annotations

__all__ = ["layout_timeline", "timeline_width"]

import logging

from diagramgen import diagram, records
from diagramgen.diagram import Vector2D

from . import _common

LOGGER = logging.getLogger(__name__)

DEFAULT_SIZE = Vector2D(1000, 500)
MARGIN_TOP = 70
MARGIN_RIGHT = 40
MARGIN_BOTTOM = 40
MARGIN_LEFT = 40
SPINE_INSET = 50
STEM_HEIGHT = 60
BOX_SIZE = Vector2D(140, 70)
HEADER_HEIGHT = 24
EVENT_SPACING = 75
"""Minimum distance between two consecutive events.

Events on the same side of the spine are two steps apart, so this keeps
their boxes from overlapping.
"""


def timeline_width(
    event_count: int, base_width: float | None = None
) -> float:
    """Calculate the canvas width for the given number of events."""
    margins = MARGIN_LEFT + MARGIN_RIGHT + 2 * SPINE_INSET
    needed = margins + EVENT_SPACING * event_count
    return max(DEFAULT_SIZE.x, base_width or 0, needed)


def layout_timeline(
    record: records.TimelineRecord,
    theme: diagram.Theme,
    base_width: float | None = None,
) -> diagram.Scene:
    if not record.events:
        LOGGER.debug("Timeline has no events, not rendering")
        return diagram.Scene.empty(records.DiagramType.TIMELINE.value)

    width = timeline_width(len(record.events), base_width)
    height = DEFAULT_SIZE.y
    inner_w = width - MARGIN_LEFT - MARGIN_RIGHT
    spine_y = MARGIN_TOP + (height - MARGIN_TOP - MARGIN_BOTTOM) / 2
    x = _common.PointScale(
        len(record.events),
        (MARGIN_LEFT + SPINE_INSET, MARGIN_LEFT + inner_w - SPINE_INSET),
        0.5,
    )

    scene = _common.SceneBuilder(theme, records.DiagramType.TIMELINE.value)
    scene.text(
        (width / 2, 40),
        record.title or "Timeline",
        font_size=22,
        font_weight=700,
        fill=theme.text_title,
        baseline_shift="0",
        class_="title",
    )
    scene.line(
        (MARGIN_LEFT, spine_y),
        (MARGIN_LEFT + inner_w, spine_y),
        class_="timeline-spine",
        stroke=theme.axis,
        stroke_width=4,
        stroke_linecap="round",
    )

    bw, bh = BOX_SIZE
    for i, event in enumerate(record.events):
        cx = x(i)
        top = i % 2 == 0
        stem_end = spine_y - STEM_HEIGHT if top else spine_y + STEM_HEIGHT
        box_y = stem_end - bh if top else stem_end

        scene.line(
            (cx, spine_y),
            (cx, stem_end),
            class_="timeline-stem",
            stroke=theme.connector,
            stroke_width=2,
            stroke_dasharray="4,2",
        )
        scene.circle(
            (cx, spine_y),
            6,
            class_="timeline-dot",
            fill=theme.accent("timeline_dot"),
            stroke=theme.surface,
            stroke_width=2,
        )
        scene.rect(
            (cx - bw / 2, box_y),
            BOX_SIZE,
            rx=6,
            class_="timeline-event",
            fill=theme.surface,
            stroke=theme.border,
            stroke_width=1,
        )
        scene.rect(
            (cx - bw / 2, box_y),
            (bw, HEADER_HEIGHT),
            rx=6,
            fill=theme.surface_alt,
        )
        scene.text(
            (cx, box_y + 16),
            _common.ellipsize(event.date, bw - 12, 11),
            font_size=11,
            font_weight=600,
            fill=theme.text_muted,
            baseline_shift="0",
            class_="timeline-date",
        )
        scene.text(
            (cx, box_y + 40),
            _common.ellipsize(event.title, bw - 12, 12),
            font_size=12,
            font_weight=700,
            fill=theme.text_heading,
            baseline_shift="0",
            class_="timeline-title",
        )
        scene.text(
            (cx, box_y + 56),
            _common.ellipsize(event.description, bw - 12, 10),
            font_size=10,
            fill=theme.text_muted,
            baseline_shift="0",
            class_="timeline-description",
        )

    return scene.build(width, height)
