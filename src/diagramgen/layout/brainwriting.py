# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Layout of brainwriting tables.

The first column holds the participant, followed by one column per
idea round. Row heights vary with the amount of text in the row's
cells, and the canvas height follows from the sum of all rows.
"""

from __future__ import annotations

__all__ = ["layout_brainwriting", "row_height"]

import collections.abc as cabc
import logging

from diagramgen import diagram, helpers, records

from . import _common

LOGGER = logging.getLogger(__name__)

DEFAULT_WIDTH = 1000
MARGIN_TOP = 60
MARGIN_RIGHT = 20
MARGIN_BOTTOM = 20
MARGIN_LEFT = 20
PARTICIPANT_SHARE = 0.2
HEADER_HEIGHT = 50
LINE_HEIGHT = 20
ROW_PADDING = 15
CELL_PADDING = 10
CHAR_WIDTH = 7
MIN_LINES = 2
FONT_SIZE = 13


def row_height(
    texts: cabc.Sequence[str], widths: cabc.Sequence[float]
) -> float:
    """Calculate the height of a table row.

    Each cell's line count is estimated from its text length and the
    average character width, and floored at two lines. If wrapping the
    text with real font metrics needs more lines than the estimate,
    the measured count wins, so that no text overflows its cell.
    """
    measure = helpers.make_measure(FONT_SIZE)
    heights = [0.0]
    for text, width in zip(texts, widths):
        inner = width - 2 * CELL_PADDING
        lines = max(
            MIN_LINES,
            helpers.estimate_line_count(text, inner, CHAR_WIDTH),
            len(helpers.word_wrap(text, inner, measure)),
        )
        heights.append(lines * LINE_HEIGHT + 2 * ROW_PADDING)
    return max(heights)


def _align(ideas: cabc.Sequence[str], count: int) -> list[str]:
    """Pad or cut ``ideas`` so that there is one per column."""
    return [*ideas[:count], *([""] * (count - len(ideas)))]


def layout_brainwriting(
    record: records.BrainwritingRecord,
    theme: diagram.Theme,
    base_width: float | None = None,
) -> diagram.Scene:
    if not record.columns or not record.rows:
        LOGGER.debug("Brainwriting table has no columns or rows")
        return diagram.Scene.empty(records.DiagramType.BRAINWRITING.value)

    width = max(DEFAULT_WIDTH, base_width or 0)
    inner_w = width - MARGIN_LEFT - MARGIN_RIGHT
    part_w = inner_w * PARTICIPANT_SHARE
    idea_w = inner_w * (1 - PARTICIPANT_SHARE) / len(record.columns)
    col_widths = [part_w] + [idea_w] * len(record.columns)
    col_xs = [float(MARGIN_LEFT)]
    for w in col_widths[:-1]:
        col_xs.append(col_xs[-1] + w)

    scene = _common.SceneBuilder(
        theme, records.DiagramType.BRAINWRITING.value
    )
    scene.text(
        (width / 2, 35),
        f"Brainwriting: {record.topic}",
        font_size=20,
        font_weight=700,
        fill=theme.text_title,
        baseline_shift="0",
        class_="title",
    )

    headers = ["Participant", *record.columns]
    for x, w, header in zip(col_xs, col_widths, headers):
        scene.rect(
            (x, MARGIN_TOP),
            (w, HEADER_HEIGHT),
            class_="brainwriting-header",
            fill=theme.surface_alt,
            stroke=theme.axis,
            stroke_width=1,
        )
        scene.text(
            (x + w / 2, MARGIN_TOP + HEADER_HEIGHT / 2),
            header,
            width=w - CELL_PADDING,
            font_size=14,
            font_weight=600,
            fill=theme.text_heading,
        )

    y = MARGIN_TOP + HEADER_HEIGHT
    for i, row in enumerate(record.rows):
        texts = [row.participant, *_align(row.ideas, len(record.columns))]
        height = row_height(texts, col_widths)
        scene.rect(
            (MARGIN_LEFT, y),
            (inner_w, height),
            class_="brainwriting-row",
            fill=theme.surface if i % 2 == 0 else theme.accent("row_odd"),
        )
        for x, w, text in zip(col_xs, col_widths, texts):
            scene.rect(
                (x, y),
                (w, height),
                class_="brainwriting-cell",
                fill="none",
                stroke=theme.axis,
                stroke_width=1,
            )
            scene.text(
                (x + CELL_PADDING, y + ROW_PADDING),
                text,
                width=w - 2 * CELL_PADDING,
                font_size=FONT_SIZE,
                fill=theme.text_body,
                line_height=LINE_HEIGHT / FONT_SIZE,
                anchor="start",
                centered=False,
                baseline_shift="0.8em",
            )
        y += height

    return scene.build(width, y + MARGIN_BOTTOM)
