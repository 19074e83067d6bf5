# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""The per-type layout algorithms.

Each algorithm turns one kind of diagram record into a positioned
:class:`~diagramgen.diagram.Scene`. The algorithms are independent of
each other and share no state; :func:`layout` dispatches a record to
the right one.

Layout never fails for empty or degenerate input. Instead, an empty
scene is returned, which callers treat as "nothing to show".
"""

from __future__ import annotations

__all__ = [
    "layout",
    "layout_action_plan",
    "layout_brainwriting",
    "layout_fishbone",
    "layout_mind_map",
    "layout_pareto",
    "layout_radar",
    "layout_swot",
    "layout_timeline",
]

import typing_extensions as te

from diagramgen import diagram, records

from .brainwriting import layout_brainwriting
from .fishbone import layout_fishbone
from .pareto import layout_pareto
from .radar import layout_radar
from .radial import layout_action_plan, layout_mind_map
from .swot import layout_swot
from .timeline import layout_timeline


def layout(
    record: records.DiagramRecord,
    theme: diagram.Theme | None = None,
    base_width: float | None = None,
) -> diagram.Scene:
    """Lay out any kind of diagram record.

    Parameters
    ----------
    record
        The diagram to lay out. It is not modified.
    theme
        The colors to use. Defaults to the light theme.
    base_width
        Preferred canvas width. Widths below the default size of a
        diagram are raised to it, and diagrams whose content needs
        more space grow beyond it.

    Returns
    -------
    Scene
        The positioned scene, which carries its own final size. Empty
        if the record has nothing to show.
    """
    if theme is None:
        theme = diagram.resolve_theme(False)

    if isinstance(record, records.FishboneRecord):
        return layout_fishbone(record, theme, base_width)
    if isinstance(record, records.ParetoRecord):
        return layout_pareto(record, theme, base_width)
    if isinstance(record, records.ActionPlanRecord):
        return layout_action_plan(record, theme, base_width)
    if isinstance(record, records.MindMapRecord):
        return layout_mind_map(record, theme, base_width)
    if isinstance(record, records.BrainwritingRecord):
        return layout_brainwriting(record, theme, base_width)
    if isinstance(record, records.SwotRecord):
        return layout_swot(record, theme, base_width)
    if isinstance(record, records.RadarRecord):
        return layout_radar(record, theme, base_width)
    if isinstance(record, records.TimelineRecord):
        return layout_timeline(record, theme, base_width)
    te.assert_never(record)
