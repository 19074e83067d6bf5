# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Typed, immutable diagram description records.

Records are produced externally (usually by an LLM based analysis
service) as JSON objects tagged with a ``type`` field. This module
turns such objects into frozen dataclasses, which the layout
algorithms treat as read-only input.

Ingestion is lenient: unknown keys are ignored, missing sequences
default to empty tuples and missing strings to the empty string. The
layout algorithms then apply their empty-input policy to the result.
"""

from __future__ import annotations

__all__ = [
    "ActionPlanNode",
    "ActionPlanRecord",
    "BrainwritingRecord",
    "BrainwritingRow",
    "Dashboard",
    "DiagramRecord",
    "DiagramType",
    "FishboneCategory",
    "FishboneRecord",
    "MalformedResponseError",
    "MindMapRecord",
    "ParetoItem",
    "ParetoRecord",
    "RadarAxis",
    "RadarRecord",
    "SwotRecord",
    "TimelineEvent",
    "TimelineRecord",
    "UnknownDiagramTypeError",
    "parse_dashboard",
    "parse_record",
    "strip_fences",
]

import collections.abc as cabc
import dataclasses
import enum
import json
import logging
import math
import re
import typing as t

import typing_extensions as te

LOGGER = logging.getLogger(__name__)

_FENCE = re.compile(r"^\s*```(?:json)?\s*\n?|\n?\s*```\s*$", re.IGNORECASE)


class MalformedResponseError(ValueError):
    """The response text could not be decoded into diagram records."""


class UnknownDiagramTypeError(ValueError):
    """A record carries a ``type`` tag that is not a known diagram type."""


class DiagramType(enum.Enum):
    """The eight diagram variants that can be laid out."""

    FISHBONE = "FISHBONE"
    PARETO = "PARETO"
    ACTION_PLAN = "ACTION_PLAN"
    BRAINWRITING = "BRAINWRITING"
    MIND_MAP = "MIND_MAP"
    SWOT = "SWOT"
    RADAR = "RADAR"
    TIMELINE = "TIMELINE"

    @property
    def label(self) -> str:
        """A human readable name, e.g. ``Mind Map``."""
        return self.value.replace("_", " ").title()


def _str(data: cabc.Mapping[str, t.Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    return str(value)


def _strings(data: cabc.Mapping[str, t.Any], key: str) -> tuple[str, ...]:
    value = data.get(key)
    if not isinstance(value, cabc.Sequence) or isinstance(value, str):
        return ()
    return tuple("" if i is None else str(i) for i in value)


def _mappings(
    data: cabc.Mapping[str, t.Any], key: str
) -> tuple[cabc.Mapping[str, t.Any], ...]:
    value = data.get(key)
    if not isinstance(value, cabc.Sequence) or isinstance(value, str):
        return ()
    return tuple(i for i in value if isinstance(i, cabc.Mapping))


def _number(data: cabc.Mapping[str, t.Any], key: str) -> float:
    value = data.get(key)
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


@dataclasses.dataclass(frozen=True)
class FishboneCategory:
    name: str = ""
    items: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: cabc.Mapping[str, t.Any]) -> FishboneCategory:
        return cls(_str(data, "name"), _strings(data, "items"))


@dataclasses.dataclass(frozen=True)
class FishboneRecord:
    """A cause and effect diagram."""

    problem: str = ""
    categories: tuple[FishboneCategory, ...] = ()

    type: t.ClassVar[DiagramType] = DiagramType.FISHBONE

    @classmethod
    def from_dict(cls, data: cabc.Mapping[str, t.Any]) -> FishboneRecord:
        return cls(
            _str(data, "problem"),
            tuple(
                FishboneCategory.from_dict(i)
                for i in _mappings(data, "categories")
            ),
        )


@dataclasses.dataclass(frozen=True)
class ParetoItem:
    name: str = ""
    value: float = 0.0

    @classmethod
    def from_dict(cls, data: cabc.Mapping[str, t.Any]) -> ParetoItem:
        return cls(_str(data, "name"), max(0.0, _number(data, "value")))


@dataclasses.dataclass(frozen=True)
class ParetoRecord:
    """A bar chart of causes with a cumulative percentage line.

    The order of ``items`` is kept as given; it is not sorted by value.
    """

    title: str = ""
    items: tuple[ParetoItem, ...] = ()

    type: t.ClassVar[DiagramType] = DiagramType.PARETO

    @classmethod
    def from_dict(cls, data: cabc.Mapping[str, t.Any]) -> ParetoRecord:
        return cls(
            _str(data, "title"),
            tuple(ParetoItem.from_dict(i) for i in _mappings(data, "items")),
        )


@dataclasses.dataclass(frozen=True)
class ActionPlanNode:
    title: str = ""
    items: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: cabc.Mapping[str, t.Any]) -> ActionPlanNode:
        return cls(_str(data, "title"), _strings(data, "items"))


@dataclasses.dataclass(frozen=True)
class _RadialRecord:
    central_topic: str = ""
    nodes: tuple[ActionPlanNode, ...] = ()

    @classmethod
    def from_dict(cls, data: cabc.Mapping[str, t.Any]) -> te.Self:
        return cls(
            _str(data, "centralTopic"),
            tuple(
                ActionPlanNode.from_dict(i) for i in _mappings(data, "nodes")
            ),
        )


@dataclasses.dataclass(frozen=True)
class ActionPlanRecord(_RadialRecord):
    """Action items grouped around a central topic."""

    type: t.ClassVar[DiagramType] = DiagramType.ACTION_PLAN


@dataclasses.dataclass(frozen=True)
class MindMapRecord(_RadialRecord):
    """A mind map; laid out like an action plan, with colored branches."""

    type: t.ClassVar[DiagramType] = DiagramType.MIND_MAP


@dataclasses.dataclass(frozen=True)
class BrainwritingRow:
    participant: str = ""
    ideas: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: cabc.Mapping[str, t.Any]) -> BrainwritingRow:
        return cls(_str(data, "participant"), _strings(data, "ideas"))


@dataclasses.dataclass(frozen=True)
class BrainwritingRecord:
    """A table of ideas, one row per participant.

    ``ideas`` of each row are aligned positionally with ``columns``.
    """

    topic: str = ""
    columns: tuple[str, ...] = ()
    rows: tuple[BrainwritingRow, ...] = ()

    type: t.ClassVar[DiagramType] = DiagramType.BRAINWRITING

    @classmethod
    def from_dict(cls, data: cabc.Mapping[str, t.Any]) -> BrainwritingRecord:
        return cls(
            _str(data, "topic"),
            _strings(data, "columns"),
            tuple(
                BrainwritingRow.from_dict(i) for i in _mappings(data, "rows")
            ),
        )


@dataclasses.dataclass(frozen=True)
class SwotRecord:
    topic: str = ""
    strengths: tuple[str, ...] = ()
    weaknesses: tuple[str, ...] = ()
    opportunities: tuple[str, ...] = ()
    threats: tuple[str, ...] = ()

    type: t.ClassVar[DiagramType] = DiagramType.SWOT

    QUADRANTS: t.ClassVar[tuple[str, ...]] = (
        "strengths",
        "weaknesses",
        "opportunities",
        "threats",
    )

    @classmethod
    def from_dict(cls, data: cabc.Mapping[str, t.Any]) -> SwotRecord:
        return cls(
            _str(data, "topic"), *(_strings(data, q) for q in cls.QUADRANTS)
        )


@dataclasses.dataclass(frozen=True)
class RadarAxis:
    label: str = ""
    value: float = 0.0

    @classmethod
    def from_dict(cls, data: cabc.Mapping[str, t.Any]) -> RadarAxis:
        return cls(_str(data, "label"), _number(data, "value"))


@dataclasses.dataclass(frozen=True)
class RadarRecord:
    title: str = ""
    axes: tuple[RadarAxis, ...] = ()

    type: t.ClassVar[DiagramType] = DiagramType.RADAR

    @classmethod
    def from_dict(cls, data: cabc.Mapping[str, t.Any]) -> RadarRecord:
        return cls(
            _str(data, "title"),
            tuple(RadarAxis.from_dict(i) for i in _mappings(data, "axes")),
        )


@dataclasses.dataclass(frozen=True)
class TimelineEvent:
    date: str = ""
    title: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, data: cabc.Mapping[str, t.Any]) -> TimelineEvent:
        return cls(
            _str(data, "date"),
            _str(data, "title"),
            _str(data, "description"),
        )


@dataclasses.dataclass(frozen=True)
class TimelineRecord:
    title: str = ""
    events: tuple[TimelineEvent, ...] = ()

    type: t.ClassVar[DiagramType] = DiagramType.TIMELINE

    @classmethod
    def from_dict(cls, data: cabc.Mapping[str, t.Any]) -> TimelineRecord:
        return cls(
            _str(data, "title"),
            tuple(
                TimelineEvent.from_dict(i) for i in _mappings(data, "events")
            ),
        )


DiagramRecord = t.Union[
    FishboneRecord,
    ParetoRecord,
    ActionPlanRecord,
    MindMapRecord,
    BrainwritingRecord,
    SwotRecord,
    RadarRecord,
    TimelineRecord,
]

RECORD_TYPES: dict[DiagramType, type[DiagramRecord]] = {
    DiagramType.FISHBONE: FishboneRecord,
    DiagramType.PARETO: ParetoRecord,
    DiagramType.ACTION_PLAN: ActionPlanRecord,
    DiagramType.BRAINWRITING: BrainwritingRecord,
    DiagramType.MIND_MAP: MindMapRecord,
    DiagramType.SWOT: SwotRecord,
    DiagramType.RADAR: RadarRecord,
    DiagramType.TIMELINE: TimelineRecord,
}


def parse_record(data: cabc.Mapping[str, t.Any]) -> DiagramRecord:
    """Create the record matching the ``type`` tag of ``data``.

    Raises
    ------
    UnknownDiagramTypeError
        If the ``type`` tag is missing or not one of the known
        diagram types.
    """
    tag = data.get("type")
    try:
        dtype = DiagramType(str(tag).upper())
    except ValueError:
        raise UnknownDiagramTypeError(
            f"Unknown diagram type: {tag!r}"
        ) from None
    return RECORD_TYPES[dtype].from_dict(data)


@dataclasses.dataclass(frozen=True)
class Dashboard:
    """A set of diagrams together with a title and textual summary."""

    title: str = ""
    summary: str = ""
    diagrams: tuple[DiagramRecord, ...] = ()

    @classmethod
    def from_dict(cls, data: cabc.Mapping[str, t.Any]) -> Dashboard:
        """Create a dashboard, skipping diagrams of unknown type.

        A mapping that has a ``type`` tag but no ``diagrams`` key is
        treated as a dashboard containing just that one diagram.
        """
        if "diagrams" not in data and "type" in data:
            return cls(diagrams=(parse_record(data),))

        diagrams: list[DiagramRecord] = []
        for i, entry in enumerate(_mappings(data, "diagrams")):
            try:
                diagrams.append(parse_record(entry))
            except UnknownDiagramTypeError as err:
                LOGGER.warning("Skipping diagram %d: %s", i, err)
        return cls(_str(data, "title"), _str(data, "summary"), tuple(diagrams))


def strip_fences(text: str) -> str:
    """Remove a surrounding Markdown code fence, if there is one."""
    return _FENCE.sub("", text).strip()


def parse_dashboard(text: str | bytes) -> Dashboard:
    """Decode a dashboard from JSON text.

    The text may be wrapped in a Markdown code fence (with or without a
    ``json`` language tag), as language models tend to produce.

    Raises
    ------
    MalformedResponseError
        If the text is not valid JSON or does not contain a JSON object.
    UnknownDiagramTypeError
        If the text is a single record of unknown type.
    """
    if isinstance(text, bytes):
        text = text.decode("utf-8")
    try:
        data = json.loads(strip_fences(text))
    except json.JSONDecodeError as err:
        raise MalformedResponseError(f"Cannot decode response: {err}") from err
    if not isinstance(data, cabc.Mapping):
        raise MalformedResponseError(
            f"Expected a JSON object, got {type(data).__name__}"
        )
    return Dashboard.from_dict(data)
