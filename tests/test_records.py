# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import json
import logging

import pytest

from diagramgen import records

from .conftest import DASHBOARD, SAMPLE_RECORDS


@pytest.mark.parametrize("tag", sorted(SAMPLE_RECORDS))
def test_parse_record_creates_the_matching_variant(tag):
    record = records.parse_record(SAMPLE_RECORDS[tag])

    assert record.type is records.DiagramType(tag)
    assert isinstance(record, records.RECORD_TYPES[record.type])


def test_parse_record_accepts_lowercase_tags():
    record = records.parse_record({"type": "mind_map", "centralTopic": "X"})

    assert isinstance(record, records.MindMapRecord)
    assert record.central_topic == "X"


@pytest.mark.parametrize("data", [{"type": "GANTT"}, {}, {"type": None}])
def test_parse_record_rejects_unknown_types(data):
    with pytest.raises(records.UnknownDiagramTypeError):
        records.parse_record(data)


def test_missing_collections_default_to_empty_tuples():
    record = records.parse_record({"type": "FISHBONE"})

    assert record == records.FishboneRecord("", ())


def test_unknown_fields_are_ignored():
    record = records.parse_record(
        {"type": "RADAR", "title": "T", "axes": [], "color": "red"}
    )

    assert record == records.RadarRecord("T", ())


def test_collections_of_the_wrong_shape_are_treated_as_empty():
    record = records.parse_record(
        {"type": "FISHBONE", "categories": "People, Process"}
    )

    assert isinstance(record, records.FishboneRecord)
    assert record.categories == ()


@pytest.mark.parametrize(
    ["value", "expected"],
    [
        (42, 42.0),
        ("17.5", 17.5),
        ("many", 0.0),
        (None, 0.0),
        (float("nan"), 0.0),
        (float("inf"), 0.0),
        ("-inf", 0.0),
        (-3, 0.0),
    ],
)
def test_pareto_values_are_coerced_to_non_negative_numbers(value, expected):
    item = records.ParetoItem.from_dict({"name": "x", "value": value})

    assert item.value == expected


def test_radar_values_are_coerced_to_numbers():
    axis = records.RadarAxis.from_dict({"label": "x", "value": "80"})

    assert axis.value == 80.0


def test_swot_reads_all_four_quadrants():
    record = records.parse_record(SAMPLE_RECORDS["SWOT"])

    assert isinstance(record, records.SwotRecord)
    assert record.strengths == ("Location", "Loyal customers")
    assert record.threats == ("Chains", "Rent increase")


def test_action_plan_and_mind_map_are_distinct_variants():
    plan = records.parse_record(SAMPLE_RECORDS["ACTION_PLAN"])
    mind_map = records.parse_record(SAMPLE_RECORDS["MIND_MAP"])

    assert not isinstance(plan, records.MindMapRecord)
    assert not isinstance(mind_map, records.ActionPlanRecord)


def test_records_are_immutable():
    record = records.parse_record(SAMPLE_RECORDS["TIMELINE"])

    with pytest.raises(AttributeError):
        record.title = "Changed"  # type: ignore[misc]


@pytest.mark.parametrize("label", ["Mind Map", "Action Plan", "Swot"])
def test_diagram_type_labels_are_human_readable(label):
    assert label in {t.label for t in records.DiagramType}


@pytest.mark.parametrize(
    "text",
    [
        '{"a": 1}',
        '```json\n{"a": 1}\n```',
        '```\n{"a": 1}\n```',
        '  ```JSON\n{"a": 1}```  ',
    ],
)
def test_strip_fences(text):
    assert json.loads(records.strip_fences(text)) == {"a": 1}


def test_parse_dashboard_reads_fenced_dashboard_files(caplog):
    with caplog.at_level(logging.WARNING, logger="diagramgen.records"):
        dashboard = records.parse_dashboard(DASHBOARD.read_bytes())

    assert dashboard.title == "Quarterly review"
    assert dashboard.summary.startswith("Where we lose time")
    assert [d.type for d in dashboard.diagrams] == [
        records.DiagramType.PARETO,
        records.DiagramType.SWOT,
        records.DiagramType.RADAR,
    ]
    assert "GANTT" in caplog.text


def test_parse_dashboard_drops_overflowing_numbers():
    text = '{"type": "PARETO", "items": [{"name": "a", "value": 1e999}]}'

    dashboard = records.parse_dashboard(text)

    (record,) = dashboard.diagrams
    assert isinstance(record, records.ParetoRecord)
    assert record.items[0].value == 0.0


def test_parse_dashboard_wraps_a_single_record():
    dashboard = records.parse_dashboard(json.dumps(SAMPLE_RECORDS["RADAR"]))

    assert len(dashboard.diagrams) == 1
    assert isinstance(dashboard.diagrams[0], records.RadarRecord)


@pytest.mark.parametrize("text", ["not json", "{", "```json\n```"])
def test_parse_dashboard_rejects_undecodable_text(text):
    with pytest.raises(records.MalformedResponseError):
        records.parse_dashboard(text)


@pytest.mark.parametrize("text", ["[]", "42", '"dashboard"', "null"])
def test_parse_dashboard_rejects_non_objects(text):
    with pytest.raises(records.MalformedResponseError):
        records.parse_dashboard(text)


def test_malformed_response_is_a_value_error():
    assert issubclass(records.MalformedResponseError, ValueError)
