# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Global fixtures for pytest."""

from __future__ import annotations

import pathlib
import typing as t

import pytest

from diagramgen import diagram, records

TEST_DATA = pathlib.Path(__file__).parent / "data"
DASHBOARD = TEST_DATA / "dashboard.json"

SAMPLE_RECORDS: dict[str, dict[str, t.Any]] = {
    "FISHBONE": {
        "type": "FISHBONE",
        "problem": "Late deliveries",
        "categories": [
            {"name": "People", "items": ["Understaffed", "No training"]},
            {"name": "Process", "items": ["Manual approvals"]},
            {"name": "Tools", "items": ["Legacy ERP", "Slow VPN", "Outages"]},
            {"name": "Suppliers", "items": ["Single source"]},
        ],
    },
    "PARETO": {
        "type": "PARETO",
        "title": "Defects by cause",
        "items": [
            {"name": "Scratches", "value": 50},
            {"name": "Dents", "value": 30},
            {"name": "Misalignment", "value": 15},
            {"name": "Other", "value": 5},
        ],
    },
    "ACTION_PLAN": {
        "type": "ACTION_PLAN",
        "centralTopic": "Launch v2",
        "nodes": [
            {"title": "Design", "items": ["Wireframes", "Review"]},
            {"title": "Build", "items": ["API", "UI", "Tests"]},
            {"title": "Ship", "items": ["Release notes"]},
        ],
    },
    "MIND_MAP": {
        "type": "MIND_MAP",
        "centralTopic": "Remote work",
        "nodes": [
            {"title": "Tools", "items": ["Chat", "Video"]},
            {"title": "Culture", "items": ["Trust"]},
            {"title": "Health", "items": ["Breaks", "Ergonomics"]},
            {"title": "Hiring", "items": []},
        ],
    },
    "BRAINWRITING": {
        "type": "BRAINWRITING",
        "topic": "Reduce churn",
        "columns": ["Round 1", "Round 2", "Round 3"],
        "rows": [
            {"participant": "Alex", "ideas": ["Onboarding", "Emails", "FAQ"]},
            {"participant": "Sam", "ideas": ["Discounts", "Survey"]},
        ],
    },
    "SWOT": {
        "type": "SWOT",
        "topic": "Coffee shop",
        "strengths": ["Location", "Loyal customers"],
        "weaknesses": ["Small space"],
        "opportunities": ["Delivery"],
        "threats": ["Chains", "Rent increase"],
    },
    "RADAR": {
        "type": "RADAR",
        "title": "Team skills",
        "axes": [
            {"label": "Frontend", "value": 80},
            {"label": "Backend", "value": 65},
            {"label": "Ops", "value": 40},
            {"label": "Design", "value": 55},
            {"label": "Testing", "value": 70},
        ],
    },
    "TIMELINE": {
        "type": "TIMELINE",
        "title": "Project history",
        "events": [
            {"date": "2024-01", "title": "Kickoff", "description": "Start"},
            {"date": "2024-03", "title": "Alpha", "description": "Internal"},
            {"date": "2024-06", "title": "Beta", "description": "Public"},
            {"date": "2024-09", "title": "GA", "description": "Launch"},
        ],
    },
}


class FakeClipboard:
    """Clipboard that records written images instead of publishing them."""

    def __init__(self) -> None:
        self.images: list[tuple[bytes, str]] = []

    def write_image(self, data: bytes, mimetype: str = "image/png") -> None:
        self.images.append((data, mimetype))


@pytest.fixture(params=sorted(SAMPLE_RECORDS))
def any_record(request: pytest.FixtureRequest) -> records.DiagramRecord:
    """Return a populated record of each diagram type in turn."""
    return records.parse_record(SAMPLE_RECORDS[request.param])


@pytest.fixture(params=[False, True], ids=["light", "dark"])
def theme(request: pytest.FixtureRequest) -> diagram.Theme:
    return diagram.resolve_theme(request.param)


@pytest.fixture
def light_theme() -> diagram.Theme:
    return diagram.resolve_theme(False)


@pytest.fixture
def clipboard() -> FakeClipboard:
    return FakeClipboard()
