# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import pytest

from diagramgen import diagram
from diagramgen.diagram import Vector2D
from diagramgen.layout import _common


@pytest.mark.parametrize(
    ["start", "stop", "count", "expected"],
    [
        (0, 47, 10, 5),
        (0, 100, 10, 10),
        (0, 1, 10, -10),
        (0, 3000, 5, 500),
    ],
)
def test_tick_increment(start, stop, count, expected):
    assert _common.tick_increment(start, stop, count) == expected


def test_nice_extends_the_domain_to_round_values():
    scale = _common.LinearScale((0, 47), (400, 0)).nice()

    assert scale.domain == (0, 50)
    assert scale(0) == 400
    assert scale(50) == 0


def test_ticks_are_evenly_spaced_round_values():
    scale = _common.LinearScale((0, 50), (0, 1))

    assert scale.ticks(5) == [0, 10, 20, 30, 40, 50]


def test_linear_scale_with_empty_domain_maps_to_range_center():
    scale = _common.LinearScale((0, 0), (0, 100))

    assert scale(0) == 50


def test_band_scale_keeps_bands_inside_the_range():
    scale = _common.BandScale(4, (60, 740), 0.3)

    assert scale(0) >= 60
    assert scale(3) + scale.bandwidth <= 740
    assert scale.bandwidth == pytest.approx(scale.step * 0.7)
    assert scale.center(1) - scale.center(0) == pytest.approx(scale.step)


def test_point_scale_spreads_points_evenly():
    scale = _common.PointScale(3, (0, 400), 0.5)

    points = [scale(i) for i in range(3)]

    assert points == pytest.approx([400 / 6, 200, 400 - 400 / 6])


def test_polygon_path_is_closed():
    d = _common.polygon_path([Vector2D(0, 0), Vector2D(10, 0), Vector2D(5, 5)])

    assert d == "M0,0L10,0L5,5Z"


def test_monotone_path_passes_through_all_points():
    points = [Vector2D(0, 100), Vector2D(50, 40), Vector2D(100, 10)]

    d = _common.monotone_path(points)

    assert d.startswith("M0,100")
    assert d.endswith("100,10")
    assert d.count("C") == 2


def test_quadratic_path():
    d = _common.quadratic_path(Vector2D(0, 0), Vector2D(4, 8), Vector2D(10, 0))

    assert d == "M0,0Q4,8,10,0"


class TestSceneBuilder:
    @staticmethod
    def builder() -> _common.SceneBuilder:
        return _common.SceneBuilder(diagram.resolve_theme(False), "RADAR")

    @pytest.mark.parametrize("content", ["", None])
    def test_empty_text_adds_nothing(self, content):
        scene = self.builder()

        result = scene.text(
            (0, 0), content, font_size=12, fill=scene.theme.text_body
        )

        assert result is None
        assert not scene.build(100, 100)

    def test_wrapped_text_is_centered_on_its_anchor(self):
        scene = self.builder()

        text = scene.text(
            (100, 200),
            "alpha beta gamma delta epsilon zeta",
            width=90,
            font_size=12,
            fill=scene.theme.text_body,
        )

        assert text is not None
        assert len(text.lines) > 1
        assert sum(text.offsets) == pytest.approx(0)

    def test_uncentered_text_flows_downwards(self):
        scene = self.builder()

        text = scene.text(
            (0, 0),
            "alpha beta gamma delta epsilon zeta",
            width=60,
            font_size=10,
            line_height=2,
            fill=scene.theme.text_body,
            centered=False,
        )

        assert text is not None
        assert text.offsets[0] == 0
        assert text.offsets[1] == 20

    def test_style_keywords_are_hyphenated(self):
        scene = self.builder()

        line = scene.line(
            (0, 0), (1, 1), stroke_width=2, stroke_dasharray=None
        )

        assert dict(line.style) == {"stroke-width": 2}

    def test_built_scene_carries_theme_background(self):
        scene = self.builder()
        scene.rect((0, 0), (10, 10), class_="box")

        built = scene.build(640, 480)

        assert built.size == (640, 480)
        assert built.background == scene.theme.background
        assert built.diagram_type == "RADAR"
        assert len(built.by_class("box")) == 1
