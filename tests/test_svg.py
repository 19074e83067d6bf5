# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import pytest
from lxml import etree

from diagramgen import diagram, layout, svg
from diagramgen.diagram import RGB, Vector2D

SVG_NS = "{http://www.w3.org/2000/svg}"


@pytest.fixture
def scene() -> diagram.Scene:
    return diagram.Scene(
        400,
        300,
        RGB(255, 255, 255),
        (
            diagram.Rect(
                Vector2D(10, 20),
                Vector2D(100, 50),
                rx=4,
                style=diagram.make_style(fill=RGB(255, 0, 0)),
                class_="box",
            ),
            diagram.Line(
                Vector2D(0, 0),
                Vector2D(400, 300),
                style=diagram.make_style(stroke_width=2),
            ),
            diagram.Text(
                Vector2D(200, 150),
                ("first line", "second line"),
                (-7.5, 7.5),
                font_size=12,
                fill=RGB(0, 0, 0),
                anchor="middle",
                class_="label",
            ),
        ),
        "PARETO",
    )


def parse(scene: diagram.Scene, **kw) -> etree._Element:
    return etree.fromstring(svg.to_svg(scene, **kw).encode("utf-8"))


class TestSVG:
    def test_base_attributes(self, scene: diagram.Scene) -> None:
        tree = parse(scene)

        assert tree.tag == f"{SVG_NS}svg"
        assert tree.get("font-family")
        assert tree.get("font-size")
        assert tree.get("width") == "400"
        assert tree.get("height") == "300"
        assert tree.get("viewBox") == "0 0 400 300"
        assert tree.get("class") == "diagram pareto"
        assert not tree.get("filename")
        assert not tree.get("size")

    def test_backdrop_is_painted_in_the_background_color(
        self, scene: diagram.Scene
    ) -> None:
        tree = parse(scene)
        first = tree.find(f"{SVG_NS}rect")

        assert first is not None
        assert first.get("class") == "backdrop"
        assert first.get("fill") == "#FFFFFF"
        assert first.get("width") == "400"

    def test_transparent_background_omits_the_backdrop(
        self, scene: diagram.Scene
    ) -> None:
        tree = parse(scene, transparent_background=True)

        assert not tree.findall(f".//{SVG_NS}rect[@class='backdrop']")

    def test_elements_keep_their_classes_and_styles(
        self, scene: diagram.Scene
    ) -> None:
        tree = parse(scene)
        (box,) = tree.findall(f".//{SVG_NS}rect[@class='box']")

        assert box.get("fill") == "#FF0000"
        assert box.get("rx") == "4"
        assert box.get("x") == "10"
        assert box.get("y") == "20"

    def test_text_lines_become_tspans(self, scene: diagram.Scene) -> None:
        tree = parse(scene)
        (text,) = tree.findall(f".//{SVG_NS}text")
        tspans = text.findall(f"{SVG_NS}tspan")

        assert text.get("class") == "label"
        assert text.get("text-anchor") == "middle"
        assert [i.text for i in tspans] == ["first line", "second line"]
        assert [i.get("y") for i in tspans] == ["142.5", "157.5"]

    def test_every_layout_produces_valid_svg(self, any_record, theme):
        scene = layout.layout(any_record, theme)

        tree = parse(scene)

        classes = {i.get("class") for i in tree.iter()}
        assert tree.tag == f"{SVG_NS}svg"
        for element in scene:
            if element.class_:
                assert element.class_ in classes


@pytest.mark.parametrize(
    ["style", "expected"],
    [
        pytest.param(
            {"fill": RGB(255, 0, 0)}, {"fill": "#FF0000"}, id="opaque"
        ),
        pytest.param(
            {"fill": RGB(255, 0, 0, 0.5)},
            {"fill": "#FF0000", "fill-opacity": 0.5},
            id="translucent",
        ),
        pytest.param(
            {"stroke": RGB(0, 0, 0, 0.0)}, {"stroke": "none"}, id="clear"
        ),
        pytest.param(
            {"fill": RGB(0, 0, 255, 0.2), "fill-opacity": 0.8},
            {"fill": "#0000FF", "fill-opacity": 0.8},
            id="explicit-opacity-wins",
        ),
        pytest.param(
            {"stroke-dasharray": "4,4"},
            {"stroke-dasharray": "4,4"},
            id="passthrough",
        ),
    ],
)
def test_svg_attributes(style, expected):
    assert svg.svg_attributes(style) == expected


def test_to_svg_matches_the_drawing(scene: diagram.Scene) -> None:
    assert svg.to_svg(scene) == svg.Drawing(scene).to_string()
