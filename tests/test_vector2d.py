# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import math
import operator

import pytest

from diagramgen import diagram


@pytest.mark.parametrize(
    ["calculate", "vec_1", "vec_2", "expected"],
    [
        # Addition of two vectors
        (
            operator.add,
            diagram.Vector2D(2, 5),
            diagram.Vector2D(8, 1),
            diagram.Vector2D(10, 6),
        ),
        (
            operator.add,
            diagram.Vector2D(2, 5),
            (8, 1),
            diagram.Vector2D(10, 6),
        ),
        (
            operator.add,
            (2, 5),
            diagram.Vector2D(8, 1),
            diagram.Vector2D(10, 6),
        ),
        # Subtraction of two vectors
        (operator.sub, diagram.Vector2D(8, 5), (2, 1), diagram.Vector2D(6, 4)),
        (operator.sub, (8, 5), diagram.Vector2D(2, 1), diagram.Vector2D(6, 4)),
        # Multiplication with scalar
        (operator.mul, diagram.Vector2D(3, 4), 2, diagram.Vector2D(6, 8)),
        (operator.mul, 2, diagram.Vector2D(3, 4), diagram.Vector2D(6, 8)),
        # Dot product
        (operator.mul, diagram.Vector2D(3, 4), (5, 2), 23),
        # Element-wise product
        (
            operator.matmul,
            diagram.Vector2D(3, 4),
            (5, 2),
            diagram.Vector2D(15, 8),
        ),
        # True division
        (
            operator.truediv,
            diagram.Vector2D(8, 6),
            2,
            diagram.Vector2D(4.0, 3.0),
        ),
    ],
)
def test_vector_math(calculate, vec_1, vec_2, expected):
    actual = calculate(vec_1, vec_2)
    assert isinstance(actual, type(expected))
    assert actual == expected


@pytest.mark.parametrize(
    ["vector", "expected"],
    [
        (diagram.Vector2D(-2, 1), 2.23606797749979),
        (diagram.Vector2D(3, -5), 5.830951894845301),
        (diagram.Vector2D(-7, -4), 8.06225774829855),
    ],
)
def test_length(vector, expected):
    assert math.isclose(vector.length, expected)


@pytest.mark.parametrize(
    ["angle", "expected"],
    [
        pytest.param(-math.pi / 2, (0, -10), id="north"),
        pytest.param(0, (10, 0), id="east"),
        pytest.param(math.pi / 2, (0, 10), id="south"),
        pytest.param(math.pi, (-10, 0), id="west"),
    ],
)
def test_frompolar_measures_angles_clockwise_in_screen_space(
    angle, expected
):
    actual = diagram.Vector2D.frompolar(10, angle)

    assert actual.x == pytest.approx(expected[0], abs=1e-9)
    assert actual.y == pytest.approx(expected[1], abs=1e-9)


def test_angle_is_the_inverse_of_frompolar():
    vector = diagram.Vector2D.frompolar(5, math.radians(150))

    assert math.isclose(vector.angle, math.radians(150))
    assert math.isclose(vector.length, 5)
