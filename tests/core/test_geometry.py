from __future__ import annotations

import math

import pytest

from iCrop.core.geometry import EMPTY_SIZE, Size2, Vector2, normalise_degrees, rotate, signed_distance


def test_vector_arithmetic_is_pure() -> None:
    a = Vector2(1.0, 2.0)
    b = Vector2(3.0, -1.0)

    assert a + b == Vector2(4.0, 1.0)
    assert a - b == Vector2(-2.0, 3.0)
    assert -a == Vector2(-1.0, -2.0)
    assert a * 2 == Vector2(2.0, 4.0)
    assert 2 * a == Vector2(2.0, 4.0)
    assert b / 2 == Vector2(1.5, -0.5)
    assert a == Vector2(1.0, 2.0)
    assert Vector2(3.0, 4.0).length == pytest.approx(5.0)
    assert a.dot(b) == pytest.approx(1.0)


def test_rotate_quarter_turn_is_clockwise_on_screen() -> None:
    # With y pointing down, (1, 0) turned by +90 degrees points down the screen.
    turned = rotate(Vector2(1.0, 0.0), math.pi / 2)
    assert turned.x == pytest.approx(0.0, abs=1e-12)
    assert turned.y == pytest.approx(1.0)


def test_rotate_about_center() -> None:
    turned = Vector2(2.0, 1.0).rotated(math.pi, Vector2(1.0, 1.0))
    assert turned.x == pytest.approx(0.0)
    assert turned.y == pytest.approx(1.0)


def test_signed_distance_negative_inside_clockwise_polygon() -> None:
    top_left = Vector2(-1.0, -1.0)
    top_right = Vector2(1.0, -1.0)

    assert signed_distance(Vector2(0.0, 0.0), top_left, top_right) == pytest.approx(-1.0)
    assert signed_distance(Vector2(0.0, -3.0), top_left, top_right) == pytest.approx(2.0)


def test_signed_distance_degenerate_line_is_zero() -> None:
    point = Vector2(1.0, 1.0)
    assert signed_distance(Vector2(5.0, 5.0), point, point) == 0.0


def test_size_helpers() -> None:
    size = Size2(400.0, 300.0)

    assert not size.is_empty
    assert EMPTY_SIZE.is_empty
    assert Size2(0.0, 10.0).is_empty
    assert size.center == Vector2(200.0, 150.0)
    assert size.transposed() == Size2(300.0, 400.0)
    assert size.scaled(0.5) == Size2(200.0, 150.0)
    assert Size2(270.0, 270.0).max_ratio(Size2(1000.0, 500.0)) == pytest.approx(0.54)
    assert Size2(270.0, 270.0).min_ratio(Size2(1000.0, 500.0)) == pytest.approx(0.27)


@pytest.mark.parametrize(
    ("degrees", "expected"),
    [(0.0, 0.0), (180.0, 180.0), (-180.0, -180.0), (190.0, -170.0), (-190.0, 170.0), (540.0, -180.0)],
)
def test_normalise_degrees(degrees: float, expected: float) -> None:
    assert normalise_degrees(degrees) == pytest.approx(expected)
