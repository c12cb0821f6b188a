from __future__ import annotations

import pytest

from iCrop.core.frame import FrameShape
from iCrop.core.geometry import EMPTY_SIZE, Size2


def test_square_frame_on_square_canvas() -> None:
    size = FrameShape.SQUARE.frame_size(Size2(1000.0, 500.0), Size2(300.0, 300.0))
    assert size.width == pytest.approx(270.0)
    assert size.height == pytest.approx(270.0)


def test_circle_frame_is_smaller_than_square() -> None:
    size = FrameShape.CIRCLE.frame_size(Size2(1000.0, 500.0), Size2(300.0, 400.0))
    assert size == Size2(240.0, 240.0)
    assert FrameShape.CIRCLE.is_round
    assert not FrameShape.SQUARE.is_round


def test_ratio_frames_keep_aspect() -> None:
    canvas = Size2(400.0, 600.0)

    landscape = FrameShape.RATIO_4X3.frame_size(Size2(), canvas)
    portrait = FrameShape.RATIO_3X4.frame_size(Size2(), canvas)

    assert landscape.width == pytest.approx(360.0)
    assert landscape.height == pytest.approx(270.0)
    assert portrait.height == pytest.approx(540.0)
    assert portrait.width == pytest.approx(405.0)


def test_original_frame_follows_image_aspect() -> None:
    size = FrameShape.ORIGINAL.frame_size(Size2(1000.0, 500.0), Size2(300.0, 300.0))
    assert size.width == pytest.approx(270.0)
    assert size.height == pytest.approx(135.0)


@pytest.mark.parametrize("shape", list(FrameShape))
@pytest.mark.parametrize("canvas", [Size2(300.0, 300.0), Size2(600.0, 700.0), Size2(800.0, 900.0)])
def test_frame_within_canvas_bounds(shape: FrameShape, canvas: Size2) -> None:
    size = shape.frame_size(Size2(1200.0, 800.0), canvas)

    assert size.width > 0 and size.height > 0
    assert size.width <= canvas.width * 0.9 + 1e-9
    assert size.height <= canvas.height * 0.9 + 1e-9
    assert max(size.width / canvas.width, size.height / canvas.height) >= 0.8 - 1e-9


def test_empty_inputs_give_empty_frame() -> None:
    assert FrameShape.SQUARE.frame_size(Size2(100.0, 100.0), EMPTY_SIZE) == EMPTY_SIZE
    assert FrameShape.ORIGINAL.frame_size(EMPTY_SIZE, Size2(300.0, 300.0)) == EMPTY_SIZE
