from __future__ import annotations

import math

import pytest

from iCrop.core.alignment import (
    AlignmentOffsets,
    FrameCorner,
    ImageEdge,
    ViewGeometry,
    align_by_panning,
    align_by_zooming,
    alignment_offsets,
    fill_to_frame,
    is_frame_covered,
    pan_correction,
    rotated_corners,
    rotation_band,
    screen_angle,
    _BAND_CORNERS,
)
from iCrop.core.geometry import EMPTY_SIZE, Size2, Vector2

FRAME = Size2(270.0, 270.0)
IMAGE = Size2(1000.0, 500.0)
FILL_ZOOM = 0.54


def _view(rotation_degrees: float = 0.0, zoom: float = FILL_ZOOM, pan: Vector2 = Vector2()) -> ViewGeometry:
    return ViewGeometry(
        frame_size=FRAME,
        image_size=IMAGE,
        rotation_radians=math.radians(rotation_degrees),
        zoom_scale=zoom,
        pan_offset=pan,
    )


def _offsets(view: ViewGeometry) -> AlignmentOffsets:
    offsets = alignment_offsets(view)
    assert offsets is not None
    return offsets


def test_unrotated_fit_touches_short_sides() -> None:
    offsets = _offsets(_view())

    assert offsets.top == pytest.approx(0.0, abs=1e-9)
    assert offsets.bottom == pytest.approx(0.0, abs=1e-9)
    assert offsets.left == pytest.approx(-135.0)
    assert offsets.right == pytest.approx(-135.0)
    assert offsets.is_covered()


def test_rotation_without_rezoom_opens_a_gap() -> None:
    offsets = _offsets(_view(45.0))

    assert offsets.worst > 0.0
    assert not is_frame_covered(_view(45.0))


def test_edit_rotation_turns_counter_clockwise_on_screen() -> None:
    corners = rotated_corners(_view(90.0))
    assert corners is not None
    # The top-left corner swings down to the bottom-left of the screen.
    assert corners.a.x == pytest.approx(-135.0)
    assert corners.a.y == pytest.approx(270.0)
    assert screen_angle(0.5) == -0.5


@pytest.mark.parametrize(
    ("degrees", "band"),
    [(0.0, 0), (45.0, 0), (90.0, 0), (90.5, 1), (180.0, 1), (-0.5, 2), (-90.0, 2), (-90.5, 3), (-180.0, 3), (270.0, 2)],
)
def test_rotation_band(degrees: float, band: int) -> None:
    assert rotation_band(degrees) == band


def test_band_table_assigns_distinct_corners() -> None:
    assert len(_BAND_CORNERS) == 4
    for assignment in _BAND_CORNERS:
        assert set(assignment) == set(ImageEdge)
        assert set(assignment.values()) == set(FrameCorner)


@pytest.mark.parametrize("degrees", [-170.0, -120.0, -45.0, -10.0, 0.0, 10.0, 45.0, 100.0, 135.0, 180.0])
def test_fill_to_frame_covers_and_touches(degrees: float) -> None:
    view = _view(degrees, pan=Vector2(40.0, -25.0))
    pan, multiplier = fill_to_frame(view)

    filled = view.with_pan(pan).with_zoom(view.zoom_scale * multiplier)
    offsets = _offsets(filled)

    assert pan == Vector2()
    assert all(value <= 1e-6 for value in offsets.as_tuple())
    assert offsets.worst == pytest.approx(0.0, abs=1e-6)


def test_fill_to_frame_shrinks_an_oversized_image() -> None:
    view = _view(zoom=FILL_ZOOM * 3)
    _, multiplier = fill_to_frame(view)
    assert multiplier == pytest.approx(1.0 / 3.0)


@pytest.mark.parametrize(
    ("degrees", "pan"),
    [(30.0, Vector2()), (-20.0, Vector2(30.0, 10.0)), (120.0, Vector2(-15.0, 20.0)), (45.0, Vector2())],
)
def test_zoom_correction_closes_worst_gap(degrees: float, pan: Vector2) -> None:
    view = _view(degrees, pan=pan)
    before = _offsets(view)
    assert not before.is_covered()

    new_pan, multiplier = align_by_zooming(view)
    corrected = _offsets(view.with_pan(new_pan).with_zoom(view.zoom_scale * multiplier))

    assert multiplier > 1.0
    assert all(value <= 1e-6 for value in corrected.as_tuple())
    assert corrected.worst == pytest.approx(0.0, abs=1e-6)


def test_zoom_correction_is_noop_when_covered() -> None:
    view = _view(zoom=FILL_ZOOM * 1.5)
    pan, multiplier = align_by_zooming(view)
    assert pan == view.pan_offset
    assert multiplier == 1.0


def test_zoom_correction_refills_when_every_side_has_a_gap() -> None:
    view = _view(zoom=FILL_ZOOM * 0.4, pan=Vector2(5.0, 5.0))
    assert len(_offsets(view).gapped_edges()) == 4

    pan, multiplier = align_by_zooming(view)

    assert pan == Vector2()
    assert multiplier == pytest.approx(2.5)


def test_pan_correction_closes_single_gap() -> None:
    # Slide the image right until its left edge leaves a 65 point gap.
    view = _view(pan=Vector2(200.0 / FILL_ZOOM, 0.0))
    before = _offsets(view)
    assert before.left == pytest.approx(65.0)
    assert before.right < 0.0

    corrected = _offsets(view.with_pan(align_by_panning(view)))

    assert corrected.left == pytest.approx(0.0, abs=1e-9)
    assert corrected.right == pytest.approx(-270.0)


@pytest.mark.parametrize(
    ("degrees", "zoom_factor", "pan"),
    [
        (0.0, 1.2, Vector2(0.0, 80.0)),
        (15.0, 1.6, Vector2(120.0, 60.0)),
        (-35.0, 1.9, Vector2(-200.0, 90.0)),
        (150.0, 1.7, Vector2(160.0, -70.0)),
    ],
)
def test_pan_correction_never_grows_a_gap(degrees: float, zoom_factor: float, pan: Vector2) -> None:
    view = _view(degrees, zoom=FILL_ZOOM * zoom_factor, pan=pan)
    before = _offsets(view)
    assert not before.is_covered()

    after = _offsets(view.with_pan(align_by_panning(view)))

    for edge in before.gapped_edges():
        assert after.for_edge(edge) <= before.for_edge(edge) + 1e-9


def test_pan_correction_leaves_opposite_gaps_to_zoom() -> None:
    view = _view(45.0)
    offsets = _offsets(view)
    assert offsets.top > 0.0 and offsets.bottom > 0.0

    assert pan_correction(view) == Vector2()


@pytest.mark.parametrize(
    "view",
    [
        ViewGeometry(frame_size=EMPTY_SIZE, image_size=IMAGE, zoom_scale=1.0),
        ViewGeometry(frame_size=FRAME, image_size=EMPTY_SIZE, zoom_scale=1.0),
        ViewGeometry(frame_size=FRAME, image_size=IMAGE, zoom_scale=0.0),
        ViewGeometry(frame_size=FRAME, image_size=IMAGE, zoom_scale=float("nan")),
    ],
)
def test_degenerate_views_are_noops(view: ViewGeometry) -> None:
    assert alignment_offsets(view) is None
    assert not is_frame_covered(view)
    assert align_by_panning(view) == view.pan_offset
    assert align_by_zooming(view) == (view.pan_offset, 1.0)
    assert fill_to_frame(view) == (view.pan_offset, 1.0)
