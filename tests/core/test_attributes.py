from __future__ import annotations

import json

import pytest

from iCrop.core.attributes import ColorParameters, EditAttributes, round_zoom
from iCrop.core.edit_option import EditOption
from iCrop.core.geometry import Vector2


def test_default_snapshot_means_no_edits() -> None:
    attributes = EditAttributes()

    assert attributes.is_default
    assert attributes.has_default_geometry
    assert not attributes.with_percent(EditOption.CONTRAST, 0.6).is_default


def test_with_percent_clamps_into_unit_range() -> None:
    attributes = EditAttributes().with_percent(EditOption.BRIGHTNESS, 1.7)
    assert attributes.brightness_percent == 1.0
    assert attributes.with_percent(EditOption.BRIGHTNESS, -2).percent(EditOption.BRIGHTNESS) == 0.0


def test_dict_round_trip_through_json() -> None:
    attributes = EditAttributes(
        applied_filter_id="vivid",
        pan_offset=Vector2(12.5, -3.25),
        zoom_scale=1.23456,
        rotation_percent=0.61,
        brightness_percent=0.7,
        contrast_percent=0.2,
        saturation_percent=0.9,
        sharpen_percent=0.55,
        warmth_percent=0.35,
    )

    restored = EditAttributes.from_dict(json.loads(json.dumps(attributes.to_dict())))

    assert restored == attributes


def test_from_dict_tolerates_missing_and_bad_values() -> None:
    restored = EditAttributes.from_dict(
        {"pan_offset": "nonsense", "zoom_scale": -3, "contrast_percent": 4.0, "warmth_percent": "x"}
    )

    assert restored.pan_offset == Vector2()
    assert restored.zoom_scale == 1.0
    assert restored.contrast_percent == 1.0
    assert restored.warmth_percent == 0.5
    assert restored.applied_filter_id is None


def test_zoom_rounding_hides_gesture_noise() -> None:
    assert round_zoom(1.000049) == pytest.approx(1.0)
    noisy = EditAttributes(zoom_scale=1.00000003)
    assert noisy != EditAttributes()
    assert noisy.with_rounded_zoom() == EditAttributes()


def test_color_parameters_follow_percent_mapping() -> None:
    neutral = ColorParameters.from_attributes(EditAttributes())
    assert neutral.is_neutral()

    edited = ColorParameters.from_attributes(
        EditAttributes(brightness_percent=1.0, saturation_percent=0.25, warmth_percent=1.0)
    )
    assert edited.brightness == pytest.approx(0.1)
    assert edited.saturation == pytest.approx(0.0)
    assert edited.warmth == pytest.approx(11000.0)
    assert not edited.is_neutral()
