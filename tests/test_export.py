from __future__ import annotations

import numpy as np
import pytest
from PIL import Image, ImageOps

from iCrop.core.edit_option import EditOption
from iCrop.core.export import render_cropped_preview, render_final_image
from iCrop.core.filters import FilterCapability, FilterPipeline
from iCrop.core.frame import FrameShape
from iCrop.core.geometry import Size2, Vector2
from iCrop.core.image_buffer import ImageBuffer
from iCrop.core.orientation import ImageOrientation
from iCrop.core.session import EditSession
from iCrop.io.image_loader import make_preview


def _marked_image(width: int, height: int) -> Image.Image:
    """Grey image with a red block marking the display centre."""

    image = Image.new("RGB", (width, height), (90, 90, 90))
    cx, cy = width // 2, height // 2
    image.paste((255, 0, 0), (cx - 10, cy - 10, cx + 10, cy + 10))
    return image


def _session_for(full: ImageBuffer, shape: FrameShape = FrameShape.SQUARE) -> EditSession:
    preview = make_preview(full, max_size=200)
    session = EditSession(preview.size, shape)
    session.set_layout(Size2(300.0, 300.0))
    return session


def test_unedited_square_crop_is_centred() -> None:
    full = ImageBuffer(_marked_image(400, 200))
    session = _session_for(full)

    result = render_final_image(session, full, FilterPipeline())

    assert result is not None
    assert result.image.size == (200, 200)
    assert result.image.getpixel((100, 100)) == (255, 0, 0)


def test_rotated_edit_stays_inside_buffer() -> None:
    full = ImageBuffer(_marked_image(400, 200))
    session = _session_for(full)
    session.set_slider_value(EditOption.ROTATION, 12.0)

    result = render_final_image(session, full, FilterPipeline())

    assert result is not None
    width, height = result.image.size
    assert abs(width - height) <= 1
    assert result.image.getpixel((width // 2, height // 2)) == pytest.approx((255, 0, 0), abs=40)


def test_oriented_source_matches_upright_render() -> None:
    upright = _marked_image(400, 200)
    upright.paste((0, 0, 255), (0, 0, 60, 60))
    # Store the pixels turned so that the RIGHT orientation brings them back.
    stored = upright.transpose(Image.Transpose.ROTATE_90)
    full = ImageBuffer(stored, ImageOrientation.RIGHT)
    assert full.size == Size2(400.0, 200.0)

    session = _session_for(full)
    session.end_zoom_gesture(1.5)
    session.end_pan_gesture(Vector2(120.0, 40.0))

    result = render_final_image(session, full, FilterPipeline())
    reference = render_final_image(session, ImageBuffer(upright), FilterPipeline())

    assert result is not None and reference is not None
    oriented = np.asarray(result.oriented(), dtype=np.int16)
    expected = np.asarray(reference.oriented(), dtype=np.int16)
    assert oriented.shape == expected.shape
    assert np.abs(oriented - expected).max() <= 1


def test_unlaid_out_session_renders_nothing() -> None:
    full = ImageBuffer(_marked_image(40, 20))
    session = EditSession(Size2(40.0, 20.0), FrameShape.SQUARE)

    assert render_final_image(session, full, FilterPipeline()) is None


def test_filter_thumbnails_use_cropped_preview_without_colour() -> None:
    full = ImageBuffer(_marked_image(400, 200))
    preview = make_preview(full, max_size=200)
    session = EditSession(preview.size, FrameShape.SQUARE)
    session.set_layout(Size2(300.0, 300.0))
    session.set_percent(EditOption.BRIGHTNESS, 1.0)
    pipeline = FilterPipeline(
        {"invert": FilterCapability("Invert", lambda image: ImageOps.invert(image.convert("RGB")))}
    )

    source = render_cropped_preview(session, preview, pipeline)

    assert source is not None
    assert source.image.size == (100, 100)
    assert source.image.getpixel((50, 50)) == pytest.approx((255, 0, 0), abs=2)
    thumbnails = pipeline.render_previews(source)
    assert [item.filter_id for item in thumbnails] == [None, "invert"]
    assert thumbnails[1].image.image.size == (100, 100)
    assert thumbnails[1].image.image.getpixel((50, 50)) == pytest.approx((0, 255, 255), abs=2)


def test_cropped_preview_needs_a_layout() -> None:
    preview = ImageBuffer(_marked_image(200, 100))
    session = EditSession(preview.size, FrameShape.SQUARE)

    assert render_cropped_preview(session, preview, FilterPipeline()) is None
