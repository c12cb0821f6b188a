"""Produce the final full-resolution image for a finished edit session."""

from __future__ import annotations

import logging

from .filters import FilterPipeline
from .image_buffer import ImageBuffer
from .session import EditSession

_LOGGER = logging.getLogger(__name__)


def render_final_image(
    session: EditSession,
    full_image: ImageBuffer,
    pipeline: FilterPipeline,
) -> ImageBuffer | None:
    """Rotate, filter and crop *full_image* so it matches the on-screen frame.

    Returns ``None`` when the session has not been laid out yet or the
    pipeline could not render.  Raises
    :class:`~iCrop.errors.OutOfBoundsCropError` when the resolved crop leaves
    the rotated buffer.
    """

    attributes = session.attributes
    rotated = pipeline.apply(
        full_image,
        session.rotation_radians,
        session.color_parameters(),
        attributes.applied_filter_id,
    )
    if rotated is None:
        return None

    rect = session.crop_rect(full_image.size, full_image.orientation, rotated.size)
    if rect is None:
        _LOGGER.debug("Skipping final render: layout is degenerate")
        return None
    _LOGGER.debug("Cropping %s from rotated buffer %s", rect, rotated.raw_size)
    return pipeline.crop(rotated, rect)


def render_cropped_preview(
    session: EditSession,
    preview: ImageBuffer,
    pipeline: FilterPipeline,
) -> ImageBuffer | None:
    """Return *preview* rotated and cropped to the frame, without colour or filter.

    The result is the source for :meth:`FilterPipeline.render_previews`, so the
    filter thumbnails show exactly what the frame shows.  Returns ``None``
    under the same conditions as :func:`render_final_image`.
    """

    rotated = pipeline.apply(preview, session.rotation_radians)
    if rotated is None:
        return None

    rect = session.crop_rect(preview.size, preview.orientation, rotated.size)
    if rect is None:
        _LOGGER.debug("Skipping preview crop: layout is degenerate")
        return None
    return pipeline.crop(rotated, rect)


__all__ = ["render_cropped_preview", "render_final_image"]
