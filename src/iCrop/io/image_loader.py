"""Helpers for loading photos into :class:`ImageBuffer` objects with Pillow."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PIL import Image

from ..config import DEFAULT_THUMBNAIL_MAX_SIZE
from ..core.image_buffer import ImageBuffer
from ..core.orientation import ImageOrientation

_LOGGER = logging.getLogger(__name__)


def load_full_image(source: Path) -> Optional[ImageBuffer]:
    """Return the full-resolution pixels of *source* in stored order.

    The EXIF orientation is recorded on the buffer rather than applied, so the
    crop resolver can address the stored pixels directly.
    """

    try:
        with Image.open(source) as img:
            img.load()
            buffer = ImageBuffer.from_pil(img)
            # ``copy`` detaches the pixels from the file handle closed below.
            return ImageBuffer(buffer.image.copy(), buffer.orientation)
    except OSError:
        _LOGGER.exception("Pillow failed to load image from %s", source)
        return None


def make_preview(
    buffer: ImageBuffer,
    max_size: int = DEFAULT_THUMBNAIL_MAX_SIZE,
) -> ImageBuffer:
    """Return an upright copy of *buffer* no larger than *max_size* pixels.

    The preview is what the user interacts with; it is always returned with
    :attr:`ImageOrientation.UP` because its pixels are already upright.
    """

    image = buffer.oriented()
    if max_size > 0 and max(image.size) > max_size:
        image.thumbnail((max_size, max_size), Image.Resampling.LANCZOS)
    return ImageBuffer(image, ImageOrientation.UP)


def save_image(buffer: ImageBuffer, target: Path, *, quality: int = 95) -> None:
    """Write *buffer* to *target* with its orientation applied to the pixels."""

    image = buffer.oriented()
    suffix = target.suffix.lower()
    if suffix in (".jpg", ".jpeg"):
        if image.mode != "RGB":
            image = image.convert("RGB")
        image.save(target, quality=quality)
    else:
        image.save(target)
    _LOGGER.debug("Saved %dx%d image to %s", image.width, image.height, target)


__all__ = ["load_full_image", "make_preview", "save_image"]
