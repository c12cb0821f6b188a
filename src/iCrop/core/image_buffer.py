"""Opaque image handle passed between the engine and the filter pipeline."""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image

from .geometry import Size2
from .orientation import EXIF_ORIENTATION_TAG, ImageOrientation


@dataclass(frozen=True)
class ImageBuffer:
    """A Pillow image in stored (not orientation-corrected) pixel order.

    ``size`` reports the *display* size, i.e. the size after the EXIF
    orientation is honoured, while ``raw_size`` is the size of the stored
    buffer.  The two differ for the four transposed orientations.
    """

    image: Image.Image
    orientation: ImageOrientation = ImageOrientation.UP

    @classmethod
    def from_pil(cls, image: Image.Image) -> ImageBuffer:
        """Wrap *image*, reading its EXIF orientation tag when present."""

        orientation = ImageOrientation.from_exif(
            image.getexif().get(EXIF_ORIENTATION_TAG, ImageOrientation.UP)
        )
        return cls(image, orientation)

    @property
    def raw_size(self) -> Size2:
        width, height = self.image.size
        return Size2(float(width), float(height))

    @property
    def size(self) -> Size2:
        raw = self.raw_size
        return raw.transposed() if self.orientation.is_transposed else raw

    def oriented(self) -> Image.Image:
        """Return a copy of the pixels rotated/mirrored into display order."""

        transpose = self.orientation.upright_transpose
        if transpose is None:
            return self.image.copy()
        return self.image.transpose(transpose)

    def upright(self) -> ImageBuffer:
        """Return a buffer whose stored pixels already match the display."""

        return ImageBuffer(self.oriented(), ImageOrientation.UP)
