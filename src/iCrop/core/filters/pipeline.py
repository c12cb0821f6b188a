"""Pillow adapter that turns an edit snapshot into pixels."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping

from PIL import Image

from ...errors import FilterUnavailableError
from ..attributes import ColorParameters
from ..crop_resolver import CropRect
from ..image_buffer import ImageBuffer
from .color import adjust_image

_LOGGER = logging.getLogger(__name__)

_ROTATABLE_MODES = frozenset({"RGB", "RGBA", "L", "LA"})


@dataclass(frozen=True)
class FilterCapability:
    """A named, opaque image filter supplied by the host application."""

    name: str
    render: Callable[[Image.Image], Image.Image]


@dataclass(frozen=True)
class FilteredImage:
    """Thumbnail of the preview with one catalog filter applied."""

    filter_id: str | None
    image: ImageBuffer
    name: str


class FilterPipeline:
    """Apply rotation, catalog filters and colour controls to image buffers.

    Parameters
    ----------
    catalog:
        Mapping of filter identifier to :class:`FilterCapability`.  The
        pipeline never looks filters up anywhere else.
    """

    def __init__(self, catalog: Mapping[str, FilterCapability] | None = None) -> None:
        self._catalog: dict[str, FilterCapability] = dict(catalog or {})

    @property
    def catalog(self) -> Mapping[str, FilterCapability]:
        return dict(self._catalog)

    def filter_name(self, filter_id: str | None) -> str:
        if filter_id is None:
            return "Original"
        capability = self._catalog.get(filter_id)
        return capability.name if capability is not None else filter_id

    # ------------------------------------------------------------------
    def apply(
        self,
        buffer: ImageBuffer,
        rotation_radians: float,
        params: ColorParameters | None = None,
        filter_id: str | None = None,
    ) -> ImageBuffer | None:
        """Return *buffer* rotated, filtered and colour-adjusted.

        The rotation is applied to the stored pixels, so the angle is negated
        for mirrored orientations to produce the requested on-screen turn.
        Failures are logged and reported as ``None``.
        """

        try:
            image = self._rotate(buffer, rotation_radians)
            if filter_id is not None:
                image = self._run_filter(filter_id, image)
            if params is not None:
                image = adjust_image(image, params)
        except FilterUnavailableError as exc:
            _LOGGER.warning("Filter pipeline produced no output: %s", exc)
            return None
        except (OSError, ValueError):
            _LOGGER.exception("Failed to render edited image")
            return None
        return ImageBuffer(image, buffer.orientation)

    def crop(self, buffer: ImageBuffer, rect: CropRect) -> ImageBuffer:
        """Return the *rect* region of *buffer*'s stored pixels.

        Raises :class:`~iCrop.errors.OutOfBoundsCropError` when *rect* leaves
        the buffer.
        """

        bounds = buffer.raw_size
        rect.ensure_within(bounds)
        return ImageBuffer(buffer.image.crop(rect.to_box(bounds)), buffer.orientation)

    def render_previews(
        self,
        buffer: ImageBuffer,
        filter_ids: Iterable[str] | None = None,
        *,
        include_original: bool = True,
    ) -> list[FilteredImage]:
        """Render one thumbnail per catalog filter, skipping failed ones."""

        results: list[FilteredImage] = []
        if include_original:
            results.append(FilteredImage(None, buffer, self.filter_name(None)))
        identifiers = list(self._catalog) if filter_ids is None else list(filter_ids)
        for filter_id in identifiers:
            rendered = self.apply(buffer, 0.0, None, filter_id)
            if rendered is None:
                continue
            results.append(FilteredImage(filter_id, rendered, self.filter_name(filter_id)))
        return results

    # ------------------------------------------------------------------
    @staticmethod
    def _rotate(buffer: ImageBuffer, rotation_radians: float) -> Image.Image:
        image = buffer.image
        degrees = math.degrees(rotation_radians)
        if buffer.orientation.is_mirrored:
            degrees = -degrees
        if degrees == 0.0:
            return image.copy()
        if image.mode not in _ROTATABLE_MODES:
            image = image.convert("RGBA")
        return image.rotate(degrees, resample=Image.Resampling.BICUBIC, expand=True)

    def _run_filter(self, filter_id: str, image: Image.Image) -> Image.Image:
        capability = self._catalog.get(filter_id)
        if capability is None:
            raise FilterUnavailableError(f"Unknown filter: {filter_id}")
        try:
            result = capability.render(image)
        except Exception as exc:
            raise FilterUnavailableError(f"Filter {filter_id!r} failed: {exc}") from exc
        if not isinstance(result, Image.Image):
            raise FilterUnavailableError(f"Filter {filter_id!r} returned no image")
        return result


__all__ = ["FilterCapability", "FilterPipeline", "FilteredImage"]
