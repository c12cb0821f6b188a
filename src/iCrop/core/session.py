"""Interactive edit session state.

The session keeps two explicit layers: the committed :class:`EditAttributes`
snapshot and the in-flight :class:`GestureDelta` of a drag or pinch that has
not been released yet.  The two are only combined when the view geometry is
read, so every alignment call works on an immutable snapshot.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace

from .alignment import (
    AlignmentOffsets,
    ViewGeometry,
    align_by_panning,
    align_by_zooming,
    alignment_offsets,
    fill_to_frame,
    screen_angle,
)
from .attributes import ColorParameters, EditAttributes, EditorParameters
from .crop_resolver import CropRect, resolve_crop
from .edit_option import EditOption
from .frame import FrameShape
from .geometry import EMPTY_SIZE, Size2, Vector2, rotate
from .image_buffer import ImageBuffer
from .orientation import ImageOrientation

_LOGGER = logging.getLogger(__name__)


def rotated_bounds(size: Size2, radians: float) -> Size2:
    """Return the bounding box of *size* after rotating it by *radians*."""

    cos_t = abs(math.cos(radians))
    sin_t = abs(math.sin(radians))
    return Size2(
        size.width * cos_t + size.height * sin_t,
        size.width * sin_t + size.height * cos_t,
    )


@dataclass(frozen=True)
class GestureDelta:
    """Transient pan/zoom of a gesture that has not ended yet."""

    pan_offset: Vector2 = field(default_factory=Vector2)
    zoom_scale: float = 1.0

    @property
    def is_identity(self) -> bool:
        return self.pan_offset == Vector2() and self.zoom_scale == 1.0


class EditSession:
    """Working copy of the edits made while the editor is open."""

    def __init__(
        self,
        preview_size: Size2,
        frame_shape: FrameShape = FrameShape.ORIGINAL,
        attributes: EditAttributes | None = None,
    ) -> None:
        self._preview_size = preview_size
        self._frame_shape = frame_shape
        self._canvas_size = EMPTY_SIZE
        self._frame_size = EMPTY_SIZE
        self._loaded = attributes if attributes is not None else EditAttributes()
        self._attributes = self._loaded
        self._gesture = GestureDelta()
        self._option_baseline: tuple[EditOption, EditAttributes] | None = None
        self._version = 0

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------
    @property
    def attributes(self) -> EditAttributes:
        """Return the committed snapshot (without any gesture in flight)."""

        return self._attributes

    @property
    def version(self) -> int:
        """Monotonic counter bumped on every committed change."""

        return self._version

    def _commit(self, attributes: EditAttributes) -> None:
        if attributes != self._attributes:
            self._attributes = attributes
            self._version += 1

    def load_attributes(self, attributes: EditAttributes) -> None:
        """Replace the session state with *attributes* and treat them as saved."""

        self._loaded = attributes
        self._gesture = GestureDelta()
        self._option_baseline = None
        self._commit(attributes)

    def output_attributes(self) -> EditAttributes:
        """Return the committed snapshot with the zoom rounded for comparison."""

        return self._attributes.with_rounded_zoom()

    def output_parameters(self, full_image: ImageBuffer | None = None) -> EditorParameters:
        return EditorParameters(full_original_image=full_image, attributes=self.output_attributes())

    @property
    def changes_were_made(self) -> bool:
        """Return ``True`` when the output differs from an unedited photo."""

        return not self.output_attributes().is_default

    @property
    def has_unsaved_changes(self) -> bool:
        """Return ``True`` when the output differs from the loaded snapshot."""

        return self.output_attributes() != self._loaded.with_rounded_zoom()

    def revert(self) -> None:
        """Discard every change made since the attributes were loaded."""

        self._gesture = GestureDelta()
        self._option_baseline = None
        self._commit(self._loaded)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    @property
    def preview_size(self) -> Size2:
        return self._preview_size

    @property
    def frame_shape(self) -> FrameShape:
        return self._frame_shape

    @property
    def frame_size(self) -> Size2:
        return self._frame_size

    def set_layout(self, canvas_size: Size2) -> bool:
        """Lay the frame out inside *canvas_size*.

        Returns ``True`` when the frame size changed.  A new frame fills itself
        with the image unless the loaded snapshot carried its own pan/zoom.
        """

        self._canvas_size = canvas_size
        frame_size = self._frame_shape.frame_size(self._preview_size, canvas_size)
        if frame_size == self._frame_size:
            return False
        self._frame_size = frame_size
        if frame_size.is_empty:
            return True
        if self._loaded.has_default_geometry:
            self.zoom_to_fill_frame()
        return True

    def set_preview_size(self, preview_size: Size2) -> None:
        """Swap in a new preview image size (e.g. after the thumbnail loaded)."""

        self._preview_size = preview_size
        self._frame_size = EMPTY_SIZE
        self.set_layout(self._canvas_size)

    @property
    def initial_zoom_scale(self) -> float:
        """Return the scale at which the preview exactly fills the frame."""

        if self._preview_size.is_empty or self._frame_size.is_empty:
            return 1.0
        return self._frame_size.max_ratio(self._preview_size)

    @property
    def rotation_degrees(self) -> float:
        return EditOption.ROTATION.calculated_value(self._attributes.rotation_percent)

    @property
    def rotation_radians(self) -> float:
        return math.radians(self.rotation_degrees)

    @property
    def zoom_scale(self) -> float:
        """Return the total screen scale applied to the preview."""

        return self.initial_zoom_scale * self._attributes.zoom_scale * self._gesture.zoom_scale

    @property
    def pan_offset(self) -> Vector2:
        """Return the image-local pan including any gesture in flight."""

        return self._attributes.pan_offset + self._gesture.pan_offset

    @property
    def display_pan_offset(self) -> Vector2:
        """Return the on-screen offset of the image centre from the frame centre."""

        return self.view_geometry().display_center

    def view_geometry(self) -> ViewGeometry:
        return ViewGeometry(
            frame_size=self._frame_size,
            image_size=self._preview_size,
            rotation_radians=self.rotation_radians,
            zoom_scale=self.zoom_scale,
            pan_offset=self.pan_offset,
        )

    def _committed_geometry(self) -> ViewGeometry:
        return ViewGeometry(
            frame_size=self._frame_size,
            image_size=self._preview_size,
            rotation_radians=self.rotation_radians,
            zoom_scale=self.initial_zoom_scale * self._attributes.zoom_scale,
            pan_offset=self._attributes.pan_offset,
        )

    def alignment_offsets(self) -> AlignmentOffsets | None:
        return alignment_offsets(self.view_geometry())

    # ------------------------------------------------------------------
    # Alignment
    # ------------------------------------------------------------------
    def _apply_pan_zoom(self, pan_offset: Vector2, zoom_multiplier: float) -> None:
        zoom = self._attributes.zoom_scale * zoom_multiplier
        if not math.isfinite(zoom) or zoom <= 0.0 or not pan_offset.is_finite():
            _LOGGER.warning("Discarded non-finite alignment result (pan=%s, zoom=%s)", pan_offset, zoom)
            return
        self._commit(replace(self._attributes, pan_offset=pan_offset, zoom_scale=zoom))

    def zoom_to_fill_frame(self) -> None:
        """Centre the image and scale it to exactly cover the frame."""

        view = self._committed_geometry()
        if view.is_degenerate:
            return
        pan, multiplier = fill_to_frame(view)
        self._apply_pan_zoom(pan, multiplier)

    def align_by_zooming(self) -> None:
        view = self._committed_geometry()
        if view.is_degenerate:
            return
        pan, multiplier = align_by_zooming(view)
        self._apply_pan_zoom(pan, multiplier)

    def align_by_panning(self) -> None:
        view = self._committed_geometry()
        if view.is_degenerate:
            return
        self._apply_pan_zoom(align_by_panning(view), 1.0)

    # ------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------
    def _screen_to_pan(self, translation: Vector2) -> Vector2:
        zoom = self.zoom_scale
        if zoom <= 0.0 or not math.isfinite(zoom):
            return Vector2()
        return rotate(translation, -screen_angle(self.rotation_radians)) / zoom

    def update_pan_gesture(self, translation: Vector2) -> None:
        """Track a drag that moved *translation* screen points so far."""

        if not translation.is_finite():
            return
        self._gesture = replace(self._gesture, pan_offset=self._screen_to_pan(translation))

    def end_pan_gesture(self, translation: Vector2) -> None:
        """Commit a finished drag and pull the image back over the frame."""

        self._gesture = replace(self._gesture, pan_offset=Vector2())
        if not translation.is_finite():
            _LOGGER.warning("Ignoring non-finite pan translation %s", translation)
            return
        delta = self._screen_to_pan(translation)
        self._commit(replace(self._attributes, pan_offset=self._attributes.pan_offset + delta))
        self.align_by_panning()

    def update_zoom_gesture(self, scale: float) -> None:
        """Track a pinch whose current magnification is *scale*."""

        if math.isfinite(scale) and scale > 0.0:
            self._gesture = replace(self._gesture, zoom_scale=scale)

    def end_zoom_gesture(self, scale: float) -> None:
        """Commit a finished pinch and zoom back in if the frame is uncovered."""

        self._gesture = replace(self._gesture, zoom_scale=1.0)
        if math.isfinite(scale) and scale > 0.0:
            self._commit(replace(self._attributes, zoom_scale=self._attributes.zoom_scale * scale))
        self.align_by_zooming()

    def double_tap(self) -> None:
        self.zoom_to_fill_frame()

    def cancel_gestures(self) -> None:
        self._gesture = GestureDelta()

    @property
    def gesture(self) -> GestureDelta:
        return self._gesture

    # ------------------------------------------------------------------
    # Options and filters
    # ------------------------------------------------------------------
    def set_percent(self, option: EditOption, percent: float) -> None:
        """Set *option* and keep the frame covered when the rotation changes."""

        self._commit(self._attributes.with_percent(option, percent))
        if option is EditOption.ROTATION:
            self.align_by_zooming()

    def set_slider_value(self, option: EditOption, value: float) -> None:
        self.set_percent(option, option.percent_from_slider(value))

    def percent(self, option: EditOption) -> float:
        return self._attributes.percent(option)

    def begin_option_edit(self, option: EditOption) -> None:
        """Remember the state to restore if editing *option* is cancelled."""

        self._option_baseline = (option, self._attributes)

    def cancel_option_edit(self) -> None:
        if self._option_baseline is None:
            return
        option, baseline = self._option_baseline
        self._option_baseline = None
        restored = self._attributes.with_percent(option, baseline.percent(option))
        if option is EditOption.ROTATION:
            restored = replace(
                restored,
                pan_offset=baseline.pan_offset,
                zoom_scale=baseline.zoom_scale,
            )
        self._commit(restored)

    def commit_option_edit(self) -> bool:
        """Finish editing the current option.

        Returns ``True`` when the filter previews have to be regenerated
        because the rotation (and therefore the preview crop) changed.
        """

        if self._option_baseline is None:
            return False
        option, baseline = self._option_baseline
        self._option_baseline = None
        return option is EditOption.ROTATION and baseline.percent(option) != self.percent(option)

    def select_filter(self, filter_id: str | None) -> None:
        self._commit(replace(self._attributes, applied_filter_id=filter_id))

    def color_parameters(self) -> ColorParameters:
        return ColorParameters.from_attributes(self._attributes)

    # ------------------------------------------------------------------
    # Cropping
    # ------------------------------------------------------------------
    def crop_rect(
        self,
        full_size: Size2,
        orientation: ImageOrientation = ImageOrientation.UP,
        rotated_size: Size2 | None = None,
    ) -> CropRect | None:
        """Return the final crop for a full-resolution image.

        *full_size* is the display-oriented size of the original.
        *rotated_size* is the display-oriented size of the same image after
        the edit rotation was applied; it defaults to the bounding box of the
        rotated rectangle, but callers holding the rotated buffer should pass
        its real size.
        """

        if rotated_size is None:
            rotated_size = rotated_bounds(full_size, self.rotation_radians)
        return resolve_crop(
            rotated_size=rotated_size,
            orientation=orientation,
            full_width=full_size.width,
            preview_width=self._preview_size.width,
            frame_size=self._frame_size,
            initial_zoom_scale=self.initial_zoom_scale,
            zoom_scale=self._attributes.zoom_scale,
            pan_offset=self._attributes.pan_offset,
            rotation_radians=self.rotation_radians,
        )
