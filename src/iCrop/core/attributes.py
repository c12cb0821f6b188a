"""Edit state snapshots and the persisted editor parameters record."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields, replace
from typing import TYPE_CHECKING, Any, Mapping

from ..config import ZOOM_ROUND_DIGITS
from .edit_option import NEUTRAL_PERCENT, EditOption
from .geometry import Vector2

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from .image_buffer import ImageBuffer

_PERCENT_FIELDS: Mapping[EditOption, str] = {
    EditOption.ROTATION: "rotation_percent",
    EditOption.BRIGHTNESS: "brightness_percent",
    EditOption.CONTRAST: "contrast_percent",
    EditOption.SATURATION: "saturation_percent",
    EditOption.SHARPEN: "sharpen_percent",
    EditOption.WARMTH: "warmth_percent",
}


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


def _float_or_default(value: object | None, default: float) -> float:
    """Return ``value`` converted to ``float`` or ``default`` when conversion fails."""

    try:
        numeric = float(value) if value is not None else float(default)
    except (TypeError, ValueError):
        return float(default)
    return numeric if math.isfinite(numeric) else float(default)


def round_zoom(zoom_scale: float) -> float:
    """Return *zoom_scale* rounded to the precision used for change detection."""

    factor = 10**ZOOM_ROUND_DIGITS
    return round(zoom_scale * factor) / factor


@dataclass(frozen=True)
class EditAttributes:
    """Immutable snapshot of every user edit.

    ``pan_offset`` is expressed in preview-image pixels before zoom and before
    rotation, ``zoom_scale`` multiplies the scale that makes the image fill the
    frame.  Comparing a snapshot with ``EditAttributes()`` tells whether any
    edit has been made.
    """

    applied_filter_id: str | None = None
    pan_offset: Vector2 = field(default_factory=Vector2)
    zoom_scale: float = 1.0
    rotation_percent: float = NEUTRAL_PERCENT
    brightness_percent: float = NEUTRAL_PERCENT
    contrast_percent: float = NEUTRAL_PERCENT
    saturation_percent: float = NEUTRAL_PERCENT
    sharpen_percent: float = NEUTRAL_PERCENT
    warmth_percent: float = NEUTRAL_PERCENT

    @property
    def is_default(self) -> bool:
        return self == EditAttributes()

    @property
    def has_default_geometry(self) -> bool:
        """Return ``True`` when pan and zoom were never committed."""

        return self.pan_offset == Vector2() and self.zoom_scale == 1.0

    def percent(self, option: EditOption) -> float:
        return float(getattr(self, _PERCENT_FIELDS[option]))

    def with_percent(self, option: EditOption, percent: float) -> EditAttributes:
        return replace(self, **{_PERCENT_FIELDS[option]: _clamp01(percent)})

    def with_rounded_zoom(self) -> EditAttributes:
        return replace(self, zoom_scale=round_zoom(self.zoom_scale))

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping of the snapshot."""

        payload: dict[str, Any] = {
            "applied_filter_id": self.applied_filter_id,
            "pan_offset": [self.pan_offset.x, self.pan_offset.y],
            "zoom_scale": self.zoom_scale,
        }
        for name in _PERCENT_FIELDS.values():
            payload[name] = getattr(self, name)
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EditAttributes:
        """Rebuild a snapshot from :meth:`to_dict` output.

        Missing keys fall back to their defaults, percents are clamped into
        ``[0, 1]`` and an unusable zoom resets to ``1``.
        """

        filter_id = data.get("applied_filter_id")
        pan = data.get("pan_offset") or (0.0, 0.0)
        try:
            pan_x, pan_y = pan
        except (TypeError, ValueError):
            pan_x, pan_y = 0.0, 0.0
        zoom = _float_or_default(data.get("zoom_scale"), 1.0)
        if zoom <= 0.0:
            zoom = 1.0

        percents = {
            name: _clamp01(_float_or_default(data.get(name), NEUTRAL_PERCENT))
            for name in _PERCENT_FIELDS.values()
        }
        return cls(
            applied_filter_id=str(filter_id) if filter_id is not None else None,
            pan_offset=Vector2(_float_or_default(pan_x, 0.0), _float_or_default(pan_y, 0.0)),
            zoom_scale=zoom,
            **percents,
        )


@dataclass(frozen=True)
class ColorParameters:
    """Engineering-unit adjustments handed to the filter pipeline."""

    brightness: float = EditOption.BRIGHTNESS.neutral_value
    contrast: float = EditOption.CONTRAST.neutral_value
    saturation: float = EditOption.SATURATION.neutral_value
    warmth: float = EditOption.WARMTH.neutral_value
    sharpen: float = EditOption.SHARPEN.neutral_value

    @classmethod
    def from_attributes(cls, attributes: EditAttributes) -> ColorParameters:
        return cls(
            brightness=EditOption.BRIGHTNESS.calculated_value(attributes.brightness_percent),
            contrast=EditOption.CONTRAST.calculated_value(attributes.contrast_percent),
            saturation=EditOption.SATURATION.calculated_value(attributes.saturation_percent),
            warmth=EditOption.WARMTH.calculated_value(attributes.warmth_percent),
            sharpen=EditOption.SHARPEN.calculated_value(attributes.sharpen_percent),
        )

    def is_neutral(self) -> bool:
        return all(
            getattr(self, item.name) == item.default for item in fields(self)
        )


@dataclass(frozen=True)
class EditorParameters:
    """Record persisted by the host application between editing sessions."""

    full_original_image: ImageBuffer | None = None
    attributes: EditAttributes = field(default_factory=EditAttributes)
