"""Adjustable edit options and their percent ↔ engineering-unit mapping.

Percents in ``[0, 1]`` are what the editor persists; the filter pipeline works
in engineering units.  :meth:`EditOption.calculated_value` is the only place the
two are translated, so the formula must stay exactly as written: changing the
order of operations would shift values that are already stored.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping

_RANGES: Mapping[str, tuple[float, float]] = {
    # Rotation is kept in hundredths of a degree so the final unit is degrees.
    "rotation": (-180.0 * 100, 180.0 * 100),
    "brightness": (-10.0, 10.0),
    "contrast": (50.0, 150.0),
    "saturation": (-100.0, 300.0),
    "warmth": ((6500 - 4500) * 100.0, (6500 + 4500) * 100.0),
    "sharpen": ((0.4 - 1.0) * 100, (0.4 + 1.0) * 100),
}

NEUTRAL_PERCENT = 0.5


class EditOption(Enum):
    """Colour and geometry adjustments exposed by the editor."""

    ROTATION = "rotation"
    BRIGHTNESS = "brightness"
    CONTRAST = "contrast"
    SATURATION = "saturation"
    WARMTH = "warmth"
    SHARPEN = "sharpen"

    @property
    def label(self) -> str:
        """Return the display label shown in the option strip."""

        if self is EditOption.ROTATION:
            return "Adjust"
        return self.value.capitalize()

    @property
    def min_value(self) -> float:
        return _RANGES[self.value][0]

    @property
    def max_value(self) -> float:
        return _RANGES[self.value][1]

    def calculated_value(self, percent: float) -> float:
        """Return the engineering value for *percent*."""

        return (percent * (self.max_value - self.min_value) + self.min_value) / 100

    def percent_for_value(self, value: float) -> float:
        """Return the percent whose :meth:`calculated_value` is *value*."""

        return (value * 100 - self.min_value) / (self.max_value - self.min_value)

    @property
    def neutral_value(self) -> float:
        return self.calculated_value(NEUTRAL_PERCENT)

    # ------------------------------------------------------------------
    # Slider mapping
    # ------------------------------------------------------------------
    @property
    def slider_span(self) -> float:
        """Return the width of the slider range centred on zero."""

        return 360.0 if self is EditOption.ROTATION else 200.0

    @property
    def slider_range(self) -> tuple[float, float]:
        half = self.slider_span / 2.0
        return (-half, half)

    def percent_from_slider(self, value: float) -> float:
        """Map a slider position (``-180..180`` or ``-100..100``) to a percent."""

        half = self.slider_span / 2.0
        return (value + half) / self.slider_span

    def slider_value(self, percent: float) -> float:
        """Map *percent* back to the signed slider position."""

        return (percent - NEUTRAL_PERCENT) * self.slider_span
