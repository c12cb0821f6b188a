"""NumPy implementations of the colour controls.

Every helper operates on a ``float32`` array of shape ``(height, width, 3)``
holding RGB values normalised to ``[0, 1]``.  Alpha is never touched here; the
pipeline splits it off before calling in and re-attaches it afterwards.
"""

from __future__ import annotations

import math

import numpy as np
from PIL import Image, ImageFilter

from ...config import NEUTRAL_WHITE_POINT_K
from ..attributes import ColorParameters

_REC709_LUMA = np.array([0.2126, 0.7152, 0.0722], dtype=np.float32)

NEUTRAL_SHARPNESS = 0.4
"""Sharpness value at which the image is left untouched."""


def _np_luma(rgb: np.ndarray) -> np.ndarray:
    """Return the Rec.709 luma plane of *rgb* with a trailing axis."""

    return (rgb @ _REC709_LUMA)[..., None]


def apply_brightness(rgb: np.ndarray, brightness: float) -> np.ndarray:
    if brightness == 0.0:
        return rgb
    return rgb + np.float32(brightness)


def apply_contrast(rgb: np.ndarray, contrast: float) -> np.ndarray:
    """Scale every channel away from (or towards) mid grey."""

    if contrast == 1.0:
        return rgb
    return (rgb - 0.5) * np.float32(contrast) + 0.5


def apply_saturation(rgb: np.ndarray, saturation: float) -> np.ndarray:
    """Mix *rgb* with its luma; ``0`` is greyscale and ``1`` the identity."""

    if saturation == 1.0:
        return rgb
    luma = _np_luma(rgb)
    return luma + (rgb - luma) * np.float32(saturation)


def _kelvin_to_rgb(kelvin: float) -> tuple[float, float, float]:
    """Approximate the normalised RGB colour of a black body at *kelvin*.

    Uses Tanner Helland's curve fit, which is accurate to a few percent
    between 1000 K and 40000 K.
    """

    temp = max(1000.0, min(40000.0, kelvin)) / 100.0
    if temp <= 66.0:
        red = 255.0
        green = 99.4708025861 * math.log(temp) - 161.1195681661
        if temp <= 19.0:
            blue = 0.0
        else:
            blue = 138.5177312231 * math.log(temp - 10.0) - 305.0447927307
    else:
        red = 329.698727446 * math.pow(temp - 60.0, -0.1332047592)
        green = 288.1221695283 * math.pow(temp - 60.0, -0.0755148492)
        blue = 255.0

    def _unit(value: float) -> float:
        return max(1.0, min(255.0, value)) / 255.0

    return _unit(red), _unit(green), _unit(blue)


def white_balance_gains(neutral_kelvin: float) -> np.ndarray:
    """Return per-channel gains that map *neutral_kelvin* onto 6500 K.

    A neutral above 6500 K means the scene is treated as lit by a cooler
    source, so the correction pushes the image towards warmer tones.  The
    green gain is pinned to one to keep overall brightness stable.
    """

    source = np.array(_kelvin_to_rgb(neutral_kelvin), dtype=np.float32)
    target = np.array(_kelvin_to_rgb(NEUTRAL_WHITE_POINT_K), dtype=np.float32)
    gains = target / source
    return gains / gains[1]


def apply_warmth(rgb: np.ndarray, kelvin: float) -> np.ndarray:
    if math.isclose(kelvin, NEUTRAL_WHITE_POINT_K):
        return rgb
    return rgb * white_balance_gains(kelvin)


def apply_color_controls(rgb: np.ndarray, params: ColorParameters) -> np.ndarray:
    """Apply brightness, contrast, saturation and warmth in that order."""

    result = rgb.astype(np.float32, copy=True)
    result = apply_brightness(result, params.brightness)
    result = apply_contrast(result, params.contrast)
    result = apply_saturation(result, params.saturation)
    result = apply_warmth(result, params.warmth)
    return np.clip(result, 0.0, 1.0)


def apply_sharpness(image: Image.Image, sharpness: float) -> Image.Image:
    """Sharpen above the neutral value and soften below it."""

    delta = float(sharpness) - NEUTRAL_SHARPNESS
    if abs(delta) < 1e-6:
        return image
    if delta > 0.0:
        percent = int(round(delta * 150.0))
        if percent <= 0:
            return image
        return image.filter(ImageFilter.UnsharpMask(radius=2, percent=percent, threshold=0))
    return image.filter(ImageFilter.GaussianBlur(radius=-delta * 2.5))


def adjust_image(image: Image.Image, params: ColorParameters) -> Image.Image:
    """Return a copy of *image* with every colour control of *params* applied."""

    if params.is_neutral():
        return image.copy()

    has_alpha = image.mode in ("RGBA", "LA") or "transparency" in image.info
    working = image.convert("RGBA" if has_alpha else "RGB")
    array = np.asarray(working, dtype=np.float32) / 255.0
    rgb = apply_color_controls(array[..., :3], params)
    if has_alpha:
        rgb = np.concatenate([rgb, array[..., 3:4]], axis=-1)
    pixels = np.rint(rgb * 255.0).astype(np.uint8)
    adjusted = Image.fromarray(pixels)
    return apply_sharpness(adjusted, params.sharpen)


__all__ = [
    "NEUTRAL_SHARPNESS",
    "adjust_image",
    "apply_brightness",
    "apply_color_controls",
    "apply_contrast",
    "apply_saturation",
    "apply_sharpness",
    "apply_warmth",
    "white_balance_gains",
]
