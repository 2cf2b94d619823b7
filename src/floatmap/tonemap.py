"""
Tone mapping of float maps to 8-bit RGBA rasters.

Both modes flip the image vertically (float maps store rows bottom to top,
rasters are top to bottom), replicate gray samples into r, g, b and set
alpha to 255. NaN never survives a clamp: it maps to 0.
"""

import logging

import numpy as np

from .core import DEFAULT_DEGENERATE_VALUE
from .image import FloatMapImage

logger = logging.getLogger(__name__)


def clamp(value: int, lo: int, hi: int) -> int:
    """Clamp value to [lo, hi]"""
    if value < lo:
        return lo
    elif value > hi:
        return hi
    return value


def to_int(f: float, inv_gamma: float) -> int:
    """Gamma correct a single sample into [0, 255]; NaN maps to 0."""
    if f < 0.0:
        return 0
    elif f > 1.0:
        return 255
    with np.errstate(invalid='ignore', divide='ignore', over='ignore'):
        v = np.power(np.float64(f), inv_gamma)
    return clamp(int(_quantize(np.asarray(v))), 0, 255)


def _quantize(values: np.ndarray) -> np.ndarray:
    """Map [0, 1] floats to truncated 0..255; NaN -> 0, negative -> 0, > 1 -> 255."""
    with np.errstate(invalid='ignore', over='ignore'):
        scaled = np.trunc(255.0 * values)
        out = np.clip(np.nan_to_num(scaled, nan=0.0, posinf=255.0, neginf=0.0), 0, 255)
    return out.astype(np.uint8)


def _assemble(channels: np.ndarray, image: FloatMapImage) -> np.ndarray:
    """Build a flipped (H, W, 4) RGBA raster from per-sample 8-bit values."""
    planes = channels.reshape(image.height, image.width, image.channels)
    if image.gray:
        planes = np.repeat(planes, 3, axis=2)
    raster = np.empty((image.height, image.width, 4), dtype=np.uint8)
    raster[..., :3] = planes[::-1]
    raster[..., 3] = 255
    return raster


def to_raster(image: FloatMapImage, gamma: float) -> np.ndarray:
    """
    Convert image to an RGBA raster with per-sample gamma correction.

    Each sample f becomes 0 when f < 0, 255 when f > 1 and
    trunc(255 * f ** (1 / gamma)) otherwise.

    Args:
        image: source float map
        gamma: display gamma, expected to be positive

    Returns:
        (height, width, 4) uint8 array, row 0 being the last stored row
    """
    inv_gamma = 1.0 / gamma
    f = image.samples.astype(np.float64)
    out = np.zeros(f.shape, dtype=np.uint8)
    with np.errstate(invalid='ignore', divide='ignore', over='ignore'):
        inside = (f >= 0.0) & (f <= 1.0)
        out[f > 1.0] = 255
        out[inside] = _quantize(np.power(f[inside], inv_gamma))
    return _assemble(out, image)


def to_scaled_raster(image: FloatMapImage, gamma: float,
                     degenerate_value: float = DEFAULT_DEGENERATE_VALUE) -> np.ndarray:
    """
    Convert image to an RGBA raster after rescaling its samples to [0, 1].

    Samples are first raised to gamma on a working copy; the minimum and
    maximum over every sample of every channel then define the rescale
    (f - min) / (max - min). Non-finite samples take no part in the minimum
    and maximum; +inf maps to 255, -inf and NaN to 0. When all finite samples
    are equal, or none is finite, every finite sample maps to
    degenerate_value. The source image is not modified.
    """
    working = image.samples.astype(np.float32)
    with np.errstate(invalid='ignore', divide='ignore', over='ignore'):
        working = np.power(working, np.float32(gamma), dtype=np.float32)
        valid = working[np.isfinite(working)]
        lo = float(valid.min()) if valid.size else float('nan')
        hi = float(valid.max()) if valid.size else float('nan')

        if not valid.size or hi == lo:
            logger.warning(
                f"Degenerate sample range [{lo}, {hi}] in {image!r}, "
                f"mapping every sample to {degenerate_value}"
            )
            rescaled = np.full(working.shape, degenerate_value, dtype=np.float64)
        else:
            logger.debug(f"Rescaling {image!r} from [{lo}, {hi}]")
            rescaled = (working.astype(np.float64) - lo) / (hi - lo)
        rescaled[working == np.inf] = 1.0
        rescaled[working == -np.inf] = 0.0
        rescaled[np.isnan(working)] = np.nan

    return _assemble(_quantize(rescaled), image)
