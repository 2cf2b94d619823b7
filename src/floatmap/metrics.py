"""
Error metrics between two float maps of the same size.

Gray and color images can be compared with each other: the gray sample is
broadcast to the three color channels.
"""

import logging
import math
from decimal import Decimal, localcontext
from typing import Tuple

import numpy as np

from .core import DEFAULT_MSE_PRECISION, DimensionMismatch
from .image import FloatMapImage

logger = logging.getLogger(__name__)


def _check_dimensions(image1: FloatMapImage, image2: FloatMapImage):
    if image1.width != image2.width or image1.height != image2.height:
        raise DimensionMismatch(
            f"the images do not have matching size: "
            f"{image1.width}x{image1.height} vs {image2.width}x{image2.height}"
        )


def _paired_samples(image1: FloatMapImage, image2: FloatMapImage) -> Tuple[np.ndarray, np.ndarray]:
    """Flat sample arrays of equal length, gray broadcast when modes differ."""
    if image1.gray == image2.gray:
        return image1.samples, image2.samples
    return image1.to_rgb().ravel(), image2.to_rgb().ravel()


def mse(image1: FloatMapImage, image2: FloatMapImage,
        precision: int = DEFAULT_MSE_PRECISION) -> float:
    """
    Mean squared error between two images.

    Squared sample differences are summed in a Decimal context with the given
    number of significant digits so that many tiny terms of near-identical
    images do not vanish. The sum is divided by the pixel count, not the
    sample count.

    Pairs holding the same value, including the same infinity or two NaNs,
    contribute nothing, so an image compared with itself always scores 0.
    Any other pair involving NaN makes the result NaN, any other pair
    involving an infinity makes it inf.

    Raises:
        DimensionMismatch: when width or height differ
    """
    _check_dimensions(image1, image2)
    s1, s2 = _paired_samples(image1, image2)

    with localcontext() as ctx:
        ctx.prec = precision
        total = Decimal(0)
        for a, b in zip(s1.tolist(), s2.tolist()):
            if a == b or (a != a and b != b):
                continue
            d = Decimal(a) - Decimal(b)
            total += d * d
        result = total / image1.resolution

    return float(result)


def mse_to_psnr(err: float, peak: float = 1.0) -> float:
    if err == 0.0:
        return float('inf')
    if math.isinf(err):
        return float('-inf')
    return 10.0 * math.log10(peak * peak / err)


def psnr(image1: FloatMapImage, image2: FloatMapImage, peak: float = 1.0,
         precision: int = DEFAULT_MSE_PRECISION) -> float:
    """Peak signal to noise ratio in dB, inf for identical images"""
    return mse_to_psnr(mse(image1, image2, precision), peak)


def difference(image1: FloatMapImage, image2: FloatMapImage, scale: float = 1) -> FloatMapImage:
    """
    Color image of scale * |c1 - c2| per channel per pixel.

    The result is always a color image, whatever the channel modes of the
    inputs.

    Raises:
        DimensionMismatch: when width or height differ
    """
    _check_dimensions(image1, image2)
    diff = np.abs(image1.to_rgb() - image2.to_rgb()) * np.float32(scale)
    logger.debug(f"Difference of {image1!r} and {image2!r}, max {float(diff.max())}")
    return FloatMapImage(image1.width, image1.height, diff)
