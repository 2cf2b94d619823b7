"""In-memory representation of a decoded Portable Float Map image."""

from typing import Tuple

import numpy as np

from .core import ConstructionError


class FloatMapImage:
    """
    Gray or color float image owning an independent float32 copy of its samples.

    When the number of samples equals width * height the image is gray scale,
    when it equals 3 * width * height it is a color image with interleaved
    r, g, b samples. Rows are kept in the order they were supplied, so row 0
    is the first stored row.

    Example:
        >>> image = FloatMapImage(2, 1, [0.0, 1.0])
        >>> image.color_at(1, 0)
        (1.0, 1.0, 1.0)
    """

    def __init__(self, width: int, height: int, samples):
        if width <= 0:
            raise ConstructionError(f"width has to be larger than zero, got {width}")
        if height <= 0:
            raise ConstructionError(f"height has to be larger than zero, got {height}")

        floats = np.array(samples, dtype=np.float32).ravel()
        res = width * height
        if floats.size != res and floats.size != 3 * res:
            raise ConstructionError(
                f"the number of floats must match the resolution of the image: "
                f"got {floats.size}, expected {res} for a gray image "
                f"or {3 * res} for a color image"
            )

        self.width = int(width)
        self.height = int(height)
        self.gray = floats.size == res
        self._floats = floats

    @property
    def channels(self) -> int:
        return 1 if self.gray else 3

    @property
    def color(self) -> bool:
        return not self.gray

    @property
    def resolution(self) -> int:
        return self.width * self.height

    @property
    def samples(self) -> np.ndarray:
        """Read-only view of the owned samples"""
        view = self._floats.view()
        view.flags.writeable = False
        return view

    def nb_of_floats(self) -> int:
        return self._floats.size

    def __len__(self) -> int:
        return self._floats.size

    def _check_index(self, i: int):
        if not 0 <= i < self._floats.size:
            raise IndexError(f"sample index {i} out of range [0, {self._floats.size})")

    def get_float(self, i: int) -> float:
        self._check_index(i)
        return float(self._floats[i])

    def set_float(self, i: int, value: float):
        """Overwrite a single sample in place; the shape never changes."""
        self._check_index(i)
        self._floats[i] = value

    def color_at(self, x: int, y: int) -> Tuple[float, float, float]:
        """Return (r, g, b) at column x of stored row y, broadcasting gray samples"""
        if not 0 <= x < self.width:
            raise IndexError(f"x coordinate {x} out of range [0, {self.width})")
        if not 0 <= y < self.height:
            raise IndexError(f"y coordinate {y} out of range [0, {self.height})")
        if self.gray:
            c = float(self._floats[y * self.width + x])
            return c, c, c
        o = 3 * (y * self.width + x)
        r, g, b = self._floats[o:o + 3].tolist()
        return r, g, b

    def to_rgb(self) -> np.ndarray:
        """Return an (height, width, 3) float32 array, gray replicated into r, g, b."""
        if self.gray:
            plane = self._floats.reshape(self.height, self.width, 1)
            return np.repeat(plane, 3, axis=2)
        return self._floats.reshape(self.height, self.width, 3).copy()

    def copy(self) -> 'FloatMapImage':
        return FloatMapImage(self.width, self.height, self._floats)

    def __repr__(self) -> str:
        mode = "gray" if self.gray else "color"
        return f"FloatMapImage({self.width}x{self.height}, {mode})"
