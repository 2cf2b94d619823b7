"""Destinations for rasters and metrics produced by the processor."""

from typing import Any, Dict, Optional, Protocol

import numpy as np
from PIL import Image


class RasterSink(Protocol):
    """Anything accepting an (H, W, 4) uint8 RGBA raster"""

    def accept(self, raster: np.ndarray) -> None:
        ...


class MetricSink(Protocol):
    """Anything accepting a named scalar or array result"""

    def accept(self, name: str, value: Any) -> None:
        ...


class ArrayRasterSink:
    """Keeps the last raster it was given"""

    def __init__(self):
        self.raster: Optional[np.ndarray] = None

    def accept(self, raster: np.ndarray) -> None:
        self.raster = raster


class PILRasterSink:
    """Wraps accepted rasters into a Pillow RGBA image (no file is written)"""

    def __init__(self):
        self.image: Optional[Image.Image] = None

    def accept(self, raster: np.ndarray) -> None:
        height, width = raster.shape[:2]
        self.image = Image.frombytes('RGBA', (width, height), np.ascontiguousarray(raster).tobytes())


class DictMetricSink:
    """Records every metric by name"""

    def __init__(self):
        self.results: Dict[str, Any] = {}

    def accept(self, name: str, value: Any) -> None:
        self.results[name] = value
