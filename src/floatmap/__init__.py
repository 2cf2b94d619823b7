"""floatmap package
Exporting main classes for external use.

Example:
    from floatmap import FloatMapProcessor, FloatMapConfig, read
"""
from .core import (
    ConfigError,
    ConstructionError,
    DimensionMismatch,
    FloatMapConfig,
    FloatMapError,
    FormatError,
    VERSION,
)
from .image import FloatMapImage
from .metrics import difference, mse, psnr
from .processor import FloatMapProcessor
from .reader import decode, encode, read, write
from .tonemap import to_raster, to_scaled_raster

__all__ = [
    'ConfigError',
    'ConstructionError',
    'DimensionMismatch',
    'FloatMapConfig',
    'FloatMapError',
    'FloatMapImage',
    'FloatMapProcessor',
    'FormatError',
    'VERSION',
    'decode',
    'difference',
    'encode',
    'mse',
    'psnr',
    'read',
    'to_raster',
    'to_scaled_raster',
    'write',
]
