"""
floatmap core - constants, error taxonomy and configuration shared by the
decoder, tone mapper and comparator.

The Portable Float Map container stores one (gray) or three (color) IEEE-754
32-bit floats per pixel behind a three line text header. Modules in this
package raise the exceptions defined here and read their defaults from
FloatMapConfig.
"""

import json
import logging
from dataclasses import dataclass, asdict

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Constants
GRAY_MAGIC = "Pf"
COLOR_MAGIC = "PF"
HEADER_LINES = 3
BYTES_PER_SAMPLE = 4
DEFAULT_GAMMA = 2.2
DEFAULT_DEGENERATE_VALUE = 0.5
DEFAULT_MSE_PRECISION = 100
DEFAULT_DIFFERENCE_SCALE = 1.0
DEFAULT_PSNR_PEAK = 1.0
VERSION = "1.0.0"


class FloatMapError(Exception):
    """Base class for every floatmap error"""
    pass


class ConfigError(FloatMapError):
    """Configuration related errors"""
    pass


class FormatError(FloatMapError, ValueError):
    """Malformed PFM header or body"""
    pass


class ConstructionError(FloatMapError, ValueError):
    """Image dimensions and sample count do not describe a gray or color image"""
    pass


class DimensionMismatch(FloatMapError, ValueError):
    """Two images compared with each other differ in width or height"""
    pass


@dataclass
class FloatMapConfig:
    """Configuration for rendering and comparing float maps"""
    gamma: float = DEFAULT_GAMMA
    normalized: bool = False  # min/max rescale before mapping to 8 bits
    degenerate_value: float = DEFAULT_DEGENERATE_VALUE  # used when max == min
    mse_precision: int = DEFAULT_MSE_PRECISION  # significant digits of the accumulator
    difference_scale: float = DEFAULT_DIFFERENCE_SCALE
    psnr_peak: float = DEFAULT_PSNR_PEAK

    @classmethod
    def from_json(cls, path: str) -> 'FloatMapConfig':
        """Load configuration from JSON file"""
        try:
            with open(path, 'r') as f:
                data = json.load(f)
            return cls(**data)
        except Exception as e:
            raise ConfigError(f"Failed to load config from {path}: {e}") from e

    def to_json(self, path: str):
        """Save configuration to JSON file"""
        with open(path, 'w') as f:
            json.dump(asdict(self), f, indent=2)
