"""
Reading and writing of Portable Float Map streams.

Layout:
    Pf | PF            magic, gray or color
    <width> <height>   positive integers
    <scale>            negative => little endian, otherwise big endian
    <body>             width * height * channels float32 samples

Every decoded sample is multiplied by 1 / |scale|.
"""

import logging
import math
from pathlib import Path
from typing import BinaryIO, List, Tuple, Union

import numpy as np

from .core import (
    BYTES_PER_SAMPLE,
    COLOR_MAGIC,
    GRAY_MAGIC,
    HEADER_LINES,
    FormatError,
)
from .image import FloatMapImage

logger = logging.getLogger(__name__)

# Upper bound of a single read call; header dimensions are not trusted
READ_CHUNK_SIZE = 1 << 20


def _read_header(stream: BinaryIO) -> List[str]:
    """Read the header one byte at a time so no body bytes are consumed."""
    header = [bytearray() for _ in range(HEADER_LINES)]
    lines = 0
    while lines < HEADER_LINES:
        c = stream.read(1)
        if not c:
            raise FormatError(f"stream ended after {lines} of {HEADER_LINES} header lines")
        if c == b'\n':
            lines += 1
        else:
            header[lines] += c
    return [line.decode('latin-1') for line in header]


def _parse_magic(token: str) -> int:
    if GRAY_MAGIC in token:
        return 1
    if COLOR_MAGIC in token:
        return 3
    raise FormatError(f"unrecognized magic {token!r}")


def _parse_dimensions(token: str) -> Tuple[int, int]:
    parts = token.split()
    try:
        width = int(parts[0])
        height = int(parts[1])
    except (IndexError, ValueError) as e:
        raise FormatError(f"invalid dimensions {token!r}") from e
    if width <= 0 or height <= 0:
        raise FormatError(f"invalid dimensions {width}x{height}")
    return width, height


def _parse_scale(token: str) -> float:
    try:
        scale = float(token)
    except ValueError as e:
        raise FormatError(f"invalid scale {token!r}") from e
    if scale == 0.0 or math.isnan(scale):
        raise FormatError(f"invalid scale {token!r}")
    return scale


def _read_fully(stream: BinaryIO, size: int) -> bytes:
    """Read exactly size bytes in bounded chunks, resuming after short reads."""
    buf = bytearray()
    while len(buf) < size:
        chunk = stream.read(min(size - len(buf), READ_CHUNK_SIZE))
        if not chunk:
            raise FormatError(f"truncated data: expected {size} bytes, got {len(buf)}")
        buf += chunk
    return bytes(buf)


def decode(stream: BinaryIO) -> FloatMapImage:
    """Decode a PFM byte stream into a FloatMapImage. The stream is left open."""
    magic, dimensions, scale_token = _read_header(stream)
    channels = _parse_magic(magic)
    width, height = _parse_dimensions(dimensions)
    scale = _parse_scale(scale_token)
    little_endian = scale < 0

    count = width * height * channels
    body = _read_fully(stream, count * BYTES_PER_SAMPLE)

    dtype = np.dtype('<f4' if little_endian else '>f4')
    inv_scale = np.float32(1.0) / np.float32(abs(scale))
    floats = np.frombuffer(body, dtype=dtype).astype(np.float32) * inv_scale

    logger.debug(
        f"Decoded {'gray' if channels == 1 else 'color'} {width}x{height} "
        f"({'little' if little_endian else 'big'} endian, scale {scale})"
    )
    return FloatMapImage(width, height, floats)


def read(path: Union[str, Path]) -> FloatMapImage:
    """Decode the PFM file at path"""
    with open(path, 'rb') as f:
        return decode(f)


def encode(image: FloatMapImage, stream: BinaryIO, little_endian: bool = True):
    """Write image to stream in PFM layout, rows in stored order."""
    magic = GRAY_MAGIC if image.gray else COLOR_MAGIC
    scale = -1.0 if little_endian else 1.0
    header = f"{magic}\n{image.width} {image.height}\n{scale}\n"
    stream.write(header.encode('ascii'))
    dtype = np.dtype('<f4' if little_endian else '>f4')
    stream.write(image.samples.astype(dtype).tobytes())


def write(image: FloatMapImage, path: Union[str, Path], little_endian: bool = True):
    with open(path, 'wb') as f:
        encode(image, f, little_endian)
