"""
Shared data types for the scanning engine.

Provides value types for geometry (points, rectangles, dimensions), colors,
and the dense RGBA pixel buffer every engine operation consumes and produces.
"""

from dataclasses import dataclass
from typing import Union

import numpy as np

# Number of channels in a PixelBuffer (straight RGBA)
CHANNELS = 4


@dataclass(frozen=True)
class Point:
    """A 2D point in CSS (device-independent) pixel space."""

    x: float
    y: float


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle anchored at its top-left corner."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class ImageDimensions:
    """Width and height of a raster, in buffer pixels."""

    width: int
    height: int


@dataclass(frozen=True)
class RGB:
    """An opaque color with 8-bit channels."""

    r: int
    g: int
    b: int

    def __post_init__(self):
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"Channel {name}={value} out of range [0, 255]")

    def as_array(self) -> np.ndarray:
        """Return the color as a float array [r, g, b]."""
        return np.array([self.r, self.g, self.b], dtype=np.float64)


@dataclass
class PixelBuffer:
    """
    Dense row-major RGBA raster with straight (non-premultiplied) alpha.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        data: uint8 array of shape (height, width, 4). Owned by whoever
              allocated the buffer; operators documented as in-place write
              into it directly.

    Example:
        >>> buf = PixelBuffer.blank(3, 2)
        >>> buf.data.shape
        (2, 3, 4)
        >>> len(buf.tobytes())
        24
    """

    width: int
    height: int
    data: np.ndarray

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Buffer dimensions must be non-negative, got {self.width}x{self.height}"
            )
        if self.data.dtype != np.uint8:
            raise ValueError(f"Buffer data must be uint8, got {self.data.dtype}")
        expected = (self.height, self.width, CHANNELS)
        if self.data.shape != expected:
            raise ValueError(
                f"Buffer data shape {self.data.shape} does not match {expected}"
            )

    @classmethod
    def blank(cls, width: int, height: int) -> "PixelBuffer":
        """Create a fully transparent black buffer."""
        return cls(width, height, np.zeros((height, width, CHANNELS), dtype=np.uint8))

    @classmethod
    def from_bytes(
        cls, width: int, height: int, raw: Union[bytes, bytearray, memoryview]
    ) -> "PixelBuffer":
        """
        Build a buffer from a flat RGBA byte sequence.

        Raises:
            ValueError: If len(raw) != width * height * 4.
        """
        expected = width * height * CHANNELS
        if len(raw) != expected:
            raise ValueError(
                f"Expected {expected} bytes for {width}x{height} RGBA, got {len(raw)}"
            )
        data = np.frombuffer(bytes(raw), dtype=np.uint8).reshape(
            (height, width, CHANNELS)
        )
        return cls(width, height, data.copy())

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """
        Build a buffer from an HxWx3 (RGB) or HxWx4 (RGBA) uint8 array.

        Other dtypes are rejected rather than cast, so out-of-range values
        never wrap.

        RGB input receives an opaque alpha channel. The array is copied.
        """
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] not in (3, CHANNELS):
            raise ValueError(
                f"Expected array of shape (H, W, 3) or (H, W, 4), got {array.shape}"
            )
        if array.dtype != np.uint8:
            raise ValueError(f"Buffer data must be uint8, got {array.dtype}")
        height, width = array.shape[:2]
        if array.shape[2] == 3:
            alpha = np.full((height, width, 1), 255, dtype=np.uint8)
            data = np.concatenate([array, alpha], axis=2)
        else:
            data = array.copy()
        return cls(width, height, np.ascontiguousarray(data))

    @property
    def dimensions(self) -> ImageDimensions:
        return ImageDimensions(self.width, self.height)

    @property
    def rgb(self) -> np.ndarray:
        """View of the color channels, shape (height, width, 3)."""
        return self.data[..., :3]

    @property
    def alpha(self) -> np.ndarray:
        """View of the alpha channel, shape (height, width)."""
        return self.data[..., 3]

    def tobytes(self) -> bytes:
        """Return the flat width*height*4 RGBA byte string."""
        return self.data.tobytes()

    def copy(self) -> "PixelBuffer":
        """Deep copy sharing no storage with this buffer."""
        return PixelBuffer(self.width, self.height, self.data.copy())
