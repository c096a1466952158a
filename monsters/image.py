"""CPU-side RGBA textures with a fixed pixel format."""

from __future__ import annotations

import os
from array import array
from enum import Enum
from typing import Optional, Union

from PIL import Image as PILImage

BytesLike = Union[bytes, bytearray, memoryview]


class ImageFormat(Enum):
    NONE = 0
    RGBA = 1
    RGBA32F = 2


_BYTES_PER_PIXEL = {
    ImageFormat.RGBA: 4,
    ImageFormat.RGBA32F: 16,
}


def bytes_per_pixel(fmt: Union[ImageFormat, int]) -> int:
    """Size in bytes of one pixel of ``fmt``; 0 for an unknown format."""
    return _BYTES_PER_PIXEL.get(ImageFormat(fmt), 0)


class Image:
    """A width x height pixel buffer in one of the supported formats."""

    def __init__(
        self,
        width: int,
        height: int,
        fmt: Union[ImageFormat, int] = ImageFormat.RGBA,
        data: Optional[BytesLike] = None,
    ) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"invalid image size {width}x{height}")
        self.width = width
        self.height = height
        self.format = ImageFormat(fmt)
        self.path: Optional[str] = None
        self._pixels: Optional[bytearray] = None
        self._allocate()
        if data is not None:
            self.set_data(data)

    @classmethod
    def from_file(cls, path: Union[str, os.PathLike]) -> "Image":
        """Load an image file; floating-point images become RGBA32F."""
        with PILImage.open(path) as source:
            source.load()
            width, height = source.size
            if source.mode == "F":
                fmt = ImageFormat.RGBA32F
                pixels = array("f")
                for value in array("f", source.tobytes()):
                    pixels.extend((value, value, value, 1.0))
                data = pixels.tobytes()
            else:
                fmt = ImageFormat.RGBA
                data = source.convert("RGBA").tobytes()
        image = cls(width, height, fmt, data)
        image.path = os.fspath(path)
        return image

    @property
    def size_bytes(self) -> int:
        return self.width * self.height * bytes_per_pixel(self.format)

    @property
    def allocated(self) -> bool:
        return self._pixels is not None

    @property
    def pixels(self) -> Optional[bytes]:
        """A copy of the pixel bytes, or None once released."""
        return None if self._pixels is None else bytes(self._pixels)

    def _allocate(self) -> None:
        self._pixels = bytearray(self.size_bytes)

    def set_data(self, data: BytesLike) -> None:
        """Replace the pixels with the first ``size_bytes`` bytes of ``data``."""
        if self._pixels is None:
            raise RuntimeError("image has been released")
        view = memoryview(data).cast("B")
        size = self.size_bytes
        if len(view) < size:
            raise ValueError(f"need {size} bytes of pixel data, got {len(view)}")
        self._pixels[:] = view[:size]

    def resize(self, width: int, height: int) -> None:
        """Reallocate for a new size; contents are cleared unless the size is unchanged."""
        if self.allocated and self.width == width and self.height == height:
            return
        if width < 0 or height < 0:
            raise ValueError(f"invalid image size {width}x{height}")
        self.width = width
        self.height = height
        self.release()
        self._allocate()

    def release(self) -> None:
        """Drop the pixel storage."""
        self._pixels = None