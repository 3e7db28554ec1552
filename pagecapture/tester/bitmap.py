"""Immutable in-memory raster used for page captures and reference images.

A :class:`Bitmap` stores its pixels as raw 8-bit RGBA bytes in row-major
order.  Every decode path (PNG bytes, files on disk, Pillow images) converts
to that layout so two bitmaps can be compared by their bytes alone.

Decoding never raises: unreadable or missing input yields the empty bitmap,
which callers detect through :attr:`Bitmap.is_empty`.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path

from PIL import Image

PIXEL_MODE = "RGBA"
BYTES_PER_PIXEL = 4


@dataclass(frozen=True, eq=False)
class Bitmap:
    """Width, height and raw RGBA bytes.

    Equality is defined on the byte sequence only, matching how capture
    comparisons are performed.
    """

    width: int
    height: int
    data: bytes = b""

    # -- Construction --------------------------------------------------------

    @classmethod
    def empty(cls) -> "Bitmap":
        """The explicit "nothing captured" marker."""
        return cls(0, 0, b"")

    @classmethod
    def from_image(cls, image: Image.Image) -> "Bitmap":
        """Snapshot a Pillow image into a new bitmap."""
        if image.mode != PIXEL_MODE:
            image = image.convert(PIXEL_MODE)
        width, height = image.size
        return cls(width, height, image.tobytes())

    @classmethod
    def from_png(cls, data: bytes) -> "Bitmap":
        """Decode PNG (or any Pillow-readable) bytes.

        Returns :meth:`empty` when *data* is empty or cannot be decoded.
        """
        if not data:
            return cls.empty()
        try:
            with Image.open(io.BytesIO(data)) as image:
                image.load()
                return cls.from_image(image)
        except (OSError, SyntaxError, ValueError):
            return cls.empty()

    @classmethod
    def load_from_path(cls, path: str | Path) -> "Bitmap":
        """Read an image file, returning :meth:`empty` if it is absent or corrupt."""
        path = Path(path)
        if not path.is_file():
            return cls.empty()
        try:
            with Image.open(path) as image:
                image.load()
                return cls.from_image(image)
        except (OSError, SyntaxError, ValueError):
            return cls.empty()

    # -- Accessors -----------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0 or not self.data

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def raw_bytes(self) -> bytes:
        return self.data

    def to_image(self) -> Image.Image:
        """Return a fresh Pillow image holding a copy of the pixels."""
        if self.is_empty:
            raise ValueError("Cannot convert an empty bitmap to an image")
        return Image.frombytes(PIXEL_MODE, (self.width, self.height), self.data)

    def to_png(self) -> bytes:
        """Encode as PNG.  The empty bitmap encodes to ``b""``."""
        if self.is_empty:
            return b""
        buffer = io.BytesIO()
        self.to_image().save(buffer, format="PNG")
        return buffer.getvalue()

    def resize(self, width: float, height: float) -> "Bitmap":
        """Return a new bitmap scaled to *width* x *height*.

        Fractional dimensions are truncated.  Resizing the empty bitmap, or to
        a zero dimension, yields the empty bitmap.
        """
        target = (int(width), int(height))
        if self.is_empty or target[0] <= 0 or target[1] <= 0:
            return Bitmap.empty()
        if target == self.size:
            return Bitmap(self.width, self.height, self.data)
        resized = self.to_image().resize(target, Image.LANCZOS)
        return Bitmap.from_image(resized)

    # -- Comparison ----------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bitmap):
            return NotImplemented
        return self.data == other.data

    def __hash__(self) -> int:
        return hash(self.data)

    def __repr__(self) -> str:
        return f"Bitmap({self.width}x{self.height}, {len(self.data)} bytes)"
