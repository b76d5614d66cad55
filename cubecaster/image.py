"""Packed-pixel images used as textures and as the frame buffer."""

from __future__ import annotations

import os

import numpy as np
from PIL import Image as PILImage

ERR_CREATE_IMAGE = "cub3D: Failed to create image"


class Image:
    """A width x height grid of 0xRRGGBB pixels."""

    def __init__(self, width: int, height: int, pixels: np.ndarray | None = None) -> None:
        if width < 0 or height < 0:
            raise ValueError("image dimensions must not be negative")
        self.width = width
        self.height = height
        if pixels is None:
            self.pixels = np.zeros((height, width), dtype=np.uint32)
        else:
            if pixels.shape != (height, width):
                raise ValueError(
                    f"pixel array shape {pixels.shape} does not match {width}x{height}"
                )
            self.pixels = pixels.astype(np.uint32, copy=False)

    def put_pixel(self, x: float, y: float, color: int) -> None:
        """Set a pixel; coordinates are truncated and writes outside are ignored."""
        col, row = int(x), int(y)
        if 0 <= col < self.width and 0 <= row < self.height:
            self.pixels[row, col] = int(color) & 0xFFFFFFFF

    def get_pixel(self, x: float, y: float) -> int:
        """Read a pixel; coordinates are truncated and anything outside reads 0."""
        col, row = int(x), int(y)
        if col < 0 or row < 0 or col >= self.width or row >= self.height:
            return 0
        return int(self.pixels[row, col])

    @classmethod
    def load(cls, path: str | os.PathLike[str]) -> "Image":
        """Load an image file (XPM, PNG, ...) into packed pixels."""
        try:
            with PILImage.open(path) as source:
                rgb = np.asarray(source.convert("RGB"), dtype=np.uint32)
        except (OSError, ValueError) as exc:
            raise OSError(f"{ERR_CREATE_IMAGE}: {os.fspath(path)}") from exc
        height, width = rgb.shape[:2]
        packed = (rgb[..., 0] << 16) | (rgb[..., 1] << 8) | rgb[..., 2]
        return cls(width, height, packed)

    def to_rgb_bytes(self) -> bytes:
        """Return the pixels as row-major RGB bytes, three per pixel."""
        rgb = np.empty((self.height, self.width, 3), dtype=np.uint8)
        rgb[..., 0] = (self.pixels >> 16) & 0xFF
        rgb[..., 1] = (self.pixels >> 8) & 0xFF
        rgb[..., 2] = self.pixels & 0xFF
        return rgb.tobytes()