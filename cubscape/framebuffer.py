"""Pixel buffers for the screen and for textures."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable

import numpy as np
from PIL import Image

from cubscape.errors import TextureError

_MASK = 0xFFFFFFFF


def _pack_rgb(array: np.ndarray) -> np.ndarray:
    data = array.astype(np.uint32)
    return (data[..., 0] << 16) | (data[..., 1] << 8) | data[..., 2]


class FrameBuffer:
    """A screen-sized image of packed 0xRRGGBB pixels, indexed [y, x]."""

    def __init__(self, width: int, height: int, fill: int = 0) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("a frame buffer needs a positive size")
        self.pixels = np.full((height, width), fill & _MASK, dtype=np.uint32)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def put_pixel(self, y: int, x: int, color: int) -> None:
        """Set one pixel; coordinates outside the buffer are ignored."""
        if 0 <= y < self.height and 0 <= x < self.width:
            self.pixels[y, x] = color & _MASK

    def get_pixel(self, x: int, y: int) -> int:
        """Return the pixel at (x, y)."""
        if not (0 <= y < self.height and 0 <= x < self.width):
            raise IndexError(f"pixel ({x}, {y}) is outside the buffer")
        return int(self.pixels[y, x])

    def fill_background(
        self, ceiling: int, floor: int, skip: np.ndarray | None = None
    ) -> None:
        """Paint the upper half with the ceiling and the lower with the floor.

        The row at height // 2 is left as it is. Pixels where the optional
        boolean mask ``skip`` (shape height x width) is true are left too.
        """
        half = self.height // 2
        top = self.pixels[:half]
        bottom = self.pixels[half + 1:]
        if skip is None:
            top[...] = ceiling & _MASK
            bottom[...] = floor & _MASK
            return
        mask = np.asarray(skip, dtype=bool)
        if mask.shape != self.pixels.shape:
            raise ValueError("skip mask must have the shape of the buffer")
        top[~mask[:half]] = ceiling & _MASK
        bottom[~mask[half + 1:]] = floor & _MASK

    def to_rgb(self) -> np.ndarray:
        """Return the pixels as a (height, width, 3) array of bytes."""
        channels = [(self.pixels >> shift) & 0xFF for shift in (16, 8, 0)]
        return np.stack(channels, axis=-1).astype(np.uint8)


@dataclass
class Texture:
    """A square image of packed 0xRRGGBB pixels, indexed [y, x]."""

    pixels: np.ndarray

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def color_at(self, x: int, y: int) -> int:
        """Return the texel at column x, row y."""
        if not (0 <= y < self.height and 0 <= x < self.width):
            raise IndexError(f"texel ({x}, {y}) is outside the texture")
        return int(self.pixels[y, x])


def load_texture(path: str | os.PathLike[str], size: int | None = None) -> Texture:
    """Load an image file; with ``size`` it must be size x size pixels."""
    name = os.fspath(path)
    try:
        with Image.open(name) as image:
            rgb = np.asarray(image.convert("RGB"))
    except OSError as exc:
        raise TextureError(f"cannot load image: {name}") from exc
    texture = Texture(_pack_rgb(rgb))
    if size is not None and (texture.width != size or texture.height != size):
        raise TextureError(f"image must be {size}x{size} pixels: {name}")
    return texture


def load_wall_textures(
    paths: Iterable[str | os.PathLike[str]], size: int
) -> list[Texture]:
    """Load wall textures in the order given, stopping at the first failure."""
    return [load_texture(path, size) for path in paths]