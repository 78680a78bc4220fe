"""Software frame buffer the states draw into.

The canvas is a fixed-size RGBA numpy array. The driver converts it to a
Pillow image once per frame and hands it to the display.
"""

from __future__ import annotations

import numpy as np
from PIL import Image

WIDTH = 320
HEIGHT = 200
PALETTE_SIZE = 256


def _channel(value: float) -> int:
    return max(0, min(255, int(value)))


class Color:
    """8-bit RGBA colour."""

    __slots__ = ("r", "g", "b", "a")

    def __init__(self, r: int = 0, g: int = 0, b: int = 0, a: int = 255):
        self.r = _channel(r)
        self.g = _channel(g)
        self.b = _channel(b)
        self.a = _channel(a)

    def alpha_blend(self, target: Color, alpha: float) -> Color:
        """Mix ``target`` over this colour by ``alpha`` (0.0-1.0). Result is opaque."""
        return Color(
            self.r * (1.0 - alpha) + target.r * alpha,
            self.g * (1.0 - alpha) + target.g * alpha,
            self.b * (1.0 - alpha) + target.b * alpha,
            255,
        )

    def blend(self, target: Color) -> Color:
        """Mix ``target`` over this colour using the target's own alpha."""
        return self.alpha_blend(target, target.a / 255.0)

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __hash__(self) -> int:
        return hash(self.as_tuple())

    def __repr__(self) -> str:
        return f"Color({self.r}, {self.g}, {self.b}, {self.a})"


TRANSPARENT = Color(0, 0, 0, 0)


class Palette:
    """256-entry indexed colour table."""

    def __init__(self, colors: list[Color]):
        if len(colors) != PALETTE_SIZE:
            raise ValueError(f"palette needs {PALETTE_SIZE} colors, got {len(colors)}")
        self._colors = list(colors)

    @classmethod
    def empty(cls) -> Palette:
        return cls([Color(0, 0, 0, 255) for _ in range(PALETTE_SIZE)])

    @classmethod
    def from_bytes(cls, data: bytes, vga: bool = False) -> Palette:
        """Read RGB triples. Missing bytes read as 0.

        With ``vga=True`` each channel is a 6-bit DAC value and is scaled
        by 4 to the 8-bit range.
        """
        factor = 4 if vga else 1
        raw = bytes(data[:PALETTE_SIZE * 3]).ljust(PALETTE_SIZE * 3, b"\x00")
        colors = [
            Color(raw[i] * factor, raw[i + 1] * factor, raw[i + 2] * factor, 255)
            for i in range(0, PALETTE_SIZE * 3, 3)
        ]
        return cls(colors)

    @staticmethod
    def _check_index(index: int) -> int:
        if not 0 <= index < PALETTE_SIZE:
            raise IndexError(f"palette index out of range: {index}")
        return index

    def get_color(self, index: int) -> Color:
        return self._colors[self._check_index(index)]

    def set_color(self, index: int, color: Color) -> None:
        self._colors[self._check_index(index)] = color

    def swap(self, index_a: int, index_b: int) -> None:
        color_a = self.get_color(index_a)
        self.set_color(index_a, self.get_color(index_b))
        self.set_color(index_b, color_a)

    def animate(self, index: int, count: int) -> None:
        """Rotate entries ``index - count .. index`` one step towards ``index``.

        The entry at ``index`` wraps around to ``index - count``. Used for
        colour-cycling effects (water, fire).
        """
        self._check_index(index)
        if count < 0 or index - count < 0:
            raise IndexError(f"cannot animate {count} entries below index {index}")
        color = self.get_color(index)
        for i in range(count):
            self.set_color(index - i, self.get_color(index - i - 1))
        self.set_color(index - count, color)

    def __len__(self) -> int:
        return PALETTE_SIZE


class Canvas:
    """RGBA frame buffer with clipped drawing primitives. Starts fully transparent."""

    def __init__(self, width: int = WIDTH, height: int = HEIGHT):
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid canvas size {width}x{height}")
        self.width = width
        self.height = height
        self.data = np.zeros((height, width, 4), dtype=np.uint8)

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def clear(self, color: Color = TRANSPARENT) -> None:
        self.data[:, :] = color.as_tuple()

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self.data[y, x] = color.as_tuple()

    def get_pixel(self, x: int, y: int) -> Color:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return Color(*(int(v) for v in self.data[y, x]))

    def _clip(self, x: int, y: int, width: int, height: int):
        x0, y0 = max(x, 0), max(y, 0)
        x1, y1 = min(x + width, self.width), min(y + height, self.height)
        if x0 >= x1 or y0 >= y1:
            return None
        return x0, y0, x1, y1

    def fill_rect(self, x: int, y: int, width: int, height: int, color: Color) -> None:
        """Blend ``color`` over the rectangle, clipped to the canvas."""
        region = self._clip(x, y, width, height)
        if region is None:
            return
        x0, y0, x1, y1 = region
        alpha = color.a / 255.0
        dest = self.data[y0:y1, x0:x1, :3].astype(np.float64)
        src = np.array([color.r, color.g, color.b], dtype=np.float64)
        mixed = dest * (1.0 - alpha) + src * alpha
        self.data[y0:y1, x0:x1, :3] = np.clip(mixed, 0, 255).astype(np.uint8)
        self.data[y0:y1, x0:x1, 3] = 255

    def alpha_blit(self, source: Canvas, x: int, y: int, alpha: float) -> None:
        """Blend ``source`` onto this canvas at (x, y); transparent pixels are skipped."""
        region = self._clip(x, y, source.width, source.height)
        if region is None:
            return
        x0, y0, x1, y1 = region
        src = source.data[y0 - y:y1 - y, x0 - x:x1 - x]
        mask = src[:, :, 3] != 0

        dest = self.data[y0:y1, x0:x1]
        mixed = dest[:, :, :3].astype(np.float64) * (1.0 - alpha) \
            + src[:, :, :3].astype(np.float64) * alpha
        mixed = np.clip(mixed, 0, 255).astype(np.uint8)
        dest[:, :, :3][mask] = mixed[mask]
        dest[:, :, 3][mask] = 255

    def copy_to(self, buffer) -> None:
        """Write the frame as packed RGBA bytes into ``buffer``."""
        raw = self.data.tobytes()
        if len(buffer) < len(raw):
            raise ValueError(f"buffer too small: {len(buffer)} < {len(raw)}")
        buffer[:len(raw)] = raw

    def to_image(self, scale: int = 1) -> Image.Image:
        """Return the frame as a Pillow RGB image, scaled by nearest neighbour."""
        img = Image.fromarray(np.ascontiguousarray(self.data[:, :, :3]))
        if scale != 1:
            img = img.resize((self.width * scale, self.height * scale),
                             Image.Resampling.NEAREST)
        return img
