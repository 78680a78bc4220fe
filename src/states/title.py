"""Title screen state.

Draws a colour-cycling backdrop and fades the game title in over the
first couple of seconds.
"""

import logging

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from engine.graphics import Canvas, Color, Palette
from states.base import State

log = logging.getLogger("legend.states.title")

TITLE_TEXT = "LEGEND"
SUBTITLE_TEXT = "press start"
FADE_SECONDS = 2.0
CYCLE_INTERVAL = 1.0 / 15.0
# Palette entries 16..79 hold the backdrop gradient that gets cycled
GRADIENT_START = 16
GRADIENT_SIZE = 64
BANNER_COLOR = Color(20, 20, 60, 200)
TEXT_COLOR = (255, 220, 120)


def _build_palette() -> Palette:
    palette = Palette.empty()
    for i in range(GRADIENT_SIZE):
        t = i / (GRADIENT_SIZE - 1)
        palette.set_color(GRADIENT_START + i,
                          Color(40 + 60 * t, 10 + 30 * t, 80 + 120 * t))
    return palette


def _text_layer(width: int, height: int, font) -> Canvas:
    """Render the title text into a transparent canvas."""
    mask = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(mask)
    for text, y, fill in ((TITLE_TEXT, height // 2 - 14, 255),
                          (SUBTITLE_TEXT, height // 2 + 6, 160)):
        left, _, right, _ = draw.textbbox((0, 0), text, font=font)
        draw.text(((width - (right - left)) // 2, y), text, fill=fill, font=font)

    layer = Canvas(width, height)
    layer.data[:, :, :3] = TEXT_COLOR
    layer.data[:, :, 3] = np.asarray(mask, dtype=np.uint8)
    return layer


class TitleState(State):
    """The first state the application enters."""

    name = "title"

    def __init__(self, graphics: Canvas):
        self.graphics = graphics
        self.elapsed = 0.0
        self._cycle_timer = 0.0
        self._palette = _build_palette()
        self._font = ImageFont.load_default()
        self._text = _text_layer(graphics.width, 48, self._font)

    def enter(self) -> None:
        log.info("Entering title state")
        self.elapsed = 0.0
        self._cycle_timer = 0.0

    def exit(self) -> None:
        log.info("Exiting title state")

    def update(self, delta: float) -> None:
        self.elapsed += delta
        self._cycle_timer += delta
        while self._cycle_timer >= CYCLE_INTERVAL:
            self._cycle_timer -= CYCLE_INTERVAL
            self._palette.animate(GRADIENT_START + GRADIENT_SIZE - 1, GRADIENT_SIZE - 1)

    @property
    def fade(self) -> float:
        return min(1.0, self.elapsed / FADE_SECONDS)

    def render(self, delta: float) -> None:
        canvas = self.graphics
        band_h = max(1, canvas.height // GRADIENT_SIZE)
        for i in range(GRADIENT_SIZE):
            color = self._palette.get_color(GRADIENT_START + i)
            canvas.fill_rect(0, i * band_h, canvas.width, band_h, color)
        # Cover any rows left over by integer band height
        last = self._palette.get_color(GRADIENT_START + GRADIENT_SIZE - 1)
        canvas.fill_rect(0, GRADIENT_SIZE * band_h, canvas.width, canvas.height, last)

        if self.fade <= 0.0:
            return
        top = (canvas.height - self._text.height) // 2
        banner = Color(BANNER_COLOR.r, BANNER_COLOR.g, BANNER_COLOR.b,
                       BANNER_COLOR.a * self.fade)
        canvas.fill_rect(0, top, canvas.width, self._text.height, banner)
        canvas.alpha_blit(self._text, 0, top, self.fade)
