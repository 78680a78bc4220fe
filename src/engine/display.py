"""Frame sink for rendered canvases.

The real window backend lives outside this project. ``FrameDisplay``
keeps the most recent frame as a scaled Pillow image and can dump PNG
snapshots, which is enough for headless runs and for tests.

Attached to the event bus, the display tracks which state is live and
snapshots the first frame drawn after every state change.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from PIL import Image

from engine.graphics import Canvas

if TYPE_CHECKING:
    from core.event_bus import EventBus

log = logging.getLogger("legend.engine.display")


class FrameDisplay:
    """Receives one canvas per tick from the frame driver."""

    def __init__(self, scale: int = 2, snapshot_dir: str = None, snapshot_every: int = 0):
        if not 1 <= scale <= 10:
            raise ValueError(f"scale must be between 1 and 10, got {scale}")
        self.scale = scale
        self.snapshot_dir = Path(snapshot_dir) if snapshot_dir else None
        self.snapshot_every = snapshot_every
        self.frame_count = 0
        self.state_name: str | None = None
        self._snapshot_pending = False
        self._last_frame: Image.Image | None = None

        if self.snapshot_dir:
            self.snapshot_dir.mkdir(parents=True, exist_ok=True)
            log.info("Writing snapshots to %s (every %d frames)",
                     self.snapshot_dir, self.snapshot_every)

    # --- Lifecycle events ---

    def attach(self, event_bus: EventBus) -> None:
        event_bus.subscribe("state_entered", self._on_state_entered)
        event_bus.subscribe("state_changed", self._on_state_changed)

    def detach(self, event_bus: EventBus) -> None:
        event_bus.unsubscribe("state_entered", self._on_state_entered)
        event_bus.unsubscribe("state_changed", self._on_state_changed)

    def _on_state_entered(self, data: dict) -> None:
        self.state_name = data["state"]
        log.debug("Display now showing '%s'", self.state_name)

    def _on_state_changed(self, data: dict) -> None:
        self._snapshot_pending = True

    # --- Frames ---

    def send_frame(self, canvas: Canvas) -> Image.Image:
        """Convert the canvas and keep it as the current frame."""
        img = canvas.to_image(self.scale)
        self._last_frame = img
        self.frame_count += 1

        periodic = self.snapshot_every > 0 and self.frame_count % self.snapshot_every == 0
        if self.snapshot_dir and (periodic or self._snapshot_pending):
            self._snapshot_pending = False
            self._save(img)
        return img

    def _save(self, img: Image.Image) -> Path:
        suffix = f"_{self.state_name}" if self.state_name else ""
        path = self.snapshot_dir / f"frame_{self.frame_count:06d}{suffix}.png"
        img.save(path)
        log.debug("Snapshot → %s", path)
        return path

    def send_black(self) -> None:
        """Replace the current frame with a black one."""
        if self._last_frame is not None:
            self._last_frame = Image.new("RGB", self._last_frame.size, (0, 0, 0))

    @property
    def last_frame(self) -> Image.Image | None:
        return self._last_frame
