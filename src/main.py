#!/usr/bin/env python3
"""Legend — main entry point.

Builds the application with its initial state entered, then runs an
asyncio frame loop that:
  1. Measures the time since the previous tick
  2. Calls update(delta) then render(delta) on the application
  3. Hands the rendered canvas to the display
  4. Sleeps for the rest of the frame interval
"""

import argparse
import asyncio
import signal
import sys
import os
import logging
import time
from pathlib import Path

# Add src/ to path so imports work when running directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import load_config, MIN_SCALE, MAX_SCALE
from core.application import Application, create_application
from core.event_bus import EventBus
from core.logging_config import setup_logging
from engine.display import FrameDisplay
from engine.graphics import Canvas

log = logging.getLogger("legend.main")


class LegendRunner:
    """Owns the application and drives it at a fixed frame rate."""

    def __init__(self, config: dict):
        self.config = config
        self.event_bus = EventBus()
        self._running = False
        self.frames = 0

        window = config.get("window", {})
        game = config.get("game", {})
        snap = config.get("snapshots", {})
        self._fps = window.get("fps", 60)
        self._max_frames = game.get("max_frames", 0)

        # Folder holding the original install or CD
        self.data_path = Path(game["data_path"]) if game.get("data_path") else None
        if self.data_path is not None:
            if not self.data_path.is_dir():
                raise FileNotFoundError(f"game data folder not found: {self.data_path}")
            log.info("Game data: %s", self.data_path)

        self.canvas = Canvas()
        self.display = FrameDisplay(
            scale=window.get("scale", 2),
            snapshot_dir=snap.get("dir"),
            snapshot_every=snap.get("every", 0),
        )
        self.display.attach(self.event_bus)

        self.app: Application = create_application(
            self.canvas,
            game.get("initial_state", "title"),
            event_bus=self.event_bus,
        )

    def run_frame(self, delta: float) -> None:
        """One tick: update, render, present."""
        self.app.update(delta)
        self.app.render(delta)
        self.display.send_frame(self.canvas)
        self.frames += 1

    def stop(self) -> None:
        self._running = False

    # --- Main loop ---

    async def run(self) -> bool:
        """Run until stopped. Returns False if a frame failed."""
        self._running = True
        ok = True
        frame_interval = 1.0 / self._fps
        log.info("Starting frame loop at %d fps", self._fps)
        log.info("Ready! State: %s", self.app.current_identifier)

        last = time.monotonic()
        try:
            while self._running:
                started = time.monotonic()
                delta = started - last
                last = started
                try:
                    self.run_frame(delta)
                except Exception:
                    # Skipping a frame would desync update and render
                    log.exception("Frame error, stopping")
                    ok = False
                    break
                if self._max_frames and self.frames >= self._max_frames:
                    log.info("Reached %d frames", self.frames)
                    break
                await asyncio.sleep(max(0.0, frame_interval - (time.monotonic() - started)))
        except asyncio.CancelledError:
            log.info("Frame loop cancelled")
        finally:
            self.shutdown()
        return ok

    def shutdown(self) -> None:
        """Clean shutdown."""
        self._running = False
        log.info("Shutting down after %d frames...", self.frames)
        self.display.send_black()
        log.info("Shutdown complete")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="legend", description="Legend frame loop")
    parser.add_argument(
        "-s", "--scale", type=int, choices=range(MIN_SCALE, MAX_SCALE + 1),
        metavar=f"{{{MIN_SCALE}..{MAX_SCALE}}}", help="window scale (default 2)",
    )
    parser.add_argument(
        "data_path", nargs="?",
        help="folder which contains the original game install or CD",
    )
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    setup_logging()
    log.info("=== Legend ===")

    config = load_config()
    if args.scale is not None:
        config["window"]["scale"] = args.scale
    if args.data_path:
        config["game"]["data_path"] = args.data_path

    runner = LegendRunner(config)

    loop = asyncio.new_event_loop()

    def signal_handler():
        log.info("Signal received, stopping...")
        runner.stop()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    try:
        ok = loop.run_until_complete(runner.run())
    finally:
        loop.close()

    if not ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
