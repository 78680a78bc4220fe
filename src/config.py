import os
import logging
from pathlib import Path

import yaml
from dotenv import load_dotenv

log = logging.getLogger("legend.config")

# Project root is one level up from src/
PROJECT_ROOT = Path(__file__).resolve().parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"

MIN_SCALE = 1
MAX_SCALE = 10


def load_config(config_path: str = None) -> dict:
    """Load configuration from YAML file with .env overrides."""
    load_dotenv(PROJECT_ROOT / ".env")

    yaml_path = Path(config_path) if config_path else CONFIG_DIR / "legend.yaml"
    if not yaml_path.exists():
        log.warning("Config file not found: %s — using defaults", yaml_path)
        config = {}
    else:
        with open(yaml_path) as f:
            config = yaml.safe_load(f) or {}

    # Environment variable overrides
    window = config.setdefault("window", {})
    scale = int(os.environ.get("LEGEND_SCALE", window.get("scale", 2)))
    window["scale"] = max(MIN_SCALE, min(MAX_SCALE, scale))
    window["fps"] = int(os.environ.get("DISPLAY_FPS", window.get("fps", 60)))
    if window["fps"] <= 0:
        raise ValueError(f"fps must be positive, got {window['fps']}")

    game = config.setdefault("game", {})
    game["initial_state"] = os.environ.get(
        "LEGEND_INITIAL_STATE", game.get("initial_state", "title"))
    game["data_path"] = os.environ.get("LEGEND_DATA_PATH", game.get("data_path"))
    game["max_frames"] = int(os.environ.get("LEGEND_MAX_FRAMES", game.get("max_frames", 0)))

    snap = config.setdefault("snapshots", {})
    snap["dir"] = os.environ.get("LEGEND_SNAPSHOT_DIR", snap.get("dir"))
    snap["every"] = int(os.environ.get("LEGEND_SNAPSHOT_EVERY", snap.get("every", 0)))

    log.info(
        "Config loaded — scale %dx, %d fps, initial state '%s'",
        window["scale"],
        window["fps"],
        game["initial_state"],
    )
    return config
