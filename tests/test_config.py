import pytest

from config import load_config

ENV_VARS = (
    "LEGEND_SCALE", "DISPLAY_FPS", "LEGEND_INITIAL_STATE", "LEGEND_DATA_PATH",
    "LEGEND_MAX_FRAMES", "LEGEND_SNAPSHOT_DIR", "LEGEND_SNAPSHOT_EVERY",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_when_file_missing(tmp_path):
    config = load_config(str(tmp_path / "missing.yaml"))

    assert config["window"] == {"scale": 2, "fps": 60}
    assert config["game"]["initial_state"] == "title"
    assert config["game"]["max_frames"] == 0
    assert config["game"]["data_path"] is None
    assert config["snapshots"] == {"dir": None, "every": 0}


def test_yaml_values(tmp_path):
    path = tmp_path / "legend.yaml"
    path.write_text("window:\n  scale: 4\n  fps: 30\ngame:\n  data_path: /cd\n")

    config = load_config(str(path))

    assert config["window"]["scale"] == 4
    assert config["window"]["fps"] == 30
    assert config["game"]["data_path"] == "/cd"


def test_env_overrides(tmp_path, monkeypatch):
    path = tmp_path / "legend.yaml"
    path.write_text("window:\n  scale: 4\n")
    monkeypatch.setenv("LEGEND_SCALE", "3")
    monkeypatch.setenv("DISPLAY_FPS", "50")
    monkeypatch.setenv("LEGEND_MAX_FRAMES", "10")
    monkeypatch.setenv("LEGEND_INITIAL_STATE", "play")

    config = load_config(str(path))

    assert config["window"] == {"scale": 3, "fps": 50}
    assert config["game"]["max_frames"] == 10
    assert config["game"]["initial_state"] == "play"


@pytest.mark.parametrize("raw, expected", [("0", 1), ("25", 10)])
def test_scale_clamped(tmp_path, monkeypatch, raw, expected):
    monkeypatch.setenv("LEGEND_SCALE", raw)
    config = load_config(str(tmp_path / "missing.yaml"))
    assert config["window"]["scale"] == expected


def test_non_positive_fps_rejected(tmp_path, monkeypatch):
    monkeypatch.setenv("DISPLAY_FPS", "0")
    with pytest.raises(ValueError):
        load_config(str(tmp_path / "missing.yaml"))
