"""Tests for Settings and the speed presets."""
from config import MIN_INTERVAL, SPEED_PRESETS, Settings
from engine import PlaybackController


def test_defaults():
    cfg = Settings()
    assert cfg.port == 5000
    assert cfg.speed is None
    assert cfg.default_interval == cfg.playback_interval == 1.0


def test_speed_preset_sets_default_interval():
    assert Settings(speed="fast").default_interval == SPEED_PRESETS["fast"]


def test_unknown_speed_falls_back_to_interval():
    cfg = Settings(speed="warp", playback_interval=0.3)
    assert cfg.default_interval == 0.3
    assert cfg.interval_for("warp") == 0.3


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("TRACEVIZ_SPEED", "turbo")
    monkeypatch.setenv("TRACEVIZ_PORT", "8080")
    cfg = Settings()
    assert cfg.speed == "turbo"
    assert cfg.port == 8080
    assert cfg.default_interval == SPEED_PRESETS["turbo"]


def test_presets_respect_floor():
    assert all(v >= MIN_INTERVAL for v in SPEED_PRESETS.values())


def test_controller_uses_explicit_interval():
    assert PlaybackController(interval=0.25).interval == 0.25
