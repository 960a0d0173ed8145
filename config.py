"""Application configuration via environment variables (prefix TRACEVIZ_)."""
from typing import Optional

from pydantic_settings import BaseSettings

# ---------------------------------------------------------------------------
# Speed presets (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.0,    # teaching mode
    "medium": 0.4,
    "fast":   0.15,   # demo mode
    "turbo":  0.05,
}

MIN_INTERVAL = 0.02


class Settings(BaseSettings):
    app_name: str = "Graph Algorithm Trace Engine"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"
    playback_interval: float = SPEED_PRESETS["slow"]
    # preset name; overrides playback_interval when it names a preset
    speed: Optional[str] = None

    model_config = {"env_prefix": "TRACEVIZ_"}

    def interval_for(self, speed: str) -> float:
        """Seconds per step for a named preset, falling back to playback_interval."""
        return SPEED_PRESETS.get(speed, self.playback_interval)

    @property
    def default_interval(self) -> float:
        """Seconds per step when a playback does not ask for its own pace."""
        if self.speed is None:
            return self.playback_interval
        return self.interval_for(self.speed)


settings = Settings()
