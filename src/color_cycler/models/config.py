"""Application configuration model (from config.yaml)"""

from dataclasses import dataclass
from typing import Optional

from color_cycler.models.enums import LogLevel


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable application configuration

    Not to be confused with GlobalSettings (the user's cycling settings,
    persisted as JSON through the settings store).
    """
    state_path: str = "state/settings.json"
    log_level: LogLevel = LogLevel.INFO
    use_colors: bool = True
    persist_window_seconds: float = 60.0
    theme: Optional[str] = None
