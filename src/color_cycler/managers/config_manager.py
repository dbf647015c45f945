"""
Config Manager

Loads the application YAML configuration (state file location, logging,
save debounce window, initial theme) into an immutable AppConfig.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional, Union

from color_cycler.models.config import AppConfig
from color_cycler.models.enums import LogCategory, LogLevel
from color_cycler.utils.logger import get_logger

log = get_logger().for_category(LogCategory.CONFIG)

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class ConfigManager:
    """
    Application configuration manager

    Loads config.yaml; on any failure falls back to factory_defaults.yaml.
    Relative paths resolve against the package directory.

    Example:
        config = ConfigManager().load()
        config.state_path             # "state/settings.json"
        config.persist_window_seconds # 60.0
    """

    def __init__(
        self,
        config_path: Union[str, Path] = "config/config.yaml",
        defaults_path: Union[str, Path] = "config/factory_defaults.yaml",
    ):
        """
        Initialize ConfigManager

        Args:
            config_path: Path to config.yaml (relative to the package)
            defaults_path: Path to factory defaults fallback
        """
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict[str, Any] = {}
        self.config: Optional[AppConfig] = None

    @staticmethod
    def _resolve(path: Path) -> Path:
        return path if path.is_absolute() else PACKAGE_DIR / path

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"{path.name}: top level must be a mapping")
        return data

    def load(self) -> AppConfig:
        """
        Load YAML configuration

        Process:
        1. Load config.yaml
        2. Fallback to factory_defaults.yaml on failure
        3. Build AppConfig (bad individual values fall back to defaults)

        Returns:
            AppConfig
        """
        try:
            self.data = self._read_yaml(self._resolve(self.config_path))
            log.info("Configuration loaded", path=str(self.config_path))
        except Exception as ex:
            log.error("Failed to load config.yaml", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")
            self.data = self._read_yaml(self._resolve(self.factory_defaults_path))

        self.config = self._build(self.data)
        return self.config

    def _build(self, data: Dict[str, Any]) -> AppConfig:
        defaults = AppConfig()

        log_level = defaults.log_level
        raw_level = data.get("log_level")
        if raw_level is not None:
            try:
                log_level = LogLevel[str(raw_level).upper()]
            except KeyError:
                log.warn("Unknown log_level, using default", value=raw_level, default=defaults.log_level.name)

        window = defaults.persist_window_seconds
        raw_window = data.get("persist_window_seconds")
        if raw_window is not None:
            if isinstance(raw_window, (int, float)) and not isinstance(raw_window, bool) and raw_window >= 0:
                window = float(raw_window)
            else:
                log.warn("Invalid persist_window_seconds, using default", value=raw_window)

        theme = data.get("theme")
        return AppConfig(
            state_path=str(data.get("state_path") or defaults.state_path),
            log_level=log_level,
            use_colors=bool(data.get("use_colors", defaults.use_colors)),
            persist_window_seconds=window,
            theme=str(theme) if theme is not None else None,
        )
