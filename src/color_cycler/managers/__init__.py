from .config_manager import ConfigManager
from .state_manager import StateManager

__all__ = ["ConfigManager", "StateManager"]
