"""
State Manager

JSON file implementation of the host settings store. Handles async
loading/saving of the whole settings record.
"""

import aiofiles
import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from color_cycler.models.enums import LogCategory
from color_cycler.utils.logger import get_logger

log = get_logger().for_category(LogCategory.STATE)


class StateManager:
    """
    Settings record persistence (one JSON document)

    Record format (GlobalSettings.to_dict()):
    {
        "version": 4,
        "showStatusIndicator": false,
        "showRibbonIcon": true,
        "useSeparateContexts": false,
        "contexts": {
            "base": {
                "color": {"h": 0, "s": 100, "l": 50},
                "behavior": "increment",
                "increment": {...}, "random": {...}, "preset": {...},
                "timer": {"enabled": false, "seconds": null}
            },
            "dark": {...},
            "light": {...}
        }
    }
    """

    def __init__(self, path: Union[str, Path] = "state/settings.json"):
        """
        Initialize StateManager

        Args:
            path: Path to the settings JSON file (created on first save)
        """
        self.path = Path(path)

    async def load(self) -> Optional[Dict[str, Any]]:
        """
        Load the record asynchronously

        Returns:
            Parsed record, or None if the file is missing or unreadable
        """
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                content = await f.read()
        except FileNotFoundError:
            # First run
            return None

        try:
            return json.loads(content)
        except json.JSONDecodeError as ex:
            log.warn("Invalid JSON in settings file, ignoring it", path=str(self.path), error=str(ex))
            return None

    async def save(self, record: Dict[str, Any]) -> None:
        """
        Asynchronously save the record

        Writes to a sibling .tmp file, then replaces the target with it.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(record, indent=2))
        tmp_path.replace(self.path)
