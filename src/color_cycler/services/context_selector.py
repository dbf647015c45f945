"""Context selector - picks the active settings partition"""

from typing import Callable, Optional

from color_cycler.models.domain import GlobalSettings
from color_cycler.models.enums import ContextID, LogCategory
from color_cycler.models.events import ActiveContextChangedEvent
from color_cycler.services.event_bus import EventBus
from color_cycler.utils.logger import get_logger

log = get_logger().for_category(LogCategory.CONTEXT)

ThemeSignal = Callable[[], Optional[str]]

# Values the host may report; includes its CSS body classes
THEME_SIGNAL_MAP = {
    "dark": ContextID.DARK,
    "light": ContextID.LIGHT,
    "theme-dark": ContextID.DARK,
    "theme-light": ContextID.LIGHT,
}


class ContextSelector:
    """
    Resolves which context (base / dark / light) is active

    - separate contexts OFF -> always base
    - separate contexts ON -> theme signal mapped to dark/light
    - unknown, missing or failing signal -> base

    refresh() re-evaluates and publishes ACTIVE_CONTEXT_CHANGED when the
    result differs from the current one.
    """

    def __init__(
        self,
        settings: GlobalSettings,
        theme_signal: Optional[ThemeSignal] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.settings = settings
        self.theme_signal = theme_signal
        self.event_bus = event_bus
        self.active: ContextID = self.resolve()

    def _read_signal(self) -> Optional[str]:
        if self.theme_signal is None:
            return None
        try:
            return self.theme_signal()
        except Exception as e:
            log.warn("Theme signal unavailable, using base context", error=repr(e))
            return None

    def resolve(self) -> ContextID:
        if not self.settings.use_separate_contexts:
            return ContextID.BASE

        signal = self._read_signal()
        if not isinstance(signal, str):
            return ContextID.BASE

        context_id = THEME_SIGNAL_MAP.get(signal.strip().lower())
        if context_id is None:
            log.debug("Unmapped theme signal, using base context", signal=signal)
            return ContextID.BASE
        return context_id

    def refresh(self) -> bool:
        """
        Re-evaluate the active context

        Returns:
            True if the active context changed
        """
        resolved = self.resolve()
        if resolved is self.active:
            return False

        previous, self.active = self.active, resolved
        log.info("Active context changed", previous=previous.value, current=resolved.value)
        if self.event_bus is not None:
            self.event_bus.publish(ActiveContextChangedEvent(previous=previous, current=resolved))
        return True
