"""Settings service - configuration boundary for the host settings panel"""

from typing import Any, Optional

from color_cycler.models import params
from color_cycler.models.color import HSLColor
from color_cycler.models.domain import ContextSettings, GlobalSettings, UnknownContextError
from color_cycler.models.domain.behavior import ChannelSetting, DEFAULT_PRESET_COLOR
from color_cycler.models.enums import BehaviorKind, ColorChannel, ContextID, LogCategory
from color_cycler.models.events import VisibilityChangedEvent
from color_cycler.services.context_selector import ContextSelector
from color_cycler.services.cycle_engine import CycleEngine
from color_cycler.services.event_bus import EventBus
from color_cycler.services.persistence import PersistenceService
from color_cycler.utils.colors import coerce_number, normalize
from color_cycler.utils.logger import get_logger

log = get_logger().for_category(LogCategory.CONFIG)


class PresetIndexError(IndexError):
    """Raised when a preset edit targets an index outside the color list"""


class SettingsService:
    """
    Applies configuration changes coming from the host

    Every numeric value is clamped to its range before it is stored;
    nothing is rejected except removing the last preset. Each change is
    saved immediately. Per-context setters default to the active context.

    Behavior resets (same as selecting the behavior in the panel):
    - set_behavior() applies the behavior's starting color
    - changing any increment value applies {startAngle, saturation, lightness}
    - changing a random fixed value applies the fixed triple
    - editing/removing a preset applies the affected entry
    """

    def __init__(
        self,
        settings: GlobalSettings,
        engine: CycleEngine,
        selector: ContextSelector,
        persistence: PersistenceService,
        event_bus: EventBus,
    ):
        self.settings = settings
        self.engine = engine
        self.selector = selector
        self.persistence = persistence
        self.event_bus = event_bus

    # === Internal Methods ===

    def _context_id(self, context_id: Optional[ContextID]) -> ContextID:
        if context_id is None:
            return self.selector.active
        try:
            return ContextID(context_id)
        except ValueError:
            raise UnknownContextError(context_id) from None

    def _context(self, context_id: Optional[ContextID]) -> ContextSettings:
        return self.settings.get_context(self._context_id(context_id))

    def _save(self) -> None:
        self.persistence.persist(self.settings)

    def _rearm_if_active(self, context_id: ContextID) -> None:
        if context_id is self.selector.active:
            self.engine.arm_timer()

    def _publish_visibility(self) -> None:
        self.event_bus.publish(VisibilityChangedEvent(
            show_status_indicator=self.settings.show_status_indicator,
            show_ribbon_icon=self.settings.show_ribbon_icon,
        ))

    # === Global flags ===

    def set_show_status_indicator(self, enabled: bool) -> None:
        self.settings.show_status_indicator = bool(enabled)
        self._publish_visibility()
        self._save()
        log.info(f"Status indicator {'shown' if enabled else 'hidden'}")

    def set_show_ribbon_icon(self, enabled: bool) -> None:
        self.settings.show_ribbon_icon = bool(enabled)
        self._publish_visibility()
        self._save()
        log.info(f"Ribbon icon {'shown' if enabled else 'hidden'}")

    def set_use_separate_contexts(self, enabled: bool) -> None:
        """Toggle per-theme contexts; refreshes display/timer if the active context changes"""
        self.settings.use_separate_contexts = bool(enabled)
        self._save()
        log.info(f"Separate contexts {'enabled' if enabled else 'disabled'}")
        self.selector.refresh()

    # === Behavior ===

    def set_behavior(self, kind: Any, context_id: Optional[ContextID] = None) -> bool:
        """
        Select the cycle behavior and apply its starting color

        Returns:
            False (nothing changed) for an unrecognized behavior
        """
        try:
            behavior = BehaviorKind(kind)
        except ValueError:
            log.warn("Ignoring unknown behavior", behavior=kind)
            return False

        cid = self._context_id(context_id)
        self._context(cid).behavior = behavior
        self.engine.apply_initial_color(cid)
        self._rearm_if_active(cid)
        log.info("Behavior selected", context=cid.value, behavior=behavior.value)
        return True

    def set_color(self, color: HSLColor, context_id: Optional[ContextID] = None) -> HSLColor:
        """Set the current color directly (normalized)"""
        return self.engine.apply_color(context_id, color)

    # === Increment ===

    def set_increment(
        self,
        *,
        start_angle: Any = None,
        degrees: Any = None,
        saturation: Any = None,
        lightness: Any = None,
        context_id: Optional[ContextID] = None,
    ) -> None:
        """Update increment values (only those given), then reset the color if increment is selected"""
        cid = self._context_id(context_id)
        context = self._context(cid)
        increment = context.increment

        if start_angle is not None:
            increment.start_angle = params.START_ANGLE.clamp(start_angle)
        if degrees is not None:
            increment.degrees = params.HUE_DEGREES.clamp(degrees)
        if saturation is not None:
            increment.saturation = params.SATURATION.clamp(saturation)
        if lightness is not None:
            increment.lightness = params.LIGHTNESS.clamp(lightness)

        if context.behavior is BehaviorKind.INCREMENT:
            self.engine.apply_initial_color(cid)
        else:
            self._save()

    # === Random ===

    def set_random_channel(
        self,
        channel: ColorChannel,
        *,
        is_random: Optional[bool] = None,
        fixed_value: Any = None,
        context_id: Optional[ContextID] = None,
    ) -> None:
        """
        Update one Random channel

        Toggling is_random only saves; changing the fixed value also resets
        the color to the fixed triple when random is selected.
        """
        cid = self._context_id(context_id)
        context = self._context(cid)
        setting: ChannelSetting = {
            ColorChannel.HUE: context.random.hue,
            ColorChannel.SATURATION: context.random.saturation,
            ColorChannel.LIGHTNESS: context.random.lightness,
        }[channel]
        param = {
            ColorChannel.HUE: params.HUE,
            ColorChannel.SATURATION: params.SATURATION,
            ColorChannel.LIGHTNESS: params.LIGHTNESS,
        }[channel]

        if is_random is not None:
            setting.is_random = bool(is_random)
        if fixed_value is not None:
            setting.fixed_value = param.clamp(fixed_value)
            if context.behavior is BehaviorKind.RANDOM:
                self.engine.apply_initial_color(cid)
                return
        self._save()

    # === Preset ===

    def _check_preset_index(self, context: ContextSettings, index: int) -> None:
        if not 0 <= index < len(context.preset.color_list):
            raise PresetIndexError(f"Preset index {index} out of range (0..{len(context.preset.color_list) - 1})")

    def add_preset(self, color: HSLColor = DEFAULT_PRESET_COLOR, context_id: Optional[ContextID] = None) -> int:
        """Append a preset color, return its index"""
        context = self._context(context_id)
        index = context.preset.add(self._bounded(color))
        self._save()
        return index

    def update_preset(self, index: int, color: HSLColor, context_id: Optional[ContextID] = None) -> None:
        """Replace a preset entry, make it current and apply it"""
        cid = self._context_id(context_id)
        context = self._context(cid)
        self._check_preset_index(context, index)

        context.preset.color_list[index] = self._bounded(color)
        context.preset.current_index = index
        self.engine.apply_color(cid, context.preset.color_list[index])

    def remove_preset(self, index: int, context_id: Optional[ContextID] = None) -> bool:
        """
        Remove a preset entry; current index resets to 0 and that entry is applied

        Returns:
            False if the entry is the only one left (list unchanged)
        """
        cid = self._context_id(context_id)
        context = self._context(cid)
        self._check_preset_index(context, index)

        if not context.preset.remove(index):
            log.warn("Refusing to remove the last preset color", context=cid.value)
            return False

        self.engine.apply_color(cid, context.preset.color_list[0])
        return True

    @staticmethod
    def _bounded(color: HSLColor) -> HSLColor:
        return normalize(color)

    # === Timer ===

    def set_timer(
        self,
        *,
        enabled: Optional[bool] = None,
        seconds: Any = ...,
        context_id: Optional[ContextID] = None,
    ) -> None:
        """
        Update the timer; the active context's timer is re-armed immediately

        seconds: int/str in [1, 86400] (clamped); None, 0 or unparseable
        text clears it.
        """
        cid = self._context_id(context_id)
        timer = self._context(cid).timer

        if enabled is not None:
            timer.enabled = bool(enabled)
        if seconds is not ...:
            number = coerce_number(seconds)
            timer.seconds = params.TIMER_SECONDS.clamp(number) if number >= 1 else None

        self._save()
        self._rearm_if_active(cid)
        log.info("Timer updated", context=cid.value, enabled=timer.enabled, seconds=timer.seconds)

    def set_timer_seconds(self, value: Any, context_id: Optional[ContextID] = None) -> None:
        """
        Text-field style timer input: a number enables the timer, blank or
        non-numeric text disables it
        """
        number = coerce_number(value)
        self.set_timer(enabled=number >= 1, seconds=value, context_id=context_id)
