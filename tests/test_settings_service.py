import pytest

from color_cycler.models.color import HSLColor
from color_cycler.models.domain import UnknownContextError
from color_cycler.models.enums import BehaviorKind, ColorChannel, ContextID
from color_cycler.models.events import EventType
from color_cycler.services.settings_service import PresetIndexError
from conftest import settle


@pytest.mark.asyncio
async def test_set_behavior_applies_initial_color(settings_service, settings, persistence, store, color_events):
    context = settings.get_context(ContextID.BASE)
    context.random.hue.fixed_value = 200
    context.random.saturation.fixed_value = 40
    context.random.lightness.fixed_value = 60

    assert settings_service.set_behavior("random") is True
    await persistence.drain()

    assert context.behavior is BehaviorKind.RANDOM
    assert context.color == HSLColor(200, 40, 60)
    assert color_events[-1].color == HSLColor(200, 40, 60)
    assert store.saves[-1]["contexts"]["base"]["behavior"] == "random"


@pytest.mark.asyncio
async def test_unknown_behavior_is_ignored(settings_service, settings, persistence, store):
    assert settings_service.set_behavior("wobble") is False
    await persistence.drain()

    assert settings.get_context(ContextID.BASE).behavior is BehaviorKind.INCREMENT
    assert store.saves == []


@pytest.mark.asyncio
async def test_increment_values_are_clamped_and_reset_color(settings_service, settings):
    settings_service.set_increment(start_angle=-5, degrees=999, saturation="80", lightness=140)
    context = settings.get_context(ContextID.BASE)

    assert context.increment.start_angle == 0
    assert context.increment.degrees == 360
    assert context.increment.saturation == 80
    assert context.increment.lightness == 100
    assert context.color == HSLColor(0, 80, 100)


@pytest.mark.asyncio
async def test_increment_change_with_other_behavior_only_saves(settings_service, settings, persistence, store):
    context = settings.get_context(ContextID.BASE)
    context.behavior = BehaviorKind.PRESET
    context.color = HSLColor(5, 5, 5)

    settings_service.set_increment(degrees=90)
    await persistence.drain()

    assert context.increment.degrees == 90
    assert context.color == HSLColor(5, 5, 5)
    assert len(store.saves) == 1


@pytest.mark.asyncio
async def test_random_fixed_value_resets_color_when_random_selected(settings_service, settings):
    settings_service.set_behavior(BehaviorKind.RANDOM)
    settings_service.set_random_channel(ColorChannel.LIGHTNESS, fixed_value=500)
    context = settings.get_context(ContextID.BASE)

    assert context.random.lightness.fixed_value == 100
    assert context.color == HSLColor(0, 100, 100)

    settings_service.set_random_channel(ColorChannel.HUE, is_random=False)
    assert context.random.hue.is_random is False


@pytest.mark.asyncio
async def test_preset_editing(settings_service, settings):
    context = settings.get_context(ContextID.BASE)
    settings_service.set_behavior("preset")

    assert settings_service.add_preset() == 1
    assert context.preset.color_list[1] == HSLColor(0, 100, 50)

    settings_service.update_preset(1, HSLColor(400, 50, 50))
    assert context.preset.color_list[1] == HSLColor(40, 50, 50)
    assert context.preset.current_index == 1
    assert context.color == HSLColor(40, 50, 50)

    assert settings_service.remove_preset(0) is True
    assert context.preset.color_list == [HSLColor(40, 50, 50)]
    assert context.preset.current_index == 0
    assert context.color == HSLColor(40, 50, 50)

    assert settings_service.remove_preset(0) is False
    assert len(context.preset.color_list) == 1


@pytest.mark.asyncio
async def test_removing_last_preset_warns(settings_service, log_records):
    assert settings_service.remove_preset(0) is False

    assert [r.level.name for r in log_records] == ["WARN"]
    assert "last preset" in log_records[0].message


@pytest.mark.asyncio
async def test_preset_index_out_of_range(settings_service):
    with pytest.raises(PresetIndexError):
        settings_service.update_preset(3, HSLColor())
    with pytest.raises(IndexError):
        settings_service.remove_preset(-1)


@pytest.mark.asyncio
async def test_timer_seconds_text_input(settings_service, settings, engine):
    timer = settings.get_context(ContextID.BASE).timer

    settings_service.set_timer_seconds("45")
    assert (timer.enabled, timer.seconds) == (True, 45)
    assert engine.scheduler.is_active is True
    assert engine.scheduler.interval == 45

    settings_service.set_timer_seconds("")
    assert (timer.enabled, timer.seconds) == (False, None)
    assert engine.scheduler.is_active is False

    settings_service.set_timer_seconds("abc")
    assert (timer.enabled, timer.seconds) == (False, None)

    settings_service.set_timer_seconds(100000)
    assert timer.seconds == 86400
    await engine.shutdown()


@pytest.mark.asyncio
async def test_timer_on_inactive_context_is_not_armed(settings_service, settings, engine):
    settings_service.set_timer(enabled=True, seconds=20, context_id=ContextID.DARK)
    await settle()

    assert settings.get_context(ContextID.DARK).timer.interval == 20
    assert engine.scheduler.is_active is False


@pytest.mark.asyncio
async def test_visibility_flags_publish_and_save(settings_service, settings, bus, persistence, store):
    events = []
    bus.subscribe(EventType.VISIBILITY_CHANGED, events.append)

    settings_service.set_show_status_indicator(True)
    settings_service.set_show_ribbon_icon(False)
    await persistence.drain()

    assert settings.show_status_indicator is True
    assert settings.show_ribbon_icon is False
    assert [(e.show_status_indicator, e.show_ribbon_icon) for e in events] == [(True, True), (True, False)]
    assert store.record["showRibbonIcon"] is False


@pytest.mark.asyncio
async def test_enabling_separate_contexts_switches_active_context(settings_service, selector, theme, color_events):
    theme.theme = "dark"

    settings_service.set_use_separate_contexts(True)

    assert selector.active is ContextID.DARK
    assert color_events[-1].context_id is ContextID.DARK


@pytest.mark.asyncio
async def test_per_context_setters(settings_service, settings):
    settings_service.set_color(HSLColor(100, 20, 30), context_id=ContextID.LIGHT)

    assert settings.get_context(ContextID.LIGHT).color == HSLColor(100, 20, 30)
    assert settings.get_context(ContextID.BASE).color == HSLColor(0, 100, 50)

    with pytest.raises(UnknownContextError):
        settings_service.set_behavior("random", context_id="sepia")
