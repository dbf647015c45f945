import random

from color_cycler.behaviors import BehaviorRegistry, IncrementBehavior, PresetBehavior, RandomBehavior
from color_cycler.models.color import HSLColor
from color_cycler.models.domain import ChannelSetting, ContextSettings, IncrementParams, PresetParams, RandomParams
from color_cycler.models.enums import BehaviorKind
from color_cycler.utils.colors import normalize


def test_increment_adds_degrees_and_resets_static_channels():
    context = ContextSettings(
        color=HSLColor(h=350, s=10, l=90),
        increment=IncrementParams(start_angle=0, degrees=30, saturation=100, lightness=50),
    )
    raw = IncrementBehavior().next_color(context.color, context)

    assert raw == HSLColor(h=380, s=100, l=50)
    assert normalize(raw) == HSLColor(h=20, s=100, l=50)


def test_random_with_every_channel_fixed_returns_fixed_triple():
    context = ContextSettings(
        behavior=BehaviorKind.RANDOM,
        random=RandomParams(
            hue=ChannelSetting(False, 200),
            saturation=ChannelSetting(False, 40),
            lightness=ChannelSetting(False, 60),
        ),
    )
    behavior = RandomBehavior(random.Random(1))

    for _ in range(5):
        assert behavior.next_color(context.color, context) == HSLColor(h=200, s=40, l=60)


def test_random_channels_stay_in_range():
    context = ContextSettings(
        behavior=BehaviorKind.RANDOM,
        random=RandomParams(
            hue=ChannelSetting(True, 0),
            saturation=ChannelSetting(True, 0),
            lightness=ChannelSetting(True, 0),
        ),
    )
    behavior = RandomBehavior(random.Random(42))

    for _ in range(200):
        color = behavior.next_color(context.color, context)
        assert 0 <= color.h < 360
        assert 0 <= color.s < 100
        assert 0 <= color.l < 100
        assert all(isinstance(v, int) for v in (color.h, color.s, color.l))


def test_seeded_random_is_reproducible():
    context = ContextSettings(behavior=BehaviorKind.RANDOM)
    first = RandomBehavior(random.Random(3))
    second = RandomBehavior(random.Random(3))

    assert [first.next_color(context.color, context) for _ in range(5)] == \
        [second.next_color(context.color, context) for _ in range(5)]


def test_preset_advances_and_wraps():
    colors = [HSLColor(0, 100, 50), HSLColor(120, 100, 50), HSLColor(240, 100, 50)]
    context = ContextSettings(
        behavior=BehaviorKind.PRESET,
        preset=PresetParams(current_index=2, color_list=list(colors)),
    )
    behavior = PresetBehavior()

    assert behavior.next_color(context.color, context) == colors[0]
    assert context.preset.current_index == 0
    assert behavior.next_color(context.color, context) == colors[1]
    assert context.preset.current_index == 1


def test_preset_single_entry_repeats():
    context = ContextSettings(behavior=BehaviorKind.PRESET)
    behavior = PresetBehavior()

    assert behavior.next_color(context.color, context) == HSLColor(0, 100, 50)
    assert context.preset.current_index == 0


def test_preset_remove_refuses_last_entry():
    preset = PresetParams(color_list=[HSLColor(10, 20, 30)])

    assert preset.remove(0) is False
    assert preset.color_list == [HSLColor(10, 20, 30)]


def test_preset_remove_resets_index():
    preset = PresetParams(current_index=2, color_list=[HSLColor(0), HSLColor(1), HSLColor(2)])

    assert preset.remove(1) is True
    assert preset.current_index == 0
    assert preset.color_list == [HSLColor(0), HSLColor(2)]


def test_preset_invalid_index_and_empty_list_are_repaired():
    preset = PresetParams(current_index=5, color_list=[])

    assert preset.color_list == [HSLColor(0, 100, 50)]
    assert preset.current_index == 0


def test_registry_dispatches_by_behavior():
    registry = BehaviorRegistry.default(random.Random(0))
    context = ContextSettings(color=HSLColor(10, 100, 50))

    assert registry.next_color(context) == HSLColor(40, 100, 50)

    context.behavior = BehaviorKind.PRESET
    assert registry.next_color(context) == HSLColor(0, 100, 50)


def test_registry_without_strategy_keeps_current_color():
    registry = BehaviorRegistry({BehaviorKind.INCREMENT: IncrementBehavior()})
    context = ContextSettings(color=HSLColor(77, 50, 50), behavior=BehaviorKind.RANDOM)

    assert registry.next_color(context) == HSLColor(77, 50, 50)
    assert registry.initial_color(context) == HSLColor(77, 50, 50)


def test_initial_colors_per_behavior():
    context = ContextSettings(
        increment=IncrementParams(start_angle=90, degrees=10, saturation=80, lightness=40),
        random=RandomParams(hue=ChannelSetting(True, 15), saturation=ChannelSetting(False, 25),
                            lightness=ChannelSetting(False, 35)),
        preset=PresetParams(current_index=1, color_list=[HSLColor(1, 2, 3), HSLColor(4, 5, 6)]),
    )
    registry = BehaviorRegistry.default()

    assert registry.initial_color(context) == HSLColor(90, 80, 40)
    context.behavior = BehaviorKind.RANDOM
    assert registry.initial_color(context) == HSLColor(15, 25, 35)
    context.behavior = BehaviorKind.PRESET
    assert registry.initial_color(context) == HSLColor(4, 5, 6)
