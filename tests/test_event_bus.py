"""
Tests for event bus functionality

Event publishing, subscription, middleware, filtering and fault tolerance.
"""

import pytest

from color_cycler.models.color import HSLColor
from color_cycler.models.enums import ContextID
from color_cycler.models.events import ColorChangedEvent, EventSource, EventType, VisibilityChangedEvent
from color_cycler.services.event_bus import EventBus
from color_cycler.services.middleware import log_middleware
from conftest import settle


def color_event(context_id=ContextID.BASE, source=EventSource.CYCLE_ENGINE):
    return ColorChangedEvent(context_id=context_id, color=HSLColor(10, 20, 30), source=source)


def test_basic_pub_sub():
    bus = EventBus()
    received = []

    bus.subscribe(EventType.COLOR_CHANGED, received.append)
    bus.publish(color_event())

    assert len(received) == 1
    assert received[0].color == HSLColor(10, 20, 30)


def test_filtering():
    bus = EventBus()
    dark_events = []
    light_events = []

    bus.subscribe(EventType.COLOR_CHANGED, dark_events.append,
                  filter_fn=lambda e: e.context_id is ContextID.DARK)
    bus.subscribe(EventType.COLOR_CHANGED, light_events.append,
                  filter_fn=lambda e: e.context_id is ContextID.LIGHT)

    bus.publish(color_event(ContextID.DARK))
    bus.publish(color_event(ContextID.LIGHT))
    bus.publish(color_event(ContextID.DARK))

    assert len(dark_events) == 2
    assert len(light_events) == 1


def test_middleware_blocking():
    bus = EventBus()
    received = []

    def block_settings(event):
        if event.source is EventSource.SETTINGS:
            return None
        return event

    bus.add_middleware(log_middleware)
    bus.add_middleware(block_settings)
    bus.subscribe(EventType.COLOR_CHANGED, received.append)

    bus.publish(color_event())
    bus.publish(color_event(source=EventSource.SETTINGS))

    assert len(received) == 1
    assert received[0].source is EventSource.CYCLE_ENGINE


def test_priority():
    bus = EventBus()
    execution_order = []

    bus.subscribe(EventType.COLOR_CHANGED, lambda e: execution_order.append("low"), priority=1)
    bus.subscribe(EventType.COLOR_CHANGED, lambda e: execution_order.append("high"), priority=10)
    bus.subscribe(EventType.COLOR_CHANGED, lambda e: execution_order.append("medium"), priority=5)

    bus.publish(color_event())

    assert execution_order == ["high", "medium", "low"]


def test_failing_handler_does_not_stop_others():
    bus = EventBus()
    received = []

    def broken(event):
        raise RuntimeError("observer crashed")

    bus.subscribe(EventType.COLOR_CHANGED, broken, priority=10)
    bus.subscribe(EventType.COLOR_CHANGED, received.append)

    bus.publish(color_event())

    assert len(received) == 1


def test_unsubscribe_and_event_types_are_separate():
    bus = EventBus()
    received = []

    bus.subscribe(EventType.COLOR_CHANGED, received.append)
    bus.publish(VisibilityChangedEvent(show_status_indicator=True, show_ribbon_icon=True))
    assert received == []

    bus.unsubscribe(EventType.COLOR_CHANGED, received.append)
    bus.publish(color_event())
    assert received == []


def test_history_is_bounded():
    bus = EventBus()
    for _ in range(150):
        bus.publish(color_event())

    assert len(bus.get_event_history(limit=500)) == 100
    bus.clear_history()
    assert bus.get_event_history() == []


@pytest.mark.asyncio
async def test_async_handler_runs_as_task():
    bus = EventBus()
    received = []

    async def handler(event):
        received.append(event)

    bus.subscribe(EventType.COLOR_CHANGED, handler)
    bus.publish(color_event())
    assert received == []

    await settle()
    assert len(received) == 1


def test_event_payload():
    event = color_event(ContextID.LIGHT)

    assert event.type is EventType.COLOR_CHANGED
    assert event.to_data() == {
        "context_id": ContextID.LIGHT,
        "color": HSLColor(10, 20, 30),
        "triggered_by_timer": False,
    }


def test_event_describe_formats_colors_and_enums():
    assert color_event(ContextID.DARK).describe() == \
        "context_id=dark, color=HSL 10 20 30, triggered_by_timer=False"
