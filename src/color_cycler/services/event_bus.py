"""
Event Bus - Central event routing system

Implements pub-sub pattern:
- Publishers: publish(event)
- Subscribers: subscribe(event_type, handler, priority, filter_fn)
- Middleware: add_middleware(middleware_fn)
"""

import inspect
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, List, Optional

from color_cycler.lifecycle.task_registry import create_tracked_task, TaskCategory
from color_cycler.models.enums import LogCategory
from color_cycler.models.events import Event, EventType
from color_cycler.utils.logger import get_logger

log = get_logger().for_category(LogCategory.EVENT)

Handler = Callable[[Event], None]
Middleware = Callable[[Event], Optional[Event]]

HISTORY_LIMIT = 100


@dataclass
class Subscription:
    """One handler registration (returned by subscribe())"""
    event_type: EventType
    handler: Handler
    priority: int = 0
    filter_fn: Optional[Callable[[Event], bool]] = None

    @property
    def name(self) -> str:
        return getattr(self.handler, "__qualname__", repr(self.handler))

    def accepts(self, event: Event) -> bool:
        return self.filter_fn is None or self.filter_fn(event)


class EventBus:
    """
    Central event bus for the color cycler's observers

    - Handlers run by priority (higher first), each behind an optional filter
    - Middleware runs first, in registration order; returning None drops the event
    - Dispatch is synchronous: plain handlers have all run when publish()
      returns, so a cycle has finished notifying observers before the next
      one starts. Coroutine handlers are scheduled as tracked tasks.
    - A failing handler is logged and the remaining handlers still run

    Example:
        bus = EventBus()
        bus.subscribe(EventType.COLOR_CHANGED, status_bar.on_color_changed)
        bus.publish(ColorChangedEvent(context_id=ContextID.BASE, color=color))
    """

    def __init__(self):
        self._subscriptions: Dict[EventType, List[Subscription]] = {}
        self._middleware: List[Middleware] = []
        self._history: Deque[Event] = deque(maxlen=HISTORY_LIMIT)

    def subscribe(
        self,
        event_type: EventType,
        handler: Handler,
        priority: int = 0,
        filter_fn: Optional[Callable[[Event], bool]] = None
    ) -> Subscription:
        """
        Register a handler (sync or async) for one event type

        Args:
            event_type: Which events to listen for
            handler: Function to call
            priority: Higher runs first (default: 0)
            filter_fn: Optional predicate; False skips this handler
        """
        subscription = Subscription(event_type, handler, priority, filter_fn)
        bucket = self._subscriptions.setdefault(event_type, [])
        bucket.append(subscription)
        bucket.sort(key=lambda s: s.priority, reverse=True)

        log.debug("Handler subscribed", event_type=event_type.name, handler=subscription.name, priority=priority)
        return subscription

    def unsubscribe(self, event_type: EventType, handler: Handler) -> None:
        """Remove every registration of handler for event_type"""
        bucket = self._subscriptions.get(event_type, [])
        self._subscriptions[event_type] = [s for s in bucket if s.handler != handler]

    def add_middleware(self, middleware: Middleware) -> None:
        self._middleware.append(middleware)

    def publish(self, event: Event) -> None:
        """Run middleware, record the event, then dispatch it"""
        for middleware in self._middleware:
            event = middleware(event)
            if event is None:
                return

        self._history.append(event)

        subscriptions = self._subscriptions.get(event.type)
        if not subscriptions:
            log.debug("No handlers for event", event_type=event.type.name)
            return

        for subscription in list(subscriptions):
            if subscription.accepts(event):
                self._dispatch(subscription, event)

    def _dispatch(self, subscription: Subscription, event: Event) -> None:
        try:
            if inspect.iscoroutinefunction(subscription.handler):
                create_tracked_task(
                    subscription.handler(event),
                    category=TaskCategory.EVENTBUS,
                    description=f"{subscription.name} for {event.type.name}"
                )
            else:
                subscription.handler(event)
        except Exception as e:
            log.error(f"Event handler failed: {subscription.name} for {event.type.name}", error=repr(e))

    def get_event_history(self, limit: int = 10) -> List[Event]:
        """Recent events, newest last"""
        return list(self._history)[-limit:]

    def clear_history(self) -> None:
        self._history.clear()
