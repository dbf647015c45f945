import asyncio
import copy
import io
import random
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio

from color_cycler.app import ColorCyclerApp
from color_cycler.lifecycle.task_registry import TaskRegistry
from color_cycler.models.domain import GlobalSettings
from color_cycler.models.enums import LogLevel
from color_cycler.models.events import EventType
from color_cycler.services.context_selector import ContextSelector
from color_cycler.services.cycle_engine import CycleEngine
from color_cycler.services.event_bus import EventBus
from color_cycler.services.persistence import PersistenceService
from color_cycler.services.settings_service import SettingsService
from color_cycler.utils.logger import configure_logger, get_logger


class InMemoryStore:
    """Host settings store double: keeps the last record, counts writes"""

    def __init__(self, record: Any = None):
        self.record = copy.deepcopy(record)
        self.saves: List[Dict[str, Any]] = []
        self.load_error: Optional[Exception] = None
        self.save_error: Optional[Exception] = None

    async def load(self):
        if self.load_error is not None:
            raise self.load_error
        return copy.deepcopy(self.record)

    async def save(self, record):
        if self.save_error is not None:
            raise self.save_error
        self.record = copy.deepcopy(record)
        self.saves.append(self.record)


class FakeClock:
    """Monotonic clock double, advanced by hand"""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ThemeSource:
    """Theme signal double; set .theme or .error"""

    def __init__(self, theme: Optional[str] = None):
        self.theme = theme
        self.error: Optional[Exception] = None

    def __call__(self) -> Optional[str]:
        if self.error is not None:
            raise self.error
        return self.theme


class ManualSleep:
    """
    Sleep double for timer tasks: every call blocks until fire()

    Records requested intervals in .calls.
    """

    def __init__(self):
        self.calls: List[float] = []
        self._waiters: List[asyncio.Future] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        waiter = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        await waiter

    @property
    def pending(self) -> int:
        return len([w for w in self._waiters if not w.done()])

    async def fire(self, times: int = 1) -> None:
        """Let pending timers elapse `times` times"""
        for _ in range(times):
            await settle()
            waiters, self._waiters = self._waiters, []
            for waiter in waiters:
                if not waiter.done():
                    waiter.set_result(None)
            await settle()


async def settle(rounds: int = 5) -> None:
    """Yield to the loop so scheduled tasks get to run"""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture(autouse=True)
def _quiet_logger_and_registry():
    configure_logger(LogLevel.ERROR, use_colors=False)
    TaskRegistry._instance = None
    yield
    TaskRegistry._instance = None


@pytest.fixture
def log_records():
    """Captures WARN and ERROR records emitted during the test"""
    logger = get_logger()
    records = []
    logger.min_level = LogLevel.WARN
    logger.stream = io.StringIO()
    logger.set_listener(records.append)
    yield records
    logger.set_listener(None)
    logger.stream = None


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def theme():
    return ThemeSource()


@pytest.fixture
def manual_sleep():
    return ManualSleep()


@pytest.fixture
def settings():
    return GlobalSettings()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def persistence(store, clock):
    return PersistenceService(store, clock=clock)


@pytest.fixture
def selector(settings, theme, bus):
    return ContextSelector(settings, theme, bus)


@pytest.fixture
def engine(settings, selector, persistence, bus, manual_sleep):
    return CycleEngine(settings, selector, persistence, bus, sleep=manual_sleep)


@pytest.fixture
def settings_service(settings, engine, selector, persistence, bus):
    return SettingsService(settings, engine, selector, persistence, bus)


@pytest.fixture
def color_events(bus):
    """Collects every COLOR_CHANGED published on the bus"""
    received = []
    bus.subscribe(EventType.COLOR_CHANGED, received.append)
    return received


@pytest_asyncio.fixture
async def app(store, theme, clock, manual_sleep):
    application = ColorCyclerApp(
        store,
        theme,
        clock=clock,
        rng=random.Random(7),
        sleep=manual_sleep,
    )
    yield application
    await application.shutdown()
