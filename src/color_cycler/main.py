"""
main.py - Terminal host for the color cycler
-------------------------------------------

Responsible for:
- loading configuration and configuring the logger
- wiring the JSON settings store and the application
- reading commands from stdin
- graceful shutdown on `q`, EOF, Ctrl+C or SIGTERM

Commands (one per line):
    c   cycle the active context
    d   theme signal -> dark
    l   theme signal -> light
    b   clear the theme signal (base context)
    s   toggle the status indicator
    q   quit
"""

import argparse
import asyncio
import contextlib
import signal
import sys
from pathlib import Path
from typing import List, Optional

from color_cycler.app import ColorCyclerApp
from color_cycler.lifecycle.task_registry import create_tracked_task, TaskCategory
from color_cycler.managers import ConfigManager, StateManager
from color_cycler.models.enums import LogCategory
from color_cycler.models.events import ColorChangedEvent, EventType
from color_cycler.utils.logger import configure_logger, get_logger

log = get_logger().for_category(LogCategory.SYSTEM)

THEME_COMMANDS = {"d": "dark", "l": "light", "b": None}


class ThemeState:
    """Mutable theme signal source driven by terminal commands"""

    def __init__(self, theme: Optional[str] = None):
        self.theme = theme

    def __call__(self) -> Optional[str]:
        return self.theme


def print_status(app: ColorCyclerApp, event: ColorChangedEvent) -> None:
    """Status indicator: printed on every color change while it is shown"""
    if app.show_status_indicator:
        channels = " ".join(f"{k}={v}" for k, v in app.style_channels.items())
        print(f"[{event.context_id.value}] {app.status_text}  ({channels})", flush=True)


def handle_command(app: ColorCyclerApp, theme: ThemeState, command: str) -> bool:
    """
    Apply one terminal command

    Returns:
        False when the host should quit
    """
    command = command.strip().lower()
    if not command:
        return True
    if command == "q":
        return False
    if command == "c":
        app.cycle()
    elif command in THEME_COMMANDS:
        theme.theme = THEME_COMMANDS[command]
        app.on_theme_changed()
    elif command == "s":
        app.settings_service.set_show_status_indicator(not app.show_status_indicator)
    else:
        log.warn(f"Unknown command: {command!r} (c, d, l, b, s, q)")
    return True


async def read_commands(app: ColorCyclerApp, theme: ThemeState, stop: asyncio.Event) -> None:
    """
    Read stdin lines until `q` or EOF

    readline() runs in the default executor, so after Ctrl+C the process
    exits once the pending line read returns (press Enter).
    """
    loop = asyncio.get_running_loop()
    try:
        while True:
            line = await loop.run_in_executor(None, sys.stdin.readline)
            if not line or not handle_command(app, theme, line):
                break
    finally:
        stop.set()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="color-cycler", description="Cycle an accent color from the terminal")
    parser.add_argument("--config", help="Path to a config YAML file (default: bundled config.yaml)")
    return parser.parse_args(argv)


async def main(argv: Optional[List[str]] = None) -> None:
    """Main async entry point (configuration, wiring, command loop)"""
    args = parse_args(argv)

    config_manager = ConfigManager(Path(args.config).resolve()) if args.config else ConfigManager()
    config = config_manager.load()
    configure_logger(config.log_level, config.use_colors)

    theme = ThemeState(config.theme)
    app = ColorCyclerApp(
        StateManager(config.state_path),
        theme,
        persist_window=config.persist_window_seconds,
    )
    app.event_bus.subscribe(EventType.COLOR_CHANGED, lambda event: print_status(app, event))

    await app.start()

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        # not available on every platform; Ctrl+C then surfaces as KeyboardInterrupt
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, stop.set)

    reader = create_tracked_task(
        read_commands(app, theme, stop),
        category=TaskCategory.INPUT,
        description="Terminal command reader"
    )

    log.info("Ready. Commands: c=cycle d=dark l=light b=base s=status q=quit")
    try:
        await stop.wait()
    finally:
        reader.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await reader
        await app.shutdown()
        log.info("Color cycler shut down cleanly.")


def run() -> None:
    """Console script entry point"""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")


if __name__ == "__main__":
    run()
