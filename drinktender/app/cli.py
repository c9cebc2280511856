"""
Command-line entry point for DrinkTender.

One-shot commands mutate or print the shared state and exit. `watch` hosts
every display surface in-process and accepts drink commands on stdin.
"""

import argparse
import logging
import logging.handlers
import signal
import sys
import threading
from typing import Optional

from drinktender.config import DELAY_PRESETS_MINUTES, DrinkTenderConfig, load_config
from drinktender.outputs.logging_scheduler import LoggingNotificationScheduler
from drinktender.surfaces import SurfaceHost, render_text

from .tender import DrinkTender

logger = logging.getLogger(__name__)

WATCH_HELP = "commands: d = record drink, r = reset timer, c = reset count, q = quit"


def configure_logging(config: DrinkTenderConfig) -> None:
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if config.log_file is None:
        return

    try:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        # WatchedFileHandler reopens the file after external rotation
        handler = logging.handlers.WatchedFileHandler(str(config.log_file), mode='a')
    except OSError as e:
        logger.warning(f"Cannot open log file {config.log_file}: {e}")
        return
    handler.setFormatter(logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s'))
    logging.getLogger().addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="drinktender", description="Drink pacing reminder timer")
    commands = parser.add_subparsers(dest="command")

    commands.add_parser("status", help="Show readiness, remaining time and drink count")
    commands.add_parser("drink", help="Record a drink and start the cooldown")
    commands.add_parser("reset", help="Clear the running cooldown")
    commands.add_parser("reset-count", help="Zero the drink count")

    delay = commands.add_parser("delay", help="Set the cooldown length in minutes")
    delay.add_argument("minutes", type=int)
    delay.add_argument("--any", action="store_true", help="Accept values outside the presets")
    delay.add_argument("--reschedule", action="store_true", help="Move a pending alert to the new ready time")

    notifications = commands.add_parser("notifications", help="Turn ready alerts on or off")
    notifications.add_argument("mode", choices=("on", "off", "toggle"))

    watch = commands.add_parser("watch", help="Host every display surface until quit")
    watch.add_argument("--seconds", type=float, default=None, help="Stop after this many seconds")

    return parser


def format_status(tender: DrinkTender) -> str:
    data = tender.status()
    state = tender.reader.read()
    lines = [
        "Ready!" if data.can_drink else f"Next drink in {data.formatted_remaining}",
        f"Drinks: {data.drink_count}",
        f"Delay: {data.delay_minutes}m",
        f"Notifications: {'on' if state.notifications_enabled else 'off'}",
    ]
    if data.last_drink_time is not None:
        lines.append(f"Last drink: {data.last_drink_time.isoformat()}")
    return "\n".join(lines)


def run_watch(tender: DrinkTender, seconds: Optional[float] = None, stream=None) -> None:
    """
    Host all surfaces and read single-letter commands from `stream`.

    Returns on "q", end of input, SIGINT/SIGTERM, or after `seconds`.
    """
    stream = stream or sys.stdin
    done = threading.Event()

    def on_render(surface, entry):
        print(f"[{surface.kind}] {render_text(surface.kind, entry)}", flush=True)

    def read_commands():
        actions = {
            "d": tender.recorder.record_drink,
            "r": tender.recorder.reset_timer,
            "c": tender.recorder.reset_count,
        }
        for line in stream:
            command = line.strip().lower()
            if command == "q":
                break
            action = actions.get(command)
            if action is None:
                if command:
                    print(WATCH_HELP, flush=True)
                continue
            action()
        done.set()

    host = SurfaceHost(tender.dispatcher, on_render, clock=tender.clock)
    host.start()
    print(WATCH_HELP, flush=True)

    reader = threading.Thread(target=read_commands, name="watch-input", daemon=True)
    reader.start()

    try:
        done.wait(seconds)
    except KeyboardInterrupt:
        pass
    finally:
        host.stop()
        if done.is_set():
            reader.join()


def main(args: Optional[list[str]] = None) -> int:
    """
    Main entry point for DrinkTender.

    Returns:
        Process exit status
    """
    parser = build_parser()
    options = parser.parse_args(args)

    try:
        config = load_config()
    except ValueError as e:
        print(f"drinktender: {e}", file=sys.stderr)
        return 2

    configure_logging(config)

    command = options.command or "status"
    scheduler = None
    if command != "watch" and config.notifier == "timer":
        # The process exits before any timer could fire
        scheduler = LoggingNotificationScheduler()

    tender = DrinkTender(config, scheduler=scheduler)

    try:
        if command == "status":
            pass
        elif command == "drink":
            tender.recorder.record_drink()
        elif command == "reset":
            tender.recorder.reset_timer()
        elif command == "reset-count":
            tender.recorder.reset_count()
        elif command == "delay":
            if not options.any and options.minutes not in DELAY_PRESETS_MINUTES:
                presets = ", ".join(str(m) for m in DELAY_PRESETS_MINUTES)
                print(f"drinktender: delay must be one of {presets} (or pass --any)", file=sys.stderr)
                return 2
            if options.minutes <= 0:
                print("drinktender: delay must be a positive number of minutes", file=sys.stderr)
                return 2
            tender.recorder.set_delay(options.minutes, reschedule=options.reschedule)
        elif command == "notifications":
            if options.mode == "toggle":
                tender.recorder.toggle_notifications()
            else:
                tender.recorder.set_notifications_enabled(options.mode == "on")
        elif command == "watch":
            signal.signal(signal.SIGTERM, lambda signum, frame: sys.exit(0))
            tender.start()
            run_watch(tender, seconds=options.seconds)

        print(format_status(tender))
        return 0
    finally:
        tender.close()
