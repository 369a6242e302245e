#!/usr/bin/env python3
"""
Event Scheduler - console entry point

A thin menu over EventScheduler: every choice maps to one scheduler call,
and the scheduler's notices are printed as they arrive.

Usage:
    event-scheduler                          # Interactive menu
    event-scheduler --file events.txt        # Default file for save/load
    event-scheduler --load                   # Load the default file on start
    event-scheduler --log-level DEBUG        # Show scheduler logs on stderr
"""
import argparse
import sys
from typing import Callable

from loguru import logger

from .config import settings
from .scheduler import EventScheduler, SchedulerNotice, format_event

MENU = """
Menu:
1. Add Event
2. Display Events
3. Process Next Event
4. Remove Event
5. Save Events to File
6. Load Events from File
7. Exit"""

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def setup_logging(level: str = "INFO") -> None:
    """Send scheduler logs to stderr at the given level."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format="{time:HH:mm:ss} | {level} | {message}")


def _ask_int(prompt: str, input_fn: InputFn, output: OutputFn) -> int:
    while True:
        raw = input_fn(prompt).strip()
        try:
            return int(raw)
        except ValueError:
            output("Please enter a whole number.")


def _ask_path(prompt: str, scheduler: EventScheduler, input_fn: InputFn) -> str | None:
    """Ask for a filename; an empty answer means the default data file."""
    default = scheduler.data_file
    suffix = f" [{default}]" if default else ""
    raw = input_fn(f"{prompt}{suffix}: ").strip()
    return raw or None


def display_events(scheduler: EventScheduler, output: OutputFn) -> None:
    view = scheduler.peek_ordered()
    if not view:
        output("No events scheduled.")
        return
    output("Scheduled Events (Priority Order):")
    for event in view:
        output(format_event(event))


def handle_choice(
    choice: int,
    scheduler: EventScheduler,
    input_fn: InputFn = input,
    output: OutputFn = print,
) -> bool:
    """Run one menu choice.

    Returns:
        False when the user chose to exit, True otherwise
    """
    if choice == 1:
        name = input_fn("Enter event name: ").strip()
        priority = _ask_int("Enter priority (lower number = higher priority): ", input_fn, output)
        time = _ask_int("Enter time (in 24-hour format, e.g., 1430 for 2:30 PM): ", input_fn, output)
        description = input_fn("Enter event description: ")
        scheduler.add_event(name, priority, time, description)
    elif choice == 2:
        display_events(scheduler, output)
    elif choice == 3:
        scheduler.process_next_event()
    elif choice == 4:
        name = input_fn("Enter event name to remove: ").strip()
        scheduler.remove_event(name)
    elif choice == 5:
        path = _ask_path("Enter filename to save events", scheduler, input_fn)
        if path is None and scheduler.data_file is None:
            output("No filename given.")
        else:
            scheduler.save_to_file(path)
    elif choice == 6:
        path = _ask_path("Enter filename to load events", scheduler, input_fn)
        if path is None and scheduler.data_file is None:
            output("No filename given.")
        else:
            scheduler.load_from_file(path)
    elif choice == 7:
        output("Exiting Event Scheduler.")
        return False
    else:
        output("Invalid choice. Please try again.")
    return True


def run_menu(
    scheduler: EventScheduler,
    input_fn: InputFn = input,
    output: OutputFn = print,
) -> None:
    """Loop over the menu until the user exits or input ends."""
    output("Event Scheduler")
    try:
        while True:
            output(MENU)
            choice = _ask_int("Enter your choice: ", input_fn, output)
            if not handle_choice(choice, scheduler, input_fn, output):
                break
    except (EOFError, KeyboardInterrupt):
        output("")
        output("Exiting Event Scheduler.")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Priority event scheduler")
    parser.add_argument("--file", help="Default file for save/load")
    parser.add_argument("--load", action="store_true", help="Load the data file on start")
    parser.add_argument("--log-level", default=None, help="Log level (default from settings)")
    args = parser.parse_args(argv)

    setup_logging(args.log_level or settings.log_level)

    scheduler = EventScheduler(
        data_file=args.file or settings.data_file,
        encoding=settings.encoding,
        on_malformed=settings.on_malformed,
    )

    def print_notice(notice: SchedulerNotice) -> None:
        print(notice.message)

    scheduler.add_handler(print_notice)

    if args.load:
        scheduler.load_from_file()

    run_menu(scheduler)
    return 0


if __name__ == "__main__":
    sys.exit(main())
