#!/usr/bin/env python3
"""Mindfulness Timer: a small menu of timed, quiet activities.

Breathe, reflect, or list the good things. Every finished activity adds one
line to a plain text log you can read back, most recent first.

Usage:
    python mindfulness.py
    python mindfulness.py --log-file ~/mindfulness.log --seed 3
"""

from __future__ import annotations

import argparse
import logging
import math
import os
import random
import sys
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from tracker import Selection, VisibilityTracker

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

_ENV_VAR: str = "MINDFULNESS_LOG_FILE"
_DEFAULT_LOG_PATH: Path = Path("activity_log.txt")
LOG_TIME_FORMAT: str = "%Y-%m-%d %H:%M:%S"
LOG_ENCODING: str = "utf-8"

# Spinner pauses around every activity, in seconds.
PREPARE_SECONDS: int = 3
FINISH_SECONDS: int = 3

SPINNER_FRAMES: tuple[str, ...] = ("|", "/", "-", "\\")
SPINNER_INTERVAL: float = 0.25

BREATHE_IN_SECONDS: int = 4
BREATHE_OUT_SECONDS: int = 6
BREATH_REST_SECONDS: int = 1
QUESTION_PAUSE_SECONDS: int = 6
LISTING_LEAD_IN_SECONDS: int = 5

_ESC_CLEAR = "\033[2J"
_ESC_HOME = "\033[H"

logger: logging.Logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

REFLECTION_PROMPTS: tuple[str, ...] = (
    "Think of a time when you stood up for someone else.",
    "Think of a time when you did something really difficult.",
    "Think of a time when you helped someone in need.",
    "Think of a time when you did something truly selfless.",
)

REFLECTION_QUESTIONS: tuple[str, ...] = (
    "Why was this experience meaningful to you?",
    "Have you ever done anything like this before?",
    "How did you get started?",
    "How did you feel when it was complete?",
    "What made this time different than other times when you were not as successful?",
    "What is your favorite thing about this experience?",
    "What could you learn from this experience that applies to other situations?",
    "What did you learn about yourself through this experience?",
    "How can you keep this experience in mind in the future?",
)

LISTING_PROMPTS: tuple[str, ...] = (
    "Who are people that you appreciate?",
    "What are personal strengths of yours?",
    "Who are people that you have helped this week?",
    "When have you felt the Holy Ghost this month?",
    "Who are some of your personal heroes?",
)


# ---------------------------------------------------------------------------
# Clock seams
# ---------------------------------------------------------------------------


def _now() -> float:
    return time.monotonic()


def _pause(seconds: float) -> None:
    time.sleep(seconds)


def _seconds_left(deadline: float) -> int:
    return math.ceil(deadline - _now())


def _clamped(base: int, deadline: float) -> int:
    """Shorten a pause so it never runs past the deadline, but last at least 1s."""
    return min(base, max(1, _seconds_left(deadline)))


# ---------------------------------------------------------------------------
# Terminal helpers
# ---------------------------------------------------------------------------


def clear_screen() -> None:
    """Clear the terminal and reset the cursor to the top-left corner."""
    sys.stdout.write(_ESC_CLEAR + _ESC_HOME)
    sys.stdout.flush()


def spinner(seconds: float) -> None:
    """Spin a little bar in place for the given number of seconds."""
    deadline = _now() + seconds
    frame = 0
    while _now() < deadline:
        sys.stdout.write(SPINNER_FRAMES[frame % len(SPINNER_FRAMES)])
        sys.stdout.flush()
        _pause(SPINNER_INTERVAL)
        sys.stdout.write("\b")
        frame += 1
    sys.stdout.flush()


def countdown(seconds: int) -> None:
    """Count down from ``seconds`` to 1, one tick per second.

    The ticks are units of a sequential tracker: each second shows the next
    visible tick and then marks it elapsed.
    """
    ticks = VisibilityTracker(
        (str(n) for n in range(seconds, 0, -1)),
        selection=Selection.SEQUENTIAL,
    )
    while not ticks.is_complete():
        label = f"{ticks.next_visible()} "
        sys.stdout.write(label)
        sys.stdout.flush()
        _pause(1)
        sys.stdout.write("\b" * len(label))
        ticks.hide(1)
    sys.stdout.flush()


# ---------------------------------------------------------------------------
# Activity bodies
# ---------------------------------------------------------------------------


def breathe(seconds: int, rng: random.Random) -> None:
    """Alternate slow breaths in and out until time is up."""
    print("Follow the prompts and breathe slowly.")
    print()

    deadline = _now() + seconds
    breathe_in = True
    while _now() < deadline:
        if breathe_in:
            sys.stdout.write("Breathe in... ")
            countdown(_clamped(BREATHE_IN_SECONDS, deadline))
        else:
            sys.stdout.write("Breathe out... ")
            countdown(_clamped(BREATHE_OUT_SECONDS, deadline))
        print()
        breathe_in = not breathe_in
        spinner(BREATH_REST_SECONDS)


def reflect(seconds: int, rng: random.Random) -> None:
    """Offer a prompt, then keep asking gentle questions until time is up."""
    prompt = rng.choice(REFLECTION_PROMPTS)
    print("Consider the following prompt:")
    print()
    print(f"--- {prompt} ---")
    print()
    print("When you have something in mind, press Enter to continue.")
    input()

    deadline = _now() + seconds
    while _now() < deadline:
        print(f"> {rng.choice(REFLECTION_QUESTIONS)}")
        spinner(_clamped(QUESTION_PAUSE_SECONDS, deadline))
        print()


def list_items(seconds: int, rng: random.Random) -> None:
    """Collect as many answers to a prompt as fit in the time.

    The deadline is checked between entries only: an answer that is still
    being typed when time runs out is kept.
    """
    prompt = rng.choice(LISTING_PROMPTS)
    print("List as many responses to the prompt as you can:")
    print()
    print(f"--- {prompt} ---")
    print()
    print("You will have a few seconds to think before starting...")
    countdown(LISTING_LEAD_IN_SECONDS)
    print()
    print("Begin listing! Press Enter after each item.")

    deadline = _now() + seconds
    items: list[str] = []
    while _now() < deadline:
        entry = input("> ").strip()
        if entry:
            items.append(entry)

    print()
    print(f"You listed {len(items)} item(s). Nice work!")
    print("Items:")
    for number, item in enumerate(items, start=1):
        print(f"{number}. {item}")


# ---------------------------------------------------------------------------
# Activities
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Activity:
    """A named activity; ``body`` holds only its timed part."""

    name: str
    description: str
    body: Callable[[int, random.Random], None]


BREATHING = Activity(
    name="Breathing Activity",
    description=(
        "This activity will help you relax by walking you through breathing in"
        " and out slowly. Clear your mind and focus on your breathing."
    ),
    body=breathe,
)

REFLECTION = Activity(
    name="Reflection Activity",
    description=(
        "This activity will help you reflect on times in your life when you have"
        " shown strength and resilience. This will help you recognize the power"
        " you have and how you can use it in other aspects of your life."
    ),
    body=reflect,
)

LISTING = Activity(
    name="Listing Activity",
    description=(
        "This activity will help you reflect on the good things in your life by"
        " having you list as many things as you can in a certain area."
    ),
    body=list_items,
)

MENU_ACTIVITIES: dict[str, Activity] = {
    "1": BREATHING,
    "2": REFLECTION,
    "3": LISTING,
}
VIEW_LOG_CHOICE: str = "4"
QUIT_CHOICE: str = "0"


# ---------------------------------------------------------------------------
# Activity log
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One finished activity."""

    when: datetime
    name: str
    seconds: int

    def to_line(self) -> str:
        stamp = self.when.strftime(LOG_TIME_FORMAT)
        return f"{stamp} - {self.name} - {self.seconds} seconds"


def _log_path(override: str | None = None) -> Path:
    """Resolve the log file: flag, then environment, then the working dir."""
    if override:
        return Path(override).expanduser()
    env = os.environ.get(_ENV_VAR)
    if env:
        return Path(env).expanduser()
    return _DEFAULT_LOG_PATH


def append_log(path: Path, entry: LogEntry) -> bool:
    """Append one line to the log. Failures never interrupt a session.

    Returns:
        True if the line was written.

    """
    try:
        with path.open("a", encoding=LOG_ENCODING) as f:
            f.write(entry.to_line() + "\n")
    except OSError as exc:
        logger.debug("could not append to %s: %s", path, exc)
        return False
    return True


def read_log(path: Path) -> list[str]:
    """Return the logged lines, most recent first.

    Raises:
        OSError: If the file exists but cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.

    """
    if not path.exists():
        return []
    lines = path.read_text(encoding=LOG_ENCODING).splitlines()
    return [line for line in reversed(lines) if line.strip()]


def show_log(path: Path) -> None:
    """Print the activity log and wait for Enter."""
    clear_screen()
    print("Activity Log (most recent first):")
    try:
        lines = read_log(path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("could not read %s: %s", path, exc)
        print("Unable to read log file.")
    else:
        if not lines:
            print("(No log entries yet.)")
        for line in lines:
            print(line)
    print()
    print("Press Enter to return to menu.")
    input()


# ---------------------------------------------------------------------------
# Session driver
# ---------------------------------------------------------------------------


def ask_duration() -> int:
    """Ask for a duration in whole seconds until a valid one is given."""
    answer = input("Enter the duration you want for this activity (in seconds): ")
    while True:
        try:
            seconds = int(answer.strip())
        except ValueError:
            seconds = -1
        if seconds >= 0:
            return seconds
        answer = input(
            "Invalid. Please enter a whole number of seconds (0 or greater): "
        )


def run_activity(activity: Activity, *, rng: random.Random, log_path: Path) -> LogEntry:
    """Start, run, finish, and log one activity."""
    clear_screen()
    print(f"=== {activity.name} ===")
    print()
    print(activity.description)
    print()
    seconds = ask_duration()
    print()
    print("Prepare to begin...")
    spinner(PREPARE_SECONDS)
    clear_screen()

    logger.debug("starting %s for %ds", activity.name, seconds)
    activity.body(seconds, rng)

    print()
    print("Well done!")
    spinner(FINISH_SECONDS)
    print(f"You have completed the {activity.name} for {seconds} seconds.")
    spinner(FINISH_SECONDS)

    entry = LogEntry(when=datetime.now(), name=activity.name, seconds=seconds)
    append_log(log_path, entry)
    return entry


def _print_menu() -> None:
    clear_screen()
    print("Mindfulness Program")
    print("-------------------")
    for key, activity in MENU_ACTIVITIES.items():
        print(f"{key}. {activity.name}")
    print(f"{VIEW_LOG_CHOICE}. View activity log")
    print(f"{QUIT_CHOICE}. Quit")
    print()


def run_menu(*, rng: random.Random, log_path: Path) -> None:
    """Show the menu until the user chooses to quit."""
    while True:
        _print_menu()
        choice = input("Choose an option: ").strip()

        if choice in MENU_ACTIVITIES:
            run_activity(MENU_ACTIVITIES[choice], rng=rng, log_path=log_path)
        elif choice == VIEW_LOG_CHOICE:
            show_log(log_path)
        elif choice == QUIT_CHOICE:
            print("Goodbye. Take care!")
            _pause(1)
            return
        else:
            print("Invalid option. Press Enter to continue...")
            input()


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="mindfulness",
        description="A small menu of timed breathing, reflection, and listing.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        metavar="PATH",
        help=(
            "Where finished activities are recorded"
            f" (default: ${_ENV_VAR} or {_DEFAULT_LOG_PATH})"
        ),
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for reproducible prompt selection",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logging on stderr",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the mindfulness timer."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    rng = random.Random(args.seed)  # noqa: S311
    try:
        run_menu(rng=rng, log_path=_log_path(args.log_file))
    except (KeyboardInterrupt, EOFError):
        print()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
