#!/usr/bin/env python3
"""Passage Memorizer: a terminal drill that hides a passage word by word.

A passage is shown with its reference. Each press of Enter hides a few
more words until nothing is left but underscores and your memory.

Usage:
    python memorizer.py
    python memorizer.py --seed 7 --words 2
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from tracker import VisibilityTracker

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_WORDS_PER_STEP: int = 3

QUIT_COMMAND: str = "quit"
NEW_COMMAND: str = "new"

STEP_PROMPT: str = (
    "Press Enter to hide words or type 'quit' to exit, 'new' for another passage:"
)
DONE_PROMPT: str = (
    "All words are hidden! Press Enter to try another passage or type 'quit' to exit:"
)
FAREWELL: str = "Goodbye!"

_ESC_CLEAR = "\033[2J"
_ESC_HOME = "\033[H"

logger: logging.Logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Reference:
    """Where a passage lives: a book, a chapter, and one verse or a range."""

    book: str
    chapter: int
    verse: int
    end_verse: int | None = None

    def __str__(self) -> str:
        if self.end_verse is not None:
            return f"{self.book} {self.chapter}:{self.verse}-{self.end_verse}"
        return f"{self.book} {self.chapter}:{self.verse}"


@dataclass(frozen=True, slots=True)
class Passage:
    """A reference paired with the words to memorize."""

    reference: Reference
    text: str

    def tracker(self, rng: random.Random) -> VisibilityTracker:
        """Build a fresh tracker over the passage's words."""
        return VisibilityTracker(self.text.split(), rng=rng)

    def display(self, tracker: VisibilityTracker) -> str:
        """Format the reference and the current state of the words."""
        return f"{self.reference} - {' '.join(tracker.render())}"


LIBRARY: tuple[Passage, ...] = (
    Passage(
        Reference("Proverbs", 3, 5, 6),
        "Trust in the Lord with all thine heart; and lean not unto thine own"
        " understanding. In all thy ways acknowledge him, and he shall direct"
        " thy paths.",
    ),
    Passage(
        Reference("John", 3, 16),
        "For God so loved the world, that he gave his only begotten Son, that"
        " whosoever believeth in him should not perish, but have everlasting"
        " life.",
    ),
    Passage(
        Reference("Mosiah", 2, 17),
        "When ye are in the service of your fellow beings ye are only in the"
        " service of your God.",
    ),
)


# ---------------------------------------------------------------------------
# Terminal helpers
# ---------------------------------------------------------------------------


def clear_screen() -> None:
    """Clear the terminal and reset the cursor to the top-left corner."""
    sys.stdout.write(_ESC_CLEAR + _ESC_HOME)
    sys.stdout.flush()


def _ask(prompt: str) -> str:
    """Show a prompt on its own line and return the normalized answer."""
    print()
    print(prompt)
    return input().strip().lower()


# ---------------------------------------------------------------------------
# Drill loop
# ---------------------------------------------------------------------------


def practice(passage: Passage, *, rng: random.Random, words_per_step: int) -> bool:
    """Run one passage until it is fully hidden or the user moves on.

    Returns:
        False if the user asked to quit, True to keep drilling.

    """
    tracker = passage.tracker(rng)
    logger.debug("practicing %s (%d words)", passage.reference, len(tracker))

    while not tracker.is_complete():
        clear_screen()
        print(passage.display(tracker))
        answer = _ask(STEP_PROMPT)
        if answer == QUIT_COMMAND:
            return False
        if answer == NEW_COMMAND:
            return True
        tracker.hide_random(words_per_step)

    clear_screen()
    print(passage.display(tracker))
    return _ask(DONE_PROMPT) != QUIT_COMMAND


def run_drill(
    library: Sequence[Passage],
    *,
    rng: random.Random,
    words_per_step: int = DEFAULT_WORDS_PER_STEP,
) -> None:
    """Keep drilling random passages from the library until the user quits."""
    keep_going = True
    while keep_going:
        passage = rng.choice(library)
        keep_going = practice(passage, rng=rng, words_per_step=words_per_step)
    print(FAREWELL)


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def _positive_int(value: str) -> int:
    """Validate the --words flag."""
    try:
        parsed = int(value)
    except ValueError as exc:
        msg = f"'{value}' is not a valid integer"
        raise argparse.ArgumentTypeError(msg) from exc
    if parsed < 1:
        msg = f"must be at least 1, got {parsed}"
        raise argparse.ArgumentTypeError(msg)
    return parsed


def build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="memorizer",
        description="Memorize a passage by hiding a few words at a time.",
        epilog="Type 'quit' at any prompt to leave, 'new' for another passage.",
    )
    parser.add_argument(
        "--words",
        type=_positive_int,
        default=DEFAULT_WORDS_PER_STEP,
        metavar="N",
        help=f"Words hidden per step (default: {DEFAULT_WORDS_PER_STEP})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for reproducible passage and word selection",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logging on stderr",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the passage memorizer."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    rng = random.Random(args.seed)  # noqa: S311
    try:
        run_drill(LIBRARY, rng=rng, words_per_step=args.words)
    except (KeyboardInterrupt, EOFError):
        # Leaving early is fine.
        print()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
