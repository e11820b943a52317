"""Visibility tracker: an ordered row of units that fade out one way.

Each unit starts visible and may be hidden exactly once. The tracker decides
which visible units to hide next, either uniformly at random (the passage
drill) or strictly in display order (countdown ticks).
"""

from __future__ import annotations

import enum
import logging
import random
from collections.abc import Iterable

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_MASK: str = "_"

logger: logging.Logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Domain types
# ---------------------------------------------------------------------------


class Selection(enum.Enum):
    """Policy for choosing which visible units to hide next."""

    RANDOM = "random"
    SEQUENTIAL = "sequential"


class Unit:
    """A single maskable token."""

    __slots__ = ("_text", "_hidden")

    def __init__(self, text: str) -> None:
        self._text = text
        self._hidden = False

    @property
    def text(self) -> str:
        return self._text

    @property
    def hidden(self) -> bool:
        return self._hidden

    def hide(self) -> None:
        """Hide the unit. There is no way back."""
        self._hidden = True

    def display(self, mask: str = DEFAULT_MASK) -> str:
        """Return the text, or a mask run of the same length once hidden."""
        if self._hidden:
            return mask * len(self._text)
        return self._text

    def __repr__(self) -> str:
        return f"Unit({self._text!r}, hidden={self._hidden})"


# ---------------------------------------------------------------------------
# Tracker
# ---------------------------------------------------------------------------


class VisibilityTracker:
    """Fixed-size, ordered collection of units with one-way hiding.

    Args:
        tokens: Display tokens, in display order.
        rng: Random source for ``Selection.RANDOM``. A fresh unseeded
            generator is created on first random draw when omitted.
        selection: Policy used by :meth:`hide`.
        mask: Single character used to mask hidden units.

    Raises:
        ValueError: If ``mask`` is not exactly one character.

    """

    def __init__(
        self,
        tokens: Iterable[str],
        *,
        rng: random.Random | None = None,
        selection: Selection = Selection.RANDOM,
        mask: str = DEFAULT_MASK,
    ) -> None:
        if len(mask) != 1:
            msg = f"mask must be a single character, got {mask!r}"
            raise ValueError(msg)
        self._units: tuple[Unit, ...] = tuple(Unit(t) for t in tokens)
        self._rng = rng
        self._selection = selection
        self._mask = mask

    # -- queries ------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._units)

    @property
    def units(self) -> tuple[Unit, ...]:
        return self._units

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def visible_count(self) -> int:
        return sum(1 for u in self._units if not u.hidden)

    @property
    def hidden_count(self) -> int:
        return len(self._units) - self.visible_count

    def is_complete(self) -> bool:
        """Return True once every unit is hidden."""
        return all(u.hidden for u in self._units)

    def next_visible(self) -> str | None:
        """Return the text of the first visible unit, or None when complete."""
        for unit in self._units:
            if not unit.hidden:
                return unit.text
        return None

    def render(self) -> list[str]:
        """Return the display string of every unit, in original order."""
        return [u.display(self._mask) for u in self._units]

    # -- mutation -----------------------------------------------------------

    def hide_random(self, count: int) -> None:
        """Hide up to ``count`` visible units chosen uniformly at random.

        Only currently visible units are eligible, so every draw makes
        progress. Asking for more than remain hides them all; ``count == 0``
        leaves the tracker untouched.

        Raises:
            ValueError: If ``count`` is negative.

        """
        _check_count(count)
        pool = self._visible_indices()
        take = min(count, len(pool))
        rng = self._random_source()
        # Partial Fisher-Yates: the first ``take`` slots end up as the sample.
        for i in range(take):
            j = rng.randrange(i, len(pool))
            pool[i], pool[j] = pool[j], pool[i]
            self._units[pool[i]].hide()
        logger.debug("hid %d at random, %d still visible", take, len(pool) - take)

    def hide_in_order(self, count: int) -> None:
        """Hide up to ``count`` visible units, first visible first.

        Raises:
            ValueError: If ``count`` is negative.

        """
        _check_count(count)
        pool = self._visible_indices()
        for index in pool[:count]:
            self._units[index].hide()

    def hide(self, count: int = 1) -> None:
        """Hide up to ``count`` visible units using the configured selection."""
        if self._selection is Selection.SEQUENTIAL:
            self.hide_in_order(count)
        else:
            self.hide_random(count)

    def _random_source(self) -> random.Random:
        if self._rng is None:
            self._rng = random.Random()  # noqa: S311
        return self._rng

    def _visible_indices(self) -> list[int]:
        return [i for i, u in enumerate(self._units) if not u.hidden]

    def __repr__(self) -> str:
        return (
            f"VisibilityTracker(size={len(self)}, hidden={self.hidden_count}, "
            f"selection={self._selection.value})"
        )


def _check_count(count: int) -> None:
    if count < 0:
        msg = f"count must be non-negative, got {count}"
        raise ValueError(msg)
