"""Random sources backing every dice roll.

All randomness in the engine is drawn through a RandomSource so that a
test harness can substitute a deterministic source without touching the
rules code. The default source uses the operating system's CSPRNG.
"""

from __future__ import annotations

import random
import secrets
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from arcane_engine.core.logging import get_logger


logger = get_logger(__name__)


@runtime_checkable
class RandomSource(Protocol):
    """Produces uniformly distributed integers in a closed range."""

    def randint(self, low: int, high: int) -> int:
        """Return an integer N with low <= N <= high."""
        ...


class SystemRandomSource:
    """Cryptographically strong random source.

    Draws from ``secrets.SystemRandom`` (os.urandom). On platforms without
    an OS randomness source the first draw raises NotImplementedError; the
    source then logs a warning and continues on a ``random.Random``
    generator.
    """

    def __init__(self) -> None:
        """Initialize the random source."""
        self._generator: random.Random = secrets.SystemRandom()
        self._fallback = False

    @property
    def is_fallback(self) -> bool:
        """Whether the weak fallback generator is in use."""
        return self._fallback

    def randint(self, low: int, high: int) -> int:
        """Return an integer N with low <= N <= high."""
        try:
            return self._generator.randint(low, high)
        except NotImplementedError:
            if self._fallback:
                raise
            logger.warning("OS random source unavailable, using pseudo-random fallback")
            self._generator = random.Random()
            self._fallback = True
            return self._generator.randint(low, high)


class SeededRandomSource:
    """Reproducible pseudo-random source.

    Example:
        >>> a, b = SeededRandomSource(42), SeededRandomSource(42)
        >>> a.randint(1, 20) == b.randint(1, 20)
        True
    """

    def __init__(self, seed: int) -> None:
        """Initialize the source.

        Args:
            seed: Seed for the underlying generator.
        """
        self.seed = seed
        self._generator = random.Random(seed)

    def randint(self, low: int, high: int) -> int:
        """Return an integer N with low <= N <= high."""
        return self._generator.randint(low, high)


class SequenceRandomSource:
    """Deterministic source that replays a fixed list of values.

    Each draw returns the next value in order. Values are returned as
    given, so a test can force a natural 20 with ``SequenceRandomSource([20])``.
    Once the sequence is exhausted it starts over from the beginning.

    Raises:
        ValueError: If ``values`` is empty, or a value falls outside the
            range requested by a draw.
    """

    def __init__(self, values: Iterable[int]) -> None:
        """Initialize the source.

        Args:
            values: Values to return, in order.
        """
        self._values = list(values)
        if not self._values:
            msg = "SequenceRandomSource needs at least one value"
            raise ValueError(msg)
        self._position = 0

    @property
    def draws(self) -> int:
        """Number of values drawn so far."""
        return self._position

    def randint(self, low: int, high: int) -> int:
        """Return the next scripted value."""
        value = self._values[self._position % len(self._values)]
        self._position += 1
        if not low <= value <= high:
            msg = f"Scripted value {value} outside requested range {low}..{high}"
            raise ValueError(msg)
        return value


def create_random_source(seed: int | None = None) -> RandomSource:
    """Build the default random source.

    Args:
        seed: If given, a reproducible SeededRandomSource is returned.

    Returns:
        A seeded source when ``seed`` is set, otherwise a SystemRandomSource.
    """
    if seed is not None:
        return SeededRandomSource(seed)
    return SystemRandomSource()


__all__ = [
    "RandomSource",
    "SystemRandomSource",
    "SeededRandomSource",
    "SequenceRandomSource",
    "create_random_source",
]
