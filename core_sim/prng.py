"""Seeded pseudo-random source shared by every stochastic decision of a match.

The generator is xmur3 (string hash) feeding mulberry32. All arithmetic is
masked to 32 bits, so a given seed yields the same stream on any platform.
"""
from __future__ import annotations

import math
from numbers import Real
from typing import Iterator, List, Union

Seed = Union[str, int]

_MASK = 0xFFFFFFFF


class InvalidRangeError(ValueError):
    """Raised by :meth:`Prng.int` for empty or non-finite bounds."""


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK


def _utf16_units(text: str) -> List[int]:
    raw = text.encode("utf-16-le")
    return [raw[i] | (raw[i + 1] << 8) for i in range(0, len(raw), 2)]


def _xmur3(text: str) -> Iterator[int]:
    units = _utf16_units(text)
    h = (1779033703 ^ len(units)) & _MASK
    for code in units:
        h = _imul(h ^ code, 3432918353)
        h = ((h << 13) | (h >> 19)) & _MASK
    while True:
        h = _imul(h ^ (h >> 16), 2246822507)
        h = _imul(h ^ (h >> 13), 3266489909)
        h ^= h >> 16
        yield h


class Prng:
    """mulberry32 stream.

    Args:
        state: 32-bit starting state (usually produced by ``create_prng``).
    """

    __slots__ = ("_t",)

    def __init__(self, state: int) -> None:
        self._t = state & _MASK

    def next(self) -> float:
        """Return a float in ``[0, 1)``."""
        self._t = (self._t + 0x6D2B79F5) & _MASK
        t = self._t
        r = _imul(t ^ (t >> 15), 1 | t)
        r ^= (r + _imul(r ^ (r >> 7), 61 | r)) & _MASK
        return ((r ^ (r >> 14)) & _MASK) / 4294967296.0

    def int(self, min_inclusive: Real, max_exclusive: Real) -> int:
        """Return an integer in ``[min_inclusive, max_exclusive)``.

        Raises:
            InvalidRangeError: bounds are not finite numbers or the range is empty.
        """
        for bound in (min_inclusive, max_exclusive):
            if isinstance(bound, bool) or not isinstance(bound, Real) or not math.isfinite(bound):
                raise InvalidRangeError(f"Bounds must be finite numbers, got {bound!r}")
        if max_exclusive <= min_inclusive:
            raise InvalidRangeError(
                f"max_exclusive ({max_exclusive}) must be greater than min_inclusive ({min_inclusive})"
            )
        span = max_exclusive - min_inclusive
        return math.floor(min_inclusive + self.next() * span)


def create_prng(seed: Seed) -> Prng:
    """Build a generator from a string or numeric seed."""
    state = next(_xmur3(str(seed)))
    return Prng(state)


def substream_key(domain: str, seed: Seed, *parts: object) -> str:
    """Compose ``"<domain>:<seed>:<part>..."`` used to derive isolated streams."""
    return ":".join([domain, str(seed), *(str(p) for p in parts)])


def derive_prng(domain: str, seed: Seed, *parts: object) -> Prng:
    return create_prng(substream_key(domain, seed, *parts))
