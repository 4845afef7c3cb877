"""
Seeded Pseudo-Random Generator

Small deterministic generator (mulberry32) used for reproducible pattern
layouts. Every intermediate step is reduced to 32 bits so a given seed yields
the same sequence on every platform.
"""

from typing import Iterator

MASK32 = 0xFFFFFFFF
INCREMENT = 0x6D2B79F5
SCALE = 4294967296.0  # 2**32


def _imul(a: int, b: int) -> int:
    """32-bit integer multiply, low word only"""
    return (a * b) & MASK32


class Mulberry32:
    """
    Deterministic float generator in [0, 1).

    Instances share no state; two generators built from the same seed produce
    the same infinite sequence. The only way to restart a sequence is to
    create a new generator (or call reseed).
    """

    def __init__(self, seed: int = 0):
        self.reseed(seed)

    def reseed(self, seed: int) -> None:
        """
        Reset the generator state.

        Args:
            seed: Any integer; reduced modulo 2**32 so -1 and 0xFFFFFFFF
                  select the same sequence.
        """
        self._state = int(seed) & MASK32

    def next(self) -> float:
        """Advance the state and return the next value in [0, 1)"""
        self._state = (self._state + INCREMENT) & MASK32
        a = self._state

        t = _imul(a ^ (a >> 15), 1 | a)
        t = ((t + _imul(t ^ (t >> 7), 61 | t)) & MASK32) ^ t
        return ((t ^ (t >> 14)) & MASK32) / SCALE

    def take(self, count: int) -> list:
        """Return the next `count` values as a list"""
        return [self.next() for _ in range(count)]

    def __call__(self) -> float:
        return self.next()

    def __iter__(self) -> Iterator[float]:
        return self

    def __next__(self) -> float:
        return self.next()
