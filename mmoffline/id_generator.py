"""Generation of unique 64-bit ids from the clock and a random tail."""

from __future__ import annotations

import random
import time
from typing import Optional

_INT64_MASK = (1 << 64) - 1
_INT64_SIGN = 1 << 63


def _to_int64(value: int) -> int:
    value &= _INT64_MASK
    return value - (1 << 64) if value >= _INT64_SIGN else value


class IdGenerator:
    """Builds ids from the current time shifted left, plus random low bits.

    The more bits are shifted, the more room is left for the random part
    (fewer collisions within one clock tick) and the less for the time.
    Ids are kept within a signed 64-bit integer.
    """

    _instance: Optional["IdGenerator"] = None

    def __init__(self, shift_border: int = 10, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)
        self._shift_border = 0
        self.set_shift_border(shift_border)

    @property
    def shift_border(self) -> int:
        """Number of low bits filled with the random part."""
        return self._shift_border

    def generate(self) -> int:
        """Return a new id."""
        new_id = time.time_ns() << self._shift_border
        new_id += self._rng.randint(0, (1 << self._shift_border) - 1)
        return _to_int64(new_id)

    def seed_generator(self, seed: int) -> None:
        """Reseed the random part."""
        self._rng.seed(seed)

    def set_shift_border(self, border: int) -> None:
        """Change the number of random low bits."""
        if border < 0 or border > 63:
            raise ValueError(f"shift border must be within 0..63, got {border}")
        self._shift_border = border

    @classmethod
    def instance(cls) -> "IdGenerator":
        """Return the shared generator, creating it on first use."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance


def generate_id(shift_border: Optional[int] = None, seed: Optional[int] = None) -> int:
    """Generate an id with the shared generator, or a temporary one when configured."""
    if shift_border is None and seed is None:
        return IdGenerator.instance().generate()
    border = 10 if shift_border is None else shift_border
    return IdGenerator(border, seed).generate()