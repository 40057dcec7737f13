"""
Shuffler — unbiased random permutation for question sampling.

The randomness source is injected so tests (and callers passing a seed) get
reproducible papers. Any object with randrange() works; normally a
random.Random instance.
"""

import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")

# Process-wide default source; each draw is self-contained so no locking
_default_rng = random.Random()


class Shuffler:
    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng if rng is not None else _default_rng

    @classmethod
    def seeded(cls, seed: int) -> "Shuffler":
        return cls(random.Random(seed))

    def shuffle(self, items: Sequence[T]) -> List[T]:
        """
        Fisher-Yates shuffle of a private copy.

        For i from the last index down to 1, swap item i with a uniformly
        chosen index in [0, i]. The caller's sequence is never touched.
        """
        shuffled = list(items)
        for i in range(len(shuffled) - 1, 0, -1):
            j = self._rng.randrange(i + 1)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return shuffled

    def sample(self, items: Sequence[T], count: int) -> List[T]:
        """First `count` items of a fresh shuffle (without replacement)."""
        if count < 0:
            raise ValueError("count must be non-negative")
        return self.shuffle(items)[:count]
