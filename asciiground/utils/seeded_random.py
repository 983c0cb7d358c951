from __future__ import annotations

MODULUS = 2147483647
MULTIPLIER = 16807


class SeededRandom:
    """Park-Miller minimal standard generator.

    The sequence for a given seed is fixed across runs and platforms;
    noise tables and static frames are built from it.
    """

    def __init__(self, seed: int = 0):
        seed = int(seed) % MODULUS
        self.state = seed if seed != 0 else 1

    def __call__(self) -> float:
        self.state = (self.state * MULTIPLIER) % MODULUS
        return self.state / MODULUS

    def randrange(self, n: int) -> int:
        return int(self() * n)
