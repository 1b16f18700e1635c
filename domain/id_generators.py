# domain/id_generators.py

import numpy as np


class SequentialIdGenerator:
    """
    Produces monotonically increasing ids.

    With a prefix the ids are strings ("worker-1", "worker-2", ...),
    otherwise plain integers.
    """

    def __init__(self, start=1, prefix=""):
        self._next = start
        self.prefix = prefix

    def __call__(self):
        value = self._next
        self._next += 1
        if self.prefix:
            return f"{self.prefix}{value}"
        return value


class RandomIdGenerator:
    """
    Produces random integer ids from a seeded numpy Generator.

    Uniqueness is not guaranteed here; the pool regenerates on collision.
    """

    def __init__(self, seed=None, low=1, high=2**31 - 1):
        if low >= high:
            raise ValueError(f"Invalid id range: low={low} must be below high={high}")
        self._rng = np.random.default_rng(seed)
        self.low = low
        self.high = high

    def __call__(self):
        return int(self._rng.integers(self.low, self.high))


ID_GENERATOR_MAP = {
    "sequential": SequentialIdGenerator,
    "random": RandomIdGenerator,
}


def make_id_generator(policy: str, seed=None, prefix=""):
    """Builds a generator for the named policy ('sequential' or 'random')."""
    policy = (policy or "sequential").lower()
    if policy not in ID_GENERATOR_MAP:
        raise ValueError(f"Unknown id policy: {policy}")
    if policy == "random":
        return RandomIdGenerator(seed=seed)
    return SequentialIdGenerator(prefix=prefix)
