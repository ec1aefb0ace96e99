"""
Randomness Sources
==================

The prover consumes fresh blinding scalars for every proof. Instead of
relying on global random state, ``prove`` receives a sampler object:

- GroupRandomness: draws from the pairing group's own RNG (group.random)
- SeededRandomness: reproducible draws from ``random.Random(seed)``

SeededRandomness is for tests and deterministic replay only. Reusing a seed
across two proofs for different challenges leaks the witness.
"""

import random
from typing import List

from charm.toolbox.pairinggroup import PairingGroup, ZR


class GroupRandomness:
    """Uniform scalars from charm-crypto's internal RNG."""

    def __init__(self, group: PairingGroup):
        self.group = group

    def scalar(self) -> ZR:
        return self.group.random(ZR)

    def vector(self, n: int) -> List[ZR]:
        return [self.scalar() for _ in range(n)]


class SeededRandomness(GroupRandomness):
    """
    Deterministic scalars drawn from a seeded Python PRNG.

    Parameters
    ----------
    group : PairingGroup
        The pairing group
    seed : int, str or bytes
        The seed passed to ``random.Random``

    Examples
    --------
    >>> rng_a = SeededRandomness(group, seed=7)
    >>> rng_b = SeededRandomness(group, seed=7)
    >>> rng_a.scalar() == rng_b.scalar()
    True
    """

    def __init__(self, group: PairingGroup, seed):
        super().__init__(group)
        self.seed = seed
        self._rnd = random.Random(seed)
        self._order = int(group.order())

    def scalar(self) -> ZR:
        return self.group.init(ZR, self._rnd.randrange(self._order))
