"""MinHash signatures over hashed n-gram features.

Follows the linear hash family used by Spark's ``MinHashLSH``:
``h_i(x) = ((1 + x) * a_i + b_i) mod P`` with a fixed prime ``P``. The
``1 + x`` offset keeps feature ``0`` from always mapping to ``b_i``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np

from .config import ConfigurationError, DEFAULT_SEED

HASH_PRIME = 2038074743

# -----------------------------------------------------------
# Hash family
# -----------------------------------------------------------


def _frozen(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class HashFamily:
    """Immutable set of ``(a_i, b_i)`` coefficient pairs.

    Build with :meth:`from_seed`; the same seed always gives the same
    coefficients. Instances are shared read-only by every signer.
    """

    a: np.ndarray
    b: np.ndarray
    seed: int = DEFAULT_SEED

    @classmethod
    def from_seed(cls, num_hashes: int, seed: int = DEFAULT_SEED) -> "HashFamily":
        if num_hashes < 1:
            raise ConfigurationError(f"num_hashes must be >= 1, got {num_hashes}")
        if seed < 0:
            raise ConfigurationError(f"seed must be >= 0, got {seed}")
        rng = np.random.Generator(np.random.MT19937(seed))
        a = rng.integers(1, HASH_PRIME, size=num_hashes, dtype=np.uint64)
        b = rng.integers(0, HASH_PRIME, size=num_hashes, dtype=np.uint64)
        return cls(a=_frozen(a), b=_frozen(b), seed=seed)

    def __len__(self) -> int:
        return int(self.a.shape[0])

    @property
    def num_hashes(self) -> int:
        return len(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HashFamily):
            return NotImplemented
        return np.array_equal(self.a, other.a) and np.array_equal(self.b, other.b)

    __hash__ = None  # type: ignore[assignment]


# -----------------------------------------------------------
# Signer
# -----------------------------------------------------------


class MinHashSigner:
    """Compute fixed-length MinHash signatures with a shared :class:`HashFamily`."""

    def __init__(self, family: HashFamily) -> None:
        self.family = family

    @classmethod
    def from_seed(cls, num_hashes: int, seed: int = DEFAULT_SEED) -> "MinHashSigner":
        return cls(HashFamily.from_seed(num_hashes, seed))

    @property
    def num_hashes(self) -> int:
        return self.family.num_hashes

    def empty_signature(self) -> np.ndarray:
        """Signature of an empty feature set: every slot holds the sentinel ``P``."""
        return _frozen(np.full(self.num_hashes, HASH_PRIME, dtype=np.uint32))

    def compute_signature(self, features: Iterable[int]) -> np.ndarray:
        """Return the ``uint32`` minimum-hash vector for *features*.

        Cost is ``O(num_hashes * len(features))``. Feature indices are below
        ``2**32`` and ``a_i`` below ``2**31``, so ``uint64`` never overflows.
        """
        feats = np.fromiter(features, dtype=np.uint64)
        if feats.size == 0:
            return self.empty_signature()
        hashes = ((feats + np.uint64(1))[:, None] * self.family.a + self.family.b) % np.uint64(HASH_PRIME)
        return _frozen(hashes.min(axis=0).astype(np.uint32))

    __call__ = compute_signature
