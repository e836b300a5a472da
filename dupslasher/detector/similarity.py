"""Similarity estimates between MinHash signatures."""
from __future__ import annotations

import numpy as np


def _as_signature(sig) -> np.ndarray:
    return np.asarray(sig, dtype=np.uint32)


def jaccard_distance(sig_a, sig_b) -> float:
    """Estimated Jaccard distance: share of slots where the signatures differ.

    Both signatures must come from the same hash family. ``0.0`` means the
    signatures are identical, ``1.0`` means no slot agrees.
    """
    a = _as_signature(sig_a)
    b = _as_signature(sig_b)
    if a.shape != b.shape:
        raise ValueError(f"Signature length mismatch: {a.size} != {b.size}")
    if a.size == 0:
        raise ValueError("Cannot compare empty signatures")
    matches = int(np.count_nonzero(a == b))
    return 1.0 - matches / a.size


def jaccard_similarity(sig_a, sig_b) -> float:
    """Estimated Jaccard similarity, ``1 - jaccard_distance``."""
    return 1.0 - jaccard_distance(sig_a, sig_b)
