"""Parallel vs single-process equivalence tests for signature computation."""
from __future__ import annotations

import random

import numpy as np
import pytest

from dupslasher.detector.config import DedupConfig
from dupslasher.detector.dedup import Deduplicator


def _synthetic_corpus() -> list[str]:
    rng = random.Random(42)
    tokens = [f"tok{i}" for i in range(500)]
    docs: list[str] = []
    for i in range(30):
        doc_tokens = rng.choices(tokens, k=200)
        if docs and i % 5 == 0:
            # Every 5th doc duplicates the previous one.
            docs.append(docs[-1])
            continue
        docs.append(" ".join(doc_tokens))
    return docs


@pytest.mark.parametrize("processes", [2, 4])
def test_parallel_equivalence(processes: int) -> None:
    """Run with *processes* workers and compare to the single-process baseline."""
    docs = _synthetic_corpus()
    config = DedupConfig(ngrams=3, num_hashes=64, threshold=0.3)

    baseline = Deduplicator(config, processes=1)
    parallel = Deduplicator(config, processes=processes)

    sigs_single = baseline.signatures(docs)
    sigs_multi = parallel.signatures(docs)
    assert len(sigs_single) == len(sigs_multi) == len(docs)
    assert all(np.array_equal(a, b) for a, b in zip(sigs_single, sigs_multi))

    pairs_single = baseline.compare(sigs_single)
    pairs_multi = parallel.compare(sigs_multi)
    assert pairs_single == pairs_multi
    assert {(p.first, p.second) for p in pairs_single} >= {(i - 1, i) for i in range(5, 30, 5)}
