"""Brute-force near-duplicate detection over MinHash signatures.

Every document gets one feature set and one signature, then all unordered
pairs are compared. There is no candidate pruning: the pairwise stage is
``O(n^2)`` and meant for corpora that fit comfortably in memory.
"""
from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from functools import partial
from itertools import combinations
from typing import Any, Iterable, Iterator, List, Optional, Sequence, Set

import numpy as np
from tqdm import tqdm

from .config import ConfigurationError, DedupConfig
from .features import FeatureExtractor
from .ingest import Text
from .minhash import HashFamily, MinHashSigner
from .similarity import jaccard_distance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DuplicatePair:
    """Two documents (by corpus position) whose estimated distance is below the threshold."""

    first: int
    second: int
    distance: float

    @property
    def similarity(self) -> float:
        return 1.0 - self.distance

    def as_dict(self) -> dict:
        return {"a": self.first, "b": self.second, "similarity": self.similarity, "distance": self.distance}


# -----------------------------------------------------------
# Helpers
# -----------------------------------------------------------


def _sign(extractor: FeatureExtractor, signer: MinHashSigner, doc: Text) -> np.ndarray:
    return signer.compute_signature(extractor.extract(doc))


# -----------------------------------------------------------
# Orchestrator
# -----------------------------------------------------------


class Deduplicator:
    """Compute signatures for a corpus and report near-duplicate pairs.

    The hash family is drawn once from ``config.seed`` and shared by every
    signature, so repeated runs over the same corpus are bit-identical.
    With ``processes > 1`` signatures are computed in a process pool; the
    output matches the single-process run exactly.
    """

    def __init__(
        self,
        config: Optional[DedupConfig] = None,
        *,
        processes: int = 1,
        show_progress: bool = False,
    ) -> None:
        self.config = config or DedupConfig()
        if isinstance(processes, bool) or not isinstance(processes, int) or processes < 1:
            raise ConfigurationError(f"processes must be an integer >= 1, got {processes!r}")
        self.processes = processes
        self.show_progress = show_progress
        self.extractor = FeatureExtractor(self.config.ngrams, self.config.num_features)
        self.family = HashFamily.from_seed(self.config.num_hashes, self.config.seed)
        self.signer = MinHashSigner(self.family)

    # --------------------------------------------------
    # Per-document
    # --------------------------------------------------

    def features(self, doc: Text) -> Set[int]:
        return self.extractor.extract(doc)

    def signature(self, doc: Text) -> np.ndarray:
        return _sign(self.extractor, self.signer, doc)

    def signatures(self, docs: Sequence[Text]) -> List[np.ndarray]:
        """One signature per document, in corpus order."""
        sign = partial(_sign, self.extractor, self.signer)
        if self.processes == 1 or len(docs) < 2:
            it: Iterable[np.ndarray] = map(sign, docs)
            if self.show_progress:
                it = tqdm(it, total=len(docs), desc="Signing documents")
            return list(it)

        chunksize = max(1, len(docs) // (self.processes * 4))
        logger.debug("Signing %d documents with %d processes (chunksize=%d)", len(docs), self.processes, chunksize)
        with ProcessPoolExecutor(max_workers=self.processes) as pool:
            it = pool.map(sign, docs, chunksize=chunksize)
            if self.show_progress:
                it = tqdm(it, total=len(docs), desc="Signing documents")
            return list(it)

    # --------------------------------------------------
    # Pairwise
    # --------------------------------------------------

    def iter_pairs(self, signatures: Sequence[np.ndarray]) -> Iterator[DuplicatePair]:
        """Yield every pair ``i < j`` whose distance is strictly below the threshold."""
        threshold = self.config.threshold
        for i, j in combinations(range(len(signatures)), 2):
            dist = jaccard_distance(signatures[i], signatures[j])
            if dist < threshold:
                yield DuplicatePair(i, j, dist)

    def compare(self, signatures: Sequence[np.ndarray]) -> List[DuplicatePair]:
        pairs = list(self.iter_pairs(signatures))
        n = len(signatures)
        logger.info("Compared %d pairs, %d below threshold %.3f", n * (n - 1) // 2, len(pairs), self.config.threshold)
        return pairs

    def find_duplicates(self, docs: Sequence[Text]) -> List[DuplicatePair]:
        """Sign *docs* and return all near-duplicate pairs ordered by ``(first, second)``."""
        docs = list(docs)
        return self.compare(self.signatures(docs))

    def __repr__(self) -> str:
        return f"Deduplicator({self.config!r}, processes={self.processes})"


def find_duplicates(docs: Sequence[Text], *, processes: int = 1, **config: Any) -> List[DuplicatePair]:
    """Convenience wrapper: ``Deduplicator(DedupConfig(**config)).find_duplicates(docs)``."""
    return Deduplicator(DedupConfig.from_mapping(config), processes=processes).find_duplicates(docs)
