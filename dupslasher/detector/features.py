"""Hashed n-gram feature extraction."""
from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Iterator, Optional, Set

import mmh3

from .config import ConfigurationError, DEFAULT_NUM_FEATURES
from .ingest import Text, TokenStream

logger = logging.getLogger(__name__)

NGRAM_SEPARATOR = b"_"
FEATURE_HASH_SEED = 0


def hash_ngram(key: bytes) -> int:
    """Unsigned 32-bit MurmurHash3 (x86) of an n-gram key with the fixed feature seed."""
    return mmh3.hash(key, FEATURE_HASH_SEED, signed=False)


class FeatureExtractor:
    """Fold the token n-grams of a document into a bounded feature space.

    A window of the last *ngrams* tokens slides over the token stream. Each
    full window is joined (every token followed by ``_``), hashed with
    32-bit MurmurHash3 and reduced modulo *num_features*. A document with fewer
    than *ngrams* tokens yields an empty set.
    """

    def __init__(
        self,
        ngrams: int,
        num_features: int = DEFAULT_NUM_FEATURES,
        delimiters: Optional[bytes] = None,
    ) -> None:
        if ngrams < 1:
            raise ConfigurationError(f"ngrams must be >= 1, got {ngrams}")
        if num_features < 1:
            raise ConfigurationError(f"num_features must be >= 1, got {num_features}")
        self.ngrams = ngrams
        self.num_features = num_features
        self.delimiters = delimiters

    def ngram_keys(self, text: Optional[Text]) -> Iterator[bytes]:
        """Yield the joined key of every full token window, in order."""
        window: Deque[bytes] = deque(maxlen=self.ngrams)
        for token in TokenStream(text, self.delimiters):
            window.append(token)
            if len(window) == self.ngrams:
                yield b"".join(tok + NGRAM_SEPARATOR for tok in window)

    def extract(self, text: Optional[Text]) -> Set[int]:
        """Return the feature indices observed in *text*."""
        indices = {hash_ngram(key) % self.num_features for key in self.ngram_keys(text)}
        if not indices:
            logger.debug("Document shorter than %d tokens; empty feature set", self.ngrams)
        return indices

    __call__ = extract

    def __repr__(self) -> str:
        return f"FeatureExtractor(ngrams={self.ngrams}, num_features={self.num_features})"
