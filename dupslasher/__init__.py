"""DupSlasher - MinHash near-duplicate detection for text corpora.

Documents are shingled into hashed token n-grams, summarised as MinHash
signatures and compared pairwise; pairs whose estimated Jaccard distance
falls below a threshold are reported.

Quick Start:
    # CLI usage
    dupslasher scan data/ --threshold 0.3 --output pairs.jsonl
    dupslasher demo

    # Python API
    from dupslasher import find_duplicates
    pairs = find_duplicates(["a b c d", "a b c d"], ngrams=3)
"""

from .detector import __version__

# Re-export main API
from .detector import (
    ConfigurationError,
    DedupConfig,
    load_config,
    TokenStream,
    tokenize,
    FeatureExtractor,
    HashFamily,
    MinHashSigner,
    jaccard_distance,
    jaccard_similarity,
    Deduplicator,
    DuplicatePair,
    find_duplicates,
    ingest_files,
    run_pipeline,
)

__all__ = [
    "__version__",
    "ConfigurationError",
    "DedupConfig",
    "load_config",
    "TokenStream",
    "tokenize",
    "FeatureExtractor",
    "HashFamily",
    "MinHashSigner",
    "jaccard_distance",
    "jaccard_similarity",
    "Deduplicator",
    "DuplicatePair",
    "find_duplicates",
    "ingest_files",
    "run_pipeline",
]
