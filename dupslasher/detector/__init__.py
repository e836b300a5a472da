"""DupSlasher detector package.

Core public API lives here so external users can::

    import dupslasher as ds
    pairs = ds.find_duplicates(docs, ngrams=3, num_hashes=13, threshold=0.3)

Building blocks, leaf first:
    from dupslasher.detector.ingest import TokenStream
    from dupslasher.detector.features import FeatureExtractor
    from dupslasher.detector.minhash import HashFamily, MinHashSigner
    from dupslasher.detector.similarity import jaccard_distance
    from dupslasher.detector.dedup import Deduplicator
"""

from importlib.metadata import PackageNotFoundError, version as _pkg_version

# Semantic version of the installed package
try:
    __version__: str = _pkg_version("dupslasher")
except PackageNotFoundError:  # pragma: no cover – local dev path
    __version__ = "0.1.0"

from .config import ConfigurationError, DedupConfig, load_config
from .ingest import TokenStream, nonalnum_delimiters, tokenize
from .features import FeatureExtractor
from .minhash import HASH_PRIME, HashFamily, MinHashSigner
from .similarity import jaccard_distance, jaccard_similarity
from .dedup import Deduplicator, DuplicatePair, find_duplicates
from .file_ingest import Document, ingest_files, load_corpus
from .output import create_writer, print_report
from .pipeline import DedupPipeline, run_pipeline

__all__ = [
    "__version__",
    "HASH_PRIME",
    # Configuration
    "ConfigurationError",
    "DedupConfig",
    "load_config",
    # Core
    "TokenStream",
    "nonalnum_delimiters",
    "tokenize",
    "FeatureExtractor",
    "HashFamily",
    "MinHashSigner",
    "jaccard_distance",
    "jaccard_similarity",
    "Deduplicator",
    "DuplicatePair",
    "find_duplicates",
    # Corpus / report glue
    "Document",
    "ingest_files",
    "load_corpus",
    "create_writer",
    "print_report",
    "DedupPipeline",
    "run_pipeline",
]
