"""End-to-end duplicate report pipeline.

Integrates:
- Corpus loading (multiple formats)
- Signature computation and all-pairs comparison
- Report output (console, JSONL, TXT)
- Run statistics
"""
from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np
import psutil

from .config import DedupConfig
from .dedup import Deduplicator, DuplicatePair
from .file_ingest import Document, PathLike, ingest_files
from .ingest import Text
from .output import create_writer, print_report

logger = logging.getLogger(__name__)


class DedupPipeline:
    """Load a corpus, find near-duplicate pairs and write the report."""

    def __init__(
        self,
        config: Optional[DedupConfig] = None,
        output_path: Optional[Union[str, Path]] = None,
        output_format: str = "auto",
        processes: int = 1,
        verbose: bool = False,
    ):
        """
        Args:
            config: Detector settings (defaults if None)
            output_path: Report file; pairs are printed to stdout when None
            output_format: 'jsonl', 'txt' or 'auto'
            processes: Worker processes used for signing
            verbose: Show progress bars
        """
        self.config = config or DedupConfig()
        self.output_path = Path(output_path) if output_path is not None else None
        self.output_format = output_format
        self.verbose = verbose
        self.deduplicator = Deduplicator(self.config, processes=processes, show_progress=verbose)

        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.pairs: List[DuplicatePair] = []

    def run(self, docs: Sequence[Text]) -> Dict[str, Any]:
        """Process an in-memory corpus and return run statistics."""
        docs = list(docs)
        self.start_time = time.time()

        signatures = self.deduplicator.signatures(docs)
        sentinel = self.deduplicator.signer.empty_signature()
        empty = sum(1 for sig in signatures if np.array_equal(sig, sentinel))
        self.pairs = self.deduplicator.compare(signatures)

        if self.output_path is None:
            print_report(self.pairs, docs)
            output_stats: Dict[str, Any] = {"format": "console", "total_records": len(self.pairs)}
        else:
            with create_writer(self.output_path, docs, format=self.output_format) as writer:
                writer.write_all(self.pairs)
                output_stats = writer.finalize()

        self.end_time = time.time()
        return self._generate_stats(len(docs), empty, output_stats)

    def run_files(self, input_paths: Union[PathLike, Sequence[PathLike]]) -> Dict[str, Any]:
        """Load documents from files, then :meth:`run` over them."""
        documents: List[Document] = list(ingest_files(input_paths, show_progress=self.verbose))
        logger.info("Loaded %d documents", len(documents))
        stats = self.run([d.text for d in documents])
        stats["input_stats"]["total_files"] = len({d.source_file for d in documents})
        return stats

    def _generate_stats(self, n_docs: int, empty: int, output_stats: Dict[str, Any]) -> Dict[str, Any]:
        elapsed = self.end_time - self.start_time
        memory_mb = psutil.Process().memory_info().rss / 1024 / 1024
        return {
            "processing_time_seconds": elapsed,
            "peak_memory_mb": memory_mb,
            "config": self.config.to_dict(),
            "input_stats": {
                "total_documents": n_docs,
                "short_documents": empty,
            },
            "dedup_stats": {
                "pairs_compared": n_docs * (n_docs - 1) // 2,
                "duplicate_pairs": len(self.pairs),
            },
            "output_stats": output_stats,
            "performance": {
                "documents_per_second": n_docs / max(elapsed, 1e-9),
            },
        }


def run_pipeline(
    input_paths: Union[PathLike, Sequence[PathLike]],
    output_path: Optional[Union[str, Path]] = None,
    config: Optional[DedupConfig] = None,
    **kwargs,
) -> Dict[str, Any]:
    """
    Convenience function to run the complete pipeline over files.

    Args:
        input_paths: Input files/directories/patterns
        output_path: Report path (stdout when None)
        config: Detector settings
        **kwargs: Additional :class:`DedupPipeline` options

    Returns:
        Processing statistics
    """
    return DedupPipeline(config, output_path, **kwargs).run_files(input_paths)


def print_stats(stats: Dict[str, Any]) -> None:
    """Print a short run summary."""
    print("=" * 60)
    print(f"Documents      : {stats['input_stats']['total_documents']:,}"
          f" ({stats['input_stats']['short_documents']:,} shorter than ngrams)")
    print(f"Pairs compared : {stats['dedup_stats']['pairs_compared']:,}")
    print(f"Duplicates     : {stats['dedup_stats']['duplicate_pairs']:,}")
    print(f"Time           : {stats['processing_time_seconds']:.2f}s"
          f" ({stats['performance']['documents_per_second']:.0f} docs/s)")
    print(f"Memory         : {stats['peak_memory_mb']:.1f} MB")
    if stats["output_stats"].get("output_path"):
        print(f"Report         : {stats['output_stats']['output_path']}")
