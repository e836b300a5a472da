"""Report rendering for DupSlasher.

Duplicate pairs can be written as:
- console blocks (``Duplicate pair (Jaccard: 0.92):``)
- .jsonl (one record per pair, optionally gzipped)
- .txt (the console blocks, written to a file)
"""
from __future__ import annotations

import gzip
import json
import sys
from pathlib import Path
from typing import IO, Any, Dict, Iterable, List, Optional, Sequence, TextIO, Union

from .dedup import DuplicatePair
from .ingest import Text


def _as_str(doc: Text) -> str:
    return doc.decode("utf-8", errors="replace") if isinstance(doc, bytes) else doc


def create_record(pair: DuplicatePair, docs: Optional[Sequence[Text]] = None) -> Dict[str, Any]:
    """Build the JSON record for *pair*, including both texts when *docs* is given."""
    record = pair.as_dict()
    record["similarity"] = round(record["similarity"], 6)
    record["distance"] = round(record["distance"], 6)
    if docs is not None:
        record["text_a"] = _as_str(docs[pair.first])
        record["text_b"] = _as_str(docs[pair.second])
    return record


def format_pair(pair: DuplicatePair, docs: Sequence[Text]) -> str:
    return (
        f"Duplicate pair (Jaccard: {pair.similarity:g}):\n"
        f" - {_as_str(docs[pair.first])}\n"
        f" - {_as_str(docs[pair.second])}\n"
    )


def print_report(pairs: Iterable[DuplicatePair], docs: Sequence[Text], file: Optional[TextIO] = None) -> int:
    """Print every pair as a console block (stdout by default); returns the number printed."""
    file = file or sys.stdout
    count = 0
    for pair in pairs:
        print(format_pair(pair, docs), file=file)
        count += 1
    return count


# -----------------------------------------------------------
# Writers
# -----------------------------------------------------------


class ReportWriter:
    """Base class for duplicate-pair writers."""

    format = "base"

    def __init__(self, output_path: Union[str, Path], docs: Sequence[Text]):
        self.output_path = Path(output_path)
        self.docs = docs
        self.total_written = 0
        self._file: Optional[IO[str]] = None

    def _open(self) -> IO[str]:
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        if self.output_path.suffix == ".gz":
            return gzip.open(self.output_path, "wt", encoding="utf-8")
        return open(self.output_path, "w", encoding="utf-8")

    @property
    def file(self) -> IO[str]:
        if self._file is None:
            self._file = self._open()
        return self._file

    def write(self, pair: DuplicatePair) -> None:
        raise NotImplementedError

    def write_all(self, pairs: Iterable[DuplicatePair]) -> None:
        for pair in pairs:
            self.write(pair)

    def finalize(self) -> Dict[str, Any]:
        """Close the output (creating it empty if nothing was written) and return stats."""
        self.file.close()
        return {
            "format": self.format,
            "output_path": str(self.output_path),
            "total_records": self.total_written,
            "compressed": self.output_path.suffix == ".gz",
        }

    def __enter__(self) -> "ReportWriter":
        return self

    def __exit__(self, *exc) -> None:
        if self._file is not None and not self._file.closed:
            self._file.close()


class JSONLWriter(ReportWriter):
    format = "jsonl"

    def write(self, pair: DuplicatePair) -> None:
        json.dump(create_record(pair, self.docs), self.file, ensure_ascii=False)
        self.file.write("\n")
        self.total_written += 1


class TextWriter(ReportWriter):
    format = "txt"

    def write(self, pair: DuplicatePair) -> None:
        self.file.write(format_pair(pair, self.docs))
        self.file.write("\n")
        self.total_written += 1


def detect_format(output_path: Union[str, Path]) -> str:
    """Infer the report format from the file name; defaults to JSONL."""
    suffixes = [s.lower() for s in Path(output_path).suffixes]
    if suffixes and suffixes[-1] == ".gz":
        suffixes = suffixes[:-1]
    if suffixes and suffixes[-1] == ".txt":
        return "txt"
    return "jsonl"


_WRITERS = {"jsonl": JSONLWriter, "txt": TextWriter}


def create_writer(output_path: Union[str, Path], docs: Sequence[Text], format: str = "auto") -> ReportWriter:
    """Create the writer for *format* (``auto``, ``jsonl`` or ``txt``)."""
    if format == "auto":
        format = detect_format(output_path)
    try:
        writer_cls = _WRITERS[format]
    except KeyError:
        raise ValueError(f"Unsupported output format: {format}") from None
    return writer_cls(output_path, docs)


def read_records(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Load the records of a JSONL report."""
    path = Path(path)
    opener = gzip.open if path.suffix == ".gz" else open
    with opener(path, "rt", encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]
