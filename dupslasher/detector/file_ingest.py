"""Corpus loading for DupSlasher.

Supports:
- .txt files (one document per non-empty line)
- .jsonl files (text taken from well-known fields)
- .html / .htm files (visible text, one document per file)
- .gz variants of .txt and .jsonl
- Directories (recursive) and glob patterns
"""
from __future__ import annotations

import gzip
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Generator, Iterable, List, Optional, Sequence, Union

import chardet
from bs4 import BeautifulSoup
from tqdm import tqdm

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

TEXT_FIELDS = ("text", "content", "body", "message", "document")
SUPPORTED_EXTENSIONS = {".txt", ".jsonl", ".html", ".htm", ".gz"}


@dataclass(frozen=True)
class Document:
    """A loaded document; ``doc_id`` is its position in the corpus."""

    doc_id: int
    text: str
    source_file: Path


def detect_encoding(file_path: Path, sample_size: int = 8192) -> str:
    """Detect file encoding using chardet."""
    with open(file_path, "rb") as f:
        raw_data = f.read(sample_size)
    result = chardet.detect(raw_data)
    return result.get("encoding") or "utf-8"


# -----------------------------------------------------------
# Readers
# -----------------------------------------------------------


def _lines(f: Iterable[str]) -> Generator[str, None, None]:
    for line in f:
        line = line.strip()
        if line:
            yield line


def _jsonl_texts(f: Iterable[str], file_path: Path, text_fields: Sequence[str]) -> Generator[str, None, None]:
    for line_num, line in enumerate(f, 1):
        line = line.strip()
        if not line:
            continue
        try:
            obj = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning("Invalid JSON at %s:%d: %s", file_path, line_num, e)
            continue
        if not isinstance(obj, dict):
            logger.warning("Skipping non-object JSON at %s:%d", file_path, line_num)
            continue
        parts = [str(obj[field]) for field in text_fields if obj.get(field)]
        if parts:
            yield " ".join(parts)


def read_text_file(file_path: Path, encoding: Optional[str] = None) -> Generator[str, None, None]:
    """Yield every non-empty line of a text file."""
    encoding = encoding or detect_encoding(file_path)
    with open(file_path, "r", encoding=encoding, errors="replace") as f:
        yield from _lines(f)


def read_jsonl_file(file_path: Path, text_fields: Sequence[str] = TEXT_FIELDS) -> Generator[str, None, None]:
    """Yield the joined text fields of every JSON object in a JSONL file."""
    encoding = detect_encoding(file_path)
    with open(file_path, "r", encoding=encoding, errors="replace") as f:
        yield from _jsonl_texts(f, file_path, text_fields)


def read_html_file(file_path: Path, encoding: Optional[str] = None) -> Generator[str, None, None]:
    """Yield the visible text of an HTML file as a single document."""
    encoding = encoding or detect_encoding(file_path)
    with open(file_path, "r", encoding=encoding, errors="replace") as f:
        soup = BeautifulSoup(f.read(), "html.parser")

    for tag in soup(["script", "style"]):
        tag.decompose()

    text = " ".join(chunk for chunk in (line.strip() for line in soup.get_text().splitlines()) if chunk)
    if text:
        yield text


def read_gz_file(file_path: Path, text_fields: Sequence[str] = TEXT_FIELDS) -> Generator[str, None, None]:
    """Read a gzipped file; ``*.jsonl.gz`` or JSON-looking content is parsed as JSONL."""
    with gzip.open(file_path, "rt", encoding="utf-8", errors="replace") as f:
        first_line = f.readline()
        f.seek(0)
        if file_path.name.lower().endswith(".jsonl.gz") or first_line.lstrip().startswith("{"):
            yield from _jsonl_texts(f, file_path, text_fields)
        else:
            yield from _lines(f)


_READERS = {
    ".txt": read_text_file,
    ".jsonl": read_jsonl_file,
    ".html": read_html_file,
    ".htm": read_html_file,
    ".gz": read_gz_file,
}

_STAT_KEYS = {".txt": "txt_files", ".jsonl": "jsonl_files", ".html": "html_files", ".htm": "html_files", ".gz": "gz_files"}

# -----------------------------------------------------------
# Discovery
# -----------------------------------------------------------


def collect_files(paths: Union[PathLike, Sequence[PathLike]], recursive: bool = True) -> List[Path]:
    """Resolve files, directories and glob patterns into a sorted file list.

    Raises ``FileNotFoundError`` for a plain path that does not exist.
    """
    if isinstance(paths, (str, Path)):
        paths = [paths]

    found: List[Path] = []
    for raw in paths:
        path = Path(raw)
        if any(ch in str(path) for ch in "*?["):
            anchor = Path(path.anchor) if path.is_absolute() else Path(".")
            pattern = str(path.relative_to(anchor)) if path.is_absolute() else str(path)
            found.extend(sorted(anchor.glob(pattern)))
        elif path.is_file():
            found.append(path)
        elif path.is_dir():
            found.extend(sorted(path.rglob("*") if recursive else path.glob("*")))
        else:
            raise FileNotFoundError(path)

    files = [f for f in found if f.is_file() and f.suffix.lower() in SUPPORTED_EXTENSIONS]
    if not files:
        logger.warning("No supported files found in %s", ", ".join(map(str, paths)))
    return files


def ingest_files(
    paths: Union[PathLike, Sequence[PathLike]],
    recursive: bool = True,
    show_progress: bool = False,
) -> Generator[Document, None, None]:
    """Yield :class:`Document` objects from every supported file under *paths*."""
    files: Iterable[Path] = collect_files(paths, recursive=recursive)
    if show_progress:
        files = tqdm(files, desc="Reading files")

    doc_id = 0
    for file_path in files:
        reader = _READERS[file_path.suffix.lower()]
        for text in reader(file_path):
            yield Document(doc_id=doc_id, text=text, source_file=file_path)
            doc_id += 1


def load_corpus(paths: Union[PathLike, Sequence[PathLike]], recursive: bool = True) -> List[Document]:
    return list(ingest_files(paths, recursive=recursive))


def get_file_stats(paths: Union[PathLike, Sequence[PathLike]]) -> Dict[str, int]:
    """Count supported files and their total size."""
    stats = {"total_files": 0, "total_size_bytes": 0}
    for file_path in collect_files(paths):
        stats["total_files"] += 1
        stats["total_size_bytes"] += file_path.stat().st_size
        key = _STAT_KEYS[file_path.suffix.lower()]
        stats[key] = stats.get(key, 0) + 1
    return stats
