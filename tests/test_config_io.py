"""Configuration, corpus loading, report output and CLI tests."""
from __future__ import annotations

import gzip
import json
import logging
from pathlib import Path

import pytest

from dupslasher.cli import main
from dupslasher.detector.config import ConfigurationError, DedupConfig, load_config
from dupslasher.detector.dedup import Deduplicator, DuplicatePair
from dupslasher.detector.file_ingest import collect_files, get_file_stats, load_corpus
from dupslasher.detector.output import create_writer, print_report, read_records
from dupslasher.detector.pipeline import DedupPipeline
from dupslasher.samples import QUICK_FOX

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


def test_defaults() -> None:
    cfg = DedupConfig()
    assert (cfg.ngrams, cfg.num_hashes, cfg.threshold, cfg.num_features, cfg.seed) == (3, 13, 0.3, 262144, 1)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"ngrams": 0},
        {"num_hashes": 0},
        {"num_features": 0},
        {"threshold": 1.5},
        {"threshold": -0.1},
        {"threshold": "0.3"},
        {"seed": -1},
        {"ngrams": True},
        {"num_hashes": 2.5},
    ],
)
def test_invalid_config_fails_fast(kwargs: dict) -> None:
    with pytest.raises(ConfigurationError):
        DedupConfig(**kwargs)


def test_threshold_bounds_are_inclusive() -> None:
    assert DedupConfig(threshold=0).threshold == 0.0
    assert DedupConfig(threshold=1).threshold == 1.0


def test_non_power_of_two_features_warns(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="dupslasher.detector.config"):
        DedupConfig(num_features=1000)
    assert "not a power of two" in caplog.text


def test_replace_ignores_none() -> None:
    cfg = DedupConfig().replace(ngrams=5, threshold=None)
    assert cfg.ngrams == 5
    assert cfg.threshold == 0.3


def test_load_config_yaml(tmp_path: Path) -> None:
    cfg_file = tmp_path / "dedup.yml"
    cfg_file.write_text("ngrams: 4\nnum_hashes: 64\nthreshold: 0.2\n")
    cfg = load_config(cfg_file)
    assert (cfg.ngrams, cfg.num_hashes, cfg.threshold) == (4, 64, 0.2)


def test_load_config_section_and_errors(tmp_path: Path) -> None:
    cfg_file = tmp_path / "dedup.yml"
    cfg_file.write_text("detector:\n  seed: 9\n")
    assert load_config(cfg_file, section="detector").seed == 9

    cfg_file.write_text("bogus: 1\n")
    with pytest.raises(ConfigurationError, match="bogus"):
        load_config(cfg_file)

    cfg_file.write_text("- 1\n- 2\n")
    with pytest.raises(ConfigurationError):
        load_config(cfg_file)

    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yml")


def test_malformed_yaml_is_configuration_error(tmp_path: Path) -> None:
    cfg_file = tmp_path / "broken.yml"
    cfg_file.write_text("ngrams: [1\n")
    with pytest.raises(ConfigurationError, match="invalid YAML"):
        load_config(cfg_file)


@pytest.mark.parametrize("processes", [0, -3, True, 1.5, "2"])
def test_deduplicator_rejects_bad_process_count(processes: object) -> None:
    with pytest.raises(ConfigurationError, match="processes"):
        Deduplicator(DedupConfig(), processes=processes)


# ---------------------------------------------------------------------------
# Corpus loading
# ---------------------------------------------------------------------------


def _write_corpus(root: Path) -> None:
    (root / "docs.txt").write_text(f"{QUICK_FOX}\n\n{QUICK_FOX}\n", encoding="utf-8")
    with open(root / "docs.jsonl", "w", encoding="utf-8") as f:
        json.dump({"text": "json document one two three"}, f)
        f.write("\n{not json}\n")
        json.dump({"id": 3}, f)
        f.write("\n")
    (root / "page.html").write_text(
        "<html><head><style>p {}</style></head><body><p>Hello <b>html</b> world</p></body></html>"
    )
    with gzip.open(root / "more.jsonl.gz", "wt", encoding="utf-8") as f:
        f.write(json.dumps({"content": "gzipped json content"}) + "\n")
    (root / "ignored.csv").write_text("a,b,c\n")


def test_load_corpus_formats(tmp_path: Path) -> None:
    _write_corpus(tmp_path)
    docs = load_corpus(tmp_path)
    texts = [d.text for d in docs]

    assert texts.count(QUICK_FOX) == 2
    assert "json document one two three" in texts
    assert "Hello html world" in texts
    assert "gzipped json content" in texts
    assert [d.doc_id for d in docs] == list(range(len(docs)))
    assert len(docs) == 5


def test_collect_files_and_stats(tmp_path: Path) -> None:
    _write_corpus(tmp_path)
    files = collect_files(tmp_path)
    assert all(f.suffix != ".csv" for f in files)
    stats = get_file_stats(tmp_path)
    assert stats["total_files"] == 4
    assert stats["html_files"] == 1

    with pytest.raises(FileNotFoundError):
        collect_files(tmp_path / "nope")


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def test_jsonl_and_txt_writers(tmp_path: Path) -> None:
    docs = ["alpha beta gamma", "alpha beta gamma"]
    pair = DuplicatePair(0, 1, 0.0)

    with create_writer(tmp_path / "pairs.jsonl", docs) as writer:
        writer.write(pair)
        stats = writer.finalize()
    assert stats["total_records"] == 1
    [record] = read_records(tmp_path / "pairs.jsonl")
    assert record == {"a": 0, "b": 1, "similarity": 1.0, "distance": 0.0,
                      "text_a": docs[0], "text_b": docs[1]}

    with create_writer(tmp_path / "pairs.txt", docs) as writer:
        writer.write(pair)
        assert writer.finalize()["format"] == "txt"
    assert (tmp_path / "pairs.txt").read_text().startswith("Duplicate pair (Jaccard: 1):\n - alpha")

    with pytest.raises(ValueError):
        create_writer(tmp_path / "pairs.parquet", docs, format="parquet")


def test_print_report(capsys: pytest.CaptureFixture) -> None:
    assert print_report([DuplicatePair(0, 1, 0.25)], ["x y z", b"x y w"]) == 1
    out = capsys.readouterr().out
    assert out == "Duplicate pair (Jaccard: 0.75):\n - x y z\n - x y w\n\n"


def test_pipeline_stats(tmp_path: Path) -> None:
    out = tmp_path / "report.jsonl"
    stats = DedupPipeline(DedupConfig(), output_path=out).run([QUICK_FOX, QUICK_FOX, "short"])
    assert stats["input_stats"] == {"total_documents": 3, "short_documents": 1}
    assert stats["dedup_stats"] == {"pairs_compared": 3, "duplicate_pairs": 1}
    assert len(read_records(out)) == 1


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def test_cli_demo(capsys: pytest.CaptureFixture) -> None:
    assert main(["demo", "-q"]) == 0
    out = capsys.readouterr().out
    assert f"Duplicate pair (Jaccard: 1):\n - {QUICK_FOX}\n - {QUICK_FOX}\n" in out


def test_cli_scan(tmp_path: Path) -> None:
    _write_corpus(tmp_path)
    out = tmp_path / "out" / "pairs.jsonl"
    assert main(["scan", str(tmp_path), "-o", str(out), "-q", "--num-hashes", "32"]) == 0
    records = read_records(out)
    assert any(r["text_a"] == QUICK_FOX and r["text_b"] == QUICK_FOX for r in records)


def test_cli_run_yaml(tmp_path: Path) -> None:
    _write_corpus(tmp_path)
    cfg = tmp_path / "run.yml"
    cfg.write_text("input: docs.txt\noutput: pairs.txt\nngrams: 2\nthreshold: 0.5\n")
    assert main(["run", str(cfg), "-q"]) == 0
    assert "Duplicate pair (Jaccard: 1)" in (tmp_path / "pairs.txt").read_text()


def test_cli_errors(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    assert main(["scan", str(tmp_path / "missing"), "-q"]) == 2
    assert main(["demo", "--threshold", "2"]) == 2
    cfg = tmp_path / "run.yml"
    cfg.write_text("ngrams: 2\n")
    assert main(["run", str(cfg)]) == 2
    assert "error" in capsys.readouterr().err


def test_cli_rejects_bad_yaml_and_process_count(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    _write_corpus(tmp_path)
    broken = tmp_path / "broken.yml"
    broken.write_text("input: docs.txt\nngrams: [1\n")
    assert main(["run", str(broken), "-q"]) == 2
    assert "invalid YAML" in capsys.readouterr().err

    assert main(["scan", str(tmp_path), "-q", "--processes", "0"]) == 2
    cfg = tmp_path / "run.yml"
    cfg.write_text("input: docs.txt\nprocesses: -1\n")
    assert main(["run", str(cfg), "-q"]) == 2
    assert "processes" in capsys.readouterr().err
