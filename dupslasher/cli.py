"""DupSlasher unified command-line interface.

Usage
-----
$ dupslasher scan corpus/ --threshold 0.3 --output pairs.jsonl
$ dupslasher run config.yml
$ dupslasher demo

The *scan* command loads every supported file under the given inputs, signs
each document and reports all pairs whose estimated Jaccard distance is
below the threshold.

The *run* command does the same from a YAML configuration file holding
``input``, ``output`` and the detector options.

The *demo* command runs the detector over the built-in sample corpus.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from .detector.config import ConfigurationError, DedupConfig, read_yaml
from .detector.pipeline import DedupPipeline, print_stats
from .samples import sample_corpus

logger = logging.getLogger(__name__)

_RUN_KEYS = {"input", "output", "format", "processes"}

# -----------------------------------------------------------
# Helpers
# -----------------------------------------------------------


def _add_detector_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--ngrams", type=int, help="Token-window width (default: 3)")
    p.add_argument("--num-hashes", type=int, help="Signature length (default: 13)")
    p.add_argument("--threshold", type=float, help="Report pairs with distance below this (default: 0.3)")
    p.add_argument("--num-features", type=int, help="Feature hash space size (default: 262144)")
    p.add_argument("--seed", type=int, help="Hash family seed (default: 1)")


def _config_from_args(args: argparse.Namespace, base: DedupConfig | None = None) -> DedupConfig:
    return (base or DedupConfig()).replace(
        ngrams=args.ngrams,
        num_hashes=args.num_hashes,
        threshold=args.threshold,
        num_features=args.num_features,
        seed=args.seed,
    )


def _save_stats(stats: Dict[str, Any], output: Path) -> None:
    stats_path = output.parent / f"{output.name.split('.')[0]}_stats.json"
    with open(stats_path, "w", encoding="utf-8") as f:
        json.dump(stats, f, indent=2)
    print(f"Stats saved to {stats_path}")


# -----------------------------------------------------------
# Commands
# -----------------------------------------------------------


def _cmd_scan(args: argparse.Namespace) -> None:
    config = _config_from_args(args)
    pipeline = DedupPipeline(
        config,
        output_path=args.output,
        output_format=args.format,
        processes=args.processes,
        verbose=not args.quiet,
    )
    stats = pipeline.run_files(args.input)
    if not args.quiet:
        print_stats(stats)
    if args.save_stats and args.output:
        _save_stats(stats, Path(args.output))


def _cmd_run(args: argparse.Namespace) -> None:
    cfg_path: Path = args.config.resolve()
    data = read_yaml(cfg_path)

    run_opts = {k: data.pop(k) for k in list(data) if k in _RUN_KEYS}
    if "input" not in run_opts:
        raise ConfigurationError(f"{cfg_path}: missing required key 'input'")

    inputs = run_opts["input"]
    if isinstance(inputs, (str, Path)):
        inputs = [inputs]
    # Relative inputs/outputs are resolved against the config file location.
    inputs = [str((cfg_path.parent / Path(p).expanduser())) for p in inputs]
    output = run_opts.get("output")
    if output is not None:
        output = cfg_path.parent / Path(output).expanduser()

    config = _config_from_args(args, DedupConfig.from_mapping(data))
    pipeline = DedupPipeline(
        config,
        output_path=output,
        output_format=run_opts.get("format", "auto"),
        processes=run_opts.get("processes", 1),
        verbose=not args.quiet,
    )
    stats = pipeline.run_files(inputs)
    if not args.quiet:
        print_stats(stats)


def _cmd_demo(args: argparse.Namespace) -> None:
    config = _config_from_args(args)
    pipeline = DedupPipeline(config, output_path=args.output)
    stats = pipeline.run(sample_corpus())
    if not args.quiet:
        print_stats(stats)


# -----------------------------------------------------------
# Entrypoint
# -----------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dupslasher",
        description="DupSlasher - MinHash near-duplicate detection for text corpora",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(required=True, dest="cmd")

    # scan
    p_scan = sub.add_parser("scan", help="Find near-duplicate pairs in files")
    p_scan.add_argument("input", nargs="+", help="Input files, directories, or glob patterns")
    p_scan.add_argument("-o", "--output", help="Report path (prints to stdout when omitted)")
    p_scan.add_argument("--format", default="auto", choices=["auto", "jsonl", "txt"],
                        help="Report format (default: auto-detect from extension)")
    p_scan.add_argument("--processes", type=int, default=1,
                        help="Worker processes for signature computation (default: 1)")
    p_scan.add_argument("--save-stats", action="store_true",
                        help="Save run statistics next to the report")
    p_scan.add_argument("-q", "--quiet", action="store_true", help="Suppress progress output")
    _add_detector_args(p_scan)
    p_scan.set_defaults(func=_cmd_scan)

    # run
    p_run = sub.add_parser("run", help="Find near-duplicate pairs via YAML config")
    p_run.add_argument("config", type=Path, help="Path to YAML configuration file")
    p_run.add_argument("-q", "--quiet", action="store_true", help="Suppress progress output")
    _add_detector_args(p_run)
    p_run.set_defaults(func=_cmd_run)

    # demo
    p_demo = sub.add_parser("demo", help="Run over the built-in sample corpus")
    p_demo.add_argument("-o", "--output", help="Report path (prints to stdout when omitted)")
    p_demo.add_argument("-q", "--quiet", action="store_true", help="Suppress the run summary")
    _add_detector_args(p_demo)
    p_demo.set_defaults(func=_cmd_demo)

    return parser


def main(argv: List[str] | None = None) -> int:  # noqa: D401 – simple
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        args.func(args)
    except (ConfigurationError, FileNotFoundError) as e:
        print(f"dupslasher: error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
