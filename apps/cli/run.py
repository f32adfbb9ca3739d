# apps/cli/run.py
"""
CLI entry point for phrasegram.

This script:
  1) Validates the word list (prints counts + SHA, usable/invalid lines).
  2) Builds the dictionary index once.
  3) Solves one phrase (--phrase) and prints the ranked answers, or solves a
     file of phrases (--phrases) with a live progress indicator.
  4) Optionally writes:
       - CSV:  one row per ranked result
       - JSON: manifest with config, word-list hash, git commit, counts

Usage:
    python -m apps.cli.run --phrase "dirty room"
    python -m apps.cli.run --phrases phrases.txt --max-results 5 --outdir reports
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import List

from tqdm import tqdm

from phrasegram.datasets import DictionaryIndex, read_phrases, validate_wordlist, pretty_summary
from phrasegram.engine import SolveOptions, validate_options
from phrasegram.engine.validation import DEFAULT_MAX_RESULTS, DEFAULT_MAX_WORDS, DEFAULT_SEARCH_LIMIT
from phrasegram.harness import solve_batch, solve_report, write_csv, write_manifest, results_to_json
from phrasegram.harness.core import SolveReport
from phrasegram.harness.io import timestamp_id, git_commit_or_unknown, report_to_dict
from phrasegram.solvers import get_searcher_ids

DEFAULT_DICT = str(Path(__file__).resolve().parents[2] / "phrasegram" / "datasets" / "data" / "sample_words.txt")

logger = logging.getLogger("phrasegram.cli")


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_parser() -> argparse.ArgumentParser:
    # Build help text showing currently registered searcher IDs
    solver_choices = ", ".join(get_searcher_ids())

    ap = argparse.ArgumentParser(description="phrasegram: multi-word anagram finder")
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--phrase", help="phrase to anagram")
    src.add_argument("--phrases", help="file with one phrase per line (batch mode)")
    ap.add_argument("--dict", dest="dict_path", default=DEFAULT_DICT,
                    help="word list, one word per line")
    ap.add_argument("--max-results", type=int, default=DEFAULT_MAX_RESULTS,
                    help="ranked answers kept per phrase")
    ap.add_argument("--max-words", type=int, default=DEFAULT_MAX_WORDS,
                    help="most words allowed in one answer")
    ap.add_argument("--no-repeats", action="store_true",
                    help="never use the same word twice in one answer")
    ap.add_argument("--search-limit", type=int, default=DEFAULT_SEARCH_LIMIT,
                    help="stop searching after this many distinct answers")
    ap.add_argument("--max-nodes", type=int, help="node-visit budget per phrase")
    ap.add_argument("--time-limit", type=float, help="seconds allowed per phrase")
    ap.add_argument("--solver", default="backtrack", help=f"search strategy (one of: {solver_choices})")
    ap.add_argument("--json", action="store_true", help="print results as JSON instead of text")
    ap.add_argument("--outdir", help="write CSV + manifest here")
    ap.add_argument(
        "--progress",
        choices=["auto", "bar", "plain", "off"],
        default="auto",
        help="Batch progress (auto=bar on a terminal, else plain text)."
    )
    ap.add_argument("--log-level", default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return ap


def _options_from_args(args: argparse.Namespace) -> SolveOptions:
    return validate_options(SolveOptions(
        max_results=args.max_results,
        max_words=args.max_words,
        allow_repeated_words=not args.no_repeats,
        search_limit=args.search_limit,
        max_nodes=args.max_nodes,
        time_limit=args.time_limit,
        solver=args.solver,
    ))


def _print_report(rep: SolveReport, as_json: bool) -> None:
    if as_json:
        print(results_to_json(rep.results, indent=2))
        return
    if not rep.results:
        print(f"{rep.phrase}: no anagrams found")
        return
    print(f"{rep.phrase}: {rep.found} found, showing {len(rep.results)}")
    for i, r in enumerate(rep.results, start=1):
        print(f"{i:4d}. {r.text:<40s} {r.score:.4f}")
    if not rep.complete:
        print(f"(search stopped early: {rep.stop_reason})")


def _run_batch(phrases: List[str], index: DictionaryIndex, opts: SolveOptions, mode: str) -> List[SolveReport]:
    total = len(phrases)
    start = time.time()
    last_print = 0.0
    bar = tqdm(total=total, ncols=80, desc="Solving", unit="phrase") if mode == "bar" else None

    def _progress(done: int, total: int) -> None:
        nonlocal last_print
        if bar is not None:
            bar.update(1)
        elif mode == "plain":
            now = time.time()
            if (now - last_print >= 1.0) or (done == total):
                elapsed = now - start
                pct = 100.0 * done / max(1, total)
                sys.stderr.write(f"\r[{done}/{total}] {pct:5.1f}% | elapsed {elapsed:6.1f}s")
                sys.stderr.flush()
                last_print = now

    try:
        reports = solve_batch(phrases, index, opts, progress=_progress)
    finally:
        if bar is not None:
            bar.close()

    if mode == "plain":
        sys.stderr.write("\n"); sys.stderr.flush()
    return reports


def main(argv: List[str] | None = None) -> int:
    """
    Parse CLI args, validate the word list, solve, print and optionally write outputs.
    """
    ap = _build_parser()
    args = ap.parse_args(argv)
    _setup_logging(args.log_level)

    try:
        opts = _options_from_args(args)
    except ValueError as e:
        ap.error(str(e))

    # 1) Validate the word list and print a one-liner summary
    rep = validate_wordlist(args.dict_path)
    print(pretty_summary(rep), file=sys.stderr)
    if not rep["exists"]:
        print(f"Word list not found: {args.dict_path}", file=sys.stderr)
        return 2

    # 2) Build the index once for every phrase
    index = DictionaryIndex.from_path(args.dict_path)

    # 3) Solve
    if args.phrase is not None:
        reports = [solve_report(args.phrase, index, opts)]
    else:
        phrases = read_phrases(args.phrases)
        mode = args.progress
        if mode == "auto":
            mode = "bar" if sys.stderr.isatty() else "plain"
        reports = _run_batch(phrases, index, opts, mode)

    if args.json and args.phrases is not None:
        # batch: one JSON document, each entry keeps its phrase
        print(json.dumps([report_to_dict(r) for r in reports], indent=2))
    else:
        for r in reports:
            _print_report(r, args.json)

    # 4) Write outputs (CSV + manifest)
    if args.outdir:
        run_id = timestamp_id()
        outdir = Path(args.outdir)
        outdir.mkdir(parents=True, exist_ok=True)

        csv_path = outdir / f"solve_{run_id}.csv"
        manifest_path = outdir / f"solve_{run_id}_manifest.json"

        write_csv(reports, str(csv_path))
        manifest = {
            "run_id": run_id,
            "git_commit": git_commit_or_unknown(),
            "config": vars(args),
            "wordlist": rep,
            "index": {
                "total_lines": index.stats.total_lines,
                "accepted_words": index.stats.accepted_words,
                "rejected_lines": index.stats.rejected_lines,
                "duplicate_words": index.stats.duplicate_words,
            },
            "num_phrases": len(reports),
            "num_results": sum(len(r.results) for r in reports),
            "reports": [report_to_dict(r) for r in reports],
        }
        write_manifest(manifest, str(manifest_path))

        print(f"Wrote: {csv_path}", file=sys.stderr)
        print(f"Wrote: {manifest_path}", file=sys.stderr)
        logger.info("Run %s: %d phrase(s) written to %s", run_id, len(reports), outdir)

    return 0


if __name__ == "__main__":
    sys.exit(main())
