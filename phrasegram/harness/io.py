"""
I/O utilities for solve runs.

Responsibilities:
- result_to_dict / result_from_dict / results_to_json: the plain data shape
  results take when they leave Python (a UI, a web worker, a file).
- write_csv:      flatten solve reports into a tidy CSV (one row per result).
- write_manifest: dump a JSON manifest with config, hashes, and metadata.
- timestamp_id:   stable UTC run ID string.
- git_commit_or_unknown: best-effort short commit hash for reproducibility.

Result encoding (JSON):
    [{"words": ["dirty", "room"], "score": 0.664}, ...]
Words keep their emission order; the list keeps rank order.
"""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Iterable, List
import csv
import json
import subprocess
import datetime as dt

from phrasegram.engine.ranking import ScoredResult


def result_to_dict(r: ScoredResult) -> Dict[str, Any]:
    return {"words": list(r.words), "score": float(r.score)}


def result_from_dict(d: Dict[str, Any]) -> ScoredResult:
    """Inverse of result_to_dict. Raises KeyError/TypeError on a malformed dict."""
    words = d["words"]
    if not isinstance(words, list) or not all(isinstance(w, str) for w in words):
        raise TypeError(f"'words' must be a list of strings; got {words!r}")
    return ScoredResult(words=tuple(words), score=float(d["score"]))


def results_to_json(results: Iterable[ScoredResult], indent: int | None = None) -> str:
    return json.dumps([result_to_dict(r) for r in results], indent=indent)


def results_from_json(s: str) -> List[ScoredResult]:
    return [result_from_dict(d) for d in json.loads(s)]


def report_to_dict(report) -> Dict[str, Any]:
    """JSON-ready view of a SolveReport (options flattened, results encoded)."""
    return {
        "phrase": report.phrase,
        "letters": report.letters,
        "candidates": report.candidates,
        "found": report.found,
        "nodes": report.nodes,
        "stop_reason": report.stop_reason,
        "time_ms": round(float(report.time_ms), 3),
        "solver": report.solver,
        "options": asdict(report.options),
        "results": [result_to_dict(r) for r in report.results],
    }


def write_csv(reports: List, path: str) -> str:
    """
    Serialize solve reports to CSV.

    Schema (columns):
      phrase, rank, words, word_count, score, stop_reason

    Phrases with no results get a single row with empty rank/words so they
    still appear in the file.

    Returns:
      The path written (string).
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    fields = ["phrase", "rank", "words", "word_count", "score", "stop_reason"]
    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fields)
        w.writeheader()

        for rep in reports:
            if not rep.results:
                w.writerow({"phrase": rep.phrase, "rank": "", "words": "", "word_count": 0,
                            "score": "", "stop_reason": rep.stop_reason or ""})
                continue
            for i, r in enumerate(rep.results, start=1):
                w.writerow({
                    "phrase": rep.phrase,
                    "rank": i,
                    "words": r.text,
                    "word_count": len(r.words),
                    "score": round(float(r.score), 6),
                    "stop_reason": rep.stop_reason or "",
                })

    return str(p)


def write_manifest(manifest: Dict, path: str) -> str:
    """
    Write a JSON manifest with run configuration and word-list validation summary.

    Typical keys:
      - run_id, git_commit
      - config: CLI args (dict path, options, outdir)
      - wordlist: output of datasets.validate_wordlist(...)
      - num_phrases, num_results
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2)
    return str(p)


def timestamp_id() -> str:
    """
    Return a compact UTC timestamp suitable for filenames, e.g. 20250820T024121Z.
    """
    return dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def git_commit_or_unknown() -> str:
    """
    Best-effort short git hash of the current repo state.
    Returns 'unknown' if git is not available or the call fails.
    """
    try:
        return (
            subprocess.check_output(
                ["git", "rev-parse", "--short", "HEAD"],
                stderr=subprocess.DEVNULL,
            )
            .decode()
            .strip()
        )
    except (OSError, subprocess.CalledProcessError):
        return "unknown"
