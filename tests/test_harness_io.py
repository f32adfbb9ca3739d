import csv
import json
from pathlib import Path

import pytest
from phrasegram.datasets import DictionaryIndex
from phrasegram.engine import ScoredResult
from phrasegram.harness import (
    report_to_dict, result_from_dict, result_to_dict, results_from_json, results_to_json,
    solve_batch, write_csv, write_manifest,
)


def test_result_encoding_shape():
    r = ScoredResult(("dirty", "room"), 0.664)
    assert result_to_dict(r) == {"words": ["dirty", "room"], "score": 0.664}
    assert json.loads(results_to_json([r])) == [{"words": ["dirty", "room"], "score": 0.664}]


def test_result_decoding():
    payload = '[{"words": ["dormitory"], "score": 2.0}, {"words": ["dirty", "room"], "score": 0.5}]'
    out = results_from_json(payload)
    assert out[0] == ScoredResult(("dormitory",), 2.0)
    assert out[1].words == ("dirty", "room")


@pytest.mark.parametrize("bad", [{"words": "dirty room", "score": 1.0}, {"words": [1, 2], "score": 1.0}])
def test_result_decoding_rejects_malformed(bad):
    with pytest.raises(TypeError):
        result_from_dict(bad)


def test_write_csv_and_manifest(tmp_path: Path):
    index = DictionaryIndex.build(["cat", "act", "a", "ct", "dog"])
    reports = solve_batch(["cat", "zzz"], index, {"maxResults": 10})

    csv_path = write_csv(reports, str(tmp_path / "out" / "run.csv"))
    with open(csv_path, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    cat_rows = [r for r in rows if r["phrase"] == "cat"]
    assert [r["words"] for r in cat_rows] == ["act", "cat", "ct a"]
    assert [r["rank"] for r in cat_rows] == ["1", "2", "3"]
    # phrase with no answers still gets a row
    assert [r["word_count"] for r in rows if r["phrase"] == "zzz"] == ["0"]

    man = write_manifest({"reports": [report_to_dict(r) for r in reports]}, str(tmp_path / "m.json"))
    data = json.loads(Path(man).read_text(encoding="utf-8"))
    assert data["reports"][0]["options"]["max_results"] == 10
    assert data["reports"][0]["results"][0] == {"words": ["act"], "score": 2.0}
