from pathlib import Path

import pytest
from phrasegram.datasets import DictionaryIndex
from phrasegram.engine import SolveOptions, frequency_of
from phrasegram.engine.letters import combined_frequency, same_letters
from phrasegram.harness import solve, solve_batch, solve_report

SAMPLE = Path(__file__).resolve().parents[1] / "phrasegram" / "datasets" / "data" / "sample_words.txt"


@pytest.fixture(scope="module")
def index():
    return DictionaryIndex.from_path(SAMPLE)


def test_solve_ranks_single_word_first(index):
    results = solve("Dirty Room!", index)
    assert results[0].words == ("dormitory",)
    scores = [r.score for r in results]
    assert scores == sorted(scores, reverse=True)
    for r in results:
        assert same_letters(combined_frequency(r.words), frequency_of("dirty room"))
    assert len({r.signature for r in results}) == len(results)

def test_cat_scenario_through_solve():
    idx = DictionaryIndex.build(["cat", "act", "tac", "a", "ct"])
    results = solve("cat", idx)
    assert sorted(r.signature for r in results) == ["a ct", "act", "cat", "tac"]
    # single words first, alphabetical among equal scores
    assert [r.words for r in results[:3]] == [("act",), ("cat",), ("tac",)]

@pytest.mark.parametrize("phrase", ["", "  ", "123 ?!"])
def test_empty_phrase_returns_empty_list(phrase, index):
    assert solve(phrase, index) == []

def test_no_word_short_enough():
    idx = DictionaryIndex.build(["elephant", "giraffe"])
    assert solve("cat", idx) == []

@pytest.mark.parametrize("phrase", ["dirty room", "moon starer", "the eyes", "tin net"])
def test_max_results_one_is_best_of_unbounded(phrase, index):
    unbounded = solve(phrase, index, {"maxResults": 10_000})
    top = solve(phrase, index, {"maxResults": 1})
    assert len(top) == 1
    assert top[0] == unbounded[0]
    assert top[0].score == max(r.score for r in unbounded)

def test_solve_is_idempotent(index):
    opts = {"maxResults": 20, "maxWordsPerSequence": 4}
    assert solve("moon starer", index, opts) == solve("moon starer", index, opts)

def test_solvers_give_same_ranking(index):
    a = solve("the eyes", index, SolveOptions(solver="backtrack"))
    b = solve("the eyes", index, SolveOptions(solver="stack"))
    assert a == b

def test_boundary_option_names(index):
    results = solve("tin net", index, {"maxResults": 3, "maxWordsPerSequence": 2,
                                       "allowRepeatedWords": False})
    assert 0 < len(results) <= 3
    assert all(len(r.words) <= 2 for r in results)

@pytest.mark.parametrize("bad", [
    {"maxResults": 0},
    {"maxResults": -5},
    {"maxWordsPerSequence": 0},
    {"maxWordsPerSequence": True},
    {"allowRepeatedWords": "yes"},
    {"searchLimit": 0},
    {"maxNodes": -1},
    {"timeLimit": 0},
    {"solver": "dfs"},
    {"colour": "blue"},
])
def test_bad_options_fail_fast(bad, index):
    with pytest.raises(ValueError):
        solve("dirty room", index, bad)

def test_report_carries_search_stats(index):
    rep = solve_report("dirty room", index, SolveOptions(max_results=2))
    assert rep.letters == 9
    assert rep.found >= len(rep.results) == 2
    assert rep.candidates > 0 and rep.nodes > 0
    assert rep.complete and rep.solver == "backtrack"

def test_node_budget_degrades_gracefully(index):
    rep = solve_report("astronomer dormitory", index, SolveOptions(max_nodes=5))
    assert rep.stop_reason == "max_nodes"
    for r in rep.results:
        assert same_letters(combined_frequency(r.words), frequency_of("astronomer dormitory"))

def test_solve_batch_reports_progress(index):
    seen = []
    reports = solve_batch(["listen", "dirty room", ""], index, {"maxResults": 5},
                          progress=lambda done, total: seen.append((done, total)))
    assert [r.phrase for r in reports] == ["listen", "dirty room", ""]
    assert reports[2].results == []
    assert seen == [(1, 3), (2, 3), (3, 3)]

def test_long_sequences_with_default_solver():
    idx = DictionaryIndex.build(["a"])
    results = solve("a" * 1500, idx, {"maxWordsPerSequence": 2000})
    assert len(results) == 1
    assert results[0].words == ("a",) * 1500
