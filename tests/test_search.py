from pathlib import Path

import pytest
from phrasegram.datasets import DictionaryIndex
from phrasegram.engine import frequency_of, canonical_signature
from phrasegram.engine.letters import combined_frequency, same_letters
from phrasegram.solvers import create_searcher, get_searcher_ids

SAMPLE = Path(__file__).resolve().parents[1] / "phrasegram" / "datasets" / "data" / "sample_words.txt"
SEARCHERS = ["backtrack", "stack"]


def _search(searcher_id, phrase, index, **kw):
    kw.setdefault("max_solutions", 10_000)
    kw.setdefault("max_words", 6)
    return create_searcher(searcher_id).search(frequency_of(phrase), index, **kw)


@pytest.fixture(scope="module")
def sample_index():
    return DictionaryIndex.from_path(SAMPLE)


def test_registry_lists_both_strategies():
    assert get_searcher_ids() == ["backtrack", "stack"]
    with pytest.raises(ValueError):
        create_searcher("nope")

@pytest.mark.parametrize("sid", SEARCHERS)
def test_cat_scenario(sid):
    index = DictionaryIndex.build(["cat", "act", "tac", "a", "ct"])
    res = _search(sid, "cat", index)
    assert res.sequences == [("cat",), ("act",), ("tac",), ("ct", "a")]
    sigs = [canonical_signature(s) for s in res.sequences]
    assert sorted(sigs) == ["a ct", "act", "cat", "tac"]
    assert len(set(sigs)) == len(sigs)
    assert res.complete

@pytest.mark.parametrize("sid", SEARCHERS)
def test_repeats_policy(sid):
    index = DictionaryIndex.build(["a", "aa"])
    assert _search(sid, "aaa", index).sequences == [("aa", "a"), ("a", "a", "a")]
    assert _search(sid, "aaa", index, allow_repeats=False).sequences == [("aa", "a")]

@pytest.mark.parametrize("sid", SEARCHERS)
def test_max_words_bounds_sequence_length(sid):
    index = DictionaryIndex.build(["a", "aa"])
    assert _search(sid, "aaa", index, max_words=2).sequences == [("aa", "a")]
    assert _search(sid, "aaaa", index, max_words=1).sequences == []

@pytest.mark.parametrize("sid", SEARCHERS)
def test_max_solutions_stops_early(sid):
    index = DictionaryIndex.build(["cat", "act", "tac", "a", "ct"])
    res = _search(sid, "cat", index, max_solutions=2)
    assert res.sequences == [("cat",), ("act",)]
    assert res.stop_reason == "max_solutions"

@pytest.mark.parametrize("sid", SEARCHERS)
def test_node_budget_returns_partial(sid):
    index = DictionaryIndex.build(["a", "aa"])
    res = _search(sid, "aaa", index, max_nodes=1)
    assert res.stop_reason == "max_nodes"
    assert res.sequences == []
    assert not res.complete

@pytest.mark.parametrize("sid", SEARCHERS)
def test_time_limit_returns_partial(sid, sample_index):
    res = _search(sid, "astronomer dormitory", sample_index, time_limit=1e-9)
    assert res.stop_reason == "time_limit"

@pytest.mark.parametrize("sid", SEARCHERS)
@pytest.mark.parametrize("phrase", ["", "   ", "42 !?"])
def test_empty_phrase_has_no_results(sid, phrase, sample_index):
    res = _search(sid, phrase, sample_index)
    assert res.sequences == []
    assert res.nodes == 0

@pytest.mark.parametrize("sid", SEARCHERS)
def test_words_longer_than_phrase(sid):
    index = DictionaryIndex.build(["elephant", "giraffe"])
    assert _search(sid, "cat", index).sequences == []

@pytest.mark.parametrize("sid", SEARCHERS)
@pytest.mark.parametrize("phrase", ["dirty room", "moon starer", "listen", "the eyes", "tin net"])
def test_every_sequence_is_an_exact_cover(sid, phrase, sample_index):
    target = frequency_of(phrase)
    res = _search(sid, phrase, sample_index)
    assert res.sequences
    for seq in res.sequences:
        assert same_letters(combined_frequency(seq), target)
    sigs = [canonical_signature(s) for s in res.sequences]
    assert len(sigs) == len(set(sigs))

@pytest.mark.parametrize("phrase", ["dirty room", "moon starer", "the eyes", "a tin net"])
def test_strategies_agree(phrase, sample_index):
    a = _search("backtrack", phrase, sample_index)
    b = _search("stack", phrase, sample_index)
    assert a.sequences == b.sequences
    assert a.nodes == b.nodes

def test_search_is_deterministic(sample_index):
    first = _search("backtrack", "dirty room", sample_index)
    second = _search("backtrack", "dirty room", sample_index)
    assert first.sequences == second.sequences

def test_search_accepts_a_prebuilt_view(sample_index):
    freq = frequency_of("dirty room")
    view = sample_index.candidates_for(freq)
    res = create_searcher("backtrack").search(freq, view, max_solutions=100, max_words=6)
    assert ("dormitory",) in res.sequences
    assert res.candidates == len(view)

def test_search_leaves_phrase_vector_untouched(sample_index):
    freq = frequency_of("dirty room")
    before = freq.copy()
    create_searcher("stack").search(freq, sample_index, max_solutions=100, max_words=6)
    assert same_letters(freq, before)

@pytest.mark.parametrize("sid", SEARCHERS)
def test_deep_sequences_do_not_exhaust_the_call_stack(sid):
    index = DictionaryIndex.build(["a"])
    res = _search(sid, "a" * 1500, index, max_words=2000)
    assert res.sequences == [("a",) * 1500]
    assert res.complete
