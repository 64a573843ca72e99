"""
Tests for ProximitySweep, cross-checked against exhaustive_match.

Run with:  pytest tests/
"""

import numpy as np
import pytest
import sys
sys.path.insert(0, "..")

from proximitysweep import ProximitySweep, exhaustive_match


def sweep(distance, terms, offsets, **kw):
    return ProximitySweep(distance, terms, offsets, **kw).find_match()


# ---------------------------------------------------------------------------
# Scenario tests
# ---------------------------------------------------------------------------

def test_quick_brown_fox_within_two():
    assert sweep(2, ["quick", "brown", "fox"], [[1], [2], [3]])


def test_quick_brown_fox_within_one():
    assert not sweep(1, ["quick", "brown", "fox"], [[1], [2], [3]])


def test_best_pair_too_far():
    assert not sweep(3, ["a", "b"], [[5, 9], [1]])


def test_close_pair():
    assert sweep(3, ["a", "b"], [[5, 9], [6]])


def test_single_empty_term():
    assert not sweep(100, ["a"], [[]])


def test_single_term_always_matches_itself():
    assert sweep(0, ["a"], [[42]])


def test_order_independent():
    assert sweep(2, ["fox", "quick"], [[3], [1]])
    assert sweep(2, ["quick", "fox"], [[1], [3]])


def test_needs_to_advance_several_steps():
    # only the last occurrences are close: 20, 21, 22
    assert sweep(2, ["a", "b", "c"], [[1, 10, 20], [5, 15, 21], [0, 22]])
    assert not sweep(1, ["a", "b", "c"], [[1, 10, 20], [5, 15, 21], [0, 22]])


def test_zero_distance_same_position():
    assert sweep(0, ["a", "b"], [[3, 7], [7]])
    assert not sweep(0, ["a", "b"], [[3, 8], [7]])


# ---------------------------------------------------------------------------
# Argument handling tests
# ---------------------------------------------------------------------------

def test_fewer_offset_lists_than_terms_is_no_match():
    assert not sweep(10, ["a", "b", "c"], [[1], [2]])


def test_more_offset_lists_than_terms_raises():
    with pytest.raises(ValueError):
        ProximitySweep(10, ["a", "b"], [[1], [2], [3]])


def test_missing_offset_list_is_no_match():
    assert not sweep(10, ["a", "b"], [[1], None])


def test_missing_list_for_repeated_term_is_no_match():
    assert not sweep(10, ["a", "a"], [[1, 2], None])


def test_empty_offset_list_is_no_match():
    assert not sweep(10, ["a", "b"], [[], [1]])


def test_negative_distance_raises():
    with pytest.raises(ValueError):
        ProximitySweep(-1, ["a"], [[1]])


def test_non_integer_distance_raises():
    with pytest.raises(ValueError):
        ProximitySweep(1.5, ["a"], [[1]])


def test_caller_lists_not_modified():
    a, b = [1, 10, 20], [15]
    sweep(2, ["a", "b"], [a, b])
    assert a == [1, 10, 20]
    assert b == [15]


def test_find_match_is_repeatable():
    s = ProximitySweep(3, ["a", "b"], [[5, 9], [6]])
    assert s.find_match()
    assert s.find_match()


def test_one_cursor_per_distinct_term():
    s = ProximitySweep(3, ["a", "b", "a"], [[1, 2], [3], [1, 2]])
    assert sorted(s.cursors) == ["a", "b"]


# ---------------------------------------------------------------------------
# Repeated term tests
# ---------------------------------------------------------------------------

def test_repeated_term_needs_distinct_occurrences():
    assert not sweep(10, ["a", "a"], [[5], [5]])


def test_repeated_term_shared_occurrence_allowed():
    assert sweep(10, ["a", "a"], [[5], [5]], allow_shared_occurrences=True)


def test_repeated_term_window():
    assert sweep(3, ["a", "a"], [[1, 4], [1, 4]])
    assert not sweep(2, ["a", "a"], [[1, 4], [1, 4]])


def test_repeated_term_uses_first_list():
    # the canonical list is the first one given for the term
    assert sweep(1, ["a", "b", "a"], [[1, 2], [2], [50, 90]])


def test_repeated_term_with_other_terms():
    # a a b: needs two a's and one b within 4
    assert sweep(4, ["a", "b", "a"], [[0, 10, 13], [12], [0, 10, 13]])
    assert not sweep(2, ["a", "b", "a"], [[0, 10, 13], [12], [0, 10, 13]])


# ---------------------------------------------------------------------------
# Exhaustive oracle tests
# ---------------------------------------------------------------------------

def test_exhaustive_scenarios():
    assert exhaustive_match(2, ["quick", "brown", "fox"], [[1], [2], [3]])
    assert not exhaustive_match(1, ["quick", "brown", "fox"], [[1], [2], [3]])
    assert not exhaustive_match(3, ["a", "b"], [[5, 9], [1]])
    assert not exhaustive_match(100, ["a"], [[]])


def test_exhaustive_too_many_lists_raises():
    with pytest.raises(ValueError):
        exhaustive_match(1, ["a"], [[1], [2]])


def random_case(rng):
    pool = ["a", "b", "c"]
    terms = [pool[i] for i in rng.integers(0, len(pool), size=int(rng.integers(1, 5)))]
    lists = {}
    for t in set(terms):
        size = int(rng.integers(0, 5))
        lists[t] = sorted(rng.choice(25, size=size, replace=False).tolist())
    return terms, [lists[t] for t in terms]


@pytest.mark.parametrize("shared", [False, True])
def test_matches_exhaustive_on_random_inputs(shared):
    rng = np.random.default_rng(7)
    for _ in range(400):
        terms, offsets = random_case(rng)
        d = int(rng.integers(0, 10))
        expected = exhaustive_match(d, terms, offsets, allow_shared_occurrences=shared)
        got = sweep(d, terms, offsets, allow_shared_occurrences=shared)
        assert got == expected, (d, terms, offsets)


def test_monotone_in_distance():
    rng = np.random.default_rng(11)
    for _ in range(200):
        terms, offsets = random_case(rng)
        results = [sweep(d, terms, offsets) for d in range(0, 26)]
        first = results.index(True) if True in results else len(results)
        assert all(results[first:])


def test_idempotent_on_copies():
    rng = np.random.default_rng(3)
    for _ in range(50):
        terms, offsets = random_case(rng)
        one = sweep(4, terms, [list(o) for o in offsets])
        two = sweep(4, terms, [list(o) for o in offsets])
        assert one == two
