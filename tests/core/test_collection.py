"""Tests for PathCollection insertion policies.

Critical Invariants:
- Collections stay sorted by ascending time after every add
- Unfiltered ties go after existing paths of equal time
- Gold only admits a new fastest path
- PinnedPath rejects anything not faster than the pinned reference
- Properties above hold for arbitrary insertion sequences
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pathcomp.core.path import Gold, Path, PathCollection, PinnedPath


def timed(ms: int) -> Path:
    path = Path()
    path.add_node((0, 0, 0))
    path.end_path(ms)
    return path


def times(collection: PathCollection) -> list[int]:
    return [p.time() for p in collection]


@pytest.fixture
def collection():
    """Collection holding paths of 100, 200 and 300 ms."""
    c = PathCollection("Route")
    for ms in (100, 200, 300):
        c.add(timed(ms))
    return c


# Unfiltered insertion


def test_unfiltered_keeps_order(collection):
    assert collection.add(timed(250))
    assert collection.add(timed(50))
    assert collection.add(timed(999))

    assert times(collection) == [50, 100, 200, 250, 300, 999]


def test_unfiltered_tie_goes_after_existing(collection):
    tie = timed(200)
    collection.add(tie)

    assert times(collection) == [100, 200, 200, 300]
    assert collection.paths[2] is tie


def test_unfiltered_into_empty_collection():
    c = PathCollection("Empty")
    path = timed(10)

    assert c.add(path, None)
    assert c.paths == [path]


# Gold


def test_gold_admits_new_best_at_front(collection):
    best = timed(90)

    assert collection.add(best, Gold())
    assert collection.paths[0] is best
    assert times(collection) == [90, 100, 200, 300]


def test_gold_rejects_equal_or_slower(collection):
    assert not collection.add(timed(100), Gold())
    assert not collection.add(timed(150), Gold())
    assert times(collection) == [100, 200, 300]


def test_gold_admits_into_empty_collection():
    c = PathCollection("Empty")

    assert c.add(timed(500), Gold())
    assert len(c) == 1


# PinnedPath


def test_pinned_admits_faster_than_reference(collection):
    pinned = collection.paths[1]

    assert collection.add(timed(150), PinnedPath(pinned.id))
    assert times(collection) == [100, 150, 200, 300]


def test_pinned_rejects_slower_or_equal_to_reference(collection):
    pinned = collection.paths[1]

    assert not collection.add(timed(250), PinnedPath(pinned.id))
    assert not collection.add(timed(200), PinnedPath(pinned.id))
    assert times(collection) == [100, 200, 300]


def test_pinned_missing_reference_falls_back_to_ordered(collection):
    assert collection.add(timed(250), PinnedPath(Path().id))
    assert collection.add(timed(999), PinnedPath(Path().id))

    assert times(collection) == [100, 200, 250, 300, 999]


# Lookup and removal


def test_contains_accepts_path_or_id(collection):
    path = collection.paths[0]

    assert path in collection
    assert path.id in collection
    assert Path() not in collection


def test_remove_and_get_path(collection):
    path = collection.paths[1]

    assert collection.get_path(path.id) is path
    assert collection.remove(path.id)
    assert not collection.remove(path.id)
    assert collection.get_path(path.id) is None
    assert times(collection) == [100, 300]


def test_path_ids_follow_order(collection):
    assert collection.path_ids() == [p.id for p in collection.paths]


def test_clear_paths(collection):
    collection.clear_paths()

    assert len(collection) == 0


# Properties over arbitrary insertion sequences

durations = st.lists(st.integers(min_value=0, max_value=10_000), max_size=30)


@given(ms_list=durations)
def test_unfiltered_sorted_and_stable(ms_list):
    c = PathCollection("Route")
    inserted = [timed(ms) for ms in ms_list]
    for path in inserted:
        assert c.add(path)

    expected = sorted(inserted, key=lambda p: p.time())
    assert [p.id for p in c] == [p.id for p in expected]


@given(ms_list=durations)
def test_gold_keeps_fastest_first(ms_list):
    c = PathCollection("Route")
    for ms in ms_list:
        c.add(timed(ms), Gold())

    if ms_list:
        assert c.paths[0].time() == min(ms_list)
    result = times(c)
    assert all(a < b for a, b in zip(result, result[1:]))


@st.composite
def pinned_collection(draw):
    existing = draw(st.lists(st.integers(min_value=0, max_value=1_000), min_size=1, max_size=10))
    c = PathCollection("Route")
    for ms in existing:
        c.add(timed(ms))
    pinned = draw(st.sampled_from(c.paths))
    return c, pinned


@given(state=pinned_collection(), ms=st.integers(min_value=0, max_value=1_000))
def test_pinned_admits_only_faster(state, ms):
    c, pinned = state
    before = len(c)

    accepted = c.add(timed(ms), PinnedPath(pinned.id))

    assert accepted == (ms < pinned.time())
    assert len(c) == before + int(accepted)
    assert times(c) == sorted(times(c))
