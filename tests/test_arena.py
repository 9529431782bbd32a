"""
Slot arena tests.

Covers slot reuse, generation tagging, counting and iteration.

Run: python -m pytest tests/test_arena.py -v
"""

import random

import pytest

from trikern.arena import IDMap
from trikern.arena import InvalidHandleError, OutOfBoundsError
from trikern.arena import StaleHandleError
from trikern.ids import VertexID, FaceID


@pytest.fixture
def arena():
    m = IDMap(VertexID)
    for value in 'abcd':
        m.insert(value)

    return m


def test_insert_appends(arena):
    assert len(arena) == 4
    assert arena.capacity == 4
    assert list(arena) == [VertexID(i) for i in range(4)]
    assert arena[VertexID(2)] == 'c'


def test_reuse_is_last_in_first_out(arena):
    arena.remove(VertexID(0))
    arena.remove(VertexID(2))

    h = arena.insert('x')
    assert int(h) == 2

    h = arena.insert('y')
    assert int(h) == 0

    assert arena.capacity == 4
    assert arena.insert('z') == VertexID(4)


def test_reused_slot_gets_new_generation(arena):
    old = VertexID(1)
    arena.remove(old)
    new = arena.insert('x')

    assert int(new) == int(old)
    assert new != old
    assert new.generation == 1
    assert arena[new] == 'x'

    with pytest.raises(StaleHandleError):
        arena[old]


def test_freed_slot_is_not_readable(arena):
    arena.remove(VertexID(3))

    assert VertexID(3) not in arena

    with pytest.raises(StaleHandleError):
        arena.get(VertexID(3))

    with pytest.raises(StaleHandleError):
        arena.set(VertexID(3), 'x')


def test_double_remove_is_reported(arena):
    arena.remove(VertexID(1))

    with pytest.raises(StaleHandleError):
        arena.remove(VertexID(1))

    # The free list holds the index once.
    assert len(arena) == 3
    a = arena.insert('x')
    b = arena.insert('y')
    assert int(a) == 1
    assert int(b) == 4


def test_out_of_bounds(arena):
    with pytest.raises(OutOfBoundsError):
        arena.get(VertexID(4))

    # Lookup failures are standard lookup errors as well.
    with pytest.raises(IndexError):
        arena.get(VertexID(100))

    with pytest.raises(LookupError):
        arena.remove(VertexID(100))

    assert issubclass(StaleHandleError, InvalidHandleError)


def test_wrong_handle_type(arena):
    with pytest.raises(TypeError):
        arena.get(FaceID(0))

    assert FaceID(0) not in arena


def test_count_invariant():
    """len() == inserts - removes for any sequence of operations."""
    rng = random.Random(42)
    m = IDMap(FaceID)
    live = []
    inserts = removes = 0

    for _ in range(500):
        if live and rng.random() < 0.4:
            h = live.pop(rng.randrange(len(live)))
            m.remove(h)
            removes += 1
        else:
            live.append(m.insert(object()))
            inserts += 1

        assert len(m) == inserts - removes

    assert sorted(m) == sorted(live)


def test_iteration_skips_free_slots(arena):
    arena.remove(VertexID(1))

    assert [int(h) for h in arena] == [0, 2, 3]

    # Each call starts a fresh traversal.
    assert list(arena) == list(arena)


def test_frozen_iteration(arena):
    it = arena.ids()
    arena.insert('e')
    arena.remove(VertexID(0))

    assert list(it) == [VertexID(i) for i in range(4)]
    assert list(arena.ids()) == [VertexID(i) for i in (1, 2, 3, 4)]


def test_id_at(arena):
    arena.remove(VertexID(2))
    h = arena.insert('x')

    assert arena.id_at(2) == h

    arena.remove(h)

    with pytest.raises(StaleHandleError):
        arena.id_at(2)

    with pytest.raises(OutOfBoundsError):
        arena.id_at(9)


def test_clear(arena):
    arena.clear()

    assert len(arena) == 0
    assert not arena
    assert list(arena) == []


def test_clear_invalidates_handles(arena):
    old = list(arena)
    arena.clear()

    new = [arena.insert(value) for value in 'wxyz']

    # Slots are reused from index 0 upwards, under new generations.
    assert [int(h) for h in new] == [0, 1, 2, 3]

    for h, g in zip(old, new):
        assert h != g
        assert h not in arena

        with pytest.raises(StaleHandleError):
            arena.get(h)

    assert arena[new[0]] == 'w'
    assert len(arena) == 4


def test_clear_keeps_free_slots_stale(arena):
    arena.remove(VertexID(1))
    arena.clear()

    h = arena.insert('x')
    g = arena.insert('y')

    assert h == VertexID(0, 1)
    assert g == VertexID(1, 1)
