import threading

from structures import NodeArena
from structures.identity import DEFAULT_ALLOCATOR, IdentityAllocator, allocate_id


def test_allocator_is_monotonic():
    alloc = IdentityAllocator(start=10)
    assert alloc.last_issued == 9
    assert [alloc.next_id() for _ in range(3)] == [10, 11, 12]
    assert alloc.last_issued == 12


def test_allocator_is_unique_across_threads():
    alloc = IdentityAllocator()
    seen = []
    lock = threading.Lock()

    def grab():
        ids = [alloc.next_id() for _ in range(200)]
        with lock:
            seen.extend(ids)

    threads = [threading.Thread(target=grab) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(seen) == len(set(seen)) == 800


def test_default_allocator_never_repeats():
    a = allocate_id()
    b = allocate_id()
    assert b > a
    assert DEFAULT_ALLOCATOR.last_issued >= b


def test_arenas_share_the_process_wide_identity_space():
    first = NodeArena().create_many([1, 2, 3])
    second = NodeArena().create_many([1, 2, 3])
    assert not set(first) & set(second)


def test_arena_lookup_and_dummies():
    arena = NodeArena(IdentityAllocator())
    ids = arena.create_many([7, 8])
    dummy = arena.create_dummy()

    assert arena.values(ids) == [7, 8]
    assert arena.value(dummy) is None
    assert arena.is_dummy(dummy) and not arena.is_dummy(ids[0])
    assert arena.subset([ids[1]]) == {ids[1]: 8}
    assert dummy in arena
    assert len(arena) == 3
