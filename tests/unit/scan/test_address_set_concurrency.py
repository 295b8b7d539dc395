from __future__ import annotations

import random
import threading

import pytest

from logscan.scan import AddressSet


def test_repeated_insert_counts_once() -> None:
    addresses = AddressSet()

    results = [addresses.insert_if_absent("10.0.0.1") for _ in range(5)]

    assert results == [True, False, False, False, False]
    assert addresses.distinct_count == 1
    assert "10.0.0.1" in addresses
    assert "10.0.0.2" not in addresses


def test_concurrent_inserts_of_same_address_count_once() -> None:
    addresses = AddressSet()
    barrier = threading.Barrier(16)
    outcomes: list[bool] = []
    outcomes_lock = threading.Lock()

    def insert() -> None:
        barrier.wait()
        added = addresses.insert_if_absent("192.168.1.1")
        with outcomes_lock:
            outcomes.append(added)

    threads = [threading.Thread(target=insert) for _ in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes.count(True) == 1
    assert addresses.distinct_count == 1


@pytest.mark.parametrize("seed", [0, 1, 7, 42, 1234])
def test_concurrent_distinct_count_is_independent_of_interleaving(seed: int) -> None:
    rng = random.Random(seed)
    pool = [f"10.{rng.randrange(4)}.{rng.randrange(8)}.{rng.randrange(16)}" for _ in range(300)]
    multiset = [rng.choice(pool) for _ in range(5000)]
    rng.shuffle(multiset)
    workers = rng.randint(2, 12)
    chunks = [multiset[index::workers] for index in range(workers)]
    addresses = AddressSet()
    added_per_worker = [0] * workers

    def insert_chunk(index: int) -> None:
        for address in chunks[index]:
            if addresses.insert_if_absent(address):
                added_per_worker[index] += 1

    threads = [threading.Thread(target=insert_chunk, args=(index,)) for index in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert addresses.distinct_count == len(set(multiset))
    assert sum(added_per_worker) == len(set(multiset))
    assert len(addresses) == len(set(multiset))
