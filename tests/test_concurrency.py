import threading
import time

import pytest
from memorizer import memoize


def run_threads(target, count: int):
    barrier = threading.Barrier(count)
    results = []
    lock = threading.Lock()

    def body(i):
        barrier.wait()
        v = target(i)
        with lock:
            results.append(v)

    threads = [threading.Thread(target=body, args=(i, )) for i in range(count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return results


def test_without_lock_single_thread():
    calls = []

    @memoize(lock="none")
    def double(x):
        calls.append(x)
        return x * 2

    assert double(4) == 8
    assert double(4) == 8
    assert double(5) == 10
    assert calls == [4, 5]
    assert double.cache_info() == (1, 2, 0, 2)


@pytest.mark.parametrize("lock", ["global", "per-key"])
def test_same_key_evaluated_once(lock):
    calls = []

    @memoize(lock=lock)
    def slow_square(x):
        calls.append(x)
        time.sleep(0.05)
        return x * x

    results = run_threads(lambda i: slow_square(12), 8)
    assert results == [144] * 8
    assert calls == [12]
    assert slow_square.cache_info().hits == 7


def test_per_key_lock_does_not_serialize_unrelated_keys():
    inside = []
    both_inside = threading.Event()
    lock = threading.Lock()

    @memoize(lock="per-key")
    def wait_for_peer(x):
        with lock:
            inside.append(x)
            if len(inside) == 2:
                both_inside.set()
        # only returns True when the other key is being evaluated at the same time
        return both_inside.wait(timeout=5)

    results = run_threads(wait_for_peer, 2)
    assert results == [True, True]


def test_failure_under_contention_is_retried():
    calls = []

    @memoize(lock="per-key")
    def fail_first(x):
        calls.append(x)
        if len(calls) == 1:
            time.sleep(0.05)
            raise ValueError("first evaluation fails")
        return x

    def call(i):
        try:
            return fail_first(1)
        except ValueError:
            return None

    results = run_threads(call, 4)
    assert sorted(results, key=lambda v: v is not None) == [None, 1, 1, 1]
    assert len(calls) == 2
