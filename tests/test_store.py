"""Tests for ValueStore: producer updates, sampling and stats under one lock."""

import threading

import pytest

from speedo.metrics import Mode
from speedo.store import ValueStore
from speedo.window import WINDOW_CAPACITY


def test_add_and_set_value():
    store = ValueStore(sample_interval=1.0)
    store.add_value(5)
    store.add_value(-2)
    assert store.snapshot() == (3, 0)

    store.set_value(-40)
    assert store.snapshot() == (-40, 0)


def test_set_total_rejects_negative():
    store = ValueStore(sample_interval=1.0, total=10)
    store.set_total(50)
    assert store.snapshot() == (0, 50)

    with pytest.raises(ValueError):
        store.set_total(-1)


def test_one_per_tick_for_twenty_ticks_is_sixty_per_minute():
    store = ValueStore(sample_interval=1.0)
    for _ in range(20):
        store.add_value(1)
        store.sample()

    stat = store.stat()
    assert stat.value == 20
    assert stat.rate == 60


def test_rate_is_zero_with_single_sample_regardless_of_value():
    store = ValueStore(sample_interval=1.0)
    store.set_value(1_000_000)
    assert store.stat().rate == 0

    store.sample()
    assert store.stat().rate == 0


def test_variation_decrease_gives_negative_rate():
    store = ValueStore(sample_interval=1.0)
    store.set_value(100)
    store.sample()
    store.set_value(40)
    store.sample()

    stat = store.stat(Mode.VARIATION)
    assert stat.rate < 0
    assert stat.rate == -3600
    assert stat.mode == Mode.VARIATION


def test_rate_only_uses_retained_window():
    store = ValueStore(sample_interval=1.0)
    # a huge jump early on falls out of the window
    store.set_value(1_000_000)
    store.sample()
    store.set_value(0)
    for _ in range(WINDOW_CAPACITY + 10):
        store.add_value(2)
        store.sample()

    history = store.history()
    assert len(history) == WINDOW_CAPACITY
    assert history == sorted(history)
    assert store.stat().rate == (history[-1] - history[0]) * 60 // (WINDOW_CAPACITY - 1)
    assert store.stat().rate == 120


def test_concurrent_producers_do_not_lose_updates():
    store = ValueStore(sample_interval=1.0)
    n_threads, per_thread = 8, 2000

    def produce():
        for _ in range(per_thread):
            store.add_value(1)

    def sample():
        for _ in range(500):
            store.sample()

    threads = [threading.Thread(target=produce) for _ in range(n_threads)]
    threads.append(threading.Thread(target=sample))
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert store.snapshot()[0] == n_threads * per_thread
    history = store.history()
    assert len(history) == WINDOW_CAPACITY
    # producers only add, so samples taken in order can never go down
    assert history == sorted(history)
