"""Tests for the reader/writer lock."""

import threading
import time

import pytest

from chat_app.database.locks import ReadWriteLock


def wait_until(predicate, timeout=1.0):
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            return False
        time.sleep(0.001)
    return True


def start(target):
    thread = threading.Thread(target=target, daemon=True)
    thread.start()
    return thread


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    lock.acquire_read()
    lock.acquire_read()
    assert lock.readers == 2
    lock.release_read()
    lock.release_read()
    assert lock.readers == 0


def test_writer_waits_for_readers():
    lock = ReadWriteLock()
    lock.acquire_read()
    acquired = threading.Event()

    def writer():
        with lock.write_locked():
            acquired.set()

    thread = start(writer)
    assert not acquired.wait(0.05)

    lock.release_read()
    assert acquired.wait(1.0)
    thread.join(1.0)
    assert not lock.write_held


def test_waiting_writer_blocks_new_readers():
    """Once a writer queues, later readers wait behind it."""
    lock = ReadWriteLock()
    lock.acquire_read()
    order = []

    def writer():
        with lock.write_locked():
            order.append("writer")

    def reader():
        with lock.read_locked():
            order.append("reader")

    writer_thread = start(writer)
    assert wait_until(lambda: lock._writers_waiting == 1)

    reader_thread = start(reader)
    time.sleep(0.05)
    assert order == []

    lock.release_read()
    writer_thread.join(1.0)
    reader_thread.join(1.0)
    assert order == ["writer", "reader"]


def test_writer_excludes_readers():
    lock = ReadWriteLock()
    entered = threading.Event()

    def reader():
        with lock.read_locked():
            entered.set()

    with lock.write_locked():
        assert lock.write_held
        thread = start(reader)
        assert not entered.wait(0.05)

    assert entered.wait(1.0)
    thread.join(1.0)


def test_release_without_holding_raises():
    lock = ReadWriteLock()
    with pytest.raises(RuntimeError):
        lock.release_read()
    with pytest.raises(RuntimeError):
        lock.release_write()


def test_context_manager_releases_on_error():
    lock = ReadWriteLock()
    with pytest.raises(ValueError):
        with lock.write_locked():
            raise ValueError("boom")
    assert not lock.write_held

    with pytest.raises(ValueError):
        with lock.read_locked():
            raise ValueError("boom")
    assert lock.readers == 0
