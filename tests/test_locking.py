"""Tests for the reader/writer lock guarding the result cache."""

from __future__ import annotations

import threading

from jaudit.utils import ReadWriteLock

WAIT_SECONDS = 2.0


def test_readers_share_the_lock() -> None:
    lock = ReadWriteLock()
    acquired = threading.Event()

    def _reader() -> None:
        with lock.read_locked():
            acquired.set()

    with lock.read_locked():
        thread = threading.Thread(target=_reader)
        thread.start()
        assert acquired.wait(WAIT_SECONDS)
    thread.join(WAIT_SECONDS)


def test_writer_waits_for_readers() -> None:
    lock = ReadWriteLock()
    written = threading.Event()

    def _writer() -> None:
        with lock.write_locked():
            written.set()

    lock.acquire_read()
    thread = threading.Thread(target=_writer)
    thread.start()
    assert not written.wait(0.1)

    lock.release_read()
    assert written.wait(WAIT_SECONDS)
    thread.join(WAIT_SECONDS)


def test_reader_waits_for_writer() -> None:
    lock = ReadWriteLock()
    read = threading.Event()

    def _reader() -> None:
        with lock.read_locked():
            read.set()

    lock.acquire_write()
    thread = threading.Thread(target=_reader)
    thread.start()
    assert not read.wait(0.1)

    lock.release_write()
    assert read.wait(WAIT_SECONDS)
    thread.join(WAIT_SECONDS)


def test_concurrent_cache_access(cache, record_factory) -> None:
    keys = [f"pkg:maven/org.example/lib-{index}@1.0" for index in range(20)]
    errors: list[BaseException] = []

    def _worker(key: str) -> None:
        try:
            for _ in range(50):
                cache.set(key, [record_factory()])
                records, found = cache.get(key)
                assert found and records
        except BaseException as exc:  # noqa: BLE001
            errors.append(exc)

    threads = [threading.Thread(target=_worker, args=(key,)) for key in keys]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(WAIT_SECONDS * 5)

    assert errors == []
    assert len(cache) == len(keys)
