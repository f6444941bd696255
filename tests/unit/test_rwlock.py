# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import threading

import pytest

from meteor.utils.rwlock import ReadWriteLock


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    both_inside = threading.Barrier(2, timeout=2)
    errors = []

    def reader():
        with lock.read():
            try:
                both_inside.wait()
            except threading.BrokenBarrierError as exc:
                errors.append(exc)

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)
    assert errors == []


def test_writer_excludes_readers():
    lock = ReadWriteLock()
    lock.acquire_write()
    entered = threading.Event()

    def reader():
        with lock.read():
            entered.set()

    t = threading.Thread(target=reader)
    t.start()
    assert not entered.wait(timeout=0.1)
    lock.release_write()
    assert entered.wait(timeout=2)
    t.join(timeout=2)


def test_writer_waits_for_readers():
    lock = ReadWriteLock()
    lock.acquire_read()
    entered = threading.Event()

    def writer():
        with lock.write():
            entered.set()

    t = threading.Thread(target=writer)
    t.start()
    assert not entered.wait(timeout=0.1)
    lock.release_read()
    assert entered.wait(timeout=2)
    t.join(timeout=2)


def test_unbalanced_release_raises():
    lock = ReadWriteLock()
    with pytest.raises(RuntimeError):
        lock.release_read()
    with pytest.raises(RuntimeError):
        lock.release_write()
