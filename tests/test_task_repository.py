import threading

import pytest

from app.errors import AlreadyExistsError, NotFoundError
from app.models import new_task
from app.repository.task_repository import InMemoryTaskRepository, ReadWriteLock


def test_create_and_get_by_id(repo: InMemoryTaskRepository) -> None:
    task = new_task("Write report", "quarterly")
    repo.create(task)

    assert repo.get_by_id(task.id) == task
    assert repo.count() == 1


def test_create_duplicate_id_fails(repo: InMemoryTaskRepository) -> None:
    task = new_task("Write report")
    repo.create(task)

    with pytest.raises(AlreadyExistsError):
        repo.create(task.model_copy(update={"title": "Other"}))
    assert repo.get_by_id(task.id).title == "Write report"


def test_get_all_returns_every_task(repo: InMemoryTaskRepository) -> None:
    tasks = [new_task(f"task {i}") for i in range(5)]
    for task in tasks:
        repo.create(task)

    assert {t.id for t in repo.get_all()} == {t.id for t in tasks}


def test_get_all_on_empty_store(repo: InMemoryTaskRepository) -> None:
    assert repo.get_all() == []


def test_get_by_id_missing(repo: InMemoryTaskRepository) -> None:
    with pytest.raises(NotFoundError):
        repo.get_by_id("missing")


def test_update_replaces_record(repo: InMemoryTaskRepository) -> None:
    task = new_task("Write report")
    repo.create(task)

    repo.update(task.model_copy(update={"is_completed": True}))

    assert repo.get_by_id(task.id).is_completed is True


def test_update_missing(repo: InMemoryTaskRepository) -> None:
    with pytest.raises(NotFoundError):
        repo.update(new_task("ghost"))
    assert repo.count() == 0


def test_delete(repo: InMemoryTaskRepository) -> None:
    task = new_task("Write report")
    repo.create(task)

    repo.delete(task.id)

    with pytest.raises(NotFoundError):
        repo.get_by_id(task.id)
    with pytest.raises(NotFoundError):
        repo.delete(task.id)


def test_get_all_is_a_snapshot(repo: InMemoryTaskRepository) -> None:
    repo.create(new_task("first"))
    snapshot = repo.get_all()

    repo.create(new_task("second"))

    assert len(snapshot) == 1
    assert repo.count() == 2


def test_concurrent_creates(repo: InMemoryTaskRepository) -> None:
    def worker() -> None:
        for i in range(50):
            repo.create(new_task(f"task {i}"))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert repo.count() == 400


def test_read_write_lock_allows_shared_readers() -> None:
    lock = ReadWriteLock()
    inside = threading.Barrier(2, timeout=5)

    def reader() -> None:
        with lock.read():
            # Both readers must be inside at the same time to pass.
            inside.wait()

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    assert not inside.broken


def test_read_write_lock_excludes_writer_while_reading() -> None:
    lock = ReadWriteLock()
    events = []
    reading = threading.Event()
    release = threading.Event()

    def reader() -> None:
        with lock.read():
            reading.set()
            release.wait(timeout=5)
            events.append("read done")

    def writer() -> None:
        with lock.write():
            events.append("write")

    r = threading.Thread(target=reader)
    r.start()
    reading.wait(timeout=5)
    w = threading.Thread(target=writer)
    w.start()
    w.join(timeout=0.1)
    assert events == []

    release.set()
    r.join(timeout=5)
    w.join(timeout=5)
    assert events == ["read done", "write"]


def test_key_lock_serializes_holders_and_cleans_up(repo: InMemoryTaskRepository) -> None:
    order = []
    entered = threading.Event()
    release = threading.Event()

    def first() -> None:
        with repo.key_lock("a"):
            entered.set()
            release.wait(timeout=5)
            order.append("first")

    def second() -> None:
        with repo.key_lock("a"):
            order.append("second")

    t1 = threading.Thread(target=first)
    t1.start()
    entered.wait(timeout=5)
    t2 = threading.Thread(target=second)
    t2.start()
    t2.join(timeout=0.1)
    assert order == []

    release.set()
    t1.join(timeout=5)
    t2.join(timeout=5)
    assert order == ["first", "second"]
    assert repo._key_locks == {}


def test_key_lock_released_on_error(repo: InMemoryTaskRepository) -> None:
    with pytest.raises(NotFoundError):
        with repo.key_lock("missing"):
            repo.get_by_id("missing")

    assert repo._key_locks == {}
