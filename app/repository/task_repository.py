import logging
import threading
from contextlib import contextmanager
from typing import ContextManager, Dict, Iterator, List, Protocol

from ..errors import AlreadyExistsError, NotFoundError
from ..models import Task

logger = logging.getLogger(__name__)


class TaskRepository(Protocol):
    """Storage capability used by the task service."""

    def create(self, task: Task) -> None: ...

    def get_all(self) -> List[Task]: ...

    def get_by_id(self, task_id: str) -> Task: ...

    def update(self, task: Task) -> None: ...

    def delete(self, task_id: str) -> None: ...

    def count(self) -> int: ...

    def key_lock(self, task_id: str) -> ContextManager[None]: ...


class _KeyLock:
    """A per-id lock and the number of callers holding or waiting on it."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.holders = 0


class ReadWriteLock:
    """Many concurrent readers or one writer.

    Waiting writers block new readers so a steady stream of reads cannot
    starve them.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class InMemoryTaskRepository:
    """Process-local task store.

    Thread-safety:
    - every operation holds the map lock only for its own duration
    - ``key_lock`` serializes read-modify-write sequences on one id
    """

    def __init__(self) -> None:
        self._tasks: Dict[str, Task] = {}
        self._lock = ReadWriteLock()
        self._key_locks: Dict[str, _KeyLock] = {}
        self._key_locks_guard = threading.Lock()

    def create(self, task: Task) -> None:
        with self._lock.write():
            if task.id in self._tasks:
                raise AlreadyExistsError()
            self._tasks[task.id] = task

    def get_all(self) -> List[Task]:
        with self._lock.read():
            return list(self._tasks.values())

    def get_by_id(self, task_id: str) -> Task:
        with self._lock.read():
            task = self._tasks.get(task_id)
        if task is None:
            raise NotFoundError()
        return task

    def update(self, task: Task) -> None:
        with self._lock.write():
            if task.id not in self._tasks:
                raise NotFoundError()
            self._tasks[task.id] = task

    def delete(self, task_id: str) -> None:
        with self._lock.write():
            if task_id not in self._tasks:
                raise NotFoundError()
            del self._tasks[task_id]

    def count(self) -> int:
        with self._lock.read():
            return len(self._tasks)

    @contextmanager
    def key_lock(self, task_id: str) -> Iterator[None]:
        with self._key_locks_guard:
            entry = self._key_locks.get(task_id)
            if entry is None:
                entry = self._key_locks[task_id] = _KeyLock()
            entry.holders += 1
        try:
            with entry.lock:
                yield
        finally:
            # Drop the entry once nobody holds or waits on it.
            with self._key_locks_guard:
                entry.holders -= 1
                if not entry.holders:
                    del self._key_locks[task_id]
