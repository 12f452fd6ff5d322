from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from functools import lru_cache
from threading import RLock
from typing import Dict, List

from .models import TodoRecord
from .schemas import Todo, TodoCreate
from .settings import get_settings


class StorageError(Exception):
    """Raised when the backing store cannot be reached or returns unusable data."""


def new_todo_id() -> str:
    """Return a fresh random (UUID4) identifier."""
    return str(uuid.uuid4())


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends."""

    @abstractmethod
    def get_one(self, todo_id: str) -> Todo:
        """Return the Todo with the given id, or the empty ``Todo()`` sentinel if there is none."""

    @abstractmethod
    def get_all(self) -> List[Todo]:
        """Return every stored Todo in the store's native order."""

    @abstractmethod
    def create(self, data: TodoCreate) -> Todo:
        """Store a new Todo under a freshly generated id and return it."""


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository for local runs and tests.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: Dict[str, TodoRecord] = {}

    def get_one(self, todo_id: str) -> Todo:
        with self._lock:
            record = self._items.get(todo_id)
        if record is None:
            return Todo()
        return Todo(**record)

    def get_all(self) -> List[Todo]:
        with self._lock:
            records = list(self._items.values())
        return [Todo(**r) for r in records]

    def create(self, data: TodoCreate) -> Todo:
        record: TodoRecord = {
            "id": new_todo_id(),
            "title": data.title,
            "description": data.description,
        }
        with self._lock:
            self._items[record["id"]] = record
        return Todo(**record)


# PUBLIC_INTERFACE
@lru_cache(maxsize=None)
def get_repository() -> Repository:
    """
    Return the process-wide repository selected by settings.
    - dynamodb: DynamoDBRepository bound to the configured table
    - memory: InMemoryRepository

    The result is cached so the store handle is created once per process.
    """
    settings = get_settings()
    if settings.persistence_backend == "memory":
        return InMemoryRepository()

    from .db import DynamoDBRepository, create_dynamodb_client

    return DynamoDBRepository(create_dynamodb_client(settings), settings.table_name)
