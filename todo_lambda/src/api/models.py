from __future__ import annotations

from dataclasses import dataclass
from typing import TypedDict


# PUBLIC_INTERFACE
class TodoRecord(TypedDict):
    """
    The item shape persisted in the todo table.

    Fields:
    - id: Partition key, a UUID4 string assigned on create
    - title: Short title
    - description: Free-text detail
    """

    id: str
    title: str
    description: str


@dataclass(frozen=True)
class _Attrs:
    id: str = "id"
    title: str = "title"
    description: str = "description"


ATTRS = _Attrs()
