"""
Request routing for the todo API.

The dispatch rules are intentionally loose and mirror the API Gateway
deployment this service was built for:

- ``GET`` on any path containing ``/todos/`` followed by at least one
  character reads a single item (the trailing text is the id)
- ``GET /todos`` reads the whole collection
- ``POST`` on any path creates an item
- everything else is answered with 405
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

_ITEM_PATH = re.compile(r"/todos/(.+)")
_COLLECTION_PATH = "/todos"


class Route(str, Enum):
    READ_ONE = "read_one"
    READ_ALL = "read_all"
    CREATE = "create"
    NOT_ALLOWED = "not_allowed"


@dataclass(frozen=True)
class RouteMatch:
    route: Route
    todo_id: Optional[str] = None


# PUBLIC_INTERFACE
def resolve_route(method: str, path: str) -> RouteMatch:
    """
    Select the handler for a request.

    Args:
        method: HTTP method, case-insensitive.
        path: Request path as delivered by the gateway.

    Returns:
        A RouteMatch; ``todo_id`` is only set for READ_ONE.
    """
    verb = method.upper()
    if verb == "GET":
        m = _ITEM_PATH.search(path)
        if m:
            return RouteMatch(Route.READ_ONE, m.group(1))
        if path == _COLLECTION_PATH:
            return RouteMatch(Route.READ_ALL)
    if verb == "POST":
        return RouteMatch(Route.CREATE)
    return RouteMatch(Route.NOT_ALLOWED)
