from __future__ import annotations

import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Union

from fastapi import status
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from .repositories import Repository, StorageError
from .schemas import TodoCreate, TodoList

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"
TEXT_MEDIA_TYPE = "text/plain"


@dataclass(frozen=True)
class ApiResponse:
    """Status code and body produced by a handler."""

    status_code: int
    body: str
    media_type: str = TEXT_MEDIA_TYPE


def _reason(code: int) -> str:
    return HTTPStatus(code).phrase


def _internal_error() -> ApiResponse:
    code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return ApiResponse(code, _reason(code))


def method_not_allowed() -> ApiResponse:
    code = status.HTTP_405_METHOD_NOT_ALLOWED
    return ApiResponse(code, _reason(code))


# PUBLIC_INTERFACE
def get_todo(repo: Repository, todo_id: str) -> ApiResponse:
    """
    Read a single Todo.

    Unknown ids are not an error: the empty sentinel is returned with 200.
    Store and encoding failures become a generic 500; the detail is logged.
    """
    try:
        todo = repo.get_one(todo_id)
    except StorageError:
        logger.exception("Failed to fetch todo %s", todo_id)
        return _internal_error()

    try:
        body = todo.model_dump_json()
    except PydanticSerializationError:
        logger.exception("Failed to encode todo %s", todo_id)
        return _internal_error()

    return ApiResponse(status.HTTP_200_OK, body, JSON_MEDIA_TYPE)


# PUBLIC_INTERFACE
def get_todos(repo: Repository) -> ApiResponse:
    """Read every Todo as a JSON array."""
    try:
        todos = repo.get_all()
    except StorageError:
        logger.exception("Failed to fetch todos")
        return _internal_error()

    try:
        body = TodoList.dump_json(todos).decode("utf-8")
    except PydanticSerializationError:
        logger.exception("Failed to encode todos")
        return _internal_error()

    return ApiResponse(status.HTTP_200_OK, body, JSON_MEDIA_TYPE)


# PUBLIC_INTERFACE
def create_todo(repo: Repository, body: Union[str, bytes], expose_errors: bool = True) -> ApiResponse:
    """
    Create a Todo from a JSON request body.

    Any ``id`` in the body is ignored. Malformed bodies and store failures are
    answered with 500. With ``expose_errors`` the response body carries the
    error text, otherwise the generic reason phrase.
    """
    try:
        payload = TodoCreate.model_validate_json(body)
    except ValidationError as exc:
        logger.error("Rejected create request body: %s", exc)
        return ApiResponse(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc)) if expose_errors else _internal_error()

    try:
        created = repo.create(payload)
    except StorageError as exc:
        logger.exception("Failed to create todo")
        return ApiResponse(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc)) if expose_errors else _internal_error()

    logger.info("Created todo %s", created.id)
    return ApiResponse(status.HTTP_201_CREATED, "Created")
