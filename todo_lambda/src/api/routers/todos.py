from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response
from starlette.concurrency import run_in_threadpool

from ..handlers import ApiResponse, create_todo, get_todo, get_todos, method_not_allowed
from ..repositories import Repository, get_repository
from ..routing import Route, resolve_route
from ..settings import get_settings

router = APIRouter(tags=["todos"])

_ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _get_repo(repo: Repository = Depends(get_repository)) -> Repository:
    """
    Dependency wrapper for repository to keep signatures clean.
    """
    return repo


def dispatch(repo: Repository, method: str, path: str, body: bytes) -> ApiResponse:
    """Route a request to its handler and return the handler's response."""
    match = resolve_route(method, path)
    if match.route is Route.READ_ONE:
        return get_todo(repo, match.todo_id or "")
    if match.route is Route.READ_ALL:
        return get_todos(repo)
    if match.route is Route.CREATE:
        return create_todo(repo, body, expose_errors=get_settings().expose_create_errors)
    return method_not_allowed()


# PUBLIC_INTERFACE
@router.api_route("/{full_path:path}", methods=_ALL_METHODS)
async def handle_request(full_path: str, request: Request, repo: Repository = Depends(_get_repo)) -> Response:
    """
    Translate the HTTP request into a handler call.

    Store calls are blocking, so dispatch runs in the threadpool.
    """
    body = await request.body()
    result = await run_in_threadpool(dispatch, repo, request.method, request.url.path, body)
    return Response(content=result.body, status_code=result.status_code, media_type=result.media_type)
