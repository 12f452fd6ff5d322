from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import Response
from mangum import Mangum
from starlette.exceptions import HTTPException as StarletteHTTPException

from .handlers import method_not_allowed
from .logging_config import configure_logging
from .settings import get_settings
from .routers import todos as todos_router

_settings = get_settings()
configure_logging(_settings.log_level)

# Docs routes are disabled: every path not handled by the todo router must answer 405.
app = FastAPI(
    title="Serverless Todo API",
    version="0.1.0",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """
    Answer methods the router never sees (TRACE, CONNECT, custom verbs) with
    the same plain-text 405 the todo router produces.
    """
    if exc.status_code == 405:
        result = method_not_allowed()
        return Response(content=result.body, status_code=result.status_code, media_type=result.media_type)
    return await http_exception_handler(request, exc)


app.include_router(todos_router.router)

# PUBLIC_INTERFACE
# Lambda entrypoint: src.api.main.handler
handler = Mangum(app, lifespan="off")
