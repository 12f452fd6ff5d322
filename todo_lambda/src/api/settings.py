from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - PERSISTENCE_BACKEND: 'dynamodb' (default) or 'memory'
    - TODO_TABLE_NAME: DynamoDB table holding the todos. Default 'go-serverless-api'
    - AWS_REGION: region of the table. Default 'sa-east-1'
    - DYNAMODB_ENDPOINT_URL: optional endpoint override (e.g. DynamoDB Local)
    - LOG_LEVEL: root log level. Default 'INFO'
    - EXPOSE_CREATE_ERRORS: 'true' (default) returns the raw error text on failed
      creates; 'false' returns the generic reason phrase instead
    """

    persistence_backend: str
    table_name: str
    aws_region: str
    dynamodb_endpoint_url: Optional[str]
    log_level: str
    expose_create_errors: bool


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    backend = _get_env("PERSISTENCE_BACKEND", "dynamodb").strip().lower()
    if backend not in {"dynamodb", "memory"}:
        backend = "dynamodb"

    endpoint_url = os.getenv("DYNAMODB_ENDPOINT_URL", "").strip() or None

    return Settings(
        persistence_backend=backend,
        table_name=_get_env("TODO_TABLE_NAME", "go-serverless-api").strip(),
        aws_region=_get_env("AWS_REGION", "sa-east-1").strip(),
        dynamodb_endpoint_url=endpoint_url,
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
        expose_create_errors=_parse_bool(_get_env("EXPOSE_CREATE_ERRORS", "true"), True),
    )
