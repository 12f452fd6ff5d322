from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

import boto3
from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from .models import ATTRS, TodoRecord
from .repositories import Repository, StorageError, new_todo_id
from .schemas import Todo, TodoCreate
from .settings import Settings

logger = logging.getLogger(__name__)

_STORE_ERRORS = (BotoCoreError, ClientError)

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


# PUBLIC_INTERFACE
def create_dynamodb_client(settings: Settings) -> Any:
    """
    Build the low-level boto3 DynamoDB client.

    Clients are thread-safe, so one instance is shared by every request
    handled in the process, including those running in the threadpool.
    """
    logger.info("Using DynamoDB table %s in %s", settings.table_name, settings.aws_region)
    return boto3.client(
        "dynamodb",
        region_name=settings.aws_region,
        endpoint_url=settings.dynamodb_endpoint_url,
    )


def _serialize(record: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: _serializer.serialize(v) for k, v in record.items()}


def _deserialize(item: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: _deserializer.deserialize(v) for k, v in item.items()}


class DynamoDBRepository(Repository):
    """
    Repository backed by a single DynamoDB table keyed by ``id``.

    The client is injected so tests can substitute a fake.
    """

    def __init__(self, client: Any, table_name: str) -> None:
        self._client = client
        self._table_name = table_name

    def _item_to_todo(self, item: Mapping[str, Any]) -> Todo:
        try:
            data = _deserialize(item)
            return Todo(
                id=data.get(ATTRS.id, ""),
                title=data.get(ATTRS.title, ""),
                description=data.get(ATTRS.description, ""),
            )
        except (TypeError, ValidationError) as exc:
            raise StorageError(f"malformed todo item: {exc}") from exc

    def get_one(self, todo_id: str) -> Todo:
        try:
            result = self._client.get_item(
                TableName=self._table_name,
                Key=_serialize({ATTRS.id: todo_id}),
            )
        except _STORE_ERRORS as exc:
            raise StorageError(str(exc)) from exc

        item = result.get("Item")
        if not item:
            return Todo()
        return self._item_to_todo(item)

    def get_all(self) -> List[Todo]:
        items: List[Dict[str, Any]] = []
        kwargs: Dict[str, Any] = {"TableName": self._table_name}
        try:
            while True:
                page = self._client.scan(**kwargs)
                items.extend(page.get("Items", []))
                last_key = page.get("LastEvaluatedKey")
                if not last_key:
                    break
                kwargs["ExclusiveStartKey"] = last_key
        except _STORE_ERRORS as exc:
            raise StorageError(str(exc)) from exc

        return [self._item_to_todo(item) for item in items]

    def create(self, data: TodoCreate) -> Todo:
        record: TodoRecord = {
            "id": new_todo_id(),
            "title": data.title,
            "description": data.description,
        }
        try:
            self._client.put_item(TableName=self._table_name, Item=_serialize(record))
        except _STORE_ERRORS as exc:
            raise StorageError(str(exc)) from exc
        return Todo(**record)
