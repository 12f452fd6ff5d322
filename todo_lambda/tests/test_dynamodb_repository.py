import uuid

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from src.api.db import DynamoDBRepository
from src.api.repositories import StorageError
from src.api.schemas import Todo, TodoCreate

TABLE = "go-serverless-api"


def client_error(operation):
    return ClientError(
        {"Error": {"Code": "ResourceNotFoundException", "Message": "Requested resource not found"}},
        operation,
    )


class FakeClient:
    """Stands in for a low-level boto3 DynamoDB client; items use attribute-value maps."""

    def __init__(self, page_size=None):
        self.items = {}
        self.page_size = page_size
        self.calls = []

    def get_item(self, TableName, Key):
        self.calls.append(("GetItem", TableName))
        item = self.items.get(Key["id"]["S"])
        return {} if item is None else {"Item": dict(item)}

    def scan(self, TableName, **kwargs):
        self.calls.append(("Scan", TableName, kwargs))
        keys = list(self.items)
        start = keys.index(kwargs["ExclusiveStartKey"]["id"]["S"]) + 1 if "ExclusiveStartKey" in kwargs else 0
        end = len(keys) if self.page_size is None else start + self.page_size
        page = {"Items": [dict(self.items[k]) for k in keys[start:end]]}
        if end < len(keys):
            page["LastEvaluatedKey"] = {"id": {"S": keys[end - 1]}}
        return page

    def put_item(self, TableName, Item):
        self.calls.append(("PutItem", TableName))
        self.items[Item["id"]["S"]] = dict(Item)
        return {}


class BrokenClient:
    def get_item(self, **kwargs):
        raise client_error("GetItem")

    def scan(self, **kwargs):
        raise EndpointConnectionError(endpoint_url="https://dynamodb.sa-east-1.amazonaws.com")

    def put_item(self, **kwargs):
        raise client_error("PutItem")


class TestDynamoDBRepository:
    def test_create_puts_attribute_value_record(self):
        client = FakeClient()
        repo = DynamoDBRepository(client, TABLE)

        created = repo.create(TodoCreate(title="Buy milk", description="2 litres"))

        uuid.UUID(created.id)
        assert client.items == {
            created.id: {
                "id": {"S": created.id},
                "title": {"S": "Buy milk"},
                "description": {"S": "2 litres"},
            }
        }
        assert client.calls == [("PutItem", TABLE)]

    def test_get_one_roundtrip(self):
        repo = DynamoDBRepository(FakeClient(), TABLE)
        created = repo.create(TodoCreate(title="a", description="b"))
        assert repo.get_one(created.id) == Todo(id=created.id, title="a", description="b")

    def test_get_one_missing_returns_sentinel(self):
        todo = DynamoDBRepository(FakeClient(), TABLE).get_one("nope")
        assert todo == Todo()
        assert not todo.exists()

    def test_get_one_fills_missing_attributes(self):
        client = FakeClient()
        client.items["x"] = {"id": {"S": "x"}}
        assert DynamoDBRepository(client, TABLE).get_one("x") == Todo(id="x")

    def test_get_all_empty(self):
        assert DynamoDBRepository(FakeClient(), TABLE).get_all() == []

    def test_get_all_follows_scan_pages(self):
        client = FakeClient(page_size=2)
        repo = DynamoDBRepository(client, TABLE)
        ids = {repo.create(TodoCreate(title=f"t{i}")).id for i in range(5)}

        todos = repo.get_all()

        assert {t.id for t in todos} == ids
        scans = [c for c in client.calls if c[0] == "Scan"]
        assert len(scans) == 3
        assert all(c[1] == TABLE for c in scans)
        assert "ExclusiveStartKey" not in scans[0][2]

    def test_unique_ids(self):
        repo = DynamoDBRepository(FakeClient(), TABLE)
        ids = {repo.create(TodoCreate()).id for _ in range(100)}
        assert len(ids) == 100

    @pytest.mark.parametrize(
        "call",
        [
            lambda repo: repo.get_one("x"),
            lambda repo: repo.get_all(),
            lambda repo: repo.create(TodoCreate(title="t")),
        ],
    )
    def test_store_errors_become_storage_errors(self, call):
        with pytest.raises(StorageError):
            call(DynamoDBRepository(BrokenClient(), TABLE))

    @pytest.mark.parametrize(
        "title",
        [
            {"N": "3"},
            {"XX": "unknown type"},
        ],
    )
    def test_malformed_item_is_storage_error(self, title):
        client = FakeClient()
        client.items["x"] = {"id": {"S": "x"}, "title": title, "description": {"S": ""}}
        with pytest.raises(StorageError):
            DynamoDBRepository(client, TABLE).get_one("x")


class TestGetRepository:
    def test_one_shared_client_per_process(self, monkeypatch):
        from src.api import db
        from src.api.repositories import get_repository

        created = []

        def fake_client(service, **kwargs):
            created.append((service, kwargs))
            return FakeClient()

        monkeypatch.setenv("PERSISTENCE_BACKEND", "dynamodb")
        monkeypatch.setenv("TODO_TABLE_NAME", TABLE)
        monkeypatch.delenv("AWS_REGION", raising=False)
        monkeypatch.setattr(db.boto3, "client", fake_client)
        get_repository.cache_clear()
        try:
            first = get_repository()
            second = get_repository()
        finally:
            get_repository.cache_clear()

        assert first is second
        assert isinstance(first, DynamoDBRepository)
        assert [service for service, _ in created] == ["dynamodb"]
        assert created[0][1]["region_name"] == "sa-east-1"
