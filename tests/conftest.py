from typing import Any

import pytest
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient

from posts_api.app import app, get_store, post_app, posts_app
from posts_api.dynamo_utils import PostStore


class FakeTable:
    """In-memory stand-in for a boto3 DynamoDB ``Table`` keyed on ``pk``."""

    def __init__(self, page_size: int | None = None):
        self.items: dict[str, dict[str, Any]] = {}
        self.page_size = page_size
        self.scans: list[dict[str, Any]] = []

    def put_item(self, Item: dict[str, Any]) -> dict[str, Any]:
        self.items[Item["pk"]] = dict(Item)
        return {}

    def get_item(self, Key: dict[str, str]) -> dict[str, Any]:
        item = self.items.get(Key["pk"])
        return {"Item": dict(item)} if item else {}

    def delete_item(self, Key: dict[str, str]) -> dict[str, Any]:
        self.items.pop(Key["pk"], None)
        return {}

    def scan(self, **kwargs: Any) -> dict[str, Any]:
        self.scans.append(kwargs)
        keys = sorted(self.items)
        start = kwargs.get("ExclusiveStartKey")
        if start:
            keys = [k for k in keys if k > start["pk"]]
        page_keys = keys[: self.page_size] if self.page_size else keys

        # like DynamoDB, the filter runs after the page is read
        items = [dict(self.items[k]) for k in page_keys]
        condition = kwargs.get("FilterExpression")
        if condition is not None:
            attr, prefix = condition.get_expression()["values"]
            items = [i for i in items if str(i.get(attr.name, "")).startswith(prefix)]

        resp: dict[str, Any] = {"Items": items}
        if self.page_size and len(keys) > self.page_size:
            resp["LastEvaluatedKey"] = {"pk": page_keys[-1]}
        return resp


class FailingTable:
    def __init__(self, code: str = "ProvisionedThroughputExceededException"):
        self.code = code

    def _fail(self, operation: str):
        raise ClientError({"Error": {"Code": self.code, "Message": "boom"}}, operation)

    def put_item(self, **kwargs: Any):
        self._fail("PutItem")

    def get_item(self, **kwargs: Any):
        self._fail("GetItem")

    def delete_item(self, **kwargs: Any):
        self._fail("DeleteItem")

    def scan(self, **kwargs: Any):
        self._fail("Scan")


SAMPLE_POST = {
    "title": "A",
    "description": "d",
    "author": "a",
    "publicationDate": "2025-01-01",
}


@pytest.fixture
def table() -> FakeTable:
    return FakeTable()


@pytest.fixture
def store(table: FakeTable) -> PostStore:
    return PostStore(table=table)


@pytest.fixture
def override_store(store: PostStore):
    apps = (app, posts_app, post_app)
    for a in apps:
        a.dependency_overrides[get_store] = lambda: store
    yield store
    for a in apps:
        a.dependency_overrides.clear()


@pytest.fixture
def client(override_store: PostStore) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)
