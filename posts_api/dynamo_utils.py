from contextlib import contextmanager
from typing import Any, Iterator

import boto3
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from .config import AWS_REGION, DYNAMODB_ENDPOINT_URL, POST_KEY_PREFIX, TABLE_NAME
from .errors import ConfigurationError, StoreError

PARTITION_KEY = "pk"

Item = dict[str, Any]


@contextmanager
def store_call(operation: str) -> Iterator[None]:
    try:
        yield
    except ClientError as e:
        reason = e.response.get("Error", {}).get("Code", str(e))
        logger.error("[DYNAMODB] {} failed: {}", operation, reason)
        raise StoreError(operation, reason) from e
    except BotoCoreError as e:
        logger.error("[DYNAMODB] {} failed: {}", operation, e)
        raise StoreError(operation, str(e)) from e


class PostStore:
    def __init__(
        self,
        table_name: str | None = TABLE_NAME,
        key_prefix: str = POST_KEY_PREFIX,
        table: Any = None,
    ):
        self.key_prefix = key_prefix
        if table is None:
            if not table_name:
                raise ConfigurationError("TABLE_NAME")
            dynamodb = boto3.resource(
                "dynamodb",
                endpoint_url=DYNAMODB_ENDPOINT_URL,
                region_name=AWS_REGION,
            )
            table = dynamodb.Table(table_name)
        self.table = table

    def key(self, post_id: str) -> dict[str, str]:
        return {PARTITION_KEY: f"{self.key_prefix}{post_id}"}

    def _with_id(self, item: Item) -> Item:
        # items written without an id attribute still carry it in the key
        if "id" not in item:
            item = {**item, "id": item[PARTITION_KEY][len(self.key_prefix) :]}
        return item

    def put_post(self, post_id: str, fields: Item) -> None:
        item = {**fields, **self.key(post_id), "id": post_id}
        with store_call("put_item"):
            self.table.put_item(Item=item)

    def get_post(self, post_id: str) -> Item | None:
        with store_call("get_item"):
            resp = self.table.get_item(Key=self.key(post_id))
        item = resp.get("Item")
        return self._with_id(item) if item else None

    def delete_post(self, post_id: str) -> None:
        with store_call("delete_item"):
            self.table.delete_item(Key=self.key(post_id))

    def scan_pages(self, start_key: Item | None = None) -> Iterator[list[Item]]:
        """Yield pages of posts lazily, following ``LastEvaluatedKey``.

        Pass a previously seen ``LastEvaluatedKey`` as ``start_key`` to resume.
        """
        kwargs: dict[str, Any] = {
            "FilterExpression": Attr(PARTITION_KEY).begins_with(self.key_prefix),
        }
        if start_key:
            kwargs["ExclusiveStartKey"] = start_key
        while True:
            with store_call("scan"):
                resp = self.table.scan(**kwargs)
            yield [self._with_id(item) for item in resp.get("Items", [])]
            last_key = resp.get("LastEvaluatedKey")
            if not last_key:
                return
            kwargs["ExclusiveStartKey"] = last_key

    def list_posts(self) -> list[Item]:
        return [item for page in self.scan_pages() for item in page]
