import uuid
from typing import Any

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from .dynamo_utils import PostStore
from .errors import NotFoundError, ValidationError
from .models import Post, PostFields


def parse_body(body: bytes | str | None) -> PostFields:
    if not body:
        raise ValidationError("Missing body")
    try:
        return PostFields.model_validate_json(body)
    except PydanticValidationError as e:
        logger.debug("rejected post body: {}", e.errors(include_url=False))
        raise ValidationError("Invalid body") from e


def create(body: bytes | str | None, store: PostStore) -> dict[str, str]:
    fields = parse_body(body)
    post_id = str(uuid.uuid4())
    store.put_post(post_id, fields.to_item())
    logger.info("post created: {}", post_id)
    return {"message": "Post created"}


def get_all(store: PostStore) -> list[dict[str, Any]]:
    return [Post.from_item(item).to_response() for item in store.list_posts()]


def get_one(post_id: str, store: PostStore) -> dict[str, Any]:
    item = store.get_post(post_id)
    if item is None:
        logger.debug("post not found: {}", post_id)
        raise NotFoundError("Post not found")
    return Post.from_item(item).to_response()


def delete(post_id: str, store: PostStore) -> dict[str, str]:
    # no existence check: deleting an unknown id is a no-op
    store.delete_post(post_id)
    logger.info("post deleted: {}", post_id)
    return {"message": "Post deleted"}
