import os
import sys

from loguru import logger

TABLE_NAME = os.getenv("TABLE_NAME")
POST_KEY_PREFIX = os.getenv("POST_KEY_PREFIX", "POST#")

DYNAMODB_ENDPOINT_URL = os.getenv("DYNAMODB_ENDPOINT_URL")
AWS_REGION = os.getenv("AWS_REGION")

ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def configure_logging(level: str = LOG_LEVEL) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
