"""
AWS Lambda handler — on-demand image resizing

Triggered by API Gateway (proxy integration), e.g.
  GET /photos/cat.jpg?options=200x200_cover&response=file

Flow:
  1. Reads the object key from the path parameters and the resize options
     from the query string.
  2. Serves the stored variant when it already exists.
  3. Otherwise resizes the original and stores the variant next to it,
     under {subfolder}/{options}/{filename}.

Environment variables:
  S3_BUCKET   — bucket holding originals and variants (BUCKET also accepted)
  LOG_LEVEL   — root log level, INFO by default
  AWS_REGION  — AWS region (set by Lambda runtime)
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from resizer.config import get_settings
from resizer.processor import PillowTransformer
from resizer.service import handle_request
from resizer.storage import S3ObjectStore

logger = logging.getLogger()
logger.setLevel(get_settings().log_level)
logging.getLogger("botocore").setLevel(logging.WARNING)


@lru_cache
def get_store() -> S3ObjectStore:
    # Built once per container and reused across warm invocations
    return S3ObjectStore.from_settings(get_settings())


@lru_cache
def get_transformer() -> PillowTransformer:
    return PillowTransformer(jpeg_quality=get_settings().jpeg_quality)


def handler(event: dict, context: object) -> dict:
    """Lambda entry point — resolves one image request."""
    path_parameters = event.get("pathParameters") or {}
    query = event.get("queryStringParameters") or {}

    response = handle_request(
        _resource_path(path_parameters),
        query.get("options"),
        query.get("response"),
        store=get_store(),
        transformer=get_transformer(),
        settings=get_settings(),
    )
    return response.to_lambda()


def _resource_path(path_parameters: dict[str, Any]) -> str | None:
    """Prefer the greedy ``{proxy+}`` parameter, else the first one given."""
    if path_parameters.get("proxy"):
        return path_parameters["proxy"]
    for value in path_parameters.values():
        return value
    return None
