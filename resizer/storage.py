"""
Object store access — originals and variants live in one S3 bucket.

The pipeline only needs ``get`` and ``put``; anything offering those two
methods (see ``ObjectStore``) can stand in for S3, e.g. in tests.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import boto3
from botocore.exceptions import ClientError

if TYPE_CHECKING:
    from resizer.config import Settings

logger = logging.getLogger(__name__)

# S3 answers a missing key with one of these error codes
_MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}


@dataclass(frozen=True)
class Blob:
    body: bytes
    content_type: str
    cache_control: str | None = None


class ObjectStore(Protocol):
    def get(self, key: str) -> Blob | None: ...

    def put(self, key: str, blob: Blob) -> None: ...


class S3ObjectStore:
    """Blocking S3 client bound to a single bucket."""

    def __init__(self, bucket: str, client: object) -> None:
        self._bucket = bucket
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> S3ObjectStore:
        client_kwargs: dict[str, str] = {"region_name": settings.aws_region}
        if settings.aws_access_key_id:
            client_kwargs["aws_access_key_id"] = settings.aws_access_key_id
            client_kwargs["aws_secret_access_key"] = settings.aws_secret_access_key
        if settings.s3_endpoint_url:
            client_kwargs["endpoint_url"] = settings.s3_endpoint_url
        return cls(settings.s3_bucket, boto3.client("s3", **client_kwargs))

    @property
    def bucket(self) -> str:
        return self._bucket

    def get(self, key: str) -> Blob | None:
        """Fetch an object, or None when the key does not exist."""
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=key)
        except ClientError as exc:
            error_code = exc.response.get("Error", {}).get("Code", "")
            if error_code in _MISSING_KEY_CODES:
                logger.debug("s3://%s/%s does not exist", self._bucket, key)
                return None
            raise

        body = response["Body"].read()
        return Blob(
            body=body,
            content_type=response.get("ContentType", ""),
            cache_control=response.get("CacheControl"),
        )

    def put(self, key: str, blob: Blob) -> None:
        params = {
            "Bucket": self._bucket,
            "Key": key,
            "Body": blob.body,
            "ContentType": blob.content_type,
        }
        if blob.cache_control:
            params["CacheControl"] = blob.cache_control
        self._client.put_object(**params)
        logger.info("Uploaded s3://%s/%s (%d bytes)", self._bucket, key, len(blob.body))
