"""
Response shaping — status, headers and body for every pipeline outcome.

``file`` mode carries the image base64-encoded; ``json`` mode carries a
small point-in-time descriptor that must never be shared-cached.
"""
from __future__ import annotations

import base64
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from resizer.constants import APPLICATION_JSON, TEXT_PLAIN, ResponseMode
from resizer.resolver import Outcome, Resolution

if TYPE_CHECKING:
    from resizer.config import Settings
    from resizer.errors import ResizeError


class VariantStatus(BaseModel):
    """JSON descriptor of what the request did."""
    resized: bool
    exists: bool


class ResizeResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    status_code: int
    headers: dict[str, str] = Field(default_factory=dict)
    body: str = ""
    is_base64_encoded: bool = False

    def to_lambda(self) -> dict[str, Any]:
        """API Gateway proxy integration shape."""
        return {
            "statusCode": self.status_code,
            "headers": dict(self.headers),
            "body": self.body,
            "isBase64Encoded": self.is_base64_encoded,
        }

    def raw_body(self) -> bytes:
        if self.is_base64_encoded:
            return base64.b64decode(self.body)
        return self.body.encode("utf-8")


def parse_response_mode(value: str | None) -> ResponseMode:
    """Anything other than ``file`` means ``json``."""
    if value == ResponseMode.FILE.value:
        return ResponseMode.FILE
    return ResponseMode.JSON


def shape_resolution(
    resolution: Resolution,
    mode: ResponseMode,
    settings: Settings,
) -> ResizeResponse:
    blob = resolution.blob

    # Unresized originals are always delivered as files
    if mode is ResponseMode.FILE or resolution.outcome is Outcome.PASSTHROUGH:
        headers = {
            "Content-Type": blob.content_type,
            "Cache-Control": settings.cache_control,
        }
        if resolution.outcome is not Outcome.CACHE_HIT:
            headers["Age"] = "0"
        return ResizeResponse(
            status_code=200,
            headers=headers,
            body=base64.b64encode(blob.body).decode("ascii"),
            is_base64_encoded=True,
        )

    hit = resolution.outcome is Outcome.CACHE_HIT
    return ResizeResponse(
        status_code=200,
        headers={
            "Content-Type": APPLICATION_JSON,
            "Cache-Control": settings.no_cache_control,
        },
        body=VariantStatus(resized=not hit, exists=hit).model_dump_json(),
    )


def shape_error(error: ResizeError, settings: Settings) -> ResizeResponse:
    headers = {"Content-Type": TEXT_PLAIN}
    if error.no_cache:
        headers["Cache-Control"] = settings.no_cache_control
    return ResizeResponse(
        status_code=error.status_code,
        headers=headers,
        body=error.message,
    )
