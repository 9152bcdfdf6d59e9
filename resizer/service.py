"""
Image resizer — request pipeline.

key derivation → option parsing → resolve → shape.  Each stage returns either
its value or a ``ResizeError``, and the first error becomes the response.
Anything a stage did not anticipate is logged and answered with a bare 500.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from resizer.errors import InternalError, ResizeError
from resizer.keys import derive_keys
from resizer.options import parse_resize_options
from resizer.resolver import resolve
from resizer.responses import (
    ResizeResponse,
    parse_response_mode,
    shape_error,
    shape_resolution,
)

if TYPE_CHECKING:
    from resizer.config import Settings
    from resizer.processor import ImageTransformer
    from resizer.storage import ObjectStore

logger = logging.getLogger(__name__)


def handle_request(
    path: str | None,
    options: str | None,
    response: str | None,
    *,
    store: ObjectStore,
    transformer: ImageTransformer,
    settings: Settings,
) -> ResizeResponse:
    """Serve ``path`` resized per ``options`` in the requested response mode."""
    raw_options = options or ""
    mode = parse_response_mode(response)

    try:
        keys = derive_keys(path, raw_options)
        if isinstance(keys, ResizeError):
            return _reject(keys, settings)

        spec = parse_resize_options(raw_options)
        if isinstance(spec, ResizeError):
            return _reject(spec, settings)

        resolution = resolve(keys, spec, store, transformer, settings)
        if isinstance(resolution, ResizeError):
            return _reject(resolution, settings)

        return shape_resolution(resolution, mode, settings)

    except Exception:
        logger.exception("Unhandled error resizing %r with options %r", path, raw_options)
        return shape_error(InternalError(), settings)


def _reject(error: ResizeError, settings: Settings) -> ResizeResponse:
    logger.info("Rejected request (%d): %s", error.status_code, error.message.splitlines()[0])
    return shape_error(error, settings)
