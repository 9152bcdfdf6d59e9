"""
Variant resolution — serve a stored variant or produce and store one.

  probe derived key ── hit ──────────────────────────────► CACHE_HIT
        │ miss
  fetch original ───── absent ───────────────────────────► NotFound
        │
  check media type ─── not allowed ──────────────────────► UnsupportedMediaType
        │         └─── allowed, not decodable ───────────► PASSTHROUGH
        │
  transform ─► put derived key ──────────────────────────► GENERATED

A hit is trusted as-is: nothing is re-validated or re-transformed.  Writes
are unconditional; concurrent misses on one key each write equal bytes and
the last write wins.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from resizer.errors import NotFound, UnsupportedMediaType
from resizer.storage import Blob

if TYPE_CHECKING:
    from resizer.config import Settings
    from resizer.keys import ResourceKeys
    from resizer.options import ResizeSpec
    from resizer.processor import ImageTransformer
    from resizer.storage import ObjectStore

logger = logging.getLogger(__name__)


class Outcome(str, enum.Enum):
    CACHE_HIT = "cache_hit"
    GENERATED = "generated"
    PASSTHROUGH = "passthrough"


@dataclass(frozen=True)
class Resolution:
    blob: Blob
    outcome: Outcome


def resolve(
    keys: ResourceKeys,
    spec: ResizeSpec | None,
    store: ObjectStore,
    transformer: ImageTransformer,
    settings: Settings,
) -> Resolution | NotFound | UnsupportedMediaType:
    """Return the variant addressed by ``keys``, generating it on a miss."""
    existing = store.get(keys.derived_key)
    if existing is not None:
        logger.debug("Cache hit: %s", keys.derived_key)
        return Resolution(existing, Outcome.CACHE_HIT)

    # Without a resize the probe already was the original
    if spec is None:
        return NotFound(keys.original_key)

    logger.info("Cache miss: %s", keys.derived_key)
    original = store.get(keys.original_key)
    if original is None:
        return NotFound(keys.original_key)

    content_type = original.content_type
    if content_type not in settings.allowed_mime_types:
        return UnsupportedMediaType(content_type, tuple(settings.allowed_mime_types))

    if content_type in settings.passthrough_mime_types:
        logger.info("Serving %s unresized (%s)", keys.original_key, content_type)
        return Resolution(
            Blob(original.body, content_type, settings.cache_control),
            Outcome.PASSTHROUGH,
        )

    body = transformer.transform(original.body, spec)
    variant = Blob(body, content_type, settings.cache_control)
    store.put(keys.derived_key, variant)
    logger.info(
        "Generated %s from %s (%d -> %d bytes)",
        keys.derived_key, keys.original_key, len(original.body), len(body),
    )
    return Resolution(variant, Outcome.GENERATED)
