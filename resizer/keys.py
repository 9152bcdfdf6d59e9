"""
Key derivation — maps a request path and raw option string to store keys.

Layout in the bucket:
  originals  {subfolder}/{filename}
  variants   {subfolder}/{options}/{filename}

The derived key is a pure function of (path, options); two requests with the
same inputs always address the same variant.
"""
from __future__ import annotations

from dataclasses import dataclass

from resizer.errors import InvalidRequest


@dataclass(frozen=True)
class ResourceKeys:
    original_key: str
    derived_key: str
    subfolder: str
    filename: str


def derive_keys(path: str | None, raw_options: str = "") -> ResourceKeys | InvalidRequest:
    """Split ``path`` into subfolder/filename and compute the variant key."""
    original_key = (path or "").lstrip("/")
    if not original_key:
        return InvalidRequest("missing resource path")

    subfolder, _, filename = original_key.rpartition("/")
    if not filename:
        return InvalidRequest(f"resource path {original_key!r} has no filename")

    if raw_options:
        prefix = "/".join(part for part in (subfolder, raw_options) if part)
        derived_key = f"{prefix}/{filename}"
    else:
        derived_key = original_key

    return ResourceKeys(
        original_key=original_key,
        derived_key=derived_key,
        subfolder=subfolder,
        filename=filename,
    )
