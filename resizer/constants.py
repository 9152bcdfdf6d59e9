"""
Image resizer — static constants and enum types.
"""
import enum


class FitMode(str, enum.Enum):
    """How the image is brought to the requested box."""
    COVER = "cover"      # preserve aspect, crop to cover both dimensions (default)
    CONTAIN = "contain"  # preserve aspect, letterbox inside both dimensions
    FILL = "fill"        # ignore aspect, stretch to both dimensions
    INSIDE = "inside"    # preserve aspect, as large as possible within both
    OUTSIDE = "outside"  # preserve aspect, as small as possible covering both


class ResponseMode(str, enum.Enum):
    FILE = "file"
    JSON = "json"


DEFAULT_FIT = FitMode.COVER
FIT_MODES: tuple[str, ...] = tuple(mode.value for mode in FitMode)

AUTO = "auto"

ALLOWED_MIME_TYPES: tuple[str, ...] = (
    "image/jpeg",
    "image/gif",
    "image/png",
    "image/svg+xml",
    "image/tiff",
    "image/bmp",
)

# Accepted, but served untouched since the transformer cannot decode them
PASSTHROUGH_MIME_TYPES: tuple[str, ...] = (
    "image/bmp",
    "image/svg+xml",
)

DEFAULT_CACHE_CONTROL = "public, max-age=86400"  # 24 hours, shared
NO_CACHE_CONTROL = "private, nocache"

TEXT_PLAIN = "text/plain"
APPLICATION_JSON = "application/json"
