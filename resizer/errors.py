"""
Image resizer — error outcomes.

Pipeline stages return one of these instead of raising, and the request
short-circuits on the first one.  Each variant carries its HTTP status and
renders its own plain-text message, so callers never choose either.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from resizer.constants import FIT_MODES


@dataclass(frozen=True)
class ResizeError:
    status_code: ClassVar[int] = 500
    no_cache: ClassVar[bool] = True

    @property
    def message(self) -> str:
        return "Internal server error"


@dataclass(frozen=True)
class InvalidRequest(ResizeError):
    status_code: ClassVar[int] = 400
    # Validation failures carry no cache-control opinion
    no_cache: ClassVar[bool] = False

    reason: str

    @property
    def message(self) -> str:
        return f"Invalid request: {self.reason}."


@dataclass(frozen=True)
class UnknownFitAction(ResizeError):
    status_code: ClassVar[int] = 400
    # Validation failures carry no cache-control opinion
    no_cache: ClassVar[bool] = False

    action: str
    valid_actions: tuple[str, ...] = FIT_MODES

    @property
    def message(self) -> str:
        return (
            f'Unknown Fit action parameter "{self.action}"\n'
            f"Available Fit actions: {', '.join(self.valid_actions)}."
        )


@dataclass(frozen=True)
class NotFound(ResizeError):
    status_code: ClassVar[int] = 404

    key: str

    @property
    def message(self) -> str:
        return f"Resource not found. Could not find resource: {self.key}."


@dataclass(frozen=True)
class UnsupportedMediaType(ResizeError):
    status_code: ClassVar[int] = 400

    content_type: str
    allowed: tuple[str, ...]

    @property
    def message(self) -> str:
        return (
            f"Unsupported MIME type: {self.content_type}. "
            f"Supported types: {', '.join(self.allowed)}"
        )


@dataclass(frozen=True)
class InternalError(ResizeError):
    status_code: ClassVar[int] = 500
