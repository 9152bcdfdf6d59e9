"""
Option parsing — turns ``"<w>x<h>[_<fit>]"`` into a ResizeSpec.

Runs before any store access so malformed requests cost no I/O.
"""
from __future__ import annotations

from dataclasses import dataclass

from resizer.constants import AUTO, DEFAULT_FIT, FIT_MODES, FitMode
from resizer.errors import InvalidRequest, UnknownFitAction


@dataclass(frozen=True)
class Auto:
    """Unconstrained axis; follows the other one by aspect ratio."""

    def __str__(self) -> str:
        return AUTO


@dataclass(frozen=True)
class Fixed:
    pixels: int

    def __str__(self) -> str:
        return str(self.pixels)


Dimension = Auto | Fixed


@dataclass(frozen=True)
class ResizeSpec:
    width: Dimension
    height: Dimension
    fit: FitMode = DEFAULT_FIT

    @property
    def width_px(self) -> int | None:
        return self.width.pixels if isinstance(self.width, Fixed) else None

    @property
    def height_px(self) -> int | None:
        return self.height.pixels if isinstance(self.height, Fixed) else None


def _parse_dimension(token: str) -> Dimension | None:
    if token == AUTO:
        return Auto()
    # int() would also take "+5", " 5" and "5_0"
    if not token.isascii() or not token.isdigit():
        return None
    pixels = int(token)
    return Fixed(pixels) if pixels > 0 else None


def parse_resize_options(
    raw_options: str,
) -> ResizeSpec | None | InvalidRequest | UnknownFitAction:
    """Parse the ``options`` query value.

    Returns ``None`` when no resize was requested.  The fit action is
    checked before the dimensions.
    """
    if not raw_options:
        return None

    size, _, action = raw_options.partition("_")
    if not action:
        action = DEFAULT_FIT.value
    if action not in FIT_MODES:
        return UnknownFitAction(action)

    tokens = size.split("x")
    if len(tokens) != 2:
        return InvalidRequest(f'size "{size}" must look like <width>x<height>')

    width, height = (_parse_dimension(token) for token in tokens)
    if width is None or height is None:
        return InvalidRequest(
            f'size "{size}" must use positive integers or "{AUTO}" for each side'
        )

    return ResizeSpec(width=width, height=height, fit=FitMode(action))
