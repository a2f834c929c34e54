"""Text speed multiplier for the character stream.

A higher speed means a shorter delay between rendered characters; the
stream processor divides its random delay by the current speed.
"""

from __future__ import annotations

import logging
import math

logger = logging.getLogger(__name__)

DEFAULT_TEXT_SPEED = 1.0


class TextSpeedError(ValueError):
    """Raised when a speed that is not a positive finite number is set."""


def parse_speed(raw: str) -> float:
    """Parse a user-supplied speed.

    Unparsable or non-finite input falls back to ``1.0``. Parsed numbers
    are returned unchanged, so non-positive values still reach
    ``TextSpeedController.set_speed`` and are rejected there.
    """
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return DEFAULT_TEXT_SPEED
    if not math.isfinite(value):
        return DEFAULT_TEXT_SPEED
    return value


class TextSpeedController:
    """Holds the current and previous text speed."""

    def __init__(self, default: float = DEFAULT_TEXT_SPEED) -> None:
        self._check(default)
        self._default = default
        self._speed = default
        self._previous_speed = default

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def previous_speed(self) -> float:
        return self._previous_speed

    @property
    def default(self) -> float:
        return self._default

    def get_speed(self) -> float:
        return self._speed

    def set_speed(self, value: float) -> None:
        self._check(value)
        self._previous_speed = self._speed
        self._speed = float(value)
        logger.debug("Text speed %g -> %g", self._previous_speed, self._speed)

    def reset_speed(self) -> None:
        """Restore the configured default (not the previous speed)."""
        self._speed = self._default

    @staticmethod
    def _check(value: float) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TextSpeedError(f"Text speed must be a number, got {value!r}")
        if not math.isfinite(value) or value <= 0:
            raise TextSpeedError(f"Text speed must be positive, got {value!r}")
