"""Tests for the TextSpeedController."""

from __future__ import annotations

import pytest

from webshell.terminal.speed import (
    DEFAULT_TEXT_SPEED,
    TextSpeedController,
    TextSpeedError,
    parse_speed,
)


class TestTextSpeedController:
    def test_defaults(self) -> None:
        speed = TextSpeedController()
        assert speed.get_speed() == DEFAULT_TEXT_SPEED
        assert speed.previous_speed == DEFAULT_TEXT_SPEED

    def test_set_speed_tracks_previous(self) -> None:
        speed = TextSpeedController()
        speed.set_speed(2)
        assert speed.get_speed() == 2
        assert speed.previous_speed == 1.0
        speed.set_speed(0.5)
        assert speed.previous_speed == 2

    @pytest.mark.parametrize("value", [0, -1, float("nan"), float("inf")])
    def test_rejects_invalid_speed(self, value: float) -> None:
        speed = TextSpeedController()
        speed.set_speed(3)
        with pytest.raises(TextSpeedError):
            speed.set_speed(value)
        assert speed.get_speed() == 3
        assert speed.previous_speed == 1.0

    def test_reset_uses_default_not_previous(self) -> None:
        speed = TextSpeedController(default=1.5)
        speed.set_speed(4)
        speed.set_speed(8)
        speed.reset_speed()
        assert speed.get_speed() == 1.5

    def test_invalid_default(self) -> None:
        with pytest.raises(TextSpeedError):
            TextSpeedController(default=0)


class TestParseSpeed:
    @pytest.mark.parametrize("raw", ["fast", "", "nan", "inf"])
    def test_unparsable_falls_back_to_one(self, raw: str) -> None:
        assert parse_speed(raw) == 1.0

    def test_numeric(self) -> None:
        assert parse_speed("2.5") == 2.5

    def test_non_positive_is_returned_for_rejection(self) -> None:
        assert parse_speed("-3") == -3.0
