"""Tests for duration parsing."""

import click
import pytest

from azure_audit_exporter.utils.duration import DURATION, parse_duration


class TestParseDuration:
    """Test Go style duration strings."""

    @pytest.mark.parametrize("value,seconds", [
        ("5m", 300.0),
        ("30s", 30.0),
        ("1h30m", 5400.0),
        ("1.5s", 1.5),
        ("250ms", 0.25),
        ("90", 90.0),
        (" 2m ", 120.0),
    ])
    def test_valid(self, value, seconds):
        assert parse_duration(value) == pytest.approx(seconds)

    @pytest.mark.parametrize("value", ["", "m5", "5x", "1h 30m", "abc"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_duration(value)

    def test_param_type_fails_with_usage_error(self):
        with pytest.raises(click.BadParameter):
            DURATION.convert("soon", None, None)

    def test_param_type_passes_numbers(self):
        assert DURATION.convert(12, None, None) == 12.0
