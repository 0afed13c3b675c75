"""Tests for duration string parsing."""
import pytest

from aidemoi_platform.api_service.auth import DEFAULT_DURATION_MS, parse_duration


@pytest.mark.parametrize(
    "text, expected",
    [
        ("45s", 45_000),
        ("30m", 1_800_000),
        ("24h", 86_400_000),
        ("2d", 172_800_000),
        ("0s", 0),
    ],
)
def test_parse_duration_units(text, expected):
    assert parse_duration(text) == expected


@pytest.mark.parametrize("text", ["", "24", "5w", "10H", "h"])
def test_parse_duration_unknown_or_missing_unit_defaults_to_24h(text):
    assert parse_duration(text) == DEFAULT_DURATION_MS == 86_400_000


@pytest.mark.parametrize("text", ["abch", "1.5h", "-3m", " 7d"])
def test_parse_duration_non_integer_prefix_defaults_to_24h(text):
    assert parse_duration(text) == DEFAULT_DURATION_MS
