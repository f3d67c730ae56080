import math

import pytest

from passlab.crack_time import (
    DAY,
    HOUR,
    OFFLINE_MODERATE,
    ONLINE,
    SCENARIOS,
    YEAR,
    Estimate,
    Scenario,
    custom_scenario,
    estimate,
    format_duration,
    format_range,
    get_scenario,
)


def test_canonical_scenarios():
    assert ONLINE.guesses_per_second == 100
    assert OFFLINE_MODERATE.guesses_per_second == 1e9
    assert set(SCENARIOS) == {"online", "offlineModerate"}
    assert get_scenario("online") is ONLINE


def test_unknown_scenario():
    with pytest.raises(KeyError):
        get_scenario("gpu-farm")


def test_scenario_rejects_bad_rates():
    for rate in (0, -1, math.inf, math.nan):
        try:
            Scenario("x", "x", rate)
            raised = False
        except ValueError:
            raised = True
        assert raised


def test_custom_scenario():
    s = custom_scenario(10_000)
    assert s.guesses_per_second == 10_000
    assert "10,000" in s.title


def test_zero_entropy_estimate():
    assert estimate(0, ONLINE) == Estimate(0.0, 0.0)
    assert estimate(-3, OFFLINE_MODERATE) == Estimate(0.0, 0.0)


def test_estimate_is_half_and_full_space():
    e = estimate(10, ONLINE)
    assert e.expected_seconds == pytest.approx(5.12)
    assert e.worst_seconds == pytest.approx(10.24)
    assert e.describe() == "5s avg & 10s worst"


def test_huge_entropy_is_effectively_never():
    e = estimate(5000, OFFLINE_MODERATE)
    assert math.isinf(e.worst_seconds)
    assert format_range(e.expected_seconds, e.worst_seconds) == "Effectively never"
    assert e.to_dict()["worst_seconds"] is None


def test_format_small_values():
    assert format_duration(0) == "Instant"
    assert format_duration(0.5) == "Instant"
    assert format_duration(1) == "Instant"
    assert format_duration(2.5) == "3s"
    assert format_duration(30) == "30s"


def test_format_bucket_boundaries():
    assert format_duration(59.9) == "60s"
    assert format_duration(60) == "1m"
    assert format_duration(3599) == "60m"
    assert format_duration(3600) == "1h"
    assert format_duration(86399) == "24h"
    assert format_duration(86400) == "1d"


def test_format_rounds_half_up():
    assert format_duration(150) == "3m"
    assert format_duration(2.5 * HOUR) == "3h"


def test_format_days_and_months():
    assert format_duration(44 * DAY) == "44d"
    assert format_duration(45 * DAY) == "2mo"
    assert format_duration(300 * DAY) == "10mo"


def test_format_years():
    assert format_duration(YEAR) == "1y"
    assert format_duration(1234 * YEAR) == "1,234y"
    assert format_duration(20_000 * YEAR) == ">10,000y"
    assert format_duration(math.inf) == "Effectively never"
    assert format_duration(math.nan) == "Effectively never"


def test_format_range():
    assert format_range(30, 30) == "30s"
    assert format_range(0.2, 0.9) == "Instant"
    assert format_range(30, 60) == "30s avg & 1m worst"


def test_rate_beyond_float_range_is_rejected():
    try:
        custom_scenario(10 ** 400)
        raised = False
    except ValueError:
        raised = True
    assert raised


def test_huge_integer_entropy_saturates():
    assert estimate(10 ** 400, ONLINE).describe() == "Effectively never"
