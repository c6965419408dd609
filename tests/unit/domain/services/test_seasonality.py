from __future__ import annotations

import pytest

from src.domain.services.seasonality import (
    MAX_FACTOR,
    MIN_FACTOR,
    NEUTRAL_FACTOR,
    detect_seasonality,
    weekly_averages,
)


def test_short_history_is_neutral(observation_factory) -> None:
    assert detect_seasonality(observation_factory([1] * 7 + [50] * 6)) == NEUTRAL_FACTOR


def test_flat_history_is_neutral(observation_factory) -> None:
    assert detect_seasonality(observation_factory([5] * 28)) == pytest.approx(1.0)


def test_strong_growth_is_capped(observation_factory) -> None:
    assert detect_seasonality(observation_factory([10] * 7 + [20] * 7)) == MAX_FACTOR


def test_strong_decline_is_floored(observation_factory) -> None:
    assert detect_seasonality(observation_factory([20] * 7 + [10] * 7)) == MIN_FACTOR


def test_moderate_trend_over_four_weeks(observation_factory) -> None:
    last_week = [2] * 6 + [5]
    observations = observation_factory([2] * 21 + last_week)

    # trend = (17/7 - 2) / 4, factor = 1 + trend * 4
    assert detect_seasonality(observations) == pytest.approx(1 + 3 / 7)


def test_only_first_four_windows_are_used(observation_factory) -> None:
    observations = observation_factory([5] * 28 + [500] * 7)

    assert weekly_averages(observations) == [5.0, 5.0, 5.0, 5.0]
    assert detect_seasonality(observations) == pytest.approx(1.0)


def test_windows_count_events_not_days(observation_factory) -> None:
    # two events per calendar day still form windows of 7 events
    observations = observation_factory([1] * 7) + observation_factory([1] * 7)
    observations.sort(key=lambda obs: obs.sale_date)

    assert len(weekly_averages(observations)) == 2
