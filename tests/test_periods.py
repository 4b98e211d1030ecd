"""Tests for period window classification."""

from datetime import datetime, timedelta, UTC

import pytest

from pixrevenue.domain.entities import PeriodTag
from pixrevenue.domain.periods import PeriodClassifier
from pixrevenue.domain.timezone import TimeZoneBucketer


@pytest.fixture
def classifier(now, bucketer):
    return PeriodClassifier(now, bucketer)


def test_instant_now_belongs_to_every_current_window(classifier, now):
    tags = classifier.classify(now)
    assert tags == {
        PeriodTag.TODAY,
        PeriodTag.SEVEN_DAYS,
        PeriodTag.FIFTEEN_DAYS,
        PeriodTag.THIRTY_DAYS,
        PeriodTag.THIS_MONTH,
        PeriodTag.THIS_YEAR,
        PeriodTag.TOTAL,
    }


def test_two_days_ago_is_not_today(classifier, now):
    tags = classifier.classify(now - timedelta(days=2))
    assert PeriodTag.TODAY not in tags
    assert PeriodTag.SEVEN_DAYS in tags
    assert PeriodTag.THIS_MONTH in tags
    assert PeriodTag.THIS_YEAR in tags
    assert PeriodTag.TOTAL in tags


def test_today_uses_calendar_date_not_rolling_24h(classifier, sao_paulo):
    early_today = datetime(2024, 5, 15, 0, 1, tzinfo=sao_paulo)
    late_yesterday = datetime(2024, 5, 14, 23, 59, tzinfo=sao_paulo)
    assert PeriodTag.TODAY in classifier.classify(early_today)
    assert PeriodTag.TODAY not in classifier.classify(late_yesterday)


def test_today_in_reference_timezone_not_utc(bucketer, sao_paulo):
    # 22:00 in São Paulo is already the next day in UTC
    now = datetime(2024, 5, 15, 22, 0, tzinfo=sao_paulo)
    classifier = PeriodClassifier(now, bucketer)
    earlier_same_local_day = datetime(2024, 5, 15, 10, 0, tzinfo=sao_paulo)
    assert PeriodTag.TODAY in classifier.classify(earlier_same_local_day)


def test_rolling_window_lower_bound_is_strict(classifier, now):
    boundary = now - timedelta(days=7)
    assert PeriodTag.SEVEN_DAYS not in classifier.classify(boundary)
    assert PeriodTag.SEVEN_DAYS in classifier.classify(boundary + timedelta(seconds=1))


@pytest.mark.parametrize(
    "days_ago, expected",
    [
        (6, {PeriodTag.SEVEN_DAYS, PeriodTag.FIFTEEN_DAYS, PeriodTag.THIRTY_DAYS}),
        (10, {PeriodTag.FIFTEEN_DAYS, PeriodTag.THIRTY_DAYS}),
        (20, {PeriodTag.THIRTY_DAYS}),
        (40, set()),
    ],
)
def test_rolling_windows_nest(classifier, now, days_ago, expected):
    rolling = {PeriodTag.SEVEN_DAYS, PeriodTag.FIFTEEN_DAYS, PeriodTag.THIRTY_DAYS}
    tags = classifier.classify(now - timedelta(days=days_ago))
    assert tags & rolling == expected


def test_this_month_starts_at_local_midnight(classifier, sao_paulo):
    first_instant = datetime(2024, 5, 1, 0, 0, tzinfo=sao_paulo)
    just_before = datetime(2024, 5, 1, 2, 59, tzinfo=UTC)  # 2024-04-30 23:59 local
    assert PeriodTag.THIS_MONTH in classifier.classify(first_instant)
    assert PeriodTag.THIS_MONTH not in classifier.classify(just_before)
    assert PeriodTag.LAST_MONTH in classifier.classify(just_before)


def test_last_month_covers_full_previous_month(classifier, sao_paulo):
    start = datetime(2024, 4, 1, 0, 0, tzinfo=sao_paulo)
    end = datetime(2024, 4, 30, 23, 59, 59, 999000, tzinfo=sao_paulo)
    before = datetime(2024, 3, 31, 23, 59, tzinfo=sao_paulo)
    assert PeriodTag.LAST_MONTH in classifier.classify(start)
    assert PeriodTag.LAST_MONTH in classifier.classify(end)
    assert PeriodTag.LAST_MONTH not in classifier.classify(before)


def test_this_month_and_last_month_are_exclusive(classifier, now):
    for days_ago in range(0, 60):
        tags = classifier.classify(now - timedelta(days=days_ago))
        assert not {PeriodTag.THIS_MONTH, PeriodTag.LAST_MONTH} <= tags


def test_january_last_month_is_previous_december(bucketer, sao_paulo):
    now = datetime(2024, 1, 10, 9, 0, tzinfo=sao_paulo)
    classifier = PeriodClassifier(now, bucketer)
    december = datetime(2023, 12, 20, 12, 0, tzinfo=sao_paulo)
    tags = classifier.classify(december)
    assert PeriodTag.LAST_MONTH in tags
    assert PeriodTag.THIS_YEAR not in tags
    assert PeriodTag.THIRTY_DAYS in tags


def test_this_year_starts_january_first_local(classifier, sao_paulo):
    assert PeriodTag.THIS_YEAR in classifier.classify(datetime(2024, 1, 1, 0, 0, tzinfo=sao_paulo))
    assert PeriodTag.THIS_YEAR not in classifier.classify(
        datetime(2023, 12, 31, 23, 59, tzinfo=sao_paulo)
    )


def test_unknown_instant_is_all_time_only(classifier):
    assert classifier.classify(None) == {PeriodTag.TOTAL}


def test_contains(classifier, now):
    assert classifier.contains(now, PeriodTag.TODAY)
    assert not classifier.contains(now - timedelta(days=3), PeriodTag.TODAY)


@pytest.mark.parametrize(
    "zone, now_utc, instant_utc",
    [
        # São Paulo still observed DST in 2018; it began on 2018-11-04
        ("America/Sao_Paulo", datetime(2018, 11, 8, 14, 0, tzinfo=UTC), datetime(2018, 11, 1, 14, 30, tzinfo=UTC)),
        ("America/New_York", datetime(2024, 3, 12, 16, 0, tzinfo=UTC), datetime(2024, 3, 5, 16, 30, tzinfo=UTC)),
    ],
)
def test_rolling_window_across_dst_change_uses_elapsed_time(zone, now_utc, instant_utc):
    classifier = PeriodClassifier(now_utc, TimeZoneBucketer(zone))

    assert PeriodTag.SEVEN_DAYS in classifier.classify(instant_utc)
    assert PeriodTag.SEVEN_DAYS not in classifier.classify(now_utc - timedelta(days=7))
    assert PeriodTag.SEVEN_DAYS in classifier.classify(
        now_utc - timedelta(days=7) + timedelta(seconds=1)
    )
