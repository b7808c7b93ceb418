from datetime import date, datetime, timedelta

from hrtime.utils.weeks import days_in_range, parse_date, submission_range, week_range, week_start_of


def test_week_range_starts_on_monday_for_every_weekday():
    base = date(2025, 9, 1)  # Monday
    for offset in range(21):
        d = base + timedelta(days=offset)
        wr = week_range(d)
        assert wr.week_start.weekday() == 0
        assert (wr.week_end - wr.week_start).days == 6
        assert wr.week_start <= d <= wr.week_end
        assert len(wr.days) == 7


def test_sunday_maps_back_six_days_and_monday_to_itself():
    assert week_start_of(date(2025, 9, 7)) == date(2025, 9, 1)
    assert week_start_of(date(2025, 9, 1)) == date(2025, 9, 1)


def test_week_range_crosses_year_boundary():
    wr = week_range(date(2025, 1, 1))  # Wednesday
    assert wr.week_start == date(2024, 12, 30)
    assert wr.week_end == date(2025, 1, 5)


def test_days_in_range_inclusive_and_ascending():
    days = days_in_range(date(2025, 9, 1), date(2025, 9, 10))
    assert len(days) == 10
    assert days[0] == date(2025, 9, 1)
    assert days[-1] == date(2025, 9, 10)
    assert all(a < b for a, b in zip(days, days[1:]))


def test_days_in_range_single_day_and_reversed():
    assert days_in_range(date(2025, 9, 1), date(2025, 9, 1)) == [date(2025, 9, 1)]
    assert days_in_range(date(2025, 9, 2), date(2025, 9, 1)) == []


def test_parse_date_variants():
    assert parse_date("2025-09-01") == date(2025, 9, 1)
    assert parse_date("2025-09-01T00:00:00") == date(2025, 9, 1)
    assert parse_date(datetime(2025, 9, 1, 17, 30)) == date(2025, 9, 1)
    assert parse_date(date(2025, 9, 1)) == date(2025, 9, 1)
    assert parse_date("") is None
    assert parse_date("not a date") is None
    assert parse_date(None) is None
    assert parse_date(20250901) is None


def test_submission_range_snaps_to_monday_unless_custom():
    snapped = submission_range(date(2025, 9, 3))
    assert snapped[0] == date(2025, 9, 1)
    assert len(snapped) == 7

    custom = submission_range(date(2025, 9, 3), date(2025, 9, 5), custom=True)
    assert custom == [date(2025, 9, 3), date(2025, 9, 4), date(2025, 9, 5)]
    assert submission_range(date(2025, 9, 3), None, custom=True) == []
