"""Tests for temporal expression resolution."""

from datetime import date

from dive.resolve.temporal import date_for_day_of_week, parse_date_string, resolve_temporal

# 2024-01-10 is a Wednesday
TODAY = date(2024, 1, 10)


def test_yesterday():
    assert resolve_temporal("what happened yesterday", today=TODAY) == date(2024, 1, 9)
    assert resolve_temporal("show me yesterday's notes", today=TODAY) == date(2024, 1, 9)
    assert resolve_temporal("What did I do yesterday?", today=TODAY) == date(2024, 1, 9)


def test_today():
    assert resolve_temporal("what am I working on today", today=TODAY) == TODAY
    assert resolve_temporal("Tell me about today", today=TODAY) == TODAY


def test_yesterday_beats_today():
    assert resolve_temporal("what happened yesterday and what happened today", today=TODAY) == date(2024, 1, 9)


def test_explicit_dates():
    assert resolve_temporal("what happened on 2024-01-05", today=TODAY) == date(2024, 1, 5)
    assert resolve_temporal("tell me about 3/14/24", today=TODAY) == date(2024, 3, 14)
    assert resolve_temporal("tell me about 12-31-2023", today=TODAY) == date(2023, 12, 31)


def test_explicit_date_without_year_uses_current_year():
    assert resolve_temporal("what happened on 3/14", today=TODAY) == date(2024, 3, 14)


def test_invalid_explicit_date_does_not_fall_through():
    assert resolve_temporal("what happened on 13/45/2024 last monday", today=TODAY) is None


def test_day_of_week_defaults_to_last():
    assert resolve_temporal("what happened on friday", today=TODAY) == date(2024, 1, 5)
    assert resolve_temporal("anything from monday?", today=TODAY) == date(2024, 1, 8)


def test_day_of_week_this():
    assert resolve_temporal("what's planned this friday", today=TODAY) == date(2024, 1, 12)


def test_no_temporal_expression():
    assert resolve_temporal("summarize my project notes", today=TODAY) is None


def test_date_for_day_of_week_this_and_last():
    wednesday = date(2024, 1, 3)
    assert date_for_day_of_week("monday", "this", today=wednesday) == date(2024, 1, 8)
    assert date_for_day_of_week("monday", "last", today=wednesday) == date(2024, 1, 1)


def test_date_for_same_weekday():
    assert date_for_day_of_week("Wednesday", "this", today=TODAY) == TODAY
    assert date_for_day_of_week("wednesday", "last", today=TODAY) == date(2024, 1, 3)
    assert date_for_day_of_week("wednesday", "on", today=TODAY) == date(2024, 1, 3)


def test_parse_date_string():
    assert parse_date_string("2024-02-29").isoformat() == "2024-02-29"
    assert parse_date_string("1/5/2024") == date(2024, 1, 5)
    assert parse_date_string("12-31-99") == date(2099, 12, 31)
    assert parse_date_string("2023-02-29") is None
    assert parse_date_string("13/1/2024") is None
    assert parse_date_string("1/5/202") is None
