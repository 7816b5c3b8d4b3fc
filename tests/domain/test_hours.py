from __future__ import annotations

import json

import pytest

from listingreview.domain.hours import (
    parse_stored_hours,
    to_24_hour,
    transcode_line,
    transcode_opening_hours,
)


def test_transcodes_open_day_and_drops_closed_day() -> None:
    output = transcode_opening_hours(["Monday: 11:00 AM – 9:00 PM", "Tuesday: Closed"])

    assert output == '{"openhours":["Mon-11:00-21:00"],"note":""}'


@pytest.mark.parametrize(
    ("hour", "minute", "period", "expected"),
    [
        (12, "00", "AM", "00:00"),
        (12, "00", "PM", "12:00"),
        (7, "30", "PM", "19:30"),
        ("9", "05", "am", "09:05"),
    ],
)
def test_to_24_hour(hour: int | str, minute: str, period: str, expected: str) -> None:
    assert to_24_hour(hour, minute, period) == expected


@pytest.mark.parametrize(
    "lines",
    [
        [],
        ["Monday: Closed", "Tuesday: closed", "Wednesday: CLOSED"],
        ["Someday: 9:00 AM – 5:00 PM"],
    ],
)
def test_nothing_surviving_yields_empty_string(lines: list[str]) -> None:
    assert transcode_opening_hours(lines) == ""


@pytest.mark.parametrize(
    "line",
    ["Sunday: Open 24 hours", "Sunday: 24 hours", "Sunday: OPEN 24/7"],
)
def test_round_the_clock_days(line: str) -> None:
    assert transcode_line(line) == "Sun-00:00-24:00"


@pytest.mark.parametrize(
    "gap",
    [" ", "\u202f", "\u2009", "\u00a0", ""],
)
def test_time_tokens_tolerate_unicode_spacing(gap: str) -> None:
    line = f"Friday: 7:30{gap}AM – 10:00{gap}PM"

    assert transcode_line(line) == "Fri-07:30-22:00"


@pytest.mark.parametrize(
    "line",
    [
        "Monday: 11:00 AM",
        "Monday: 7:00 AM – 11:00 AM, 5:00 PM – 10:00 PM",
        "Monday: 13:00 PM – 9:00 PM",
        "Monday: 9:75 AM – 5:00 PM",
        "Monday 9:00 AM – 5:00 PM",
        "Monday: by appointment",
        "",
    ],
)
def test_ambiguous_lines_are_dropped(line: str) -> None:
    assert transcode_line(line) is None


def test_closed_takes_precedence_over_times() -> None:
    assert transcode_line("Thursday: Closed (usually 9:00 AM – 5:00 PM)") is None


def test_normalized_lines_pass_through() -> None:
    assert transcode_line("Mon-07:30-22:00") == "Mon-07:30-22:00"
    assert transcode_line("Sat-00:00-24:00") == "Sat-00:00-24:00"
    assert transcode_line("Xyz-07:30-22:00") is None
    assert transcode_line("Mon-07:30-25:00") is None


def test_output_length_matches_parseable_lines() -> None:
    lines = [
        "Monday: 8:00 AM – 6:00 PM",
        "Tuesday: Closed",
        "Wednesday: 8:00 AM – 6:00 PM",
        "Thursday: 8:00 AM",
        "Friday: 8:00 AM – 11:30 PM",
        "Saturday: Open 24 hours",
        "Sunday: closed",
    ]

    document = json.loads(transcode_opening_hours(lines))

    assert document == {
        "openhours": [
            "Mon-08:00-18:00",
            "Wed-08:00-18:00",
            "Fri-08:00-23:30",
            "Sat-00:00-24:00",
        ],
        "note": "",
    }


def test_parse_stored_hours() -> None:
    stored = '{"openhours":["Mon-08:00-20:00","Tue-08:00-20:00"],"note":""}'

    assert parse_stored_hours(stored) == ["Mon-08:00-20:00", "Tue-08:00-20:00"]
    assert parse_stored_hours("  Mon-Fri 9-5  ") == ["Mon-Fri 9-5"]
    assert parse_stored_hours('{"openhours":[],"note":"x"}') == ['{"openhours":[],"note":"x"}']
    assert parse_stored_hours(None) == []
    assert parse_stored_hours("   ") == []
