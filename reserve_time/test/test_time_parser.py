# Copyright (c) 2025 Ming Yu (yuming@oppo.com)
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Tests for timespec resolution and the range/duration entry points
"""

from datetime import datetime, timedelta

import pytest
from dateutil import tz

from reserve_time import TimeParser, parse_range
from reserve_time.core.errors import ErrorKind, ParseError
from reserve_time.core.token import TokenKind
from reserve_time.lexer import tokenize
from reserve_time.parser.timespec_parser import UNSUPPORTED_KINDS, TimeSpecParser

NEW_YORK = tz.gettz("America/New_York")


def ny(*args):
    return datetime(*args, tzinfo=NEW_YORK)


DEFAULT_NOW = ny(2017, 4, 1, 23, 47)


@pytest.fixture
def timespec_parser():
    return TimeSpecParser(NEW_YORK)


@pytest.fixture
def time_parser():
    return TimeParser(NEW_YORK)


def resolve(timespec_parser, phrase, now=DEFAULT_NOW):
    return timespec_parser.parse(tokenize(phrase), now, now).time


@pytest.mark.parametrize(
    "phrase, now, expected",
    [
        ("+1day", DEFAULT_NOW, ny(2017, 4, 3, 0, 0)),
        ("2", ny(2017, 4, 1, 8, 0), ny(2017, 4, 1, 10, 0)),
        ("plus 5 days", DEFAULT_NOW, ny(2017, 4, 7, 0, 0)),
        ("now + 1 hour", DEFAULT_NOW, ny(2017, 4, 2, 1, 0)),
        ("6", ny(2017, 4, 1, 12, 0), ny(2017, 4, 1, 18, 0)),
        ("NoW +1hour", DEFAULT_NOW, ny(2017, 4, 2, 1, 0)),
        ("15:00", DEFAULT_NOW, ny(2017, 4, 1, 15, 0)),
        ("4pm", DEFAULT_NOW, ny(2017, 4, 1, 16, 0)),
        ("4:30pm", DEFAULT_NOW, ny(2017, 4, 1, 16, 30)),
        ("04:30pm", DEFAULT_NOW, ny(2017, 4, 1, 16, 30)),
        ("noon tomorrow", ny(2017, 4, 1, 8, 37), ny(2017, 4, 2, 12, 0)),
        ("friday", DEFAULT_NOW, ny(2017, 4, 7, 23, 47)),
        ("friday 11:30am", DEFAULT_NOW, ny(2017, 4, 7, 11, 30)),
        ("friday 11:30pm", DEFAULT_NOW, ny(2017, 4, 7, 23, 30)),
        ("2019-02-22", DEFAULT_NOW, ny(2019, 2, 22, 23, 47)),
        ("2019-02-22 7:45pm", DEFAULT_NOW, ny(2019, 2, 22, 19, 45)),
        ("april 1 11:59", DEFAULT_NOW, ny(2017, 4, 1, 11, 59)),
        ("september 2nd 11:59pm", DEFAULT_NOW, ny(2017, 9, 2, 23, 59)),
        ("july 4rd 11:59 2018", DEFAULT_NOW, ny(2018, 7, 4, 11, 59)),
        ("july 4rd 11:59 2018 this ia a test", DEFAULT_NOW, ny(2018, 7, 4, 11, 59)),
        ("2017-04-01 24:00", DEFAULT_NOW, ny(2017, 4, 2, 0, 0)),
        ("2017-04-02 00:45", DEFAULT_NOW, ny(2017, 4, 2, 0, 45)),
        ("00:45", ny(2017, 4, 2, 0, 0), ny(2017, 4, 2, 0, 45)),
        ("midnight", DEFAULT_NOW, ny(2017, 4, 1, 0, 0)),
        ("eod tomorrow", DEFAULT_NOW, ny(2017, 4, 2, 17, 0)),
        ("sept 2nd 9:00", DEFAULT_NOW, ny(2017, 9, 2, 9, 0)),
        ("thurs 9am", DEFAULT_NOW, ny(2017, 4, 6, 9, 0)),
    ],
)
def test_timespec(timespec_parser, phrase, now, expected):
    assert resolve(timespec_parser, phrase, now) == expected


def test_dates_in_winter_use_standard_time(timespec_parser):
    value = resolve(timespec_parser, "2019-02-22 7:45pm")
    assert value.utcoffset() == timedelta(hours=-5)


@pytest.mark.parametrize(
    "phrase, message",
    [
        ("15pm", "time out of range: 15:00PM"),
        ("whatsit", 'unknown date/time value: "whatsit" (text)'),
        ("september 5 1970", 'expected time, got "1970"'),
        ("october 31 time 1973", 'expected time, got "time"'),
        ("febrewairy 5rd 1999", 'unknown date/time value: "febrewairy" (text)'),
        ("am", 'unknown date/time value: "am" (am)'),
        ("days", 'unknown date/time value: "days" (day)'),
        ("april noon", 'expected day of month, got "noon"'),
        ("july 4 11:59 18", "year needs to be four digits"),
        ("next 5pm", 'expected day name, got "5"'),
        ("plus 5 fortnights", "invalid duration qualifier: fortnights"),
        ("plus x", "expect numeric value in duration"),
    ],
)
def test_timespec_errors(timespec_parser, phrase, message):
    with pytest.raises(ParseError) as excinfo:
        resolve(timespec_parser, phrase)
    assert str(excinfo.value) == message
    assert excinfo.value.kind is ErrorKind.INVALID_VALUE


def test_month_day_is_validated(timespec_parser):
    with pytest.raises(ParseError) as excinfo:
        resolve(timespec_parser, "june 31 10:00")
    assert str(excinfo.value) == "day too large"
    assert excinfo.value.kind is ErrorKind.DATE_INVALID
    assert excinfo.value.position == 2


@pytest.mark.parametrize("phrase", ["march", "plus", "next", "for"])
def test_timespec_runs_out_of_input(timespec_parser, phrase):
    with pytest.raises(ParseError) as excinfo:
        resolve(timespec_parser, phrase)
    assert excinfo.value.end_of_input


def test_next_weekday_skips_today(timespec_parser):
    # 2017-04-01 is a Saturday
    assert resolve(timespec_parser, "saturday 10am") == ny(2017, 4, 1, 10, 0)
    assert resolve(timespec_parser, "next saturday 10am") == ny(2017, 4, 8, 10, 0)
    assert resolve(timespec_parser, "next monday") == ny(2017, 4, 3, 23, 47)


@pytest.mark.parametrize(
    "phrase, expected",
    [
        ("12am", ny(2017, 4, 1, 12, 0)),
        ("12:30am", ny(2017, 4, 1, 12, 30)),
        ("11:30am", ny(2017, 4, 1, 11, 30)),
        ("11:30pm", ny(2017, 4, 1, 23, 30)),
    ],
)
def test_am_keeps_the_clock(timespec_parser, phrase, expected):
    assert resolve(timespec_parser, phrase) == expected


@pytest.mark.parametrize(
    "phrase, message",
    [
        ("12pm", "time out of range: 12:00PM"),
        ("12:15pm", "time out of range: 12:15PM"),
        ("noon pm", "time out of range: 12:00PM"),
    ],
)
def test_pm_rejects_afternoon_hours(timespec_parser, phrase, message):
    with pytest.raises(ParseError) as excinfo:
        resolve(timespec_parser, phrase)
    assert str(excinfo.value) == message
    assert excinfo.value.kind is ErrorKind.INVALID_VALUE
    assert excinfo.value.token.kind is TokenKind.PM


def test_twelve_thirty_am_in_duration_mode(time_parser):
    now = ny(2017, 4, 1, 8, 0)
    assert time_parser.parse_duration(now, "12:30am") == ny(2017, 4, 1, 12, 30)
    with pytest.raises(ParseError) as excinfo:
        time_parser.parse_duration(now, "12pm")
    assert str(excinfo.value) == "time out of range: 12:00PM"


@pytest.mark.parametrize(
    "phrase, message, position",
    [
        ("friday + 2 hours", 'expected time, got "+"', 2),
        ("tomorrow to friday", 'expected time, got "to"', 2),
        ("next monday until 5pm", 'expected time, got "until"', 3),
    ],
)
def test_weekday_and_tomorrow_need_a_time_or_the_end(time_parser, phrase, message, position):
    with pytest.raises(ParseError) as excinfo:
        time_parser.parse_range(ny(2017, 4, 1, 8, 0), phrase)
    assert str(excinfo.value) == message
    assert excinfo.value.kind is ErrorKind.INVALID_VALUE
    assert excinfo.value.position == position


def test_date_tolerates_a_following_separator(time_parser):
    start, end = time_parser.parse_range(ny(2017, 4, 1, 8, 0), "2017-04-03 to 2017-04-04")
    assert start == ny(2017, 4, 3, 8, 0)
    assert end == ny(2017, 4, 4, 8, 0)


def test_bare_now_keeps_seconds(timespec_parser):
    now = ny(2017, 4, 1, 23, 47, 31)
    assert resolve(timespec_parser, "now", now) == now


def test_duration_is_elapsed_time_across_dst(timespec_parser):
    now = ny(2017, 3, 11, 12, 0)
    value = resolve(timespec_parser, "+1day", now)
    assert value == ny(2017, 3, 12, 13, 0)
    assert value.astimezone(tz.UTC) - now.astimezone(tz.UTC) == timedelta(hours=24)


def test_every_token_kind_is_handled(timespec_parser):
    handled = set(timespec_parser.handlers)
    assert handled | UNSUPPORTED_KINDS == set(TokenKind)
    assert not handled & UNSUPPORTED_KINDS


@pytest.mark.parametrize(
    "phrase, now, start, end",
    [
        ("6", ny(2017, 4, 1, 7, 58), ny(2017, 4, 1, 7, 58), ny(2017, 4, 1, 14, 0)),
        ("23:58 + 1 hour", DEFAULT_NOW, ny(2017, 4, 1, 23, 58), ny(2017, 4, 2, 1, 0)),
        ("noon + 5 hours", ny(2017, 4, 1, 8, 0), ny(2017, 4, 1, 12, 0), ny(2017, 4, 1, 17, 0)),
        (
            "noon tomorrow + 5 hours",
            ny(2017, 4, 1, 8, 0),
            ny(2017, 4, 2, 12, 0),
            ny(2017, 4, 2, 17, 0),
        ),
        (
            "from noon tomorrow + 5 hours",
            ny(2017, 4, 1, 8, 0),
            ny(2017, 4, 2, 12, 0),
            ny(2017, 4, 2, 17, 0),
        ),
        (
            "noon tomorrow to 5pm tomorrow",
            ny(2017, 4, 1, 8, 0),
            ny(2017, 4, 2, 12, 0),
            ny(2017, 4, 2, 17, 0),
        ),
        (
            "from5:45PM to noon tomorrow",
            ny(2017, 4, 1, 13, 30),
            ny(2017, 4, 1, 17, 45),
            ny(2017, 4, 2, 12, 0),
        ),
        (
            "from 2017-04-01 24:00 to 00:45",
            DEFAULT_NOW,
            ny(2017, 4, 2, 0, 0),
            ny(2017, 4, 2, 0, 45),
        ),
        ("from 24:00 to 00:45", DEFAULT_NOW, ny(2017, 4, 2, 0, 0), ny(2017, 4, 2, 0, 45)),
        (
            "noon tomorrow to friday 17:00",
            ny(2017, 4, 5, 13, 13),
            ny(2017, 4, 6, 12, 0),
            ny(2017, 4, 7, 17, 0),
        ),
        (
            "noon tomorrow to friday 5pm",
            ny(2017, 4, 5, 13, 13),
            ny(2017, 4, 6, 12, 0),
            ny(2017, 4, 7, 17, 0),
        ),
        (
            "tomorrow noon to friday 5pm",
            ny(2017, 4, 5, 13, 13),
            ny(2017, 4, 6, 12, 0),
            ny(2017, 4, 7, 17, 0),
        ),
        (
            "2017-04-02 to friday 5pm",
            DEFAULT_NOW,
            ny(2017, 4, 2, 23, 47),
            ny(2017, 4, 7, 17, 0),
        ),
        (
            "september 5th 11:59 until 3pm",
            DEFAULT_NOW,
            ny(2017, 9, 5, 11, 59),
            ny(2017, 9, 5, 15, 0),
        ),
        (
            "from tomorrow 8am until 3pm",
            DEFAULT_NOW,
            ny(2017, 4, 2, 8, 0),
            ny(2017, 4, 2, 15, 0),
        ),
        (
            "from 2017-04-06 8am until 3pm",
            DEFAULT_NOW,
            ny(2017, 4, 6, 8, 0),
            ny(2017, 4, 6, 15, 0),
        ),
        (
            "from tomorrow 8:00am until 3pm tomorrow",
            DEFAULT_NOW,
            ny(2017, 4, 2, 8, 0),
            ny(2017, 4, 2, 15, 0),
        ),
        ("for 15 hours", ny(2017, 4, 1, 9, 36), ny(2017, 4, 1, 9, 36), ny(2017, 4, 2, 1, 0)),
        (
            "May 2nd 9:00 for 7 hours",
            ny(2017, 4, 29, 9, 36),
            ny(2017, 5, 2, 9, 0),
            ny(2017, 5, 2, 16, 0),
        ),
        (
            "Dec 15th 7:00pm for 7 hours",
            ny(2017, 1, 29, 9, 36),
            ny(2017, 12, 15, 19, 0),
            ny(2017, 12, 16, 2, 0),
        ),
        (
            "January 5th 7:00pm for 7 hours",
            ny(2016, 12, 25, 9, 36),
            ny(2017, 1, 5, 19, 0),
            ny(2017, 1, 6, 2, 0),
        ),
        ("to 5pm", ny(2017, 4, 1, 8, 0), ny(2017, 4, 1, 8, 0), ny(2017, 4, 1, 17, 0)),
    ],
)
def test_parse_range(time_parser, phrase, now, start, end):
    assert time_parser.parse_range(now, phrase) == (start, end)


@pytest.mark.parametrize(
    "phrase, now, message",
    [
        ("from 6am until 3pm", DEFAULT_NOW, "start is in the past"),
        ("4-6-2017 8am until 3pm", DEFAULT_NOW, "invalid date format [4-6-2017]"),
        (
            "april 5st 19:00 to febrewairy 19st 7pm",
            DEFAULT_NOW,
            'unknown date/time value: "febrewairy" (text)',
        ),
        (
            "from 6am tomorrow until 3pm because i want it",
            DEFAULT_NOW,
            "extra arguments beyond timespec",
        ),
        ("October 15th 9am", DEFAULT_NOW, 'expected time, got "9"'),
        ("noon friday", ny(2017, 4, 1, 8, 0), "missing separator between start and end"),
        ("from 3pm to 2pm", ny(2017, 4, 1, 8, 0), "end before start"),
        ("plus", DEFAULT_NOW, "expect duration"),
        ("", DEFAULT_NOW, "insufficient timespec in arguments"),
        ("from", DEFAULT_NOW, "insufficient timespec in arguments"),
    ],
)
def test_parse_range_errors(time_parser, phrase, now, message):
    with pytest.raises(ParseError) as excinfo:
        time_parser.parse_range(now, phrase)
    assert str(excinfo.value) == message


def test_parse_range_reports_offending_token(time_parser):
    phrase = "april 5st 19:00 to febrewairy 19st 7pm"
    with pytest.raises(ParseError) as excinfo:
        time_parser.parse_range(DEFAULT_NOW, phrase)
    assert excinfo.value.position == 6
    assert time_parser.format_error(phrase, excinfo.value) == (
        "april 5 st 19:00 to [febrewairy] 19 st 7 pm"
    )


def test_missing_separator_points_at_token(time_parser):
    with pytest.raises(ParseError) as excinfo:
        time_parser.parse_range(ny(2017, 4, 1, 8, 0), "noon friday")
    assert time_parser.format_error("noon friday", excinfo.value) == "noon [friday]"


def test_range_errors_without_token(time_parser):
    with pytest.raises(ParseError) as excinfo:
        time_parser.parse_range(ny(2017, 4, 1, 8, 0), "from 3pm to 2pm")
    assert excinfo.value.token is None
    assert time_parser.format_error("from 3pm to 2pm", excinfo.value) is None


def test_bare_now_is_an_empty_range(time_parser):
    now = ny(2017, 4, 1, 8, 0, 12)
    assert time_parser.parse_range(now, "now") == (now, now)


def test_parse_range_accepts_word_lists_and_naive_now():
    start, end = parse_range(datetime(2017, 4, 1, 8, 0), ["noon", "+", "5", "hours"], NEW_YORK)
    assert start == ny(2017, 4, 1, 12, 0)
    assert end == ny(2017, 4, 1, 17, 0)
    assert end.utcoffset() == timedelta(hours=-4)


def test_parse_range_converts_aware_now():
    now = datetime(2017, 4, 1, 12, 0, tzinfo=tz.UTC)
    start, end = parse_range(now, "noon", NEW_YORK)
    assert start == now
    assert end == ny(2017, 4, 1, 12, 0)


@pytest.mark.parametrize(
    "phrase, expected",
    [
        ("+2 hours", ny(2017, 4, 1, 19, 0)),
        ("until 9pm", ny(2017, 4, 1, 21, 0)),
        ("to friday 10am", ny(2017, 4, 7, 10, 0)),
        ("for 1 w", ny(2017, 4, 8, 17, 0)),
    ],
)
def test_parse_duration(time_parser, phrase, expected):
    assert time_parser.parse_duration(ny(2017, 4, 1, 17, 0), phrase) == expected


def test_parse_duration_rejects_the_past(time_parser):
    with pytest.raises(ParseError) as excinfo:
        time_parser.parse_duration(ny(2017, 4, 1, 17, 0), "3pm")
    assert str(excinfo.value) == "start is in the past"
