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

from datetime import datetime, timedelta

from dateutil import tz

from ..core.errors import ErrorKind, ParseError

MINUTE = timedelta(minutes=1)
HALF_HOUR = timedelta(minutes=30)
ROUND_UP_SLACK = timedelta(minutes=14)

EPOCH = datetime(1970, 1, 1, tzinfo=tz.UTC)

# months with 31 days
MONTHS_31 = {1, 3, 5, 7, 8, 10, 12}


def is_leap_year(year):
    """Gregorian leap year rule."""
    if year % 4 == 0:
        if year % 100 == 0:
            return year % 400 == 0
        return True
    return False


def days_in_month(year, month):
    if month == 2:
        return 29 if is_leap_year(year) else 28
    if month in MONTHS_31:
        return 31
    return 30


def check_date(year, month, day, token=None):
    """
    Validate a calendar date.

    Args:
        year (int): year
        month (int): month, 1-12
        day (int): day of month
        token (Token, optional): token reported with the error

    Raises:
        ParseError: DATE_INVALID describing the first failed check
    """
    if month == 0:
        raise ParseError("month is zero", token, ErrorKind.DATE_INVALID)
    if month > 12:
        raise ParseError("month too large", token, ErrorKind.DATE_INVALID)
    if day == 0:
        raise ParseError("day is zero", token, ErrorKind.DATE_INVALID)
    if day > days_in_month(year, month):
        raise ParseError("day too large", token, ErrorKind.DATE_INVALID)


def date_valid(year, month, day):
    try:
        check_date(year, month, day)
    except ParseError:
        return False
    return True


def localize(value, tzinfo):
    """Naive datetimes are wall time in `tzinfo`; aware ones are converted."""
    if value.tzinfo is None:
        return tz.resolve_imaginary(value.replace(tzinfo=tzinfo))
    return value.astimezone(tzinfo)


def elapsed(later, earlier):
    """Absolute time between two aware datetimes, independent of their zones."""
    return later.astimezone(tz.UTC) - earlier.astimezone(tz.UTC)


def is_before(value, other):
    return elapsed(value, other) < timedelta(0)


def add_elapsed(value, delta):
    """Add an absolute duration; the wall clock may move by more or less across DST."""
    return (value.astimezone(tz.UTC) + delta).astimezone(value.tzinfo)


def round_time(value, step):
    """
    Round to the nearest multiple of `step` since the Unix epoch.

    Halfway values round up.
    """
    utc = value.astimezone(tz.UTC)
    remainder = (utc - EPOCH) % step
    if remainder + remainder < step:
        utc = utc - remainder
    else:
        utc = utc + (step - remainder)
    return utc.astimezone(value.tzinfo)


def round_up(value):
    """Ceiling to the half hour: any minute past :00 or :30 moves up."""
    return round_time(add_elapsed(value, ROUND_UP_SLACK), HALF_HOUR)
