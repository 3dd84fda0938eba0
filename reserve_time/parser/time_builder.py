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
from dateutil.relativedelta import relativedelta

from ..core.errors import ErrorKind, ParseError
from ..core.token import TokenKind
from .time_utils import HALF_HOUR, add_elapsed, elapsed, localize, round_time, round_up

TIME_ONLY = True
TIME_AND_NUMBER = False


class TimeBuilder:
    """
    Mutable wrapper around one absolute time in a fixed zone.

    Field setters work on the wall clock and normalise overflow the way a
    calendar does: hour 24 is midnight of the next day, April 31 is May 1,
    month 13 is January of the following year. Seconds are always zero unless
    the builder was created with ``exact=True``.
    """

    def __init__(self, base, tzinfo=None, exact=False):
        self.tzinfo = tzinfo or tz.tzlocal()
        base = localize(base, self.tzinfo)
        if exact:
            self.time = base
        else:
            self._rebuild(base.year, base.month, base.day, base.hour, base.minute)

    def __repr__(self):
        return f"TimeBuilder({self.time.isoformat()})"

    def __str__(self):
        return str(self.time)

    def _rebuild(self, year, month, day, hour, minute):
        try:
            value = datetime(year, 1, 1) + relativedelta(
                months=month - 1, days=day - 1, hours=hour, minutes=minute
            )
        except (OverflowError, ValueError):
            raise ParseError(
                f"time out of range: {year:04d}-{month:02d}-{day:02d} {hour:02d}:{minute:02d}",
                kind=ErrorKind.INVALID_VALUE,
            )
        self.time = tz.resolve_imaginary(value.replace(tzinfo=self.tzinfo))
        return self

    def year(self, year):
        t = self.time
        return self._rebuild(year, t.month, t.day, t.hour, t.minute)

    def month(self, month):
        t = self.time
        return self._rebuild(t.year, month, t.day, t.hour, t.minute)

    def day(self, day):
        t = self.time
        return self._rebuild(t.year, t.month, day, t.hour, t.minute)

    def hour(self, hour):
        t = self.time
        return self._rebuild(t.year, t.month, t.day, hour, t.minute)

    def minute(self, minute):
        t = self.time
        return self._rebuild(t.year, t.month, t.day, t.hour, minute)

    def set_date(self, year, month, day):
        t = self.time
        return self._rebuild(year, month, day, t.hour, t.minute)

    def set_clock(self, hour, minute):
        t = self.time
        return self._rebuild(t.year, t.month, t.day, hour, minute)

    def tomorrow(self):
        return self.add_days(1)

    def add_months(self, months):
        t = self.time
        return self._rebuild(t.year, t.month + months, t.day, t.hour, t.minute)

    def add_days(self, days):
        t = self.time
        return self._rebuild(t.year, t.month, t.day + days, t.hour, t.minute)

    def add_minutes(self, duration):
        """
        Add a duration and land on a half hour.

        The sum is rounded to the nearest half hour; if that would shorten the
        requested duration, the sum is rounded up instead.
        """
        try:
            ts = round_time(add_elapsed(self.time, duration), HALF_HOUR)
            if elapsed(ts, self.time) < duration:
                ts = round_up(add_elapsed(self.time, duration))
        except (OverflowError, ValueError):
            raise ParseError(f"duration out of range: {duration}", kind=ErrorKind.INVALID_VALUE)

        self.time = ts
        return self

    def add_hours(self, hours):
        """Add whole hours, then round up to the next half hour."""
        try:
            duration = timedelta(hours=hours)
            ts = add_elapsed(self.time, duration)
            if elapsed(ts, self.time) < duration:
                ts = add_elapsed(ts, duration)
            ts = round_up(ts)
        except (OverflowError, ValueError):
            raise ParseError(f"duration out of range: {hours}h", kind=ErrorKind.INVALID_VALUE)

        self.time = ts
        return self

    def parse_time_of_day(self, tokens, time_only):
        """
        Consume a clock time and an optional am/pm suffix.

        Args:
            tokens (TokenQueue): token queue
            time_only (bool): TIME_ONLY rejects a bare number as the hour

        Raises:
            ParseError: END_OF_INPUT on an empty queue, NOT_FOUND when the next
            token is not a time, INVALID_VALUE from the am/pm check
        """
        tok = tokens.peek()

        if tok.kind is TokenKind.TIME:
            tokens.pop()
            self.set_clock(tok.hour, tok.minute)
        elif not time_only and tok.kind is TokenKind.NUMBER:
            tokens.pop()
            self.set_clock(tok.num, 0)
        else:
            raise ParseError(f'expected time, got "{tok.text}"', tok, ErrorKind.NOT_FOUND)

        return self.parse_meridiem(tokens)

    def parse_meridiem(self, tokens):
        # am leaves the clock as given
        if tokens.accept(TokenKind.AM) is not None:
            return self

        tok = tokens.accept(TokenKind.PM)
        if tok is None:
            return self

        hour = self.time.hour
        if hour >= 12:
            raise ParseError(
                f"time out of range: {hour:02d}:{self.time.minute:02d}PM",
                tok,
                ErrorKind.INVALID_VALUE,
            )
        return self.hour(hour + 12)
