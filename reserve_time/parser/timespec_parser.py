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

from ..core.errors import ErrorKind, ParseError
from ..core.token import TokenKind
from ..symbol_table import MONTHS, WEEKDAYS
from .base_parser import BaseParser
from .duration_parser import DurationParser
from .time_builder import TIME_AND_NUMBER, TIME_ONLY
from .time_utils import check_date, localize

# Kinds that only set up a partial result; parsing continues with the next token
CHAINING_KINDS = {TokenKind.NOW}

# Kinds that can never start a timespec
UNSUPPORTED_KINDS = {
    TokenKind.TEXT,
    TokenKind.FROM,
    TokenKind.TO,
    TokenKind.UNTIL,
    TokenKind.NOON,
    TokenKind.MIDNIGHT,
    TokenKind.END_OF_DAY,
    TokenKind.AM,
    TokenKind.PM,
    TokenKind.RELATIVE_HOURS,
    TokenKind.RELATIVE_DAYS,
    TokenKind.RELATIVE_WEEKS,
    TokenKind.ORDINAL,
}


class TimeSpecParser(BaseParser):
    """
    Resolves one primary time expression

    Grammar (one of):
        now [timespec]
        tomorrow [time]
        [next] <weekday> [time]
        <month> <day>[ordinal] <hh:mm>[am|pm] [yyyy]
        yyyy-mm-dd [time]
        <hh:mm|noon|midnight|eod>[am|pm] [tomorrow]
        <number>[am|pm] [tomorrow]
        <number>                      (last token: hours from the anchor)
        <plus|+|for> <number> [h|d|w]

    Use of 'tomorrow' after a time is relative to now rather than the anchor.
    Times without a date are relative to the anchor.
    """

    def __init__(self, tzinfo=None):
        super().__init__(tzinfo)
        self.duration_parser = DurationParser(self.tzinfo)
        self.handlers = {
            TokenKind.NOW: self._parse_now,
            TokenKind.TOMORROW: self._parse_tomorrow,
            TokenKind.WEEKDAY_NAME: self._parse_weekday,
            TokenKind.NEXT: self._parse_next_weekday,
            TokenKind.MONTH_NAME: self._parse_month,
            TokenKind.DATE: self._parse_date,
            TokenKind.TIME: self._parse_time,
            TokenKind.NUMBER: self._parse_number,
            TokenKind.FOR: self._parse_duration,
            TokenKind.PLUS: self._parse_duration,
        }

    def parse(self, tokens, now, anchor):
        """
        Pop tokens until one timespec is resolved.

        Args:
            tokens (TokenQueue): token queue, consumed in place
            now (datetime): wall clock at invocation
            anchor (datetime): reference for relative expressions

        Returns:
            TimeBuilder: resolved time

        Raises:
            ParseError: END_OF_INPUT, INVALID_VALUE or DATE_INVALID
        """
        now = localize(now, self.tzinfo)
        anchor = localize(anchor, self.tzinfo)
        partial = None

        while True:
            tok = tokens.pop()
            handler = self.handlers.get(tok.kind)
            if handler is None:
                raise ParseError(
                    f'unknown date/time value: "{tok.text}" ({tok.kind.label})',
                    tok,
                    ErrorKind.INVALID_VALUE,
                )

            result = handler(tok, tokens, now, anchor, partial)

            if tok.kind in CHAINING_KINDS and not tokens.empty():
                partial = result
                continue

            self.logger.debug(f"timespec {tok} -> {result}")
            return result

    def _parse_now(self, tok, tokens, now, anchor, partial):
        # a bare "now" is the anchor itself, seconds included
        return self._new_time(anchor, exact=tokens.empty())

    def _parse_tomorrow(self, tok, tokens, now, anchor, partial):
        # tomorrow [<time>]
        timespec = partial if partial is not None else self._new_time(now)
        self._trailing_time(timespec, tokens)
        return timespec.tomorrow()

    def _parse_weekday(self, tok, tokens, now, anchor, partial):
        # <day> [<time>]
        return self._weekday(tok, tokens, anchor, skip_today=False)

    def _parse_next_weekday(self, tok, tokens, now, anchor, partial):
        # next <day> [<time>]
        try:
            day = tokens.get_token(TokenKind.WEEKDAY_NAME)
        except ParseError as e:
            if e.kind is ErrorKind.NOT_FOUND:
                raise ParseError(
                    f'expected day name, got "{e.token.text}"', e.token, ErrorKind.INVALID_VALUE
                )
            raise
        return self._weekday(day, tokens, anchor, skip_today=True)

    def _weekday(self, tok, tokens, anchor, skip_today):
        # Sunday = 0
        today = anchor.isoweekday() % 7
        distance = WEEKDAYS[tok.text] - today
        if distance < 0:
            distance += 7
        if skip_today and distance == 0:
            distance = 7

        timespec = self._new_time(anchor).add_days(distance)
        self._trailing_time(timespec, tokens)
        return timespec

    def _parse_month(self, tok, tokens, now, anchor, partial):
        # <month> <day>[<ordinal>] <time> [<year>]
        month = MONTHS[tok.text]
        year = anchor.year
        if month < anchor.month:
            year += 1

        try:
            day = tokens.get_token(TokenKind.NUMBER)
        except ParseError as e:
            if e.kind is ErrorKind.NOT_FOUND:
                raise ParseError(
                    f'expected day of month, got "{e.token.text}"',
                    e.token,
                    ErrorKind.INVALID_VALUE,
                )
            raise

        check_date(year, month, day.num, day)
        timespec = self._new_time(anchor).set_date(year, month, day.num)

        # consume and discard any ordinal
        tokens.accept(TokenKind.ORDINAL)

        try:
            timespec.parse_time_of_day(tokens, TIME_ONLY)
        except ParseError as e:
            if e.kind is ErrorKind.NOT_FOUND:
                raise ParseError(e.message, e.token, ErrorKind.INVALID_VALUE)
            raise

        year_tok = tokens.accept(TokenKind.NUMBER)
        if year_tok is not None:
            if len(year_tok.text) < 4:
                raise ParseError("year needs to be four digits", year_tok, ErrorKind.INVALID_VALUE)
            timespec.year(year_tok.num)

        return timespec

    def _parse_date(self, tok, tokens, now, anchor, partial):
        # <date> [<time>]
        timespec = self._new_time(anchor).set_date(tok.year, tok.month, tok.day)
        self._optional_time(timespec, tokens)
        return timespec

    def _parse_time(self, tok, tokens, now, anchor, partial):
        # <time> [<tomorrow>]
        timespec = self._new_time(anchor).set_clock(tok.hour, tok.minute)
        timespec.parse_meridiem(tokens)
        self._tomorrow_suffix(timespec, tokens, now)
        return timespec

    def _parse_number(self, tok, tokens, now, anchor, partial):
        # <number> [<am|pm>] [<tomorrow>]
        timespec = self._new_time(anchor)

        # a lone number counts hours
        if tokens.empty():
            return timespec.add_hours(tok.num)

        timespec.set_clock(tok.num, 0)
        timespec.parse_meridiem(tokens)
        self._tomorrow_suffix(timespec, tokens, now)
        return timespec

    def _parse_duration(self, tok, tokens, now, anchor, partial):
        # <plus> <duration> <relspec>
        return self.duration_parser.parse(tokens, now, anchor)

    @staticmethod
    def _optional_time(timespec, tokens):
        # a date may be followed by anything
        try:
            timespec.parse_time_of_day(tokens, TIME_AND_NUMBER)
        except ParseError as e:
            if e.kind not in (ErrorKind.NOT_FOUND, ErrorKind.END_OF_INPUT):
                raise

    @staticmethod
    def _trailing_time(timespec, tokens):
        # only the end of input may stand in for the time
        try:
            timespec.parse_time_of_day(tokens, TIME_AND_NUMBER)
        except ParseError as e:
            if e.kind is ErrorKind.NOT_FOUND:
                raise ParseError(e.message, e.token, ErrorKind.INVALID_VALUE)
            if e.kind is not ErrorKind.END_OF_INPUT:
                raise

    @staticmethod
    def _tomorrow_suffix(timespec, tokens, now):
        if tokens.accept(TokenKind.TOMORROW) is not None:
            timespec.set_date(now.year, now.month, now.day).tomorrow()
