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
Phrase to reservation time resolution

Examples of accepted phrases:

    +1day                       plus 5 days
    2                           now + 1 hour
    15:00                       4:30pm
    noon tomorrow               friday 11:30am
    2019-02-22 7:45pm           september 2nd 11:59pm
    july 4th 11:59 2018         noon tomorrow + 5 hours
    from5:45PM to noon tomorrow for 15 hours
"""

from .core.errors import ErrorKind, ParseError
from .core.logger import get_logger
from .core.token import TokenKind
from .core.utils import get_timezone
from .lexer import Lexer
from .parser.time_utils import MINUTE, is_before, localize, round_time
from .parser.timespec_parser import TimeSpecParser

# Leading tokens that ask for an end time only
DURATION_MODE_KINDS = {TokenKind.PLUS, TokenKind.UNTIL, TokenKind.TO}

SEPARATOR_KINDS = {TokenKind.UNTIL, TokenKind.TO, TokenKind.PLUS, TokenKind.FOR}

# separators that also start the end timespec and are left in the queue
DURATION_SEPARATOR_KINDS = {TokenKind.PLUS, TokenKind.FOR}


class TimeParser:
    """Resolve reservation phrases into absolute times"""

    def __init__(self, tzinfo=None):
        """
        Initialize time parser

        Args:
            tzinfo (datetime.tzinfo, optional): zone results are expressed in;
                defaults to RESERVE_TIME_TZ or the process local zone
        """
        self.logger = get_logger(__name__)
        self.tzinfo = tzinfo or get_timezone()
        self.timespec_parser = TimeSpecParser(self.tzinfo)

    def _tokenize(self, words):
        tokens = Lexer().tokenize(words)
        self.logger.debug(f"tokens: {tokens}")
        if tokens.empty():
            raise ParseError("insufficient timespec in arguments", kind=ErrorKind.END_OF_INPUT)
        return tokens

    def parse_range(self, now, words):
        """
        Resolve a phrase into a start/end pair.

        Args:
            now (datetime): wall clock at invocation, also the default anchor
            words (str or list): phrase, or the words of it

        Returns:
            tuple: (start, end) aware datetimes. A phrase that names only one
            time, or starts with plus/until/to, yields (now, time).

        Raises:
            ParseError: the phrase cannot be resolved
        """
        now = localize(now, self.tzinfo)
        tokens = self._tokenize(words)

        lead = tokens.peek()
        while lead.kind is TokenKind.FROM:
            tokens.pop()
            if tokens.empty():
                raise ParseError(
                    "insufficient timespec in arguments", kind=ErrorKind.END_OF_INPUT
                )
            lead = tokens.peek()

        if lead.kind in (TokenKind.UNTIL, TokenKind.TO):
            tokens.pop()

        timespec = self.timespec_parser.parse(tokens, now, now).time

        if is_before(timespec, now):
            raise ParseError("start is in the past")

        if lead.kind in DURATION_MODE_KINDS or tokens.empty():
            self.logger.debug(f"range: {now} - {timespec}")
            return now, timespec

        start = timespec

        separator = tokens.peek()
        if separator.kind not in SEPARATOR_KINDS:
            raise ParseError("missing separator between start and end", separator)

        if separator.kind not in DURATION_SEPARATOR_KINDS:
            tokens.pop()

        end = self.timespec_parser.parse(tokens, now, start).time

        if not tokens.empty():
            raise ParseError("extra arguments beyond timespec", tokens.peek())

        end = round_time(end, MINUTE)

        if is_before(end, start):
            raise ParseError("end before start")

        self.logger.debug(f"range: {start} - {end}")
        return start, end

    def parse_duration(self, now, words):
        """
        Resolve a phrase into a single end time.

        Used to extend an existing reservation: pass its end as `now`.

        Args:
            now (datetime): anchor for the phrase
            words (str or list): phrase, or the words of it

        Returns:
            datetime: resolved end time

        Raises:
            ParseError: the phrase cannot be resolved
        """
        now = localize(now, self.tzinfo)
        tokens = self._tokenize(words)

        if tokens.peek().kind in (TokenKind.UNTIL, TokenKind.TO):
            tokens.pop()

        end = self.timespec_parser.parse(tokens, now, now).time

        if is_before(end, now):
            raise ParseError("start is in the past")

        self.logger.debug(f"duration end: {end}")
        return end

    @staticmethod
    def format_error(words, error):
        """
        Re-render the phrase with the offending token in brackets.

        Args:
            words (str or list): phrase that failed
            error (ParseError): error raised for it

        Returns:
            str or None: e.g. ``april 5 st 19:00 to [febrewairy]``; None when
            the error has no token or the phrase does not lex
        """
        if error.token is None:
            return None
        try:
            tokens = Lexer().tokenize(words)
        except ParseError:
            return None
        return error.highlight(tokens)


def parse_range(now, words, tzinfo=None):
    return TimeParser(tzinfo).parse_range(now, words)


def parse_duration(now, words, tzinfo=None):
    return TimeParser(tzinfo).parse_duration(now, words)
