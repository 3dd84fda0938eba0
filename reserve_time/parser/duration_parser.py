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

from datetime import timedelta

from ..core.errors import ErrorKind, ParseError
from ..core.token import DURATION_UNITS, Token, TokenKind
from .base_parser import BaseParser

HOURS_PER_UNIT = {
    TokenKind.RELATIVE_HOURS: 1,
    TokenKind.RELATIVE_DAYS: 24,
    TokenKind.RELATIVE_WEEKS: 24 * 7,
}


class DurationParser(BaseParser):
    """
    English duration parser

    Handles the tail of plus/for expressions:
    - + 1 hour
    - plus 5 days
    - for 2 w
    - +3            (unit defaults to hours)
    """

    def parse(self, tokens, now, anchor):
        """
        Resolve ``<plus|for> <number> [unit]`` against the anchor.

        The leading plus/for token has already been consumed by the caller.
        """
        duration = self.parse_duration(tokens)
        return self._new_time(anchor).add_minutes(duration)

    def parse_duration(self, tokens):
        """
        Read ``<number> [h|d|w]``.

        Args:
            tokens (TokenQueue): token queue

        Returns:
            timedelta: whole hours
        """
        try:
            num = tokens.get_token(TokenKind.NUMBER)
        except ParseError as e:
            if e.kind is ErrorKind.NOT_FOUND:
                raise ParseError("expect numeric value in duration", e.token, ErrorKind.INVALID_VALUE)
            raise ParseError("expect duration", kind=ErrorKind.END_OF_INPUT)

        if tokens.empty():
            unit = Token(text="hours", kind=TokenKind.RELATIVE_HOURS, position=0)
        else:
            unit = tokens.pop()

        if unit.kind not in DURATION_UNITS:
            raise ParseError(
                f"invalid duration qualifier: {unit.text}", unit, ErrorKind.INVALID_VALUE
            )

        hours = HOURS_PER_UNIT[unit.kind] * num.num
        try:
            duration = timedelta(hours=hours)
        except OverflowError:
            raise ParseError(f"duration out of range: {num.text}", num, ErrorKind.INVALID_VALUE)

        self.logger.debug(f"duration: {num.text} {unit.text} -> {duration}")
        return duration
