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
标记与标记队列

Token is the immutable lexical unit produced by the lexer; TokenQueue is the
FIFO cursor the grammar consumes it through.
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional

from .errors import ErrorKind, ParseError


class TokenKind(Enum):
    TEXT = "text"
    NUMBER = "number"
    TIME = "time"
    DATE = "date"
    PLUS = "plus"
    NOW = "now"
    NEXT = "next"
    FROM = "from"
    TO = "to"
    UNTIL = "until"
    FOR = "for"
    WEEKDAY_NAME = "weekday_name"
    MONTH_NAME = "month_name"
    TOMORROW = "tomorrow"
    NOON = "noon"
    MIDNIGHT = "midnight"
    END_OF_DAY = "eod"
    AM = "am"
    PM = "pm"
    RELATIVE_HOURS = "relative_hours"
    RELATIVE_DAYS = "relative_days"
    RELATIVE_WEEKS = "relative_weeks"
    ORDINAL = "ordinal"

    @property
    def label(self) -> str:
        """Short name used in error messages."""
        return _LABELS.get(self, self.value)


# weekday and relative-day tokens both read as "day" in messages
_LABELS = {
    TokenKind.WEEKDAY_NAME: "day",
    TokenKind.MONTH_NAME: "month",
    TokenKind.RELATIVE_HOURS: "hour",
    TokenKind.RELATIVE_DAYS: "day",
    TokenKind.RELATIVE_WEEKS: "week",
    TokenKind.ORDINAL: "ord",
}

DURATION_UNITS = (TokenKind.RELATIVE_HOURS, TokenKind.RELATIVE_DAYS, TokenKind.RELATIVE_WEEKS)


@dataclass(frozen=True)
class Token:
    """
    One classified lexical unit.

    Only the numeric fields relevant to the kind are filled: year/month/day for
    DATE, hour/minute for TIME, num for NUMBER.
    """

    text: str
    kind: TokenKind
    position: int
    year: int = 0
    month: int = 0
    day: int = 0
    hour: int = 0
    minute: int = 0
    num: int = 0

    def __str__(self) -> str:
        return f"({self.position}) {self.text}"


class TokenQueue:
    """
    FIFO over the lexed tokens.

    peek() and pop() raise ParseError(END_OF_INPUT) on an empty queue;
    get_token() raises ParseError(NOT_FOUND) when the front token has another
    kind and leaves the queue as it was.
    """

    def __init__(self, tokens: Iterable[Token] = ()) -> None:
        self._tokens = deque(tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(list(self._tokens))

    def __repr__(self) -> str:
        return "TokenQueue([" + ", ".join(str(tok) for tok in self._tokens) + "])"

    def empty(self) -> bool:
        return not self._tokens

    def push(self, token: Token) -> None:
        self._tokens.append(token)

    def peek(self) -> Token:
        if not self._tokens:
            raise ParseError("end of input", kind=ErrorKind.END_OF_INPUT)
        return self._tokens[0]

    def pop(self) -> Token:
        if not self._tokens:
            raise ParseError("end of input", kind=ErrorKind.END_OF_INPUT)
        return self._tokens.popleft()

    def get_token(self, kind: TokenKind) -> Token:
        tok = self.peek()
        if tok.kind is not kind:
            raise ParseError("not found", token=tok, kind=ErrorKind.NOT_FOUND)
        return self._tokens.popleft()

    def accept(self, kind: TokenKind) -> Optional[Token]:
        """Pop and return the front token if it has `kind`, else None."""
        if self._tokens and self._tokens[0].kind is kind:
            return self._tokens.popleft()
        return None
