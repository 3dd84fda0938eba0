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
词法分析器

Turns the words of a phrase into a TokenQueue. The scan keeps one token under
construction and promotes its kind as characters arrive:

    text   --'-'-->  date
    number --':'-->  time
    number --'-'-->  date

A character the current token cannot take closes it; the closed token is
validated, classified against the reserved-word table and enqueued.
"""

import re
from typing import Iterable, List, Optional, Union

from .core.errors import ErrorKind, ParseError
from .core.token import Token, TokenKind, TokenQueue
from .parser.time_utils import check_date
from .symbol_table import lookup

ISO_DATE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


def split_words(words: Union[str, Iterable[str]]) -> List[str]:
    """Accept either a phrase or an already split argument list."""
    if isinstance(words, str):
        return words.split()
    return list(words)


class Lexer:
    """
    Character level tokenizer for time phrases.

    A Lexer instance holds the scan state of one phrase; tokenize() resets it,
    so callers that run concurrently each use their own instance.
    """

    def __init__(self) -> None:
        self.text: str = ""
        self.queue: TokenQueue = TokenQueue()
        self.count: int = 0
        # token under construction; kind None means nothing is open
        self.kind: Optional[TokenKind] = None
        self.value: str = ""

    def load(self, words: Union[str, Iterable[str]]) -> None:
        self.text = " ".join(split_words(words)).lower()
        self.queue = TokenQueue()
        self.count = 0
        self.kind = None
        self.value = ""

    def tokenize(self, words: Union[str, Iterable[str]]) -> TokenQueue:
        """
        Lex a phrase.

        Args:
            words: phrase or list of words

        Returns:
            TokenQueue: tokens in input order, positions starting at 1

        Raises:
            ParseError: malformed characters or invalid date literals
        """
        self.load(words)

        for char in self.text:
            if self._extend(char):
                continue

            closed = self._close()

            if char.isalpha():
                self._open(TokenKind.TEXT, char)
            elif char.isdecimal():
                self._open(TokenKind.NUMBER, char)
            elif char == "+":
                self._open(TokenKind.PLUS, char)
            elif char == " ":
                self._open(None, "")
            else:
                label = closed.kind.label if closed is not None else "none"
                raise ParseError(
                    f'malformed value: type {label}, val "{char}"',
                    kind=ErrorKind.INVALID_VALUE,
                )

        self._close()
        return self.queue

    def _open(self, kind: Optional[TokenKind], value: str) -> None:
        self.kind = kind
        self.value = value

    def _extend(self, char: str) -> bool:
        """Append `char` to the open token, promoting its kind when needed."""
        if self.kind is TokenKind.TEXT:
            if char.isalpha():
                self.value += char
                return True
            if char == "-":
                self.value += char
                self.kind = TokenKind.DATE
                return True
        elif self.kind is TokenKind.NUMBER:
            if char.isdecimal():
                self.value += char
                return True
            if char == ":":
                self.value += char
                self.kind = TokenKind.TIME
                return True
            if char == "-":
                self.value += char
                self.kind = TokenKind.DATE
                return True
        elif self.kind is TokenKind.DATE:
            if char.isdecimal() or char == "-":
                self.value += char
                return True
        elif self.kind is TokenKind.TIME:
            if char.isdecimal():
                self.value += char
                return True
        return False

    def _close(self) -> Optional[Token]:
        """Finish the open token and enqueue it; returns None if nothing was open."""
        kind, value = self.kind, self.value
        self._open(None, "")
        if kind is None:
            return None

        position = self.count + 1
        fields = {}

        if kind is TokenKind.TEXT:
            kind, hour, minute = lookup(value)
            if kind is TokenKind.TIME:
                fields = {"hour": hour, "minute": minute}
        elif kind is TokenKind.NUMBER:
            fields = {"num": int(value)}
        elif kind is TokenKind.TIME:
            hour, _, minute = value.partition(":")
            fields = {"hour": _to_int(hour), "minute": _to_int(minute)}
        elif kind is TokenKind.DATE:
            fields = self._date_fields(value, position)

        token = Token(text=value, kind=kind, position=position, **fields)
        self.count = position
        self.queue.push(token)
        return token

    @staticmethod
    def _date_fields(value: str, position: int) -> dict:
        # yyyy-mm-dd, iso 8601
        if not ISO_DATE.match(value):
            raise ParseError(
                f"invalid date format [{value}]",
                Token(text=value, kind=TokenKind.DATE, position=position),
                ErrorKind.INVALID_VALUE,
            )

        year, month, day = (int(part) for part in value.split("-"))
        token = Token(
            text=value, kind=TokenKind.DATE, position=position, year=year, month=month, day=day
        )
        try:
            check_date(year, month, day, token)
        except ParseError as e:
            raise ParseError(f"invalid date: [{value}] ({e})", token, ErrorKind.DATE_INVALID)

        return {"year": year, "month": month, "day": day}


def _to_int(digits: str) -> int:
    return int(digits) if digits else 0


def tokenize(words: Union[str, Iterable[str]]) -> TokenQueue:
    """Lex `words` with a fresh Lexer."""
    return Lexer().tokenize(words)
