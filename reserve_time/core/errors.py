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
解析错误模型

ParseError is the single exception type raised by the lexer, the token queue
and the grammar. It carries an ErrorKind and, where one is known, the token
that caused it so that callers can point at the offending word.
"""

from enum import Enum
from typing import Iterable, Optional


class ErrorKind(Enum):
    """Closed set of failure classes."""

    # the queue ran out before a required token
    END_OF_INPUT = "end_of_input"
    # an optional alternative did not match; handled inside the grammar
    NOT_FOUND = "not_found"
    # a token was present but its value is wrong
    INVALID_VALUE = "invalid_value"
    # calendar validation failed
    DATE_INVALID = "date_invalid"


class ParseError(Exception):
    """
    Error raised while turning a phrase into absolute times.

    Attributes:
        message: human readable description
        token: offending token, or None when the failure is not tied to one
        kind: ErrorKind of the failure
    """

    def __init__(self, message: str, token=None, kind: ErrorKind = ErrorKind.INVALID_VALUE):
        super().__init__(message)
        self.message = message
        self.token = token
        self.kind = kind

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"ParseError({self.message!r}, token={self.token!r}, kind={self.kind.name})"

    @property
    def end_of_input(self) -> bool:
        return self.kind is ErrorKind.END_OF_INPUT

    @property
    def not_found(self) -> bool:
        return self.kind is ErrorKind.NOT_FOUND

    @property
    def position(self) -> Optional[int]:
        """1-based position of the offending token, if any."""
        if self.token is None:
            return None
        return self.token.position

    def highlight(self, tokens: Iterable) -> Optional[str]:
        """
        Render a token stream with the offending token in brackets.

        Args:
            tokens: tokens of the same phrase, in lexing order

        Returns:
            str: e.g. ``april 5 st 19:00 to [febrewairy]``, or None when the
            error is not tied to a token
        """
        position = self.position
        if position is None:
            return None

        words = []
        for tok in tokens:
            if tok.position == position:
                words.append(f"[{tok.text}]")
            else:
                words.append(tok.text)
        return " ".join(words)
