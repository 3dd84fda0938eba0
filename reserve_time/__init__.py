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
reserve-time - natural language time ranges for resource reservations

Usage:
    from datetime import datetime
    from reserve_time import parse_range

    start, end = parse_range(datetime.now(), "noon tomorrow + 5 hours")
"""

from .core.errors import ErrorKind, ParseError
from .core.token import Token, TokenKind, TokenQueue
from .lexer import Lexer, tokenize
from .parser.time_utils import date_valid, is_leap_year
from .time_parser import TimeParser, parse_duration, parse_range

__version__ = "1.0.0"

__all__ = [
    "TimeParser",
    "parse_range",
    "parse_duration",
    "ParseError",
    "ErrorKind",
    "Token",
    "TokenKind",
    "TokenQueue",
    "Lexer",
    "tokenize",
    "is_leap_year",
    "date_valid",
]
