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
保留词表

Whole-word lookups applied by the lexer when a text token closes.
"""

from .core.token import TokenKind

# Day of week, Sunday = 0
WEEKDAYS = {
    "sunday": 0,
    "sun": 0,
    "monday": 1,
    "mon": 1,
    "tuesday": 2,
    "tue": 2,
    "tues": 2,
    "wednesday": 3,
    "wed": 3,
    "thursday": 4,
    "thu": 4,
    "thur": 4,
    "thurs": 4,
    "friday": 5,
    "fri": 5,
    "saturday": 6,
    "sat": 6,
}

MONTHS = {
    "january": 1,
    "jan": 1,
    "february": 2,
    "feb": 2,
    "march": 3,
    "mar": 3,
    "april": 4,
    "apr": 4,
    "may": 5,
    "june": 6,
    "jun": 6,
    "july": 7,
    "jul": 7,
    "august": 8,
    "aug": 8,
    "september": 9,
    "sep": 9,
    "sept": 9,
    "october": 10,
    "oct": 10,
    "november": 11,
    "nov": 11,
    "december": 12,
    "dec": 12,
}

RESERVED_WORDS = {
    "plus": TokenKind.PLUS,
    "for": TokenKind.FOR,
    "next": TokenKind.NEXT,
    "now": TokenKind.NOW,
    "from": TokenKind.FROM,
    "to": TokenKind.TO,
    "until": TokenKind.UNTIL,
    "tomorrow": TokenKind.TOMORROW,
    "noon": TokenKind.NOON,
    "midnight": TokenKind.MIDNIGHT,
    "eod": TokenKind.END_OF_DAY,
    "am": TokenKind.AM,
    "pm": TokenKind.PM,
    "h": TokenKind.RELATIVE_HOURS,
    "hour": TokenKind.RELATIVE_HOURS,
    "hours": TokenKind.RELATIVE_HOURS,
    "d": TokenKind.RELATIVE_DAYS,
    "day": TokenKind.RELATIVE_DAYS,
    "days": TokenKind.RELATIVE_DAYS,
    "w": TokenKind.RELATIVE_WEEKS,
    "week": TokenKind.RELATIVE_WEEKS,
    "weeks": TokenKind.RELATIVE_WEEKS,
    "nd": TokenKind.ORDINAL,
    "rd": TokenKind.ORDINAL,
    "st": TokenKind.ORDINAL,
    "th": TokenKind.ORDINAL,
}
RESERVED_WORDS.update({name: TokenKind.WEEKDAY_NAME for name in WEEKDAYS})
RESERVED_WORDS.update({name: TokenKind.MONTH_NAME for name in MONTHS})

# Literal times: the token becomes TIME with a fixed clock
FIXED_TIMES = {
    TokenKind.NOON: (12, 0),
    TokenKind.MIDNIGHT: (0, 0),
    TokenKind.END_OF_DAY: (17, 0),
}


def lookup(text):
    """
    Classify a whole word.

    Args:
        text (str): lowercased word

    Returns:
        tuple: (kind, hour, minute); hour/minute are None unless the word is a
        literal time. kind is TEXT for unknown words.
    """
    kind = RESERVED_WORDS.get(text, TokenKind.TEXT)
    if kind in FIXED_TIMES:
        hour, minute = FIXED_TIMES[kind]
        return TokenKind.TIME, hour, minute
    return kind, None, None
