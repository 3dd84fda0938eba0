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
核心模块

- Token / TokenKind / TokenQueue: lexical units and the FIFO cursor over them
- ParseError / ErrorKind: positional error model
- logger: logging configuration
- utils: environment configuration
"""

from .errors import ErrorKind, ParseError
from .logger import auto_setup, get_logger, setup_logging
from .token import Token, TokenKind, TokenQueue
from .utils import get_timezone

__all__ = [
    "ErrorKind",
    "ParseError",
    "Token",
    "TokenKind",
    "TokenQueue",
    "get_logger",
    "setup_logging",
    "auto_setup",
    "get_timezone",
]
