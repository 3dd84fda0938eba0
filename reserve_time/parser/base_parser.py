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

from abc import ABC, abstractmethod

from dateutil import tz

from ..core.logger import get_logger
from .time_builder import TimeBuilder


class BaseParser(ABC):
    """
    Base class for the grammar parsers

    Every parser resolves against a zone fixed at construction time and reads
    its input from a TokenQueue.
    """

    def __init__(self, tzinfo=None):
        """
        Initialize parser

        Args:
            tzinfo (datetime.tzinfo, optional): zone absolute times are built in,
                defaults to the process local zone
        """
        self.tzinfo = tzinfo or tz.tzlocal()
        self.logger = get_logger(self.__class__.__module__)

    @abstractmethod
    def parse(self, tokens, now, anchor):
        """
        Consume tokens and resolve them against a reference time

        Args:
            tokens (TokenQueue): token queue, consumed in place
            now (datetime): wall clock at invocation
            anchor (datetime): reference instant relative expressions use

        Returns:
            TimeBuilder: resolved time
        """
        pass

    def _new_time(self, base, exact=False):
        return TimeBuilder(base, self.tzinfo, exact=exact)
