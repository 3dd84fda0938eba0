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
工具函数模块

Environment driven configuration shared by the library, the CLI and the demo.
"""

import os
from datetime import tzinfo as TzInfo
from typing import Optional

from dateutil import tz

ENV_TIMEZONE = "RESERVE_TIME_TZ"


def get_timezone(name: Optional[str] = None) -> TzInfo:
    """
    Resolve the zone absolute times are built in.

    Args:
        name: IANA zone name such as "America/New_York". When None the
              RESERVE_TIME_TZ environment variable is used, and when that is
              unset the process local zone.

    Returns:
        tzinfo: dateutil zone

    Raises:
        ValueError: if the name is not a known zone
    """
    if name is None:
        name = os.environ.get(ENV_TIMEZONE)
    if not name:
        return tz.tzlocal()

    zone = tz.gettz(name)
    if zone is None:
        raise ValueError(f"unknown time zone: {name}")
    return zone
