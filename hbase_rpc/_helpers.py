# Copyright 2024 Google LLC
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
#
from __future__ import annotations

import datetime
import struct

from google.api_core.datetime_helpers import to_milliseconds

"""
Helper functions used in various places in the library.
"""

# timestamps are milliseconds since the epoch. The server reads the unsigned
# wire value as a signed 64-bit long, so the upper bound is the largest long.
MIN_TIMESTAMP = 0
MAX_TIMESTAMP = 2**63 - 1

_PACK_I64 = struct.Struct(">q").pack


def _to_bytes(value: str | bytes, name: str = "value") -> bytes:
    """
    Converts a str or bytes value to bytes

    str values are encoded as utf-8.

    Raises:
      - TypeError: if value is neither str nor bytes
    """
    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return value.encode("utf-8")
    raise TypeError(f"{name} must be str or bytes, got {type(value).__name__}")


def _to_timestamp(value: int | datetime.datetime, name: str = "timestamp") -> int:
    """
    Converts a timestamp to integer milliseconds since the epoch

    datetimes without a tzinfo are assumed to be in UTC.

    Raises:
      - TypeError: if value is not an int or datetime
      - ValueError: if the timestamp falls outside [MIN_TIMESTAMP, MAX_TIMESTAMP]
    """
    if isinstance(value, datetime.datetime):
        value = to_milliseconds(value)
    elif isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be int or datetime, got {type(value).__name__}")
    if value < MIN_TIMESTAMP or value > MAX_TIMESTAMP:
        raise ValueError(
            f"{name} must be between {MIN_TIMESTAMP} and {MAX_TIMESTAMP}, got {value}"
        )
    return value
