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

from google.api_core import exceptions as core_exceptions


class ConditionError(core_exceptions.GoogleAPICallError):
    """
    Base class for errors raised while building a conditional mutation.

    These are raised locally, before any request is sent. Retrying with the
    same inputs can never succeed.
    """


class MalformedComparator(ConditionError, core_exceptions.InvalidArgument):
    """Raised when a comparator can not be encoded for the wire."""


class MalformedFilter(ConditionError, core_exceptions.InvalidArgument):
    """Raised when a predicate filter can not be encoded for the wire."""


class InvalidTimeRange(ConditionError, core_exceptions.InvalidArgument):
    """
    Raised when a time range is not a valid inclusive window

    Args:
      - from_: the requested lower bound
      - to: the requested upper bound
      - reason: optional description of the violated constraint
    """

    def __init__(self, from_, to, reason: str | None = None):
        message = f"Invalid time range: ({from_!r}, {to!r})"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.from_ = from_
        self.to = to


class MissingRowKey(ConditionError, core_exceptions.InvalidArgument):
    """Raised when the underlying mutation does not target a row."""


class ConditionAlreadySet(ConditionError, core_exceptions.FailedPrecondition):
    """Raised when a predicate filter is attached to a condition that has one."""


class ConditionSealed(ConditionError, core_exceptions.FailedPrecondition):
    """
    Raised when a finalized conditional mutation is modified.

    Once a request has been rendered it may be handed to a transport, so
    later changes would make two renderings of the same object disagree.
    """
