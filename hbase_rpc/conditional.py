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
import logging

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Union

from hbase_rpc._helpers import MAX_TIMESTAMP, MIN_TIMESTAMP, _to_bytes, _to_timestamp
from hbase_rpc.comparators import BinaryComparator, Comparator, construct_comparator
from hbase_rpc.exceptions import (
    ConditionAlreadySet,
    ConditionSealed,
    InvalidTimeRange,
    MalformedComparator,
    MissingRowKey,
)
from hbase_rpc.row_filters import RowFilter, construct_filter
from hbase_rpc.types import client as client_pb
from hbase_rpc.types import comparator as comparator_pb
from hbase_rpc.types import filter as filter_pb
from hbase_rpc.types.filter import CompareType

if TYPE_CHECKING:
    from hbase_rpc.mutations import RowMutation


LOGGER = logging.getLogger(__name__)

SEALED_ERROR = "Cannot call {} on a finalized conditional mutation"


class ConditionMode(Enum):
    """What the server checks before applying the mutation."""

    COLUMN = "column"
    FILTER = "filter"
    COLUMN_AND_FILTER = "column_and_filter"


@dataclass(frozen=True)
class _ColumnCheck:
    family: bytes
    qualifier: bytes
    compare_op: CompareType
    comparator: comparator_pb.Comparator


@dataclass(frozen=True)
class _FilterCheck:
    filter: filter_pb.Filter


@dataclass(frozen=True)
class _CompoundCheck:
    column: _ColumnCheck
    filter: _FilterCheck


_Check = Union[_ColumnCheck, _FilterCheck, _CompoundCheck]


def _require_row_key(mutation: "RowMutation") -> bytes:
    row_key = mutation.row_key
    if not row_key:
        raise MissingRowKey("The mutation does not target a row: row_key is empty")
    return row_key


class ConditionalMutation:
    """
    A mutation applied by the server only if a condition on its row holds.

    Build instances with ``from_column_comparison``, ``if_equals``,
    ``if_absent`` or ``from_filter``. The condition can then be narrowed to
    a time window with ``set_time_range``, and a column condition can be
    combined with a predicate filter through ``attach_filter``. ``to_pb``
    renders the request and seals the instance against further changes.

    Conditional mutations are never batched, and never carry their cells in
    a cellblock: see ``cell_blocks_enabled``.

    Instances are not thread safe. The underlying mutation is not copied.
    """

    def __init__(self, mutation: "RowMutation", check: _Check):
        """
        Use the named constructors rather than calling this directly.
        """
        self._mutation = mutation
        self._check = check
        self._time_range = (MIN_TIMESTAMP, MAX_TIMESTAMP)
        self._sealed = False
        LOGGER.debug(
            "Created %s condition for row %r", self.mode.value, mutation.row_key
        )

    @classmethod
    def from_column_comparison(
        cls,
        mutation: "RowMutation",
        family: str | bytes,
        qualifier: str | bytes,
        compare_op: CompareType | int,
        comparator: Comparator,
    ) -> "ConditionalMutation":
        """
        Applies ``mutation`` only if ``family:qualifier`` compares true

        Note: on success this marks ``mutation`` as not batchable, through
        ``mutation.set_skip_batch(True)``. The batch response can not report
        whether a condition held, so the caller's mutation object is changed
        in place.

        Args:
          - mutation: the mutation to apply. Must have a row key, which is
              also the row the condition is checked against.
          - family: the family of the checked column
          - qualifier: the qualifier of the checked column
          - compare_op: how the stored value is compared with ``comparator``
          - comparator: the operand of the comparison
        Raises:
          - MissingRowKey: if ``mutation`` has no row key
          - MalformedComparator: if ``compare_op`` or ``comparator`` can not
              be encoded
        """
        _require_row_key(mutation)
        family = _to_bytes(family, "family")
        qualifier = _to_bytes(qualifier, "qualifier")
        if not family:
            raise ValueError("family must not be empty")
        try:
            compare_op = CompareType(compare_op)
        except ValueError as exc:
            raise MalformedComparator(
                f"Unsupported compare operator: {compare_op!r}"
            ) from exc
        check = _ColumnCheck(
            family=family,
            qualifier=qualifier,
            compare_op=compare_op,
            comparator=construct_comparator(comparator),
        )
        mutation.set_skip_batch(True)
        return cls(mutation, check)

    @classmethod
    def if_equals(
        cls,
        mutation: "RowMutation",
        family: str | bytes,
        qualifier: str | bytes,
        value: bytes | str | None,
    ) -> "ConditionalMutation":
        """
        Applies ``mutation`` only if ``family:qualifier`` holds ``value``

        ``None`` is treated like ``b""``: the stored value must be exactly
        empty. Use ``if_absent`` to require that the column does not exist.
        """
        return cls.from_column_comparison(
            mutation,
            family,
            qualifier,
            CompareType.EQUAL,
            BinaryComparator(b"" if value is None else value),
        )

    @classmethod
    def if_absent(
        cls,
        mutation: "RowMutation",
        family: str | bytes,
        qualifier: str | bytes,
    ) -> "ConditionalMutation":
        """
        Applies ``mutation`` only if ``family:qualifier`` does not exist

        The check is sent as an equality with the "no value" comparator,
        whose operand is left unset on the wire.
        """
        return cls.from_column_comparison(
            mutation, family, qualifier, CompareType.EQUAL, BinaryComparator(None)
        )

    @classmethod
    def from_filter(
        cls, mutation: "RowMutation", predicate: RowFilter
    ) -> "ConditionalMutation":
        """
        Applies ``mutation`` only if ``predicate`` matches its row

        Like ``from_column_comparison``, this marks ``mutation`` as not
        batchable on success.

        Raises:
          - MissingRowKey: if ``mutation`` has no row key
          - MalformedFilter: if ``predicate`` can not be encoded
        """
        _require_row_key(mutation)
        check = _FilterCheck(filter=construct_filter(predicate))
        mutation.set_skip_batch(True)
        return cls(mutation, check)

    @property
    def mutation(self) -> "RowMutation":
        return self._mutation

    @property
    def mode(self) -> ConditionMode:
        if isinstance(self._check, _CompoundCheck):
            return ConditionMode.COLUMN_AND_FILTER
        if isinstance(self._check, _FilterCheck):
            return ConditionMode.FILTER
        return ConditionMode.COLUMN

    def _column_check(self) -> _ColumnCheck | None:
        if isinstance(self._check, _CompoundCheck):
            return self._check.column
        if isinstance(self._check, _ColumnCheck):
            return self._check
        return None

    def _filter_check(self) -> _FilterCheck | None:
        if isinstance(self._check, _CompoundCheck):
            return self._check.filter
        if isinstance(self._check, _FilterCheck):
            return self._check
        return None

    @property
    def family(self) -> bytes | None:
        column = self._column_check()
        return column.family if column else None

    @property
    def qualifier(self) -> bytes | None:
        column = self._column_check()
        return column.qualifier if column else None

    @property
    def compare_op(self) -> CompareType | None:
        column = self._column_check()
        return column.compare_op if column else None

    @property
    def has_filter(self) -> bool:
        return self._filter_check() is not None

    @property
    def time_range(self) -> tuple[int, int]:
        """The inclusive (from, to) window of cell timestamps, in milliseconds."""
        return self._time_range

    @property
    def sealed(self) -> bool:
        """True once ``to_pb`` has been called."""
        return self._sealed

    def _check_not_sealed(self, operation: str) -> None:
        if self._sealed:
            raise ConditionSealed(SEALED_ERROR.format(operation))

    def set_time_range(
        self,
        from_: int | datetime.datetime,
        to: int | datetime.datetime,
    ) -> None:
        """
        Restricts the condition to cell versions in [from_, to]

        Calling this again replaces the previous window.

        Args:
          - from_: inclusive lower bound, in milliseconds or as a datetime
          - to: inclusive upper bound, in milliseconds or as a datetime
        Raises:
          - InvalidTimeRange: if ``from_`` is after ``to``, or either bound
              is not a valid timestamp
          - ConditionSealed: if the request was already finalized
        """
        try:
            from_ms = _to_timestamp(from_, "from_")
            to_ms = _to_timestamp(to, "to")
        except (TypeError, ValueError) as exc:
            raise InvalidTimeRange(from_, to, str(exc)) from exc
        if from_ms > to_ms:
            raise InvalidTimeRange(from_, to, "from_ is after to")
        self._check_not_sealed("set_time_range")
        self._time_range = (from_ms, to_ms)

    def attach_filter(self, predicate: RowFilter) -> None:
        """
        Adds a predicate filter alongside the column check

        The column check is kept: the server applies the mutation only if
        both the column comparison and the filter match.

        Raises:
          - ConditionAlreadySet: if the condition already has a filter
          - ConditionSealed: if the request was already finalized
          - MalformedFilter: if ``predicate`` can not be encoded
        """
        if self.has_filter:
            raise ConditionAlreadySet("A filter has already been set")
        self._check_not_sealed("attach_filter")
        filter_check = _FilterCheck(filter=construct_filter(predicate))
        self._check = _CompoundCheck(column=self._check, filter=filter_check)
        LOGGER.debug("Attached filter %s", filter_check.filter.name)

    def cell_blocks_enabled(self) -> bool:
        """Conditional mutations must not carry their cells in a cellblock."""
        return False

    def _condition_pb(self, row_key: bytes) -> client_pb.Condition:
        from_, to = self._time_range
        condition = client_pb.Condition(
            row=row_key,
            time_range=client_pb.TimeRange(from_=from_, to=to),
        )
        column = self._column_check()
        if column is not None:
            condition.family = column.family
            condition.qualifier = column.qualifier
            condition.compare_type = column.compare_op
            condition.comparator = column.comparator
        filter_check = self._filter_check()
        if filter_check is not None:
            condition.filter = filter_check.filter
        return condition

    def to_pb(self) -> client_pb.MutateRequest:
        """
        Renders the conditional mutation as a MutateRequest

        Seals the instance: later calls return an equal message, and
        ``set_time_range`` / ``attach_filter`` raise ConditionSealed.

        Raises:
          - MissingRowKey: if the mutation has no row key
        """
        row_key = _require_row_key(self._mutation)
        request = self._mutation.to_pb(cell_blocks=False)
        request.condition = self._condition_pb(row_key)
        if not self._sealed:
            self._sealed = True
            LOGGER.debug(
                "Finalized %s condition for row %r", self.mode.value, row_key
            )
        return request

    def __repr__(self) -> str:
        return (
            f"ConditionalMutation(mutation={self._mutation!r}, "
            f"mode={self.mode.value}, time_range={self._time_range}, "
            f"sealed={self._sealed})"
        )
