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
"""Predicate filters evaluated by the server against a row."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable

from hbase_rpc._helpers import _to_bytes
from hbase_rpc.comparators import Comparator
from hbase_rpc.exceptions import MalformedFilter
from hbase_rpc.types import filter as filter_pb
from hbase_rpc.types.filter import CompareType

_SERVER_PACKAGE = "org.apache.hadoop.hbase.filter."

_MAX_INT32 = 2**31 - 1

Operator = filter_pb.FilterList.Operator


def _compare_type(compare_op: CompareType | int) -> CompareType:
    try:
        return CompareType(compare_op)
    except ValueError as exc:
        raise ValueError(f"Unsupported compare operator: {compare_op!r}") from exc


def _comparator_pb(comparator: Comparator):
    if not isinstance(comparator, Comparator):
        raise TypeError(f"Expected a Comparator, got {type(comparator).__name__}")
    return comparator._to_pb()


class RowFilter(ABC):
    """Basic filter to apply to cells in a row.

    These values can be combined via :class:`FilterList`.

    This class is abstract: subclasses name the server-side class they
    stand for and render their specific message.
    """

    _server_class: str

    @property
    def name(self) -> str:
        """Fully qualified name of the matching server-side class."""
        return _SERVER_PACKAGE + self._server_class

    @abstractmethod
    def _inner_pb(self) -> Any:
        """
        Returns the filter specific proto-plus message
        """
        raise NotImplementedError

    def _to_pb(self) -> filter_pb.Filter:
        """Converts the row filter to its wire form.

        :rtype: :class:`.types.Filter`
        :returns: The converted current object.
        """
        inner = self._inner_pb()
        return filter_pb.Filter(
            name=self.name, serialized_filter=type(inner).serialize(inner)
        )

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return NotImplemented
        return vars(other) == vars(self)

    def __ne__(self, other):
        return not self == other

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"{self.__class__.__name__}({args})"


class FilterList(RowFilter):
    """Combination of row filters.

    :type filters: list
    :param filters: List of :class:`RowFilter`

    :type operator: :class:`Operator`
    :param operator: ``MUST_PASS_ALL`` (logical and, the default) or
                     ``MUST_PASS_ONE`` (logical or).
    """

    _server_class = "FilterList"

    def __init__(
        self,
        filters: Iterable[RowFilter] | None = None,
        operator: Operator | int = Operator.MUST_PASS_ALL,
    ):
        self.filters = list(filters) if filters is not None else []
        self.operator = operator

    def _inner_pb(self):
        try:
            operator = Operator(self.operator)
        except ValueError as exc:
            raise ValueError(f"Unsupported operator: {self.operator!r}") from exc
        if operator == Operator.OPERATOR_UNSPECIFIED:
            raise ValueError("FilterList requires an operator")
        filters = []
        for sub_filter in self.filters:
            if not isinstance(sub_filter, RowFilter):
                raise TypeError(
                    f"Unsupported filter node: {type(sub_filter).__name__}"
                )
            filters.append(sub_filter._to_pb())
        return filter_pb.FilterList(operator=operator, filters=filters)


class _CompareFilter(RowFilter):
    """Filter that compares one part of each cell using a comparator.

    :type compare_op: :class:`CompareType`
    :param compare_op: The relational operator.

    :type comparator: :class:`~hbase_rpc.comparators.Comparator`
    :param comparator: The operand of the comparison.
    """

    _pb_class: Any

    def __init__(self, compare_op: CompareType | int, comparator: Comparator):
        self.compare_op = compare_op
        self.comparator = comparator

    def _inner_pb(self):
        compare_filter = filter_pb.CompareFilter(
            compare_op=_compare_type(self.compare_op),
            comparator=_comparator_pb(self.comparator),
        )
        return self._pb_class(compare_filter=compare_filter)


class RowKeyFilter(_CompareFilter):
    """Filters rows by comparing their row key."""

    _server_class = "RowFilter"
    _pb_class = filter_pb.RowFilter


class FamilyFilter(_CompareFilter):
    """Filters cells by comparing their family name."""

    _server_class = "FamilyFilter"
    _pb_class = filter_pb.FamilyFilter


class QualifierFilter(_CompareFilter):
    """Filters cells by comparing their column qualifier."""

    _server_class = "QualifierFilter"
    _pb_class = filter_pb.QualifierFilter


class ValueFilter(_CompareFilter):
    """Filters cells by comparing their value."""

    _server_class = "ValueFilter"
    _pb_class = filter_pb.ValueFilter


class SingleColumnValueFilter(RowFilter):
    """Passes whole rows based on the value of a single column.

    :type family: str or bytes
    :param family: Family of the tested column.

    :type qualifier: str or bytes
    :param qualifier: Qualifier of the tested column.

    :type compare_op: :class:`CompareType`
    :param compare_op: The relational operator.

    :type comparator: :class:`~hbase_rpc.comparators.Comparator`
    :param comparator: The operand of the comparison.

    :type filter_if_missing: bool
    :param filter_if_missing: If :data:`True`, rows without the column are
                              filtered out. Defaults to :data:`False`.

    :type latest_version_only: bool
    :param latest_version_only: If :data:`True` (the default), only the
                                newest version of the column is tested.
    """

    _server_class = "SingleColumnValueFilter"

    def __init__(
        self,
        family: str | bytes,
        qualifier: str | bytes,
        compare_op: CompareType | int,
        comparator: Comparator,
        filter_if_missing: bool = False,
        latest_version_only: bool = True,
    ):
        self.family = family
        self.qualifier = qualifier
        self.compare_op = compare_op
        self.comparator = comparator
        self.filter_if_missing = filter_if_missing
        self.latest_version_only = latest_version_only

    def _inner_pb(self):
        return filter_pb.SingleColumnValueFilter(
            column_family=_to_bytes(self.family, "family"),
            column_qualifier=_to_bytes(self.qualifier, "qualifier"),
            compare_op=_compare_type(self.compare_op),
            comparator=_comparator_pb(self.comparator),
            filter_if_missing=bool(self.filter_if_missing),
            latest_version_only=bool(self.latest_version_only),
        )


class PrefixFilter(RowFilter):
    """Passes rows whose key starts with ``prefix``."""

    _server_class = "PrefixFilter"

    def __init__(self, prefix: str | bytes):
        self.prefix = prefix

    def _inner_pb(self):
        return filter_pb.PrefixFilter(prefix=_to_bytes(self.prefix, "prefix"))


class ColumnPrefixFilter(RowFilter):
    """Passes cells whose qualifier starts with ``prefix``."""

    _server_class = "ColumnPrefixFilter"

    def __init__(self, prefix: str | bytes):
        self.prefix = prefix

    def _inner_pb(self):
        return filter_pb.ColumnPrefixFilter(prefix=_to_bytes(self.prefix, "prefix"))


class KeyOnlyFilter(RowFilter):
    """Strips cell values, keeping only keys.

    :type len_as_val: bool
    :param len_as_val: If :data:`True`, replace each value with its length.
    """

    _server_class = "KeyOnlyFilter"

    def __init__(self, len_as_val: bool = False):
        self.len_as_val = len_as_val

    def _inner_pb(self):
        return filter_pb.KeyOnlyFilter(len_as_val=bool(self.len_as_val))


class FirstKeyOnlyFilter(RowFilter):
    """Passes only the first cell of each row."""

    _server_class = "FirstKeyOnlyFilter"

    def _inner_pb(self):
        return filter_pb.FirstKeyOnlyFilter()


class PageFilter(RowFilter):
    """Limits the number of rows passed per region."""

    _server_class = "PageFilter"

    def __init__(self, page_size: int):
        self.page_size = page_size

    def _inner_pb(self):
        if isinstance(self.page_size, bool) or not isinstance(self.page_size, int):
            raise TypeError("page_size must be int")
        if self.page_size < 0:
            raise ValueError("page_size must be non-negative")
        return filter_pb.PageFilter(page_size=self.page_size)


class ColumnCountGetFilter(RowFilter):
    """Passes at most ``limit`` columns of a row."""

    _server_class = "ColumnCountGetFilter"

    def __init__(self, limit: int):
        self.limit = limit

    def _inner_pb(self):
        if isinstance(self.limit, bool) or not isinstance(self.limit, int):
            raise TypeError("limit must be int")
        if not 0 <= self.limit <= _MAX_INT32:
            raise ValueError(f"limit must be between 0 and {_MAX_INT32}")
        return filter_pb.ColumnCountGetFilter(limit=self.limit)


class TimestampsFilter(RowFilter):
    """Passes cells whose timestamp is one of ``timestamps``.

    :type timestamps: list
    :param timestamps: Timestamps in milliseconds.

    :type can_hint: bool
    :param can_hint: (Optional) Whether the server may seek past timestamps.
    """

    _server_class = "TimestampsFilter"

    def __init__(self, timestamps: Iterable[int], can_hint: bool | None = None):
        self.timestamps = list(timestamps)
        self.can_hint = can_hint

    def _inner_pb(self):
        for timestamp in self.timestamps:
            if isinstance(timestamp, bool) or not isinstance(timestamp, int):
                raise TypeError("timestamps must be int")
            if timestamp < 0:
                raise ValueError("timestamps must be non-negative")
        timestamps_pb = filter_pb.TimestampsFilter(timestamps=sorted(self.timestamps))
        if self.can_hint is not None:
            timestamps_pb.can_hint = bool(self.can_hint)
        return timestamps_pb


class ColumnRangeFilter(RowFilter):
    """A row filter to restrict to a range of columns.

    Both the start and end column can be included or excluded in the range.
    By default, we include them both, but this can be changed with optional
    flags.

    :type start_column: bytes
    :param start_column: The start of the range of columns. If no value is
                         used, the backend applies no lower bound.

    :type end_column: bytes
    :param end_column: The end of the range of columns. If no value is used,
                       the backend applies no upper bound.

    :type inclusive_start: bool
    :param inclusive_start: Boolean indicating if the start column should be
                            included in the range (or excluded). Defaults
                            to :data:`True` if ``start_column`` is passed and
                            no ``inclusive_start`` was given.

    :type inclusive_end: bool
    :param inclusive_end: Boolean indicating if the end column should be
                          included in the range (or excluded). Defaults
                          to :data:`True` if ``end_column`` is passed and
                          no ``inclusive_end`` was given.
    """

    _server_class = "ColumnRangeFilter"

    def __init__(
        self,
        start_column: str | bytes | None = None,
        end_column: str | bytes | None = None,
        inclusive_start: bool | None = None,
        inclusive_end: bool | None = None,
    ):
        self.start_column = start_column
        self.end_column = end_column
        self.inclusive_start = inclusive_start
        self.inclusive_end = inclusive_end

    def _inner_pb(self):
        if self.inclusive_start is not None and self.start_column is None:
            raise ValueError("inclusive_start was specified but no start_column was given.")
        if self.inclusive_end is not None and self.end_column is None:
            raise ValueError("inclusive_end was specified but no end_column was given.")
        range_pb = filter_pb.ColumnRangeFilter()
        if self.start_column is not None:
            range_pb.min_column = _to_bytes(self.start_column, "start_column")
            range_pb.min_column_inclusive = self.inclusive_start is not False
        if self.end_column is not None:
            range_pb.max_column = _to_bytes(self.end_column, "end_column")
            range_pb.max_column_inclusive = self.inclusive_end is not False
        return range_pb


def construct_filter(row_filter: RowFilter) -> filter_pb.Filter:
    """
    Encodes a predicate filter for the wire

    Args:
      - row_filter: the filter expression to encode
    Returns:
      - the encoded filter
    Raises:
      - MalformedFilter: if the filter, or any node or comparator inside it,
          can not be encoded
    """
    if not isinstance(row_filter, RowFilter):
        raise MalformedFilter(
            f"Unsupported filter node: {type(row_filter).__name__}"
        )
    try:
        return row_filter._to_pb()
    except (TypeError, ValueError, NotImplementedError) as exc:
        raise MalformedFilter(f"Failed to encode {row_filter!r}: {exc}") from exc


__all__ = (
    "RowFilter",
    "FilterList",
    "Operator",
    "RowKeyFilter",
    "FamilyFilter",
    "QualifierFilter",
    "ValueFilter",
    "SingleColumnValueFilter",
    "PrefixFilter",
    "ColumnPrefixFilter",
    "KeyOnlyFilter",
    "FirstKeyOnlyFilter",
    "PageFilter",
    "ColumnCountGetFilter",
    "TimestampsFilter",
    "ColumnRangeFilter",
    "construct_filter",
)
