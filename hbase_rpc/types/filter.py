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

from typing import MutableSequence

import proto  # type: ignore

from hbase_rpc.types import comparator as comparator_types


__protobuf__ = proto.module(
    package="hbase.pb",
    manifest={
        "CompareType",
        "Filter",
        "FilterList",
        "CompareFilter",
        "RowFilter",
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
    },
)


class CompareType(proto.Enum):
    r"""Relational operators applied by comparators on the server."""
    LESS = 0
    LESS_OR_EQUAL = 1
    EQUAL = 2
    NOT_EQUAL = 3
    GREATER_OR_EQUAL = 4
    GREATER = 5
    NO_OP = 6


class Filter(proto.Message):
    r"""A filter as sent on the wire: the server-side class name and the
    serialized class-specific message.

    Attributes:
        name (str):
            Fully qualified server class name of the filter.
        serialized_filter (bytes):
            The serialized filter specific message.
    """

    name: str = proto.Field(
        proto.STRING,
        number=1,
        optional=True,
    )
    serialized_filter: bytes = proto.Field(
        proto.BYTES,
        number=2,
        optional=True,
    )


class FilterList(proto.Message):
    r"""Combination of several filters.

    Attributes:
        operator (FilterList.Operator):
            Whether all or any of ``filters`` must pass.
        filters (MutableSequence[Filter]):
            The combined filters, in evaluation order.
    """

    class Operator(proto.Enum):
        r"""How the member filters are combined."""
        OPERATOR_UNSPECIFIED = 0
        MUST_PASS_ALL = 1
        MUST_PASS_ONE = 2

    operator: Operator = proto.Field(
        proto.ENUM,
        number=1,
        enum=Operator,
        optional=True,
    )
    filters: MutableSequence["Filter"] = proto.RepeatedField(
        proto.MESSAGE,
        number=2,
        message="Filter",
    )


class CompareFilter(proto.Message):
    r"""Shared body of the row / family / qualifier / value filters."""

    compare_op: "CompareType" = proto.Field(
        proto.ENUM,
        number=1,
        enum=CompareType,
        optional=True,
    )
    comparator: comparator_types.Comparator = proto.Field(
        proto.MESSAGE,
        number=2,
        message=comparator_types.Comparator,
    )


class RowFilter(proto.Message):
    compare_filter: "CompareFilter" = proto.Field(
        proto.MESSAGE,
        number=1,
        message="CompareFilter",
    )


class FamilyFilter(proto.Message):
    compare_filter: "CompareFilter" = proto.Field(
        proto.MESSAGE,
        number=1,
        message="CompareFilter",
    )


class QualifierFilter(proto.Message):
    compare_filter: "CompareFilter" = proto.Field(
        proto.MESSAGE,
        number=1,
        message="CompareFilter",
    )


class ValueFilter(proto.Message):
    compare_filter: "CompareFilter" = proto.Field(
        proto.MESSAGE,
        number=1,
        message="CompareFilter",
    )


class SingleColumnValueFilter(proto.Message):
    r"""Passes rows whose ``column_family:column_qualifier`` cell matches.

    Attributes:
        column_family (bytes):
            Family of the checked column.
        column_qualifier (bytes):
            Qualifier of the checked column.
        compare_op (CompareType):
            Operator applied to the cell value.
        comparator (Comparator):
            Operand of the comparison.
        filter_if_missing (bool):
            Whether rows lacking the column are filtered out.
        latest_version_only (bool):
            Whether only the newest version of the cell is checked.
    """

    column_family: bytes = proto.Field(
        proto.BYTES,
        number=1,
        optional=True,
    )
    column_qualifier: bytes = proto.Field(
        proto.BYTES,
        number=2,
        optional=True,
    )
    compare_op: "CompareType" = proto.Field(
        proto.ENUM,
        number=3,
        enum=CompareType,
        optional=True,
    )
    comparator: comparator_types.Comparator = proto.Field(
        proto.MESSAGE,
        number=4,
        message=comparator_types.Comparator,
    )
    filter_if_missing: bool = proto.Field(
        proto.BOOL,
        number=5,
        optional=True,
    )
    latest_version_only: bool = proto.Field(
        proto.BOOL,
        number=6,
        optional=True,
    )


class PrefixFilter(proto.Message):
    prefix: bytes = proto.Field(
        proto.BYTES,
        number=1,
        optional=True,
    )


class ColumnPrefixFilter(proto.Message):
    prefix: bytes = proto.Field(
        proto.BYTES,
        number=1,
        optional=True,
    )


class KeyOnlyFilter(proto.Message):
    len_as_val: bool = proto.Field(
        proto.BOOL,
        number=1,
        optional=True,
    )


class FirstKeyOnlyFilter(proto.Message):
    pass


class PageFilter(proto.Message):
    page_size: int = proto.Field(
        proto.INT64,
        number=1,
        optional=True,
    )


class ColumnCountGetFilter(proto.Message):
    limit: int = proto.Field(
        proto.INT32,
        number=1,
        optional=True,
    )


class TimestampsFilter(proto.Message):
    timestamps: MutableSequence[int] = proto.RepeatedField(
        proto.INT64,
        number=1,
    )
    can_hint: bool = proto.Field(
        proto.BOOL,
        number=2,
        optional=True,
    )


class ColumnRangeFilter(proto.Message):
    min_column: bytes = proto.Field(
        proto.BYTES,
        number=1,
        optional=True,
    )
    min_column_inclusive: bool = proto.Field(
        proto.BOOL,
        number=2,
        optional=True,
    )
    max_column: bytes = proto.Field(
        proto.BYTES,
        number=3,
        optional=True,
    )
    max_column_inclusive: bool = proto.Field(
        proto.BOOL,
        number=4,
        optional=True,
    )


__all__ = tuple(sorted(__protobuf__.manifest))
