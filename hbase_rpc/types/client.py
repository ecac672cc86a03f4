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
from hbase_rpc.types import filter as filter_types


__protobuf__ = proto.module(
    package="hbase.pb",
    manifest={
        "TimeRange",
        "NameBytesPair",
        "RegionSpecifier",
        "Condition",
        "MutationProto",
        "MutateRequest",
    },
)


class TimeRange(proto.Message):
    r"""An inclusive range of cell timestamps, in milliseconds.

    Attributes:
        from_ (int):
            Lower bound.
        to (int):
            Upper bound.
    """

    from_: int = proto.Field(
        proto.UINT64,
        number=1,
        optional=True,
    )
    to: int = proto.Field(
        proto.UINT64,
        number=2,
        optional=True,
    )


class NameBytesPair(proto.Message):
    name: str = proto.Field(
        proto.STRING,
        number=1,
        optional=True,
    )
    value: bytes = proto.Field(
        proto.BYTES,
        number=2,
        optional=True,
    )


class RegionSpecifier(proto.Message):
    r"""Identifies the region a request is routed to.

    Attributes:
        type_ (RegionSpecifier.RegionSpecifierType):
            How ``value`` is to be interpreted.
        value (bytes):
            The region name.
    """

    class RegionSpecifierType(proto.Enum):
        REGION_SPECIFIER_TYPE_UNSPECIFIED = 0
        REGION_NAME = 1
        ENCODED_REGION_NAME = 2

    type_: RegionSpecifierType = proto.Field(
        proto.ENUM,
        number=1,
        enum=RegionSpecifierType,
        optional=True,
    )
    value: bytes = proto.Field(
        proto.BYTES,
        number=2,
        optional=True,
    )


class Condition(proto.Message):
    r"""The check evaluated by the server before applying a mutation.

    Either the column check (``family``, ``qualifier``, ``compare_type``,
    ``comparator``), the ``filter``, or both are set.

    Attributes:
        row (bytes):
            The row the condition is evaluated against.
        family (bytes):
            Family of the checked column.
        qualifier (bytes):
            Qualifier of the checked column.
        compare_type (CompareType):
            Operator applied to the checked cell value.
        comparator (Comparator):
            Operand of the column check.
        time_range (TimeRange):
            Cell versions considered by the check.
        filter (Filter):
            Predicate evaluated against the row.
    """

    row: bytes = proto.Field(
        proto.BYTES,
        number=1,
        optional=True,
    )
    family: bytes = proto.Field(
        proto.BYTES,
        number=2,
        optional=True,
    )
    qualifier: bytes = proto.Field(
        proto.BYTES,
        number=3,
        optional=True,
    )
    compare_type: filter_types.CompareType = proto.Field(
        proto.ENUM,
        number=4,
        enum=filter_types.CompareType,
        optional=True,
    )
    comparator: comparator_types.Comparator = proto.Field(
        proto.MESSAGE,
        number=5,
        message=comparator_types.Comparator,
    )
    time_range: "TimeRange" = proto.Field(
        proto.MESSAGE,
        number=6,
        message="TimeRange",
    )
    filter: filter_types.Filter = proto.Field(
        proto.MESSAGE,
        number=7,
        message=filter_types.Filter,
    )


class MutationProto(proto.Message):
    r"""A single row mutation.

    Attributes:
        row (bytes):
            The mutated row.
        mutate_type (MutationProto.MutationType):
            The kind of mutation.
        column_value (MutableSequence[MutationProto.ColumnValue]):
            Cells carried inline. Empty when the cells travel in a
            cellblock.
        timestamp (int):
            Timestamp applied to cells without one of their own.
        attribute (MutableSequence[NameBytesPair]):
            Request attributes, such as the TTL.
        durability (MutationProto.Durability):
            Write-ahead log behaviour.
        time_range (TimeRange):
            Only used by increments and appends.
        associated_cell_count (int):
            Number of cells carried in the cellblock.
    """

    class Durability(proto.Enum):
        USE_DEFAULT = 0
        SKIP_WAL = 1
        ASYNC_WAL = 2
        SYNC_WAL = 3
        FSYNC_WAL = 4

    class MutationType(proto.Enum):
        APPEND = 0
        INCREMENT = 1
        PUT = 2
        DELETE = 3

    class DeleteType(proto.Enum):
        DELETE_ONE_VERSION = 0
        DELETE_MULTIPLE_VERSIONS = 1
        DELETE_FAMILY = 2
        DELETE_FAMILY_VERSION = 3

    class ColumnValue(proto.Message):
        class QualifierValue(proto.Message):
            qualifier: bytes = proto.Field(
                proto.BYTES,
                number=1,
                optional=True,
            )
            value: bytes = proto.Field(
                proto.BYTES,
                number=2,
                optional=True,
            )
            timestamp: int = proto.Field(
                proto.UINT64,
                number=3,
                optional=True,
            )
            delete_type: "MutationProto.DeleteType" = proto.Field(
                proto.ENUM,
                number=4,
                enum="MutationProto.DeleteType",
                optional=True,
            )

        family: bytes = proto.Field(
            proto.BYTES,
            number=1,
            optional=True,
        )
        qualifier_value: MutableSequence[
            "MutationProto.ColumnValue.QualifierValue"
        ] = proto.RepeatedField(
            proto.MESSAGE,
            number=2,
            message="MutationProto.ColumnValue.QualifierValue",
        )

    row: bytes = proto.Field(
        proto.BYTES,
        number=1,
        optional=True,
    )
    mutate_type: MutationType = proto.Field(
        proto.ENUM,
        number=2,
        enum=MutationType,
        optional=True,
    )
    column_value: MutableSequence[ColumnValue] = proto.RepeatedField(
        proto.MESSAGE,
        number=3,
        message=ColumnValue,
    )
    timestamp: int = proto.Field(
        proto.UINT64,
        number=4,
        optional=True,
    )
    attribute: MutableSequence["NameBytesPair"] = proto.RepeatedField(
        proto.MESSAGE,
        number=5,
        message="NameBytesPair",
    )
    durability: Durability = proto.Field(
        proto.ENUM,
        number=6,
        enum=Durability,
        optional=True,
    )
    time_range: "TimeRange" = proto.Field(
        proto.MESSAGE,
        number=7,
        message="TimeRange",
    )
    associated_cell_count: int = proto.Field(
        proto.INT32,
        number=8,
        optional=True,
    )


class MutateRequest(proto.Message):
    r"""Request message for the ``Mutate`` RPC.

    Attributes:
        region (RegionSpecifier):
            The region hosting ``mutation.row``.
        mutation (MutationProto):
            The mutation to apply.
        condition (Condition):
            When set, the mutation is only applied if the condition holds.
    """

    region: "RegionSpecifier" = proto.Field(
        proto.MESSAGE,
        number=1,
        message="RegionSpecifier",
    )
    mutation: "MutationProto" = proto.Field(
        proto.MESSAGE,
        number=2,
        message="MutationProto",
    )
    condition: "Condition" = proto.Field(
        proto.MESSAGE,
        number=3,
        message="Condition",
    )


__all__ = tuple(sorted(__protobuf__.manifest))
