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

import proto  # type: ignore


__protobuf__ = proto.module(
    package="hbase.pb",
    manifest={
        "Comparator",
        "ByteArrayComparable",
        "BinaryComparator",
        "LongComparator",
        "BinaryPrefixComparator",
        "BitComparator",
        "NullComparator",
        "RegexStringComparator",
        "SubstringComparator",
    },
)


class Comparator(proto.Message):
    r"""A comparator as sent on the wire: the server-side class name and
    the serialized class-specific message.

    Attributes:
        name (str):
            Fully qualified server class name of the comparator.
        serialized_comparator (bytes):
            The serialized comparator specific message.
    """

    name: str = proto.Field(
        proto.STRING,
        number=1,
        optional=True,
    )
    serialized_comparator: bytes = proto.Field(
        proto.BYTES,
        number=2,
        optional=True,
    )


class ByteArrayComparable(proto.Message):
    r"""The operand of byte oriented comparators.

    Attributes:
        value (bytes):
            The operand. Left unset to express "no value".
    """

    value: bytes = proto.Field(
        proto.BYTES,
        number=1,
        optional=True,
    )


class BinaryComparator(proto.Message):
    r"""Lexicographic comparison against ``comparable``."""

    comparable: "ByteArrayComparable" = proto.Field(
        proto.MESSAGE,
        number=1,
        message="ByteArrayComparable",
    )


class LongComparator(proto.Message):
    r"""Numeric comparison against an 8-byte big-endian operand."""

    comparable: "ByteArrayComparable" = proto.Field(
        proto.MESSAGE,
        number=1,
        message="ByteArrayComparable",
    )


class BinaryPrefixComparator(proto.Message):
    r"""Comparison against a prefix of the stored value."""

    comparable: "ByteArrayComparable" = proto.Field(
        proto.MESSAGE,
        number=1,
        message="ByteArrayComparable",
    )


class BitComparator(proto.Message):
    r"""Bitwise comparison of the stored value and ``comparable``.

    Attributes:
        comparable (ByteArrayComparable):
            The operand.
        bitwise_op (BitComparator.BitwiseOp):
            The bitwise operator to apply.
    """

    class BitwiseOp(proto.Enum):
        r"""Bitwise operators understood by the server."""
        BITWISE_OP_UNSPECIFIED = 0
        AND = 1
        OR = 2
        XOR = 3

    comparable: "ByteArrayComparable" = proto.Field(
        proto.MESSAGE,
        number=1,
        message="ByteArrayComparable",
    )
    bitwise_op: BitwiseOp = proto.Field(
        proto.ENUM,
        number=2,
        enum=BitwiseOp,
        optional=True,
    )


class NullComparator(proto.Message):
    r"""Matches only null (missing) values."""


class RegexStringComparator(proto.Message):
    r"""Regular expression match against the stored value.

    Attributes:
        pattern (str):
            The regular expression.
        pattern_flags (int):
            Java ``Pattern`` flags.
        charset (str):
            Charset used to decode the stored value.
        engine (str):
            Optional regex engine name.
    """

    pattern: str = proto.Field(
        proto.STRING,
        number=1,
        optional=True,
    )
    pattern_flags: int = proto.Field(
        proto.INT32,
        number=2,
        optional=True,
    )
    charset: str = proto.Field(
        proto.STRING,
        number=3,
        optional=True,
    )
    engine: str = proto.Field(
        proto.STRING,
        number=4,
        optional=True,
    )


class SubstringComparator(proto.Message):
    r"""Case insensitive substring match against the stored value."""

    substr: str = proto.Field(
        proto.STRING,
        number=1,
        optional=True,
    )


__all__ = tuple(sorted(__protobuf__.manifest))
