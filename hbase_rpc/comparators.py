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
"""Comparators used by conditional mutations and compare filters."""
from __future__ import annotations

import codecs
import struct

from abc import ABC, abstractmethod
from typing import Any

from hbase_rpc._helpers import _PACK_I64, _to_bytes
from hbase_rpc.exceptions import MalformedComparator
from hbase_rpc.types import comparator as comparator_pb

_SERVER_PACKAGE = "org.apache.hadoop.hbase.filter."

BitwiseOp = comparator_pb.BitComparator.BitwiseOp

_REGEX_ENGINES = ("JAVA", "JONI")


class Comparator(ABC):
    """Base class for comparators.

    A comparator describes how the server compares a stored cell value with
    an operand. Operands are validated when the comparator is encoded, so
    that a malformed comparator is reported by the call that uses it.
    """

    _server_class: str

    @property
    def name(self) -> str:
        """Fully qualified name of the matching server-side class."""
        return _SERVER_PACKAGE + self._server_class

    @abstractmethod
    def _inner_pb(self) -> Any:
        """
        Returns the comparator specific proto-plus message
        """
        raise NotImplementedError

    def _to_pb(self) -> comparator_pb.Comparator:
        """Converts the comparator to its wire form.

        :rtype: :class:`.types.Comparator`
        :returns: The converted current object.
        """
        inner = self._inner_pb()
        return comparator_pb.Comparator(
            name=self.name, serialized_comparator=type(inner).serialize(inner)
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


class _ByteArrayComparator(Comparator):
    """Comparator with a raw byte operand.

    :type value: bytes or str or None
    :param value: The operand. String values are encoded as UTF-8. ``None``
                  leaves the operand unset on the wire.
    """

    _pb_class: Any

    def __init__(self, value: bytes | str | None):
        self.value = value

    def _comparable_pb(self) -> comparator_pb.ByteArrayComparable:
        if self.value is None:
            return comparator_pb.ByteArrayComparable()
        return comparator_pb.ByteArrayComparable(value=_to_bytes(self.value))

    def _inner_pb(self):
        inner = self._pb_class(comparable=self._comparable_pb())
        # comparable is required by the server, even when it carries no value
        self._pb_class.pb(inner).comparable.SetInParent()
        return inner


class BinaryComparator(_ByteArrayComparator):
    """Lexicographic comparison with ``value``.

    ``BinaryComparator(None)`` is the "no value" sentinel: it leaves the
    operand unset, which the server matches against a missing cell.
    ``BinaryComparator(b"")`` sends a present, zero-length operand.
    """

    _server_class = "BinaryComparator"
    _pb_class = comparator_pb.BinaryComparator


class BinaryPrefixComparator(_ByteArrayComparator):
    """Compares ``value`` with the leading bytes of the stored value."""

    _server_class = "BinaryPrefixComparator"
    _pb_class = comparator_pb.BinaryPrefixComparator


class LongComparator(_ByteArrayComparator):
    """Numeric comparison of the stored value with ``value``.

    :type value: int
    :param value: The operand, packed as a signed 64-bit big-endian integer.
    """

    _server_class = "LongComparator"
    _pb_class = comparator_pb.LongComparator

    def __init__(self, value: int):
        super().__init__(value)

    def _comparable_pb(self) -> comparator_pb.ByteArrayComparable:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(
                f"LongComparator value must be int, got {type(self.value).__name__}"
            )
        try:
            packed = _PACK_I64(self.value)
        except struct.error as exc:
            raise ValueError(f"{self.value} does not fit in 64 bits") from exc
        return comparator_pb.ByteArrayComparable(value=packed)


class BitComparator(_ByteArrayComparator):
    """Applies a bitwise operator to the stored value and ``value``.

    The comparison matches when the result is non-zero.

    :type value: bytes or str
    :param value: The operand.

    :type op: :class:`BitwiseOp`
    :param op: One of ``AND``, ``OR`` or ``XOR``.
    """

    _server_class = "BitComparator"

    def __init__(self, value: bytes | str, op: BitwiseOp | int):
        super().__init__(value)
        self.op = op

    def _inner_pb(self):
        if self.value is None:
            raise ValueError("BitComparator requires a value")
        try:
            op = BitwiseOp(self.op)
        except ValueError as exc:
            raise ValueError(f"Unsupported bitwise operator: {self.op!r}") from exc
        if op == BitwiseOp.BITWISE_OP_UNSPECIFIED:
            raise ValueError("BitComparator requires a bitwise operator")
        return comparator_pb.BitComparator(
            comparable=self._comparable_pb(), bitwise_op=op
        )


class NullComparator(Comparator):
    """Matches a missing or null cell value."""

    _server_class = "NullComparator"

    def _inner_pb(self):
        return comparator_pb.NullComparator()


class RegexStringComparator(Comparator):
    """Regular expression match against the decoded stored value.

    :type pattern: str
    :param pattern: A Java regular expression.

    :type flags: int
    :param flags: Java ``Pattern`` flags.

    :type charset: str
    :param charset: Charset the server uses to decode stored values.

    :type engine: str
    :param engine: (Optional) ``"JAVA"`` or ``"JONI"``.
    """

    _server_class = "RegexStringComparator"

    def __init__(
        self,
        pattern: str,
        flags: int = 0,
        charset: str = "UTF-8",
        engine: str | None = None,
    ):
        self.pattern = pattern
        self.flags = flags
        self.charset = charset
        self.engine = engine

    def _inner_pb(self):
        if not isinstance(self.pattern, str):
            raise TypeError("pattern must be str")
        if isinstance(self.flags, bool) or not isinstance(self.flags, int):
            raise TypeError("flags must be int")
        try:
            codecs.lookup(self.charset)
        except LookupError as exc:
            raise ValueError(f"Unknown charset: {self.charset!r}") from exc
        regex_pb = comparator_pb.RegexStringComparator(
            pattern=self.pattern,
            pattern_flags=self.flags,
            charset=self.charset,
        )
        if self.engine is not None:
            if self.engine not in _REGEX_ENGINES:
                raise ValueError(f"Unknown regex engine: {self.engine!r}")
            regex_pb.engine = self.engine
        return regex_pb


class SubstringComparator(Comparator):
    """Case insensitive substring match against the stored value."""

    _server_class = "SubstringComparator"

    def __init__(self, substr: str):
        self.substr = substr

    def _inner_pb(self):
        if not isinstance(self.substr, str):
            raise TypeError("substr must be str")
        # the server lowercases both sides
        return comparator_pb.SubstringComparator(substr=self.substr.lower())


def construct_comparator(comparator: Comparator) -> comparator_pb.Comparator:
    """
    Encodes a comparator for the wire

    Args:
      - comparator: the comparator to encode
    Returns:
      - the encoded comparator
    Raises:
      - MalformedComparator: if the comparator can not be encoded
    """
    if not isinstance(comparator, Comparator):
        raise MalformedComparator(
            f"Expected a Comparator, got {type(comparator).__name__}"
        )
    try:
        return comparator._to_pb()
    except (TypeError, ValueError, NotImplementedError) as exc:
        raise MalformedComparator(f"Failed to encode {comparator!r}: {exc}") from exc
