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

from dataclasses import dataclass
from typing import Mapping

from hbase_rpc._helpers import MAX_TIMESTAMP, _PACK_I64, _to_bytes, _to_timestamp
from hbase_rpc.types import client as client_pb

MutationType = client_pb.MutationProto.MutationType
Durability = client_pb.MutationProto.Durability
DeleteType = client_pb.MutationProto.DeleteType

# Type alias for the values accepted by RowMutation: {family: {qualifier: value}}
CellValues = Mapping[str, Mapping[str, "bytes | str | int | None"]]

TTL_ATTRIBUTE = "_ttl"

# KeyValue type codes used in cellblocks
_KEY_TYPE_PUT = 4
_KEY_TYPES_BY_DELETE_TYPE = {
    DeleteType.DELETE_ONE_VERSION: 8,
    DeleteType.DELETE_FAMILY_VERSION: 10,
    DeleteType.DELETE_MULTIPLE_VERSIONS: 12,
    DeleteType.DELETE_FAMILY: 14,
}

_MAX_ROW_LENGTH = 2**15 - 1
_MAX_FAMILY_LENGTH = 255

_KEY_VALUE_HEADER = struct.Struct(">II")
_ROW_LENGTH = struct.Struct(">H")
_CELL_LENGTH = struct.Struct(">I")
_KEY_TRAILER = struct.Struct(">qB")


@dataclass(frozen=True)
class _Cell:
    family: bytes
    qualifier: bytes | None = None
    value: bytes | None = None
    delete_type: DeleteType | None = None


class RowMutation:
    """
    A single-row write: a put, delete, append or increment.

    Instances are built with the ``put``, ``delete``, ``append`` and
    ``increment`` constructors. Values are validated when the mutation is
    created; the row key is validated when the request is rendered, so that
    wrapping requests can report a missing row in their own terms.
    """

    def __init__(
        self,
        table: str | bytes,
        row_key: str | bytes | None,
        mutate_type: MutationType,
        values: CellValues | None = None,
        *,
        timestamp: int | datetime.datetime | None = None,
        durability: Durability | int = Durability.USE_DEFAULT,
        ttl: datetime.timedelta | int | None = None,
        attributes: Mapping[str, bytes] | None = None,
        delete_one_version: bool = False,
    ):
        self._table = _to_bytes(table, "table")
        self._row_key = b"" if row_key is None else _to_bytes(row_key, "row_key")
        if len(self._row_key) > _MAX_ROW_LENGTH:
            raise ValueError(f"row_key must be at most {_MAX_ROW_LENGTH} bytes")
        self._mutate_type = MutationType(mutate_type)
        self._timestamp = None if timestamp is None else _to_timestamp(timestamp)
        try:
            self._durability = Durability(durability)
        except ValueError as exc:
            raise ValueError(f"Unknown durability: {durability!r}") from exc
        self._attributes: dict[str, bytes] = {}
        for name, value in (attributes or {}).items():
            self._attributes[name] = _to_bytes(value, f"attribute {name!r}")
        if ttl is not None:
            self._attributes[TTL_ATTRIBUTE] = _PACK_I64(self._ttl_millis(ttl))
        if delete_one_version and self._mutate_type != MutationType.DELETE:
            raise ValueError("delete_one_version only applies to deletes")
        self._cells = self._parse_values(values or {}, delete_one_version)
        self._skip_batch = False
        self._region: bytes | None = None

    @classmethod
    def put(cls, table, row_key, values: CellValues, **kwargs) -> "RowMutation":
        """Sets the given cells, replacing any value at the same timestamp."""
        return cls(table, row_key, MutationType.PUT, values, **kwargs)

    @classmethod
    def delete(
        cls, table, row_key, values: CellValues | None = None, **kwargs
    ) -> "RowMutation":
        """
        Deletes cells

        A family mapped to an empty dict deletes the whole family. No values
        deletes the whole row.
        """
        return cls(table, row_key, MutationType.DELETE, values, **kwargs)

    @classmethod
    def append(cls, table, row_key, values: CellValues, **kwargs) -> "RowMutation":
        """Appends the given bytes to the current cell values."""
        return cls(table, row_key, MutationType.APPEND, values, **kwargs)

    @classmethod
    def increment(cls, table, row_key, values: CellValues, **kwargs) -> "RowMutation":
        """Adds the given integers to the current 64-bit cell values."""
        return cls(table, row_key, MutationType.INCREMENT, values, **kwargs)

    @staticmethod
    def _ttl_millis(ttl: datetime.timedelta | int) -> int:
        if isinstance(ttl, datetime.timedelta):
            return int(ttl.total_seconds() * 1000)
        if isinstance(ttl, bool) or not isinstance(ttl, int):
            raise TypeError("ttl must be a timedelta or int milliseconds")
        return ttl

    def _parse_values(
        self, values: CellValues, delete_one_version: bool
    ) -> list[_Cell]:
        cells = []
        for family, qualifiers in values.items():
            family_bytes = _to_bytes(family, "family")
            if not 0 < len(family_bytes) <= _MAX_FAMILY_LENGTH:
                raise ValueError(
                    f"family must be between 1 and {_MAX_FAMILY_LENGTH} bytes"
                )
            if self._mutate_type == MutationType.DELETE:
                if not qualifiers:
                    cells.append(_Cell(family_bytes, delete_type=DeleteType.DELETE_FAMILY))
                    continue
                delete_type = (
                    DeleteType.DELETE_ONE_VERSION
                    if delete_one_version
                    else DeleteType.DELETE_MULTIPLE_VERSIONS
                )
                for qualifier in qualifiers:
                    cells.append(
                        _Cell(
                            family_bytes,
                            _to_bytes(qualifier, "qualifier"),
                            delete_type=delete_type,
                        )
                    )
                continue
            if not qualifiers:
                raise ValueError(f"No qualifiers given for family {family!r}")
            for qualifier, value in qualifiers.items():
                cells.append(
                    _Cell(
                        family_bytes,
                        _to_bytes(qualifier, "qualifier"),
                        self._encode_value(value),
                    )
                )
        if not cells and self._mutate_type != MutationType.DELETE:
            raise ValueError(f"{self._mutate_type.name} requires at least one cell")
        return cells

    def _encode_value(self, value) -> bytes:
        if self._mutate_type == MutationType.INCREMENT:
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError("increment amounts must be int")
            try:
                return _PACK_I64(value)
            except struct.error as exc:
                raise ValueError(f"{value} does not fit in 64 bits") from exc
        return _to_bytes(value)

    @property
    def table(self) -> bytes:
        return self._table

    @property
    def row_key(self) -> bytes:
        """The key of the mutated row. Empty if none was given."""
        return self._row_key

    @property
    def mutate_type(self) -> MutationType:
        return self._mutate_type

    @property
    def skip_batch(self) -> bool:
        """Whether the mutation must be sent on its own rather than batched."""
        return self._skip_batch

    def set_skip_batch(self, skip_batch: bool) -> None:
        self._skip_batch = skip_batch

    def set_region(self, region_name: str | bytes) -> None:
        """Records the region the mutation is routed to."""
        self._region = _to_bytes(region_name, "region_name")

    def cell_blocks_enabled(self) -> bool:
        """Plain mutations may carry their cells in a cellblock."""
        return True

    def to_pb(self, cell_blocks: bool = False) -> client_pb.MutateRequest:
        """
        Renders the mutation as a MutateRequest

        Args:
          - cell_blocks: if True, cells are left out of the message and
              only counted; the transport sends them from ``cell_block()``
        Raises:
          - ValueError: if the mutation has no row key
        """
        if not self._row_key:
            raise ValueError("row_key must not be empty")
        mutation_pb = client_pb.MutationProto(
            row=self._row_key,
            mutate_type=self._mutate_type,
            durability=self._durability,
        )
        if self._timestamp is not None:
            mutation_pb.timestamp = self._timestamp
        for name, value in self._attributes.items():
            mutation_pb.attribute.append(client_pb.NameBytesPair(name=name, value=value))
        if cell_blocks:
            mutation_pb.associated_cell_count = len(self._cells)
        else:
            mutation_pb.column_value.extend(self._column_values_pb())
        request = client_pb.MutateRequest(mutation=mutation_pb)
        if self._region is not None:
            request.region = client_pb.RegionSpecifier(
                type_=client_pb.RegionSpecifier.RegionSpecifierType.REGION_NAME,
                value=self._region,
            )
        return request

    def _column_values_pb(self) -> list[client_pb.MutationProto.ColumnValue]:
        column_values: dict[bytes, client_pb.MutationProto.ColumnValue] = {}
        for cell in self._cells:
            if cell.family not in column_values:
                column_values[cell.family] = client_pb.MutationProto.ColumnValue(
                    family=cell.family
                )
            qualifier_value = client_pb.MutationProto.ColumnValue.QualifierValue()
            if cell.qualifier is not None:
                qualifier_value.qualifier = cell.qualifier
            if cell.value is not None:
                qualifier_value.value = cell.value
            if cell.delete_type is not None:
                qualifier_value.delete_type = cell.delete_type
            if self._timestamp is not None:
                qualifier_value.timestamp = self._timestamp
            column_values[cell.family].qualifier_value.append(qualifier_value)
        return list(column_values.values())

    def cell_block(self) -> bytes:
        """
        Encodes the cells as a cellblock: length-prefixed KeyValues, in the
        order they are counted by ``to_pb(cell_blocks=True)``
        """
        timestamp = self._timestamp if self._timestamp is not None else MAX_TIMESTAMP
        encoded = []
        for cell in self._cells:
            qualifier = cell.qualifier or b""
            value = cell.value or b""
            key_type = (
                _KEY_TYPE_PUT
                if cell.delete_type is None
                else _KEY_TYPES_BY_DELETE_TYPE[cell.delete_type]
            )
            key = b"".join(
                [
                    _ROW_LENGTH.pack(len(self._row_key)),
                    self._row_key,
                    bytes([len(cell.family)]),
                    cell.family,
                    qualifier,
                    _KEY_TRAILER.pack(timestamp, key_type),
                ]
            )
            key_value = _KEY_VALUE_HEADER.pack(len(key), len(value)) + key + value
            encoded.append(_CELL_LENGTH.pack(len(key_value)) + key_value)
        return b"".join(encoded)

    def __repr__(self) -> str:
        return (
            f"RowMutation(table={self._table!r}, row_key={self._row_key!r}, "
            f"mutate_type={self._mutate_type.name}, cells={len(self._cells)})"
        )
