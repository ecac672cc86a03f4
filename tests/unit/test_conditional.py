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

import datetime
import logging

import mock
import pytest

from hbase_rpc._helpers import MAX_TIMESTAMP
from hbase_rpc.comparators import BinaryComparator, LongComparator
from hbase_rpc.exceptions import (
    ConditionAlreadySet,
    ConditionSealed,
    InvalidTimeRange,
    MalformedComparator,
    MalformedFilter,
    MissingRowKey,
)
from hbase_rpc.mutations import RowMutation
from hbase_rpc.row_filters import (
    FilterList,
    PrefixFilter,
    SingleColumnValueFilter,
    ValueFilter,
    construct_filter,
)
from hbase_rpc.types import comparator as comparator_pb
from hbase_rpc.types.filter import CompareType


def _make_mutation(row_key=b"r1"):
    return RowMutation.put("table", row_key, {"cf": {"q1": b"new-value"}})


def _decode_binary(comparator):
    assert comparator.name == "org.apache.hadoop.hbase.filter.BinaryComparator"
    return comparator_pb.BinaryComparator.deserialize(comparator.serialized_comparator)


class TestConditionalMutation:
    def _target_class(self):
        from hbase_rpc.conditional import ConditionalMutation

        return ConditionalMutation

    def _make_one(self, mutation=None, family="cf", qualifier="q1", value=b"v1"):
        mutation = mutation if mutation is not None else _make_mutation()
        return self._target_class().if_equals(mutation, family, qualifier, value)

    def test_if_equals_to_pb(self):
        """
        if_equals should render the full column condition on the mutated row
        """
        mutation = _make_mutation(b"r1")
        instance = self._make_one(mutation, "cf", "q1", b"v1")
        request = instance.to_pb()
        condition = request.condition
        assert condition.row == b"r1"
        assert condition.family == b"cf"
        assert condition.qualifier == b"q1"
        assert condition.compare_type == CompareType.EQUAL
        assert _decode_binary(condition.comparator).comparable.value == b"v1"
        assert condition.time_range.from_ == 0
        assert condition.time_range.to == MAX_TIMESTAMP
        assert "filter" not in condition
        # the mutation itself is rendered unchanged
        assert request.mutation == mutation.to_pb().mutation

    @pytest.mark.parametrize(
        "compare_op",
        [
            CompareType.LESS,
            CompareType.LESS_OR_EQUAL,
            CompareType.NOT_EQUAL,
            CompareType.GREATER_OR_EQUAL,
            CompareType.GREATER,
            CompareType.NO_OP,
        ],
    )
    def test_from_column_comparison(self, compare_op):
        instance = self._target_class().from_column_comparison(
            _make_mutation(), b"fam", b"qual", compare_op, LongComparator(10)
        )
        condition = instance.to_pb().condition
        assert condition.family == b"fam"
        assert condition.qualifier == b"qual"
        assert condition.compare_type == compare_op
        assert condition.comparator == LongComparator(10)._to_pb()

    def test_from_column_comparison_int_operator(self):
        instance = self._target_class().from_column_comparison(
            _make_mutation(), "cf", "q1", 5, BinaryComparator(b"v")
        )
        assert instance.compare_op == CompareType.GREATER

    def test_empty_qualifier_allowed(self):
        instance = self._make_one(qualifier="")
        condition = instance.to_pb().condition
        assert "qualifier" in condition
        assert condition.qualifier == b""

    def test_empty_family_rejected(self):
        with pytest.raises(ValueError):
            self._make_one(family="")

    def test_marks_mutation_not_batchable(self):
        mutation = _make_mutation()
        assert mutation.skip_batch is False
        self._make_one(mutation)
        assert mutation.skip_batch is True

    def test_from_filter_marks_mutation_not_batchable(self):
        mutation = _make_mutation()
        self._target_class().from_filter(mutation, PrefixFilter(b"r"))
        assert mutation.skip_batch is True

    def test_if_equals_empty_value(self):
        """None and b"" both require an exactly empty value"""
        for value in (None, b""):
            condition = self._make_one(value=value).to_pb().condition
            comparable = _decode_binary(condition.comparator).comparable
            assert "value" in comparable
            assert comparable.value == b""

    def test_if_absent(self):
        """
        if_absent sends an EQUAL check whose operand is left unset, so it is
        distinguishable from an explicit empty value on the wire
        """
        absent = self._target_class().if_absent(_make_mutation(), "cf", "q1")
        condition = absent.to_pb().condition
        assert condition.family == b"cf"
        assert condition.qualifier == b"q1"
        assert condition.compare_type == CompareType.EQUAL
        comparable = _decode_binary(condition.comparator).comparable
        assert "value" not in comparable

        empty = self._make_one(value=b"").to_pb().condition
        assert empty.comparator != condition.comparator

    def test_if_absent_matches_no_value_comparator(self):
        absent = self._target_class().if_absent(_make_mutation(), "cf", "q1")
        explicit = self._target_class().from_column_comparison(
            _make_mutation(), "cf", "q1", CompareType.EQUAL, BinaryComparator(None)
        )
        assert absent.to_pb() == explicit.to_pb()

    def test_from_filter_to_pb(self):
        predicate = SingleColumnValueFilter(
            "cf", "q1", CompareType.EQUAL, BinaryComparator(b"v1")
        )
        instance = self._target_class().from_filter(_make_mutation(), predicate)
        instance.set_time_range(100, 200)
        condition = instance.to_pb().condition
        assert condition.row == b"r1"
        assert "family" not in condition
        assert "qualifier" not in condition
        assert "compare_type" not in condition
        assert "comparator" not in condition
        assert condition.filter == construct_filter(predicate)
        assert condition.time_range.from_ == 100
        assert condition.time_range.to == 200

    def test_mode(self):
        from hbase_rpc.conditional import ConditionMode

        column = self._make_one()
        assert column.mode == ConditionMode.COLUMN
        assert column.has_filter is False
        column.attach_filter(PrefixFilter(b"r"))
        assert column.mode == ConditionMode.COLUMN_AND_FILTER
        filtered = self._target_class().from_filter(_make_mutation(), PrefixFilter(b"r"))
        assert filtered.mode == ConditionMode.FILTER
        assert filtered.family is None
        assert filtered.qualifier is None
        assert filtered.compare_op is None

    def test_attach_filter_keeps_column_check(self):
        instance = self._make_one()
        before = instance._check
        predicate = ValueFilter(CompareType.NOT_EQUAL, BinaryComparator(b"x"))
        instance.attach_filter(predicate)
        assert instance._check.column == before
        condition = instance.to_pb().condition
        assert condition.family == b"cf"
        assert condition.qualifier == b"q1"
        assert condition.compare_type == CompareType.EQUAL
        assert _decode_binary(condition.comparator).comparable.value == b"v1"
        assert condition.filter == construct_filter(predicate)

    def test_attach_filter_on_filter_mode(self):
        instance = self._target_class().from_filter(_make_mutation(), PrefixFilter(b"r"))
        with pytest.raises(ConditionAlreadySet):
            instance.attach_filter(PrefixFilter(b"s"))

    def test_attach_filter_twice(self):
        instance = self._make_one()
        instance.attach_filter(PrefixFilter(b"r"))
        with pytest.raises(ConditionAlreadySet):
            instance.attach_filter(PrefixFilter(b"s"))
        assert instance.to_pb().condition.filter == construct_filter(PrefixFilter(b"r"))

    def test_attach_malformed_filter(self):
        """A failed attach leaves the instance in column mode"""
        from hbase_rpc.conditional import ConditionMode

        instance = self._make_one()
        with pytest.raises(MalformedFilter):
            instance.attach_filter(FilterList([PrefixFilter(b"r"), "not-a-filter"]))
        assert instance.mode == ConditionMode.COLUMN
        instance.attach_filter(PrefixFilter(b"r"))
        assert instance.mode == ConditionMode.COLUMN_AND_FILTER

    @pytest.mark.parametrize(
        "comparator",
        [
            BinaryComparator(12),
            LongComparator("not-a-number"),
            "not-a-comparator",
            None,
        ],
    )
    def test_malformed_comparator(self, comparator):
        mutation = _make_mutation()
        with pytest.raises(MalformedComparator):
            self._target_class().from_column_comparison(
                mutation, "cf", "q1", CompareType.EQUAL, comparator
            )
        assert mutation.skip_batch is False

    def test_malformed_compare_operator(self):
        with pytest.raises(MalformedComparator) as e:
            self._target_class().from_column_comparison(
                _make_mutation(), "cf", "q1", 42, BinaryComparator(b"v")
            )
        assert isinstance(e.value.__cause__, ValueError)

    def test_malformed_comparator_cause(self):
        with pytest.raises(MalformedComparator) as e:
            self._make_one(value=12)
        assert isinstance(e.value.__cause__, TypeError)

    @pytest.mark.parametrize(
        "predicate",
        [
            object(),
            FilterList([PrefixFilter(b"r"), 12]),
            ValueFilter(CompareType.EQUAL, "not-a-comparator"),
            ValueFilter(42, BinaryComparator(b"v")),
        ],
    )
    def test_malformed_filter(self, predicate):
        mutation = _make_mutation()
        with pytest.raises(MalformedFilter):
            self._target_class().from_filter(mutation, predicate)
        assert mutation.skip_batch is False

    @pytest.mark.parametrize("row_key", [b"", "", None])
    def test_missing_row_key(self, row_key):
        mutation = _make_mutation(row_key)
        with pytest.raises(MissingRowKey):
            self._make_one(mutation)
        with pytest.raises(MissingRowKey):
            self._target_class().from_filter(mutation, PrefixFilter(b"r"))
        assert mutation.skip_batch is False

    def test_missing_row_key_on_to_pb(self):
        """Row key is checked again when the request is rendered"""
        mutation = mock.Mock()
        mutation.row_key = b"r1"
        instance = self._make_one(mutation)
        mutation.set_skip_batch.assert_called_once_with(True)
        mutation.row_key = b""
        with pytest.raises(MissingRowKey):
            instance.to_pb()
        assert mutation.to_pb.call_count == 0

    def test_to_pb_renders_without_cellblocks(self):
        mutation = mock.Mock()
        mutation.row_key = b"r1"
        mutation.to_pb.return_value = RowMutation.put(
            "table", b"r1", {"cf": {"q": b"v"}}
        ).to_pb()
        instance = self._make_one(mutation)
        request = instance.to_pb()
        mutation.to_pb.assert_called_once_with(cell_blocks=False)
        assert len(request.mutation.column_value) == 1
        assert request.condition.row == b"r1"

    def test_cell_blocks_enabled(self):
        instance = self._make_one()
        assert instance.cell_blocks_enabled() is False
        assert instance.mutation.cell_blocks_enabled() is True

    def test_default_time_range(self):
        instance = self._make_one()
        assert instance.time_range == (0, MAX_TIMESTAMP)

    def test_set_time_range(self):
        instance = self._make_one()
        instance.set_time_range(100, 200)
        assert instance.time_range == (100, 200)
        instance.set_time_range(5, 5)
        assert instance.time_range == (5, 5)
        time_range = instance.to_pb().condition.time_range
        assert time_range.from_ == 5
        assert time_range.to == 5

    def test_set_time_range_datetime(self):
        instance = self._make_one()
        start = datetime.datetime(1970, 1, 1, 0, 0, 1, tzinfo=datetime.timezone.utc)
        end = datetime.datetime(1970, 1, 1, 0, 0, 2, tzinfo=datetime.timezone.utc)
        instance.set_time_range(start, end)
        assert instance.time_range == (1000, 2000)

    @pytest.mark.parametrize(
        "from_,to",
        [
            (200, 100),
            (1, 0),
            (-1, 10),
            (0, MAX_TIMESTAMP + 1),
            ("0", 10),
            (0, 1.5),
            (True, 10),
        ],
    )
    def test_set_time_range_invalid(self, from_, to):
        instance = self._make_one()
        instance.set_time_range(10, 20)
        with pytest.raises(InvalidTimeRange) as e:
            instance.set_time_range(from_, to)
        assert e.value.from_ == from_
        assert e.value.to == to
        assert instance.time_range == (10, 20)

    def test_set_time_range_invalid_after_finalize(self):
        """An inverted range is reported as such, even when sealed"""
        instance = self._make_one()
        instance.to_pb()
        with pytest.raises(InvalidTimeRange):
            instance.set_time_range(200, 100)

    def test_sealed_after_to_pb(self):
        instance = self._make_one()
        assert instance.sealed is False
        instance.to_pb()
        assert instance.sealed is True
        with pytest.raises(ConditionSealed):
            instance.set_time_range(1, 2)
        with pytest.raises(ConditionSealed):
            instance.attach_filter(PrefixFilter(b"r"))
        assert instance.time_range == (0, MAX_TIMESTAMP)
        assert instance.has_filter is False

    def test_to_pb_idempotent(self):
        instance = self._make_one()
        instance.set_time_range(100, 200)
        instance.attach_filter(PrefixFilter(b"r"))
        first = instance.to_pb()
        second = instance.to_pb()
        assert first == second
        assert first is not second
        # rendered messages do not share state with the instance
        first.condition.comparator.serialized_comparator = b"changed"
        assert instance.to_pb().condition.comparator == BinaryComparator(b"v1")._to_pb()

    def test_accepts_str_and_bytes_columns(self):
        from_str = self._make_one(family="cf", qualifier="q1").to_pb()
        from_bytes = self._make_one(family=b"cf", qualifier=b"q1").to_pb()
        assert from_str == from_bytes

    def test_logging(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="hbase_rpc.conditional"):
            instance = self._make_one()
            instance.to_pb()
            instance.to_pb()
        messages = [record.getMessage() for record in caplog.records]
        assert any(m.startswith("Created column condition") for m in messages)
        assert len([m for m in messages if m.startswith("Finalized")]) == 1

    def test___repr__(self):
        instance = self._make_one()
        assert "mode=column" in repr(instance)
        assert "sealed=False" in repr(instance)
