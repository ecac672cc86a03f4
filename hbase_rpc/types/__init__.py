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
from .comparator import (
    BinaryComparator,
    BinaryPrefixComparator,
    BitComparator,
    ByteArrayComparable,
    Comparator,
    LongComparator,
    NullComparator,
    RegexStringComparator,
    SubstringComparator,
)
from .filter import (
    ColumnCountGetFilter,
    ColumnPrefixFilter,
    ColumnRangeFilter,
    CompareFilter,
    CompareType,
    FamilyFilter,
    Filter,
    FilterList,
    FirstKeyOnlyFilter,
    KeyOnlyFilter,
    PageFilter,
    PrefixFilter,
    QualifierFilter,
    RowFilter,
    SingleColumnValueFilter,
    TimestampsFilter,
    ValueFilter,
)
from .client import (
    Condition,
    MutateRequest,
    MutationProto,
    NameBytesPair,
    RegionSpecifier,
    TimeRange,
)

__all__ = (
    "BinaryComparator",
    "BinaryPrefixComparator",
    "BitComparator",
    "ByteArrayComparable",
    "ColumnCountGetFilter",
    "ColumnPrefixFilter",
    "ColumnRangeFilter",
    "CompareFilter",
    "CompareType",
    "Comparator",
    "Condition",
    "FamilyFilter",
    "Filter",
    "FilterList",
    "FirstKeyOnlyFilter",
    "KeyOnlyFilter",
    "LongComparator",
    "MutateRequest",
    "MutationProto",
    "NameBytesPair",
    "NullComparator",
    "PageFilter",
    "PrefixFilter",
    "QualifierFilter",
    "RegexStringComparator",
    "RegionSpecifier",
    "RowFilter",
    "SingleColumnValueFilter",
    "SubstringComparator",
    "TimeRange",
    "TimestampsFilter",
    "ValueFilter",
)
