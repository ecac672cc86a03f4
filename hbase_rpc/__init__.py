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
from hbase_rpc import version

from hbase_rpc._helpers import MAX_TIMESTAMP
from hbase_rpc._helpers import MIN_TIMESTAMP

from hbase_rpc.comparators import BinaryComparator
from hbase_rpc.comparators import BinaryPrefixComparator
from hbase_rpc.comparators import BitComparator
from hbase_rpc.comparators import BitwiseOp
from hbase_rpc.comparators import Comparator
from hbase_rpc.comparators import LongComparator
from hbase_rpc.comparators import NullComparator
from hbase_rpc.comparators import RegexStringComparator
from hbase_rpc.comparators import SubstringComparator
from hbase_rpc.comparators import construct_comparator

from hbase_rpc.conditional import ConditionalMutation
from hbase_rpc.conditional import ConditionMode

from hbase_rpc.exceptions import ConditionAlreadySet
from hbase_rpc.exceptions import ConditionError
from hbase_rpc.exceptions import ConditionSealed
from hbase_rpc.exceptions import InvalidTimeRange
from hbase_rpc.exceptions import MalformedComparator
from hbase_rpc.exceptions import MalformedFilter
from hbase_rpc.exceptions import MissingRowKey

from hbase_rpc.mutations import Durability
from hbase_rpc.mutations import MutationType
from hbase_rpc.mutations import RowMutation

from hbase_rpc.row_filters import RowFilter
from hbase_rpc.row_filters import construct_filter

from hbase_rpc.types.filter import CompareType

__version__: str = version.__version__

__all__ = (
    "MAX_TIMESTAMP",
    "MIN_TIMESTAMP",
    "BinaryComparator",
    "BinaryPrefixComparator",
    "BitComparator",
    "BitwiseOp",
    "Comparator",
    "LongComparator",
    "NullComparator",
    "RegexStringComparator",
    "SubstringComparator",
    "construct_comparator",
    "ConditionalMutation",
    "ConditionMode",
    "ConditionAlreadySet",
    "ConditionError",
    "ConditionSealed",
    "InvalidTimeRange",
    "MalformedComparator",
    "MalformedFilter",
    "MissingRowKey",
    "Durability",
    "MutationType",
    "RowMutation",
    "RowFilter",
    "construct_filter",
    "CompareType",
)
