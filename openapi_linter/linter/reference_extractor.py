# Copyright 2025 TIER IV, inc.
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

"""Collect every ``$ref`` string in a document."""

from typing import FrozenSet, List, Set

from ..models.document import MappingNode, Node, ScalarNode, SequenceNode

REF_KEY = "$ref"


def is_internal_ref(ref: str) -> bool:
    return ref.startswith("#/")


def extract_refs(node: Node) -> FrozenSet[str]:
    """Return the set of all ``$ref`` string values below *node*.

    A ``$ref`` whose value is not a string is descended into like any other
    key. The tree is visited once with an explicit stack, so nesting depth is
    not limited by the interpreter's recursion limit; callers that need the
    references for several checks should share the returned set.
    """
    refs: Set[str] = set()
    pending: List[Node] = [node]
    while pending:
        current = pending.pop()
        if isinstance(current, MappingNode):
            for key, value in current.items():
                if key == REF_KEY and isinstance(value, ScalarNode) and isinstance(value.value, str):
                    refs.add(value.value)
                else:
                    pending.append(value)
        elif isinstance(current, SequenceNode):
            pending.extend(current)
    return frozenset(refs)
