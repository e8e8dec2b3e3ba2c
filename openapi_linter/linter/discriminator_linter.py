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

"""Discriminator linter.

A polymorphic schema (``oneOf``/``anyOf`` with a ``discriminator``) can
only be decoded if every branch declares the discriminating property. Branches
without an inline ``properties`` mapping (for example a bare ``$ref``) are
not followed and therefore not checked.
"""

from typing import List, Optional

from ..models.document import Document, MappingNode, Node, ScalarNode, SequenceNode
from .report import Finding, FindingCode

UNION_KEYS = ("oneOf", "anyOf")


class DiscriminatorLinter:
    """Linter for discriminator / union consistency under components.schemas."""

    def lint(self, document: Document) -> List[Finding]:
        schemas = document.schemas()
        if schemas is None:
            return []
        findings: List[Finding] = []
        self._walk(schemas, document, findings)
        return findings

    def _walk(self, node: Node, document: Document, findings: List[Finding]) -> None:
        if isinstance(node, MappingNode):
            self._check_union(node, document, findings)
            for _, value in node.items():
                self._walk(value, document, findings)
        elif isinstance(node, SequenceNode):
            for item in node:
                self._walk(item, document, findings)

    @staticmethod
    def _property_name(node: MappingNode) -> Optional[str]:
        discriminator = node.get("discriminator")
        if not isinstance(discriminator, MappingNode):
            return None
        prop = discriminator.get("propertyName")
        if isinstance(prop, ScalarNode) and isinstance(prop.value, str):
            return prop.value
        return None

    @staticmethod
    def _members(node: MappingNode) -> Optional[SequenceNode]:
        # oneOf wins over anyOf when both are present
        for key in UNION_KEYS:
            members = node.get(key)
            if isinstance(members, SequenceNode):
                return members
        return None

    def _check_union(self, node: MappingNode, document: Document, findings: List[Finding]) -> None:
        if "discriminator" not in node or not any(key in node for key in UNION_KEYS):
            return
        prop_name = self._property_name(node)
        if prop_name is None:
            return
        members = self._members(node)
        if members is None:
            return

        for member in members:
            if not isinstance(member, MappingNode):
                continue
            properties = member.get("properties")
            if not isinstance(properties, MappingNode):
                continue
            if prop_name not in properties:
                findings.append(Finding.warning(
                    FindingCode.DISCRIMINATOR_MISMATCH,
                    f"Discriminator property '{prop_name}' not found in schema at {member.path}",
                    yaml_path=member.path,
                    source_map=document.source_map,
                ))
