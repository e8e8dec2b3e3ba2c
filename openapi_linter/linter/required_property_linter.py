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

"""Required-property linter.

Every name listed under a schema's ``required`` must be declared in that same
schema's ``properties``. Nested object schemas reached through
``properties`` are checked the same way.
"""

from typing import List

from ..models.document import Document, MappingNode, ScalarNode, SequenceNode
from .report import Finding, FindingCode


class RequiredPropertyLinter:
    """Linter for required/properties consistency."""

    def lint(self, document: Document) -> List[Finding]:
        schemas = document.schemas()
        if schemas is None:
            return []
        findings: List[Finding] = []
        for _, schema in schemas.items():
            if isinstance(schema, MappingNode):
                self._check_schema(schema, document, findings)
        return findings

    def _check_schema(self, schema: MappingNode, document: Document, findings: List[Finding]) -> None:
        required = schema.get("required")
        properties = schema.get("properties")
        if not isinstance(properties, MappingNode):
            return

        if isinstance(required, SequenceNode):
            for entry in required:
                if not isinstance(entry, ScalarNode) or not isinstance(entry.value, str):
                    continue
                if entry.value not in properties:
                    findings.append(Finding.error(
                        FindingCode.REQUIRED_PROPERTY_MISMATCH,
                        f"Required property '{entry.value}' not defined in schema at {schema.path}",
                        yaml_path=entry.path,
                        source_map=document.source_map,
                    ))

        for _, prop_schema in properties.items():
            if isinstance(prop_schema, MappingNode):
                self._check_schema(prop_schema, document, findings)
