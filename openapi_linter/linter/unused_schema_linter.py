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

"""Unused schema detection.

A schema counts as used when any ``$ref`` anywhere in the document, including
one inside another unused schema, ends in its name.
"""

from typing import Iterable, List, Optional, Set

from ..config import LinterConfig, linter_config
from ..models.document import Document, unescape_pointer_token
from .report import Finding, FindingCode


class UnusedSchemaLinter:
    """Linter for schema definitions that nothing references."""

    def __init__(self, config: Optional[LinterConfig] = None):
        self.config = config or linter_config

    def referenced_names(self, refs: Iterable[str]) -> Set[str]:
        prefix = self.config.schemas_pointer_prefix
        return {
            unescape_pointer_token(ref.split("/")[-1])
            for ref in refs
            if ref.startswith(prefix)
        }

    def lint(self, document: Document, refs: Iterable[str]) -> List[Finding]:
        schemas = document.schemas()
        if schemas is None:
            return []
        referenced = self.referenced_names(refs)
        return [
            Finding.warning(
                FindingCode.UNUSED_SCHEMA_WARNING,
                f"Unused schema definition: {name}",
                yaml_path=schema.path,
                source_map=document.source_map,
            )
            for name, schema in schemas.items()
            if name not in referenced
        ]


def check_unused(document: Document, refs: Iterable[str]) -> List[Finding]:
    return UnusedSchemaLinter().lint(document, refs)
