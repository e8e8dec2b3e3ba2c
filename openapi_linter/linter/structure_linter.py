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

"""Top-level structure linter for OpenAPI documents.

Checks that the required top-level sections exist and that the declared
``openapi`` version is one this tool understands.
"""

from typing import List, Optional

from ..config import LinterConfig, linter_config
from ..models.document import Document
from ..utils.format_version import check_format_version
from .report import Finding, FindingCode

VERSION_FIELD = "openapi"


class StructureLinter:
    """Linter for required sections and format version."""

    def __init__(self, config: Optional[LinterConfig] = None):
        self.config = config or linter_config

    def lint(self, document: Document) -> List[Finding]:
        """Lint top-level structure.

        Args:
            document: Loaded document

        Returns:
            One error per missing required field, then at most one version warning
        """
        findings: List[Finding] = []
        root = document.root

        for field_name in self.config.required_fields:
            if field_name not in root:
                findings.append(Finding.error(
                    FindingCode.STRUCTURAL_ERROR,
                    f"Missing required field: {field_name}",
                    yaml_path="",
                    source_map=document.source_map,
                ))

        version_node = root.get(VERSION_FIELD)
        if version_node is not None:
            raw_version = version_node.to_python()
            ver_result = check_format_version(raw_version, self.config.supported_version_prefix)
            if not ver_result.compatible:
                findings.append(Finding.warning(
                    FindingCode.VERSION_WARNING,
                    ver_result.message,
                    yaml_path=version_node.path,
                    source_map=document.source_map,
                ))

        return findings


def check_structure(document: Document) -> List[Finding]:
    return StructureLinter().lint(document)
