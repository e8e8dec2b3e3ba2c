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

"""Findings and per-file lint results."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from ..file_io.source_location import lookup_source


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class FindingCode(str, Enum):
    """Classification of a finding."""

    LOAD_FAILURE = "load-failure"
    STRUCTURAL_ERROR = "structural-error"
    UNRESOLVED_REFERENCE = "unresolved-reference"
    REQUIRED_PROPERTY_MISMATCH = "required-property-mismatch"
    DISCRIMINATOR_MISMATCH = "discriminator-mismatch"
    VERSION_WARNING = "version-warning"
    EXTERNAL_REFERENCE_WARNING = "external-reference"
    UNUSED_SCHEMA_WARNING = "unused-schema"
    INTERNAL_ERROR = "internal-error"


@dataclass(frozen=True)
class Finding:
    """A single error or warning produced by a lint pass."""

    severity: Severity
    code: FindingCode
    message: str
    yaml_path: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None

    @classmethod
    def error(cls, code: FindingCode, message: str, yaml_path: Optional[str] = None,
              source_map: Optional[Dict[str, Dict[str, int]]] = None) -> 'Finding':
        return cls._located(Severity.ERROR, code, message, yaml_path, source_map)

    @classmethod
    def warning(cls, code: FindingCode, message: str, yaml_path: Optional[str] = None,
                source_map: Optional[Dict[str, Dict[str, int]]] = None) -> 'Finding':
        return cls._located(Severity.WARNING, code, message, yaml_path, source_map)

    @classmethod
    def _located(cls, severity, code, message, yaml_path, source_map) -> 'Finding':
        loc = lookup_source(source_map, yaml_path)
        return cls(
            severity=severity,
            code=code,
            message=message,
            yaml_path=yaml_path,
            line=loc.line,
            column=loc.column,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'code': self.code.value, 'message': self.message}
        if self.line is not None:
            data['line'] = self.line
        if self.column is not None:
            data['column'] = self.column
        if self.yaml_path is not None:
            data['yaml_path'] = self.yaml_path
        return data


class LintResult:
    """Container for linting results for a single file."""

    def __init__(self, file_path: Optional[Path] = None):
        """Initialize lint result.

        Args:
            file_path: Path to the file being linted
        """
        self.file_path = file_path
        self.errors: List[Finding] = []
        self.warnings: List[Finding] = []

    def add(self, finding: Finding):
        if finding.severity is Severity.ERROR:
            self.errors.append(finding)
        else:
            self.warnings.append(finding)

    def extend(self, findings: Iterable[Finding]):
        """Append findings in discovery order, routed by severity."""
        for finding in findings:
            self.add(finding)

    def add_error(self, message: str, code: FindingCode, yaml_path: Optional[str] = None):
        self.errors.append(Finding(Severity.ERROR, code, message, yaml_path))

    def add_warning(self, message: str, code: FindingCode, yaml_path: Optional[str] = None):
        self.warnings.append(Finding(Severity.WARNING, code, message, yaml_path))

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def passed(self) -> bool:
        """True iff no errors were found; warnings alone never fail."""
        return not self.errors

    def passed_strict(self, strict: bool = False) -> bool:
        """Pass/fail with warnings also counted as failures when *strict*."""
        if strict:
            return self.passed and not self.warnings
        return self.passed

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file': str(self.file_path) if self.file_path is not None else None,
            'passed': self.passed,
            'errors': [e.to_dict() for e in self.errors],
            'warnings': [w.to_dict() for w in self.warnings],
        }
