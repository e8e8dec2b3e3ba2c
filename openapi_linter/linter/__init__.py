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

"""Linter package for OpenAPI document consistency checks."""

import logging
from pathlib import Path
from typing import Callable, FrozenSet, List, Optional, Sequence, Union

from ..config import LinterConfig, linter_config
from ..exceptions import DocumentLoadError
from ..models.document import Document
from ..models.parsing.document_parser import DocumentParser, document_parser
from .report import Finding, FindingCode, LintResult, Severity
from .reference_extractor import extract_refs
from .structure_linter import StructureLinter, check_structure
from .reference_linter import ReferenceLinter, check_references
from .discriminator_linter import DiscriminatorLinter
from .required_property_linter import RequiredPropertyLinter
from .unused_schema_linter import UnusedSchemaLinter, check_unused

__all__ = [
    'lint_document', 'lint_file', 'lint_files',
    'extract_refs', 'check_structure', 'check_references', 'check_unused',
    'Finding', 'FindingCode', 'LintResult', 'Severity',
]

logger = logging.getLogger(__name__)


def _run_pass(name: str, run: Callable[[], List[Finding]], result: LintResult) -> None:
    try:
        result.extend(run())
    except Exception as e:
        logger.exception("%s failed on %s", name, result.file_path)
        result.add_error(f"Unexpected error during {name}: {str(e)}", FindingCode.INTERNAL_ERROR)


def lint_document(document: Document, config: Optional[LinterConfig] = None) -> LintResult:
    """Run every lint pass over an already loaded document.

    The reference set is extracted once and shared by the passes that need it.
    """
    config = config or linter_config
    result = LintResult(document.file_path)

    _run_pass("structure check", lambda: StructureLinter(config).lint(document), result)

    refs: FrozenSet[str] = frozenset()
    try:
        refs = extract_refs(document.root)
    except Exception as e:
        logger.exception("reference extraction failed on %s", result.file_path)
        result.add_error(f"Unexpected error during reference extraction: {str(e)}", FindingCode.INTERNAL_ERROR)
    logger.debug("Found %d distinct references in %s", len(refs), document.file_path)

    _run_pass("reference check", lambda: ReferenceLinter().lint(document, refs), result)
    _run_pass("discriminator check", lambda: DiscriminatorLinter().lint(document), result)
    _run_pass("required property check", lambda: RequiredPropertyLinter().lint(document), result)
    _run_pass("unused schema check", lambda: UnusedSchemaLinter(config).lint(document, refs), result)

    return result


def lint_file(
    file_path: Union[str, Path],
    parser: Optional[DocumentParser] = None,
    config: Optional[LinterConfig] = None,
) -> LintResult:
    """Load and lint a single file.

    A load failure is recorded as the only error for the file.
    """
    path = Path(file_path)
    parser = parser or document_parser
    try:
        document = parser.load(path)
    except DocumentLoadError as e:
        logger.debug("Failed to load %s: %s", path, e)
        result = LintResult(path)
        result.add_error(f"Failed to load spec file: {str(e)}", FindingCode.LOAD_FAILURE)
        return result

    return lint_document(document, config)


def lint_files(
    file_paths: Sequence[Union[str, Path]],
    parser: Optional[DocumentParser] = None,
    config: Optional[LinterConfig] = None,
) -> List[LintResult]:
    """Lint a list of files.

    Args:
        file_paths: List of file paths to lint

    Returns:
        List of LintResult objects, one per file
    """
    return [lint_file(file_path, parser, config) for file_path in file_paths]
