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

"""Resolve internal ``$ref`` pointers against the document."""

import logging
from typing import Iterable, List, Optional

from ..models.document import Document, Node, unescape_pointer_token
from .reference_extractor import is_internal_ref
from .report import Finding, FindingCode

logger = logging.getLogger(__name__)


def pointer_segments(ref: str) -> List[str]:
    """Split an internal reference (``#/a/b``) into its raw, still escaped segments."""
    return ref[2:].split("/")


class ReferenceLinter:
    """Linter for dangling references."""

    def lint(self, document: Document, refs: Iterable[str]) -> List[Finding]:
        """Check every reference in *refs*.

        External references cannot be verified locally and produce a warning.
        An internal reference is walked segment by segment from the root; the
        first segment that does not resolve is reported and the walk stops.
        """
        findings: List[Finding] = []
        for ref in sorted(refs):
            if not is_internal_ref(ref):
                findings.append(Finding.warning(
                    FindingCode.EXTERNAL_REFERENCE_WARNING,
                    f"External reference found: {ref}",
                ))
                continue

            finding = self._resolve(document, ref)
            if finding is not None:
                findings.append(finding)
        return findings

    @staticmethod
    def _resolve(document: Document, ref: str) -> Optional[Finding]:
        current: Node = document.root
        for segment in pointer_segments(ref):
            child = current.child(unescape_pointer_token(segment))
            if child is None:
                logger.debug("Reference %s stops at %r under %r", ref, segment, current.path)
                return Finding.error(
                    FindingCode.UNRESOLVED_REFERENCE,
                    f"Missing schema definition: {ref} (failed at '{segment}')",
                    yaml_path=current.path,
                    source_map=document.source_map,
                )
            current = child
        return None


def check_references(document: Document, refs: Iterable[str]) -> List[Finding]:
    return ReferenceLinter().lint(document, refs)
