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

"""Format version utilities for OpenAPI description documents.

The top-level ``openapi`` field declares which revision of the OpenAPI
specification the document follows (e.g. ``3.0.3`` or ``3.1.0``).

Compatibility rule:
  * The value must be a string starting with the supported major prefix
    (``3.`` by default). Anything else is reported as a warning; the
    document may still be usable.
  * Minor and patch components are not compared.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

from ..exceptions import ValidationError


_VERSION_RE = re.compile(r"^(\d+)\.(\d+)(?:\.(\d+))?")


@dataclass(frozen=True)
class SemanticVersion:
    """A parsed version (major, minor, patch)."""

    major: int
    minor: int
    patch: int = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_format_version(raw: Any) -> SemanticVersion:
    """Parse a version string like ``3.0.3`` or ``3.1``.

    Trailing pre-release suffixes (``3.1.0-rc1``) are ignored.

    Raises:
        ValidationError: If the value is not a string or cannot be parsed.
    """
    if not isinstance(raw, str):
        raise ValidationError(
            f"Format version must be a string, got {type(raw).__name__}: {raw!r}"
        )

    m = _VERSION_RE.match(raw.strip())
    if m is None:
        raise ValidationError(
            f"Invalid format version string: '{raw}'. "
            "Expected 'MAJOR.MINOR[.PATCH]' (e.g. '3.0.3')."
        )
    return SemanticVersion(int(m.group(1)), int(m.group(2)), int(m.group(3) or 0))


@dataclass(frozen=True)
class VersionCheckResult:
    """Result of a format-version compatibility check."""

    compatible: bool
    message: str
    file_version: Optional[SemanticVersion] = None


def check_format_version(raw_version: Any, supported_prefix: str) -> VersionCheckResult:
    """Check whether *raw_version* starts with *supported_prefix*.

    A non-string value is never compatible. A string is compatible iff it
    starts with the prefix; parsing is best effort and only used to enrich
    the result.
    """
    if not isinstance(raw_version, str):
        return VersionCheckResult(
            compatible=False,
            message=(
                f"OpenAPI version must be a string, got "
                f"{type(raw_version).__name__}: {raw_version!r}. "
                f"Quote the value (e.g. '{supported_prefix}0')"
            ),
        )

    try:
        file_ver: Optional[SemanticVersion] = parse_format_version(raw_version)
    except ValidationError:
        file_ver = None

    if not raw_version.startswith(supported_prefix):
        return VersionCheckResult(
            compatible=False,
            message=f"OpenAPI version {raw_version} might have compatibility issues",
            file_version=file_ver,
        )

    return VersionCheckResult(
        compatible=True,
        message=f"OpenAPI version {raw_version} is supported.",
        file_version=file_ver,
    )
