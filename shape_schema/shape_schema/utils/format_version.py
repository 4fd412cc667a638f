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

"""Format version of exported definitions documents.

Documents carry ``format_version: MAJOR.MINOR.PATCH``. A document can be
loaded when its major version equals the library's; a newer minor version
loads with a warning, and the patch number is not compared.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

from .. import DEFINITIONS_FORMAT_VERSION
from ..exceptions import FormatVersionError

_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)$")


@dataclass(frozen=True, order=True)
class SemanticVersion:
    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, raw: Any) -> "SemanticVersion":
        """Parse ``0.3.0`` or ``v0.3.0``.

        Raises:
            FormatVersionError: If the value is not a MAJOR.MINOR.PATCH string.
        """
        if not isinstance(raw, str):
            raise FormatVersionError(f"Format version must be a string, got {type(raw).__name__}: {raw!r}")
        match = _VERSION_RE.match(raw.strip())
        if match is None:
            raise FormatVersionError(f"Invalid format version '{raw}', expected MAJOR.MINOR.PATCH")
        return cls(*(int(part) for part in match.groups()))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_format_version(raw: Any) -> SemanticVersion:
    return SemanticVersion.parse(raw)


SUPPORTED_FORMAT_VERSION = SemanticVersion.parse(DEFINITIONS_FORMAT_VERSION)


@dataclass(frozen=True)
class VersionCheckResult:
    compatible: bool
    message: str
    document_version: Optional[SemanticVersion] = None
    minor_newer: bool = False


def check_format_version(
    raw_version: Any, supported: SemanticVersion = SUPPORTED_FORMAT_VERSION
) -> VersionCheckResult:
    """Decide whether a document declaring ``raw_version`` can be loaded."""
    if raw_version is None:
        return VersionCheckResult(False, f"Missing 'format_version' field (supported: {supported})")

    try:
        version = SemanticVersion.parse(raw_version)
    except FormatVersionError as exc:
        return VersionCheckResult(False, str(exc))

    if version.major != supported.major:
        return VersionCheckResult(
            False,
            f"Incompatible format version {version}: only major version {supported.major} "
            f"is supported (supported: {supported})",
            version,
        )
    if version.minor > supported.minor:
        return VersionCheckResult(
            True,
            f"Format version {version} has a newer minor version than the supported {supported}; "
            "unknown fields are kept as they are",
            version,
            minor_newer=True,
        )
    return VersionCheckResult(True, f"Format version {version} is supported", version)
