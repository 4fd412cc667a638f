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

"""Per-definition reference registry.

One registry is created for each top-level definition. The assembler records
every non-inline reference it emits, however deeply nested, so the type
signature generator can resolve them from a single flat table.
"""

import logging
from typing import Dict, Iterator, Optional, Tuple

logger = logging.getLogger(__name__)


class ReferenceRegistry:
    """Maps reference paths (``#/definitions/<title>``) to defining shape names.

    Inlined shapes carry no reference, so their titles are kept in a second
    table to name the records generated for them.
    """

    def __init__(self, owner: Optional[str] = None):
        self.owner = owner
        self._entries: Dict[str, str] = {}
        self._inlined: Dict[str, str] = {}
        self._sealed = False

    def _check_open(self, key: str) -> None:
        if self._sealed:
            raise RuntimeError(f"Reference registry of '{self.owner}' is sealed; cannot record '{key}'")

    def record(self, path: str, unit: str) -> None:
        """Record a reference. Re-recording a path overwrites it."""
        self._check_open(path)
        previous = self._entries.get(path)
        if previous is not None and previous != unit:
            logger.debug(f"Reference '{path}' in '{self.owner}' rebound from '{previous}' to '{unit}'")
        self._entries[path] = unit

    def record_inline(self, title: str, unit: str) -> None:
        """Record the declared name of a shape embedded under its schema title."""
        self._check_open(title)
        self._inlined[title] = unit

    def resolve(self, path: str) -> Optional[str]:
        return self._entries.get(path)

    def inlined_name(self, title: Optional[str]) -> Optional[str]:
        """Declared name of an inlined shape, falling back to the title itself."""
        return self._inlined.get(title, title) if title is not None else None

    def merge(self, other: "ReferenceRegistry") -> None:
        """Copy every entry of another registry into this one."""
        for path, unit in other.items():
            self.record(path, unit)
        for title, unit in other._inlined.items():
            self.record_inline(title, unit)

    def seal(self) -> "ReferenceRegistry":
        self._sealed = True
        return self

    @property
    def sealed(self) -> bool:
        return self._sealed

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(list(self._entries.items()))

    def as_dict(self) -> Dict[str, str]:
        return dict(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __repr__(self) -> str:
        return f"ReferenceRegistry(owner={self.owner!r}, entries={self._entries!r})"
