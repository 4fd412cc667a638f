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

import logging
import sys
from typing import Dict

DEFAULT_FORMAT = "%(name)s - %(levelname)s - %(message)s"

_VERBOSITY_LEVELS: Dict[int, int] = {0: logging.WARNING, 1: logging.INFO}


class _BelowLevelFilter(logging.Filter):
    def __init__(self, level: int) -> None:
        super().__init__()
        self._level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self._level


def level_for_verbosity(verbosity: int) -> int:
    """Map ``-v`` counts to a logging level: 0 → WARNING, 1 → INFO, 2+ → DEBUG."""
    return _VERBOSITY_LEVELS.get(max(verbosity, 0), logging.DEBUG)


def configure_split_stream_logging(
    verbosity: int = 0,
    *,
    stderr_level: int = logging.WARNING,
    fmt: str = DEFAULT_FORMAT,
) -> int:
    """Route records below ``stderr_level`` to stdout and the rest to stderr.

    Generated files are written to paths, never to stdout, so warnings about
    ambiguous defaults or newer document versions stay on stderr even when
    progress output is discarded.

    Returns:
        The root level chosen for ``verbosity``.
    """
    level = level_for_verbosity(verbosity)
    stderr_level = max(stderr_level, logging.DEBUG)
    formatter = logging.Formatter(fmt)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(level)

    stdout_handler = logging.StreamHandler(stream=sys.stdout)
    stdout_handler.addFilter(_BelowLevelFilter(stderr_level))
    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setLevel(stderr_level)

    for handler in (stdout_handler, stderr_handler):
        handler.setFormatter(formatter)
        root.addHandler(handler)
    return level
