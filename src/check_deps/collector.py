# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Result aggregation for a single resolution run.

The collector owns the visited-file mapping (which doubles as the final file
set) and three error categories. All operations are additive; validate() is
the only place accumulated errors turn into an exception.
"""

import logging
from typing import Dict, Iterable, List, Optional

from check_deps.errors import DependencyParseError
from check_deps.models import FileSet

logger = logging.getLogger(__name__)


class DependencyCollector:
    """Collects dependencies and errors discovered while walking one graph.

    Thread Safety:
    - NOT thread-safe: one collector per resolve() call
    """

    def __init__(self, entrypoint: str, content: str) -> None:
        """Initialize collector with the (already read) entrypoint.

        Args:
            entrypoint: Normalized entrypoint path.
            content: Entrypoint text content.
        """
        self.entrypoint = entrypoint
        self._dependencies: Dict[str, str] = {entrypoint: content}
        self._missing_files: Dict[str, List[str]] = {}
        self._parsing_errors: Dict[str, str] = {}
        self._unsupported_dependencies: Dict[str, List[str]] = {}

    def add_dependency(self, path: str, content: str) -> None:
        if path in self._dependencies:
            return
        self._dependencies[path] = content

    def has_dependency(self, path: str) -> bool:
        return path in self._dependencies

    def get_dependencies(self) -> FileSet:
        """Return a copy of the path -> content mapping, entrypoint included."""
        return dict(self._dependencies)

    def __len__(self) -> int:
        return len(self._dependencies)

    def add_parsing_error(self, path: str, message: str) -> None:
        logger.warning(f"⚠️ Could not parse {path}: {message}")
        self._parsing_errors[path] = message

    def add_unsupported_dependencies(self, path: str, names: Iterable[str]) -> None:
        """Record external names referenced by path that the runtime does not provide."""
        recorded = self._unsupported_dependencies.setdefault(path, [])
        for name in names:
            if name not in recorded:
                recorded.append(name)
        if not recorded:
            del self._unsupported_dependencies[path]

    def add_missing_file(self, path: str, referenced_by: Optional[str] = None) -> None:
        """Record a local candidate path that could not be read.

        Args:
            path: Candidate path (before extension guessing).
            referenced_by: File whose specifier produced the candidate.
        """
        referrers = self._missing_files.setdefault(path, [])
        if referenced_by is not None and referenced_by not in referrers:
            referrers.append(referenced_by)

    @property
    def missing_files(self) -> Dict[str, List[str]]:
        return {path: list(refs) for path, refs in self._missing_files.items()}

    @property
    def parsing_errors(self) -> Dict[str, str]:
        return dict(self._parsing_errors)

    @property
    def unsupported_dependencies(self) -> Dict[str, List[str]]:
        return {path: list(names) for path, names in self._unsupported_dependencies.items()}

    @property
    def has_errors(self) -> bool:
        return bool(self._missing_files or self._parsing_errors or self._unsupported_dependencies)

    def validate(self) -> None:
        """Raise one report covering every recorded error.

        Raises:
            DependencyParseError: If any error category is non-empty.
        """
        if not self.has_errors:
            logger.debug(f"No errors recorded for {self.entrypoint}")
            return

        raise DependencyParseError(
            self.entrypoint,
            missing_files=self._missing_files,
            parsing_errors=self._parsing_errors,
            unsupported_dependencies=self._unsupported_dependencies,
        )
