# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Source storage abstraction used by the dependency resolver.

The resolver only needs one capability from storage: read the text of a file
by path. Keeping it behind an interface lets the resolver run against the
local file system or any other backend without changes.

Components:
- SourceReader: Abstract interface for storage backends
- FileSystemReader: Local disk reads with size limits and encoding fallback
- InMemoryReader: Path -> text mapping (tests, pre-fetched bundles)
"""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Mapping, Optional

logger = logging.getLogger(__name__)


class SourceReader(ABC):
    """Abstract read-only storage interface for source files."""

    @abstractmethod
    def read_text(self, path: str) -> str:
        """Read the text content of a file.

        Args:
            path: Normalized file path.

        Returns:
            File content as string.

        Raises:
            OSError: If the file does not exist or cannot be read
                (FileNotFoundError, IsADirectoryError, PermissionError, ...).
        """
        pass


class FileSystemReader(SourceReader):
    """Reads source files from the local file system.

    Error Recovery:
    - Encoding errors: Try UTF-8 first, fallback to latin-1, log if non-UTF-8
    - File too large: Raise OSError so callers treat the file as unreadable
    """

    DEFAULT_MAX_FILE_SIZE_BYTES = 1024 * 1024

    def __init__(self, max_file_size_bytes: Optional[int] = DEFAULT_MAX_FILE_SIZE_BYTES):
        """Initialize reader.

        Args:
            max_file_size_bytes: Largest file accepted. None disables the check.
        """
        self.max_file_size_bytes = max_file_size_bytes

    def read_text(self, path: str) -> str:
        file_path = Path(path)
        if not file_path.is_file():
            raise FileNotFoundError(f"No such file: {path}")

        if self.max_file_size_bytes is not None:
            file_size = file_path.stat().st_size
            if file_size > self.max_file_size_bytes:
                logger.warning(
                    f"⚠️ Refusing to read {path}: {file_size} bytes "
                    f"exceeds limit ({self.max_file_size_bytes})"
                )
                raise OSError(
                    f"{path} is {file_size} bytes, larger than {self.max_file_size_bytes}"
                )

        # Decoded from bytes so line endings are returned exactly as stored
        raw = file_path.read_bytes()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            # latin-1 accepts all byte values
            logger.warning(f"⚠️ File {path} is not UTF-8, using latin-1 fallback encoding")
            return raw.decode("latin-1")


class InMemoryReader(SourceReader):
    """Serves file contents from a path -> text mapping.

    Paths are normalized on the way in so lookups match the resolver's
    normalized candidate paths.
    """

    def __init__(self, files: Optional[Mapping[str, str]] = None) -> None:
        self._files: Dict[str, str] = {}
        for path, content in (files or {}).items():
            self.add_file(path, content)

    def add_file(self, path: str, content: str) -> None:
        """Add or replace a file."""
        self._files[os.path.normpath(path)] = content

    def read_text(self, path: str) -> str:
        try:
            return self._files[os.path.normpath(path)]
        except KeyError:
            raise FileNotFoundError(f"No such file: {path}") from None

    def __len__(self) -> int:
        return len(self._files)
