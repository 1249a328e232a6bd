# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Dependency resolution for check entrypoints.

Importing files forms a directed graph: vertices are source files, edges are
local imports. Every file needed to run a check is found by a breadth-first
walk of that graph starting at the entrypoint.

Resolution pipeline per file:
1. Extraction: the variant's extractor returns local and external specifiers
2. External check: names missing from the allow-list are recorded
3. Local resolution: specifiers are joined onto the file's directory and
   resolved with extension guessing
4. Queueing: files not visited yet are stored and queued

Error Recovery:
- Unsupported or unreadable entrypoint: raise immediately
- Syntax errors: record, skip that file's dependencies, keep walking
- Missing files and unsupported externals: record, keep walking
- All recorded errors are raised together once the queue drains
"""

import logging
import os
from collections import deque
from typing import Deque, Iterable, List, Optional

from check_deps.collector import DependencyCollector
from check_deps.config import Config
from check_deps.errors import (
    DependencyLimitExceededError,
    UnreadableEntrypointError,
    UnsupportedEntrypointError,
)
from check_deps.extractors.registry import ExtractorRegistry, create_default_registry
from check_deps.models import SUFFIX_FALLBACKS, FileSet, SourceFile, variant_for_path
from check_deps.storage import FileSystemReader, SourceReader

logger = logging.getLogger(__name__)


class DependencyResolver:
    """Resolves the transitive file set of a check entrypoint.

    Each resolve() call builds its own collector and queue, so a resolver
    holds no state between runs. Parsers are cached per registry; give each
    thread its own resolver (or registry) when resolving in parallel.
    """

    def __init__(
        self,
        allowed_modules: Iterable[str],
        reader: Optional[SourceReader] = None,
        registry: Optional[ExtractorRegistry] = None,
        max_files: int = 0,
    ):
        """Initialize resolver.

        Args:
            allowed_modules: External names the runtime provides (built-ins and packages).
            reader: Storage backend. Defaults to the local file system.
            registry: Extractor registry. Defaults to JavaScript and TypeScript extractors.
            max_files: Maximum number of files per run. 0 disables the limit.
        """
        self.allowed_modules = frozenset(allowed_modules)
        self.reader = reader if reader is not None else FileSystemReader()
        self.registry = registry if registry is not None else create_default_registry()
        self.max_files = max_files

    @classmethod
    def from_config(
        cls, config: Config, reader: Optional[SourceReader] = None
    ) -> "DependencyResolver":
        """Create a resolver from configuration."""
        if reader is None:
            reader = FileSystemReader(max_file_size_bytes=config.max_file_size_kb * 1024)
        return cls(
            allowed_modules=config.allowed_modules(),
            reader=reader,
            max_files=config.max_dependency_files,
        )

    def resolve(self, entrypoint: str) -> FileSet:
        """Resolve every file the entrypoint depends on.

        Args:
            entrypoint: Path to a .js or .ts file.

        Returns:
            Mapping of resolved file path to content, entrypoint included.

        Raises:
            UnsupportedEntrypointError: If the extension is not supported.
            UnreadableEntrypointError: If the entrypoint cannot be read.
            DependencyLimitExceededError: If max_files is exceeded.
            DependencyParseError: If any file had errors (all are reported).
        """
        entry = self._read_entrypoint(entrypoint)
        logger.info(f"Resolving dependencies of {entry.path}")

        collector = DependencyCollector(entry.path, entry.content)
        queue: Deque[SourceFile] = deque([entry])

        while queue:
            item = queue.popleft()
            for dependency in self._process_file(item, collector):
                if collector.has_dependency(dependency.path):
                    continue
                collector.add_dependency(dependency.path, dependency.content)
                if self.max_files and len(collector) > self.max_files:
                    raise DependencyLimitExceededError(entry.path, self.max_files)
                queue.append(dependency)

        collector.validate()

        dependencies = collector.get_dependencies()
        logger.info(f"Resolved {len(dependencies)} file(s) for {entry.path}")
        return dependencies

    def _read_entrypoint(self, entrypoint: str) -> SourceFile:
        path = os.path.normpath(entrypoint)
        variant = variant_for_path(path)
        if variant is None:
            raise UnsupportedEntrypointError(entrypoint)

        try:
            content = self.reader.read_text(path)
        except OSError as e:
            logger.error(f"Cannot read entrypoint {path}: {e}")
            raise UnreadableEntrypointError(entrypoint, str(e)) from e

        return SourceFile(path=path, content=content, variant=variant)

    def _process_file(self, item: SourceFile, collector: DependencyCollector) -> List[SourceFile]:
        """Extract and resolve one file's specifiers.

        Returns:
            Local dependencies that were found (visited or not).
        """
        if item.variant is None:
            # e.g. require('./data.json'): read verbatim, but no grammar applies
            collector.add_parsing_error(item.path, f"Unsupported file extension for {item.path}")
            return []

        result = self.registry.extract(item.content, item.variant)
        if result.error is not None:
            collector.add_parsing_error(item.path, result.error)
            return []

        module = result.module
        unsupported = sorted(
            name for name in module.external_dependencies if name not in self.allowed_modules
        )
        if unsupported:
            collector.add_unsupported_dependencies(item.path, unsupported)

        resolved: List[SourceFile] = []
        directory = os.path.dirname(item.path)
        for specifier in sorted(module.local_dependencies):
            candidate = self._candidate_path(directory, specifier)
            dependency = self._read_dependency(candidate, item.variant)
            if dependency is None:
                collector.add_missing_file(candidate, referenced_by=item.path)
                continue
            resolved.append(dependency)

        return resolved

    @staticmethod
    def _candidate_path(directory: str, specifier: str) -> str:
        # '/x' is joined onto the directory too, not treated as a filesystem root
        return os.path.normpath(os.path.join(directory, specifier.lstrip("/")))

    def _read_dependency(self, candidate: str, referrer_variant: str) -> Optional[SourceFile]:
        """Read a local dependency, guessing the extension when none is given.

        Args:
            candidate: Normalized candidate path.
            referrer_variant: Variant of the file containing the specifier.

        Returns:
            SourceFile, or None if no attempted path could be read.
        """
        if os.path.splitext(candidate)[1]:
            paths = [candidate]
        else:
            paths = [candidate + suffix for suffix in SUFFIX_FALLBACKS[referrer_variant]]

        for path in paths:
            try:
                content = self.reader.read_text(path)
            except OSError:
                logger.debug(f"No readable file at {path}")
                continue
            return SourceFile(path=path, content=content, variant=variant_for_path(path))

        return None


def resolve_dependencies(
    entrypoint: str,
    config: Optional[Config] = None,
    reader: Optional[SourceReader] = None,
) -> FileSet:
    """Resolve an entrypoint using configuration defaults.

    Args:
        entrypoint: Path to a .js or .ts file.
        config: Configuration. If None, loads from the default location.
        reader: Storage backend. Defaults to the local file system.
    """
    if config is None:
        config = Config()
    return DependencyResolver.from_config(config, reader=reader).resolve(entrypoint)
