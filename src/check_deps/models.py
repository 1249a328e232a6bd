# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Core data models for check dependency resolution.

This module defines the foundational data structures used throughout the system:
- SourceVariant: Supported source grammars (JavaScript, TypeScript)
- SourceFile: A file read during one resolution run
- ParsedModule: Specifiers extracted from a single file
- ExtractionResult: Parse outcome returned by an extractor (never raised)

Variants use JSON-compatible string constants so they can be embedded in
reports and MCP responses unchanged.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

# Resolved file path -> raw text content
FileSet = Dict[str, str]

LOCAL_SPECIFIER_PREFIXES = ("/", "./", "../")


class SourceVariant:
    """Source grammars understood by the resolver.

    Design: Using class constants (not Enum) for JSON-compatible strings.
    """

    JAVASCRIPT = "javascript"  # plain scripts (.js)
    TYPESCRIPT = "typescript"  # typed superset (.ts)


EXTENSION_VARIANTS: Dict[str, str] = {
    ".js": SourceVariant.JAVASCRIPT,
    ".ts": SourceVariant.TYPESCRIPT,
}

# Suffixes tried, in order, for an extensionless local specifier.
# TypeScript files may pull in plain scripts; plain scripts never pick up .ts files.
SUFFIX_FALLBACKS: Dict[str, List[str]] = {
    SourceVariant.JAVASCRIPT: [".js"],
    SourceVariant.TYPESCRIPT: [".ts", ".js"],
}


def variant_for_path(path: str) -> Optional[str]:
    """Return the SourceVariant for a path's extension, or None if unsupported."""
    return EXTENSION_VARIANTS.get(os.path.splitext(path)[1])


def is_local_specifier(specifier: str) -> bool:
    """Check whether a specifier names a file path rather than a package.

    Args:
        specifier: Module specifier as written in the source.

    Returns:
        True for '/x', './x' and '../x' style specifiers.
    """
    return specifier.startswith(LOCAL_SPECIFIER_PREFIXES)


@dataclass(frozen=True)
class SourceFile:
    """A source file read during a resolution run.

    Identity is the normalized path. Content is never modified after reading.
    variant is None for files read verbatim with an unsupported extension.
    """

    path: str
    content: str
    variant: Optional[str]


@dataclass
class ParsedModule:
    """Local and external specifiers referenced by one file."""

    local_dependencies: Set[str] = field(default_factory=set)
    external_dependencies: Set[str] = field(default_factory=set)

    def register(self, specifier: Optional[str]) -> None:
        """Classify and record a specifier.

        Empty or unresolvable specifiers (None) are ignored.
        """
        # Mapped path prefixes such as '@services/x' land in external_dependencies
        if not specifier:
            return
        if is_local_specifier(specifier):
            self.local_dependencies.add(specifier)
        else:
            self.external_dependencies.add(specifier)


@dataclass
class ExtractionResult:
    """Outcome of extracting specifiers from one file.

    Attributes:
        module: Specifiers found (possibly partial when error is set).
        error: Human-readable parse error, or None on success.
    """

    module: ParsedModule
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
