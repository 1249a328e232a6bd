# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Dependency resolution for check entrypoints."""

from .collector import DependencyCollector
from .config import Config, ConfigurationError
from .errors import (
    DependencyLimitExceededError,
    DependencyParseError,
    DependencyResolutionError,
    UnreadableEntrypointError,
    UnsupportedEntrypointError,
)
from .extractors import ExtractorRegistry, JavaScriptExtractor, TypeScriptExtractor, extract
from .models import ExtractionResult, FileSet, ParsedModule, SourceFile, SourceVariant
from .resolver import DependencyResolver, resolve_dependencies
from .storage import FileSystemReader, InMemoryReader, SourceReader

__version__ = "0.1.0"

__all__ = [
    "DependencyResolver",
    "resolve_dependencies",
    "DependencyCollector",
    "Config",
    "ConfigurationError",
    "DependencyResolutionError",
    "DependencyParseError",
    "DependencyLimitExceededError",
    "UnreadableEntrypointError",
    "UnsupportedEntrypointError",
    "ExtractorRegistry",
    "JavaScriptExtractor",
    "TypeScriptExtractor",
    "extract",
    "ExtractionResult",
    "FileSet",
    "ParsedModule",
    "SourceFile",
    "SourceVariant",
    "FileSystemReader",
    "InMemoryReader",
    "SourceReader",
]

# Conditional import for MCP server (requires Python 3.10+ and mcp package)
try:
    from .mcp_server import CheckDepsMCPServer

    __all__.append("CheckDepsMCPServer")
except ImportError:
    # MCP package not available (e.g., Python < 3.10 or mcp not installed)
    pass
