# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Extractor plugins for module specifiers in check source files.

Components:
- SpecifierExtractor: Abstract base class for extractor plugins
- TreeSitterExtractor: Shared tree-sitter walk (imports, re-exports)
- JavaScriptExtractor: Variant A, adds require() calls
- TypeScriptExtractor: Variant B
- ExtractorRegistry: Variant -> extractor dispatch
"""

from check_deps.extractors.base import SpecifierExtractor, TreeSitterExtractor
from check_deps.extractors.javascript_extractor import JavaScriptExtractor
from check_deps.extractors.registry import ExtractorRegistry, create_default_registry, extract
from check_deps.extractors.typescript_extractor import TypeScriptExtractor

__all__ = [
    "SpecifierExtractor",
    "TreeSitterExtractor",
    "JavaScriptExtractor",
    "TypeScriptExtractor",
    "ExtractorRegistry",
    "create_default_registry",
    "extract",
]
