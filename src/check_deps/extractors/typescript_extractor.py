# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Specifier extractor for TypeScript check files.

Only import declarations and re-exports with a 'from' clause are extracted.
require() calls and 'import x = require(...)' are not registered.
"""

from tree_sitter import Language

from check_deps.extractors.base import TreeSitterExtractor
from check_deps.models import SourceVariant


class TypeScriptExtractor(TreeSitterExtractor):
    """Extractor for variant B (TypeScript) sources."""

    grammar_package = "tree-sitter-typescript"

    def _load_language(self) -> Language:
        import tree_sitter_typescript

        return Language(tree_sitter_typescript.language_typescript())

    def variant(self) -> str:
        return SourceVariant.TYPESCRIPT

    def name(self) -> str:
        return "TypeScriptExtractor"
