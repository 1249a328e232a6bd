# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Base interface for specifier extractor plugins.

An extractor turns the raw text of one source file into the set of module
specifiers it references. Each grammar variant has its own extractor; the
resolver never branches on grammar beyond picking the extractor for a file.

Contract:
- extract() never raises for malformed input; parse failures come back as
  ExtractionResult.error so the resolver can keep walking other files
- Extractors hold no per-file state between calls
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from tree_sitter import Language, Parser

from check_deps.extractors.syntax import describe_syntax_error, string_value
from check_deps.models import ExtractionResult, ParsedModule

logger = logging.getLogger(__name__)


class SpecifierExtractor(ABC):
    """Abstract base class for specifier extractor plugins."""

    @abstractmethod
    def extract(self, content: str) -> ExtractionResult:
        """Extract module specifiers from source text.

        Args:
            content: Raw text of the file.

        Returns:
            ExtractionResult with classified specifiers, or with error set
            when the content could not be parsed.
        """
        pass

    @abstractmethod
    def variant(self) -> str:
        """Return the SourceVariant this extractor handles."""
        pass

    @abstractmethod
    def name(self) -> str:
        """Return extractor name for logging and debugging."""
        pass


class TreeSitterExtractor(SpecifierExtractor):
    """Extractor backed by a tree-sitter grammar.

    Walks every named node once and dispatches on node.type. Node kinds with
    no handler are ignored.

    Subclasses provide the grammar via _load_language() and may extend
    _visit() with grammar-specific constructs.
    """

    # Distribution to install when the grammar cannot be imported
    grammar_package = ""

    def __init__(self) -> None:
        self._parser: Optional[Parser] = None

    @abstractmethod
    def _load_language(self) -> Language:
        """Import the grammar package and build its Language.

        Raises:
            ImportError: If the grammar package is not installed.
        """
        pass

    def _get_parser(self) -> Parser:
        if self._parser is None:
            self._parser = Parser(self._load_language())
            logger.debug(f"Loaded {self.variant()} grammar for {self.name()}")
        return self._parser

    def extract(self, content: str) -> ExtractionResult:
        module = ParsedModule()

        try:
            parser = self._get_parser()
        except ImportError as e:
            return ExtractionResult(
                module,
                error=(
                    f"Please install {self.grammar_package} to use "
                    f"{self.variant()} in check files ({e})"
                ),
            )

        tree = parser.parse(content.encode("utf-8"))
        root = tree.root_node
        if root.has_error:
            return ExtractionResult(module, error=describe_syntax_error(root))

        stack = [root]
        while stack:
            node = stack.pop()
            self._visit(node, module)
            stack.extend(reversed(node.named_children))

        return ExtractionResult(module)

    def _visit(self, node: Any, module: ParsedModule) -> None:
        """Register specifiers introduced by a single node."""
        if node.type == "import_statement":
            module.register(self._source_specifier(node))
        elif node.type == "export_statement":
            # Only re-exports carry a source: export { a } from './a', export * from './b'
            module.register(self._source_specifier(node))

    @staticmethod
    def _source_specifier(node: Any) -> Optional[str]:
        source = node.child_by_field_name("source")
        # Only literal strings are supported as import sources
        if source is None or source.type != "string":
            return None
        return string_value(source)
