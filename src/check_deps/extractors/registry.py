# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Registry mapping source variants to extractor plugins."""

import logging
from typing import Dict, List, Optional

from check_deps.extractors.base import SpecifierExtractor
from check_deps.extractors.javascript_extractor import JavaScriptExtractor
from check_deps.extractors.typescript_extractor import TypeScriptExtractor
from check_deps.models import ExtractionResult, ParsedModule

logger = logging.getLogger(__name__)


class ExtractorRegistry:
    """Registry of extractor plugins keyed by source variant.

    Registering a second extractor for a variant replaces the first.

    Thread Safety:
    - NOT thread-safe: Designed for single-threaded use
    - Register all extractors during initialization before resolving
    """

    def __init__(self) -> None:
        """Initialize empty extractor registry."""
        self._extractors: Dict[str, SpecifierExtractor] = {}

    def register(self, extractor: SpecifierExtractor) -> None:
        """Register an extractor plugin.

        Args:
            extractor: Extractor to register.

        Raises:
            TypeError: If extractor is not a SpecifierExtractor instance.
        """
        if not isinstance(extractor, SpecifierExtractor):
            raise TypeError(
                f"Extractor must be a SpecifierExtractor instance, got {type(extractor)}"
            )

        variant = extractor.variant()
        if variant in self._extractors:
            logger.debug(f"Replacing extractor for '{variant}' with '{extractor.name()}'")
        self._extractors[variant] = extractor

        logger.debug(f"Registered extractor '{extractor.name()}' for variant '{variant}'")

    def get(self, variant: str) -> Optional[SpecifierExtractor]:
        return self._extractors.get(variant)

    def variants(self) -> List[str]:
        return sorted(self._extractors)

    def extract(self, content: str, variant: str) -> ExtractionResult:
        """Extract specifiers with the extractor registered for variant.

        An unknown variant is reported as an extraction error, not raised.
        """
        extractor = self.get(variant)
        if extractor is None:
            return ExtractionResult(ParsedModule(), error=f"Unsupported source variant: {variant}")
        return extractor.extract(content)

    def clear(self) -> None:
        self._extractors.clear()

    def count(self) -> int:
        return len(self._extractors)


def create_default_registry() -> ExtractorRegistry:
    """Create a registry with the JavaScript and TypeScript extractors."""
    registry = ExtractorRegistry()
    registry.register(JavaScriptExtractor())
    registry.register(TypeScriptExtractor())
    return registry


def extract(content: str, variant: str) -> ExtractionResult:
    """Extract specifiers from content using a fresh default registry."""
    return create_default_registry().extract(content, variant)
