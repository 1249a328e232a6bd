# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Structured errors raised by dependency resolution.

Only two failures surface immediately (unsupported or unreadable entrypoint).
Everything else discovered while walking the graph is collected and raised
once as a DependencyParseError, so a user sees every problem in one report.

Every error serializes to a JSON-compatible dict:
- type: Error identifier (unsupported_entrypoint, unreadable_entrypoint, ...)
- entrypoint: Entrypoint path of the failed run
- message: Human-readable summary
- plus category-specific fields
"""

import json
from typing import Any, Dict, List, Mapping, Optional


class DependencyResolutionError(Exception):
    """Base class for failures of a single resolution run."""

    error_type = "dependency_resolution"

    def __init__(self, entrypoint: str, message: str):
        super().__init__(message)
        self.entrypoint = entrypoint
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "type": self.error_type,
            "entrypoint": self.entrypoint,
            "message": self.message,
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        """Convert to JSON string.

        Args:
            indent: Optional indentation level for pretty printing.
        """
        return json.dumps(self.to_dict(), indent=indent)

    def format_report(self) -> str:
        """Format the error for human-readable display."""
        return f"❌ {self.message}"


class UnsupportedEntrypointError(DependencyResolutionError):
    """Raised when the entrypoint extension is not .js or .ts."""

    error_type = "unsupported_entrypoint"

    def __init__(self, entrypoint: str):
        super().__init__(entrypoint, f"Unsupported file extension for {entrypoint}")


class UnreadableEntrypointError(DependencyResolutionError):
    """Raised when the entrypoint does not exist or cannot be read."""

    error_type = "unreadable_entrypoint"

    def __init__(self, entrypoint: str, reason: Optional[str] = None):
        message = f"Cannot read entrypoint {entrypoint}"
        if reason:
            message += f": {reason}"
        super().__init__(entrypoint, message)
        self.reason = reason

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["missing_files"] = [self.entrypoint]
        return result


class DependencyLimitExceededError(DependencyResolutionError):
    """Raised when a run discovers more files than the configured ceiling."""

    error_type = "dependency_limit_exceeded"

    def __init__(self, entrypoint: str, limit: int):
        super().__init__(
            entrypoint,
            f"Dependency graph of {entrypoint} exceeds the limit of {limit} files",
        )
        self.limit = limit

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["limit"] = self.limit
        return result


class DependencyParseError(DependencyResolutionError):
    """Aggregated report of every problem found in a dependency graph.

    Attributes:
        parsing_errors: File path -> parser message.
        unsupported_dependencies: File path -> external names not allowed.
        missing_files: Candidate path -> files that referenced it.
    """

    error_type = "dependency_parse"

    def __init__(
        self,
        entrypoint: str,
        missing_files: Mapping[str, List[str]],
        parsing_errors: Mapping[str, str],
        unsupported_dependencies: Mapping[str, List[str]],
    ):
        self.missing_files = {path: list(refs) for path, refs in missing_files.items()}
        self.parsing_errors = dict(parsing_errors)
        self.unsupported_dependencies = {
            path: list(names) for path, names in unsupported_dependencies.items()
        }
        super().__init__(entrypoint, self._summary(entrypoint))

    def _summary(self, entrypoint: str) -> str:
        parts = []
        if self.missing_files:
            parts.append(f"{len(self.missing_files)} missing file(s)")
        if self.parsing_errors:
            parts.append(f"{len(self.parsing_errors)} file(s) with syntax errors")
        if self.unsupported_dependencies:
            count = sum(len(names) for names in self.unsupported_dependencies.values())
            parts.append(f"{count} unsupported dependency(ies)")
        return f"Encountered an error parsing check files for {entrypoint}: " + ", ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["missing_files"] = [
            {"file": path, "referenced_by": refs} for path, refs in self.missing_files.items()
        ]
        result["parsing_errors"] = [
            {"file": path, "error": error} for path, error in self.parsing_errors.items()
        ]
        result["unsupported_dependencies"] = [
            {"file": path, "dependencies": names}
            for path, names in self.unsupported_dependencies.items()
        ]
        return result

    def format_report(self) -> str:
        """Format every error category for human-readable display.

        Format:
        ❌ Encountered an error parsing check files for main.js: ...
          Missing files:
            - /project/missing (referenced by /project/main.js)
          Syntax errors:
            - /project/broken.js: Syntax error at line 3, column 7
          Unsupported dependencies:
            - /project/main.js: left-pad
        """
        lines = [f"❌ {self.message}"]

        if self.missing_files:
            lines.append("  Missing files:")
            for path, refs in self.missing_files.items():
                if refs:
                    lines.append(f"    - {path} (referenced by {', '.join(refs)})")
                else:
                    lines.append(f"    - {path}")

        if self.parsing_errors:
            lines.append("  Syntax errors:")
            for path, error in self.parsing_errors.items():
                lines.append(f"    - {path}: {error}")

        if self.unsupported_dependencies:
            lines.append("  Unsupported dependencies:")
            for path, names in self.unsupported_dependencies.items():
                lines.append(f"    - {path}: {', '.join(names)}")

        return "\n".join(lines)
