# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Tests for structured resolution errors."""

import json

from check_deps.errors import (
    DependencyLimitExceededError,
    DependencyParseError,
    DependencyResolutionError,
    UnreadableEntrypointError,
    UnsupportedEntrypointError,
)


def make_parse_error():
    return DependencyParseError(
        "/checks/main.ts",
        missing_files={"/checks/missing": ["/checks/main.ts"]},
        parsing_errors={"/checks/broken.ts": "Syntax error at line 2, column 5"},
        unsupported_dependencies={"/checks/main.ts": ["left-pad"]},
    )


class TestEntrypointErrors:
    """Tests for fail-fast entrypoint errors."""

    def test_unsupported_entrypoint(self):
        """Test unsupported extension message and serialization."""
        error = UnsupportedEntrypointError("/checks/main.py")

        assert isinstance(error, DependencyResolutionError)
        assert str(error) == "Unsupported file extension for /checks/main.py"
        assert error.to_dict() == {
            "type": "unsupported_entrypoint",
            "entrypoint": "/checks/main.py",
            "message": "Unsupported file extension for /checks/main.py",
        }

    def test_unreadable_entrypoint(self):
        """Test unreadable entrypoint lists itself as the only missing file."""
        error = UnreadableEntrypointError("/checks/gone.js", "No such file")

        data = error.to_dict()
        assert data["type"] == "unreadable_entrypoint"
        assert data["missing_files"] == ["/checks/gone.js"]
        assert "No such file" in data["message"]
        assert error.format_report().startswith("❌ Cannot read entrypoint /checks/gone.js")

    def test_limit_exceeded(self):
        """Test limit error carries the limit."""
        error = DependencyLimitExceededError("/checks/main.js", 10)

        assert error.to_dict()["limit"] == 10
        assert "10 files" in str(error)


class TestDependencyParseError:
    """Tests for the aggregated report."""

    def test_summary_counts_categories(self):
        """Test the message summarizes every category."""
        error = make_parse_error()

        assert "1 missing file(s)" in error.message
        assert "1 file(s) with syntax errors" in error.message
        assert "1 unsupported dependency(ies)" in error.message

    def test_to_json_round_trips(self):
        """Test JSON output contains every entry."""
        data = json.loads(make_parse_error().to_json())

        assert data["type"] == "dependency_parse"
        assert data["entrypoint"] == "/checks/main.ts"
        assert data["missing_files"] == [
            {"file": "/checks/missing", "referenced_by": ["/checks/main.ts"]}
        ]
        assert data["parsing_errors"] == [
            {"file": "/checks/broken.ts", "error": "Syntax error at line 2, column 5"}
        ]
        assert data["unsupported_dependencies"] == [
            {"file": "/checks/main.ts", "dependencies": ["left-pad"]}
        ]

    def test_format_report(self):
        """Test the human-readable report lists every problem."""
        report = make_parse_error().format_report()

        assert "Missing files:" in report
        assert "- /checks/missing (referenced by /checks/main.ts)" in report
        assert "Syntax errors:" in report
        assert "- /checks/broken.ts: Syntax error at line 2, column 5" in report
        assert "Unsupported dependencies:" in report
        assert "- /checks/main.ts: left-pad" in report

    def test_format_report_omits_empty_categories(self):
        """Test that empty categories are left out of the report."""
        error = DependencyParseError("/checks/main.js", {"/checks/x": []}, {}, {})
        report = error.format_report()

        assert "- /checks/x" in report
        assert "Syntax errors:" not in report
        assert "Unsupported dependencies:" not in report
