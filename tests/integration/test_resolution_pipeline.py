# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Integration tests for the full resolution pipeline.

NOTE: Marked as slow tests - integration tests create full project structures.
Run with: pytest -m slow

Resolves check projects on disk with FileSystemReader, the tree-sitter
extractors and configuration loaded from .check_deps.yml.
"""

import json
from pathlib import Path

import pytest

from check_deps.cli import main
from check_deps.config import CONFIG_FILENAME, Config
from check_deps.errors import DependencyParseError
from check_deps.resolver import DependencyResolver, resolve_dependencies

# Mark entire module as slow - integration tests create full project structures
pytestmark = pytest.mark.slow


def _relative(files, project_root: Path):
    return sorted(str(Path(path).relative_to(project_root)) for path in files)


class TestResolutionPipeline:
    """Resolution of a mixed JavaScript/TypeScript project."""

    def test_typescript_entrypoint(self, sample_project: Path):
        """Test the TypeScript check resolves every transitive file."""
        config = Config(config_path=sample_project / CONFIG_FILENAME)

        files = resolve_dependencies(str(sample_project / "checks" / "login.check.ts"), config)

        assert _relative(files, sample_project) == [
            "checks/login.check.ts",
            "checks/types.ts",
            "lib/browser.ts",
            "lib/credentials.js",
            "lib/helpers.js",
            "lib/polyfills.ts",
            "lib/retry.js",
        ]
        helpers = str(sample_project / "lib" / "helpers.js")
        assert files[helpers] == (sample_project / "lib" / "helpers.js").read_text()

    def test_javascript_entrypoint(self, sample_project: Path):
        """Test require(), module.require() and template specifiers are followed."""
        config = Config(config_path=sample_project / CONFIG_FILENAME)

        files = resolve_dependencies(str(sample_project / "checks" / "api.check.js"), config)

        assert _relative(files, sample_project) == [
            "checks/api.check.js",
            "lib/credentials.js",
            "lib/helpers.js",
            "lib/retry.js",
        ]

    def test_package_not_in_config_is_reported(self, sample_project: Path):
        """Test that without the config file the package is unsupported."""
        resolver = DependencyResolver.from_config(Config.from_dict({}))
        entrypoint = str(sample_project / "checks" / "login.check.ts")

        with pytest.raises(DependencyParseError) as exc_info:
            resolver.resolve(entrypoint)

        assert exc_info.value.unsupported_dependencies == {entrypoint: ["@playwright/test"]}

    def test_every_error_reported_at_once(self, sample_project: Path):
        """Test a broken project yields one error listing all problems."""
        lib_dir = sample_project / "lib"
        (lib_dir / "helpers.js").write_text("exports.wait = (ms => {\n")
        (lib_dir / "credentials.js").unlink()
        config = Config(config_path=sample_project / CONFIG_FILENAME)

        with pytest.raises(DependencyParseError) as exc_info:
            resolve_dependencies(str(sample_project / "checks" / "api.check.js"), config)

        error = exc_info.value
        assert list(error.parsing_errors) == [str(lib_dir / "helpers.js")]
        assert error.parsing_errors[str(lib_dir / "helpers.js")].startswith("Syntax error")
        assert error.missing_files == {
            str(lib_dir / "credentials.js"): [str(sample_project / "checks" / "api.check.js")]
        }

    def test_file_size_limit_from_config(self, sample_project: Path):
        """Test files larger than max_file_size_kb count as missing."""
        (sample_project / "lib" / "credentials.js").write_text("// " + "x" * 4096 + "\n")
        config = Config.from_dict({"allowed_packages": ["@playwright/test"], "max_file_size_kb": 2})

        with pytest.raises(DependencyParseError) as exc_info:
            resolve_dependencies(str(sample_project / "checks" / "api.check.js"), config)

        assert list(exc_info.value.missing_files) == [
            str(sample_project / "lib" / "credentials.js")
        ]


class TestCommandLine:
    """End-to-end runs of the check-deps command."""

    def test_cli_resolves_project(self, sample_project: Path, monkeypatch, capsys):
        """Test the CLI picks up .check_deps.yml from the working directory."""
        monkeypatch.chdir(sample_project)

        exit_code = main(["checks/login.check.ts", "-f", "paths"])

        assert exit_code == 0
        assert capsys.readouterr().out.splitlines() == [
            "checks/login.check.ts",
            "checks/types.ts",
            "lib/browser.ts",
            "lib/credentials.js",
            "lib/helpers.js",
            "lib/polyfills.ts",
            "lib/retry.js",
        ]

    def test_cli_writes_log_file(self, sample_project: Path, tmp_path: Path, monkeypatch, capsys):
        """Test --log-dir produces structured JSON logs."""
        monkeypatch.chdir(sample_project)
        log_dir = tmp_path / "logs"

        exit_code = main(["checks/api.check.js", "--log-dir", str(log_dir), "-v"])

        assert exit_code == 0
        log_files = list(log_dir.glob("check_deps_*.log"))
        assert len(log_files) == 1
        messages = [json.loads(line)["message"] for line in log_files[0].read_text().splitlines()]
        assert any(message.startswith("Resolved 4 file(s)") for message in messages)
