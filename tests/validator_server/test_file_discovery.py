"""
Tests for resolving glob patterns to declaration files.
"""

import os
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "..", "src"))

from tsschema.validator_server.config import ValidatorServerConfig, reset_config, set_config
from tsschema.validator_server.errors import NoFilesFoundError
from tsschema.validator_server.tools.file_discovery import expand_brace_patterns, get_files


@pytest.fixture
def project(tmp_path):
    """Small project tree with sources, nested folders and excluded folders."""
    files = [
        "src/models/user.ts",
        "src/models/order.ts",
        "src/api/routes.tsx",
        "src/api/readme.md",
        "node_modules/lib/index.ts",
        "src/dist/bundle.ts",
    ]
    for relative in files:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("export interface X {}")
    return tmp_path


class TestExpandBracePatterns:
    """Test brace expansion."""

    def test_no_braces(self):
        assert expand_brace_patterns("src/**/*.ts") == ["src/**/*.ts"]

    def test_extension_alternatives(self):
        assert expand_brace_patterns("src/**/*.{ts,tsx}") == ["src/**/*.ts", "src/**/*.tsx"]

    def test_multiple_groups(self):
        assert expand_brace_patterns("{a,b}/*.{ts,tsx}") == ["a/*.ts", "a/*.tsx", "b/*.ts", "b/*.tsx"]

    def test_empty_braces_are_literal(self):
        assert expand_brace_patterns("src/{}.ts") == ["src/{}.ts"]


class TestGetFiles:
    """Test glob resolution, ordering and exclusion."""

    def test_relative_pattern_against_project_root(self, project):
        files = get_files("src/models/*.ts", project_root=str(project))

        assert files == [
            str((project / "src/models/order.ts").resolve()),
            str((project / "src/models/user.ts").resolve()),
        ]

    def test_recursive_pattern_skips_excluded_directories(self, project):
        files = get_files("**/*.ts", project_root=str(project))
        names = [Path(f).name for f in files]

        assert "index.ts" not in names
        assert "bundle.ts" not in names
        assert sorted(names) == ["order.ts", "user.ts"]

    def test_explicit_pattern_below_excluded_root_is_allowed(self, project):
        files = get_files(str(project / "node_modules/lib/*.ts"))
        assert [Path(f).name for f in files] == ["index.ts"]

    def test_pattern_order_is_kept_and_duplicates_dropped(self, project):
        files = get_files(["src/models/user.ts", "src/models/*.ts", "src/api/*.tsx"], project_root=str(project))

        assert [Path(f).name for f in files] == ["user.ts", "order.ts", "routes.tsx"]

    def test_brace_pattern(self, project):
        files = get_files("src/**/*.{ts,tsx}", project_root=str(project))
        assert {Path(f).name for f in files} == {"user.ts", "order.ts", "routes.tsx"}

    def test_absolute_pattern(self, project):
        files = get_files(str(project / "src" / "**" / "*.tsx"))
        assert files == [str((project / "src/api/routes.tsx").resolve())]

    def test_no_match_raises(self, project):
        with pytest.raises(NoFilesFoundError) as exc_info:
            get_files("src/**/*.vue", project_root=str(project))

        assert exc_info.value.code == "NO_FILES_FOUND"
        assert "src/**/*.vue" in str(exc_info.value)

    def test_configured_project_root(self, project):
        set_config(ValidatorServerConfig(project_root=str(project)))
        try:
            files = get_files("src/models/user.ts")
        finally:
            reset_config()

        assert files == [str((project / "src/models/user.ts").resolve())]
