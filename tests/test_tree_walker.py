"""Tests for TreeWalker - source enumeration and parsing."""

import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from dddcheck.domain.exceptions import RootPathError
from dddcheck.infrastructure.ast.go_parser import GoParser
from dddcheck.infrastructure.filesystem.tree_walker import TreeWalker


@pytest.fixture
def walker():
    return TreeWalker(parser=GoParser())


class TestDiscoverFiles:
    """File enumeration rules."""

    def test_skips_tests_vendor_and_other_extensions(self, go_tree, walker):
        go_tree.write("domain/money.go", "package domain\n")
        go_tree.write("domain/money_test.go", "package domain\n")
        go_tree.write("vendor/lib/lib.go", "package lib\n")
        go_tree.write(".git/hooks/hook.go", "package hooks\n")
        go_tree.write("README.md", "# shop\n")
        go_tree.write("app/service.go", "package app\n")

        files = walker.discover_files(go_tree.root)

        assert [str(f.relative_to(go_tree.root)) for f in files] == [
            "app/service.go",
            "domain/money.go",
        ]

    def test_custom_exclusions(self, go_tree):
        go_tree.write("gen/types.go", "package gen\n")
        go_tree.write("domain/money.go", "package domain\n")

        walker = TreeWalker(parser=GoParser(), excluded_dirs=["gen"])
        files = walker.discover_files(go_tree.root)

        assert [f.name for f in files] == ["money.go"]

    def test_is_source_file(self, walker):
        assert walker.is_source_file("money.go")
        assert not walker.is_source_file("money_test.go")
        assert not walker.is_source_file("money.go.orig")

    def test_missing_root(self, tmp_path, walker):
        with pytest.raises(RootPathError, match="does not exist"):
            walker.discover_files(tmp_path / "missing")

    def test_root_is_a_file(self, go_tree, walker):
        path = go_tree.write("main.go", "package main\n")
        with pytest.raises(RootPathError, match="not a directory"):
            walker.discover_files(path)


class TestParseTree:
    """Parsing every discovered file."""

    def test_package_paths_follow_module(self, go_tree, walker):
        go_tree.write("domain/money.go", "package domain\n")
        go_tree.write("main.go", "package main\n")

        files = walker.parse_tree(go_tree.root)

        assert {f.path: f.package_path for f in files} == {
            go_tree.path("domain/money.go"): "example.com/shop/domain",
            go_tree.path("main.go"): "example.com/shop",
        }

    def test_broken_files_are_dropped(self, go_tree, walker):
        """Syntax errors and undecodable files are skipped, not fatal."""
        go_tree.write("domain/money.go", "package domain\n")
        go_tree.write("domain/broken.go", "package domain\n\nfunc broken( {\n")
        (go_tree.root / "domain" / "latin1.go").write_bytes(b"package domain\n// caf\xe9\n")

        files = walker.parse_tree(go_tree.root)

        assert [f.path for f in files] == [go_tree.path("domain/money.go")]

    def test_executor_gives_same_result(self, go_tree, walker):
        for i in range(8):
            go_tree.write(f"pkg{i}/file.go", f"package pkg{i}\n\ntype T{i} struct{{}}\n")

        sequential = walker.parse_tree(go_tree.root)
        with ThreadPoolExecutor(max_workers=4) as executor:
            threaded = walker.parse_tree(go_tree.root, executor)

        assert [f.path for f in threaded] == [f.path for f in sequential]
        assert [f.structs for f in threaded] == [f.structs for f in sequential]

    def test_empty_tree(self, go_tree, walker):
        assert walker.parse_tree(go_tree.root) == []


class TestUnreadableEntries:
    """Access errors below the root are skipped; an unreadable root is fatal."""

    @staticmethod
    def deny(path):
        raise PermissionError(13, "Permission denied", str(path))

    def test_unreadable_root(self, go_tree, walker, monkeypatch):
        go_tree.write("domain/money.go", "package domain\n")
        monkeypatch.setattr(os, "scandir", lambda path=".": self.deny(path))

        with pytest.raises(RootPathError, match="Cannot read root path"):
            walker.discover_files(go_tree.root)

    def test_unreadable_directory_is_skipped(self, go_tree, walker, monkeypatch):
        go_tree.write("app/service.go", "package app\n")
        go_tree.write("secret/keys.go", "package secret\n")
        go_tree.write("domain/money.go", "package domain\n")
        locked = go_tree.root / "secret"
        real_scandir = os.scandir

        def scandir(path="."):
            if Path(path) == locked:
                self.deny(path)
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", scandir)
        files = walker.parse_tree(go_tree.root)

        assert [f.path for f in files] == [
            go_tree.path("app/service.go"),
            go_tree.path("domain/money.go"),
        ]

    def test_unreadable_file_is_skipped(self, go_tree, walker, monkeypatch):
        go_tree.write("domain/money.go", "package domain\n")
        go_tree.write("domain/locked.go", "package domain\n")
        locked = go_tree.root / "domain" / "locked.go"
        real_read_bytes = Path.read_bytes

        def read_bytes(path):
            if path == locked:
                self.deny(path)
            return real_read_bytes(path)

        monkeypatch.setattr(Path, "read_bytes", read_bytes)

        assert len(walker.discover_files(go_tree.root)) == 2
        files = walker.parse_tree(go_tree.root)
        assert [f.path for f in files] == [go_tree.path("domain/money.go")]
