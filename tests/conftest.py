"""Shared fixtures: Go source trees written to disk and in-memory parsing."""

import textwrap
import os
from pathlib import Path

import pytest

from dddcheck.domain.services.marker_registry import MarkerRegistry
from dddcheck.infrastructure.ast.go_parser import GoParser
from dddcheck.infrastructure.logging import DddCheckLogger, LogContext


MODULE = "example.com/shop"

_REGISTRY = MarkerRegistry()
PLACEHOLDERS = {
    "VO_PKG": _REGISTRY.get_marker("value_object").package_path,
    "ENTITY_PKG": _REGISTRY.get_marker("entity").package_path,
    "AGGREGATE_PKG": _REGISTRY.get_marker("aggregate").package_path,
    "COMMAND_PKG": _REGISTRY.get_marker("command").package_path,
}


def go_source(source: str) -> str:
    """Dedent a Go snippet and expand marker package placeholders."""
    text = textwrap.dedent(source).lstrip("\n")
    for placeholder, package_path in PLACEHOLDERS.items():
        text = text.replace(placeholder, package_path)
    return text


class GoTree:
    """A Go module rooted in a temporary directory."""

    def __init__(self, root: Path, module: str = MODULE):
        self.root = root
        self.module = module
        (root / "go.mod").write_text(f"module {module}\n\ngo 1.21\n", encoding="utf-8")

    def write(self, relative: str, source: str) -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(go_source(source), encoding="utf-8")
        return path

    def path(self, relative: str) -> str:
        return str(self.root / relative)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path_factory):
    """Keep user config and stray DDDCHECK_* variables out of every test."""
    monkeypatch.setenv("HOME", str(tmp_path_factory.mktemp("home")))
    for key in list(os.environ):
        if key.startswith("DDDCHECK_"):
            monkeypatch.delenv(key)

    DddCheckLogger.reset()
    LogContext.clear()
    yield
    DddCheckLogger.reset()
    LogContext.clear()


@pytest.fixture
def go_tree(tmp_path):
    return GoTree(tmp_path)


@pytest.fixture(scope="session")
def go_parser():
    return GoParser()


@pytest.fixture
def parse_go(go_parser):
    """Parse a Go snippet held in memory."""
    def parse(source: str, path: str = "money.go", package_path: str = f"{MODULE}/domain"):
        return go_parser.parse(
            go_source(source).encode("utf-8"),
            path,
            lambda package_name: package_path,
        )
    return parse
