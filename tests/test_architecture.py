"""Layering rules for the package.

The dependency direction is models <- database <- services <- tools/resources
<- server. These tests read the import statements of every module and fail
when a lower layer reaches up, when the service layer couples itself to a
concrete store, or when an MCP handler reaches past the service into storage.
"""

import ast
import inspect
from pathlib import Path

import pytest

import book_library_mcp
from book_library_mcp import database, services

PACKAGE = "book_library_mcp"
PACKAGE_DIR = Path(book_library_mcp.__file__).parent


def _module_name(path: Path) -> str:
    parts = path.relative_to(PACKAGE_DIR.parent).with_suffix("").parts
    if parts[-1] == "__init__":
        parts = parts[:-1]
    return ".".join(parts)


def _imports(path: Path) -> set[str]:
    """Absolute names of every module imported by the file."""
    module = _module_name(path)
    package_parts = module.split(".") if path.name == "__init__.py" else module.split(".")[:-1]
    found: set[str] = set()

    for node in ast.walk(ast.parse(path.read_text(encoding="utf-8"))):
        if isinstance(node, ast.Import):
            found.update(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            if node.level:
                base = package_parts[: len(package_parts) - (node.level - 1)]
            else:
                base = []
            if node.module:
                found.add(".".join([*base, node.module]))
            else:
                found.update(".".join([*base, alias.name]) for alias in node.names)
    return found


def _layer_files(layer: str) -> list[Path]:
    target = PACKAGE_DIR / layer
    if target.is_dir():
        return sorted(target.rglob("*.py"))
    return [target.with_suffix(".py")]


def _violations(layer: str, forbidden: list[str]) -> list[str]:
    prefixes = [f"{PACKAGE}.{name}" for name in forbidden]
    return [
        f"{path.name} imports {name}"
        for path in _layer_files(layer)
        for name in sorted(_imports(path))
        if any(name == prefix or name.startswith(prefix + ".") for prefix in prefixes)
    ]


@pytest.mark.parametrize(
    ("layer", "forbidden"),
    [
        ("models", ["database", "services", "tools", "resources", "server", "wiring"]),
        ("exceptions", ["models", "database", "services", "tools", "resources", "server"]),
        ("database", ["services", "tools", "resources", "server", "wiring"]),
        ("services", ["tools", "resources", "server", "wiring", "database.memory"]),
        ("tools", ["database", "resources", "server"]),
        ("resources", ["database", "tools", "server"]),
    ],
)
def test_layer_dependencies(layer, forbidden):
    assert _violations(layer, forbidden) == []


def test_domain_has_no_third_party_transport():
    for path in _layer_files("models"):
        assert not any(name.startswith("fastmcp") for name in _imports(path)), path.name


def test_service_classes_are_named_service():
    for name, obj in inspect.getmembers(services, inspect.isclass):
        if obj.__module__.startswith(f"{PACKAGE}.services"):
            assert name.endswith("Service"), name


def test_repository_classes_are_named_repository():
    for name, obj in inspect.getmembers(database, inspect.isclass):
        if obj.__module__.startswith(f"{PACKAGE}.database") and "Repository" in name:
            assert name.endswith("Repository"), name
