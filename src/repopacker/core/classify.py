"""Extension allow-lists used to classify repository files."""

from __future__ import annotations

from collections.abc import Callable, Collection
from pathlib import PurePosixPath

from repopacker.core.types import Node

DEFAULT_CODE_EXTENSIONS: frozenset[str] = frozenset(
    {
        "js",
        "ts",
        "jsx",
        "tsx",
        "py",
        "java",
        "cpp",
        "h",
        "html",
        "css",
        "md",
        "json",
        "go",
        "rs",
        "php",
        "rb",
        "sql",
        "yaml",
        "yml",
        "toml",
    }
)

DEFAULT_IMAGE_EXTENSIONS: frozenset[str] = frozenset({"png", "jpg", "jpeg", "gif", "webp", "ico"})


def extension_of(path: str) -> str:
    """Return the lower-cased extension of `path` without the dot ('' if none)."""
    return PurePosixPath(path).suffix.lower().lstrip(".")


def has_extension(path: str, extensions: Collection[str]) -> bool:
    return extension_of(path) in extensions


def code_file_predicate(extensions: Collection[str] = DEFAULT_CODE_EXTENSIONS) -> Callable[[Node], bool]:
    """Build a leaf predicate that selects files with a code extension."""
    allowed = frozenset(e.lower().lstrip(".") for e in extensions)

    def _is_code(node: Node) -> bool:
        return has_extension(node.name, allowed)

    return _is_code
