"""Filesystem asset source.

This module discovers assets under a local directory and reads them,
refusing paths that escape the asset root.
"""

import os
from collections.abc import Iterable
from pathlib import Path

from ..core.errors import AssetIOError
from .base import AssetSource

DEFAULT_IGNORE_PREFIX = "_"

# The generated module and its package live next to the assets
DEFAULT_IGNORED_SUFFIXES = (".py", ".pyc")


def validate_path_safety(path: Path, base_dir: Path) -> None:
    """Validate that a path stays within the base directory.

    Args:
        path: Path to validate
        base_dir: Base directory that path must be within

    Raises:
        AssetIOError: If path escapes the base directory
    """
    resolved_path = path.resolve()
    resolved_base = base_dir.resolve()

    if not resolved_path.is_relative_to(resolved_base):
        raise AssetIOError(f"Path {path} escapes base directory {base_dir}")


def is_ignored(filename: str, ignore_prefix: str, ignored_suffixes: Iterable[str]) -> bool:
    """Check whether a file is excluded from standalone processing.

    Example:
        "_icon.svg" -> True (partial, only inlined)
        "assets.py" -> True (generated output)
        "app.css" -> False
    """
    if ignore_prefix and filename.startswith(ignore_prefix):
        return True
    return any(filename.endswith(suffix) for suffix in ignored_suffixes)


class FilesystemSource(AssetSource):
    """Asset source backed by a local directory.

    Example:
        >>> source = FilesystemSource(Path('assets'))
        >>> for path in source.list_files():
        ...     data = source.read(path)
    """

    def __init__(
        self,
        path: Path,
        ignore_prefix: str = DEFAULT_IGNORE_PREFIX,
        ignored_suffixes: Iterable[str] = DEFAULT_IGNORED_SUFFIXES,
        exclude: Iterable[Path] = (),
    ):
        """Initialize filesystem source.

        Args:
            path: Asset root directory
            ignore_prefix: Base-name prefix marking partial files
            ignored_suffixes: File suffixes never treated as assets
            exclude: Extra files to skip, such as the build output

        Raises:
            ValueError: If path doesn't exist or isn't a directory
        """
        self.path = path.resolve()

        if not self.path.exists():
            raise ValueError(f"Path does not exist: {self.path}")

        if not self.path.is_dir():
            raise ValueError(f"Path is not a directory: {self.path}")

        self.ignore_prefix = ignore_prefix
        self.ignored_suffixes = tuple(ignored_suffixes)
        self.exclude = {p.resolve() for p in exclude}

    def list_files(self) -> list[str]:
        files: list[str] = []

        def _raise(error: OSError) -> None:
            raise AssetIOError(f"Failed to walk {error.filename}: {error.strerror}") from error

        for dirpath, _, filenames in os.walk(self.path, onerror=_raise):
            for filename in filenames:
                if is_ignored(filename, self.ignore_prefix, self.ignored_suffixes):
                    continue

                file_path = Path(dirpath) / filename
                if file_path.resolve() in self.exclude:
                    continue

                validate_path_safety(file_path, self.path)
                files.append(file_path.relative_to(self.path).as_posix())

        return files

    def read(self, path: str) -> bytes:
        file_path = self.path / path
        validate_path_safety(file_path, self.path)

        try:
            return file_path.read_bytes()
        except OSError as e:
            raise AssetIOError(f"Failed to read {path}: {e.strerror or e}", path) from e
