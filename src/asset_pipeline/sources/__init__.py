"""Asset sources for the build pipeline.

This package contains the source interface and the filesystem
implementation used by the CLI.
"""

from .base import AssetSource
from .filesystem import FilesystemSource, is_ignored, validate_path_safety

__all__ = ["AssetSource", "FilesystemSource", "is_ignored", "validate_path_safety"]
