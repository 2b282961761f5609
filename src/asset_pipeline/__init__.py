"""Asset Pipeline.

This package scans a directory of static assets, rewrites the references
between them, fingerprints, minifies and compresses each one, and generates
a lookup table from source paths to content-addressed public paths.
"""

# Core library interface
from .config import BuildConfig
from .pipeline import BuildPipeline
from .processor import AssetProcessor
from .watcher import WatchLoop

# Core types and errors
from .core import (
    Asset,
    AssetIOError,
    AssetPayload,
    AssetPipelineError,
    AssetTable,
    BuildResult,
    MalformedAssetError,
    MissingVariableError,
    PathTable,
    UnresolvedReferenceError,
    UnsupportedExtensionError,
    VARIABLES,
)

# Sources
from .sources import AssetSource, FilesystemSource

from .cli import main

__version__ = "0.1.0"

__all__ = [
    # Primary library interface
    "BuildConfig",
    "BuildPipeline",
    "AssetProcessor",
    "WatchLoop",
    # Core types and errors
    "Asset",
    "AssetPayload",
    "AssetTable",
    "BuildResult",
    "PathTable",
    "VARIABLES",
    "AssetPipelineError",
    "AssetIOError",
    "MalformedAssetError",
    "MissingVariableError",
    "UnresolvedReferenceError",
    "UnsupportedExtensionError",
    # Sources
    "AssetSource",
    "FilesystemSource",
    # CLI
    "main",
]
