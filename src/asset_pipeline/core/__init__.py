"""Core types, errors and tables shared by every pipeline stage.

This package contains the asset data model, the exception taxonomy, the
colour palette and schema validation for serialized builds.
"""

from .errors import (
    AssetIOError,
    AssetPipelineError,
    MalformedAssetError,
    MissingVariableError,
    UnresolvedReferenceError,
    UnsupportedExtensionError,
)
from .types import (
    MIME_TYPES,
    Asset,
    AssetPayload,
    AssetTable,
    BuildManifest,
    BuildResult,
    PathTable,
    fingerprint,
    mime_for,
)
from .validator import manifest_errors, validate_manifest
from .variables import VARIABLES

__all__ = [
    "Asset",
    "AssetIOError",
    "AssetPayload",
    "AssetPipelineError",
    "AssetTable",
    "BuildManifest",
    "BuildResult",
    "MIME_TYPES",
    "MalformedAssetError",
    "MissingVariableError",
    "PathTable",
    "UnresolvedReferenceError",
    "UnsupportedExtensionError",
    "VARIABLES",
    "fingerprint",
    "manifest_errors",
    "mime_for",
    "validate_manifest",
]
