"""Type definitions for processed assets and build tables.

The ``BuildManifest`` TypedDicts mirror the JSON schema in
``schemas/build_manifest.schema.json``.
"""

import base64
import hashlib
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import NamedTuple, TypedDict

from .errors import AssetPipelineError, UnresolvedReferenceError, UnsupportedExtensionError

MIME_TYPES: dict[str, str] = {
    ".css": "text/css",
    ".jpg": "image/jpeg",
    ".js": "application/javascript",
    ".png": "image/png",
    ".svg": "image/svg+xml",
    ".webmanifest": "application/manifest+json",
    ".woff2": "font/woff2",
}

# Bytes of the SHA-256 digest kept in a fingerprint
FINGERPRINT_DIGEST_SIZE = 16


def mime_for(source_path: str) -> str:
    """Look up the MIME type for a source path by its extension.

    Args:
        source_path: Path relative to the asset root

    Returns:
        MIME type string

    Raises:
        UnsupportedExtensionError: If the extension is not in MIME_TYPES
    """
    suffix = PurePosixPath(source_path).suffix
    try:
        return MIME_TYPES[suffix]
    except KeyError:
        raise UnsupportedExtensionError(
            f"Unsupported extension {suffix or '(none)'!r}", source_path
        ) from None


def fingerprint(data: bytes) -> str:
    """Compute the content fingerprint of transformed bytes.

    Truncated SHA-256, URL-safe base64 without padding.
    """
    digest = hashlib.sha256(data).digest()[:FINGERPRINT_DIGEST_SIZE]
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


class AssetPayload(NamedTuple):
    """Entry of the asset table, keyed by fingerprint."""

    br: bytes
    data: bytes
    webp: bytes
    mime: str


@dataclass(frozen=True)
class Asset:
    """One processed file.

    Attributes:
        source_path: Path relative to the asset root (POSIX separators)
        mime: MIME type derived from the extension
        raw: Bytes as read from the source
        data: Bytes after reference resolution and minification
        fingerprint: Content hash of ``data``
        public_path: Prefix plus fingerprint; what references resolve to
        br: Brotli-compressed ``data`` (production, text and vector types)
        webp: Lossless WebP re-encoding (production, PNG only)
    """

    source_path: str
    mime: str
    raw: bytes
    data: bytes
    fingerprint: str
    public_path: str
    br: bytes = b""
    webp: bytes = b""

    @property
    def payload(self) -> AssetPayload:
        return AssetPayload(br=self.br, data=self.data, webp=self.webp, mime=self.mime)


class PathTable:
    """Append-only mapping of source paths to public paths for one build."""

    def __init__(self) -> None:
        self._paths: dict[str, str] = {}

    def add(self, source_path: str, public_path: str) -> None:
        if source_path in self._paths:
            raise AssetPipelineError("Asset processed twice in one build", source_path)
        self._paths[source_path] = public_path

    def resolve(self, path: str, referrer: str | None = None) -> str:
        """Return the public path for ``path``.

        Raises:
            UnresolvedReferenceError: If ``path`` has not been processed yet
        """
        try:
            return self._paths[path]
        except KeyError:
            raise UnresolvedReferenceError(path, referrer) from None

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)

    def as_dict(self) -> dict[str, str]:
        return dict(self._paths)


class AssetTable:
    """Mapping of fingerprints to payloads for one build.

    Byte-identical assets share a fingerprint and therefore one entry.
    """

    def __init__(self) -> None:
        self._assets: dict[str, AssetPayload] = {}

    def put(self, asset: Asset) -> None:
        self._assets[asset.fingerprint] = asset.payload

    def __getitem__(self, key: str) -> AssetPayload:
        return self._assets[key]

    def __contains__(self, key: object) -> bool:
        return key in self._assets

    def __len__(self) -> int:
        return len(self._assets)

    def __iter__(self) -> Iterator[str]:
        return iter(self._assets)

    def as_dict(self) -> dict[str, AssetPayload]:
        return dict(self._assets)


@dataclass
class BuildResult:
    """Outcome of one build cycle."""

    paths: PathTable
    assets: AssetTable
    order: list[str] = field(default_factory=list)
    dev: bool = False
    elapsed: float = 0.0


class ManifestAsset(TypedDict):
    """Serialized asset payload; byte fields are base64 strings."""

    br: str
    data: str
    webp: str
    mime: str


class BuildManifest(TypedDict):
    """JSON serialization of a build."""

    paths: dict[str, str]
    assets: dict[str, ManifestAsset]
