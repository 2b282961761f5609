"""Per-file asset processing.

This module drives one file through reference resolution, minification,
optional compression or re-encoding, and fingerprinting. Which passes run,
and in which order, is decided by the file's MIME type.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Callable

from .capabilities import Capabilities
from .core.errors import MalformedAssetError
from .core.types import Asset, PathTable, fingerprint, mime_for
from .resolvers import (
    AssetPathResolver,
    AssetURLResolver,
    ManifestSrcResolver,
    ResolveContext,
    Resolver,
    SVGEmbedResolver,
    VariableResolver,
)
from .sources.base import AssetSource

DEFAULT_PUBLIC_PREFIX = "/assets/"


@dataclass(frozen=True)
class ProcessingRule:
    """Passes applied to one MIME type.

    Attributes:
        pre: Resolvers run on the raw bytes, before minification
        minify: Whether to minify
        post: Resolvers run on the minified bytes
        compress: Whether to brotli-compress outside development mode
        reencode: Whether to build a WebP alternate outside development mode
    """

    pre: tuple[Resolver, ...] = ()
    minify: bool = False
    post: tuple[Resolver, ...] = ()
    compress: bool = False
    reencode: bool = False


# SVG embedding must follow minification; see resolvers.svg_embed.
RULES: Mapping[str, ProcessingRule] = {
    "text/css": ProcessingRule(
        pre=(AssetURLResolver(), VariableResolver(), AssetPathResolver()),
        minify=True,
        post=(SVGEmbedResolver(),),
        compress=True,
    ),
    "application/javascript": ProcessingRule(
        pre=(AssetPathResolver(),),
        minify=True,
        compress=True,
    ),
    "application/manifest+json": ProcessingRule(
        pre=(AssetPathResolver(),),
        minify=True,
        post=(ManifestSrcResolver(),),
    ),
    "image/svg+xml": ProcessingRule(
        pre=(VariableResolver(),),
        compress=True,
    ),
    "image/png": ProcessingRule(reencode=True),
}

# JPEG, fonts: passed through unchanged
PASSTHROUGH = ProcessingRule()


class AssetProcessor:
    """Turn raw file bytes into a fingerprinted Asset.

    The processor reads the path table but never writes it; the build
    pipeline records each asset after ``process`` returns.

    Example:
        >>> processor = AssetProcessor(paths, source, dev=True)
        >>> asset = processor.process('app.css', source.read('app.css'))
        >>> asset.public_path
        '/assets/...'
    """

    def __init__(
        self,
        paths: PathTable,
        source: AssetSource,
        dev: bool = False,
        public_prefix: str = DEFAULT_PUBLIC_PREFIX,
        capabilities: Capabilities | None = None,
        rules: Mapping[str, ProcessingRule] = RULES,
    ):
        self.paths = paths
        self.source = source
        self.dev = dev
        self.public_prefix = public_prefix
        self.capabilities = capabilities or Capabilities()
        self.rules = rules

    def process(self, source_path: str, raw: bytes) -> Asset:
        """Process one file.

        Args:
            source_path: Path relative to the asset root
            raw: File contents

        Returns:
            The processed Asset

        Raises:
            UnsupportedExtensionError: If the extension has no MIME type
            UnresolvedReferenceError: If a referenced path is not processed yet
            MissingVariableError: If a colour variable is unknown
            AssetIOError: If an inlined file cannot be read
            MalformedAssetError: If minification or re-encoding fails
        """
        mime = mime_for(source_path)
        rule = self.rules.get(mime, PASSTHROUGH)
        context = ResolveContext(paths=self.paths, source=self.source, source_path=source_path)

        data = raw
        for resolver in rule.pre:
            data = resolver.resolve(data, context)

        if rule.minify:
            data = self._apply(
                source_path, lambda d: self.capabilities.minifiers.minify(mime, d), data
            )

        for resolver in rule.post:
            data = resolver.resolve(data, context)

        br = webp = b""
        if not self.dev:
            if rule.compress:
                br = self._apply(source_path, self.capabilities.compress, data)
            if rule.reencode:
                webp = self._apply(source_path, self.capabilities.reencode, data)

        digest = fingerprint(data)

        return Asset(
            source_path=source_path,
            mime=mime,
            raw=raw,
            data=data,
            fingerprint=digest,
            public_path=self.public_prefix + digest,
            br=br,
            webp=webp,
        )

    @staticmethod
    def _apply(source_path: str, func: Callable[[bytes], bytes], data: bytes) -> bytes:
        # Capabilities don't know which file they are working on
        try:
            return func(data)
        except MalformedAssetError as e:
            if e.source_path:
                raise
            raise MalformedAssetError(str(e), source_path) from e
