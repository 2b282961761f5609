"""Resolvers for path and colour-variable references.

Marker syntaxes:
    asset-url('images/logo.png')   -> url(/assets/<fingerprint>)
    assetPath('images/logo.png')   -> '/assets/<fingerprint>'
    var(--blue)                    -> #007bff
    "src":"images/icon.png"        -> "src":"/assets/<fingerprint>"
"""

import re

from ..core.errors import MissingVariableError
from .base import PatternResolver, ResolveContext


class AssetURLResolver(PatternResolver):
    """Stylesheet ``asset-url('<path>')`` references."""

    pattern = re.compile(rb"asset-url\('(.*?)'\)")

    def replace(self, match: re.Match[bytes], context: ResolveContext) -> bytes:
        path = context.decode(match.group(1))
        public_path = context.paths.resolve(path, context.source_path)
        return b"url(" + public_path.encode("utf-8") + b")"


class AssetPathResolver(PatternResolver):
    """``assetPath('<path>')`` references, rewritten to a quoted string."""

    pattern = re.compile(rb"assetPath\('(.*?)'\)")

    def replace(self, match: re.Match[bytes], context: ResolveContext) -> bytes:
        path = context.decode(match.group(1))
        public_path = context.paths.resolve(path, context.source_path)
        return b"'" + public_path.encode("utf-8") + b"'"


class VariableResolver(PatternResolver):
    """``var(--<name>)`` colour references."""

    pattern = re.compile(rb"var\(--(.*?)\)")

    def replace(self, match: re.Match[bytes], context: ResolveContext) -> bytes:
        name = context.decode(match.group(1))
        try:
            return context.variables[name].encode("utf-8")
        except KeyError:
            raise MissingVariableError(name, context.source_path) from None


class ManifestSrcResolver(PatternResolver):
    """``"src":"<path>"`` fields of a minified web manifest."""

    pattern = re.compile(rb'"src":"(.*?)"')

    def replace(self, match: re.Match[bytes], context: ResolveContext) -> bytes:
        path = context.decode(match.group(1))
        public_path = context.paths.resolve(path, context.source_path)
        return b'"src":"' + public_path.encode("utf-8") + b'"'
