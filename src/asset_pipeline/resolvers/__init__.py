"""Reference resolvers.

Each resolver rewrites one marker syntax behind the common
``Resolver.resolve(data, context)`` interface, so the matching strategy can
change without touching the processor.
"""

from .base import PatternResolver, ResolveContext, Resolver
from .references import (
    AssetPathResolver,
    AssetURLResolver,
    ManifestSrcResolver,
    VariableResolver,
)
from .svg_embed import SVGEmbedResolver

__all__ = [
    "AssetPathResolver",
    "AssetURLResolver",
    "ManifestSrcResolver",
    "PatternResolver",
    "ResolveContext",
    "Resolver",
    "SVGEmbedResolver",
    "VariableResolver",
]
