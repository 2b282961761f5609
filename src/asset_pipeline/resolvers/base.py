"""Base interface for reference resolvers.

A resolver rewrites one kind of symbolic reference inside an asset's bytes.
Resolvers are stateless; everything they consult travels in the
``ResolveContext`` built for the asset being processed.
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..core.errors import MalformedAssetError
from ..core.variables import VARIABLES

if TYPE_CHECKING:
    from ..core.types import PathTable
    from ..sources.base import AssetSource


@dataclass
class ResolveContext:
    """What a resolver may consult while rewriting one asset.

    Attributes:
        paths: Path table holding every asset processed so far
        source: Asset source, for files inlined rather than referenced
        source_path: Asset being rewritten, used in error messages
        variables: Colour palette for ``var(--name)`` references
    """

    paths: "PathTable"
    source: "AssetSource"
    source_path: str | None = None
    variables: Mapping[str, str] = field(default_factory=lambda: VARIABLES)

    def decode(self, value: bytes) -> str:
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedAssetError(f"Invalid UTF-8 in reference: {e}", self.source_path) from e


class Resolver(ABC):
    """Abstract base class for reference resolvers."""

    @abstractmethod
    def resolve(self, data: bytes, context: ResolveContext) -> bytes:
        """Rewrite every reference this resolver recognizes.

        Args:
            data: Asset bytes
            context: Tables and source for the asset being processed

        Returns:
            The rewritten bytes

        Raises:
            AssetPipelineError: If a reference cannot be resolved
        """
        pass


class PatternResolver(Resolver):
    """Resolver that substitutes every match of a single regex."""

    pattern: re.Pattern[bytes]

    def resolve(self, data: bytes, context: ResolveContext) -> bytes:
        return self.pattern.sub(lambda match: self.replace(match, context), data)

    @abstractmethod
    def replace(self, match: re.Match[bytes], context: ResolveContext) -> bytes:
        """Return the substitution for one match."""
        pass
