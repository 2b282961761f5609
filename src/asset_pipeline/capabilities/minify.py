"""Minifier registry keyed by MIME type.

The registry maps MIME types to minifier callables, so the processor can
ask for ``minify(mime, data)`` without knowing which library handles it.
"""

import json
from typing import Callable

import rcssmin
import rjsmin

from ..core.errors import MalformedAssetError

Minifier = Callable[[bytes], bytes]


def _decode(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedAssetError(f"Invalid UTF-8: {e}") from e


def minify_css(data: bytes) -> bytes:
    return rcssmin.cssmin(_decode(data)).encode("utf-8")


def minify_js(data: bytes) -> bytes:
    return rjsmin.jsmin(_decode(data)).encode("utf-8")


def minify_json(data: bytes) -> bytes:
    """Re-serialize JSON compactly, keeping key order and non-ASCII text."""
    try:
        document = json.loads(_decode(data))
    except json.JSONDecodeError as e:
        raise MalformedAssetError(f"Invalid JSON: {e}") from e
    return json.dumps(document, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


class MinifierRegistry:
    """Registry of minifier functions.

    Example:
        >>> registry = MinifierRegistry.default()
        >>> registry.minify('text/css', b'a { color: red; }')
        b'a{color:red}'
    """

    def __init__(self) -> None:
        self._minifiers: dict[str, Minifier] = {}

    def register(self, mime: str, minifier: Minifier) -> None:
        """Register a minifier for a MIME type, replacing any previous one.

        Args:
            mime: MIME type (e.g., 'text/css')
            minifier: Callable taking and returning bytes; raises
                MalformedAssetError on input it cannot parse
        """
        self._minifiers[mime] = minifier

    def minify(self, mime: str, data: bytes) -> bytes:
        """Minify ``data`` with the minifier registered for ``mime``.

        Raises:
            ValueError: If no minifier is registered for ``mime``
            MalformedAssetError: If the minifier rejects the input
        """
        if mime not in self._minifiers:
            available = ", ".join(sorted(self._minifiers)) or "none"
            raise ValueError(f"No minifier for {mime}. Available: {available}")
        return self._minifiers[mime](data)

    def list_mimes(self) -> list[str]:
        return sorted(self._minifiers)

    @classmethod
    def default(cls) -> "MinifierRegistry":
        """Registry with the stylesheet, script and manifest minifiers."""
        registry = cls()
        registry.register("text/css", minify_css)
        registry.register("application/javascript", minify_js)
        registry.register("application/manifest+json", minify_json)
        return registry
