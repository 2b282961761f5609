"""Brotli compression of text and vector assets."""

import brotli

from ..core.errors import MalformedAssetError


def compress(data: bytes) -> bytes:
    """Compress with brotli at the library's default (maximum) quality."""
    try:
        return brotli.compress(data)
    except brotli.error as e:
        raise MalformedAssetError(f"Brotli compression failed: {e}") from e
