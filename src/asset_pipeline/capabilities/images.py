"""Raster image re-encoding.

PNG assets get a lossless WebP alternate in production builds.
"""

from io import BytesIO

from PIL import Image, UnidentifiedImageError

from ..core.errors import MalformedAssetError


def reencode_webp(data: bytes) -> bytes:
    """Decode a raster image and re-encode it as lossless WebP.

    Args:
        data: Encoded image bytes (PNG)

    Returns:
        WebP bytes

    Raises:
        MalformedAssetError: If decoding or encoding fails
    """
    try:
        with Image.open(BytesIO(data)) as image:
            image.load()
            buffer = BytesIO()
            image.save(buffer, format="WEBP", lossless=True)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise MalformedAssetError(f"WebP re-encoding failed: {e}") from e

    return buffer.getvalue()
