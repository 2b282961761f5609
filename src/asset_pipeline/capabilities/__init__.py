"""External capabilities used by the pipeline.

Minification, compression, image re-encoding and change notification are
delegated to third-party libraries; this package wraps each behind a small
callable so the processor and the watch loop can be tested with fakes.
"""

from dataclasses import dataclass, field
from typing import Callable

from .compress import compress
from .images import reencode_webp
from .minify import MinifierRegistry, minify_css, minify_js, minify_json
from .watch import ChangeEvent, Subscription, watch_directory


@dataclass
class Capabilities:
    """Collaborators of the asset processor.

    Attributes:
        minifiers: Registry answering ``minify(mime, data)``
        compress: Generic compressor for text and vector assets
        reencode: Lossless alternate-format encoder for PNG assets
    """

    minifiers: MinifierRegistry = field(default_factory=MinifierRegistry.default)
    compress: Callable[[bytes], bytes] = compress
    reencode: Callable[[bytes], bytes] = reencode_webp


__all__ = [
    "Capabilities",
    "ChangeEvent",
    "MinifierRegistry",
    "Subscription",
    "compress",
    "minify_css",
    "minify_js",
    "minify_json",
    "reencode_webp",
    "watch_directory",
]
