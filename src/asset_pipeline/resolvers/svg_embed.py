"""Inline SVG files into stylesheets as data URIs.

``svg-embed('images/_check.svg')`` or ``svg-embed('images/_check.svg',#fff)``
is replaced with ``url("data:image/svg+xml,...")``. The SVG is read from the
asset source, not the asset table: it is inlined, not content-addressed.

Runs after minification; the marker is not minifier-safe and the minifier
must not touch the inlined URI.
"""

import re

from .base import PatternResolver, ResolveContext
from .references import VariableResolver

# Token inside an SVG replaced by the optional colour argument
FILL_TOKEN = b"FILL"


class SVGEmbedResolver(PatternResolver):
    pattern = re.compile(rb"svg-embed\('(.*?)'(?:,(.*?))?\)")

    def __init__(self) -> None:
        self._variables = VariableResolver()

    def replace(self, match: re.Match[bytes], context: ResolveContext) -> bytes:
        path = context.decode(match.group(1))
        fill = match.group(2)

        svg = context.source.read(path)

        if fill:
            svg = svg.replace(FILL_TOKEN, fill)

        svg = self._variables.resolve(svg, context)
        svg = svg.replace(b'"', b"'")
        svg = svg.replace(b"#", b"%23")

        return b'url("data:image/svg+xml,' + svg + b'")'
