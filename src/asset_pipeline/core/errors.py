"""Exception taxonomy for the asset pipeline.

Every error is fatal for the build cycle that raised it. Library code raises;
the CLI and the watch loop are the only places that catch and report.
"""


class AssetPipelineError(Exception):
    """Base class for all build errors.

    Attributes:
        source_path: Asset being processed when the error occurred, if known
    """

    def __init__(self, message: str, source_path: str | None = None):
        self.source_path = source_path
        if source_path:
            message = f"{source_path}: {message}"
        super().__init__(message)


class UnsupportedExtensionError(AssetPipelineError, ValueError):
    """File extension has no entry in the MIME table."""


class UnresolvedReferenceError(AssetPipelineError):
    """A reference names a path that is not (yet) in the path table."""

    def __init__(self, path: str, source_path: str | None = None):
        self.path = path
        super().__init__(f"Unresolved reference: {path}", source_path)


class MissingVariableError(AssetPipelineError):
    """A colour-variable reference names an unknown variable."""

    def __init__(self, name: str, source_path: str | None = None):
        self.name = name
        super().__init__(f"Unknown variable: --{name}", source_path)


class AssetIOError(AssetPipelineError):
    """Reading or writing a file failed."""


class MalformedAssetError(AssetPipelineError):
    """A minifier, decoder or encoder rejected the asset's bytes."""
