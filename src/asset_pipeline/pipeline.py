"""Build orchestration.

This module provides the main interface for running a build: discovery,
ordering, per-file processing and serialization. Each run owns fresh path
and asset tables; nothing is carried over from a previous run.
"""

import time

from .capabilities import Capabilities
from .config import BuildConfig
from .core.types import AssetTable, BuildResult, PathTable
from .ordering import build_order
from .processor import AssetProcessor
from .sources.base import AssetSource
from .sources.filesystem import FilesystemSource
from .writers import write_output


class BuildPipeline:
    """Runs full build cycles for one asset tree.

    Example:
        >>> pipeline = BuildPipeline(BuildConfig(root=Path('assets')))
        >>> result = pipeline.build()
        >>> result.paths.resolve('app.css')
        '/assets/...'
    """

    def __init__(
        self,
        config: BuildConfig,
        source: AssetSource | None = None,
        capabilities: Capabilities | None = None,
    ):
        """Initialize the pipeline.

        Args:
            config: Build settings
            source: Asset source; defaults to the filesystem under
                ``config.root``, excluding the output artifact
            capabilities: Minify/compress/re-encode implementations
        """
        self.config = config
        self.source = source or FilesystemSource(
            config.root,
            ignore_prefix=config.ignore_prefix,
            ignored_suffixes=config.ignored_suffixes,
            exclude=[config.output_path],
        )
        self.capabilities = capabilities or Capabilities()

    def run(self) -> BuildResult:
        """Process every asset, without writing any output.

        Returns:
            BuildResult holding the populated path and asset tables

        Raises:
            AssetPipelineError: On the first error; the cycle is abandoned
        """
        start = time.perf_counter()

        paths = PathTable()
        assets = AssetTable()
        processor = AssetProcessor(
            paths,
            self.source,
            dev=self.config.dev,
            public_prefix=self.config.public_prefix,
            capabilities=self.capabilities,
        )

        order = build_order(
            self.source.list_files(),
            images_dir=self.config.images_dir,
            service_worker=self.config.service_worker,
        )

        for source_path in order:
            asset = processor.process(source_path, self.source.read(source_path))
            paths.add(source_path, asset.public_path)
            assets.put(asset)

        return BuildResult(
            paths=paths,
            assets=assets,
            order=order,
            dev=self.config.dev,
            elapsed=time.perf_counter() - start,
        )

    def build(self) -> BuildResult:
        """Run a build and replace the output artifact.

        The artifact is only replaced once the whole build has succeeded.
        """
        result = self.run()
        write_output(result, self.config.output_path, self.config.output_format)
        return result
