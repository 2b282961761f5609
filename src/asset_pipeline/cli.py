"""Command-line interface for the asset pipeline.

This module provides the CLI entry point that builds the asset lookup
artifact once, or keeps rebuilding it in development mode.
"""

import argparse
import sys
from pathlib import Path
from typing import Callable

from .config import OUTPUT_FORMATS, BuildConfig
from .core.errors import AssetPipelineError
from .core.types import BuildResult
from .pipeline import BuildPipeline
from .watcher import WatchLoop
from .writers import temp_prefix


def run_build(pipeline: BuildPipeline) -> BuildResult:
    """Run one build and report it on stderr."""
    result = pipeline.build()
    print(
        f"Processed {len(result.order)} assets in {result.elapsed:.3f}s "
        f"-> {pipeline.config.output_path}",
        file=sys.stderr,
    )
    return result


def watch_filter(config: BuildConfig) -> Callable[[str], bool]:
    """Predicate for change events the watch loop must not rebuild on.

    Writing the artifact (through a temporary sibling) and Python byte-code
    caches for the generated module would otherwise retrigger builds forever.
    """
    output = config.output_path.resolve()
    prefix = temp_prefix(output)

    def ignore(path: str) -> bool:
        event_path = Path(path).resolve()
        if event_path == output or event_path.name.startswith(prefix):
            return True
        return any(event_path.name.endswith(suffix) for suffix in config.ignored_suffixes)

    return ignore


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the asset pipeline."""
    parser = argparse.ArgumentParser(
        description="Fingerprint, minify and compress static assets into a lookup table",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Production build of ./assets into ./assets/assets.py
  asset-pipeline

  # Development: skip compression and rebuild on every change
  DEV=1 asset-pipeline --root web/assets

  # JSON output, single build even in development mode
  asset-pipeline --dev --once --format json --output build/assets.json
        """,
    )

    parser.add_argument(
        "--root", type=Path, default=Path("assets"), help="Asset root directory (default: assets)"
    )

    parser.add_argument(
        "--output",
        type=Path,
        help="Generated artifact (default: assets.py or assets.json inside the root)",
    )

    parser.add_argument(
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default="python",
        help="Artifact format (default: python)",
    )

    parser.add_argument(
        "--dev",
        action="store_true",
        default=None,
        help="Development mode: no compression or WebP, rebuild on change (also DEV=1)",
    )

    parser.add_argument(
        "--once", action="store_true", help="Build once even in development mode"
    )

    parser.add_argument("--prefix", dest="public_prefix", help="Public path prefix (default: /assets/)")

    parser.add_argument(
        "--debounce", type=float, help="Seconds without changes before rebuilding (default: 0.1)"
    )

    args = parser.parse_args(argv)

    try:
        config = BuildConfig.from_env(
            root=args.root,
            output=args.output,
            output_format=args.output_format,
            dev=args.dev,
            public_prefix=args.public_prefix,
            debounce=args.debounce,
        )
        pipeline = BuildPipeline(config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    watching = config.dev and not args.once

    try:
        run_build(pipeline)
    except AssetPipelineError as e:
        print(f"Error: Build failed: {e}", file=sys.stderr)
        if not watching:
            sys.exit(1)

    if not watching:
        return

    print(f"Watching {config.root} for changes...", file=sys.stderr)
    loop = WatchLoop(
        config.root,
        lambda: run_build(pipeline),
        debounce=config.debounce,
        ignore=watch_filter(config),
    )
    try:
        loop.run()
    except KeyboardInterrupt:
        print("Stopped.", file=sys.stderr)


if __name__ == "__main__":
    main()
