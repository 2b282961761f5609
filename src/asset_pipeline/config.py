"""Build configuration.

Settings come from the command line, with development mode also taken from
the ``DEV`` environment variable (``DEV=1``).
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

OUTPUT_FORMATS = ("python", "json")

DEFAULT_OUTPUT_NAMES = {
    "python": "assets.py",
    "json": "assets.json",
}

DEV_ENV_VAR = "DEV"


@dataclass
class BuildConfig:
    """Settings for one asset build.

    Attributes:
        root: Asset root directory
        output: Generated artifact; defaults to a file inside ``root``
        output_format: 'python' (generated module) or 'json'
        dev: Development mode: no compression or WebP, watch for changes
        public_prefix: Prefix of every public path
        ignore_prefix: Base-name prefix of partial files (inlined only)
        ignored_suffixes: Suffixes never treated as assets
        images_dir: Subtree processed before everything else
        service_worker: File name processed after everything else
        debounce: Quiet period, in seconds, before a watch rebuild
    """

    root: Path = Path("assets")
    output: Path | None = None
    output_format: str = "python"
    dev: bool = False
    public_prefix: str = "/assets/"
    ignore_prefix: str = "_"
    ignored_suffixes: tuple[str, ...] = (".py", ".pyc")
    images_dir: str = "images"
    service_worker: str = "service-worker.js"
    debounce: float = 0.1

    def __post_init__(self) -> None:
        self.root = Path(self.root)
        if self.output is not None:
            self.output = Path(self.output)

        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown output format: {self.output_format!r}. "
                f"Available formats: {', '.join(OUTPUT_FORMATS)}"
            )

        if self.debounce < 0:
            raise ValueError(f"Debounce must not be negative: {self.debounce}")

    @property
    def output_path(self) -> Path:
        if self.output is not None:
            return self.output
        return self.root / DEFAULT_OUTPUT_NAMES[self.output_format]

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> "BuildConfig":
        """Create a config from the environment plus explicit overrides.

        A ``dev`` override of None (or no override) defers to ``DEV``.

        Example:
            >>> BuildConfig.from_env({'DEV': '1'}).dev
            True
        """
        if environ is None:
            environ = os.environ

        if overrides.get("dev") is None:
            overrides["dev"] = environ.get(DEV_ENV_VAR) == "1"

        # None means "use the default"
        return cls(**{key: value for key, value in overrides.items() if value is not None})
