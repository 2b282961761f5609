"""Serialization of a build into its output artifact.

Two formats are supported:

- ``python``: a generated module exposing ``PATHS`` and ``ASSETS``. Byte
  payloads are written as ``repr()`` literals and evaluate back to the
  exact bytes.
- ``json``: the same two tables with base64 payloads, validated against the
  bundled JSON Schema before it is written.

Both render keys in sorted order, so identical builds give identical files.
"""

import base64
import json
import os
import tempfile
from pathlib import Path
from typing import Callable

from .core.errors import AssetIOError, AssetPipelineError
from .core.types import BuildManifest, BuildResult, ManifestAsset
from .core.validator import manifest_errors

MODULE_HEADER = '''\
# Code generated by asset-pipeline. DO NOT EDIT.
from typing import NamedTuple


class Asset(NamedTuple):
    br: bytes
    data: bytes
    webp: bytes
    mime: str

'''


def render_python(result: BuildResult) -> bytes:
    paths = result.paths.as_dict()
    assets = result.assets.as_dict()

    lines = [MODULE_HEADER, "PATHS = {"]
    for source_path in sorted(paths):
        lines.append(f"    {source_path!r}: {paths[source_path]!r},")
    lines.append("}")
    lines.append("")
    lines.append("ASSETS = {")
    for key in sorted(assets):
        payload = assets[key]
        lines.append(
            f"    {key!r}: Asset({payload.br!r}, {payload.data!r}, "
            f"{payload.webp!r}, {payload.mime!r}),"
        )
    lines.append("}")

    return ("\n".join(lines) + "\n").encode("utf-8")


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def build_manifest(result: BuildResult) -> BuildManifest:
    """Convert a build result into its JSON-serializable manifest."""
    assets = result.assets.as_dict()
    return {
        "paths": result.paths.as_dict(),
        "assets": {
            key: ManifestAsset(
                br=_b64(payload.br),
                data=_b64(payload.data),
                webp=_b64(payload.webp),
                mime=payload.mime,
            )
            for key, payload in assets.items()
        },
    }


def render_json(result: BuildResult) -> bytes:
    manifest = build_manifest(result)

    errors = manifest_errors(manifest)
    if errors:
        raise AssetPipelineError("Manifest validation failed: " + "; ".join(errors))

    return (json.dumps(manifest, indent=2, sort_keys=True) + "\n").encode("utf-8")


WRITERS: dict[str, Callable[[BuildResult], bytes]] = {
    "python": render_python,
    "json": render_json,
}


def temp_prefix(path: Path) -> str:
    """Name prefix of the temporary files written next to ``path``."""
    return f".{path.name}."


def _target_mode(path: Path) -> int:
    # Keep the previous artifact's mode; a new one gets the umask default
    try:
        return os.stat(path).st_mode & 0o7777
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_atomic(path: Path, data: bytes) -> None:
    """Replace ``path`` with ``data`` in one step.

    The data goes to a temporary sibling first, so a failure leaves the
    previous file untouched. The file mode of an existing artifact is kept.

    Raises:
        AssetIOError: If writing or renaming fails
    """
    tmp_name: str | None = None
    try:
        mode = _target_mode(path)
        with tempfile.NamedTemporaryFile(
            dir=path.parent, prefix=temp_prefix(path), suffix=".tmp", delete=False
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise AssetIOError(f"Failed to write {path}: {e}") from e


def write_output(result: BuildResult, path: Path, output_format: str = "python") -> None:
    """Serialize ``result`` and atomically replace the artifact at ``path``."""
    try:
        render = WRITERS[output_format]
    except KeyError:
        raise ValueError(f"Unknown output format: {output_format!r}") from None

    write_atomic(path, render(result))
