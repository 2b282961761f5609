"""JSON Schema validation for serialized build manifests.

JSON output is checked against the bundled schema before it replaces the
previous artifact.
"""

import json
from functools import lru_cache
from pathlib import Path

from jsonschema import Draft202012Validator

from .types import BuildManifest

# src/asset_pipeline/core/validator.py -> src/asset_pipeline/schemas/
SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "build_manifest.schema.json"


@lru_cache(maxsize=1)
def manifest_validator() -> Draft202012Validator:
    """Validator for the bundled schema, loaded once per process."""
    with SCHEMA_PATH.open("r", encoding="utf-8") as f:
        schema = json.load(f)
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def manifest_errors(manifest: BuildManifest) -> list[str]:
    """Describe every schema violation in ``manifest``.

    Returns:
        One ``<location>: <message>`` line per violation, ordered by
        location; empty if the manifest is valid.
    """
    errors = sorted(manifest_validator().iter_errors(manifest), key=lambda e: list(map(str, e.path)))
    return [f"{'/'.join(map(str, e.path)) or '(root)'}: {e.message}" for e in errors]


def validate_manifest(manifest: BuildManifest) -> None:
    """Raise ``jsonschema.ValidationError`` for the first violation, if any."""
    manifest_validator().validate(manifest)
