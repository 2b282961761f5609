"""Tests for output serialization."""

import base64
import json
import os
import runpy
import stat
from pathlib import Path

import pytest
from jsonschema import ValidationError

from asset_pipeline.config import BuildConfig
from asset_pipeline.core.errors import AssetIOError, AssetPipelineError
from asset_pipeline.core.types import Asset, AssetTable, BuildResult, PathTable, fingerprint
from asset_pipeline.core.validator import manifest_errors, validate_manifest
from asset_pipeline.pipeline import BuildPipeline
from asset_pipeline.writers import build_manifest, render_python, write_atomic, write_output


@pytest.fixture
def result(make_tree, png_bytes: bytes) -> BuildResult:
    root = make_tree(
        {
            "images/a.png": png_bytes,
            "app.css": "a{background:asset-url('images/a.png')}\n/* \"quotes\" and \\ backslash */",
            "app.js": "console.log('café \\n', \"x\");\n",
        }
    )
    return BuildPipeline(BuildConfig(root=root, dev=False)).run()


class TestPythonModule:
    """Test the generated Python module."""

    def test_round_trip(self, result: BuildResult, tmp_path: Path) -> None:
        """Test that the module evaluates back to the exact tables."""
        output = tmp_path / "generated_assets.py"
        write_output(result, output, "python")

        namespace = runpy.run_path(str(output))

        assert namespace["PATHS"] == result.paths.as_dict()
        assert set(namespace["ASSETS"]) == set(result.assets)
        for key, payload in result.assets.as_dict().items():
            generated = namespace["ASSETS"][key]
            assert generated.br == payload.br
            assert generated.data == payload.data
            assert generated.webp == payload.webp
            assert generated.mime == payload.mime

    def test_sorted_and_stable(self, result: BuildResult) -> None:
        text = render_python(result).decode("utf-8")

        assert text.startswith("# Code generated by asset-pipeline. DO NOT EDIT.\n")
        assert text.index("'app.css'") < text.index("'app.js'") < text.index("'images/a.png'")
        assert render_python(result) == render_python(result)


class TestJsonManifest:
    """Test the JSON serialization."""

    def test_round_trip(self, result: BuildResult, tmp_path: Path) -> None:
        output = tmp_path / "assets.json"
        write_output(result, output, "json")

        manifest = json.loads(output.read_text(encoding="utf-8"))

        assert manifest["paths"] == result.paths.as_dict()
        for key, payload in result.assets.as_dict().items():
            entry = manifest["assets"][key]
            assert base64.b64decode(entry["data"]) == payload.data
            assert base64.b64decode(entry["br"]) == payload.br
            assert base64.b64decode(entry["webp"]) == payload.webp
            assert entry["mime"] == payload.mime

    def test_matches_schema(self, result: BuildResult) -> None:
        assert manifest_errors(build_manifest(result)) == []
        validate_manifest(build_manifest(result))

    def test_schema_rejects_unknown_mime(self, result: BuildResult) -> None:
        manifest = build_manifest(result)
        key = sorted(manifest["assets"])[0]
        manifest["assets"][key]["mime"] = "text/plain"

        errors = manifest_errors(manifest)

        assert len(errors) == 1
        assert errors[0].startswith(f"assets/{key}/mime: ")

    def test_schema_rejects_bad_fingerprint(self, result: BuildResult) -> None:
        manifest = build_manifest(result)
        manifest["assets"]["short"] = next(iter(manifest["assets"].values()))

        assert manifest_errors(manifest)
        with pytest.raises(ValidationError):
            validate_manifest(manifest)

    def test_invalid_manifest_not_written(self, tmp_path: Path) -> None:
        """Test that a manifest failing the schema never reaches disk."""
        paths = PathTable()
        assets = AssetTable()
        assets.put(
            Asset(
                source_path="notes.txt",
                mime="text/plain",
                raw=b"x",
                data=b"x",
                fingerprint=fingerprint(b"x"),
                public_path="/assets/" + fingerprint(b"x"),
            )
        )
        output = tmp_path / "assets.json"

        with pytest.raises(AssetPipelineError, match="Manifest validation failed: assets/.*/mime"):
            write_output(BuildResult(paths=paths, assets=assets), output, "json")

        assert not output.exists()


class TestWriteAtomic:
    """Test atomic replacement of the artifact."""

    def test_replaces_existing(self, tmp_path: Path) -> None:
        target = tmp_path / "assets.py"
        target.write_text("old")

        write_atomic(target, b"new")

        assert target.read_bytes() == b"new"
        assert [p.name for p in tmp_path.iterdir()] == ["assets.py"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(AssetIOError, match="Failed to write"):
            write_atomic(tmp_path / "nope" / "assets.py", b"data")

    def test_unknown_format(self, result: BuildResult, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Unknown output format"):
            write_output(result, tmp_path / "assets.txt", "yaml")

    def test_keeps_existing_mode(self, tmp_path: Path) -> None:
        target = tmp_path / "assets.py"
        target.write_text("old")
        os.chmod(target, 0o640)

        write_atomic(target, b"new")

        assert stat.S_IMODE(os.stat(target).st_mode) == 0o640

    def test_new_file_honours_umask(self, tmp_path: Path) -> None:
        previous = os.umask(0o022)
        try:
            write_atomic(tmp_path / "assets.py", b"new")
        finally:
            os.umask(previous)

        assert stat.S_IMODE(os.stat(tmp_path / "assets.py").st_mode) == 0o644

    def test_rebuild_keeps_mode(self, make_tree) -> None:
        """Test that rebuilding leaves the artifact readable as before."""
        root = make_tree({"app.js": "let a = 1;"})
        pipeline = BuildPipeline(BuildConfig(root=root, dev=True))
        pipeline.build()
        os.chmod(pipeline.config.output_path, 0o644)
        before = stat.S_IMODE(os.stat(pipeline.config.output_path).st_mode)

        pipeline.build()

        assert stat.S_IMODE(os.stat(pipeline.config.output_path).st_mode) == before
