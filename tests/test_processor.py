"""Tests for the per-file asset processor."""

import pytest
from conftest import encode_png
from PIL import Image

from asset_pipeline.capabilities import Capabilities
from asset_pipeline.core.errors import (
    MalformedAssetError,
    MissingVariableError,
    UnsupportedExtensionError,
)
from asset_pipeline.core.types import PathTable, fingerprint
from asset_pipeline.processor import AssetProcessor
from asset_pipeline.sources import FilesystemSource


def fake_capabilities() -> Capabilities:
    """Capabilities with recognizable compress/re-encode output."""
    return Capabilities(compress=lambda data: b"BR:" + data, reencode=lambda data: b"WEBP:" + data)


@pytest.fixture
def processor(make_tree) -> AssetProcessor:
    root = make_tree({"images/_tick.svg": '<svg fill="FILL"/>'})
    paths = PathTable()
    paths.add("images/logo.png", "/assets/LOGO")
    return AssetProcessor(paths, FilesystemSource(root), capabilities=fake_capabilities())


class TestDispatch:
    """Test which passes run for each MIME type."""

    def test_stylesheet_passes(self, processor: AssetProcessor) -> None:
        """Test asset-url, var, minify and svg-embed on a stylesheet."""
        raw = (
            b".logo {\n  background: asset-url('images/logo.png');\n  color: var(--blue);\n}\n"
            b".tick {\n  background: svg-embed('images/_tick.svg',var(--red));\n}\n"
        )
        asset = processor.process("styles/app.css", raw)

        assert asset.mime == "text/css"
        assert b"url(/assets/LOGO)" in asset.data
        assert b"#007bff" in asset.data
        assert b"data:image/svg+xml,<svg fill='%23dc3545'/>" in asset.data
        assert b"\n" not in asset.data
        assert asset.br == b"BR:" + asset.data
        assert asset.webp == b""

    def test_script_passes(self, processor: AssetProcessor) -> None:
        asset = processor.process("app.js", b"const logo = assetPath('images/logo.png');\n")

        assert asset.mime == "application/javascript"
        assert b"'/assets/LOGO'" in asset.data
        assert asset.br == b"BR:" + asset.data

    def test_manifest_passes(self, processor: AssetProcessor) -> None:
        """Test that manifest icons are rewritten and the manifest is not compressed."""
        raw = b'{\n  "name": "App",\n  "icons": [{"src": "images/logo.png", "sizes": "1x1"}]\n}\n'
        asset = processor.process("app.webmanifest", raw)

        assert asset.data == b'{"name":"App","icons":[{"src":"/assets/LOGO","sizes":"1x1"}]}'
        assert asset.br == b""

    def test_svg_passes(self, processor: AssetProcessor) -> None:
        """Test that SVGs get variables but no minification."""
        raw = b'<svg>\n  <path fill="var(--green)"/>\n</svg>\n'
        asset = processor.process("images/leaf.svg", raw)

        assert asset.data == b'<svg>\n  <path fill="#28a745"/>\n</svg>\n'
        assert asset.br == b"BR:" + asset.data

    def test_png_reencoded(self, processor: AssetProcessor, png_bytes: bytes) -> None:
        asset = processor.process("images/a.png", png_bytes)

        assert asset.data == png_bytes
        assert asset.webp == b"WEBP:" + png_bytes
        assert asset.br == b""

    @pytest.mark.parametrize("path, mime", [("photo.jpg", "image/jpeg"), ("fonts/a.woff2", "font/woff2")])
    def test_binary_passthrough(self, processor: AssetProcessor, path: str, mime: str) -> None:
        raw = b"\x00\x01assetPath('x')var(--blue)"
        asset = processor.process(path, raw)

        assert asset.mime == mime
        assert asset.data == raw
        assert asset.br == b""
        assert asset.webp == b""

    def test_unsupported_extension(self, processor: AssetProcessor) -> None:
        """Test that unknown extensions abort, naming the file."""
        with pytest.raises(UnsupportedExtensionError, match="notes.txt"):
            processor.process("notes.txt", b"hello")


class TestFingerprint:
    """Test fingerprints and public paths."""

    def test_public_path_uses_prefix(self, make_tree) -> None:
        processor = AssetProcessor(
            PathTable(), FilesystemSource(make_tree({})), dev=True, public_prefix="/static/"
        )
        asset = processor.process("a.jpg", b"jpeg")

        assert asset.fingerprint == fingerprint(b"jpeg")
        assert asset.public_path == "/static/" + asset.fingerprint

    def test_fingerprint_covers_transformed_bytes(self, processor: AssetProcessor) -> None:
        """Test that formatting-only differences give the same fingerprint."""
        spaced = processor.process("a.css", b"a {\n  color: red;\n}\n")
        compact = processor.process("b.css", spaced.data)

        assert spaced.raw != compact.raw
        assert spaced.data == compact.data
        assert spaced.fingerprint == compact.fingerprint


class TestDevelopmentMode:
    """Test that development mode skips compression and re-encoding."""

    def test_no_compression_or_webp(self, make_tree, png_bytes: bytes) -> None:
        processor = AssetProcessor(
            PathTable(), FilesystemSource(make_tree({})), dev=True, capabilities=fake_capabilities()
        )

        for path, raw in [("a.css", b"a{}"), ("a.js", b"1"), ("a.svg", b"<svg/>"), ("a.png", png_bytes)]:
            asset = processor.process(path, raw)
            assert asset.br == b""
            assert asset.webp == b""


class TestErrors:
    """Test error propagation from passes and capabilities."""

    def test_malformed_manifest(self, processor: AssetProcessor) -> None:
        with pytest.raises(MalformedAssetError, match="app.webmanifest") as excinfo:
            processor.process("app.webmanifest", b'{"name": ')

        assert excinfo.value.source_path == "app.webmanifest"

    def test_invalid_utf8_script(self, processor: AssetProcessor) -> None:
        with pytest.raises(MalformedAssetError, match="app.js"):
            processor.process("app.js", b"\xff\xfe")

    def test_undecodable_png(self, make_tree) -> None:
        """Test that the real WebP encoder rejects garbage."""
        processor = AssetProcessor(PathTable(), FilesystemSource(make_tree({})))

        with pytest.raises(MalformedAssetError, match="broken.png"):
            processor.process("broken.png", b"not a png")

    def test_oversized_png(self, make_tree, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that an image over the decoder's pixel limit is a malformed asset."""
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1)
        processor = AssetProcessor(PathTable(), FilesystemSource(make_tree({})))

        with pytest.raises(MalformedAssetError, match="images/big.png"):
            processor.process("images/big.png", encode_png(size=(4, 4)))

    def test_missing_variable(self, processor: AssetProcessor) -> None:
        with pytest.raises(MissingVariableError, match="a.css"):
            processor.process("a.css", b"a{color:var(--nope)}")
