"""Shared fixtures for asset pipeline tests."""

from io import BytesIO
from pathlib import Path
from typing import Callable

import pytest
from PIL import Image


def encode_png(color: tuple[int, int, int, int] = (255, 0, 0, 255), size: tuple[int, int] = (2, 2)) -> bytes:
    """Encode a solid-colour PNG."""
    buffer = BytesIO()
    Image.new("RGBA", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return encode_png()


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[dict[str, bytes | str]], Path]:
    """Write a {relative path: contents} tree under tmp_path/assets."""

    def _make(files: dict[str, bytes | str]) -> Path:
        root = tmp_path / "assets"
        root.mkdir(exist_ok=True)
        for relative_path, contents in files.items():
            file_path = root / relative_path
            file_path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(contents, str):
                contents = contents.encode("utf-8")
            file_path.write_bytes(contents)
        return root

    return _make


@pytest.fixture
def no_dev_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DEV", raising=False)
