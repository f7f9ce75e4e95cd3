"""Pytest configuration and fixtures."""

import gc
import shutil
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import fitz  # type: ignore[import]
import pytest
from PIL import Image

from pagestamp.config import Settings

A4 = (595.0, 842.0)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    try:
        yield Path(tmpdir)
    finally:
        # Release PyMuPDF file handles before removing the directory
        gc.collect()
        shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def override_settings(temp_dir: Path) -> Generator[Settings, None, None]:
    """Provide isolated pagestamp settings scoped to tests."""

    import pagestamp.config as config_module

    original_settings = getattr(config_module, "_settings", None)

    scratch = temp_dir / "scratch"
    scratch.mkdir(parents=True, exist_ok=True)

    settings = config_module.Settings(temp_dir=scratch)
    config_module._settings = settings

    try:
        yield settings
    finally:
        config_module._settings = original_settings


def create_sample_pdf(path: Path, pages: int = 5, size: tuple[float, float] = A4) -> Path:
    doc = fitz.open()
    try:
        for index in range(pages):
            page = doc.new_page(width=size[0], height=size[1])
            page.insert_text((72, 72), f"Sample Page {index + 1}")
        doc.save(str(path))
    finally:
        doc.close()
    return path


def create_stamp_png(
    path: Path,
    size: tuple[int, int] = (72, 36),
    *,
    dpi: float | None = None,
    color: tuple[int, int, int, int] = (200, 0, 0, 255),
) -> Path:
    image = Image.new("RGBA", size, color)
    if dpi is None:
        image.save(path, format="PNG")
    else:
        image.save(path, format="PNG", dpi=(dpi, dpi))
    return path


@pytest.fixture
def make_pdf(temp_dir: Path) -> Callable[..., Path]:
    """Factory writing an N-page PDF with 'Sample Page i' text on each page."""

    def _make(name: str = "source.pdf", pages: int = 5, size: tuple[float, float] = A4) -> Path:
        return create_sample_pdf(temp_dir / name, pages=pages, size=size)

    return _make


@pytest.fixture
def make_stamp(temp_dir: Path) -> Callable[..., Path]:
    """Factory writing a solid-colour PNG stamp, optionally with DPI metadata."""

    def _make(
        name: str = "stamp.png",
        size: tuple[int, int] = (72, 36),
        dpi: float | None = None,
    ) -> Path:
        return create_stamp_png(temp_dir / name, size=size, dpi=dpi)

    return _make

