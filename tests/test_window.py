"""Smoke tests for the Tk placement window (skipped without a display)."""

from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from PIL import Image

from pagestamp.app.invocation import RunConfig
from pagestamp.bootstrap import bootstrap_application
from pagestamp.config import Settings

tk = pytest.importorskip("tkinter")


class _BlankRenderer:
    def render_page(self, path: Path, page_number: int, density: float) -> Image.Image:
        return Image.new("RGB", (120, 160), "white")


@pytest.fixture
def root() -> Generator[tk.Tk, None, None]:
    try:
        window_root = tk.Tk()
    except tk.TclError as exc:
        pytest.skip(f"No display available: {exc}")
    window_root.withdraw()
    try:
        yield window_root
    finally:
        window_root.destroy()


def test_window_forwards_scale_and_prints_command(
    root,
    make_pdf: Callable[..., Path],
    make_stamp: Callable[..., Path],
    temp_dir: Path,
    override_settings: Settings,
) -> None:
    from pagestamp.ui.window import PlacementWindow

    container = bootstrap_application(override_settings, preview_renderer=_BlankRenderer())
    prepared = container.stamp_service.prepare(
        RunConfig.create(input_path=make_pdf(pages=1), stamp_path=make_stamp(), ui=True)
    )
    session = container.stamp_service.open_session(
        prepared, preview_density=36.0, preview_service=container.preview_service
    )
    printed: list[str] = []

    window = PlacementWindow(root, session, default_output=temp_dir / "out.pdf", echo=printed.append)
    window._on_scale("150")
    window.print_command()

    assert session.state.scale == 1.5
    assert printed and "--scale 1.500" in printed[0]
    assert int(window._canvas["width"]) == 120
