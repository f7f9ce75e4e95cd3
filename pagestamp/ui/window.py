"""Tk placement window: a page preview the stamp can be dragged across.

The window only forwards events to :class:`PlacementSession` and repaints
when the session asks for it.
"""

from __future__ import annotations

import logging
import tkinter as tk
from collections.abc import Callable
from pathlib import Path
from tkinter import filedialog, messagebox, ttk

from PIL import ImageTk

from pagestamp.app.preview_service import PreviewService, fit_preview_density
from pagestamp.app.session import SCALE_PERCENT_MAX, SCALE_PERCENT_MIN, PlacementSession
from pagestamp.app.stamp_service import PreparedRun, StampService
from pagestamp.errors import PageStampError

logger = logging.getLogger(__name__)


class PlacementWindow:
    """Preview canvas, scale slider and a File menu over one session."""

    def __init__(
        self,
        root: tk.Tk,
        session: PlacementSession,
        *,
        default_output: Path,
        echo: Callable[[str], None] = print,
    ) -> None:
        self.root = root
        self.session = session
        self._default_output = default_output
        self._echo = echo
        self._photo: ImageTk.PhotoImage | None = None

        root.title(f"pagestamp - {session.document.path.name}")

        top = ttk.Frame(root)
        top.pack(side=tk.TOP, fill=tk.X, padx=8, pady=4)
        ttk.Label(top, text="Scale [%]:").pack(side=tk.LEFT)
        self._scale_var = tk.IntVar(value=session.scale_percent)
        self._slider = tk.Scale(
            top,
            from_=SCALE_PERCENT_MIN,
            to=SCALE_PERCENT_MAX,
            orient=tk.HORIZONTAL,
            length=240,
            variable=self._scale_var,
            command=self._on_scale,
        )
        self._slider.pack(side=tk.LEFT, padx=(6, 0))

        frame = session.render_preview()
        self._canvas = tk.Canvas(root, width=frame.width, height=frame.height, highlightthickness=0)
        self._canvas.pack(side=tk.TOP)
        self._canvas.bind("<ButtonPress-1>", lambda e: session.pointer_down(e.x, e.y))
        self._canvas.bind("<B1-Motion>", lambda e: session.pointer_move(e.x, e.y))
        self._canvas.bind("<ButtonRelease-1>", lambda e: session.pointer_up())

        self._build_menu()
        session.subscribe(self.redraw)
        self.redraw()

    def _build_menu(self) -> None:
        menubar = tk.Menu(self.root)
        file_menu = tk.Menu(menubar, tearoff=False)
        file_menu.add_command(label="Save", accelerator="Ctrl+S", command=self.save)
        file_menu.add_command(label="Save As...", accelerator="Ctrl+Shift+S", command=self.save_as)
        file_menu.add_command(
            label="Print Command Line", accelerator="Ctrl+P", command=self.print_command
        )
        file_menu.add_separator()
        file_menu.add_command(label="Quit", accelerator="Ctrl+Q", command=self.root.destroy)
        menubar.add_cascade(label="File", menu=file_menu)
        self.root.config(menu=menubar)
        self._file_menu = file_menu

        self.root.bind("<Control-s>", lambda e: self.save())
        self.root.bind("<Control-S>", lambda e: self.save_as())
        self.root.bind("<Control-p>", lambda e: self.print_command())
        self.root.bind("<Control-q>", lambda e: self.root.destroy())
        self._sync_save_state()

    def _sync_save_state(self) -> None:
        self._file_menu.entryconfigure(0, state=tk.NORMAL if self.session.can_save else tk.DISABLED)

    def _on_scale(self, value: str) -> None:
        self.session.set_scale_percent(int(float(value)))

    def redraw(self) -> None:
        self._photo = ImageTk.PhotoImage(self.session.render_preview())
        self._canvas.delete("all")
        self._canvas.create_image(0, 0, anchor="nw", image=self._photo)

    def save(self) -> None:
        if not self.session.can_save:
            return
        self._run_save(lambda: self.session.save())

    def save_as(self) -> None:
        initial = self.session.last_output or self._default_output
        chosen = filedialog.asksaveasfilename(
            parent=self.root,
            title="Save stamped PDF",
            initialdir=str(initial.parent),
            initialfile=initial.name,
            defaultextension=".pdf",
            filetypes=[("PDF", "*.pdf")],
        )
        if not chosen:
            return
        self._run_save(lambda: self.session.save_as(Path(chosen)))
        self._sync_save_state()

    def _run_save(self, action: Callable[[], object]) -> None:
        try:
            action()
        except PageStampError as exc:
            logger.error("Save failed: %s", exc)
            messagebox.showerror("Save failed", str(exc), parent=self.root)

    def print_command(self) -> None:
        self._echo(self.session.command_line())


def run_placement_window(
    stamp_service: StampService,
    preview_service: PreviewService,
    prepared: PreparedRun,
    *,
    screen_fraction: float,
    default_output: Path,
    echo: Callable[[str], None] = print,
) -> None:
    """Open the placement window and block until it is closed."""
    root = tk.Tk()
    density = fit_preview_density(
        prepared.document.geometry,
        root.winfo_screenwidth() * screen_fraction,
        root.winfo_screenheight() * screen_fraction,
    )
    session = stamp_service.open_session(
        prepared, preview_density=density, preview_service=preview_service
    )
    PlacementWindow(root, session, default_output=default_output, echo=echo)
    root.mainloop()
