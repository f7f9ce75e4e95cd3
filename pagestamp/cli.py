"""pagestamp CLI application with Typer."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from pagestamp import __version__
from pagestamp.app.invocation import RunConfig, serialize_invocation
from pagestamp.app.resolution import StampResolution
from pagestamp.bootstrap import bootstrap_application
from pagestamp.config import get_settings
from pagestamp.errors import CollaboratorError, ConfigError, ResourceError

app = typer.Typer(
    name="pagestamp",
    help="Place a raster stamp onto one page of a PDF",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"pagestamp version {__version__}")
        raise typer.Exit()


def _fail(message: str, code: int) -> typer.Exit:
    typer.secho(f"Error: {message}", fg=typer.colors.RED, err=True)
    return typer.Exit(code=code)


def _report_resolution(resolution: StampResolution) -> None:
    if resolution.diagnostic is not None:
        typer.secho(f"Warning: {resolution.diagnostic.message}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.echo(f"Stamp density: {resolution.density:.1f} DPI ({resolution.source.value})")


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log debug output to stderr"),
    ] = False,
) -> None:
    """pagestamp - stamp an image onto one page of a PDF."""
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, settings.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command("stamp")
def stamp(
    input_path: Annotated[
        Path,
        typer.Option("--input", "-i", help="PDF input file"),
    ],
    stamp_path: Annotated[
        Path,
        typer.Option("--stamp", "-s", help="Image stamp file"),
    ],
    stamp_dpi: Annotated[
        float,
        typer.Option("--stamp-dpi", help="Image stamp DPI, or zero to read it from the image", min=0.0),
    ] = 0.0,
    page: Annotated[
        int,
        typer.Option("--page", help="Page number to stamp, negative to count from the end"),
    ] = 1,
    ui: Annotated[
        bool,
        typer.Option("--ui/--no-ui", help="Open the interactive placement window"),
    ] = False,
    x: Annotated[
        float,
        typer.Option("--x", help="Stamp X position, left to right, in mm"),
    ] = 0.0,
    y: Annotated[
        float,
        typer.Option("--y", help="Stamp Y position, top to bottom, in mm"),
    ] = 0.0,
    scale: Annotated[
        float,
        typer.Option("--scale", help="Scale factor for the stamp"),
    ] = 1.0,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Destination PDF (defaults to <input>_sig.pdf)"),
    ] = None,
    print_command: Annotated[
        bool,
        typer.Option("--print-command", help="Echo the reproducible command line for this run"),
    ] = False,
) -> None:
    """Stamp one page of a PDF, in batch or with an interactive preview."""

    container = bootstrap_application()
    service = container.stamp_service

    try:
        config = RunConfig.create(
            input_path=input_path.expanduser(),
            stamp_path=stamp_path.expanduser(),
            stamp_dpi=stamp_dpi,
            page=page,
            ui=ui,
            x=x,
            y=y,
            scale=scale,
            output_path=output.expanduser() if output is not None else None,
        )
        prepared = service.prepare(config)
    except ConfigError as exc:
        raise _fail(str(exc), code=2) from exc
    except ResourceError as exc:
        raise _fail(str(exc), code=1) from exc

    geometry = prepared.document.geometry
    typer.echo(
        f"PDF page {prepared.document.page_number} of {prepared.document.page_count} "
        f"is W {geometry.width_mm:.1f} mm, H {geometry.height_mm:.1f} mm"
    )
    _report_resolution(prepared.resolution)

    destination, automatic = service.output_path_for(config)

    if ui:
        from pagestamp.ui.window import run_placement_window

        run_placement_window(
            service,
            container.preview_service,
            prepared,
            screen_fraction=container.settings.preview_screen_fraction,
            default_output=destination,
            echo=typer.echo,
        )
        return

    if automatic and destination.exists():
        raise _fail(f"No output given. Not overriding {destination}", code=1)

    try:
        result = service.run_batch(prepared, destination)
    except CollaboratorError as exc:
        raise _fail(f"Splice failed at {exc.step or 'unknown step'}: {exc}", code=1) from exc

    typer.secho(f"✓ Stamped page {result.page_number} -> {result.output_path}", fg=typer.colors.GREEN)
    if print_command:
        typer.echo(serialize_invocation(config, output_path=result.output_path).to_command_line())


@app.command("info")
def info(
    input_path: Annotated[
        Path,
        typer.Option("--input", "-i", help="PDF input file"),
    ],
    page: Annotated[
        int,
        typer.Option("--page", help="Page number to describe, negative to count from the end"),
    ] = 1,
) -> None:
    """Show page count and the size of one page in millimetres."""

    container = bootstrap_application()
    try:
        document = container.splice_service.describe(input_path.expanduser(), page)
    except ConfigError as exc:
        raise _fail(str(exc), code=2) from exc
    except ResourceError as exc:
        raise _fail(str(exc), code=1) from exc

    geometry = document.geometry
    typer.echo(f"Pages: {document.page_count}")
    typer.echo(
        f"PDF page {document.page_number} size is "
        f"W {geometry.width_mm:.1f} mm, H {geometry.height_mm:.1f} mm"
    )
    typer.echo(f"Page offset: {geometry.origin_x:.1f}, {geometry.origin_y:.1f} pt")
    if geometry.rotation:
        typer.echo(f"Rotation: {geometry.rotation} degrees")


if __name__ == "__main__":
    app()
