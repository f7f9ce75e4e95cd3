"""Run configuration and its reproducible command-line form."""

from __future__ import annotations

import math
import shlex
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pagestamp.app.placement import PlacementSnapshot
from pagestamp.errors import ConfigError

DEFAULT_PROGRAM = "pagestamp stamp"


class RunConfig(BaseModel):
    """Inputs of one stamping run, as given on the command line."""

    model_config = ConfigDict(frozen=True)

    input_path: Path = Field(..., description="PDF to stamp")
    stamp_path: Path = Field(..., description="Raster image to place")
    stamp_dpi: float = Field(0.0, ge=0.0, description="Stamp density override, 0 to probe metadata")
    page: int = Field(1, description="1-based page, negative to count from the end")
    ui: bool = Field(False, description="Open the interactive placement window")
    x: float = Field(0.0, description="Stamp X position, left to right, in mm")
    y: float = Field(0.0, description="Stamp Y position, top to bottom, in mm")
    scale: float = Field(1.0, gt=0.0, description="Scale factor for the stamp")
    output_path: Path | None = Field(None, description="Destination PDF")

    @field_validator("page")
    @classmethod
    def _page_not_zero(cls, value: int) -> int:
        if value == 0:
            raise ValueError("page must not be 0")
        return value

    @field_validator("stamp_dpi", "x", "y", "scale")
    @classmethod
    def _finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("must be a finite number")
        return value

    @classmethod
    def create(cls, **fields: Any) -> RunConfig:
        """Validate ``fields``, reporting problems as :class:`ConfigError`."""
        try:
            return cls(**fields)
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in exc.errors()
            )
            raise ConfigError(f"Invalid run configuration: {problems}") from exc

    @property
    def density_override(self) -> float | None:
        return self.stamp_dpi if self.stamp_dpi > 0 else None


@dataclass(frozen=True, slots=True)
class Invocation:
    """Ordered ``(flag, value)`` pairs; boolean flags carry ``None``."""

    pairs: tuple[tuple[str, str | None], ...]

    def __iter__(self) -> Iterator[tuple[str, str | None]]:
        return iter(self.pairs)

    def flags(self) -> list[str]:
        return [flag for flag, _ in self.pairs]

    def tokens(self) -> list[str]:
        result: list[str] = []
        for flag, value in self.pairs:
            result.append(flag)
            if value is not None:
                result.append(value)
        return result

    def to_command_line(self, program: str = DEFAULT_PROGRAM) -> str:
        """Shell-quoted command line; values containing whitespace are quoted."""
        return " ".join([program, shlex.join(self.tokens())]).strip()


def serialize_invocation(
    config: RunConfig,
    snapshot: PlacementSnapshot | None = None,
    output_path: Path | None = None,
) -> Invocation:
    """Render the minimal flag list that reproduces the current run.

    Placement comes from ``snapshot`` when given (the live session), else from
    ``config``. ``output_path`` overrides the configured output. Default
    values are omitted; the interactive flag never is emitted.
    """
    x = snapshot.x_mm if snapshot is not None else config.x
    y = snapshot.y_mm if snapshot is not None else config.y
    scale = snapshot.scale if snapshot is not None else config.scale
    output = output_path if output_path is not None else config.output_path

    pairs: list[tuple[str, str | None]] = [
        ("--input", str(config.input_path)),
        ("--stamp", str(config.stamp_path)),
    ]
    if config.stamp_dpi != 0.0:
        pairs.append(("--stamp-dpi", f"{config.stamp_dpi:1.1f}"))
    if config.page != 1:
        pairs.append(("--page", str(config.page)))
    if x != 0.0:
        pairs.append(("--x", f"{x:1.1f}"))
    if y != 0.0:
        pairs.append(("--y", f"{y:1.1f}"))
    if scale != 1.0:
        pairs.append(("--scale", f"{scale:1.3f}"))
    if output is not None:
        pairs.append(("--output", str(output)))
    return Invocation(pairs=tuple(pairs))
