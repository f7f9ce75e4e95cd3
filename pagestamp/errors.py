"""Error taxonomy shared by the engine, adapters and CLI."""

from __future__ import annotations

from dataclasses import dataclass


class PageStampError(Exception):
    """Base class for all pagestamp failures."""


class ConfigError(PageStampError, ValueError):
    """Invalid caller-supplied parameter (scale, page index, density override).

    Raised at the boundary before any state is mutated or file written.
    """


class ResourceError(PageStampError):
    """Input document or stamp image could not be read or decoded."""


class CollaboratorError(PageStampError):
    """An external document/raster primitive failed.

    ``step`` names the splice step that was running, ``operation`` the
    collaborator call that failed.
    """

    def __init__(self, message: str, *, step: str | None = None, operation: str | None = None):
        super().__init__(message)
        self.step = step
        self.operation = operation

    def __str__(self) -> str:
        message = super().__str__()
        if self.step:
            return f"{self.step}: {message}"
        return message


@dataclass(frozen=True, slots=True)
class DegradedResolution:
    """Non-fatal diagnostic: the stamp density fell back to a default."""

    reason: str
    density: float

    @property
    def message(self) -> str:
        return (
            f"No usable resolution metadata in stamp ({self.reason}); "
            f"using {self.density:.1f} DPI. The printed stamp size may differ."
        )
