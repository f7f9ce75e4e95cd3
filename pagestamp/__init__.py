"""pagestamp - place a raster stamp onto one page of a PDF.

Reconciles page-space, millimetre, stamp-pixel and preview-pixel coordinates
and splices the stamped page back among the untouched pages.
"""

__version__ = "0.1.0"
__author__ = "pagestamp Contributors"

from pagestamp.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__"]
