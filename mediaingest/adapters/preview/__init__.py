"""Index de previsualisation BIF (vignettes de navigation)."""

from mediaingest.adapters.preview.bif import (
    BifFileBuilder,
    BifFileReader,
    BifFormatError,
    BifFrame,
    BifHeader,
    BifIndexEntry,
)

__all__ = [
    "BifFileBuilder",
    "BifFileReader",
    "BifFormatError",
    "BifFrame",
    "BifHeader",
    "BifIndexEntry",
]
