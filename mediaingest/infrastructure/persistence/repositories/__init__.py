"""
Implementations SQLModel des ports repository.
"""

from mediaingest.infrastructure.persistence.repositories.media_link_repository import (
    SQLModelMediaLinkRepository,
)
from mediaingest.infrastructure.persistence.repositories.metadata_repository import (
    SQLModelMetadataRepository,
)
from mediaingest.infrastructure.persistence.repositories.stream_encoding_repository import (
    SQLModelStreamEncodingRepository,
)

__all__ = [
    "SQLModelMediaLinkRepository",
    "SQLModelMetadataRepository",
    "SQLModelStreamEncodingRepository",
]
