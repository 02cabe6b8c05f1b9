"""
Port des processeurs d'import par type de media.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from mediaingest.core.value_objects.media_kind import MediaKind
from mediaingest.core.value_objects.outcomes import ImportOutcome


class IMediaProcessor(ABC):
    """Importe un element de premier niveau d'une bibliotheque."""

    @property
    @abstractmethod
    def media_kinds(self) -> frozenset[MediaKind]:
        """Types de bibliotheque pris en charge."""
        ...

    @abstractmethod
    async def process(self, content_path: Path) -> ImportOutcome:
        """Importe un fichier ou dossier et retourne le resultat."""
        ...
