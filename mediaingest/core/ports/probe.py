"""
Port de la sonde de flux (ffprobe ou equivalent).
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from mediaingest.core.entities.stream import StreamType


class ProbeError(Exception):
    """
    Echec d'une invocation de la sonde.

    Attributs:
        detail: Texte de diagnostic (stderr du processus, cause)
    """

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)


class IStreamProbe(ABC):
    """
    Interface de la sonde de flux.

    Partagee entre les workers : chaque appel est independant.
    """

    @abstractmethod
    async def probe_streams(
        self, file_path: Path, stream_type: StreamType
    ) -> list[dict[str, Any]]:
        """
        Liste les descripteurs bruts des flux d'une categorie.

        Raises:
            ProbeError: Si la sonde echoue
        """
        ...
