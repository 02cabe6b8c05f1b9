"""
Sonde des flux d'un fichier media via ffprobe.

Chaque appel lance un processus ffprobe independant filtre sur une
categorie de flux, ce qui permet de sonder video, audio et sous-titres
en parallele.
"""

import asyncio
import json
from pathlib import Path
from typing import Any

from loguru import logger

from mediaingest.core.entities.stream import StreamType
from mediaingest.core.ports.probe import IStreamProbe, ProbeError
from mediaingest.utils.process import terminate_process

# Specificateurs -select_streams (V = video hors pochettes integrees)
STREAM_SELECTORS = {
    StreamType.VIDEO: "V",
    StreamType.AUDIO: "a",
    StreamType.SUBTITLE: "s",
}


class FFprobeStreamProbe(IStreamProbe):
    """
    Implementation de IStreamProbe basee sur ffprobe.

    Attributs:
        ffprobe_path: Executable ffprobe
        timeout: Delai maximum d'une invocation (secondes)
    """

    def __init__(self, ffprobe_path: str = "ffprobe", timeout: float = 60.0) -> None:
        self.ffprobe_path = ffprobe_path
        self.timeout = timeout

    def build_command(self, file_path: Path, stream_type: StreamType) -> list[str]:
        """Construit la ligne de commande ffprobe pour une categorie."""
        return [
            self.ffprobe_path,
            "-v", "error",
            "-print_format", "json",
            "-select_streams", STREAM_SELECTORS[stream_type],
            "-show_streams",
            str(file_path),
        ]

    async def probe_streams(
        self, file_path: Path, stream_type: StreamType
    ) -> list[dict[str, Any]]:
        """
        Sonde les flux d'une categorie.

        Args:
            file_path: Fichier media
            stream_type: Categorie de flux

        Returns:
            Liste des descripteurs "streams" de ffprobe

        Raises:
            ProbeError: Executable absent, delai depasse, code retour non nul
                ou sortie JSON invalide
        """
        cmd = self.build_command(file_path, stream_type)
        logger.debug(f"ffprobe {stream_type.value}: {file_path}")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            raise ProbeError(f"ffprobe introuvable: {self.ffprobe_path}") from None

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            raise ProbeError(
                f"Timeout ffprobe ({self.timeout}s) sur {file_path}"
            ) from None
        finally:
            # Timeout ou annulation : le processus ne doit pas survivre
            await terminate_process(process)

        if process.returncode != 0:
            detail = stderr.decode(errors="replace").strip()
            raise ProbeError(
                detail or f"ffprobe a echoue (code {process.returncode})"
            )

        try:
            data = json.loads(stdout.decode(errors="replace") or "{}")
        except json.JSONDecodeError as e:
            raise ProbeError(f"Sortie ffprobe invalide: {e}") from e

        return data.get("streams", [])
