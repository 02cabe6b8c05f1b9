"""
Generation des index de previsualisation BIF.

Extrait une vignette JPEG toutes les N secondes avec ffmpeg, puis les
assemble dans un fichier BIF consulte par la couche de streaming pour
afficher une vignette a un horodatage donne.
"""

import asyncio
import re
import shutil
import tempfile
from pathlib import Path

from loguru import logger

from mediaingest.adapters.preview.bif import BifFileBuilder
from mediaingest.core.ports.repositories import IMediaLinkRepository
from mediaingest.utils.constants import PREVIEW_FILE_NAME
from mediaingest.utils.process import terminate_process

_FRAME_NUMBER_RE = re.compile(r"preview(\d+)\.jpg$")


class PreviewGenerationError(Exception):
    """Echec de la generation d'un index de previsualisation."""


def _frame_number(path: Path) -> int:
    match = _FRAME_NUMBER_RE.search(path.name)
    return int(match.group(1)) if match else 0


class PreviewGenerator:
    """
    Genere l'index BIF d'un fichier lie au catalogue.

    Attributs:
        media_link_repo: Repository des liens media
        output_dir: Repertoire racine des index (un sous-dossier par lien)
        ffmpeg_path: Executable ffmpeg
        interval_seconds: Intervalle entre deux vignettes
        image_width: Largeur des vignettes (hauteur proportionnelle)
        image_quality: Qualite JPEG ffmpeg (-q:v, 2 = meilleure)
        timeout: Delai maximum de l'extraction (secondes)
    """

    def __init__(
        self,
        media_link_repo: IMediaLinkRepository,
        output_dir: Path,
        ffmpeg_path: str = "ffmpeg",
        interval_seconds: int = 5,
        image_width: int = 240,
        image_quality: int = 2,
        timeout: float = 3600.0,
    ) -> None:
        self.media_link_repo = media_link_repo
        self.output_dir = output_dir
        self.ffmpeg_path = ffmpeg_path
        self.interval_seconds = interval_seconds
        self.image_width = image_width
        self.image_quality = image_quality
        self.timeout = timeout

    def preview_path(self, media_link_id: str) -> Path:
        """Chemin de l'index BIF d'un lien media."""
        return self.output_dir / str(media_link_id) / PREVIEW_FILE_NAME

    def build_command(self, source: Path, frames_dir: Path) -> list[str]:
        """Ligne de commande ffmpeg d'extraction des vignettes."""
        return [
            self.ffmpeg_path,
            "-hide_banner",
            "-loglevel", "error",
            "-i", str(source),
            "-vf", f"fps=fps=1/{self.interval_seconds},scale={self.image_width}:-1",
            "-q:v", str(self.image_quality),
            str(frames_dir / "preview%d.jpg"),
        ]

    async def generate(self, media_link_id: str) -> Path:
        """
        Genere (ou regenere) l'index BIF d'un lien media.

        Args:
            media_link_id: Lien vers un fichier video local

        Returns:
            Chemin du fichier BIF ecrit

        Raises:
            PreviewGenerationError: Lien inconnu, fichier absent, ou echec ffmpeg
        """
        link = self.media_link_repo.find_media_link_by_id(media_link_id)
        if link is None or link.is_directory:
            raise PreviewGenerationError(f"Lien media invalide: {media_link_id}")
        source = Path(link.file_path)
        if not await asyncio.to_thread(source.exists):
            raise PreviewGenerationError(f"Fichier introuvable: {source}")

        frames_dir = Path(tempfile.mkdtemp(prefix="mediaingest-preview-"))
        try:
            await self._extract_frames(source, frames_dir)
            frames = sorted(frames_dir.glob("preview*.jpg"), key=_frame_number)
            if not frames:
                raise PreviewGenerationError(f"Aucune vignette extraite de {source}")

            builder = BifFileBuilder(frame_interval_ms=self.interval_seconds * 1000)
            for frame in frames:
                builder.append_frame_file(frame)
            destination = await asyncio.to_thread(
                builder.save, self.preview_path(media_link_id)
            )
        finally:
            shutil.rmtree(frames_dir, ignore_errors=True)

        logger.info(f"Index BIF genere ({len(frames)} vignettes): {destination}")
        return destination

    async def _extract_frames(self, source: Path, frames_dir: Path) -> None:
        cmd = self.build_command(source, frames_dir)
        logger.debug(f"ffmpeg: {' '.join(cmd)}")
        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            raise PreviewGenerationError(
                f"ffmpeg introuvable: {self.ffmpeg_path}"
            ) from None

        try:
            _, stderr = await asyncio.wait_for(
                process.communicate(), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            raise PreviewGenerationError(f"Timeout ffmpeg sur {source}") from None
        finally:
            await terminate_process(process)

        if process.returncode != 0:
            raise PreviewGenerationError(
                f"ffmpeg a echoue (code {process.returncode}): "
                f"{stderr.decode(errors='replace').strip()}"
            )
