"""
Service d'analyse des flux des fichiers media.

Pour chaque fichier video, trois sondes (video, audio, sous-titres) sont
lancees en parallele ; leurs resultats sont aplatis dans cet ordre fixe
puis enregistres en remplacement des flux precedents.

Les erreurs sont retournees par fichier (AnalysisOutcome) : un fichier
en echec n'interrompt jamais l'analyse des suivants.
"""

import asyncio
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from mediaingest.adapters.probe.parsers import parse_stream
from mediaingest.core.entities.media_link import MediaLink
from mediaingest.core.entities.stream import StreamEncodingRecord, StreamType
from mediaingest.core.ports.probe import IStreamProbe, ProbeError
from mediaingest.core.ports.repositories import (
    IStreamEncodingRepository,
    RepositoryError,
)
from mediaingest.core.value_objects.outcomes import (
    AnalysisErrorDatabase,
    AnalysisErrorFileNotFound,
    AnalysisErrorNothingToImport,
    AnalysisErrorProcess,
    AnalysisOutcome,
    AnalysisSuccess,
)
from mediaingest.utils.concurrency import gather_bounded
from mediaingest.utils.constants import is_video_file

# Ordre d'aplatissement des resultats
PROBE_ORDER = (StreamType.VIDEO, StreamType.AUDIO, StreamType.SUBTITLE)


class StreamAnalyzer:
    """
    Analyse les flux de fichiers deja lies au catalogue.

    Attributs:
        probe: Sonde de flux partagee (ffprobe)
        stream_repo: Repository des flux
        concurrency: Nombre de fichiers analyses simultanement
    """

    def __init__(
        self,
        probe: IStreamProbe,
        stream_repo: IStreamEncodingRepository,
        concurrency: int = 2,
    ) -> None:
        self.probe = probe
        self.stream_repo = stream_repo
        self.concurrency = concurrency

    async def analyze(
        self, media_links: Sequence[MediaLink], overwrite: bool = False
    ) -> list[AnalysisOutcome]:
        """
        Analyse les fichiers video d'une liste de liens media.

        Les liens sans extension video reconnue sont ignores, ainsi que
        ceux deja analyses quand overwrite est faux.

        Args:
            media_links: Liens a analyser
            overwrite: Reanalyser les fichiers ayant deja des flux

        Returns:
            Un resultat par fichier analyse, dans l'ordre d'entree ;
            [AnalysisErrorNothingToImport()] si aucun fichier n'est retenu
        """
        candidates = []
        for link in media_links:
            if link.is_directory or not is_video_file(Path(link.file_path).name):
                continue
            if not overwrite and self._has_streams(link):
                logger.debug(f"Flux deja connus, ignore: {link.file_path}")
                continue
            candidates.append(link)

        if not candidates:
            return [AnalysisErrorNothingToImport()]

        logger.info(f"Analyse des flux de {len(candidates)} fichier(s)")
        return await gather_bounded(candidates, self._analyze_one, self.concurrency)

    def _has_streams(self, link: MediaLink) -> bool:
        try:
            return self.stream_repo.count_stream_details(link.id) > 0
        except Exception as e:
            logger.warning(f"Comptage des flux impossible ({link.file_path}): {e}")
            return False

    async def _analyze_one(self, link: MediaLink) -> AnalysisOutcome:
        file_path = Path(link.file_path)
        exists = await asyncio.to_thread(file_path.exists)
        if not exists:
            logger.warning(f"Fichier introuvable: {file_path}")
            return AnalysisErrorFileNotFound(link.id, str(file_path))

        try:
            streams, failures = await self._probe_all(link, file_path)
        except Exception as e:
            logger.exception(f"Analyse impossible: {file_path}")
            return AnalysisErrorProcess(link.id, str(e) or type(e).__name__)

        if len(failures) == len(PROBE_ORDER):
            detail = "; ".join(failures)
            logger.error(f"Sonde en echec pour {file_path}: {detail}")
            return AnalysisErrorProcess(link.id, detail)
        if failures:
            logger.warning(f"Sonde partielle pour {file_path}: {'; '.join(failures)}")

        try:
            saved = self.stream_repo.insert_stream_encodings(link.id, streams)
        except RepositoryError as e:
            logger.error(f"Enregistrement des flux impossible ({file_path}): {e}")
            return AnalysisErrorDatabase(link.id, str(e))
        except Exception as e:
            logger.exception(f"Enregistrement des flux impossible: {file_path}")
            return AnalysisErrorDatabase(link.id, str(e) or type(e).__name__)

        logger.debug(f"{len(saved)} flux enregistres pour {file_path}")
        return AnalysisSuccess(link.id, tuple(saved))

    async def _probe_all(
        self, link: MediaLink, file_path: Path
    ) -> tuple[list[StreamEncodingRecord], list[str]]:
        """Lance les trois sondes et aplatit leurs flux dans PROBE_ORDER."""
        results = await asyncio.gather(
            *(self.probe.probe_streams(file_path, stream_type) for stream_type in PROBE_ORDER),
            return_exceptions=True,
        )

        streams: list[StreamEncodingRecord] = []
        failures: list[str] = []
        for stream_type, result in zip(PROBE_ORDER, results):
            if isinstance(result, ProbeError):
                failures.append(f"{stream_type.value}: {result.detail}")
                continue
            if isinstance(result, Exception):
                logger.opt(exception=result).error(
                    f"Erreur inattendue de la sonde {stream_type.value}: {file_path}"
                )
                failures.append(f"{stream_type.value}: {result}")
                continue
            if isinstance(result, BaseException):
                raise result
            for raw in result:
                record = parse_stream(raw, link.id)
                if record is not None:
                    streams.append(record)
        return streams, failures
