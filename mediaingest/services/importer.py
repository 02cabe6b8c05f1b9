"""
Service d'import d'une bibliotheque locale.

ImportCoordinator parcourt le premier niveau d'une racine de
bibliotheque et delegue chaque element au processeur du type demande
(films ou series), avec une concurrence bornee.

Chaque element produit un ImportOutcome : toute exception levee par un
processeur, le resolveur ou la persistance est convertie en erreur pour
cet element seul, sans annuler les autres.
"""

import asyncio
import uuid
from collections.abc import AsyncIterator, Sequence
from contextlib import aclosing
from pathlib import Path
from typing import Optional

from loguru import logger

from mediaingest.core.ports.processor import IMediaProcessor
from mediaingest.core.ports.repositories import IMediaLinkRepository, RepositoryError
from mediaingest.core.value_objects.media_kind import MediaKind
from mediaingest.core.value_objects.outcomes import (
    ErrorAlreadyLinked,
    ErrorFileNotFound,
    ErrorNothingToImport,
    ErrorPersistenceFailure,
    ErrorProviderFailure,
    ImportOutcome,
    ImportSuccess,
)
from mediaingest.utils.concurrency import map_as_completed


class ImportCoordinator:
    """
    Orchestrateur d'import.

    Attributs:
        processors: Processeurs enregistres, par ordre de priorite
        media_link_repo: Repository des liens (deduplication)
        concurrency: Nombre d'elements importes simultanement
    """

    def __init__(
        self,
        processors: Sequence[IMediaProcessor],
        media_link_repo: IMediaLinkRepository,
        concurrency: int = 3,
    ) -> None:
        self.processors = list(processors)
        self.media_link_repo = media_link_repo
        self.concurrency = concurrency

    def _find_processor(self, media_kind: MediaKind) -> Optional[IMediaProcessor]:
        return next(
            (p for p in self.processors if media_kind in p.media_kinds), None
        )

    async def import_all(
        self, root_path: Path, media_kind: MediaKind
    ) -> AsyncIterator[ImportOutcome]:
        """
        Importe chaque element de premier niveau d'une racine.

        Les resultats sont produits dans l'ordre de completion, qui peut
        differer de l'ordre du repertoire.

        Args:
            root_path: Racine de la bibliotheque
            media_kind: Type de bibliotheque (films ou series)

        Yields:
            Un ImportOutcome par element ; un unique ErrorFileNotFound
            si la racine n'existe pas
        """
        if not await asyncio.to_thread(root_path.exists):
            logger.warning(f"Racine introuvable: {root_path}")
            yield ErrorFileNotFound(str(root_path))
            return

        children = await asyncio.to_thread(lambda: sorted(root_path.iterdir()))
        logger.info(
            f"Import {media_kind.value}: {len(children)} element(s) sous {root_path}"
        )

        outcomes = map_as_completed(
            children,
            lambda child: self._import_item(child, media_kind),
            self.concurrency,
        )
        async with aclosing(outcomes):
            async for outcome in outcomes:
                yield outcome

    async def find_unmapped(self, root_path: Path) -> list[Path]:
        """
        Liste les elements de premier niveau qu'aucun lien ne reference.

        Un element est considere comme importe si un lien porte sur lui
        ou sur un fichier qu'il contient. Apercu d'un scan, sans import.

        Args:
            root_path: Racine de la bibliotheque

        Returns:
            Elements non importes, tries par chemin ; [] si la racine
            n'existe pas

        Raises:
            RepositoryError: Si la lecture des liens echoue
        """
        if not await asyncio.to_thread(root_path.exists):
            return []
        children = await asyncio.to_thread(lambda: sorted(root_path.iterdir()))
        unmapped = [
            child
            for child in children
            if not self.media_link_repo.has_media_link_under(str(child))
        ]
        logger.debug(f"{len(unmapped)}/{len(children)} element(s) non importes sous {root_path}")
        return unmapped

    async def import_path(self, path: Path, media_kind: MediaKind) -> ImportOutcome:
        """
        Importe un seul element.

        Args:
            path: Fichier ou dossier a importer
            media_kind: Type de bibliotheque

        Returns:
            Le resultat de l'import
        """
        if not await asyncio.to_thread(path.exists):
            return ErrorFileNotFound(str(path))
        return await self._import_item(path, media_kind)

    async def _import_item(self, path: Path, media_kind: MediaKind) -> ImportOutcome:
        marker = uuid.uuid4().hex[:8]
        with logger.contextualize(import_id=marker):
            logger.debug(f"[{marker}] Import de {path}")
            try:
                existing = self.media_link_repo.find_media_link_by_path(str(path))
                if existing is not None:
                    logger.debug(f"[{marker}] Deja lie ({existing.id}): {path}")
                    return ErrorAlreadyLinked(existing.id)

                processor = self._find_processor(media_kind)
                if processor is None:
                    return ErrorNothingToImport(str(path))

                outcome = await processor.process(path)
            except RepositoryError as e:
                logger.exception(f"[{marker}] Erreur de persistance: {path}")
                return ErrorPersistenceFailure(str(e))
            except Exception as e:
                logger.exception(f"[{marker}] Erreur d'import: {path}")
                return ErrorProviderFailure(str(e) or type(e).__name__)

            if isinstance(outcome, ImportSuccess):
                logger.info(f"[{marker}] Importe: {path}")
            else:
                logger.info(f"[{marker}] {type(outcome).__name__}: {path}")
            return outcome
