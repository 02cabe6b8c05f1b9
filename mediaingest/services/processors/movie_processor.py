"""
Import d'un film depuis un fichier ou un dossier de film.
"""

import asyncio
from pathlib import Path
from typing import Optional

from loguru import logger

from mediaingest.adapters.parsing.path_classifier import PathClassifier
from mediaingest.core.entities.media_link import MediaLink
from mediaingest.core.ports.processor import IMediaProcessor
from mediaingest.core.ports.repositories import IMediaLinkRepository
from mediaingest.core.value_objects.classified_name import MovieFile
from mediaingest.core.value_objects.media_kind import MediaKind
from mediaingest.core.value_objects.outcomes import (
    ErrorAlreadyLinked,
    ErrorMatchNotFound,
    ErrorNothingToImport,
    ImportOutcome,
    ImportSuccess,
)
from mediaingest.services.metadata_resolver import MetadataResolver
from mediaingest.services.processors.matching import resolve_match
from mediaingest.utils.constants import is_video_file


def find_largest_video_file(directory: Path) -> Optional[Path]:
    """Plus gros fichier video directement sous `directory`, ou None."""
    videos = [
        child
        for child in directory.iterdir()
        if child.is_file() and is_video_file(child.name)
    ]
    if not videos:
        return None
    return max(videos, key=lambda p: p.stat().st_size)


class MovieImportProcessor(IMediaProcessor):
    """
    Importe un film.

    Pour un dossier, le plus gros fichier video est retenu (les extras
    et echantillons sont plus petits). Le titre et l'annee sont lus sur
    le nom du dossier, ou a defaut sur celui du fichier.
    """

    def __init__(
        self,
        resolver: MetadataResolver,
        media_link_repo: IMediaLinkRepository,
        classifier: PathClassifier,
    ) -> None:
        self.resolver = resolver
        self.media_link_repo = media_link_repo
        self.classifier = classifier

    @property
    def media_kinds(self) -> frozenset[MediaKind]:
        return frozenset({MediaKind.MOVIE})

    async def process(self, content_path: Path) -> ImportOutcome:
        is_directory = await asyncio.to_thread(content_path.is_dir)
        if is_directory:
            movie_file = await asyncio.to_thread(find_largest_video_file, content_path)
        else:
            movie_file = content_path
        if movie_file is None:
            logger.info(f"Aucun fichier video dans {content_path}")
            return ErrorNothingToImport(str(content_path))

        existing = self.media_link_repo.find_media_link_by_path(str(movie_file))
        if existing is not None:
            return ErrorAlreadyLinked(existing.id)

        name = self.classifier.classify(content_path.name, is_directory, MediaKind.MOVIE)
        if not isinstance(name, MovieFile) and is_directory:
            name = self.classifier.classify(movie_file.name, False, MediaKind.MOVIE)
        if not isinstance(name, MovieFile):
            return ErrorMatchNotFound(str(content_path), content_path.name)

        match = await resolve_match(
            self.resolver, MediaKind.MOVIE, name.name, name.year, content_path
        )
        if isinstance(match, ImportOutcome):
            return match

        link = self.media_link_repo.insert_media_link(
            MediaLink(
                file_path=str(movie_file),
                media_kind=MediaKind.MOVIE,
                metadata_id=match.record.id,
                root_metadata_id=match.record.id,
            )
        )
        logger.info(f"Film lie: {match.record.title} -> {movie_file}")
        return ImportSuccess(match.record.id, link.id, match=match)
