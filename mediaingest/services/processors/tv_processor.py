"""
Import d'une serie depuis son dossier.

Arborescence attendue :
    Show Name (2008)/
        Season 01/
            Show Name - S01E01 - Pilot.mkv
        Season 02/
            ...
"""

import asyncio
from pathlib import Path

from loguru import logger

from mediaingest.adapters.parsing.path_classifier import PathClassifier
from mediaingest.core.entities.media_link import MediaLink
from mediaingest.core.ports.processor import IMediaProcessor
from mediaingest.core.ports.repositories import IMediaLinkRepository, RepositoryError
from mediaingest.core.value_objects.classified_name import (
    EpisodeFile,
    SeasonFolder,
    ShowFolder,
)
from mediaingest.core.value_objects.media_kind import MediaKind
from mediaingest.core.value_objects.outcomes import (
    ErrorMatchNotFound,
    ErrorNothingToImport,
    ErrorPersistenceFailure,
    ImportOutcome,
    ImportSuccess,
    MetadataMatch,
)
from mediaingest.services.metadata_resolver import MetadataResolver
from mediaingest.services.processors.matching import resolve_match
from mediaingest.utils.concurrency import gather_bounded
from mediaingest.utils.constants import is_video_file


def _list_children(directory: Path) -> list[Path]:
    return sorted(directory.iterdir())


def _list_video_files(directory: Path) -> list[Path]:
    return [
        child
        for child in sorted(directory.iterdir())
        if child.is_file() and is_video_file(child.name)
    ]


class TvImportProcessor(IMediaProcessor):
    """
    Importe une serie, ses dossiers de saison et ses episodes.

    Le traitement se fait en deux phases. La lecture (resolution de la
    serie, listage des saisons et des episodes) se termine avant la
    premiere ecriture de lien ; les dossiers de saison sont listes en
    parallele avec une borne fixe. L'ecriture des liens est ensuite
    faite d'un seul tenant, sans point de suspension : une annulation
    ne peut pas l'interrompre a mi-chemin.

    Une erreur de persistance sur une saison ou un episode est retournee
    comme sous-resultat ErrorPersistenceFailure ; les autres saisons sont
    tout de meme liees.

    Attributs:
        season_concurrency: Nombre de dossiers de saison listes simultanement
    """

    def __init__(
        self,
        resolver: MetadataResolver,
        media_link_repo: IMediaLinkRepository,
        classifier: PathClassifier,
        season_concurrency: int = 5,
    ) -> None:
        self.resolver = resolver
        self.media_link_repo = media_link_repo
        self.classifier = classifier
        self.season_concurrency = season_concurrency

    @property
    def media_kinds(self) -> frozenset[MediaKind]:
        return frozenset({MediaKind.TV})

    async def process(self, content_path: Path) -> ImportOutcome:
        if not await asyncio.to_thread(content_path.is_dir):
            return ErrorNothingToImport(str(content_path))
        children = await asyncio.to_thread(_list_children, content_path)
        if not children:
            return ErrorNothingToImport(str(content_path))

        name = self.classifier.classify(content_path.name, True, MediaKind.TV)
        if not isinstance(name, ShowFolder):
            logger.info(f"Dossier de serie non reconnu: {content_path}")
            return ErrorNothingToImport(str(content_path))

        match = await resolve_match(
            self.resolver, MediaKind.TV, name.name, name.year, content_path
        )
        if isinstance(match, ImportOutcome):
            return match

        season_dirs = []
        for child in children:
            if not await asyncio.to_thread(child.is_dir):
                continue
            classified = self.classifier.classify(child.name, True, MediaKind.TV)
            if isinstance(classified, SeasonFolder):
                season_dirs.append((child, classified.season_number))

        episode_files = await gather_bounded(
            season_dirs,
            lambda entry: asyncio.to_thread(_list_video_files, entry[0]),
            self.season_concurrency,
        )

        # Ecritures : plus aucun await a partir d'ici
        show = match.record
        show_link = self.media_link_repo.insert_media_link(
            MediaLink(
                file_path=str(content_path),
                media_kind=MediaKind.TV,
                metadata_id=show.id,
                root_metadata_id=show.id,
                is_directory=True,
            )
        )
        subresults = [
            self._link_season(match, show_link, season_dir, season_number, files)
            for (season_dir, season_number), files in zip(season_dirs, episode_files)
        ]
        logger.info(f"Serie liee: {show.title} ({len(season_dirs)} saisons)")
        return ImportSuccess(show.id, show_link.id, tuple(subresults), match)

    def _link_season(
        self,
        match: MetadataMatch,
        show_link: MediaLink,
        season_dir: Path,
        season_number: int,
        episode_files: list[Path],
    ) -> ImportOutcome:
        season = next(
            (s for s in match.seasons if s.season_number == season_number), None
        )
        if season is None:
            return ErrorMatchNotFound(
                str(season_dir), f"{match.record.title} season {season_number}"
            )

        try:
            season_link = self.media_link_repo.insert_media_link(
                MediaLink(
                    file_path=str(season_dir),
                    media_kind=MediaKind.TV,
                    metadata_id=season.id,
                    root_metadata_id=match.record.id,
                    parent_link_id=show_link.id,
                    is_directory=True,
                )
            )
        except RepositoryError as e:
            logger.error(f"Lien de saison impossible ({season_dir}): {e}")
            return ErrorPersistenceFailure(str(e))

        results = tuple(
            self._link_episode(match, season_link, episode_file)
            for episode_file in episode_files
        )
        return ImportSuccess(season.id, season_link.id, results)

    def _link_episode(
        self, match: MetadataMatch, season_link: MediaLink, episode_file: Path
    ) -> ImportOutcome:
        name = self.classifier.classify(episode_file.name, False, MediaKind.TV)
        if not isinstance(name, EpisodeFile) or name.season_number is None:
            logger.warning(f"Episode non reconnu: {episode_file}")
            return ErrorMatchNotFound(str(episode_file), episode_file.name)

        episode = next(
            (
                e
                for e in match.episodes
                if e.season_number == name.season_number
                and e.episode_number == name.episode_number
            ),
            None,
        )
        if episode is None:
            return ErrorMatchNotFound(
                str(episode_file),
                f"{match.record.title} S{name.season_number:02d}E{name.episode_number:02d}",
            )

        try:
            link = self.media_link_repo.insert_media_link(
                MediaLink(
                    file_path=str(episode_file),
                    media_kind=MediaKind.TV,
                    metadata_id=episode.id,
                    root_metadata_id=match.record.id,
                    parent_link_id=season_link.id,
                )
            )
        except RepositoryError as e:
            logger.error(f"Lien d'episode impossible ({episode_file}): {e}")
            return ErrorPersistenceFailure(str(e))
        return ImportSuccess(episode.id, link.id)
