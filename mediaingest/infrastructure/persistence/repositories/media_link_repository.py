"""
Implementation SQLModel du repository des liens media.
"""

import os
from pathlib import PurePath
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from mediaingest.core.entities.media_link import MediaLink
from mediaingest.core.ports.repositories import IMediaLinkRepository, RepositoryError
from mediaingest.core.value_objects.media_kind import MediaKind
from mediaingest.infrastructure.persistence.models import MediaLinkModel


def _optional_int(value: Optional[str]) -> Optional[int]:
    return int(value) if value is not None else None


def _optional_str(value: Optional[int]) -> Optional[str]:
    return str(value) if value is not None else None


class SQLModelMediaLinkRepository(IMediaLinkRepository):
    """
    Repository SQLModel des liens media.

    La deduplication par prefixe compare le chemin candidat et chacun de
    ses repertoires ancetres a des chemins stockes, sans LIKE : les
    caracteres % et _ des noms de fichiers n'ont pas de sens particulier.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: MediaLinkModel) -> MediaLink:
        return MediaLink(
            id=_optional_str(model.id),
            file_path=model.file_path,
            media_kind=MediaKind(model.media_kind),
            metadata_id=_optional_str(model.metadata_id),
            root_metadata_id=_optional_str(model.root_metadata_id),
            parent_link_id=_optional_str(model.parent_link_id),
            is_directory=model.is_directory,
            added_at=model.added_at,
        )

    def _to_model(self, entity: MediaLink) -> MediaLinkModel:
        return MediaLinkModel(
            id=_optional_int(entity.id),
            file_path=entity.file_path,
            media_kind=entity.media_kind.value,
            metadata_id=_optional_int(entity.metadata_id),
            root_metadata_id=_optional_int(entity.root_metadata_id),
            parent_link_id=_optional_int(entity.parent_link_id),
            is_directory=entity.is_directory,
            added_at=entity.added_at,
        )

    def find_media_link_by_path(self, path: str) -> Optional[MediaLink]:
        """Lien sur le chemin lui-meme ou sur son ancetre le plus proche."""
        candidate = PurePath(path)
        paths = [str(candidate), *(str(parent) for parent in candidate.parents)]
        statement = (
            select(MediaLinkModel)
            .where(MediaLinkModel.file_path.in_(paths))
            .order_by(func.length(MediaLinkModel.file_path).desc())
        )
        try:
            model = self._session.exec(statement).first()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Lecture des liens impossible: {e}") from e
        return self._to_entity(model) if model else None

    def has_media_link_under(self, path: str) -> bool:
        """
        Lien sur le chemin lui-meme ou sur un descendant.

        Comparaison exacte du prefixe (substr) : ni joker ni casse ignoree
        comme avec LIKE.
        """
        root = str(PurePath(path))
        prefix = root.rstrip(os.sep) + os.sep
        statement = (
            select(MediaLinkModel.id)
            .where(
                or_(
                    MediaLinkModel.file_path == root,
                    func.substr(MediaLinkModel.file_path, 1, len(prefix)) == prefix,
                )
            )
            .limit(1)
        )
        try:
            found = self._session.exec(statement).first()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Lecture des liens impossible: {e}") from e
        return found is not None

    def find_media_link_by_id(self, link_id: str) -> Optional[MediaLink]:
        try:
            model = self._session.get(MediaLinkModel, int(link_id))
        except SQLAlchemyError as e:
            raise RepositoryError(f"Lecture du lien {link_id} impossible: {e}") from e
        return self._to_entity(model) if model else None

    def insert_media_link(self, link: MediaLink) -> MediaLink:
        model = self._to_model(link)
        try:
            self._session.add(model)
            self._session.commit()
            self._session.refresh(model)
        except SQLAlchemyError as e:
            self._session.rollback()
            raise RepositoryError(
                f"Insertion du lien {link.file_path} impossible: {e}"
            ) from e
        return self._to_entity(model)
