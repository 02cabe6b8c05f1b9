"""
Implementation SQLModel du repository des entrees du catalogue.
"""

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from mediaingest.core.entities.metadata import MetadataRecord
from mediaingest.core.ports.repositories import IMetadataRepository, RepositoryError
from mediaingest.core.value_objects.media_kind import MetadataKind
from mediaingest.infrastructure.persistence.models import MetadataModel


def _optional_int(value: Optional[str]) -> Optional[int]:
    return int(value) if value is not None else None


def _optional_str(value: Optional[int]) -> Optional[str]:
    return str(value) if value is not None else None


class SQLModelMetadataRepository(IMetadataRepository):
    """
    Repository SQLModel des entrees du catalogue.

    insert_metadata se comporte en upsert sur remote_id : l'id local
    d'une entree existante est conserve.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: MetadataModel) -> MetadataRecord:
        return MetadataRecord(
            id=_optional_str(model.id),
            remote_id=model.remote_id,
            kind=MetadataKind(model.kind),
            title=model.title,
            overview=model.overview,
            release_date=model.release_date,
            rating=model.rating,
            poster_path=model.poster_path,
            parent_id=_optional_str(model.parent_id),
            root_id=_optional_str(model.root_id),
            season_number=model.season_number,
            episode_number=model.episode_number,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _apply(self, model: MetadataModel, entity: MetadataRecord) -> MetadataModel:
        """Copie les champs de l'entite sur le modele (hors id)."""
        model.remote_id = entity.remote_id
        model.kind = entity.kind.value
        model.title = entity.title
        model.overview = entity.overview
        model.release_date = entity.release_date
        model.rating = entity.rating
        model.poster_path = entity.poster_path
        model.parent_id = _optional_int(entity.parent_id)
        model.root_id = _optional_int(entity.root_id)
        model.season_number = entity.season_number
        model.episode_number = entity.episode_number
        model.updated_at = entity.updated_at
        return model

    def _select_one(self, statement) -> Optional[MetadataRecord]:
        try:
            model = self._session.exec(statement).first()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Lecture du catalogue impossible: {e}") from e
        return self._to_entity(model) if model else None

    def find_existing_metadata(self, remote_id: str) -> Optional[MetadataRecord]:
        return self._select_one(
            select(MetadataModel).where(MetadataModel.remote_id == remote_id)
        )

    def find_metadata_by_id(self, metadata_id: str) -> Optional[MetadataRecord]:
        return self._select_one(
            select(MetadataModel).where(MetadataModel.id == int(metadata_id))
        )

    def find_metadata_by_root_id(self, root_id: str) -> list[MetadataRecord]:
        statement = (
            select(MetadataModel)
            .where(MetadataModel.root_id == int(root_id))
            .order_by(MetadataModel.season_number, MetadataModel.episode_number)
        )
        try:
            models = self._session.exec(statement).all()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Lecture du catalogue impossible: {e}") from e
        return [self._to_entity(model) for model in models]

    def insert_metadata(self, record: MetadataRecord) -> MetadataRecord:
        try:
            model = None
            if record.id is not None:
                model = self._session.get(MetadataModel, int(record.id))
            if model is None:
                model = self._session.exec(
                    select(MetadataModel).where(MetadataModel.remote_id == record.remote_id)
                ).first()
            if model is None:
                model = MetadataModel(
                    remote_id=record.remote_id,
                    kind=record.kind.value,
                    created_at=record.created_at,
                )
            self._session.add(self._apply(model, record))
            self._session.commit()
            self._session.refresh(model)
        except SQLAlchemyError as e:
            self._session.rollback()
            raise RepositoryError(
                f"Ecriture de {record.remote_id} impossible: {e}"
            ) from e
        return self._to_entity(model)
