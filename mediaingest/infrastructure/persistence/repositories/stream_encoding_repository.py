"""
Implementation SQLModel du repository des flux analyses.
"""

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from mediaingest.core.entities.stream import StreamEncodingRecord, StreamType
from mediaingest.core.ports.repositories import (
    IStreamEncodingRepository,
    RepositoryError,
)
from mediaingest.infrastructure.persistence.models import StreamEncodingModel


class SQLModelStreamEncodingRepository(IStreamEncodingRepository):
    """Repository SQLModel des flux : remplacement integral par lien."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: StreamEncodingModel) -> StreamEncodingRecord:
        return StreamEncodingRecord(
            media_link_id=str(model.media_link_id),
            stream_type=StreamType(model.stream_type),
            index=model.stream_index,
            codec_name=model.codec_name,
            codec_long_name=model.codec_long_name,
            profile=model.profile,
            bit_rate=model.bit_rate,
            level=model.level,
            width=model.width,
            height=model.height,
            pix_fmt=model.pix_fmt,
            channels=model.channels,
            channel_layout=model.channel_layout,
            sample_rate=model.sample_rate,
            language=model.language,
            title=model.title,
            default=model.is_default,
            duration_seconds=model.duration_seconds,
        )

    def _to_model(
        self, media_link_id: int, entity: StreamEncodingRecord
    ) -> StreamEncodingModel:
        return StreamEncodingModel(
            media_link_id=media_link_id,
            stream_type=entity.stream_type.value,
            stream_index=entity.index,
            codec_name=entity.codec_name,
            codec_long_name=entity.codec_long_name,
            profile=entity.profile,
            bit_rate=entity.bit_rate,
            level=entity.level,
            width=entity.width,
            height=entity.height,
            pix_fmt=entity.pix_fmt,
            channels=entity.channels,
            channel_layout=entity.channel_layout,
            sample_rate=entity.sample_rate,
            language=entity.language,
            title=entity.title,
            is_default=entity.default,
            duration_seconds=entity.duration_seconds,
        )

    def insert_stream_encodings(
        self, media_link_id: str, records: Sequence[StreamEncodingRecord]
    ) -> list[StreamEncodingRecord]:
        """Supprime les flux existants du lien puis insere les nouveaux."""
        link_id = int(media_link_id)
        try:
            existing = self._session.exec(
                select(StreamEncodingModel).where(
                    StreamEncodingModel.media_link_id == link_id
                )
            ).all()
            for model in existing:
                self._session.delete(model)
            models = [self._to_model(link_id, record) for record in records]
            self._session.add_all(models)
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            raise RepositoryError(
                f"Ecriture des flux du lien {media_link_id} impossible: {e}"
            ) from e
        return [self._to_entity(model) for model in models]

    def count_stream_details(self, media_link_id: str) -> int:
        statement = (
            select(func.count())
            .select_from(StreamEncodingModel)
            .where(StreamEncodingModel.media_link_id == int(media_link_id))
        )
        try:
            return self._session.exec(statement).one()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Comptage des flux impossible: {e}") from e
