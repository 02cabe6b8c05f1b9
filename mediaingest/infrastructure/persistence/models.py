"""
Modeles SQLModel pour la base de donnees MediaIngest.

Ces modeles representent les tables SQLite. Ils sont distincts des
entites de domaine (dataclass dans core/entities/) selon l'architecture
hexagonale.

Tables:
- metadata: Entrees du catalogue (films, series, saisons, episodes)
- media_links: Liens entre entrees du catalogue et chemins locaux
- stream_encodings: Flux analyses des fichiers lies
"""

from datetime import date, datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class MetadataModel(SQLModel, table=True):
    """
    Entree du catalogue.

    remote_id est unique : c'est la cle de reutilisation lors des imports.
    """

    __tablename__ = "metadata"

    id: Optional[int] = Field(default=None, primary_key=True)
    remote_id: str = Field(index=True, unique=True)
    kind: str = Field(index=True)  # movie, tv_show, tv_season, tv_episode
    title: str = Field(default="", index=True)
    overview: Optional[str] = None
    release_date: Optional[date] = None
    rating: Optional[float] = None
    poster_path: Optional[str] = None
    parent_id: Optional[int] = Field(default=None, foreign_key="metadata.id", index=True)
    root_id: Optional[int] = Field(default=None, foreign_key="metadata.id", index=True)
    season_number: Optional[int] = None
    episode_number: Optional[int] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class MediaLinkModel(SQLModel, table=True):
    """Lien entre une entree du catalogue et un fichier ou dossier local."""

    __tablename__ = "media_links"

    id: Optional[int] = Field(default=None, primary_key=True)
    file_path: str = Field(index=True, unique=True)
    media_kind: str  # movie, tv
    metadata_id: Optional[int] = Field(default=None, foreign_key="metadata.id", index=True)
    root_metadata_id: Optional[int] = Field(default=None, foreign_key="metadata.id")
    parent_link_id: Optional[int] = Field(default=None, foreign_key="media_links.id")
    is_directory: bool = False
    added_at: datetime = Field(default_factory=datetime.now)


class StreamEncodingModel(SQLModel, table=True):
    """Flux video, audio ou sous-titre d'un fichier lie."""

    __tablename__ = "stream_encodings"

    id: Optional[int] = Field(default=None, primary_key=True)
    media_link_id: int = Field(foreign_key="media_links.id", index=True)
    stream_type: str  # video, audio, subtitle
    stream_index: int
    codec_name: Optional[str] = None
    codec_long_name: Optional[str] = None
    profile: Optional[str] = None
    bit_rate: Optional[int] = None
    level: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    pix_fmt: Optional[str] = None
    channels: Optional[int] = None
    channel_layout: Optional[str] = None
    sample_rate: Optional[int] = None
    language: Optional[str] = None
    title: Optional[str] = None
    is_default: bool = False
    duration_seconds: Optional[float] = None
