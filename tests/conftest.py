"""
Fixtures pytest partagees pour les tests MediaIngest.

Ce module contient les fixtures communes utilisees dans les tests:
- Mocks des ports (repositories, sonde, fournisseur)
- Session SQLite en memoire pour les repositories SQLModel
- Settings de test avec chemins temporaires
- Fabrique d'arborescence de bibliotheque
"""

from collections.abc import Callable, Iterator
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from mediaingest.adapters.parsing.path_classifier import PathClassifier
from mediaingest.config import Settings
from mediaingest.core.ports.repositories import (
    IMediaLinkRepository,
    IMetadataRepository,
    IStreamEncodingRepository,
)
from mediaingest.infrastructure.persistence.database import init_db


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings de test isoles dans tmp_path."""
    return Settings(
        data_dir=tmp_path / "data",
        cache_dir=tmp_path / "cache",
        database_url=f"sqlite:///{tmp_path}/test.db",
        tmdb_api_key="test_api_key",
        log_file=tmp_path / "test.log",
    )


@pytest.fixture
def db_session() -> Iterator[Session]:
    """Session SQLModel sur une base SQLite en memoire."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    with Session(engine) as session:
        yield session
    engine.dispose()


@pytest.fixture
def classifier() -> PathClassifier:
    return PathClassifier()


@pytest.fixture
def mock_media_link_repo() -> MagicMock:
    """
    Mock de IMediaLinkRepository.

    Aucun lien existant par defaut ; insert_media_link attribue des IDs
    croissants.
    """
    repo = MagicMock(spec=IMediaLinkRepository)
    repo.find_media_link_by_path.return_value = None
    repo.find_media_link_by_id.return_value = None
    repo.has_media_link_under.return_value = False
    counter = {"next": 100}

    def insert(link):
        counter["next"] += 1
        link.id = str(counter["next"])
        return link

    repo.insert_media_link.side_effect = insert
    return repo


@pytest.fixture
def mock_metadata_repo() -> MagicMock:
    """Mock de IMetadataRepository, catalogue vide par defaut."""
    repo = MagicMock(spec=IMetadataRepository)
    repo.find_existing_metadata.return_value = None
    repo.find_metadata_by_root_id.return_value = []
    return repo


@pytest.fixture
def mock_stream_repo() -> MagicMock:
    """Mock de IStreamEncodingRepository : aucun flux connu."""
    repo = MagicMock(spec=IStreamEncodingRepository)
    repo.count_stream_details.return_value = 0
    repo.insert_stream_encodings.side_effect = lambda link_id, records: list(records)
    return repo


@pytest.fixture
def make_file() -> Callable[..., Path]:
    """Cree un fichier (et ses repertoires parents) de la taille demandee."""

    def _make(path: Path, size: int = 16) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"\x00" * size)
        return path

    return _make
