"""
Configuration de la base de donnees SQLite pour MediaIngest.

Ce module fournit :
- Creation de l'engine (SQLite partage entre threads)
- Creation des tables

La base est configuree via MEDIAINGEST_DATABASE_URL (defaut: sqlite:///mediaingest.db).
"""

from pathlib import Path

from sqlalchemy import Engine
from sqlmodel import SQLModel, create_engine


def create_db_engine(database_url: str) -> Engine:
    """
    Cree un engine pour l'URL donnee.

    Pour un fichier SQLite, le repertoire parent est cree si besoin.
    """
    if database_url.startswith("sqlite:///") and ":memory:" not in database_url:
        Path(database_url.replace("sqlite:///", "")).parent.mkdir(
            parents=True, exist_ok=True
        )
    connect_args = (
        {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    )
    return create_engine(database_url, echo=False, connect_args=connect_args)


def init_db(engine: Engine) -> None:
    """Cree les tables manquantes sur l'engine donne."""
    # Enregistre les modeles dans SQLModel.metadata
    from mediaingest.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
