"""
Interfaces ports pour les repositories.

Contrats etroits de persistance utilises par le coeur d'ingestion.
Le coeur n'emet jamais de requete brute : il ne depend que de ces verbes.
Les implementations (SQLModel, memoire pour les tests) levent
RepositoryError en cas d'echec d'ecriture ou de lecture.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Optional

from mediaingest.core.entities.media_link import MediaLink
from mediaingest.core.entities.metadata import MetadataRecord
from mediaingest.core.entities.stream import StreamEncodingRecord


class RepositoryError(Exception):
    """Echec de la couche de persistance."""


class IMediaLinkRepository(ABC):
    """
    Interface de stockage des liens media.

    Un lien associe une entree du catalogue a un fichier ou dossier local.
    """

    @abstractmethod
    def find_media_link_by_path(self, path: str) -> Optional[MediaLink]:
        """
        Retourne un lien dont le chemin est egal au chemin candidat
        ou en est un repertoire ancetre, sinon None.
        """
        ...

    @abstractmethod
    def find_media_link_by_id(self, link_id: str) -> Optional[MediaLink]:
        """Recupere un lien par son ID."""
        ...

    @abstractmethod
    def has_media_link_under(self, path: str) -> bool:
        """Indique si un lien reference ce chemin ou un chemin descendant."""
        ...

    @abstractmethod
    def insert_media_link(self, link: MediaLink) -> MediaLink:
        """Insere un lien et le retourne avec son ID."""
        ...


class IMetadataRepository(ABC):
    """Interface de stockage des entrees du catalogue."""

    @abstractmethod
    def find_existing_metadata(self, remote_id: str) -> Optional[MetadataRecord]:
        """Recupere une entree par son identifiant distant canonique."""
        ...

    @abstractmethod
    def find_metadata_by_id(self, metadata_id: str) -> Optional[MetadataRecord]:
        """Recupere une entree par son ID local."""
        ...

    @abstractmethod
    def find_metadata_by_root_id(self, root_id: str) -> list[MetadataRecord]:
        """Liste les saisons et episodes rattaches a une serie."""
        ...

    @abstractmethod
    def insert_metadata(self, record: MetadataRecord) -> MetadataRecord:
        """
        Insere ou met a jour une entree (cle : remote_id).

        Retourne l'entree avec son ID local.
        """
        ...


class IStreamEncodingRepository(ABC):
    """Interface de stockage des flux analyses."""

    @abstractmethod
    def insert_stream_encodings(
        self, media_link_id: str, records: Sequence[StreamEncodingRecord]
    ) -> list[StreamEncodingRecord]:
        """Remplace integralement les flux d'un lien media."""
        ...

    @abstractmethod
    def count_stream_details(self, media_link_id: str) -> int:
        """Nombre de flux deja enregistres pour un lien media."""
        ...
