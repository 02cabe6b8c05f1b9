"""
Port des fournisseurs de metadonnees.

Tout composant exposant {id, media_kinds, search, import_metadata}
peut etre enregistre aupres du MetadataResolver.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from mediaingest.core.value_objects.media_kind import MediaKind
from mediaingest.core.value_objects.outcomes import ImportOutcome, MatchResult


class ProviderError(Exception):
    """Echec d'un fournisseur de metadonnees (reseau, payload invalide)."""


@dataclass(frozen=True)
class TvShowExtras:
    """Precision saison/episode d'une recherche de serie."""

    season_number: Optional[int] = None
    episode_number: Optional[int] = None


@dataclass(frozen=True)
class MetadataQuery:
    """
    Requete de recherche.

    Attributs:
        media_kind: Type recherche (MOVIE ou TV)
        query: Titre recherche
        year: Annee pour departager les homonymes
        provider_id: Fournisseur cible (tous ceux du type si None)
        metadata_id: Identifiant brut chez le fournisseur
        extras: Precision saison/episode (series)
    """

    media_kind: MediaKind
    query: Optional[str] = None
    year: Optional[int] = None
    provider_id: Optional[str] = None
    metadata_id: Optional[str] = None
    extras: Optional[TvShowExtras] = None


@dataclass(frozen=True)
class ImportMetadataRequest:
    """
    Demande d'import de metadonnees.

    Attributs:
        metadata_ids: Identifiants bruts chez le fournisseur
        provider_id: Fournisseur cible
        media_kind: MOVIE ou TV
        year: Annee (informative)
        refresh: Reinterroger le fournisseur meme si l'entree existe
    """

    metadata_ids: tuple[str, ...]
    provider_id: str
    media_kind: MediaKind
    year: Optional[int] = None
    refresh: bool = False


class IMetadataProvider(ABC):
    """Interface d'un fournisseur de metadonnees."""

    @property
    @abstractmethod
    def id(self) -> str:
        """Identifiant du fournisseur, en minuscules (ex: "tmdb")."""
        ...

    @property
    @abstractmethod
    def media_kinds(self) -> frozenset[MediaKind]:
        """Types de media supportes."""
        ...

    @abstractmethod
    async def search(self, query: MetadataQuery) -> MatchResult:
        """Recherche des correspondances."""
        ...

    @abstractmethod
    async def import_metadata(
        self, request: ImportMetadataRequest
    ) -> list[ImportOutcome]:
        """Importe (ou rafraichit) les entrees demandees."""
        ...
