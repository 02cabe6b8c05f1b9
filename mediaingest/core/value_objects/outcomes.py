"""
Resultats types des operations d'import, d'analyse et de recherche.

Les erreurs par element sont retournees comme des donnees, jamais levees
a travers les frontieres publiques, pour qu'un lot puisse continuer
apres l'echec d'un element. Les appelants discriminent avec isinstance().

Familles :
- ImportOutcome : resultat d'un import (fichier, dossier ou metadonnees)
- AnalysisOutcome : resultat de l'analyse des flux d'un fichier
- MatchResult : resultat d'une recherche aupres d'un fournisseur
"""

from dataclasses import dataclass
from typing import Any, Optional

from mediaingest.core.entities.metadata import MetadataRecord
from mediaingest.core.entities.stream import StreamEncodingRecord


@dataclass(frozen=True)
class MetadataMatch:
    """
    Entree du catalogue proposee par un fournisseur.

    Attributs:
        remote_id: Identifiant distant canonique
        remote_metadata_id: Identifiant brut chez le fournisseur
        provider_id: Fournisseur d'origine
        exists: True si l'entree est deja presente en base
        record: Enregistrement (avec id local si exists)
        seasons: Saisons connues (series uniquement)
        episodes: Episodes connus (series uniquement)
    """

    remote_id: str
    remote_metadata_id: str
    provider_id: str
    exists: bool
    record: MetadataRecord
    seasons: tuple[MetadataRecord, ...] = ()
    episodes: tuple[MetadataRecord, ...] = ()


# ============================================================================
# ImportOutcome
# ============================================================================


class ImportOutcome:
    """Base des resultats d'import."""


@dataclass(frozen=True)
class ImportSuccess(ImportOutcome):
    """
    Import reussi.

    media_link_id vaut None pour un import de metadonnees seules.
    """

    media_id: Optional[str]
    media_link_id: Optional[str] = None
    subresults: tuple[ImportOutcome, ...] = ()
    match: Optional[MetadataMatch] = None


@dataclass(frozen=True)
class ErrorFileNotFound(ImportOutcome):
    path: str


@dataclass(frozen=True)
class ErrorNothingToImport(ImportOutcome):
    path: Optional[str] = None


@dataclass(frozen=True)
class ErrorMatchNotFound(ImportOutcome):
    path: str
    query: str


@dataclass(frozen=True)
class ErrorAlreadyLinked(ImportOutcome):
    existing_link_id: Optional[str]


@dataclass(frozen=True)
class ErrorPersistenceFailure(ImportOutcome):
    detail: str


@dataclass(frozen=True)
class ErrorProviderFailure(ImportOutcome):
    detail: str


# ============================================================================
# AnalysisOutcome
# ============================================================================


class AnalysisOutcome:
    """Base des resultats d'analyse de flux."""


@dataclass(frozen=True)
class AnalysisSuccess(AnalysisOutcome):
    media_link_id: Optional[str]
    streams: tuple[StreamEncodingRecord, ...] = ()


@dataclass(frozen=True)
class AnalysisErrorFileNotFound(AnalysisOutcome):
    media_link_id: Optional[str]
    path: str


@dataclass(frozen=True)
class AnalysisErrorNothingToImport(AnalysisOutcome):
    pass


@dataclass(frozen=True)
class AnalysisErrorProcess(AnalysisOutcome):
    """Echec de la sonde : le fichier doit etre sonde a nouveau."""

    media_link_id: Optional[str]
    detail: str


@dataclass(frozen=True)
class AnalysisErrorDatabase(AnalysisOutcome):
    """Sonde reussie mais persistance en echec : seule l'ecriture est a refaire."""

    media_link_id: Optional[str]
    detail: str


# ============================================================================
# MatchResult
# ============================================================================


class MatchResult:
    """Base des resultats de recherche de metadonnees."""


@dataclass(frozen=True)
class MatchSuccess(MatchResult):
    provider_id: str
    matches: tuple[MetadataMatch, ...] = ()
    extras: Optional[Any] = None


@dataclass(frozen=True)
class MatchErrorProviderNotFound(MatchResult):
    pass


@dataclass(frozen=True)
class MatchErrorProviderFailure(MatchResult):
    provider_id: str
    detail: str


@dataclass(frozen=True)
class MatchErrorDatabase(MatchResult):
    provider_id: str
    detail: str


__all__ = [
    "MetadataMatch",
    "ImportOutcome",
    "ImportSuccess",
    "ErrorFileNotFound",
    "ErrorNothingToImport",
    "ErrorMatchNotFound",
    "ErrorAlreadyLinked",
    "ErrorPersistenceFailure",
    "ErrorProviderFailure",
    "AnalysisOutcome",
    "AnalysisSuccess",
    "AnalysisErrorFileNotFound",
    "AnalysisErrorNothingToImport",
    "AnalysisErrorProcess",
    "AnalysisErrorDatabase",
    "MatchResult",
    "MatchSuccess",
    "MatchErrorProviderNotFound",
    "MatchErrorProviderFailure",
    "MatchErrorDatabase",
]
