"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

Ports repository : contrats de persistance
- IMediaLinkRepository, IMetadataRepository, IStreamEncodingRepository

Ports externes :
- IMetadataProvider : fournisseur de metadonnees (TMDB...)
- IStreamProbe : sonde de flux (ffprobe)
- IMediaProcessor : import d'un type de bibliotheque
"""

from mediaingest.core.ports.metadata_provider import (
    IMetadataProvider,
    ImportMetadataRequest,
    MetadataQuery,
    ProviderError,
    TvShowExtras,
)
from mediaingest.core.ports.probe import IStreamProbe, ProbeError
from mediaingest.core.ports.processor import IMediaProcessor
from mediaingest.core.ports.repositories import (
    IMediaLinkRepository,
    IMetadataRepository,
    IStreamEncodingRepository,
    RepositoryError,
)

__all__ = [
    "IMetadataProvider",
    "ImportMetadataRequest",
    "MetadataQuery",
    "ProviderError",
    "TvShowExtras",
    "IStreamProbe",
    "ProbeError",
    "IMediaProcessor",
    "IMediaLinkRepository",
    "IMetadataRepository",
    "IStreamEncodingRepository",
    "RepositoryError",
]
