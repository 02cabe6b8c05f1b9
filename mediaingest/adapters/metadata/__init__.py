"""Fournisseurs de metadonnees."""

from mediaingest.adapters.metadata.tmdb_provider import TmdbMetadataProvider

__all__ = ["TmdbMetadataProvider"]
