"""
Processeurs d'import par type de bibliotheque.

- MovieImportProcessor : un film par element (fichier ou dossier)
- TvImportProcessor : une serie par dossier, avec saisons et episodes
"""

from mediaingest.services.processors.movie_processor import MovieImportProcessor
from mediaingest.services.processors.tv_processor import TvImportProcessor

__all__ = ["MovieImportProcessor", "TvImportProcessor"]
