"""
MediaIngest - ingestion de bibliotheque media.

Classe les fichiers d'une arborescence locale, les associe aux metadonnees
d'un catalogue externe (TMDB), extrait les informations de flux via ffprobe
et genere les index de previsualisation BIF.
"""

__version__ = "0.1.0"
