"""
Types de media manipules par l'import et le catalogue de metadonnees.
"""

from enum import Enum


class MediaKind(Enum):
    """Type de bibliotheque / de requete d'import.

    Valeurs:
        MOVIE: Films
        TV: Series TV (serie, saisons, episodes)
    """

    MOVIE = "movie"
    TV = "tv"


class MetadataKind(Enum):
    """Niveau d'une entree du catalogue de metadonnees.

    Valeurs:
        MOVIE: Film
        TV_SHOW: Serie (racine de la hierarchie)
        TV_SEASON: Saison (parent: serie)
        TV_EPISODE: Episode (parent: saison, racine: serie)
    """

    MOVIE = "movie"
    TV_SHOW = "tv_show"
    TV_SEASON = "tv_season"
    TV_EPISODE = "tv_episode"

    @property
    def media_kind(self) -> MediaKind:
        """Type de media correspondant (MOVIE ou TV)."""
        return MediaKind.MOVIE if self is MetadataKind.MOVIE else MediaKind.TV
