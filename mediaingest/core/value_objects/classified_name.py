"""
Resultat de la classification d'un segment de chemin.

Variantes immutables produites par PathClassifier.classify() :
- MovieFile : fichier (ou dossier) de film, avec annee optionnelle
- ShowFolder : dossier racine d'une serie, avec annee optionnelle
- SeasonFolder : dossier de saison
- EpisodeFile : fichier d'episode (saison parfois absente)
- Unrecognized : aucun motif reconnu
"""

from dataclasses import dataclass
from typing import Optional


class ClassifiedName:
    """Base commune des variantes de classification."""

    __slots__ = ()


@dataclass(frozen=True)
class MovieFile(ClassifiedName):
    name: str
    year: Optional[int] = None


@dataclass(frozen=True)
class ShowFolder(ClassifiedName):
    name: str
    year: Optional[int] = None


@dataclass(frozen=True)
class SeasonFolder(ClassifiedName):
    season_number: int


@dataclass(frozen=True)
class EpisodeFile(ClassifiedName):
    """
    Fichier d'episode.

    Le motif " - NNN - " ne capture pas de numero de saison :
    season_number vaut alors None.
    """

    season_number: Optional[int]
    episode_number: int


@dataclass(frozen=True)
class Unrecognized(ClassifiedName):
    pass
