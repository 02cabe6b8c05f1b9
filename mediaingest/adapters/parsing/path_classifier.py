"""
Classification des segments de chemin d'une bibliotheque.

Regles ordonnees, la premiere qui correspond l'emporte :
1. Dossier de saison : "1", "01", "Season 1", "season 01"
2. Episode, sur le nom brut (extension incluse) :
   a. S01E01 / s1e1
   b. " - 005 - " (pas de numero de saison)
   c. 1x01
3. Titre avec suffixe d'annee optionnel " (1994)", extension retiree
   pour les fichiers : film ou dossier de serie selon le contexte
4. Sinon : Unrecognized

La classification est deterministe et sans effet de bord.
"""

import re
from pathlib import PurePath
from typing import Optional

from mediaingest.core.value_objects.classified_name import (
    ClassifiedName,
    EpisodeFile,
    MovieFile,
    SeasonFolder,
    ShowFolder,
    Unrecognized,
)
from mediaingest.core.value_objects.media_kind import MediaKind
from mediaingest.utils.constants import is_video_file

_SEASON_FOLDER_RE = re.compile(r"^(?:season )?(\d{1,2})$", re.IGNORECASE)
_YEAR_SUFFIX_RE = re.compile(r"\s\((\d{4})\)$")

# (regex, groupe saison ou None, groupe episode)
_EPISODE_PATTERNS = (
    (re.compile(r"\b[sS](\d{1,2})[eE](\d{1,3})\b"), 1, 2),
    (re.compile(r" - (\d{1,3}) - "), None, 1),
    (re.compile(r"\b(\d{1,3})[xX](\d{1,3})\b"), 1, 2),
)


class PathClassifier:
    """
    Classe un segment de chemin en film, serie, saison ou episode.

    Le contexte (MOVIE ou TV) indique comment interpreter un titre seul.
    Sans contexte, un fichier video est lu comme un film et un dossier
    comme un dossier de serie.
    """

    def classify(
        self,
        segment: str,
        is_directory: bool = False,
        context: Optional[MediaKind] = None,
    ) -> ClassifiedName:
        """
        Classe un segment de chemin (nom de fichier ou de dossier).

        Args:
            segment: Nom seul, sans repertoire parent
            is_directory: True si le segment designe un dossier
            context: Type de bibliotheque parcourue, si connu

        Returns:
            Une variante de ClassifiedName
        """
        segment = segment.strip()

        season_match = _SEASON_FOLDER_RE.match(segment)
        if season_match:
            return SeasonFolder(int(season_match.group(1)))

        for pattern, season_group, episode_group in _EPISODE_PATTERNS:
            match = pattern.search(segment)
            if match:
                season = int(match.group(season_group)) if season_group else None
                return EpisodeFile(season, int(match.group(episode_group)))

        if context is None:
            if is_directory:
                context = MediaKind.TV
            elif is_video_file(segment):
                context = MediaKind.MOVIE
            else:
                return Unrecognized()

        name = segment if is_directory else PurePath(segment).stem
        title, year = split_year(name)
        if not title:
            return Unrecognized()
        if context is MediaKind.MOVIE:
            return MovieFile(title, year)
        return ShowFolder(title, year)


def split_year(name: str) -> tuple[str, Optional[int]]:
    """
    Separe un suffixe " (YYYY)" du titre.

    Args:
        name: Nom sans extension

    Returns:
        Tuple (titre nettoye, annee ou None)
    """
    match = _YEAR_SUFFIX_RE.search(name)
    if match:
        return name[: match.start()].strip(), int(match.group(1))
    return name.strip(), None
