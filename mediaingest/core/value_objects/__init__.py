"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- MediaKind, MetadataKind : types de media et niveaux du catalogue
- ClassifiedName et ses variantes : resultat de PathClassifier
- RemoteId : identifiant distant canonique
"""

from mediaingest.core.value_objects.classified_name import (
    ClassifiedName,
    EpisodeFile,
    MovieFile,
    SeasonFolder,
    ShowFolder,
    Unrecognized,
)
from mediaingest.core.value_objects.media_kind import MediaKind, MetadataKind
from mediaingest.core.value_objects.remote_id import (
    RemoteId,
    movie_remote_id,
    tv_remote_id,
)

__all__ = [
    "ClassifiedName",
    "EpisodeFile",
    "MovieFile",
    "SeasonFolder",
    "ShowFolder",
    "Unrecognized",
    "MediaKind",
    "MetadataKind",
    "RemoteId",
    "movie_remote_id",
    "tv_remote_id",
]
