"""
Entites du domaine.

- MetadataRecord : entree canonique du catalogue (film, serie, saison, episode)
- MediaLink : association entre une entree et un chemin local
- StreamEncodingRecord : flux physique d'un fichier media
"""

from mediaingest.core.entities.media_link import MediaLink
from mediaingest.core.entities.metadata import MetadataRecord
from mediaingest.core.entities.stream import StreamEncodingRecord, StreamType

__all__ = [
    "MediaLink",
    "MetadataRecord",
    "StreamEncodingRecord",
    "StreamType",
]
