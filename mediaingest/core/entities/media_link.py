"""
Media link entity.

A media link associates a metadata record with a concrete local file
or directory.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from mediaingest.core.value_objects.media_kind import MediaKind


@dataclass
class MediaLink:
    """
    Persisted association between a catalog entry and a local path.

    Attributes:
        id: Local database ID
        file_path: Absolute path of the file or directory
        media_kind: Library kind (MOVIE or TV)
        metadata_id: Local id of the matched record (movie, show, season, episode)
        root_metadata_id: Local id of the root record (the show for TV)
        parent_link_id: Link of the enclosing directory (season -> show)
        is_directory: True for show and season folders
        added_at: Creation time
    """

    file_path: str
    media_kind: MediaKind
    id: Optional[str] = None
    metadata_id: Optional[str] = None
    root_metadata_id: Optional[str] = None
    parent_link_id: Optional[str] = None
    is_directory: bool = False
    added_at: datetime = field(default_factory=datetime.now)
