"""
Metadata catalog entities.

A MetadataRecord is the canonical form of a matched catalog entry
(movie, show, season or episode) retrieved from an external provider.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional

from mediaingest.core.value_objects.media_kind import MetadataKind

# Fields a refresh import is allowed to overwrite
MUTABLE_FIELDS = ("title", "overview", "release_date", "rating", "poster_path")


@dataclass
class MetadataRecord:
    """
    Canonical catalog entry.

    Hierarchical kinds link to their parents: an episode points to its
    season (parent_id) and its show (root_id), a season points to its show.
    Hierarchy is at most three levels deep (show -> season -> episode).

    Attributes:
        id: Local database ID, stable across re-imports
        remote_id: Provider-qualified id (provider:kind:id[-season[-episode]])
        kind: Level in the catalog hierarchy
        title: Localized title (show or episode name)
        overview: Plot summary
        release_date: Release or first air date
        rating: Provider vote average (0-10)
        poster_path: Artwork path on the provider CDN
        parent_id: Local id of the direct parent (seasons, episodes)
        root_id: Local id of the show (seasons, episodes)
        season_number: Season number (seasons, episodes)
        episode_number: Episode number (episodes)
        created_at: First import time
        updated_at: Last import or refresh time
    """

    remote_id: str
    kind: MetadataKind
    title: str = ""
    id: Optional[str] = None
    overview: Optional[str] = None
    release_date: Optional[date] = None
    rating: Optional[float] = None
    poster_path: Optional[str] = None
    parent_id: Optional[str] = None
    root_id: Optional[str] = None
    season_number: Optional[int] = None
    episode_number: Optional[int] = None
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @property
    def year(self) -> Optional[int]:
        """Release year, if a release date is known."""
        return self.release_date.year if self.release_date else None

    def refreshed_with(self, fresh: "MetadataRecord") -> "MetadataRecord":
        """
        Return a copy of this record with mutable fields taken from `fresh`.

        The local id, the remote id and the parent/root linkage are kept.
        """
        changes = {name: getattr(fresh, name) for name in MUTABLE_FIELDS}
        return replace(self, updated_at=datetime.now(), **changes)
