"""
Identifiants distants canoniques du catalogue de metadonnees.

Format : ``provider:kind:id`` ou, pour les series,
``provider:tv:<showId>[-<saison>[-<episode>]]``.

Les jetons provider et kind sont toujours en minuscules. Le schema est
relu pour reconstituer la hierarchie serie/saison/episode sans
passer par la base de donnees.
"""

from dataclasses import dataclass
from typing import Optional

from mediaingest.core.value_objects.media_kind import MediaKind


@dataclass(frozen=True)
class RemoteId:
    """
    Identifiant distant decompose.

    Attributs:
        provider_id: Identifiant du fournisseur (ex: "tmdb")
        media_kind: MOVIE ou TV
        metadata_id: Identifiant brut chez le fournisseur (film ou serie)
        season_number: Numero de saison (series uniquement)
        episode_number: Numero d'episode (series uniquement)
    """

    provider_id: str
    media_kind: MediaKind
    metadata_id: str
    season_number: Optional[int] = None
    episode_number: Optional[int] = None

    @classmethod
    def parse(cls, value: str) -> "RemoteId":
        """
        Decompose une chaine ``provider:kind:rawId``.

        Raises:
            ValueError: Si le nombre de segments n'est pas 3, si un segment
                est vide ou si le type n'est pas reconnu
        """
        parts = value.split(":")
        if len(parts) != 3 or not all(parts):
            raise ValueError(f"Identifiant distant invalide: {value!r}")
        provider_id, kind_token, raw_id = parts
        try:
            media_kind = MediaKind(kind_token.lower())
        except ValueError:
            raise ValueError(
                f"Type inconnu dans l'identifiant distant: {value!r}"
            ) from None

        if media_kind is MediaKind.MOVIE:
            return cls(provider_id.lower(), media_kind, raw_id)

        show_id, *numbers = raw_id.split("-")
        season = _to_int_or_none(numbers[0]) if len(numbers) > 0 else None
        episode = _to_int_or_none(numbers[1]) if len(numbers) > 1 else None
        return cls(provider_id.lower(), media_kind, show_id, season, episode)

    def __str__(self) -> str:
        raw_id = self.metadata_id
        if self.media_kind is MediaKind.TV and self.season_number is not None:
            raw_id = f"{raw_id}-{self.season_number}"
            if self.episode_number is not None:
                raw_id = f"{raw_id}-{self.episode_number}"
        return f"{self.provider_id.lower()}:{self.media_kind.value}:{raw_id}"


def movie_remote_id(provider_id: str, movie_id: int | str) -> str:
    """Identifiant distant d'un film : ``provider:movie:<id>``."""
    return str(RemoteId(provider_id, MediaKind.MOVIE, str(movie_id)))


def tv_remote_id(
    provider_id: str,
    show_id: int | str,
    season_number: Optional[int] = None,
    episode_number: Optional[int] = None,
) -> str:
    """Identifiant distant d'une serie, saison ou episode."""
    return str(
        RemoteId(provider_id, MediaKind.TV, str(show_id), season_number, episode_number)
    )


def _to_int_or_none(value: str) -> Optional[int]:
    try:
        return int(value)
    except ValueError:
        return None
