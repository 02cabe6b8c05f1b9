"""
Fournisseur de metadonnees TMDB.

Convertit les payloads TMDB en MetadataRecord, canonicalise les
identifiants distants et applique la politique "reutiliser ou rafraichir"
lors des imports.

Identifiants produits :
- film : tmdb:movie:<id>
- serie : tmdb:tv:<id>
- saison : tmdb:tv:<id>-<saison>
- episode : tmdb:tv:<id>-<saison>-<episode>
"""

import asyncio
from dataclasses import replace
from datetime import date
from typing import Any, Optional

import httpx
from loguru import logger

from mediaingest.adapters.api.retry import RateLimitError
from mediaingest.adapters.api.tmdb_client import TMDBClient
from mediaingest.core.entities.metadata import MetadataRecord
from mediaingest.core.ports.metadata_provider import (
    IMetadataProvider,
    ImportMetadataRequest,
    MetadataQuery,
    ProviderError,
)
from mediaingest.core.ports.repositories import IMetadataRepository, RepositoryError
from mediaingest.core.value_objects.media_kind import MediaKind, MetadataKind
from mediaingest.core.value_objects.outcomes import (
    ErrorPersistenceFailure,
    ErrorProviderFailure,
    ImportOutcome,
    ImportSuccess,
    MatchErrorDatabase,
    MatchErrorProviderFailure,
    MatchResult,
    MatchSuccess,
    MetadataMatch,
)
from mediaingest.core.value_objects.remote_id import movie_remote_id, tv_remote_id

# Erreurs reseau ou payload imprevu, converties en erreur fournisseur
_PROVIDER_ERRORS = (
    httpx.HTTPError,
    RateLimitError,
    ProviderError,
    KeyError,
    TypeError,
    ValueError,
)


class TmdbMetadataProvider(IMetadataProvider):
    """
    Fournisseur TMDB pour les films et les series.

    Attributs:
        client: Client HTTP TMDB (partage)
        metadata_repo: Repository des entrees du catalogue
    """

    def __init__(self, client: TMDBClient, metadata_repo: IMetadataRepository) -> None:
        self.client = client
        self.metadata_repo = metadata_repo

    @property
    def id(self) -> str:
        return "tmdb"

    @property
    def media_kinds(self) -> frozenset[MediaKind]:
        return frozenset({MediaKind.MOVIE, MediaKind.TV})

    # ------------------------------------------------------------------
    # Recherche
    # ------------------------------------------------------------------

    async def search(self, query: MetadataQuery) -> MatchResult:
        """
        Recherche par titre (et annee) ou par identifiant TMDB.

        Pour une serie recherchee par identifiant avec une precision de
        saison, la saison (et l'episode demande) sont joints au resultat.
        """
        try:
            if query.media_kind is MediaKind.MOVIE:
                matches = await self._search_movies(query)
            else:
                matches = await self._search_tv(query)
        except RepositoryError as e:
            logger.error(f"TMDB: lecture du catalogue local impossible: {e}")
            return MatchErrorDatabase(self.id, str(e))
        except _PROVIDER_ERRORS as e:
            logger.warning(f"TMDB: recherche en echec ({query.query or query.metadata_id}): {e}")
            return MatchErrorProviderFailure(self.id, str(e) or type(e).__name__)
        return MatchSuccess(self.id, tuple(matches), query.extras)

    async def _search_movies(self, query: MetadataQuery) -> list[MetadataMatch]:
        if query.metadata_id:
            payload = await self.client.get_movie(query.metadata_id)
            results = [payload] if payload else []
        elif query.query:
            results = await self.client.search_movies(query.query, query.year)
        else:
            results = []

        matches = []
        for item in results:
            remote_id = movie_remote_id(self.id, item["id"])
            existing = self.metadata_repo.find_existing_metadata(remote_id)
            record = existing or _movie_record(item, remote_id)
            matches.append(
                MetadataMatch(remote_id, str(item["id"]), self.id, existing is not None, record)
            )
        return matches

    async def _search_tv(self, query: MetadataQuery) -> list[MetadataMatch]:
        if query.metadata_id:
            payload = await self.client.get_tv(query.metadata_id)
            results = [payload] if payload else []
        elif query.query:
            results = await self.client.search_tv(query.query, query.year)
        else:
            results = []

        matches = []
        for item in results:
            show_id = str(item["id"])
            remote_id = tv_remote_id(self.id, show_id)
            existing = self.metadata_repo.find_existing_metadata(remote_id)
            record = existing or _show_record(item, remote_id)

            seasons: tuple[MetadataRecord, ...] = ()
            episodes: tuple[MetadataRecord, ...] = ()
            extras = query.extras
            if query.metadata_id and extras and extras.season_number is not None:
                season_payload = await self.client.get_season(show_id, extras.season_number)
                if season_payload:
                    season, season_episodes = self._season_records(show_id, season_payload)
                    seasons = (season,)
                    episodes = tuple(
                        episode
                        for episode in season_episodes
                        if extras.episode_number is None
                        or episode.episode_number == extras.episode_number
                    )

            matches.append(
                MetadataMatch(
                    remote_id, show_id, self.id, existing is not None, record, seasons, episodes
                )
            )
        return matches

    def _season_records(
        self, show_id: str, payload: dict[str, Any]
    ) -> tuple[MetadataRecord, list[MetadataRecord]]:
        """Saison et episodes, avec les enregistrements existants si connus."""
        season_number = int(payload["season_number"])
        season_remote_id = tv_remote_id(self.id, show_id, season_number)
        season = self.metadata_repo.find_existing_metadata(
            season_remote_id
        ) or _season_record(payload, season_remote_id)

        episodes = []
        for item in payload.get("episodes", []):
            episode_remote_id = tv_remote_id(
                self.id, show_id, season_number, int(item["episode_number"])
            )
            episodes.append(
                self.metadata_repo.find_existing_metadata(episode_remote_id)
                or _episode_record(item, episode_remote_id, season_number)
            )
        return season, episodes

    # ------------------------------------------------------------------
    # Import
    # ------------------------------------------------------------------

    async def import_metadata(self, request: ImportMetadataRequest) -> list[ImportOutcome]:
        """
        Importe chaque identifiant demande.

        Une entree deja presente est reutilisee telle quelle, sauf si
        request.refresh est vrai : le fournisseur est alors reinterroge et
        les champs modifiables ecrases, en conservant l'id local et les
        rattachements parent/racine.
        """
        outcomes: list[ImportOutcome] = []
        for metadata_id in request.metadata_ids:
            try:
                if request.media_kind is MediaKind.MOVIE:
                    outcome = await self._import_movie(metadata_id, request.refresh)
                else:
                    outcome = await self._import_tv(metadata_id, request.refresh)
            except RepositoryError as e:
                logger.error(f"TMDB: ecriture du catalogue impossible ({metadata_id}): {e}")
                outcome = ErrorPersistenceFailure(str(e))
            except _PROVIDER_ERRORS as e:
                logger.warning(f"TMDB: import en echec ({metadata_id}): {e}")
                outcome = ErrorProviderFailure(str(e) or type(e).__name__)
            outcomes.append(outcome)
        return outcomes

    async def _import_movie(self, movie_id: str, refresh: bool) -> ImportOutcome:
        remote_id = movie_remote_id(self.id, movie_id)
        existing = self.metadata_repo.find_existing_metadata(remote_id)
        if existing is not None and not refresh:
            logger.debug(f"TMDB: {remote_id} deja importe, reutilise")
            match = MetadataMatch(remote_id, str(movie_id), self.id, True, existing)
            return ImportSuccess(existing.id, match=match)

        payload = await self.client.get_movie(movie_id)
        if payload is None:
            raise ProviderError(f"Film TMDB introuvable: {movie_id}")
        fresh = _movie_record(payload, remote_id)

        record = self.metadata_repo.insert_metadata(
            existing.refreshed_with(fresh) if existing else fresh
        )
        logger.info(f"TMDB: film importe {record.title} ({remote_id})")
        match = MetadataMatch(remote_id, str(movie_id), self.id, True, record)
        return ImportSuccess(record.id, match=match)

    async def _import_tv(self, show_id: str, refresh: bool) -> ImportOutcome:
        remote_id = tv_remote_id(self.id, show_id)
        existing = self.metadata_repo.find_existing_metadata(remote_id)
        if existing is not None and not refresh:
            logger.debug(f"TMDB: {remote_id} deja importe, reutilise")
            children = self.metadata_repo.find_metadata_by_root_id(existing.id)
            match = MetadataMatch(
                remote_id,
                str(show_id),
                self.id,
                True,
                existing,
                _sorted_children(children, MetadataKind.TV_SEASON),
                _sorted_children(children, MetadataKind.TV_EPISODE),
            )
            return ImportSuccess(existing.id, match=match)

        # Toutes les requetes sont faites avant la premiere ecriture
        payload = await self.client.get_tv(show_id)
        if payload is None:
            raise ProviderError(f"Serie TMDB introuvable: {show_id}")
        season_numbers = [
            int(season["season_number"])
            for season in payload.get("seasons", [])
            if int(season.get("season_number", 0)) > 0
        ]
        season_payloads = await asyncio.gather(
            *(self.client.get_season(show_id, number) for number in season_numbers)
        )

        show = self._upsert(_show_record(payload, remote_id), refresh)
        seasons: list[MetadataRecord] = []
        episodes: list[MetadataRecord] = []
        for season_payload in season_payloads:
            if not season_payload:
                continue
            season_number = int(season_payload["season_number"])
            season = self._upsert(
                _season_record(
                    season_payload, tv_remote_id(self.id, show_id, season_number)
                ),
                refresh,
                parent_id=show.id,
                root_id=show.id,
            )
            seasons.append(season)
            for item in season_payload.get("episodes", []):
                episode_remote_id = tv_remote_id(
                    self.id, show_id, season_number, int(item["episode_number"])
                )
                episodes.append(
                    self._upsert(
                        _episode_record(item, episode_remote_id, season_number),
                        refresh,
                        parent_id=season.id,
                        root_id=show.id,
                    )
                )

        logger.info(
            f"TMDB: serie importee {show.title} ({remote_id}), "
            f"{len(seasons)} saisons, {len(episodes)} episodes"
        )
        match = MetadataMatch(
            remote_id, str(show_id), self.id, True, show, tuple(seasons), tuple(episodes)
        )
        return ImportSuccess(show.id, match=match)

    def _upsert(
        self,
        fresh: MetadataRecord,
        refresh: bool,
        parent_id: Optional[str] = None,
        root_id: Optional[str] = None,
    ) -> MetadataRecord:
        """Insere une entree, ou reutilise / rafraichit l'existante."""
        existing = self.metadata_repo.find_existing_metadata(fresh.remote_id)
        if existing is None:
            return self.metadata_repo.insert_metadata(
                replace(fresh, parent_id=parent_id, root_id=root_id)
            )
        if refresh:
            return self.metadata_repo.insert_metadata(existing.refreshed_with(fresh))
        return existing


# ----------------------------------------------------------------------
# Conversion des payloads
# ----------------------------------------------------------------------


def _parse_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def _movie_record(payload: dict[str, Any], remote_id: str) -> MetadataRecord:
    return MetadataRecord(
        remote_id=remote_id,
        kind=MetadataKind.MOVIE,
        title=payload.get("title") or payload.get("original_title") or "",
        overview=payload.get("overview") or None,
        release_date=_parse_date(payload.get("release_date")),
        rating=payload.get("vote_average"),
        poster_path=payload.get("poster_path"),
    )


def _show_record(payload: dict[str, Any], remote_id: str) -> MetadataRecord:
    return MetadataRecord(
        remote_id=remote_id,
        kind=MetadataKind.TV_SHOW,
        title=payload.get("name") or payload.get("original_name") or "",
        overview=payload.get("overview") or None,
        release_date=_parse_date(payload.get("first_air_date")),
        rating=payload.get("vote_average"),
        poster_path=payload.get("poster_path"),
    )


def _season_record(payload: dict[str, Any], remote_id: str) -> MetadataRecord:
    season_number = int(payload["season_number"])
    return MetadataRecord(
        remote_id=remote_id,
        kind=MetadataKind.TV_SEASON,
        title=payload.get("name") or f"Season {season_number}",
        overview=payload.get("overview") or None,
        release_date=_parse_date(payload.get("air_date")),
        rating=payload.get("vote_average"),
        poster_path=payload.get("poster_path"),
        season_number=season_number,
    )


def _episode_record(
    payload: dict[str, Any], remote_id: str, season_number: int
) -> MetadataRecord:
    return MetadataRecord(
        remote_id=remote_id,
        kind=MetadataKind.TV_EPISODE,
        title=payload.get("name") or "",
        overview=payload.get("overview") or None,
        release_date=_parse_date(payload.get("air_date")),
        rating=payload.get("vote_average"),
        poster_path=payload.get("still_path"),
        season_number=season_number,
        episode_number=int(payload["episode_number"]),
    )


def _sorted_children(
    children: list[MetadataRecord], kind: MetadataKind
) -> tuple[MetadataRecord, ...]:
    selected = [child for child in children if child.kind is kind]
    selected.sort(key=lambda r: (r.season_number or 0, r.episode_number or 0))
    return tuple(selected)
