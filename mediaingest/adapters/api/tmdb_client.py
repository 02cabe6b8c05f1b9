"""
Client HTTP pour l'API TMDB v3.

Retourne les payloads JSON bruts ; leur conversion en MetadataRecord
est faite par TmdbMetadataProvider. Les reponses sont mises en cache
(APICache) et les reponses 429 relancees (request_with_retry).

Usage:
    client = TMDBClient(api_key="xxx", cache=APICache())
    results = await client.search_movies("Inception", year=2010)
    movie = await client.get_movie(27205)
    await client.close()
"""

from typing import Any, Optional

import httpx

from mediaingest.adapters.api.cache import APICache
from mediaingest.adapters.api.retry import request_with_retry


class TMDBClient:
    """
    Client TMDB partage entre les workers d'import.

    Supporte les deux modes d'authentification TMDB : cle v3 passee en
    parametre api_key, ou jeton v4 (JWT) passe en en-tete Bearer.

    Attributs:
        TMDB_BASE_URL: URL de base de l'API v3
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"

    def __init__(
        self,
        api_key: Optional[str],
        cache: APICache,
        language: str = "en-US",
    ) -> None:
        self._api_key = api_key or ""
        self._cache = cache
        self._language = language
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, cree a la premiere utilisation."""
        if self._client is None or self._client.is_closed:
            headers = {"Accept": "application/json"}
            params = {}
            if len(self._api_key) > 40:
                headers["Authorization"] = f"Bearer {self._api_key}"
            else:
                params["api_key"] = self._api_key
            self._client = httpx.AsyncClient(
                base_url=self.TMDB_BASE_URL,
                headers=headers,
                params=params,
                timeout=30.0,
            )
        return self._client

    async def _get_json(
        self, path: str, params: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        response = await request_with_retry(
            self._get_client(),
            "GET",
            path,
            params={"language": self._language, **(params or {})},
        )
        return response.json()

    async def _get_json_or_none(
        self, path: str, params: Optional[dict[str, Any]] = None
    ) -> Optional[dict[str, Any]]:
        """GET qui retourne None sur 404."""
        try:
            return await self._get_json(path, params)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return None
            raise

    async def search_movies(
        self, query: str, year: Optional[int] = None
    ) -> list[dict[str, Any]]:
        """
        Recherche des films par titre.

        Args:
            query: Titre recherche
            year: Annee de sortie (filtre TMDB "year")

        Returns:
            Liste des resultats bruts (vide si aucun)
        """
        params: dict[str, Any] = {"query": query, "include_adult": "false"}
        if year is not None:
            params["year"] = year

        async def fetch() -> list[dict[str, Any]]:
            data = await self._get_json("/search/movie", params)
            return data.get("results", [])

        key = f"tmdb:search_movie:{query.lower()}:{year or ''}"
        return await self._cache.get_or_fetch(key, fetch, APICache.SEARCH_TTL)

    async def search_tv(
        self, query: str, year: Optional[int] = None
    ) -> list[dict[str, Any]]:
        """Recherche des series par titre (filtre first_air_date_year)."""
        params: dict[str, Any] = {"query": query, "include_adult": "false"}
        if year is not None:
            params["first_air_date_year"] = year

        async def fetch() -> list[dict[str, Any]]:
            data = await self._get_json("/search/tv", params)
            return data.get("results", [])

        key = f"tmdb:search_tv:{query.lower()}:{year or ''}"
        return await self._cache.get_or_fetch(key, fetch, APICache.SEARCH_TTL)

    async def get_movie(self, movie_id: int | str) -> Optional[dict[str, Any]]:
        """Fiche detaillee d'un film, ou None si inconnu."""
        return await self._cache.get_or_fetch(
            f"tmdb:movie:{movie_id}",
            lambda: self._get_json_or_none(f"/movie/{movie_id}"),
            APICache.DETAILS_TTL,
        )

    async def get_tv(self, tv_id: int | str) -> Optional[dict[str, Any]]:
        """Fiche detaillee d'une serie (liste des saisons incluse), ou None."""
        return await self._cache.get_or_fetch(
            f"tmdb:tv:{tv_id}",
            lambda: self._get_json_or_none(f"/tv/{tv_id}"),
            APICache.DETAILS_TTL,
        )

    async def get_season(
        self, tv_id: int | str, season_number: int
    ) -> Optional[dict[str, Any]]:
        """Fiche d'une saison (episodes inclus), ou None."""
        return await self._cache.get_or_fetch(
            f"tmdb:tv:{tv_id}:season:{season_number}",
            lambda: self._get_json_or_none(f"/tv/{tv_id}/season/{season_number}"),
            APICache.DETAILS_TTL,
        )

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
