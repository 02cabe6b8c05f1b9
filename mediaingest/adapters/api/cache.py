"""
Cache disque des reponses des catalogues externes.

Les payloads JSON bruts sont conserves entre deux executions via
diskcache, avec un TTL court pour les recherches et plus long pour
les fiches detaillees.
"""

import asyncio
from collections.abc import Awaitable, Callable
from functools import partial
from typing import Any, Optional

from diskcache import Cache
from loguru import logger


class APICache:
    """
    Cache asynchrone a TTL.

    Les acces disque passent par run_in_executor pour ne pas bloquer
    la boucle d'evenements.

    Attributs:
        SEARCH_TTL: Duree de vie des recherches (24h)
        DETAILS_TTL: Duree de vie des fiches (7 jours)
    """

    SEARCH_TTL = 24 * 60 * 60
    DETAILS_TTL = 7 * 24 * 60 * 60

    def __init__(self, cache_dir: str = ".cache/api") -> None:
        self._cache = Cache(str(cache_dir))

    async def get(self, key: str) -> Optional[Any]:
        """Valeur en cache, ou None si absente ou expiree."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, key)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Stocke une valeur pour `ttl` secondes."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._cache.set, key, value, expire=ttl)
        )

    async def get_or_fetch(
        self,
        key: str,
        fetch: Callable[[], Awaitable[Optional[Any]]],
        ttl: int,
    ) -> Optional[Any]:
        """
        Lit le cache puis, en cas d'absence, appelle `fetch` et stocke
        son resultat s'il n'est pas None.

        Args:
            key: Cle du cache (ex: "tmdb:movie:27205")
            fetch: Coroutine produisant la valeur
            ttl: Duree de vie en secondes

        Returns:
            La valeur en cache ou fraichement obtenue
        """
        cached = await self.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key}")
            return cached
        value = await fetch()
        if value is not None:
            await self.set(key, value, ttl)
        return value

    async def clear(self) -> None:
        """Vide le cache."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._cache.clear)

    def close(self) -> None:
        self._cache.close()
