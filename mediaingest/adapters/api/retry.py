"""
Relance des requetes HTTP limitees en debit (HTTP 429).

Seul le rate limiting est relance automatiquement, avec un backoff
exponentiel et du jitter. Les autres erreurs (timeout, 4xx, 5xx) sont
propagees a l'appelant, qui decide de reinvoquer ou non.
"""

from typing import Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)


class RateLimitError(Exception):
    """
    Reponse 429 Too Many Requests.

    Attributs:
        retry_after: Valeur de l'en-tete Retry-After en secondes, si fournie
    """

    def __init__(self, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


def with_retry(max_attempts: int = 5, max_wait: int = 60):
    """Decorateur tenacity relancant une coroutine sur RateLimitError."""
    return retry(
        retry=retry_if_exception_type(RateLimitError),
        wait=wait_random_exponential(multiplier=1, min=1, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        reraise=True,
    )


def _retry_after_seconds(response: httpx.Response) -> Optional[int]:
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 5,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete et la relance tant que l'API repond 429.

    Args:
        client: Client httpx asynchrone
        method: Methode HTTP
        url: URL (relative a la base_url du client)
        max_attempts: Nombre maximum de tentatives
        **kwargs: Arguments transmis a client.request()

    Returns:
        La reponse (statut 2xx)

    Raises:
        RateLimitError: Si l'API repond encore 429 apres la derniere tentative
        httpx.HTTPStatusError: Pour les autres statuts d'erreur
    """

    @with_retry(max_attempts=max_attempts)
    async def _send() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code == 429:
            raise RateLimitError(_retry_after_seconds(response))
        response.raise_for_status()
        return response

    return await _send()
