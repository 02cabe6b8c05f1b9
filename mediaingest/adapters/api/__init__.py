"""
Acces HTTP aux catalogues externes.

- TMDBClient : client TMDB v3 (films, series, saisons)
- APICache : cache disque a TTL (diskcache)
- request_with_retry : backoff exponentiel sur HTTP 429 (tenacity)
"""

from mediaingest.adapters.api.cache import APICache
from mediaingest.adapters.api.retry import RateLimitError, request_with_retry
from mediaingest.adapters.api.tmdb_client import TMDBClient

__all__ = ["APICache", "RateLimitError", "request_with_retry", "TMDBClient"]
