"""
Tests de TmdbMetadataProvider.

Le client TMDB est simule ; le catalogue utilise le repository SQLModel
sur une base en memoire pour verifier les identifiants locaux.
"""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from mediaingest.adapters.api.tmdb_client import TMDBClient
from mediaingest.adapters.metadata.tmdb_provider import TmdbMetadataProvider
from mediaingest.core.ports.metadata_provider import (
    ImportMetadataRequest,
    MetadataQuery,
    TvShowExtras,
)
from mediaingest.core.ports.repositories import IMetadataRepository, RepositoryError
from mediaingest.core.value_objects.media_kind import MediaKind, MetadataKind
from mediaingest.core.value_objects.outcomes import (
    ErrorPersistenceFailure,
    ErrorProviderFailure,
    ImportSuccess,
    MatchErrorDatabase,
    MatchErrorProviderFailure,
    MatchSuccess,
)
from mediaingest.infrastructure.persistence.repositories import (
    SQLModelMetadataRepository,
)
from tests.fixtures.tmdb_responses import (
    TMDB_MOVIE_DETAILS_RESPONSE,
    TMDB_SEARCH_MOVIE_RESPONSE,
    TMDB_SEARCH_TV_RESPONSE,
    TMDB_SEASON_1_RESPONSE,
    TMDB_SEASON_2_RESPONSE,
    TMDB_TV_DETAILS_RESPONSE,
)

SEASONS = {1: TMDB_SEASON_1_RESPONSE, 2: TMDB_SEASON_2_RESPONSE}


@pytest.fixture
def tmdb_client() -> AsyncMock:
    client = AsyncMock(spec=TMDBClient)
    client.search_movies.return_value = TMDB_SEARCH_MOVIE_RESPONSE["results"]
    client.search_tv.return_value = TMDB_SEARCH_TV_RESPONSE["results"]
    client.get_movie.return_value = dict(TMDB_MOVIE_DETAILS_RESPONSE)
    client.get_tv.return_value = TMDB_TV_DETAILS_RESPONSE
    client.get_season.side_effect = lambda show_id, number: SEASONS.get(number)
    return client


@pytest.fixture
def metadata_repo(db_session) -> SQLModelMetadataRepository:
    return SQLModelMetadataRepository(db_session)


@pytest.fixture
def provider(tmdb_client, metadata_repo) -> TmdbMetadataProvider:
    return TmdbMetadataProvider(tmdb_client, metadata_repo)


def movie_request(refresh: bool = False) -> ImportMetadataRequest:
    return ImportMetadataRequest(("603",), "tmdb", MediaKind.MOVIE, refresh=refresh)


def tv_request(refresh: bool = False) -> ImportMetadataRequest:
    return ImportMetadataRequest(("1396",), "tmdb", MediaKind.TV, refresh=refresh)


class TestIdentity:
    def test_id_and_kinds(self, provider) -> None:
        assert provider.id == "tmdb"
        assert provider.media_kinds == {MediaKind.MOVIE, MediaKind.TV}


# ============================================================================
# Recherche
# ============================================================================


class TestSearch:
    @pytest.mark.asyncio
    async def test_movie_search(self, provider, tmdb_client) -> None:
        result = await provider.search(
            MetadataQuery(MediaKind.MOVIE, query="The Matrix", year=1999)
        )

        assert isinstance(result, MatchSuccess)
        assert result.provider_id == "tmdb"
        assert [m.remote_id for m in result.matches] == [
            "tmdb:movie:603",
            "tmdb:movie:604",
        ]
        assert result.matches[0].record.year == 1999
        assert not result.matches[0].exists
        tmdb_client.search_movies.assert_awaited_once_with("The Matrix", 1999)

    @pytest.mark.asyncio
    async def test_existing_entry_is_flagged(self, provider) -> None:
        await provider.import_metadata(movie_request())

        result = await provider.search(MetadataQuery(MediaKind.MOVIE, query="The Matrix"))

        first = result.matches[0]
        assert first.exists
        assert first.record.id is not None

    @pytest.mark.asyncio
    async def test_search_by_id_with_season_extras(self, provider) -> None:
        extras = TvShowExtras(season_number=1, episode_number=2)
        result = await provider.search(
            MetadataQuery(MediaKind.TV, metadata_id="1396", extras=extras)
        )

        match = result.matches[0]
        assert result.extras == extras
        assert [s.remote_id for s in match.seasons] == ["tmdb:tv:1396-1"]
        assert [e.remote_id for e in match.episodes] == ["tmdb:tv:1396-1-2"]

    @pytest.mark.asyncio
    async def test_network_error_becomes_provider_failure(
        self, provider, tmdb_client
    ) -> None:
        tmdb_client.search_movies.side_effect = httpx.ConnectError("boom")

        result = await provider.search(MetadataQuery(MediaKind.MOVIE, query="x"))

        assert isinstance(result, MatchErrorProviderFailure)
        assert result.provider_id == "tmdb"

    @pytest.mark.asyncio
    async def test_database_error_is_distinct(self, tmdb_client) -> None:
        repo = MagicMock(spec=IMetadataRepository)
        repo.find_existing_metadata.side_effect = RepositoryError("locked")
        provider = TmdbMetadataProvider(tmdb_client, repo)

        result = await provider.search(MetadataQuery(MediaKind.MOVIE, query="x"))

        assert isinstance(result, MatchErrorDatabase)


# ============================================================================
# Import
# ============================================================================


class TestImportMovie:
    @pytest.mark.asyncio
    async def test_creates_record(self, provider, metadata_repo) -> None:
        [outcome] = await provider.import_metadata(movie_request())

        assert isinstance(outcome, ImportSuccess)
        stored = metadata_repo.find_existing_metadata("tmdb:movie:603")
        assert stored.id == outcome.media_id
        assert stored.title == "The Matrix"
        assert stored.kind is MetadataKind.MOVIE

    @pytest.mark.asyncio
    async def test_existing_record_is_reused(self, provider, tmdb_client) -> None:
        [first] = await provider.import_metadata(movie_request())
        [second] = await provider.import_metadata(movie_request())

        assert second.media_id == first.media_id
        tmdb_client.get_movie.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_refresh_overwrites_fields_and_keeps_id(
        self, provider, tmdb_client, metadata_repo
    ) -> None:
        [first] = await provider.import_metadata(movie_request())
        tmdb_client.get_movie.return_value = {
            **TMDB_MOVIE_DETAILS_RESPONSE,
            "title": "Matrix",
            "vote_average": 9.0,
        }

        [second] = await provider.import_metadata(movie_request(refresh=True))

        assert second.media_id == first.media_id
        stored = metadata_repo.find_metadata_by_id(first.media_id)
        assert stored.title == "Matrix"
        assert stored.rating == 9.0

    @pytest.mark.asyncio
    async def test_unknown_movie(self, provider, tmdb_client) -> None:
        tmdb_client.get_movie.return_value = None
        [outcome] = await provider.import_metadata(movie_request())
        assert isinstance(outcome, ErrorProviderFailure)

    @pytest.mark.asyncio
    async def test_one_outcome_per_id(self, provider, tmdb_client) -> None:
        tmdb_client.get_movie.side_effect = [
            dict(TMDB_MOVIE_DETAILS_RESPONSE),
            httpx.ReadTimeout("slow"),
        ]
        request = ImportMetadataRequest(("603", "604"), "tmdb", MediaKind.MOVIE)

        outcomes = await provider.import_metadata(request)

        assert isinstance(outcomes[0], ImportSuccess)
        assert isinstance(outcomes[1], ErrorProviderFailure)

    @pytest.mark.asyncio
    async def test_persistence_failure(self, tmdb_client) -> None:
        repo = MagicMock(spec=IMetadataRepository)
        repo.find_existing_metadata.return_value = None
        repo.insert_metadata.side_effect = RepositoryError("disk full")
        provider = TmdbMetadataProvider(tmdb_client, repo)

        [outcome] = await provider.import_metadata(movie_request())

        assert isinstance(outcome, ErrorPersistenceFailure)
        assert "disk full" in outcome.detail


class TestImportTv:
    @pytest.mark.asyncio
    async def test_imports_hierarchy(self, provider, metadata_repo, tmdb_client) -> None:
        [outcome] = await provider.import_metadata(tv_request())

        match = outcome.match
        show = match.record
        assert show.kind is MetadataKind.TV_SHOW
        # La saison 0 (specials) n'est pas importee
        assert [s.season_number for s in match.seasons] == [1, 2]
        assert len(match.episodes) == 3
        for season in match.seasons:
            assert season.parent_id == show.id
            assert season.root_id == show.id
        season_1 = match.seasons[0]
        pilot = match.episodes[0]
        assert pilot.remote_id == "tmdb:tv:1396-1-1"
        assert pilot.parent_id == season_1.id
        assert pilot.root_id == show.id
        assert len(metadata_repo.find_metadata_by_root_id(show.id)) == 5
        requested = sorted(c.args[1] for c in tmdb_client.get_season.await_args_list)
        assert requested == [1, 2]

    @pytest.mark.asyncio
    async def test_reuse_loads_children_from_catalog(
        self, provider, tmdb_client
    ) -> None:
        [first] = await provider.import_metadata(tv_request())
        tmdb_client.get_tv.reset_mock()

        [second] = await provider.import_metadata(tv_request())

        tmdb_client.get_tv.assert_not_awaited()
        assert second.media_id == first.media_id
        assert [s.id for s in second.match.seasons] == [s.id for s in first.match.seasons]
        assert [e.id for e in second.match.episodes] == [e.id for e in first.match.episodes]

    @pytest.mark.asyncio
    async def test_refresh_keeps_linkage(self, provider, tmdb_client) -> None:
        [first] = await provider.import_metadata(tv_request())
        renamed = {
            **TMDB_SEASON_1_RESPONSE,
            "episodes": [
                {**TMDB_SEASON_1_RESPONSE["episodes"][0], "name": "Pilot (Remastered)"},
                TMDB_SEASON_1_RESPONSE["episodes"][1],
            ],
        }
        tmdb_client.get_season.side_effect = lambda show_id, n: (
            renamed if n == 1 else SEASONS.get(n)
        )

        [second] = await provider.import_metadata(tv_request(refresh=True))

        pilot_before = first.match.episodes[0]
        pilot_after = second.match.episodes[0]
        assert pilot_after.id == pilot_before.id
        assert pilot_after.title == "Pilot (Remastered)"
        assert pilot_after.parent_id == pilot_before.parent_id
        assert pilot_after.root_id == pilot_before.root_id
