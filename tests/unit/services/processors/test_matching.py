"""
Tests du choix de la meilleure correspondance et de resolve_match.
"""

from datetime import date
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from mediaingest.core.entities.metadata import MetadataRecord
from mediaingest.core.value_objects.media_kind import MediaKind, MetadataKind
from mediaingest.core.value_objects.outcomes import (
    ErrorMatchNotFound,
    ErrorPersistenceFailure,
    ErrorProviderFailure,
    ImportSuccess,
    MatchErrorDatabase,
    MatchErrorProviderFailure,
    MatchSuccess,
    MetadataMatch,
)
from mediaingest.services.metadata_resolver import MetadataResolver
from mediaingest.services.processors.matching import (
    resolve_match,
    score_match,
    select_best_match,
)


def make_match(title: str, year: int | None, raw_id: str = "1") -> MetadataMatch:
    record = MetadataRecord(
        remote_id=f"tmdb:movie:{raw_id}",
        kind=MetadataKind.MOVIE,
        title=title,
        release_date=date(year, 1, 1) if year else None,
    )
    return MetadataMatch(record.remote_id, raw_id, "tmdb", False, record)


class TestScoring:
    def test_identical_title_scores_100(self) -> None:
        assert score_match("Heat", None, make_match("Heat", 1995)) == 100

    def test_year_weighs_a_quarter(self) -> None:
        near = score_match("Heat", 1995, make_match("Heat", 1996))
        far = score_match("Heat", 1995, make_match("Heat", 2010))
        assert near == 100
        assert far == 75

    def test_select_exact_title_with_matching_year(self) -> None:
        matches = [make_match("Dune", 1984, "1"), make_match("Dune", 2021, "2")]
        assert select_best_match("dune", 2021, matches).remote_metadata_id == "2"

    def test_select_exact_title_first_without_year(self) -> None:
        matches = [make_match("Dune", 1984, "1"), make_match("Dune", 2021, "2")]
        assert select_best_match("Dune", None, matches).remote_metadata_id == "1"

    def test_select_best_fuzzy_match(self) -> None:
        matches = [
            make_match("The Matrix Reloaded", 2003, "604"),
            make_match("The Matrix", 1999, "603"),
        ]
        assert select_best_match("Matrix, The", 1999, matches).remote_metadata_id == "603"

    def test_no_candidates(self) -> None:
        assert select_best_match("Dune", None, []) is None


@pytest.fixture
def resolver() -> MagicMock:
    mock = MagicMock(spec=MetadataResolver)
    mock.search = AsyncMock(return_value=[])
    mock.import_metadata = AsyncMock(return_value=[])
    return mock


class TestResolveMatch:
    @pytest.mark.asyncio
    async def test_imports_best_candidate(self, resolver) -> None:
        candidate = make_match("Heat", 1995, "949")
        imported = MetadataMatch(
            candidate.remote_id, "949", "tmdb", True, candidate.record
        )
        resolver.search.return_value = [MatchSuccess("tmdb", (candidate,))]
        resolver.import_metadata.return_value = [ImportSuccess("5", match=imported)]

        result = await resolve_match(resolver, MediaKind.MOVIE, "Heat", 1995, Path("/m/Heat"))

        assert result is imported
        request = resolver.import_metadata.await_args.args[0]
        assert request.metadata_ids == ("949",)
        assert request.provider_id == "tmdb"
        assert request.refresh is False

    @pytest.mark.asyncio
    async def test_no_match(self, resolver) -> None:
        resolver.search.return_value = [MatchSuccess("tmdb", ())]

        result = await resolve_match(resolver, MediaKind.MOVIE, "Zzz", None, Path("/m/Zzz"))

        assert result == ErrorMatchNotFound("/m/Zzz", "Zzz")
        resolver.import_metadata.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_all_providers_failed(self, resolver) -> None:
        resolver.search.return_value = [MatchErrorProviderFailure("tmdb", "timeout")]

        result = await resolve_match(resolver, MediaKind.MOVIE, "Heat", None, Path("/m/Heat"))

        assert isinstance(result, ErrorProviderFailure)
        assert "timeout" in result.detail

    @pytest.mark.asyncio
    async def test_database_error(self, resolver) -> None:
        resolver.search.return_value = [MatchErrorDatabase("tmdb", "locked")]

        result = await resolve_match(resolver, MediaKind.MOVIE, "Heat", None, Path("/m/Heat"))

        assert result == ErrorPersistenceFailure("locked")

    @pytest.mark.asyncio
    async def test_import_failure_is_returned(self, resolver) -> None:
        resolver.search.return_value = [MatchSuccess("tmdb", (make_match("Heat", 1995),))]
        resolver.import_metadata.return_value = [ErrorProviderFailure("503")]

        result = await resolve_match(resolver, MediaKind.MOVIE, "Heat", None, Path("/m/Heat"))

        assert result == ErrorProviderFailure("503")
