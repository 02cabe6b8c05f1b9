"""
Tests unitaires pour MovieImportProcessor.
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from mediaingest.core.entities.media_link import MediaLink
from mediaingest.core.entities.metadata import MetadataRecord
from mediaingest.core.value_objects.media_kind import MediaKind, MetadataKind
from mediaingest.core.value_objects.outcomes import (
    ErrorAlreadyLinked,
    ErrorMatchNotFound,
    ErrorNothingToImport,
    ImportSuccess,
    MatchSuccess,
    MetadataMatch,
)
from mediaingest.services.metadata_resolver import MetadataResolver
from mediaingest.services.processors.movie_processor import (
    MovieImportProcessor,
    find_largest_video_file,
)

MATRIX = MetadataRecord(
    id="11",
    remote_id="tmdb:movie:603",
    kind=MetadataKind.MOVIE,
    title="The Matrix",
    release_date=date(1999, 3, 30),
)
MATRIX_MATCH = MetadataMatch(MATRIX.remote_id, "603", "tmdb", True, MATRIX)


@pytest.fixture
def resolver() -> MagicMock:
    mock = MagicMock(spec=MetadataResolver)
    mock.search = AsyncMock(return_value=[MatchSuccess("tmdb", (MATRIX_MATCH,))])
    mock.import_metadata = AsyncMock(return_value=[ImportSuccess("11", match=MATRIX_MATCH)])
    return mock


@pytest.fixture
def processor(resolver, mock_media_link_repo, classifier) -> MovieImportProcessor:
    return MovieImportProcessor(resolver, mock_media_link_repo, classifier)


class TestFindLargestVideoFile:
    def test_picks_largest_video(self, tmp_path, make_file) -> None:
        make_file(tmp_path / "sample.mkv", 10)
        feature = make_file(tmp_path / "movie.mkv", 500)
        make_file(tmp_path / "poster.jpg", 10_000)
        assert find_largest_video_file(tmp_path) == feature

    def test_no_video(self, tmp_path, make_file) -> None:
        make_file(tmp_path / "readme.txt")
        assert find_largest_video_file(tmp_path) is None


class TestProcess:
    def test_media_kinds(self, processor) -> None:
        assert processor.media_kinds == {MediaKind.MOVIE}

    @pytest.mark.asyncio
    async def test_single_file(self, processor, resolver, mock_media_link_repo, tmp_path, make_file) -> None:
        movie = make_file(tmp_path / "The Matrix (1999).mkv")

        outcome = await processor.process(movie)

        assert isinstance(outcome, ImportSuccess)
        assert outcome.media_id == "11"
        assert outcome.media_link_id is not None
        query = resolver.search.await_args.args[0]
        assert query.query == "The Matrix"
        assert query.year == 1999
        link: MediaLink = mock_media_link_repo.insert_media_link.call_args.args[0]
        assert link.file_path == str(movie)
        assert link.metadata_id == "11"
        assert link.media_kind is MediaKind.MOVIE

    @pytest.mark.asyncio
    async def test_directory_links_largest_file(
        self, processor, resolver, mock_media_link_repo, tmp_path, make_file
    ) -> None:
        folder = tmp_path / "The Matrix (1999)"
        make_file(folder / "sample.mkv", 10)
        feature = make_file(folder / "matrix.1999.1080p.mkv", 400)

        outcome = await processor.process(folder)

        assert isinstance(outcome, ImportSuccess)
        link = mock_media_link_repo.insert_media_link.call_args.args[0]
        assert link.file_path == str(feature)
        assert resolver.search.await_args.args[0].query == "The Matrix"

    @pytest.mark.asyncio
    async def test_empty_directory(self, processor, resolver, tmp_path) -> None:
        folder = tmp_path / "Empty (2000)"
        folder.mkdir()

        outcome = await processor.process(folder)

        assert isinstance(outcome, ErrorNothingToImport)
        resolver.search.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_already_linked_file(
        self, processor, resolver, mock_media_link_repo, tmp_path, make_file
    ) -> None:
        movie = make_file(tmp_path / "The Matrix (1999).mkv")
        mock_media_link_repo.find_media_link_by_path.return_value = MediaLink(
            file_path=str(movie), media_kind=MediaKind.MOVIE, id="3"
        )

        outcome = await processor.process(movie)

        assert outcome == ErrorAlreadyLinked("3")
        resolver.search.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_match(self, processor, resolver, mock_media_link_repo, tmp_path, make_file) -> None:
        resolver.search.return_value = [MatchSuccess("tmdb", ())]
        movie = make_file(tmp_path / "Unknown Film (2031).mkv")

        outcome = await processor.process(movie)

        assert isinstance(outcome, ErrorMatchNotFound)
        mock_media_link_repo.insert_media_link.assert_not_called()
