"""
Tests unitaires pour PathClassifier.

Couvre l'ordre des regles : dossier de saison, motifs d'episode,
titre avec annee, puis Unrecognized.
"""

import pytest

from mediaingest.adapters.parsing.path_classifier import PathClassifier, split_year
from mediaingest.core.value_objects.classified_name import (
    EpisodeFile,
    MovieFile,
    SeasonFolder,
    ShowFolder,
    Unrecognized,
)
from mediaingest.core.value_objects.media_kind import MediaKind


@pytest.fixture
def classifier() -> PathClassifier:
    return PathClassifier()


# ============================================================================
# Dossiers de saison
# ============================================================================


class TestSeasonFolder:
    @pytest.mark.parametrize(
        "segment,expected",
        [("1", 1), ("01", 1), ("Season 1", 1), ("season 01", 1), ("SEASON 12", 12)],
    )
    def test_season_folders(self, classifier, segment, expected) -> None:
        assert classifier.classify(segment, is_directory=True) == SeasonFolder(expected)

    def test_three_digits_is_not_a_season(self, classifier) -> None:
        result = classifier.classify("123", is_directory=True)
        assert not isinstance(result, SeasonFolder)

    def test_season_rule_wins_over_context(self, classifier) -> None:
        result = classifier.classify("Season 2", True, MediaKind.MOVIE)
        assert result == SeasonFolder(2)


# ============================================================================
# Episodes
# ============================================================================


class TestEpisodeFile:
    def test_sxxexx(self, classifier) -> None:
        result = classifier.classify("Breaking Bad - S01E02 - Cat's in the Bag.mkv")
        assert result == EpisodeFile(1, 2)

    def test_lowercase_short_form(self, classifier) -> None:
        assert classifier.classify("show.s1e7.mkv") == EpisodeFile(1, 7)

    def test_dashed_absolute_number_has_no_season(self, classifier) -> None:
        result = classifier.classify("One Piece - 005 - Romance Dawn.mkv")
        assert result == EpisodeFile(None, 5)

    def test_nxnn(self, classifier) -> None:
        assert classifier.classify("Friends 2x13.avi") == EpisodeFile(2, 13)

    def test_sxxexx_wins_over_nxnn(self, classifier) -> None:
        assert classifier.classify("Show S03E04 1x01.mkv") == EpisodeFile(3, 4)

    def test_episode_rule_applies_in_movie_context(self, classifier) -> None:
        result = classifier.classify("Show - S01E01.mkv", False, MediaKind.MOVIE)
        assert isinstance(result, EpisodeFile)

    @pytest.mark.parametrize("segment", ["Friends.S01E01.mkv", "Friends.S1E1.mkv"])
    def test_dotted_padded_and_unpadded(self, classifier, segment) -> None:
        assert classifier.classify(segment) == EpisodeFile(1, 1)

    def test_episode_pattern_wins_over_year_suffix(self, classifier) -> None:
        assert classifier.classify("Show (2010) - S01E01.mkv") == EpisodeFile(1, 1)


# ============================================================================
# Titres (films et series)
# ============================================================================


class TestTitle:
    def test_movie_file_with_year(self, classifier) -> None:
        assert classifier.classify("The Matrix (1999).mkv") == MovieFile("The Matrix", 1999)

    def test_movie_file_without_year(self, classifier) -> None:
        assert classifier.classify("Heat.mp4") == MovieFile("Heat", None)

    @pytest.mark.parametrize(
        "segment,expected",
        [
            ("The Shawshank Redemption (1994).mkv", MovieFile("The Shawshank Redemption", 1994)),
            ("Inception.mkv", MovieFile("Inception", None)),
        ],
    )
    def test_video_file_without_context_is_a_movie(self, classifier, segment, expected) -> None:
        assert classifier.classify(segment) == expected

    def test_show_folder_with_year(self, classifier) -> None:
        result = classifier.classify("Breaking Bad (2008)", is_directory=True)
        assert result == ShowFolder("Breaking Bad", 2008)

    def test_directory_keeps_dots(self, classifier) -> None:
        """Pas de suppression d'extension pour un dossier."""
        result = classifier.classify("Mr. Robot", True, MediaKind.TV)
        assert result == ShowFolder("Mr. Robot", None)

    def test_movie_context_on_directory(self, classifier) -> None:
        result = classifier.classify("Alien (1979)", True, MediaKind.MOVIE)
        assert result == MovieFile("Alien", 1979)

    def test_tv_context_on_file(self, classifier) -> None:
        result = classifier.classify("Chernobyl (2019).mkv", False, MediaKind.TV)
        assert result == ShowFolder("Chernobyl", 2019)

    def test_year_without_space_is_part_of_title(self, classifier) -> None:
        assert classifier.classify("Blade Runner(1982).mkv") == MovieFile(
            "Blade Runner(1982)", None
        )


class TestUnrecognized:
    def test_non_video_file_without_context(self, classifier) -> None:
        assert classifier.classify("notes.txt") == Unrecognized()

    def test_no_pattern_and_no_context(self, classifier) -> None:
        assert classifier.classify("invalid.file.name") == Unrecognized()

    def test_blank_title(self, classifier) -> None:
        assert classifier.classify("   ", True, MediaKind.MOVIE) == Unrecognized()

    def test_empty_segment(self, classifier) -> None:
        assert classifier.classify("", True, MediaKind.TV) == Unrecognized()

    def test_is_deterministic(self, classifier) -> None:
        segment = "Dune (2021).mkv"
        assert classifier.classify(segment) == classifier.classify(segment)


class TestSplitYear:
    def test_with_year(self) -> None:
        assert split_year("Dune (2021)") == ("Dune", 2021)

    def test_without_year(self) -> None:
        assert split_year("Dune ") == ("Dune", None)
