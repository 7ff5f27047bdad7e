"""Tests for natural (alphanumeric) string ordering."""

from versiongnome.utils.natural_sort import compare, natural_key, natural_sort


class TestCompare:
    """Tests for the compare() function."""

    def test_numbers_compare_by_value(self) -> None:
        assert compare("720p", "1080p") == -1
        assert compare("1080p", "720p") == 1
        assert compare("Part 2", "Part 10") == -1

    def test_equal_strings(self) -> None:
        assert compare("Movie 1080p", "Movie 1080p") == 0

    def test_leading_zeros_ignored_then_shorter_first(self) -> None:
        """01 and 1 have the same value; the shorter string sorts first."""
        assert compare("Episode 1", "Episode 01") == -1
        assert compare("Episode 01", "Episode 1") == 1

    def test_text_is_case_insensitive_first(self) -> None:
        assert compare("apple", "Banana") == -1
        assert compare("B", "a") == 1

    def test_mixed_case_version_tags(self) -> None:
        """Letters rank case-insensitively; case only breaks exact ties."""
        assert compare("extended", "Theatrical") == -1
        assert compare("Theatrical", "extended") == 1
        assert compare("Extended", "extended") == -1
        assert natural_sort(["theatrical", "Extended", "extended", "IMAX"]) == [
            "Extended",
            "extended",
            "IMAX",
            "theatrical",
        ]

    def test_none_and_empty_sort_first(self) -> None:
        assert compare(None, "a") == -1
        assert compare("a", None) == 1
        assert compare(None, None) == 0
        assert compare("", "a") == -1
        assert compare("", "") == 0

    def test_prefix_sorts_first(self) -> None:
        assert compare("Movie", "Movie - 1080p") == -1


class TestNaturalSort:
    """Tests for natural_sort() and natural_key."""

    def test_resolutions(self) -> None:
        names = ["Movie - 720p", "Movie - 2160p", "Movie - 1080p"]
        assert natural_sort(names) == ["Movie - 720p", "Movie - 1080p", "Movie - 2160p"]

    def test_reverse(self) -> None:
        names = ["Movie - 720p", "Movie - 2160p", "Movie - 1080p"]
        assert natural_sort(names, reverse=True) == [
            "Movie - 2160p",
            "Movie - 1080p",
            "Movie - 720p",
        ]

    def test_key_with_sorted(self) -> None:
        assert sorted(["file10", "file9", "file100"], key=natural_key) == [
            "file9",
            "file10",
            "file100",
        ]
