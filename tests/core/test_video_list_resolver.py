"""Tests for the video list resolver.

Covers partitioning (stacks, standalone titles, extras), entry building, the
media-kind switch between movie and episode grouping, and the end-to-end
guarantee that every input file ends up in exactly one entry.
"""

from collections import Counter

import pytest

from tests.helpers import make_record, paths_of
from versiongnome.core.video_list_resolver import (
    build_entries,
    coerce_collection_type,
    partition_files,
    resolve_video_list,
)
from versiongnome.errors import UnsupportedMediaKindError, VersionGnomeError
from versiongnome.models.core import CollectionType, ExtraType, FileRecord, LogicalEntry

MOVIE_DIR = "/movies/Movie (2020)"
TV_DIR = "/tv/Show/Season 01"


def _all_paths(entries: list[LogicalEntry]) -> list[str]:
    return [record.path for entry in entries for record in entry.all_files()]


@pytest.fixture
def stacked_movie() -> list[FileRecord]:
    """Two disc files, a trailer, and a trailer that looks like a third disc."""
    return [
        make_record(f"{MOVIE_DIR}/Movie (2020) cd1.mkv", 2020),
        make_record(f"{MOVIE_DIR}/Movie (2020)-trailer.mkv", 2020, ExtraType.TRAILER),
        make_record(f"{MOVIE_DIR}/Movie (2020) cd2.mkv", 2020),
        make_record(f"{MOVIE_DIR}/Movie (2020) cd3.mkv", 2020, ExtraType.TRAILER),
    ]


class TestCoerceCollectionType:
    """Tests for the media-kind boundary check."""

    def test_accepts_enum_string_and_none(self) -> None:
        assert coerce_collection_type(CollectionType.TVSHOWS) is CollectionType.TVSHOWS
        assert coerce_collection_type(" TVShows ") is CollectionType.TVSHOWS
        assert coerce_collection_type(None) is None

    @pytest.mark.parametrize("value", ["tv", "", 3])
    def test_rejects_unknown(self, value) -> None:
        with pytest.raises(UnsupportedMediaKindError) as excinfo:
            coerce_collection_type(value)
        assert excinfo.value.value == value
        assert isinstance(excinfo.value, ValueError)
        assert isinstance(excinfo.value, VersionGnomeError)


class TestPartitionFiles:
    """Tests for partition_files()."""

    def test_extras_never_join_a_stack(self, stacked_movie) -> None:
        stacks, standalone, extras = partition_files(stacked_movie)

        assert len(stacks) == 1
        assert stacks[0].files == [
            f"{MOVIE_DIR}/Movie (2020) cd1.mkv",
            f"{MOVIE_DIR}/Movie (2020) cd2.mkv",
        ]
        assert standalone == []
        assert paths_of(extras) == [
            f"{MOVIE_DIR}/Movie (2020)-trailer.mkv",
            f"{MOVIE_DIR}/Movie (2020) cd3.mkv",
        ]

    def test_standalone_keeps_input_order(self) -> None:
        files = [
            make_record(f"{MOVIE_DIR}/B.mkv"),
            make_record(f"{MOVIE_DIR}/A.mkv"),
        ]

        stacks, standalone, extras = partition_files(files)

        assert stacks == []
        assert standalone == files
        assert extras == []

    def test_empty(self) -> None:
        assert partition_files([]) == ([], [], [])


class TestBuildEntries:
    """Tests for build_entries()."""

    def test_stacks_first_then_standalone(self, stacked_movie) -> None:
        extra_title = make_record(f"{MOVIE_DIR}/Bonus Disc.mkv", 2019)
        stacks, standalone, _ = partition_files([*stacked_movie, extra_title])

        entries = build_entries(stacks, standalone)

        assert len(entries) == 2
        stack_entry, single = entries
        assert stack_entry.name == "Movie (2020)"
        assert stack_entry.year == 2020
        assert stack_entry.is_stack
        assert [f.display_name for f in stack_entry.files] == ["Movie", "Movie"]
        assert single.files == [extra_title]
        assert single.year == 2019
        assert single.name == "Bonus Disc"


class TestResolveMovies:
    """End-to-end resolution with movie grouping."""

    def test_versions_collapsed(self) -> None:
        files = [
            make_record(f"{MOVIE_DIR}/Movie (2020).mkv", 2020),
            make_record(f"{MOVIE_DIR}/Movie (2020) - [1080p].mkv", 2020),
            make_record(f"{MOVIE_DIR}/Movie (2020) - [4K].mkv", 2020),
        ]

        result = resolve_video_list(files, collection_type=CollectionType.MOVIES)

        assert len(result) == 1
        assert result[0].name == "Movie (2020)"
        assert paths_of(result[0].files) == [f"{MOVIE_DIR}/Movie (2020).mkv"]
        assert paths_of(result[0].alternate_versions) == [
            f"{MOVIE_DIR}/Movie (2020) - [1080p].mkv",
            f"{MOVIE_DIR}/Movie (2020) - [4K].mkv",
        ]

    def test_extras_appended_last(self) -> None:
        trailer = make_record(f"{MOVIE_DIR}/Movie (2020)-trailer.mkv", 2020, ExtraType.TRAILER)
        files = [
            trailer,
            make_record(f"{MOVIE_DIR}/Movie (2020).mkv", 2020),
            make_record(f"{MOVIE_DIR}/Movie (2020) - 720p.mkv", 2020),
        ]

        result = resolve_video_list(files)

        assert len(result) == 2
        assert result[0].alternate_versions[0].path == f"{MOVIE_DIR}/Movie (2020) - 720p.mkv"
        assert result[1].files == [trailer]
        assert result[1].extra_type == ExtraType.TRAILER

    def test_stack_is_not_merged(self, stacked_movie) -> None:
        result = resolve_video_list(stacked_movie)

        assert len(result) == 3
        assert result[0].is_stack
        assert result[0].alternate_versions == []
        assert [entry.extra_type for entry in result[1:]] == [ExtraType.TRAILER, ExtraType.TRAILER]

    def test_ineligible_folder_left_alone(self) -> None:
        files = [
            make_record(f"{MOVIE_DIR}/Movie (2020).mkv", 2020),
            make_record(f"{MOVIE_DIR}/Movie (2020) - 1080p.mkv", 2020),
            make_record(f"{MOVIE_DIR}/Sequel (2020).mkv", 2020),
        ]

        result = resolve_video_list(files)

        assert [paths_of(entry.files) for entry in result] == [[f.path] for f in files]
        assert all(not entry.alternate_versions for entry in result)

    def test_multi_version_disabled(self) -> None:
        files = [
            make_record(f"{MOVIE_DIR}/Movie (2020).mkv", 2020),
            make_record(f"{MOVIE_DIR}/Movie (2020) - 1080p.mkv", 2020),
        ]

        result = resolve_video_list(files, support_multi_version=False)

        assert len(result) == 2

    def test_music_videos_use_movie_grouping(self) -> None:
        files = [
            make_record("/mv/Song/Song.mp4"),
            make_record("/mv/Song/Song - 1080p.mp4"),
        ]

        result = resolve_video_list(files, collection_type="musicvideos")

        assert len(result) == 1
        assert result[0].name == "Song"

    def test_resolution_ranking(self) -> None:
        files = [
            make_record("/movies/Movie/Movie - 1080p.mkv"),
            make_record("/movies/Movie/Movie - 720p.mkv"),
            make_record("/movies/Movie/Movie - 2160p.mkv"),
        ]

        result = resolve_video_list(files)

        assert paths_of(result[0].all_files()) == [
            "/movies/Movie/Movie - 2160p.mkv",
            "/movies/Movie/Movie - 1080p.mkv",
            "/movies/Movie/Movie - 720p.mkv",
        ]

    def test_unknown_media_kind_rejected(self) -> None:
        with pytest.raises(UnsupportedMediaKindError):
            resolve_video_list([make_record(f"{MOVIE_DIR}/Movie (2020).mkv")], collection_type="anime")

    def test_empty_input(self) -> None:
        assert resolve_video_list([]) == []


class TestResolveEpisodes:
    """End-to-end resolution with episode grouping."""

    def test_episode_with_bracketed_version(self) -> None:
        files = [
            make_record(f"{TV_DIR}/Show S01E01.mkv"),
            make_record(f"{TV_DIR}/Show S01E01 - [1080p].mkv"),
        ]

        result = resolve_video_list(files, collection_type=CollectionType.TVSHOWS)

        assert len(result) == 1
        assert paths_of(result[0].files) == [f"{TV_DIR}/Show S01E01.mkv"]
        assert paths_of(result[0].alternate_versions) == [f"{TV_DIR}/Show S01E01 - [1080p].mkv"]

    def test_season_with_extras(self) -> None:
        sample = make_record(f"{TV_DIR}/sample.mkv", extra_type=ExtraType.SAMPLE)
        files = [
            make_record(f"{TV_DIR}/Show S01E01 - 720p.mkv"),
            sample,
            make_record(f"{TV_DIR}/Show S01E02.mkv"),
            make_record(f"{TV_DIR}/Show S01E01 - 1080p.mkv"),
        ]

        result = resolve_video_list(files, collection_type="tvshows")

        assert len(result) == 3
        assert paths_of(result[0].files) == [f"{TV_DIR}/Show S01E01 - 1080p.mkv"]
        assert paths_of(result[1].files) == [f"{TV_DIR}/Show S01E02.mkv"]
        assert result[2].files == [sample]

    def test_caller_records_untouched(self) -> None:
        files = [
            make_record(f"{TV_DIR}/Show S01E01.mkv"),
            make_record(f"{TV_DIR}/Show S01E01 - [HEVC].mkv"),
        ]
        before = [record.model_copy() for record in files]

        resolve_video_list(files, collection_type=CollectionType.TVSHOWS)

        assert files == before


class TestPartitionCompleteness:
    """Every input file appears in exactly one output entry."""

    @pytest.mark.parametrize("kind", [CollectionType.MOVIES, CollectionType.TVSHOWS])
    @pytest.mark.parametrize("multi_version", [True, False])
    def test_no_loss_no_duplication(self, kind, multi_version, stacked_movie) -> None:
        files = [
            *stacked_movie,
            make_record(f"{MOVIE_DIR}/Movie (2020).mkv", 2020),
            make_record(f"{MOVIE_DIR}/Movie (2020) - 1080p.mkv", 2020),
            make_record(f"{MOVIE_DIR}/Movie (2020) - 1080p - part1.mkv", 2020),
            make_record(f"{MOVIE_DIR}/behind the scenes.mkv", extra_type=ExtraType.BEHIND_THE_SCENES),
        ]

        result = resolve_video_list(files, support_multi_version=multi_version, collection_type=kind)

        assert Counter(_all_paths(result)) == Counter(f.path for f in files)

    @pytest.mark.parametrize("multi_version", [True, False])
    def test_case_variant_of_stack_part_kept(self, multi_version) -> None:
        """A file differing from a stack part only by case is its own title."""
        files = [
            make_record("/m/Movie/Movie cd1.mkv"),
            make_record("/m/Movie/Movie cd2.mkv"),
            make_record("/m/Movie/movie CD1.mkv"),
        ]

        result = resolve_video_list(files, support_multi_version=multi_version)

        assert Counter(_all_paths(result)) == Counter(f.path for f in files)
        assert result[0].is_stack
        assert paths_of(result[0].files) == ["/m/Movie/Movie cd1.mkv", "/m/Movie/Movie cd2.mkv"]

    def test_no_extra_inside_a_stack(self, stacked_movie) -> None:
        result = resolve_video_list(stacked_movie)

        for entry in result:
            if entry.is_stack:
                assert all(f.extra_type is None for f in entry.files)
