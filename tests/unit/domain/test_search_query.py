"""Tests for raw query classification."""

import pytest

from playdeck.domain.entities import Kind
from playdeck.domain.value_objects import (
    AlbumQuery,
    ArtistQuery,
    SongQuery,
    classify_query,
)


class TestClassifyQuery:
    """Test the command prefix grammar."""

    def test_artist_prefix(self) -> None:
        query = classify_query(":artist jean gold")
        assert query == ArtistQuery("jean gold")
        assert query.kind is Kind.ARTIST

    def test_album_prefix(self) -> None:
        query = classify_query(":album best of")
        assert query == AlbumQuery("best of")
        assert query.kind is Kind.ALBUM

    def test_plain_text_is_song(self) -> None:
        query = classify_query("blue monday")
        assert query == SongQuery("blue monday")
        assert query.kind is Kind.SONG

    @pytest.mark.parametrize(
        "raw",
        [
            ":foobar",
            ":artist",
            ":ALBUM x",
            " :artist x",
            "",
        ],
    )
    def test_non_commands_pass_through_untouched(self, raw: str) -> None:
        assert classify_query(raw) == SongQuery(raw)

    def test_text_after_prefix_is_not_trimmed(self) -> None:
        assert classify_query(":artist  two spaces") == ArtistQuery(" two spaces")
