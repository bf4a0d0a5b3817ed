"""Tests for CatalogIndex and CatalogIndexService.

Hey future me - the listing below is the canonical example for the AND search:
"jean" hits a1 + a2, "gold" hits a2 + a3 (via "gold" AND "golden"), so
":artist jean gold" must come back as exactly a2.
"""

import logging
from unittest.mock import AsyncMock

import pytest

from playdeck.application.services import CatalogIndex, CatalogIndexService
from playdeck.domain.entities import Kind, Track
from playdeck.domain.exceptions import (
    MalformedResponseError,
    ServiceUnavailableError,
    ValidationError,
)
from playdeck.domain.ports import ICatalogClient

ARTISTS = [
    ("Jean-Michel Jarre", "a1"),
    ("Jean Gold", "a2"),
    ("Golden Oak", "a3"),
]
ALBUMS = [
    ("Best Of Gold", "b1"),
    ("Oxygene", "b2"),
]


@pytest.fixture
def catalog() -> AsyncMock:
    """Catalog mock with small artist/album listings."""
    mock = AsyncMock(spec=ICatalogClient)
    mock.list_artists.return_value = ARTISTS
    mock.list_albums.return_value = ALBUMS
    return mock


@pytest.fixture
async def service(catalog: AsyncMock) -> CatalogIndexService:
    service = CatalogIndexService(catalog)
    await service.load()
    return service


class TestCatalogIndexSearch:
    """Test multi-term AND search on one index."""

    @pytest.fixture
    def index(self) -> CatalogIndex:
        return CatalogIndex.build(Kind.ARTIST, ARTISTS)

    def test_two_terms_intersect(self, index: CatalogIndex) -> None:
        assert index.search_ids("jean gold") == ["a2"]

    def test_rows_carry_display_name(self, index: CatalogIndex) -> None:
        assert index.search("jean gold") == [
            Track(id="a2", artist="Jean Gold", album="Jean Gold")
        ]

    def test_single_term_prefix(self, index: CatalogIndex) -> None:
        assert index.search_ids("gold") == ["a2", "a3"]

    def test_term_order_does_not_matter(self, index: CatalogIndex) -> None:
        assert index.search_ids("gold jean") == index.search_ids("jean gold")

    def test_case_insensitive(self, index: CatalogIndex) -> None:
        assert index.search_ids("JEAN Gold") == ["a2"]

    def test_hyphen_splits_terms(self, index: CatalogIndex) -> None:
        assert index.search_ids("jean-michel") == ["a1"]

    def test_term_without_match_short_circuits(self, index: CatalogIndex) -> None:
        assert index.search_ids("jean zzz gold") == []

    def test_empty_intersection(self, index: CatalogIndex) -> None:
        assert index.search_ids("michel oak") == []

    def test_blank_query(self, index: CatalogIndex) -> None:
        assert index.search_ids("") == []
        assert index.search_ids("   ") == []

    def test_repeated_spaces_ignored(self, index: CatalogIndex) -> None:
        assert index.search_ids("jean   gold") == ["a2"]

    def test_empty_index(self) -> None:
        index = CatalogIndex(Kind.ALBUM)
        assert index.is_empty
        assert index.search("anything") == []


class TestCatalogIndexServiceLoad:
    """Test index loading."""

    async def test_load_builds_both_indexes(
        self, service: CatalogIndexService
    ) -> None:
        assert service.loaded
        assert len(service.artists.names) == 3
        assert len(service.albums.names) == 2

    async def test_load_is_idempotent(
        self, service: CatalogIndexService, catalog: AsyncMock
    ) -> None:
        await service.load()
        catalog.list_artists.assert_awaited_once()
        catalog.list_albums.assert_awaited_once()

    async def test_failed_listing_degrades_to_empty(self, catalog: AsyncMock) -> None:
        """A broken artist listing disables artist search only."""
        catalog.list_artists.side_effect = ServiceUnavailableError(
            "connection refused", "catalog"
        )
        service = CatalogIndexService(catalog)

        await service.load()

        assert service.loaded
        assert service.artists.is_empty
        assert service.search(Kind.ARTIST, "jean") == []
        assert [row.id for row in service.search(Kind.ALBUM, "gold")] == ["b1"]

    async def test_malformed_listing_degrades_to_empty(
        self, catalog: AsyncMock
    ) -> None:
        catalog.list_albums.side_effect = MalformedResponseError("bad json", "catalog")
        service = CatalogIndexService(catalog)

        await service.load()

        assert service.albums.is_empty
        assert not service.artists.is_empty

    async def test_load_logs_snapshot_time(
        self, catalog: AsyncMock, caplog: pytest.LogCaptureFixture
    ) -> None:
        service = CatalogIndexService(catalog)

        with caplog.at_level(logging.INFO):
            await service.load()

        stamp = service.artists.built_at.isoformat(timespec="seconds")
        assert any(
            "Catalog indexes ready" in record.getMessage() and stamp in record.getMessage()
            for record in caplog.records
        )

    def test_search_before_load_is_empty(self, catalog: AsyncMock) -> None:
        service = CatalogIndexService(catalog)
        assert not service.loaded
        assert service.search(Kind.ARTIST, "jean") == []


class TestCatalogIndexServiceSearch:
    """Test searching through the service."""

    async def test_search_artists(self, service: CatalogIndexService) -> None:
        rows = service.search(Kind.ARTIST, "jean gold")
        assert [(row.id, row.display_name) for row in rows] == [("a2", "Jean Gold")]

    async def test_search_albums(self, service: CatalogIndexService) -> None:
        assert [row.id for row in service.search(Kind.ALBUM, "oxy")] == ["b2"]

    async def test_kinds_use_separate_indexes(
        self, service: CatalogIndexService
    ) -> None:
        """The word "gold" appears in both listings."""
        assert [row.id for row in service.search(Kind.ARTIST, "gold")] == ["a2", "a3"]
        assert [row.id for row in service.search(Kind.ALBUM, "gold")] == ["b1"]

    async def test_song_kind_rejected(self, service: CatalogIndexService) -> None:
        with pytest.raises(ValidationError):
            service.search(Kind.SONG, "anything")
