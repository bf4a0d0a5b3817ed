"""HTTP client for the catalog server (listings, search, metadata, paths)."""

import logging

import httpx

from playdeck.config.settings import CatalogSettings
from playdeck.domain.entities import Track
from playdeck.domain.ports import ICatalogClient, ListingEntry
from playdeck.infrastructure.integrations.base_client import BaseHttpClient
from playdeck.infrastructure.integrations.payloads import (
    CATALOG_TRACKS_ADAPTER,
    LISTING_ADAPTER,
    TRACKS_ADAPTER,
)

logger = logging.getLogger(__name__)

ARTISTS_PATH = "/listByArtist"
ALBUMS_PATH = "/listByOnlyAlbums"


class CatalogClient(BaseHttpClient, ICatalogClient):
    """HTTP client for the catalog server."""

    SERVICE_NAME = "catalog"

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        search_size: int = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, timeout=timeout, transport=transport)
        self.search_size = search_size

    @classmethod
    def from_settings(
        cls,
        settings: CatalogSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "CatalogClient":
        return cls(
            settings.base_url,
            timeout=settings.timeout,
            search_size=settings.search_size,
            transport=transport,
        )

    async def _listing(self, path: str) -> list[ListingEntry]:
        response = await self._request("GET", path)
        entries = self._decode(response, LISTING_ADAPTER)
        return [(entry.name, entry.url) for entry in entries]

    async def list_artists(self) -> list[ListingEntry]:
        return await self._listing(ARTISTS_PATH)

    async def list_albums(self) -> list[ListingEntry]:
        return await self._listing(ALBUMS_PATH)

    async def search(self, term: str, size: int | None = None) -> list[Track]:
        """
        Free-text song search.

        Args:
            term: Raw query text, sent verbatim (httpx encodes spaces)
            size: Max rows (default: configured search_size)

        Returns:
            Matching tracks in server order
        """
        response = await self._request(
            "GET",
            "/search",
            params={"term": term, "size": size or self.search_size},
        )
        return [payload.to_track() for payload in self._decode(response, TRACKS_ADAPTER)]

    # Hey future me, the id from a listing is an opaque QUERY STRING the server handed us
    # (the "url" field). It goes after "?" verbatim - don't wrap it in params= or quote it,
    # the server parses it itself.
    async def _tracks_by(self, path: str, entity_id: str) -> list[Track]:
        response = await self._request("GET", f"{path}?{entity_id}")
        payloads = self._decode(response, CATALOG_TRACKS_ADAPTER)
        return [payload.to_track() for payload in payloads]

    async def tracks_by_artist(self, artist_id: str) -> list[Track]:
        return await self._tracks_by(ARTISTS_PATH, artist_id)

    async def tracks_by_album(self, album_id: str) -> list[Track]:
        return await self._tracks_by(ALBUMS_PATH, album_id)

    async def tracks_info(self, track_ids: list[str]) -> list[Track]:
        """
        Batch metadata lookup.

        The server does NOT keep request order - callers that care (the playlist)
        must reorder by id themselves.
        """
        if not track_ids:
            return []
        logger.debug("Fetching metadata for %d track(s)", len(track_ids))
        response = await self._request(
            "GET",
            "/musicsInfo",
            params={"ids": "[" + ",".join(track_ids) + "]"},
        )
        return [payload.to_track() for payload in self._decode(response, TRACKS_ADAPTER)]

    async def path_of(self, track_id: str) -> str:
        """Playable path of a track; the raw body IS the path."""
        response = await self._request("GET", "/pathOfMusic", params={"id": track_id})
        return response.text


__all__ = ["CatalogClient"]
