"""Hybrid search: route one query string to a local index or the catalog server.

    ":artist jean gold"  -> artist index, AND of "jean*" and "gold*"   -> Kind.ARTIST
    ":album best of"     -> album index                               -> Kind.ALBUM
    "anything else"      -> catalog /search, query sent verbatim      -> Kind.SONG

A failed song search returns an empty SONG result instead of raising.
"""

import logging

from playdeck.application.services.catalog_index_service import CatalogIndexService
from playdeck.domain.entities import Kind, SearchResult, Track
from playdeck.domain.exceptions import ExternalServiceError
from playdeck.domain.ports import ICatalogClient
from playdeck.domain.value_objects import (
    AlbumQuery,
    ArtistQuery,
    SongQuery,
    classify_query,
)

logger = logging.getLogger(__name__)


class HybridSearchRouter:
    """Dispatches raw queries by their command prefix."""

    def __init__(self, index: CatalogIndexService, catalog: ICatalogClient) -> None:
        """
        Args:
            index: Loaded artist/album indexes
            catalog: Catalog server client, for free-text song search
        """
        self._index = index
        self._catalog = catalog

    async def route(self, raw_query: str) -> SearchResult:
        """Classify `raw_query` and run the matching search."""
        match classify_query(raw_query):
            case ArtistQuery(text=text, kind=kind) | AlbumQuery(text=text, kind=kind):
                return SearchResult(kind, self._index.search(kind, text))
            case SongQuery(text=text):
                return SearchResult(Kind.SONG, await self.search_songs(text))

    async def search_songs(self, term: str) -> list[Track]:
        """Free-text search on the catalog server; empty on failure."""
        try:
            return await self._catalog.search(term)
        except ExternalServiceError as e:
            logger.warning("Song search for %r failed: %s", term, e.message)
            return []
