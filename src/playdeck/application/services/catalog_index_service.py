"""Artist/album token indexes and the multi-term AND search over them.

Hey future me - the indexes are a SNAPSHOT. They're loaded once (lifecycle calls
load()) and kept for the whole process. The catalog server has no change feed, so
an artist added after startup won't be found by ":artist" until the next start.
Free-text song search always goes to the server and isn't affected.

Failure policy is degrade-to-empty: if a listing can't be fetched the matching
index is just empty (searches return nothing) and startup continues.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from playdeck.domain.entities import Kind, Track
from playdeck.domain.exceptions import ExternalServiceError, ValidationError
from playdeck.domain.ports import ICatalogClient, ListingEntry
from playdeck.domain.value_objects import (
    NameDictionary,
    TokenIndex,
    intersect_sorted,
    normalize_name,
)
from playdeck.infrastructure.observability import log_slow_operation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogIndex:
    """TokenIndex + NameDictionary built from one listing."""

    kind: Kind
    tokens: TokenIndex = field(default_factory=TokenIndex)
    names: NameDictionary = field(default_factory=NameDictionary)
    built_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def build(cls, kind: Kind, entries: list[ListingEntry]) -> "CatalogIndex":
        return cls(
            kind=kind,
            tokens=TokenIndex.build(entries),
            names=NameDictionary(entries),
        )

    @property
    def is_empty(self) -> bool:
        return len(self.names) == 0

    def search_ids(self, query: str) -> list[str]:
        """AND together the prefix matches of every term of `query`.

        Terms are normalized like names ("-" splits too); blank terms from
        repeated spaces are dropped. The first term with no match, or the
        first empty intersection, ends the search.

        Returns:
            Sorted unique ids matching every term
        """
        terms = normalize_name(query)
        if not terms:
            return []

        result: list[str] | None = None
        for term in terms:
            ids = self.tokens.ids_for_prefix(term)
            if not ids:
                return []
            result = ids if result is None else intersect_sorted(result, ids)
            if not result:
                return []
        return result or []

    def search(self, query: str) -> list[Track]:
        """Same as search_ids() but returns displayable rows."""
        return [
            Track.catalog_entry(entity_id, self.names.lookup(entity_id))
            for entity_id in self.search_ids(query)
        ]


class CatalogIndexService:
    """Owns the artist and album indexes."""

    def __init__(self, catalog: ICatalogClient) -> None:
        """Initialize the service with empty indexes.

        Args:
            catalog: Catalog server client
        """
        self._catalog = catalog
        self._indexes: dict[Kind, CatalogIndex] = {
            Kind.ARTIST: CatalogIndex(Kind.ARTIST),
            Kind.ALBUM: CatalogIndex(Kind.ALBUM),
        }
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def artists(self) -> CatalogIndex:
        return self._indexes[Kind.ARTIST]

    @property
    def albums(self) -> CatalogIndex:
        return self._indexes[Kind.ALBUM]

    async def load(self) -> None:
        """Fetch both listings (in parallel) and build the indexes.

        Calling it again is a no-op - the snapshot is built once.
        """
        if self._loaded:
            return

        artists, albums = await asyncio.gather(
            self._build(Kind.ARTIST, self._catalog.list_artists),
            self._build(Kind.ALBUM, self._catalog.list_albums),
        )
        self._indexes = {Kind.ARTIST: artists, Kind.ALBUM: albums}
        self._loaded = True
        logger.info(
            "Catalog indexes ready: %d artists (%d tokens), %d albums (%d tokens), "
            "snapshot taken %s",
            len(artists.names),
            len(artists.tokens),
            len(albums.names),
            len(albums.tokens),
            artists.built_at.isoformat(timespec="seconds"),
        )

    async def _build(
        self, kind: Kind, fetch: Callable[[], Awaitable[list[ListingEntry]]]
    ) -> CatalogIndex:
        start = time.time()
        try:
            entries = await fetch()
        except ExternalServiceError as e:
            logger.warning(
                "Could not load %s listing, %s search disabled: %s",
                kind.value,
                kind.value,
                e.message,
            )
            return CatalogIndex(kind)

        index = CatalogIndex.build(kind, entries)
        log_slow_operation(
            logger,
            f"{kind.value}_index_build",
            int((time.time() - start) * 1000),
            entries=len(entries),
        )
        return index

    def search(self, kind: Kind, query: str) -> list[Track]:
        """Multi-term AND search over the artist or album index.

        Raises:
            ValidationError: If kind is Kind.SONG (songs aren't indexed locally)
        """
        if kind not in self._indexes:
            raise ValidationError(f"No local index for {kind.value} search")
        return self._indexes[kind].search(query)
