"""Application wiring for startup and shutdown.

Startup:  build both HTTP clients from settings, load the artist/album indexes once.
Shutdown: close both HTTP clients (even if the body raised).

Usage:
    async with lifespan(get_settings()) as deck:
        result = await deck.search.route(":artist jean gold")
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx

from playdeck.application.services import (
    CatalogIndexService,
    HybridSearchRouter,
    PlaylistOrchestrator,
)
from playdeck.config import Settings
from playdeck.infrastructure.integrations import CatalogClient, PlayerClient

logger = logging.getLogger(__name__)


@dataclass
class PlayDeck:
    """Everything a front end needs, wired together."""

    catalog: CatalogClient
    player: PlayerClient
    index: CatalogIndexService
    search: HybridSearchRouter
    playlist: PlaylistOrchestrator

    @classmethod
    def create(cls, catalog: CatalogClient, player: PlayerClient) -> "PlayDeck":
        index = CatalogIndexService(catalog)
        return cls(
            catalog=catalog,
            player=player,
            index=index,
            search=HybridSearchRouter(index, catalog),
            playlist=PlaylistOrchestrator(catalog, player),
        )

    async def close(self) -> None:
        """Close both clients; the player is closed even if the catalog close fails."""
        try:
            await self.catalog.close()
        finally:
            await self.player.close()


@asynccontextmanager
async def lifespan(
    settings: Settings,
    load_index: bool = True,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[PlayDeck]:
    """Build the app, optionally load indexes, always close clients on exit.

    Args:
        settings: Application settings
        load_index: Skip index loading for commands that never search
        transport: Optional httpx transport shared by both clients (tests)

    Raises:
        ConfigurationError: If a base URL is missing
    """
    deck = PlayDeck.create(
        CatalogClient.from_settings(settings.catalog, transport=transport),
        PlayerClient.from_settings(settings.player, transport=transport),
    )
    logger.debug(
        "Clients ready (catalog=%s, player=%s)",
        settings.catalog.base_url,
        settings.player.base_url,
    )
    try:
        if load_index:
            await deck.index.load()
        yield deck
    finally:
        await deck.close()
