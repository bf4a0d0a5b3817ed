"""HTTP integration clients for the catalog and player servers."""

from playdeck.infrastructure.integrations.base_client import BaseHttpClient
from playdeck.infrastructure.integrations.catalog_client import CatalogClient
from playdeck.infrastructure.integrations.player_client import PlayerClient

__all__ = [
    "BaseHttpClient",
    "CatalogClient",
    "PlayerClient",
]
