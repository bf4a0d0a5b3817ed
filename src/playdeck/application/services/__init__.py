"""Application services."""

from playdeck.application.services.catalog_index_service import (
    CatalogIndex,
    CatalogIndexService,
)
from playdeck.application.services.hybrid_search_service import HybridSearchRouter
from playdeck.application.services.playlist_orchestrator import (
    BulkAddReport,
    PlaylistOrchestrator,
)

__all__ = [
    "BulkAddReport",
    "CatalogIndex",
    "CatalogIndexService",
    "HybridSearchRouter",
    "PlaylistOrchestrator",
]
