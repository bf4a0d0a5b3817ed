"""Domain ports (interfaces) for dependency inversion."""

from abc import ABC, abstractmethod

from playdeck.domain.entities import Track

# (display name, id) pair from a catalog listing - the input of TokenIndex/NameDictionary.
ListingEntry = tuple[str, str]


# Hey future me, ICatalogClient is a PORT! Services depend on this ABC, the httpx
# implementation lives in infrastructure/integrations/catalog_client.py and tests mock
# it with AsyncMock(spec=ICatalogClient). Every method raises ExternalServiceError
# subclasses on failure - no method returns an "empty on error" sentinel. Degrading to
# empty is a SERVICE decision, not a client one.
class ICatalogClient(ABC):
    """Interface for the catalog server (metadata, search, paths)."""

    @abstractmethod
    async def list_artists(self) -> list[ListingEntry]:
        """All artists as (name, id) pairs."""
        pass

    @abstractmethod
    async def list_albums(self) -> list[ListingEntry]:
        """All albums as (name, id) pairs."""
        pass

    @abstractmethod
    async def search(self, term: str, size: int | None = None) -> list[Track]:
        """Free-text song search."""
        pass

    @abstractmethod
    async def tracks_by_artist(self, artist_id: str) -> list[Track]:
        """Tracks of one artist (paths not resolved)."""
        pass

    @abstractmethod
    async def tracks_by_album(self, album_id: str) -> list[Track]:
        """Tracks of one album (paths not resolved)."""
        pass

    @abstractmethod
    async def tracks_info(self, track_ids: list[str]) -> list[Track]:
        """Batch metadata lookup. Response order is NOT guaranteed."""
        pass

    @abstractmethod
    async def path_of(self, track_id: str) -> str:
        """Playable path of one track."""
        pass


class IPlayerClient(ABC):
    """Interface for the playback server (playlist order, transport controls)."""

    @abstractmethod
    async def playlist_ids(self) -> list[str]:
        """Track ids of the current playlist, in play order."""
        pass

    @abstractmethod
    async def add(self, tracks: list[Track]) -> None:
        """Append tracks (id + path) to the playlist in one call."""
        pass

    @abstractmethod
    async def remove(self, index: int) -> None:
        """Remove the playlist entry at `index`."""
        pass

    @abstractmethod
    async def current(self) -> int:
        """Index of the track currently playing."""
        pass

    @abstractmethod
    async def play(self, index: int | None = None) -> None:
        """Play entry `index`, or resume when index is None."""
        pass

    @abstractmethod
    async def pause(self) -> None:
        pass

    @abstractmethod
    async def next(self) -> None:
        pass

    @abstractmethod
    async def previous(self) -> None:
        pass

    @abstractmethod
    async def volume_up(self) -> None:
        pass

    @abstractmethod
    async def volume_down(self) -> None:
        pass


__all__ = ["ICatalogClient", "IPlayerClient", "ListingEntry"]
