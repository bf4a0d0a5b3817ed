"""Domain entities."""

from dataclasses import dataclass, field
from enum import Enum


# Hey future me, Kind tags a whole result set, not a single row! It tells the caller
# which follow-up action is valid: SONG rows can be added to the playlist, ARTIST and
# ALBUM rows can be browsed ("show") or bulk-added ("add all"). The values are what the
# CLI prints, keep them lowercase.
class Kind(str, Enum):
    """Entity type of the rows in a result set."""

    SONG = "song"
    ARTIST = "artist"
    ALBUM = "album"


@dataclass
class Track:
    """A playable track as seen by the catalog server.

    `path` stays empty until a path lookup fills it; the player only needs it
    at submission time. Artist and album rows coming out of the token index
    reuse this shape with `artist` and `album` both set to the display name.
    """

    id: str
    title: str = ""
    artist: str = ""
    album: str = ""
    path: str = ""

    @classmethod
    def catalog_entry(cls, entity_id: str, name: str) -> "Track":
        """Build an artist/album row from an index hit."""
        return cls(id=entity_id, artist=name, album=name)

    @property
    def display_name(self) -> str:
        """Title for songs, name for artist/album rows."""
        return self.title or self.artist

    def to_player_item(self) -> dict[str, str]:
        """Shape expected by the player's /playlist/add endpoint."""
        return {"id": self.id, "path": self.path}


@dataclass
class SearchResult:
    """Rows returned by a search, tagged with their Kind."""

    kind: Kind
    items: list[Track] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


__all__ = ["Kind", "SearchResult", "Track"]
