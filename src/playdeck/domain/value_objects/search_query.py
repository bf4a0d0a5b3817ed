"""Classification of raw search box input.

The command grammar is deliberately tiny. Checked in this order:
    ":artist <text>"  -> ArtistQuery(text)
    ":album <text>"   -> AlbumQuery(text)
    anything else     -> SongQuery(raw input, untouched)

":foobar", ":artist" without the trailing space, or ":ALBUM x" are NOT commands,
they go to the catalog's free-text search as-is (colon included).
"""

from dataclasses import dataclass

from playdeck.domain.entities import Kind

ARTIST_PREFIX = ":artist "
ALBUM_PREFIX = ":album "


@dataclass(frozen=True)
class SongQuery:
    text: str
    kind: Kind = Kind.SONG


@dataclass(frozen=True)
class ArtistQuery:
    text: str
    kind: Kind = Kind.ARTIST


@dataclass(frozen=True)
class AlbumQuery:
    text: str
    kind: Kind = Kind.ALBUM


SearchQuery = SongQuery | ArtistQuery | AlbumQuery


def classify_query(raw: str) -> SearchQuery:
    """Turn raw input into one of the three query variants."""
    if raw.startswith(ARTIST_PREFIX):
        return ArtistQuery(raw[len(ARTIST_PREFIX) :])
    if raw.startswith(ALBUM_PREFIX):
        return AlbumQuery(raw[len(ALBUM_PREFIX) :])
    return SongQuery(raw)
