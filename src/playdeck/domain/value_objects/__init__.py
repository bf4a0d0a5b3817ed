"""Domain value objects and the pure algorithms built on them."""

from playdeck.domain.value_objects.name_dictionary import NameDictionary
from playdeck.domain.value_objects.search_query import (
    AlbumQuery,
    ArtistQuery,
    SearchQuery,
    SongQuery,
    classify_query,
)
from playdeck.domain.value_objects.set_intersection import intersect_sorted
from playdeck.domain.value_objects.token_index import (
    Token,
    TokenIndex,
    normalize_name,
)

__all__ = [
    "AlbumQuery",
    "ArtistQuery",
    "NameDictionary",
    "SearchQuery",
    "SongQuery",
    "Token",
    "TokenIndex",
    "classify_query",
    "intersect_sorted",
    "normalize_name",
]
