"""Wire schemas for catalog and player JSON bodies.

Hey future me - both servers are loose about id types: the catalog sends string ids,
the player sends integers for the SAME tracks. Every id is coerced to str here so the
rest of the code only ever compares strings.

Both servers are Go programs, and Go encodes an empty slice as JSON `null`. Every
list, top-level body or field, reads `null` as `[]`.
"""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter

from playdeck.domain.entities import Track

StrId = Annotated[str, BeforeValidator(lambda value: str(value))]


def _null_as_empty(value: Any) -> Any:
    return [] if value is None else value


NullAsEmpty = BeforeValidator(_null_as_empty)


class ListingEntryPayload(BaseModel):
    """One row of /listByArtist or /listByOnlyAlbums (no argument)."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="", description="Display name")
    url: StrId = Field(..., description="Identifier, opaque query string")


class TrackPayload(BaseModel):
    """Track-shaped object from /search and /musicsInfo."""

    model_config = ConfigDict(extra="ignore")

    id: StrId
    title: str = ""
    artist: str = ""
    album: str = ""
    path: str = ""

    def to_track(self) -> Track:
        return Track(
            id=self.id,
            title=self.title,
            artist=self.artist,
            album=self.album,
            path=self.path,
        )


class TrackInfosPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    album: str = ""
    artist: str = ""


class CatalogTrackPayload(BaseModel):
    """Row of /listByArtist?<id> or /listByOnlyAlbums?<id>; `name` is the title."""

    model_config = ConfigDict(extra="ignore")

    id: StrId
    name: str = ""
    infos: TrackInfosPayload = Field(default_factory=TrackInfosPayload)

    def to_track(self) -> Track:
        return Track(
            id=self.id,
            title=self.name,
            artist=self.infos.artist,
            album=self.infos.album,
        )


class PlaylistStatePayload(BaseModel):
    """Body of /playlist/state."""

    model_config = ConfigDict(extra="ignore")

    ids: Annotated[list[StrId], NullAsEmpty] = Field(default_factory=list)


class CurrentPayload(BaseModel):
    """Body of /playlist/current."""

    model_config = ConfigDict(extra="ignore")

    current: int = 0


LISTING_ADAPTER = TypeAdapter(Annotated[list[ListingEntryPayload], NullAsEmpty])
TRACKS_ADAPTER = TypeAdapter(Annotated[list[TrackPayload], NullAsEmpty])
CATALOG_TRACKS_ADAPTER = TypeAdapter(Annotated[list[CatalogTrackPayload], NullAsEmpty])
STATE_ADAPTER = TypeAdapter(PlaylistStatePayload)
CURRENT_ADAPTER = TypeAdapter(CurrentPayload)
