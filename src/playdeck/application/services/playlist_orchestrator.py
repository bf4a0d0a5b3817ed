"""Playlist orchestration across the catalog server and the player server.

Hey future me - neither server can answer "what's in my playlist?" on its own:
- the PLAYER owns the order (a list of track ids) but knows nothing about titles
- the CATALOG owns metadata but its batch endpoint (/musicsInfo) returns rows in
  whatever order it likes

So get_playlist() always re-reads the order from the player and zips it with a
fresh metadata batch. Nothing is cached here - every read costs two round trips,
and the displayed order can never drift from what the player will actually play.

Bulk add (add_all) is the other half: every track needs its playable path from the
catalog before the player accepts it. Paths are looked up concurrently (one call
per track), we wait for ALL of them, then submit the whole batch in input order in
ONE player call.
"""

import asyncio
import logging
from dataclasses import dataclass, field, replace

from playdeck.domain.entities import Kind, Track
from playdeck.domain.exceptions import ExternalServiceError, ValidationError
from playdeck.domain.ports import ICatalogClient, IPlayerClient
from playdeck.infrastructure.observability import log_operation

logger = logging.getLogger(__name__)


@dataclass
class BulkAddReport:
    """Outcome of a bulk add.

    `unresolved_ids` lists tracks whose path lookup failed. They were still
    submitted, with an empty path, so the player may not be able to play them.
    """

    submitted: int = 0
    unresolved_ids: list[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        """True if every submitted track had its path resolved."""
        return not self.unresolved_ids


class PlaylistOrchestrator:
    """Playlist reads, adds and transport controls."""

    def __init__(self, catalog: ICatalogClient, player: IPlayerClient) -> None:
        """
        Args:
            catalog: Catalog server client (metadata, track lists, paths)
            player: Player server client (playlist order, add, controls)
        """
        self._catalog = catalog
        self._player = player

    # =========================================================================
    # PLAYLIST READ
    # =========================================================================

    async def get_playlist(self) -> list[Track]:
        """Current playlist, in the player's order.

        An id missing from the catalog's answer becomes a bare Track(id=...) so
        list positions keep matching the player's indexes (play/remove use them).

        Raises:
            ExternalServiceError: If either server call fails
        """
        async with log_operation(logger, "playlist_read"):
            ids = await self._player.playlist_ids()
            if not ids:
                return []

            metadata = await self._catalog.tracks_info(ids)
            by_id = {track.id: track for track in metadata}

            missing = [track_id for track_id in ids if track_id not in by_id]
            if missing:
                logger.warning(
                    "Catalog returned no metadata for %d playlist id(s): %s",
                    len(missing),
                    ", ".join(missing),
                )

            # Output order comes from `ids`, never from `metadata`
            return [
                replace(by_id[track_id]) if track_id in by_id else Track(id=track_id)
                for track_id in ids
            ]

    # =========================================================================
    # ADD
    # =========================================================================

    async def add(self, track: Track) -> None:
        """Resolve one track's path, then add it.

        Raises:
            ExternalServiceError: If the path lookup fails (nothing is added) or
                the player rejects the add
        """
        path = await self._catalog.path_of(track.id)
        await self._player.add([replace(track, path=path)])
        logger.info("Added track %s to playlist", track.id)

    async def add_all(self, tracks: list[Track]) -> BulkAddReport:
        """Resolve paths concurrently, wait for all, submit in one call.

        Tracks that already carry a path are not looked up again. A failed
        lookup does NOT stop the batch: that track goes out with an empty path
        and its id is reported in BulkAddReport.unresolved_ids.

        An empty `tracks` list returns an empty report without calling the
        player at all (no POST of an empty array).

        Raises:
            ExternalServiceError: If the final player submission fails
        """
        if not tracks:
            return BulkAddReport()

        async with log_operation(logger, "bulk_add", track_count=len(tracks)):
            resolved, unresolved = await self._resolve_paths(tracks)
            await self._player.add(resolved)

        if unresolved:
            logger.warning(
                "Submitted %d track(s) without a path (lookup failed): %s",
                len(unresolved),
                ", ".join(unresolved),
            )
        return BulkAddReport(submitted=len(resolved), unresolved_ids=unresolved)

    async def _resolve_paths(self, tracks: list[Track]) -> tuple[list[Track], list[str]]:
        """Fan out one path lookup per track and join on all of them.

        Returns:
            (tracks with paths, in input order; ids whose lookup failed)
        """
        pending = [i for i, track in enumerate(tracks) if not track.path]
        results = await asyncio.gather(
            *(self._catalog.path_of(tracks[i].id) for i in pending),
            return_exceptions=True,
        )

        resolved = list(tracks)
        unresolved: list[str] = []
        for i, result in zip(pending, results, strict=True):
            if isinstance(result, ExternalServiceError):
                logger.debug("Path lookup failed for %s: %s", tracks[i].id, result.message)
                unresolved.append(tracks[i].id)
                resolved[i] = replace(tracks[i], path="")
            elif isinstance(result, BaseException):
                # Not a collaborator failure - a bug. Surface it after the join.
                raise result
            else:
                resolved[i] = replace(tracks[i], path=result)
        return resolved, unresolved

    async def add_all_by_artist(self, artist: Track | str) -> BulkAddReport:
        """Add every track of an artist (row from an ":artist" search, or its id)."""
        tracks = await self._catalog.tracks_by_artist(_entity_id(artist))
        return await self.add_all(tracks)

    async def add_all_by_album(self, album: Track | str) -> BulkAddReport:
        """Add every track of an album (row from an ":album" search, or its id)."""
        tracks = await self._catalog.tracks_by_album(_entity_id(album))
        return await self.add_all(tracks)

    async def add_all_for(self, entity: Track | str, kind: Kind) -> BulkAddReport:
        """Bulk add dispatched on the Kind of the result row."""
        if kind is Kind.ARTIST:
            return await self.add_all_by_artist(entity)
        if kind is Kind.ALBUM:
            return await self.add_all_by_album(entity)
        raise ValidationError(f"'add all' is not available for {kind.value} rows")

    # =========================================================================
    # BROWSE (degrade to empty, like search)
    # =========================================================================

    async def show_artist(self, artist: Track | str) -> list[Track]:
        """Tracks of an artist, or [] if the catalog can't be reached."""
        try:
            return await self._catalog.tracks_by_artist(_entity_id(artist))
        except ExternalServiceError as e:
            logger.warning("Could not list artist tracks: %s", e.message)
            return []

    async def show_album(self, album: Track | str) -> list[Track]:
        """Tracks of an album, or [] if the catalog can't be reached."""
        try:
            return await self._catalog.tracks_by_album(_entity_id(album))
        except ExternalServiceError as e:
            logger.warning("Could not list album tracks: %s", e.message)
            return []

    async def show_for(self, entity: Track | str, kind: Kind) -> list[Track]:
        if kind is Kind.ARTIST:
            return await self.show_artist(entity)
        if kind is Kind.ALBUM:
            return await self.show_album(entity)
        raise ValidationError(f"'show' is not available for {kind.value} rows")

    # =========================================================================
    # TRANSPORT CONTROLS (straight passthrough, errors propagate)
    # =========================================================================

    async def play(self, index: int) -> None:
        await self._player.play(index)

    async def resume(self) -> None:
        await self._player.play()

    async def pause(self) -> None:
        await self._player.pause()

    async def next(self) -> None:
        await self._player.next()

    async def previous(self) -> None:
        await self._player.previous()

    async def volume_up(self) -> None:
        await self._player.volume_up()

    async def volume_down(self) -> None:
        await self._player.volume_down()

    # Hey future me, /music/play?index= counts from 0 but /playlist/remove?index= counts
    # from 1 on the player side. Callers always pass the 0-based position shown in
    # get_playlist(); the +1 happens here and nowhere else.
    async def remove(self, position: int) -> None:
        if position < 0:
            raise ValidationError(f"Playlist position must be >= 0, got {position}")
        await self._player.remove(position + 1)

    async def current(self) -> int:
        return await self._player.current()


def _entity_id(entity: Track | str) -> str:
    return entity.id if isinstance(entity, Track) else entity
