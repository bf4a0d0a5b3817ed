"""HTTP client for the playback server (playlist order and transport controls)."""

import httpx

from playdeck.config.settings import PlayerSettings
from playdeck.domain.entities import Track
from playdeck.domain.exceptions import ValidationError
from playdeck.domain.ports import IPlayerClient
from playdeck.infrastructure.integrations.base_client import BaseHttpClient
from playdeck.infrastructure.integrations.payloads import (
    CURRENT_ADAPTER,
    STATE_ADAPTER,
)


def _check_index(index: int) -> int:
    if index < 0:
        raise ValidationError(f"Playlist index must be >= 0, got {index}")
    return index


class PlayerClient(BaseHttpClient, IPlayerClient):
    """HTTP client for the playback server.

    Transport controls are fire-and-forget on the server side: we only check the
    status code and never read their body.
    """

    SERVICE_NAME = "player"

    @classmethod
    def from_settings(
        cls,
        settings: PlayerSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "PlayerClient":
        return cls(settings.base_url, timeout=settings.timeout, transport=transport)

    async def playlist_ids(self) -> list[str]:
        response = await self._request("GET", "/playlist/state")
        return self._decode(response, STATE_ADAPTER).ids

    async def add(self, tracks: list[Track]) -> None:
        """POST every track as {id, path} in a single call."""
        await self._request(
            "POST",
            "/playlist/add",
            json=[track.to_player_item() for track in tracks],
        )

    async def remove(self, index: int) -> None:
        await self._request(
            "GET", "/playlist/remove", params={"index": _check_index(index)}
        )

    async def current(self) -> int:
        response = await self._request("GET", "/playlist/current")
        return self._decode(response, CURRENT_ADAPTER).current

    async def play(self, index: int | None = None) -> None:
        if index is None:
            await self._request("GET", "/music/play")
        else:
            await self._request(
                "GET", "/music/play", params={"index": _check_index(index)}
            )

    async def pause(self) -> None:
        await self._request("GET", "/music/pause")

    async def next(self) -> None:
        await self._request("GET", "/music/next")

    async def previous(self) -> None:
        await self._request("GET", "/music/previous")

    async def volume_up(self) -> None:
        await self._request("GET", "/control/volumeUp")

    async def volume_down(self) -> None:
        await self._request("GET", "/control/volumeDown")


__all__ = ["PlayerClient"]
