"""Tests for application wiring (lifespan)."""

import httpx
import pytest

from playdeck.config import CatalogSettings, PlayerSettings, Settings
from playdeck.domain.entities import Kind
from playdeck.domain.exceptions import ConfigurationError
from playdeck.infrastructure.lifecycle import lifespan


def make_settings(catalog_url: str = "http://catalog.test") -> Settings:
    return Settings(
        catalog=CatalogSettings(base_url=catalog_url),
        player=PlayerSettings(base_url="http://player.test"),
    )


def catalog_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/listByArtist":
        return httpx.Response(200, json=[{"name": "Jean Gold", "url": "a2"}])
    if request.url.path == "/listByOnlyAlbums":
        return httpx.Response(500)
    return httpx.Response(404)


class TestLifespan:
    """Test startup and shutdown."""

    async def test_loads_indexes_on_startup(self):
        async with lifespan(
            make_settings(), transport=httpx.MockTransport(catalog_handler)
        ) as deck:
            assert deck.index.loaded
            rows = deck.index.search(Kind.ARTIST, "jean")
            assert [row.id for row in rows] == ["a2"]
            # album listing failed with HTTP 500, startup still succeeded
            assert deck.index.albums.is_empty

    async def test_skip_index_loading(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=[])

        async with lifespan(
            make_settings(), load_index=False, transport=httpx.MockTransport(handler)
        ) as deck:
            assert not deck.index.loaded

        assert requests == []

    async def test_clients_closed_on_error(self):
        transport = httpx.MockTransport(catalog_handler)
        with pytest.raises(RuntimeError):
            async with lifespan(make_settings(), transport=transport) as deck:
                catalog = deck.catalog
                raise RuntimeError("boom")

        assert catalog._client is None

    async def test_player_closed_when_catalog_close_fails(self, mocker):
        transport = httpx.MockTransport(catalog_handler)
        with pytest.raises(RuntimeError):
            async with lifespan(
                make_settings(), load_index=False, transport=transport
            ) as deck:
                mocker.patch.object(
                    deck.catalog, "close", side_effect=RuntimeError("close failed")
                )
                player_close = mocker.patch.object(deck.player, "close")

        player_close.assert_awaited_once()

    async def test_missing_base_url(self):
        with pytest.raises(ConfigurationError):
            async with lifespan(make_settings(catalog_url="")):
                pass
