"""
Tests pour le client de l'API MyAnimeList.

Utilise respx pour simuler les requetes HTTP : lecture de la liste
(pagination comprise), mise en cache par instance et mise a jour.
"""

from urllib.parse import parse_qs

import httpx
import pytest
import respx

from jellymal.adapters.api.mal_client import MyAnimeListClient
from jellymal.core.errors import ParseError, TransportError
from tests.fixtures.mal_responses import (
    MAL_ANIMELIST_EMPTY_RESPONSE,
    MAL_ANIMELIST_PAGE_1,
    MAL_ANIMELIST_PAGE_2,
    MAL_ANIMELIST_RESPONSE,
    MAL_UPDATE_STATUS_RESPONSE,
)

API = "https://api.myanimelist.net/v2"
ANIMELIST_URL = f"{API}/users/@me/animelist"


@pytest.fixture
def client() -> MyAnimeListClient:
    return MyAnimeListClient(access_token="access-token")


class TestGetLatestEpisodeNumber:
    """Tests de lecture de la progression."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_reads_watched_count(self, client: MyAnimeListClient) -> None:
        route = respx.get(ANIMELIST_URL).mock(
            return_value=httpx.Response(200, json=MAL_ANIMELIST_RESPONSE)
        )

        try:
            watched = await client.get_latest_episode_number(20583)
        finally:
            await client.close()

        assert watched == 3
        request = route.calls[0].request
        assert request.headers["Authorization"] == "Bearer access-token"
        assert request.url.params["limit"] == "1000"
        assert request.url.params["fields"] == "list_status"

    @pytest.mark.asyncio
    @respx.mock
    async def test_series_not_in_list_returns_zero(self, client: MyAnimeListClient) -> None:
        respx.get(ANIMELIST_URL).mock(
            return_value=httpx.Response(200, json=MAL_ANIMELIST_EMPTY_RESPONSE)
        )

        try:
            assert await client.get_latest_episode_number(1) == 0
        finally:
            await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_list_is_fetched_once(self, client: MyAnimeListClient) -> None:
        route = respx.get(ANIMELIST_URL).mock(
            return_value=httpx.Response(200, json=MAL_ANIMELIST_RESPONSE)
        )

        try:
            await client.get_latest_episode_number(20583)
            await client.get_latest_episode_number(4181)
        finally:
            await client.close()

        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_follows_pagination(self, client: MyAnimeListClient) -> None:
        def page_for(request: httpx.Request) -> httpx.Response:
            if request.url.params.get("offset") == "1000":
                return httpx.Response(200, json=MAL_ANIMELIST_PAGE_2)
            return httpx.Response(200, json=MAL_ANIMELIST_PAGE_1)

        route = respx.get(ANIMELIST_URL).mock(side_effect=page_for)

        try:
            watched = await client.get_watched_episodes()
        finally:
            await client.close()

        assert watched == {20583: 3, 4181: 24}
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_malformed_entry_raises_parse_error(self, client: MyAnimeListClient) -> None:
        respx.get(ANIMELIST_URL).mock(
            return_value=httpx.Response(200, json={"data": [{"node": {"id": 1}}]})
        )

        try:
            with pytest.raises(ParseError):
                await client.get_latest_episode_number(1)
        finally:
            await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_expired_token_raises_transport_error(self, client: MyAnimeListClient) -> None:
        respx.get(ANIMELIST_URL).mock(return_value=httpx.Response(401))

        try:
            with pytest.raises(TransportError) as exc_info:
                await client.get_latest_episode_number(1)
        finally:
            await client.close()

        assert exc_info.value.status_code == 401


class TestSetLatestEpisodeNumber:
    """Tests de mise a jour de la progression."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_patches_list_status(self, client: MyAnimeListClient) -> None:
        route = respx.patch(f"{API}/anime/20583/my_list_status").mock(
            return_value=httpx.Response(200, json=MAL_UPDATE_STATUS_RESPONSE)
        )

        try:
            await client.set_latest_episode_number(20583, 9)
        finally:
            await client.close()

        request = route.calls[0].request
        form = parse_qs(request.content.decode())
        assert form == {"num_watched_episodes": ["9"], "status": ["watching"]}
        assert request.headers["Authorization"] == "Bearer access-token"

    @pytest.mark.asyncio
    @respx.mock
    async def test_update_refreshes_cached_list(self, client: MyAnimeListClient) -> None:
        respx.get(ANIMELIST_URL).mock(
            return_value=httpx.Response(200, json=MAL_ANIMELIST_RESPONSE)
        )
        respx.patch(f"{API}/anime/20583/my_list_status").mock(
            return_value=httpx.Response(200, json=MAL_UPDATE_STATUS_RESPONSE)
        )

        try:
            await client.get_latest_episode_number(20583)
            await client.set_latest_episode_number(20583, 9)
            assert await client.get_latest_episode_number(20583) == 9
        finally:
            await client.close()
