"""
Client de l'API MyAnimeList v2.

Implemente ITrackerClient : lecture du nombre d'episodes vus par serie
dans la liste de l'utilisateur, et mise a jour de ce nombre.

Reference API: https://myanimelist.net/apiconfig/references/api/v2
"""

from typing import Any, Optional

import httpx
from loguru import logger

from jellymal.adapters.api.retry import decode_json, request_with_retry
from jellymal.core.errors import ParseError
from jellymal.core.ports.api_clients import ITrackerClient
from jellymal.utils.constants import MAL_API_URL

SERVICE = "myanimelist"


class MyAnimeListClient(ITrackerClient):
    """
    Client MyAnimeList authentifie par jeton bearer.

    La liste de l'utilisateur est lue une seule fois par instance (une
    instance par execution), en suivant la pagination.

    Example:
        client = MyAnimeListClient(access_token="...")
        watched = await client.get_latest_episode_number(4181)
        await client.set_latest_episode_number(4181, watched + 1)
        await client.close()
    """

    PAGE_SIZE = 1000

    def __init__(self, access_token: str, base_url: str = MAL_API_URL) -> None:
        """
        Initialise le client MyAnimeList.

        Args:
            access_token: Jeton OAuth obtenu par le gestionnaire de jetons
            base_url: URL de base de l'API
        """
        self._access_token = access_token
        self._base_url = base_url.rstrip("/")
        self._client: Optional[httpx.AsyncClient] = None
        self._watched: Optional[dict[int, int]] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, cree s'il n'existe pas."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={"Authorization": f"Bearer {self._access_token}"},
                timeout=httpx.Timeout(30.0, connect=10.0),
            )
        return self._client

    async def get_watched_episodes(self) -> dict[int, int]:
        """
        Retourne le nombre d'episodes vus de chaque serie de la liste.

        Returns:
            Dictionnaire ID MyAnimeList -> episodes vus
        """
        if self._watched is not None:
            return self._watched

        client = await self._get_client()
        watched: dict[int, int] = {}
        url: Optional[str] = "/users/@me/animelist"
        params: Optional[dict] = {"limit": str(self.PAGE_SIZE), "fields": "list_status"}

        while url:
            response = await request_with_retry(
                client, "GET", url, service=SERVICE, params=params
            )
            page = decode_json(response, SERVICE)
            watched.update(_parse_animelist_page(page))
            # L'URL "next" contient deja les parametres de requete
            url = _next_page(page)
            params = None

        logger.debug("Liste MyAnimeList chargee", series=len(watched))
        self._watched = watched
        return watched

    async def get_latest_episode_number(self, series_id: int) -> int:
        """Nombre d'episodes vus, 0 si la serie n'est pas dans la liste."""
        watched = await self.get_watched_episodes()
        return watched.get(series_id, 0)

    async def set_latest_episode_number(
        self, series_id: int, episode_number: int
    ) -> None:
        """
        Enregistre la progression d'une serie avec le statut "watching".

        Args:
            series_id: ID MyAnimeList
            episode_number: Nombre d'episodes vus
        """
        client = await self._get_client()
        await request_with_retry(
            client,
            "PATCH",
            f"/anime/{series_id}/my_list_status",
            service=SERVICE,
            data={
                "num_watched_episodes": str(episode_number),
                "status": "watching",
            },
        )
        if self._watched is not None:
            self._watched[series_id] = episode_number

    async def close(self) -> None:
        """Ferme le client HTTP et libere les ressources."""
        if self._client:
            await self._client.aclose()
            self._client = None


def _parse_animelist_page(page: Any) -> dict[int, int]:
    """Extrait ID -> episodes vus d'une page de /users/@me/animelist."""
    if not isinstance(page, dict) or not isinstance(page.get("data"), list):
        raise ParseError(f"{SERVICE}: unable to parse anime list")

    watched = {}
    for datum in page["data"]:
        try:
            series_id = datum["node"]["id"]
            count = datum["list_status"]["num_episodes_watched"]
        except (KeyError, TypeError) as e:
            raise ParseError(f"{SERVICE}: unable to parse anime list entry ({e})") from e
        if not isinstance(series_id, int) or not isinstance(count, int):
            raise ParseError(f"{SERVICE}: non-integer id or episode count")
        watched[series_id] = count
    return watched


def _next_page(page: dict) -> Optional[str]:
    paging = page.get("paging")
    if isinstance(paging, dict):
        return paging.get("next")
    return None
