"""
Client de l'API Jellyfin.

Implemente ICatalogSource : recherche d'utilisateur et listage des enfants
directs d'un conteneur avec les donnees utilisateur (drapeau Played, Key).

Reference API: https://api.jellyfin.org
"""

from typing import Any, Optional

import httpx

from jellymal.adapters.api.retry import decode_json, request_with_retry
from jellymal.core.entities.catalog import CatalogItem, ItemKind
from jellymal.core.errors import ParseError
from jellymal.core.ports.api_clients import ICatalogSource

SERVICE = "jellyfin"

# Types Jellyfin (BaseItemKind) traites specifiquement
_KIND_BY_TYPE = {
    "Series": ItemKind.SERIES,
    "Season": ItemKind.SEASON,
    "Episode": ItemKind.EPISODE,
}

# Autres types Jellyfin connus, sans interet pour la synchronisation
_OTHER_TYPES = frozenset({
    "AggregateFolder", "Audio", "AudioBook", "BasePluginFolder", "Book",
    "BoxSet", "Channel", "ChannelFolderItem", "CollectionFolder", "Folder",
    "Genre", "LiveTvChannel", "LiveTvProgram", "ManualPlaylistsFolder",
    "Movie", "MusicAlbum", "MusicArtist", "MusicGenre", "MusicVideo",
    "Person", "Photo", "PhotoAlbum", "Playlist", "PlaylistsFolder",
    "Program", "Recording", "Studio", "Trailer", "TvChannel", "TvProgram",
    "UserRootFolder", "UserView", "Video", "Year",
})


def parse_item_kind(raw_type: Any) -> ItemKind:
    """
    Convertit le champ Type d'un element Jellyfin.

    Raises:
        ParseError: Si le type est inconnu
    """
    if raw_type in _KIND_BY_TYPE:
        return _KIND_BY_TYPE[raw_type]
    if raw_type in _OTHER_TYPES:
        return ItemKind.OTHER
    raise ParseError(f"{SERVICE}: unknown item type {raw_type!r}")


def parse_item(data: Any) -> CatalogItem:
    """
    Construit un CatalogItem depuis un element de la reponse /Items.

    Raises:
        ParseError: Si un champ obligatoire manque ou est du mauvais type
    """
    if not isinstance(data, dict):
        raise ParseError(f"{SERVICE}: item is not an object")
    try:
        item_id = data["Id"]
        is_folder = data["IsFolder"]
        user_data = data["UserData"]
        key = user_data["Key"]
        played = user_data.get("Played", False)
        kind = parse_item_kind(data["Type"])
    except (KeyError, TypeError, AttributeError) as e:
        raise ParseError(f"{SERVICE}: unable to parse item ({e})") from e

    if not isinstance(item_id, str) or not isinstance(is_folder, bool):
        raise ParseError(f"{SERVICE}: invalid Id or IsFolder for item {item_id!r}")

    return CatalogItem(
        id=item_id,
        kind=kind,
        is_container=is_folder,
        external_key=str(key),
        watched=bool(played),
        name=data.get("Name") or "",
        episode_index=_optional_int(data, "IndexNumber"),
        season_index=_optional_int(data, "ParentIndexNumber"),
        parent_series_id=data.get("SeriesId"),
        parent_series_name=data.get("SeriesName"),
    )


def _optional_int(data: dict, field: str) -> Optional[int]:
    value = data.get(field)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ParseError(f"{SERVICE}: {field} is not an integer ({value!r})")
    return value


class JellyfinClient(ICatalogSource):
    """
    Client Jellyfin authentifie par jeton d'API.

    Example:
        client = JellyfinClient(host="http://jellyfin:8096", token="...")
        user_id = await client.get_user_id("alyosha")
        items = await client.list_children(user_id)
        await client.close()
    """

    def __init__(self, host: str, token: str) -> None:
        """
        Initialise le client Jellyfin.

        Args:
            host: URL de base du serveur (ex: "http://localhost:8096")
            token: Cle d'API Jellyfin (header X-Emby-Token)
        """
        self._host = host.rstrip("/")
        self._token = token
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, cree s'il n'existe pas."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._host,
                headers={"X-Emby-Token": self._token},
                timeout=httpx.Timeout(30.0, connect=10.0),
            )
        return self._client

    async def get_user_id(self, username: str) -> Optional[str]:
        """
        Recherche l'ID d'un utilisateur par son nom exact.

        Returns:
            ID de l'utilisateur, ou None s'il n'existe pas
        """
        client = await self._get_client()
        response = await request_with_retry(client, "GET", "/Users", service=SERVICE)
        users = decode_json(response, SERVICE)
        if not isinstance(users, list):
            raise ParseError(f"{SERVICE}: /Users did not return a list")

        for user in users:
            if not isinstance(user, dict):
                raise ParseError(f"{SERVICE}: user is not an object")
            if user.get("Name") == username:
                return user.get("Id")
        return None

    async def list_children(
        self,
        user_id: str,
        container_id: Optional[str] = None,
    ) -> list[CatalogItem]:
        """
        Liste les enfants directs d'un conteneur avec les donnees utilisateur.

        Args:
            user_id: ID de l'utilisateur
            container_id: ID du dossier parent, None pour la racine

        Returns:
            Elements enfants
        """
        params = {"userId": user_id, "enableUserData": "true"}
        if container_id is not None:
            params["parentId"] = container_id

        client = await self._get_client()
        response = await request_with_retry(
            client, "GET", "/Items", service=SERVICE, params=params
        )
        data = decode_json(response, SERVICE)
        if not isinstance(data, dict) or not isinstance(data.get("Items"), list):
            raise ParseError(f"{SERVICE}: unable to parse items")

        return [parse_item(item) for item in data["Items"]]

    async def close(self) -> None:
        """Ferme le client HTTP et libere les ressources."""
        if self._client:
            await self._client.aclose()
            self._client = None
