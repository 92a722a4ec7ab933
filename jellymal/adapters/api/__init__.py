"""
Clients API externes.

- JellyfinClient : catalogue source (ICatalogSource)
- MyAnimeListClient : liste de l'utilisateur (ITrackerClient)
- MALAuthorizationClient : OAuth2 MyAnimeList (IAuthorizationService)

Infrastructure partagee:
- request_with_retry : relance sur 429, conversion en TransportError
- RateLimitError : 429 apres epuisement des tentatives
"""

from jellymal.adapters.api.jellyfin_client import JellyfinClient
from jellymal.adapters.api.mal_client import MyAnimeListClient
from jellymal.adapters.api.oauth_client import MALAuthorizationClient
from jellymal.adapters.api.retry import RateLimitError, request_with_retry, with_retry

__all__ = [
    "JellyfinClient",
    "MyAnimeListClient",
    "MALAuthorizationClient",
    "RateLimitError",
    "request_with_retry",
    "with_retry",
]
