"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

Ports client API : Contrats pour les services externes
- ICatalogSource : Catalogue Jellyfin (utilisateurs, enfants d'un conteneur)
- ITrackerClient : Liste MyAnimeList de l'utilisateur
- IAuthorizationService : Autorisation OAuth et rafraichissement

Ports de persistance :
- ICredentialStore : Jeton OAuth persiste entre les executions
"""

from jellymal.core.ports.api_clients import (
    IAuthorizationService,
    ICatalogSource,
    ITrackerClient,
)
from jellymal.core.ports.credential_store import ICredentialStore

__all__ = [
    # Clients API
    "ICatalogSource",
    "ITrackerClient",
    "IAuthorizationService",
    # Persistance
    "ICredentialStore",
]
