"""
Interfaces ports pour les services externes.

Interfaces abstraites (ports) definissant les contrats avec le catalogue
source (Jellyfin), le service de suivi (MyAnimeList) et son service
d'autorisation OAuth. Les adaptateurs fournissent les clients concrets.
"""

from abc import ABC, abstractmethod
from typing import Optional

from jellymal.core.entities.catalog import CatalogItem
from jellymal.core.entities.credential import Credential


class ICatalogSource(ABC):
    """
    Catalogue media source.

    Expose la recherche d'utilisateur et le listage des enfants directs
    d'un conteneur, avec les drapeaux de visionnage de l'utilisateur.
    """

    @abstractmethod
    async def get_user_id(self, username: str) -> Optional[str]:
        """
        Recherche l'ID d'un utilisateur par son nom.

        Retourne :
            ID de l'utilisateur, ou None s'il n'existe pas
        """
        ...

    @abstractmethod
    async def list_children(
        self,
        user_id: str,
        container_id: Optional[str] = None,
    ) -> list[CatalogItem]:
        """
        Liste les enfants directs d'un conteneur.

        Args :
            user_id : ID de l'utilisateur (drapeaux de visionnage)
            container_id : ID du conteneur, None pour la racine implicite

        Raises :
            TransportError : si le service est injoignable
            ParseError : si la reponse est mal formee
        """
        ...


class ITrackerClient(ABC):
    """Service de suivi de progression (destination)."""

    @abstractmethod
    async def get_latest_episode_number(self, series_id: int) -> int:
        """
        Retourne le nombre d'episodes vus enregistre pour une serie.

        Retourne 0 si la serie n'est pas dans la liste de l'utilisateur.
        """
        ...

    @abstractmethod
    async def set_latest_episode_number(
        self, series_id: int, episode_number: int
    ) -> None:
        """Enregistre le nombre d'episodes vus pour une serie."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Libere les ressources reseau."""
        ...


class IAuthorizationService(ABC):
    """Service d'autorisation OAuth du service de suivi."""

    @abstractmethod
    async def authorize(self) -> Credential:
        """
        Autorisation interactive complete (code d'autorisation).

        Raises :
            CredentialError : si l'echange echoue
        """
        ...

    @abstractmethod
    async def refresh(self, credential: Credential) -> Credential:
        """
        Echange le refresh token contre un nouveau jeton, sans interaction.

        Raises :
            CredentialError : si l'echange echoue
        """
        ...
