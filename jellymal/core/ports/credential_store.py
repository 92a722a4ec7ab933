"""
Port de persistance du jeton OAuth.
"""

from abc import ABC, abstractmethod
from typing import Optional

from jellymal.core.entities.credential import Credential


class ICredentialStore(ABC):
    """
    Stockage du jeton entre deux executions.

    Source de verite unique : un seul enregistrement. L'absence de jeton
    est un etat initial valide, pas une erreur.
    """

    @abstractmethod
    def load(self) -> Optional[Credential]:
        """Charge le jeton persiste, ou None s'il n'existe pas."""
        ...

    @abstractmethod
    def save(self, credential: Credential) -> None:
        """Remplace le jeton persiste."""
        ...
