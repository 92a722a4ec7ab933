"""
Jeton OAuth MyAnimeList et ses etats de cycle de vie.
"""

from dataclasses import dataclass
from enum import Enum


class CredentialState(str, Enum):
    """Etat d'un jeton, determine par comparaison avec l'horloge."""

    ABSENT = "absent"
    FRESH = "fresh"
    NEAR_EXPIRY = "near_expiry"
    EXPIRED = "expired"


@dataclass(frozen=True)
class Credential:
    """
    Jeton d'acces au service de suivi.

    Attributes:
        access_token: Jeton bearer
        refresh_token: Jeton de rafraichissement
        expires_at: Date d'expiration en millisecondes epoch
    """

    access_token: str
    refresh_token: str
    expires_at: int

    def remaining_ms(self, now_ms: int) -> int:
        """Temps restant avant expiration (negatif si expire)."""
        return self.expires_at - now_ms
