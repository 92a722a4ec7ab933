"""
Gestionnaire du cycle de vie du jeton OAuth MyAnimeList.

Cycle : ABSENT -> FRESH -> NEAR_EXPIRY -> EXPIRED, pilote par l'horloge.

- ABSENT (aucun jeton persiste) : autorisation interactive complete
- EXPIRED (now >= expiration) : autorisation interactive complete, le
  refresh token n'est plus considere valide
- NEAR_EXPIRY (temps restant <= seuil, 5 jours par defaut) :
  rafraichissement non interactif
- FRESH : le jeton charge est utilise tel quel

Dans tous les cas, le jeton obtenu est persiste avant d'etre retourne.

Le seuil est compare au temps restant avant expiration.
"""

from typing import Callable, Optional

from loguru import logger

from jellymal.core.entities.credential import Credential, CredentialState
from jellymal.core.ports.api_clients import IAuthorizationService
from jellymal.core.ports.credential_store import ICredentialStore
from jellymal.utils.constants import NEAR_EXPIRY_MS
from jellymal.utils.helpers import now_millis


def credential_state(
    credential: Optional[Credential],
    now_ms: int,
    near_expiry_ms: int = NEAR_EXPIRY_MS,
) -> CredentialState:
    """
    Determine l'etat d'un jeton a un instant donne.

    Args:
        credential: Jeton charge, ou None
        now_ms: Instant de reference en millisecondes epoch
        near_expiry_ms: Seuil de rafraichissement proactif

    Returns:
        Etat du jeton
    """
    if credential is None:
        return CredentialState.ABSENT
    if now_ms >= credential.expires_at:
        return CredentialState.EXPIRED
    if credential.remaining_ms(now_ms) <= near_expiry_ms:
        return CredentialState.NEAR_EXPIRY
    return CredentialState.FRESH


class CredentialLifecycleManager:
    """
    Fournit un jeton valide pour chaque appel au service de suivi.

    Proprietaire exclusif du jeton : les autres composants ne font que
    l'emprunter pour la duree d'une execution.

    Example:
        manager = CredentialLifecycleManager(store=store, authorizer=oauth)
        credential = await manager.obtain()
    """

    def __init__(
        self,
        store: ICredentialStore,
        authorizer: IAuthorizationService,
        clock: Callable[[], int] = now_millis,
        near_expiry_ms: int = NEAR_EXPIRY_MS,
    ) -> None:
        self._store = store
        self._authorizer = authorizer
        self._clock = clock
        self._near_expiry_ms = near_expiry_ms

    async def obtain(self) -> Credential:
        """
        Charge, renouvelle si besoin, persiste et retourne le jeton.

        Raises:
            CredentialError: Si l'autorisation ou le rafraichissement echoue
        """
        credential = self._store.load()
        state = credential_state(credential, self._clock(), self._near_expiry_ms)

        if state == CredentialState.ABSENT:
            logger.info("Aucun jeton enregistre, autorisation requise")
            credential = await self._authorizer.authorize()
        elif state == CredentialState.EXPIRED:
            logger.info("Jeton expire, nouvelle autorisation requise")
            credential = await self._authorizer.authorize()
        elif state == CredentialState.NEAR_EXPIRY:
            logger.info("Jeton proche de l'expiration, rafraichissement")
            credential = await self._authorizer.refresh(credential)
        else:
            logger.debug("Jeton valide reutilise")

        self._store.save(credential)
        return credential

    async def reauthorize(self) -> Credential:
        """Force une autorisation interactive complete, quel que soit l'etat."""
        credential = await self._authorizer.authorize()
        self._store.save(credential)
        return credential
