"""
Client OAuth2 MyAnimeList.

Implemente IAuthorizationService :
- authorize : code d'autorisation avec PKCE. MyAnimeList n'accepte que la
  methode "plain" (le challenge est le verifier lui-meme).
- refresh : echange du refresh token, sans interaction.

L'etape interactive (ouvrir l'URL, coller l'URL de redirection) est
deleguee au callable `prompt`, fourni par la CLI.
"""

import secrets
from typing import Any, Callable, Optional
from urllib.parse import parse_qs, urlencode, urlparse

import httpx
from loguru import logger

from jellymal.adapters.api.retry import request_with_retry
from jellymal.core.entities.credential import Credential
from jellymal.core.errors import CredentialError, TransportError
from jellymal.core.ports.api_clients import IAuthorizationService
from jellymal.utils.constants import MAL_AUTH_URL, MAL_TOKEN_URL
from jellymal.utils.helpers import now_millis

SERVICE = "myanimelist-oauth"


def credential_from_token_response(data: Any, now_ms: int) -> Credential:
    """
    Construit un Credential depuis la reponse du endpoint token.

    Args:
        data: Corps JSON decode
        now_ms: Instant de reception en millisecondes epoch

    Raises:
        CredentialError: Si access_token, refresh_token ou expires_in manque
    """
    if not isinstance(data, dict):
        raise CredentialError("token response is not an object")
    access_token = data.get("access_token")
    if not access_token:
        raise CredentialError("missing access token")
    refresh_token = data.get("refresh_token")
    if not refresh_token:
        raise CredentialError("missing refresh token")
    expires_in = data.get("expires_in")
    if isinstance(expires_in, bool) or not isinstance(expires_in, (int, float)):
        raise CredentialError("missing expiry")

    return Credential(
        access_token=access_token,
        refresh_token=refresh_token,
        expires_at=now_ms + int(expires_in * 1000),
    )


def parse_redirect_url(redirect_url: str) -> tuple[str, str]:
    """
    Extrait le code et l'etat de l'URL de redirection collee par l'utilisateur.

    Returns:
        Tuple (code, state)

    Raises:
        CredentialError: Si un des parametres manque
    """
    query = parse_qs(urlparse(redirect_url.strip()).query)
    values = []
    for param in ("code", "state"):
        found = query.get(param)
        if not found or not found[0].strip():
            raise CredentialError(f"unable to find {param} in provided redirect url")
        values.append(found[0].strip())
    return values[0], values[1]


class MALAuthorizationClient(IAuthorizationService):
    """
    Client d'autorisation OAuth2 MyAnimeList.

    Example:
        oauth = MALAuthorizationClient(
            client_id="...", client_secret="...",
            redirect_url="http://localhost/callback",
            prompt=ask_redirect_url,
        )
        credential = await oauth.authorize()
    """

    SCOPES = ("read", "write")

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_url: str,
        prompt: Callable[[str], str],
        auth_url: str = MAL_AUTH_URL,
        token_url: str = MAL_TOKEN_URL,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        """
        Initialise le client OAuth.

        Args:
            client_id: ID de l'application MyAnimeList
            client_secret: Secret de l'application
            redirect_url: URL de redirection declaree pour l'application
            prompt: Recoit l'URL d'autorisation, retourne l'URL de redirection
            auth_url: Endpoint d'autorisation
            token_url: Endpoint d'echange de jeton
            clock: Horloge en millisecondes epoch
        """
        self._client_id = client_id
        self._client_secret = client_secret
        self._redirect_url = redirect_url
        self._prompt = prompt
        self._auth_url = auth_url
        self._token_url = token_url
        self._clock = clock
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, cree s'il n'existe pas."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(30.0, connect=10.0))
        return self._client

    def build_authorization_url(self, state: str, code_verifier: str) -> str:
        """Construit l'URL d'autorisation a ouvrir dans un navigateur."""
        params = {
            "response_type": "code",
            "client_id": self._client_id,
            "redirect_uri": self._redirect_url,
            "scope": " ".join(self.SCOPES),
            "state": state,
            "code_challenge": code_verifier,
            "code_challenge_method": "plain",
        }
        return f"{self._auth_url}?{urlencode(params)}"

    async def authorize(self) -> Credential:
        """
        Autorisation interactive complete.

        Raises:
            CredentialError: Etat CSRF different, parametre manquant ou
                echange refuse
        """
        # 43 a 128 caracteres non reserves (RFC 7636)
        code_verifier = secrets.token_urlsafe(96)[:128]
        state = secrets.token_urlsafe(24)

        redirect_url = self._prompt(self.build_authorization_url(state, code_verifier))
        code, returned_state = parse_redirect_url(redirect_url)
        if returned_state != state:
            raise CredentialError("state mismatch in redirect url")

        logger.info("Echange du code d'autorisation")
        return await self._request_token({
            "grant_type": "authorization_code",
            "code": code,
            "code_verifier": code_verifier,
            "redirect_uri": self._redirect_url,
        })

    async def refresh(self, credential: Credential) -> Credential:
        """Echange le refresh token contre un nouveau jeton."""
        logger.info("Rafraichissement du jeton")
        return await self._request_token({
            "grant_type": "refresh_token",
            "refresh_token": credential.refresh_token,
        })

    async def _request_token(self, form: dict[str, str]) -> Credential:
        """Appelle le endpoint token et convertit la reponse."""
        client = await self._get_client()
        form = {
            **form,
            "client_id": self._client_id,
            "client_secret": self._client_secret,
        }
        try:
            response = await request_with_retry(
                client, "POST", self._token_url, service=SERVICE, data=form
            )
        except TransportError as e:
            raise CredentialError(f"token exchange failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise CredentialError("token response is not valid JSON") from e
        return credential_from_token_response(data, self._clock())

    async def close(self) -> None:
        """Ferme le client HTTP et libere les ressources."""
        if self._client:
            await self._client.aclose()
            self._client = None
