"""
Execution des requetes HTTP des adaptateurs.

Seul le rate limiting (429) est relance, avec backoff exponentiel et
jitter : c'est une contrainte du transport, pas une politique du coeur.
Toute autre erreur reseau ou HTTP est convertie en TransportError et
remonte immediatement.

Usage:
    response = await request_with_retry(client, "GET", "/Items", service="jellyfin")
"""

from typing import Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

from jellymal.core.errors import ParseError, TransportError


class RateLimitError(TransportError):
    """
    Le service a repondu 429 Too Many Requests.

    Attributes:
        retry_after: Secondes a attendre (header Retry-After), ou None
    """

    def __init__(self, service: str, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        super().__init__(
            service, f"rate limited, retry after: {retry_after}s", status_code=429
        )


def with_retry(max_attempts: int = 5, max_wait: int = 60):
    """
    Decorateur relancant une coroutine sur RateLimitError.

    Args:
        max_attempts: Nombre maximum de tentatives
        max_wait: Delai maximum entre deux tentatives en secondes
    """
    return retry(
        retry=retry_if_exception_type(RateLimitError),
        wait=wait_random_exponential(multiplier=1, min=1, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        reraise=True,
    )


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    service: str,
    max_attempts: int = 5,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP, relancee uniquement sur 429.

    Args:
        client: Client httpx async
        method: Methode HTTP
        url: URL (absolue ou relative a base_url)
        service: Nom du service pour les messages d'erreur
        max_attempts: Nombre maximum de tentatives
        **kwargs: Arguments passes a client.request()

    Returns:
        La reponse (code 2xx)

    Raises:
        RateLimitError: Si 429 apres epuisement des tentatives
        TransportError: Pour toute autre erreur reseau ou HTTP
    """

    @with_retry(max_attempts=max_attempts)
    async def _do_request() -> httpx.Response:
        try:
            response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(service, f"{method} {url} failed: {e}") from e

        if response.status_code == 429:
            raise RateLimitError(
                service, _parse_retry_after(response.headers.get("Retry-After"))
            )
        if response.is_error:
            raise TransportError(
                service,
                f"{method} {url} returned {response.status_code}",
                status_code=response.status_code,
            )
        return response

    return await _do_request()


def decode_json(response: httpx.Response, service: str):
    """
    Decode le corps JSON d'une reponse.

    Raises:
        ParseError: Si le corps n'est pas du JSON valide
    """
    try:
        return response.json()
    except ValueError as e:
        raise ParseError(f"{service}: invalid JSON payload") from e
