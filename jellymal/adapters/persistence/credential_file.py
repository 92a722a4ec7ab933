"""
Persistance du jeton OAuth dans un fichier JSON.

Format (compatible avec les fichiers token.json existants) :
    {
      "refresh_token": "...",
      "access_token": "...",
      "expiration_date": 1700000000000
    }
"""

import json
from pathlib import Path
from typing import Optional

from loguru import logger

from jellymal.core.entities.credential import Credential
from jellymal.core.errors import ParseError
from jellymal.core.ports.credential_store import ICredentialStore


class JsonCredentialStore(ICredentialStore):
    """
    Stockage du jeton dans un fichier JSON unique.

    Un seul processus est suppose lire et reecrire le fichier par execution.
    """

    def __init__(self, path: Path) -> None:
        """
        Args:
            path: Chemin du fichier (cree au premier enregistrement)
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[Credential]:
        """
        Charge le jeton, None si le fichier n'existe pas.

        Raises:
            ParseError: Si le fichier existe mais est illisible
        """
        if not self._path.exists():
            return None

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            credential = Credential(
                access_token=data["access_token"],
                refresh_token=data["refresh_token"],
                expires_at=int(data["expiration_date"]),
            )
        except (ValueError, KeyError, TypeError) as e:
            raise ParseError(f"invalid credential file {self._path}: {e}") from e

        logger.debug("Jeton charge", path=str(self._path))
        return credential

    def save(self, credential: Credential) -> None:
        """Ecrit le jeton (remplace le contenu existant)."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "refresh_token": credential.refresh_token,
            "access_token": credential.access_token,
            "expiration_date": credential.expires_at,
        }
        self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        logger.debug("Jeton enregistre", path=str(self._path))
