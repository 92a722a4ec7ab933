"""
Taxonomie des erreurs de la synchronisation.

Chaque composant du coeur remonte ses erreurs a l'appelant sans les
journaliser. Seul le pilote de reconciliation decide qu'une MappingError
est tolerable (la serie est ignoree, les autres continuent). Toutes les
autres erreurs interrompent l'execution.

Hierarchie :
- JellymalError
  - TransportError : echec reseau/HTTP vers un service externe
  - ParseError : reponse ou dataset mal forme
  - ValidationError
    - EpisodeValidationError : episode sans champ obligatoire
    - UnmappedSeriesError : episode dont la serie n'a pas ete vue
    - MalformedIdentifierError : identifiant non numerique dans un dataset
  - MappingError
    - IntermediateIdNotFoundError : pas de correspondance tvdb -> anidb
    - DestinationIdNotFoundError : pas de correspondance anidb -> mal
  - CredentialError : echec d'autorisation ou de rafraichissement
  - UserNotFoundError : utilisateur Jellyfin introuvable
"""

from typing import Optional


class JellymalError(Exception):
    """Erreur de base de jellymal."""


class TransportError(JellymalError):
    """
    Echec reseau ou HTTP en joignant un service externe.

    Attributes:
        service: Nom du service concerne ("jellyfin", "myanimelist", ...)
        status_code: Code HTTP si une reponse a ete recue
    """

    def __init__(
        self, service: str, message: str, status_code: Optional[int] = None
    ) -> None:
        self.service = service
        self.status_code = status_code
        super().__init__(f"{service}: {message}")


class ParseError(JellymalError):
    """Reponse ou fichier de donnees impossible a decoder."""


class ValidationError(JellymalError):
    """Donnee source invalide, fatale pour l'execution en cours."""


class EpisodeValidationError(ValidationError):
    """
    Episode auquel il manque un champ obligatoire.

    Attributes:
        item_id: ID Jellyfin de l'episode
        field: Nom du champ manquant
    """

    def __init__(self, item_id: str, field: str) -> None:
        self.item_id = item_id
        self.field = field
        super().__init__(f"episode {item_id} missing {field}")


class UnmappedSeriesError(ValidationError):
    """
    Episode dont la serie parente n'a pas ete rencontree pendant le parcours.

    Attributes:
        item_id: ID Jellyfin de l'episode
        series_id: ID Jellyfin de la serie attendue
    """

    def __init__(self, item_id: str, series_id: str) -> None:
        self.item_id = item_id
        self.series_id = series_id
        super().__init__(
            f"unable to get tvdb id for episode {item_id} (series {series_id})"
        )


class MalformedIdentifierError(ValidationError):
    """
    Champ identifiant non numerique dans un dataset de correspondance.

    Attributes:
        field: Nom du champ (ex: "anidbid", "mal_id")
        value: Valeur brute rencontree
    """

    def __init__(self, field: str, value: object) -> None:
        self.field = field
        self.value = value
        super().__init__(f"non-numeric {field}: {value!r}")


class MappingError(JellymalError):
    """
    Echec de traduction d'identifiant pour une serie.

    Attributes:
        source_series_id: ID tvdb de la serie source
        season: Numero de saison source
        intermediate_id: ID anidb resolu, si l'echec survient au second saut
    """

    reason = "unable to map series"

    def __init__(
        self,
        source_series_id: str,
        season: int,
        intermediate_id: Optional[int] = None,
    ) -> None:
        self.source_series_id = source_series_id
        self.season = season
        self.intermediate_id = intermediate_id
        context = f"tvdb={source_series_id} season={season}"
        if intermediate_id is not None:
            context += f" anidb={intermediate_id}"
        super().__init__(f"{self.reason} ({context})")


class IntermediateIdNotFoundError(MappingError):
    """Aucun enregistrement de la table A pour (tvdb id, saison)."""

    reason = "unable to map tvdb to anidb"


class DestinationIdNotFoundError(MappingError):
    """L'ID anidb est connu mais n'a pas d'ID MyAnimeList associe."""

    reason = "unable to map anidb id to mal id"


class CredentialError(JellymalError):
    """Echec de l'autorisation OAuth ou du rafraichissement du jeton."""


class UserNotFoundError(JellymalError):
    """L'utilisateur Jellyfin configure n'existe pas."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(f"user does not exist: {username}")
