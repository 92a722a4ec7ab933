"""
Entites du catalogue source.

Representent les elements Jellyfin (series, saisons, episodes) tels que
renvoyes par le parcours, et l'etat "dernier episode vu" calcule par serie.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ItemKind(str, Enum):
    """Type d'element du catalogue, ferme : tout type inconnu est rejete."""

    SERIES = "series"
    SEASON = "season"
    EPISODE = "episode"
    OTHER = "other"


@dataclass(frozen=True)
class CatalogItem:
    """
    Noeud de la hierarchie du catalogue source.

    Attributes:
        id: ID opaque, unique dans le catalogue
        kind: Type de l'element
        is_container: True si l'element peut avoir des enfants
        external_key: Cle externe (pour une serie : l'ID tvdb)
        watched: True si l'utilisateur a vu l'element en entier
        name: Nom affiche
        episode_index: Numero d'episode (episodes uniquement)
        season_index: Numero de saison (obligatoire pour un episode)
        parent_series_id: ID de la serie parente (obligatoire pour un episode)
        parent_series_name: Nom de la serie parente (obligatoire pour un episode)
    """

    id: str
    kind: ItemKind
    is_container: bool
    external_key: str
    watched: bool = False
    name: str = ""
    episode_index: Optional[int] = None
    season_index: Optional[int] = None
    parent_series_id: Optional[str] = None
    parent_series_name: Optional[str] = None


@dataclass(frozen=True)
class LatestEpisode:
    """
    Dernier episode vu d'une serie, reconstruit a chaque execution.

    Attributes:
        source_episode_id: ID Jellyfin de l'episode
        episode_number: Numero d'episode dans la saison
        season_number: Numero de saison
        series_name: Nom de la serie
        destination_series_key: Cle externe de la serie (ID tvdb)
        watched: Toujours True dans un resultat d'agregation
        episode_name: Titre de l'episode
    """

    source_episode_id: str
    episode_number: int
    season_number: int
    series_name: str
    destination_series_key: str
    watched: bool
    episode_name: str = ""

    @property
    def position(self) -> tuple[int, int]:
        """Position (saison, episode) pour la comparaison lexicographique."""
        return (self.season_number, self.episode_number)
