"""
Service d'agregation de l'etat de visionnage.

Reduit la liste a plat des elements du catalogue a un LatestEpisode par
serie : l'episode vu le plus avance, compare d'abord sur la saison puis
sur le numero d'episode.
"""

from typing import Iterable

from loguru import logger

from jellymal.core.entities.catalog import CatalogItem, ItemKind, LatestEpisode
from jellymal.core.errors import EpisodeValidationError, UnmappedSeriesError


class WatchStateAggregator:
    """
    Calcule le dernier episode vu de chaque serie.

    Service sans etat. L'ordre des elements en entree n'a pas d'incidence
    sur le resultat, sauf pour les doublons de series (le dernier gagne).
    """

    def aggregate(self, items: Iterable[CatalogItem]) -> dict[str, LatestEpisode]:
        """
        Agrege les episodes vus par cle externe de serie.

        Args:
            items: Elements du catalogue (issus du parcours)

        Returns:
            Dictionnaire cle tvdb -> dernier episode vu

        Raises:
            EpisodeValidationError: Episode numerote sans saison ou serie
            UnmappedSeriesError: Episode dont la serie n'a pas ete parcourue
        """
        latest: dict[str, LatestEpisode] = {}
        for episode in self.extract_episodes(items):
            if not episode.watched:
                continue
            key = episode.destination_series_key
            current = latest.get(key)
            if current is None or episode.position > current.position:
                latest[key] = episode

        logger.debug("Episodes agreges", series=len(latest))
        return latest

    def extract_episodes(self, items: Iterable[CatalogItem]) -> list[LatestEpisode]:
        """
        Extrait et valide les episodes, vus ou non.

        Les episodes sans numero sont ignores. Un episode numerote doit
        avoir une saison, une serie parente et un nom de serie.
        """
        items = list(items)
        series_keys = self._index_series(items)
        episodes = []

        for item in items:
            if item.kind != ItemKind.EPISODE:
                continue
            if item.episode_index is None:
                logger.debug("Episode sans numero ignore", item_id=item.id)
                continue
            if item.parent_series_name is None:
                raise EpisodeValidationError(item.id, "series name")
            if item.season_index is None:
                raise EpisodeValidationError(item.id, "season number")
            if item.parent_series_id is None:
                raise EpisodeValidationError(item.id, "series id")

            key = series_keys.get(item.parent_series_id)
            if key is None:
                raise UnmappedSeriesError(item.id, item.parent_series_id)

            episodes.append(
                LatestEpisode(
                    source_episode_id=item.id,
                    episode_number=item.episode_index,
                    season_number=item.season_index,
                    series_name=item.parent_series_name,
                    destination_series_key=key,
                    watched=item.watched,
                    episode_name=item.name,
                )
            )

        return episodes

    @staticmethod
    def _index_series(items: list[CatalogItem]) -> dict[str, str]:
        """Associe l'ID de chaque serie a sa cle externe."""
        return {
            item.id: item.external_key
            for item in items
            if item.kind == ItemKind.SERIES
        }
