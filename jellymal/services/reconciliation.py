"""
Service de reconciliation Jellyfin -> MyAnimeList.

Enchaine le parcours du catalogue, l'agregation, puis pour chaque serie :
traduction de l'identifiant, lecture de la progression MyAnimeList et mise
a jour uniquement si Jellyfin est strictement en avance.

Une serie introuvable dans les tables de correspondance est ignoree sans
bloquer les autres. Toute autre erreur interrompt l'execution.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from loguru import logger

from jellymal.core.entities.catalog import LatestEpisode
from jellymal.core.errors import MappingError, UserNotFoundError
from jellymal.core.ports.api_clients import ICatalogSource, ITrackerClient
from jellymal.services.aggregator import WatchStateAggregator
from jellymal.services.credentials import CredentialLifecycleManager
from jellymal.services.translator import IdentifierTranslator
from jellymal.services.traversal import CatalogTraversalService


class SyncResult(str, Enum):
    """Resultat de reconciliation pour une serie."""

    UPDATED = "updated"
    WOULD_UPDATE = "would_update"
    UP_TO_DATE = "up_to_date"
    UNMAPPED = "unmapped"


@dataclass
class ProgressInfo:
    """Information de progression pour le callback."""

    current: int
    total: int
    series_name: str
    season_number: int
    episode_number: int
    result: SyncResult
    mal_id: Optional[int] = None
    previous_episode_number: Optional[int] = None
    error: Optional[str] = None


@dataclass
class ReconciliationStats:
    """Statistiques d'une execution."""

    total: int = 0
    updated: int = 0
    would_update: int = 0
    up_to_date: int = 0
    unmapped: int = 0


class ReconciliationService:
    """
    Pilote de la synchronisation complete.

    Le jeton est obtenu apres la lecture du catalogue et avant le premier
    appel a MyAnimeList. Le client MyAnimeList est construit avec ce jeton
    via `tracker_factory` et ferme en fin d'execution.
    """

    def __init__(
        self,
        catalog: ICatalogSource,
        traversal: CatalogTraversalService,
        aggregator: WatchStateAggregator,
        translator: IdentifierTranslator,
        credentials: CredentialLifecycleManager,
        tracker_factory: Callable[[str], ITrackerClient],
    ) -> None:
        self._catalog = catalog
        self._traversal = traversal
        self._aggregator = aggregator
        self._translator = translator
        self._credentials = credentials
        self._tracker_factory = tracker_factory

    async def collect_latest_episodes(self, username: str) -> dict[str, LatestEpisode]:
        """
        Calcule le dernier episode vu de chaque serie pour un utilisateur.

        Raises:
            UserNotFoundError: Si l'utilisateur Jellyfin n'existe pas
        """
        user_id = await self._catalog.get_user_id(username)
        if user_id is None:
            raise UserNotFoundError(username)

        items = await self._traversal.traverse(user_id)
        latest = self._aggregator.aggregate(items)
        logger.info(
            "Progression Jellyfin calculee",
            user=username,
            items=len(items),
            series=len(latest),
        )
        return latest

    async def run(
        self,
        username: str,
        dry_run: bool = False,
        on_progress: Optional[Callable[[ProgressInfo], None]] = None,
    ) -> ReconciliationStats:
        """
        Execute une synchronisation complete.

        Args:
            username: Nom de l'utilisateur Jellyfin
            dry_run: Si True, aucune mise a jour n'est envoyee
            on_progress: Callback de progression optionnel

        Returns:
            Statistiques de l'execution
        """
        latest = await self.collect_latest_episodes(username)
        stats = ReconciliationStats(total=len(latest))
        if not latest:
            return stats

        credential = await self._credentials.obtain()
        tracker = self._tracker_factory(credential.access_token)
        try:
            for i, (tvdb_id, episode) in enumerate(latest.items()):
                info = await self._reconcile_one(tracker, tvdb_id, episode, dry_run)
                info.current = i + 1
                info.total = stats.total
                self._count(stats, info.result)
                if on_progress:
                    on_progress(info)
        finally:
            await tracker.close()

        logger.info(
            "Synchronisation terminee",
            total=stats.total,
            updated=stats.updated,
            up_to_date=stats.up_to_date,
            unmapped=stats.unmapped,
            dry_run=dry_run,
        )
        return stats

    async def _reconcile_one(
        self,
        tracker: ITrackerClient,
        tvdb_id: str,
        episode: LatestEpisode,
        dry_run: bool,
    ) -> ProgressInfo:
        """Reconcilie une seule serie."""
        info = ProgressInfo(
            current=0,
            total=0,
            series_name=episode.series_name,
            season_number=episode.season_number,
            episode_number=episode.episode_number,
            result=SyncResult.UP_TO_DATE,
        )

        try:
            mal_id = self._translator.translate(tvdb_id, episode.season_number)
        except MappingError as e:
            logger.warning(
                "Serie ignoree, correspondance introuvable",
                series=episode.series_name,
                tvdb_id=tvdb_id,
                season=episode.season_number,
                reason=str(e),
            )
            info.result = SyncResult.UNMAPPED
            info.error = str(e)
            return info

        info.mal_id = mal_id
        watched = await tracker.get_latest_episode_number(mal_id)
        info.previous_episode_number = watched

        if episode.episode_number <= watched:
            return info

        if dry_run:
            info.result = SyncResult.WOULD_UPDATE
            return info

        logger.info(
            "Mise a jour de la progression",
            series=episode.series_name,
            mal_id=mal_id,
            episode=episode.episode_number,
        )
        await tracker.set_latest_episode_number(mal_id, episode.episode_number)
        info.result = SyncResult.UPDATED
        return info

    @staticmethod
    def _count(stats: ReconciliationStats, result: SyncResult) -> None:
        if result == SyncResult.UPDATED:
            stats.updated += 1
        elif result == SyncResult.WOULD_UPDATE:
            stats.would_update += 1
        elif result == SyncResult.UNMAPPED:
            stats.unmapped += 1
        else:
            stats.up_to_date += 1
