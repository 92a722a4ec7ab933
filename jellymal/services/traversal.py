"""
Service de parcours du catalogue source.

Parcourt la hierarchie de dossiers Jellyfin et retourne la liste a plat de
tous les elements (series, saisons, episodes, autres).
"""

from typing import Optional

from loguru import logger

from jellymal.core.entities.catalog import CatalogItem
from jellymal.core.ports.api_clients import ICatalogSource


class CatalogTraversalService:
    """
    Parcours en profondeur (pile) du catalogue.

    La frontiere est une pile locale a chaque appel : on depile un
    conteneur, on liste ses enfants directs, on les ajoute tous au resultat
    et on empile ceux qui sont eux-memes des conteneurs. Un appel de
    listage par conteneur, sans borne de profondeur.
    """

    def __init__(self, catalog: ICatalogSource) -> None:
        self._catalog = catalog

    async def traverse(
        self,
        user_id: str,
        root_id: Optional[str] = None,
    ) -> list[CatalogItem]:
        """
        Enumere tous les elements sous une racine.

        Args:
            user_id: ID de l'utilisateur Jellyfin
            root_id: Conteneur de depart, None pour la racine du catalogue

        Returns:
            Tous les elements rencontres, dans l'ordre de decouverte

        Raises:
            TransportError, ParseError: propagees depuis le catalogue
        """
        items: list[CatalogItem] = []
        frontier: list[Optional[str]] = [root_id]
        requests = 0

        while frontier:
            container_id = frontier.pop()
            children = await self._catalog.list_children(user_id, container_id)
            requests += 1
            for child in children:
                if child.is_container:
                    frontier.append(child.id)
                items.append(child)

        logger.debug(
            "Catalogue parcouru",
            root_id=root_id,
            requests=requests,
            items=len(items),
        )
        return items
