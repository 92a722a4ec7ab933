"""
Service de traduction d'identifiants tvdb -> anidb -> MyAnimeList.

Premier saut (table A) : (tvdb id, saison par defaut) -> anidb id.
Second saut (table B) : anidb id -> MyAnimeList id.

Les tables sont petites : un parcours lineaire suffit, sans supposer
qu'elles soient triees. Le premier enregistrement correspondant gagne.
"""

from loguru import logger

from jellymal.core.entities.mapping import IdentityMapping
from jellymal.core.errors import (
    DestinationIdNotFoundError,
    IntermediateIdNotFoundError,
    MalformedIdentifierError,
)


class IdentifierTranslator:
    """
    Traduit l'identite d'une serie source en ID MyAnimeList.

    Example:
        translator = IdentifierTranslator(mapping)
        mal_id = translator.translate("80644", 2)
    """

    def __init__(self, mapping: IdentityMapping) -> None:
        self._mapping = mapping

    def translate(self, source_series_id: str, source_season: int) -> int:
        """
        Resout l'ID MyAnimeList d'une saison de serie tvdb.

        Args:
            source_series_id: ID tvdb de la serie
            source_season: Numero de saison tvdb

        Returns:
            ID MyAnimeList

        Raises:
            IntermediateIdNotFoundError: Aucune correspondance dans la table A
            DestinationIdNotFoundError: anidb id sans ID MyAnimeList
            MalformedIdentifierError: anidbid non numerique dans la table A
        """
        anidb_id = self.to_intermediate_id(source_series_id, source_season)
        mal_id = self.to_destination_id(anidb_id, source_series_id, source_season)
        logger.debug(
            "Serie traduite",
            tvdb_id=source_series_id,
            season=source_season,
            anidb_id=anidb_id,
            mal_id=mal_id,
        )
        return mal_id

    def to_intermediate_id(self, source_series_id: str, source_season: int) -> int:
        """Premier saut : table A."""
        series_id = str(source_series_id).strip()
        season = str(source_season)
        for record in self._mapping.anidb_records:
            if (
                record.source_series_id == series_id
                and record.source_default_season == season
            ):
                return _parse_identifier("anidbid", record.intermediate_id)
        raise IntermediateIdNotFoundError(series_id, source_season)

    def to_destination_id(
        self,
        intermediate_id: int,
        source_series_id: str = "",
        source_season: int = 0,
    ) -> int:
        """Second saut : table B. Les arguments source servent au contexte d'erreur."""
        for record in self._mapping.mal_records:
            if (
                record.intermediate_id == intermediate_id
                and record.destination_id is not None
            ):
                return record.destination_id
        raise DestinationIdNotFoundError(
            source_series_id, source_season, intermediate_id=intermediate_id
        )


def _parse_identifier(field: str, value: str) -> int:
    """Convertit un identifiant textuel en entier."""
    try:
        return int(value.strip())
    except (AttributeError, ValueError) as e:
        raise MalformedIdentifierError(field, value) from e
