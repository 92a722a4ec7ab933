"""
Tables de correspondance d'identifiants hors ligne.

Table A (anime-list-master.xml) : tvdb id + saison par defaut -> anidb id.
Table B (anime-list-full.json) : anidb id -> MyAnimeList id.

Les tables sont immuables pour la duree du processus. L'ordre des
enregistrements est conserve : une recherche retourne toujours le premier
enregistrement correspondant.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AnidbMappingRecord:
    """
    Enregistrement de la table A.

    Les champs restent des chaines : le dataset contient des valeurs non
    numeriques ("movie", "unknown", "a") qui ne doivent simplement jamais
    correspondre.
    """

    intermediate_id: str
    source_series_id: str
    source_default_season: str


@dataclass(frozen=True)
class MalMappingRecord:
    """Enregistrement de la table B, les deux IDs sont optionnels."""

    intermediate_id: Optional[int] = None
    destination_id: Optional[int] = None


@dataclass(frozen=True)
class IdentityMapping:
    """Les deux tables chargees ensemble."""

    anidb_records: tuple[AnidbMappingRecord, ...] = ()
    mal_records: tuple[MalMappingRecord, ...] = ()
