"""
Parser des datasets de correspondance d'identifiants anime.

Datasets supportes:
- anime-list-master.xml (projet Anime-Lists) : tvdb id + saison -> anidb id
- anime-list-full.json (projet Fribb) : anidb id -> MyAnimeList id

Format XML (attributs seulement, les sous-elements sont ignores):
    <anime-list>
      <anime anidbid="4181" tvdbid="80644" defaulttvdbseason="2">...</anime>
    </anime-list>

Format JSON:
    [{"anidb_id": 4181, "mal_id": 4181, "type": "TV", ...}, ...]
"""

import json
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Generator, Optional

from loguru import logger

from jellymal.core.entities.mapping import (
    AnidbMappingRecord,
    IdentityMapping,
    MalMappingRecord,
)
from jellymal.core.errors import MalformedIdentifierError, ParseError


class AnimeListParser:
    """
    Parser des deux tables de correspondance.

    Le XML est lu en streaming (iterparse) : chaque element <anime> est
    libere des qu'il a ete converti.
    """

    def parse_anidb_mapping(
        self, file_path: Path
    ) -> Generator[AnidbMappingRecord, None, None]:
        """
        Parse anime-list-master.xml.

        Yields:
            AnidbMappingRecord dans l'ordre du fichier

        Raises:
            FileNotFoundError: Si le fichier n'existe pas
            ParseError: XML invalide ou attribut obligatoire absent
        """
        if not file_path.exists():
            raise FileNotFoundError(f"Fichier non trouve: {file_path}")

        try:
            for _, elem in ET.iterparse(file_path, events=("end",)):
                if elem.tag != "anime":
                    continue
                try:
                    yield AnidbMappingRecord(
                        intermediate_id=elem.attrib["anidbid"],
                        source_series_id=elem.attrib["tvdbid"],
                        source_default_season=elem.attrib["defaulttvdbseason"],
                    )
                except KeyError as e:
                    raise ParseError(
                        f"{file_path.name}: anime element missing attribute {e}"
                    ) from e
                elem.clear()
        except ET.ParseError as e:
            raise ParseError(f"{file_path.name}: invalid XML ({e})") from e

    def parse_mal_mapping(self, file_path: Path) -> list[MalMappingRecord]:
        """
        Parse anime-list-full.json.

        Returns:
            MalMappingRecord dans l'ordre du fichier

        Raises:
            FileNotFoundError: Si le fichier n'existe pas
            ParseError: JSON invalide
            MalformedIdentifierError: anidb_id ou mal_id non numerique
        """
        if not file_path.exists():
            raise FileNotFoundError(f"Fichier non trouve: {file_path}")

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                entries = json.load(f)
        except ValueError as e:
            raise ParseError(f"{file_path.name}: invalid JSON ({e})") from e

        if not isinstance(entries, list):
            raise ParseError(f"{file_path.name}: expected a list of entries")

        records = []
        for entry in entries:
            if not isinstance(entry, dict):
                raise ParseError(f"{file_path.name}: entry is not an object")
            records.append(
                MalMappingRecord(
                    intermediate_id=self._parse_optional_id(entry, "anidb_id"),
                    destination_id=self._parse_optional_id(entry, "mal_id"),
                )
            )
        return records

    @staticmethod
    def _parse_optional_id(entry: dict, field: str) -> Optional[int]:
        """Parse un identifiant optionnel, None si absent ou null."""
        value: Any = entry.get(field)
        if value is None:
            return None
        if isinstance(value, bool):
            raise MalformedIdentifierError(field, value)
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.strip().isdigit():
            return int(value)
        raise MalformedIdentifierError(field, value)


def load_identity_mapping(anidb_path: Path, mal_path: Path) -> IdentityMapping:
    """
    Charge les deux tables en memoire pour la duree du processus.

    Args:
        anidb_path: Chemin de anime-list-master.xml
        mal_path: Chemin de anime-list-full.json
    """
    parser = AnimeListParser()
    mapping = IdentityMapping(
        anidb_records=tuple(parser.parse_anidb_mapping(Path(anidb_path))),
        mal_records=tuple(parser.parse_mal_mapping(Path(mal_path))),
    )
    logger.debug(
        "Tables de correspondance chargees",
        anidb=len(mapping.anidb_records),
        mal=len(mapping.mal_records),
    )
    return mapping
