"""
Telechargement des datasets de correspondance d'identifiants.

Les fichiers sont conserves dans un repertoire local et ne sont
re-telecharges que lorsqu'ils sont plus vieux que `max_age_days`.
"""

from dataclasses import dataclass
from datetime import date
from pathlib import Path

import httpx
from loguru import logger

from jellymal.core.errors import TransportError
from jellymal.utils.constants import ANIDB_MAPPING_URL, MAL_MAPPING_URL

SERVICE = "anime-lists"


@dataclass
class DatasetStatus:
    """Etat d'un dataset apres mise a jour."""

    name: str
    path: Path
    downloaded: bool


class MappingDatasetDownloader:
    """
    Gestionnaire de telechargement des deux datasets.

    Example:
        downloader = MappingDatasetDownloader(target_dir=Path("mappings"))
        statuses = await downloader.update_all()
    """

    def __init__(
        self,
        target_dir: Path,
        anidb_file: str = "anime-list-master.xml",
        mal_file: str = "anime-list-full.json",
        max_age_days: int = 7,
    ) -> None:
        self._target_dir = Path(target_dir)
        self._datasets = {
            anidb_file: ANIDB_MAPPING_URL,
            mal_file: MAL_MAPPING_URL,
        }
        self._max_age_days = max_age_days

    def needs_update(self, file_path: Path) -> bool:
        """
        Verifie si un fichier doit etre telecharge.

        Returns:
            True si le fichier n'existe pas ou est trop vieux
        """
        if not file_path.exists():
            return True

        file_date = date.fromtimestamp(file_path.stat().st_mtime)
        age = (date.today() - file_date).days
        return age >= self._max_age_days

    async def download(self, url: str, file_path: Path) -> Path:
        """
        Telecharge un fichier en streaming.

        Le fichier est ecrit a cote puis renomme, pour ne jamais laisser
        un dataset tronque a la place d'un dataset valide.

        Raises:
            TransportError: Si le telechargement echoue
        """
        file_path.parent.mkdir(parents=True, exist_ok=True)
        partial_path = file_path.with_suffix(file_path.suffix + ".part")

        try:
            async with httpx.AsyncClient(timeout=httpx.Timeout(60.0, connect=10.0)) as client:
                async with client.stream("GET", url, follow_redirects=True) as response:
                    response.raise_for_status()
                    with open(partial_path, "wb") as f:
                        async for chunk in response.aiter_bytes():
                            f.write(chunk)
        except httpx.HTTPError as e:
            partial_path.unlink(missing_ok=True)
            raise TransportError(SERVICE, f"download of {url} failed: {e}") from e

        partial_path.replace(file_path)
        logger.info("Dataset telecharge", url=url, path=str(file_path))
        return file_path

    async def update_all(self, force: bool = False) -> list[DatasetStatus]:
        """
        Met a jour les deux datasets si necessaire.

        Args:
            force: Telecharge meme si les fichiers sont recents
        """
        statuses = []
        for name, url in self._datasets.items():
            file_path = self._target_dir / name
            if force or self.needs_update(file_path):
                await self.download(url, file_path)
                statuses.append(DatasetStatus(name=name, path=file_path, downloaded=True))
            else:
                statuses.append(DatasetStatus(name=name, path=file_path, downloaded=False))
        return statuses
