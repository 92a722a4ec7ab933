"""
Datasets de correspondance d'identifiants (tvdb -> anidb -> MyAnimeList).
"""

from jellymal.adapters.mapping.anime_lists import AnimeListParser, load_identity_mapping
from jellymal.adapters.mapping.dataset_downloader import (
    DatasetStatus,
    MappingDatasetDownloader,
)

__all__ = [
    "AnimeListParser",
    "load_identity_mapping",
    "MappingDatasetDownloader",
    "DatasetStatus",
]
