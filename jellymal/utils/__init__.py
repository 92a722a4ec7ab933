"""
Utilitaires et constantes pour jellymal.
"""

from jellymal.utils.constants import (
    ANIDB_MAPPING_URL,
    MAL_API_URL,
    MAL_AUTH_URL,
    MAL_MAPPING_URL,
    MAL_TOKEN_URL,
    NEAR_EXPIRY_MS,
)
from jellymal.utils.helpers import now_millis

__all__ = [
    "MAL_API_URL",
    "MAL_AUTH_URL",
    "MAL_TOKEN_URL",
    "ANIDB_MAPPING_URL",
    "MAL_MAPPING_URL",
    "NEAR_EXPIRY_MS",
    "now_millis",
]
