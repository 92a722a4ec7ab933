"""
Entites metier.

Exports:
- CatalogItem, ItemKind, LatestEpisode : catalogue source
- Credential, CredentialState : jeton OAuth
- IdentityMapping, AnidbMappingRecord, MalMappingRecord : tables de correspondance
"""

from jellymal.core.entities.catalog import CatalogItem, ItemKind, LatestEpisode
from jellymal.core.entities.credential import Credential, CredentialState
from jellymal.core.entities.mapping import (
    AnidbMappingRecord,
    IdentityMapping,
    MalMappingRecord,
)

__all__ = [
    "CatalogItem",
    "ItemKind",
    "LatestEpisode",
    "Credential",
    "CredentialState",
    "IdentityMapping",
    "AnidbMappingRecord",
    "MalMappingRecord",
]
