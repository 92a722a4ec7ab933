"""
Fixtures pytest partagees pour les tests jellymal.

Ce module contient les fixtures communes utilisees dans les tests:
- Tables de correspondance minimales
- Mocks des ports (catalogue, suivi, autorisation, stockage du jeton)
- Settings de test avec chemins temporaires
"""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from jellymal.config import Settings
from jellymal.core.entities.mapping import (
    AnidbMappingRecord,
    IdentityMapping,
    MalMappingRecord,
)
from jellymal.core.ports.api_clients import (
    IAuthorizationService,
    ICatalogSource,
    ITrackerClient,
)
from jellymal.core.ports.credential_store import ICredentialStore


@pytest.fixture
def identity_mapping() -> IdentityMapping:
    """
    Tables minimales :
    - tvdb 80644 saison 2 -> anidb 4181 -> MyAnimeList 4181
    - tvdb 278157 saison 1 -> anidb 10090 -> MyAnimeList 20583
    - tvdb 99999 saison 1 -> anidb 555 -> aucun ID MyAnimeList
    """
    return IdentityMapping(
        anidb_records=(
            AnidbMappingRecord("1000", "movie", "1"),
            AnidbMappingRecord("4181", "80644", "2"),
            AnidbMappingRecord("10090", "278157", "1"),
            AnidbMappingRecord("555", "99999", "1"),
        ),
        mal_records=(
            MalMappingRecord(intermediate_id=4181, destination_id=4181),
            MalMappingRecord(intermediate_id=10090, destination_id=20583),
            MalMappingRecord(intermediate_id=555, destination_id=None),
        ),
    )


@pytest.fixture
def mock_catalog() -> MagicMock:
    """Mock de ICatalogSource, les retours sont configures dans chaque test."""
    mock = MagicMock(spec=ICatalogSource)
    mock.get_user_id = AsyncMock(return_value="user-1")
    mock.list_children = AsyncMock(return_value=[])
    return mock


@pytest.fixture
def mock_tracker() -> MagicMock:
    """Mock de ITrackerClient : liste vide par defaut."""
    mock = MagicMock(spec=ITrackerClient)
    mock.get_latest_episode_number = AsyncMock(return_value=0)
    mock.set_latest_episode_number = AsyncMock()
    mock.close = AsyncMock()
    return mock


@pytest.fixture
def mock_authorizer() -> MagicMock:
    mock = MagicMock(spec=IAuthorizationService)
    mock.authorize = AsyncMock()
    mock.refresh = AsyncMock()
    return mock


@pytest.fixture
def mock_store() -> MagicMock:
    mock = MagicMock(spec=ICredentialStore)
    mock.load.return_value = None
    return mock


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings de test avec repertoires temporaires, sans fichier .env."""
    return Settings(
        _env_file=None,
        jellyfin_host="http://jellyfin.test:8096",
        jellyfin_token="jellyfin-token",
        jellyfin_user="alyosha",
        mal_client_id="client-id",
        mal_client_secret="client-secret",
        mal_redirect_url="http://localhost:9999/callback",
        token_path=tmp_path / "token.json",
        mappings_dir=tmp_path / "mappings",
        log_file=tmp_path / "logs" / "jellymal.log",
    )
