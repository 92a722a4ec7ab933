"""
Tests unitaires pour les commandes CLI.

Tests couvrant:
- sync : synchronisation, simulation, configuration incomplete, erreurs
- authorize : autorisation forcee
- update-mappings : telechargement des tables
- callback principal : version, info
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import typer
from typer.testing import CliRunner

from jellymal.adapters.cli.commands.mapping_commands import _update_mappings_async
from jellymal.adapters.cli.commands.sync_commands import (
    _authorize_async,
    _render_progress,
    _sync_async,
)
from jellymal.adapters.mapping.dataset_downloader import DatasetStatus
from jellymal.config import Settings
from jellymal.core.entities.credential import Credential
from jellymal.core.errors import CredentialError, TransportError
from jellymal.services.reconciliation import (
    ProgressInfo,
    ReconciliationStats,
    SyncResult,
)

# Chemins de patch pour les sous-modules
_SYNC = "jellymal.adapters.cli.commands.sync_commands"
_MAPPING = "jellymal.adapters.cli.commands.mapping_commands"

runner = CliRunner()


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def mock_container(test_settings: Settings):
    """Mock le Container pour les tests.

    Patche Container dans helpers.py car c'est la que le decorateur
    @with_container() l'importe et l'instancie.
    """
    with patch("jellymal.adapters.cli.helpers.Container") as mock_cls:
        container_instance = MagicMock()
        mock_cls.return_value = container_instance
        container_instance.config.return_value = test_settings

        jellyfin_client = MagicMock()
        jellyfin_client.close = AsyncMock()
        container_instance.jellyfin_client.return_value = jellyfin_client

        oauth_client = MagicMock()
        oauth_client.close = AsyncMock()
        container_instance.oauth_client.return_value = oauth_client

        service = MagicMock()
        service.run = AsyncMock(return_value=ReconciliationStats())
        container_instance.reconciliation_service.return_value = service

        yield container_instance


def _printed(mock_console: MagicMock) -> str:
    return "\n".join(str(call.args[0]) for call in mock_console.print.call_args_list if call.args)


def _progress(result: SyncResult, **kwargs) -> ProgressInfo:
    defaults = dict(
        current=1,
        total=1,
        series_name="Clannad",
        season_number=2,
        episode_number=9,
        result=result,
    )
    defaults.update(kwargs)
    return ProgressInfo(**defaults)


# ============================================================================
# sync
# ============================================================================


class TestSync:
    @pytest.mark.asyncio
    async def test_runs_reconciliation_and_prints_summary(self, mock_container) -> None:
        service = mock_container.reconciliation_service.return_value
        service.run.return_value = ReconciliationStats(
            total=3, updated=1, up_to_date=1, unmapped=1
        )

        with patch(f"{_SYNC}.console") as mock_console:
            await _sync_async(False)

        service.run.assert_awaited_once()
        args, kwargs = service.run.await_args
        assert args == ("alyosha",)
        assert kwargs["dry_run"] is False
        output = _printed(mock_console)
        assert "Resume" in output
        assert "sans correspondance" in output
        mock_container.jellyfin_client.return_value.close.assert_awaited_once()
        mock_container.oauth_client.return_value.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_dry_run_is_forwarded(self, mock_container) -> None:
        service = mock_container.reconciliation_service.return_value
        service.run.return_value = ReconciliationStats(total=1, would_update=1)

        with patch(f"{_SYNC}.console") as mock_console:
            await _sync_async(True)

        assert service.run.await_args.kwargs["dry_run"] is True
        assert "prevue" in _printed(mock_console)

    @pytest.mark.asyncio
    async def test_nothing_watched(self, mock_container) -> None:
        with patch(f"{_SYNC}.console") as mock_console:
            await _sync_async(False)

        assert "Aucun episode vu" in _printed(mock_console)

    @pytest.mark.asyncio
    async def test_error_exits_with_code_1_and_closes_clients(self, mock_container) -> None:
        service = mock_container.reconciliation_service.return_value
        service.run.side_effect = TransportError("jellyfin", "connection refused")

        with patch(f"{_SYNC}.console") as mock_console:
            with pytest.raises(typer.Exit) as exc_info:
                await _sync_async(False)

        assert exc_info.value.exit_code == 1
        assert "connection refused" in _printed(mock_console)
        mock_container.jellyfin_client.return_value.close.assert_awaited_once()
        mock_container.oauth_client.return_value.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_mapping_file_exits_with_code_1(self, mock_container) -> None:
        mock_container.reconciliation_service.side_effect = FileNotFoundError(
            "Fichier non trouve: mappings/anime-list-master.xml"
        )

        with patch(f"{_SYNC}.console") as mock_console:
            with pytest.raises(typer.Exit) as exc_info:
                await _sync_async(False)

        assert exc_info.value.exit_code == 1
        assert "update-mappings" in _printed(mock_console)

    @pytest.mark.asyncio
    async def test_incomplete_configuration_exits(
        self, mock_container, test_settings: Settings
    ) -> None:
        mock_container.config.return_value = test_settings.model_copy(
            update={"jellyfin_token": None}
        )

        with patch("jellymal.adapters.cli.helpers.console"):
            with pytest.raises(typer.Exit) as exc_info:
                await _sync_async(False)

        assert exc_info.value.exit_code == 1
        mock_container.reconciliation_service.assert_not_called()


class TestRenderProgress:
    @pytest.mark.parametrize(
        "info, expected",
        [
            (_progress(SyncResult.UPDATED, mal_id=4181, previous_episode_number=3), "3 -> 9"),
            (_progress(SyncResult.WOULD_UPDATE, mal_id=4181, previous_episode_number=3), "MAL 4181"),
            (_progress(SyncResult.UNMAPPED, error="unable to map tvdb to anidb"), "unable to map"),
            (_progress(SyncResult.UP_TO_DATE, mal_id=4181), "a jour"),
        ],
    )
    def test_one_line_per_result(self, info: ProgressInfo, expected: str) -> None:
        with patch(f"{_SYNC}.console") as mock_console:
            _render_progress(info)

        output = _printed(mock_console)
        assert "Clannad S02E09" in output
        assert expected in output


# ============================================================================
# authorize
# ============================================================================


class TestAuthorize:
    @pytest.mark.asyncio
    async def test_forces_new_authorization(self, mock_container) -> None:
        manager = MagicMock()
        manager.reauthorize = AsyncMock(
            return_value=Credential(access_token="a", refresh_token="r", expires_at=42)
        )
        mock_container.credential_manager.return_value = manager

        with patch(f"{_SYNC}.console") as mock_console:
            await _authorize_async()

        manager.reauthorize.assert_awaited_once()
        assert "Jeton enregistre" in _printed(mock_console)
        mock_container.oauth_client.return_value.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_credential_error_exits(self, mock_container) -> None:
        manager = MagicMock()
        manager.reauthorize = AsyncMock(side_effect=CredentialError("state mismatch"))
        mock_container.credential_manager.return_value = manager

        with patch(f"{_SYNC}.console"):
            with pytest.raises(typer.Exit) as exc_info:
                await _authorize_async()

        assert exc_info.value.exit_code == 1


# ============================================================================
# update-mappings
# ============================================================================


class TestUpdateMappings:
    @pytest.mark.asyncio
    async def test_reports_each_dataset(self, mock_container, tmp_path) -> None:
        downloader = MagicMock()
        downloader.update_all = AsyncMock(return_value=[
            DatasetStatus("anime-list-master.xml", tmp_path / "a.xml", downloaded=True),
            DatasetStatus("anime-list-full.json", tmp_path / "b.json", downloaded=False),
        ])
        mock_container.mapping_downloader.return_value = downloader

        with patch(f"{_MAPPING}.console") as mock_console:
            await _update_mappings_async(True)

        downloader.update_all.assert_awaited_once_with(force=True)
        output = _printed(mock_console)
        assert "anime-list-master.xml" in output
        assert "deja a jour" in output

    @pytest.mark.asyncio
    async def test_download_error_exits(self, mock_container) -> None:
        downloader = MagicMock()
        downloader.update_all = AsyncMock(side_effect=TransportError("anime-lists", "404"))
        mock_container.mapping_downloader.return_value = downloader

        with patch(f"{_MAPPING}.console"):
            with pytest.raises(typer.Exit):
                await _update_mappings_async(False)


# ============================================================================
# Application principale
# ============================================================================


class TestMainApp:
    def test_version(self, test_settings: Settings) -> None:
        from jellymal.main import app

        with patch("jellymal.main.configure_logging"), patch(
            "jellymal.main.get_config", return_value=test_settings
        ):
            result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "jellymal v0.1.0" in result.output

    def test_info_shows_configuration(self, test_settings: Settings) -> None:
        from jellymal.main import app

        with patch("jellymal.main.configure_logging"), patch(
            "jellymal.main.get_config", return_value=test_settings
        ):
            result = runner.invoke(app, ["info"])

        assert result.exit_code == 0
        assert "http://jellyfin.test:8096" in result.output
        assert "anime-list-master.xml" in result.output

    def test_verbose_flag_sets_debug_level(self, test_settings: Settings) -> None:
        from jellymal.main import app

        with patch("jellymal.main.configure_logging") as mock_configure, patch(
            "jellymal.main.get_config", return_value=test_settings
        ):
            runner.invoke(app, ["-v", "version"])

        assert mock_configure.call_args.kwargs["log_level"] == "DEBUG"
