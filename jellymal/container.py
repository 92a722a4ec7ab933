"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les commandes CLI.
"""

from dependency_injector import containers, providers

from .adapters.api.jellyfin_client import JellyfinClient
from .adapters.api.mal_client import MyAnimeListClient
from .adapters.api.oauth_client import MALAuthorizationClient
from .adapters.cli.prompts import ask_redirect_url
from .adapters.mapping.anime_lists import load_identity_mapping
from .adapters.mapping.dataset_downloader import MappingDatasetDownloader
from .adapters.persistence.credential_file import JsonCredentialStore
from .config import Settings
from .services.aggregator import WatchStateAggregator
from .services.credentials import CredentialLifecycleManager
from .services.reconciliation import ReconciliationService
from .services.translator import IdentifierTranslator
from .services.traversal import CatalogTraversalService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        service = container.reconciliation_service()
        stats = await service.run(username)
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Adapters - implementations concretes des ports
    jellyfin_client = providers.Singleton(
        JellyfinClient,
        host=config.provided.jellyfin_host,
        token=config.provided.jellyfin_token,
    )

    oauth_client = providers.Singleton(
        MALAuthorizationClient,
        client_id=config.provided.mal_client_id,
        client_secret=config.provided.mal_client_secret,
        redirect_url=config.provided.mal_redirect_url,
        prompt=providers.Object(ask_redirect_url),
        auth_url=config.provided.mal_auth_url,
        token_url=config.provided.mal_token_url,
    )

    credential_store = providers.Singleton(
        JsonCredentialStore,
        path=config.provided.token_path,
    )

    # Client MyAnimeList - Factory car construit avec le jeton de l'execution
    # Utiliser: container.mal_client(access_token)
    mal_client = providers.Factory(
        MyAnimeListClient,
        base_url=config.provided.mal_api_url,
    )

    # Tables de correspondance - chargees une fois par processus
    identity_mapping = providers.Singleton(
        load_identity_mapping,
        anidb_path=config.provided.anidb_mapping_path,
        mal_path=config.provided.mal_mapping_path,
    )

    mapping_downloader = providers.Factory(
        MappingDatasetDownloader,
        target_dir=config.provided.mappings_dir,
        anidb_file=config.provided.anidb_mapping_file,
        mal_file=config.provided.mal_mapping_file,
        max_age_days=config.provided.mappings_max_age_days,
    )

    # Services (stateless - Singletons)
    aggregator = providers.Singleton(WatchStateAggregator)
    translator = providers.Singleton(IdentifierTranslator, mapping=identity_mapping)

    traversal_service = providers.Factory(
        CatalogTraversalService,
        catalog=jellyfin_client,
    )

    credential_manager = providers.Factory(
        CredentialLifecycleManager,
        store=credential_store,
        authorizer=oauth_client,
        near_expiry_ms=config.provided.near_expiry_ms,
    )

    reconciliation_service = providers.Factory(
        ReconciliationService,
        catalog=jellyfin_client,
        traversal=traversal_service,
        aggregator=aggregator,
        translator=translator,
        credentials=credential_manager,
        tracker_factory=mal_client.provider,
    )
