"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la couche de navigation.
Le cache de navigation est un Singleton : une seule instance, construite au
demarrage, partagee par tous les composants.
"""

from dependency_injector import containers, providers

from .adapters.file_system import FileSystemAdapter
from .config import Settings
from .logging_config import init_logging
from .services.catalog import CatalogService
from .services.folder_scanner import FolderScanner
from .services.navigation_cache import NavigationCache
from .services.stream_selector import StreamSelector


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.init_resources()
        container.remote_catalog.override(providers.Object(my_remote_catalog))
        catalog = container.catalog_service()
        page = await catalog.get_page("source-id", 1)
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Logging - Resource initialisee au demarrage (container.init_resources())
    logging = providers.Resource(init_logging, settings=config)

    # Catalogue distant - fourni par l'application (transport hors perimetre)
    # A surcharger : container.remote_catalog.override(providers.Object(client))
    remote_catalog = providers.Object(None)

    # Adapters - implementations concretes des ports
    file_system = providers.Singleton(FileSystemAdapter)

    # Services sans etat (Singletons)
    folder_scanner = providers.Singleton(
        FolderScanner,
        file_system=file_system,
    )

    stream_selector = providers.Singleton(
        StreamSelector,
        preferred_languages=config.provided.preferred_languages,
        max_quality=config.provided.max_quality,
    )

    # Cache de navigation - Singleton partage par toute l'application
    navigation_cache = providers.Singleton(
        NavigationCache,
        page_ttl=config.provided.page_cache_ttl_seconds,
        source_ttl=config.provided.source_cache_ttl_seconds,
        max_pages=config.provided.max_cached_pages,
        max_sources=config.provided.max_cached_sources,
        prefetch_delay=config.provided.prefetch_delay_seconds,
    )

    # Service de catalogue - Singleton car il detient le registre des sources
    catalog_service = providers.Singleton(
        CatalogService,
        folder_scanner=folder_scanner,
        stream_selector=stream_selector,
        navigation_cache=navigation_cache,
        remote_catalog=remote_catalog,
        page_size=config.provided.page_size,
    )
