"""
Service de catalogue : point d'entree de la navigation.

Orchestre la resolution "contenu de la source S a la page P" :
1. Consultation du cache de navigation (retour immediat si la page est valide)
2. En cas d'absence, resolution par le scanner (sources locales) ou par le
   catalogue distant (sources reseau)
3. Mise en cache du resultat avec les metadonnees de la source
4. Prechargement en arriere-plan des pages voisines

Fournit aussi la navigation dossier par dossier des sources locales et la
resolution du flux lisible d'une video distante.
"""

from pathlib import Path
from typing import Iterable, Optional, Sequence

from loguru import logger

from vidcatalog.core.entities.catalog import (
    FolderContents,
    SourceKind,
    VideoItem,
    VideoSource,
)
from vidcatalog.core.ports.remote_catalog import IRemoteCatalog, RemotePage
from vidcatalog.core.value_objects.pagination import PageData, PaginationState
from vidcatalog.core.value_objects.streams import ResolvedStream
from vidcatalog.services.folder_scanner import FolderScanner, paginate
from vidcatalog.services.navigation_cache import NavigationCache
from vidcatalog.services.stream_selector import StreamSelector


class UnknownSourceError(KeyError):
    """Source demandee absente du registre du catalogue."""


class CatalogService:
    """
    Service orchestrant la navigation dans les sources video.

    Coordonne:
    - Le scanner de dossiers (FolderScanner) pour les sources locales
    - Le catalogue distant (IRemoteCatalog) pour les sources reseau
    - Le selecteur de flux (StreamSelector) pour la lecture des videos distantes
    - Le cache de navigation (NavigationCache) partage par toute l'application
    """

    def __init__(
        self,
        folder_scanner: FolderScanner,
        stream_selector: StreamSelector,
        navigation_cache: NavigationCache,
        remote_catalog: Optional[IRemoteCatalog] = None,
        page_size: int = 50,
        sources: Optional[Iterable[VideoSource]] = None,
    ) -> None:
        """
        Initialise le service et branche le chargeur de prechargement du cache.

        Args:
            folder_scanner: Scanner des sources locales
            stream_selector: Selecteur de flux
            navigation_cache: Cache de navigation (singleton)
            remote_catalog: Catalogue distant (requis pour les sources reseau)
            page_size: Nombre de videos par page
            sources: Sources connues au demarrage
        """
        self._folder_scanner = folder_scanner
        self._stream_selector = stream_selector
        self._cache = navigation_cache
        self._remote_catalog = remote_catalog
        self._page_size = page_size
        self._sources: dict[str, VideoSource] = {}

        for source in sources or ():
            self.register_source(source)

        self._cache.set_page_loader(self.load_page)

    def register_source(self, source: VideoSource) -> None:
        """Ajoute ou remplace une source dans le registre."""
        self._sources[source.id] = source

    def get_source(self, source_id: str) -> VideoSource:
        """
        Retourne une source du registre.

        Raises:
            UnknownSourceError: Si la source n'est pas enregistree
        """
        try:
            return self._sources[source_id]
        except KeyError:
            raise UnknownSourceError(source_id) from None

    async def get_page(self, source_id: str, page: int = 1) -> PageData:
        """
        Retourne une page de la source, depuis le cache ou par resolution.

        Apres une resolution, les pages voisines sont prechargees en
        arriere-plan. Les erreurs du catalogue distant sont propagees.

        Args:
            source_id: Identifiant de la source
            page: Numero de page (commence a 1, les valeurs < 1 donnent la page 1)

        Returns:
            PageData avec les videos, la pagination et la source
        """
        source = self.get_source(source_id)
        page = max(page, 1)

        cached = self._cache.get_page(source_id, page)
        if cached is not None:
            return cached

        resolved = await self.load_page(source_id, page)
        result = PageData(videos=resolved.videos, pagination=resolved.pagination, source=source)
        self._cache.put_page(source_id, page, result)

        if result.pagination is not None:
            self._cache.prefetch_adjacent(source_id, page, result.pagination.total_pages)

        return result

    async def load_page(self, source_id: str, page: int) -> PageData:
        """
        Resout une page sans passer par le cache.

        Utilise comme chargeur par le prechargement du cache de navigation.
        """
        source = self.get_source(source_id)

        if source.type.is_filesystem:
            videos = self._folder_scanner.scan_source(source.root_path, source.max_depth)
            return paginate(videos, page, self._page_size)

        remote_page = await self._require_remote_catalog().fetch_page(
            source, page, self._page_size
        )
        logger.debug(
            f"Page {page} de {source_id} recuperee: {len(remote_page.videos)} videos "
            f"sur {remote_page.total_results}"
        )
        return PageData(
            videos=tuple(self._to_video_items(remote_page)),
            pagination=PaginationState.compute(page, remote_page.total_results, self._page_size),
        )

    def get_folder_contents(
        self,
        source_id: str,
        path: Optional[Path] = None,
        depth: int = 1,
    ) -> FolderContents:
        """
        Navigation dossier par dossier dans une source locale.

        Un chemin hors de la racine de la source donne un resultat vide. La
        comparaison se fait sur les chemins resolus (".." et liens symboliques).

        Args:
            source_id: Identifiant d'une source locale
            path: Dossier a lister (defaut: racine de la source)
            depth: Profondeur du dossier (1 = racine)

        Returns:
            FolderContents du dossier
        """
        source = self.get_source(source_id)
        if not source.type.is_filesystem:
            logger.warning(f"Source {source_id} sans navigation par dossier")
            return FolderContents(depth=depth)

        root = source.root_path.absolute()
        resolved_root = root.resolve()
        resolved_folder = Path(path).expanduser().resolve() if path else resolved_root

        if not resolved_folder.is_relative_to(resolved_root):
            logger.warning(f"Dossier {path} hors de la source {source_id}")
            return FolderContents(depth=depth)

        # Chemin reconstruit sous la racine declaree : identifiants identiques a scan_source
        folder = root / resolved_folder.relative_to(resolved_root)
        return self._folder_scanner.scan(folder, source.max_depth, depth, source_root=root)

    async def resolve_stream(
        self,
        video_id: str,
        preferred_languages: Optional[Sequence[str]] = None,
    ) -> ResolvedStream:
        """
        Resout le flux lisible d'une video distante.

        Raises:
            NoSuitableStreamError / NoAudioTracksError: La video ne peut pas etre lue
        """
        variants, audio_tracks = await self._require_remote_catalog().fetch_streams(video_id)
        return self._stream_selector.select_best(variants, audio_tracks, preferred_languages)

    def reset_source(self, source_id: str) -> None:
        """Vide le cache d'une source (apres modification de sa configuration)."""
        self._cache.invalidate_source(source_id)

    def _require_remote_catalog(self) -> IRemoteCatalog:
        if self._remote_catalog is None:
            raise RuntimeError("Aucun catalogue distant configure pour les sources reseau")
        return self._remote_catalog

    @staticmethod
    def _to_video_items(remote_page: RemotePage) -> list[VideoItem]:
        """Convertit les videos distantes en VideoItem."""
        return [
            VideoItem(
                id=video.id,
                title=video.title,
                url=video.url,
                source_kind=SourceKind.NETWORK,
                thumbnail=video.thumbnail,
                duration=video.duration,
            )
            for video in remote_page.videos
        ]
