"""
Cache de navigation en memoire avec TTL differencies et prechargement.

Deux stores independants :
- Pages (cle "{source_id}:page:{page}") : TTL de 5 minutes, 50 entrees max
- Metadonnees de source (cle source_id) : TTL de 30 minutes, 20 entrees max

Le cache n'est pas persistant : il est reconstruit a chaque demarrage.

Modele de concurrence : une seule boucle asyncio possede l'etat du cache.
Les operations publiques sont synchrones et s'executent sans jamais ceder
la main, ce qui rend chaque insertion atomique vis-a-vis des lectures.
Seul le prechargement est asynchrone (taches asyncio differees). Un usage
multi-thread imposerait un verrou autour des deux stores et de l'ensemble
des prechargements en cours.

Eviction : par date d'ecriture la plus ancienne, pas par date de lecture
(ce n'est pas un vrai LRU).
"""

import asyncio
import time
from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable, Optional

from loguru import logger

from vidcatalog.core.value_objects.pagination import PageData

PageLoader = Callable[[str, int], Awaitable[Optional[PageData]]]


@dataclass
class CacheEntry:
    """
    Entree du cache.

    Attributs :
        key : Cle proprietaire de l'entree
        payload : Donnees mises en cache (PageData ou metadonnees de source)
        timestamp : Date d'insertion ou de dernier rafraichissement (horloge du cache)
    """

    key: str
    payload: Any
    timestamp: float


@dataclass(frozen=True)
class CacheStats:
    """
    Statistiques du cache de navigation.

    Attributs :
        pages : Nombre de pages en cache
        sources : Nombre de metadonnees de source en cache
        prefetching : Nombre de prechargements en cours
    """

    pages: int
    sources: int
    prefetching: int


class NavigationCache:
    """
    Cache de navigation a deux niveaux.

    Construit une seule fois au demarrage (singleton du container) et injecte
    dans les composants qui pilotent la navigation.

    Attributes:
        PAGE_TTL: Duree de vie d'une page (5 minutes)
        SOURCE_TTL: Duree de vie des metadonnees de source (30 minutes)
        MAX_PAGES: Nombre maximal de pages conservees
        MAX_SOURCES: Nombre maximal de sources conservees
        PREFETCH_DELAY: Delai avant un prechargement (secondes)

    Example:
        cache = NavigationCache(page_loader=catalog.load_page)
        cache.put_page("src-1", 1, page_data)
        data = cache.get_page("src-1", 1)
        cache.prefetch_adjacent("src-1", 1, total_pages=4)
    """

    PAGE_TTL = 5 * 60  # 5 minutes en secondes
    SOURCE_TTL = 30 * 60  # 30 minutes en secondes
    MAX_PAGES = 50
    MAX_SOURCES = 20
    PREFETCH_DELAY = 0.1

    def __init__(
        self,
        page_loader: Optional[PageLoader] = None,
        page_ttl: float = PAGE_TTL,
        source_ttl: float = SOURCE_TTL,
        max_pages: int = MAX_PAGES,
        max_sources: int = MAX_SOURCES,
        prefetch_delay: float = PREFETCH_DELAY,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialise le cache.

        Args:
            page_loader: Coroutine (source_id, page) -> PageData utilisee pour
                         le prechargement (peut etre fournie plus tard)
            page_ttl: Duree de vie d'une page en secondes
            source_ttl: Duree de vie des metadonnees de source en secondes
            max_pages: Nombre maximal de pages
            max_sources: Nombre maximal de sources
            prefetch_delay: Delai avant chaque prechargement en secondes
            clock: Horloge monotone (injectable pour les tests)
        """
        self._page_loader = page_loader
        self._page_ttl = page_ttl
        self._source_ttl = source_ttl
        self._max_pages = max_pages
        self._max_sources = max_sources
        self._prefetch_delay = prefetch_delay
        self._clock = clock

        self._pages: dict[str, CacheEntry] = {}
        self._sources: dict[str, CacheEntry] = {}
        self._prefetching: set[str] = set()
        # La boucle ne garde que des references faibles sur les taches
        self._tasks: set[asyncio.Task[None]] = set()

    def set_page_loader(self, page_loader: PageLoader) -> None:
        """Definit la coroutine de chargement utilisee par le prechargement."""
        self._page_loader = page_loader

    @staticmethod
    def page_key(source_id: str, page: int) -> str:
        """Cle de cache d'une page."""
        return f"{source_id}:page:{page}"

    def _is_valid(self, entry: CacheEntry, ttl: float) -> bool:
        """Verifie si une entree est encore dans son TTL."""
        return self._clock() - entry.timestamp < ttl

    def _has_live_page(self, key: str) -> bool:
        """Verifie la presence d'une page valide sans modifier le cache."""
        entry = self._pages.get(key)
        return entry is not None and self._is_valid(entry, self._page_ttl)

    # ====================
    # Pages
    # ====================

    def get_page(self, source_id: str, page: int) -> Optional[PageData]:
        """
        Recupere une page du cache.

        Args:
            source_id: Identifiant de la source
            page: Numero de page

        Returns:
            La page si presente et valide, None sinon (une page expiree est supprimee)
        """
        key = self.page_key(source_id, page)
        entry = self._pages.get(key)

        if entry is None:
            return None

        if self._is_valid(entry, self._page_ttl):
            logger.debug(f"Cache HIT {key} ({self._clock() - entry.timestamp:.1f}s)")
            return entry.payload

        logger.debug(f"Cache EXPIRED {key}, suppression")
        del self._pages[key]
        return None

    def put_page(self, source_id: str, page: int, payload: PageData) -> None:
        """
        Stocke une page (remplace l'entree existante avec un horodatage neuf).

        Si payload.source est renseigne, les metadonnees de la source sont
        rafraichies dans le meme appel. Un nettoyage de capacite suit.

        Args:
            source_id: Identifiant de la source
            page: Numero de page
            payload: Page resolue
        """
        key = self.page_key(source_id, page)
        self._pages[key] = CacheEntry(key=key, payload=payload, timestamp=self._clock())
        logger.debug(f"Page mise en cache {key} ({len(payload.videos)} videos)")

        if payload.source is not None:
            self.put_source_metadata(source_id, payload.source)

        self._cleanup()

    # ====================
    # Metadonnees de source
    # ====================

    def get_source_metadata(self, source_id: str) -> Optional[Any]:
        """
        Recupere les metadonnees d'une source.

        Returns:
            Les metadonnees si presentes et valides, None sinon
        """
        entry = self._sources.get(source_id)

        if entry is None:
            return None

        if self._is_valid(entry, self._source_ttl):
            logger.debug(f"Cache HIT metadonnees {source_id}")
            return entry.payload

        del self._sources[source_id]
        return None

    def put_source_metadata(self, source_id: str, payload: Any) -> None:
        """Stocke les metadonnees d'une source avec un horodatage neuf."""
        self._sources[source_id] = CacheEntry(
            key=source_id, payload=payload, timestamp=self._clock()
        )

    # ====================
    # Prechargement
    # ====================

    def prefetch_adjacent(
        self,
        source_id: str,
        current_page: int,
        total_pages: int,
    ) -> list["asyncio.Task[None]"]:
        """
        Precharge en arriere-plan les pages voisines (suivante et precedente).

        Une page deja en cache ou deja en cours de prechargement est ignoree.
        Hors d'une boucle asyncio en cours, rien n'est planifie.

        Args:
            source_id: Identifiant de la source
            current_page: Page affichee
            total_pages: Nombre total de pages

        Returns:
            Les taches de prechargement planifiees (au plus deux)
        """
        if self._page_loader is None:
            logger.debug(f"Prechargement ignore pour {source_id}: aucun chargeur configure")
            return []

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(f"Prechargement ignore pour {source_id}: aucune boucle asyncio active")
            return []

        candidates: list[int] = []
        if current_page + 1 <= total_pages:
            candidates.append(current_page + 1)
        if current_page - 1 >= 1:
            candidates.append(current_page - 1)

        tasks: list[asyncio.Task[None]] = []
        for page in candidates:
            key = self.page_key(source_id, page)
            if self._has_live_page(key) or key in self._prefetching:
                continue

            task = loop.create_task(self._prefetch(source_id, page, key))
            self._prefetching.add(key)
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
            tasks.append(task)

        return tasks

    async def _prefetch(self, source_id: str, page: int, key: str) -> None:
        """
        Tache de prechargement d'une page.

        Verifie deux fois que la page n'a pas ete resolue entre-temps
        (avant le chargement et avant l'ecriture) : si c'est le cas, le
        resultat est abandonne. Les echecs sont journalises, jamais propages,
        et la cle est toujours retiree des prechargements en cours.
        """
        try:
            await asyncio.sleep(self._prefetch_delay)

            if self._has_live_page(key):
                return

            logger.debug(f"Prechargement de {key}")
            result = await self._page_loader(source_id, page)

            if result is None or self._has_live_page(key):
                return

            source = self.get_source_metadata(source_id)
            if source is None:
                logger.debug(f"Prechargement de {key} abandonne: metadonnees absentes")
                return

            self.put_page(source_id, page, replace(result, source=source))
        except Exception as e:
            logger.warning(f"Echec du prechargement de {key}: {e}")
        finally:
            self._prefetching.discard(key)

    # ====================
    # Maintenance
    # ====================

    def invalidate_source(self, source_id: str) -> None:
        """Supprime les metadonnees et toutes les pages d'une source."""
        prefix = f"{source_id}:page:"
        removed = [key for key in self._pages if key.startswith(prefix)]
        for key in removed:
            del self._pages[key]
        self._sources.pop(source_id, None)
        logger.debug(f"Cache de la source {source_id} vide ({len(removed)} pages)")

    def clear(self) -> None:
        """Vide les deux stores et annule les prechargements en cours."""
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()
        self._pages.clear()
        self._sources.clear()
        self._prefetching.clear()
        logger.debug("Cache de navigation vide")

    def stats(self) -> CacheStats:
        """Retourne la taille des stores et le nombre de prechargements en cours."""
        return CacheStats(
            pages=len(self._pages),
            sources=len(self._sources),
            prefetching=len(self._prefetching),
        )

    def _cleanup(self) -> None:
        """
        Nettoyage de capacite apres chaque put_page.

        Supprime d'abord les entrees expirees des deux stores, puis evince
        les entrees les plus anciennes (par date d'ecriture) au-dela de la
        capacite maximale.
        """
        self._evict(self._pages, self._page_ttl, self._max_pages)
        self._evict(self._sources, self._source_ttl, self._max_sources)

    def _evict(self, store: dict[str, CacheEntry], ttl: float, capacity: int) -> None:
        """Supprime les entrees expirees puis les plus anciennes d'un store."""
        for key in [k for k, entry in store.items() if not self._is_valid(entry, ttl)]:
            del store[key]

        overflow = len(store) - capacity
        if overflow > 0:
            oldest = sorted(store.values(), key=lambda entry: entry.timestamp)[:overflow]
            for entry in oldest:
                del store[entry.key]
            logger.debug(f"{overflow} entrees evincees (capacite {capacity})")
