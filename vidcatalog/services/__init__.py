"""
Couche application : services de resolution du catalogue.

- FolderScanner : Scan borne en profondeur des sources locales
- StreamSelector : Selection du flux lisible d'une video distante
- NavigationCache : Cache de pages et de metadonnees avec prechargement
- CatalogService : Orchestration cache -> resolution -> prechargement
"""

from vidcatalog.services.catalog import CatalogService, UnknownSourceError
from vidcatalog.services.folder_scanner import FolderScanner, paginate
from vidcatalog.services.navigation_cache import CacheStats, NavigationCache
from vidcatalog.services.stream_selector import (
    NoAudioTracksError,
    NoSuitableStreamError,
    StreamSelector,
    StreamUnavailableError,
)

__all__ = [
    "CatalogService",
    "UnknownSourceError",
    "FolderScanner",
    "paginate",
    "NavigationCache",
    "CacheStats",
    "StreamSelector",
    "StreamUnavailableError",
    "NoSuitableStreamError",
    "NoAudioTracksError",
]
