"""
Objets valeur pour la pagination des pages de catalogue.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Optional

from vidcatalog.core.entities.catalog import VideoItem


@dataclass(frozen=True)
class PaginationState:
    """
    Etat de pagination d'une page de catalogue.

    Attributs :
        current_page : Numero de la page (commence a 1)
        total_pages : Nombre total de pages
        total_videos : Nombre total de videos dans la source
        page_size : Nombre de videos par page
    """

    current_page: int
    total_pages: int
    total_videos: int
    page_size: int

    @classmethod
    def compute(cls, current_page: int, total_videos: int, page_size: int) -> "PaginationState":
        """Calcule l'etat de pagination (total_pages = ceil(total / page_size))."""
        return cls(
            current_page=current_page,
            total_pages=math.ceil(total_videos / page_size) if page_size > 0 else 0,
            total_videos=total_videos,
            page_size=page_size,
        )

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1


@dataclass(frozen=True)
class PageData:
    """
    Page resolue d'une source, telle que stockee dans le cache de navigation.

    Attributs :
        videos : Videos de la page
        pagination : Etat de pagination
        source : Metadonnees de la source (optionnelles, rafraichies avec la page)
    """

    videos: tuple[VideoItem, ...] = field(default_factory=tuple)
    pagination: Optional[PaginationState] = None
    source: Optional[Any] = None
