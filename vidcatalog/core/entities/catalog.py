"""
Entités du catalogue vidéo.

Entités représentant les sources configurées et les éléments navigables
produits à chaque scan local ou récupération distante : dossiers et vidéos.
Les éléments sont reconstruits à chaque résolution et ne sont jamais modifiés.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional


class SourceKind(Enum):
    """Origine d'un élément vidéo du catalogue."""

    LOCAL = "folder-local"
    NETWORK = "network"


class SourceType(Enum):
    """Type d'une source vidéo configurée."""

    LOCAL = "local"
    DLNA = "dlna"
    YOUTUBE_CHANNEL = "youtube_channel"
    YOUTUBE_PLAYLIST = "youtube_playlist"

    @property
    def is_filesystem(self) -> bool:
        """Vérifie si la source est résolue par le scanner de dossiers."""
        return self is SourceType.LOCAL


@dataclass(frozen=True)
class VideoSource:
    """
    Source vidéo configurée par l'administrateur.

    Attributs :
        id : Identifiant unique de la source (clé du cache)
        type : Type de source (local, dlna, chaîne ou playlist distante)
        title : Titre affiché
        location : Chemin du dossier racine (local) ou URL (réseau)
        max_depth : Profondeur navigable maximale (sources locales)
    """

    id: str
    type: SourceType
    title: str
    location: str
    max_depth: int = 3

    @property
    def root_path(self) -> Path:
        """Dossier racine d'une source locale."""
        return Path(self.location).expanduser()


@dataclass(frozen=True)
class FolderNode:
    """
    Dossier navigable découvert lors d'un scan.

    Attributs :
        name : Nom du dossier
        path : Chemin absolu du dossier
        depth : Profondeur de navigation (profondeur de découverte + 1)
    """

    name: str
    path: Path
    depth: int


@dataclass(frozen=True)
class VideoItem:
    """
    Élément vidéo lisible du catalogue.

    Un VideoItem est l'entité présentée par la couche de navigation,
    qu'il provienne d'un dossier local ou d'un catalogue distant.

    Attributs :
        id : Identifiant stable (dérivé du chemin relatif ou de l'id distant)
        title : Titre affiché
        url : Référence lisible (chemin du fichier ou URL)
        source_kind : Origine de l'élément (LOCAL ou NETWORK)
        thumbnail : Référence de la vignette (vide si aucune)
        duration : Durée en secondes (0 si inconnue)
        depth : Profondeur de navigation (>= 1)
        flattened : True si l'élément provient d'au-delà de la profondeur maximale
        extension : Extension du fichier (sources locales)
        size_bytes : Taille en octets (sources locales)
        modified_at : Date de dernière modification (sources locales)
        relative_path : Chemin relatif à la racine de la source (sources locales)
    """

    id: str
    title: str
    url: str
    source_kind: SourceKind
    thumbnail: str = ""
    duration: int = 0
    depth: int = 1
    flattened: bool = False
    extension: Optional[str] = None
    size_bytes: Optional[int] = None
    modified_at: Optional[datetime] = None
    relative_path: Optional[str] = None


@dataclass(frozen=True)
class FolderContents:
    """
    Résultat d'un scan de dossier.

    Attributs :
        folders : Sous-dossiers navigables (non développés)
        videos : Vidéos du dossier, plus les vidéos aplaties à la frontière
        depth : Profondeur à laquelle le scan a été effectué
    """

    folders: tuple[FolderNode, ...] = field(default_factory=tuple)
    videos: tuple[VideoItem, ...] = field(default_factory=tuple)
    depth: int = 1
