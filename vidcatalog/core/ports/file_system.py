"""
Interfaces ports pour le système de fichiers.

Interfaces abstraites (ports) définissant les contrats de lecture nécessaires
au scan des sources locales. Le scanner ne produit aucun artefact sur disque :
il ne fait que lister, distinguer dossiers/fichiers et lire taille et date.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class FileStat:
    """
    Métadonnées d'un fichier.

    Attributs :
        size_bytes : Taille du fichier en octets
        modified_at : Date de dernière modification
    """

    size_bytes: int
    modified_at: datetime


class IFileSystem(ABC):
    """
    Interface pour les opérations de lecture sur les fichiers.

    Les méthodes list_dir et stat lèvent OSError si le chemin est
    inaccessible : c'est à l'appelant de décider comment récupérer.
    """

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Vérifie si un chemin existe."""
        ...

    @abstractmethod
    def list_dir(self, path: Path) -> list[Path]:
        """
        Liste les entrées immédiates d'un répertoire.

        Args :
            path : Répertoire à lister

        Retourne :
            Chemins complets des entrées

        Lève :
            OSError si le répertoire ne peut pas être énuméré
        """
        ...

    @abstractmethod
    def is_dir(self, path: Path) -> bool:
        """Vérifie si un chemin est un répertoire."""
        ...

    @abstractmethod
    def is_file(self, path: Path) -> bool:
        """Vérifie si un chemin est un fichier régulier."""
        ...

    @abstractmethod
    def stat(self, path: Path) -> FileStat:
        """
        Lit la taille et la date de modification d'un fichier.

        Lève :
            OSError si le fichier ne peut pas être lu
        """
        ...

    @abstractmethod
    def find_thumbnail(self, video_path: Path) -> Optional[Path]:
        """
        Cherche une vignette portant le même nom que la vidéo.

        Retourne :
            Chemin de la vignette, ou None si aucune n'existe
        """
        ...
