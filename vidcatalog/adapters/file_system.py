"""
Adaptateur pour les operations sur le systeme de fichiers.

Implementation concrete de IFileSystem basee sur pathlib.
Fournit egalement la recherche des vignettes placees a cote des videos.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

from vidcatalog.core.ports.file_system import FileStat, IFileSystem
from vidcatalog.utils.constants import THUMBNAIL_EXTENSIONS


class FileSystemAdapter(IFileSystem):
    """
    Implementation de IFileSystem pour le systeme de fichiers reel.

    Les entrees d'un repertoire sont retournees triees par nom pour que
    l'ordre des resultats ne depende pas du systeme de fichiers.
    """

    def exists(self, path: Path) -> bool:
        """Verifie si un chemin existe."""
        return path.exists()

    def list_dir(self, path: Path) -> list[Path]:
        """Liste les entrees d'un repertoire, triees par nom (OSError si illisible)."""
        return sorted(path.iterdir(), key=lambda entry: entry.name)

    def is_dir(self, path: Path) -> bool:
        """Verifie si un chemin est un repertoire (suit les symlinks)."""
        return path.is_dir()

    def is_file(self, path: Path) -> bool:
        """Verifie si un chemin est un fichier regulier."""
        return path.is_file()

    def stat(self, path: Path) -> FileStat:
        """Lit la taille et la date de modification (OSError si illisible)."""
        st = path.stat()
        return FileStat(
            size_bytes=st.st_size,
            modified_at=datetime.fromtimestamp(st.st_mtime),
        )

    def find_thumbnail(self, video_path: Path) -> Optional[Path]:
        """
        Cherche une vignette portant le meme nom que la video.

        Les extensions sont essayees dans l'ordre de THUMBNAIL_EXTENSIONS
        (.webp, .jpg, .jpeg, .png).

        Args:
            video_path: Chemin du fichier video

        Returns:
            Chemin de la vignette, ou None si aucune n'existe
        """
        for ext in THUMBNAIL_EXTENSIONS:
            candidate = video_path.with_suffix(ext)
            if candidate.is_file():
                return candidate
        return None
