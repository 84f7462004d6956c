"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

Ports système de fichiers :
- IFileSystem : Lecture des répertoires et métadonnées de fichiers
- FileStat : Taille et date de modification

Ports catalogue distant :
- IRemoteCatalog : Pages de vidéos et descripteurs de flux
- RemotePage / RemoteVideo : Résultats d'un catalogue distant
"""

from vidcatalog.core.ports.file_system import FileStat, IFileSystem
from vidcatalog.core.ports.remote_catalog import (
    IRemoteCatalog,
    RemotePage,
    RemoteVideo,
)

__all__ = [
    # Système de fichiers
    "IFileSystem",
    "FileStat",
    # Catalogue distant
    "IRemoteCatalog",
    "RemotePage",
    "RemoteVideo",
]
