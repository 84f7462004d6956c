"""
Interfaces ports pour les catalogues distants.

Le transport (API HTTP, yt-dlp, client UPnP) est un collaborateur externe :
ce port définit seulement ce dont le catalogue a besoin, des listes de
descripteurs déjà analysés.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from vidcatalog.core.entities.catalog import VideoSource
from vidcatalog.core.value_objects.streams import AudioTrack, StreamVariant


@dataclass(frozen=True)
class RemoteVideo:
    """
    Vidéo décrite par un catalogue distant.

    Attributs :
        id : Identifiant distant (ex: id YouTube, URL DLNA)
        title : Titre
        url : Référence lisible (page de lecture ou URL directe)
        thumbnail : URL de la vignette
        duration : Durée en secondes
    """

    id: str
    title: str
    url: str
    thumbnail: str = ""
    duration: int = 0


@dataclass(frozen=True)
class RemotePage:
    """
    Page de résultats d'un catalogue distant.

    Attributs :
        videos : Vidéos de la page
        total_results : Nombre total de vidéos de la source
    """

    videos: tuple[RemoteVideo, ...] = field(default_factory=tuple)
    total_results: int = 0


class IRemoteCatalog(ABC):
    """
    Interface d'un catalogue distant (chaînes, playlists, partages réseau).
    """

    @abstractmethod
    async def fetch_page(self, source: VideoSource, page: int, page_size: int) -> RemotePage:
        """
        Récupère une page de vidéos d'une source réseau.

        Args :
            source : Source réseau configurée
            page : Numéro de page (commence à 1)
            page_size : Nombre de vidéos par page

        Retourne :
            RemotePage avec les vidéos et le total de la source
        """
        ...

    @abstractmethod
    async def fetch_streams(self, video_id: str) -> tuple[list[StreamVariant], list[AudioTrack]]:
        """
        Récupère les variantes vidéo et les pistes audio d'une vidéo distante.

        Args :
            video_id : Identifiant distant de la vidéo

        Retourne :
            Tuple (variantes vidéo, pistes audio)
        """
        ...
