"""
Service de scan des dossiers locaux.

Resout une arborescence locale en une liste bornee en profondeur de dossiers
navigables et de videos lisibles. Au-dela de la profondeur maximale, le
contenu est "aplati" : les videos des sous-dossiers sont remontees dans le
dossier frontiere au lieu d'exiger une navigation supplementaire.

Un dossier absent ou illisible n'est pas une erreur : le scan retourne un
resultat vide et journalise l'incident.
"""

from collections import deque
from pathlib import Path
from typing import Iterable, Optional

from loguru import logger

from vidcatalog.core.entities.catalog import (
    FolderContents,
    FolderNode,
    SourceKind,
    VideoItem,
)
from vidcatalog.core.ports.file_system import IFileSystem
from vidcatalog.core.value_objects.pagination import PageData, PaginationState
from vidcatalog.utils.helpers import (
    converted_copy_origin,
    is_video_file,
    make_local_video_id,
)


class FolderScanner:
    """
    Service de scan des sources locales.

    Utilise IFileSystem pour toutes les lectures, ce qui permet de le tester
    avec un mock sans creer de fichiers sur le disque.
    """

    def __init__(self, file_system: IFileSystem) -> None:
        """
        Initialise le scanner.

        Args:
            file_system: Implementation de IFileSystem pour les lectures
        """
        self._file_system = file_system

    def scan(
        self,
        root_path: Path,
        max_depth: int,
        current_depth: int = 1,
        source_root: Optional[Path] = None,
    ) -> FolderContents:
        """
        Liste le contenu d'un dossier pour la navigation.

        Regles pour chaque entree immediate :
        - Sous-dossier et current_depth < max_depth : FolderNode a current_depth + 1
          (navigable, non developpe)
        - Sous-dossier et current_depth == max_depth : toutes les videos en dessous
          (profondeur illimitee) sont ajoutees avec flattened=True
        - Fichier video supporte : VideoItem a current_depth

        Args:
            root_path: Dossier a lister
            max_depth: Profondeur navigable maximale de la source
            current_depth: Profondeur du dossier liste (1 = racine)
            source_root: Racine de la source pour les identifiants (defaut: root_path)

        Returns:
            FolderContents, vide si le dossier est absent ou illisible
        """
        root_path = Path(root_path).expanduser().absolute()
        source_root = Path(source_root).expanduser().absolute() if source_root else root_path

        try:
            if not self._file_system.exists(root_path):
                logger.warning(f"Dossier local introuvable: {root_path}")
                return FolderContents(depth=current_depth)
            entries = self._file_system.list_dir(root_path)
        except OSError as e:
            logger.warning(f"Dossier local illisible {root_path}: {e}")
            return FolderContents(depth=current_depth)

        folders: list[FolderNode] = []
        videos: list[VideoItem] = []
        flattened_depth = self.flattened_depth(max_depth)

        for entry in entries:
            try:
                if self._file_system.is_dir(entry):
                    if current_depth < max_depth:
                        folders.append(
                            FolderNode(name=entry.name, path=entry, depth=current_depth + 1)
                        )
                    elif current_depth == max_depth:
                        videos.extend(
                            self._collect_flattened(entry, flattened_depth, source_root)
                        )
                    # current_depth > max_depth : hors navigation, ignore
                elif self._file_system.is_file(entry) and is_video_file(entry):
                    videos.append(self._build_video_item(entry, current_depth, source_root))
            except OSError as e:
                logger.warning(f"Entree ignoree {entry}: {e}")

        videos = filter_duplicate_videos(videos)
        logger.debug(
            f"Scan {root_path}: {len(folders)} dossiers, {len(videos)} videos "
            f"(profondeur {current_depth}/{max_depth})"
        )
        return FolderContents(folders=tuple(folders), videos=tuple(videos), depth=current_depth)

    def scan_source(self, root_path: Path, max_depth: int) -> list[VideoItem]:
        """
        Liste toutes les videos d'une source locale.

        Parcourt chaque dossier navigable (en largeur) avec les memes regles
        que scan() : le resultat contient exactement les videos que la
        navigation dossier par dossier afficherait.

        Args:
            root_path: Dossier racine de la source
            max_depth: Profondeur navigable maximale

        Returns:
            Liste des videos de la source (vide si la racine est absente)
        """
        root_path = Path(root_path).expanduser().absolute()
        videos: list[VideoItem] = []
        pending: deque[tuple[Path, int]] = deque([(root_path, 1)])

        while pending:
            folder, depth = pending.popleft()
            contents = self.scan(folder, max_depth, depth, source_root=root_path)
            videos.extend(contents.videos)
            pending.extend((node.path, node.depth) for node in contents.folders)

        # Une copie et son original peuvent etre listes par des dossiers differents
        videos = filter_duplicate_videos(videos)
        logger.debug(f"Source {root_path}: {len(videos)} videos (max_depth={max_depth})")
        return videos

    @staticmethod
    def flattened_depth(max_depth: int) -> int:
        """
        Profondeur attribuee aux videos aplaties.

        Les videos aplaties sont rattachees a la profondeur qui precede la
        frontiere (max_depth - 1), jamais en dessous de 1.
        """
        return max(max_depth - 1, 1)

    def _collect_flattened(
        self,
        directory: Path,
        depth: int,
        source_root: Path,
    ) -> list[VideoItem]:
        """
        Collecte toutes les videos sous un dossier, a n'importe quelle profondeur.

        Parcours iteratif (pile explicite) : une arborescence tres profonde ne
        peut pas epuiser la pile d'appels. Les sous-dossiers illisibles sont
        ignores sans interrompre la collecte, et un dossier deja visite
        (boucle de symlinks) n'est pas reparcouru.
        """
        videos: list[VideoItem] = []
        pending: list[Path] = [directory]
        visited: set[Path] = set()

        while pending:
            current = pending.pop()
            try:
                resolved = current.resolve()
                if resolved in visited:
                    continue
                visited.add(resolved)
                entries = self._file_system.list_dir(current)
            except (OSError, RuntimeError) as e:
                logger.warning(f"Sous-dossier ignore lors de l'aplatissement {current}: {e}")
                continue

            subdirectories: list[Path] = []
            for entry in entries:
                try:
                    if self._file_system.is_dir(entry):
                        subdirectories.append(entry)
                    elif self._file_system.is_file(entry) and is_video_file(entry):
                        videos.append(
                            self._build_video_item(entry, depth, source_root, flattened=True)
                        )
                except OSError as e:
                    logger.warning(f"Entree ignoree {entry}: {e}")

            # Pile LIFO : empiler a l'envers pour parcourir dans l'ordre de listage
            pending.extend(reversed(subdirectories))

        return filter_duplicate_videos(videos)

    def _build_video_item(
        self,
        file_path: Path,
        depth: int,
        source_root: Path,
        flattened: bool = False,
    ) -> VideoItem:
        """
        Cree un VideoItem pour un fichier video local.

        Leve OSError si le fichier ne peut pas etre lu (gere par l'appelant).
        """
        file_stat = self._file_system.stat(file_path)
        thumbnail = self._file_system.find_thumbnail(file_path)

        try:
            relative_path = file_path.relative_to(source_root).as_posix()
        except ValueError:
            relative_path = file_path.name

        return VideoItem(
            id=make_local_video_id(file_path, source_root),
            title=file_path.stem,
            url=str(file_path),
            source_kind=SourceKind.LOCAL,
            thumbnail=thumbnail.as_uri() if thumbnail else "",
            duration=0,  # Extraite a la demande par le lecteur
            depth=depth,
            flattened=flattened,
            extension=file_path.suffix.lower(),
            size_bytes=file_stat.size_bytes,
            modified_at=file_stat.modified_at,
            relative_path=relative_path,
        )


def filter_duplicate_videos(videos: Iterable[VideoItem]) -> list[VideoItem]:
    """
    Retire les copies converties dont l'original est present.

    Une copie "judo/.converted/kata.mp4" est ecartee si la liste contient une
    video non convertie de meme nom (sans extension) dans "judo". Une copie
    sans original est conservee. L'ordre des videos est preserve.

    Args:
        videos: Videos d'un scan

    Returns:
        Les videos sans les copies redondantes
    """
    videos = list(videos)
    originals = {
        (Path(video.url).parent, Path(video.url).stem)
        for video in videos
        if converted_copy_origin(Path(video.url)) is None
    }

    filtered: list[VideoItem] = []
    for video in videos:
        origin = converted_copy_origin(Path(video.url))
        if origin is not None and (Path(origin), Path(video.url).stem) in originals:
            logger.debug(f"Copie convertie ignoree (original present): {video.url}")
            continue
        filtered.append(video)
    return filtered


def paginate(videos: list[VideoItem], page: int, page_size: int) -> PageData:
    """
    Extrait une page d'une liste de videos.

    Args:
        videos: Liste complete des videos de la source
        page: Numero de page demande (commence a 1, les valeurs < 1 donnent la page 1)
        page_size: Nombre de videos par page

    Returns:
        PageData avec les videos de la page et l'etat de pagination
    """
    page = max(page, 1)
    start = (page - 1) * page_size
    return PageData(
        videos=tuple(videos[start:start + page_size]),
        pagination=PaginationState.compute(page, len(videos), page_size),
    )
