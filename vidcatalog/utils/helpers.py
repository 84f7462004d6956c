"""
Fonctions utilitaires partagees dans le projet VidCatalog.

Ce module centralise les fonctions reutilisees a travers le codebase :
- make_local_video_id : identifiant stable d'une video locale
- is_video_file : filtre par extension supportee
- converted_copy_origin : dossier d'origine d'une copie convertie
- is_manifest_url : detection des manifestes de streaming adaptatif
- parse_max_quality : libelle de qualite -> hauteur maximale
"""

import hashlib
import re
from pathlib import Path, PurePath
from typing import Optional
from urllib.parse import urlparse

from vidcatalog.utils.constants import (
    CONVERTED_DIR_NAME,
    DEFAULT_MAX_HEIGHT,
    MANIFEST_EXTENSIONS,
    QUALITY_HEIGHTS,
    VIDEO_EXTENSIONS,
)

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def make_local_video_id(file_path: Path, source_root: Path) -> str:
    """
    Genere l'identifiant d'une video locale a partir de son chemin relatif.

    Tous les caracteres non alphanumeriques sont remplaces par '-' pour que
    l'identifiant soit utilisable dans une URL ou une cle de cache. Un
    suffixe court (sha1 du chemin relatif) distingue les chemins que la
    normalisation confond ("a b.mp4" et "a-b.mp4").
    Un fichier hors de source_root garde son chemin complet.

    Ex: "judo/Tai Otoshi.mp4" -> "local-judo-Tai-Otoshi-mp4-<8 hex>"
    """
    try:
        relative = file_path.relative_to(source_root)
    except ValueError:
        relative = file_path
    relative_posix = relative.as_posix()
    digest = hashlib.sha1(relative_posix.encode("utf-8")).hexdigest()[:8]
    return f"local-{_NON_ALNUM.sub('-', relative_posix)}-{digest}"


def is_video_file(path: PurePath) -> bool:
    """Verifie si l'extension du fichier est une extension video supportee."""
    return path.suffix.lower() in VIDEO_EXTENSIONS


def converted_copy_origin(path: PurePath) -> Optional[PurePath]:
    """
    Retourne le dossier de l'original d'une copie convertie.

    Une copie convertie est rangee sous un dossier ".converted" place a cote
    de l'original : "judo/.converted/kata.mp4" -> "judo".

    Returns:
        Le dossier parent du premier ".converted", None si ce n'est pas une copie
    """
    parts = path.parts
    if CONVERTED_DIR_NAME not in parts:
        return None
    return PurePath(*parts[:parts.index(CONVERTED_DIR_NAME)])


def is_manifest_url(url: str) -> bool:
    """
    Detecte une reference de manifeste (HLS .m3u8, DASH .mpd).

    Seul le chemin de l'URL est examine : la query string est ignoree.
    """
    if not url:
        return False
    path = urlparse(url).path or url
    return path.lower().endswith(MANIFEST_EXTENSIONS)


def parse_max_quality(max_quality: str) -> int:
    """
    Convertit un libelle de qualite ("720p", "4K"...) en hauteur maximale.

    Un libelle inconnu est traite comme 1080p.
    """
    return QUALITY_HEIGHTS.get(max_quality.strip().lower(), DEFAULT_MAX_HEIGHT)
