"""
Utilitaires et constantes pour VidCatalog.

Ce module contient les constantes et fonctions utilitaires partagees.
"""

from vidcatalog.utils.constants import (
    CONVERTED_DIR_NAME,
    MANIFEST_EXTENSIONS,
    QUALITY_HEIGHTS,
    THUMBNAIL_EXTENSIONS,
    VIDEO_EXTENSIONS,
)

__all__ = [
    "VIDEO_EXTENSIONS",
    "THUMBNAIL_EXTENSIONS",
    "MANIFEST_EXTENSIONS",
    "QUALITY_HEIGHTS",
    "CONVERTED_DIR_NAME",
]
