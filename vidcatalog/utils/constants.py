"""
Constantes globales pour VidCatalog.

Ce module contient les constantes utilisees dans l'application:
- Extensions video supportees pour les sources locales
- Extensions des vignettes placees a cote des videos
- Extensions des manifestes de streaming adaptatif
- Correspondance libelle de qualite -> hauteur maximale
"""

# Extensions video reconnues (comparaison insensible a la casse)
VIDEO_EXTENSIONS = frozenset({
    ".mp4",
    ".mkv",
    ".webm",
    ".avi",
    ".mov",
    ".m4v",
})

# Vignettes "sidecar" (meme nom que la video), par ordre de priorite
THUMBNAIL_EXTENSIONS = (".webp", ".jpg", ".jpeg", ".png")

# Manifestes de streaming adaptatif (HLS, DASH)
MANIFEST_EXTENSIONS = (".m3u8", ".mpd")

# Hauteur maximale par libelle de qualite
QUALITY_HEIGHTS = {
    "144p": 144,
    "240p": 240,
    "360p": 360,
    "480p": 480,
    "720p": 720,
    "1080p": 1080,
    "1440p": 1440,
    "2160p": 2160,
    "4k": 2160,
}

# Hauteur utilisee quand le libelle de qualite est inconnu
DEFAULT_MAX_HEIGHT = 1080

# Dossier des copies converties (transcodage) placees a cote des originaux
CONVERTED_DIR_NAME = ".converted"
