"""
Objets valeur pour les flux encodés d'une vidéo distante.

Les descripteurs fournis par l'intégration du catalogue distant sont des
dictionnaires faiblement typés. Ils sont convertis ici en objets immutables
avec une règle explicite : toute valeur numérique absente vaut 0, ce qui la
place en dernière priorité lors des tris sans jamais provoquer d'erreur.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional


def _as_number(value: Any) -> float:
    """Convertit une valeur numérique optionnelle (None, "", "30") en nombre, 0 par défaut."""
    if value is None or value == "":
        return 0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class StreamVariant:
    """
    Variante vidéo encodée (vidéo seule ou multiplexée avec l'audio).

    Attributs :
        mime_type : Descripteur de conteneur (ex: 'video/mp4; codecs="avc1, mp4a"')
        url : URL du flux
        width : Largeur en pixels (0 si inconnue)
        height : Hauteur en pixels (0 si inconnue)
        fps : Images par seconde (0 si inconnu)
        bitrate : Débit en bits/s (0 si inconnu)
        quality_label : Libellé de qualité fourni par la source (ex: "1080p60")
        has_audio : True si la variante contient aussi l'audio (format combiné)
    """

    mime_type: str
    url: str
    width: int = 0
    height: int = 0
    fps: float = 0
    bitrate: int = 0
    quality_label: str = ""
    has_audio: bool = False

    @property
    def resolution(self) -> str:
        """Résolution au format "LxH"."""
        return f"{self.width}x{self.height}"

    @property
    def quality(self) -> str:
        """Libellé de qualité lisible, dérivé de la hauteur si absent."""
        if self.quality_label:
            return self.quality_label
        return f"{self.height}p" if self.height else "unknown"

    @classmethod
    def from_descriptor(cls, descriptor: Mapping[str, Any]) -> "StreamVariant":
        """
        Construit une variante depuis un descripteur brut.

        Accepte les clés du catalogue distant (mimeType, qualityLabel) comme
        celles de yt-dlp (ext, format_note, acodec).
        """
        mime_type = descriptor.get("mimeType") or descriptor.get("mime_type") or ""
        if not mime_type and descriptor.get("ext"):
            mime_type = f"video/{descriptor['ext']}"

        acodec = descriptor.get("acodec")
        if "has_audio" in descriptor:
            has_audio = bool(descriptor["has_audio"])
        elif acodec is not None:
            has_audio = acodec != "none"
        else:
            has_audio = "mp4a" in mime_type or "opus" in mime_type or "audio" in mime_type

        return cls(
            mime_type=mime_type,
            url=descriptor.get("url") or "",
            width=int(_as_number(descriptor.get("width"))),
            height=int(_as_number(descriptor.get("height"))),
            fps=_as_number(descriptor.get("fps")),
            bitrate=int(_as_number(descriptor.get("bitrate") or descriptor.get("tbr"))),
            quality_label=(
                descriptor.get("qualityLabel")
                or descriptor.get("quality_label")
                or descriptor.get("format_note")
                or ""
            ),
            has_audio=has_audio,
        )


@dataclass(frozen=True)
class AudioTrack:
    """
    Piste audio séparée.

    Attributs :
        mime_type : Descripteur de conteneur (ex: "audio/mp4", "audio/webm")
        url : URL du flux
        bitrate : Débit en bits/s (0 si inconnu)
        language : Code de langue (ex: "en", "fr"), vide si inconnu
    """

    mime_type: str
    url: str
    bitrate: int = 0
    language: str = ""

    @classmethod
    def from_descriptor(cls, descriptor: Mapping[str, Any]) -> "AudioTrack":
        """Construit une piste audio depuis un descripteur brut."""
        mime_type = descriptor.get("mimeType") or descriptor.get("mime_type") or ""
        if not mime_type and descriptor.get("ext"):
            mime_type = f"audio/{descriptor['ext']}"
        return cls(
            mime_type=mime_type,
            url=descriptor.get("url") or "",
            bitrate=int(_as_number(descriptor.get("bitrate") or descriptor.get("abr"))),
            language=descriptor.get("language") or "",
        )


@dataclass(frozen=True)
class ResolvedStream:
    """
    Résultat final de la sélection de flux.

    Soit une URL unique (format combiné), soit une paire vidéo + audio.

    Attributs :
        video_url : URL du flux vidéo (ou combiné)
        quality : Libellé de qualité lisible
        resolution : Résolution "LxH"
        fps : Images par seconde
        audio_url : URL de la piste audio séparée (None si combiné)
        audio_language : Langue de la piste audio séparée (None si combiné)
    """

    video_url: str
    quality: str
    resolution: str
    fps: float = 0
    audio_url: Optional[str] = None
    audio_language: Optional[str] = None

    @property
    def is_combined(self) -> bool:
        """True si une seule URL contient vidéo et audio."""
        return self.audio_url is None

    @property
    def references(self) -> tuple[str, Optional[str]]:
        """Références lisibles : (url vidéo, url audio ou None)."""
        return (self.video_url, self.audio_url)
