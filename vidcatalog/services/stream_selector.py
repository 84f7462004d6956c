"""
Service de selection du flux lisible d'une video distante.

Ce module choisit, parmi les variantes encodees d'une video, une reference
lisible : une URL unique (format combine video + audio) ou une paire
video + audio separee.

Politique par paliers (le premier ensemble non vide l'emporte):
1. Formats combines, conteneur prefere (mp4), hors manifeste
2. Meilleure video seule, conteneur prefere, hors manifeste + meilleure piste audio
3. Paliers 1-2 sur toutes les variantes hors manifeste, quel que soit le conteneur
4. Echec explicite (NoSuitableStreamError)

Tri des variantes: hauteur decroissante, puis images/seconde decroissantes.
Une valeur absente vaut 0 et passe donc en dernier.
"""

from typing import Iterable, Optional, Sequence

from loguru import logger

from vidcatalog.core.value_objects.streams import (
    AudioTrack,
    ResolvedStream,
    StreamVariant,
)
from vidcatalog.utils.helpers import is_manifest_url, parse_max_quality

DEFAULT_LANGUAGE = "en"


class StreamUnavailableError(Exception):
    """
    Exception de base : la video ne peut pas etre lue actuellement.

    Remontee telle quelle jusqu'a la couche de presentation. Aucune
    nouvelle tentative n'est faite ici : c'est a l'appelant de relancer,
    par exemple apres avoir rafraichi les metadonnees de la source.
    """

    user_message = "This video cannot currently be played"


class NoSuitableStreamError(StreamUnavailableError):
    """Aucune variante hors manifeste apres epuisement de tous les paliers."""

    def __init__(self, message: str = "No suitable stream found") -> None:
        super().__init__(message)


class NoAudioTracksError(StreamUnavailableError):
    """Une piste audio separee est necessaire mais la liste est vide."""

    def __init__(self, message: str = "No audio tracks available") -> None:
        super().__init__(message)


# ====================
# Conteneurs
# ====================


def is_preferred_video_container(mime_type: str) -> bool:
    """Conteneur video prefere : mp4 (telechargement progressif)."""
    return "mp4" in mime_type.lower()


def is_preferred_audio_container(mime_type: str) -> bool:
    """Conteneur audio prefere : mp4 / m4a."""
    mime = mime_type.lower()
    return "mp4" in mime or "m4a" in mime


# ====================
# Tri
# ====================


def sort_variants(variants: Iterable[StreamVariant]) -> list[StreamVariant]:
    """Trie les variantes par hauteur puis fps, du meilleur au moins bon."""
    return sorted(variants, key=lambda v: (v.height, v.fps), reverse=True)


def _sort_tracks(tracks: Iterable[AudioTrack]) -> list[AudioTrack]:
    """Trie les pistes audio par debit decroissant."""
    return sorted(tracks, key=lambda t: t.bitrate, reverse=True)


# ====================
# Selection audio
# ====================


def select_audio_track(
    audio_tracks: Sequence[AudioTrack],
    preferred_languages: Optional[Sequence[str]] = None,
) -> AudioTrack:
    """
    Choisit la meilleure piste audio selon les langues preferees.

    Ordre de repli :
    a. Pour chaque langue (dans l'ordre) : pistes de cette langue, hors
       manifeste, conteneur prefere, meilleur debit
    b. Meilleure piste hors manifeste en conteneur prefere, toute langue
    c. Meilleure piste hors manifeste, tout conteneur
    d. Meilleure piste tout court, meme manifeste

    Args:
        audio_tracks: Pistes disponibles
        preferred_languages: Langues par ordre de preference (defaut: ["en"])

    Returns:
        La piste retenue

    Raises:
        NoAudioTracksError: Si la liste est vide
    """
    if not audio_tracks:
        raise NoAudioTracksError()

    languages = [lang for lang in (preferred_languages or []) if lang] or [DEFAULT_LANGUAGE]

    playable = [t for t in audio_tracks if not is_manifest_url(t.url)]
    preferred = [t for t in playable if is_preferred_audio_container(t.mime_type)]

    for language in languages:
        wanted = language.lower()
        matches = _sort_tracks(t for t in preferred if t.language.lower() == wanted)
        if matches:
            logger.debug(f"Piste audio retenue pour la langue {language}: {matches[0].url}")
            return matches[0]

    logger.debug(f"Aucune piste pour les langues {languages}, repli sans filtre de langue")

    for pool in (preferred, playable, list(audio_tracks)):
        ranked = _sort_tracks(pool)
        if ranked:
            return ranked[0]

    # Inatteignable : audio_tracks n'est pas vide
    raise NoAudioTracksError()


# ====================
# Selection video
# ====================


def _resolve(variant: StreamVariant, audio: Optional[AudioTrack] = None) -> ResolvedStream:
    """Construit le ResolvedStream d'une variante (et de sa piste audio separee)."""
    return ResolvedStream(
        video_url=variant.url,
        quality=variant.quality,
        resolution=variant.resolution,
        fps=variant.fps,
        audio_url=audio.url if audio else None,
        audio_language=audio.language if audio else None,
    )


def _select_from_pool(
    candidates: Sequence[StreamVariant],
    audio_tracks: Sequence[AudioTrack],
    preferred_languages: Sequence[str],
) -> Optional[ResolvedStream]:
    """
    Applique les paliers "combine" puis "separe" sur un ensemble de candidats.

    Returns:
        Le flux retenu, ou None si aucun candidat
    """
    combined = sort_variants(v for v in candidates if v.has_audio)
    if combined:
        logger.debug(f"Format combine retenu: {combined[0].quality} ({combined[0].resolution})")
        return _resolve(combined[0])

    video_only = sort_variants(v for v in candidates if not v.has_audio)
    if video_only:
        audio = select_audio_track(audio_tracks, preferred_languages)
        logger.debug(
            f"Video separee retenue: {video_only[0].quality} ({video_only[0].resolution}) "
            f"+ audio {audio.language or '?'}"
        )
        return _resolve(video_only[0], audio)

    return None


class StreamSelector:
    """
    Service de selection de flux.

    Sans etat : les preferences par defaut (langues, qualite maximale)
    viennent de la configuration et peuvent etre surchargees a chaque appel.
    """

    def __init__(
        self,
        preferred_languages: Optional[Sequence[str]] = None,
        max_quality: Optional[str] = None,
    ) -> None:
        """
        Initialise le selecteur.

        Args:
            preferred_languages: Langues audio par defaut (langue principale en tete)
            max_quality: Qualite maximale par defaut (ex: "1080p"), None = illimitee
        """
        self._preferred_languages = list(preferred_languages or [DEFAULT_LANGUAGE])
        self._max_quality = max_quality

    def select_best(
        self,
        video_variants: Sequence[StreamVariant],
        audio_tracks: Sequence[AudioTrack],
        preferred_languages: Optional[Sequence[str]] = None,
        max_quality: Optional[str] = None,
    ) -> ResolvedStream:
        """
        Selectionne le meilleur flux lisible.

        Args:
            video_variants: Variantes video (seules ou combinees)
            audio_tracks: Pistes audio separees
            preferred_languages: Langues audio preferees (defaut: configuration)
            max_quality: Plafond de qualite (defaut: configuration)

        Returns:
            ResolvedStream (URL combinee, ou paire video + audio)

        Raises:
            NoSuitableStreamError: Aucune variante hors manifeste
            NoAudioTracksError: Piste audio separee requise mais aucune disponible
        """
        languages = list(preferred_languages or self._preferred_languages)
        quality_cap = max_quality or self._max_quality

        variants = list(video_variants)
        if quality_cap:
            max_height = parse_max_quality(quality_cap)
            variants = [v for v in variants if v.height <= max_height]
            logger.debug(f"Plafond {quality_cap}: {len(variants)} variantes <= {max_height}p")

        playable = [v for v in variants if not is_manifest_url(v.url)]
        preferred = [v for v in playable if is_preferred_video_container(v.mime_type)]

        # Paliers 1-2 (conteneur prefere) puis palier 3 (tout conteneur)
        for candidates in (preferred, playable):
            resolved = _select_from_pool(candidates, audio_tracks, languages)
            if resolved is not None:
                return resolved

        logger.warning(
            f"Aucun flux lisible parmi {len(video_variants)} variantes "
            f"({len(audio_tracks)} pistes audio)"
        )
        raise NoSuitableStreamError()

    def select_url(
        self,
        video_variants: Sequence[StreamVariant],
        audio_tracks: Sequence[AudioTrack],
        preferred_languages: Optional[Sequence[str]] = None,
        max_quality: Optional[str] = None,
    ) -> tuple[str, Optional[str]]:
        """
        Variante simplifiee de select_best : seulement les references lisibles.

        Returns:
            Tuple (url video, url audio ou None si format combine)
        """
        return self.select_best(
            video_variants, audio_tracks, preferred_languages, max_quality
        ).references
