"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe VIDCATALOG_,
et peut optionnellement être fournie via un fichier .env.

La qualité maximale est optionnelle - aucune limite de résolution si non fournie.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de vidcatalog/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe VIDCATALOG_.
    Exemple : VIDCATALOG_LOG_LEVEL=DEBUG

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="VIDCATALOG_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Navigation dans les dossiers locaux
    default_max_depth: int = Field(default=3, ge=1)
    page_size: int = Field(default=50, ge=1)

    # Selection des flux (langue principale en tete)
    preferred_languages: list[str] = Field(default_factory=lambda: ["en"])
    max_quality: Optional[str] = Field(default=None)

    # Cache de navigation (pages 5 min, sources 30 min)
    page_cache_ttl_seconds: float = Field(default=5 * 60, gt=0)
    source_cache_ttl_seconds: float = Field(default=30 * 60, gt=0)
    max_cached_pages: int = Field(default=50, ge=1)
    max_cached_sources: int = Field(default=20, ge=1)
    prefetch_delay_seconds: float = Field(default=0.1, ge=0)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/vidcatalog.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("preferred_languages")
    @classmethod
    def ensure_primary_language(cls, v: list[str]) -> list[str]:
        """Garantit au moins une langue preferee (anglais par defaut)."""
        languages = [lang.strip() for lang in v if lang and lang.strip()]
        return languages or ["en"]

    @property
    def primary_language(self) -> str:
        """Langue principale utilisee par defaut pour l'audio."""
        return self.preferred_languages[0]
