"""
Tests unitaires pour Settings et configure_logging.
"""

import pytest
from loguru import logger
from pydantic import ValidationError

from vidcatalog.config import Settings
from vidcatalog.logging_config import configure_logging, init_logging


class TestSettings:
    """Tests pour la configuration pydantic-settings."""

    def test_defaults(self) -> None:
        """Valeurs par defaut du cache et de la navigation."""
        settings = Settings(_env_file=None)

        assert settings.default_max_depth == 3
        assert settings.page_size == 50
        assert settings.page_cache_ttl_seconds == 300
        assert settings.source_cache_ttl_seconds == 1800
        assert settings.max_cached_pages == 50
        assert settings.max_cached_sources == 20
        assert settings.max_quality is None
        assert settings.primary_language == "en"

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Les variables VIDCATALOG_* surchargent les valeurs par defaut."""
        monkeypatch.setenv("VIDCATALOG_PAGE_SIZE", "20")
        monkeypatch.setenv("VIDCATALOG_MAX_QUALITY", "720p")
        monkeypatch.setenv("VIDCATALOG_PREFERRED_LANGUAGES", '["fr", "de"]')

        settings = Settings(_env_file=None)

        assert settings.page_size == 20
        assert settings.max_quality == "720p"
        assert settings.preferred_languages == ["fr", "de"]

    def test_empty_languages_fall_back_to_english(self) -> None:
        settings = Settings(_env_file=None, preferred_languages=["", "  "])

        assert settings.preferred_languages == ["en"]

    def test_max_depth_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_max_depth=0)

    def test_log_file_expands_home(self) -> None:
        settings = Settings(_env_file=None, log_file="~/vidcatalog.log")

        assert "~" not in str(settings.log_file)


class TestConfigureLogging:
    """Tests pour configure_logging() et la ressource init_logging()."""

    def test_configure_logging_uses_settings(self, test_settings: Settings) -> None:
        """Le repertoire du fichier de log est cree et les messages y sont ecrits en JSON."""
        handler_ids = configure_logging(test_settings)
        try:
            logger.info("cache pret")
            logger.complete()
        finally:
            for handler_id in handler_ids:
                logger.remove(handler_id)

        assert len(handler_ids) == 2
        assert test_settings.log_file.parent.is_dir()
        assert '"cache pret"' in test_settings.log_file.read_text()

    def test_init_logging_removes_handlers_on_shutdown(self, test_settings: Settings) -> None:
        """A la fermeture de la ressource, les handlers ajoutes sont retires."""
        resource = init_logging(test_settings)
        next(resource)
        resource.close()

        # Aucun handler restant : un nouveau message n'atteint plus le fichier
        size = test_settings.log_file.stat().st_size
        logger.info("apres arret")
        assert test_settings.log_file.stat().st_size == size
