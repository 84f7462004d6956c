"""
Configuration du logging de VidCatalog via loguru.

Deux handlers alimentes par Settings :
- Console (stderr) : lisible, colore, au niveau settings.log_level
- Fichier : JSON avec rotation, toujours en DEBUG (hits/miss du cache,
  prechargements, dossiers ignores lors des scans)

init_logging est la ressource du container : les handlers ajoutes au
demarrage sont retires a l'arret (container.shutdown_resources()).
"""

import sys
from typing import Iterator

from loguru import logger

from vidcatalog.config import Settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def configure_logging(settings: Settings) -> list[int]:
    """Configure le logging a partir des Settings.

    Args :
        settings : Configuration (log_level, log_file, log_rotation_size,
                   log_retention_count)

    Retourne :
        Les identifiants des handlers ajoutes
    """
    # Supprime le handler par défaut
    logger.remove()

    handler_ids = [
        logger.add(sys.stderr, level=settings.log_level, format=CONSOLE_FORMAT, colorize=True)
    ]

    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    handler_ids.append(
        logger.add(
            settings.log_file,
            level="DEBUG",
            format="{message}",
            serialize=True,
            rotation=settings.log_rotation_size,
            retention=settings.log_retention_count,
            compression="zip",
            enqueue=True,
        )
    )

    logger.debug(
        "Logging configuré",
        log_file=str(settings.log_file),
        rotation=settings.log_rotation_size,
    )
    return handler_ids


def init_logging(settings: Settings) -> Iterator[None]:
    """Ressource du container : configure le logging puis retire les handlers a l'arret."""
    handler_ids = configure_logging(settings)
    try:
        yield
    finally:
        for handler_id in handler_ids:
            logger.remove(handler_id)
