"""
Configuration du logging de Vitrine via loguru.

Deux sorties :
- console colorée au niveau choisi ; les modules de recommandation y
  descendent en DEBUG quand VITRINE_RECOMMENDATIONS_DEBUG est actif
- fichier JSON avec rotation : tous les messages du paquet vitrine, et
  seulement les avertissements des autres émetteurs
"""

import sys
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from loguru import logger

APP_PACKAGE = "vitrine"

# Modules dont le détail (catalogue chargé, classement retenu) suit le mode debug
RECOMMENDATION_MODULES: tuple[str, ...] = (
    "vitrine.services.catalog",
    "vitrine.web.routes.recommendations",
)

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

RecordFilter = Callable[[dict[str, Any]], bool]


def _module_in(name: str, prefixes: Iterable[str]) -> bool:
    return any(name == prefix or name.startswith(prefix + ".") for prefix in prefixes)


def console_filter(log_level: str, verbose_modules: Iterable[str] = ()) -> RecordFilter:
    """Seuil de la console, abaissé à DEBUG pour les modules verbeux."""
    threshold = logger.level(log_level.upper()).no
    debug = logger.level("DEBUG").no
    verbose = tuple(verbose_modules)

    def _filter(record: dict[str, Any]) -> bool:
        level = record["level"].no
        if level >= threshold:
            return True
        return level >= debug and _module_in(record["name"] or "", verbose)

    return _filter


def file_filter(record: dict[str, Any]) -> bool:
    """Fichier JSON : tout le paquet vitrine, WARNING et plus pour le reste."""
    if _module_in(record["name"] or "", (APP_PACKAGE,)):
        return True
    return record["level"].no >= logger.level("WARNING").no


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/vitrine.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
    verbose_modules: Iterable[str] = (),
) -> None:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau minimum de la console (DEBUG, INFO, WARNING, ERROR)
        log_file : Chemin du fichier de log JSON
        rotation_size : Taille maximale du fichier avant rotation (ex: "10 MB")
        retention_count : Nombre de fichiers rotatifs à conserver
        verbose_modules : Modules affichés en DEBUG sur la console quel que soit log_level
    """
    logger.remove()

    # Le filtre porte le seuil réel
    logger.add(
        sys.stderr,
        level="DEBUG",
        format=CONSOLE_FORMAT,
        filter=console_filter(log_level, verbose_modules),
        colorize=True,
    )

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        filter=file_filter,
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug("Logging configuré", log_file=str(log_file), rotation=rotation_size)


def configure_from_settings(settings) -> None:
    """Applique les réglages VITRINE_LOG_* et le mode debug des recommandations."""
    verbose = RECOMMENDATION_MODULES if settings.recommendations_debug else ()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
        verbose_modules=verbose,
    )
