"""
Persistance du document de reglages des recommandations.

Le document est un fichier JSON remplace en entier a chaque ecriture
(dernier ecrivain gagnant, pas de verrouillage optimiste). L'ecriture passe
par un fichier temporaire renomme atomiquement : un lecteur concurrent
voit l'ancien ou le nouveau document, jamais un melange.
"""

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any

from loguru import logger

from vitrine.core.ports.repositories import IRecommendationSettingsStore
from vitrine.core.value_objects.recommendation_settings import (
    DEFAULT_RECOMMENDATION_SETTINGS,
    RecommendationSettings,
)


class InvalidSettingsDocument(ValueError):
    """Document de reglages invalide (pas un objet JSON, nombres non finis)."""


class JsonSettingsStore(IRecommendationSettingsStore):
    """
    Store fichier JSON pour les reglages des recommandations.

    Attributs :
        path : Chemin du document JSON (cree a la premiere ecriture)
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _read_raw(self) -> dict[str, Any] | None:
        """Lit le document brut, None si le fichier n'existe pas."""
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        document = json.loads(raw)
        if not isinstance(document, dict):
            raise InvalidSettingsDocument(f"Document de reglages invalide: {self._path}")
        return document

    def load_document(self) -> dict[str, Any]:
        """
        Retourne le document courant.

        Les cles de premier niveau absentes sont completees par les valeurs
        par defaut ; sans fichier, retourne le document par defaut.

        Raises:
            json.JSONDecodeError: Si le fichier existe mais n'est pas du JSON
        """
        defaults = DEFAULT_RECOMMENDATION_SETTINGS.to_dict()
        document = self._read_raw()
        if document is None:
            return defaults
        return {**defaults, **document}

    def load(self) -> RecommendationSettings:
        return RecommendationSettings.from_dict(self.load_document())

    def _current_version(self) -> int:
        """Version du document en place ; 0 si absent ou illisible."""
        try:
            current = self._read_raw() or {}
        except (json.JSONDecodeError, UnicodeDecodeError, InvalidSettingsDocument) as e:
            logger.warning(
                "Document de reglages illisible, remplace", path=str(self._path), error=str(e)
            )
            return 0
        version = current.get("version", 0)
        if isinstance(version, bool) or not isinstance(version, int):
            return 0
        return version

    def save(self, document: dict[str, Any]) -> RecommendationSettings:
        """
        Remplace le document en entier et incremente sa version.

        Aucune validation de schema au-dela d'un objet JSON ; les cles mal
        typees sont ignorees a la lecture. Un document en place illisible
        est remplace (version repartant de 1).

        Raises:
            InvalidSettingsDocument: Si le document n'est pas un objet JSON
                ou contient des nombres non finis (NaN, Infinity)
        """
        if not isinstance(document, dict):
            raise InvalidSettingsDocument("Le document de reglages doit etre un objet JSON")

        with self._lock:
            payload = {**document, "version": self._current_version() + 1}
            settings = RecommendationSettings.from_dict(payload)
            try:
                text = json.dumps(payload, ensure_ascii=False, indent=2, allow_nan=False)
            except ValueError as e:
                raise InvalidSettingsDocument(
                    "Le document de reglages contient des nombres non finis"
                ) from e
            self._write_atomic(text)

        logger.info("Reglages des recommandations enregistres", version=settings.version)
        return settings

    def reset(self) -> RecommendationSettings:
        """Restaure les reglages par defaut (nouvelle version)."""
        return self.save(DEFAULT_RECOMMENDATION_SETTINGS.to_dict())

    def _write_atomic(self, text: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
