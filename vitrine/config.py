"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe VITRINE_,
et peut optionnellement être fournie via un fichier .env.

Le jeton d'administration et la clé Resend sont optionnels - les routes d'administration
et l'envoi de courriels sont désactivés si non fournis.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de vitrine/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe VITRINE_.
    Exemple : VITRINE_LOG_LEVEL=DEBUG

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="VITRINE_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Base de données
    database_url: str = Field(default="sqlite:///data/vitrine.db")

    # Réglages des références (document JSON édité depuis l'administration)
    settings_file: Path = Field(default=Path("data/recommendations-settings.json"))

    # Administration (OPTIONNEL - routes admin refusées si non défini)
    admin_token: Optional[str] = Field(default=None)

    # Courriel de notification des demandes (OPTIONNEL)
    resend_api_key: Optional[str] = Field(default=None)
    quote_email_from: str = Field(default="Zéro huit <no-reply@zerohuit.ca>")
    quote_email_to: str = Field(default="lev@zerohuit.ca")

    # Import CSV (limites de taille des requêtes d'insertion)
    video_batch_size: int = Field(default=50, ge=1)
    link_batch_size: int = Field(default=500, ge=1)

    # Recommandations
    recommendations_debug: bool = Field(default=False)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/vitrine.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("settings_file", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def admin_enabled(self) -> bool:
        """Vérifie si les routes d'administration sont configurées."""
        return bool(self.admin_token)

    @property
    def email_enabled(self) -> bool:
        """Vérifie si l'envoi de courriels est configuré."""
        return bool(self.resend_api_key)
