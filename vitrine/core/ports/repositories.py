"""
Interfaces ports pour les repositories.

Interfaces abstraites (ports) définissant les contrats pour la persistance des données.
Les implémentations (adaptateurs) fournissent les mécanismes de stockage concrets
(SQLite via SQLModel, en mémoire pour les tests, etc.).
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from vitrine.core.entities.quote_request import QuoteRequest, QuoteStatus
from vitrine.core.entities.taxonomy import Taxonomy, TaxonomyKind, VideoTaxonomy
from vitrine.core.entities.video import Video
from vitrine.core.value_objects.recommendation_settings import RecommendationSettings


class ITaxonomyRepository(ABC):
    """
    Interface de stockage des taxonomies.

    Le répertoire est petit (quelques centaines de lignes) et lu en entier.
    """

    @abstractmethod
    def list_all(self) -> list[Taxonomy]:
        """Retourne toutes les taxonomies (id, kind, label)."""
        ...

    @abstractmethod
    def get_by_id(self, taxonomy_id: int) -> Optional[Taxonomy]:
        """Récupère une taxonomie par son ID."""
        ...

    @abstractmethod
    def bulk_upsert(self, items: list[tuple[TaxonomyKind, str]]) -> list[Taxonomy]:
        """Insère ou met à jour des taxonomies par clé (kind, label), retourne les lignes."""
        ...

    @abstractmethod
    def save(self, taxonomy: Taxonomy) -> Taxonomy:
        """Sauvegarde une taxonomie (insertion ou renommage)."""
        ...

    @abstractmethod
    def delete(self, taxonomy_id: int) -> bool:
        """Supprime une taxonomie et ses liens. Retourne True si supprimée."""
        ...


class IVideoRepository(ABC):
    """Interface de stockage des vidéos du catalogue."""

    @abstractmethod
    def list_all(self) -> list[Video]:
        """Liste les vidéos, les plus récentes en premier."""
        ...

    @abstractmethod
    def get_by_id(self, video_id: int) -> Optional[Video]:
        """Récupère une vidéo par son ID."""
        ...

    @abstractmethod
    def bulk_insert(self, videos: list[Video]) -> list[tuple[int, str]]:
        """Insère des vidéos, retourne les paires (id, external_media_id)."""
        ...

    @abstractmethod
    def set_featured(self, video_id: int, is_featured: bool) -> Optional[Video]:
        """Met à jour le drapeau de mise en avant. Retourne None si inconnue."""
        ...

    @abstractmethod
    def set_media(self, video_id: int, external_media_id: str) -> Optional[Video]:
        """
        Rattache l'identifiant du média hébergé.

        Le statut passe à "ready", sauf si l'identifiant est encore un
        marqueur provisoire. Retourne None si la vidéo est inconnue.
        """
        ...


class IVideoTaxonomyRepository(ABC):
    """Interface de stockage des liens vidéo <-> taxonomie."""

    @abstractmethod
    def list_all(self) -> list[VideoTaxonomy]:
        """Retourne toutes les lignes de jointure."""
        ...

    @abstractmethod
    def bulk_insert(self, links: list[VideoTaxonomy]) -> int:
        """Insère des liens (sans dédoublonnage). Retourne le nombre inséré."""
        ...

    @abstractmethod
    def add(self, video_id: int, taxonomy_id: int) -> bool:
        """Ajoute un lien s'il n'existe pas. Retourne False s'il existait déjà."""
        ...

    @abstractmethod
    def remove(self, video_id: int, taxonomy_id: int) -> int:
        """Supprime le lien (doublons compris). Retourne le nombre de lignes supprimées."""
        ...


class IQuoteRequestRepository(ABC):
    """Interface de stockage des demandes de soumission."""

    @abstractmethod
    def save(self, request: QuoteRequest) -> QuoteRequest:
        """Enregistre une nouvelle demande."""
        ...

    @abstractmethod
    def list_all(self) -> list[QuoteRequest]:
        """Liste les demandes, les plus récentes en premier."""
        ...

    @abstractmethod
    def update_status(self, request_id: int, status: QuoteStatus) -> Optional[QuoteRequest]:
        """Change le statut d'une demande. Retourne None si inconnue."""
        ...


class IRecommendationSettingsStore(ABC):
    """
    Interface de persistance du document de réglages des recommandations.

    Les lectures retournent toujours un document complet (ancien ou nouveau,
    jamais un mélange) ; les écritures remplacent le document en entier.
    """

    @abstractmethod
    def load(self) -> RecommendationSettings:
        """Lit les réglages courants (valeurs par défaut si aucun document)."""
        ...

    @abstractmethod
    def load_document(self) -> dict[str, Any]:
        """Lit le document JSON brut (valeurs par défaut si aucun document)."""
        ...

    @abstractmethod
    def save(self, document: dict[str, Any]) -> RecommendationSettings:
        """Remplace le document et retourne les réglages résultants."""
        ...
