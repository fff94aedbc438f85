"""
Entité demande de soumission.

Enregistrement soumis par un visiteur depuis le formulaire de demande :
coordonnées, objectifs déclarés, livrables, budget et références choisies.
Immuable une fois créé, à l'exception du statut fixé par l'administration.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class QuoteStatus(str, Enum):
    """Statut de traitement d'une demande (modifiable par l'administration)."""

    NEW = "nouvelle"
    IN_PROGRESS = "en_cours"
    DONE = "traitee"
    ARCHIVED = "archivee"


@dataclass(frozen=True)
class QuoteRequest:
    """
    Demande de soumission d'un visiteur.

    Attributs :
        name, company, email : Coordonnées obligatoires
        locale : Langue de l'interface ("fr" ou "en")
        objectives, audiences, diffusions : Sélections déclarées
        deliverables : Livrables par clé ({"publicite": {"count": 2, "formats": [...]}})
        reference_ids : Identifiants des vidéos de référence choisies
        status : Statut administratif
    """

    name: str
    company: str
    email: str
    locale: str = "fr"
    phone: Optional[str] = None
    objectives: tuple[str, ...] = ()
    audiences: tuple[str, ...] = ()
    diffusions: tuple[str, ...] = ()
    description: Optional[str] = None
    locations: Optional[str] = None
    deliverables: dict[str, Any] = field(default_factory=dict)
    needs_subtitles: Optional[bool] = None
    upsells: tuple[str, ...] = ()
    budget: Optional[str] = None
    timeline: Optional[str] = None
    referral: Optional[str] = None
    reference_ids: tuple[int, ...] = ()
    project_id: Optional[str] = None
    project_title: Optional[str] = None
    status: QuoteStatus = QuoteStatus.NEW
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "status", QuoteStatus(self.status))
        if self.locale not in ("fr", "en"):
            raise ValueError(f"Langue inconnue: {self.locale}")
