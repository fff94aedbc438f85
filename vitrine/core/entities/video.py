"""
Entité vidéo du catalogue.

Une vidéo du portfolio avec sa fourchette de budget et la référence du média
hébergé. Tant que le pipeline de transcodage externe n'a pas terminé, la vidéo
porte un marqueur provisoire (préfixe "pending:") à la place de la référence.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from vitrine.core.value_objects.budget import BUDGET_LEVELS

PENDING_MEDIA_PREFIX = "pending:"


class VideoStatus(str, Enum):
    """Statut de traitement d'une vidéo."""

    PENDING = "pending"
    READY = "ready"


@dataclass
class Video:
    """
    Vidéo du catalogue.

    Attributs :
        id : Identifiant en base
        title : Titre affiché
        external_media_id : Référence du média transcodé ou marqueur provisoire
        status : Statut de traitement (pending, ready)
        thumbnail_offset_seconds : Instant de la vignette
        duration_seconds : Durée en secondes
        budget_min : Budget minimum (un palier de BUDGET_LEVELS ou None)
        budget_max : Budget maximum (un palier de BUDGET_LEVELS ou None)
        is_featured : Vidéo mise en avant
        created_at : Date de création

    Lève ValueError si le statut est inconnu, si un budget n'est pas un palier
    ou si budget_min > budget_max.
    """

    title: str
    external_media_id: str
    status: VideoStatus = VideoStatus.PENDING
    id: Optional[int] = None
    thumbnail_offset_seconds: Optional[float] = 1
    duration_seconds: Optional[int] = None
    budget_min: Optional[int] = None
    budget_max: Optional[int] = None
    is_featured: bool = False
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        self.status = VideoStatus(self.status)
        for value in (self.budget_min, self.budget_max):
            if value is not None and value not in BUDGET_LEVELS:
                raise ValueError(f"Budget hors paliers: {value}")
        if (
            self.budget_min is not None
            and self.budget_max is not None
            and self.budget_min > self.budget_max
        ):
            raise ValueError(
                f"budget_min ({self.budget_min}) > budget_max ({self.budget_max})"
            )

    @property
    def has_pending_media(self) -> bool:
        """Vrai si la vidéo porte encore un marqueur provisoire."""
        return self.external_media_id.startswith(PENDING_MEDIA_PREFIX)

    @property
    def is_public(self) -> bool:
        """Vrai si la vidéo peut apparaître dans les listes publiques."""
        return self.status == VideoStatus.READY and not self.has_pending_media
