"""
Implementations SQLModel des repositories.

Ce module contient les implementations concretes des interfaces repository
definies dans vitrine/core/ports/repositories.py.

Chaque repository :
- Herite de l'interface ABC correspondante du domaine
- Recoit une session SQLModel via injection de dependances
- Convertit entre entites de domaine (dataclass) et modeles DB (SQLModel)
"""

from vitrine.infrastructure.persistence.repositories.taxonomy_repository import (
    SQLModelTaxonomyRepository,
)
from vitrine.infrastructure.persistence.repositories.video_repository import (
    SQLModelVideoRepository,
    SQLModelVideoTaxonomyRepository,
)
from vitrine.infrastructure.persistence.repositories.quote_request_repository import (
    SQLModelQuoteRequestRepository,
)

__all__ = [
    "SQLModelTaxonomyRepository",
    "SQLModelVideoRepository",
    "SQLModelVideoTaxonomyRepository",
    "SQLModelQuoteRequestRepository",
]
