"""
Module de persistance pour Vitrine.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy).
Il contient :

- database.py : Configuration de l'engine, session factory, initialisation
- models.py : Modeles SQLModel representant les tables de la base de donnees
- repositories/ : Implementations des ports repository
- settings_store.py : Document JSON des reglages de recommandation

Les modeles ici sont des adapters de persistance, distincts des entites de domaine
(dataclass dans core/entities/). La conversion entre les deux se fait dans les
repositories.
"""

from vitrine.infrastructure.persistence.database import (
    build_engine,
    get_session,
    init_db,
)
from vitrine.infrastructure.persistence.models import (
    QuoteRequestModel,
    TaxonomyModel,
    VideoModel,
    VideoTaxonomyModel,
)

__all__ = [
    "build_engine",
    "get_session",
    "init_db",
    "QuoteRequestModel",
    "TaxonomyModel",
    "VideoModel",
    "VideoTaxonomyModel",
]
