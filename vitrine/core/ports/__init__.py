"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Ports repository : Contrats de persistance des données
- ITaxonomyRepository : Répertoire des taxonomies
- IVideoRepository : Vidéos du catalogue
- IVideoTaxonomyRepository : Liens vidéo <-> taxonomie
- IQuoteRequestRepository : Demandes de soumission
- IRecommendationSettingsStore : Document de réglages des recommandations

Port notification :
- IEmailSender : Envoi de courriels
"""

from vitrine.core.ports.repositories import (
    IQuoteRequestRepository,
    IRecommendationSettingsStore,
    ITaxonomyRepository,
    IVideoRepository,
    IVideoTaxonomyRepository,
)
from vitrine.core.ports.notifier import IEmailSender

__all__ = [
    "IQuoteRequestRepository",
    "IRecommendationSettingsStore",
    "ITaxonomyRepository",
    "IVideoRepository",
    "IVideoTaxonomyRepository",
    "IEmailSender",
]
