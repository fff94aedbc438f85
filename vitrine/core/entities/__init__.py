"""
Entités métier représentant les concepts du domaine.

Exports:
- Taxonomy, TaxonomyKind, VideoTaxonomy : tags canoniques et jointures
- Video, VideoStatus : vidéos du catalogue
- QuoteRequest, QuoteStatus : demandes de soumission
"""

from vitrine.core.entities.taxonomy import (
    KEYWORD_GROUP_KINDS,
    Taxonomy,
    TaxonomyKind,
    VideoTaxonomy,
)
from vitrine.core.entities.video import PENDING_MEDIA_PREFIX, Video, VideoStatus
from vitrine.core.entities.quote_request import QuoteRequest, QuoteStatus

__all__ = [
    "KEYWORD_GROUP_KINDS",
    "Taxonomy",
    "TaxonomyKind",
    "VideoTaxonomy",
    "PENDING_MEDIA_PREFIX",
    "Video",
    "VideoStatus",
    "QuoteRequest",
    "QuoteStatus",
]
