"""
Schémas des requêtes et sérialisation des réponses de l'API.

Les clés JSON reprennent le camelCase du formulaire public (excludeIds,
availableKeywords, isFeatured, taxonomyId) ; les alias snake_case sont aussi
acceptés.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..core.entities.quote_request import QuoteRequest, QuoteStatus
from ..core.entities.taxonomy import Taxonomy, TaxonomyKind
from ..core.entities.video import Video
from ..services.recommendation import CatalogVideo, RecommendedVideo

DEFAULT_RECOMMENDATION_LIMIT = 6
MAX_RECOMMENDATION_LIMIT = 12


class RecommendationRequest(BaseModel):
    """Sélection du visiteur dans le formulaire de demande."""

    model_config = ConfigDict(populate_by_name=True)

    objective: Optional[str] = None
    objectives: list[str] = Field(default_factory=list)
    audiences: list[str] = Field(default_factory=list)
    budget: Optional[Union[int, str]] = None
    durations: list[str] = Field(default_factory=list)
    exclude_ids: list[int] = Field(default_factory=list, alias="excludeIds")
    limit: int = DEFAULT_RECOMMENDATION_LIMIT

    @property
    def resolved_objective(self) -> Optional[str]:
        """Objectif explicite, sinon le premier objectif coché."""
        if self.objective:
            return self.objective
        return self.objectives[0] if self.objectives else None

    @property
    def clamped_limit(self) -> int:
        return max(1, min(MAX_RECOMMENDATION_LIMIT, self.limit))


class KeywordCleanRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    existing: list[str] = Field(default_factory=list)
    new: list[str] = Field(default_factory=list)
    available: list[str] = Field(default_factory=list, alias="availableKeywords")


class TaxonomyCreate(BaseModel):
    kind: TaxonomyKind
    label: str = Field(..., min_length=1)


class QuoteStatusUpdate(BaseModel):
    status: QuoteStatus


class VideoUpdate(BaseModel):
    """Champs modifiables d'une vidéo ; les champs absents restent inchangés."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    is_featured: Optional[bool] = Field(None, alias="isFeatured")
    external_media_id: Optional[str] = Field(None, alias="externalMediaId", min_length=1)


class VideoTaxonomyLink(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    taxonomy_id: int = Field(..., alias="taxonomyId")


def taxonomy_to_dict(taxonomy: Taxonomy) -> dict[str, Any]:
    return {"id": taxonomy.id, "kind": taxonomy.kind.value, "label": taxonomy.label}


def video_to_dict(video: Video) -> dict[str, Any]:
    return {
        "id": video.id,
        "title": video.title,
        "external_media_id": video.external_media_id,
        "status": video.status.value,
        "thumbnail_offset_seconds": video.thumbnail_offset_seconds,
        "duration_seconds": video.duration_seconds,
        "budget_min": video.budget_min,
        "budget_max": video.budget_max,
        "is_featured": video.is_featured,
        "created_at": video.created_at.isoformat() if video.created_at else None,
    }


def catalog_video_to_dict(item: CatalogVideo) -> dict[str, Any]:
    data = video_to_dict(item.video)
    data["tags"] = {kind.value: list(item.labels(kind)) for kind in TaxonomyKind}
    return data


def recommendation_to_dict(suggestion: RecommendedVideo) -> dict[str, Any]:
    video = suggestion.video
    return {
        "id": video.id,
        "title": video.title,
        "external_media_id": video.external_media_id,
        "thumbnail_offset_seconds": video.thumbnail_offset_seconds,
        "budget_min": video.budget_min,
        "budget_max": video.budget_max,
        "keywords": list(suggestion.keywords),
    }


def quote_request_to_dict(request: QuoteRequest) -> dict[str, Any]:
    return {
        "id": request.id,
        "status": request.status.value,
        "locale": request.locale,
        "name": request.name,
        "company": request.company,
        "email": request.email,
        "phone": request.phone,
        "objectives": list(request.objectives),
        "audiences": list(request.audiences),
        "diffusions": list(request.diffusions),
        "description": request.description,
        "locations": request.locations,
        "deliverables": request.deliverables,
        "needs_subtitles": request.needs_subtitles,
        "upsells": list(request.upsells),
        "budget": request.budget,
        "timeline": request.timeline,
        "referral": request.referral,
        "reference_ids": list(request.reference_ids),
        "project_id": request.project_id,
        "project_title": request.project_title,
        "created_at": request.created_at.isoformat() if request.created_at else None,
    }
