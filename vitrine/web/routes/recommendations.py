"""
Route publique des recommandations de références.
"""

import json

from fastapi import APIRouter, HTTPException
from loguru import logger

from ...core.value_objects.budget import resolve_visitor_budget
from ...infrastructure.persistence.settings_store import InvalidSettingsDocument
from ...services.recommendation import RecommendationQuery
from ..deps import ContainerDep
from ..schemas import RecommendationRequest, recommendation_to_dict

router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])


@router.post("")
def recommend(body: RecommendationRequest, container: ContainerDep) -> dict:
    """
    Retourne les vidéos de référence pour la sélection du visiteur.

    Les réglages et le catalogue sont relus à chaque requête.
    """
    try:
        settings = container.settings_store().load()
    except (json.JSONDecodeError, InvalidSettingsDocument) as e:
        raise HTTPException(status_code=500, detail=f"Réglages illisibles: {e}") from e

    catalog = container.catalog_service().load_catalog()
    query = RecommendationQuery(
        objective=body.resolved_objective,
        audiences=tuple(body.audiences),
        budget=resolve_visitor_budget(body.budget),
        durations=tuple(body.durations),
        exclude_ids=frozenset(body.exclude_ids),
        limit=body.clamped_limit,
    )
    suggestions = container.recommendation_engine().recommend(settings, catalog, query)
    logger.debug(
        "Recommandations calculees",
        objective=query.objective,
        settings_version=settings.version,
        video_ids=[s.video.id for s in suggestions],
    )

    debug = None
    if container.config().recommendations_debug:
        debug = {
            "objective": query.objective,
            "audiences": list(query.audiences),
            "budget": body.budget,
            "durations": list(query.durations),
            "keywordLimit": settings.effective_keyword_limit,
            "settingsVersion": settings.version,
            "reasonsByVideoId": {
                str(s.video.id): list(s.reasons) for s in suggestions
            },
        }

    return {"videos": [recommendation_to_dict(s) for s in suggestions], "debug": debug}
