"""
Route publique du portfolio.

Liste les vidéos publiques, classées selon les filtres du portfolio
(taxonomies choisies, fenêtre de budget, fenêtre de durée).
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Query

from ...core.entities.taxonomy import TaxonomyKind
from ...core.value_objects.budget import BudgetRange
from ...services.catalog import PortfolioFilters, filter_portfolio
from ..deps import ContainerDep
from ..schemas import catalog_video_to_dict

router = APIRouter(prefix="/api/videos", tags=["videos"])


@router.get("")
def list_videos(
    container: ContainerDep,
    type: Annotated[list[int], Query()] = [],
    objectif: Annotated[list[int], Query()] = [],
    keyword: Annotated[list[int], Query()] = [],
    style: Annotated[list[int], Query()] = [],
    feel: Annotated[list[int], Query()] = [],
    parametre: Annotated[list[int], Query()] = [],
    budget_min: Optional[int] = None,
    budget_max: Optional[int] = None,
    duration_min: Optional[int] = None,
    duration_max: Optional[int] = None,
) -> dict:
    """Portfolio public : correspondances complètes puis partielles."""
    selected = {
        TaxonomyKind.TYPE: frozenset(type),
        TaxonomyKind.OBJECTIF: frozenset(objectif),
        TaxonomyKind.KEYWORD: frozenset(keyword),
        TaxonomyKind.STYLE: frozenset(style),
        TaxonomyKind.FEEL: frozenset(feel),
        TaxonomyKind.PARAMETRE: frozenset(parametre),
    }
    budget = None
    if budget_min is not None or budget_max is not None:
        budget = BudgetRange(budget_min, budget_max)
    filters = PortfolioFilters(
        selected=selected,
        budget=budget,
        duration_min=duration_min,
        duration_max=duration_max,
    )

    service = container.catalog_service()
    catalog = service.load_catalog()
    matches = filter_portfolio(catalog, filters, service.list_taxonomies())
    full_count = sum(1 for m in matches if m.is_full_match)
    return {
        "videos": [catalog_video_to_dict(m.item) for m in matches],
        "fullMatchCount": full_count if filters.is_active else len(matches),
        "hasActiveFilters": filters.is_active,
    }
