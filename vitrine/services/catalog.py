"""
Assemblage et filtrage du catalogue public.

CatalogService joint en memoire les videos, le repertoire de taxonomies et
les lignes de jointure pour produire des CatalogVideo (ordre : plus recentes
d'abord). filter_portfolio classe le catalogue selon les filtres du
portfolio public : correspondances completes d'abord, puis correspondances
partielles classees par premier critere satisfait.
"""

from collections import defaultdict
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Optional

from loguru import logger

from vitrine.core.entities.taxonomy import Taxonomy, TaxonomyKind
from vitrine.core.ports.repositories import (
    ITaxonomyRepository,
    IVideoRepository,
    IVideoTaxonomyRepository,
)
from vitrine.core.value_objects.budget import BudgetRange
from vitrine.services.recommendation import CatalogVideo

# Ordre de comparaison des correspondances par categorie
MATCH_ORDER: tuple[TaxonomyKind, ...] = (
    TaxonomyKind.KEYWORD,
    TaxonomyKind.TYPE,
    TaxonomyKind.OBJECTIF,
    TaxonomyKind.FEEL,
    TaxonomyKind.STYLE,
    TaxonomyKind.PARAMETRE,
)

BUDGET_CRITERION = "budget"
DURATION_CRITERION = "duration"

# Priorite des criteres pour les correspondances partielles
FALLBACK_PRIORITY: tuple[str, ...] = (
    TaxonomyKind.KEYWORD.value,
    TaxonomyKind.TYPE.value,
    BUDGET_CRITERION,
    DURATION_CRITERION,
    TaxonomyKind.OBJECTIF.value,
    TaxonomyKind.FEEL.value,
    TaxonomyKind.STYLE.value,
    TaxonomyKind.PARAMETRE.value,
)


@dataclass(frozen=True)
class PortfolioFilters:
    """
    Filtres du portfolio public.

    Attributs :
        selected : Identifiants de taxonomies choisis, par categorie
        budget : Fenetre de budget (None : pas de filtre)
        duration_min, duration_max : Fenetre de duree en secondes (bornes incluses)
    """

    selected: Mapping[TaxonomyKind, frozenset[int]] = field(default_factory=dict)
    budget: Optional[BudgetRange] = None
    duration_min: Optional[int] = None
    duration_max: Optional[int] = None

    @property
    def wants_taxonomy(self) -> bool:
        return any(ids for ids in self.selected.values())

    @property
    def wants_duration(self) -> bool:
        return self.duration_min is not None or self.duration_max is not None

    @property
    def is_active(self) -> bool:
        return self.wants_taxonomy or self.budget is not None or self.wants_duration


@dataclass(frozen=True)
class PortfolioMatch:
    """Score d'une video face aux filtres du portfolio."""

    item: CatalogVideo
    matches_by_kind: Mapping[TaxonomyKind, int]
    budget_match: int
    duration_match: int
    is_full_match: bool
    fallback_rank: int
    index: int

    def sort_key(self) -> tuple[int, ...]:
        counts = tuple(-self.matches_by_kind.get(kind, 0) for kind in MATCH_ORDER)
        return (*counts, -self.budget_match, -self.duration_match, self.index)


def _budget_matches(item: CatalogVideo, window: BudgetRange) -> bool:
    """Une video sans budget ne correspond jamais ; une borne seule vaut pour les deux."""
    video = item.video
    if video.budget_min is None and video.budget_max is None:
        return False
    low = video.budget_min if video.budget_min is not None else video.budget_max
    high = video.budget_max if video.budget_max is not None else video.budget_min
    return BudgetRange(low, high).overlaps(window)


def _duration_matches(item: CatalogVideo, filters: PortfolioFilters) -> bool:
    duration = item.video.duration_seconds
    if duration is None:
        return False
    if filters.duration_min is not None and duration < filters.duration_min:
        return False
    if filters.duration_max is not None and duration > filters.duration_max:
        return False
    return True


def score_portfolio_item(
    item: CatalogVideo, index: int, filters: PortfolioFilters, kind_by_id: Mapping[int, TaxonomyKind]
) -> PortfolioMatch:
    """Calcule les correspondances d'une video avec les filtres."""
    matches: dict[TaxonomyKind, int] = {kind: 0 for kind in TaxonomyKind}
    for taxonomy_id in item.taxonomy_ids:
        kind = kind_by_id.get(taxonomy_id)
        if kind is not None and taxonomy_id in filters.selected.get(kind, frozenset()):
            matches[kind] += 1

    budget_match = int(filters.budget is not None and _budget_matches(item, filters.budget))
    duration_match = int(filters.wants_duration and _duration_matches(item, filters))

    full_taxonomy = all(
        matches[kind] > 0 for kind, ids in filters.selected.items() if ids
    )
    is_full_match = (
        full_taxonomy
        and (filters.budget is None or budget_match == 1)
        and (not filters.wants_duration or duration_match == 1)
    )

    fallback_rank = len(FALLBACK_PRIORITY)
    for rank, criterion in enumerate(FALLBACK_PRIORITY):
        if criterion == BUDGET_CRITERION:
            hit = budget_match == 1
        elif criterion == DURATION_CRITERION:
            hit = duration_match == 1
        else:
            kind = TaxonomyKind(criterion)
            hit = bool(filters.selected.get(kind)) and matches[kind] > 0
        if hit:
            fallback_rank = rank
            break

    return PortfolioMatch(
        item=item,
        matches_by_kind=matches,
        budget_match=budget_match,
        duration_match=duration_match,
        is_full_match=is_full_match,
        fallback_rank=fallback_rank,
        index=index,
    )


def filter_portfolio(
    catalog: Sequence[CatalogVideo],
    filters: PortfolioFilters,
    taxonomies: Sequence[Taxonomy],
) -> list[PortfolioMatch]:
    """
    Classe le catalogue selon les filtres du portfolio.

    Sans filtre actif, toutes les videos sont des correspondances completes
    dans l'ordre du catalogue. Sinon les correspondances completes viennent
    d'abord, puis les partielles classees par premier critere satisfait
    (mots-cles, type, budget, duree, objectif, feel, style, parametre).
    """
    kind_by_id = {t.id: t.kind for t in taxonomies if t.id is not None}
    scored = [
        score_portfolio_item(item, index, filters, kind_by_id)
        for index, item in enumerate(catalog)
    ]
    if not filters.is_active:
        return scored

    full = sorted((m for m in scored if m.is_full_match), key=PortfolioMatch.sort_key)
    partial = sorted(
        (m for m in scored if not m.is_full_match),
        key=lambda m: (m.fallback_rank, *m.sort_key()),
    )
    return full + partial


class CatalogService:
    """
    Lecture du catalogue hydrate.

    Attributs injectes:
        taxonomy_repo: Repertoire des taxonomies
        video_repo: Stockage des videos
        link_repo: Lignes de jointure video <-> taxonomie
    """

    def __init__(
        self,
        taxonomy_repo: ITaxonomyRepository,
        video_repo: IVideoRepository,
        link_repo: IVideoTaxonomyRepository,
    ) -> None:
        self._taxonomy_repo = taxonomy_repo
        self._video_repo = video_repo
        self._link_repo = link_repo

    def list_taxonomies(self) -> list[Taxonomy]:
        return self._taxonomy_repo.list_all()

    def load_catalog(self, include_pending: bool = False) -> list[CatalogVideo]:
        """
        Joint videos, taxonomies et liens.

        Les liens vers une taxonomie inconnue sont ignores. Les videos non
        publiques (statut pending ou marqueur provisoire) sont exclues sauf
        si include_pending est vrai.
        """
        taxonomy_by_id = {t.id: t for t in self._taxonomy_repo.list_all()}
        ids_by_video: dict[int, list[int]] = defaultdict(list)
        for link in self._link_repo.list_all():
            ids_by_video[link.video_id].append(link.taxonomy_id)

        catalog = []
        for video in self._video_repo.list_all():
            if not include_pending and not video.is_public:
                continue
            tags: dict[TaxonomyKind, list[str]] = defaultdict(list)
            known_ids = set()
            for taxonomy_id in ids_by_video.get(video.id, []):
                taxonomy = taxonomy_by_id.get(taxonomy_id)
                if taxonomy is None:
                    continue
                tags[taxonomy.kind].append(taxonomy.label)
                known_ids.add(taxonomy_id)
            catalog.append(
                CatalogVideo(
                    video=video,
                    tags={kind: tuple(labels) for kind, labels in tags.items()},
                    taxonomy_ids=frozenset(known_ids),
                )
            )

        logger.debug("Catalogue charge", videos=len(catalog), include_pending=include_pending)
        return catalog
