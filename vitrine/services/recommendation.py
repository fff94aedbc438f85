"""
Moteur de recommandation de vidéos de référence.

A partir de l'objectif et des audiences choisis par le visiteur, sélectionne
dans le catalogue les vidéos à proposer comme références, selon la table de
règles éditable (RecommendationSettings) :
1. Règle de l'objectif (types admissibles, objectifs, objectifs prioritaires)
2. Union des types admis par les audiences choisies
3. Filtre combiné type / audience / budget / durée
4. Partition stable : objectifs prioritaires, puis objectifs, puis le reste
5. Mots-clés affichés tronqués à la limite des réglages

Le moteur est une fonction pure de ses trois entrées (réglages, catalogue,
requête) : aucun état partagé, aucune exception sur des réglages incomplets.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Optional

from vitrine.core.entities.taxonomy import KEYWORD_GROUP_KINDS, TaxonomyKind
from vitrine.core.entities.video import Video
from vitrine.core.value_objects.budget import BudgetRange
from vitrine.core.value_objects.recommendation_settings import RecommendationSettings
from vitrine.utils.helpers import normalize_text, normalized_set

# Tranches de durée du formulaire (secondes, bornes incluses)
DURATION_BUCKETS: dict[str, tuple[int, Optional[int]]] = {
    "courte_video": (10, 30),
    "publicite": (30, 90),
    "film_publicitaire": (120, 240),
    "mini_documentaire": (300, None),
}

UNCERTAIN_DURATION = "incertain"

TIER_PRIORITY = 0
TIER_OBJECTIF = 1
TIER_OTHER = 2

REASON_PRIORITY = "Objectif prioritaire"
REASON_OBJECTIF = "Objectif"
REASON_TYPE = "Type"
REASON_BUDGET = "Budget"
REASON_DURATION = "Durée"
REASON_FEATURED = "Favoris"


@dataclass(frozen=True)
class CatalogVideo:
    """
    Vidéo du catalogue hydratée avec ses libellés de taxonomie.

    Les libellés peuvent contenir des doublons (liens en double) : le moteur
    ne raisonne que sur des ensembles.
    """

    video: Video
    tags: Mapping[TaxonomyKind, tuple[str, ...]] = field(default_factory=dict)
    taxonomy_ids: frozenset[int] = frozenset()

    @property
    def id(self) -> Optional[int]:
        return self.video.id

    def labels(self, kind: TaxonomyKind) -> tuple[str, ...]:
        return tuple(self.tags.get(kind, ()))


@dataclass(frozen=True)
class RecommendationQuery:
    """
    Sélection du visiteur.

    Attributs :
        objective : Clé d'objectif ("promotion"...), None pour aucun
        audiences : Clés d'audience sélectionnées
        budget : Fourchette déclarée (None : pas de filtre)
        durations : Clés de tranches de durée ("incertain" ignoré)
        exclude_ids : Vidéos à écarter (déjà proposées)
        limit : Nombre maximum de résultats (None : pas de limite)
    """

    objective: Optional[str] = None
    audiences: tuple[str, ...] = ()
    budget: Optional[BudgetRange] = None
    durations: tuple[str, ...] = ()
    exclude_ids: frozenset[int] = frozenset()
    limit: Optional[int] = None


@dataclass(frozen=True)
class RecommendedVideo:
    """Suggestion retenue, avec les mots-clés à afficher et les raisons du choix."""

    video: Video
    keywords: tuple[str, ...]
    tier: int
    reasons: tuple[str, ...] = ()


@dataclass(frozen=True)
class ResolvedRule:
    """
    Règle d'objectif normalisée.

    types vaut None pour la règle "sans restriction" : toute vidéo portant
    au moins un tag de type est admissible.
    """

    types: Optional[frozenset[str]]
    objectifs: frozenset[str] = frozenset()
    priority_objectifs: frozenset[str] = frozenset()

    @classmethod
    def match_all(cls) -> "ResolvedRule":
        return cls(types=None)


def _in_duration_buckets(duration: Optional[int], buckets: Iterable[str]) -> bool:
    if duration is None:
        return False
    for key in buckets:
        low, high = DURATION_BUCKETS[key]
        if duration >= low and (high is None or duration <= high):
            return True
    return False


class RecommendationEngine:
    """Sélection et classement des vidéos de référence."""

    def resolve_rule(
        self, settings: RecommendationSettings, objective: Optional[str]
    ) -> Optional[ResolvedRule]:
        """
        Retourne la règle de l'objectif, normalisée.

        Sans objectif, ou pour un objectif inconnu quand fallback_to_best est
        actif, retourne la règle sans restriction. Retourne None quand le
        résultat doit être vide (objectif inconnu sans repli).
        """
        if not objective:
            return ResolvedRule.match_all()
        rule = settings.objectives.get(objective)
        if rule is None:
            return ResolvedRule.match_all() if settings.fallback_to_best else None
        return ResolvedRule(
            types=frozenset(normalized_set(rule.types)),
            objectifs=frozenset(normalized_set(rule.objectifs)),
            priority_objectifs=frozenset(normalized_set(rule.priority_objectifs)),
        )

    def allowed_audience_types(
        self, settings: RecommendationSettings, audiences: Sequence[str]
    ) -> Optional[frozenset[str]]:
        """
        Union des types admis par les audiences connues.

        Les clés inconnues sont ignorées ; None si aucune audience connue
        n'est sélectionnée (pas de filtre).
        """
        known = [key for key in audiences if key in settings.audiences]
        if not known:
            return None
        allowed: set[str] = set()
        for key in known:
            allowed |= normalized_set(settings.audiences[key])
        return frozenset(allowed)

    def keyword_labels(self, item: CatalogVideo, limit: int) -> tuple[str, ...]:
        """Mots-clés, styles et paramètres dédoublonnés, tronqués à limit."""
        seen: set[str] = set()
        labels: list[str] = []
        for kind in KEYWORD_GROUP_KINDS:
            for label in item.labels(kind):
                key = normalize_text(label)
                if not key or key in seen:
                    continue
                seen.add(key)
                labels.append(label)
        return tuple(labels[:limit])

    def recommend(
        self,
        settings: RecommendationSettings,
        catalog: Sequence[CatalogVideo],
        query: RecommendationQuery,
    ) -> list[RecommendedVideo]:
        """
        Retourne les vidéos recommandées, dans l'ordre d'affichage.

        L'ordre du catalogue (plus récentes d'abord) est conservé à
        l'intérieur de chaque palier de classement.
        """
        rule = self.resolve_rule(settings, query.objective)
        if rule is None:
            return []

        audience_types = self.allowed_audience_types(settings, query.audiences)
        durations = [key for key in query.durations if key in DURATION_BUCKETS]
        keyword_limit = settings.effective_keyword_limit

        tiers: tuple[list[RecommendedVideo], ...] = ([], [], [])
        for item in catalog:
            video = item.video
            if not video.is_public or video.id in query.exclude_ids:
                continue

            types = normalized_set(item.labels(TaxonomyKind.TYPE))
            if not types:
                continue
            if rule.types is not None and not types & rule.types:
                continue
            if audience_types is not None and not types & audience_types:
                continue

            if query.budget is not None:
                video_range = BudgetRange(video.budget_min, video.budget_max)
                if not video_range.overlaps(query.budget):
                    continue

            if durations and not _in_duration_buckets(video.duration_seconds, durations):
                continue

            objectifs = normalized_set(item.labels(TaxonomyKind.OBJECTIF))
            if objectifs & rule.priority_objectifs:
                tier = TIER_PRIORITY
            elif objectifs & rule.objectifs:
                tier = TIER_OBJECTIF
            else:
                tier = TIER_OTHER

            tiers[tier].append(
                RecommendedVideo(
                    video=video,
                    keywords=self.keyword_labels(item, keyword_limit),
                    tier=tier,
                    reasons=self._reasons(rule, tier, query, durations, video),
                )
            )

        results = [suggestion for tier in tiers for suggestion in tier]
        if query.limit is not None:
            results = results[: max(query.limit, 0)]
        return results

    def _reasons(
        self,
        rule: ResolvedRule,
        tier: int,
        query: RecommendationQuery,
        durations: Sequence[str],
        video: Video,
    ) -> tuple[str, ...]:
        """Raisons lisibles du choix (affichées en mode debug)."""
        reasons = []
        if tier == TIER_PRIORITY:
            reasons.append(REASON_PRIORITY)
        elif tier == TIER_OBJECTIF:
            reasons.append(REASON_OBJECTIF)
        if rule.types is not None:
            reasons.append(REASON_TYPE)
        if durations:
            reasons.append(REASON_DURATION)
        if query.budget is not None:
            reasons.append(REASON_BUDGET)
        if video.is_featured:
            reasons.append(REASON_FEATURED)
        return tuple(reasons)
