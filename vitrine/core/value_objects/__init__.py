"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- BudgetRange, BUDGET_LEVELS : paliers et fourchettes de budget
- parse_budget_range, coerce_budget_level, resolve_visitor_budget
- ObjectiveRule, RecommendationSettings : reglages du moteur de recommandation
"""

from vitrine.core.value_objects.budget import (
    BUDGET_BRACKETS,
    BUDGET_LEVELS,
    BudgetRange,
    coerce_budget_level,
    parse_budget_range,
    resolve_visitor_budget,
)
from vitrine.core.value_objects.recommendation_settings import (
    DEFAULT_RECOMMENDATION_SETTINGS,
    ObjectiveRule,
    RecommendationSettings,
)

__all__ = [
    "BUDGET_BRACKETS",
    "BUDGET_LEVELS",
    "BudgetRange",
    "coerce_budget_level",
    "parse_budget_range",
    "resolve_visitor_budget",
    "DEFAULT_RECOMMENDATION_SETTINGS",
    "ObjectiveRule",
    "RecommendationSettings",
]
