"""
Réglages du moteur de recommandation de références.

Le document de réglages est édité depuis l'administration et relu à chaque
demande de recommandation. Il est représenté ici par une structure immuable
et versionnée, passée par valeur au moteur ; toute modification produit
une nouvelle instance.

Le format JSON conserve les clés historiques en camelCase
(keywordLimit, fallbackToBest, priorityObjectifs).
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

DEFAULT_KEYWORD_LIMIT = 4
MIN_KEYWORD_LIMIT = 1
MAX_KEYWORD_LIMIT = 8


@dataclass(frozen=True)
class ObjectiveRule:
    """
    Règle associant un objectif de projet aux vidéos admissibles.

    Attributs :
        types : Libellés de taxonomie "type" admissibles
        objectifs : Libellés de taxonomie "objectif" pertinents
        priority_objectifs : Libellés "objectif" classés en tête
    """

    types: tuple[str, ...] = ()
    objectifs: tuple[str, ...] = ()
    priority_objectifs: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ObjectiveRule":
        """Construit une règle depuis le JSON ; les listes absentes sont vides."""
        return cls(
            types=_as_labels(data.get("types")),
            objectifs=_as_labels(data.get("objectifs")),
            priority_objectifs=_as_labels(data.get("priorityObjectifs")),
        )

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "types": list(self.types),
            "objectifs": list(self.objectifs),
            "priorityObjectifs": list(self.priority_objectifs),
        }


def _as_labels(value: Any) -> tuple[str, ...]:
    """Convertit une valeur JSON en tuple de libellés (ignore ce qui n'est pas une liste)."""
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(str(item) for item in value if isinstance(item, str) and item.strip())


@dataclass(frozen=True)
class RecommendationSettings:
    """
    Réglages versionnés du moteur de recommandation.

    Attributs :
        version : Numéro incrémenté à chaque écriture
        keyword_limit : Nombre maximum de mots-clés affichés par suggestion
        fallback_to_best : Si vrai, un objectif inconnu ne restreint pas le catalogue
        objectives : Règle par clé d'objectif ("promotion", "recrutement"...)
        audiences : Types admissibles par clé d'audience
    """

    version: int = 0
    keyword_limit: int = DEFAULT_KEYWORD_LIMIT
    fallback_to_best: bool = True
    objectives: Mapping[str, ObjectiveRule] = field(default_factory=dict)
    audiences: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "objectives", MappingProxyType(dict(self.objectives)))
        object.__setattr__(self, "audiences", MappingProxyType(dict(self.audiences)))

    @property
    def effective_keyword_limit(self) -> int:
        """Limite de mots-clés bornée à [1, 8]."""
        return max(MIN_KEYWORD_LIMIT, min(MAX_KEYWORD_LIMIT, self.keyword_limit))

    def with_version(self, version: int) -> "RecommendationSettings":
        return replace(self, version=version)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RecommendationSettings":
        """
        Construit les réglages depuis le document JSON.

        Les clés absentes ou mal typées reprennent la valeur par défaut :
        un document incomplet dégrade vers les réglages par défaut au lieu
        de lever une erreur.
        """
        defaults = DEFAULT_RECOMMENDATION_SETTINGS

        raw_objectives = data.get("objectives")
        if isinstance(raw_objectives, Mapping):
            objectives = {
                str(key): ObjectiveRule.from_dict(rule)
                for key, rule in raw_objectives.items()
                if isinstance(rule, Mapping)
            }
        else:
            objectives = dict(defaults.objectives)

        raw_audiences = data.get("audiences")
        if isinstance(raw_audiences, Mapping):
            audiences = {
                str(key): _as_labels(labels) for key, labels in raw_audiences.items()
            }
        else:
            audiences = dict(defaults.audiences)

        keyword_limit = data.get("keywordLimit", defaults.keyword_limit)
        if isinstance(keyword_limit, bool) or not isinstance(keyword_limit, (int, float)):
            keyword_limit = defaults.keyword_limit
        elif not math.isfinite(keyword_limit):
            # json accepte NaN et Infinity
            keyword_limit = defaults.keyword_limit

        fallback = data.get("fallbackToBest", defaults.fallback_to_best)
        if not isinstance(fallback, bool):
            fallback = defaults.fallback_to_best

        version = data.get("version", 0)
        if isinstance(version, bool) or not isinstance(version, int):
            version = 0

        return cls(
            version=version,
            keyword_limit=int(keyword_limit),
            fallback_to_best=fallback,
            objectives=objectives,
            audiences=audiences,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "keywordLimit": self.keyword_limit,
            "fallbackToBest": self.fallback_to_best,
            "objectives": {key: rule.to_dict() for key, rule in self.objectives.items()},
            "audiences": {key: list(labels) for key, labels in self.audiences.items()},
        }


DEFAULT_RECOMMENDATION_SETTINGS = RecommendationSettings(
    version=0,
    keyword_limit=DEFAULT_KEYWORD_LIMIT,
    fallback_to_best=True,
    objectives={
        "promotion": ObjectiveRule(
            types=("Animation 3D", "Corpo", "Publicité", "Story", "Événement"),
            objectifs=("Communautaire", "Événementiel", "Notoriété", "Promotionnelle"),
            priority_objectifs=("Promotionnelle",),
        ),
        "recrutement": ObjectiveRule(
            types=("Corpo", "Publicité", "Capsule", "Story"),
            objectifs=(
                "Communautaire",
                "Informatif",
                "Notoriété",
                "Promotionnelle",
                "Recrutement",
            ),
            priority_objectifs=("Recrutement",),
        ),
        "informatif": ObjectiveRule(
            types=(
                "Animation 3D",
                "Capsule",
                "Corpo",
                "Documentaire",
                "Événement",
                "Podcast",
                "Story",
            ),
            objectifs=(
                "Communautaire",
                "Éducatif",
                "Événementiel",
                "Informatif",
                "Recrutement",
            ),
            priority_objectifs=("Informatif",),
        ),
        "divertissement": ObjectiveRule(
            types=(
                "Capsule",
                "Captation",
                "Court métrage",
                "Documentaire",
                "Événement",
                "Podcast",
                "Story",
                "Vidéoclip",
            ),
            objectifs=("Divertissement", "Événementiel"),
            priority_objectifs=("Divertissement",),
        ),
    },
    audiences={
        "clients_potentiels": (
            "Captation",
            "Court métrage",
            "Documentaire",
            "Événement",
            "Vidéoclip",
        ),
        "clients_actuels": (
            "Captation",
            "Court métrage",
            "Documentaire",
            "Événement",
            "Vidéoclip",
        ),
        "interne": ("Captation", "Court métrage", "Vidéoclip"),
        "evenement": ("Story", "Podcast", "Court métrage"),
    },
)
