"""
Paliers de budget et fourchettes.

Les budgets des vidéos comme ceux déclarés par les visiteurs sont ramenés
à un ensemble fixe de paliers en dollars canadiens. Ce module regroupe
l'extraction d'une fourchette depuis un texte libre, l'arrondi au palier
le plus proche et le test de chevauchement de fourchettes.
"""

import math
import re
from dataclasses import dataclass
from typing import Optional, Union

BUDGET_LEVELS: tuple[int, ...] = (
    2000, 3000, 4000, 5000, 10000, 15000, 20000, 25000, 30000, 35000, 40000,
    45000, 50000,
)

# Fourchettes proposées dans le formulaire de demande de soumission
BUDGET_BRACKETS: dict[str, tuple[int, Optional[int]]] = {
    "2000-5000": (2000, 5000),
    "5000-10000": (5000, 10000),
    "10000-20000": (10000, 20000),
    "20000+": (20000, None),
}

UNKNOWN_BUDGET = "unknown"

# Suites de chiffres avec espaces de milliers ("10 000")
_DIGIT_RUN_RE = re.compile(r"\d[\d\s]*")


@dataclass(frozen=True)
class BudgetRange:
    """
    Fourchette de budget ; une borne None est non bornée de ce côté.

    Attributs :
        min : Borne inférieure incluse
        max : Borne supérieure incluse
    """

    min: Optional[int] = None
    max: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        """Vrai si aucune borne n'est définie."""
        return self.min is None and self.max is None

    def overlaps(self, other: "BudgetRange") -> bool:
        """Teste le chevauchement de deux fourchettes (bornes incluses)."""
        low = -math.inf if self.min is None else self.min
        high = math.inf if self.max is None else self.max
        other_low = -math.inf if other.min is None else other.min
        other_high = math.inf if other.max is None else other.max
        return low <= other_high and other_low <= high


def parse_budget_range(raw: Optional[str]) -> BudgetRange:
    """
    Extrait une fourchette depuis une cellule de budget en texte libre.

    Le premier nombre trouvé est le minimum, le second (s'il existe) le maximum,
    sinon maximum = minimum. Les espaces à l'intérieur d'un nombre sont traités
    comme séparateurs de milliers.

    Ex: "10 000 à 15 000$" -> BudgetRange(10000, 15000), "aucun" -> BudgetRange(None, None)
    """
    if not raw:
        return BudgetRange()
    numbers = []
    for match in _DIGIT_RUN_RE.findall(raw):
        digits = re.sub(r"\s+", "", match)
        if digits:
            numbers.append(int(digits))
    if not numbers:
        return BudgetRange()
    low = numbers[0]
    high = numbers[1] if len(numbers) > 1 else numbers[0]
    return BudgetRange(low, high)


def coerce_budget_level(value: Optional[float]) -> Optional[int]:
    """
    Ramène un montant au palier de budget le plus proche.

    Les paliers sont parcourus en ordre croissant avec une comparaison stricte :
    à égale distance de deux paliers, le palier inférieur l'emporte
    (12500 -> 10000).

    Retourne None pour None, une valeur non finie ou un montant <= 0.
    """
    if value is None:
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount) or amount <= 0:
        return None
    closest = BUDGET_LEVELS[0]
    best_delta = abs(amount - closest)
    for level in BUDGET_LEVELS:
        delta = abs(amount - level)
        if delta < best_delta:
            best_delta = delta
            closest = level
    return closest


def resolve_visitor_budget(value: Union[int, float, str, None]) -> Optional[BudgetRange]:
    """
    Convertit le budget déclaré par un visiteur en fourchette de filtrage.

    Accepte un palier (ou un montant, arrondi au palier le plus proche) sous
    forme numérique ou textuelle, ou une clé de fourchette du formulaire
    ("2000-5000", "20000+"...). Retourne None quand aucun filtre ne s'applique
    ("unknown", vide, valeur illisible).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        key = value.strip()
        if not key or key == UNKNOWN_BUDGET:
            return None
        if key in BUDGET_BRACKETS:
            low, high = BUDGET_BRACKETS[key]
            return BudgetRange(low, high)
        try:
            value = float(key.replace(" ", ""))
        except ValueError:
            return None
    level = coerce_budget_level(value)
    if level is None:
        return None
    return BudgetRange(level, level)
