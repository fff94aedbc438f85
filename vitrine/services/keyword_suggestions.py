"""
Nettoyage des suggestions de mots-cles.

Les suggestions proposees pour une video sont de deux natures : des
mots-cles "existants" (a choisir parmi le repertoire) et des mots-cles
"nouveaux". Les existants sont ramenes a leur libelle canonique, les
nouveaux qui doublonnent un libelle connu sont ecartes.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from vitrine.utils.helpers import normalize_text

MAX_SUGGESTIONS = 8


@dataclass(frozen=True)
class KeywordSuggestions:
    existing: list[str] = field(default_factory=list)
    new: list[str] = field(default_factory=list)


def clean_keyword_suggestions(
    existing: Iterable[str],
    new: Iterable[str],
    available: Iterable[str],
) -> KeywordSuggestions:
    """
    Nettoie deux listes de suggestions face aux libelles disponibles.

    - existing : seuls les libelles connus (a la normalisation pres) sont gardes,
      sous leur forme canonique, sans doublon
    - new : ecarte les libelles deja disponibles, deja retenus en existing
      ou deja vus dans new

    Chaque liste est limitee a MAX_SUGGESTIONS elements.
    """
    available_by_key: dict[str, str] = {}
    for label in available:
        cleaned = (label or "").strip()
        key = normalize_text(cleaned)
        if key:
            available_by_key.setdefault(key, cleaned)

    existing_keys: set[str] = set()
    existing_clean: list[str] = []
    for label in existing:
        key = normalize_text(label or "")
        if not key or key in existing_keys:
            continue
        canonical = available_by_key.get(key)
        if canonical is None:
            continue
        existing_keys.add(key)
        existing_clean.append(canonical)

    new_keys: set[str] = set()
    new_clean: list[str] = []
    for label in new:
        trimmed = (label or "").strip()
        key = normalize_text(trimmed)
        if not key or key in available_by_key or key in existing_keys or key in new_keys:
            continue
        new_keys.add(key)
        new_clean.append(trimmed)

    return KeywordSuggestions(
        existing=existing_clean[:MAX_SUGGESTIONS],
        new=new_clean[:MAX_SUGGESTIONS],
    )
