"""
Fonctions utilitaires partagees dans le projet Vitrine.

Ce module centralise les fonctions reutilisees a travers le codebase :
- normalize_accents : suppression des diacritiques pour comparaison
- normalize_text : cle de correspondance des libelles de taxonomie
- normalized_set : ensemble de cles normalisees pour une liste de libelles
- chunked : decoupage d'une liste en lots de taille fixe
"""

import re
import unicodedata
from collections.abc import Iterable, Sequence
from typing import TypeVar

T = TypeVar("T")

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_accents(text: str) -> str:
    """
    Supprime les accents d'une chaine pour une comparaison insensible aux accents.

    Utilise la decomposition NFD puis filtre les caracteres diacritiques (Mn).
    Ex: "Événementiel" -> "Evenementiel"
    """
    normalized = unicodedata.normalize("NFD", text)
    return "".join(char for char in normalized if unicodedata.category(char) != "Mn")


def normalize_text(text: str) -> str:
    """
    Canonicalise un libelle libre pour servir de cle de correspondance.

    Supprime les accents, remplace les espaces insecables, passe en minuscules,
    reduit toute suite de caracteres non alphanumeriques a un espace unique
    puis retire les espaces de bord.

    Ex: "ÉVÉNEMENTIEL  " -> "evenementiel", "Court-métrage" -> "court metrage"

    La fonction est idempotente et ne depend pas de la locale du systeme.
    """
    if not text:
        return ""
    folded = normalize_accents(text).replace("\u00a0", " ").lower()
    folded = _NON_ALNUM_RE.sub(" ", folded).strip()
    return _WHITESPACE_RE.sub(" ", folded)


def normalized_set(labels: Iterable[str]) -> set[str]:
    """Retourne l'ensemble des cles normalisees non vides d'une liste de libelles."""
    result = set()
    for label in labels:
        key = normalize_text(label)
        if key:
            result.add(key)
    return result


def chunked(items: Sequence[T], size: int) -> list[list[T]]:
    """Decoupe une sequence en lots de `size` elements (le dernier peut etre plus court)."""
    if size < 1:
        raise ValueError("La taille de lot doit etre >= 1")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]
