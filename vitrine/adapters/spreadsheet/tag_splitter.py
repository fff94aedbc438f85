"""
Decoupage des listes de tags en texte libre.

Les cellules de tags melangent plusieurs separateurs selon la personne
qui a rempli le tableur. Le decoupage applique une liste ordonnee de regles
pures ; chaque regle recoit les morceaux produits par la precedente.

Le decoupage sur " / " (barre entouree d'espaces) passe apres la virgule
et le point-virgule.
"""

import re
from collections.abc import Callable, Iterable
from typing import Optional

EMPTY_TAG_PLACEHOLDER = "—"

SplitRule = Callable[[str], list[str]]

_BULLET_RE = re.compile(r"[|•·]")
_PUNCTUATION_RE = re.compile(r"[,;/]")
_SPACED_SLASH_RE = re.compile(r"\s+/\s+")


def split_on_bullets(chunk: str) -> list[str]:
    """Decoupe sur les barres verticales et les puces (| • ·)."""
    return _BULLET_RE.split(chunk)


def split_on_punctuation(chunk: str) -> list[str]:
    """Decoupe sur la virgule, le point-virgule et la barre oblique."""
    return _PUNCTUATION_RE.split(chunk)


def split_on_spaced_slash(chunk: str) -> list[str]:
    """Decoupe sur une barre oblique entouree d'espaces."""
    return _SPACED_SLASH_RE.split(chunk)


SPLIT_RULES: tuple[SplitRule, ...] = (
    split_on_bullets,
    split_on_punctuation,
    split_on_spaced_slash,
)


def apply_split_rules(raw: str, rules: Iterable[SplitRule] = SPLIT_RULES) -> list[str]:
    """Applique les regles dans l'ordre et retourne les morceaux bruts."""
    chunks = [raw]
    for rule in rules:
        chunks = [piece for chunk in chunks for piece in rule(chunk)]
    return chunks


def split_tag_list(raw: Optional[str]) -> list[str]:
    """
    Decoupe une cellule de tags en libelles.

    Ex: "Drame | Comédie" -> ["Drame", "Comédie"], "—" -> []
    """
    if not raw or not raw.strip():
        return []
    if raw.strip() == EMPTY_TAG_PLACEHOLDER:
        return []
    return [piece.strip() for piece in apply_split_rules(raw) if piece.strip()]
