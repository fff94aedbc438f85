"""Utilitaires partages (normalisation de texte, decoupage en lots)."""

from vitrine.utils.helpers import chunked, normalize_accents, normalize_text, normalized_set

__all__ = ["chunked", "normalize_accents", "normalize_text", "normalized_set"]
