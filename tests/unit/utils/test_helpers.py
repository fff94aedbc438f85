"""
Tests pour les utilitaires de normalisation et de decoupage en lots.
"""

import pytest

from vitrine.utils.helpers import chunked, normalize_accents, normalize_text, normalized_set


class TestNormalizeText:
    """Tests pour normalize_text."""

    def test_accents_and_case_folded(self):
        """Accents, casse et espaces superflus n'influencent pas la cle."""
        assert normalize_text("Événementiel") == "evenementiel"
        assert normalize_text("evenementiel") == "evenementiel"
        assert normalize_text("ÉVÉNEMENTIEL  ") == "evenementiel"

    def test_punctuation_collapsed_to_single_space(self):
        assert normalize_text("Court-métrage !!") == "court metrage"
        assert normalize_text("  Animation   3D ") == "animation 3d"

    def test_non_breaking_space(self):
        assert normalize_text("Vid\u00e9o\u00a0clip") == "video clip"

    def test_idempotent(self):
        """Normaliser deux fois donne le meme resultat."""
        for value in ("Événementiel", "Court-métrage", "  A/B  ", "Paramètres", ""):
            once = normalize_text(value)
            assert normalize_text(once) == once

    def test_empty_and_punctuation_only(self):
        assert normalize_text("") == ""
        assert normalize_text("—") == ""


class TestNormalizeAccents:
    def test_strips_combining_marks(self):
        assert normalize_accents("Comédie à Noël") == "Comedie a Noel"


class TestNormalizedSet:
    def test_skips_empty_keys(self):
        assert normalized_set(["Corpo", "CORPO", "—", "Story"]) == {"corpo", "story"}


class TestChunked:
    def test_last_chunk_shorter(self):
        assert chunked([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]

    def test_empty_sequence(self):
        assert chunked([], 50) == []

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            chunked([1], 0)
