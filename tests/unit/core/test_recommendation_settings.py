"""
Tests pour les reglages versionnes du moteur de recommandation.
"""

import json

import pytest

from vitrine.core.value_objects.recommendation_settings import (
    DEFAULT_RECOMMENDATION_SETTINGS,
    ObjectiveRule,
    RecommendationSettings,
)


class TestObjectiveRule:
    def test_from_dict_reads_camel_case(self):
        rule = ObjectiveRule.from_dict(
            {"types": ["Corpo"], "objectifs": ["Recrutement"], "priorityObjectifs": ["Recrutement"]}
        )
        assert rule.types == ("Corpo",)
        assert rule.priority_objectifs == ("Recrutement",)

    def test_missing_lists_are_empty(self):
        rule = ObjectiveRule.from_dict({"types": "Corpo"})
        assert rule == ObjectiveRule()


class TestRecommendationSettings:
    """Tests pour RecommendationSettings."""

    def test_round_trip_keeps_json_keys(self):
        document = DEFAULT_RECOMMENDATION_SETTINGS.to_dict()
        assert set(document) == {"version", "keywordLimit", "fallbackToBest", "objectives", "audiences"}
        assert RecommendationSettings.from_dict(document) == DEFAULT_RECOMMENDATION_SETTINGS

    def test_malformed_keys_degrade_to_defaults(self):
        """Un document incomplet ou mal type ne leve jamais d'erreur."""
        settings = RecommendationSettings.from_dict(
            {"keywordLimit": "beaucoup", "fallbackToBest": "oui", "objectives": [], "version": "3"}
        )
        assert settings.keyword_limit == DEFAULT_RECOMMENDATION_SETTINGS.keyword_limit
        assert settings.fallback_to_best is True
        assert settings.objectives == DEFAULT_RECOMMENDATION_SETTINGS.objectives
        assert settings.version == 0

    @pytest.mark.parametrize("raw", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_keyword_limit_uses_default(self, raw):
        """json.loads accepte NaN et Infinity : la limite par defaut s'applique."""
        settings = RecommendationSettings.from_dict(json.loads(f'{{"keywordLimit": {raw}}}'))
        assert settings.keyword_limit == DEFAULT_RECOMMENDATION_SETTINGS.keyword_limit

    @pytest.mark.parametrize("raw, expected", [(1e308, 8), (2.7, 2), (-1e308, 1)])
    def test_absurd_keyword_limit_clamped(self, raw, expected):
        settings = RecommendationSettings.from_dict({"keywordLimit": raw})
        assert settings.effective_keyword_limit == expected

    def test_empty_document(self):
        settings = RecommendationSettings.from_dict({})
        assert set(settings.objectives) == {"promotion", "recrutement", "informatif", "divertissement"}
        assert "interne" in settings.audiences

    @pytest.mark.parametrize("limit, expected", [(0, 1), (4, 4), (20, 8), (-3, 1)])
    def test_effective_keyword_limit_clamped(self, limit, expected):
        assert RecommendationSettings(keyword_limit=limit).effective_keyword_limit == expected

    def test_immutable(self):
        settings = RecommendationSettings()
        with pytest.raises(AttributeError):
            settings.version = 2
        with pytest.raises(TypeError):
            settings.objectives["x"] = ObjectiveRule()

    def test_with_version_returns_new_instance(self):
        updated = DEFAULT_RECOMMENDATION_SETTINGS.with_version(7)
        assert updated.version == 7
        assert DEFAULT_RECOMMENDATION_SETTINGS.version == 0
