"""
Analysis response parsing and normalization tests
"""

import pytest

from catalogs import CUSTOM_RACE
from errors import AnalysisError
from models import CharacterAnalysis
from parsing import parse_analysis, to_character_update


class TestParseAnalysis:
    def test_plain_json(self):
        a = parse_analysis('{"race": "Arab", "gender": "Wanita", "age": "32"}')
        assert a == CharacterAnalysis(race="Arab", gender="Wanita", age="32")

    def test_fenced_json(self):
        a = parse_analysis('Here you go:\n```json\n{"race": "Eropa"}\n```')
        assert a.race == "Eropa"

    def test_numeric_age_becomes_string(self):
        assert parse_analysis('{"age": 40}').age == "40"

    def test_invalid_json(self):
        with pytest.raises(AnalysisError):
            parse_analysis("not json")

    def test_non_object(self):
        with pytest.raises(AnalysisError):
            parse_analysis('["Arab"]')


class TestToCharacterUpdate:
    def test_catalog_match_is_case_insensitive(self):
        update = to_character_update(CharacterAnalysis(race="indonesia-jawa"))
        assert update.race == "Indonesia-Jawa"
        assert update.custom_race == ""

    def test_unknown_race_goes_to_custom(self):
        update = to_character_update(CharacterAnalysis(race="Skandinavia"))
        assert update.race == CUSTOM_RACE
        assert update.custom_race == "Skandinavia"

    def test_defaults_for_missing_fields(self):
        changes = to_character_update(CharacterAnalysis()).changes()
        assert changes["gender"] == "Pria"
        assert changes["age"] == ""
        assert changes["outfit"] == ""
        assert changes["description"] == ""
        assert "voice" not in changes
        assert "look_at_camera" not in changes
