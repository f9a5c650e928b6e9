"""
Language-context resolution and character model tests
"""

import pytest
from pydantic import ValidationError

from catalogs import CUSTOM_RACE
from models import BaseLocale, Character, OtherLocale, RegionalLocale, resolve_language


class TestResolveLanguage:
    def test_base_locale(self):
        assert resolve_language("Indonesia") == BaseLocale()

    def test_empty_label_is_base_locale(self):
        assert resolve_language("") == BaseLocale()

    def test_regional_variant(self):
        assert resolve_language("Indonesia-Sunda") == RegionalLocale(region="Sunda")

    def test_other_region(self):
        assert resolve_language("Asia Timur") == OtherLocale(name="Asia Timur")

    def test_base_name_without_dash_is_other(self):
        assert resolve_language("Indonesian") == OtherLocale(name="Indonesian")


class TestCharacter:
    def test_language_resolved_at_construction(self):
        c = Character(id="a", race="Indonesia-Batak")
        assert c.language == RegionalLocale(region="Batak")

    def test_custom_race_overrides_tag(self):
        c = Character(id="a", race=CUSTOM_RACE, custom_race="Korea")
        assert c.ethnicity == "Korea"
        assert c.language == OtherLocale(name="Korea")

    def test_custom_race_ignored_for_catalog_tag(self):
        c = Character(id="a", race="Arab", custom_race="Korea")
        assert c.ethnicity == "Arab"

    def test_custom_tag_without_text_falls_back_to_base(self):
        c = Character(id="a", race=CUSTOM_RACE, custom_race="")
        assert c.language == BaseLocale()

    def test_characters_are_frozen(self):
        c = Character(id="a")
        with pytest.raises(ValidationError):
            c.age = "40"

    def test_dump_has_no_language_or_ui_fields(self):
        dumped = Character(id="a").model_dump()
        assert "language" not in dumped
        assert "_language" not in dumped
        assert "preview" not in dumped
        assert "analyzing" not in dumped
