"""
Tests for the lexicon
"""

from extrafields.i18n import Lexicon


class TestLexicon:
    """Test message lookup"""

    def test_placeholder(self):
        lexicon = Lexicon()
        assert lexicon("extrafields.field_err_ae", name="bio") == 'A field with the name "bio" already exists.'

    def test_missing_placeholder_is_kept(self):
        assert Lexicon().get("extrafields.field_err_ae") == 'A field with the name "{name}" already exists.'

    def test_unknown_key_returns_key(self):
        assert Lexicon().get("extrafields.nope") == "extrafields.nope"

    def test_french(self):
        assert Lexicon("fr").get("extrafields.field_err_nf") == "Champ introuvable."

    def test_region_falls_back_to_base_language(self):
        assert Lexicon("fr-CA").language == "fr"

    def test_unknown_language_falls_back_to_english(self):
        lexicon = Lexicon("xx")
        assert lexicon.language == "en"
        assert lexicon.get("extrafields.field_err_nf") == "Field not found."
