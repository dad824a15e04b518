import pytest
from gherkin.errors import CompositeParserException
from gherkin.parser import Parser
from gherkin.token_scanner import TokenScanner

from augurkcli.readers.dialect_provider import DialectTokenMatcher, NoSuchLanguageError, get_dialect
from tests.helpers.gherkin_helpers import FEATURE_DIR, parse_feature_file_node


class TestDialectProvider:
    @pytest.mark.dialect
    def test_registered_language(self):
        dialect = get_dialect("nl")

        assert dialect.language == "nl"
        assert dialect.keyword_source == "nl"
        assert "Gegeven " in dialect.given_keywords

    @pytest.mark.dialect
    def test_region_falls_back_to_base_language(self):
        """The purpose of this test is to check that a language tag with an unknown region uses the keywords
        of its base language while the requested tag is kept as the language of the dialect"""
        dialect = get_dialect("nl-zz")

        assert dialect.language == "nl-zz"
        assert dialect.keyword_source == "nl"
        assert dialect.given_keywords == get_dialect("nl").given_keywords

    @pytest.mark.dialect
    @pytest.mark.parametrize("language", ["xx-yy", "xx", ""], ids=["unknown region", "unknown base", "empty"])
    def test_unknown_language(self, language):
        with pytest.raises(NoSuchLanguageError) as exception:
            get_dialect(language)

        assert exception.value.language == language

    @pytest.mark.dialect
    def test_token_matcher_uses_fallback_for_language_header(self):
        feature_node, dialect = parse_feature_file_node("rekenmachine_regio.feature")

        assert feature_node["language"] == "nl-zz"
        assert feature_node["name"] == "Rekenmachine in een regio"
        assert dialect.keyword_source == "nl"
        assert [step["keyword"] for step in feature_node["children"][0]["scenario"]["steps"]] == [
            "Gegeven ",
            "Als ",
            "Dan ",
        ]

    @pytest.mark.dialect
    def test_token_matcher_default_language(self):
        token_matcher = DialectTokenMatcher("nl-zz")

        assert token_matcher.dialect_name == "nl-zz"
        assert token_matcher.dialect.keyword_source == "nl"

    @pytest.mark.dialect
    def test_token_matcher_rejects_unknown_default_language(self):
        with pytest.raises(NoSuchLanguageError):
            DialectTokenMatcher("xx-yy")

    @pytest.mark.dialect
    def test_unknown_language_header_fails_to_parse(self):
        feature_text = (FEATURE_DIR / "unknown_language.feature").read_text(encoding="utf-8")

        with pytest.raises(CompositeParserException):
            Parser().parse(TokenScanner(feature_text), DialectTokenMatcher("en"))
