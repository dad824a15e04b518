from pathlib import Path

from gherkin.parser import Parser
from gherkin.token_scanner import TokenScanner

from augurkcli.readers.dialect_provider import DialectTokenMatcher, get_dialect

FEATURE_DIR = Path(__file__).parent.parent / "test_data" / "FEATURE"


def parse_feature_node(feature_text: str, language: str = "en"):
    """Parse feature text into the gherkin AST feature node and the dialect it was written in"""
    document = Parser().parse(TokenScanner(feature_text), DialectTokenMatcher(language))
    feature = document["feature"]
    return feature, get_dialect(feature["language"])


def parse_feature_file_node(file_name: str, language: str = "en"):
    return parse_feature_node((FEATURE_DIR / file_name).read_text(encoding="utf-8"), language)
