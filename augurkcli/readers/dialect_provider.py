from beartype.typing import Dict, Optional
from gherkin.dialect import Dialect
from gherkin.errors import NoSuchLanguageException
from gherkin.token_matcher import TokenMatcher


class NoSuchLanguageError(NoSuchLanguageException):
    """Raised when neither a language nor its base language has a gherkin dialect"""

    def __init__(self, language: str, location: Optional[Dict[str, int]] = None):
        self.language = language
        super().__init__(language, location or {"line": 0, "column": 0})


class GherkinDialect(Dialect):
    """
    Gherkin dialect that remembers the language it was requested for.

    language - language tag the dialect was requested for, e.g. "nl-be"
    keyword_source - registered language the keyword sets belong to, e.g. "nl"
    """

    def __init__(self, language: str, spec: dict, keyword_source: str = None):
        super().__init__(spec)
        self.language = language
        self.keyword_source = keyword_source or language


def get_dialect(language: str, location: Optional[Dict[str, int]] = None) -> GherkinDialect:
    """Looks up the dialect for a language tag.

    A tag with a region subtag that has no dialect of its own (e.g. "pt-br") falls back
    to the keywords of its base language while keeping the requested tag as its language.

    :param language: language tag, e.g. "en" or "nl-be"
    :param location: location of the language header, used in the error message
    :raises NoSuchLanguageError: when no dialect could be found
    """
    dialect = Dialect.for_name(language)
    if dialect is not None:
        return GherkinDialect(language, dialect.spec)

    if "-" in language:
        base_language = language.split("-")[0]
        base_dialect = Dialect.for_name(base_language)
        if base_dialect is not None:
            return GherkinDialect(language, base_dialect.spec, keyword_source=base_language)

    raise NoSuchLanguageError(language, location)


class DialectTokenMatcher(TokenMatcher):
    """Token matcher that resolves the default language and `# language:` headers with get_dialect"""

    def _change_dialect(self, dialect_name, location=None):
        dialect = get_dialect(dialect_name, location)
        super()._change_dialect(dialect.keyword_source, location)
        self.dialect_name = dialect_name
        self.dialect = dialect
