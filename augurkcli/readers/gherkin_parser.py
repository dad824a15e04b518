from dataclasses import replace

from gherkin.parser import Parser
from gherkin.token_scanner import TokenScanner

from augurkcli.cli import Environment
from augurkcli.data_classes.dataclass_augurk import Feature
from augurkcli.readers.dialect_provider import DialectTokenMatcher, get_dialect
from augurkcli.readers.file_parser import FileParser
from augurkcli.readers.gherkin_converter import convert_feature
from augurkcli.readers.markdown import embed_images, trim_line_start
from augurkcli.settings import DEFAULT_LANGUAGE, TRIM_LINE_START_MAX_COMPAT_LEVEL


class GherkinParser(FileParser):
    """Parser for Gherkin .feature files"""

    def __init__(self, environment: Environment, filepath):
        super().__init__(environment, filepath)
        self.language = environment.language or DEFAULT_LANGUAGE

    def parse_file(self) -> Feature:
        """Parse a Gherkin .feature file and convert it to a Feature ready to be published"""
        self.env.vlog(f"Parsing Gherkin feature file: {self.filepath}")

        with open(self.filepath, "r", encoding="utf-8") as f:
            feature_text = f.read()

        parser = Parser()
        gherkin_document = parser.parse(TokenScanner(feature_text), DialectTokenMatcher(self.language))

        feature_node = gherkin_document.get("feature")
        if not feature_node:
            raise ValueError("No feature found in the Gherkin file")

        dialect = get_dialect(feature_node["language"], feature_node.get("location"))
        feature = convert_feature(feature_node, dialect)
        feature = replace(feature, source_filename=str(self.filepath))

        if self.env.compat_level is not None and self.env.compat_level <= TRIM_LINE_START_MAX_COMPAT_LEVEL:
            feature = self.trim_descriptions(feature)

        if self.env.embed:
            feature = self.embed_images(feature)

        self.env.vlog(f"Processed {len(feature.scenarios)} scenarios in feature '{feature.title}'.")
        return feature

    @staticmethod
    def trim_descriptions(feature: Feature) -> Feature:
        return replace(
            feature,
            description=trim_line_start(feature.description),
            scenarios=[
                replace(scenario, description=trim_line_start(scenario.description))
                for scenario in feature.scenarios
            ],
        )

    def embed_images(self, feature: Feature) -> Feature:
        """Embeds the images referenced in the descriptions, resolving them relative to the feature file"""
        base_path = self.filepath.resolve().parent
        return replace(
            feature,
            description=embed_images(feature.description, base_path, warn=self.env.elog),
            scenarios=[
                replace(scenario, description=embed_images(scenario.description, base_path, warn=self.env.elog))
                for scenario in feature.scenarios
            ],
        )
