import os
import shutil

import pytest
from gherkin.errors import ParserError
from PIL import Image

from augurkcli.cli import Environment
from augurkcli.readers.gherkin_parser import GherkinParser
from tests.helpers.gherkin_helpers import FEATURE_DIR


class TestGherkinParser:
    """Tests for Gherkin .feature file parser"""

    @pytest.fixture
    def environment(self):
        env = Environment()
        env.language = "en"
        env.verbose = False
        return env

    @pytest.mark.parse_gherkin
    def test_parse_sample_file(self, environment):
        feature_path = FEATURE_DIR / "calculator.feature"

        feature = GherkinParser(environment, feature_path).parse_file()

        assert feature.title == "Calculator"
        assert feature.source_filename == str(feature_path)
        assert len(feature.scenarios) == 3
        assert feature.description == "  As a user\n    I want to add numbers"

    @pytest.mark.parse_gherkin
    def test_descriptions_trimmed_for_old_compat_level(self, environment):
        environment.compat_level = 2

        feature = GherkinParser(environment, FEATURE_DIR / "calculator.feature").parse_file()

        assert feature.description == "As a user\nI want to add numbers"
        assert feature.scenarios[0].description == "The numbers are entered\none at a time"

    @pytest.mark.parse_gherkin
    def test_descriptions_kept_for_newer_compat_level(self, environment):
        environment.compat_level = 3

        feature = GherkinParser(environment, FEATURE_DIR / "calculator.feature").parse_file()

        assert feature.description == "  As a user\n    I want to add numbers"

    @pytest.mark.parse_gherkin
    def test_language_header_with_region(self, environment):
        feature = GherkinParser(environment, FEATURE_DIR / "rekenmachine_regio.feature").parse_file()

        assert feature.title == "Rekenmachine in een regio"
        assert len(feature.scenarios[0].steps) == 3

    @pytest.mark.parse_gherkin
    def test_default_language_from_environment(self, environment, tmp_path):
        feature_path = tmp_path / "zonder_header.feature"
        feature_path.write_text("Functionaliteit: Zonder header\n  Scenario: S\n    Stel een stap\n", encoding="utf-8")
        environment.language = "nl"

        feature = GherkinParser(environment, feature_path).parse_file()

        assert feature.title == "Zonder header"
        assert feature.scenarios[0].steps[0].keyword == "Stel "

    @pytest.mark.parse_gherkin
    def test_unknown_language(self, environment):
        with pytest.raises(ParserError):
            GherkinParser(environment, FEATURE_DIR / "unknown_language.feature").parse_file()

    @pytest.mark.parse_gherkin
    def test_empty_file(self, environment, tmp_path):
        feature_path = tmp_path / "empty.feature"
        feature_path.write_text("", encoding="utf-8")

        with pytest.raises(ValueError, match="No feature found"):
            GherkinParser(environment, feature_path).parse_file()

    @pytest.mark.parse_gherkin
    def test_missing_file(self, environment, tmp_path):
        with pytest.raises(FileNotFoundError):
            GherkinParser(environment, tmp_path / "missing.feature")

    @pytest.mark.parse_gherkin
    def test_embed_images_relative_to_feature_file(self, environment, tmp_path):
        """The purpose of this test is to check that images are resolved against the directory of the
        feature file and that the working directory is left untouched"""
        features_dir = tmp_path / "features"
        (features_dir / "images").mkdir(parents=True)
        Image.new("RGB", (2, 2), color="green").save(features_dir / "images" / "logo.png", format="PNG")
        feature_path = features_dir / "pictures.feature"
        feature_path.write_text(
            "Feature: Pictures\n"
            "  The logo ![logo](images/logo.png)\n"
            "\n"
            "  Scenario: A picture\n"
            "    Another ![logo](images/logo.png)\n"
            "    Given a picture\n",
            encoding="utf-8",
        )
        environment.embed = True
        working_directory = os.getcwd()

        feature = GherkinParser(environment, feature_path).parse_file()

        assert "![logo](data:image/png;base64," in feature.description
        assert "![logo](data:image/png;base64," in feature.scenarios[0].description
        assert os.getcwd() == working_directory

    @pytest.mark.parse_gherkin
    def test_images_not_embedded_without_flag(self, environment, tmp_path):
        shutil.copy(FEATURE_DIR / "calculator.feature", tmp_path / "calculator.feature")
        feature_path = tmp_path / "calculator.feature"

        feature = GherkinParser(environment, feature_path).parse_file()

        assert "data:" not in feature.description
