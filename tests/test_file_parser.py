from pathlib import Path

import pytest

from augurkcli.cli import Environment
from augurkcli.constants import FAULT_MAPPING
from augurkcli.readers.file_parser import FileParser


@pytest.fixture
def features_dir(tmp_path):
    for name in ["b.feature", "a.feature", "notes.txt"]:
        (tmp_path / name).write_text("Feature: F\n")
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "c.feature").write_text("Feature: C\n")
    return tmp_path


@pytest.fixture
def environment(mocker):
    env = Environment()
    mocker.patch.object(env, "log")
    return env


class TestExpandFileSpecs:
    @pytest.mark.file_specs
    def test_directory(self, features_dir, environment):
        """The purpose of this test is to check that a directory expands to the feature files directly inside it"""
        result = FileParser.expand_file_specs([str(features_dir)], environment)

        assert result == [features_dir / "a.feature", features_dir / "b.feature"]

    @pytest.mark.file_specs
    def test_wildcard(self, features_dir, environment):
        result = FileParser.expand_file_specs([str(features_dir / "?.feature")], environment)

        assert result == [Path(str(features_dir / "a.feature")), Path(str(features_dir / "b.feature"))]

    @pytest.mark.file_specs
    def test_wildcard_in_working_directory(self, features_dir, environment, monkeypatch):
        monkeypatch.chdir(features_dir)

        result = FileParser.expand_file_specs(["*.txt"], environment)

        assert result == [Path("notes.txt")]

    @pytest.mark.file_specs
    def test_wildcard_in_missing_directory(self, features_dir, environment):
        missing_dir = features_dir / "missing"

        result = FileParser.expand_file_specs([str(missing_dir / "*.feature")], environment)

        assert result == []
        environment.log.assert_called_once_with(
            FAULT_MAPPING["skipping_invalid_directory"].format(directory=str(missing_dir))
        )

    @pytest.mark.file_specs
    def test_files(self, features_dir, environment):
        missing_file = str(features_dir / "missing.feature")

        result = FileParser.expand_file_specs(
            [str(features_dir / "nested" / "c.feature"), missing_file], environment
        )

        assert result == [features_dir / "nested" / "c.feature"]
        environment.log.assert_called_once_with(FAULT_MAPPING["skipping_missing_file"].format(file=missing_file))

    @pytest.mark.file_specs
    def test_nothing_given(self, environment):
        assert FileParser.expand_file_specs([], environment) == []
