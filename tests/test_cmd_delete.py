from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from augurkcli.api.api_client import APIClientResult
from augurkcli.cli import Environment
from augurkcli.commands import cmd_delete
from augurkcli.constants import FAULT_MAPPING, PRODUCT_FAULT_MAPPING, SUCCESS_MESSAGES

AUGURK_URL = "https://fake-augurk.io"


class TestCmdDelete:
    """Test class for delete command functionality"""

    def setup_method(self):
        self.runner = CliRunner()
        self.environment = Environment(cmd="delete")
        self.environment.url = AUGURK_URL
        self.environment.timeout = 30

    @pytest.mark.cmd_delete
    @patch("augurkcli.commands.cmd_delete.ApiRequestHandler")
    def test_delete_feature(self, mock_api_handler_class):
        mock_handler = MagicMock()
        mock_api_handler_class.from_environment.return_value = mock_handler
        mock_handler.delete_features.return_value = APIClientResult(204, "", "")

        result = self.runner.invoke(
            cmd_delete.cli,
            ["--product-name", "Shop", "--group-name", "Web", "--feature-name", "Log in", "--version", "1.0"],
            obj=self.environment,
        )

        assert result.exit_code == 0, result.output
        mock_handler.delete_features.assert_called_once_with(
            "Shop", group_name="Web", feature_name="Log in", version="1.0"
        )
        assert SUCCESS_MESSAGES["deleted_feature"].format(feature="Log in", url=AUGURK_URL) in result.output

    @pytest.mark.cmd_delete
    @patch("augurkcli.commands.cmd_delete.ApiRequestHandler")
    def test_delete_product(self, mock_api_handler_class):
        mock_handler = MagicMock()
        mock_api_handler_class.from_environment.return_value = mock_handler
        mock_handler.delete_features.return_value = APIClientResult(204, "", "")

        result = self.runner.invoke(cmd_delete.cli, ["--product-name", "Shop"], obj=self.environment)

        assert result.exit_code == 0, result.output
        mock_handler.delete_features.assert_called_once_with("Shop", group_name=None, feature_name=None, version=None)
        assert SUCCESS_MESSAGES["deleted_features"].format(url=AUGURK_URL) in result.output

    @pytest.mark.cmd_delete
    @patch("augurkcli.commands.cmd_delete.ApiRequestHandler")
    def test_feature_name_requires_group(self, mock_api_handler_class):
        """The purpose of this test is to check that a feature cannot be deleted without the group it belongs to"""
        result = self.runner.invoke(
            cmd_delete.cli, ["--product-name", "Shop", "--feature-name", "Log in"], obj=self.environment
        )

        assert result.exit_code == 1
        assert FAULT_MAPPING["feature_name_without_group"] in result.output
        mock_api_handler_class.from_environment.assert_not_called()

    @pytest.mark.cmd_delete
    @patch("augurkcli.commands.cmd_delete.ApiRequestHandler")
    def test_missing_product_name(self, mock_api_handler_class):
        result = self.runner.invoke(cmd_delete.cli, ["--group-name", "Web"], obj=self.environment)

        assert result.exit_code == 1
        assert PRODUCT_FAULT_MAPPING["missing_product_name"] in result.output

    @pytest.mark.cmd_delete
    @pytest.mark.parametrize(
        "args, expected_message",
        [
            (
                ["--group-name", "Web", "--feature-name", "Log in"],
                FAULT_MAPPING["delete_feature_failed"].format(feature="Log in", url=AUGURK_URL, status_code=404),
            ),
            (["--group-name", "Web"], FAULT_MAPPING["delete_features_failed"].format(url=AUGURK_URL, status_code=404)),
        ],
        ids=["feature", "group"],
    )
    @patch("augurkcli.commands.cmd_delete.ApiRequestHandler")
    def test_delete_failure(self, mock_api_handler_class, args, expected_message):
        mock_handler = MagicMock()
        mock_api_handler_class.from_environment.return_value = mock_handler
        mock_handler.delete_features.return_value = APIClientResult(404, "", "Not Found")

        result = self.runner.invoke(cmd_delete.cli, ["--product-name", "Shop", *args], obj=self.environment)

        assert result.exit_code == 1
        assert expected_message in result.output
        assert "Not Found" in result.output
