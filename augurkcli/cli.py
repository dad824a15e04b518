import sys

import click
import yaml
from pathlib import Path
from requests.models import PreparedRequest, InvalidURL, MissingSchema

from click.core import ParameterSource
from tqdm import tqdm

from augurkcli.constants import (
    COMMAND_FAULT_MAPPING,
    FAULT_MAPPING,
    MISSING_COMMAND_SLOGAN,
    TOOL_USAGE,
    TOOL_VERSION,
)
from augurkcli.settings import DEFAULT_API_CALL_TIMEOUT

CONTEXT_SETTINGS = dict(auto_envvar_prefix="AUGURK_CLI")


class Environment:
    def __init__(self, cmd=None):
        self.default_config_file = True
        self.params_from_config = dict()
        self.cmd = cmd
        self.config = None
        self.url = None
        self.use_basic_authentication = False
        self.username = None
        self.password = None
        self.compat_level = None
        self.timeout = None
        self.insecure = None
        self.verbose = None
        self.silent = None
        # publish
        self.feature_files = None
        self.product_name = None
        self.group_name = None
        self.feature_name = None
        self.version = None
        self.branch_name = None
        self.clear_group = None
        self.language = None
        self.embed = None
        self.product_desc = None
        # prune
        self.prerelease = None
        self.version_regex = None

    def log(self, msg: str, new_line=True, *args):
        """Logs a message to stdout only is silent mode is disabled."""
        if not self.silent:
            if args:
                msg %= args
            click.echo(msg, file=sys.stdout, nl=new_line)

    def vlog(self, msg: str, *args):
        """Logs a message to stdout only if the verbose option is enabled."""
        if self.verbose:
            self.log(msg, *args)

    @staticmethod
    def elog(msg: str, new_line=True, *args):
        """Logs a message to stderr."""
        if args:
            msg %= args
        click.echo(msg, file=sys.stderr, nl=new_line)

    def get_progress_bar(self, files_amount: int, prefix: str):
        disabled = True if self.silent else False
        return tqdm(
            total=files_amount,
            bar_format=prefix + ": {n_fmt}/{total_fmt}{postfix}",
            disable=disabled,
        )

    def set_parameters(self, context: click.core.Context):
        """Sets parameters based on context. The function will override parameters with config file values
        depending on the parameter source and config file source (default or custom)"""
        if self.default_config_file:
            param_sources_types = [ParameterSource.DEFAULT]
        else:
            param_sources_types = [ParameterSource.DEFAULT, ParameterSource.ENVIRONMENT]
        for param, value in context.params.items():
            # Don't set config again
            if param == "config":
                continue
            param_config_value = self.params_from_config.get(param, None)
            param_source = context.get_parameter_source(param)
            if param_source in param_sources_types and (param_config_value is not None):
                setattr(self, param, param_config_value)
            else:
                setattr(self, param, value)

    def check_for_required_parameters(self):
        """Checks that all required parameters were set. If not error message would be printed and
        program will exit with exit code 1"""
        fault_mapping = COMMAND_FAULT_MAPPING.get(self.cmd, FAULT_MAPPING)
        for param, value in vars(self).items():
            if "missing_" + param in fault_mapping and not value:
                self.elog(fault_mapping["missing_" + param])
                exit(1)
        if self.use_basic_authentication and not (self.username and self.password):
            self.elog(FAULT_MAPPING["missing_basic_auth_credentials"])
            exit(1)
        # validate url syntax
        try:
            request = PreparedRequest()
            request.prepare_url(self.url, params=None)
        except (InvalidURL, MissingSchema):
            self.elog(FAULT_MAPPING["host_issues"])
            exit(1)

    def parse_config_file(self, context: click.Context):
        """Sets config file path from context and information if default or custom config file should be used."""
        executable_folder = Path(sys.argv[0]).parent

        if context.params["config"]:
            self.config = context.params["config"]
            self.default_config_file = False
        else:
            if Path(executable_folder / "config.yml").is_file():
                self.config = executable_folder / "config.yml"
            elif Path(executable_folder / "config.yaml").is_file():
                self.config = executable_folder / "config.yaml"
            else:
                self.config = None
        if self.config:
            self.parse_params_from_config_file(self.config)

    def parse_params_from_config_file(self, file_path: Path):
        self.params_from_config = {}
        try:
            with open(file_path, "r") as f:
                file_content = yaml.safe_load_all(f)
                for page_content in file_content:
                    if page_content:
                        self.params_from_config.update(page_content)
                        if (
                            self.params_from_config.get("config") is not None
                            and self.default_config_file
                        ):
                            self.default_config_file = False
                            self.parse_params_from_config_file(
                                self.params_from_config["config"]
                            )
        except (yaml.YAMLError, ValueError, TypeError) as e:
            self.elog(
                FAULT_MAPPING["yaml_file_parse_issue"].format(file_path=file_path)
            )
            self.elog(f"Error details:\n{e}")
            if not self.default_config_file:
                exit(1)
            self.params_from_config = {}
        except IOError:
            self.elog(FAULT_MAPPING["file_open_issue"].format(file_path=file_path))
            if not self.default_config_file:
                exit(1)
            self.params_from_config = {}


pass_environment = click.make_pass_decorator(Environment, ensure=True)


def _load_command(module_name: str):
    module = __import__(f"augurkcli.commands.{module_name}", None, None, ["cli"])
    return module.cli


COMMANDS = {
    "delete": "cmd_delete",
    "prune": "cmd_prune",
    "publish": "cmd_publish",
}


class AugurkCLI(click.MultiCommand):
    def __init__(self, *args, **kwargs):
        # Use invoke_without_command=True to be able to print
        # short tool description when starting without parameters
        click.MultiCommand.__init__(self, invoke_without_command=True, *args, **kwargs)

    def list_commands(self, context: click.Context):
        return sorted(COMMANDS)

    def get_command(self, context: click.Context, name: str):
        module_name = COMMANDS.get(name)
        if module_name is None:
            return None
        return _load_command(module_name)


@click.command(cls=AugurkCLI, context_settings=CONTEXT_SETTINGS)
@click.pass_context
@pass_environment
@click.option(
    "-c",
    "--config",
    type=click.Path(),
    metavar="",
    help="Optional path definition for a yaml configuration file.",
)
@click.option("--url", metavar="", help="URL of the Augurk instance.")
@click.option(
    "--use-basic-authentication",
    is_flag=True,
    help="Use basic HTTP authentication to access the Augurk API's. Requires --username and --password.",
)
@click.option("-u", "--username", type=click.STRING, metavar="", help="Username for basic authentication.")
@click.option("-p", "--password", type=click.STRING, metavar="", help="Password for basic authentication.")
@click.option(
    "--compat-level",
    type=click.IntRange(min=1),
    metavar="",
    help="Sets the compatibility level. Currently available levels are: 2",
)
@click.option(
    "-t",
    "--timeout",
    type=click.FloatRange(min=0),
    default=DEFAULT_API_CALL_TIMEOUT,
    show_default=str(DEFAULT_API_CALL_TIMEOUT),
    metavar="",
    help="Request timeout duration.",
)
@click.option("--insecure", is_flag=True, help="Allow insecure requests.")
@click.option(
    "-v", "--verbose", is_flag=True, help="Output all API calls and their results."
)
@click.option(
    "-s",
    "--silent",
    flag_value=True,
    is_flag=True,
    help="Silence stdout",
    default=False,
)
def cli(environment: Environment, context: click.core.Context, *args, **kwargs):
    """Augurk CLI"""
    if not sys.argv[1:]:
        click.echo(TOOL_VERSION)
        click.echo(TOOL_USAGE)
        exit(0)

    # This check is due to usage of invoke_without_command=True in AugurkCLI class.
    if not context.invoked_subcommand:
        click.echo(MISSING_COMMAND_SLOGAN)
        exit(2)

    environment.parse_config_file(context)
    environment.set_parameters(context)
