from pathlib import Path

import click
from beartype.typing import List, Optional
from gherkin.errors import ParserError

from augurkcli.api.api_request_handler import ApiRequestHandler
from augurkcli.cli import pass_environment, Environment, CONTEXT_SETTINGS
from augurkcli.constants import FAULT_MAPPING, SUCCESS_MESSAGES
from augurkcli.data_classes.dataclass_augurk import Feature
from augurkcli.data_classes.validation_exception import ValidationException
from augurkcli.readers.dialect_provider import NoSuchLanguageError, get_dialect
from augurkcli.readers.file_parser import FileParser
from augurkcli.readers.gherkin_parser import GherkinParser
from augurkcli.settings import DEFAULT_GROUP_NAME, DEFAULT_LANGUAGE


def print_config(env: Environment):
    env.log(f"Publish Execution Parameters"
            f"\n> Augurk instance: {env.url}"
            f"\n> Product: {env.product_name if env.product_name else '(none, using the v1 API)'}"
            f"\n> Group: {env.group_name or DEFAULT_GROUP_NAME}"
            f"\n> Version: {env.version}"
            f"\n> Branch: {env.branch_name}"
            f"\n> Language: {env.language}"
            f"\n> Embed images: {bool(env.embed)}")


def validate_publish_parameters(environment: Environment) -> Optional[str]:
    """Returns an error message when the parameters do not describe a valid publish operation"""
    if environment.product_name:
        if not environment.group_name:
            return FAULT_MAPPING["missing_group_for_product"]
        if not environment.version:
            return FAULT_MAPPING["missing_version_for_product"]
    else:
        if not environment.branch_name:
            return FAULT_MAPPING["branch_required_without_product"]
        if environment.product_desc:
            return FAULT_MAPPING["product_description_requires_product"]
    try:
        get_dialect(environment.language)
    except NoSuchLanguageError as e:
        return str(e)
    return None


def parse_feature_file(environment: Environment, feature_file: Path) -> Optional[Feature]:
    """Parses a single feature file, logging the reason and returning None when that fails"""
    try:
        return GherkinParser(environment, feature_file).parse_file()
    except ParserError:
        environment.elog(FAULT_MAPPING["unable_to_parse_feature"].format(file=feature_file))
    except ValidationException as exception:
        environment.elog(
            FAULT_MAPPING["dataclass_validation_error"].format(
                field=exception.field_name,
                class_name=exception.class_name,
                reason=exception.reason,
            )
        )
    except (ValueError, OSError) as e:
        environment.elog(FAULT_MAPPING["feature_file_error"].format(file=feature_file, error=e))
    return None


def update_product_description(environment: Environment, api_request_handler: ApiRequestHandler) -> bool:
    description_path = Path(environment.product_desc)
    if not description_path.is_file():
        environment.elog(FAULT_MAPPING["product_description_not_found"].format(file_path=description_path))
        return True

    description = description_path.read_text(encoding="utf-8")
    response = api_request_handler.update_product_description(environment.product_name, description)
    if not response.is_success:
        environment.elog(
            FAULT_MAPPING["product_description_failed"].format(
                product=environment.product_name,
                status_code=response.status_code,
                error=response.error_message,
            )
        )
        return False
    environment.log(SUCCESS_MESSAGES["product_description_updated"].format(product=environment.product_name))
    return True


def publish_features(
    environment: Environment, api_request_handler: ApiRequestHandler, feature_files: List[Path]
) -> int:
    """
    Publishes the feature files one by one. A feature that fails to parse or upload is logged
    and skipped, the remaining features are still published.
    :returns: number of features that could not be published
    """
    failures = 0
    group_name = environment.group_name or DEFAULT_GROUP_NAME
    progress_bar = environment.get_progress_bar(len(feature_files), "Publishing features")
    for feature_file in feature_files:
        feature = parse_feature_file(environment, feature_file)
        if feature is None:
            failures += 1
            progress_bar.update(1)
            continue
        # The title is part of the uri the feature is published to
        if not feature.title.strip():
            environment.elog(FAULT_MAPPING["feature_without_title"].format(file=feature_file))
            failures += 1
            progress_bar.update(1)
            continue

        if environment.product_name:
            response = api_request_handler.publish_feature_v2(
                environment.product_name, group_name, environment.version, feature
            )
            target_uri = api_request_handler.feature_version_uri_v2(
                environment.product_name, group_name, feature.title, environment.version
            )
            success_message = SUCCESS_MESSAGES["published_v2"].format(
                title=feature.title,
                version=environment.version,
                product=environment.product_name,
                group=group_name,
            )
        else:
            response = api_request_handler.publish_feature_v1(environment.branch_name, group_name, feature)
            target_uri = api_request_handler.feature_uri_v1(environment.branch_name, group_name, feature.title)
            success_message = SUCCESS_MESSAGES["published_v1"].format(
                title=feature.title, group=group_name, branch=environment.branch_name
            )

        if response.is_success:
            environment.log(success_message)
        else:
            failures += 1
            environment.elog(
                FAULT_MAPPING["publish_failed"].format(
                    title=feature.title,
                    uri=api_request_handler.client.build_url(target_uri),
                    status_code=response.status_code,
                    error=response.error_message,
                )
            )
        progress_bar.update(1)
    progress_bar.close()
    return failures


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option(
    "-f",
    "--feature-files",
    multiple=True,
    metavar="",
    help="Feature file, directory or wildcard to publish. Can be used multiple times.",
)
@click.option("--product-name", metavar="", help="Name of the product the features belong to (uses the v2 API).")
@click.option("--group-name", metavar="", help="Name of the group the features belong to.")
@click.option("--version", metavar="", help="Version of the features that are published.")
@click.option("--branch-name", metavar="", help="Name of the branch the features belong to (v1 API only).")
@click.option(
    "--clear-group",
    is_flag=True,
    help="Delete the existing features in the group before publishing (v1 API only).",
)
@click.option(
    "--language",
    metavar="",
    default=DEFAULT_LANGUAGE,
    show_default=True,
    help="Default language of the feature files.",
)
@click.option("--embed", is_flag=True, help="Embed local images referenced in descriptions.")
@click.option(
    "--product-desc",
    type=click.Path(),
    metavar="",
    help="Markdown file with the description of the product (v2 API only).",
)
@click.pass_context
@pass_environment
def cli(environment: Environment, context: click.Context, *args, **kwargs):
    """Publish feature files to Augurk"""
    environment.cmd = "publish"
    environment.set_parameters(context)
    if isinstance(environment.feature_files, str):
        environment.feature_files = [environment.feature_files]
    environment.check_for_required_parameters()

    error_message = validate_publish_parameters(environment)
    if error_message:
        environment.elog(error_message)
        exit(1)

    print_config(environment)
    feature_files = FileParser.expand_file_specs(environment.feature_files, environment)
    if not feature_files:
        environment.elog(FAULT_MAPPING["no_feature_files_found"])
        exit(1)

    api_request_handler = ApiRequestHandler.from_environment(environment)
    if environment.verbose:
        version, error = api_request_handler.get_augurk_version()
        if not error:
            environment.log(SUCCESS_MESSAGES["connected"].format(version=version, url=environment.url))

    failures = 0
    if environment.product_name and environment.product_desc:
        if not update_product_description(environment, api_request_handler):
            failures += 1

    if not environment.product_name and environment.clear_group:
        group_name = environment.group_name or DEFAULT_GROUP_NAME
        environment.log(SUCCESS_MESSAGES["clearing_group"].format(group=group_name, branch=environment.branch_name))
        response = api_request_handler.clear_group_v1(environment.branch_name, group_name)
        if not response.is_success:
            failures += 1
            environment.elog(
                FAULT_MAPPING["clear_group_failed"].format(
                    group=group_name,
                    branch=environment.branch_name,
                    status_code=response.status_code,
                    error=response.error_message,
                )
            )

    failures += publish_features(environment, api_request_handler, feature_files)
    if failures:
        exit(1)
