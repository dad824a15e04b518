import re

import click
from beartype.typing import List, Optional, Pattern

from augurkcli.api.api_request_handler import ApiRequestHandler
from augurkcli.cli import pass_environment, Environment, CONTEXT_SETTINGS
from augurkcli.constants import FAULT_MAPPING, SUCCESS_MESSAGES


def select_versions_to_prune(
    versions: List[str], prerelease: bool = False, version_regex: Optional[Pattern] = None
) -> List[str]:
    """Selects the versions of a feature that should be deleted.

    With prerelease, the pre-release versions (e.g. 1.2.0-beta) are selected for which the
    matching release version (1.2.0) has been published as well.
    Otherwise the versions matching version_regex are selected.
    """
    if prerelease:
        released = {version for version in versions if "-" not in version}
        return [version for version in versions if "-" in version and version.split("-", 1)[0] in released]
    if version_regex is not None:
        return [version for version in versions if version_regex.search(version)]
    return []


def prune_features(environment: Environment, api_request_handler: ApiRequestHandler, version_regex) -> int:
    """
    Deletes the selected versions of every feature in the product (or group).
    :returns: number of versions that could not be deleted, -1 when the features could not be listed
    """
    if environment.group_name:
        groups, error_message = api_request_handler.get_group(environment.product_name, environment.group_name)
    else:
        groups, error_message = api_request_handler.get_groups(environment.product_name)
    if error_message:
        environment.elog(FAULT_MAPPING["prune_failed"].format(url=environment.url, error=error_message))
        return -1

    failures = 0
    for group in groups:
        environment.log(SUCCESS_MESSAGES["processing_group"].format(group=group.name))
        for feature in group.features:
            versions, error_message = api_request_handler.get_feature_versions(
                environment.product_name, group.name, feature.title
            )
            if error_message:
                environment.elog(FAULT_MAPPING["prune_failed"].format(url=environment.url, error=error_message))
                return -1

            versions_to_delete = select_versions_to_prune(versions, environment.prerelease, version_regex)
            environment.log(
                SUCCESS_MESSAGES["found_versions"].format(
                    total=len(versions), feature=feature.title, selected=len(versions_to_delete)
                )
            )
            for version in versions_to_delete:
                response = api_request_handler.delete_feature_version(
                    environment.product_name, group.name, feature.title, version
                )
                if response.is_success:
                    environment.vlog(SUCCESS_MESSAGES["deleted_version"].format(version=version, feature=feature.title))
                else:
                    failures += 1
                    environment.elog(
                        FAULT_MAPPING["prune_version_failed"].format(
                            version=version,
                            feature=feature.title,
                            status_code=response.status_code,
                            error=response.error_message,
                        )
                    )
    return failures


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option("--product-name", metavar="", help="Name of the product for which to prune the features.")
@click.option("--group-name", metavar="", help="Name of the group containing the features to prune.")
@click.option(
    "--prerelease",
    is_flag=True,
    help="Prune pre-release feature versions for which a matching release version exists.",
)
@click.option("--version-regex", metavar="", help="A regular expression that determines the versions to prune.")
@click.pass_context
@pass_environment
def cli(environment: Environment, context: click.Context, *args, **kwargs):
    """Prune specific feature versions from a product in Augurk"""
    environment.cmd = "prune"
    environment.set_parameters(context)
    environment.check_for_required_parameters()

    if environment.prerelease and environment.version_regex:
        environment.elog(FAULT_MAPPING["conflicting_prune_selectors"])
        exit(1)
    if not environment.prerelease and not environment.version_regex:
        environment.elog(FAULT_MAPPING["missing_prune_selector"])
        exit(1)

    version_regex = None
    if environment.version_regex:
        try:
            version_regex = re.compile(environment.version_regex)
        except re.error as e:
            environment.elog(FAULT_MAPPING["invalid_version_regex"].format(regex=environment.version_regex, error=e))
            exit(1)

    environment.log(SUCCESS_MESSAGES["pruning"].format(url=environment.url))
    api_request_handler = ApiRequestHandler.from_environment(environment)
    if prune_features(environment, api_request_handler, version_regex) != 0:
        exit(1)
