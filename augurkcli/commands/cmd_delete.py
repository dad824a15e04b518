import click

from augurkcli.api.api_request_handler import ApiRequestHandler
from augurkcli.cli import pass_environment, Environment, CONTEXT_SETTINGS
from augurkcli.constants import FAULT_MAPPING, SUCCESS_MESSAGES


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option("--product-name", metavar="", help="Name of the product containing the features to delete.")
@click.option("--group-name", metavar="", help="Name of the group containing the features to delete.")
@click.option("--feature-name", metavar="", help="Name of the feature to delete.")
@click.option("--version", metavar="", help="Version of the feature(s) to delete.")
@click.pass_context
@pass_environment
def cli(environment: Environment, context: click.Context, *args, **kwargs):
    """Delete features from Augurk"""
    environment.cmd = "delete"
    environment.set_parameters(context)
    environment.check_for_required_parameters()

    if environment.feature_name and not environment.group_name:
        environment.elog(FAULT_MAPPING["feature_name_without_group"])
        exit(1)

    api_request_handler = ApiRequestHandler.from_environment(environment)
    response = api_request_handler.delete_features(
        environment.product_name,
        group_name=environment.group_name,
        feature_name=environment.feature_name,
        version=environment.version,
    )

    if response.is_success:
        if environment.feature_name:
            environment.log(
                SUCCESS_MESSAGES["deleted_feature"].format(feature=environment.feature_name, url=environment.url)
            )
        else:
            environment.log(SUCCESS_MESSAGES["deleted_features"].format(url=environment.url))
        return

    if environment.feature_name:
        environment.elog(
            FAULT_MAPPING["delete_feature_failed"].format(
                feature=environment.feature_name, url=environment.url, status_code=response.status_code
            )
        )
    else:
        environment.elog(
            FAULT_MAPPING["delete_features_failed"].format(url=environment.url, status_code=response.status_code)
        )
    if response.error_message:
        environment.elog(response.error_message)
    exit(1)
