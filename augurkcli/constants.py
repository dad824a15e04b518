import augurkcli

PUBLISH_FAULT_MAPPING = dict(
    missing_feature_files="Please provide at least one feature file, directory or wildcard with --feature-files.",
)

PRODUCT_FAULT_MAPPING = dict(
    missing_product_name="Please specify the product name using the --product-name argument.",
)

FAULT_MAPPING = dict(
    missing_url="Please provide the URL of your Augurk instance with the --url argument.",
    host_issues="Please provide a valid Augurk server address.",
    missing_basic_auth_credentials="When using basic HTTP authentication, you must specify a username and password.",
    no_response_from_host="Your request to Augurk did not receive a response from your Augurk instance. "
    "Please check your settings and try again.",
    connection_error="Request to Augurk failed due to a network error. Please make sure you have a "
    "valid network connection then try again.",
    ssl_error="SSL error encountered while connecting to Augurk. Use --insecure to skip certificate verification.",
    unexpected_error_during_request_send="Unexpected error occurred during sending request: {request}",
    yaml_file_parse_issue="Error occurred while parsing yaml file ({file_path}). "
    "Make sure that structure of a file is correct.\nWe expect only `key: value`, `---` and `...`.",
    file_open_issue="Error occurred while opening the file ({file_path}). "
    "Make sure that the file exists or the path is correct.",
    missing_version_for_product="Please specify the version of the features using --version when publishing to a product.",
    missing_group_for_product="Please specify the group using --group-name when publishing to a product.",
    branch_required_without_product="Please specify the branch using --branch-name when publishing without a product name.",
    product_description_requires_product="--product-desc can only be used together with --product-name.",
    product_description_not_found="Skipping product description because file '{file_path}' does not exist.",
    feature_name_without_group="When deleting a specific feature a group name that the feature belongs to "
    "must also be specified.",
    missing_prune_selector="Please specify either --prerelease or --version-regex.",
    conflicting_prune_selectors="--prerelease and --version-regex cannot be used at the same time.",
    invalid_version_regex="Invalid --version-regex '{regex}': {error}",
    unable_to_parse_feature="Unable to parse feature file '{file}'. Are you missing a language comment or --language option?",
    feature_file_error="Error while processing feature file '{file}': {error}",
    skipping_missing_file="Skipping file '{file}' because it does not exist.",
    skipping_invalid_directory="Skipping invalid directory specification '{directory}'.",
    no_feature_files_found="No feature files found for the provided file specifications.",
    feature_without_title="Skipping feature file '{file}' because its feature has no title.",
    publish_failed="Publishing feature '{title}' to uri '{uri}' resulted in statuscode '{status_code}': {error}",
    product_description_failed="Updating the description of product '{product}' resulted in statuscode "
    "'{status_code}': {error}",
    clear_group_failed="Clearing group '{group}' for branch '{branch}' resulted in statuscode '{status_code}': {error}",
    delete_feature_failed="Deleting feature {feature} from Augurk at {url} failed with statuscode {status_code}",
    delete_features_failed="Deleting features from Augurk at {url} failed with statuscode {status_code}",
    prune_failed="An error occurred while pruning features in Augurk at {url}: {error}",
    prune_version_failed="\tDeleting version '{version}' of feature '{feature}' failed with statuscode "
    "'{status_code}': {error}",
    dataclass_validation_error="Unable to parse field {field} in {class_name}. {reason}",
    image_not_embedded="Image '{path}' was not embedded: {reason}",
)

COMMAND_FAULT_MAPPING = dict(
    publish=dict(**FAULT_MAPPING, **PUBLISH_FAULT_MAPPING),
    delete=dict(**FAULT_MAPPING, **PRODUCT_FAULT_MAPPING),
    prune=dict(**FAULT_MAPPING, **PRODUCT_FAULT_MAPPING),
)

SUCCESS_MESSAGES = dict(
    published_v1="Successfully published feature '{title}' to group {group} for branch {branch}.",
    published_v2="Successfully published feature '{title}' version '{version}' for product '{product}' "
    "to group '{group}'.",
    product_description_updated="Successfully updated the description of product '{product}'.",
    clearing_group="Clearing existing features in group {group} for branch {branch}.",
    deleted_feature="Successfully deleted feature {feature} from Augurk at {url}",
    deleted_features="Successfully deleted features from Augurk at {url}",
    pruning="Pruning features in Augurk at {url}",
    processing_group="Processing features in group {group}",
    found_versions="\tFound {total} versions for feature {feature} of which {selected} will be deleted",
    deleted_version="\tDeleted version '{version}' of feature '{feature}'",
    connected="Connected with Augurk version {version} at {url}",
)

TOOL_VERSION = f"""Augurk CLI v{augurkcli.__version__}"""
TOOL_USAGE = f"""Supported and loaded modules:
    - publish: Publish feature files to Augurk
    - delete: Delete features from Augurk
    - prune: Prune specific feature versions from a product in Augurk"""

MISSING_COMMAND_SLOGAN = """Usage: augurkcli [OPTIONS] COMMAND [ARGS]...\nTry 'augurkcli --help' for help.
\nError: Missing command."""

LEGACY_AUGURK_VERSION = "2.5.1 or older"
