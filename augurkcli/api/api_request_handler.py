from urllib.parse import quote

from beartype.typing import List, Optional, Tuple
from serde import from_dict, to_dict

from augurkcli.api.api_client import APIClient, APIClientResult
from augurkcli.cli import Environment
from augurkcli.constants import LEGACY_AUGURK_VERSION
from augurkcli.data_classes.dataclass_augurk import Feature, FeatureDescription, FeatureGroup
from augurkcli.settings import DEFAULT_GROUP_NAME


def _segment(value) -> str:
    """Quotes a value so it can be used as a single path segment"""
    return quote(str(value), safe="")


class ApiRequestHandler:
    """Sends requests to the Augurk API"""

    def __init__(self, environment: Environment, api_client: APIClient):
        self.environment = environment
        self.client = api_client

    @classmethod
    def from_environment(cls, environment: Environment) -> "ApiRequestHandler":
        """Creates the API client for the Augurk instance and credentials set in the environment"""
        api_client = APIClient(
            base_url=environment.url,
            verbose_logging_function=environment.vlog,
            logging_function=environment.log,
            timeout=environment.timeout,
            verify=not environment.insecure,
        )
        if environment.use_basic_authentication:
            api_client.username = environment.username
            api_client.password = environment.password
        return cls(environment, api_client)

    @staticmethod
    def product_uri(product_name: str) -> str:
        return f"api/v2/products/{_segment(product_name)}/"

    @staticmethod
    def group_uri_v1(branch_name: str, group_name: Optional[str]) -> str:
        return f"api/features/{_segment(branch_name)}/{_segment(group_name or DEFAULT_GROUP_NAME)}"

    @classmethod
    def feature_uri_v2(cls, product_name: str, group_name: str, title: str) -> str:
        return f"{cls.product_uri(product_name)}groups/{_segment(group_name)}/features/{_segment(title)}/"

    def get_augurk_version(self) -> Tuple[str, str]:
        """
        Gets the version of the Augurk instance.
        :returns: Tuple with version and error string
        """
        response = self.client.send_get("api/version")
        # Augurk versions up until 2.5.1 do not expose an api version
        if response.status_code == 404:
            return LEGACY_AUGURK_VERSION, ""
        if not response.is_success:
            return "", response.error_message
        return str(response.response_text), ""

    @classmethod
    def feature_uri_v1(cls, branch_name: str, group_name: Optional[str], title: str) -> str:
        return f"{cls.group_uri_v1(branch_name, group_name)}/{_segment(title)}"

    @classmethod
    def feature_version_uri_v2(cls, product_name: str, group_name: str, title: str, version: str) -> str:
        return f"{cls.feature_uri_v2(product_name, group_name, title)}versions/{_segment(version)}/"

    def publish_feature_v1(self, branch_name: str, group_name: Optional[str], feature: Feature) -> APIClientResult:
        return self.client.send_post(self.feature_uri_v1(branch_name, group_name, feature.title), to_dict(feature))

    def clear_group_v1(self, branch_name: str, group_name: Optional[str]) -> APIClientResult:
        return self.client.send_delete(self.group_uri_v1(branch_name, group_name))

    def publish_feature_v2(
        self, product_name: str, group_name: str, version: str, feature: Feature
    ) -> APIClientResult:
        uri = self.feature_version_uri_v2(product_name, group_name, feature.title, version)
        return self.client.send_post(uri, to_dict(feature))

    def update_product_description(self, product_name: str, description: str) -> APIClientResult:
        return self.client.send_put(f"{self.product_uri(product_name)}description", description)

    def delete_features(
        self,
        product_name: str,
        group_name: Optional[str] = None,
        feature_name: Optional[str] = None,
        version: Optional[str] = None,
    ) -> APIClientResult:
        """
        Deletes a product, a group within it, a feature within a group or a single version,
        depending on how specific the arguments are.
        """
        uri = self.product_uri(product_name)
        if group_name:
            uri += f"groups/{_segment(group_name)}/"
        if feature_name:
            if not group_name:
                raise ValueError("A group name is required to delete a specific feature.")
            uri += f"features/{_segment(feature_name)}/"
        if version:
            uri += f"versions/{_segment(version)}/"
        return self.client.send_delete(uri)

    def get_groups(self, product_name: str) -> Tuple[List[FeatureGroup], str]:
        """
        Gets the groups of a product together with their features.
        :returns: Tuple with list of groups and error string
        """
        response = self.client.send_get(f"{self.product_uri(product_name)}groups")
        if not response.is_success:
            return [], response.error_message
        return [from_dict(FeatureGroup, group) for group in response.response_text], ""

    def get_group(self, product_name: str, group_name: str) -> Tuple[List[FeatureGroup], str]:
        """
        Gets the features of a single group.
        :returns: Tuple with a list holding the group and error string
        """
        response = self.client.send_get(f"{self.product_uri(product_name)}groups/{_segment(group_name)}/features")
        if not response.is_success:
            return [], response.error_message
        features = [from_dict(FeatureDescription, feature) for feature in response.response_text]
        return [FeatureGroup(name=group_name, features=features)], ""

    def get_feature_versions(self, product_name: str, group_name: str, title: str) -> Tuple[List[str], str]:
        """
        Gets the published versions of a feature.
        :returns: Tuple with list of versions and error string
        """
        response = self.client.send_get(f"{self.feature_uri_v2(product_name, group_name, title)}versions")
        if not response.is_success:
            return [], response.error_message
        return [str(version) for version in response.response_text], ""

    def delete_feature_version(self, product_name: str, group_name: str, title: str, version: str) -> APIClientResult:
        return self.client.send_delete(self.feature_version_uri_v2(product_name, group_name, title, version))
