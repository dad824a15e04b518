import json

import requests
from beartype.typing import Union, Callable, Dict, List, Optional

import urllib3
from requests.auth import HTTPBasicAuth
from json import JSONDecodeError
from requests.exceptions import RequestException, Timeout, ConnectionError, SSLError
from augurkcli.constants import FAULT_MAPPING
from augurkcli.settings import DEFAULT_API_CALL_TIMEOUT
from dataclasses import dataclass


@dataclass
class APIClientResult:
    """
    status_code - status code returned by the request or -1 if error occurred during request handling
    response_text - json object or bare text string is response could not be parsed
    error_message - custom error message when -1 was returned in status_code or the request was not successful"""

    status_code: int
    response_text: Union[Dict, str, List, None]
    error_message: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class APIClient:
    """
    Class to be used for basic communication with the Augurk API.
    Every request is sent exactly once, network errors are reported through APIClientResult.
    """

    USER_AGENT = "AugurkCLI"

    def __init__(
        self,
        base_url: str,
        verbose_logging_function: Callable = print,
        logging_function: Callable = print,
        timeout: float = DEFAULT_API_CALL_TIMEOUT,
        verify: bool = True,
    ):
        self.username = ""
        self.password = ""
        self.timeout = None
        self.verify = verify
        self.verbose_logging_function = verbose_logging_function
        self.logging_function = logging_function
        self.__validate_and_set_timeout(timeout)
        self.base_url = base_url.rstrip("/")
        if not verify:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def send_get(self, uri: str) -> APIClientResult:
        return self.__send_request("GET", uri, None)

    def send_post(self, uri: str, payload: Union[dict, list, str] = None) -> APIClientResult:
        return self.__send_request("POST", uri, payload)

    def send_put(self, uri: str, payload: Union[dict, list, str] = None) -> APIClientResult:
        return self.__send_request("PUT", uri, payload)

    def send_delete(self, uri: str) -> APIClientResult:
        return self.__send_request("DELETE", uri, None)

    def build_url(self, uri: str) -> str:
        """Uri is appended to the base url, absolute urls are used as they are."""
        if uri.startswith("http://") or uri.startswith("https://"):
            return uri
        return f"{self.base_url}/{uri.lstrip('/')}"

    def __send_request(self, method: str, uri: str, payload) -> APIClientResult:
        status_code = -1
        response_text = ""
        error_message = ""
        url = self.build_url(uri)
        headers = {"User-Agent": self.USER_AGENT}
        if payload is not None:
            headers["Content-Type"] = "application/json"
        verbose_log_message = APIClient.format_request_for_vlog(method=method, url=url, payload=payload)
        try:
            response = requests.request(
                method=method,
                url=url,
                auth=self.__get_auth(),
                json=payload,
                timeout=self.timeout,
                headers=headers,
                verify=self.verify,
            )
        except SSLError:
            error_message = FAULT_MAPPING["ssl_error"]
        except Timeout:
            error_message = FAULT_MAPPING["no_response_from_host"]
        except ConnectionError:
            error_message = FAULT_MAPPING["connection_error"]
        except RequestException as e:
            error_message = FAULT_MAPPING["unexpected_error_during_request_send"].format(request=e.request)
        else:
            status_code = response.status_code
            try:
                response_text = response.json()
            except (JSONDecodeError, ValueError):
                response_text = response.text
            if not 200 <= status_code < 300:
                error_message = self.__extract_error(response_text) or response.reason or ""
            verbose_log_message = verbose_log_message + APIClient.format_response_for_vlog(
                response.status_code, response_text
            )
        self.verbose_logging_function(verbose_log_message)

        return APIClientResult(status_code, response_text, error_message)

    def __get_auth(self) -> Optional[HTTPBasicAuth]:
        if self.username and self.password:
            return HTTPBasicAuth(username=self.username, password=self.password)
        return None

    @staticmethod
    def __extract_error(response_text) -> str:
        if isinstance(response_text, dict):
            return str(response_text.get("message") or response_text.get("error") or "")
        if isinstance(response_text, str):
            return response_text
        return ""

    def __validate_and_set_timeout(self, timeout):
        try:
            self.timeout = float(timeout)
        except (TypeError, ValueError):
            self.logging_function(
                f"Warning. Could not convert provided 'timeout' to float. "
                f"Please make sure that timeout format is correct. Setting to default: "
                f"{DEFAULT_API_CALL_TIMEOUT}"
            )
            self.timeout = DEFAULT_API_CALL_TIMEOUT

    @staticmethod
    def format_request_for_vlog(method: str, url: str, payload):
        return (
            f"\n**** API Call\n"
            f"method: {method}\n"
            f"url: {url}\n" + (f"payload: {json.dumps(payload)}\n" if payload is not None else "")
        )

    @staticmethod
    def format_response_for_vlog(status_code, body):
        return f"response status code: {status_code}\nresponse body: {body}\n****"
