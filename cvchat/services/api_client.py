"""HTTP client for the resume builder backend.

All endpoints speak JSON. Successful calls return the decoded body; every
failure is turned into one of two exceptions:

- :class:`NetworkError` when the backend cannot be reached or times out;
- :class:`BackendResponseError` for non-2xx statuses and ``success: false``
  envelopes, carrying the server's ``message`` when it sent one.
"""

import logging
from typing import Any, Dict, Optional

import requests

from cvchat.config.settings import AppConfig
from cvchat.constants.error_constants import ErrorConstants
from cvchat.error_handling.exceptions import BackendResponseError, NetworkError


class BackendClient:
    """Thin wrapper over a ``requests.Session`` bound to the backend base URL."""

    def __init__(
        self,
        settings: AppConfig,
        logger: Optional[logging.Logger] = None,
        session: Optional[requests.Session] = None,
    ):
        self.settings = settings
        self.logger = logger or logging.getLogger(__name__)
        self.session = session or requests.Session()
        self.base_url = settings.api.api_url
        self.timeout = settings.api.request_timeout

    def url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def request(
        self,
        method: str,
        endpoint: str,
        default_error: str,
        payload: Optional[Dict[str, Any]] = None,
        check_envelope: bool = True,
        use_server_message: bool = True,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Args:
            method: HTTP method.
            endpoint: Path relative to the API base URL.
            default_error: Message used when the server does not provide one.
            payload: JSON body, if any.
            check_envelope: Treat ``{"success": false}`` bodies as failures.
            use_server_message: Prefer the body's ``message`` over ``default_error``.

        Raises:
            NetworkError: transport failure or timeout.
            BackendResponseError: non-2xx status, non-JSON body or failed envelope.
        """
        url = self.url(endpoint)
        self.logger.debug("%s %s", method, url)
        try:
            response = self.session.request(
                method, url, json=payload, timeout=self.timeout
            )
        except requests.Timeout as e:
            raise NetworkError(
                f"{default_error}: request timed out after {self.timeout}s",
                url=url,
                original_exception=e,
            ) from e
        except requests.RequestException as e:
            raise NetworkError(
                f"{default_error}: {e}", url=url, original_exception=e
            ) from e

        body = self._decode(response)

        if not response.ok:
            message = (use_server_message and self.server_message(body)) or default_error
            self.logger.warning(
                "%s %s failed with status %s: %s",
                method,
                endpoint,
                response.status_code,
                message,
            )
            raise BackendResponseError(
                message, status_code=response.status_code, endpoint=endpoint
            )

        if body is None:
            raise BackendResponseError(
                ErrorConstants.MSG_INVALID_RESPONSE,
                status_code=response.status_code,
                endpoint=endpoint,
            )

        if check_envelope and isinstance(body, dict) and body.get("success") is False:
            message = self.server_message(body) or default_error
            self.logger.warning("%s %s rejected: %s", method, endpoint, message)
            raise BackendResponseError(
                message, status_code=response.status_code, endpoint=endpoint
            )

        return body

    def post(self, endpoint: str, payload: Dict[str, Any], default_error: str, **kwargs) -> Any:
        return self.request("POST", endpoint, default_error, payload=payload, **kwargs)

    def get(self, endpoint: str, default_error: str, **kwargs) -> Any:
        return self.request("GET", endpoint, default_error, **kwargs)

    def put(self, endpoint: str, payload: Dict[str, Any], default_error: str, **kwargs) -> Any:
        return self.request("PUT", endpoint, default_error, payload=payload, **kwargs)

    def fetch_text(self, url: str) -> str:
        """GET an absolute URL and return its body as text."""
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise NetworkError(f"Could not fetch {url}: {e}", url=url, original_exception=e) from e
        return response.text

    def _decode(self, response: requests.Response) -> Optional[Any]:
        try:
            return response.json()
        except ValueError:
            self.logger.debug("Response from %s is not JSON", response.url)
            return None

    @staticmethod
    def server_message(body: Any) -> Optional[str]:
        if isinstance(body, dict):
            message = body.get("message")
            if isinstance(message, str) and message.strip():
                return message
        return None
