"""HTTP client for the telemetry hub command endpoint."""

import requests
import logging
from typing import Any, Dict, Optional

from .commands import Command, to_transport_document
from .config import HubConfig
from .utils import retry_on_failure, format_response_body


class HubAPIError(Exception):
    """Exception raised for telemetry hub errors."""

    def __init__(self, message: str, status_code: Optional[int] = None, response_body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class HubAuthenticationError(HubAPIError):
    """The hub rejected the API key (401). Every later call will fail too."""


class HubClientError(HubAPIError):
    """The hub rejected the command (4xx other than 401)."""


class HubServerError(HubAPIError):
    """The hub failed while handling the command (5xx)."""


class HubUnexpectedResponse(HubAPIError):
    """The hub answered with a status outside the documented contract."""


class HubConnectionError(HubAPIError):
    """The request never produced a response."""


class HubClient:
    """Client for sending commands to the telemetry hub."""

    def __init__(self, config: HubConfig):
        self.config = config
        self.command_url = f"{config.hub_url.rstrip('/')}/command"
        self.session = requests.Session()
        self.logger = logging.getLogger(__name__)

        self.session.headers.update({
            'Accept': 'application/json',
            'Content-Type': 'application/json',
            'X-Api-Key': self.config.api_key,
        })

        self._post_document = retry_on_failure(max_retries=config.max_retries)(self._post_once)

    def _post_once(self, document: Dict[str, Any]) -> requests.Response:
        self.logger.debug(f"POST {self.command_url} command={document['command']}")
        return self.session.post(
            self.command_url,
            json=document,
            timeout=self.config.request_timeout,
        )

    def send_command(self, command: Command) -> str:
        """
        Send a command to the hub.

        Args:
            command: Parsed command (anything but Quit)

        Returns:
            "OK" when the hub accepted the command

        Raises:
            NonTransportableCommand: For Quit
            HubAPIError: Subclass matching the failure
        """
        document = to_transport_document(command)

        try:
            response = self._post_document(document)
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Request failed: {e}")
            raise HubConnectionError(f"Failed to send request to hub: {e}")

        self.logger.debug(f"POST {self.command_url} -> {response.status_code}")
        return self._handle_response(response)

    def _handle_response(self, response: requests.Response) -> str:
        status = response.status_code

        if status == 200:
            return "OK"

        if status == 401:
            raise HubAuthenticationError(
                "Command error: 401 Unauthorized - Invalid API key",
                status_code=status,
            )

        body = format_response_body(response)
        if 400 <= status < 500:
            raise HubClientError(f"Command error: {status} - {body}", status_code=status, response_body=body)
        if 500 <= status < 600:
            raise HubServerError(f"Server error: {status} - {body}", status_code=status, response_body=body)

        raise HubUnexpectedResponse(f"Unexpected response: {status}", status_code=status, response_body=body)
