"""
Provider HTTP Transport

Performs the single outbound POST of a review or chat invocation.
"""

import logging
from typing import Any, Dict, Optional, Protocol

import requests

from ..exceptions import TransportError


logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Anything that can POST a JSON body and return the raw reply text."""

    def post(self, url: str, headers: Dict[str, str], body: Dict[str, Any]) -> str:
        ...


class HttpTransport:
    """
    requests-based transport with an explicit timeout.

    Every call is a fresh request; no connection state is shared between
    invocations. Retries are not performed.
    """

    def __init__(self, timeout_seconds: float = 60.0, user_agent: Optional[str] = None):
        """
        Initialize HTTP transport.

        Args:
            timeout_seconds: Connect and read timeout per request
            user_agent: Optional User-Agent header value
        """
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent

    def post(self, url: str, headers: Dict[str, str], body: Dict[str, Any]) -> str:
        """
        POST a JSON body and return the response text.

        Args:
            url: Full provider URL (may carry the API key as a query parameter)
            headers: Request headers
            body: JSON-serializable request body

        Returns:
            Raw response body

        Raises:
            TransportError: For network errors, timeouts and non-2xx replies
        """
        request_headers = dict(headers)
        if self.user_agent:
            request_headers.setdefault('User-Agent', self.user_agent)

        try:
            response = requests.post(url, headers=request_headers, json=body, timeout=self.timeout_seconds)
        except requests.Timeout as e:
            logger.error(f"Provider request timed out after {self.timeout_seconds}s")
            raise TransportError(f"Request timed out after {self.timeout_seconds}s") from e
        except requests.RequestException as e:
            # URL may carry the API key, so only the exception type is logged
            logger.error(f"Provider request failed: {type(e).__name__}")
            raise TransportError(f"Request failed: {type(e).__name__}") from e

        if not response.ok:
            raise TransportError(
                f"Provider API error: {response.status_code} - {response.text[:200]}",
                status_code=response.status_code,
                response_text=response.text,
            )

        return response.text
