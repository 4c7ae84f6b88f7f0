"""
HTTP transport for the REST proxy.

Builds URLs, attaches headers, executes one request, validates the
status code and decodes the JSON body. Nothing is retried.
"""

import json
import time
from typing import Any, Dict, Optional, Sequence
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter

from kafka_rest.config import KafkaRestConfig
from kafka_rest.errors import APIError, DecodeError, TransportError
from kafka_rest.logger import ClientLogger


class APIClient:
    """HTTP client for the REST proxy resource tree."""

    def __init__(self, config: KafkaRestConfig, logger: ClientLogger):
        """Initialize the API client.

        Args:
            config: Client configuration
            logger: Logger instance
        """
        self.config = config
        self.logger = logger
        self.session = self._create_session()
        self.base_url = config.url.rstrip("/")

    def _create_session(self) -> requests.Session:
        """Create a requests session carrying the pass-through headers."""
        session = requests.Session()

        adapter = HTTPAdapter(max_retries=0)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update(self.config.headers)
        return session

    def url(self, *segments: Any) -> str:
        """Join the base URL with percent-encoded path segments."""
        path = "/".join(quote(str(segment), safe="") for segment in segments)
        return f"{self.base_url}/{path}" if path else self.base_url

    def request(
        self,
        method: str,
        segments: Sequence[Any],
        body: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
        expected_status: int = 200,
        send_content_type: Optional[bool] = None,
    ) -> Any:
        """Execute one request against the proxy.

        Args:
            method: HTTP method
            segments: Path segments below the base URL
            body: JSON-compatible request body, if any
            params: Query string parameters
            expected_status: The only status code accepted as success
            send_content_type: Force (or suppress) the Content-Type header;
                by default it is sent whenever there is a body

        Returns:
            The decoded JSON body, or None when the body is empty

        Raises:
            TransportError: If no response was received
            APIError: If the status code is not the expected one
            DecodeError: If the body is not valid JSON
        """
        url = self.url(*segments)

        headers = {"Accept": self.config.accept}
        if send_content_type or (send_content_type is None and body is not None):
            headers["Content-Type"] = self.config.content_type

        data = json.dumps(body) if body is not None else None

        start_time = time.time()
        try:
            response = self.session.request(
                method,
                url,
                data=data,
                params=params,
                headers=headers,
                timeout=self.config.timeout,
            )
        except requests.exceptions.RequestException as e:
            self.logger.record_request(success=False)
            self.logger.error("Request to proxy failed", error=str(e), method=method, url=url)
            raise TransportError(f"{method} {url}: {e}") from e

        try:
            self._validate_status(response, expected_status)
            result = self._decode(response)
        except (APIError, DecodeError) as e:
            self.logger.record_request(success=False)
            self.logger.error(
                "Proxy returned an error",
                error=str(e),
                method=method,
                url=url,
                status_code=response.status_code,
            )
            raise
        finally:
            response.close()

        elapsed = time.time() - start_time

        self.logger.record_request(success=True)
        self.logger.debug(
            "Request succeeded",
            method=method,
            url=url,
            status_code=response.status_code,
            elapsed_ms=int(elapsed * 1000),
        )

        return result

    @staticmethod
    def _validate_status(response: requests.Response, expected_status: int) -> None:
        """Raise APIError unless the response carries the expected status."""
        if response.status_code == expected_status:
            return

        body = response.text
        try:
            payload = json.loads(body) if body.strip() else {}
        except ValueError:
            payload = None

        if not isinstance(payload, dict):
            raise APIError(response.status_code, response.reason or "", body=body, decoded=False)

        raise APIError(
            response.status_code,
            response.reason or "",
            error_code=payload.get("error_code") or 0,
            error_message=payload.get("message") or "",
            body=body,
        )

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        """Decode a JSON body; an empty body decodes to None."""
        if not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Invalid JSON in response from {response.url}: {e}") from e

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()
