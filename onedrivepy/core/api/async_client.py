"""
Async OneDrive API client.

Fully asynchronous transport with comprehensive configuration support.
"""
import json
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Any, Union
from urllib.parse import urlencode, urlsplit
import aiohttp

from .config import APIConfig
from .errors import map_error_response
from ..exceptions import OneDriveException, ProtocolError, TransportError
from ..logging import get_logger


@dataclass
class RawResponse:
    """Status, headers and body of a completed HTTP exchange."""
    status: int
    reason: Optional[str] = None
    body: bytes = b''
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def status_line(self) -> str:
        return f"{self.status} {self.reason}" if self.reason else str(self.status)

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        name = name.lower()
        for key, value in self.headers.items():
            if key.lower() == name:
                return value
        return None

    def text(self) -> str:
        return self.body.decode('utf-8', errors='replace')

    def json(self) -> Any:
        """Decode body as JSON (None for an empty body)."""
        if not self.body:
            return None
        return json.loads(self.body)


class AsyncAPIClient:
    """
    Asynchronous OneDrive API client.

    Features:
    - Full async/await support
    - Configurable proxy, SSL, timeouts
    - Automatic retry with exponential backoff for JSON API requests
    - Connection pooling
    - Raw request escape hatch for pre-authenticated URLs

    Example:
        >>> config = APIConfig(access_token="...")
        >>> async with AsyncAPIClient(config) as client:
        ...     drive = await client.request('GET', 'me/drive')
    """

    def __init__(self, config: Optional[APIConfig] = None):
        """
        Initialize async API client.

        Args:
            config: API configuration (uses defaults if not provided)
        """
        self._config = config or APIConfig.default()
        self._session: Optional[aiohttp.ClientSession] = None
        self._connector: Optional[aiohttp.TCPConnector] = None
        self._closed = False

        self._logger = get_logger('onedrivepy.api')
        root_logger = logging.getLogger()
        if not root_logger.handlers:
            self._logger.setLevel(self._config.log_level)

    @property
    def config(self) -> APIConfig:
        """Get current configuration."""
        return self._config

    @property
    def access_token(self) -> Optional[str]:
        return self._config.access_token

    @access_token.setter
    def access_token(self, value: Optional[str]):
        self._config.access_token = value

    async def __aenter__(self) -> 'AsyncAPIClient':
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            self._connector = aiohttp.TCPConnector(
                **self._config.get_connector_kwargs()
            )
            self._session = aiohttp.ClientSession(
                connector=self._connector,
                **self._config.get_session_kwargs()
            )
        return self._session

    async def close(self):
        """Close client and release resources."""
        self._closed = True

        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

        if self._connector and not self._connector.closed:
            await self._connector.close()
            self._connector = None

    def build_url(self, path: str, params: Optional[Dict[str, str]] = None) -> str:
        """
        Build an absolute API URL.

        Args:
            path: Path relative to the configured base URL
            params: Optional query string parameters

        Returns:
            Absolute URL
        """
        url = self._config.base_url + path.lstrip('/')
        if params:
            separator = '&' if '?' in url else '?'
            url += separator + urlencode(params, safe='@')
        return url

    async def request(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None,
        params: Optional[Dict[str, str]] = None
    ) -> Any:
        """
        Make a JSON API request.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            body: Optional JSON-serializable request body
            params: Optional query string parameters

        Returns:
            Decoded JSON response (None for empty bodies)

        Raises:
            RemoteError: If the API returns a non-success status
            TransportError: If the request fails at the network level
            ProtocolError: If a success response is not valid JSON
        """
        response = await self.send(method, path, body=body, params=params)
        try:
            return response.json()
        except ValueError as e:
            raise ProtocolError(
                f"Invalid JSON in {method} {path} response: {e}",
                response.status
            ) from e

    async def send(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None,
        params: Optional[Dict[str, str]] = None,
        retry_count: int = 0
    ) -> RawResponse:
        """
        Send a JSON API request and return the raw response on success.

        Retries on the statuses listed in the retry configuration, and on
        network errors for idempotent methods; any other non-success status
        is mapped to RemoteError.
        """
        if self._closed:
            raise OneDriveException("Client is closed")

        url = self.build_url(path, params)
        headers = {
            'Accept': 'application/json',
            **self._config.get_auth_headers()
        }
        data = None
        if body is not None:
            data = json.dumps(body)
            headers['Content-Type'] = 'application/json'

        self._logger.debug(f"{method} {url}")
        if data:
            self._logger.debug(f"Request data: {data[:300] if len(data) > 300 else data}")

        retry = self._config.retry
        try:
            response = await self._perform(method, url, data=data, headers=headers)
        except TransportError:
            if retry_count < retry.max_retries and retry.retries_network_errors(method):
                delay = retry.calculate_delay(retry_count)
                self._logger.warning(
                    f"Retrying {method} {path} after network error, attempt {retry_count + 1}"
                )
                await asyncio.sleep(delay)
                return await self.send(method, path, body, params, retry_count + 1)
            raise

        if response.status in retry.retry_on_status and retry_count < retry.max_retries:
            delay = retry.calculate_delay(retry_count, _retry_after(response))
            self._logger.warning(
                f"Retrying {method} {path} after HTTP {response.status}, attempt {retry_count + 1}"
            )
            await asyncio.sleep(delay)
            return await self.send(method, path, body, params, retry_count + 1)

        if not response.ok:
            raise map_error_response(response.status, response.reason, response.body)

        return response

    async def raw_request(
        self,
        method: str,
        url: str,
        data: Optional[Union[bytes, bytearray, memoryview]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> RawResponse:
        """
        Perform a low-level HTTP request against an absolute URL.

        No authorization header is added, the status is not interpreted
        and the request is never retried. Used for upload session URLs
        and download URLs, which are pre-authenticated; logs and errors
        only show their host.

        Raises:
            TransportError: If the request fails at the network level
        """
        if self._closed:
            raise OneDriveException("Client is closed")
        return await self._perform(
            method, url, data=data, headers=headers or {}, display_url=_redact(url)
        )

    async def _perform(
        self,
        method: str,
        url: str,
        data: Any = None,
        headers: Optional[Dict[str, str]] = None,
        display_url: Optional[str] = None
    ) -> RawResponse:
        display_url = display_url or url
        session = await self._ensure_session()
        proxy = self._config.proxy.to_aiohttp_proxy() if self._config.proxy else None
        try:
            async with session.request(
                method,
                url,
                data=data,
                headers=headers,
                proxy=proxy
            ) as response:
                body = await response.read()
                self._logger.debug(f"{method} {display_url} -> {response.status}")
                return RawResponse(
                    status=response.status,
                    reason=response.reason,
                    body=body,
                    headers=dict(response.headers)
                )
        except asyncio.TimeoutError as e:
            self._logger.error(f"Timeout: {method} {display_url}")
            raise TransportError(f"Request timed out: {method} {display_url}") from e
        except aiohttp.ClientError as e:
            self._logger.error(f"Network error: {method} {display_url}: {type(e).__name__}")
            raise TransportError(f"Network error: {method} {display_url}: {type(e).__name__}") from e


def _redact(url: str) -> str:
    """Scheme and host of a URL, for logging pre-authenticated links."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}/..."


def _retry_after(response: RawResponse) -> Optional[float]:
    value = response.header('Retry-After')
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None
