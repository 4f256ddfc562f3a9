"""
API configuration module.

Provides configuration for the OneDrive API client.
Open for extension through custom configurations.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Union
import ssl


GRAPH_BASE_URL = 'https://graph.microsoft.com/v1.0/'


@dataclass
class ProxyConfig:
    """
    Proxy configuration.

    Supports HTTP and HTTPS proxies.
    """
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    def to_aiohttp_proxy(self) -> Optional[str]:
        """Convert to aiohttp proxy format."""
        if not self.url:
            return None

        if self.username and self.password:
            if '://' in self.url:
                protocol, rest = self.url.split('://', 1)
                return f"{protocol}://{self.username}:{self.password}@{rest}"

        return self.url


@dataclass
class SSLConfig:
    """SSL/TLS configuration."""
    verify: bool = True
    cert_file: Optional[str] = None
    key_file: Optional[str] = None
    ca_file: Optional[str] = None
    check_hostname: bool = True

    def create_ssl_context(self) -> Union[ssl.SSLContext, bool]:
        """Create SSL context from configuration."""
        if not self.verify:
            return False

        context = ssl.create_default_context()

        if self.ca_file:
            context.load_verify_locations(self.ca_file)

        if self.cert_file:
            context.load_cert_chain(
                self.cert_file,
                keyfile=self.key_file
            )

        context.check_hostname = self.check_hostname

        return context


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.

    Chunk uploads of several MiB share these limits, so the
    socket read timeout is kept generous.
    """
    total: Optional[float] = None  # No cap on the whole request
    connect: float = 30.0
    sock_read: float = 120.0
    sock_connect: float = 30.0

    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read,
            sock_connect=self.sock_connect
        )


@dataclass
class RetryConfig:
    """
    Retry configuration.

    Applies to JSON API requests only. Raw requests (chunk uploads,
    session cancellation, downloads) are always sent once. Network errors
    are only retried for idempotent methods.
    """
    max_retries: int = 3
    base_delay: float = 0.5
    max_delay: float = 16.0
    exponential_base: float = 2.0
    retry_on_status: tuple = (429, 503, 504)
    idempotent_methods: tuple = ('GET', 'HEAD', 'OPTIONS', 'PUT', 'DELETE')

    def retries_network_errors(self, method: str) -> bool:
        return method.upper() in self.idempotent_methods

    def calculate_delay(self, attempt: int, retry_after: Optional[float] = None) -> float:
        """Calculate delay for given attempt number."""
        if retry_after is not None:
            return min(retry_after, self.max_delay)
        delay = self.base_delay * (self.exponential_base ** attempt)
        return min(delay, self.max_delay)


@dataclass
class APIConfig:
    """
    Complete API configuration.

    Centralizes all configuration options for the OneDrive API client.
    The access token is used as-is; acquiring and refreshing it is the
    caller's business.
    """
    base_url: str = GRAPH_BASE_URL
    access_token: Optional[str] = None

    user_agent: str = 'onedrivepy/1.0.0'

    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)

    extra_headers: Dict[str, str] = field(default_factory=dict)

    log_level: int = 20  # logging.INFO

    # Connection pool settings
    limit_per_host: int = 10
    limit: int = 100

    def __post_init__(self):
        if not self.base_url.endswith('/'):
            self.base_url += '/'

    @classmethod
    def default(cls) -> 'APIConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def with_proxy(cls, proxy_url: str, **kwargs) -> 'APIConfig':
        """Create configuration with proxy."""
        return cls(
            proxy=ProxyConfig(url=proxy_url),
            **kwargs
        )

    @classmethod
    def insecure(cls, **kwargs) -> 'APIConfig':
        """Create configuration with SSL verification disabled."""
        return cls(
            ssl=SSLConfig(verify=False, check_hostname=False),
            **kwargs
        )

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit': self.limit,
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.create_ssl_context(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        headers = {
            'User-Agent': self.user_agent,
            **self.extra_headers
        }

        return {
            'headers': headers,
            'timeout': self.timeout.to_aiohttp_timeout(),
        }

    def get_auth_headers(self) -> Dict[str, str]:
        """Authorization header for API requests (empty without a token)."""
        if not self.access_token:
            return {}
        return {'Authorization': f'Bearer {self.access_token}'}
