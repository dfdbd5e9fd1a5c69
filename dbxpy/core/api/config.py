"""
Endpoint and connection settings.

Everything here maps either onto request URLs (servers, version, root)
or onto keyword arguments of requests.Session.request.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Tuple, Union


@dataclass
class ProxyConfig:
    """
    HTTP(S) proxy, optionally with basic credentials.
    """
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    
    def to_requests_proxies(self) -> Optional[Dict[str, str]]:
        """Convert to requests proxies mapping."""
        if not self.url:
            return None
        
        url = self.url
        if self.username and self.password and '://' in url:
            protocol, rest = url.split('://', 1)
            url = f"{protocol}://{self.username}:{self.password}@{rest}"
        
        return {'http': url, 'https': url}


@dataclass
class SSLConfig:
    """
    Certificate verification and client certificate.
    
    PLAINTEXT signatures are only safe over TLS, so verification is on
    by default.
    """
    verify: bool = True
    cert_file: Optional[str] = None
    key_file: Optional[str] = None
    ca_file: Optional[str] = None
    
    def to_requests_verify(self) -> Union[bool, str]:
        """Convert to the requests 'verify' argument."""
        if not self.verify:
            return False
        return self.ca_file or True
    
    def to_requests_cert(self) -> Optional[Union[str, Tuple[str, str]]]:
        """Convert to the requests 'cert' argument."""
        if not self.cert_file:
            return None
        if self.key_file:
            return (self.cert_file, self.key_file)
        return self.cert_file


@dataclass
class TimeoutConfig:
    """
    Connect and read timeouts in seconds.
    
    The client core defines no timeouts of its own; these are handed
    to the HTTP session unchanged.
    """
    connect: float = 30.0
    read: float = 300.0
    
    def to_requests_timeout(self) -> Tuple[float, float]:
        """Convert to requests (connect, read) timeout tuple."""
        return (self.connect, self.read)


@dataclass
class APIConfig:
    """
    Dropbox endpoints and connection options.
    
    root is "sandbox" for app folder access or "dropbox" for full access.
    """
    # Endpoints
    api_server: str = 'api.dropbox.com'
    content_server: str = 'api-content.dropbox.com'
    api_version: str = '1'
    root: str = 'sandbox'
    scheme: str = 'https'
    
    # Language used for service responses
    locale: str = 'en'
    
    # Sent on every request
    user_agent: str = 'dbxpy/1.0.0'
    
    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    
    extra_headers: Dict[str, str] = field(default_factory=dict)
    
    @classmethod
    def default(cls) -> 'APIConfig':
        """Configuration for the public Dropbox servers."""
        return cls()
    
    @classmethod
    def with_proxy(cls, proxy_url: str, **kwargs) -> 'APIConfig':
        """Default configuration going through an HTTP proxy."""
        return cls(
            proxy=ProxyConfig(url=proxy_url),
            **kwargs
        )
    
    @classmethod
    def insecure(cls, **kwargs) -> 'APIConfig':
        """Configuration without certificate verification (testing only)."""
        return cls(
            ssl=SSLConfig(verify=False),
            **kwargs
        )
    
    def get_session_headers(self) -> Dict[str, str]:
        """Get default headers for every request."""
        return {
            'User-Agent': self.user_agent,
            **self.extra_headers
        }
    
    def get_request_kwargs(self) -> Dict[str, Any]:
        """Get per-request kwargs for requests.Session.request."""
        kwargs = {
            'verify': self.ssl.to_requests_verify(),
            'timeout': self.timeout.to_requests_timeout(),
        }
        cert = self.ssl.to_requests_cert()
        if cert:
            kwargs['cert'] = cert
        if self.proxy:
            proxies = self.proxy.to_requests_proxies()
            if proxies:
                kwargs['proxies'] = proxies
        return kwargs
