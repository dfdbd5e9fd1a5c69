"""
Request factory for the Dropbox REST API.

Every request is prefixed with the API version and carries the locale
parameter; signed requests also carry the Authorization header of the
owning client.
"""
from typing import Callable, Optional

from ..exceptions import InvalidArgument
from .config import APIConfig
from .request import Request, RequestBuilder

HEADER_AUTHORIZATION = 'Authorization'


def check_path(path: str) -> str:
    """Service paths must be absolute, or empty for the root folder."""
    if path is None:
        raise InvalidArgument("'path' is None")
    if path and not path.startswith('/'):
        raise InvalidArgument(f"'path' must be absolute: {path}")
    return path


class RequestFactory:
    """Creates request builders preconfigured for the API and content servers."""
    
    def __init__(
        self,
        config: APIConfig,
        authorization: Callable[[], str],
        locale: Optional[str] = None
    ):
        """
        Args:
            config: API configuration
            authorization: Returns the current Authorization header value;
                may raise when the client is not authenticated
            locale: Language for responses (defaults to config.locale)
        """
        self._config = config
        self._authorization = authorization
        self.locale = locale or config.locale
    
    @property
    def config(self) -> APIConfig:
        return self._config
    
    def request(self, method: str, host: str, path: str, signed: bool = True) -> RequestBuilder:
        """Returns a builder for /<version><path> on host."""
        builder = (
            Request.with_method(method)
            .with_scheme(self._config.scheme)
            .with_host(host)
            .with_path(f"/{self._config.api_version}{path}")
            .with_parameter('locale', self.locale)
        )
        if signed:
            builder = builder.with_header(HEADER_AUTHORIZATION, self._authorization())
        return builder
    
    def api(self, method: str, path: str, signed: bool = True) -> RequestBuilder:
        """Builder for the API (metadata and authentication) server."""
        return self.request(method, self._config.api_server, path, signed)
    
    def content(self, method: str, path: str, signed: bool = True) -> RequestBuilder:
        """Builder for the content (file transfer) server."""
        return self.request(method, self._config.content_server, path, signed)
    
    def rooted(self, action: str, path: str) -> str:
        """Returns '/<action>/<root><path>' for a checked service path."""
        return f"/{action}/{self._config.root}{check_path(path)}"
