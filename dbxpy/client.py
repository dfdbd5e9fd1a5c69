"""
DropboxClient - High-level client for the Dropbox REST API (v1).

Example:
    >>> settings = ClientSettings.from_file('~/.dbxpy.properties')
    >>> with DropboxClient.from_settings(settings) as dropbox:
    ...     print(dropbox.account_info().display_name)
    ...     entry = dropbox.chunked_upload('/backup.tar').from_file('backup.tar')
"""
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from .core.api import APIConfig, ClientSettings, RequestsTransport
from .core.api.endpoints import RequestFactory
from .core.auth import AuthState, Credentials, OAuthService, PlaintextSigner, Unauthenticated
from .core.exceptions import InvalidArgument
from .core.files import FileDownload, FileService, FileUpload, MetadataQuery, ThumbFormat, ThumbSize
from .core.logging import get_logger
from .core.models import Account, DeltaPage, Entry
from .core.utils import not_none, parse_json_object

logger = get_logger('dbxpy.client')


class DropboxClient:
    """
    Client for one authenticated principal.
    
    Not safe for concurrent use: instances are cheap, so create one per
    sequential caller and throw it away when done.
    
    Two ways to authenticate:
    
    1. Known token credentials:
        >>> dropbox = DropboxClient(app, token)
    
    2. OAuth 1.0 flow:
        >>> dropbox = DropboxClient(app)
        >>> temporary = dropbox.request_temporary_credentials()
        >>> print(dropbox.authorization_url(temporary))
        >>> token = dropbox.authorize(temporary)  # after the user approved
    """
    
    def __init__(
        self,
        client_credentials: Credentials,
        token_credentials: Optional[Credentials] = None,
        config: Optional[APIConfig] = None,
        transport=None,
        locale: Optional[str] = None
    ):
        """
        Initialize client.
        
        Args:
            client_credentials: Application key/secret. Mandatory.
            token_credentials: Token key/secret if already authorized
            config: API configuration (uses defaults if not provided)
            transport: Transport executing requests (RequestsTransport
                if not provided)
            locale: Language for responses (defaults to config.locale)
        """
        not_none('client_credentials', client_credentials)
        self._config = config or APIConfig.default()
        self._owns_transport = transport is None
        self._transport = transport or RequestsTransport(self._config)
        self._client_credentials = client_credentials
        self._auth: AuthState = Unauthenticated()
        
        self._requests = RequestFactory(self._config, self._authorization, locale)
        self._oauth = OAuthService(client_credentials, self._requests, self._transport)
        self._files = FileService(self._requests, self._transport)
        
        if token_credentials is not None:
            self.set_token_credentials(token_credentials)
    
    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        config: Optional[APIConfig] = None,
        transport=None
    ) -> 'DropboxClient':
        """
        Create a client from loaded settings.
        
        Raises:
            InvalidArgument: If the application key or secret is missing
        """
        client_credentials = settings.client_credentials()
        if client_credentials is None:
            raise InvalidArgument("Application key and secret are required")
        return cls(
            client_credentials,
            settings.token_credentials(),
            config=config,
            transport=transport,
            locale=settings.language
        )
    
    @classmethod
    def from_file(cls, path: Union[str, Path], **kwargs) -> 'DropboxClient':
        """Create a client from a properties file."""
        return cls.from_settings(ClientSettings.from_file(path), **kwargs)
    
    # Configuration ==================================================================
    
    @property
    def config(self) -> APIConfig:
        return self._config
    
    @property
    def locale(self) -> str:
        """Language used when services are called."""
        return self._requests.locale
    
    def with_locale(self, locale: str) -> 'DropboxClient':
        """Set the language used when services are called."""
        self._requests.locale = locale
        return self
    
    @property
    def is_authenticated(self) -> bool:
        return self._auth.is_authenticated
    
    def set_token_credentials(self, token_credentials: Credentials) -> None:
        """
        Set the token credentials. Allowed exactly once per client.
        
        Raises:
            InvalidArgument: If token_credentials is None
            ProtocolStateError: If token credentials were already set
        """
        not_none('token_credentials', token_credentials)
        self._auth = self._auth.authenticate(
            PlaintextSigner.authorization(self._client_credentials, token_credentials)
        )
        logger.debug("Token credentials set")
    
    def _authorization(self) -> str:
        return self._auth.header
    
    # Authentication =================================================================
    
    def request_temporary_credentials(self) -> Credentials:
        """First OAuth step: Temporary Credentials Request."""
        return self._oauth.request_temporary_credentials()
    
    def authorization_url(self, temporary_credentials: Credentials, callback: Optional[str] = None) -> str:
        """Second OAuth step: URL where the user approves access."""
        return self._oauth.authorization_url(temporary_credentials, callback)
    
    def request_token_credentials(self, temporary_credentials: Credentials) -> Credentials:
        """Third OAuth step: Token Credentials Request."""
        return self._oauth.request_token_credentials(temporary_credentials)
    
    def authorize(self, temporary_credentials: Credentials) -> Credentials:
        """
        Third OAuth step, then use the token credentials on this client.
        
        Returns:
            The token credentials; store them to skip the flow next time
        """
        token = self.request_token_credentials(temporary_credentials)
        self.set_token_credentials(token)
        logger.info("Client authorized")
        return token
    
    # Accounts =======================================================================
    
    def account_info(self) -> Account:
        """Information about the user's account."""
        response = self._requests.api('GET', '/account/info').as_string(self._transport)
        return Account.from_dict(parse_json_object(response))
    
    # Files and metadata =============================================================
    
    def files_get(self, path: str) -> FileDownload:
        """Download a file; returns a builder to customize the request."""
        return self._files.files_get(path)
    
    def files_put(self, path: str) -> FileUpload:
        """Upload a file in one request (max 150 MB)."""
        return self._files.files_put(path)
    
    def chunked_upload(self, path: str) -> FileUpload:
        """Upload a file of any size in chunks, then commit it."""
        return self._files.chunked_upload(path)
    
    def metadata(self, path: str) -> MetadataQuery:
        """File and folder metadata."""
        return self._files.metadata(path)
    
    def delta(self, cursor: Optional[str] = None) -> DeltaPage:
        """Changes since cursor (None for the first call)."""
        return self._files.delta(cursor)
    
    def revisions(self, path: str, limit: int = 10) -> List[Entry]:
        """Previous revisions of a file."""
        return self._files.revisions(path, limit)
    
    def media(self, path: str) -> Optional[str]:
        """Direct streaming link to a file."""
        return self._files.media(path)
    
    def thumbnail(
        self,
        path: str,
        sink: BinaryIO,
        size: ThumbSize = ThumbSize.S,
        fmt: ThumbFormat = ThumbFormat.JPEG
    ) -> int:
        """Write an image thumbnail into sink."""
        return self._files.thumbnail(path, sink, size, fmt)
    
    # File operations ================================================================
    
    def copy(self, from_path: str, to_path: str) -> Entry:
        return self._files.copy(from_path, to_path)
    
    def move(self, from_path: str, to_path: str) -> Entry:
        return self._files.move(from_path, to_path)
    
    def delete(self, path: str) -> Entry:
        return self._files.delete(path)
    
    def create_folder(self, path: str) -> Entry:
        return self._files.create_folder(path)
    
    # Lifecycle ======================================================================
    
    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            self._transport.close()
    
    def __enter__(self) -> 'DropboxClient':
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
