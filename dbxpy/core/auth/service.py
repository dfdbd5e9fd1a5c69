"""
OAuth 1.0 three-legged authentication service.

The three steps are driven by the caller; nothing is persisted here.
"""
from typing import Optional

from ..api.endpoints import HEADER_AUTHORIZATION, RequestFactory
from ..logging import get_logger
from .credentials import Credentials
from .signer import PlaintextSigner

REQUEST_TOKEN_PATH = '/oauth/request_token'
AUTHORIZE_PATH = '/oauth/authorize'
ACCESS_TOKEN_PATH = '/oauth/access_token'


class OAuthService:
    """
    Runs the OAuth 1.0 flow against the API server.
    
    Example:
        >>> temporary = oauth.request_temporary_credentials()
        >>> print(oauth.authorization_url(temporary))  # user approves
        >>> token = oauth.request_token_credentials(temporary)
    """
    
    def __init__(
        self,
        client_credentials: Credentials,
        requests: RequestFactory,
        transport
    ):
        """
        Initialize service.
        
        Args:
            client_credentials: Application credentials
            requests: Factory for API server requests
            transport: Transport executing requests
        """
        self._client = client_credentials
        self._requests = requests
        self._transport = transport
        self._logger = get_logger('dbxpy.auth')
    
    def request_temporary_credentials(self) -> Credentials:
        """
        Step 1: Temporary Credentials Request.
        
        Signed with the client credentials only.
        """
        self._logger.info("Requesting temporary credentials")
        response = (
            self._requests.api('GET', REQUEST_TOKEN_PATH, signed=False)
            .with_header(HEADER_AUTHORIZATION, PlaintextSigner.authorization(self._client))
            .as_string(self._transport)
        )
        return Credentials.parse(response)
    
    def authorization_url(
        self,
        temporary_credentials: Credentials,
        callback: Optional[str] = None
    ) -> str:
        """
        Step 2: Resource Owner Authorization endpoint.
        
        Performs no I/O; returns the URL the user must visit.
        """
        return (
            self._requests.api('GET', AUTHORIZE_PATH, signed=False)
            .with_parameter('oauth_token', temporary_credentials.key)
            .with_parameter('oauth_callback', callback)
            .to_url()
        )
    
    def request_token_credentials(self, temporary_credentials: Credentials) -> Credentials:
        """
        Step 3: Token Credentials Request.
        
        The uid in the response is ignored; use account_info() instead.
        """
        self._logger.info("Requesting token credentials")
        response = (
            self._requests.api('GET', ACCESS_TOKEN_PATH, signed=False)
            .with_header(
                HEADER_AUTHORIZATION,
                PlaintextSigner.authorization(self._client, temporary_credentials)
            )
            .as_string(self._transport)
        )
        return Credentials.parse(response)
