"""OAuth 1.0 authentication (PLAINTEXT signature)."""
from .credentials import Credentials
from .signer import PlaintextSigner
from .state import AuthState, Unauthenticated, Authenticated
from .service import OAuthService

__all__ = [
    'Credentials',
    'PlaintextSigner',
    'AuthState',
    'Unauthenticated',
    'Authenticated',
    'OAuthService',
]
