"""Credentials model."""
from dataclasses import dataclass
from typing import Optional

from ..exceptions import ResponseFormatError
from ..utils import not_blank, not_none, parse_parameters


@dataclass(frozen=True)
class Credentials:
    """
    Immutable key/secret pair.
    
    Used for the application identity (client credentials) as well as
    for temporary and token credentials.
    """
    key: str
    secret: str
    
    def __post_init__(self):
        not_blank('key', self.key)
        not_none('secret', self.secret)
    
    @classmethod
    def of(cls, key: Optional[str], secret: Optional[str]) -> Optional['Credentials']:
        """Create credentials, or None when key or secret is missing."""
        if not key or secret is None:
            return None
        return cls(key, secret)
    
    @classmethod
    def parse(cls, encoded: Optional[str]) -> 'Credentials':
        """
        Parse an OAuth form encoded response body.
        
        Only oauth_token and oauth_token_secret are used; other fields
        (such as uid) are ignored.
        
        Raises:
            ResponseFormatError: If either field is missing
        """
        params = parse_parameters(encoded)
        key = params.get('oauth_token')
        secret = params.get('oauth_token_secret')
        if not key or secret is None:
            raise ResponseFormatError(
                "Response does not contain 'oauth_token' and 'oauth_token_secret'"
            )
        return cls(key, secret)
    
    def __repr__(self) -> str:
        return f"Credentials(key={self.key!r}, secret='***')"
