"""
Authentication state machine.

Two states exist: Unauthenticated and Authenticated(header). The only
legal transition is Unauthenticated -> Authenticated.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..exceptions import ProtocolStateError


class AuthState(ABC):
    """Base class for authentication states."""
    
    @property
    def is_authenticated(self) -> bool:
        return False
    
    @property
    def header(self) -> str:
        """Returns the Authorization header value."""
        raise ProtocolStateError(
            "Token credentials not set; authenticate before calling this service"
        )
    
    @abstractmethod
    def authenticate(self, header: str) -> 'AuthState':
        """Returns the Authenticated state for the given header."""
        pass


@dataclass(frozen=True)
class Unauthenticated(AuthState):
    """No token credentials yet."""
    
    def authenticate(self, header: str) -> 'AuthState':
        return Authenticated(header)


@dataclass(frozen=True, repr=False)
class Authenticated(AuthState):
    """Token credentials set; holds the signed Authorization header."""
    authorization: str
    
    @property
    def is_authenticated(self) -> bool:
        return True
    
    @property
    def header(self) -> str:
        return self.authorization
    
    def authenticate(self, header: str) -> 'AuthState':
        raise ProtocolStateError("Token credentials already set")
    
    def __repr__(self) -> str:
        return 'Authenticated(authorization=***)'
