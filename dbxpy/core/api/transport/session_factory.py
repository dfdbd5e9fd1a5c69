"""Session factory using Factory Pattern."""
import requests
from requests.adapters import HTTPAdapter

from ..config import APIConfig


class SessionFactory:
    """Factory for creating HTTP sessions."""
    
    @staticmethod
    def create_session(config: APIConfig) -> requests.Session:
        """
        Creates a synchronous HTTP session.
        
        Adapters are mounted with retries disabled; every failure is
        surfaced to the caller.
        """
        session = requests.Session()
        session.headers.update(config.get_session_headers())
        session.mount('http://', HTTPAdapter(max_retries=0))
        session.mount('https://', HTTPAdapter(max_retries=0))
        return session
