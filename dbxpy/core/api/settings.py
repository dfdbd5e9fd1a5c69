"""
Client settings loading.

Credentials and language are read from a Java-style properties file
or from environment variables.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..auth.credentials import Credentials
from ..logging import get_logger

logger = get_logger('dbxpy.settings')

# Property names
APP_KEY = 'dropbox.app.key'
APP_SECRET = 'dropbox.app.secret'
ACCESS_KEY = 'dropbox.access.key'
ACCESS_SECRET = 'dropbox.access.secret'
LANGUAGE = 'dropbox.language'

ENV_PREFIX = 'DBXPY_'


def parse_properties(text: str) -> Dict[str, str]:
    """
    Parse the simple subset of the properties format used for settings.
    
    Lines are 'key=value' or 'key: value'; lines starting with '#' or
    '!' are comments. Line continuations are not supported.
    """
    props = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line[0] in '#!':
            continue
        positions = [p for p in (line.find('='), line.find(':')) if p >= 0]
        if not positions:
            props[line] = ''
            continue
        sep = min(positions)
        props[line[:sep].strip()] = line[sep + 1:].strip()
    return props


class EnvSettings(BaseSettings):
    """Settings read from DBXPY_* environment variables (case insensitive)."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra='ignore',
        case_sensitive=False
    )

    app_key: Optional[str] = Field(default=None, description="Application key")
    app_secret: Optional[str] = Field(default=None, description="Application secret")
    access_key: Optional[str] = Field(default=None, description="Token key")
    access_secret: Optional[str] = Field(default=None, description="Token secret")
    language: str = Field(default='en', description="Language for service responses")


@dataclass(frozen=True)
class ClientSettings:
    """
    Settings needed to create a DropboxClient.
    
    Attributes:
        app_key: Application (consumer) key
        app_secret: Application (consumer) secret
        access_key: Token key, if already authorized
        access_secret: Token secret, if already authorized
        language: Language for service responses
    """
    app_key: Optional[str] = None
    app_secret: Optional[str] = None
    access_key: Optional[str] = None
    access_secret: Optional[str] = None
    language: str = 'en'
    
    @classmethod
    def from_properties(cls, props: Dict[str, str]) -> 'ClientSettings':
        """Create from a parsed properties mapping."""
        return cls(
            app_key=props.get(APP_KEY),
            app_secret=props.get(APP_SECRET),
            access_key=props.get(ACCESS_KEY),
            access_secret=props.get(ACCESS_SECRET),
            language=props.get(LANGUAGE) or 'en'
        )
    
    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'ClientSettings':
        """
        Load settings from a properties file.
        
        A leading '~' is expanded to the user's home directory.
        
        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(path).expanduser()
        logger.info(f"Loading settings from '{path}'")
        return cls.from_properties(parse_properties(path.read_text(encoding='utf-8')))
    
    @classmethod
    def from_env(cls) -> 'ClientSettings':
        """Load settings from DBXPY_* environment variables."""
        env = EnvSettings()
        return cls(
            app_key=env.app_key,
            app_secret=env.app_secret,
            access_key=env.access_key,
            access_secret=env.access_secret,
            language=env.language or 'en'
        )
    
    def client_credentials(self) -> Optional[Credentials]:
        """Returns the application credentials, None if incomplete."""
        return Credentials.of(self.app_key, self.app_secret)
    
    def token_credentials(self) -> Optional[Credentials]:
        """Returns the token credentials, None if incomplete."""
        return Credentials.of(self.access_key, self.access_secret)
