"""OAuth 1.0 PLAINTEXT signature."""
from typing import Optional

from ..utils import encode_rfc5849
from .credentials import Credentials


class PlaintextSigner:
    """
    Builds OAuth 1.0 Authorization header values (PLAINTEXT method).
    
    The signature is the client secret and the signing secret joined
    with '&', so it must only be sent over TLS.
    """
    
    METHOD = 'PLAINTEXT'
    VERSION = '1.0'
    
    @classmethod
    def authorization(
        cls,
        client: Credentials,
        signing: Optional[Credentials] = None
    ) -> str:
        """
        Build the Authorization header value.
        
        Args:
            client: Application credentials
            signing: Temporary or token credentials; None before any
                token exists, in which case oauth_token is omitted
                
        Returns:
            Header value starting with 'OAuth '
        """
        fields = [
            ('oauth_version', cls.VERSION),
            ('oauth_signature_method', cls.METHOD),
            ('oauth_consumer_key', encode_rfc5849(client.key)),
        ]
        if signing is None:
            signature = f"{encode_rfc5849(client.secret)}&"
        else:
            fields.append(('oauth_token', encode_rfc5849(signing.key)))
            signature = f"{encode_rfc5849(client.secret)}&{encode_rfc5849(signing.secret)}"
        fields.append(('oauth_signature', signature))
        return 'OAuth ' + ', '.join(f'{name}="{value}"' for name, value in fields)
