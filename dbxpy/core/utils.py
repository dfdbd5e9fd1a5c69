"""
Shared encoding, validation and JSON utilities.

Two percent-encodings are in play:
- form encoding (space as '+') for URL query strings and form bodies
- RFC 5849 section 3.6 encoding for OAuth header values
"""
import json
import re
from datetime import datetime
from typing import Any, Dict, Optional, Union
from urllib.parse import quote, quote_plus, unquote_plus

from .exceptions import InvalidArgument, ResponseFormatError

UTF8 = 'utf-8'
BUFFER_SIZE = 64 * 1024

# Dates as returned by the API: "Sat, 21 Aug 2010 22:31:20 +0000"
DATE_FORMAT = '%a, %d %b %Y %H:%M:%S %z'

_KEY_VALUES = re.compile(r'([^&]+)=([^&]+)')


def encode_form(value: str) -> str:
    """Percent-encodes a value the way HTML forms do (space becomes '+')."""
    return quote_plus(value, encoding=UTF8)


def encode_rfc5849(value: str) -> str:
    """Percent-encodes a value as specified by RFC 5849 (3.6)."""
    return quote(value, safe='', encoding=UTF8)


def decode_rfc5849(value: str) -> str:
    """Percent-decodes a value as specified by RFC 5849 (3.6)."""
    return unquote_plus(value, encoding=UTF8)


def parse_parameters(value: Optional[str]) -> Dict[str, str]:
    """
    Parse an application/x-www-form-urlencoded string into a dict.
    
    Pairs without a value (or without a name) are skipped.
    
    Args:
        value: Encoded string, may be None or empty
        
    Returns:
        Mapping of decoded names to decoded values
    """
    if not value:
        return {}
    return {
        decode_rfc5849(name): decode_rfc5849(val)
        for name, val in _KEY_VALUES.findall(value)
    }


def not_none(name: str, value: Any) -> Any:
    """Returns value, raising InvalidArgument when it is None."""
    if value is None:
        raise InvalidArgument(f"'{name}' is None")
    return value


def not_blank(name: str, value: Optional[str]) -> str:
    """Returns value, raising InvalidArgument when it is None or blank."""
    not_none(name, value)
    if not str(value).strip():
        raise InvalidArgument(f"'{name}' is empty")
    return value


def parse_json(text: Optional[str]) -> Union[Dict[str, Any], list]:
    """
    Decode a JSON document into the generic dict/list tree.
    
    Only objects and arrays are accepted at the top level.
    
    Raises:
        ResponseFormatError: If text is not a JSON object or array
    """
    if text is None:
        raise ResponseFormatError("Empty response, JSON expected")
    try:
        value = json.loads(text)
    except ValueError as e:
        raise ResponseFormatError(f"Invalid JSON response: {e}") from e
    if not isinstance(value, (dict, list)):
        raise ResponseFormatError(
            f"JSON data can only be decoded to an object or array: {text[:80]!r}"
        )
    return value


def parse_json_object(text: Optional[str]) -> Dict[str, Any]:
    """Decode a JSON document that must be an object."""
    value = parse_json(text)
    if not isinstance(value, dict):
        raise ResponseFormatError("JSON object expected, got array")
    return value


def _illegal_type(key: str, value: Any, expected: str) -> ResponseFormatError:
    return ResponseFormatError(
        f"'{key}' is not of type '{expected}'. "
        f"Value = '{value}' ({type(value).__name__})"
    )


def as_string(data: Dict[str, Any], key: str) -> Optional[str]:
    """Returns a string member, None when absent."""
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    raise _illegal_type(key, value, 'str')


def as_int(data: Dict[str, Any], key: str) -> int:
    """Returns a numeric member as int, 0 when absent."""
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _illegal_type(key, value, 'int')
    return int(value)


def as_bool(data: Dict[str, Any], key: str) -> bool:
    """Returns a boolean member, False when absent."""
    value = data.get(key)
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    raise _illegal_type(key, value, 'bool')


def as_datetime(data: Dict[str, Any], key: str) -> Optional[datetime]:
    """Returns a date member parsed with DATE_FORMAT, None when absent."""
    value = as_string(data, key)
    if value is None:
        return None
    try:
        return datetime.strptime(value, DATE_FORMAT)
    except ValueError as e:
        raise ResponseFormatError(
            f"'{key}' has not a valid date format: '{value}'"
        ) from e

