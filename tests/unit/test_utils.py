"""Tests for encoding, JSON and stream utilities."""
import io
from datetime import datetime, timedelta, timezone

import pytest

from dbxpy.core.exceptions import InvalidArgument, ResponseFormatError
from dbxpy.core.utils import (
    as_bool,
    as_datetime,
    as_int,
    as_string,
    decode_rfc5849,
    encode_form,
    encode_rfc5849,
    not_blank,
    not_none,
    parse_json,
    parse_json_object,
    parse_parameters,
)


class TestEncoding:
    """Test suite for percent-encodings."""
    
    def test_form_encodes_space_as_plus(self):
        """Test form encoding uses '+' for spaces."""
        assert encode_form('a b') == 'a+b'
    
    def test_rfc5849_encodes_space_as_percent(self):
        """Test RFC 5849 encoding uses %20 for spaces."""
        assert encode_rfc5849('a b') == 'a%20b'
    
    def test_rfc5849_unreserved_kept(self):
        """Test unreserved characters are not encoded."""
        assert encode_rfc5849('Az09-._~') == 'Az09-._~'
    
    def test_rfc5849_reserved_encoded(self):
        """Test reserved characters are encoded."""
        assert encode_rfc5849('a&b=c/d+e') == 'a%26b%3Dc%2Fd%2Be'
    
    def test_rfc5849_utf8(self):
        """Test non-ASCII is encoded as UTF-8 bytes."""
        assert encode_rfc5849('é') == '%C3%A9'
    
    def test_decode_plus_and_percent(self):
        """Test decoding accepts both '+' and %20."""
        assert decode_rfc5849('a+b%20c') == 'a b c'
    
    def test_decode_encoded_round_trip(self):
        """Test decoding an RFC 5849 encoded value."""
        value = 'key with spaces & ünïcode'
        
        assert decode_rfc5849(encode_rfc5849(value)) == value


class TestParseParameters:
    """Test suite for parse_parameters."""
    
    def test_token_response(self):
        """Test parsing an OAuth token response."""
        params = parse_parameters('oauth_token_secret=b9q1n5il4lcc&oauth_token=mh7an9dkrg59&uid=1')
        
        assert params == {
            'oauth_token_secret': 'b9q1n5il4lcc',
            'oauth_token': 'mh7an9dkrg59',
            'uid': '1'
        }
    
    def test_values_decoded(self):
        """Test names and values are decoded."""
        assert parse_parameters('a%20b=c+d') == {'a b': 'c d'}
    
    @pytest.mark.parametrize('value', [None, ''])
    def test_empty(self, value):
        """Test empty input gives an empty mapping."""
        assert parse_parameters(value) == {}
    
    def test_pairs_without_value_skipped(self):
        """Test pairs lacking a value are ignored."""
        assert parse_parameters('a=&b=2&c') == {'b': '2'}


class TestValidation:
    """Test suite for argument validation helpers."""
    
    def test_not_none(self):
        """Test not_none passes values through."""
        assert not_none('x', '') == ''
        with pytest.raises(InvalidArgument, match="'x' is None"):
            not_none('x', None)
    
    def test_not_blank(self):
        """Test not_blank rejects whitespace."""
        assert not_blank('x', 'v') == 'v'
        with pytest.raises(InvalidArgument, match="'x' is empty"):
            not_blank('x', ' \t')
    
    def test_invalid_argument_is_value_error(self):
        """Test InvalidArgument can be caught as ValueError."""
        with pytest.raises(ValueError):
            not_none('x', None)


class TestJson:
    """Test suite for JSON helpers."""
    
    def test_parse_object(self):
        """Test decoding an object."""
        assert parse_json('{"a": [1, 2]}') == {'a': [1, 2]}
    
    def test_parse_array(self):
        """Test decoding an array."""
        assert parse_json('[1, "x"]') == [1, 'x']
    
    @pytest.mark.parametrize('text', ['42', '"text"', 'true', 'null'])
    def test_scalar_rejected(self, text):
        """Test top-level scalars are rejected."""
        with pytest.raises(ResponseFormatError):
            parse_json(text)
    
    @pytest.mark.parametrize('text', ['', '{', '<html>', None])
    def test_invalid_rejected(self, text):
        """Test malformed documents are rejected."""
        with pytest.raises(ResponseFormatError):
            parse_json(text)
    
    def test_object_required(self):
        """Test parse_json_object rejects arrays."""
        with pytest.raises(ResponseFormatError):
            parse_json_object('[]')


class TestTypedAccessors:
    """Test suite for typed member accessors."""
    
    def test_as_string(self):
        """Test string members."""
        assert as_string({'a': 'x'}, 'a') == 'x'
        assert as_string({}, 'a') is None
        with pytest.raises(ResponseFormatError):
            as_string({'a': 1}, 'a')
    
    def test_as_int(self):
        """Test numeric members."""
        assert as_int({'a': 230783}, 'a') == 230783
        assert as_int({'a': 2.0}, 'a') == 2
        assert as_int({}, 'a') == 0
        with pytest.raises(ResponseFormatError):
            as_int({'a': '1'}, 'a')
        with pytest.raises(ResponseFormatError):
            as_int({'a': True}, 'a')
    
    def test_as_bool(self):
        """Test boolean members."""
        assert as_bool({'a': True}, 'a') is True
        assert as_bool({}, 'a') is False
        with pytest.raises(ResponseFormatError):
            as_bool({'a': 'true'}, 'a')
    
    def test_as_datetime(self):
        """Test dates in the service format."""
        value = as_datetime({'d': 'Sat, 21 Aug 2010 22:31:20 +0000'}, 'd')
        
        assert value == datetime(2010, 8, 21, 22, 31, 20, tzinfo=timezone.utc)
        assert value.utcoffset() == timedelta(0)
        assert as_datetime({}, 'd') is None
    
    def test_as_datetime_invalid(self):
        """Test an unparsable date."""
        with pytest.raises(ResponseFormatError, match='valid date format'):
            as_datetime({'d': '2010-08-21'}, 'd')

