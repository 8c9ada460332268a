"""
Tests for password hashing, token generation and header parsing.
"""

import pytest

from app.config import get_settings
from app.core.security import (
    BASE36_DIGITS,
    BadAuthHeaderFormatError,
    BadAuthHeaderTypeError,
    generate_token,
    hash_password,
    parse_authorization_header,
    to_base36,
    verify_password,
)
from app.database import api_token_table


class TestPasswords:

    def test_hash_and_verify(self):
        password_hash = hash_password("s3cret")

        assert password_hash != "s3cret"
        assert verify_password("s3cret", password_hash)
        assert not verify_password("wrong", password_hash)

    def test_verify_invalid_hash(self):
        assert not verify_password("s3cret", "not-a-hash")


class TestTokens:

    @pytest.mark.parametrize("number,expected", [
        (0, "0"),
        (35, "z"),
        (36, "10"),
        (46655, "zzz"),
    ])
    def test_to_base36(self, number, expected):
        assert to_base36(number) == expected

    def test_generate_token(self):
        token = generate_token()

        assert 0 < len(token) <= 32
        assert set(token) <= set(BASE36_DIGITS)
        assert generate_token() != token

    def test_token_settings_fit_the_column(self):
        security = get_settings().security

        assert security.TOKEN_BITS == 160
        assert security.TOKEN_MAX_LENGTH == api_token_table.c.token.type.length


class TestAuthorizationHeader:

    def test_token(self):
        assert parse_authorization_header("token ABCDEFG") == "ABCDEFG"

    def test_basic_is_ignored(self):
        assert parse_authorization_header("Basic dXNlcjpwYXNz") is None

    @pytest.mark.parametrize("header", ["token", "token a b", ""])
    def test_bad_format(self, header):
        with pytest.raises(BadAuthHeaderFormatError):
            parse_authorization_header(header)

    def test_bad_type(self):
        with pytest.raises(BadAuthHeaderTypeError):
            parse_authorization_header("Bearer ABCDEFG")
