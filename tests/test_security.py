"""Unit tests for auth.security (hashing, tokens, basic credentials)."""
import base64

import jwt
import pytest

from auth import security


class TestPasswords:
    """Tests for hash_password() / verify_password()."""

    def test_hash_is_salted_and_verifies(self):
        first = security.hash_password('s3cret')
        second = security.hash_password('s3cret')
        assert first != second
        assert 's3cret' not in first
        assert security.verify_password('s3cret', first) is True

    def test_wrong_password(self):
        hashed = security.hash_password('s3cret')
        assert security.verify_password('nope', hashed) is False

    def test_empty_or_garbage_hash(self):
        assert security.verify_password('s3cret', '') is False
        assert security.verify_password('s3cret', 'plaintext') is False

    def test_empty_password_rejected(self):
        with pytest.raises(security.AuthSecurityError):
            security.hash_password('')


class TestAccessToken:
    """Tests for build_access_token() / decode_access_token()."""

    def test_round_trip_claims(self):
        token = security.build_access_token(user_id=7, username='bob', role='user')
        payload = security.decode_access_token(token)
        assert payload['sub'] == '7'
        assert payload['username'] == 'bob'
        assert payload['role'] == 'user'
        assert payload['type'] == 'access'

    def test_tampered_token_rejected(self):
        token = security.build_access_token(user_id=7, username='bob', role='user')
        forged = jwt.encode(
            {**jwt.decode(token, options={'verify_signature': False}), 'role': 'admin'},
            'another-secret',
            algorithm='HS256',
        )
        with pytest.raises(security.AuthSecurityError):
            security.decode_access_token(forged)

    def test_expired_token_rejected(self, monkeypatch):
        monkeypatch.setattr(security, 'now_epoch_s', lambda: 1_000)
        token = security.build_access_token(user_id=7, username='bob', role='user')
        with pytest.raises(security.AuthSecurityError):
            security.decode_access_token(token)

    def test_non_access_token_rejected(self):
        token = jwt.encode({'sub': '7', 'type': 'refresh'}, security.jwt_secret(), algorithm='HS256')
        with pytest.raises(security.AuthSecurityError):
            security.decode_access_token(token)


class TestBasicCredentials:
    """Tests for decode_basic_credentials()."""

    def test_decodes_username_and_password(self):
        encoded = base64.b64encode(b'admin:pa:ss').decode()
        assert security.decode_basic_credentials(encoded) == ('admin', 'pa:ss')

    @pytest.mark.parametrize('encoded', ['!!!', base64.b64encode(b'no-colon').decode(), ''])
    def test_invalid(self, encoded):
        with pytest.raises(security.AuthSecurityError):
            security.decode_basic_credentials(encoded)
