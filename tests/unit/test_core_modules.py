"""
Unit tests for core modules: password hashing, access tokens and logging setup.
"""

import json
import logging
import sys
from datetime import timedelta
from unittest.mock import patch

import jwt
import pytest
import structlog

from app.core.config import LogFormatEnum, LogLevelEnum, settings
from app.core.logging import build_formatter, configure_logging
from app.core.security import (
    TokenVerifier,
    create_access_token,
    hash_password,
    verify_password,
)
from app.exceptions.base import AuthenticationError


class TestPasswordHashing:
    """Test cases for bcrypt password helpers."""

    def test_hash_and_verify(self):
        hashed = hash_password("secret123")

        assert hashed != "secret123"
        assert hashed.startswith("$2")
        assert verify_password("secret123", hashed) is True
        assert verify_password("wrong", hashed) is False

    def test_hashes_are_salted(self):
        assert hash_password("secret123") != hash_password("secret123")

    def test_malformed_hash_does_not_verify(self):
        assert verify_password("secret123", "not-a-bcrypt-hash") is False


class TestTokenVerifier:
    """Test cases for access token issue and verification."""

    def test_round_trip(self):
        token = create_access_token(42, "alice")

        principal = TokenVerifier().verify(token)

        assert principal == {"user_id": 42, "username": "alice"}

    def test_token_claims(self):
        token = create_access_token(7, "bob")

        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])

        assert payload["sub"] == "7"
        assert payload["username"] == "bob"
        assert "exp" in payload

    def test_expired_token(self):
        token = create_access_token(1, "alice", expires_delta=timedelta(seconds=-10))

        with pytest.raises(AuthenticationError, match="expired"):
            TokenVerifier().verify(token)

    def test_wrong_signature(self):
        token = create_access_token(1, "alice")

        with pytest.raises(AuthenticationError) as exc_info:
            TokenVerifier(secret_key="a-different-secret").verify(token)

        assert exc_info.value.status_code == 401

    def test_garbage_token(self):
        with pytest.raises(AuthenticationError):
            TokenVerifier().verify("not.a.token")

    def test_non_numeric_subject(self):
        token = jwt.encode({"sub": "abc"}, settings.secret_key, algorithm=settings.algorithm)

        with pytest.raises(AuthenticationError, match="missing user ID"):
            TokenVerifier().verify(token)


class TestLogging:
    """Test cases for logging configuration."""

    def test_json_format_renders_one_json_object(self):
        record = logging.LogRecord("app.test", logging.INFO, __file__, 1, "sent %s", (3,), None)
        record.request_id = "req-1"

        payload = json.loads(build_formatter(LogFormatEnum.json).format(record))

        assert payload["level"] == "info"
        assert payload["logger"] == "app.test"
        assert payload["event"] == "sent 3"
        assert payload["request_id"] == "req-1"
        assert payload["timestamp"]

    def test_json_format_includes_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord(
                "app.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )

        payload = json.loads(build_formatter(LogFormatEnum.json).format(record))

        assert payload["level"] == "error"
        assert "RuntimeError: boom" in payload["exception"]

    def test_simple_format_is_plain_text(self):
        record = logging.LogRecord("app.test", logging.WARNING, __file__, 1, "slow poll", (), None)

        line = build_formatter(LogFormatEnum.simple).format(record)

        assert "slow poll" in line
        assert "warning" in line
        with pytest.raises(ValueError):
            json.loads(line)

    def test_configure_logging_uses_settings(self):
        root = logging.getLogger()
        previous_handlers, previous_level = root.handlers[:], root.level
        try:
            with patch.object(settings, "log_format", LogFormatEnum.json), patch.object(
                settings, "log_level", LogLevelEnum.DEBUG
            ):
                configure_logging()

            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
            assert root.level == logging.DEBUG
        finally:
            root.handlers = previous_handlers
            root.setLevel(previous_level)
