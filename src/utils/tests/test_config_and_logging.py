"""Tests for settings loading and the JSON log formatter."""

import json
import logging
import os
import unittest
from datetime import timedelta
from unittest.mock import patch

from utils.config import Settings, load_settings
from utils.logging import REDACTED, JSONFormatter


class TestLoadSettings(unittest.TestCase):

    @patch('utils.config.load_dotenv')
    def test_missing_secret_fails_fast(self, _mock_dotenv):
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ValueError):
                load_settings()

    @patch('utils.config.load_dotenv')
    def test_defaults(self, _mock_dotenv):
        with patch.dict(os.environ, {"JWT_SECRET_KEY": "s3cret"}, clear=True):
            settings = load_settings()

        self.assertEqual(settings.jwt_secret_key, "s3cret")
        self.assertEqual(settings.token_ttl, timedelta(hours=2))
        self.assertEqual(settings.bcrypt_rounds, 12)
        self.assertFalse(settings.google_oauth_configured)

    @patch('utils.config.load_dotenv')
    def test_google_configuration(self, _mock_dotenv):
        env = {
            "JWT_SECRET_KEY": "s3cret",
            "GOOGLE_CLIENT_ID": "id",
            "GOOGLE_CLIENT_SECRET": "secret",
            "GOOGLE_REDIRECT_URI": "https://app.example.com/callback",
            "OAUTH_TIMEOUT_SECONDS": "3.5",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = load_settings()

        self.assertTrue(settings.google_oauth_configured)
        self.assertEqual(settings.oauth_timeout_seconds, 3.5)

    @patch('utils.config.load_dotenv')
    def test_malformed_number_names_the_variable(self, _mock_dotenv):
        for name in ("JWT_EXPIRATION_MINUTES", "BCRYPT_ROUNDS", "OAUTH_TIMEOUT_SECONDS"):
            with self.subTest(name=name):
                with patch.dict(os.environ, {"JWT_SECRET_KEY": "s3cret", name: "ten"}, clear=True):
                    with self.assertRaises(ValueError) as ctx:
                        load_settings()
                self.assertIn(name, str(ctx.exception))

    def test_partial_google_configuration_is_disabled(self):
        settings = Settings(jwt_secret_key="s", google_client_id="id", google_client_secret="secret")

        self.assertFalse(settings.google_oauth_configured)


class TestJSONFormatter(unittest.TestCase):

    def _format(self, **extra) -> dict:
        record = logging.LogRecord("auth", logging.INFO, __file__, 1, "User %s", ("alice",), None)
        for key, value in extra.items():
            setattr(record, key, value)
        return json.loads(JSONFormatter().format(record))

    def test_basic_fields(self):
        data = self._format(userId=3)

        self.assertEqual(data["level"], "INFO")
        self.assertEqual(data["logger"], "auth")
        self.assertEqual(data["message"], "User alice")
        self.assertEqual(data["userId"], 3)
        self.assertTrue(data["timestamp"].endswith("Z"))

    def test_sensitive_fields_redacted(self):
        data = self._format(password="pw1", token="eyJ...", code="4/0Ab", username="alice")

        self.assertEqual(data["password"], REDACTED)
        self.assertEqual(data["token"], REDACTED)
        self.assertEqual(data["code"], REDACTED)
        self.assertEqual(data["username"], "alice")


if __name__ == '__main__':
    unittest.main()
