"""Shared fixtures for the notifier tests."""

from __future__ import annotations

import pytest

from spark_notify.app.config import config
from spark_notify.infrastructure.data_models import SecretTextCredential

SETTINGS_VARS = (
    "SPARK_API_URL",
    "SPARK_REQUEST_TIMEOUT",
    "SPARK_CREDENTIAL_STORE",
    "SPARK_SSM_BASE_PATH",
    "AWS_REGION",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Every test starts from default settings."""
    for name in SETTINGS_VARS:
        monkeypatch.delenv(name, raising=False)
    config.reset()
    yield
    config.reset()


class FakeStore:
    def __init__(self, credentials=None):
        self.credentials = credentials or {}
        self.lookups = []

    def lookup(self, credentials_id):
        self.lookups.append(credentials_id)
        return self.credentials.get(credentials_id)


class RecordingSend:
    """Stands in for send_message; returns or raises the queued results in order."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    def __call__(self, target, message, message_format, token, env):
        self.calls.append(
            {"target": target, "message": message, "format": message_format, "token": token, "env": env}
        )
        result = self.results.pop(0) if self.results else 200
        if isinstance(result, BaseException):
            raise result
        return result


@pytest.fixture
def store():
    return FakeStore({"bot": SecretTextCredential(id="bot", secret="s3cret")})
