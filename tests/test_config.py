"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from podevim.config import Settings


def test_jwt_secret_is_required(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_short_jwt_secret_is_rejected(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "short")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_jwt_secret_from_environment(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "x" * 40)
    assert Settings(_env_file=None).JWT_SECRET == "x" * 40
