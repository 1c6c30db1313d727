"""Settings loading."""

import logging

from app.core.config import Settings
from app.core.logging import configure_logging


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.port == 3000
    assert settings.upstream_base_url == "http://dados.recife.pe.gov.br"
    assert "http://localhost:3000" in settings.allowed_origins.split(",")


def test_port_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    assert Settings(_env_file=None).port == 8080


def test_configure_logging_sets_level():
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging("debug")
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous)
