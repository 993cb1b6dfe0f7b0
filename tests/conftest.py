"""Shared pytest fixtures for pptoken tests."""

import pytest

from app import create_app
from pptoken import EngineToken, Position, TokenKind
from pptoken.logs import configure_logging


@pytest.fixture(scope="session", autouse=True)
def logging_configured():
    configure_logging()


@pytest.fixture
def app():
    app = create_app()
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def engine_token():
    """An identifier token as the engine would hand it over."""
    return EngineToken(TokenKind.IDENTIFIER, "bar", Position("file.c", 3, 7))


class Unprintable:
    """Value whose str() blows up."""

    def __str__(self):
        raise ValueError("no text form")


class Rendered:
    """Value that renders through __str__ only."""

    def __init__(self, text):
        self.text = text

    def __str__(self):
        return self.text
