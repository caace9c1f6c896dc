"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from mylibrary.config import Settings
from mylibrary.infrastructure.auth.keycloak_provider import TokenIdentity
from mylibrary.interfaces.api.app import create_app
from mylibrary.interfaces.api.middleware.auth import AuthMiddleware
from mylibrary.interfaces.api.middleware.cors import CORSMiddleware
from mylibrary.main import build_resources

ALLOWED_ORIGIN = "http://localhost:3000"


class FakeTokenProvider:
    """Accepts bearer tokens of the form ``token-<username>``."""

    def identify(self, token: str) -> TokenIdentity | None:
        if not token.startswith("token-"):
            return None
        username = token.removeprefix("token-")
        return TokenIdentity(subject=username, username=username)


def auth(username: str) -> dict[str, str]:
    """Authorization header for a seeded user."""
    return {"Authorization": f"Bearer token-{username}"}


def build_test_app(uow_factory):
    settings = Settings(_env_file=None)
    return create_app(
        build_resources(uow_factory, settings),
        middleware=[
            CORSMiddleware([ALLOWED_ORIGIN]),
            AuthMiddleware(uow_factory, FakeTokenProvider()),
        ],
    )


@pytest.fixture
def app(uow_factory):
    """Falcon ASGI app over the in-memory store."""
    return build_test_app(uow_factory)


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)
