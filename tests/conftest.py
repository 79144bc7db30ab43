"""Pytest configuration for tests.

Sets up Python path and fixtures for all tests.
"""

import sys
from pathlib import Path
from typing import Callable, List

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

# Add project root to Python path so imports work correctly
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from shipyard.services.github.repository.url_parser import RepositoryIdentity  # noqa: E402


@pytest.fixture(scope="session")
def rsa_key_pair():
    """Throwaway RSA key pair as (private PEM, public PEM) strings."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()
    public_pem = key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()
    return private_pem, public_pem


@pytest.fixture
def static_identity() -> RepositoryIdentity:
    return RepositoryIdentity(
        host="github.com",
        owner="acme",
        name="widget",
        auth_username="x-access-token",
        auth_password="tok_abc",
        reference="refs/tags/1.0.0",
    )


@pytest.fixture
def installation_identity() -> RepositoryIdentity:
    return RepositoryIdentity(
        host="github.com",
        owner="acme",
        name="widget",
        auth_username="installation",
        auth_password="42",
        reference="refs/tags/1.0.0",
    )


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def recording_transport():
    """Factory building a RecordingTransport from a request handler."""
    return RecordingTransport


@pytest.fixture
def failing_transport():
    """Transport that fails the test if any request is sent."""

    def handler(request: httpx.Request) -> httpx.Response:
        pytest.fail(f"Unexpected HTTP request: {request.method} {request.url}")

    return RecordingTransport(handler)
