"""Shared fixtures for the crypto server test suite."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from crypto_server.algorithms import Base64Encoding, HmacSigning
from crypto_server.config import EncodingConfig, ListenConfig, ServerConfig, SigningConfig
from crypto_server.fields import FieldTransformService
from crypto_server.main import create_app

TEST_SECRET = "test-secret-key"


@pytest.fixture
def server_config() -> ServerConfig:
    return ServerConfig(
        listen=ListenConfig(host="127.0.0.1", port=3000),
        signing=SigningConfig(secret=TEST_SECRET),
        encoding=EncodingConfig(),
    )


@pytest.fixture
def encoder() -> Base64Encoding:
    return Base64Encoding()


@pytest.fixture
def signer() -> HmacSigning:
    return HmacSigning(TEST_SECRET)


@pytest.fixture
def field_service(encoder, signer) -> FieldTransformService:
    return FieldTransformService(encoder=encoder, signer=signer)


@pytest.fixture
def client(server_config):
    """Test client with the lifespan started, so app.state is populated."""
    with TestClient(create_app(server_config)) as test_client:
        yield test_client
