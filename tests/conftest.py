"""Shared fixtures: Ed25519 test key pair, signed requests, app client."""

from __future__ import annotations

import json
from typing import Any

import pytest
from fastapi.testclient import TestClient
from nacl.signing import SigningKey

from reaction_csv.config import Settings, get_settings
from reaction_csv.serve import create_app

from tests.factories import TEST_SEED, TEST_TIMESTAMP


@pytest.fixture(scope="session")
def signing_key() -> SigningKey:
    return SigningKey(TEST_SEED)


@pytest.fixture(scope="session")
def public_key_hex(signing_key: SigningKey) -> str:
    return signing_key.verify_key.encode().hex()


@pytest.fixture
def sign(signing_key: SigningKey):
    """Factory: sign timestamp || body, return the hex signature."""

    def _sign(body: bytes, timestamp: str = TEST_TIMESTAMP) -> str:
        return signing_key.sign(timestamp.encode() + body).signature.hex()

    return _sign


@pytest.fixture
def settings(public_key_hex: str) -> Settings:
    return Settings(
        public_key=public_key_hex,
        token="test-token",
        application_id="123456789",
        api_base="https://discord.test/api/v10",
    )


@pytest.fixture
def app(settings: Settings):
    application = create_app()
    application.dependency_overrides[get_settings] = lambda: settings
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture
def post_signed(client, sign):
    """Factory: POST a JSON-serializable object (or raw bytes) with valid headers."""

    def _post(payload: Any, timestamp: str = TEST_TIMESTAMP):
        body = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
        return client.post(
            "/",
            content=body,
            headers={
                "X-Signature-Ed25519": sign(body, timestamp),
                "X-Signature-Timestamp": timestamp,
                "Content-Type": "application/json",
            },
        )

    return _post
