from __future__ import annotations

import os
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

SITE_DIR = Path(__file__).resolve().parent / "fixtures" / "site"

# Ensure CI can import app settings without a local .env file.
_ENV_DEFAULTS = {
    "APP_ENV": "test",
    "PUBLIC_DIR": str(SITE_DIR / "public"),
    "ASSETS_DIR": str(SITE_DIR / "assets"),
    "DEFAULT_LANGUAGE": "pt",
    "ASAAS_API_URL": "https://sandbox.asaas.test/v3",
    "ASAAS_ACCESS_TOKEN": "'$aact_test_token_for_pytest'",
}
for _key, _value in _ENV_DEFAULTS.items():
    os.environ.setdefault(_key, _value)

from app.core.config import settings
from app.main import app
from app.services.asaas_rest import AsaasRest
from app.services.image_store import ImageStore

TEST_IMAGE_BASE64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk"


@pytest.fixture(autouse=True)
def reset_test_state(monkeypatch: pytest.MonkeyPatch) -> None:
    app.dependency_overrides.clear()
    # Pin settings a developer's shell or .env could otherwise change.
    monkeypatch.setattr(settings, "public_dir", SITE_DIR / "public")
    monkeypatch.setattr(settings, "asaas_api_url", "https://sandbox.asaas.test/v3")
    monkeypatch.setattr(
        settings, "asaas_access_token", "'$aact_test_token_for_pytest'"
    )
    monkeypatch.setattr(settings, "subscription_value", None)


@pytest.fixture
def client() -> TestClient:
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def image_store_mock(monkeypatch: pytest.MonkeyPatch) -> AsyncMock:
    mock = AsyncMock(return_value=TEST_IMAGE_BASE64)

    async def _get_image_base64(self: ImageStore, doc_id: str) -> str | None:
        return await mock(doc_id=doc_id)

    monkeypatch.setattr(ImageStore, "get_image_base64", _get_image_base64)
    return mock


@pytest.fixture
def asaas_mock(monkeypatch: pytest.MonkeyPatch) -> AsyncMock:
    mock = AsyncMock(
        return_value={
            "id": "chk_0001",
            "status": "ACTIVE",
            "link": "https://sandbox.asaas.test/checkoutSession/show?id=chk_0001",
        }
    )

    async def _create_checkout(self: AsaasRest, payload: dict[str, Any]) -> dict[str, Any]:
        return await mock(
            payload=payload,
            api_url=self._base,
            access_token=self._access_token,
        )

    monkeypatch.setattr(AsaasRest, "create_checkout", _create_checkout)
    return mock
