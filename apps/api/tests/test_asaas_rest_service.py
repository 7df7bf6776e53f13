from __future__ import annotations

import httpx
import pytest

from app.services.asaas_rest import AsaasRest, AsaasRestError, normalize_token


def _response(
    status_code: int, *, json_body=None, text: str = "error"
) -> httpx.Response:
    req = httpx.Request("POST", "https://sandbox.asaas.test/v3/checkouts")
    if json_body is not None:
        return httpx.Response(status_code, json=json_body, request=req)
    return httpx.Response(status_code, text=text, request=req)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ('"$aact_abc"', "$aact_abc"),
        ("'$aact_abc'", "$aact_abc"),
        ("$aact_abc", "$aact_abc"),
        ('"$aact_abc', "$aact_abc"),
    ],
)
def test_normalize_token_strips_surrounding_quotes(raw: str, expected: str) -> None:
    assert normalize_token(raw) == expected


def test_raise_for_error_keeps_body_text() -> None:
    asaas = AsaasRest("https://sandbox.asaas.test/v3", "token")
    resp = _response(401, text='{"errors":[{"code":"invalid_access_token"}]}')

    with pytest.raises(AsaasRestError) as exc:
        asaas._raise_for_error(resp)

    assert exc.value.status_code == 401
    assert exc.value.body == '{"errors":[{"code":"invalid_access_token"}]}'


def test_raise_for_error_ignores_success() -> None:
    asaas = AsaasRest("https://sandbox.asaas.test/v3", "token")
    asaas._raise_for_error(_response(200, json_body={"id": "chk"}))


@pytest.mark.asyncio
async def test_create_checkout_posts_with_access_token_header(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    calls: list[dict] = []

    class _Client:
        async def post(self, url, *, headers, json):
            calls.append({"url": url, "headers": headers, "json": json})
            return _response(200, json_body={"id": "chk_1", "link": "https://l"})

    monkeypatch.setattr("app.services.asaas_rest.get_http", lambda: _Client())
    asaas = AsaasRest("https://sandbox.asaas.test/v3/", "'$aact_abc'")

    data = await asaas.create_checkout({"billingTypes": ["PIX"]})

    assert data == {"id": "chk_1", "link": "https://l"}
    assert calls[0]["url"] == "https://sandbox.asaas.test/v3/checkouts"
    assert calls[0]["headers"]["access_token"] == "$aact_abc"
    assert "authorization" not in calls[0]["headers"]
    assert calls[0]["json"] == {"billingTypes": ["PIX"]}


@pytest.mark.asyncio
async def test_create_checkout_raises_on_provider_error(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    class _Client:
        async def post(self, url, *, headers, json):
            return _response(503, text="upstream maintenance")

    monkeypatch.setattr("app.services.asaas_rest.get_http", lambda: _Client())
    asaas = AsaasRest("https://sandbox.asaas.test/v3", "token")

    with pytest.raises(AsaasRestError) as exc:
        await asaas.create_checkout({})

    assert exc.value.status_code == 503
    assert exc.value.body == "upstream maintenance"
