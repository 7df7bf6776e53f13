from __future__ import annotations

from typing import Any

import httpx

_http: httpx.AsyncClient | None = None


class AsaasRestError(Exception):
    def __init__(
        self,
        *,
        status_code: int,
        message: str,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def get_http() -> httpx.AsyncClient:
    global _http
    if _http is None:
        _http = httpx.AsyncClient(timeout=httpx.Timeout(30.0))
    return _http


async def close_http() -> None:
    global _http
    if _http is not None:
        await _http.aclose()
        _http = None


def normalize_token(raw: str) -> str:
    # Env files often carry the token quoted, e.g. ASAAS_ACCESS_TOKEN="$aact_...".
    token = raw.strip()
    if token[:1] in {'"', "'"}:
        token = token[1:]
    if token[-1:] in {'"', "'"}:
        token = token[:-1]
    return token


class AsaasRest:
    def __init__(self, api_url: str, access_token: str):
        self._base = api_url.rstrip("/")
        self._access_token = normalize_token(access_token)

    def _headers(self) -> dict[str, str]:
        # Asaas authenticates with its own header, not a bearer scheme.
        return {
            "accept": "application/json",
            "content-type": "application/json",
            "access_token": self._access_token,
        }

    def _raise_for_error(self, resp: httpx.Response) -> None:
        if resp.status_code < 400:
            return

        try:
            body = resp.text
        except Exception:
            body = None

        raise AsaasRestError(
            status_code=resp.status_code,
            message=f"Asaas request failed ({resp.status_code} {resp.reason_phrase})",
            body=body,
        )

    async def create_checkout(self, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self._base}/checkouts"
        resp = await get_http().post(url, headers=self._headers(), json=payload)
        self._raise_for_error(resp)
        data = resp.json()
        if isinstance(data, dict):
            return data
        return {}
