from __future__ import annotations

import re
from typing import Any


_EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}\b")
_CPF_RE = re.compile(r"\b\d{3}\.?\d{3}\.?\d{3}-?\d{2}\b")
_LONG_DIGIT_RE = re.compile(r"\b\d{12,19}\b")

_BEARER_RE = re.compile(r"(?i)\bBearer\s+[A-Za-z0-9\-._~+/]+=*")
_ASAAS_KEY_RE = re.compile(r"\$?aact_[A-Za-z0-9_\-:$]{16,}")
_ACCESS_TOKEN_FIELD_RE = re.compile(
    r"(?i)(access_token['\"]?\s*[:=]\s*['\"]?)[^'\"\s,}]+"
)
_MONGO_CREDENTIALS_RE = re.compile(r"(mongodb(?:\+srv)?://)[^/@\s]+@")


def mask_pii_text(text: str) -> str:
    if not text:
        return text
    out = text
    out = _EMAIL_RE.sub("[REDACTED_EMAIL]", out)
    out = _CPF_RE.sub("[REDACTED_CPF]", out)
    out = _LONG_DIGIT_RE.sub("[REDACTED_NUMBER]", out)
    return out


def redact_secrets_text(text: str) -> str:
    if not text:
        return text
    out = text
    out = _BEARER_RE.sub("Bearer [REDACTED_TOKEN]", out)
    out = _ASAAS_KEY_RE.sub("[REDACTED_ASAAS_KEY]", out)
    out = _ACCESS_TOKEN_FIELD_RE.sub(r"\1[REDACTED_TOKEN]", out)
    out = _MONGO_CREDENTIALS_RE.sub(r"\1[REDACTED_CREDENTIALS]@", out)
    return out


def sanitize_for_log(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str):
        return redact_secrets_text(mask_pii_text(value))[:1200]
    if isinstance(value, (list, tuple)):
        return [sanitize_for_log(v) for v in value]
    if isinstance(value, dict):
        return {str(k)[:128]: sanitize_for_log(v) for k, v in value.items()}
    if isinstance(value, (int, float, bool)):
        return value
    return str(value)[:1200]
