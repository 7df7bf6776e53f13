from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any

from app.core.config import settings
from app.schemas.checkout import CheckoutRequest
from app.services.asaas_rest import AsaasRest
from app.services.image_store import ImageStore

logger = logging.getLogger(__name__)

DEFAULT_BILLING_TYPES = ["CREDIT_CARD"]
FALLBACK_SUBSCRIPTION_VALUE = 197.0
DEFAULT_MINUTES_TO_EXPIRE = 10
DEFAULT_QUANTITY = 1
NEXT_DUE_DAYS = 7

ITEM_NAME = "Clerky PRO"
ITEM_DESCRIPTION = "Assinatura mensal"
# Asaas rejects an empty imageBase64; a single space means "no image".
NO_IMAGE_PLACEHOLDER = " "

CALLBACK_URLS = {
    "successUrl": "https://clerky.com.br/sucesso",
    "cancelUrl": "https://clerky.com.br/cancelado",
    "expiredUrl": "https://clerky.com.br/expirado",
}


class CheckoutNotConfiguredError(RuntimeError):
    pass


class CheckoutMissingUrlError(RuntimeError):
    def __init__(self, response: dict[str, Any]) -> None:
        super().__init__("Checkout URL not returned by the API")
        self.response = response


@dataclass(frozen=True)
class CheckoutResult:
    link: str
    checkout_id: str | None
    external_reference: str
    status: str | None


def resolve_billing_types(raw: list[str] | str | None) -> list[str]:
    if isinstance(raw, list):
        return raw
    if raw:
        return [raw]
    return list(DEFAULT_BILLING_TYPES)


def resolve_subscription_value(
    client_value: float | None, env_value: float | None
) -> float:
    if client_value:
        return client_value
    if env_value is not None:
        return env_value
    return FALLBACK_SUBSCRIPTION_VALUE


def next_due_date(today: date | None = None) -> str:
    base = today or datetime.now(timezone.utc).date()
    return (base + timedelta(days=NEXT_DUE_DAYS)).isoformat()


def build_checkout_payload(
    req: CheckoutRequest,
    *,
    image_base64: str | None,
    external_reference: str,
    item_external_reference: str,
    env_subscription_value: float | None = None,
    today: date | None = None,
) -> dict[str, Any]:
    return {
        "billingTypes": resolve_billing_types(req.billing_types),
        "chargeTypes": ["RECURRENT"],
        "subscription": {
            "cycle": "MONTHLY",
            "nextDueDate": next_due_date(today),
        },
        "callback": dict(CALLBACK_URLS),
        "items": [
            {
                "imageBase64": image_base64 or NO_IMAGE_PLACEHOLDER,
                "name": ITEM_NAME,
                "quantity": req.quantity or DEFAULT_QUANTITY,
                "value": resolve_subscription_value(req.value, env_subscription_value),
                "description": req.description or ITEM_DESCRIPTION,
                "externalReference": item_external_reference,
            }
        ],
        "minutesToExpire": req.minutes_to_expire or DEFAULT_MINUTES_TO_EXPIRE,
        "externalReference": external_reference,
    }


def select_checkout_url(response: dict[str, Any]) -> str | None:
    for field in ("link", "url", "invoiceUrl"):
        value = response.get(field)
        if isinstance(value, str) and value.strip():
            return value
    return None


def _payload_summary(payload: dict[str, Any]) -> dict[str, Any]:
    return {
        "billingTypes": payload["billingTypes"],
        "chargeTypes": payload["chargeTypes"],
        "subscription": payload["subscription"],
        "items": [
            {
                "name": item["name"],
                "quantity": item["quantity"],
                "value": item["value"],
                "hasImage": item["imageBase64"] != NO_IMAGE_PLACEHOLDER,
            }
            for item in payload["items"]
        ],
        "externalReference": payload["externalReference"],
    }


async def create_subscription_checkout(
    req: CheckoutRequest, *, image_store: ImageStore
) -> CheckoutResult:
    if not settings.is_checkout_configured():
        logger.error(
            "Checkout env vars missing: has_api_url=%s has_access_token=%s",
            bool(settings.asaas_api_url),
            bool(settings.asaas_access_token),
        )
        raise CheckoutNotConfiguredError("Asaas is not configured")

    asaas = AsaasRest(str(settings.asaas_api_url), str(settings.asaas_access_token))

    external_reference = str(uuid.uuid4())
    item_external_reference = str(uuid.uuid4())

    image_base64 = await image_store.get_image_base64(settings.checkout_image_id)
    if not image_base64:
        logger.warning(
            "Checkout image %s unavailable, sending placeholder",
            settings.checkout_image_id,
        )

    payload = build_checkout_payload(
        req,
        image_base64=image_base64,
        external_reference=external_reference,
        item_external_reference=item_external_reference,
        env_subscription_value=settings.subscription_value,
    )
    logger.info("Creating Asaas checkout: %s", _payload_summary(payload))

    response = await asaas.create_checkout(payload)
    logger.info(
        "Asaas checkout created: id=%s status=%s link=%s url=%s invoiceUrl=%s",
        response.get("id"),
        response.get("status"),
        response.get("link"),
        response.get("url"),
        response.get("invoiceUrl"),
    )

    link = select_checkout_url(response)
    if not link:
        raise CheckoutMissingUrlError(response)

    checkout_id = response.get("id")
    status = response.get("status")
    return CheckoutResult(
        link=link,
        checkout_id=str(checkout_id) if checkout_id is not None else None,
        external_reference=external_reference,
        status=str(status) if status is not None else None,
    )
