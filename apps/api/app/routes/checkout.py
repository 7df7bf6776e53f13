from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.core.state import ImageStoreDep
from app.schemas.checkout import (
    CheckoutErrorResponse,
    CheckoutRequest,
    CheckoutResponse,
)
from app.services.asaas_rest import AsaasRestError
from app.services.checkout_service import (
    CheckoutMissingUrlError,
    CheckoutNotConfiguredError,
    create_subscription_checkout,
)
from app.services.error_log import log_system_error

router = APIRouter()

_ROUTE = "/api/checkout"


def _error(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = CheckoutErrorResponse(error=error, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
    )


async def _report(
    request: Request,
    *,
    message: str,
    err: BaseException | None = None,
    meta: dict[str, Any] | None = None,
) -> None:
    # The 5xx middleware skips responses already reported here.
    request.state.error_logged = True
    await log_system_error(route=_ROUTE, message=message, err=err, meta=meta)


@router.post(
    "/checkout",
    response_model=CheckoutResponse,
    responses={
        500: {"model": CheckoutErrorResponse},
        502: {"model": CheckoutErrorResponse},
    },
)
async def create_checkout(
    request: Request, image_store: ImageStoreDep, body: CheckoutRequest | None = None
) -> CheckoutResponse | JSONResponse:
    try:
        result = await create_subscription_checkout(
            body or CheckoutRequest(), image_store=image_store
        )
    except CheckoutNotConfiguredError as e:
        await _report(request, message="Checkout is not configured", err=e)
        return _error(500, "Server configuration incomplete")
    except AsaasRestError as e:
        await _report(
            request,
            message="Asaas checkout API error",
            meta={"status_code": e.status_code, "body": e.body},
        )
        return _error(e.status_code, "Failed to create checkout with Asaas", e.body)
    except CheckoutMissingUrlError as e:
        await _report(
            request,
            message="Checkout URL not returned by the API",
            meta={"id": e.response.get("id"), "status": e.response.get("status")},
        )
        return _error(500, "Checkout URL not returned by the API")
    except Exception as e:
        await _report(request, message="Unexpected checkout error", err=e)
        return _error(500, "Internal error while processing checkout")

    return CheckoutResponse(
        link=result.link,
        checkout_id=result.checkout_id,
        external_reference=result.external_reference,
        status=result.status,
    )
