from __future__ import annotations

import logging
import traceback
from typing import Any

import sentry_sdk

from app.services.privacy import redact_secrets_text, sanitize_for_log

logger = logging.getLogger(__name__)


async def log_system_error(
    *,
    route: str,
    message: str,
    err: BaseException | None = None,
    meta: dict[str, Any] | None = None,
) -> None:
    # Best-effort logging; never raise.
    try:
        stack = None
        if err is not None:
            raw_stack = "".join(
                traceback.format_exception(type(err), err, err.__traceback__)
            )[:8000]
            stack = redact_secrets_text(raw_stack)

        record: dict[str, Any] = {
            "route": sanitize_for_log(route),
            "message": sanitize_for_log(message),
            "meta": sanitize_for_log(meta or {}),
        }
        if stack:
            logger.error("%s %s\n%s", record["message"], record, stack)
        else:
            logger.error("%s %s", record["message"], record)

        if err is not None and sentry_sdk.is_initialized():
            sentry_sdk.capture_exception(err)
    except Exception:
        return
