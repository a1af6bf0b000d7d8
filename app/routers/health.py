from __future__ import annotations

import os
import time
from typing import Any, Dict

from fastapi import APIRouter, Depends

from config.settings import settings
from messaging.sms import default_account_store
from models.schema import PROVIDER_TWILIO

router = APIRouter()


def account_probe() -> Dict[str, Any]:
    """
    Read-only account-store probe.
    - Never returns credentials, only whether they are present
    - No writes
    """
    try:
        t0 = time.time()
        account = default_account_store().get_account(PROVIDER_TWILIO)
        dt_ms = int((time.time() - t0) * 1000)
    except Exception as e:
        return {"ok": False, "error_type": type(e).__name__, "message": str(e)}

    if account is None:
        return {"ok": True, "latency_ms": dt_ms, "configured": False, "enabled": False}
    return {
        "ok": True,
        "latency_ms": dt_ms,
        "configured": bool(account.account_sid and account.auth_token),
        "enabled": bool(account.enabled),
    }


@router.get("/health")
def health(acct: Dict[str, Any] = Depends(account_probe)):
    payload: Dict[str, Any] = {
        "ok": bool(acct.get("ok", False)),
        "service": "relay-sms",
        "cloudrun_service": os.getenv("K_SERVICE") or "",
        "revision": os.getenv("K_REVISION") or "",
        "environment": settings.ENVIRONMENT,
        "account_store": settings.ACCOUNT_STORE,
        "sms_account": acct,
        "time_unix": time.time(),
    }
    return payload
