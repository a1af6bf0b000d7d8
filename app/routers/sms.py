from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from config.settings import settings
from messaging.dispatcher import MessageDispatcher
from messaging.models import OutboundMessage

router = APIRouter()

# Failure code -> HTTP status returned to the caller.
STATUS_BY_CODE: Dict[str, int] = {
    "no_recipients": 422,
    "missing_sender": 422,
    "missing_recipient": 422,
    "not_enabled": 503,
    "missing_credential": 503,
    "timeout": 504,
    "gateway_error": 502,
    "transport_error": 502,
}


class SendSmsRequest(BaseModel):
    body: str = Field(..., max_length=1600)
    to: List[str] = Field(default_factory=list)
    from_number: Optional[str] = None
    best_effort: bool = False


def get_dispatcher() -> MessageDispatcher:
    return MessageDispatcher()


@router.post("/sms/send")
def send_sms(req: SendSmsRequest, dispatcher: MessageDispatcher = Depends(get_dispatcher)):
    message = OutboundMessage.create(
        body=req.body,
        to=req.to,
        from_number=req.from_number or settings.TWILIO_FROM_NUMBER or None,
    )
    resp = dispatcher.send_sms(message, best_effort=req.best_effort)
    if "results" in resp:
        return resp
    if not resp.get("ok"):
        code = str(resp.get("code") or "internal_error")
        raise HTTPException(status_code=STATUS_BY_CODE.get(code, 500), detail=code)
    return resp
