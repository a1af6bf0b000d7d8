from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from messaging.errors import SmsSendError
from messaging.models import OutboundMessage
from messaging.sms import SmsSender, default_sms_sender
from ops.metrics import Stopwatch
from utils.redact import dest_hint

log = logging.getLogger("relay.dispatcher")


class MessageDispatcher:
    """Non-raising front door for SMS sends: every outcome comes back as a dict and a log line."""

    def __init__(self, sms: Optional[SmsSender] = None):
        self.sms = sms

    def send_sms(self, message: OutboundMessage, best_effort: bool = False) -> Dict[str, Any]:
        rev = os.getenv("K_REVISION") or ""
        dests = [dest_hint(n) for n in message.to_numbers]
        timer = Stopwatch()
        log.info(
            "message_send_attempt",
            extra={
                "extra": {
                    "event": "message_send_attempt",
                    "channel": "sms",
                    "dest": dests,
                    "best_effort": best_effort,
                    "revision": rev,
                }
            },
        )
        try:
            if not self.sms:
                self.sms = default_sms_sender()
            if best_effort:
                outcomes = self.sms.send_each(message)
                results = [{"to": dest_hint(o.number), "ok": o.ok, "code": o.code} for o in outcomes]
                resp: Dict[str, Any] = {"ok": all(o.ok for o in outcomes), "results": results}
            else:
                self.sms.send(message)
                resp = {"ok": True, "recipients": len(message.to_numbers)}
            log.info(
                "message_send_result",
                extra={
                    "extra": {
                        "event": "message_send_result",
                        "channel": "sms",
                        "dest": dests,
                        "ok": resp["ok"],
                        "latency_ms": timer.ms(),
                        "revision": rev,
                    }
                },
            )
            return resp
        except SmsSendError as e:
            log.warning(
                "message_send_exception",
                extra={
                    "extra": {
                        "event": "message_send_exception",
                        "channel": "sms",
                        "dest": dests,
                        "code": e.code,
                        "error_type": type(e).__name__,
                        "latency_ms": timer.ms(),
                        "revision": rev,
                    }
                },
            )
            return {"ok": False, "error_type": type(e).__name__, "code": e.code, "message": str(e)}
        except Exception as e:
            log.error(
                "message_send_exception",
                extra={
                    "extra": {
                        "event": "message_send_exception",
                        "channel": "sms",
                        "dest": dests,
                        "error_type": type(e).__name__,
                        "message": str(e),
                        "latency_ms": timer.ms(),
                        "revision": rev,
                    }
                },
                exc_info=True,
            )
            return {"ok": False, "error_type": type(e).__name__, "code": "internal_error", "message": str(e)}
