from __future__ import annotations

import base64
import json
import logging
import time
from typing import TYPE_CHECKING, Any, List, Optional, Protocol
from urllib.parse import urlencode

import httpx

from messaging.errors import (
    GatewayError,
    MissingCredential,
    MissingRecipient,
    MissingSender,
    NoRecipients,
    NotEnabled,
    SendTimeout,
    SmsSendError,
    TransportError,
)
from messaging.models import EffectiveSettings, GatewayRequest, OutboundMessage, RecipientOutcome
from messaging.phone import normalize_number
from models.schema import PROVIDER_TWILIO
from ops.metrics import Stopwatch
from utils.redact import dest_hint, mask_secret

if TYPE_CHECKING:
    from repos.integration_repo import AccountStore

log = logging.getLogger("relay.twilio")

DEFAULT_BASE_URL = "https://api.twilio.com/2010-04-01"
DEFAULT_TIMEOUT_SECONDS = 10

# Process-config keys
CFG_API_BASE_URL = "TWILIO_API_BASE_URL"
CFG_SEND_TIMEOUT = "TWILIO_SMS_SEND_TIMEOUT"


class ProcessConfig(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...


def resolve_settings(
    accounts: "AccountStore",
    config: ProcessConfig,
    message: OutboundMessage,
    to_number: str,
) -> EffectiveSettings:
    """
    Credentials + effective base URL/timeout for one recipient attempt.

    Fail-fast order: NotEnabled, MissingCredential (sid, then token),
    MissingSender, MissingRecipient.
    """
    account = accounts.get_account(PROVIDER_TWILIO)
    if account is None or not account.enabled:
        raise NotEnabled(PROVIDER_TWILIO)

    if not account.account_sid:
        raise MissingCredential("account_sid", "Account SID")
    if not account.auth_token:
        raise MissingCredential("auth_token", "Auth Token")
    if not message.from_number:
        raise MissingSender()
    if not to_number:
        raise MissingRecipient()

    base_url = account.api_base_url
    if base_url is None:
        base_url = config.get(CFG_API_BASE_URL)
    if base_url is None:
        base_url = DEFAULT_BASE_URL

    timeout = config.get(CFG_SEND_TIMEOUT)
    if timeout is None:
        timeout = DEFAULT_TIMEOUT_SECONDS

    return EffectiveSettings(
        account_sid=account.account_sid,
        auth_token=account.auth_token,
        base_url=str(base_url).rstrip("/"),
        timeout=float(timeout),
    )


def basic_auth_header(username: str, password: str) -> str:
    token = f"{username}:{password}".encode("utf-8")
    return "Basic " + base64.b64encode(token).decode("ascii")


def build_request(message: OutboundMessage, to_number: str, effective: EffectiveSettings) -> GatewayRequest:
    fields = [
        ("Body", message.body),
        ("To", normalize_number(to_number)),
    ]
    if message.from_number:
        fields.append(("From", normalize_number(message.from_number)))

    return GatewayRequest(
        url=f"{effective.base_url}/Accounts/{effective.account_sid}/Messages.json",
        body=urlencode(fields),
        timeout=effective.timeout,
        headers={
            "Authorization": basic_auth_header(effective.account_sid, effective.auth_token),
            "Content-Type": "application/x-www-form-urlencoded",
        },
    )


def extract_error_message(body: bytes) -> Optional[str]:
    # Error bodies look like {"code": 20003, "message": "Authenticate", ...}.
    # Anything unparseable or without a usable message is "no message".
    try:
        data = json.loads(body or b"")
    except Exception:
        return None
    if not isinstance(data, dict):
        return None
    message = data.get("message")
    if not isinstance(message, str) or not message:
        return None
    return message


class TwilioSender:
    def __init__(
        self,
        accounts: "AccountStore",
        config: ProcessConfig,
        logger: Optional[logging.Logger] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.accounts = accounts
        self.config = config
        self.log = logger or log
        self.transport = transport

    def send(self, message: OutboundMessage) -> None:
        """Send to every recipient in order; the first failure aborts the rest."""
        if not message.to_numbers:
            raise NoRecipients()
        for number in message.to_numbers:
            self.send_to_number(message, number)

    def send_each(self, message: OutboundMessage) -> List[RecipientOutcome]:
        """Attempt every recipient and report each result instead of stopping at the first failure."""
        if not message.to_numbers:
            raise NoRecipients()
        outcomes: List[RecipientOutcome] = []
        for number in message.to_numbers:
            try:
                self.send_to_number(message, number)
            except SmsSendError as e:
                outcomes.append(RecipientOutcome(number=number, ok=False, error=e))
            else:
                outcomes.append(RecipientOutcome(number=number, ok=True))
        return outcomes

    def send_to_number(self, message: OutboundMessage, to_number: str) -> None:
        # Account is looked up again for every recipient, never cached.
        effective = resolve_settings(self.accounts, self.config, message, to_number)
        request = build_request(message, to_number, effective)

        timer = Stopwatch()
        self.log.info(
            "twilio_send_attempt",
            extra={
                "extra": {
                    "event": "twilio_send_attempt",
                    "channel": "sms",
                    "dest": dest_hint(to_number),
                    "account": mask_secret(effective.account_sid),
                    "timeout_s": effective.timeout,
                }
            },
        )
        status_code = self.transmit(request)
        self.log.info(
            "twilio_send_result",
            extra={
                "extra": {
                    "event": "twilio_send_result",
                    "channel": "sms",
                    "dest": dest_hint(to_number),
                    "ok": True,
                    "status_code": status_code,
                    "latency_ms": timer.ms(),
                }
            },
        )

    def transmit(self, request: GatewayRequest) -> int:
        """
        POST one request and classify the outcome. Returns the 2xx status code.

        httpx bounds each connect/read/write wait on its own; the deadline below
        bounds the whole exchange, so a gateway trickling bytes still times out.
        """
        deadline = time.monotonic() + request.timeout
        chunks: List[bytes] = []
        try:
            with httpx.Client(timeout=httpx.Timeout(request.timeout), transport=self.transport) as client:
                with client.stream(
                    "POST",
                    request.url,
                    content=request.body.encode("utf-8"),
                    headers=request.headers,
                ) as response:
                    for chunk in response.iter_bytes():
                        chunks.append(chunk)
                        if time.monotonic() > deadline:
                            raise SendTimeout(request.timeout)
                    if time.monotonic() > deadline:
                        raise SendTimeout(request.timeout)
                    status = response.status_code
        except httpx.TimeoutException as e:
            raise SendTimeout(request.timeout) from e
        except httpx.TransportError as e:
            raise TransportError(str(e) or type(e).__name__) from e

        if not (200 <= status < 300):
            self._raise_gateway_error(status, b"".join(chunks))
        return status

    def _raise_gateway_error(self, status: int, body: bytes) -> None:
        message = extract_error_message(body)
        if message:
            self.log.error(
                f"Twilio SMS sending error. Message: {message}",
                extra={
                    "extra": {
                        "event": "twilio_send_error",
                        "status_code": status,
                        "gateway_message": message,
                    }
                },
            )
        raise GatewayError(status, detail=message)
