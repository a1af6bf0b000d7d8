from __future__ import annotations

from typing import Optional


class SmsSendError(Exception):
    """Base for every classified send failure. `code` is stable and machine-readable."""

    code = "sms_send_error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.code)


class NoRecipients(SmsSendError):
    code = "no_recipients"

    def __init__(self):
        super().__init__("No recipient phone number.")


class NotEnabled(SmsSendError):
    code = "not_enabled"

    def __init__(self, provider: str = "Twilio"):
        super().__init__(f"{provider} integration is not enabled.")
        self.provider = provider


class MissingCredential(SmsSendError):
    code = "missing_credential"

    def __init__(self, field: str, label: str = ""):
        super().__init__(f"No Twilio {label or field}.")
        self.field = field


class MissingSender(SmsSendError):
    code = "missing_sender"

    def __init__(self):
        super().__init__("No sender phone number.")


class MissingRecipient(SmsSendError):
    code = "missing_recipient"

    def __init__(self):
        super().__init__("No recipient phone number.")


class SendTimeout(SmsSendError):
    code = "timeout"

    def __init__(self, timeout: float):
        super().__init__(f"Twilio SMS sending timeout after {timeout:g}s.")
        self.timeout = timeout


class GatewayError(SmsSendError):
    code = "gateway_error"

    def __init__(self, status_code: int, detail: Optional[str] = None):
        super().__init__(f"Twilio SMS sending error. Code: {status_code}.")
        self.status_code = status_code
        # Gateway-supplied explanation, if the error body had one. Not part of str(self).
        self.detail = detail


class TransportError(SmsSendError):
    code = "transport_error"

    def __init__(self, reason: str):
        super().__init__(f"Twilio SMS transport error: {reason}")
        self.reason = reason
