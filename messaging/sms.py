from __future__ import annotations

# Wiring for the SMS sender. Callers depend on the SmsSender shape, not on Twilio.

from typing import List, Optional, Protocol

from config.settings import Settings, SettingsConfig, settings
from messaging.models import OutboundMessage, RecipientOutcome
from messaging.twilio_sender import TwilioSender


class SmsSender(Protocol):
    def send(self, message: OutboundMessage) -> None: ...

    def send_each(self, message: OutboundMessage) -> List[RecipientOutcome]: ...


def default_account_store(source: Optional[Settings] = None):
    s = source or settings
    mode = (s.ACCOUNT_STORE or "env").strip().lower()
    if mode == "firestore":
        from repos.integration_repo import IntegrationRepository

        return IntegrationRepository()
    if mode == "env":
        from repos.integration_repo import SettingsAccountStore

        return SettingsAccountStore(s)
    raise RuntimeError(f"Unknown ACCOUNT_STORE: {s.ACCOUNT_STORE!r}")


def default_sms_sender(source: Optional[Settings] = None) -> TwilioSender:
    s = source or settings
    return TwilioSender(accounts=default_account_store(s), config=SettingsConfig(s))
