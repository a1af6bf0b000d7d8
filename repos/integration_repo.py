from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

from google.cloud.firestore import Client

from config.settings import Settings, settings
from messaging.models import ProviderAccount
from models.schema import COL_INTEGRATIONS, PROVIDER_TWILIO
from storage.firestore_client import get_firestore_client


class AccountStore(Protocol):
    def get_account(self, provider: str) -> Optional[ProviderAccount]: ...


def _opt_str(v: Any) -> Optional[str]:
    if v is None:
        return None
    return str(v)


def account_from_doc(d: Dict[str, Any]) -> ProviderAccount:
    return ProviderAccount(
        enabled=bool(d.get("enabled", False)),
        account_sid=_opt_str(d.get("account_sid")),
        auth_token=_opt_str(d.get("auth_token")),
        api_base_url=_opt_str(d.get("api_base_url")),
    )


class IntegrationRepository:
    """
    Provider accounts stored in Firestore.

    Doc id = provider name, e.g. integrations/Twilio:
      - enabled: bool
      - account_sid, auth_token: str
      - api_base_url: optional str override
    """

    def __init__(self, db: Optional[Client] = None):
        self.db = db or get_firestore_client()

    def get_account(self, provider: str) -> Optional[ProviderAccount]:
        snap = self.db.collection(COL_INTEGRATIONS).document(provider).get()
        if not snap.exists:
            return None
        return account_from_doc(snap.to_dict() or {})


class SettingsAccountStore:
    """Twilio account taken from environment settings; other providers are unknown."""

    def __init__(self, source: Optional[Settings] = None):
        self.source = source or settings

    def get_account(self, provider: str) -> Optional[ProviderAccount]:
        if provider != PROVIDER_TWILIO:
            return None
        s = self.source
        return ProviderAccount(
            enabled=bool(s.TWILIO_ENABLED),
            account_sid=s.TWILIO_ACCOUNT_SID or None,
            auth_token=s.TWILIO_AUTH_TOKEN or None,
            api_base_url=s.TWILIO_ACCOUNT_API_BASE_URL,
        )
