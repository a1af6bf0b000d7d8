from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from messaging.errors import SmsSendError


@dataclass(frozen=True)
class OutboundMessage:
    body: str
    to_numbers: Tuple[str, ...] = ()
    from_number: Optional[str] = None

    def __post_init__(self) -> None:
        # Callers often pass lists; freeze so the message can't change mid-send.
        object.__setattr__(self, "to_numbers", tuple(self.to_numbers))

    @classmethod
    def create(cls, body: str, to: Sequence[str], from_number: Optional[str] = None) -> "OutboundMessage":
        return cls(body=body, to_numbers=tuple(to), from_number=from_number)


@dataclass(frozen=True)
class ProviderAccount:
    """Stored enable flag and credentials for one SMS provider integration."""

    enabled: bool
    account_sid: Optional[str] = None
    auth_token: Optional[str] = None
    api_base_url: Optional[str] = None


@dataclass(frozen=True)
class EffectiveSettings:
    account_sid: str
    auth_token: str
    base_url: str
    timeout: float


@dataclass(frozen=True)
class GatewayRequest:
    url: str
    body: str
    timeout: float
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RecipientOutcome:
    number: str
    ok: bool
    error: Optional["SmsSendError"] = None

    @property
    def code(self) -> Optional[str]:
        return self.error.code if self.error is not None else None
