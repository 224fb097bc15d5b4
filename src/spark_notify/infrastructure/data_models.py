"""
Shared data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class MessageFormat(Enum):
    """Rendering mode of a message body; the value is the JSON key the API expects."""

    TEXT = "text"
    MARKDOWN = "markdown"
    HTML = "html"

    @classmethod
    def parse(cls, value: MessageFormat | str | None) -> MessageFormat:
        """
        Parse a message type case-insensitively. Blank or missing values default to TEXT.

        Raises:
            ValueError: If the value is not one of text, markdown or html.
        """
        if isinstance(value, MessageFormat):
            return value
        if value is None or not value.strip():
            return cls.TEXT
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown message type: {value!r}") from None


class BuildResult(Enum):
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    ABORTED = "ABORTED"
    UNSTABLE = "UNSTABLE"


@dataclass(frozen=True)
class Target:
    id: str
    display_name: str | None = None  # advisory only; never sent to the API


@dataclass(frozen=True)
class Message:
    target_id: str
    body: str
    format: MessageFormat = MessageFormat.TEXT

    def __post_init__(self) -> None:
        if not is_message_valid(self.body):
            raise ValueError("Message cannot be empty")
        if not is_target_id_valid(self.target_id):
            raise ValueError("Target id cannot be empty")

    def to_payload(self) -> dict[str, str]:
        return {"roomId": self.target_id, self.format.value: self.body}


@dataclass(frozen=True)
class Token:
    secret: str = field(repr=False)


@dataclass(frozen=True)
class SecretTextCredential:
    id: str
    secret: str | None = field(default=None, repr=False)


@dataclass(frozen=True)
class UsernamePasswordCredential:
    id: str
    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class SecretListCredential:
    id: str
    values: tuple[str, ...] = field(default=(), repr=False)


Credential = SecretTextCredential | UsernamePasswordCredential | SecretListCredential


class OutcomeKind(Enum):
    SENT = "sent"
    NON_SUCCESS_STATUS = "non_success_status"
    CREDENTIAL_ERROR = "credential_error"
    TRANSPORT_ERROR = "transport_error"
    UNEXPECTED_ERROR = "unexpected_error"


@dataclass(frozen=True)
class DispatchOutcome:
    target_id: str
    kind: OutcomeKind
    status_code: int | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SENT


@dataclass
class NotificationReport:
    """What one invocation did: either a skip reason or one outcome per attempted target."""

    skipped_reason: str | None = None
    outcomes: list[DispatchOutcome] = field(default_factory=list)

    @property
    def skipped(self) -> bool:
        return self.skipped_reason is not None

    def to_dict(self) -> dict[str, object]:
        return {
            "skipped": self.skipped,
            "skipped_reason": self.skipped_reason,
            "outcomes": [
                {
                    "target_id": o.target_id,
                    "kind": o.kind.value,
                    "status_code": o.status_code,
                    "detail": o.detail,
                }
                for o in self.outcomes
            ],
        }


def is_message_valid(message: str | None) -> bool:
    return message is not None and bool(message.strip())


def is_target_id_valid(target_id: str | None) -> bool:
    return target_id is not None and bool(target_id.strip())
