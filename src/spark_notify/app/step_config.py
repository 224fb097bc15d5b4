"""
Step configuration as saved by the host.

Two layouts exist. Current configurations carry `spaceList` entries of
`{spaceName, spaceId}`; older ones carry the deprecated `roomList` of
`{rName, rId}`. Both are resolved to `Target` here, once, so the invocation
routine never sees the difference.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from spark_notify.errors import StepConfigError
from spark_notify.infrastructure.data_models import (
    MessageFormat,
    Target,
    is_message_valid,
    is_target_id_valid,
)


@dataclass(frozen=True)
class StepConfig:
    message: str | None = None
    # Parsed when the step runs, after the disabled and empty-message checks
    message_type: MessageFormat | str | None = None
    targets: tuple[Target, ...] = ()
    credentials_id: str | None = None
    disable: bool = False

    # Post-build result gating
    skip_on_success: bool = False
    skip_on_failure: bool = False
    skip_on_aborted: bool = False
    skip_on_unstable: bool = False

    # Pipeline step only
    fail_on_error: bool = False


def _as_bool(value: Any, key: str) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("1", "true", "yes", "on"):
        return True
    if isinstance(value, str) and value.strip().lower() in ("", "0", "false", "no", "off"):
        return False
    raise StepConfigError(f"Expected a boolean for {key}, got {value!r}")


def _as_optional_str(value: Any, key: str) -> str | None:
    if value is None or isinstance(value, str):
        return value
    raise StepConfigError(f"Expected a string for {key}, got {value!r}")


def _fix_empty(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _targets(entries: Iterable[Any] | None, id_key: str, name_key: str) -> tuple[Target, ...]:
    if entries is None:
        return ()
    if isinstance(entries, (str, bytes)) or not isinstance(entries, Iterable):
        raise StepConfigError(f"Expected a list of targets, got {entries!r}")

    targets = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            raise StepConfigError(f"Expected a target mapping, got {entry!r}")
        targets.append(Target(id=str(entry.get(id_key) or ""), display_name=entry.get(name_key)))
    return tuple(targets)


def load_step_config(data: Mapping[str, Any]) -> StepConfig:
    """
    Build a StepConfig from a host configuration mapping.

    The message type is only checked for shape here; an unknown value is reported
    when the step runs, so a disabled step or one without a message still skips.

    Raises:
        StepConfigError: If a value has the wrong shape.
    """
    if not isinstance(data, Mapping):
        raise StepConfigError("Step configuration must be a mapping")

    # The current target list wins over the deprecated one
    if data.get("spaceList"):
        targets = _targets(data.get("spaceList"), "spaceId", "spaceName")
    else:
        targets = _targets(data.get("roomList"), "rId", "rName")

    message_key = "message" if data.get("message") is not None else "messageContent"

    return StepConfig(
        message=_as_optional_str(data.get(message_key), message_key),
        message_type=_as_optional_str(data.get("messageType"), "messageType"),
        targets=targets,
        credentials_id=_fix_empty(data.get("credentialsId")),
        disable=_as_bool(data.get("disable"), "disable"),
        skip_on_success=_as_bool(data.get("skipOnSuccess"), "skipOnSuccess"),
        skip_on_failure=_as_bool(data.get("skipOnFailure"), "skipOnFailure"),
        skip_on_aborted=_as_bool(data.get("skipOnAborted"), "skipOnAborted"),
        skip_on_unstable=_as_bool(data.get("skipOnUnstable"), "skipOnUnstable"),
        fail_on_error=_as_bool(data.get("failOnError"), "failOnError"),
    )


def check_message(message: str | None) -> str | None:
    """Form check for the message field. Returns an error string or None."""
    if is_message_valid(message):
        return None
    return "Message cannot be empty"


def check_target_id(target_id: str | None) -> str | None:
    """Form check for a space id field. Returns an error string or None."""
    if is_target_id_valid(target_id):
        return None
    return "Invalid space id; see help message"
