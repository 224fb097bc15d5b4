from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from spark_notify.app.config import NotifySettings
from spark_notify.errors import EmptySecret, InvalidCredentialType, MissingCredential
from spark_notify.infrastructure.aws_platform_manager import (
    create_ssm_client,
    get_parameter_record,
    parameter_path,
)
from spark_notify.infrastructure.data_models import (
    Credential,
    SecretListCredential,
    SecretTextCredential,
    Token,
)
from spark_notify.infrastructure.local_platform_manager import env_var_name


@runtime_checkable
class CredentialStore(Protocol):
    """Looks up a credential by id. Returns None when nothing is stored under that id."""

    def lookup(self, credentials_id: str) -> Credential | None: ...


class EnvironmentCredentialStore:
    """
    Credentials held in environment variables.

    The credential id is mapped to a variable name the same way parameters are
    (`spark-bot.token` -> `SPARK_BOT_TOKEN`). Intended for local runs and testing.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    def lookup(self, credentials_id: str) -> Credential | None:
        value = self._environ.get(env_var_name(credentials_id))
        if value is None:
            return None
        return SecretTextCredential(id=credentials_id, secret=value)


class ParameterStoreCredentialStore:
    """Credentials held in AWS SSM Parameter Store under a base path."""

    def __init__(
        self,
        base_path: str,
        *,
        region_name: str = "us-east-1",
        ssm_client: Any = None,
    ) -> None:
        self._base_path = base_path
        self._ssm = ssm_client if ssm_client is not None else create_ssm_client(region_name)

    def lookup(self, credentials_id: str) -> Credential | None:
        record = get_parameter_record(
            self._ssm, parameter_path(self._base_path, credentials_id), decrypt=True
        )
        if record is None:
            return None

        value = record.get("Value")
        if record.get("Type") == "StringList":
            values = tuple(value.split(",")) if value else ()
            return SecretListCredential(id=credentials_id, values=values)
        return SecretTextCredential(id=credentials_id, secret=value)


def build_credential_store(settings: NotifySettings) -> CredentialStore:
    """Create the credential store named by the settings."""
    if settings.spark_credential_store == "ssm":
        return ParameterStoreCredentialStore(
            settings.spark_ssm_base_path, region_name=settings.aws_region
        )
    return EnvironmentCredentialStore()


def resolve_token(store: CredentialStore, credentials_id: str | None) -> Token:
    """
    Resolve a credential id to a bearer token.

    Args:
        store: Credential store to query.
        credentials_id: Id of a 'Secret text' credential.

    Returns:
        Token: The bearer token.

    Raises:
        MissingCredential: If no id is configured or nothing is stored under it.
        InvalidCredentialType: If the stored credential is not a secret text.
        EmptySecret: If the secret is empty.
    """
    if not credentials_id:
        raise MissingCredential()

    credential = store.lookup(credentials_id)
    if credential is None:
        raise MissingCredential()
    if not isinstance(credential, SecretTextCredential):
        raise InvalidCredentialType()
    if not credential.secret:
        raise EmptySecret()

    return Token(secret=credential.secret)
