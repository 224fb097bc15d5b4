"""
Exceptions raised while preparing or delivering a notification.
"""


class SparkNotifyError(Exception):
    """Base class for all notifier errors."""


class StepConfigError(SparkNotifyError, ValueError):
    """The step configuration cannot be used (for example an unknown message type)."""


class CredentialError(SparkNotifyError):
    """The bearer token could not be obtained from the credential store."""


class MissingCredential(CredentialError):
    def __init__(self, message: str = "No credentials found") -> None:
        super().__init__(message)


class InvalidCredentialType(CredentialError):
    def __init__(
        self, message: str = "Invalid credential type; only use 'Secret text' (token)"
    ) -> None:
        super().__init__(message)


class EmptySecret(CredentialError):
    def __init__(self, message: str = "Token cannot be empty") -> None:
        super().__init__(message)


class NotificationAborted(SparkNotifyError):
    """
    Raised by the pipeline step when failOnError is set and any target fails.

    The message is the first error encountered; remaining targets are not attempted.
    """
