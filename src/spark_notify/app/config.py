from dataclasses import dataclass
from typing import Any

from spark_notify.infrastructure.local_platform_manager import get_parameters

# Constants that don't change
DEFAULT_SPARK_API_URL = "https://api.ciscospark.com/v1/messages"
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_SSM_BASE_PATH = "/apps/prod/spark-notify/credentials"
DEFAULT_AWS_REGION = "us-east-1"
CREDENTIAL_STORES = ("env", "ssm")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class NotifySettings:
    """Notifier settings loaded from the environment."""

    # Messaging API
    spark_api_url: str = DEFAULT_SPARK_API_URL
    spark_request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    # Credential store
    spark_credential_store: str = "env"
    spark_ssm_base_path: str = DEFAULT_SSM_BASE_PATH
    aws_region: str = DEFAULT_AWS_REGION

    log_level: str = "INFO"


class Config:
    """Singleton configuration manager for the notifier."""

    _instance = None
    _settings = None

    def __new__(cls) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def get_settings(self) -> NotifySettings:
        """Get notifier settings, loading them if not already cached."""
        if self._settings is None:
            self._settings = self._load_settings()
        return self._settings

    def reset(self) -> None:
        """Drop cached settings so the next call reloads them."""
        self._settings = None

    def _load_settings(self) -> NotifySettings:
        """Load settings from environment variables."""
        params = get_parameters(
            [
                "spark_api_url",
                "spark_request_timeout",
                "spark_credential_store",
                "spark_ssm_base_path",
                "aws_region",
                "log_level",
            ]
        )

        timeout = params["spark_request_timeout"]
        try:
            request_timeout = float(timeout) if timeout else DEFAULT_REQUEST_TIMEOUT
        except ValueError:
            raise ValueError(
                "Configuration value is invalid: SPARK_REQUEST_TIMEOUT"
            ) from None

        settings = NotifySettings(
            spark_api_url=params["spark_api_url"] or DEFAULT_SPARK_API_URL,
            spark_request_timeout=request_timeout,
            spark_credential_store=(params["spark_credential_store"] or "env").strip().lower(),
            spark_ssm_base_path=params["spark_ssm_base_path"] or DEFAULT_SSM_BASE_PATH,
            aws_region=params["aws_region"] or DEFAULT_AWS_REGION,
            log_level=(params["log_level"] or "INFO").strip().upper(),
        )

        self._validate_settings(settings)

        return settings

    def _validate_settings(self, settings: NotifySettings) -> None:
        """Validate that all settings have usable values."""
        checks: dict[str, Any] = {
            "spark_api_url": settings.spark_api_url.startswith(("https://", "http://")),
            "spark_request_timeout": settings.spark_request_timeout > 0,
            "spark_credential_store": settings.spark_credential_store in CREDENTIAL_STORES,
            "spark_ssm_base_path": settings.spark_ssm_base_path.startswith("/"),
            "log_level": settings.log_level in LOG_LEVELS,
        }
        for field, ok in checks.items():
            if not ok:
                raise ValueError(f"Configuration value is invalid: {field.upper()}")


# Create singleton instance
config = Config()


# Convenience functions
def get_settings() -> NotifySettings:
    """Get notifier settings from the singleton config."""
    return config.get_settings()
