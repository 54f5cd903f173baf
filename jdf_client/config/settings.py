"""Typed runtime settings with dotenv support and startup validation."""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

RETURN_JMF_ROUTE_PATH = "/jmf/return-jmf"


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for JMF submission and the return-notification API.

    Environment variable names are field names in uppercase with a `JDF_` prefix.
    Example: `server_url` reads from `JDF_SERVER_URL`.

    Attributes:
        environment_name: Runtime environment label.
        application_name: Application name, used as sender identity fallback.
        application_host: Host interface for web server binding.
        application_port: Web server port.
        application_base_url: Public base URL of this application, used for the default return URL.
        server_url: JMF server endpoint all messages are submitted to by default.
        server_file_path: Base path prepended to local print file references.
        sender_id: Identity announced to the JMF server; defaults to application_name.
        return_jmf_url: Explicit return-notification URL overriding the default callback route.
        request_timeout_seconds: HTTP request timeout for JMF submissions.
    """

    model_config = SettingsConfigDict(
        env_prefix="JDF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment_name: str = Field(default="development")
    application_name: str = Field(default="jdf-client", min_length=1)
    application_host: str = Field(default="0.0.0.0")
    application_port: int = Field(default=8000, ge=1, le=65535)
    application_base_url: str = Field(default="http://localhost:8000", min_length=1)
    server_url: str = Field(min_length=1)
    server_file_path: str = Field(default="")
    sender_id: str | None = Field(default=None)
    return_jmf_url: str | None = Field(default=None)
    request_timeout_seconds: float = Field(default=30.0, gt=0)

    @field_validator("application_name", "application_base_url", "server_url")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("sender_id", "return_jmf_url")
    @classmethod
    def _validate_optional_string(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped_value = value.strip()
        return stripped_value or None

    def settings_sender_id(self) -> str:
        """Return configured sender identity or the application name.

        Returns:
            str: Sender identity for JMF `SenderID` and JDF audit records.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return self.sender_id or self.application_name

    def settings_return_jmf_url(self) -> str:
        """Return configured return-notification URL or the default callback route.

        Returns:
            str: Absolute URL the JMF server should send queue entry notifications to.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        if self.return_jmf_url:
            return self.return_jmf_url
        return f"{self.application_base_url.rstrip('/')}{RETURN_JMF_ROUTE_PATH}"


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when required settings are missing or invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
