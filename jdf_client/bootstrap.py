"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI

from jdf_client.adapters import JmfHttpTransport
from jdf_client.api import create_api_application
from jdf_client.config import AppSettings, config_load_settings
from jdf_client.jobs import InMemoryNotificationDispatcher, NotificationSinkPort, WorkflowSubmissionManager
from jdf_client.messages import JdfMessage


def bootstrap_create_application(
    settings: AppSettings | None = None,
    notification_sink: NotificationSinkPort | None = None,
) -> FastAPI:
    """Assemble the return-notification application after validating startup configuration.

    Args:
        settings: Optional pre-loaded settings; loaded from the environment when omitted.
        notification_sink: Optional sink for return JMF notifications.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    return create_api_application(
        settings=settings or config_load_settings(),
        notification_sink=notification_sink or InMemoryNotificationDispatcher(),
    )


def bootstrap_create_transport(settings: AppSettings) -> JmfHttpTransport:
    """Build the JMF HTTP transport from settings."""

    return JmfHttpTransport(
        server_url=settings.server_url,
        request_timeout_seconds=settings.request_timeout_seconds,
    )


def bootstrap_create_workflow_manager(
    settings: AppSettings | None = None,
    notification_sink: NotificationSinkPort | None = None,
    transport: JmfHttpTransport | None = None,
) -> WorkflowSubmissionManager:
    """Build one workflow submission batch for non-HTTP trigger surfaces.

    Args:
        settings: Optional pre-loaded settings; loaded from the environment when omitted.
        notification_sink: Optional sink for EntrySubmitted/EntryFailed notifications.
        transport: Optional shared transport; a new one is built from settings when omitted.

    Returns:
        WorkflowSubmissionManager: Fully wired orchestrator instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    return WorkflowSubmissionManager(
        transport=transport or bootstrap_create_transport(resolved_settings),
        settings=resolved_settings,
        notification_sink=notification_sink,
    )


def bootstrap_create_jdf_message(settings: AppSettings, name: str = "") -> JdfMessage:
    """Build a JDF job ticket using the configured sender identity and server file path."""

    return JdfMessage(
        sender_id=settings.settings_sender_id(),
        server_file_path=settings.server_file_path,
        name=name,
    )
