"""FastAPI application factory for the return-notification service.

The JMF server posts queue entry signals to the return URL announced in every
SubmitQueueEntry command; this application receives them.
"""

from fastapi import FastAPI

from jdf_client.config import AppSettings
from jdf_client.jobs import NotificationSinkPort

from .routers import api_create_health_router, api_create_return_jmf_router


def create_api_application(settings: AppSettings, notification_sink: NotificationSinkPort) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        notification_sink: Sink receiving notifications for return JMF messages.

    Returns:
        FastAPI: Framework application instance with health and return-JMF routes.

    Raises:
        RuntimeError: Raised if application initialization fails.
    """
    application = FastAPI(title="JDF Client")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return a minimal foundation response for bootstrap verification.

        Returns:
            dict[str, str]: Minimal response for API framework verification.

        Raises:
            RuntimeError: Raised if route handler cannot produce a response.
        """

        return {
            "service": settings.application_name,
            "status": "ready",
            "environment": settings.environment_name,
            "return_jmf_url": settings.settings_return_jmf_url(),
        }

    application.include_router(api_create_health_router(settings=settings))
    application.include_router(api_create_return_jmf_router(settings=settings, notification_sink=notification_sink))

    return application
