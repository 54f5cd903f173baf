"""Health endpoint router composition for app and JMF target checks."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from jdf_client.config import AppSettings


def api_create_health_router(settings: AppSettings) -> APIRouter:
    """Create health-check router reporting app status and configured JMF target.

    Args:
        settings: Runtime settings providing the JMF server URL label.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when settings is invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return application health state.

        Returns:
            JSONResponse: Deterministic health payload for operational checks.

        Raises:
            RuntimeError: This handler does not raise runtime errors.
        """

        payload = {
            "status": "ok",
            "app": "up",
            "jmf_server": settings.server_url,
            "sender_id": settings.settings_sender_id(),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
