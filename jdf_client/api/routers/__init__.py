"""API router package for endpoint composition."""

from .health import api_create_health_router
from .return_jmf import JMF_MEDIA_TYPE, api_create_return_jmf_router

__all__ = ["JMF_MEDIA_TYPE", "api_create_health_router", "api_create_return_jmf_router"]
