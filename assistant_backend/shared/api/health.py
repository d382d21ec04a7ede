"""
Health check API endpoint.
"""

import time
from fastapi import APIRouter

from ..core.dependencies import SettingsDep, ProviderRegistryDep
from ..models.responses import HealthResponse


router = APIRouter(
    tags=["health"]
)

# Track server start time
_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: SettingsDep, registry: ProviderRegistryDep):
    """
    Health check endpoint.

    Reports ``degraded`` when the active model cannot serve requests, which
    is a configuration problem rather than an outage.
    """
    providers = {info.provider_key: info.is_available for info in registry.catalog(refresh=True)}
    active = registry.current_provider()
    healthy = active is not None and active.is_available()

    return HealthResponse(
        status="healthy" if healthy else "degraded",
        version=settings.version,
        uptime=time.time() - _start_time,
        providers=providers
    )
