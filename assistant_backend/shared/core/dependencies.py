"""
Dependency injection for FastAPI without global state.
"""
from typing import Annotated
from functools import lru_cache
from fastapi import Depends, Request

from .config import Settings
from ..providers.registry import ProviderRegistry
from ..services.query.orchestrator import Orchestrator


# Configuration (cached at module level for efficiency)
@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


async def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    return getattr(request.app.state, "settings", None) or get_settings()


def _from_state(request: Request, name: str):
    if not hasattr(request.app.state, name):
        raise RuntimeError(f"{name} not found in app.state. Is the app properly initialized?")
    return getattr(request.app.state, name)


async def get_provider_registry(request: Request) -> ProviderRegistry:
    """The provider registry built at startup."""
    return _from_state(request, "provider_registry")


async def get_orchestrator(request: Request) -> Orchestrator:
    """
    The orchestrator built at startup.
    It is stateless apart from the registry and store it wraps, so one
    instance serves every request.
    """
    return _from_state(request, "orchestrator")


# Type aliases for cleaner code in route handlers
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
ProviderRegistryDep = Annotated[ProviderRegistry, Depends(get_provider_registry)]
OrchestratorDep = Annotated[Orchestrator, Depends(get_orchestrator)]
