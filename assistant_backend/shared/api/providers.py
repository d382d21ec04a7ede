"""
Model catalog API endpoints.
"""

from fastapi import APIRouter

from ..core.dependencies import OrchestratorDep
from ..models.requests import SwitchModelRequest
from ..models.responses import ModelsResponse, SwitchModelResponse


router = APIRouter(
    tags=["providers"]
)


@router.get("/ai/models", response_model=ModelsResponse, response_model_by_alias=True)
async def get_models(orchestrator: OrchestratorDep):
    """List registered models with current availability and the active selection."""
    return orchestrator.list_models()


@router.post("/ai/switch-model", response_model=SwitchModelResponse, response_model_by_alias=True)
async def switch_model(request: SwitchModelRequest, orchestrator: OrchestratorDep):
    """Change the active model. Fails without side effects for unknown or unavailable models."""
    return orchestrator.switch_model(request.model_name)
