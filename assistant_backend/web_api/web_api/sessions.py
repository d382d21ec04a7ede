"""
Conversation session endpoints.
"""

from fastapi import APIRouter

from ...shared.core.dependencies import OrchestratorDep
from ...shared.models.responses import SessionResponse, ResetSessionResponse


router = APIRouter(
    tags=["sessions"]
)


@router.post("/ai/sessions", response_model=SessionResponse, response_model_by_alias=True)
async def create_session(orchestrator: OrchestratorDep):
    """Issue a fresh conversation session id."""
    return SessionResponse(session_id=orchestrator.new_session())


@router.delete("/ai/sessions/{session_id}", response_model=ResetSessionResponse, response_model_by_alias=True)
async def reset_session(session_id: str, orchestrator: OrchestratorDep):
    """Clear the conversation history of a session."""
    orchestrator.reset_session(session_id)
    return ResetSessionResponse(session_id=session_id, cleared=True)
