"""
Writing assistant endpoints for the editor frontend.
Web API controller - delegates all provider work to the Orchestrator.
"""

from fastapi import APIRouter
from fastapi.responses import StreamingResponse
from loguru import logger

from ...shared.core.dependencies import OrchestratorDep
from ...shared.models.requests import UnifiedAIRequest, ChatRequest, LegacyAIRequest
from ...shared.models.responses import UnifiedAIResponse, ChatResponse, LegacyAIResponse
from ...shared.services.streaming import EventStreamSink, relay_events


router = APIRouter(
    tags=["ai"]
)

_STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


@router.post("/ai/unified", response_model=UnifiedAIResponse, response_model_by_alias=True)
async def unified(request: UnifiedAIRequest, orchestrator: OrchestratorDep):
    """
    Run a structured writing operation.

    Validation and provider resolution happen before the response starts, so
    those failures are plain JSON errors even when ``stream`` is set. Failures
    after the stream started arrive as an in-band error frame.
    """
    plan = orchestrator.prepare(request)
    logger.info(
        f"Unified {plan.operation.value} request, provider={plan.provider_key}, "
        f"stream={request.stream}, session={request.session_id or '-'}"
    )

    if not request.stream:
        return await orchestrator.execute(plan)

    sink = EventStreamSink(provider=plan.provider_key, model=plan.provider.get_model_tag())
    return StreamingResponse(
        relay_events(sink, orchestrator.stream(plan, sink)),
        media_type="text/event-stream",
        headers=_STREAM_HEADERS,
    )


@router.post("/ai/chat", response_model=ChatResponse, response_model_by_alias=True)
async def chat(request: ChatRequest, orchestrator: OrchestratorDep):
    """Free-form chat; multi-turn for providers that keep session history."""
    return await orchestrator.chat(request)


@router.post("/ai/continue", response_model=LegacyAIResponse)
async def continue_writing(request: LegacyAIRequest, orchestrator: OrchestratorDep):
    """Continue the given text with the active model."""
    return LegacyAIResponse(result=await orchestrator.continue_writing(request.content()))


@router.post("/ai/polish", response_model=LegacyAIResponse)
async def polish(request: LegacyAIRequest, orchestrator: OrchestratorDep):
    """Polish the given text with the active model."""
    return LegacyAIResponse(result=await orchestrator.polish_text(request.content()))


@router.post("/ai/summarize", response_model=LegacyAIResponse)
async def summarize(request: LegacyAIRequest, orchestrator: OrchestratorDep):
    """Summarize the given text with the active model."""
    return LegacyAIResponse(result=await orchestrator.summarize_text(request.content()))
