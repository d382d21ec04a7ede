"""
Orchestrator - the single entry point between the API layer and the providers.

Resolves which provider serves a request, builds the prompt, and runs the call
in buffered or streaming mode. Provider errors are never retried and never
rerouted to another provider.
"""

import time
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, TypeVar
from loguru import logger

from ...core.exceptions import (
    AssistantError,
    NoProviderAvailableError,
    ModelNotFoundError,
    ModelUnavailableError,
    ProviderError,
)
from ...middleware.monitoring import record_llm_request, update_active_sessions
from ...models.enums import Operation, CHAT_OPERATION
from ...models.internal import ModelInfo
from ...models.requests import UnifiedAIRequest, ChatRequest
from ...models.responses import (
    UnifiedAIResponse,
    ChatResponse,
    ModelsResponse,
    SwitchModelResponse,
)
from ...providers.base import BaseProvider
from ...providers.registry import ProviderRegistry
from ..prompt import PromptFields, build_prompt, parse_operation
from ..session import ConversationStore
from ..streaming import StreamSink


T = TypeVar("T")


@dataclass(frozen=True)
class ExecutionPlan:
    """A validated request bound to the provider that will serve it."""
    operation: Operation
    provider_key: str
    provider: BaseProvider
    prompt: str
    session_id: str = ""
    function_type: str = ""


class Orchestrator:
    """
    Routes writing operations and chat turns to the active provider.

    Holds no per-request state; the registry owns the active selection and
    the providers own session bookkeeping.
    """

    def __init__(self, registry: ProviderRegistry, store: ConversationStore):
        self.registry = registry
        self.store = store
        logger.info(f"Orchestrator initialized with {len(registry)} providers, active={registry.current_key}")

    # ------------------------------------------------------------------
    # Provider resolution
    # ------------------------------------------------------------------

    def resolve_provider(self, model_name: Optional[str] = None) -> tuple[str, BaseProvider]:
        """
        Resolve the provider for a request.

        A ``model_name`` that maps to a registered provider other than the
        active one makes it the active one. Unknown names are ignored.

        Raises:
            NoProviderAvailableError: when the active key resolves to nothing
        """
        if model_name:
            key = self.registry.find(model_name)
            if key is None:
                logger.warning(f"Requested model {model_name!r} is not registered, using active model")
            elif key != self.registry.current_key:
                self.registry.select_active(key)

        key = self.registry.current_key
        provider = self.registry.current_provider()
        if provider is None:
            raise NoProviderAvailableError(key)
        return key, provider

    def prepare(self, request: UnifiedAIRequest) -> ExecutionPlan:
        """
        Validate the operation, resolve the provider and build the prompt.

        Raises:
            UnsupportedOperationError: for an unknown functionType, before anything else
            NoProviderAvailableError: when no provider can serve the request
        """
        operation = parse_operation(request.function_type)
        key, provider = self.resolve_provider(request.model_name)
        fields = PromptFields(
            document_summary=request.document_summary,
            user_requirement=request.user_requirement,
            selected_text=request.selected_text,
            context_text=request.context_text,
            cursor_position=request.cursor_position,
        )
        prompt = build_prompt(operation, fields)
        logger.info(f"Prepared {operation.value} request for provider {key} ({len(prompt)} chars)")
        return ExecutionPlan(
            operation=operation,
            provider_key=key,
            provider=provider,
            prompt=prompt,
            session_id=request.session_id,
            function_type=request.function_type,
        )

    # ------------------------------------------------------------------
    # Unified operations
    # ------------------------------------------------------------------

    async def execute(self, plan: ExecutionPlan) -> UnifiedAIResponse:
        """Run a prepared request in buffered mode."""
        provider = plan.provider
        if plan.operation == Operation.POLISH:
            call = provider.polish_text
        elif plan.operation == Operation.SUMMARIZE:
            call = provider.summarize_text
        else:
            call = provider.continue_writing

        result = await self._timed(plan.provider_key, provider, plan.operation.value, lambda: call(plan.prompt))
        return UnifiedAIResponse(
            result=result,
            function_type=plan.function_type or plan.operation.value,
            model_name=plan.provider_key,
        )

    async def unified(self, request: UnifiedAIRequest) -> UnifiedAIResponse:
        """Buffered unified request."""
        return await self.execute(self.prepare(request))

    async def stream(self, plan: ExecutionPlan, sink: StreamSink) -> None:
        """
        Run a prepared request in streaming mode.

        The sink always receives exactly one terminal signal: ``close`` on
        success, ``fail`` with the error message otherwise.
        """
        try:
            await self._timed(
                plan.provider_key,
                plan.provider,
                plan.operation.value,
                lambda: plan.provider.stream_call(plan.operation.value, plan.prompt, plan.session_id, sink),
            )
        except AssistantError as e:
            await sink.fail(e.message)
            return
        except Exception:
            logger.exception(f"Unexpected error while streaming from {plan.provider_key}")
            await sink.fail("Internal server error")
            return
        await sink.close()
        self._publish_session_count()

    # ------------------------------------------------------------------
    # Chat and sessions
    # ------------------------------------------------------------------

    async def chat(self, request: ChatRequest) -> ChatResponse:
        """One chat turn against the active (or requested) provider."""
        key, provider = self.resolve_provider(request.model_name)
        result = await self._timed(
            key, provider, CHAT_OPERATION, lambda: provider.chat(request.message, request.session_id)
        )
        self._publish_session_count()
        return ChatResponse(result=result, model_name=key, session_id=request.session_id)

    def new_session(self) -> str:
        session_id = self.store.new_session_id()
        self.store.get_or_create(session_id)
        self._publish_session_count()
        logger.info(f"Issued session {session_id}")
        return session_id

    def reset_session(self, session_id: str) -> None:
        self.store.reset(session_id)
        self._publish_session_count()

    # ------------------------------------------------------------------
    # Model catalog
    # ------------------------------------------------------------------

    def list_models(self) -> ModelsResponse:
        """Catalog with availability evaluated now, plus the active key."""
        models: List[ModelInfo] = self.registry.catalog(refresh=True)
        return ModelsResponse(models=models, current=self.registry.current_key)

    def switch_model(self, model_name: str) -> SwitchModelResponse:
        """
        Make ``model_name`` the active model.

        Raises:
            ModelNotFoundError: when no registered model matches
            ModelUnavailableError: when the matching provider has no credentials

        The active selection is unchanged when either is raised.
        """
        key = self.registry.find(model_name)
        if key is None:
            raise ModelNotFoundError(model_name)
        if not self.registry.get(key).is_available():
            raise ModelUnavailableError(model_name)

        self.registry.select_active(key)
        return SwitchModelResponse(
            success=True,
            message=f"Switched to model {model_name}",
            model_name=key,
        )

    # ------------------------------------------------------------------
    # Legacy single-operation calls
    # ------------------------------------------------------------------

    async def continue_writing(self, prompt: str) -> str:
        key, provider = self.resolve_provider()
        return await self._timed(key, provider, Operation.CONTINUE.value, lambda: provider.continue_writing(prompt))

    async def polish_text(self, text: str) -> str:
        key, provider = self.resolve_provider()
        return await self._timed(key, provider, Operation.POLISH.value, lambda: provider.polish_text(text))

    async def summarize_text(self, text: str) -> str:
        key, provider = self.resolve_provider()
        return await self._timed(key, provider, Operation.SUMMARIZE.value, lambda: provider.summarize_text(text))

    # ------------------------------------------------------------------

    async def _timed(self, key: str, provider: BaseProvider, operation: str, call: Callable[[], Awaitable[T]]) -> T:
        start = time.time()
        try:
            result = await call()
        except ProviderError as e:
            record_llm_request(key, provider.get_model_tag(), operation, time.time() - start, success=False)
            logger.error(f"{operation} call to {key} failed: {e.message}")
            raise
        except AssistantError:
            record_llm_request(key, provider.get_model_tag(), operation, time.time() - start, success=False)
            raise
        record_llm_request(key, provider.get_model_tag(), operation, time.time() - start, success=True)
        return result

    def _publish_session_count(self) -> None:
        update_active_sessions(self.store.session_count())
