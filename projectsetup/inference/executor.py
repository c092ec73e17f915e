import logging
import time
from typing import Sequence

from projectsetup.config.inference import InferenceConfig
from projectsetup.conversation import Message
from projectsetup.exceptions import UnknownActionError
from projectsetup.llm.logger import LLMRequest, LLMResponse, log_llm_call
from projectsetup.llm.types import ChatLLM
from .context import InferenceContext
from .result import EmptyResult, InferenceResult, TextResult, TransportFailure, classify_payload

logger = logging.getLogger(__name__)


class InferenceExecutor:
    """Routes agent actions to the chat backend and tags whatever comes back."""

    def __init__(self, config: InferenceConfig, chat_llm: ChatLLM):
        self.config = config
        self.chat_llm = chat_llm

    def resolve_model(self, action_name: str, context: InferenceContext, model_name: str | None = None) -> str | None:
        """Pick the model for a call: explicit override, then user choice, then the action default.

        Returns None when the backend's own configured model should be used.
        """
        action = self._get_action(action_name)
        return model_name or context.model_for(action_name) or action.model

    async def execute(
            self,
            messages: Sequence[Message],
            action_name: str,
            context: InferenceContext,
            model_name: str | None = None,
    ) -> InferenceResult:
        """
        Send a conversation to the chat backend for one agent action.

        Args:
            messages: Full conversation snapshot, system prompt first
            action_name: Agent action used to pick model and sampling settings
            context: Routing information of the calling agent
            model_name: Explicit model that takes precedence over any configured one

        Returns:
            TextResult, EmptyResult, or TransportFailure if the backend raised

        Raises:
            UnknownActionError: If the action has no inference settings
        """
        action = self._get_action(action_name)
        model = self.resolve_model(action_name, context, model_name)
        params = action.chat_params()
        if model:
            params['model'] = model

        payload = [message.to_dict() for message in messages]
        request = LLMRequest(
            messages=payload,
            model=model,
            temperature=params.get('temperature'),
            max_tokens=params.get('max_tokens'),
        )
        logger.debug(f"Executing inference for {action_name} (agent {context.agent_id}) "
                     f"with model {model or 'default'} and {len(payload)} messages")

        start_time = time.time()
        try:
            response = await self.chat_llm.chat(payload, **params)
        except Exception as e:
            duration_ms = int((time.time() - start_time) * 1000)
            logger.warning(f"Inference for {action_name} failed after {duration_ms}ms: {e}")
            log_llm_call(action_name, request, LLMResponse(content=None, outcome="transport_failure", error=str(e)),
                         duration_ms)
            return TransportFailure(cause=e, model=model)
        duration_ms = int((time.time() - start_time) * 1000)

        result = classify_payload(response)
        match result:
            case TextResult(content=content):
                log_llm_call(action_name, request, LLMResponse(content=content), duration_ms)
            case EmptyResult(reason=reason):
                log_llm_call(action_name, request, LLMResponse(content=None, outcome=f"empty:{reason}"), duration_ms)
        logger.debug(f"Inference for {action_name} finished in {duration_ms}ms")
        return result

    def _get_action(self, action_name: str):
        action = self.config.get_action(action_name)
        if action is None:
            raise UnknownActionError(action_name, list(self.config.actions))
        return action
