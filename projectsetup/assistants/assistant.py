from typing import Iterable

from projectsetup.conversation import ConversationLog, Message
from projectsetup.inference import InferenceContext, InferenceExecutor


class Assistant:
    """Base class for conversational assistants.

    Holds the conversation log, seeded with the system prompt, and the handles
    needed to talk to the chat backend. Subclasses supply the domain protocol.
    Instances expect a single caller at a time.
    """

    def __init__(self, executor: InferenceExecutor, inference_context: InferenceContext, system_prompt: Message):
        self.executor = executor
        self.inference_context = inference_context
        self._history = ConversationLog(system_prompt)

    def save(self, messages: Iterable[Message]) -> tuple[Message, ...]:
        """Append messages to the conversation and return the full history."""
        return self._history.append(messages)

    @property
    def history(self) -> tuple[Message, ...]:
        return self._history.messages
