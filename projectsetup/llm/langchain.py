import logging

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from .types import ChatLLM

logger = logging.getLogger(__name__)


def to_langchain_messages(messages: list[dict]) -> list[BaseMessage]:
    lc_messages: list[BaseMessage] = []
    for message in messages:
        match message['role']:
            case 'system':
                lc_messages.append(SystemMessage(content=message['content']))
            case 'assistant':
                lc_messages.append(AIMessage(content=message['content']))
            case _:
                lc_messages.append(HumanMessage(content=message['content']))
    return lc_messages


class LangChainChatLLM(ChatLLM):
    """Adapts any LangChain chat model to the ChatLLM interface.

    A ``model`` override is applied with ``bind`` when the wrapped model accepts
    it, other params are forwarded to ``ainvoke``.
    """

    def __init__(self, chat_model: BaseChatModel):
        self.chat_model = chat_model

    async def chat(self, messages: list[dict], **params) -> str | None:
        model = params.pop('model', None)
        runnable = self.chat_model
        if model:
            logger.debug(f"Binding model override {model} on {type(self.chat_model).__name__}")
            runnable = self.chat_model.bind(model=model)
        result = await runnable.ainvoke(to_langchain_messages(messages), **params)
        if not isinstance(result.content, str):
            return None
        return result.content
